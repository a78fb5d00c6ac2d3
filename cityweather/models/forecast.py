"""Open-Meteo forecast payload and the display projections derived from it."""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from enum import StrEnum

from cityweather.models.common import parse_date, parse_timestamp


class ViewMode(StrEnum):
    CUSTOM_RANGE = "custom-range"  # windowed query, range-filtered chart and cards
    NEXT_24H = "next-24h"          # unwindowed query, first N hourly samples


class IconCategory(StrEnum):
    STORM = "storm"
    CLOUD = "cloud"
    CLEAR = "clear"


class MalformedPayloadError(ValueError):
    """Raised when a forecast response does not have the expected shape."""


@dataclass(frozen=True)
class DateWindow:
    """Inclusive [start, end] bound on naive local timestamps.

    ``start <= end`` is expected but not enforced: an inverted window simply
    matches nothing.
    """

    start: datetime
    end: datetime

    @classmethod
    def from_dates(cls, start: date, end: date) -> "DateWindow":
        return cls(
            start=datetime.combine(start, time.min),
            end=datetime.combine(end, time(23, 59, 59)),
        )

    @property
    def is_valid(self) -> bool:
        return self.start <= self.end

    @property
    def start_date(self) -> str:
        return self.start.date().isoformat()

    @property
    def end_date(self) -> str:
        return self.end.date().isoformat()

    def contains(self, ts: datetime) -> bool:
        return self.start <= ts <= self.end

    def contains_day(self, day: date) -> bool:
        if not self.is_valid:
            return False
        return self.start.date() <= day <= self.end.date()


def default_window(now: datetime, days: int = 7) -> DateWindow:
    """Today through today + ``days``, whole days."""
    today = now.date()
    return DateWindow.from_dates(today, today + timedelta(days=days))


@dataclass(frozen=True)
class CurrentWeather:
    temperature: float
    windspeed: float
    weathercode: int
    time: datetime


@dataclass(frozen=True)
class HourlySeries:
    time: list[datetime]
    temperature_2m: list[float | None]
    weathercode: list[int]
    relativehumidity_2m: list[float | None] | None = None
    windspeed_10m: list[float | None] | None = None

    def __len__(self) -> int:
        return len(self.time)


@dataclass(frozen=True)
class DailySeries:
    time: list[date]
    weathercode: list[int]
    temperature_2m_max: list[float | None]
    temperature_2m_min: list[float | None]

    def __len__(self) -> int:
        return len(self.time)


@dataclass(frozen=True)
class ForecastPayload:
    current_weather: CurrentWeather
    hourly: HourlySeries
    daily: DailySeries
    timezone: str = ""
    latitude: float | None = None
    longitude: float | None = None

    @classmethod
    def from_api(cls, raw: dict) -> "ForecastPayload":
        """Parse an Open-Meteo ``/forecast`` response body.

        Raises MalformedPayloadError when a section is missing, a value does
        not parse, or parallel arrays differ in length.
        """
        try:
            cur = raw["current_weather"]
            current = CurrentWeather(
                temperature=float(cur["temperature"]),
                windspeed=float(cur["windspeed"]),
                weathercode=int(cur["weathercode"]),
                time=_timestamp(cur["time"]),
            )

            h = raw["hourly"]
            hourly = HourlySeries(
                time=[_timestamp(t) for t in h["time"]],
                temperature_2m=[_number(v) for v in h["temperature_2m"]],
                weathercode=[_code(v) for v in h["weathercode"]],
                relativehumidity_2m=_optional_numbers(h.get("relativehumidity_2m")),
                windspeed_10m=_optional_numbers(h.get("windspeed_10m")),
            )

            d = raw["daily"]
            daily = DailySeries(
                time=[_day(t) for t in d["time"]],
                weathercode=[_code(v) for v in d["weathercode"]],
                temperature_2m_max=[_number(v) for v in d["temperature_2m_max"]],
                temperature_2m_min=[_number(v) for v in d["temperature_2m_min"]],
            )
        except MalformedPayloadError:
            raise
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedPayloadError(f"Missing or invalid field: {e}") from e

        _check_parallel("hourly", hourly.time, hourly.temperature_2m, hourly.weathercode,
                        hourly.relativehumidity_2m, hourly.windspeed_10m)
        _check_parallel("daily", daily.time, daily.weathercode,
                        daily.temperature_2m_max, daily.temperature_2m_min)

        lat = raw.get("latitude")
        lon = raw.get("longitude")
        return cls(
            current_weather=current,
            hourly=hourly,
            daily=daily,
            timezone=str(raw.get("timezone") or ""),
            latitude=float(lat) if lat is not None else None,
            longitude=float(lon) if lon is not None else None,
        )


@dataclass(frozen=True)
class ChartProjection:
    labels: list[str] = field(default_factory=list)
    values: list[float | None] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.labels)


@dataclass(frozen=True)
class DailyCard:
    date: date
    icon: IconCategory
    temp_max: float | None
    temp_min: float | None

    @property
    def weekday(self) -> str:
        return self.date.strftime("%a")


def _timestamp(value: str) -> datetime:
    ts = parse_timestamp(value)
    if ts is None:
        raise MalformedPayloadError(f"Bad timestamp: {value!r}")
    return ts


def _day(value: str) -> date:
    day = parse_date(value)
    if day is None:
        raise MalformedPayloadError(f"Bad date: {value!r}")
    return day


def _number(value) -> float | None:
    # Open-Meteo reports gaps as null
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise MalformedPayloadError(f"Bad number: {value!r}") from e


def _code(value) -> int:
    # Unlike temperatures a null code is not a gap: every card needs an icon
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise MalformedPayloadError(f"Bad weather code: {value!r}") from e


def _optional_numbers(values: list | None) -> list[float | None] | None:
    if values is None:
        return None
    return [_number(v) for v in values]


def _check_parallel(section: str, *arrays: list | None) -> None:
    lengths = {len(a) for a in arrays if a is not None}
    if len(lengths) > 1:
        raise MalformedPayloadError(
            f"{section} arrays differ in length: {sorted(lengths)}"
        )
