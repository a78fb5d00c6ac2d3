"""View state handed from the pipeline to a front end."""

from dataclasses import dataclass, field

from cityweather.models.forecast import (
    ChartProjection,
    DailyCard,
    DateWindow,
    ForecastPayload,
    ViewMode,
)
from cityweather.models.location import LocationRecord
from cityweather.projection.icons import classify


@dataclass(frozen=True)
class ViewState:
    """Everything a renderer needs. All-or-nothing per load: either error is
    set and the data fields are empty, or every data field is populated."""

    loading: bool = False
    error: str | None = None
    location: LocationRecord | None = None
    forecast: ForecastPayload | None = None
    chart: ChartProjection = field(default_factory=ChartProjection)
    daily: list[DailyCard] = field(default_factory=list)
    window: DateWindow | None = None
    mode: ViewMode = ViewMode.CUSTOM_RANGE

    @property
    def ready(self) -> bool:
        return not self.loading and self.error is None and self.forecast is not None

    def to_dict(self) -> dict:
        data: dict = {
            "loading": self.loading,
            "error": self.error,
            "mode": self.mode.value,
            "window": None,
            "location": None,
            "current": None,
            "chart": {"labels": list(self.chart.labels), "values": list(self.chart.values)},
            "daily": [
                {
                    "date": card.date.isoformat(),
                    "weekday": card.weekday,
                    "icon": card.icon.value,
                    "temp_max": card.temp_max,
                    "temp_min": card.temp_min,
                }
                for card in self.daily
            ],
        }
        if self.window is not None:
            data["window"] = {
                "start": self.window.start.isoformat(),
                "end": self.window.end.isoformat(),
            }
        if self.location is not None:
            data["location"] = {
                **self.location.to_api(),
                "flagUrl": self.location.flag_url,
            }
        if self.forecast is not None:
            cur = self.forecast.current_weather
            data["current"] = {
                "temperature": cur.temperature,
                "windspeed": cur.windspeed,
                "weathercode": cur.weathercode,
                "icon": classify(cur.weathercode).value,
                "time": cur.time.isoformat(),
                "timezone": self.forecast.timezone,
            }
        return data
