"""Tests for forecast payload parsing and date windows."""

from datetime import date, datetime

import pytest

from cityweather.models.forecast import (
    DailyCard,
    DateWindow,
    ForecastPayload,
    IconCategory,
    MalformedPayloadError,
    default_window,
)


class TestDateWindow:
    def test_from_dates_whole_days(self):
        w = DateWindow.from_dates(date(2026, 10, 19), date(2026, 10, 26))
        assert w.start == datetime(2026, 10, 19, 0, 0, 0)
        assert w.end == datetime(2026, 10, 26, 23, 59, 59)
        assert w.start_date == "2026-10-19"
        assert w.end_date == "2026-10-26"

    def test_contains_inclusive(self):
        w = DateWindow(datetime(2026, 10, 19, 6), datetime(2026, 10, 19, 9))
        assert w.contains(datetime(2026, 10, 19, 6))
        assert w.contains(datetime(2026, 10, 19, 9))
        assert not w.contains(datetime(2026, 10, 19, 10))

    def test_inverted_is_invalid(self):
        w = DateWindow(datetime(2026, 10, 20), datetime(2026, 10, 19))
        assert not w.is_valid
        assert not w.contains(datetime(2026, 10, 19, 12))
        assert not w.contains_day(date(2026, 10, 19))

    def test_default_window(self):
        w = default_window(datetime(2026, 10, 19, 15, 42))
        assert w.start == datetime(2026, 10, 19, 0, 0)
        assert w.end_date == "2026-10-26"

    def test_default_window_days(self):
        w = default_window(datetime(2026, 10, 30, 1, 0), days=3)
        assert w.end_date == "2026-11-02"

    def test_frozen(self):
        w = default_window(datetime(2026, 10, 19))
        with pytest.raises(AttributeError):
            w.start = datetime(2026, 1, 1)  # type: ignore[misc]


class TestForecastPayload:
    def test_parse(self, forecast_raw: dict):
        p = ForecastPayload.from_api(forecast_raw)
        assert p.current_weather.temperature == 18.4
        assert p.current_weather.weathercode == 61
        assert p.current_weather.time == datetime(2026, 10, 19, 14, 0)
        assert len(p.hourly) == 48
        assert len(p.daily) == 7
        assert p.hourly.time[0] == datetime(2026, 10, 19, 0, 0)
        assert p.daily.time[-1] == date(2026, 10, 25)
        assert p.timezone == "Europe/Madrid"
        assert p.hourly.relativehumidity_2m is None

    def test_extra_hourly_variables(self, forecast_raw: dict):
        forecast_raw["hourly"]["relativehumidity_2m"] = [50] * 48
        forecast_raw["hourly"]["windspeed_10m"] = [7.5] * 48
        p = ForecastPayload.from_api(forecast_raw)
        assert p.hourly.relativehumidity_2m == [50.0] * 48
        assert p.hourly.windspeed_10m == [7.5] * 48

    def test_null_temperature_kept_as_gap(self, forecast_raw: dict):
        forecast_raw["hourly"]["temperature_2m"][3] = None
        p = ForecastPayload.from_api(forecast_raw)
        assert p.hourly.temperature_2m[3] is None

    def test_null_weather_code_is_malformed(self, forecast_raw: dict):
        forecast_raw["daily"]["weathercode"][2] = None
        with pytest.raises(MalformedPayloadError, match="weather code"):
            ForecastPayload.from_api(forecast_raw)

    def test_hourly_length_mismatch(self, forecast_raw: dict):
        forecast_raw["hourly"]["temperature_2m"].pop()
        with pytest.raises(MalformedPayloadError, match="hourly"):
            ForecastPayload.from_api(forecast_raw)

    def test_daily_length_mismatch(self, forecast_raw: dict):
        forecast_raw["daily"]["weathercode"].append(3)
        with pytest.raises(MalformedPayloadError, match="daily"):
            ForecastPayload.from_api(forecast_raw)

    def test_missing_section(self, forecast_raw: dict):
        del forecast_raw["current_weather"]
        with pytest.raises(MalformedPayloadError):
            ForecastPayload.from_api(forecast_raw)

    def test_bad_timestamp(self, forecast_raw: dict):
        forecast_raw["hourly"]["time"][0] = "not-a-time"
        with pytest.raises(MalformedPayloadError, match="timestamp"):
            ForecastPayload.from_api(forecast_raw)

    def test_bad_current_temperature(self, forecast_raw: dict):
        forecast_raw["current_weather"]["temperature"] = "warm"
        with pytest.raises(MalformedPayloadError):
            ForecastPayload.from_api(forecast_raw)


class TestDailyCard:
    def test_weekday(self):
        card = DailyCard(date(2026, 10, 19), IconCategory.CLEAR, 20.0, 10.0)
        assert card.weekday == "Mon"
