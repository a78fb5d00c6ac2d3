"""Output formatters for a loaded weather view."""

import json

from cityweather.models.forecast import DailyCard, IconCategory, ViewMode
from cityweather.models.view import ViewState
from cityweather.projection.icons import classify

ICON_GLYPHS = {
    IconCategory.STORM: "[storm]",
    IconCategory.CLOUD: "[cloud]",
    IconCategory.CLEAR: "[clear]",
}


def _temp(value: float | None) -> str:
    return "--" if value is None else f"{value:.1f}°C"


def format_current(s: ViewState) -> str:
    """Current-conditions card."""
    if s.location is None or s.forecast is None:
        return ""
    loc = s.location
    cur = s.forecast.current_weather
    lines = [f"=== {loc.display_name} ==="]
    if loc.region:
        lines.append(loc.region)
    lines.append(f"{ICON_GLYPHS[classify(cur.weathercode)]} {_temp(cur.temperature)}")
    lines.append(f"Wind: {cur.windspeed:.1f} km/h")
    lines.append(f"Time: {cur.time:%H:%M}")
    return "\n".join(lines)


def format_daily_card(card: DailyCard) -> str:
    return (
        f"{card.weekday} {card.date.isoformat()} {ICON_GLYPHS[card.icon]:8} "
        f"↑ {_temp(card.temp_max)}  ↓ {_temp(card.temp_min)}"
    )


def format_daily(s: ViewState) -> str:
    if s.window is not None and s.mode == ViewMode.CUSTOM_RANGE:
        header = f"Daily forecast ({s.window.start_date} - {s.window.end_date})"
    else:
        header = "Daily forecast"
    lines = [header]
    if not s.daily:
        lines.append("(no days in range)")
    lines.extend(format_daily_card(c) for c in s.daily)
    return "\n".join(lines)


def format_view_text(s: ViewState, chart_text: str = "") -> str:
    """Plain text rendering of the whole view."""
    if s.error:
        return f"Error: {s.error}"
    if s.loading:
        return "Loading..."
    parts = [format_current(s)]
    if chart_text:
        parts.append(chart_text)
    parts.append(format_daily(s))
    return "\n\n".join(p for p in parts if p)


def format_view_json(s: ViewState) -> str:
    """JSON view for programmatic consumption."""
    return json.dumps(s.to_dict(), indent=2, ensure_ascii=False)
