"""Chart and daily-card projections of a forecast payload.

Both functions are pure: the same payload and window always give the same
output, and an empty or inverted window gives an empty projection rather
than an error.
"""

import logging
from datetime import datetime

from cityweather.models.forecast import (
    ChartProjection,
    DailyCard,
    DateWindow,
    ForecastPayload,
    ViewMode,
)
from cityweather.projection.icons import classify

logger = logging.getLogger(__name__)

NEXT_HOURS_DEFAULT = 24


def hour_label(ts: datetime) -> str:
    """Hour-only chart label, e.g. ``"07"``."""
    return ts.strftime("%H")


def project_chart(
    payload: ForecastPayload,
    window: DateWindow,
    mode: ViewMode = ViewMode.CUSTOM_RANGE,
    hours: int = NEXT_HOURS_DEFAULT,
) -> ChartProjection:
    """Hourly temperatures for the line chart.

    custom-range keeps samples with ``start <= t <= end``; next-24h takes the
    first ``hours`` samples regardless of the calendar.
    """
    samples = list(zip(payload.hourly.time, payload.hourly.temperature_2m))

    if mode == ViewMode.NEXT_24H:
        kept = samples[:max(hours, 0)]
    else:
        kept = [(t, temp) for t, temp in samples if window.contains(t)]

    if not kept and samples:
        logger.debug(
            "No hourly samples in %s..%s (%d available)",
            window.start, window.end, len(samples),
        )

    return ChartProjection(
        labels=[hour_label(t) for t, _ in kept],
        values=[temp for _, temp in kept],
    )


def project_daily(
    payload: ForecastPayload,
    window: DateWindow,
    mode: ViewMode = ViewMode.CUSTOM_RANGE,
) -> list[DailyCard]:
    """Daily summary cards, range-filtered in custom-range mode only."""
    daily = payload.daily
    cards: list[DailyCard] = []
    for day, code, t_max, t_min in zip(
        daily.time, daily.weathercode, daily.temperature_2m_max, daily.temperature_2m_min
    ):
        if mode == ViewMode.CUSTOM_RANGE and not window.contains_day(day):
            continue
        cards.append(
            DailyCard(date=day, icon=classify(code), temp_max=t_max, temp_min=t_min)
        )
    return cards
