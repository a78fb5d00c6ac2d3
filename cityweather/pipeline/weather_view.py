"""View pipeline: resolve city -> fetch forecast -> project -> publish state."""

import logging
import sqlite3
from typing import Callable

from cityweather.config.schema import AppConfig
from cityweather.ingest.errors import WeatherServiceError
from cityweather.ingest.forecast_client import ForecastClient
from cityweather.ingest.geodb_client import GeoDbClient
from cityweather.ingest.location_resolver import LocationResolver
from cityweather.models.common import local_now
from cityweather.models.forecast import DateWindow, ViewMode, default_window
from cityweather.models.view import ViewState
from cityweather.pipeline.chart_slot import ChartFactory, ChartSlot, TextChart
from cityweather.pipeline.tokens import InvocationToken, TokenSource
from cityweather.projection.projector import (
    NEXT_HOURS_DEFAULT,
    project_chart,
    project_daily,
)
from cityweather.storage.location_cache import LocationCache, SqliteStore

logger = logging.getLogger(__name__)


def chart_title(window: DateWindow, mode: ViewMode, hours: int = NEXT_HOURS_DEFAULT) -> str:
    if mode == ViewMode.NEXT_24H:
        return f"Temperature forecast (next {hours} h)"
    return f"Temperature forecast ({window.start_date} - {window.end_date})"


class WeatherView:
    """Drives one city view.

    Each ``load`` takes a fresh invocation token. Results of a load that has
    been superseded (by a newer load or by ``close``) are dropped: ``state``
    and the chart only ever reflect the most recent load.
    """

    def __init__(
        self,
        resolver: LocationResolver,
        client: ForecastClient,
        chart_factory: ChartFactory = TextChart,
        mode: ViewMode = ViewMode.CUSTOM_RANGE,
        hours: int = NEXT_HOURS_DEFAULT,
        window_days: int = 7,
        clock: Callable = local_now,
    ):
        self.resolver = resolver
        self.client = client
        self.chart_slot = ChartSlot(chart_factory)
        self.mode = mode
        self.hours = hours
        self.window_days = window_days
        self.clock = clock
        self.tokens = TokenSource()
        self.state = ViewState(mode=mode)
        self.last_error: WeatherServiceError | None = None

    @property
    def chart(self):
        return self.chart_slot.chart

    async def load(self, city_id: str, window: DateWindow | None = None) -> ViewState | None:
        """Run the pipeline for ``city_id``.

        Returns the published state, or None when this load was superseded
        before it finished. If anything else escapes (a storage error, task
        cancellation) the loading state is still ended before it propagates.
        """
        token = self.tokens.issue()
        if window is None:
            window = default_window(self.clock(), self.window_days)
        self.state = ViewState(loading=True, window=window, mode=self.mode)

        try:
            return await self._run(token, city_id, window)
        finally:
            if token.is_current and self.state.loading:
                logger.warning("Weather view for city=%s aborted", city_id)
                self.chart_slot.dispose()
                self.last_error = None
                self.state = ViewState(
                    error=f"Loading weather for {city_id} was interrupted",
                    window=window,
                    mode=self.mode,
                )

    async def _run(
        self, token: InvocationToken, city_id: str, window: DateWindow
    ) -> ViewState | None:
        try:
            location = await self.resolver.resolve(city_id)
            if not token.is_current:
                logger.debug("Dropping stale resolution for city=%s", city_id)
                return None

            fetch_window = window if self.mode == ViewMode.CUSTOM_RANGE else None
            payload = await self.client.fetch(location, fetch_window)
            if not token.is_current:
                logger.debug("Dropping stale forecast for city=%s", city_id)
                return None
        except WeatherServiceError as e:
            if not token.is_current:
                return None
            logger.warning("Weather view for city=%s failed: %s", city_id, e)
            self.chart_slot.dispose()
            self.last_error = e
            self.state = ViewState(error=str(e), window=window, mode=self.mode)
            return self.state

        chart = project_chart(payload, window, self.mode, self.hours)
        daily = project_daily(payload, window, self.mode)
        self.last_error = None
        self.chart_slot.replace(chart, chart_title(window, self.mode, self.hours))

        self.state = ViewState(
            location=location,
            forecast=payload,
            chart=chart,
            daily=daily,
            window=window,
            mode=self.mode,
        )
        logger.info(
            "Loaded %s: %d hourly points, %d daily cards",
            location.display_name, len(chart), len(daily),
        )
        return self.state

    def close(self) -> None:
        """Tear down: outstanding loads become stale and the chart is released."""
        self.tokens.invalidate()
        self.chart_slot.dispose()

    async def __aenter__(self) -> "WeatherView":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()


def build_view(
    config: AppConfig,
    conn: sqlite3.Connection,
    chart_factory: ChartFactory = TextChart,
    mode: ViewMode | None = None,
    api_key: str | None = None,
) -> WeatherView:
    """Wire a WeatherView from config with a sqlite-backed location cache."""
    cache = LocationCache(SqliteStore(conn), key_prefix=config.cache.key_prefix)
    directory = GeoDbClient(
        api_key=api_key,
        base_url=config.geodb.base_url,
        api_host=config.geodb.api_host,
        timeout=config.geodb.timeout,
    )
    client = ForecastClient(
        base_url=config.forecast.base_url,
        timeout=config.forecast.timeout,
        extra_hourly=config.forecast.extra_hourly,
    )
    return WeatherView(
        LocationResolver(cache, directory),
        client,
        chart_factory=chart_factory,
        mode=mode or config.view.mode,
        hours=config.view.next_hours,
        window_days=config.view.default_window_days,
    )
