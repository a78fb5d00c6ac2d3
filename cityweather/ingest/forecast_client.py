"""Open-Meteo forecast API client."""

import logging

import httpx

from cityweather.ingest.errors import NetworkError
from cityweather.models.forecast import DateWindow, ForecastPayload, MalformedPayloadError
from cityweather.models.location import LocationRecord

logger = logging.getLogger(__name__)

OPEN_METEO_BASE_URL = "https://api.open-meteo.com/v1"

HOURLY_VARIABLES = ["temperature_2m", "weathercode"]
EXTRA_HOURLY_VARIABLES = ["relativehumidity_2m", "windspeed_10m"]
DAILY_VARIABLES = ["weathercode", "temperature_2m_max", "temperature_2m_min"]


class ForecastClient:
    def __init__(
        self,
        base_url: str = OPEN_METEO_BASE_URL,
        timeout: float = 15.0,
        extra_hourly: bool = False,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.extra_hourly = extra_hourly

    def build_params(
        self, location: LocationRecord, window: DateWindow | None = None
    ) -> dict[str, str]:
        hourly = HOURLY_VARIABLES + (EXTRA_HOURLY_VARIABLES if self.extra_hourly else [])
        params = {
            "latitude": str(location.latitude),
            "longitude": str(location.longitude),
            "current_weather": "true",
            "hourly": ",".join(hourly),
            "daily": ",".join(DAILY_VARIABLES),
            "timezone": "auto",
        }
        if window is not None:
            params["start_date"] = window.start_date
            params["end_date"] = window.end_date
        return params

    async def fetch(
        self, location: LocationRecord, window: DateWindow | None = None
    ) -> ForecastPayload:
        """Fetch a forecast, bounded to ``window`` when one is given.

        Without a window the service returns its default near-term range.
        One request, no retry. Raises NetworkError on any failure.
        """
        url = f"{self.base_url}/forecast"
        params = self.build_params(location, window)
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(url, params=params)
        except httpx.RequestError as e:
            logger.error("Open-Meteo request failed for %s: %s", location.display_name, e)
            raise NetworkError(f"Forecast request failed: {e}") from e

        if resp.status_code >= 400:
            logger.error(
                "Open-Meteo %d for %s: %s", resp.status_code, location.display_name, resp.text
            )
            raise NetworkError(
                f"Forecast request failed: HTTP {resp.status_code}", resp.status_code
            )

        try:
            raw = resp.json()
            if not isinstance(raw, dict):
                raise MalformedPayloadError("expected a JSON object")
            return ForecastPayload.from_api(raw)
        except ValueError as e:
            # MalformedPayloadError and JSON decode errors are both ValueErrors
            logger.error("Unusable forecast for %s: %s", location.display_name, e)
            raise NetworkError(f"Forecast response was malformed: {e}") from e
