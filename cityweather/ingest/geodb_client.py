"""GeoDB Cities (RapidAPI) client for city id lookups."""

import logging
import os

import httpx

from cityweather.ingest.errors import (
    MissingCredentialsError,
    NetworkError,
    NotFoundError,
    RateLimitedError,
)

logger = logging.getLogger(__name__)

GEODB_BASE_URL = "https://wft-geo-db.p.rapidapi.com/v1/geo"
GEODB_API_HOST = "wft-geo-db.p.rapidapi.com"
API_KEY_ENV = "CITYWEATHER_GEODB_API_KEY"


class GeoDbClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = GEODB_BASE_URL,
        api_host: str = GEODB_API_HOST,
        timeout: float = 15.0,
    ):
        self.api_key = api_key or os.environ.get(API_KEY_ENV, "")
        if not self.api_key:
            raise MissingCredentialsError(f"{API_KEY_ENV} not set")
        self.base_url = base_url
        self.api_host = api_host
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        return {
            "X-RapidAPI-Key": self.api_key,
            "X-RapidAPI-Host": self.api_host,
        }

    async def get_city(self, city_id: str) -> dict:
        """Fetch the ``data`` object for a city id.

        Raises NotFoundError on 404 or an empty body, RateLimitedError on 429
        and NetworkError for anything else that is not a 2xx JSON object.
        """
        url = f"{self.base_url}/cities/{city_id}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(url, headers=self._headers())
        except httpx.RequestError as e:
            logger.error("GeoDB request failed for city=%s: %s", city_id, e)
            raise NetworkError(f"City lookup failed: {e}") from e

        if resp.status_code == 404:
            raise NotFoundError(f"City {city_id} not found", resp.status_code)
        if resp.status_code == 429:
            logger.warning("GeoDB quota exhausted looking up city=%s", city_id)
            raise RateLimitedError("City directory rate limit reached", resp.status_code)
        if resp.status_code >= 400:
            logger.error("GeoDB %d for city=%s: %s", resp.status_code, city_id, resp.text)
            raise NetworkError(
                f"City lookup failed: HTTP {resp.status_code}", resp.status_code
            )

        try:
            body = resp.json()
        except ValueError as e:
            raise NetworkError(f"City lookup returned invalid JSON: {e}") from e

        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict) or not data:
            raise NotFoundError(f"City {city_id} not found", resp.status_code)
        return data
