"""Resolve a city id to a LocationRecord, cache first."""

import logging

from cityweather.ingest.errors import NetworkError
from cityweather.ingest.geodb_client import GeoDbClient
from cityweather.models.location import LocationRecord
from cityweather.storage.location_cache import LocationCache

logger = logging.getLogger(__name__)


class LocationResolver:
    def __init__(self, cache: LocationCache, directory: GeoDbClient):
        self.cache = cache
        self.directory = directory

    async def resolve(self, city_id: str) -> LocationRecord:
        """Return the location for ``city_id``.

        Cached records are trusted indefinitely. On a miss, exactly one
        directory lookup is made and the result is cached before returning.
        Directory errors propagate and leave the cache untouched.
        """
        cached = self.cache.get(city_id)
        if cached is not None:
            logger.debug("Location cache hit for city=%s", city_id)
            return cached

        data = await self.directory.get_city(city_id)
        try:
            record = LocationRecord.from_api(data)
        except (KeyError, TypeError, ValueError) as e:
            raise NetworkError(f"City lookup returned an unusable record: {e}") from e

        self.cache.put(city_id, record)
        logger.info("Resolved city=%s to %s (%.4f, %.4f)",
                    city_id, record.display_name, record.latitude, record.longitude)
        return record
