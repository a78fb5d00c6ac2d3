"""Persistent city-id -> LocationRecord cache over an injected key-value store."""

import json
import logging
import sqlite3
from typing import Protocol

from cityweather.models.location import LocationRecord

logger = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "city_"


class MalformedCacheError(Exception):
    """A stored entry could not be decoded into a LocationRecord."""


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def put(self, key: str, value: str) -> None: ...

    def items(self, prefix: str = "") -> list[tuple[str, str]]: ...


class MemoryStore:
    """Dict-backed store; lives as long as the process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def put(self, key: str, value: str) -> None:
        self._data[key] = value

    def items(self, prefix: str = "") -> list[tuple[str, str]]:
        return sorted((k, v) for k, v in self._data.items() if k.startswith(prefix))


class SqliteStore:
    """Store backed by the ``location_cache`` table; survives restarts."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def get(self, key: str) -> str | None:
        row = self.conn.execute(
            "SELECT value_json FROM location_cache WHERE cache_key = ?", (key,)
        ).fetchone()
        if row is None:
            return None
        return row[0]

    def put(self, key: str, value: str) -> None:
        self.conn.execute(
            "INSERT INTO location_cache (cache_key, value_json, stored_at) "
            "VALUES (?, ?, CURRENT_TIMESTAMP) "
            "ON CONFLICT(cache_key) DO UPDATE SET value_json = excluded.value_json, "
            "stored_at = CURRENT_TIMESTAMP",
            (key, value),
        )
        self.conn.commit()

    def items(self, prefix: str = "") -> list[tuple[str, str]]:
        rows = self.conn.execute(
            "SELECT cache_key, value_json FROM location_cache "
            "WHERE substr(cache_key, 1, ?) = ? ORDER BY cache_key",
            (len(prefix), prefix),
        ).fetchall()
        return [(r[0], r[1]) for r in rows]


class LocationCache:
    def __init__(self, store: KeyValueStore, key_prefix: str = DEFAULT_KEY_PREFIX):
        self.store = store
        self.key_prefix = key_prefix

    def key_for(self, city_id: str) -> str:
        return f"{self.key_prefix}{city_id}"

    def get(self, city_id: str) -> LocationRecord | None:
        """Return the cached record, or None on a miss or a corrupt entry."""
        raw = self.store.get(self.key_for(city_id))
        if raw is None:
            return None
        try:
            return _decode(raw)
        except MalformedCacheError as e:
            logger.warning("Ignoring corrupt cache entry for city=%s: %s", city_id, e)
            return None

    def put(self, city_id: str, record: LocationRecord) -> None:
        self.store.put(self.key_for(city_id), json.dumps(record.to_api()))

    def entries(self) -> list[LocationRecord]:
        """All decodable cached records, in key order."""
        records = []
        for key, raw in self.store.items(self.key_prefix):
            try:
                records.append(_decode(raw))
            except MalformedCacheError as e:
                logger.warning("Skipping corrupt cache entry %s: %s", key, e)
        return records


def _decode(raw: str) -> LocationRecord:
    try:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise MalformedCacheError(f"expected object, got {type(data).__name__}")
        return LocationRecord.from_api(data)
    except MalformedCacheError:
        raise
    except (ValueError, KeyError, TypeError) as e:
        raise MalformedCacheError(str(e)) from e
