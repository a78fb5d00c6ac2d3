"""Tests for the location cache and its key-value stores."""

import json
import sqlite3
from pathlib import Path

import pytest

from cityweather.models.location import LocationRecord
from cityweather.storage.database import connect, run_migrations
from cityweather.storage.location_cache import LocationCache, MemoryStore, SqliteStore


@pytest.fixture(params=["memory", "sqlite"])
def cache(request, db: sqlite3.Connection) -> LocationCache:
    store = MemoryStore() if request.param == "memory" else SqliteStore(db)
    return LocationCache(store)


class TestLocationCache:
    def test_miss(self, cache: LocationCache):
        assert cache.get("Q2807") is None

    def test_put_get(self, cache: LocationCache, madrid: LocationRecord):
        cache.put("Q2807", madrid)
        assert cache.get("Q2807") == madrid

    def test_namespaced_key(self, madrid: LocationRecord):
        store = MemoryStore()
        LocationCache(store).put("Q2807", madrid)
        raw = store.get("city_Q2807")
        assert raw is not None
        assert json.loads(raw)["countryCode"] == "ES"

    def test_custom_prefix(self, madrid: LocationRecord):
        store = MemoryStore()
        LocationCache(store, key_prefix="loc:").put("Q2807", madrid)
        assert store.get("loc:Q2807") is not None
        assert store.get("city_Q2807") is None

    def test_last_write_wins(self, cache: LocationCache, madrid: LocationRecord):
        cache.put("Q2807", madrid)
        renamed = LocationRecord.from_api({**madrid.to_api(), "name": "Madrid Centro"})
        cache.put("Q2807", renamed)
        assert cache.get("Q2807") == renamed

    @pytest.mark.parametrize(
        "raw",
        [
            "{not json",
            "[]",
            '"just a string"',
            '{"id": "1", "name": "X"}',
            '{"id": "1", "name": "X", "latitude": "north", "longitude": 0}',
        ],
    )
    def test_corrupt_entry_is_a_miss(self, raw: str):
        store = MemoryStore({"city_bad": raw})
        assert LocationCache(store).get("bad") is None

    def test_entries(self, cache: LocationCache, madrid: LocationRecord):
        other = LocationRecord.from_api({**madrid.to_api(), "id": "1", "name": "Other"})
        cache.put("Q2807", madrid)
        cache.put("Q1", other)
        names = sorted(r.name for r in cache.entries())
        assert names == ["Madrid", "Other"]

    def test_entries_skip_corrupt_and_foreign_keys(self, madrid: LocationRecord):
        store = MemoryStore({"city_bad": "{", "other_key": "{}"})
        cache = LocationCache(store)
        cache.put("Q2807", madrid)
        assert cache.entries() == [madrid]


class TestSqliteStore:
    def test_survives_reconnect(self, tmp_path: Path, madrid: LocationRecord):
        path = tmp_path / "persist.db"
        conn = connect(path)
        run_migrations(conn)
        LocationCache(SqliteStore(conn)).put("Q2807", madrid)
        conn.close()

        conn = connect(path)
        assert LocationCache(SqliteStore(conn)).get("Q2807") == madrid
        conn.close()

    def test_upsert(self, db: sqlite3.Connection):
        store = SqliteStore(db)
        store.put("k", "one")
        store.put("k", "two")
        assert store.get("k") == "two"
        count = db.execute("SELECT COUNT(*) FROM location_cache").fetchone()[0]
        assert count == 1

    def test_items_prefix(self, db: sqlite3.Connection):
        store = SqliteStore(db)
        store.put("city_a", "1")
        store.put("city_b", "2")
        store.put("town_c", "3")
        assert store.items("city_") == [("city_a", "1"), ("city_b", "2")]
