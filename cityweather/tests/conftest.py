"""Shared test fixtures."""

import json
import sqlite3
from datetime import datetime
from pathlib import Path

import pytest
import yaml

from cityweather.models.forecast import DateWindow, ForecastPayload
from cityweather.models.location import LocationRecord
from cityweather.storage.database import connect, run_migrations
from cityweather.storage.location_cache import LocationCache, MemoryStore

FIXTURE_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> dict:
    with open(FIXTURE_DIR / name) as f:
        return json.load(f)


@pytest.fixture
def forecast_raw() -> dict:
    """48 hourly samples (2026-10-19/20) and 7 daily entries (2026-10-19..25)."""
    return load_fixture("openmeteo_forecast_madrid.json")


@pytest.fixture
def payload(forecast_raw: dict) -> ForecastPayload:
    return ForecastPayload.from_api(forecast_raw)


@pytest.fixture
def city_raw() -> dict:
    return load_fixture("geodb_city_madrid.json")


@pytest.fixture
def madrid(city_raw: dict) -> LocationRecord:
    return LocationRecord.from_api(city_raw["data"])


@pytest.fixture
def full_window() -> DateWindow:
    return DateWindow(datetime(2026, 10, 19, 0, 0), datetime(2026, 10, 25, 23, 59, 59))


@pytest.fixture
def memory_cache() -> LocationCache:
    return LocationCache(MemoryStore())


@pytest.fixture
def db(tmp_path: Path) -> sqlite3.Connection:
    conn = connect(tmp_path / "test.db")
    run_migrations(conn)
    yield conn
    conn.close()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "view": {"mode": "next-24h", "next_hours": 12},
        "cache": {"db_path": str(tmp_path / "cache.db")},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
