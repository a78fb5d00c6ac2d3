"""City weather JSON API: FastAPI backend feeding the browser view."""

import os
import sqlite3
from collections.abc import AsyncIterator
from datetime import date

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from cityweather.config.loader import load_config
from cityweather.config.schema import AppConfig
from cityweather.ingest.errors import (
    MissingCredentialsError,
    NotFoundError,
    RateLimitedError,
    WeatherServiceError,
)
from cityweather.models.forecast import DateWindow, ViewMode
from cityweather.pipeline.weather_view import WeatherView, build_view
from cityweather.storage.database import open_database

CONFIG_PATH = os.environ.get("CITYWEATHER_CONFIG")

app = FastAPI(title="City Weather", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)


class _NoChart:
    """The browser draws the chart; the API only ships the projection."""

    def __init__(self, projection, title):
        self.title = title

    def dispose(self) -> None:
        pass


def get_config() -> AppConfig:
    return load_config(CONFIG_PATH)


async def get_view(config: AppConfig = Depends(get_config)) -> AsyncIterator[WeatherView]:
    conn: sqlite3.Connection = open_database(config.cache.db_path)
    try:
        try:
            view = build_view(config, conn, _NoChart)
        except MissingCredentialsError as e:
            raise HTTPException(status_code=500, detail=str(e)) from e
        async with view:
            yield view
    finally:
        conn.close()


@app.get("/api/health")
def health():
    return {"status": "ok"}


@app.get("/api/cities/{city_id}/weather")
async def city_weather(
    city_id: str,
    start: date | None = None,
    end: date | None = None,
    mode: ViewMode | None = None,
    view: WeatherView = Depends(get_view),
):
    """Location, current conditions, chart projection and daily cards."""
    if (start is None) != (end is None):
        raise HTTPException(status_code=422, detail="start and end must be given together")
    window = None
    if start is not None and end is not None:
        if start > end:
            raise HTTPException(status_code=422, detail="start must not be after end")
        window = DateWindow.from_dates(start, end)
    if mode is not None:
        view.mode = mode

    state = await view.load(city_id, window)
    if state is None:
        raise HTTPException(status_code=503, detail="request superseded")
    if state.error:
        raise HTTPException(status_code=_status_for(view.last_error), detail=state.error)
    return state.to_dict()


def _status_for(error: WeatherServiceError | None) -> int:
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, RateLimitedError):
        return 429
    return 502
