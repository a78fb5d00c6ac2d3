"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from cityweather.models.forecast import ViewMode


class GeoDbConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = "https://wft-geo-db.p.rapidapi.com/v1/geo"
    api_host: str = "wft-geo-db.p.rapidapi.com"
    timeout: float = Field(default=15.0, gt=0.0)


class ForecastConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = "https://api.open-meteo.com/v1"
    timeout: float = Field(default=15.0, gt=0.0)
    extra_hourly: bool = False  # also request relativehumidity_2m, windspeed_10m


class ViewConfig(BaseModel):
    model_config = {"extra": "forbid"}

    mode: ViewMode = ViewMode.CUSTOM_RANGE
    default_window_days: int = Field(default=7, ge=1, le=15)
    next_hours: int = Field(default=24, ge=1, le=168)


class CacheConfig(BaseModel):
    model_config = {"extra": "forbid"}

    db_path: str = "data/cityweather.db"
    key_prefix: str = Field(default="city_", min_length=1)


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    geodb: GeoDbConfig = GeoDbConfig()
    forecast: ForecastConfig = ForecastConfig()
    view: ViewConfig = ViewConfig()
    cache: CacheConfig = CacheConfig()
