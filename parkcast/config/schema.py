"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field


class TemperatureUnit(StrEnum):
    FAHRENHEIT = "F"
    CELSIUS = "C"


class NwsConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = "https://api.weather.gov"
    user_agent: str = "parkcast/0.1.0 (contact@example.com)"
    timeout_seconds: float = Field(default=30.0, gt=0.0)
    max_attempts: int = Field(default=3, ge=1)
    retry_base_delay: float = Field(default=1.0, ge=0.0)
    request_delay_ms: int = Field(default=1000, ge=0)


class CacheConfig(BaseModel):
    model_config = {"extra": "forbid"}

    gridpoint_ttl_seconds: int = Field(default=24 * 60 * 60, ge=0)
    daily_ttl_seconds: int = Field(default=60 * 60, ge=0)
    hourly_ttl_seconds: int = Field(default=30 * 60, ge=0)
    alerts_ttl_seconds: int = Field(default=10 * 60, ge=0)
    max_entries: int | None = Field(default=None, ge=1)


class DisplayConfig(BaseModel):
    model_config = {"extra": "forbid"}

    temperature_unit: TemperatureUnit = TemperatureUnit.FAHRENHEIT


class LocationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    slug: str
    name: str
    lat: float = Field(ge=-90.0, le=90.0)
    lon: float = Field(ge=-180.0, le=180.0)


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    nws: NwsConfig = NwsConfig()
    cache: CacheConfig = CacheConfig()
    display: DisplayConfig = DisplayConfig()
    locations: list[LocationConfig] = []
