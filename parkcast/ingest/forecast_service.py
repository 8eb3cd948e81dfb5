"""Daily and hourly forecasts, cached per NWS grid cell."""

import asyncio
import logging
from typing import NamedTuple

from parkcast.ingest.cache import CacheStore
from parkcast.ingest.errors import MalformedResponse
from parkcast.ingest.grid_resolver import GridResolver
from parkcast.ingest.nws_client import NwsClient
from parkcast.models.forecast import ForecastPeriod, GridMetadata

logger = logging.getLogger(__name__)

DAILY_TTL_SECONDS = 60 * 60
HOURLY_TTL_SECONDS = 30 * 60


class Forecasts(NamedTuple):
    daily: dict
    hourly: dict


class ForecastService:
    """Fetches forecasts keyed by grid cell rather than by coordinate.

    Every coordinate inside one grid cell shares the same cached document,
    so nearby locations cost a single forecast request per TTL window.
    """

    def __init__(
        self,
        client: NwsClient,
        cache: CacheStore,
        resolver: GridResolver,
        daily_ttl: float = DAILY_TTL_SECONDS,
        hourly_ttl: float = HOURLY_TTL_SECONDS,
    ):
        self.client = client
        self.cache = cache
        self.resolver = resolver
        self.daily_ttl = daily_ttl
        self.hourly_ttl = hourly_ttl

    async def get_daily_forecast(self, lat: float, lon: float) -> dict:
        grid = await self.resolver.resolve(lat, lon)
        return await self._daily(grid)

    async def get_hourly_forecast(self, lat: float, lon: float) -> dict:
        grid = await self.resolver.resolve(lat, lon)
        return await self._hourly(grid)

    async def get_forecasts(self, lat: float, lon: float) -> Forecasts:
        """Daily and hourly forecasts from a single grid lookup."""
        grid = await self.resolver.resolve(lat, lon)
        daily, hourly = await asyncio.gather(self._daily(grid), self._hourly(grid))
        return Forecasts(daily=daily, hourly=hourly)

    async def _daily(self, grid: GridMetadata) -> dict:
        return await self._cached_document(
            f"forecast:{grid.cell}", grid.forecast_url, self.daily_ttl
        )

    async def _hourly(self, grid: GridMetadata) -> dict:
        return await self._cached_document(
            f"forecast-hourly:{grid.cell}", grid.forecast_hourly_url, self.hourly_ttl
        )

    async def _cached_document(self, key: str, url: str, ttl: float) -> dict:
        async def fetch() -> dict:
            raw = await self.client.fetch(url)
            _check_periods(raw, url)
            return raw

        return await self.cache.get_or_fetch(key, ttl, fetch)


def _check_periods(raw: dict, url: str) -> None:
    properties = raw.get("properties") if isinstance(raw, dict) else None
    if not isinstance(properties, dict):
        raise MalformedResponse("Forecast response has no properties", url)
    if not isinstance(properties.get("periods"), list):
        raise MalformedResponse("Forecast response has no periods list", url)


def extract_periods(document: dict) -> list[ForecastPeriod]:
    """Parse the periods of a daily or hourly forecast document."""
    periods = document.get("properties", {}).get("periods", [])
    parsed: list[ForecastPeriod] = []
    for p in periods:
        precip = (p.get("probabilityOfPrecipitation") or {}).get("value")
        temperature = p.get("temperature")
        parsed.append(
            ForecastPeriod(
                number=int(p.get("number", 0)),
                name=p.get("name", ""),
                start_time=p.get("startTime", ""),
                end_time=p.get("endTime", ""),
                is_daytime=bool(p.get("isDaytime", False)),
                temperature=None if temperature is None else int(temperature),
                temperature_unit=p.get("temperatureUnit", "F"),
                wind_speed=p.get("windSpeed", ""),
                wind_direction=p.get("windDirection", ""),
                short_forecast=p.get("shortForecast", ""),
                detailed_forecast=p.get("detailedForecast", ""),
                precipitation_probability=None if precip is None else int(precip),
            )
        )
    return parsed
