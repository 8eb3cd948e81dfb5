"""Forecast data-access facade: one cache, one client, three services."""

import logging

from parkcast.config.schema import AppConfig
from parkcast.ingest.alerts_service import AlertsService
from parkcast.ingest.cache import CacheStore
from parkcast.ingest.forecast_service import Forecasts, ForecastService
from parkcast.ingest.grid_resolver import GridResolver
from parkcast.ingest.nws_client import NwsClient
from parkcast.models.forecast import GridMetadata

logger = logging.getLogger(__name__)


class WeatherApi:
    """Entry point for callers that need forecasts and alerts for a coordinate.

    The cache is injected rather than module-global, so independent
    instances (per test, per session) never see each other's entries.
    """

    def __init__(self, client: NwsClient, cache: CacheStore | None = None, config: AppConfig | None = None):
        config = config or AppConfig()
        self.client = client
        self.cache = cache if cache is not None else CacheStore(config.cache.max_entries)
        self.resolver = GridResolver(
            client, self.cache, ttl=config.cache.gridpoint_ttl_seconds
        )
        self.forecasts = ForecastService(
            client,
            self.cache,
            self.resolver,
            daily_ttl=config.cache.daily_ttl_seconds,
            hourly_ttl=config.cache.hourly_ttl_seconds,
        )
        self.alerts = AlertsService(
            client, self.cache, self.resolver, ttl=config.cache.alerts_ttl_seconds
        )

    @classmethod
    def from_config(cls, config: AppConfig, cache: CacheStore | None = None) -> "WeatherApi":
        nws = config.nws
        client = NwsClient(
            base_url=nws.base_url,
            user_agent=nws.user_agent,
            timeout=nws.timeout_seconds,
            max_attempts=nws.max_attempts,
            retry_base_delay=nws.retry_base_delay,
            request_delay=nws.request_delay_ms / 1000,
        )
        return cls(client, cache=cache, config=config)

    async def get_gridpoint(self, lat: float, lon: float) -> GridMetadata:
        return await self.resolver.resolve(lat, lon)

    async def get_daily_forecast(self, lat: float, lon: float) -> dict:
        return await self.forecasts.get_daily_forecast(lat, lon)

    async def get_hourly_forecast(self, lat: float, lon: float) -> dict:
        return await self.forecasts.get_hourly_forecast(lat, lon)

    async def get_forecasts(self, lat: float, lon: float) -> Forecasts:
        return await self.forecasts.get_forecasts(lat, lon)

    async def get_alerts(self, lat: float, lon: float) -> dict:
        return await self.alerts.get_alerts(lat, lon)

    def clear_cache(self) -> None:
        logger.info("Clearing forecast cache (%d live entries)", len(self.cache))
        self.cache.clear()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "WeatherApi":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
