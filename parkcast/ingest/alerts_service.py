"""Active weather alerts, cached per NWS forecast zone."""

import logging

from parkcast.ingest.cache import CacheStore
from parkcast.ingest.errors import MalformedResponse
from parkcast.ingest.grid_resolver import GridResolver
from parkcast.ingest.nws_client import NwsClient
from parkcast.models.forecast import AlertRecord

logger = logging.getLogger(__name__)

ALERTS_TTL_SECONDS = 10 * 60


class AlertsService:
    def __init__(
        self,
        client: NwsClient,
        cache: CacheStore,
        resolver: GridResolver,
        ttl: float = ALERTS_TTL_SECONDS,
    ):
        self.client = client
        self.cache = cache
        self.resolver = resolver
        self.ttl = ttl

    async def get_alerts(self, lat: float, lon: float) -> dict:
        """Active alerts for the forecast zone containing the coordinate.

        An empty ``features`` list means no alerts are in effect.
        """
        grid = await self.resolver.resolve(lat, lon)
        zone_id = zone_id_from_url(grid.forecast_zone_url)
        url = f"{self.client.base_url}/alerts/active/zone/{zone_id}"

        async def fetch() -> dict:
            raw = await self.client.fetch(url)
            if not isinstance(raw, dict) or not isinstance(raw.get("features"), list):
                raise MalformedResponse("Alerts response has no features list", url)
            logger.debug("Zone %s has %d active alerts", zone_id, len(raw["features"]))
            return raw

        return await self.cache.get_or_fetch(f"alerts:{zone_id}", self.ttl, fetch)


def zone_id_from_url(zone_url: str) -> str:
    """Trailing path segment of a forecast zone URL, e.g. ``KSZ009``."""
    zone_id = zone_url.rstrip("/").rsplit("/", 1)[-1]
    if not zone_id:
        raise MalformedResponse(f"Cannot derive zone id from {zone_url!r}")
    return zone_id


def extract_alerts(document: dict) -> list[AlertRecord]:
    alerts = []
    for feature in document.get("features", []):
        props = feature.get("properties", {})
        alerts.append(
            AlertRecord(
                event=props.get("event", ""),
                headline=props.get("headline") or "",
                severity=props.get("severity", ""),
                description=props.get("description") or "",
            )
        )
    return alerts
