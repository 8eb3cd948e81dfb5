"""Resolves coordinates to NWS forecast grid metadata."""

import logging

from parkcast.ingest.cache import CacheStore
from parkcast.ingest.errors import MalformedResponse
from parkcast.ingest.nws_client import NwsClient
from parkcast.models.forecast import Coordinate, GridMetadata

logger = logging.getLogger(__name__)

GRIDPOINT_TTL_SECONDS = 24 * 60 * 60


class GridResolver:
    def __init__(
        self,
        client: NwsClient,
        cache: CacheStore,
        ttl: float = GRIDPOINT_TTL_SECONDS,
    ):
        self.client = client
        self.cache = cache
        self.ttl = ttl

    async def resolve(self, lat: float, lon: float) -> GridMetadata:
        """Return grid metadata for a coordinate, rounded before lookup.

        Grid assignment for a point effectively never changes, so results
        are cached for a day.
        """
        point = Coordinate(lat, lon).rounded()
        key = f"gridpoint:{point}"
        url = f"{self.client.base_url}/points/{point}"

        async def fetch() -> GridMetadata:
            raw = await self.client.fetch(url)
            grid = parse_gridpoint(raw, url)
            logger.debug("Resolved %s to grid %s", point, grid.cell)
            return grid

        return await self.cache.get_or_fetch(key, self.ttl, fetch)


_TEXT_FIELDS = ("gridId", "forecast", "forecastHourly", "forecastZone")


def parse_gridpoint(raw: dict, url: str | None = None) -> GridMetadata:
    properties = raw.get("properties") if isinstance(raw, dict) else None
    if not isinstance(properties, dict):
        raise MalformedResponse("Points response has no properties", url)
    for field in _TEXT_FIELDS:
        value = properties.get(field)
        if not isinstance(value, str) or not value:
            raise MalformedResponse(f"Points response has no usable {field}", url)
    try:
        return GridMetadata(
            grid_id=properties["gridId"],
            grid_x=int(properties["gridX"]),
            grid_y=int(properties["gridY"]),
            forecast_url=properties["forecast"],
            forecast_hourly_url=properties["forecastHourly"],
            forecast_zone_url=properties["forecastZone"],
        )
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedResponse(f"Points response missing grid field: {e}", url) from e
