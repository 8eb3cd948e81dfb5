"""Tests for coordinate to grid resolution."""

import httpx
import pytest
import respx

from parkcast.ingest.cache import CacheStore
from parkcast.ingest.errors import MalformedResponse, UpstreamError
from parkcast.ingest.grid_resolver import GridResolver, parse_gridpoint
from parkcast.ingest.nws_client import NwsClient


@pytest.fixture
def resolver(nws_client: NwsClient, cache: CacheStore) -> GridResolver:
    return GridResolver(nws_client, cache)


class TestResolve:
    async def test_extracts_metadata(self, resolver: GridResolver, nws_mock: respx.Router, points_payload):
        nws_mock.get("/points/39.7456,-97.0892").mock(
            return_value=httpx.Response(200, json=points_payload())
        )

        grid = await resolver.resolve(39.7456, -97.0892)
        assert grid.grid_id == "TOP"
        assert (grid.grid_x, grid.grid_y) == (31, 80)
        assert grid.forecast_url.endswith("/gridpoints/TOP/31,80/forecast")
        assert grid.forecast_hourly_url.endswith("/forecast/hourly")
        assert grid.forecast_zone_url.endswith("/zones/forecast/KSZ009")

    async def test_rounds_coordinates_in_request(
        self, resolver: GridResolver, nws_mock: respx.Router, points_payload
    ):
        route = nws_mock.get("/points/39.7456,-97.0892").mock(
            return_value=httpx.Response(200, json=points_payload())
        )

        await resolver.resolve(39.745612345, -97.089249999)
        assert route.call_count == 1

    async def test_cached_under_rounded_key(
        self, resolver: GridResolver, cache: CacheStore, nws_mock: respx.Router, points_payload
    ):
        route = nws_mock.get("/points/39.7456,-97.0892").mock(
            return_value=httpx.Response(200, json=points_payload())
        )

        first = await resolver.resolve(39.74561, -97.08919)
        second = await resolver.resolve(39.74559, -97.08921)
        assert first is second
        assert route.call_count == 1
        assert cache.get("gridpoint:39.7456,-97.0892") is first

    async def test_negative_zero_shares_key_with_zero(
        self, resolver: GridResolver, nws_mock: respx.Router, points_payload
    ):
        route = nws_mock.get("/points/0.0,-97.0892").mock(
            return_value=httpx.Response(200, json=points_payload())
        )

        first = await resolver.resolve(0.00001, -97.0892)
        second = await resolver.resolve(-0.00001, -97.0892)
        assert first is second
        assert route.call_count == 1

    async def test_long_ttl(self, resolver: GridResolver, clock, nws_mock: respx.Router, points_payload):
        route = nws_mock.get("/points/39.7456,-97.0892").mock(
            return_value=httpx.Response(200, json=points_payload())
        )

        await resolver.resolve(39.7456, -97.0892)
        clock.advance(23 * 60 * 60)
        await resolver.resolve(39.7456, -97.0892)
        assert route.call_count == 1

        clock.advance(2 * 60 * 60)
        await resolver.resolve(39.7456, -97.0892)
        assert route.call_count == 2

    async def test_upstream_error_propagates(self, resolver: GridResolver, nws_mock: respx.Router):
        nws_mock.get("/points/39.7456,-97.0892").mock(return_value=httpx.Response(404))

        with pytest.raises(UpstreamError):
            await resolver.resolve(39.7456, -97.0892)

    async def test_failure_not_cached(self, resolver: GridResolver, nws_mock: respx.Router, points_payload):
        nws_mock.get("/points/39.7456,-97.0892").mock(
            side_effect=[
                httpx.Response(500),
                httpx.Response(200, json=points_payload()),
            ]
        )

        with pytest.raises(UpstreamError):
            await resolver.resolve(39.7456, -97.0892)
        grid = await resolver.resolve(39.7456, -97.0892)
        assert grid.grid_id == "TOP"

    async def test_null_forecast_url_is_malformed_and_not_cached(
        self, resolver: GridResolver, cache: CacheStore, nws_mock: respx.Router, points_payload
    ):
        raw = points_payload()
        raw["properties"]["forecast"] = None
        raw["properties"]["gridId"] = None
        nws_mock.get("/points/39.7456,-97.0892").mock(
            return_value=httpx.Response(200, json=raw)
        )

        with pytest.raises(MalformedResponse):
            await resolver.resolve(39.7456, -97.0892)
        assert "gridpoint:39.7456,-97.0892" not in cache


class TestParseGridpoint:
    def test_missing_properties(self):
        with pytest.raises(MalformedResponse):
            parse_gridpoint({"type": "Feature"})

    def test_missing_field(self, points_payload):
        raw = points_payload()
        del raw["properties"]["forecastZone"]
        with pytest.raises(MalformedResponse, match="forecastZone"):
            parse_gridpoint(raw)

    @pytest.mark.parametrize("field", ["gridId", "forecast", "forecastHourly", "forecastZone"])
    def test_null_text_field(self, points_payload, field: str):
        raw = points_payload()
        raw["properties"][field] = None
        with pytest.raises(MalformedResponse, match=field):
            parse_gridpoint(raw)

    def test_empty_url(self, points_payload):
        raw = points_payload()
        raw["properties"]["forecastHourly"] = ""
        with pytest.raises(MalformedResponse):
            parse_gridpoint(raw)

    def test_non_integer_grid(self, points_payload):
        raw = points_payload()
        raw["properties"]["gridX"] = "abc"
        with pytest.raises(MalformedResponse):
            parse_gridpoint(raw)
