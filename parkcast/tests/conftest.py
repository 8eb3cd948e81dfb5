"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import respx
import yaml

from parkcast.config.defaults import DEFAULT_LOCATIONS
from parkcast.config.schema import AppConfig
from parkcast.ingest.cache import CacheStore
from parkcast.ingest.nws_client import NwsClient
from parkcast.weather_api import WeatherApi

TEST_BASE_URL = "https://test-nws.example.com"
FIXTURE_DIR = Path(__file__).parent / "fixtures"


class FakeClock:
    """Monotonic clock stand-in that only moves when told to."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _points_payload(
    grid_id: str = "TOP",
    grid_x: int = 31,
    grid_y: int = 80,
    zone_id: str = "KSZ009",
) -> dict:
    """Minimal /points response pointing back at the test host."""
    grid = f"{TEST_BASE_URL}/gridpoints/{grid_id}/{grid_x},{grid_y}"
    return {
        "properties": {
            "gridId": grid_id,
            "gridX": grid_x,
            "gridY": grid_y,
            "forecast": f"{grid}/forecast",
            "forecastHourly": f"{grid}/forecast/hourly",
            "forecastZone": f"{TEST_BASE_URL}/zones/forecast/{zone_id}",
        }
    }


@pytest.fixture
def points_payload():
    """Factory for /points bodies whose resource URLs point at the test host."""
    return _points_payload


def load_fixture(name: str) -> dict:
    with open(FIXTURE_DIR / name) as f:
        return json.load(f)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> CacheStore:
    return CacheStore(clock=clock)


@pytest.fixture
async def nws_client():
    client = NwsClient(
        base_url=TEST_BASE_URL,
        retry_base_delay=0.01,  # Fast retries in tests
        request_delay=0,
    )
    yield client
    await client.aclose()


@pytest.fixture
async def api(nws_client: NwsClient, cache: CacheStore):
    async with WeatherApi(nws_client, cache=cache) as weather:
        yield weather


@pytest.fixture
def nws_mock():
    """respx router scoped to the test NWS host."""
    with respx.mock(base_url=TEST_BASE_URL, assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def daily_forecast() -> dict:
    return load_fixture("nws_forecast_topeka.json")


@pytest.fixture
def hourly_forecast() -> dict:
    return load_fixture("nws_forecast_hourly_topeka.json")


@pytest.fixture
def alerts_document() -> dict:
    return load_fixture("nws_alerts_ksz009.json")


@pytest.fixture
def default_config() -> AppConfig:
    """Return default AppConfig with default locations."""
    return AppConfig(locations=DEFAULT_LOCATIONS)


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "nws": {"user_agent": "parkcast-tests (test@example.com)"},
        "cache": {"daily_ttl_seconds": 1200},
        "display": {"temperature_unit": "C"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR
