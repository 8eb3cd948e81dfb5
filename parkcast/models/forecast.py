"""NWS forecast data models."""

from dataclasses import dataclass

# ~11 m; NWS asks clients not to send more precision than this
COORDINATE_PRECISION = 4


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lon: float

    def rounded(self, precision: int = COORDINATE_PRECISION) -> "Coordinate":
        # -0.0 and 0.0 share one cache key
        return Coordinate(
            round(self.lat, precision) + 0.0, round(self.lon, precision) + 0.0
        )

    def __str__(self) -> str:
        return f"{self.lat},{self.lon}"


@dataclass(frozen=True)
class GridMetadata:
    grid_id: str
    grid_x: int
    grid_y: int
    forecast_url: str
    forecast_hourly_url: str
    forecast_zone_url: str

    @property
    def cell(self) -> str:
        return f"{self.grid_id}:{self.grid_x},{self.grid_y}"


@dataclass(frozen=True)
class ForecastPeriod:
    number: int
    name: str
    start_time: str
    end_time: str
    is_daytime: bool
    temperature: int | None
    temperature_unit: str
    wind_speed: str
    wind_direction: str
    short_forecast: str
    detailed_forecast: str
    precipitation_probability: int | None = None


@dataclass(frozen=True)
class AlertRecord:
    event: str
    headline: str
    severity: str
    description: str
