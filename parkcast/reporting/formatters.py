"""Output formatters for forecasts and alerts."""

import json
import re

from parkcast.config.schema import TemperatureUnit
from parkcast.models.common import utc_now_iso
from parkcast.models.forecast import AlertRecord, ForecastPeriod, GridMetadata

_ICONS = [
    (re.compile(r"sunny|clear"), "☀️"),
    (re.compile(r"partly cloudy|mostly cloudy|cloudy|overcast"), "⛅️"),
    (re.compile(r"rain|showers|drizzle"), "🌧️"),
    (re.compile(r"thunder|storm"), "⛈️"),
    (re.compile(r"snow|flurries|blizzard"), "❄️"),
    (re.compile(r"fog|mist|haze"), "🌫️"),
]
DEFAULT_ICON = "🌡️"


def convert_temperature(
    value: float | None, from_unit: str, to_unit: str
) -> int | None:
    """Convert between F and C, rounding to a whole degree."""
    if value is None:
        return None
    if from_unit == to_unit:
        return round(value)
    if from_unit == "F" and to_unit == "C":
        return round((value - 32) * 5 / 9)
    if from_unit == "C" and to_unit == "F":
        return round(value * 9 / 5 + 32)
    return round(value)


def weather_icon(description: str = "") -> str:
    text = description.lower()
    for pattern, icon in _ICONS:
        if pattern.search(text):
            return icon
    return DEFAULT_ICON


def format_period(
    p: ForecastPeriod, unit: TemperatureUnit = TemperatureUnit.FAHRENHEIT
) -> str:
    temp = convert_temperature(p.temperature, p.temperature_unit, unit)
    reading = "--" if temp is None else f"{temp}°{unit}"
    line = f"{weather_icon(p.short_forecast)} {p.name}: {reading} {p.short_forecast}"
    if p.wind_speed:
        wind = " ".join(part for part in (p.wind_direction, p.wind_speed) if part)
        line += f", wind {wind}"
    if p.precipitation_probability is not None:
        line += f", {p.precipitation_probability}% precip"
    return line


def format_forecast_text(
    periods: list[ForecastPeriod],
    unit: TemperatureUnit = TemperatureUnit.FAHRENHEIT,
    limit: int | None = None,
) -> str:
    if limit is not None:
        periods = periods[:limit]
    return "\n".join(format_period(p, unit) for p in periods)


def format_alerts_text(alerts: list[AlertRecord]) -> str:
    if not alerts:
        return "No active alerts"
    lines = []
    for a in alerts:
        severity = f" [{a.severity}]" if a.severity else ""
        lines.append(f"{a.event}{severity}: {a.headline}")
    return "\n".join(lines)


def format_gridpoint_text(grid: GridMetadata) -> str:
    return "\n".join([
        f"Grid: {grid.grid_id} ({grid.grid_x},{grid.grid_y})",
        f"Forecast: {grid.forecast_url}",
        f"Hourly: {grid.forecast_hourly_url}",
        f"Zone: {grid.forecast_zone_url}",
    ])


def format_document_json(document: dict) -> str:
    """Raw NWS document wrapped with the time it was rendered."""
    return json.dumps({"rendered_at": utc_now_iso(), "document": document}, indent=2)
