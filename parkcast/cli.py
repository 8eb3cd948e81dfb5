"""CLI entry point for the ParkCast forecast client."""

import argparse
import asyncio
import logging

from parkcast.config.loader import (
    default_config,
    find_location,
    get_config_value,
    load_config,
)
from parkcast.config.schema import AppConfig
from parkcast.ingest.alerts_service import extract_alerts
from parkcast.ingest.errors import WeatherApiError
from parkcast.ingest.forecast_service import extract_periods
from parkcast.reporting.formatters import (
    format_alerts_text,
    format_document_json,
    format_forecast_text,
    format_gridpoint_text,
)
from parkcast.weather_api import WeatherApi

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="parkcast",
        description="National park weather forecasts from api.weather.gov",
    )
    parser.add_argument("--config", default=None, help="Config YAML path")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("locations", help="List curated locations")

    grid_p = sub.add_parser("gridpoint", help="Show grid metadata for a point")
    _add_target_args(grid_p)

    forecast_p = sub.add_parser("forecast", help="Show the daily forecast")
    _add_target_args(forecast_p)
    forecast_p.add_argument("--json", action="store_true", help="Print raw JSON")
    forecast_p.add_argument("--limit", type=int, default=None, help="Max periods")

    hourly_p = sub.add_parser("hourly", help="Show the hourly forecast")
    _add_target_args(hourly_p)
    hourly_p.add_argument("--json", action="store_true", help="Print raw JSON")
    hourly_p.add_argument("--limit", type=int, default=12, help="Max periods")

    alerts_p = sub.add_parser("alerts", help="Show active alerts")
    _add_target_args(alerts_p)

    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Print one config value")
    get_p.add_argument("key", help="Dotted key, e.g. cache.daily_ttl_seconds")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config) if args.config else default_config()

    if args.command == "locations":
        return _cmd_locations(config)
    elif args.command == "config":
        return _cmd_config(config, args)

    try:
        lat, lon = _resolve_target(config, args)
    except (KeyError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    try:
        return asyncio.run(_run_weather_command(config, args, lat, lon))
    except WeatherApiError as e:
        logger.error("Weather request failed: %s", e)
        return 1


def _add_target_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--location", help="Curated location slug")
    p.add_argument("--lat", type=float, help="Latitude in decimal degrees")
    p.add_argument("--lon", type=float, help="Longitude in decimal degrees")


def _resolve_target(config: AppConfig, args) -> tuple[float, float]:
    if args.location:
        loc = find_location(config, args.location)
        return loc.lat, loc.lon
    if args.lat is None or args.lon is None:
        raise ValueError("use --location SLUG or both --lat and --lon")
    return args.lat, args.lon


async def _run_weather_command(config: AppConfig, args, lat: float, lon: float) -> int:
    unit = config.display.temperature_unit
    async with WeatherApi.from_config(config) as api:
        if args.command == "gridpoint":
            grid = await api.get_gridpoint(lat, lon)
            print(format_gridpoint_text(grid))
        elif args.command in ("forecast", "hourly"):
            if args.command == "forecast":
                document = await api.get_daily_forecast(lat, lon)
            else:
                document = await api.get_hourly_forecast(lat, lon)
            if args.json:
                print(format_document_json(document))
            else:
                periods = extract_periods(document)
                print(format_forecast_text(periods, unit, limit=args.limit))
        elif args.command == "alerts":
            document = await api.get_alerts(lat, lon)
            print(format_alerts_text(extract_alerts(document)))
    return 0


def _cmd_locations(config: AppConfig) -> int:
    for loc in config.locations:
        print(f"{loc.slug:<20} {loc.lat:>9.4f} {loc.lon:>10.4f}  {loc.name}")
    return 0


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            value = get_config_value(config, args.key)
        except (KeyError, IndexError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        if hasattr(value, "model_dump_json"):
            print(value.model_dump_json(indent=2))
        else:
            print(value)
        return 0
    print("Use: config show | config get KEY")
    return 1
