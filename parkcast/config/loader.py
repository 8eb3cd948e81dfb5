"""YAML config loader and lookup helpers."""

from pathlib import Path
from typing import Any

import yaml

from parkcast.config.defaults import DEFAULT_LOCATIONS
from parkcast.config.schema import AppConfig, LocationConfig


def load_config(path: str | Path) -> AppConfig:
    """Load and validate config from a YAML file.

    If no locations are specified in the YAML, injects DEFAULT_LOCATIONS.
    """
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if "locations" not in raw or not raw["locations"]:
        raw["locations"] = [loc.model_dump() for loc in DEFAULT_LOCATIONS]

    return AppConfig(**raw)


def default_config() -> AppConfig:
    return AppConfig(locations=DEFAULT_LOCATIONS)


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'cache.daily_ttl_seconds'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def find_location(config: AppConfig, slug: str) -> LocationConfig:
    for loc in config.locations:
        if loc.slug == slug:
            return loc
    raise KeyError(f"Unknown location: {slug}")
