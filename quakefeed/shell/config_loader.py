"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

The Config model is defined in quakefeed/core/config.py.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from quakefeed.core.config import Config, resolve_timezone
from quakefeed.core.query import USGS_API_BASE, QueryFilter


logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = "config/config.yaml"

# Environment variable for each query setting
QUERY_ENV_VARS = {
    "order_by": "QUAKEFEED_ORDER_BY",
    "min_magnitude": "QUAKEFEED_MIN_MAGNITUDE",
    "max_magnitude": "QUAKEFEED_MAX_MAGNITUDE",
    "start_time": "QUAKEFEED_START_TIME",
    "end_time": "QUAKEFEED_END_TIME",
}


def _resolve_value(value: Any) -> Any:
    """Resolve a ${VAR} placeholder from the environment.

    Non-string values and plain strings are returned unchanged. An unset
    variable leaves the placeholder in place.
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _parse_query(data: dict[str, Any]) -> QueryFilter:
    """Parse the query filter section, falling back to defaults per field."""
    defaults = QueryFilter()
    values = {}
    for key in QUERY_ENV_VARS:
        value = _resolve_value(data.get(key, getattr(defaults, key)))
        values[key] = str(value)
    return QueryFilter(**values)


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object

    Raises:
        ValueError: If display_timezone is not a known timezone
    """
    display_timezone = _resolve_value(data.get("display_timezone")) or None
    # Unknown zone names are rejected here
    resolve_timezone(display_timezone)

    return Config(
        query=_parse_query(data.get("query") or {}),
        base_url=_resolve_value(data.get("base_url", USGS_API_BASE)),
        timeout_seconds=int(data.get("timeout_seconds", 30)),
        display_timezone=display_timezone,
    )


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
        ValueError: If a value is invalid
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", DEFAULT_CONFIG_PATH)

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = load_config_from_dict(data)

    logger.info(
        "Loaded config: orderby=%s minmag=%s maxmag=%s starttime=%s endtime=%s",
        config.query.order_by,
        config.query.min_magnitude,
        config.query.max_magnitude,
        config.query.start_time,
        config.query.end_time,
    )

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for simple deployments without a YAML file.

    Environment variables:
        USGS_BASE_URL: USGS event query endpoint
        REQUEST_TIMEOUT: Request timeout in seconds
        QUAKEFEED_TIMEZONE: Display timezone (IANA name)
        QUAKEFEED_ORDER_BY, QUAKEFEED_MIN_MAGNITUDE, QUAKEFEED_MAX_MAGNITUDE,
        QUAKEFEED_START_TIME, QUAKEFEED_END_TIME: Query filter settings

    Returns:
        Config object from environment
    """
    query = {
        key: os.environ[env_var]
        for key, env_var in QUERY_ENV_VARS.items()
        if env_var in os.environ
    }

    data: dict[str, Any] = {"query": query}

    if "USGS_BASE_URL" in os.environ:
        data["base_url"] = os.environ["USGS_BASE_URL"]
    if "REQUEST_TIMEOUT" in os.environ:
        data["timeout_seconds"] = os.environ["REQUEST_TIMEOUT"]
    if "QUAKEFEED_TIMEZONE" in os.environ:
        data["display_timezone"] = os.environ["QUAKEFEED_TIMEZONE"]

    return load_config_from_dict(data)
