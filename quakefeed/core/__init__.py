"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Earthquake feed parsing
- Query URL construction
- Row formatting (magnitude, color, location, date/time)

All functions here are deterministic and have no I/O.
"""

from quakefeed.core.earthquake import EarthquakeRecord, parse_earthquakes
from quakefeed.core.query import QueryFilter, build_query_params, build_query_url
from quakefeed.core.formatter import (
    EarthquakeRow,
    MagnitudeBucket,
    format_magnitude,
    get_magnitude_bucket,
    split_location,
    to_row,
    to_rows,
)
from quakefeed.core.config import Config

__all__ = [
    # Earthquake
    "EarthquakeRecord",
    "parse_earthquakes",
    # Query
    "QueryFilter",
    "build_query_params",
    "build_query_url",
    # Formatter
    "EarthquakeRow",
    "MagnitudeBucket",
    "format_magnitude",
    "get_magnitude_bucket",
    "split_location",
    "to_row",
    "to_rows",
    # Config
    "Config",
]
