"""Query construction - Pure functions.

Turns the user's filter settings into USGS FDSN event query parameters.
Filter values are passed through untouched; the service validates them.
"""

from dataclasses import dataclass

import requests


# USGS FDSN Event Web Service base URL
USGS_API_BASE = "https://earthquake.usgs.gov/fdsnws/event/1/query"


@dataclass(frozen=True)
class QueryFilter:
    """User-configured filter for the earthquake query.

    Attributes:
        order_by: Sort order understood by USGS (e.g. "time", "magnitude")
        min_magnitude: Minimum magnitude
        max_magnitude: Maximum magnitude
        start_time: Start date/time (e.g. "2024-01-01")
        end_time: End date/time
    """
    order_by: str = "time"
    min_magnitude: str = "6"
    max_magnitude: str = "10"
    start_time: str = "2024-01-01"
    end_time: str = "2024-12-31"


def build_query_params(query: QueryFilter) -> dict[str, str]:
    """Build USGS query parameters for a filter.

    Pure function. Insertion order is the order parameters appear in the URL.

    Args:
        query: Filter settings

    Returns:
        Dict of URL query parameters
    """
    return {
        "format": "geojson",
        "orderby": query.order_by,
        "minmag": query.min_magnitude,
        "maxmag": query.max_magnitude,
        "starttime": query.start_time,
        "endtime": query.end_time,
    }


def build_query_url(query: QueryFilter, base_url: str = USGS_API_BASE) -> str:
    """Build the full request URL for a filter.

    Args:
        query: Filter settings
        base_url: Endpoint to query

    Returns:
        Encoded URL string
    """
    request = requests.Request("GET", base_url, params=build_query_params(query))
    return request.prepare().url
