"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field, replace
from datetime import tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from quakefeed.core.query import USGS_API_BASE, QueryFilter


# Settings whose change invalidates the current list
QUERY_SETTING_KEYS = (
    "order_by",
    "min_magnitude",
    "max_magnitude",
    "start_time",
    "end_time",
)


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        query: Filter settings sent to USGS
        base_url: USGS event query endpoint
        timeout_seconds: HTTP request timeout
        display_timezone: IANA zone name for dates/times (None for local zone)
    """
    query: QueryFilter = field(default_factory=QueryFilter)
    base_url: str = USGS_API_BASE
    timeout_seconds: int = 30
    display_timezone: str | None = None

    @property
    def tz(self) -> tzinfo | None:
        """Display timezone object, None meaning the local zone."""
        return resolve_timezone(self.display_timezone)


def resolve_timezone(name: str | None) -> tzinfo | None:
    """Resolve an IANA timezone name.

    Pure function.

    Raises:
        ValueError: If the name is not a known timezone
    """
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {name}") from e


def is_query_setting(key: str) -> bool:
    """Check whether a setting key belongs to the query filter.

    Pure function.
    """
    return key in QUERY_SETTING_KEYS


def with_query_setting(query: QueryFilter, key: str, value: str) -> QueryFilter:
    """Return a copy of the filter with one setting changed.

    Pure function.

    Raises:
        KeyError: If key is not a query setting
    """
    if not is_query_setting(key):
        raise KeyError(key)
    return replace(query, **{key: str(value)})
