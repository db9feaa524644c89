"""USGS API Client - Imperative Shell.

This module handles HTTP communication with the USGS Earthquake API.
All I/O is contained here; parsing and query building are in the core module.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import requests

from quakefeed.core.earthquake import EarthquakeRecord, parse_earthquakes
from quakefeed.core.query import USGS_API_BASE, QueryFilter, build_query_params


logger = logging.getLogger(__name__)


# Default timeout for API requests (seconds)
DEFAULT_TIMEOUT = 30


class FetchStatus(Enum):
    """Outcome of a feed fetch."""
    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass
class FetchResult:
    """Result of fetching and parsing the earthquake feed.

    The record list is always present; it is empty when the fetch failed
    or the feed had no usable features.

    Attributes:
        status: Whether records were found, none were found, or the fetch failed
        earthquakes: Parsed records in server order
        error: Error message if failed
    """
    status: FetchStatus
    earthquakes: list[EarthquakeRecord] = field(default_factory=list)
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.status is not FetchStatus.FAILED

    @classmethod
    def failed(cls, error: str) -> "FetchResult":
        return cls(status=FetchStatus.FAILED, earthquakes=[], error=error)


class USGSClient:
    """Client for fetching earthquake data from USGS API.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        base_url: str = USGS_API_BASE,
        timeout: int = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize USGS client.

        Args:
            base_url: USGS API base URL
            timeout: Request timeout in seconds
            session: Optional requests session (a plain requests.get is used otherwise)
        """
        self.base_url = base_url
        self.timeout = timeout
        self.session = session

    def fetch_feed(self, query: QueryFilter) -> Any:
        """Fetch the raw GeoJSON feed from USGS API.

        This method performs HTTP I/O.

        Args:
            query: Filter settings

        Returns:
            Decoded JSON body

        Raises:
            requests.RequestException: If the request fails or returns non-2xx
            ValueError: If the body is not valid JSON
        """
        params = build_query_params(query)

        logger.info(
            "Fetching earthquakes from USGS",
            extra={"params": params},
        )

        get = self.session.get if self.session is not None else requests.get
        response = get(
            self.base_url,
            params=params,
            timeout=self.timeout,
        )
        response.raise_for_status()

        return response.json()

    def fetch_earthquakes(self, query: QueryFilter) -> FetchResult:
        """Fetch and parse earthquakes matching a filter.

        Never raises for transport or decoding problems; those come back
        as a FAILED result with an empty record list.

        Args:
            query: Filter settings

        Returns:
            FetchResult with the parsed records
        """
        try:
            data = self.fetch_feed(query)
        except requests.Timeout:
            logger.error("USGS request timed out")
            return FetchResult.failed("Request timed out")
        except requests.RequestException as e:
            logger.error("USGS request failed: %s", str(e))
            return FetchResult.failed(str(e))
        except ValueError as e:
            logger.error("USGS response is not valid JSON: %s", str(e))
            return FetchResult.failed(f"Invalid JSON response: {e}")

        if not isinstance(data, dict) or not isinstance(data.get("features"), list):
            logger.error("USGS response has no features array")
            return FetchResult.failed("Response has no features array")

        earthquakes = parse_earthquakes(data)

        logger.info(
            "Fetched %d earthquakes from USGS (%d features)",
            len(earthquakes),
            len(data["features"]),
        )

        if not earthquakes:
            return FetchResult(status=FetchStatus.EMPTY)

        return FetchResult(status=FetchStatus.OK, earthquakes=earthquakes)
