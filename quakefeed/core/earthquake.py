"""Earthquake data model and parsing - Pure functions.

This module handles parsing USGS GeoJSON data into typed EarthquakeRecord
objects. All functions are pure with no side effects.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EarthquakeRecord:
    """Immutable earthquake record.

    Attributes:
        magnitude: Event magnitude
        location: Human-readable place description (e.g. "5km NW of Springfield")
        time_ms: Event time in milliseconds since the epoch (UTC)
        url: USGS event detail page
    """
    magnitude: float
    location: str
    time_ms: int
    url: str

    @property
    def time(self) -> datetime:
        """Event time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.time_ms / 1000, tz=timezone.utc)


def _as_time_ms(value: Any) -> int | None:
    # bool is an int subclass; a boolean time is never valid
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def parse_earthquake(feature: dict[str, Any]) -> EarthquakeRecord | None:
    """Parse a single GeoJSON feature into an EarthquakeRecord.

    Pure function: takes raw dict, returns a record or None if the feature
    is malformed.

    Args:
        feature: GeoJSON feature dict from USGS API

    Returns:
        EarthquakeRecord or None if parsing fails
    """
    try:
        props = feature.get("properties")
        if not isinstance(props, dict):
            return None

        magnitude = props.get("mag")
        if magnitude is None or isinstance(magnitude, bool):
            return None
        magnitude = float(magnitude)
        if not math.isfinite(magnitude):
            return None

        # USGS uses milliseconds since epoch
        time_ms = _as_time_ms(props.get("time"))
        if time_ms is None:
            return None
        # Raises for instants outside the datetime range
        datetime.fromtimestamp(time_ms / 1000, tz=timezone.utc)

        place = props.get("place")
        url = props.get("url")
        if not isinstance(place, str) or not isinstance(url, str):
            return None

        return EarthquakeRecord(
            magnitude=magnitude,
            location=place,
            time_ms=time_ms,
            url=url,
        )
    except (AttributeError, TypeError, ValueError, OverflowError, OSError):
        return None


def parse_earthquakes(geojson: Any) -> list[EarthquakeRecord]:
    """Parse a USGS GeoJSON FeatureCollection into EarthquakeRecords.

    Pure function: malformed features are skipped, the rest are returned
    in the order the server sent them.

    Args:
        geojson: Decoded GeoJSON FeatureCollection

    Returns:
        List of valid EarthquakeRecord objects (possibly empty)
    """
    if not isinstance(geojson, dict):
        return []

    features = geojson.get("features")
    if not isinstance(features, list):
        return []

    records = []
    for feature in features:
        record = parse_earthquake(feature)
        if record is None:
            logger.debug("Skipping malformed feature: %r", feature)
            continue
        records.append(record)

    return records
