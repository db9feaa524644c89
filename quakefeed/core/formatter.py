"""Row formatting - Pure functions.

This module turns EarthquakeRecords into display-ready row view-models.
All functions are pure with no side effects; the rendering layer decides
how the rows are drawn.
"""

import math
from dataclasses import dataclass
from datetime import tzinfo
from enum import Enum

from quakefeed.core.earthquake import EarthquakeRecord


LOCATION_SEPARATOR = " of "

# Offset shown when the place has no "<distance> of" prefix
NEAR_THE = "Near the"


class MagnitudeBucket(Enum):
    """Color tier for a magnitude badge, keyed by floor(magnitude)."""
    MAGNITUDE_1 = 1
    MAGNITUDE_2 = 2
    MAGNITUDE_3 = 3
    MAGNITUDE_4 = 4
    MAGNITUDE_5 = 5
    MAGNITUDE_6 = 6
    MAGNITUDE_7 = 7
    MAGNITUDE_8 = 8
    MAGNITUDE_9 = 9
    MAGNITUDE_10_PLUS = 10


MAGNITUDE_COLORS: dict[MagnitudeBucket, str] = {
    MagnitudeBucket.MAGNITUDE_1: "#4A7BA7",
    MagnitudeBucket.MAGNITUDE_2: "#04B4B3",
    MagnitudeBucket.MAGNITUDE_3: "#10CAC9",
    MagnitudeBucket.MAGNITUDE_4: "#F5A623",
    MagnitudeBucket.MAGNITUDE_5: "#FF7D50",
    MagnitudeBucket.MAGNITUDE_6: "#FC6644",
    MagnitudeBucket.MAGNITUDE_7: "#E75F40",
    MagnitudeBucket.MAGNITUDE_8: "#E13A20",
    MagnitudeBucket.MAGNITUDE_9: "#D93218",
    MagnitudeBucket.MAGNITUDE_10_PLUS: "#C03823",
}


@dataclass(frozen=True)
class EarthquakeRow:
    """Display-ready view-model for one list row.

    Attributes:
        magnitude: Magnitude with one fractional digit (e.g. "6.7")
        magnitude_bucket: Color tier of the magnitude badge
        magnitude_color: Hex color of the badge
        primary_location: Place name (e.g. "Springfield")
        location_offset: Distance/direction prefix (e.g. "5km NW of ")
        date: Event date (e.g. "Mar 05, 2024")
        time: Event time of day (e.g. "2:45 PM")
        url: USGS event detail page opened on selection
    """
    magnitude: str
    magnitude_bucket: MagnitudeBucket
    magnitude_color: str
    primary_location: str
    location_offset: str
    date: str
    time: str
    url: str

    def to_dict(self) -> dict[str, str]:
        return {
            "magnitude": self.magnitude,
            "magnitude_bucket": self.magnitude_bucket.name.lower(),
            "magnitude_color": self.magnitude_color,
            "primary_location": self.primary_location,
            "location_offset": self.location_offset,
            "date": self.date,
            "time": self.time,
            "url": self.url,
        }


def format_magnitude(magnitude: float) -> str:
    """Render a magnitude with exactly one fractional digit.

    Pure function.

    Raises:
        ValueError: If magnitude is NaN or infinite
    """
    if not math.isfinite(magnitude):
        raise ValueError(f"Magnitude must be finite: {magnitude}")
    text = f"{magnitude:.1f}"
    if text == "-0.0":
        return "0.0"
    return text


def get_magnitude_bucket(magnitude: float) -> MagnitudeBucket:
    """Map a magnitude to its color tier.

    Pure function. Anything below 2 is tier 1 (negatives included),
    anything from 10 up is tier 10+.
    """
    if magnitude < 2:
        return MagnitudeBucket.MAGNITUDE_1
    if magnitude >= 10:
        return MagnitudeBucket.MAGNITUDE_10_PLUS
    return MagnitudeBucket(math.floor(magnitude))


def get_magnitude_color(magnitude: float) -> str:
    """Get the hex badge color for a magnitude.

    Pure function.
    """
    return MAGNITUDE_COLORS[get_magnitude_bucket(magnitude)]


def split_location(location: str) -> tuple[str, str]:
    """Split a USGS place string into (offset, primary).

    Pure function. Splits at the first " of " only, so the primary part
    may still contain the separator:

        "10km S of Town of Lake" -> ("10km S of ", "Town of Lake")
        "Springfield"            -> ("Near the", "Springfield")
    """
    if LOCATION_SEPARATOR in location:
        prefix, _, primary = location.partition(LOCATION_SEPARATOR)
        return prefix + LOCATION_SEPARATOR, primary
    return NEAR_THE, location


def format_date(record: EarthquakeRecord, tz: tzinfo | None = None) -> str:
    """Format the event date, e.g. "Mar 05, 2024".

    Args:
        record: Earthquake record
        tz: Display timezone; None means the local zone
    """
    return record.time.astimezone(tz).strftime("%b %d, %Y")


def format_time(record: EarthquakeRecord, tz: tzinfo | None = None) -> str:
    """Format the event time on a 12-hour clock, e.g. "2:45 PM".

    Args:
        record: Earthquake record
        tz: Display timezone; None means the local zone
    """
    return record.time.astimezone(tz).strftime("%I:%M %p").lstrip("0")


def to_row(record: EarthquakeRecord, tz: tzinfo | None = None) -> EarthquakeRow:
    """Build the row view-model for a record.

    Pure function.

    Args:
        record: Earthquake record
        tz: Display timezone; None means the local zone

    Returns:
        EarthquakeRow ready for rendering
    """
    offset, primary = split_location(record.location)
    bucket = get_magnitude_bucket(record.magnitude)

    return EarthquakeRow(
        magnitude=format_magnitude(record.magnitude),
        magnitude_bucket=bucket,
        magnitude_color=MAGNITUDE_COLORS[bucket],
        primary_location=primary,
        location_offset=offset,
        date=format_date(record, tz),
        time=format_time(record, tz),
        url=record.url,
    )


def to_rows(
    records: list[EarthquakeRecord],
    tz: tzinfo | None = None,
) -> list[EarthquakeRow]:
    """Build row view-models for records, preserving order."""
    return [to_row(record, tz) for record in records]


def format_row_line(row: EarthquakeRow) -> str:
    """Format a row as a single line of plain text."""
    place = f"{row.location_offset.strip()} {row.primary_location}"
    return f"{row.magnitude:>4}  {place}  {row.date} {row.time}"
