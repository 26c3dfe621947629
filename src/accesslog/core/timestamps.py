"""
Timestamp handling for access logs.

CLF timestamps use a fixed grammar that predates ISO 8601:

    dd/MMM/yyyy:HH:mm:ss ±HHMM      e.g. 10/Oct/2000:13:55:36 -0700

They are parsed with a dedicated matcher and an English month table rather
than strptime's %b, which follows the process locale.
"""

import re
from datetime import datetime, timedelta, timezone

from dateutil import parser as dateutil_parser

from accesslog.core.exceptions import InvalidTimestampError

__all__ = [
    "MONTHS",
    "parse_clf_timestamp",
    "format_instant",
    "parse_instant",
]


MONTHS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

CLF_TIMESTAMP = re.compile(
    r"(?P<day>\d{2})/"
    r"(?P<month>[A-Za-z]{3})/"
    r"(?P<year>\d{4}):"
    r"(?P<hour>\d{2}):"
    r"(?P<minute>\d{2}):"
    r"(?P<second>\d{2}) "
    r"(?P<sign>[+-])(?P<off_hours>\d{2})(?P<off_minutes>\d{2})",
    re.ASCII,
)


def parse_clf_timestamp(value: str) -> datetime:
    """
    Parse a bracketed CLF timestamp (without the brackets) into a UTC instant.

    The UTC offset is mandatory. The returned datetime is timezone-aware,
    in UTC, with millisecond precision (always .000 for CLF input).

    Args:
        value: Timestamp text, e.g. "10/Oct/2000:13:55:36 -0700"

    Returns:
        Aware datetime in UTC

    Raises:
        InvalidTimestampError: If the text does not match the grammar or
            names an impossible date, time or offset
    """
    match = CLF_TIMESTAMP.fullmatch(value)
    if not match:
        raise InvalidTimestampError(
            "Timestamp does not match 'dd/MMM/yyyy:HH:mm:ss +HHMM'", value
        )

    d = match.groupdict()

    month = MONTHS.get(d["month"].lower())
    if month is None:
        raise InvalidTimestampError(
            f"Unknown month abbreviation '{d['month']}'", value
        )

    off_hours = int(d["off_hours"])
    off_minutes = int(d["off_minutes"])
    if off_hours > 23 or off_minutes > 59:
        raise InvalidTimestampError(
            f"UTC offset out of range: {d['sign']}{d['off_hours']}{d['off_minutes']}",
            value,
        )
    offset = timedelta(hours=off_hours, minutes=off_minutes)
    if d["sign"] == "-":
        offset = -offset

    try:
        local = datetime(
            int(d["year"]),
            month,
            int(d["day"]),
            int(d["hour"]),
            int(d["minute"]),
            int(d["second"]),
            tzinfo=timezone(offset),
        )
        return local.astimezone(timezone.utc)
    except (ValueError, OverflowError) as e:
        raise InvalidTimestampError(f"Invalid date or time: {e}", value) from e


def format_instant(instant: datetime) -> str:
    """
    Render a UTC instant as ISO 8601 with milliseconds and a Z suffix.

    Example: 2000-10-10T20:55:36.000Z
    """
    utc = instant.astimezone(timezone.utc)
    return (
        f"{utc.year:04d}-{utc.month:02d}-{utc.day:02d}"
        f"T{utc.hour:02d}:{utc.minute:02d}:{utc.second:02d}"
        f".{utc.microsecond // 1000:03d}Z"
    )


def parse_instant(value: str) -> datetime:
    """
    Parse an ISO 8601 instant (as written by format_instant) back into UTC.

    Sub-millisecond digits are truncated. Values without an explicit
    offset are rejected since they do not name an instant.
    """
    try:
        parsed = dateutil_parser.isoparse(value)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Invalid ISO 8601 instant: {value!r}") from e

    if parsed.tzinfo is None:
        raise ValueError(f"Instant has no UTC offset: {value!r}")

    parsed = parsed.astimezone(timezone.utc)
    return parsed.replace(microsecond=parsed.microsecond // 1000 * 1000)
