"""
Date and Time utilities

This module handles parsing of the schedule's start timestamps and clock durations.
Centralizes all date parsing logic to maintain consistency across the application.
"""
from datetime import datetime, timedelta, timezone
import logging
import re

logger = logging.getLogger(__name__)

# date, 'T'/'t'/space, time with seconds, optional fraction, mandatory offset
_RFC3339_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)

_CLOCK_FORMAT = "%H:%M:%S"
_MIDNIGHT = datetime(1900, 1, 1)


class DateFormatError(ValueError):
    """Raised when date format is invalid"""
    pass


def _normalize_rfc3339_string(date_str: str) -> str:
    """Normalize RFC3339 string by replacing a trailing 'Z' with '+00:00'

    Args:
        date_str: RFC3339 datetime string

    Returns:
        Normalized string with explicit timezone offset
    """
    if date_str[-1:] in ("Z", "z"):
        return date_str[:-1] + "+00:00"
    return date_str


def parse_rfc3339_to_utc(date_str: str) -> datetime:
    """
    Parse RFC3339 date string and convert to UTC datetime

    This is the single source of truth for start time parsing across the application.
    Unlike plain ISO8601, an explicit offset is mandatory.

    Args:
        date_str: RFC3339 datetime string (e.g., '2025-01-05T16:30:00Z' or '2025-01-05T11:30:00-05:00')

    Returns:
        Timezone-aware datetime in UTC

    Raises:
        DateFormatError: If the date string format is invalid
    """
    if not isinstance(date_str, str) or not _RFC3339_PATTERN.match(date_str.strip()):
        raise DateFormatError(f"Invalid RFC3339 datetime format: '{date_str}'")

    try:
        dt = datetime.fromisoformat(_normalize_rfc3339_string(date_str.strip()))
        return dt.astimezone(timezone.utc)
    except (ValueError, OverflowError) as e:
        raise DateFormatError(f"Invalid RFC3339 datetime format: '{date_str}'") from e


def parse_clock_duration(value: str) -> timedelta | None:
    """
    Parse an 'H:MM:SS' clock reading into the time elapsed since midnight

    Durations on the schedule are written as wall-clock times, so anything
    that is not a valid time of day (e.g. '25:00:00', '', 'TBD') yields None.

    Args:
        value: Clock text such as '0:45:00' or '01:30:15'

    Returns:
        Elapsed time since midnight, or None if the text is not a clock time
    """
    try:
        parsed = datetime.strptime(value.strip(), _CLOCK_FORMAT)
    except (ValueError, AttributeError):
        return None
    return parsed - _MIDNIGHT
