# File: utils/dt_utils.py
"""Date and time utilities for Iman Tracker.

Pure Python date/time functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

⚠️ DIRECTIVE 1 - UTILS PURITY: NO `homeassistant.*` imports allowed.
   Uses standard library: datetime, zoneinfo, dateutil.

Functions:
    - dt_today_local: Get today's date in local timezone
    - dt_now_local: Get current datetime in local timezone
    - dt_now_utc: Get current datetime in UTC
    - as_local: Convert a datetime to local timezone
    - to_local_date: Normalize date/datetime inputs to a local calendar date
    - dt_parse_date: Parse date strings
    - calendar_day_diff: Whole calendar days between two dates
    - start_of_week: Monday of the ISO week containing a date
    - iso_week_key: ISO week identifier (YYYY-Www)
    - hours_between: Elapsed hours between two datetimes
"""

from __future__ import annotations

from datetime import UTC, date, datetime
import logging
from zoneinfo import ZoneInfo

# Third-party date utilities (no HA dependency)
from dateutil.relativedelta import MO, relativedelta

# Module-level logger (no HA dependency)
_LOGGER = logging.getLogger(__name__)

# Default timezone - can be overridden by caller
DEFAULT_TIME_ZONE: ZoneInfo = ZoneInfo("UTC")

# ISO week key format, matches the period keys used in storage
PERIOD_FORMAT_WEEKLY = "%G-W%V"


# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz: ZoneInfo) -> None:
    """Set the default timezone for all dt_utils functions.

    Call this during integration setup to configure the user's timezone.

    Args:
        tz: ZoneInfo object representing the default timezone
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = tz


# ==============================================================================
# Current Date/Time Functions
# ==============================================================================


def dt_today_local(tz: ZoneInfo | None = None) -> date:
    """Return today's date in local timezone as a `datetime.date`.

    Args:
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Today's date in the specified timezone.
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    return datetime.now(tz_info).date()


def dt_now_local(tz: ZoneInfo | None = None) -> datetime:
    """Return the current datetime in local timezone (timezone-aware)."""
    tz_info = tz or DEFAULT_TIME_ZONE
    return datetime.now(tz_info)


def dt_now_utc() -> datetime:
    """Return the current datetime in UTC (timezone-aware)."""
    return datetime.now(UTC)


# ==============================================================================
# Timezone Conversion
# ==============================================================================


def as_local(dt_obj: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Convert a datetime to local timezone.

    Args:
        dt_obj: Datetime object. Naive values are assumed to be UTC.
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Datetime in local timezone
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    if dt_obj.tzinfo is None:
        # Assume it's in UTC if naive
        dt_obj = dt_obj.replace(tzinfo=UTC)
    return dt_obj.astimezone(tz_info)


def to_local_date(value: date | datetime | None, tz: ZoneInfo | None = None) -> date:
    """Return the local calendar date for a date, datetime or None (today).

    Datetimes are converted to the local timezone first so that the device-local
    midnight defines the day boundary.
    """
    if value is None:
        return dt_today_local(tz)
    if isinstance(value, datetime):
        return as_local(value, tz).date()
    return value


# ==============================================================================
# Parsing
# ==============================================================================


def dt_parse_date(date_str: str | None) -> date | None:
    """Parse an ISO date string (YYYY-MM-DD) into a date.

    Full ISO datetimes are accepted; only their date part is kept. Invalid or
    empty input returns None.

    Example:
        dt_parse_date("2026-01-18") → datetime.date(2026, 1, 18)
    """
    if not date_str:
        return None

    try:
        return date.fromisoformat(date_str[:10])
    except (TypeError, ValueError):
        _LOGGER.debug("Could not parse date string '%s'", date_str)
        return None


# ==============================================================================
# Calendar Arithmetic
# ==============================================================================


def calendar_day_diff(today: date, other: date | str | None) -> int | None:
    """Return the number of calendar days from `other` to `today`.

    Args:
        today: Reference calendar date
        other: Earlier date (date or ISO string). None/unparseable → None.

    Returns:
        Whole days (positive when `other` is in the past, negative when it lies
        after `today`), or None when there is no usable date.

    Examples:
        calendar_day_diff(date(2026, 1, 3), "2026-01-02") → 1
        calendar_day_diff(date(2026, 1, 3), "2026-01-03") → 0
    """
    if other is None:
        return None
    other_date = dt_parse_date(other) if isinstance(other, str) else other
    if other_date is None:
        return None
    return (today - other_date).days


def start_of_week(day: date) -> date:
    """Return the Monday that starts the ISO week containing `day`."""
    return day + relativedelta(weekday=MO(-1))


def iso_week_key(day: date) -> str:
    """Return the ISO week key (YYYY-Www) for a date.

    Example:
        iso_week_key(date(2026, 1, 19)) → "2026-W04"
    """
    return day.strftime(PERIOD_FORMAT_WEEKLY)


def hours_between(earlier: datetime, later: datetime) -> float:
    """Return elapsed hours from `earlier` to `later` (negative if reversed).

    Naive datetimes are treated as UTC.
    """
    if earlier.tzinfo is None:
        earlier = earlier.replace(tzinfo=UTC)
    if later.tzinfo is None:
        later = later.replace(tzinfo=UTC)
    return (later - earlier).total_seconds() / 3600
