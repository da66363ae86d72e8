# File: utils/dt_utils.py
"""Date and time utilities for HabitPilot.

Pure Python date/time functions. Every "calendar day" question the engines
ask is answered here, in the configured local timezone.

Uses standard library: datetime, zoneinfo, plus dateutil for day arithmetic.

Functions:
    - set_default_timezone / get_default_timezone: Configure the local timezone
    - as_utc / as_local: Timezone conversion (naive input treated as local)
    - start_of_local_day: Midnight of the local day containing a datetime
    - local_date: Local calendar date of a datetime
    - is_same_local_day: Whether two datetimes fall on the same local day
    - days_between: Calendar-day difference between two datetimes
    - local_weekday: Weekday (Sunday = 1) of a datetime in local time
    - dt_add_days: Add whole calendar days, keeping wall-clock time
    - dt_parse_date: Parse date strings
    - dt_parse: Normalize datetime inputs
    - dt_format: Format datetime to various output types
"""

from __future__ import annotations

from datetime import UTC, date, datetime
import logging
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

from ..const import Weekday

if TYPE_CHECKING:
    from datetime import tzinfo

# Module-level logger
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants
# ==============================================================================

# Default timezone - can be overridden by caller
DEFAULT_TIME_ZONE: ZoneInfo = ZoneInfo("UTC")

# Return type constants
HELPER_RETURN_DATETIME = "datetime"
HELPER_RETURN_DATETIME_UTC = "datetime_utc"
HELPER_RETURN_DATETIME_LOCAL = "datetime_local"
HELPER_RETURN_DATE = "date"
HELPER_RETURN_ISO_DATETIME = "iso_datetime"
HELPER_RETURN_ISO_DATE = "iso_date"


# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz: ZoneInfo) -> None:
    """Set the default timezone for all dt_utils functions.

    Call this once at application start with the device/user timezone. It
    decides where one calendar day ends and the next begins.

    Args:
        tz: ZoneInfo object representing the default timezone
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = tz


def get_default_timezone() -> ZoneInfo:
    """Get the current default timezone."""
    return DEFAULT_TIME_ZONE


# ==============================================================================
# Timezone Conversion
# ==============================================================================


def as_utc(dt_obj: datetime) -> datetime:
    """Convert a datetime to UTC timezone.

    Naive datetimes are assumed to be in the default timezone.
    """
    if dt_obj.tzinfo is None:
        dt_obj = dt_obj.replace(tzinfo=DEFAULT_TIME_ZONE)
    return dt_obj.astimezone(UTC)


def as_local(dt_obj: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Convert a datetime to local timezone.

    Args:
        dt_obj: Datetime object. Naive values are taken as already local.
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Datetime in local timezone
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    if dt_obj.tzinfo is None:
        return dt_obj.replace(tzinfo=tz_info)
    return dt_obj.astimezone(tz_info)


def start_of_local_day(dt_obj: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Get the start of day (00:00:00) for a datetime in local timezone.

    Args:
        dt_obj: Datetime object (can be in any timezone)
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Datetime at 00:00:00 in local timezone (timezone-aware)
    """
    local_dt = as_local(dt_obj, tz)
    return local_dt.replace(hour=0, minute=0, second=0, microsecond=0)


# ==============================================================================
# Calendar Day Arithmetic
# ==============================================================================


def local_date(dt_obj: datetime, tz: ZoneInfo | None = None) -> date:
    """Return the local calendar date of a datetime."""
    return as_local(dt_obj, tz).date()


def is_same_local_day(
    first: datetime, second: datetime, tz: ZoneInfo | None = None
) -> bool:
    """Return True if both datetimes fall on the same local calendar day."""
    return local_date(first, tz) == local_date(second, tz)


def days_between(
    earlier: datetime, later: datetime, tz: ZoneInfo | None = None
) -> int:
    """Count calendar days from ``earlier`` to ``later`` in local time.

    Time of day is ignored: 23:59 on Monday to 00:01 on Tuesday is one day.
    The result is negative when ``later`` falls on an earlier day.

    Example:
        days_between(datetime(2026, 1, 1, 22), datetime(2026, 1, 3, 6)) → 2
    """
    return (local_date(later, tz) - local_date(earlier, tz)).days


def local_weekday(dt_obj: datetime, tz: ZoneInfo | None = None) -> Weekday:
    """Return the local weekday of a datetime using Sunday = 1 numbering."""
    # isoweekday: Monday = 1 ... Sunday = 7
    return Weekday(as_local(dt_obj, tz).isoweekday() % 7 + 1)


def dt_add_days(dt_obj: datetime, days: int) -> datetime:
    """Add whole calendar days to a datetime, keeping its wall-clock time."""
    return dt_obj + relativedelta(days=days)


# ==============================================================================
# Date/Time Parsing
# ==============================================================================


def dt_parse_date(date_str: str | None) -> date | None:
    """Safely parse a date string into a `datetime.date`.

    Accepts formats:
    - "2025-04-07" (ISO format)
    - "04/07/2025" (US format)
    - "2025/04/07"

    Returns:
        datetime.date or None if parsing fails.
    """
    if not date_str or not isinstance(date_str, str):
        return None

    try:
        return date.fromisoformat(date_str)
    except ValueError:
        pass

    for fmt in ("%m/%d/%Y", "%Y/%m/%d"):
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue

    return None


def dt_parse(
    dt_input: str | date | datetime | None,
    default_tzinfo: tzinfo | None = None,
    return_type: str | None = HELPER_RETURN_DATETIME,
) -> datetime | date | str | None:
    """Normalize various datetime input formats to a consistent format.

    Args:
        dt_input: String, date or datetime to normalize, or None
        default_tzinfo: Timezone to use if the input is naive
                        (defaults to DEFAULT_TIME_ZONE if None)
        return_type: One of the HELPER_RETURN_* constants

    Returns:
        Normalized datetime, date, or string based on return_type, or None if
        the input could not be parsed.

    Example:
        >>> dt_parse("2025-04-15T08:00:00+00:00", return_type=HELPER_RETURN_DATE)
        datetime.date(2025, 4, 15)
    """
    if not dt_input:
        return None

    tz_info = default_tzinfo or DEFAULT_TIME_ZONE
    result: datetime | None = None

    if isinstance(dt_input, str):
        try:
            result = datetime.fromisoformat(dt_input)
        except ValueError:
            parsed_date = dt_parse_date(dt_input)
            if parsed_date:
                result = datetime.combine(parsed_date, datetime.min.time())
            else:
                _LOGGER.debug("dt_parse: Could not parse %r", dt_input)
                return None

    elif isinstance(dt_input, datetime):
        result = dt_input

    elif isinstance(dt_input, date):
        result = datetime.combine(dt_input, datetime.min.time())

    else:
        return None

    if result.tzinfo is None:
        result = result.replace(tzinfo=tz_info)

    return dt_format(result, return_type)


# ==============================================================================
# Date/Time Formatting
# ==============================================================================


def dt_format(
    dt_obj: datetime,
    return_type: str | None = HELPER_RETURN_DATETIME,
) -> datetime | date | str:
    """Format a datetime object according to the specified return_type.

    Args:
        dt_obj: The datetime object to format
        return_type: The desired return format:
            - HELPER_RETURN_DATETIME: returns the datetime object unchanged
            - HELPER_RETURN_DATETIME_UTC: returns in UTC timezone
            - HELPER_RETURN_DATETIME_LOCAL: returns in local timezone
            - HELPER_RETURN_DATE: returns the local date as a date object
            - HELPER_RETURN_ISO_DATETIME: returns an ISO-formatted datetime string
            - HELPER_RETURN_ISO_DATE: returns an ISO-formatted local date string

    Returns:
        The formatted date/time value
    """
    if return_type == HELPER_RETURN_DATETIME_UTC:
        return as_utc(dt_obj)
    if return_type == HELPER_RETURN_DATETIME_LOCAL:
        return as_local(dt_obj)
    if return_type == HELPER_RETURN_DATE:
        return local_date(dt_obj)
    if return_type == HELPER_RETURN_ISO_DATETIME:
        return dt_obj.isoformat()
    if return_type == HELPER_RETURN_ISO_DATE:
        return local_date(dt_obj).isoformat()
    return dt_obj
