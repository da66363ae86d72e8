"""Tests for dt_utils calendar-day helpers and parsing edge cases."""

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from habitpilot.const import Weekday
from habitpilot.utils import dt_utils
from habitpilot.utils.dt_utils import (
    HELPER_RETURN_DATE,
    HELPER_RETURN_DATETIME_UTC,
    HELPER_RETURN_ISO_DATE,
    HELPER_RETURN_ISO_DATETIME,
    as_local,
    as_utc,
    days_between,
    dt_add_days,
    dt_parse,
    dt_parse_date,
    is_same_local_day,
    local_date,
    local_weekday,
    start_of_local_day,
)


class TestTimezoneConfiguration:
    """Default timezone handling."""

    def test_set_and_get(self) -> None:
        """The configured timezone is returned."""
        tz = ZoneInfo("Europe/Berlin")
        dt_utils.set_default_timezone(tz)

        assert dt_utils.get_default_timezone() is tz

    def test_naive_values_are_local(self) -> None:
        """Naive datetimes are interpreted in the default timezone."""
        dt_utils.set_default_timezone(ZoneInfo("Europe/Berlin"))
        naive = datetime(2026, 1, 14, 10, 0)

        assert as_utc(naive) == datetime(2026, 1, 14, 9, 0, tzinfo=UTC)
        assert as_local(naive).hour == 10

    def test_start_of_local_day(self) -> None:
        """Midnight of the local day containing the instant."""
        tz = ZoneInfo("America/Los_Angeles")
        dt_utils.set_default_timezone(tz)
        # 2026-01-14 05:00 UTC is 2026-01-13 21:00 in Los Angeles
        result = start_of_local_day(datetime(2026, 1, 14, 5, 0, tzinfo=UTC))

        assert result == datetime(2026, 1, 13, 0, 0, tzinfo=tz)


class TestCalendarDays:
    """Local calendar-day arithmetic."""

    def test_days_between_ignores_time_of_day(self) -> None:
        """22:00 to 06:00 two days later is 2 calendar days."""
        earlier = datetime(2026, 1, 1, 22, tzinfo=UTC)
        later = datetime(2026, 1, 3, 6, tzinfo=UTC)

        assert days_between(earlier, later) == 2

    def test_days_between_negative(self) -> None:
        """Reversed arguments give a negative result."""
        earlier = datetime(2026, 1, 5, tzinfo=UTC)
        later = datetime(2026, 1, 3, tzinfo=UTC)

        assert days_between(earlier, later) == -2

    def test_same_local_day_depends_on_timezone(self) -> None:
        """Two UTC instants on one UTC day can span two local days."""
        first = datetime(2026, 1, 14, 1, tzinfo=UTC)
        second = datetime(2026, 1, 14, 12, tzinfo=UTC)

        assert is_same_local_day(first, second)

        dt_utils.set_default_timezone(ZoneInfo("America/New_York"))
        assert not is_same_local_day(first, second)

    def test_local_date_with_override(self) -> None:
        """An explicit tz overrides the default."""
        moment = datetime(2026, 1, 14, 20, tzinfo=UTC)

        assert local_date(moment, ZoneInfo("Asia/Tokyo")) == date(2026, 1, 15)

    def test_local_weekday_sunday_first(self) -> None:
        """Sunday is 1 and Saturday is 7."""
        assert local_weekday(datetime(2026, 1, 18, tzinfo=UTC)) == Weekday.SUNDAY
        assert local_weekday(datetime(2026, 1, 17, tzinfo=UTC)) == Weekday.SATURDAY
        assert local_weekday(datetime(2026, 1, 14, tzinfo=UTC)) == Weekday.WEDNESDAY

    def test_dt_add_days_keeps_wall_clock_across_dst(self) -> None:
        """Adding a day across a DST change keeps local time of day."""
        tz = ZoneInfo("America/New_York")
        before = datetime(2026, 3, 7, 9, 0, tzinfo=tz)

        result = dt_add_days(before, 1)

        assert result.hour == 9
        assert result.day == 8


class TestParsing:
    """Parsing and formatting of stored values."""

    def test_dt_parse_date_formats(self) -> None:
        """ISO, US and slash-ISO formats are accepted."""
        assert dt_parse_date("2026-01-14") == date(2026, 1, 14)
        assert dt_parse_date("01/14/2026") == date(2026, 1, 14)
        assert dt_parse_date("2026/01/14") == date(2026, 1, 14)
        assert dt_parse_date("not-a-date") is None
        assert dt_parse_date(None) is None

    def test_dt_parse_invalid_inputs(self) -> None:
        """Empty and malformed inputs return None."""
        assert dt_parse("") is None
        assert dt_parse(None) is None
        assert dt_parse("2025-13-45") is None

    def test_dt_parse_return_types(self) -> None:
        """Each HELPER_RETURN_* yields its format."""
        raw = "2026-01-14T14:30:00-05:00"

        assert dt_parse(raw, return_type=HELPER_RETURN_DATETIME_UTC) == datetime(
            2026, 1, 14, 19, 30, tzinfo=UTC
        )
        assert dt_parse(raw, return_type=HELPER_RETURN_ISO_DATETIME) == raw
        assert dt_parse(raw, return_type=HELPER_RETURN_DATE) == date(2026, 1, 14)
        assert dt_parse(raw, return_type=HELPER_RETURN_ISO_DATE) == "2026-01-14"

    def test_dt_parse_date_object(self) -> None:
        """A date becomes local midnight."""
        result = dt_parse(date(2026, 1, 14))

        assert result == datetime(2026, 1, 14, 0, 0, tzinfo=ZoneInfo("UTC"))
