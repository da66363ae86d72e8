"""Tests for habit record builders.

Covers defaults for legacy records, validation errors, repair of stored
progress values, and conversion back to the stored record shape.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from habitpilot import const
from habitpilot.const import HabitFrequency, HabitType, Weekday
from habitpilot.data_builders import (
    HabitValidationError,
    build_progress_state,
    build_recurrence,
    serialize_progress_state,
    serialize_recurrence,
    validate_recurrence_data,
)
from habitpilot.models import HabitProgressState, HabitRecurrence

# =============================================================================
# TEST: RECURRENCE VALIDATION
# =============================================================================


class TestValidateRecurrenceData:
    """Business rule validation for recurrence fields."""

    def test_empty_record_is_valid(self) -> None:
        """Missing keys fall back to defaults and are not errors."""
        assert validate_recurrence_data({}) == {}

    def test_valid_record(self) -> None:
        """A complete, well-formed record passes."""
        data = {
            const.DATA_HABIT_SCHEDULED_DAYS: [2, 4, 6],
            const.DATA_HABIT_FREQUENCY: "Custom",
            const.DATA_HABIT_CUSTOM_FREQUENCY: 3,
            const.DATA_HABIT_TYPE: "Incremental",
            const.DATA_HABIT_DAILY_TARGET: 8,
        }

        assert validate_recurrence_data(data) == {}

    def test_collects_every_error(self) -> None:
        """All failing fields are reported at once."""
        data = {
            const.DATA_HABIT_SCHEDULED_DAYS: [0, 8],
            const.DATA_HABIT_FREQUENCY: "Hourly",
            const.DATA_HABIT_CUSTOM_FREQUENCY: 0,
            const.DATA_HABIT_TYPE: "Timed",
            const.DATA_HABIT_DAILY_TARGET: 0,
        }

        errors = validate_recurrence_data(data)

        assert errors == {
            const.DATA_HABIT_SCHEDULED_DAYS: const.ERROR_INVALID_SCHEDULED_DAYS,
            const.DATA_HABIT_FREQUENCY: const.ERROR_INVALID_FREQUENCY,
            const.DATA_HABIT_CUSTOM_FREQUENCY: const.ERROR_INVALID_CUSTOM_FREQUENCY,
            const.DATA_HABIT_TYPE: const.ERROR_INVALID_HABIT_TYPE,
            const.DATA_HABIT_DAILY_TARGET: const.ERROR_INVALID_DAILY_TARGET,
        }

    def test_boolean_target_rejected(self) -> None:
        """True is not an integer target."""
        errors = validate_recurrence_data({const.DATA_HABIT_DAILY_TARGET: True})

        assert errors == {
            const.DATA_HABIT_DAILY_TARGET: const.ERROR_INVALID_DAILY_TARGET
        }

    def test_null_custom_interval_is_valid(self) -> None:
        """A stored null custom interval means "no interval"."""
        assert validate_recurrence_data({const.DATA_HABIT_CUSTOM_FREQUENCY: None}) == {}


# =============================================================================
# TEST: BUILD_RECURRENCE
# =============================================================================


class TestBuildRecurrence:
    """Conversion of stored recurrence fields."""

    def test_defaults_for_legacy_record(self) -> None:
        """Records created before scheduling existed get the defaults."""
        recurrence = build_recurrence({})

        assert recurrence == HabitRecurrence()
        assert recurrence.scheduled_days == const.ALL_WEEKDAYS
        assert recurrence.frequency == HabitFrequency.DAILY
        assert recurrence.habit_type == HabitType.SIMPLE
        assert recurrence.daily_target == 1

    def test_full_record(self) -> None:
        """Stored raw values map onto enums."""
        recurrence = build_recurrence(
            {
                const.DATA_HABIT_SCHEDULED_DAYS: [1, 7],
                const.DATA_HABIT_FREQUENCY: "3x per Week",
                const.DATA_HABIT_TYPE: "Incremental",
                const.DATA_HABIT_DAILY_TARGET: 4,
            }
        )

        assert recurrence.scheduled_days == frozenset(
            {Weekday.SUNDAY, Weekday.SATURDAY}
        )
        assert recurrence.frequency == HabitFrequency.THREE_TIMES_PER_WEEK
        assert recurrence.is_incremental
        assert recurrence.daily_target == 4
        assert recurrence.custom_interval_days is None

    def test_invalid_record_raises(self) -> None:
        """Invalid values raise HabitValidationError naming the field."""
        with pytest.raises(HabitValidationError) as err:
            build_recurrence({const.DATA_HABIT_FREQUENCY: "Hourly"})

        assert err.value.field == const.DATA_HABIT_FREQUENCY
        assert err.value.error_key == const.ERROR_INVALID_FREQUENCY
        assert "frequency" in str(err.value)

    def test_round_trip_keeps_custom_interval(self) -> None:
        """Serialized recurrence rebuilds to the same value."""
        recurrence = HabitRecurrence(
            scheduled_days=frozenset({Weekday.MONDAY, Weekday.FRIDAY}),
            frequency=HabitFrequency.CUSTOM,
            custom_interval_days=5,
        )

        data = serialize_recurrence(recurrence)

        assert data[const.DATA_HABIT_SCHEDULED_DAYS] == [2, 6]
        assert data[const.DATA_HABIT_FREQUENCY] == "Custom"
        assert build_recurrence(data) == recurrence


# =============================================================================
# TEST: BUILD_PROGRESS_STATE
# =============================================================================


class TestBuildProgressState:
    """Conversion and repair of stored progress fields."""

    def test_defaults_for_new_habit(self) -> None:
        """An empty record is the zeroed initial state."""
        assert build_progress_state({}) == HabitProgressState()

    def test_parses_iso_timestamp(self) -> None:
        """lastCompletedDate is parsed into an aware datetime."""
        state = build_progress_state(
            {
                const.DATA_HABIT_STREAK: 6,
                const.DATA_HABIT_LAST_COMPLETED_DATE: "2026-01-13T20:15:00+00:00",
                const.DATA_HABIT_WAS_COMPLETED_TODAY: True,
            }
        )

        assert state.streak == 6
        assert state.last_completed_date == datetime(2026, 1, 13, 20, 15, tzinfo=UTC)
        assert state.was_completed_today is True

    def test_naive_timestamp_gets_default_timezone(self) -> None:
        """A naive stored timestamp is taken as local time."""
        state = build_progress_state(
            {const.DATA_HABIT_LAST_COMPLETED_DATE: "2026-01-13T20:15:00"}
        )

        assert state.last_completed_date is not None
        assert state.last_completed_date.tzinfo is not None

    def test_unparsable_timestamp_treated_as_absent(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Garbage timestamps do not break loading."""
        state = build_progress_state(
            {const.DATA_HABIT_LAST_COMPLETED_DATE: "yesterday-ish"}
        )

        assert state.last_completed_date is None
        assert const.ERROR_INVALID_LAST_COMPLETED_DATE in caplog.text

    def test_negative_streak_floored(self) -> None:
        """Stored negative streaks load as zero."""
        assert build_progress_state({const.DATA_HABIT_STREAK: -2}).streak == 0

    def test_progress_clamped_to_target(self) -> None:
        """todayProgress above the target is clamped when recurrence is known."""
        recurrence = HabitRecurrence(habit_type=HabitType.INCREMENTAL, daily_target=3)

        over = build_progress_state({const.DATA_HABIT_TODAY_PROGRESS: 9}, recurrence)
        under = build_progress_state({const.DATA_HABIT_TODAY_PROGRESS: -1}, recurrence)

        assert over.today_progress == 3
        assert under.today_progress == 0

    def test_null_streak_takes_default(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A stored null streak loads as zero and is logged."""
        state = build_progress_state({const.DATA_HABIT_STREAK: None})

        assert state.streak == const.DEFAULT_STREAK
        assert const.ERROR_INVALID_STREAK in caplog.text

    def test_non_numeric_streak_takes_default(self) -> None:
        """A non-numeric streak loads as zero."""
        state = build_progress_state({const.DATA_HABIT_STREAK: "abc"})

        assert state.streak == const.DEFAULT_STREAK

    def test_null_progress_takes_default(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A stored null todayProgress loads as zero, with or without recurrence."""
        recurrence = HabitRecurrence(habit_type=HabitType.INCREMENTAL, daily_target=3)

        bare = build_progress_state({const.DATA_HABIT_TODAY_PROGRESS: None})
        clamped = build_progress_state(
            {const.DATA_HABIT_TODAY_PROGRESS: None}, recurrence
        )

        assert bare.today_progress == const.DEFAULT_TODAY_PROGRESS
        assert clamped.today_progress == const.DEFAULT_TODAY_PROGRESS
        assert const.ERROR_INVALID_TODAY_PROGRESS in caplog.text

    def test_numeric_strings_are_accepted(self) -> None:
        """Integer strings from older records still load."""
        state = build_progress_state(
            {const.DATA_HABIT_STREAK: "7", const.DATA_HABIT_TODAY_PROGRESS: "2"}
        )

        assert state.streak == 7
        assert state.today_progress == 2

    def test_progress_floored_without_recurrence(self) -> None:
        """Without a recurrence only the lower bound applies."""
        state = build_progress_state({const.DATA_HABIT_TODAY_PROGRESS: -4})

        assert state.today_progress == 0

    def test_serialize(self) -> None:
        """Serialized state uses ISO timestamps and stored keys."""
        state = HabitProgressState(
            streak=3,
            last_completed_date=datetime(2026, 1, 14, 9, 30, tzinfo=UTC),
            was_completed_today=True,
            today_progress=2,
        )

        data = serialize_progress_state(state)

        assert data == {
            const.DATA_HABIT_STREAK: 3,
            const.DATA_HABIT_LAST_COMPLETED_DATE: "2026-01-14T09:30:00+00:00",
            const.DATA_HABIT_WAS_COMPLETED_TODAY: True,
            const.DATA_HABIT_TODAY_PROGRESS: 2,
        }
        assert build_progress_state(data) == state

    def test_serialize_without_completion(self) -> None:
        """Absent completion date is stored as null."""
        data = serialize_progress_state(HabitProgressState())

        assert data[const.DATA_HABIT_LAST_COMPLETED_DATE] is None
