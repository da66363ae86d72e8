"""Habit record builders.

This module is the SINGLE SOURCE OF TRUTH for:
- Habit field defaults
- Recurrence validation
- Conversion between stored records (DATA_* keys, ISO timestamps) and the
  engine's frozen value types

### Build Functions
`build_recurrence()` and `build_progress_state()` take a stored record (any
missing key falls back to its const.DEFAULT_*) and return the value type the
engines expect. `build_recurrence()` raises HabitValidationError for values
the engines cannot evaluate.

### Validation Functions
`validate_recurrence_data()` returns a dict of errors (empty if valid) so a
form can highlight every bad field at once.

### Serialize Functions
`serialize_recurrence()` and `serialize_progress_state()` return plain dicts
ready for the persistence layer.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, cast

from . import const
from .const import HabitFrequency, HabitType, Weekday
from .models import HabitProgressState, HabitRecurrence
from .type_defs import HabitProgressData, HabitRecurrenceData
from .utils.dt_utils import HELPER_RETURN_DATETIME, dt_parse
from .utils.math_utils import clamp_int

# ==============================================================================
# HELPER FUNCTIONS FOR FIELD NORMALIZATION
# ==============================================================================


def _normalize_list_field(value: Any) -> list[Any]:
    """Normalize a field that should be a list.

    - Already a list → return as-is
    - None → return empty list
    - Other iterables → return as list
    """
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        return [value] if value else []
    return list(value)


def _is_int(value: Any) -> bool:
    """Return True for real integers (bool excluded)."""
    return isinstance(value, int) and not isinstance(value, bool)


def _coerce_stored_int(
    data: HabitProgressData | dict[str, Any],
    key: str,
    default: int,
    error_key: str,
) -> int:
    """Read an integer field from a stored record, falling back to default.

    A missing key is silent. A null or non-numeric value is logged at
    WARNING with ``error_key`` and replaced by ``default``.
    """
    if key not in data:
        return default
    value = data[key]
    try:
        return int(value)
    except (TypeError, ValueError):
        const.LOGGER.warning(
            "Ignoring invalid %s value %r (%s), using %d",
            key,
            value,
            error_key,
            default,
        )
        return default


# ==============================================================================
# EXCEPTIONS
# ==============================================================================


class HabitValidationError(Exception):
    """Validation error with field-specific information.

    Attributes:
        field: The DATA_HABIT_* key that failed validation
        error_key: The ERROR_* constant describing the failure
    """

    def __init__(self, field: str, error_key: str) -> None:
        """Initialize HabitValidationError.

        Args:
            field: The DATA_HABIT_* key that failed validation
            error_key: The ERROR_* constant describing the failure
        """
        self.field = field
        self.error_key = error_key
        super().__init__(f"{field}: {error_key}")


# ==============================================================================
# RECURRENCE
# ==============================================================================


def validate_recurrence_data(
    data: HabitRecurrenceData | dict[str, Any],
) -> dict[str, str]:
    """Validate recurrence business rules.

    Args:
        data: Recurrence data with DATA_HABIT_* keys (missing keys are valid)

    Returns:
        Dict of errors: {data_key: error_key}
        Empty dict means validation passed.

    Validation Rules:
        1. Frequency is a known HabitFrequency value
        2. Habit type is a known HabitType value
        3. Daily target is an integer >= 1
        4. Scheduled days are integers 1-7
        5. Custom interval, when given, is an integer >= 1
    """
    errors: dict[str, str] = {}

    # === 1. Frequency ===
    if const.DATA_HABIT_FREQUENCY in data:
        try:
            HabitFrequency(data[const.DATA_HABIT_FREQUENCY])
        except ValueError:
            errors[const.DATA_HABIT_FREQUENCY] = const.ERROR_INVALID_FREQUENCY

    # === 2. Habit type ===
    if const.DATA_HABIT_TYPE in data:
        try:
            HabitType(data[const.DATA_HABIT_TYPE])
        except ValueError:
            errors[const.DATA_HABIT_TYPE] = const.ERROR_INVALID_HABIT_TYPE

    # === 3. Daily target ===
    if const.DATA_HABIT_DAILY_TARGET in data:
        target = data[const.DATA_HABIT_DAILY_TARGET]
        if not _is_int(target) or target < 1:
            errors[const.DATA_HABIT_DAILY_TARGET] = const.ERROR_INVALID_DAILY_TARGET

    # === 4. Scheduled days ===
    if const.DATA_HABIT_SCHEDULED_DAYS in data:
        days = _normalize_list_field(data[const.DATA_HABIT_SCHEDULED_DAYS])
        if any(not _is_int(day) or not 1 <= day <= 7 for day in days):
            errors[const.DATA_HABIT_SCHEDULED_DAYS] = (
                const.ERROR_INVALID_SCHEDULED_DAYS
            )

    # === 5. Custom interval ===
    interval = data.get(const.DATA_HABIT_CUSTOM_FREQUENCY)
    if interval is not None and (not _is_int(interval) or interval < 1):
        errors[const.DATA_HABIT_CUSTOM_FREQUENCY] = const.ERROR_INVALID_CUSTOM_FREQUENCY

    return errors


def build_recurrence(data: HabitRecurrenceData | dict[str, Any]) -> HabitRecurrence:
    """Build a HabitRecurrence from a stored record.

    Missing keys take their defaults: all weekdays, daily, simple, target 1.

    Raises:
        HabitValidationError: For the first field that fails validation

    Examples:
        build_recurrence({}) → daily simple habit on every weekday
        build_recurrence({"frequency": "Custom", "customFrequency": 5})
    """
    errors = validate_recurrence_data(data)
    if errors:
        field, error_key = next(iter(errors.items()))
        raise HabitValidationError(field=field, error_key=error_key)

    if const.DATA_HABIT_SCHEDULED_DAYS in data:
        scheduled_days = frozenset(
            Weekday(day)
            for day in _normalize_list_field(data[const.DATA_HABIT_SCHEDULED_DAYS])
        )
    else:
        scheduled_days = const.ALL_WEEKDAYS

    return HabitRecurrence(
        scheduled_days=scheduled_days,
        frequency=HabitFrequency(
            data.get(const.DATA_HABIT_FREQUENCY, const.DEFAULT_HABIT_FREQUENCY)
        ),
        custom_interval_days=data.get(const.DATA_HABIT_CUSTOM_FREQUENCY),
        habit_type=HabitType(data.get(const.DATA_HABIT_TYPE, const.DEFAULT_HABIT_TYPE)),
        daily_target=data.get(
            const.DATA_HABIT_DAILY_TARGET, const.DEFAULT_DAILY_TARGET
        ),
    )


def serialize_recurrence(recurrence: HabitRecurrence) -> HabitRecurrenceData:
    """Convert a HabitRecurrence back to its stored record shape."""
    return HabitRecurrenceData(
        scheduledDays=sorted(int(day) for day in recurrence.scheduled_days),
        frequency=str(recurrence.frequency),
        customFrequency=recurrence.custom_interval_days,
        type=str(recurrence.habit_type),
        dailyTarget=recurrence.daily_target,
    )


# ==============================================================================
# PROGRESS
# ==============================================================================


def build_progress_state(
    data: HabitProgressData | dict[str, Any],
    recurrence: HabitRecurrence | None = None,
) -> HabitProgressState:
    """Build a HabitProgressState from a stored record.

    Stored values are repaired rather than rejected, since they come from
    earlier app versions and the sync backend:
    - a null or non-numeric streak or todayProgress takes its default
    - streak is floored at 0
    - todayProgress is clamped into [0, dailyTarget] when a recurrence is given
    - an unparsable lastCompletedDate is treated as absent

    Args:
        data: Progress data with DATA_HABIT_* keys
        recurrence: Habit configuration, used to clamp todayProgress

    Returns:
        HabitProgressState ready for the engines
    """
    streak = _coerce_stored_int(
        data,
        const.DATA_HABIT_STREAK,
        const.DEFAULT_STREAK,
        const.ERROR_INVALID_STREAK,
    )
    streak = max(0, streak)

    today_progress = _coerce_stored_int(
        data,
        const.DATA_HABIT_TODAY_PROGRESS,
        const.DEFAULT_TODAY_PROGRESS,
        const.ERROR_INVALID_TODAY_PROGRESS,
    )
    if recurrence is not None:
        today_progress = clamp_int(today_progress, 0, recurrence.daily_target)
    else:
        today_progress = max(0, today_progress)

    raw_last = data.get(const.DATA_HABIT_LAST_COMPLETED_DATE)
    last_completed = cast(
        "datetime | None", dt_parse(raw_last, return_type=HELPER_RETURN_DATETIME)
    )
    if raw_last and last_completed is None:
        const.LOGGER.warning(
            "Ignoring unparsable %s value %r (%s)",
            const.DATA_HABIT_LAST_COMPLETED_DATE,
            raw_last,
            const.ERROR_INVALID_LAST_COMPLETED_DATE,
        )

    return HabitProgressState(
        streak=streak,
        last_completed_date=last_completed,
        was_completed_today=bool(
            data.get(
                const.DATA_HABIT_WAS_COMPLETED_TODAY,
                const.DEFAULT_WAS_COMPLETED_TODAY,
            )
        ),
        today_progress=today_progress,
    )


def serialize_progress_state(state: HabitProgressState) -> HabitProgressData:
    """Convert a HabitProgressState back to its stored record shape."""
    last_completed = state.last_completed_date
    return HabitProgressData(
        streak=state.streak,
        lastCompletedDate=last_completed.isoformat() if last_completed else None,
        wasCompletedToday=state.was_completed_today,
        todayProgress=state.today_progress,
    )
