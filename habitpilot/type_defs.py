"""Type definitions for persisted HabitPilot records.

The persistence/sync layer stores habits as plain dicts using the camelCase
DATA_* keys from const.py. These TypedDicts describe that shape for static
analysis only; data_builders.py converts them to and from the engine's
frozen value types in models.py.

NOTE: TypedDict is STATIC ANALYSIS ONLY. Runtime defaults and validation
live in data_builders.py.
"""

from typing import NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

ISODatetime = str  # ISO 8601 datetime string "2026-01-18T12:30:00+00:00"


# =============================================================================
# Habit Record Types
# =============================================================================


class HabitRecurrenceData(TypedDict):
    """Recurrence fields of a stored habit record.

    Older records may lack any of these keys; build_recurrence() fills them.
    """

    scheduledDays: NotRequired[list[int]]  # Sunday = 1 ... Saturday = 7
    frequency: NotRequired[str]  # HabitFrequency value
    customFrequency: NotRequired[int | None]  # Only used with "Custom"
    type: NotRequired[str]  # HabitType value
    dailyTarget: NotRequired[int]


class HabitProgressData(TypedDict):
    """Progress fields of a stored habit record."""

    streak: NotRequired[int]
    lastCompletedDate: NotRequired[ISODatetime | None]
    wasCompletedToday: NotRequired[bool]
    todayProgress: NotRequired[int]
