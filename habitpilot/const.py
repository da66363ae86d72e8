# File: const.py
"""Constants for the HabitPilot progress engine.

This file centralizes frequency and habit-type identifiers, persisted data
keys, field defaults, gap tables, action names and validation error keys so
every module reads them from a single place.
"""

from enum import IntEnum, StrEnum
import logging
from typing import Final

# ------------------------------------------------------------------------------------------------
# Logging
# ------------------------------------------------------------------------------------------------
LOGGER = logging.getLogger(__package__)


# ------------------------------------------------------------------------------------------------
# Weekdays
# ------------------------------------------------------------------------------------------------


class Weekday(IntEnum):
    """Day of week as stored on habit records (Sunday = 1 ... Saturday = 7)."""

    SUNDAY = 1
    MONDAY = 2
    TUESDAY = 3
    WEDNESDAY = 4
    THURSDAY = 5
    FRIDAY = 6
    SATURDAY = 7

    @property
    def short_name(self) -> str:
        """Three-letter display label ("Sun", "Mon", ...)."""
        return self.name[:3].title()


ALL_WEEKDAYS: Final[frozenset[Weekday]] = frozenset(Weekday)


# ------------------------------------------------------------------------------------------------
# Frequencies & Habit Types
# ------------------------------------------------------------------------------------------------


class HabitFrequency(StrEnum):
    """Recurrence cadence of a habit.

    Values match the raw strings persisted on habit records.
    """

    DAILY = "Daily"
    EVERY_OTHER_DAY = "Every Other Day"
    THREE_TIMES_PER_WEEK = "3x per Week"
    TWICE_PER_WEEK = "2x per Week"
    ONCE_PER_WEEK = "Once per Week"
    CUSTOM = "Custom"


class HabitType(StrEnum):
    """Whether a habit completes in one tap or in several sub-completions."""

    SIMPLE = "Simple"
    INCREMENTAL = "Incremental"


# Maximum gap (calendar days) between two completions that still extends the
# streak. None means any gap is accepted (custom frequency without interval).
MAX_ALLOWED_GAP_DAYS: Final[dict[HabitFrequency, int]] = {
    HabitFrequency.DAILY: 1,
    HabitFrequency.EVERY_OTHER_DAY: 2,
    HabitFrequency.THREE_TIMES_PER_WEEK: 3,
    HabitFrequency.TWICE_PER_WEEK: 4,
    HabitFrequency.ONCE_PER_WEEK: 7,
}

# Minimum gap since the last completion before the habit shows as active again.
# Deliberately not the same table as MAX_ALLOWED_GAP_DAYS. Twice per week waits
# 4 days here, one longer than the 3 day offset to the next scheduled date.
MINIMUM_ACTIVE_GAP_DAYS: Final[dict[HabitFrequency, int]] = {
    HabitFrequency.DAILY: 0,
    HabitFrequency.EVERY_OTHER_DAY: 2,
    HabitFrequency.THREE_TIMES_PER_WEEK: 2,
    HabitFrequency.TWICE_PER_WEEK: 4,
    HabitFrequency.ONCE_PER_WEEK: 7,
}

# Days added to the last completion to get the next scheduled date
NEXT_SCHEDULED_OFFSET_DAYS: Final[dict[HabitFrequency, int]] = {
    HabitFrequency.DAILY: 1,
    HabitFrequency.EVERY_OTHER_DAY: 2,
    HabitFrequency.THREE_TIMES_PER_WEEK: 2,
    HabitFrequency.TWICE_PER_WEEK: 3,
    HabitFrequency.ONCE_PER_WEEK: 7,
}

FREQUENCY_DESCRIPTIONS: Final[dict[HabitFrequency, str]] = {
    HabitFrequency.DAILY: "Every day",
    HabitFrequency.EVERY_OTHER_DAY: "Every other day",
    HabitFrequency.THREE_TIMES_PER_WEEK: "3 times per week",
    HabitFrequency.TWICE_PER_WEEK: "2 times per week",
    HabitFrequency.ONCE_PER_WEEK: "Once per week",
    HabitFrequency.CUSTOM: "Custom schedule",
}
FREQUENCY_DESCRIPTION_CUSTOM_INTERVAL = "Every {days} days"


# ------------------------------------------------------------------------------------------------
# Habit Actions
# ------------------------------------------------------------------------------------------------
HABIT_ACTION_COMPLETE = "complete"
HABIT_ACTION_INCREMENT = "increment"
HABIT_ACTION_UNDO = "undo"
HABIT_ACTION_TOGGLE = "toggle"
HABIT_ACTION_RESET = "reset"

# Server streaks further than this from the local value replace it on sync
STREAK_RECONCILE_TOLERANCE = 1


# ------------------------------------------------------------------------------------------------
# Data Keys (persisted habit record)
# ------------------------------------------------------------------------------------------------

# Recurrence
DATA_HABIT_SCHEDULED_DAYS = "scheduledDays"
DATA_HABIT_FREQUENCY = "frequency"
DATA_HABIT_CUSTOM_FREQUENCY = "customFrequency"
DATA_HABIT_TYPE = "type"
DATA_HABIT_DAILY_TARGET = "dailyTarget"

# Progress
DATA_HABIT_STREAK = "streak"
DATA_HABIT_LAST_COMPLETED_DATE = "lastCompletedDate"
DATA_HABIT_WAS_COMPLETED_TODAY = "wasCompletedToday"
DATA_HABIT_TODAY_PROGRESS = "todayProgress"


# ------------------------------------------------------------------------------------------------
# Defaults
# ------------------------------------------------------------------------------------------------
DEFAULT_HABIT_FREQUENCY = HabitFrequency.DAILY
DEFAULT_HABIT_TYPE = HabitType.SIMPLE
DEFAULT_DAILY_TARGET = 1
DEFAULT_STREAK = 0
DEFAULT_TODAY_PROGRESS = 0
DEFAULT_WAS_COMPLETED_TODAY = False


# ------------------------------------------------------------------------------------------------
# Validation Error Keys
# ------------------------------------------------------------------------------------------------
ERROR_INVALID_FREQUENCY = "invalid_frequency"
ERROR_INVALID_HABIT_TYPE = "invalid_habit_type"
ERROR_INVALID_DAILY_TARGET = "invalid_daily_target"
ERROR_INVALID_SCHEDULED_DAYS = "invalid_scheduled_days"
ERROR_INVALID_CUSTOM_FREQUENCY = "invalid_custom_frequency"
ERROR_INVALID_STREAK = "invalid_streak"
ERROR_INVALID_TODAY_PROGRESS = "invalid_today_progress"
ERROR_INVALID_LAST_COMPLETED_DATE = "invalid_last_completed_date"
