"""Value types the HabitPilot engines operate on.

Both types are frozen: engine operations never mutate them, they return a
new instance (``dataclasses.replace``) or the very same instance for a no-op.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from . import const
from .const import HabitFrequency, HabitType, Weekday


@dataclass(frozen=True)
class HabitRecurrence:
    """Configuration of one habit, fixed for the duration of an evaluation.

    Attributes:
        scheduled_days: Weekdays the habit is active on (Sunday = 1)
        frequency: Cadence that bounds the allowed gap between completions
        custom_interval_days: Interval for HabitFrequency.CUSTOM; None means
            the custom schedule accepts any gap
        habit_type: SIMPLE (one tap) or INCREMENTAL (daily_target taps)
        daily_target: Sub-completions needed per day for INCREMENTAL habits
    """

    scheduled_days: frozenset[Weekday] = const.ALL_WEEKDAYS
    frequency: HabitFrequency = const.DEFAULT_HABIT_FREQUENCY
    custom_interval_days: int | None = None
    habit_type: HabitType = const.DEFAULT_HABIT_TYPE
    daily_target: int = const.DEFAULT_DAILY_TARGET

    @property
    def is_incremental(self) -> bool:
        """True for habits completed through several sub-completions."""
        return self.habit_type == HabitType.INCREMENTAL


@dataclass(frozen=True)
class HabitProgressState:
    """Mutable-by-replacement progress of one habit.

    Attributes:
        streak: Consecutive valid completions, never negative
        last_completed_date: Most recent full completion, None when never
            completed or when today's completion was undone
        was_completed_today: A completion was registered today at some point,
            even if later undone
        today_progress: Sub-completions registered today (INCREMENTAL only)
    """

    streak: int = const.DEFAULT_STREAK
    last_completed_date: datetime | None = None
    was_completed_today: bool = const.DEFAULT_WAS_COMPLETED_TODAY
    today_progress: int = const.DEFAULT_TODAY_PROGRESS


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of HabitProgressEngine.apply_action().

    Attributes:
        action: The HABIT_ACTION_* that was applied
        state: State after the action (the input state for a no-op)
        changed: False when the action was a silent no-op
    """

    action: str
    state: HabitProgressState
    changed: bool = True
