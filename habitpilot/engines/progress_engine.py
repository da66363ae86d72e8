"""Progress Engine - Pure logic for habit completion, streak and progress.

This engine provides stateless, pure Python functions for:
- Completion transitions (mark complete, increment, undo, toggle)
- Day-rollover normalization of per-day flags and counters
- Streak continuation checks against the habit's frequency
- Query functions for today's completion status and progress

ARCHITECTURE: All functions are static methods that take the current
HabitProgressState, the HabitRecurrence and the evaluation instant, and
return a new HabitProgressState. No clock reads, no I/O, no shared state.
Persisting the returned state belongs to the caller.

Redundant calls (completing twice, undoing with nothing to undo,
incrementing past target) are silent no-ops that return the input state
unchanged, so callers can detect them with an identity/equality check.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from .. import const
from ..const import HabitType
from ..models import TransitionResult
from ..utils.dt_utils import days_between, is_same_local_day
from ..utils.math_utils import calculate_fraction, calculate_percentage
from .schedule_engine import HabitScheduleEngine

if TYPE_CHECKING:
    from datetime import datetime

    from ..models import HabitProgressState, HabitRecurrence


class HabitProgressEngine:
    """Pure logic engine for habit completion and streak transitions.

    All methods are static - no instance state. This enables easy unit testing
    and safe evaluation of many habits in parallel.
    """

    # =========================================================================
    # STATE TRANSITIONS
    # =========================================================================

    @staticmethod
    def mark_completed(
        state: HabitProgressState,
        recurrence: HabitRecurrence,
        now: datetime,
    ) -> HabitProgressState:
        """Register a full completion for the day of ``now``.

        Streak rules, in order:
        1. Completed earlier today then undone: restore, max(1, streak + 1)
        2. Already completed today: no-op
        3. Last completion yesterday: streak + 1
        4. Older completion: streak + 1 if the gap fits the frequency, else 1
        5. First-ever completion: 1

        Args:
            state: Current progress
            recurrence: Habit configuration (frequency decides gap validity)
            now: Evaluation instant supplied by the caller

        Returns:
            New HabitProgressState, or ``state`` itself for the no-op case
        """
        last_completed = state.last_completed_date
        old_streak = state.streak

        if state.was_completed_today and last_completed is None:
            new_streak = max(1, old_streak + 1)
            const.LOGGER.debug(
                "Re-completing after undo: streak %d -> %d", old_streak, new_streak
            )

        elif last_completed is not None:
            gap = days_between(last_completed, now)

            if gap == 0:
                const.LOGGER.debug(
                    "Already completed today, streak stays %d", old_streak
                )
                return state

            if gap == 1:
                new_streak = old_streak + 1
                const.LOGGER.debug(
                    "Consecutive day completion: streak %d -> %d",
                    old_streak,
                    new_streak,
                )
            elif HabitProgressEngine.is_completion_valid(state, recurrence, now):
                new_streak = old_streak + 1
                const.LOGGER.debug(
                    "Frequency-valid completion after %d days: streak %d -> %d",
                    gap,
                    old_streak,
                    new_streak,
                )
            else:
                new_streak = 1
                const.LOGGER.debug(
                    "Gap of %d days breaks %s streak of %d, restarting at 1",
                    gap,
                    recurrence.frequency,
                    old_streak,
                )

        else:
            new_streak = 1
            const.LOGGER.debug("First completion, streak set to 1")

        return replace(
            state,
            streak=new_streak,
            last_completed_date=now,
            was_completed_today=True,
        )

    @staticmethod
    def increment_progress(
        state: HabitProgressState,
        recurrence: HabitRecurrence,
        now: datetime,
    ) -> HabitProgressState:
        """Handle a user "tap" on a habit.

        Incremental habits gain one sub-completion and complete when the
        daily target is reached. Simple habits complete directly.

        Returns:
            New HabitProgressState, or ``state`` itself when already at target
        """
        assert recurrence.daily_target >= 0, "daily_target must not be negative"
        assert state.today_progress >= 0, "today_progress must not be negative"

        if recurrence.habit_type == HabitType.SIMPLE:
            if HabitProgressEngine.is_completed_today(state, recurrence, now):
                const.LOGGER.debug("Simple habit already completed today, skipping")
                return state
            return HabitProgressEngine.mark_completed(state, recurrence, now)

        # Only roll over stale progress when nothing was counted yet today
        if state.today_progress == 0:
            state = HabitProgressEngine.reset_progress_if_needed(state, recurrence, now)

        if state.today_progress >= recurrence.daily_target:
            const.LOGGER.debug(
                "Already at target %d/%d, not incrementing",
                state.today_progress,
                recurrence.daily_target,
            )
            return state

        was_complete = HabitProgressEngine.is_completed_today(state, recurrence, now)
        state = replace(state, today_progress=state.today_progress + 1)
        const.LOGGER.debug(
            "Progress incremented to %d/%d",
            state.today_progress,
            recurrence.daily_target,
        )

        if state.today_progress == recurrence.daily_target and not was_complete:
            const.LOGGER.debug("Target reached, marking completed")
            state = HabitProgressEngine.mark_completed(state, recurrence, now)

        return state

    @staticmethod
    def undo_completed_today(
        state: HabitProgressState,
        recurrence: HabitRecurrence,
        now: datetime,
    ) -> HabitProgressState:
        """Remove today's completion.

        The ``was_completed_today`` flag stays set so a later completion the
        same day restores the streak instead of counting as a first one.

        Returns:
            New HabitProgressState, or ``state`` itself if nothing to undo
        """
        last_completed = state.last_completed_date
        if last_completed is None or not is_same_local_day(last_completed, now):
            const.LOGGER.debug("Cannot undo: no completion registered today")
            return state

        new_streak = max(0, state.streak - 1)
        const.LOGGER.debug(
            "Undoing completion: streak %d -> %d", state.streak, new_streak
        )

        return replace(
            state,
            streak=new_streak,
            last_completed_date=None,
            was_completed_today=True,
            today_progress=0 if recurrence.is_incremental else state.today_progress,
        )

    @staticmethod
    def reset_progress_if_needed(
        state: HabitProgressState,
        recurrence: HabitRecurrence,
        now: datetime,
    ) -> HabitProgressState:
        """Clear per-day flags and counters left over from a previous day.

        Callers run this once per session/day before observing today's state.

        NOTE: When ``last_completed_date`` is None (never completed, or
        undone), incremental ``today_progress`` is left untouched.
        """
        last_completed = state.last_completed_date
        completed_today = last_completed is not None and is_same_local_day(
            last_completed, now
        )
        if completed_today:
            return state

        today_progress = state.today_progress
        if recurrence.is_incremental and last_completed is not None:
            today_progress = 0

        if not state.was_completed_today and today_progress == state.today_progress:
            return state

        const.LOGGER.debug(
            "Day rollover: was_completed_today cleared, progress %d -> %d",
            state.today_progress,
            today_progress,
        )
        return replace(state, was_completed_today=False, today_progress=today_progress)

    @staticmethod
    def toggle_completion(
        state: HabitProgressState,
        recurrence: HabitRecurrence,
        now: datetime,
    ) -> HabitProgressState:
        """Undo today's completion if there is one, otherwise complete.

        "Completed" here means a completion registered today, for both habit
        types. Toggling an incremental habit on fills today's counter up to
        the daily target; toggling it off clears the counter via undo.
        """
        last_completed = state.last_completed_date
        if last_completed is not None and is_same_local_day(last_completed, now):
            return HabitProgressEngine.undo_completed_today(state, recurrence, now)

        state = HabitProgressEngine.mark_completed(state, recurrence, now)
        if recurrence.is_incremental and state.today_progress < recurrence.daily_target:
            state = replace(state, today_progress=recurrence.daily_target)
        return state

    @staticmethod
    def reconcile_streak(
        state: HabitProgressState,
        server_streak: int,
    ) -> HabitProgressState:
        """Merge a streak reported by the sync backend into local state.

        The local streak is trusted unless the server differs by more than
        STREAK_RECONCILE_TOLERANCE, which indicates the local copy is stale.
        """
        if abs(server_streak - state.streak) <= const.STREAK_RECONCILE_TOLERANCE:
            return state

        const.LOGGER.debug(
            "Server streak %d differs from local %d, adopting server value",
            server_streak,
            state.streak,
        )
        return replace(state, streak=max(0, server_streak))

    @staticmethod
    def apply_action(
        state: HabitProgressState,
        recurrence: HabitRecurrence,
        now: datetime,
        action: str,
    ) -> TransitionResult:
        """Apply one HABIT_ACTION_* and report whether the state changed.

        Raises:
            ValueError: If ``action`` is not a known HABIT_ACTION_* value
        """
        if action == const.HABIT_ACTION_COMPLETE:
            new_state = HabitProgressEngine.mark_completed(state, recurrence, now)
        elif action == const.HABIT_ACTION_INCREMENT:
            new_state = HabitProgressEngine.increment_progress(state, recurrence, now)
        elif action == const.HABIT_ACTION_UNDO:
            new_state = HabitProgressEngine.undo_completed_today(state, recurrence, now)
        elif action == const.HABIT_ACTION_TOGGLE:
            new_state = HabitProgressEngine.toggle_completion(state, recurrence, now)
        elif action == const.HABIT_ACTION_RESET:
            new_state = HabitProgressEngine.reset_progress_if_needed(
                state, recurrence, now
            )
        else:
            raise ValueError(f"Unknown habit action: {action}")

        return TransitionResult(
            action=action,
            state=new_state,
            changed=new_state != state,
        )

    # =========================================================================
    # QUERIES
    # =========================================================================

    @staticmethod
    def is_completed_today(
        state: HabitProgressState,
        recurrence: HabitRecurrence,
        now: datetime,
    ) -> bool:
        """Return True if today's target is reached.

        Incremental habits look at today's counter; simple habits at whether
        the last completion falls on the day of ``now``.
        """
        if recurrence.is_incremental:
            return state.today_progress >= recurrence.daily_target
        last_completed = state.last_completed_date
        if last_completed is None:
            return False
        return is_same_local_day(last_completed, now)

    @staticmethod
    def is_completion_valid(
        state: HabitProgressState,
        recurrence: HabitRecurrence,
        now: datetime,
    ) -> bool:
        """Check whether completing at ``now`` extends rather than resets the streak."""
        return HabitScheduleEngine(recurrence).is_gap_valid(
            state.last_completed_date, now
        )

    @staticmethod
    def is_scheduled_for_today(recurrence: HabitRecurrence, now: datetime) -> bool:
        """Return True if the weekday of ``now`` is one of the scheduled days."""
        return HabitScheduleEngine(recurrence).is_scheduled_on(now)

    @staticmethod
    def should_be_active_today(
        state: HabitProgressState,
        recurrence: HabitRecurrence,
        now: datetime,
    ) -> bool:
        """Return True if the habit should be shown as actionable today.

        Requires a scheduled weekday, and for non-daily frequencies enough
        days since the last completion.
        """
        schedule = HabitScheduleEngine(recurrence)
        if not schedule.is_scheduled_on(now):
            return False
        return schedule.is_due(state.last_completed_date, now)

    @staticmethod
    def progress_fraction(
        state: HabitProgressState,
        recurrence: HabitRecurrence,
        now: datetime,
    ) -> float:
        """Completion of today's target as 0.0 - 1.0."""
        if recurrence.is_incremental:
            return calculate_fraction(state.today_progress, recurrence.daily_target)
        if HabitProgressEngine.is_completed_today(state, recurrence, now):
            return 1.0
        return 0.0

    @staticmethod
    def progress_percentage(
        state: HabitProgressState,
        recurrence: HabitRecurrence,
        now: datetime,
    ) -> float:
        """Completion of today's target as a rounded 0 - 100 percentage."""
        if recurrence.is_incremental:
            return calculate_percentage(state.today_progress, recurrence.daily_target)
        return HabitProgressEngine.progress_fraction(state, recurrence, now) * 100

    @staticmethod
    def is_at_target(
        state: HabitProgressState,
        recurrence: HabitRecurrence,
        now: datetime,
    ) -> bool:
        """Alias of is_completed_today() used by progress rendering."""
        return HabitProgressEngine.is_completed_today(state, recurrence, now)

    @staticmethod
    def can_increment(state: HabitProgressState, recurrence: HabitRecurrence) -> bool:
        """Return True if another sub-completion can be registered today."""
        return (
            recurrence.is_incremental
            and state.today_progress < recurrence.daily_target
        )

    @staticmethod
    def next_scheduled_date(
        state: HabitProgressState,
        recurrence: HabitRecurrence,
        now: datetime,
    ) -> datetime:
        """Date the habit is next expected (``now`` if never completed)."""
        return HabitScheduleEngine(recurrence).next_scheduled_date(
            state.last_completed_date, now
        )
