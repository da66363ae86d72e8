"""Schedule Engine for HabitPilot.

Frequency and weekday predicates for a single habit:
- Per-frequency gap tables (streak validity vs. "show as active" threshold)
- Calendar-day gap between a completion and the evaluation instant
- Weekday scheduling, using `dateutil.rrule` to find the next active day
- Next scheduled date after a completion, using `dateutil.relativedelta`

IMPORTANT: This module must NOT import from progress_engine.py to avoid
circular imports. Only import from const.py, models.py, and utils.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, ClassVar

from dateutil.rrule import DAILY, FR, MO, SA, SU, TH, TU, WE, rrule

from .. import const
from ..const import HabitFrequency, Weekday
from ..utils.dt_utils import (
    as_local,
    days_between,
    dt_add_days,
    local_weekday,
    start_of_local_day,
)

if TYPE_CHECKING:
    from dateutil.rrule import weekday

    from ..models import HabitRecurrence


class HabitScheduleEngine:
    """Cadence rules for one habit recurrence.

    The engine wraps an immutable HabitRecurrence and answers questions about
    gaps and weekdays. It never reads the clock: every method takes the
    instants it compares.
    """

    # Mapping from stored weekday numbers to rrule weekday constants
    WEEKDAY_TO_RRULE: ClassVar[dict[Weekday, weekday]] = {
        Weekday.SUNDAY: SU,
        Weekday.MONDAY: MO,
        Weekday.TUESDAY: TU,
        Weekday.WEDNESDAY: WE,
        Weekday.THURSDAY: TH,
        Weekday.FRIDAY: FR,
        Weekday.SATURDAY: SA,
    }

    def __init__(self, recurrence: HabitRecurrence) -> None:
        """Initialize the schedule engine with a recurrence.

        Args:
            recurrence: HabitRecurrence holding frequency and scheduled days
        """
        self._recurrence = recurrence
        self._frequency = recurrence.frequency

    # =========================================================================
    # Gap Tables
    # =========================================================================

    @property
    def max_allowed_gap(self) -> int | None:
        """Largest gap in days that still extends the streak.

        None means any gap is accepted (custom frequency without interval).
        """
        if self._frequency == HabitFrequency.CUSTOM:
            return self._recurrence.custom_interval_days
        return const.MAX_ALLOWED_GAP_DAYS[self._frequency]

    @property
    def minimum_active_gap(self) -> int | None:
        """Smallest gap in days after which the habit shows as active again.

        None means the habit is always active on scheduled days.
        """
        if self._frequency == HabitFrequency.CUSTOM:
            return self._recurrence.custom_interval_days
        return const.MINIMUM_ACTIVE_GAP_DAYS[self._frequency]

    def gap_days(self, last_completed: datetime | None, now: datetime) -> int | None:
        """Calendar days from the last completion to ``now`` (None if never)."""
        if last_completed is None:
            return None
        return days_between(last_completed, now)

    def is_gap_valid(self, last_completed: datetime | None, now: datetime) -> bool:
        """Check whether a completion at ``now`` keeps the streak unbroken.

        Examples:
            Daily: last=Jan 1, now=Jan 2 → True
            Daily: last=Jan 1, now=Jan 4 → False
            Custom(5): last=Jan 1, now=Jan 5 → True
        """
        gap = self.gap_days(last_completed, now)
        max_gap = self.max_allowed_gap
        if gap is None or max_gap is None:
            return True
        return gap <= max_gap

    def is_due(self, last_completed: datetime | None, now: datetime) -> bool:
        """Check whether enough days have passed to show the habit again.

        Ignores weekday scheduling; see is_scheduled_on() for that.
        """
        if self._frequency == HabitFrequency.DAILY:
            return True
        gap = self.gap_days(last_completed, now)
        min_gap = self.minimum_active_gap
        if gap is None or min_gap is None:
            return True
        return gap >= min_gap

    # =========================================================================
    # Weekday Scheduling
    # =========================================================================

    def is_scheduled_on(self, moment: datetime) -> bool:
        """Return True if the local weekday of ``moment`` is a scheduled day."""
        return local_weekday(moment) in self._recurrence.scheduled_days

    def next_active_day(self, after: datetime) -> datetime | None:
        """Return local midnight of the next scheduled weekday after ``after``.

        Returns:
            Timezone-aware local midnight, or None if no weekday is scheduled.
        """
        if not self._recurrence.scheduled_days:
            const.LOGGER.debug("HabitScheduleEngine: No scheduled days, no next day")
            return None

        byweekday = [
            self.WEEKDAY_TO_RRULE[day]
            for day in sorted(self._recurrence.scheduled_days)
        ]
        local_after = as_local(after)
        rule = rrule(
            DAILY,
            dtstart=start_of_local_day(local_after),
            byweekday=byweekday,
        )
        return rule.after(local_after, inc=False)

    # =========================================================================
    # Next Scheduled Date
    # =========================================================================

    def next_scheduled_date(
        self, last_completed: datetime | None, now: datetime
    ) -> datetime:
        """Date the habit is next expected, based on the last completion.

        Never-completed habits and custom habits without an interval are due
        ``now``.
        """
        if last_completed is None:
            return now

        if self._frequency == HabitFrequency.CUSTOM:
            interval = self._recurrence.custom_interval_days
            if interval is None:
                return now
            return dt_add_days(last_completed, interval)

        return dt_add_days(
            last_completed, const.NEXT_SCHEDULED_OFFSET_DAYS[self._frequency]
        )

    # =========================================================================
    # Display
    # =========================================================================

    def describe(self) -> str:
        """Human-readable cadence ("Every day", "Every 5 days", ...)."""
        if (
            self._frequency == HabitFrequency.CUSTOM
            and self._recurrence.custom_interval_days is not None
        ):
            return const.FREQUENCY_DESCRIPTION_CUSTOM_INTERVAL.format(
                days=self._recurrence.custom_interval_days
            )
        return const.FREQUENCY_DESCRIPTIONS[self._frequency]
