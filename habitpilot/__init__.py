"""HabitPilot habit completion and streak engine.

Pure functions of (progress state, recurrence, now) → new progress state.
The caller owns persistence and supplies the current instant on every call.
"""

from .const import HabitFrequency, HabitType, Weekday
from .data_builders import (
    HabitValidationError,
    build_progress_state,
    build_recurrence,
    serialize_progress_state,
    serialize_recurrence,
    validate_recurrence_data,
)
from .engines import HabitProgressEngine, HabitScheduleEngine
from .models import HabitProgressState, HabitRecurrence, TransitionResult

__all__ = [
    "HabitFrequency",
    "HabitProgressEngine",
    "HabitProgressState",
    "HabitRecurrence",
    "HabitScheduleEngine",
    "HabitType",
    "HabitValidationError",
    "TransitionResult",
    "Weekday",
    "build_progress_state",
    "build_recurrence",
    "serialize_progress_state",
    "serialize_recurrence",
    "validate_recurrence_data",
]
