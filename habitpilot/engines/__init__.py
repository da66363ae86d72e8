"""Engine modules for HabitPilot.

Contains specialized computation engines:
- progress_engine: Completion, streak and daily progress transitions
- schedule_engine: Frequency gap tables, weekday scheduling, next due date
"""

# Use relative imports within package to avoid mypy module resolution issues
from .progress_engine import HabitProgressEngine
from .schedule_engine import HabitScheduleEngine

__all__ = [
    "HabitProgressEngine",
    "HabitScheduleEngine",
]
