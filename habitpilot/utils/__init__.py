# File: utils/__init__.py
"""Pure Python utilities for HabitPilot.

Submodules:
    - dt_utils: Timezone configuration, local calendar-day arithmetic, parsing
    - math_utils: Clamping, progress fraction and percentage calculations

Usage:
    from . import dt_utils
    from .math_utils import calculate_fraction
"""

from . import dt_utils, math_utils

__all__ = ["dt_utils", "math_utils"]
