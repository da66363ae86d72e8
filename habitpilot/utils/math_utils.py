# File: utils/math_utils.py
"""Math and calculation utilities for HabitPilot.

Functions:
    - round_value: Consistent rounding to configured precision
    - clamp_int: Keep a counter inside inclusive bounds
    - calculate_fraction: Progress fraction (0.0 - 1.0) with zero-target guard
    - calculate_percentage: Progress percentage calculations
"""

from __future__ import annotations

import logging

# Module-level logger
_LOGGER = logging.getLogger(__name__)

# Default float precision for rounding
DATA_FLOAT_PRECISION = 2


def round_value(value: float, precision: int = DATA_FLOAT_PRECISION) -> float:
    """Round a value to the configured precision.

    Examples:
        round_value(10.456) → 10.46
        round_value(10.0) → 10.0
    """
    return round(value, precision)


def clamp_int(value: int, min_val: int, max_val: int) -> int:
    """Clamp an integer between minimum and maximum bounds.

    When ``max_val`` is below ``min_val`` the minimum wins.

    Examples:
        clamp_int(5, 0, 3) → 3
        clamp_int(-2, 0, 3) → 0
        clamp_int(2, 0, 3) → 2
    """
    if max_val < min_val:
        _LOGGER.debug("clamp_int: max %d below min %d, using min", max_val, min_val)
        return min_val
    return max(min_val, min(value, max_val))


def calculate_fraction(current: float, target: float) -> float:
    """Return ``current / target`` or 0.0 when the target is not positive.

    Examples:
        calculate_fraction(1, 4) → 0.25
        calculate_fraction(3, 0) → 0.0  # Division by zero protection
    """
    if target <= 0:
        return 0.0
    return current / target


def calculate_percentage(
    current: float,
    target: float,
    precision: int = DATA_FLOAT_PRECISION,
) -> float:
    """Calculate progress percentage with proper rounding.

    Returns:
        Percentage (0-100) with proper rounding, or 0.0 if target is 0

    Examples:
        calculate_percentage(50, 100) → 50.0
        calculate_percentage(1, 3) → 33.33
        calculate_percentage(5, 0) → 0.0
    """
    return round_value(calculate_fraction(current, target) * 100, precision)
