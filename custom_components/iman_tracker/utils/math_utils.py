# File: utils/math_utils.py
"""Math and calculation utilities for Iman Tracker.

Pure Python math functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

⚠️ DIRECTIVE 1 - UTILS PURITY: NO `homeassistant.*` imports allowed.

Functions:
    - round_score: Consistent rounding to configured precision
    - calculate_ratio: Completion ratio with optional cap
    - clamp: Bound a value to a range
    - weighted_average: Weighted mean over the entries that are present
"""

from __future__ import annotations

from collections.abc import Iterable

# ==============================================================================
# Constants (local copies to avoid circular imports)
# ==============================================================================

# Default float precision for score rounding
DATA_FLOAT_PRECISION = 2


def round_score(value: float, precision: int = DATA_FLOAT_PRECISION) -> float:
    """Round a score to the configured precision.

    Examples:
        round_score(66.6666) → 66.67
        round_score(40) → 40.0
    """
    return round(float(value), precision)


def calculate_ratio(completed: float, target: float, cap: bool = True) -> float | None:
    """Calculate completed/target as a ratio.

    Args:
        completed: Progress value (negative values count as 0)
        target: Goal value
        cap: If True, the ratio never exceeds 1.0

    Returns:
        Ratio, or None when the target is not positive (goal disabled)

    Examples:
        calculate_ratio(5, 10) → 0.5
        calculate_ratio(150, 100) → 1.0
        calculate_ratio(150, 100, cap=False) → 1.5
        calculate_ratio(3, 0) → None
    """
    if target <= 0:
        return None
    ratio = max(0.0, completed) / target
    if cap:
        return min(1.0, ratio)
    return ratio


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a value between min and max bounds.

    Examples:
        clamp(150, 0, 100) → 100
        clamp(-5, 0, 100) → 0
    """
    return max(min_val, min(max_val, value))


def weighted_average(pairs: Iterable[tuple[float, float]]) -> float | None:
    """Return the weighted mean of (value, weight) pairs.

    Pairs with a non-positive weight are ignored and the remaining weights are
    renormalized. Returns None when nothing carries weight.

    Example:
        weighted_average([(100, 40), (50, 30), (0, 0)]) → 78.571...
    """
    total_weight = 0.0
    total = 0.0
    for value, weight in pairs:
        if weight <= 0:
            continue
        total += value * weight
        total_weight += weight

    if total_weight == 0:
        return None
    return total / total_weight
