"""
Numeric helpers shared by the analysis and scoring stages.
"""

import math
from typing import Final


# Substitute divisor (won) for zero own cash / FMV
EPSILON: Final = 1.0


def round_k(value: float) -> int:
    """Round a won amount to the nearest thousand (half away from zero)."""
    thousands = abs(value) / 1000
    rounded = int(thousands + 0.5) * 1000
    return rounded if value >= 0 else -rounded


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, substituting EPSILON for a non-positive denominator."""
    return numerator / (denominator if denominator > 0 else EPSILON)


def lerp(x0: float, x1: float, y0: float, y1: float, x: float) -> float:
    """Linear interpolation of x from [x0, x1] onto [y0, y1]."""
    if x1 == x0:
        return y0
    return y0 + (y1 - y0) * (x - x0) / (x1 - x0)


def map_range(x: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """
    Map x from [in_min, in_max] onto [out_min, out_max].

    The input position is clamped to the range, so the result never leaves
    the output interval. in_min may exceed in_max for inverse mappings.
    """
    if in_max == in_min:
        return out_min
    t = clamp((x - in_min) / (in_max - in_min), 0.0, 1.0)
    return out_min + (out_max - out_min) * t
