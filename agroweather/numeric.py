"""Small numeric helpers shared by the estimators and the aggregation engine."""
from __future__ import annotations

import math
from typing import Any


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round like JavaScript's Math.round: halves go toward +infinity.

    Python's round() uses banker's rounding, which would turn 1.25 into 1.2;
    the dashboard figures have always been 1.3.
    """
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def is_finite_number(value: Any) -> bool:
    """True for real ints/floats that are neither NaN nor infinite (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp a value into [lower, upper]."""
    return max(lower, min(upper, value))
