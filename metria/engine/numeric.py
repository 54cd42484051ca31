"""Numeric helpers shared by the engine formulas."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

# Default decimal context precision; wider values get a wider local context.
_MIN_PRECISION = 28


def round_half_up(value: float, places: int = 2) -> float:
    """Round for display, ties away from zero.

    Only used when building result objects; formulas keep full precision.
    Ties are decided on the shortest decimal repr of the float, so 2.675
    rounds to 2.68. Non-finite values collapse to 0.0.
    """
    if not math.isfinite(value):
        return 0.0
    exact = Decimal(str(value))
    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        ctx.prec = max(_MIN_PRECISION, exact.adjusted() + places + 2)
        return float(exact.quantize(quantum, rounding=ROUND_HALF_UP))


def safe_div(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide, returning ``default`` when the denominator is zero."""
    if denominator == 0:
        return default
    return numerator / denominator


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
