"""
Decimal Utilities
score_engine/scoring/utils.py

Precision-safe decimal math for score calculations.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Sequence


def weighted_sum(values: Sequence[Decimal], weights: Sequence[Decimal]) -> Decimal:
    """
    Calculate an unnormalised weighted sum.

    Formula: Σ(value_i × weight_i)

    No rounding is applied.
    """
    if len(values) != len(weights):
        raise ValueError("values and weights must have same length")
    return sum((v * w for v, w in zip(values, weights)), Decimal("0"))


def mean(values: Sequence[Decimal], places: Optional[int] = 4) -> Decimal:
    """
    Arithmetic mean quantized to `places`. Returns Decimal("0") when empty.

    places=None returns the unquantized mean, for callers that round it
    themselves and must not round twice.
    """
    if not values:
        return Decimal("0")
    total = sum(values, Decimal("0"))
    exact = total / Decimal(len(values))
    if places is None:
        return exact
    return exact.quantize(
        Decimal(10) ** -places, rounding=ROUND_HALF_UP
    )


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3)."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
