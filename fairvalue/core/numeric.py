"""
Decimal helpers shared by every model.

All monetary and ratio arithmetic runs on decimal.Decimal. Floats are
converted through their string form so that 0.1 stays 0.1.
"""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal
from typing import Iterable, Optional, Union

from fairvalue.constants import MONEY_QUANTUM, ZERO

Number = Union[Decimal, float, int, str]


def to_decimal(value: Optional[Number], default: Decimal = ZERO) -> Decimal:
    """
    Convert a number-like value to Decimal.

    None maps to `default`. Floats go through str() to avoid binary noise.
    """
    if value is None:
        return default
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("bool is not a valid numeric input")
    return Decimal(str(value))


def clamp(value: Decimal, lower: Decimal, upper: Decimal) -> Decimal:
    """Clamp value to the closed interval [lower, upper]."""
    if lower > upper:
        raise ValueError(f"lower bound {lower} exceeds upper bound {upper}")
    return max(lower, min(upper, value))


def safe_div(numerator: Decimal, denominator: Decimal, default: Decimal = ZERO) -> Decimal:
    """Divide, returning `default` when the denominator is zero."""
    if denominator == 0:
        return default
    return numerator / denominator


def round_money(value: Decimal) -> Decimal:
    """Round to cents using banker's rounding."""
    return value.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_EVEN)


def dsum(values: Iterable[Decimal]) -> Decimal:
    """Sum that stays Decimal for an empty iterable."""
    return sum(values, ZERO)


def first_positive(*values: Decimal) -> Decimal:
    """Return the first value > 0, or zero when none is."""
    for value in values:
        if value > 0:
            return value
    return ZERO


def first_nonzero(*values: Decimal) -> Decimal:
    """Return the first value != 0, or zero when all are."""
    for value in values:
        if value != 0:
            return value
    return ZERO
