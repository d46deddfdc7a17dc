"""Core utilities: exceptions, Decimal helpers and timing."""

from fairvalue.core.exceptions import MissingDataError
from fairvalue.core.numeric import clamp, round_money, safe_div, to_decimal
from fairvalue.core.timing import Timer

__all__ = [
    "MissingDataError",
    "Timer",
    "clamp",
    "round_money",
    "safe_div",
    "to_decimal",
]
