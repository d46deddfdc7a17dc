"""Exceptions raised by the valuation and recommendation layers."""

from __future__ import annotations

from typing import Optional


class MissingDataError(RuntimeError):
    """
    A structural precondition for valuation is not met.

    Raised when an instrument has no fundamental data, or no price history
    where one is required. Degraded metric values never raise; they only
    change which formulas contribute.
    """

    def __init__(self, symbol: str, missing: str, detail: Optional[str] = None):
        self.symbol = symbol
        self.missing = missing
        message = f"{symbol}: missing {missing}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
