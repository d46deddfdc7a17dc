"""Deviation cutoffs and the deviation -> action mapping."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Optional

from fairvalue.constants import (
    BASE_THRESHOLDS,
    REFERENCE_VOLATILITY,
    SECTOR_THRESHOLD_NUDGES,
    SIMPLE_THRESHOLDS,
    THRESHOLD_VOLATILITY_SCALES,
    ZERO,
)
from fairvalue.domain.recommendation import RecommendationAction
from fairvalue.logging_config import get_logger
from fairvalue.valuation.classifier import Sector

logger = get_logger(__name__)

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class Thresholds:
    """
    Lower bounds (exclusive, in percent) for each action.

    A deviation above `strong_buy` is a Strong Buy, above `buy` a Buy, and
    so on; anything at or below `strong_sell` is a Strong Sell. The deviation
    between `reduce` and `accumulate` is a Hold.
    """

    strong_buy: Decimal
    buy: Decimal
    accumulate: Decimal
    reduce: Decimal
    sell: Decimal
    strong_sell: Decimal

    def action_for(self, deviation_pct: Decimal) -> RecommendationAction:
        if deviation_pct > self.strong_buy:
            return RecommendationAction.STRONG_BUY
        if deviation_pct > self.buy:
            return RecommendationAction.BUY
        if deviation_pct > self.accumulate:
            return RecommendationAction.ACCUMULATE
        if deviation_pct > self.reduce:
            return RecommendationAction.HOLD
        if deviation_pct > self.sell:
            return RecommendationAction.REDUCE
        if deviation_pct > self.strong_sell:
            return RecommendationAction.SELL
        return RecommendationAction.STRONG_SELL

    def to_dict(self) -> Dict[str, Decimal]:
        """Convert to dictionary."""
        return {
            "strong_buy": self.strong_buy,
            "buy": self.buy,
            "accumulate": self.accumulate,
            "reduce": self.reduce,
            "sell": self.sell,
            "strong_sell": self.strong_sell,
        }


def simple_thresholds() -> Thresholds:
    """Fixed cutoffs of the single-horizon engine: 20 / 10 / 0 / -5 / -10 / -20."""
    return Thresholds(*SIMPLE_THRESHOLDS)


def dynamic_thresholds(
    volatility: Decimal,
    sector: Optional[Sector] = None,
    reference_volatility: Decimal = REFERENCE_VOLATILITY,
) -> Thresholds:
    """
    Cutoffs widened for volatile stocks and nudged by sector.

    Volatility above the reference pushes every cutoff away from zero, so
    a volatile stock needs a larger valuation gap for the same grade.
    Missing volatility (<= 0) is treated as the reference.
    """
    if volatility <= 0:
        volatility = reference_volatility
    volatility_adjustment = (volatility - reference_volatility) * HUNDRED
    nudge = SECTOR_THRESHOLD_NUDGES.get(sector.value, ZERO) if sector else ZERO

    cutoffs = {
        name: base + volatility_adjustment * THRESHOLD_VOLATILITY_SCALES[name] + nudge
        for name, base in BASE_THRESHOLDS.items()
    }
    logger.debug("Thresholds (vol %.2f, %s): %s", volatility, sector, cutoffs)
    return Thresholds(**cutoffs)
