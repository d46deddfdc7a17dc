"""
Intrinsic value aggregation.

Runs the four valuation models, sanity-clamps each result against the
last price, adapts the model weights to the company profile and blends
the results into a single per-share intrinsic value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

from fairvalue.config import Config, config as default_config
from fairvalue.constants import (
    AGGREGATOR_FALLBACK_WEIGHTS,
    AGGREGATOR_MODELS,
    HIGH_GROWTH_THRESHOLD,
    HIGH_YIELD_THRESHOLD,
    LOW_BETA_THRESHOLD,
    LOW_GROWTH_THRESHOLD,
    ONE,
    OUTLIER_DEVIATION,
    OUTLIER_WEIGHT_FACTOR,
    STABLE_EARNINGS_THRESHOLD,
    WEIGHT_SHIFT,
    ZERO,
)
from fairvalue.core.exceptions import MissingDataError
from fairvalue.core.numeric import clamp, dsum, round_money
from fairvalue.domain.instrument import FundamentalData, InvestmentInstrument
from fairvalue.logging_config import get_logger
from fairvalue.valuation.comparable import ComparableModel
from fairvalue.valuation.dcf import DCFModel
from fairvalue.valuation.ddm import DDMModel
from fairvalue.valuation.score import ScoreModel

logger = get_logger(__name__)


@dataclass
class IntrinsicValueBreakdown:
    """Per-model inputs and the weighted result of one aggregation."""

    price: Decimal
    raw_values: Dict[str, Decimal]
    clamped_values: Dict[str, Decimal]
    weights: Dict[str, Decimal]
    intrinsic_value: Decimal
    adjustments: List[str] = field(default_factory=list)

    @property
    def contributing_models(self) -> List[str]:
        return [model for model in AGGREGATOR_MODELS if self.weights[model] > 0]

    @property
    def deviation_pct(self) -> Decimal:
        """(intrinsic - price) / price x 100, zero without a price."""
        if self.price <= 0:
            return ZERO
        return (self.intrinsic_value - self.price) / self.price * Decimal(100)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "price": self.price,
            "intrinsic_value": self.intrinsic_value,
            "deviation_pct": self.deviation_pct,
            "raw_values": dict(self.raw_values),
            "clamped_values": dict(self.clamped_values),
            "weights": dict(self.weights),
            "adjustments": list(self.adjustments),
        }


class IntrinsicValueAggregator:
    """
    Blend of DCF, DDM, Comparable and Score valuations.

    A model whose value is not positive contributes nothing. Weight
    adjustments are transfers between models, so the weights always sum
    to one after normalisation.
    """

    def __init__(
        self,
        cfg: Optional[Config] = None,
        dcf: Optional[DCFModel] = None,
        ddm: Optional[DDMModel] = None,
        comparable: Optional[ComparableModel] = None,
        score: Optional[ScoreModel] = None,
    ):
        self.config = cfg or default_config
        self.models = {
            "dcf": dcf or DCFModel(self.config),
            "ddm": ddm or DDMModel(self.config),
            "comparable": comparable or ComparableModel(self.config),
            "score": score or ScoreModel(self.config),
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def calculate_intrinsic_value(self, instrument: InvestmentInstrument) -> Decimal:
        """
        Intrinsic value per share for an instrument.

        Raises:
            MissingDataError: If the instrument has no fundamental data
        """
        return self.breakdown_for(instrument).intrinsic_value

    def breakdown_for(self, instrument: InvestmentInstrument) -> IntrinsicValueBreakdown:
        data = instrument.priced_fundamentals()
        if data is None:
            raise MissingDataError(instrument.symbol, "fundamental data")
        breakdown = self.valuate(data)
        logger.debug("%s: intrinsic value %s (price %s)", instrument.symbol, breakdown.intrinsic_value, breakdown.price)
        return breakdown

    def valuate(self, data: FundamentalData) -> IntrinsicValueBreakdown:
        price = data.price
        raw = {name: model.calculate(data) for name, model in self.models.items()}
        usable = {name: value > 0 for name, value in raw.items()}
        clamped = {name: self._clamp_model(raw[name], price) if usable[name] else ZERO for name in raw}

        notes: List[str] = []
        weights = {
            name: weight if usable[name] else ZERO
            for name, weight in self.config.aggregator_base_weights.items()
        }
        self._apply_profile_transfers(data, weights, usable, notes)
        self._dampen_outliers(clamped, price, weights, usable, notes)
        weights = self._normalise(weights, notes)

        blended = dsum(weights[name] * clamped[name] for name in AGGREGATOR_MODELS)
        if price > 0:
            blended = clamp(
                blended,
                price * self.config.final_min_multiple,
                price * self.config.final_max_multiple,
            )
        intrinsic = round_money(blended)

        logger.debug("Aggregated %s with weights %s -> %s", clamped, weights, intrinsic)
        return IntrinsicValueBreakdown(
            price=price,
            raw_values=raw,
            clamped_values=clamped,
            weights=weights,
            intrinsic_value=intrinsic,
            adjustments=notes,
        )

    # ------------------------------------------------------------------
    # Weighting steps
    # ------------------------------------------------------------------

    def _clamp_model(self, value: Decimal, price: Decimal) -> Decimal:
        if price <= 0:
            return value
        return clamp(
            value,
            price * self.config.model_min_multiple,
            price * self.config.model_max_multiple,
        )

    @staticmethod
    def _transfer(
        weights: Dict[str, Decimal],
        source: str,
        target: str,
        amount: Decimal,
        usable: Dict[str, bool],
    ) -> Decimal:
        """Move up to `amount` of weight from source to a usable target."""
        if not usable[target]:
            return ZERO
        moved = min(amount, weights[source])
        weights[source] -= moved
        weights[target] += moved
        return moved

    def _apply_profile_transfers(
        self,
        data: FundamentalData,
        weights: Dict[str, Decimal],
        usable: Dict[str, bool],
        notes: List[str],
    ) -> None:
        eps_growth = data.growth.predicted_eps_growth

        if data.dividend.dividend_yield > HIGH_YIELD_THRESHOLD and usable["ddm"]:
            self._transfer(weights, "dcf", "ddm", WEIGHT_SHIFT, usable)
            self._transfer(weights, "comparable", "ddm", WEIGHT_SHIFT, usable)
            notes.append("high dividend yield: weight moved to DDM")

        if data.earnings.eps <= 0:
            self._transfer(weights, "comparable", "dcf", weights["comparable"] / 2, usable)
            notes.append("negative earnings: half of comparable weight moved to DCF")

        if eps_growth > HIGH_GROWTH_THRESHOLD:
            self._transfer(weights, "comparable", "dcf", WEIGHT_SHIFT, usable)
            self._transfer(weights, "ddm", "score", WEIGHT_SHIFT, usable)
            notes.append("high growth: weight moved to DCF and score")

        beta = data.market_risk.beta
        stable = (
            data.stability.earnings_stability >= STABLE_EARNINGS_THRESHOLD
            or 0 < beta < LOW_BETA_THRESHOLD
        )
        if eps_growth < LOW_GROWTH_THRESHOLD and stable:
            self._transfer(weights, "dcf", "comparable", WEIGHT_SHIFT, usable)
            target = "ddm" if usable["ddm"] else "comparable"
            self._transfer(weights, "score", target, WEIGHT_SHIFT, usable)
            notes.append("low growth, stable business: weight moved to comparable and income models")

    def _dampen_outliers(
        self,
        values: Dict[str, Decimal],
        price: Decimal,
        weights: Dict[str, Decimal],
        usable: Dict[str, bool],
        notes: List[str],
    ) -> None:
        if price <= 0:
            return
        order = list(AGGREGATOR_MODELS)
        for index, name in enumerate(order):
            if not usable[name] or weights[name] <= 0:
                continue
            deviation = abs(values[name] - price) / price
            if deviation <= OUTLIER_DEVIATION:
                continue
            successor = self._next_usable(order, index, usable)
            if successor is None:
                continue
            removed = weights[name] * (ONE - OUTLIER_WEIGHT_FACTOR)
            weights[name] -= removed
            weights[successor] += removed
            notes.append(f"{name} deviates {deviation:.0%} from price: weight moved to {successor}")

    @staticmethod
    def _next_usable(order: List[str], index: int, usable: Dict[str, bool]) -> Optional[str]:
        for step in range(1, len(order)):
            candidate = order[(index + step) % len(order)]
            if usable[candidate]:
                return candidate
        return None

    @staticmethod
    def _normalise(weights: Dict[str, Decimal], notes: List[str]) -> Dict[str, Decimal]:
        total = dsum(weights.values())
        if total <= 0:
            notes.append("no usable model weight: fallback weights applied")
            return dict(AGGREGATOR_FALLBACK_WEIGHTS)
        return {name: weight / total for name, weight in weights.items()}


# Name used by the recommendation layer and the public API
ValuationService = IntrinsicValueAggregator
