"""
Recommendation Engine - turns intrinsic value and market context into a
graded, multi-horizon recommendation.

Two modes are available:
    advanced  momentum, quality, valuation grade, risk and sector context
              drive three horizon outlooks; the investment style picks the
              headline horizon
    simple    fixed cutoffs on the raw valuation gap, a single 12-month
              horizon and a beta-based risk label
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional, Protocol

from fairvalue.config import Config, config as default_config
from fairvalue.constants import (
    DEFAULT_BETA,
    HIGH_RISK_TARGET_ADJUSTMENT,
    HORIZON_LABELS,
    HORIZON_SIGNAL_WEIGHTS,
    LONG_BULLISH_TARGET_ADJUSTMENT,
    NEUTRAL_SCORE,
    ONE,
    SIGNAL_DEVIATION_SCALE,
    SIMPLE_HIGH_BETA,
    SIMPLE_LOW_BETA,
    SIMPLE_TIME_HORIZON,
    ZERO,
)
from fairvalue.core.exceptions import MissingDataError
from fairvalue.core.numeric import dsum, round_money, to_decimal
from fairvalue.core.timing import Timer
from fairvalue.domain.instrument import InvestmentInstrument
from fairvalue.domain.recommendation import (
    Recommendation,
    RecommendationAction,
    RiskLevel,
    SectorPosition,
)
from fairvalue.logging_config import get_logger
from fairvalue.recommendation.signals import (
    QualityAssessment,
    RiskAssessment,
    assess_quality,
    assess_risk,
    momentum_score,
    sector_position,
    technical_score,
    valuation_grade,
)
from fairvalue.recommendation.thresholds import Thresholds, dynamic_thresholds, simple_thresholds
from fairvalue.valuation.classifier import (
    InvestmentStyle,
    Sector,
    classify_investment_style,
    classify_sector,
)
from fairvalue.valuation.intrinsic import IntrinsicValueAggregator

logger = get_logger(__name__)

HORIZONS = ("short", "mid", "long")

PRIMARY_HORIZON_BY_STYLE: Dict[InvestmentStyle, str] = {
    InvestmentStyle.GROWTH: "long",
    InvestmentStyle.QUALITY: "long",
    InvestmentStyle.VALUE: "long",
    InvestmentStyle.CYCLICAL: "mid",
    InvestmentStyle.MOMENTUM: "mid",
    InvestmentStyle.TURNAROUND: "mid",
    InvestmentStyle.SPECULATIVE: "short",
    InvestmentStyle.EVENT_DRIVEN: "short",
}


class IntrinsicValueSource(Protocol):
    def calculate_intrinsic_value(self, instrument: InvestmentInstrument) -> Decimal:
        ...


@dataclass(frozen=True)
class HorizonOutlook:
    """Action and target for one investment horizon."""

    horizon: str
    adjusted_deviation: Decimal
    action: RecommendationAction
    target_price: Decimal

    @property
    def label(self) -> str:
        return HORIZON_LABELS[self.horizon]

    def describe(self) -> str:
        return (
            f"{self.action.label}, target {self.target_price:.2f} "
            f"(adjusted deviation {self.adjusted_deviation:+.1f}%)"
        )


def primary_horizon(style: InvestmentStyle) -> str:
    return PRIMARY_HORIZON_BY_STYLE.get(style, "mid")


def adjusted_deviation(deviation_pct: Decimal, horizon: str, signals: Dict[str, Decimal]) -> Decimal:
    """
    Valuation gap shifted by the horizon's weighted signal tilt.

    Each signal contributes weight x (signal - 5); the sum is scaled by 2
    percentage points per score point.
    """
    weights = HORIZON_SIGNAL_WEIGHTS[horizon]
    order = ("momentum", "technical", "valuation", "quality")
    tilt = dsum(weight * (signals[name] - NEUTRAL_SCORE) for weight, name in zip(weights, order))
    return deviation_pct + SIGNAL_DEVIATION_SCALE * tilt


def target_adjustment(horizon: str, action: RecommendationAction, risk: RiskLevel) -> Decimal:
    if risk.is_elevated:
        return HIGH_RISK_TARGET_ADJUSTMENT
    if horizon == "long" and action.is_bullish:
        return LONG_BULLISH_TARGET_ADJUSTMENT
    return ONE


class RecommendationEngine:
    """
    Generates recommendations for instruments.

    The intrinsic value comes from an injected valuation service (the
    aggregator by default); everything else is derived from the
    instrument's fundamentals and price history.
    """

    def __init__(
        self,
        valuation_service: Optional[IntrinsicValueSource] = None,
        cfg: Optional[Config] = None,
        mode: Optional[str] = None,
    ):
        self.config = cfg or default_config
        self.valuation_service = valuation_service or IntrinsicValueAggregator(self.config)
        self.mode = (mode or self.config.recommendation_mode).lower()
        if self.mode not in ("advanced", "simple"):
            raise ValueError(f"Unknown recommendation mode: {self.mode!r}")

    def generate_recommendation(self, instrument: InvestmentInstrument) -> Recommendation:
        """
        Evaluate one instrument.

        Raises:
            MissingDataError: If fundamentals or price history are missing
        """
        if instrument.fundamental_data is None:
            raise MissingDataError(instrument.symbol, "fundamental data")
        if not instrument.price_history:
            raise MissingDataError(instrument.symbol, "price history")

        with Timer(f"Recommendation {instrument.symbol}", use_logging=True, level="DEBUG"):
            intrinsic = to_decimal(self.valuation_service.calculate_intrinsic_value(instrument))
            price = instrument.last_price
            deviation = (intrinsic / price - ONE) * Decimal(100) if price > 0 else ZERO

            if self.mode == "simple":
                recommendation = self._simple(instrument, intrinsic, price, deviation)
            else:
                recommendation = self._advanced(instrument, intrinsic, price, deviation)

        logger.info(
            "%s: %s (intrinsic %s, price %s, %+.1f%%)",
            instrument.symbol, recommendation.action.label, intrinsic, price, deviation,
        )
        return recommendation

    # ------------------------------------------------------------------
    # Simple mode
    # ------------------------------------------------------------------

    def _simple(
        self,
        instrument: InvestmentInstrument,
        intrinsic: Decimal,
        price: Decimal,
        deviation: Decimal,
    ) -> Recommendation:
        action = simple_thresholds().action_for(deviation)

        beta = instrument.fundamental_data.market_risk.beta
        if beta <= 0:
            beta = DEFAULT_BETA
        if beta > SIMPLE_HIGH_BETA:
            risk = RiskLevel.HIGH
        elif beta < SIMPLE_LOW_BETA:
            risk = RiskLevel.LOW
        else:
            risk = RiskLevel.MEDIUM

        rationale = (
            f"Intrinsic value {intrinsic:.2f}, current price {price:.2f}, "
            f"deviation {deviation:.2f}%"
        )
        return Recommendation(
            action=action,
            time_horizon=SIMPLE_TIME_HORIZON,
            target_price=round_money(intrinsic),
            rationale=rationale,
            risk_level=risk,
            intrinsic_value=intrinsic,
            deviation_pct=round_money(deviation),
        )

    # ------------------------------------------------------------------
    # Advanced mode
    # ------------------------------------------------------------------

    def _advanced(
        self,
        instrument: InvestmentInstrument,
        intrinsic: Decimal,
        price: Decimal,
        deviation: Decimal,
    ) -> Recommendation:
        data = instrument.priced_fundamentals()
        sector = classify_sector(data)
        style = classify_investment_style(data)

        momentum = momentum_score(instrument.price_history)
        quality = assess_quality(data)
        risk = assess_risk(data)
        position, _ = sector_position(data)
        signals = {
            "momentum": momentum if momentum > 0 else NEUTRAL_SCORE,
            "technical": technical_score(instrument.price_history),
            "valuation": valuation_grade(data),
            "quality": quality.score,
        }
        thresholds = dynamic_thresholds(
            data.market_risk.volatility, sector, self.config.reference_volatility
        )

        outlooks = {
            horizon: self._outlook(horizon, deviation, signals, thresholds, intrinsic, price, risk.level)
            for horizon in HORIZONS
        }
        primary = outlooks[primary_horizon(style)]
        logger.debug(
            "%s: sector=%s style=%s signals=%s primary=%s",
            instrument.symbol, sector, style, signals, primary.horizon,
        )

        return Recommendation(
            action=primary.action,
            time_horizon=primary.label,
            target_price=primary.target_price,
            rationale=self._rationale(intrinsic, price, deviation, quality, risk, position, sector, outlooks),
            risk_level=risk.level,
            sector_position=position,
            short_term_outlook=outlooks["short"].describe(),
            mid_term_outlook=outlooks["mid"].describe(),
            long_term_outlook=outlooks["long"].describe(),
            intrinsic_value=intrinsic,
            deviation_pct=round_money(deviation),
        )

    @staticmethod
    def _outlook(
        horizon: str,
        deviation: Decimal,
        signals: Dict[str, Decimal],
        thresholds: Thresholds,
        intrinsic: Decimal,
        price: Decimal,
        risk: RiskLevel,
    ) -> HorizonOutlook:
        adjusted = adjusted_deviation(deviation, horizon, signals)
        action = thresholds.action_for(adjusted)
        target = price + (intrinsic - price) * target_adjustment(horizon, action, risk)
        return HorizonOutlook(
            horizon=horizon,
            adjusted_deviation=adjusted,
            action=action,
            target_price=round_money(target),
        )

    @staticmethod
    def _rationale(
        intrinsic: Decimal,
        price: Decimal,
        deviation: Decimal,
        quality: QualityAssessment,
        risk: RiskAssessment,
        position: SectorPosition,
        sector: Sector,
        outlooks: Dict[str, HorizonOutlook],
    ) -> str:
        direction = "undervalued" if deviation > 0 else "overvalued" if deviation < 0 else "fairly valued"
        sections: List[str] = [
            f"Valuation: intrinsic value {intrinsic:.2f} vs price {price:.2f} "
            f"({deviation:+.1f}%, {direction})."
        ]
        if quality.strengths:
            sections.append("Strengths: " + "; ".join(quality.strengths) + ".")
        if quality.weaknesses:
            sections.append("Concerns: " + "; ".join(quality.weaknesses) + ".")
        risk_text = f"Risk: {risk.level}"
        if risk.factors:
            risk_text += " (" + ", ".join(risk.factors) + ")"
        sections.append(risk_text + ".")
        sections.append(f"Sector position: {position} within {sector}.")
        sections.append(
            "Outlook: " + " ".join(
                f"{outlook.label}: {outlook.describe()}." for outlook in outlooks.values()
            )
        )
        return "\n".join(sections)
