"""
Score Valuation Model - multi-factor quality score converted to a price.

Eight category scores (0-10) are combined with weights that depend on the
sector and company type. The composite is mapped to a price adjustment
between -50% and +100% of the last price.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

from fairvalue.config import Config, config as default_config
from fairvalue.constants import (
    MARGIN_TREND_BONUS,
    MAX_SCORE,
    NEUTRAL_SCORE,
    ONE,
    SCORE_ANCHORS,
    SCORE_BASE_WEIGHTS,
    SCORE_CATEGORIES,
    SCORE_COMPANY_TYPE_ADJUSTMENTS,
    SCORE_INVERSE_ANCHORS,
    SCORE_SECTOR_ADJUSTMENTS,
    STUB_CATEGORY_SCORE,
    ZERO,
)
from fairvalue.core.numeric import clamp, dsum, safe_div
from fairvalue.domain.instrument import FundamentalData
from fairvalue.logging_config import get_logger
from fairvalue.valuation.classifier import (
    CompanyType,
    Sector,
    classify_company_type,
    classify_sector,
)

logger = get_logger(__name__)

TWO = Decimal("2")
FOUR = Decimal("4")
QUARTER = Decimal("0.25")
HALF = Decimal("0.5")
BAND = Decimal("2.5")


def higher_is_better(value: Decimal, median: Decimal, exceptional: Decimal) -> Decimal:
    """
    Score a metric where more is better.

    0 maps to 2, the median to 5, the exceptional anchor to 9, and larger
    values approach 10. Negative values fall from 2 towards 0.
    """
    if value < 0:
        return max(ZERO, TWO * (ONE + value / exceptional))
    if value <= median:
        return TWO + Decimal(3) * value / median
    if value <= exceptional:
        return NEUTRAL_SCORE + FOUR * (value - median) / (exceptional - median)
    return MAX_SCORE - exceptional / value


def lower_is_better(value: Decimal, exceptional: Decimal, median: Decimal) -> Decimal:
    """
    Score a metric where less is better.

    0 maps to 10, the exceptional anchor to 9, the median to 5, and larger
    values decay quadratically towards 0.
    """
    value = max(ZERO, value)
    if value <= exceptional:
        return MAX_SCORE - value / exceptional
    if value <= median:
        return Decimal(9) - FOUR * (value - exceptional) / (median - exceptional)
    return NEUTRAL_SCORE * (median / value) ** 2


def score_to_adjustment(score: Decimal) -> Decimal:
    """Map a 0-10 composite to a price adjustment in [-0.5, +1.0]."""
    score = clamp(score, ZERO, MAX_SCORE)
    if score <= BAND:
        return -HALF + QUARTER * (score / BAND) ** 2
    if score <= NEUTRAL_SCORE:
        return -QUARTER + QUARTER * (score - BAND) / BAND
    if score <= NEUTRAL_SCORE + BAND:
        return HALF * (score - NEUTRAL_SCORE) / BAND
    return HALF + HALF * ((score - NEUTRAL_SCORE - BAND) / BAND) ** 2


def _average(scores: List[Decimal]) -> Decimal:
    if not scores:
        return NEUTRAL_SCORE
    return dsum(scores) / Decimal(len(scores))


def _anchored(name: str, value: Decimal) -> Decimal:
    return higher_is_better(value, *SCORE_ANCHORS[name])


def _inverse(name: str, value: Decimal) -> Decimal:
    return lower_is_better(value, *SCORE_INVERSE_ANCHORS[name])


class ScoreModel:
    """Weighted multi-factor score translated into a per-share value."""

    def __init__(self, cfg: Optional[Config] = None):
        self.config = cfg or default_config

    # ------------------------------------------------------------------
    # Weights
    # ------------------------------------------------------------------

    @staticmethod
    def category_weights(sector: Sector, company_type: CompanyType) -> Dict[str, Decimal]:
        """Base weights perturbed by sector and company type, floored at 0 and normalised."""
        weights = dict(SCORE_BASE_WEIGHTS)
        for adjustments in (
            SCORE_SECTOR_ADJUSTMENTS.get(sector.value, {}),
            SCORE_COMPANY_TYPE_ADJUSTMENTS.get(company_type.value, {}),
        ):
            for category, delta in adjustments.items():
                weights[category] += delta

        weights = {category: max(ZERO, weight) for category, weight in weights.items()}
        total = dsum(weights.values())
        return {category: safe_div(weight, total) for category, weight in weights.items()}

    # ------------------------------------------------------------------
    # Category scores
    # ------------------------------------------------------------------

    @staticmethod
    def valuation_score(data: FundamentalData) -> Decimal:
        v, c = data.valuation, data.comparable
        pairs = (
            (v.pe, c.sector_average_pe),
            (v.ev_ebitda, c.peer_ev_ebitda),
            (v.price_sales, c.sector_price_sales),
            (v.pb, c.sector_price_book),
        )
        scores = [
            _inverse("relative_multiple", company / sector)
            for company, sector in pairs
            if company > 0 and sector > 0
        ]
        if v.peg > 0:
            scores.append(_inverse("peg", v.peg))
        return _average(scores)

    @staticmethod
    def growth_score(data: FundamentalData) -> Decimal:
        g = data.growth
        inputs = {
            "revenue_growth": g.revenue_growth,
            "eps_growth": g.predicted_eps_growth,
            "fcf_growth": g.predicted_fcf_growth,
            "profit_growth": g.profit_growth,
        }
        return _average([_anchored(name, value) for name, value in inputs.items() if value != 0])

    @staticmethod
    def quality_score(data: FundamentalData) -> Decimal:
        p = data.profitability
        inputs = {
            "roe": p.roe,
            "roa": p.roa,
            "net_margin": p.net_margin,
            "operating_margin": p.operating_margin,
            "roic": p.roic,
            "gross_margin": p.gross_margin,
        }
        scores = [_anchored(name, value) for name, value in inputs.items() if value != 0]
        if not scores:
            return NEUTRAL_SCORE

        score = _average(scores)
        if p.margin_trend > 0:
            score += MARGIN_TREND_BONUS
        elif p.margin_trend < 0:
            score -= MARGIN_TREND_BONUS
        return clamp(score, ZERO, MAX_SCORE)

    @staticmethod
    def financial_health_score(data: FundamentalData) -> Decimal:
        s = data.stability
        scores = []
        if s.debt_to_equity >= 0:
            scores.append(_inverse("debt_to_equity", s.debt_to_equity))
        for name, value in (
            ("current_ratio", s.current_ratio),
            ("quick_ratio", s.quick_ratio),
            ("interest_coverage", s.interest_coverage),
            ("earnings_stability", s.earnings_stability),
        ):
            if value > 0:
                scores.append(_anchored(name, value))
        return _average(scores)

    @staticmethod
    def risk_score(data: FundamentalData) -> Decimal:
        m = data.market_risk
        scores = []
        if m.beta > 0:
            scores.append(_inverse("beta", m.beta))
        if m.volatility > 0:
            scores.append(_inverse("volatility", m.volatility))
        if m.sharpe_ratio != 0:
            scores.append(_anchored("sharpe_ratio", m.sharpe_ratio))
        return _average(scores)

    @staticmethod
    def sentiment_score(data: FundamentalData) -> Decimal:
        s = data.sentiment
        scores = []
        if s.analyst_consensus > 0:
            scores.append(clamp((s.analyst_consensus - ONE) / FOUR * MAX_SCORE, ZERO, MAX_SCORE))
        if s.institutional_ownership > 0:
            scores.append(_anchored("institutional_ownership", s.institutional_ownership))
        if s.insider_buying > 0:
            scores.append(_anchored("insider_buying", s.insider_buying))
        if s.media_sentiment_score != 0:
            scores.append(clamp(NEUTRAL_SCORE + NEUTRAL_SCORE * s.media_sentiment_score, ZERO, MAX_SCORE))
        return _average(scores)

    def category_scores(self, data: FundamentalData) -> Dict[str, Decimal]:
        return {
            "valuation": self.valuation_score(data),
            "growth": self.growth_score(data),
            "quality": self.quality_score(data),
            "financial_health": self.financial_health_score(data),
            "risk": self.risk_score(data),
            "sentiment": self.sentiment_score(data),
            "liquidity": STUB_CATEGORY_SCORE,
            "esg": STUB_CATEGORY_SCORE,
        }

    # ------------------------------------------------------------------
    # Valuation
    # ------------------------------------------------------------------

    def project(self, data: FundamentalData) -> Dict[str, Any]:
        sector = classify_sector(data)
        company_type = classify_company_type(data)
        weights = self.category_weights(sector, company_type)
        scores = self.category_scores(data)

        composite = dsum(weights[c] * scores[c] for c in SCORE_CATEGORIES)
        adjustment = score_to_adjustment(composite)
        value = data.price * (ONE + adjustment) if data.price > 0 else ZERO

        logger.debug(
            "Score (%s/%s): composite=%.2f adj=%+.3f -> %.2f",
            sector, company_type, composite, adjustment, value,
        )
        return {
            "value_per_share": value,
            "sector": str(sector),
            "company_type": str(company_type),
            "weights": weights,
            "category_scores": scores,
            "composite_score": composite,
            "adjustment": adjustment,
        }

    def calculate(self, data: FundamentalData) -> Decimal:
        """Per-share score value; zero when no price is known."""
        return self.project(data)["value_per_share"]
