"""
Signals that feed the recommendation engine.

Each signal reads one instrument's fundamentals or price history and
returns either a 0-10 score or a small assessment object. Missing inputs
degrade to neutral values instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Sequence, Tuple

from fairvalue.constants import (
    DEFAULT_SECTOR_GROWTH,
    DEFAULT_SECTOR_NET_MARGIN,
    DEFAULT_SECTOR_ROE,
    MAX_SCORE,
    MIN_MOMENTUM_HISTORY_DAYS,
    MOMENTUM_BUCKETS,
    MOMENTUM_FLOOR_SCORE,
    MOMENTUM_LONG_WEIGHT,
    MOMENTUM_SHORT_WEIGHT,
    NEUTRAL_SCORE,
    ONE,
    QUALITY_HIGH_LEVERAGE,
    QUALITY_MAX_LEVERAGE,
    QUALITY_MAX_SUSTAINABLE_PAYOUT,
    QUALITY_MIN_CURRENT_RATIO,
    QUALITY_MIN_INTEREST_COVERAGE,
    QUALITY_MIN_NET_MARGIN,
    QUALITY_MIN_ROE,
    QUALITY_NEGATIVE_CONSENSUS,
    QUALITY_POSITIVE_CONSENSUS,
    QUALITY_STRONG_EPS_GROWTH,
    QUALITY_STRONG_REVENUE_GROWTH,
    QUALITY_UNSUSTAINABLE_PAYOUT,
    QUALITY_WEAK_ROE,
    RISK_BETA_POINTS,
    RISK_HIGH_BETA_FLOOR,
    RISK_LABEL_BUCKETS,
    RISK_LEVERAGE_POINTS,
    RISK_MAX_POINTS,
    RISK_MIN_INTEREST_COVERAGE,
    RISK_VERY_HIGH_BETA_FLOOR,
    RISK_VOLATILITY_POINTS,
    SECTOR_POSITION_BUCKETS,
    TECHNICAL_PLACEHOLDER_SCORE,
    TRADING_DAYS_PER_MONTH,
    TRADING_DAYS_PER_QUARTER,
    VALUATION_GRADE_BUCKETS,
    VALUATION_GRADE_FLOOR,
    ZERO,
)
from fairvalue.core.numeric import clamp, dsum, first_nonzero, first_positive, safe_div
from fairvalue.domain.instrument import FundamentalData, PriceData
from fairvalue.domain.recommendation import RiskLevel, SectorPosition
from fairvalue.logging_config import get_logger

logger = get_logger(__name__)


# =============================================================================
# Momentum & technical
# =============================================================================

def period_return(history: Sequence[PriceData], bars_back: int) -> Decimal:
    """Return over `bars_back` bars of a newest-first history."""
    latest = history[0].close
    reference = history[bars_back].close
    return safe_div(latest - reference, reference)


def bucket_return(value: Decimal) -> Decimal:
    for floor, score in MOMENTUM_BUCKETS:
        if value > floor:
            return score
    return MOMENTUM_FLOOR_SCORE


def momentum_score(history: Sequence[PriceData]) -> Decimal:
    """
    Price momentum on a 0-10 scale.

    Blends the 1-month (60%) and 3-month (40%) return buckets. Returns 0
    when fewer than 90 bars are available; callers treat 0 as "no signal".

    Args:
        history: Price bars in any order
    """
    if len(history) < MIN_MOMENTUM_HISTORY_DAYS:
        return ZERO

    bars = sorted(history, key=lambda bar: bar.date, reverse=True)
    one_month = period_return(bars, TRADING_DAYS_PER_MONTH)
    three_month = period_return(bars, TRADING_DAYS_PER_QUARTER)
    score = (
        MOMENTUM_SHORT_WEIGHT * bucket_return(one_month)
        + MOMENTUM_LONG_WEIGHT * bucket_return(three_month)
    )
    logger.debug("Momentum: 1m=%.4f 3m=%.4f -> %.2f", one_month, three_month, score)
    return score


def technical_score(history: Sequence[PriceData]) -> Decimal:
    """Neutral placeholder; no technical analysis is performed."""
    return TECHNICAL_PLACEHOLDER_SCORE


# =============================================================================
# Quality
# =============================================================================

@dataclass
class QualityAssessment:
    """Quality flags with human-readable strengths and weaknesses."""

    above_median_profitability: bool = False
    strong_growth: bool = False
    solid_balance_sheet: bool = False
    sustainable_dividend: bool = False
    positive_sentiment: bool = False
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)

    @property
    def is_high_quality(self) -> bool:
        return (
            self.above_median_profitability
            and self.solid_balance_sheet
            and len(self.strengths) > len(self.weaknesses)
        )

    @property
    def score(self) -> Decimal:
        """5 + strengths - weaknesses, +1 for high quality, within 0-10."""
        raw = NEUTRAL_SCORE + len(self.strengths) - len(self.weaknesses)
        if self.is_high_quality:
            raw += ONE
        return clamp(raw, ZERO, MAX_SCORE)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "above_median_profitability": self.above_median_profitability,
            "strong_growth": self.strong_growth,
            "solid_balance_sheet": self.solid_balance_sheet,
            "sustainable_dividend": self.sustainable_dividend,
            "positive_sentiment": self.positive_sentiment,
            "is_high_quality": self.is_high_quality,
            "score": self.score,
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
        }


def assess_quality(data: FundamentalData) -> QualityAssessment:
    p, g, s, d = data.profitability, data.growth, data.stability, data.dividend
    consensus = data.sentiment.analyst_consensus
    result = QualityAssessment()

    if p.roe > QUALITY_MIN_ROE and p.net_margin > QUALITY_MIN_NET_MARGIN:
        result.above_median_profitability = True
        result.strengths.append(f"Above-median profitability (ROE {p.roe:.1%}, net margin {p.net_margin:.1%})")

    if g.revenue_growth > QUALITY_STRONG_REVENUE_GROWTH or g.predicted_eps_growth > QUALITY_STRONG_EPS_GROWTH:
        result.strong_growth = True
        result.strengths.append(
            f"Strong growth (revenue {g.revenue_growth:.1%}, expected EPS {g.predicted_eps_growth:.1%})"
        )

    liquid = s.current_ratio <= 0 or s.current_ratio > QUALITY_MIN_CURRENT_RATIO
    if 0 <= s.debt_to_equity < QUALITY_MAX_LEVERAGE and liquid:
        result.solid_balance_sheet = True
        result.strengths.append(f"Solid balance sheet (debt/equity {s.debt_to_equity:.2f})")

    if 0 < d.payout_ratio < QUALITY_MAX_SUSTAINABLE_PAYOUT:
        result.sustainable_dividend = True
        result.strengths.append(f"Sustainable dividend (payout {d.payout_ratio:.0%})")

    if consensus >= QUALITY_POSITIVE_CONSENSUS:
        result.positive_sentiment = True
        result.strengths.append(f"Positive analyst sentiment (consensus {consensus:.1f}/5)")

    if (p.roe != 0 and p.roe < QUALITY_WEAK_ROE) or p.net_margin < 0:
        result.weaknesses.append(f"Weak profitability (ROE {p.roe:.1%}, net margin {p.net_margin:.1%})")
    if g.revenue_growth < 0:
        result.weaknesses.append(f"Declining revenue ({g.revenue_growth:.1%})")
    if s.debt_to_equity > QUALITY_HIGH_LEVERAGE:
        result.weaknesses.append(f"High leverage (debt/equity {s.debt_to_equity:.2f})")
    if d.payout_ratio > QUALITY_UNSUSTAINABLE_PAYOUT:
        result.weaknesses.append(f"Unsustainable payout ({d.payout_ratio:.0%})")
    if 0 < consensus < QUALITY_NEGATIVE_CONSENSUS:
        result.weaknesses.append(f"Negative analyst sentiment (consensus {consensus:.1f}/5)")
    if 0 < s.interest_coverage < QUALITY_MIN_INTEREST_COVERAGE:
        result.weaknesses.append(f"Thin interest coverage ({s.interest_coverage:.1f}x)")

    return result


# =============================================================================
# Valuation vs sector
# =============================================================================

def grade_ratio(ratio: Decimal) -> Decimal:
    for ceiling, score in VALUATION_GRADE_BUCKETS:
        if ratio < ceiling:
            return score
    return VALUATION_GRADE_FLOOR


def valuation_grade(data: FundamentalData) -> Decimal:
    """Average bucket grade of company/sector multiples; 5 when none is comparable."""
    v, c = data.valuation, data.comparable
    pairs = (
        (v.pe, c.sector_average_pe),
        (v.ev_ebitda, c.peer_ev_ebitda),
        (v.price_sales, c.sector_price_sales),
        (v.pb, c.sector_price_book),
    )
    grades = [grade_ratio(company / sector) for company, sector in pairs if company > 0 and sector > 0]
    if not grades:
        return NEUTRAL_SCORE
    return dsum(grades) / Decimal(len(grades))


# =============================================================================
# Risk
# =============================================================================

@dataclass
class RiskAssessment:
    points: int
    level: RiskLevel
    factors: List[str] = field(default_factory=list)


def _points(value: Decimal, buckets: Tuple) -> int:
    for floor, points in buckets:
        if value > floor:
            return points
    return 0


def risk_level_for(points: int, beta: Decimal) -> RiskLevel:
    """Label from points, floored by the beta tier."""
    level = RiskLevel.VERY_HIGH
    for ceiling, label in RISK_LABEL_BUCKETS:
        if points < ceiling:
            level = RiskLevel(label)
            break
    if beta > RISK_VERY_HIGH_BETA_FLOOR:
        return RiskLevel.VERY_HIGH
    if beta > RISK_HIGH_BETA_FLOOR:
        return RiskLevel.at_least(level, RiskLevel.HIGH)
    return level


def assess_risk(data: FundamentalData) -> RiskAssessment:
    beta = data.market_risk.beta
    volatility = data.market_risk.volatility
    s = data.stability
    factors = []

    beta_points = _points(beta, RISK_BETA_POINTS)
    if beta_points:
        factors.append(f"Beta {beta:.2f}")
    volatility_points = _points(volatility, RISK_VOLATILITY_POINTS)
    if volatility_points:
        factors.append(f"Volatility {volatility:.0%}")
    leverage_points = _points(s.debt_to_equity, RISK_LEVERAGE_POINTS)
    if leverage_points:
        factors.append(f"Debt/equity {s.debt_to_equity:.2f}")
    liquidity_points = 1 if 0 < s.current_ratio < 1 else 0
    if liquidity_points:
        factors.append(f"Current ratio {s.current_ratio:.2f}")
    coverage_points = 1 if 0 < s.interest_coverage < RISK_MIN_INTEREST_COVERAGE else 0
    if coverage_points:
        factors.append(f"Interest coverage {s.interest_coverage:.1f}x")

    points = min(
        RISK_MAX_POINTS,
        beta_points + volatility_points + leverage_points + liquidity_points + coverage_points,
    )
    return RiskAssessment(points=points, level=risk_level_for(points, beta), factors=factors)


# =============================================================================
# Sector position
# =============================================================================

def sector_position(data: FundamentalData) -> Tuple[SectorPosition, Decimal]:
    """
    Standing against sector averages.

    Returns:
        (label, average company/sector ratio); Average with ratio 1 when no
        comparison is possible
    """
    p, c, g = data.profitability, data.comparable, data.growth
    growth = first_nonzero(g.revenue_growth, g.predicted_eps_growth)
    pairs = (
        (p.roe, first_positive(c.sector_average_roe, DEFAULT_SECTOR_ROE)),
        (p.net_margin, first_positive(c.sector_average_net_margin, DEFAULT_SECTOR_NET_MARGIN)),
        (growth, first_positive(c.sector_average_growth, DEFAULT_SECTOR_GROWTH)),
    )
    ratios = [company / sector for company, sector in pairs if company != 0]
    if not ratios:
        return SectorPosition.AVERAGE, ONE

    ratio = dsum(ratios) / Decimal(len(ratios))
    for floor, label in SECTOR_POSITION_BUCKETS:
        if ratio > floor:
            return SectorPosition(label), ratio
    return SectorPosition.LAGGARD, ratio
