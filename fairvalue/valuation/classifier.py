"""
Heuristic classification of a fundamentals snapshot.

One shared set of rules feeds every consumer: the Score model weights,
the Comparable model weight profile, the DCF sector growth factor and the
recommendation engine's thresholds and primary horizon. Rules are
evaluated top to bottom and the first match wins.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from fairvalue.domain.instrument import FundamentalData
from fairvalue.logging_config import get_logger

logger = get_logger(__name__)

D = Decimal


class Sector(Enum):
    """Sector inferred from financial shape."""

    TECHNOLOGY = "Technology"
    UTILITIES = "Utilities"
    FINANCIAL = "Financial"
    HEALTHCARE = "Healthcare"
    CONSUMER = "Consumer"
    INDUSTRIAL = "Industrial"
    OTHER = "Other"

    def __str__(self) -> str:
        return self.value


class CompanyType(Enum):
    """Company profile used to perturb Score model weights."""

    UNPROFITABLE = "Unprofitable"
    HIGH_GROWTH = "HighGrowth"
    INCOME = "Income"
    AGGRESSIVE = "Aggressive"
    VALUE = "Value"
    DEFENSIVE = "Defensive"
    BALANCED = "Balanced"

    def __str__(self) -> str:
        return self.value


class InvestmentStyle(Enum):
    """Investment style that selects the primary recommendation horizon."""

    GROWTH = "Growth"
    QUALITY = "Quality"
    VALUE = "Value"
    BLEND = "Blend"
    CYCLICAL = "Cyclical"
    MOMENTUM = "Momentum"
    TURNAROUND = "Turnaround"
    SPECULATIVE = "Speculative"
    EVENT_DRIVEN = "EventDriven"

    def __str__(self) -> str:
        return self.value


class ComparableProfile(Enum):
    """Profile that selects the Comparable model weight vector."""

    STABLE_PROFITABLE = "stable_profitable"
    GROWTH = "growth"
    DISTRESSED = "distressed"
    VALUE = "value"
    HIGH_MARGIN = "high_margin"

    def __str__(self) -> str:
        return self.value


def classify_sector(data: FundamentalData) -> Sector:
    dividend_yield = data.dividend.dividend_yield
    beta = data.market_risk.beta
    leverage = data.stability.debt_to_equity
    gross_margin = data.profitability.gross_margin
    net_margin = data.profitability.net_margin
    operating_margin = data.profitability.operating_margin

    if dividend_yield > D("0.035") and 0 < beta < D("0.7") and leverage > 1:
        return Sector.UTILITIES
    if leverage > 3 and 0 < data.valuation.pb < 2:
        return Sector.FINANCIAL
    if gross_margin > D("0.55") and data.growth.revenue_growth > D("0.10"):
        return Sector.TECHNOLOGY
    if gross_margin > D("0.60") and 0 < beta < 1:
        return Sector.HEALTHCARE
    if D("0.20") <= gross_margin <= D("0.50") and 0 < net_margin < D("0.08"):
        return Sector.CONSUMER
    if D("0.05") <= operating_margin <= D("0.15") and D("0.5") <= leverage <= 2:
        return Sector.INDUSTRIAL
    return Sector.OTHER


def classify_company_type(data: FundamentalData) -> CompanyType:
    if data.earnings.eps <= 0 or data.profitability.net_margin < 0:
        return CompanyType.UNPROFITABLE
    if data.growth.predicted_eps_growth > D("0.20") or data.growth.revenue_growth > D("0.20"):
        return CompanyType.HIGH_GROWTH
    if data.dividend.dividend_yield > D("0.04"):
        return CompanyType.INCOME
    if data.market_risk.beta > D("1.5") or data.stability.debt_to_equity > 2:
        return CompanyType.AGGRESSIVE
    if 0 < data.valuation.pe < 12 or 0 < data.valuation.pb < D("1.2"):
        return CompanyType.VALUE
    if 0 < data.market_risk.beta < D("0.8") and data.stability.debt_to_equity < 1:
        return CompanyType.DEFENSIVE
    return CompanyType.BALANCED


def classify_investment_style(data: FundamentalData) -> InvestmentStyle:
    company_type = classify_company_type(data)

    if company_type is CompanyType.HIGH_GROWTH:
        style = InvestmentStyle.GROWTH
    elif company_type in (CompanyType.VALUE, CompanyType.INCOME):
        style = InvestmentStyle.VALUE
    elif company_type is CompanyType.DEFENSIVE:
        style = InvestmentStyle.QUALITY
    elif company_type is CompanyType.BALANCED:
        profitable = (
            data.profitability.roe > D("0.15") and data.profitability.net_margin > D("0.10")
        )
        style = InvestmentStyle.QUALITY if profitable else InvestmentStyle.BLEND
    elif company_type is CompanyType.AGGRESSIVE:
        cyclical = classify_sector(data) in (Sector.INDUSTRIAL, Sector.CONSUMER, Sector.FINANCIAL)
        style = InvestmentStyle.CYCLICAL if cyclical else InvestmentStyle.MOMENTUM
    elif data.growth.profit_growth > 0:
        style = InvestmentStyle.TURNAROUND
    else:
        style = InvestmentStyle.SPECULATIVE

    if style is not InvestmentStyle.GROWTH and data.sentiment.insider_buying >= D("0.7"):
        style = InvestmentStyle.EVENT_DRIVEN

    logger.debug("Investment style %s (company type %s)", style, company_type)
    return style


def classify_comparable_profile(data: FundamentalData) -> ComparableProfile:
    if data.earnings.eps <= 0:
        if data.stability.debt_to_equity > 2 or data.growth.revenue_growth <= D("0.15"):
            return ComparableProfile.DISTRESSED
        return ComparableProfile.GROWTH
    if data.growth.predicted_eps_growth > D("0.15"):
        return ComparableProfile.GROWTH
    if 0 < data.valuation.pe < 12:
        return ComparableProfile.VALUE
    if data.profitability.net_margin > D("0.20"):
        return ComparableProfile.HIGH_MARGIN
    return ComparableProfile.STABLE_PROFITABLE
