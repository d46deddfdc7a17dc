"""
Fundamental metric value objects.

Every group is a frozen dataclass whose numeric fields default to zero.
Zero (or a negative value for a conceptually positive metric) means the
metric is missing and disables the formulas that depend on it. Rates are
fractions: 0.05 means 5%.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from decimal import Decimal
from typing import Any, Dict

from fairvalue.constants import ZERO
from fairvalue.core.numeric import to_decimal


class _DecimalMetrics:
    """Coerces int/float/str field values to Decimal after construction."""

    def __post_init__(self) -> None:
        for field_ in fields(self):
            if field_.type != "Decimal":
                continue
            value = getattr(self, field_.name)
            if not isinstance(value, Decimal):
                object.__setattr__(self, field_.name, to_decimal(value))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class ValuationMetrics(_DecimalMetrics):
    pe: Decimal = ZERO
    pb: Decimal = ZERO
    ev_ebitda: Decimal = ZERO
    ev_ebit: Decimal = ZERO
    price_sales: Decimal = ZERO
    price_cash_flow: Decimal = ZERO
    forward_eps: Decimal = ZERO
    book_value_per_share: Decimal = ZERO
    peg: Decimal = ZERO


@dataclass(frozen=True)
class GrowthMetrics(_DecimalMetrics):
    historical_eps_growth: Decimal = ZERO
    predicted_eps_growth: Decimal = ZERO
    revenue_growth: Decimal = ZERO
    profit_growth: Decimal = ZERO
    dividend_growth: Decimal = ZERO
    predicted_fcf_growth: Decimal = ZERO
    long_term_growth_rate: Decimal = ZERO

    @property
    def earnings_growth(self) -> Decimal:
        """Alias used by the aggregator and the recommendation rationale."""
        return self.profit_growth


@dataclass(frozen=True)
class ProfitabilityMetrics(_DecimalMetrics):
    roe: Decimal = ZERO
    roa: Decimal = ZERO
    gross_margin: Decimal = ZERO
    operating_margin: Decimal = ZERO
    net_margin: Decimal = ZERO
    roic: Decimal = ZERO
    asset_turnover: Decimal = ZERO
    margin_trend: Decimal = ZERO  # > 0 expanding, < 0 contracting


@dataclass(frozen=True)
class StabilityMetrics(_DecimalMetrics):
    debt_to_equity: Decimal = ZERO
    current_ratio: Decimal = ZERO
    quick_ratio: Decimal = ZERO
    interest_coverage: Decimal = ZERO
    earnings_stability: Decimal = ZERO  # 0-1
    is_data_verified: bool = False


@dataclass(frozen=True)
class DividendMetrics(_DecimalMetrics):
    dividend_yield: Decimal = ZERO
    payout_ratio: Decimal = ZERO
    dividend_growth: Decimal = ZERO
    current_annual_dividend: Decimal = ZERO  # per share

    @property
    def pays_dividend(self) -> bool:
        return self.current_annual_dividend > 0 or self.dividend_yield > 0


@dataclass(frozen=True)
class MarketRiskMetrics(_DecimalMetrics):
    beta: Decimal = ZERO
    sharpe_ratio: Decimal = ZERO
    standard_deviation: Decimal = ZERO  # annualised

    @property
    def volatility(self) -> Decimal:
        return self.standard_deviation


@dataclass(frozen=True)
class SentimentMetrics(_DecimalMetrics):
    analyst_consensus: Decimal = ZERO  # 1-5, 5 = strong buy
    institutional_ownership: Decimal = ZERO  # 0-1
    insider_buying: Decimal = ZERO  # 0-1
    media_sentiment_score: Decimal = ZERO  # -1..1
    consensus_target_price: Decimal = ZERO
    analyst_recommendation: str = ""


@dataclass(frozen=True)
class ComparableMetrics(_DecimalMetrics):
    sector_average_pe: Decimal = ZERO
    sector_forward_pe: Decimal = ZERO
    peer_ev_ebitda: Decimal = ZERO
    sector_price_sales: Decimal = ZERO
    sector_price_book: Decimal = ZERO
    sector_peg: Decimal = ZERO
    sector_ev_sales: Decimal = ZERO
    sector_price_fcf: Decimal = ZERO
    sector_average_roe: Decimal = ZERO
    sector_average_net_margin: Decimal = ZERO
    sector_average_growth: Decimal = ZERO


@dataclass(frozen=True)
class EarningsMetrics(_DecimalMetrics):
    eps: Decimal = ZERO
    forward_eps: Decimal = ZERO
    ebitda: Decimal = ZERO  # per share


@dataclass(frozen=True)
class RevenueMetrics(_DecimalMetrics):
    sales_per_share: Decimal = ZERO


@dataclass(frozen=True)
class CashFlowMetrics(_DecimalMetrics):
    current_fcf: Decimal = ZERO  # per share
    projected_fcf_growth: Decimal = ZERO


@dataclass(frozen=True)
class CostOfCapitalMetrics(_DecimalMetrics):
    wacc: Decimal = ZERO  # reported only, the DCF derives its own
    required_return_on_equity: Decimal = ZERO
