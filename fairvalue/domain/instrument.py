"""
Instrument aggregate: fundamentals snapshot, price history and the
latest recommendation for one tradable symbol.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from fairvalue.constants import ZERO
from fairvalue.core.numeric import Number, to_decimal
from fairvalue.domain.metrics import (
    CashFlowMetrics,
    ComparableMetrics,
    CostOfCapitalMetrics,
    DividendMetrics,
    EarningsMetrics,
    GrowthMetrics,
    MarketRiskMetrics,
    ProfitabilityMetrics,
    RevenueMetrics,
    SentimentMetrics,
    StabilityMetrics,
    ValuationMetrics,
)

if TYPE_CHECKING:
    from fairvalue.domain.recommendation import Recommendation


@dataclass(frozen=True)
class FundamentalData:
    """
    Immutable snapshot of every fundamental metric group.

    `price` is the last traded price. It is not part of the provider
    snapshot; valuation layers inject it with `with_price()`.
    """

    valuation: ValuationMetrics = field(default_factory=ValuationMetrics)
    growth: GrowthMetrics = field(default_factory=GrowthMetrics)
    profitability: ProfitabilityMetrics = field(default_factory=ProfitabilityMetrics)
    stability: StabilityMetrics = field(default_factory=StabilityMetrics)
    dividend: DividendMetrics = field(default_factory=DividendMetrics)
    market_risk: MarketRiskMetrics = field(default_factory=MarketRiskMetrics)
    sentiment: SentimentMetrics = field(default_factory=SentimentMetrics)
    comparable: ComparableMetrics = field(default_factory=ComparableMetrics)
    earnings: EarningsMetrics = field(default_factory=EarningsMetrics)
    revenue: RevenueMetrics = field(default_factory=RevenueMetrics)
    cash_flow: CashFlowMetrics = field(default_factory=CashFlowMetrics)
    cost_of_capital: CostOfCapitalMetrics = field(default_factory=CostOfCapitalMetrics)
    price: Decimal = ZERO

    def __post_init__(self) -> None:
        if not isinstance(self.price, Decimal):
            object.__setattr__(self, "price", to_decimal(self.price))

    def with_price(self, price: Number) -> "FundamentalData":
        """Return a copy carrying `price`; the original is left untouched."""
        return replace(self, price=to_decimal(price))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary."""
        return {
            "price": self.price,
            "valuation": self.valuation.to_dict(),
            "growth": self.growth.to_dict(),
            "profitability": self.profitability.to_dict(),
            "stability": self.stability.to_dict(),
            "dividend": self.dividend.to_dict(),
            "market_risk": self.market_risk.to_dict(),
            "sentiment": self.sentiment.to_dict(),
            "comparable": self.comparable.to_dict(),
            "earnings": self.earnings.to_dict(),
            "revenue": self.revenue.to_dict(),
            "cash_flow": self.cash_flow.to_dict(),
            "cost_of_capital": self.cost_of_capital.to_dict(),
        }


@dataclass(frozen=True)
class PriceData:
    """One OHLCV bar."""

    date: date
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: int = 0

    def __post_init__(self) -> None:
        for name in ("open", "high", "low", "close"):
            value = getattr(self, name)
            if not isinstance(value, Decimal):
                object.__setattr__(self, name, to_decimal(value))

    @classmethod
    def from_close(cls, bar_date: date, close: Number, volume: int = 0) -> "PriceData":
        """Build a flat bar where open/high/low equal the close."""
        value = to_decimal(close)
        return cls(date=bar_date, open=value, high=value, low=value, close=value, volume=volume)


class InvestmentInstrument:
    """
    A tradable instrument (stock, ETF).

    Fundamentals are replaced wholesale, price bars are only ever appended,
    and the current recommendation is replaced by each new evaluation.
    """

    def __init__(self, symbol: str, name: str = ""):
        if not symbol:
            raise ValueError("symbol must not be empty")
        self.symbol = symbol
        self.name = name or symbol
        self.fundamental_data: Optional[FundamentalData] = None
        self.price_history: List[PriceData] = []
        self.current_recommendation: Optional["Recommendation"] = None

    def __repr__(self) -> str:
        return (
            f"InvestmentInstrument(symbol={self.symbol!r}, "
            f"bars={len(self.price_history)}, "
            f"has_fundamentals={self.fundamental_data is not None})"
        )

    def update_fundamental_data(self, data: FundamentalData) -> None:
        self.fundamental_data = data

    def add_price_data(self, bar: PriceData) -> None:
        self.price_history.append(bar)

    def set_recommendation(self, recommendation: "Recommendation") -> None:
        self.current_recommendation = recommendation

    def sorted_history(self) -> List[PriceData]:
        """Price bars ordered newest first."""
        return sorted(self.price_history, key=lambda bar: bar.date, reverse=True)

    @property
    def last_price(self) -> Optional[Decimal]:
        """Close of the most recent bar, or None without history."""
        if not self.price_history:
            return None
        return max(self.price_history, key=lambda bar: bar.date).close

    def priced_fundamentals(self) -> Optional[FundamentalData]:
        """
        Fundamentals with the last close injected as price.

        Falls back to the snapshot's own price when there is no history.
        """
        if self.fundamental_data is None:
            return None
        price = self.last_price
        if price is None:
            return self.fundamental_data
        return self.fundamental_data.with_price(price)
