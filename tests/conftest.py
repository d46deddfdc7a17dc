"""
Pytest configuration and fixtures for the Fair Value Advisor tests.
"""

import logging
import sys
from dataclasses import replace
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path

import pytest

# Add project root to Python path so imports work
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from fairvalue.domain.instrument import FundamentalData, InvestmentInstrument, PriceData
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


# A profitable, moderately growing, dividend-paying company priced at 100.
# Classifies as sector Other, company type Balanced, style Quality.
BASE_GROUPS = {
    "valuation": ValuationMetrics(
        pe=18, pb=3, ev_ebitda=12, price_sales=3, book_value_per_share=33, peg=1.5,
    ),
    "growth": GrowthMetrics(
        predicted_eps_growth=0.08, revenue_growth=0.06, profit_growth=0.07,
        dividend_growth=0.05, predicted_fcf_growth=0.07, long_term_growth_rate=0.025,
    ),
    "profitability": ProfitabilityMetrics(
        roe=0.18, roa=0.08, gross_margin=0.45, operating_margin=0.18, net_margin=0.12, roic=0.14,
    ),
    "stability": StabilityMetrics(
        debt_to_equity=0.6, current_ratio=1.8, quick_ratio=1.2, interest_coverage=10,
        earnings_stability=0.8,
    ),
    "dividend": DividendMetrics(
        dividend_yield=0.02, payout_ratio=0.35, dividend_growth=0.05, current_annual_dividend=2,
    ),
    "market_risk": MarketRiskMetrics(beta=1.0, sharpe_ratio=0.8, standard_deviation=0.22),
    "sentiment": SentimentMetrics(
        analyst_consensus=3.5, institutional_ownership=0.6, insider_buying=0.2,
        media_sentiment_score=0.1,
    ),
    "comparable": ComparableMetrics(
        sector_average_pe=20, peer_ev_ebitda=13, sector_price_sales=3, sector_price_book=3.2,
        sector_average_roe=0.15, sector_average_net_margin=0.10, sector_average_growth=0.08,
    ),
    "earnings": EarningsMetrics(eps=5.5, forward_eps=6.0, ebitda=8.5),
    "revenue": RevenueMetrics(sales_per_share=33),
    "cash_flow": CashFlowMetrics(current_fcf=5, projected_fcf_growth=0.07),
    "cost_of_capital": CostOfCapitalMetrics(wacc=0.08, required_return_on_equity=0.09),
}


def build_fundamentals(price=100, **groups):
    """
    Build a FundamentalData from the base company.

    Each keyword names a metric group; a dict is merged into the base
    group, a metrics instance replaces it outright.
    """
    values = {}
    for name, base in BASE_GROUPS.items():
        override = groups.pop(name, None)
        if override is None:
            values[name] = base
        elif isinstance(override, dict):
            values[name] = replace(base, **override)
        else:
            values[name] = override
    if groups:
        raise TypeError(f"Unknown metric groups: {sorted(groups)}")
    return FundamentalData(price=Decimal(str(price)), **values)


def build_history(closes, start=date(2024, 1, 1)):
    """Daily bars, oldest first, one per close."""
    return [
        PriceData.from_close(start + timedelta(days=offset), close, volume=1_000_000)
        for offset, close in enumerate(closes)
    ]


def build_instrument(symbol="TEST", price=100, closes=None, fundamentals=True, **groups):
    instrument = InvestmentInstrument(symbol, f"{symbol} Corp")
    if fundamentals:
        instrument.update_fundamental_data(build_fundamentals(price=price, **groups))
    for bar in build_history(closes if closes is not None else [price]):
        instrument.add_price_data(bar)
    return instrument


class StubValuation:
    """Valuation service returning a fixed intrinsic value."""

    def __init__(self, value):
        self.value = Decimal(str(value))
        self.calls = 0

    def calculate_intrinsic_value(self, instrument):
        self.calls += 1
        return self.value


class StubModel:
    """Valuation model returning a fixed per-share value."""

    def __init__(self, value):
        self.value = Decimal(str(value))

    def calculate(self, data):
        return self.value


@pytest.fixture
def make_fundamentals():
    """Return the FundamentalData builder."""
    return build_fundamentals


@pytest.fixture
def make_history():
    """Return the price history builder."""
    return build_history


@pytest.fixture
def make_instrument():
    """Return the InvestmentInstrument builder."""
    return build_instrument


@pytest.fixture
def base_data():
    """The base company priced at 100."""
    return build_fundamentals()


@pytest.fixture
def stub_valuation():
    """Return the StubValuation class."""
    return StubValuation


@pytest.fixture
def stub_model():
    """Return the StubModel class."""
    return StubModel


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way pytest configured it."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
