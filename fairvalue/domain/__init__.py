"""Domain model: metric value objects, instruments and recommendations."""

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
from fairvalue.domain.recommendation import (
    Recommendation,
    RecommendationAction,
    RiskLevel,
    SectorPosition,
)

__all__ = [
    "CashFlowMetrics",
    "ComparableMetrics",
    "CostOfCapitalMetrics",
    "DividendMetrics",
    "EarningsMetrics",
    "FundamentalData",
    "GrowthMetrics",
    "InvestmentInstrument",
    "MarketRiskMetrics",
    "PriceData",
    "ProfitabilityMetrics",
    "Recommendation",
    "RecommendationAction",
    "RevenueMetrics",
    "RiskLevel",
    "SectorPosition",
    "SentimentMetrics",
    "StabilityMetrics",
    "ValuationMetrics",
]
