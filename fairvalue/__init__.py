"""
Fair Value Advisor

Intrinsic value estimation (DCF, DDM, comparables, multi-factor score) and
graded multi-horizon recommendations for tradable instruments.
"""

from fairvalue.config import Config, config, configure
from fairvalue.core.exceptions import MissingDataError
from fairvalue.domain import (
    FundamentalData,
    InvestmentInstrument,
    PriceData,
    Recommendation,
    RecommendationAction,
    RiskLevel,
    SectorPosition,
)
from fairvalue.pipeline.batch import (
    BatchResult,
    evaluate_instruments,
    evaluate_instruments_async,
    generate_recommendation_async,
)
from fairvalue.recommendation.engine import RecommendationEngine
from fairvalue.valuation.intrinsic import IntrinsicValueAggregator, ValuationService

__version__ = "1.0.0"

__all__ = [
    "BatchResult",
    "Config",
    "FundamentalData",
    "IntrinsicValueAggregator",
    "InvestmentInstrument",
    "MissingDataError",
    "PriceData",
    "Recommendation",
    "RecommendationAction",
    "RecommendationEngine",
    "RiskLevel",
    "SectorPosition",
    "ValuationService",
    "config",
    "configure",
    "evaluate_instruments",
    "evaluate_instruments_async",
    "generate_recommendation_async",
]
