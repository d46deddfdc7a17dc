"""Valuation models and the intrinsic value aggregator."""

from fairvalue.valuation.classifier import (
    CompanyType,
    ComparableProfile,
    InvestmentStyle,
    Sector,
    classify_company_type,
    classify_comparable_profile,
    classify_investment_style,
    classify_sector,
)
from fairvalue.valuation.comparable import ComparableModel
from fairvalue.valuation.dcf import DCFModel
from fairvalue.valuation.ddm import DDMModel
from fairvalue.valuation.intrinsic import (
    IntrinsicValueAggregator,
    IntrinsicValueBreakdown,
    ValuationService,
)
from fairvalue.valuation.score import ScoreModel

__all__ = [
    "CompanyType",
    "ComparableModel",
    "ComparableProfile",
    "DCFModel",
    "DDMModel",
    "IntrinsicValueAggregator",
    "IntrinsicValueBreakdown",
    "InvestmentStyle",
    "ScoreModel",
    "Sector",
    "ValuationService",
    "classify_company_type",
    "classify_comparable_profile",
    "classify_investment_style",
    "classify_sector",
]
