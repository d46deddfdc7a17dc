"""Recommendation engine, its signals and thresholds."""

from fairvalue.recommendation.engine import HorizonOutlook, RecommendationEngine
from fairvalue.recommendation.thresholds import Thresholds, dynamic_thresholds, simple_thresholds

__all__ = [
    "HorizonOutlook",
    "RecommendationEngine",
    "Thresholds",
    "dynamic_thresholds",
    "simple_thresholds",
]
