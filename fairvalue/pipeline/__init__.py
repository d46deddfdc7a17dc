"""Batch and async evaluation pipelines."""

from fairvalue.pipeline.batch import (
    BatchResult,
    evaluate_instruments,
    evaluate_instruments_async,
    generate_recommendation_async,
)

__all__ = [
    "BatchResult",
    "evaluate_instruments",
    "evaluate_instruments_async",
    "generate_recommendation_async",
]
