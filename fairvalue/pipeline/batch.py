"""
Batch evaluation of many instruments.

Every evaluation is a pure function of one instrument, so instruments are
fanned out over a thread pool with no ordering between them. Instruments
with structurally missing data are logged and reported per symbol; the
rest of the batch carries on.

Usage:
    from fairvalue.pipeline.batch import evaluate_instruments

    result = evaluate_instruments(instruments, assign=True)
    print(result.summary())
    df = result.to_dataframe()
"""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Protocol

import pandas as pd

from fairvalue.core.exceptions import MissingDataError
from fairvalue.core.timing import Timer
from fairvalue.domain.instrument import InvestmentInstrument
from fairvalue.domain.recommendation import Recommendation
from fairvalue.logging_config import get_logger
from fairvalue.recommendation.engine import RecommendationEngine

logger = get_logger(__name__)


class CancelSignal(Protocol):
    def is_set(self) -> bool:
        ...


@dataclass
class BatchResult:
    """Outcome of one batch run, keyed by symbol in input order."""

    recommendations: Dict[str, Recommendation] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)
    elapsed: float = 0.0

    @property
    def intrinsic_values(self) -> Dict[str, Decimal]:
        return {symbol: rec.intrinsic_value for symbol, rec in self.recommendations.items()}

    @property
    def succeeded(self) -> int:
        return len(self.recommendations)

    @property
    def failed(self) -> int:
        return len(self.errors)

    def summary(self) -> Dict[str, Any]:
        """Counts per action plus success/failure totals."""
        by_action: Dict[str, int] = {}
        for rec in self.recommendations.values():
            by_action[rec.action.label] = by_action.get(rec.action.label, 0) + 1
        return {
            "total": self.succeeded + self.failed,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "by_action": by_action,
            "elapsed": round(self.elapsed, 3),
        }

    def to_dataframe(self) -> pd.DataFrame:
        """One row per evaluated symbol, indexed by symbol."""
        columns = [
            "action", "score", "time_horizon", "target_price", "intrinsic_value",
            "deviation_pct", "risk_level", "sector_position",
        ]
        rows = []
        for symbol, rec in self.recommendations.items():
            row = rec.to_dict()
            rows.append({"symbol": symbol, **{name: row[name] for name in columns}})
        df = pd.DataFrame(rows, columns=["symbol"] + columns)
        return df.set_index("symbol")


def _evaluate_one(engine: RecommendationEngine, instrument: InvestmentInstrument) -> Recommendation:
    return engine.generate_recommendation(instrument)


def evaluate_instruments(
    instruments: Iterable[InvestmentInstrument],
    engine: Optional[RecommendationEngine] = None,
    max_workers: Optional[int] = None,
    assign: bool = False,
) -> BatchResult:
    """
    Generate recommendations for many instruments in parallel.

    Args:
        instruments: Instruments to evaluate
        engine: Recommendation engine (default: advanced engine from config)
        max_workers: Thread pool size (default: the engine's config.max_workers)
        assign: Store each recommendation on its instrument

    Returns:
        BatchResult with recommendations and per-symbol errors
    """
    engine = engine or RecommendationEngine()
    instruments = list(instruments)
    workers = max_workers or engine.config.max_workers
    result = BatchResult()

    if not instruments:
        return result

    timer = Timer(f"Batch of {len(instruments)} instruments", use_logging=True, level="DEBUG")
    collected: Dict[int, Recommendation] = {}
    failures: Dict[int, str] = {}

    with timer:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            future_to_index = {
                executor.submit(_evaluate_one, engine, instrument): index
                for index, instrument in enumerate(instruments)
            }

            for future in as_completed(future_to_index):
                index = future_to_index[future]
                symbol = instruments[index].symbol
                try:
                    collected[index] = future.result()
                except MissingDataError as e:
                    logger.warning("Skipping %s: %s", symbol, e)
                    failures[index] = str(e)

    for index, instrument in enumerate(instruments):
        if index in collected:
            recommendation = collected[index]
            result.recommendations[instrument.symbol] = recommendation
            if assign:
                instrument.set_recommendation(recommendation)
        elif index in failures:
            result.errors[instrument.symbol] = failures[index]

    result.elapsed = timer.elapsed or 0.0
    logger.info("Batch complete: %d succeeded, %d failed", result.succeeded, result.failed)
    return result


def _check_cancelled(cancel_event: Optional[CancelSignal]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise asyncio.CancelledError("evaluation cancelled before start")


async def generate_recommendation_async(
    instrument: InvestmentInstrument,
    engine: Optional[RecommendationEngine] = None,
    cancel_event: Optional[CancelSignal] = None,
) -> Recommendation:
    """
    Run one evaluation on a worker thread.

    Cancellation is checked once before the work starts; the evaluation
    itself is not interruptible.

    Raises:
        asyncio.CancelledError: If cancel_event is already set
        MissingDataError: If the instrument lacks fundamentals or prices
    """
    _check_cancelled(cancel_event)
    engine = engine or RecommendationEngine()
    return await asyncio.to_thread(engine.generate_recommendation, instrument)


async def evaluate_instruments_async(
    instruments: Iterable[InvestmentInstrument],
    engine: Optional[RecommendationEngine] = None,
    max_workers: Optional[int] = None,
    assign: bool = False,
    cancel_event: Optional[CancelSignal] = None,
) -> BatchResult:
    """Async wrapper around evaluate_instruments with a pre-start cancellation check."""
    _check_cancelled(cancel_event)
    return await asyncio.to_thread(evaluate_instruments, instruments, engine, max_workers, assign)
