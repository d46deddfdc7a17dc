"""Unit tests for batch and async evaluation."""

import asyncio
import threading

import pytest

from fairvalue.config import Config
from fairvalue.domain.recommendation import Recommendation
from fairvalue.pipeline import batch
from fairvalue.pipeline.batch import (
    BatchResult,
    evaluate_instruments,
    evaluate_instruments_async,
    generate_recommendation_async,
)
from fairvalue.recommendation.engine import RecommendationEngine


@pytest.fixture
def engine(stub_valuation):
    """Simple-mode engine over a fixed intrinsic value of 120."""
    return RecommendationEngine(stub_valuation(120), mode="simple")


@pytest.fixture
def instruments(make_instrument):
    """Three valid instruments and two with missing data."""
    return [
        make_instrument("AAA"),
        make_instrument("BBB", fundamentals=False),
        make_instrument("CCC"),
        make_instrument("DDD", closes=[]),
        make_instrument("EEE"),
    ]


class TestEvaluateInstruments:
    """Test suite for the thread pool batch."""

    def test_errors_collected_per_symbol(self, engine, instruments):
        """Test that missing data does not stop the batch."""
        result = evaluate_instruments(instruments, engine)

        assert list(result.recommendations) == ["AAA", "CCC", "EEE"]
        assert set(result.errors) == {"BBB", "DDD"}
        assert "fundamental data" in result.errors["BBB"]
        assert "price history" in result.errors["DDD"]

    def test_single_worker(self, engine, instruments):
        """Test that a one-thread pool gives the same outcome."""
        parallel = evaluate_instruments(instruments, engine)
        serial = evaluate_instruments(instruments, engine, max_workers=1)
        assert serial.recommendations == parallel.recommendations
        assert serial.errors == parallel.errors

    def test_assign(self, engine, instruments):
        """Test storing recommendations on instruments."""
        evaluate_instruments(instruments, engine, assign=True)
        assert isinstance(instruments[0].current_recommendation, Recommendation)
        assert instruments[1].current_recommendation is None

    def test_not_assigned_by_default(self, engine, instruments):
        """Test that instruments are left untouched by default."""
        evaluate_instruments(instruments, engine)
        assert instruments[0].current_recommendation is None

    def test_workers_from_engine_config(self, stub_valuation, instruments, monkeypatch):
        """Test that the pool size comes from the engine's configuration."""
        sizes = []
        real_executor = batch.ThreadPoolExecutor

        def recording_executor(max_workers):
            sizes.append(max_workers)
            return real_executor(max_workers=max_workers)

        monkeypatch.setattr(batch, "ThreadPoolExecutor", recording_executor)
        engine = RecommendationEngine(stub_valuation(120), cfg=Config(max_workers=3))

        evaluate_instruments(instruments, engine)
        evaluate_instruments(instruments, engine, max_workers=2)
        assert sizes == [3, 2]

    def test_empty(self, engine):
        """Test an empty batch."""
        result = evaluate_instruments([], engine)
        assert result.succeeded == 0
        assert result.failed == 0

    def test_summary(self, engine, instruments):
        """Test batch summary counts."""
        summary = evaluate_instruments(instruments, engine).summary()
        assert summary["total"] == 5
        assert summary["succeeded"] == 3
        assert summary["failed"] == 2
        assert summary["by_action"] == {"Buy": 3}

    def test_intrinsic_values(self, engine, instruments):
        """Test the per-symbol intrinsic value view."""
        values = evaluate_instruments(instruments, engine).intrinsic_values
        assert set(values) == {"AAA", "CCC", "EEE"}
        assert all(value == 120 for value in values.values())

    def test_to_dataframe(self, engine, instruments):
        """Test the pandas export."""
        df = evaluate_instruments(instruments, engine).to_dataframe()
        assert list(df.index) == ["AAA", "CCC", "EEE"]
        assert df.loc["AAA", "action"] == "Buy"
        assert df.loc["AAA", "score"] == 2
        assert "risk_level" in df.columns

    def test_empty_dataframe(self):
        """Test that an empty result still has the expected columns."""
        df = BatchResult().to_dataframe()
        assert df.empty
        assert "action" in df.columns


class TestAsync:
    """Test suite for the async wrappers."""

    def test_generate_recommendation_async(self, engine, make_instrument):
        """Test a single async evaluation."""
        recommendation = asyncio.run(generate_recommendation_async(make_instrument(), engine))
        assert recommendation.target_price == 120

    def test_cancelled_before_start(self, engine, make_instrument):
        """Test that a set cancel signal stops the evaluation."""
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(asyncio.CancelledError):
            asyncio.run(generate_recommendation_async(make_instrument(), engine, cancel_event=cancel))

    def test_evaluate_instruments_async(self, engine, instruments):
        """Test the async batch."""
        result = asyncio.run(evaluate_instruments_async(instruments, engine))
        assert result.succeeded == 3
        assert result.failed == 2

    def test_batch_cancelled(self, engine, instruments):
        """Test that a cancelled batch never starts."""
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(asyncio.CancelledError):
            asyncio.run(evaluate_instruments_async(instruments, engine, cancel_event=cancel))
        assert all(instrument.current_recommendation is None for instrument in instruments)
