"""Unit tests for the domain model."""

from dataclasses import FrozenInstanceError
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from fairvalue.domain.instrument import FundamentalData, InvestmentInstrument, PriceData
from fairvalue.domain.metrics import GrowthMetrics, MarketRiskMetrics, StabilityMetrics, ValuationMetrics
from fairvalue.domain.recommendation import (
    Recommendation,
    RecommendationAction,
    RiskLevel,
    SectorPosition,
)


class TestMetrics:
    """Test suite for metric value objects."""

    def test_defaults_are_zero(self):
        """Test that every numeric field defaults to zero."""
        metrics = ValuationMetrics()
        assert metrics.pe == Decimal("0")
        assert metrics.peg == Decimal("0")

    def test_floats_are_converted_through_str(self):
        """Test that floats become exact Decimals."""
        metrics = ValuationMetrics(pe=15.1, pb=2)
        assert metrics.pe == Decimal("15.1")
        assert isinstance(metrics.pb, Decimal)

    def test_non_numeric_fields_untouched(self):
        """Test that bool fields keep their type."""
        stability = StabilityMetrics(debt_to_equity=0.5, is_data_verified=True)
        assert stability.is_data_verified is True
        assert stability.debt_to_equity == Decimal("0.5")

    def test_frozen(self):
        """Test that metrics cannot be mutated."""
        metrics = ValuationMetrics(pe=10)
        with pytest.raises(FrozenInstanceError):
            metrics.pe = Decimal("12")

    def test_aliases(self):
        """Test earnings_growth and volatility aliases."""
        assert GrowthMetrics(profit_growth=0.07).earnings_growth == Decimal("0.07")
        assert MarketRiskMetrics(standard_deviation=0.3).volatility == Decimal("0.3")


class TestFundamentalData:
    """Test suite for FundamentalData."""

    def test_with_price_returns_copy(self, base_data):
        """Test that price injection leaves the original untouched."""
        priced = base_data.with_price(42.5)
        assert priced.price == Decimal("42.5")
        assert base_data.price == Decimal("100")
        assert priced.valuation is base_data.valuation

    def test_to_dict_contains_all_groups(self, base_data):
        """Test nested dictionary export."""
        result = base_data.to_dict()
        assert result["price"] == Decimal("100")
        assert result["valuation"]["pe"] == Decimal("18")
        assert "cost_of_capital" in result

    def test_empty_snapshot(self):
        """Test that a default snapshot is all zeros."""
        data = FundamentalData()
        assert data.price == Decimal("0")
        assert data.earnings.eps == Decimal("0")


class TestInvestmentInstrument:
    """Test suite for the instrument aggregate."""

    def test_requires_symbol(self):
        """Test that an empty symbol is rejected."""
        with pytest.raises(ValueError):
            InvestmentInstrument("")

    def test_last_price_uses_newest_bar(self):
        """Test that bars appended out of order still yield the newest close."""
        instrument = InvestmentInstrument("ABC")
        start = date(2024, 1, 1)
        instrument.add_price_data(PriceData.from_close(start + timedelta(days=2), 110))
        instrument.add_price_data(PriceData.from_close(start, 90))
        instrument.add_price_data(PriceData.from_close(start + timedelta(days=1), 100))

        assert instrument.last_price == Decimal("110")
        assert [bar.close for bar in instrument.sorted_history()] == [
            Decimal("110"), Decimal("100"), Decimal("90"),
        ]

    def test_last_price_without_history(self):
        """Test that no history gives no price."""
        assert InvestmentInstrument("ABC").last_price is None

    def test_priced_fundamentals(self, make_instrument):
        """Test that the last close replaces the snapshot price."""
        instrument = make_instrument(price=100, closes=[95, 97])
        assert instrument.priced_fundamentals().price == Decimal("97")
        assert instrument.fundamental_data.price == Decimal("100")

    def test_priced_fundamentals_without_data(self):
        """Test that no fundamentals yields None."""
        assert InvestmentInstrument("ABC").priced_fundamentals() is None

    def test_update_replaces_wholesale(self, make_fundamentals):
        """Test that fundamentals are replaced, not merged."""
        instrument = InvestmentInstrument("ABC")
        instrument.update_fundamental_data(make_fundamentals())
        replacement = FundamentalData()
        instrument.update_fundamental_data(replacement)
        assert instrument.fundamental_data is replacement


class TestRecommendation:
    """Test suite for Recommendation and its enums."""

    def _make(self, generated_at=None):
        kwargs = {}
        if generated_at is not None:
            kwargs["generated_at"] = generated_at
        return Recommendation(
            action=RecommendationAction.BUY,
            time_horizon="12 months",
            target_price=Decimal("120.00"),
            rationale="test",
            risk_level=RiskLevel.MEDIUM,
            **kwargs,
        )

    def test_score_matches_action(self):
        """Test that score is the action's value."""
        assert self._make().score == 2

    def test_equality_ignores_timestamp(self):
        """Test that generated_at is display-only."""
        first = self._make(datetime(2024, 1, 1, tzinfo=timezone.utc))
        second = self._make(datetime(2025, 6, 1, tzinfo=timezone.utc))
        assert first == second

    def test_to_dict(self):
        """Test serialisation."""
        result = self._make().to_dict()
        assert result["action"] == "Buy"
        assert result["score"] == 2
        assert result["risk_level"] == "Medium"
        assert result["sector_position"] == ""

    def test_action_labels_and_direction(self):
        """Test action labels and bullish/bearish grouping."""
        assert RecommendationAction.STRONG_BUY.label == "Strong Buy"
        assert str(RecommendationAction.STRONG_SELL) == "Strong Sell"
        assert RecommendationAction.ACCUMULATE.is_bullish
        assert not RecommendationAction.HOLD.is_bullish
        assert not RecommendationAction.HOLD.is_bearish
        assert RecommendationAction.REDUCE.is_bearish

    def test_score_lookup(self):
        """Test that scores 1-7 map back to actions."""
        assert RecommendationAction(6) is RecommendationAction.SELL
        with pytest.raises(ValueError):
            RecommendationAction(9)

    def test_risk_level_ordering(self):
        """Test risk floors."""
        assert RiskLevel.at_least(RiskLevel.LOW, RiskLevel.HIGH) is RiskLevel.HIGH
        assert RiskLevel.at_least(RiskLevel.VERY_HIGH, RiskLevel.HIGH) is RiskLevel.VERY_HIGH
        assert RiskLevel.HIGH.is_elevated
        assert not RiskLevel.MEDIUM.is_elevated

    def test_sector_position_string(self):
        """Test sector position display values."""
        assert str(SectorPosition.BELOW_AVERAGE) == "Below Average"
