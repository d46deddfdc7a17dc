"""Unit tests for the multi-factor score model."""

from decimal import Decimal
from itertools import product

import pytest

from fairvalue.domain.instrument import FundamentalData
from fairvalue.valuation.classifier import CompanyType, Sector
from fairvalue.valuation.score import (
    ScoreModel,
    higher_is_better,
    lower_is_better,
    score_to_adjustment,
)

MEDIAN = Decimal("0.10")
EXCEPTIONAL = Decimal("0.25")


class TestScoringCurves:
    """Test suite for the metric scoring curves."""

    @pytest.mark.parametrize("value,expected", [
        ("0", "2"),
        ("0.10", "5"),
        ("0.25", "9"),
        ("0.50", "9.5"),
        ("-0.25", "0"),
        ("-0.125", "1"),
    ])
    def test_higher_is_better(self, value, expected):
        """Test anchors of the higher-is-better curve."""
        assert higher_is_better(Decimal(value), MEDIAN, EXCEPTIONAL) == Decimal(expected)

    @pytest.mark.parametrize("value,expected", [
        ("0", "10"),
        ("0.6", "9"),
        ("1.0", "5"),
        ("2.0", "1.25"),
    ])
    def test_lower_is_better(self, value, expected):
        """Test anchors of the lower-is-better curve."""
        assert lower_is_better(Decimal(value), Decimal("0.6"), Decimal("1.0")) == Decimal(expected)

    @pytest.mark.parametrize("score,expected", [
        ("0", "-0.5"),
        ("2.5", "-0.25"),
        ("5", "0"),
        ("7.5", "0.5"),
        ("10", "1.0"),
        ("12", "1.0"),
    ])
    def test_score_to_adjustment(self, score, expected):
        """Test the composite to price adjustment mapping."""
        assert score_to_adjustment(Decimal(score)) == Decimal(expected)


class TestCategoryWeights:
    """Test suite for sector and company type weighting."""

    @pytest.mark.parametrize("sector,company_type", list(product(Sector, CompanyType)))
    def test_weights_normalised(self, sector, company_type):
        """Test that every combination yields non-negative weights summing to one."""
        weights = ScoreModel.category_weights(sector, company_type)
        assert all(weight >= 0 for weight in weights.values())
        assert sum(weights.values()) == pytest.approx(Decimal("1"))

    def test_growth_tilt(self):
        """Test that tech high-growth companies weight growth heavily."""
        weights = ScoreModel.category_weights(Sector.TECHNOLOGY, CompanyType.HIGH_GROWTH)
        assert weights["growth"] == pytest.approx(Decimal("0.30"))
        assert weights["valuation"] == pytest.approx(Decimal("0.10"))

    def test_weight_floored_at_zero(self):
        """Test that stacked negative adjustments stop at zero."""
        weights = ScoreModel.category_weights(Sector.FINANCIAL, CompanyType.INCOME)
        assert weights["growth"] == Decimal("0")


class TestCategoryScores:
    """Test suite for individual category scores."""

    def test_missing_inputs_are_neutral(self):
        """Test that a category with no inputs scores 5."""
        data = FundamentalData()
        assert ScoreModel.growth_score(data) == Decimal("5")
        assert ScoreModel.quality_score(data) == Decimal("5")
        assert ScoreModel.valuation_score(data) == Decimal("5")

    def test_margin_trend_bonus(self, make_fundamentals, base_data):
        """Test that margin direction moves the quality score by half a point."""
        base = ScoreModel.quality_score(base_data)
        expanding = ScoreModel.quality_score(make_fundamentals(profitability={"margin_trend": 0.1}))
        contracting = ScoreModel.quality_score(make_fundamentals(profitability={"margin_trend": -0.1}))
        assert expanding - base == Decimal("0.5")
        assert base - contracting == Decimal("0.5")

    def test_stub_categories(self, base_data):
        """Test that liquidity and ESG are neutral."""
        scores = ScoreModel().category_scores(base_data)
        assert scores["liquidity"] == Decimal("5")
        assert scores["esg"] == Decimal("5")


class TestValuation:
    """Test suite for the score-derived value."""

    def test_value_within_adjustment_range(self, base_data):
        """Test that the value stays between half and double the price."""
        value = ScoreModel().calculate(base_data)
        assert Decimal("50") <= value <= Decimal("200")

    def test_zero_price(self, base_data):
        """Test that no price means no contribution."""
        assert ScoreModel().calculate(base_data.with_price(0)) == Decimal("0")

    def test_breakdown(self, base_data):
        """Test the projected breakdown."""
        result = ScoreModel().project(base_data)
        assert result["sector"] == "Other"
        assert result["company_type"] == "Balanced"
        assert 0 <= result["composite_score"] <= 10
        assert result["value_per_share"] == base_data.price * (1 + result["adjustment"])
