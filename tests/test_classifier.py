"""Unit tests for the fundamentals classifier."""

import pytest

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


class TestSectorClassification:
    """Test suite for sector inference."""

    @pytest.mark.parametrize("groups,expected", [
        ({"dividend": {"dividend_yield": 0.045}, "market_risk": {"beta": 0.5},
          "stability": {"debt_to_equity": 1.5}}, Sector.UTILITIES),
        ({"stability": {"debt_to_equity": 4}, "valuation": {"pb": 1.2}}, Sector.FINANCIAL),
        ({"profitability": {"gross_margin": 0.7}, "growth": {"revenue_growth": 0.15}}, Sector.TECHNOLOGY),
        ({"profitability": {"gross_margin": 0.65}, "market_risk": {"beta": 0.9}}, Sector.HEALTHCARE),
        ({"profitability": {"gross_margin": 0.3, "net_margin": 0.05}}, Sector.CONSUMER),
        ({"profitability": {"operating_margin": 0.10}, "stability": {"debt_to_equity": 1.0}}, Sector.INDUSTRIAL),
        ({}, Sector.OTHER),
    ])
    def test_rules(self, make_fundamentals, groups, expected):
        """Test each sector rule in isolation."""
        assert classify_sector(make_fundamentals(**groups)) is expected

    def test_first_match_wins(self, make_fundamentals):
        """Test that the utilities rule outranks the financial rule."""
        data = make_fundamentals(
            dividend={"dividend_yield": 0.05},
            market_risk={"beta": 0.5},
            stability={"debt_to_equity": 4},
            valuation={"pb": 1.0},
        )
        assert classify_sector(data) is Sector.UTILITIES


class TestCompanyTypeClassification:
    """Test suite for company type inference."""

    @pytest.mark.parametrize("groups,expected", [
        ({"earnings": {"eps": -1}}, CompanyType.UNPROFITABLE),
        ({"profitability": {"net_margin": -0.05}}, CompanyType.UNPROFITABLE),
        ({"growth": {"predicted_eps_growth": 0.25}}, CompanyType.HIGH_GROWTH),
        ({"dividend": {"dividend_yield": 0.05}}, CompanyType.INCOME),
        ({"market_risk": {"beta": 1.7}}, CompanyType.AGGRESSIVE),
        ({"valuation": {"pe": 10}}, CompanyType.VALUE),
        ({"market_risk": {"beta": 0.7}}, CompanyType.DEFENSIVE),
        ({}, CompanyType.BALANCED),
    ])
    def test_rules(self, make_fundamentals, groups, expected):
        """Test each company type rule."""
        assert classify_company_type(make_fundamentals(**groups)) is expected


class TestInvestmentStyle:
    """Test suite for investment style inference."""

    def test_profitable_balanced_is_quality(self, base_data):
        """Test that a profitable balanced company is a quality name."""
        assert classify_investment_style(base_data) is InvestmentStyle.QUALITY

    def test_unremarkable_balanced_is_blend(self, make_fundamentals):
        """Test the blend fallback for balanced companies."""
        data = make_fundamentals(profitability={"roe": 0.10})
        assert classify_investment_style(data) is InvestmentStyle.BLEND

    def test_growth_ignores_insider_buying(self, make_fundamentals):
        """Test that growth style is not overridden by insider buying."""
        data = make_fundamentals(
            growth={"predicted_eps_growth": 0.25},
            sentiment={"insider_buying": 0.8},
        )
        assert classify_investment_style(data) is InvestmentStyle.GROWTH

    def test_insider_buying_makes_event_driven(self, make_fundamentals):
        """Test the event-driven override."""
        assert classify_investment_style(make_fundamentals(valuation={"pe": 10})) is InvestmentStyle.VALUE
        data = make_fundamentals(valuation={"pe": 10}, sentiment={"insider_buying": 0.8})
        assert classify_investment_style(data) is InvestmentStyle.EVENT_DRIVEN

    def test_aggressive_split_by_sector(self, make_fundamentals):
        """Test cyclical versus momentum for aggressive companies."""
        momentum = make_fundamentals(market_risk={"beta": 1.7})
        cyclical = make_fundamentals(
            market_risk={"beta": 1.7},
            profitability={"operating_margin": 0.10},
            stability={"debt_to_equity": 1.0},
        )
        assert classify_investment_style(momentum) is InvestmentStyle.MOMENTUM
        assert classify_investment_style(cyclical) is InvestmentStyle.CYCLICAL

    def test_unprofitable_split_by_profit_trend(self, make_fundamentals):
        """Test turnaround versus speculative for loss makers."""
        turnaround = make_fundamentals(earnings={"eps": -1}, growth={"profit_growth": 0.1})
        speculative = make_fundamentals(earnings={"eps": -1}, growth={"profit_growth": -0.1})
        assert classify_investment_style(turnaround) is InvestmentStyle.TURNAROUND
        assert classify_investment_style(speculative) is InvestmentStyle.SPECULATIVE


class TestComparableProfile:
    """Test suite for comparable weight profile selection."""

    @pytest.mark.parametrize("groups,expected", [
        ({"earnings": {"eps": -1}, "stability": {"debt_to_equity": 2.5}}, ComparableProfile.DISTRESSED),
        ({"earnings": {"eps": -1}, "growth": {"revenue_growth": 0.30}}, ComparableProfile.GROWTH),
        ({"earnings": {"eps": -1}}, ComparableProfile.DISTRESSED),
        ({"growth": {"predicted_eps_growth": 0.2}}, ComparableProfile.GROWTH),
        ({"valuation": {"pe": 10}}, ComparableProfile.VALUE),
        ({"profitability": {"net_margin": 0.25}}, ComparableProfile.HIGH_MARGIN),
        ({}, ComparableProfile.STABLE_PROFITABLE),
    ])
    def test_rules(self, make_fundamentals, groups, expected):
        """Test each profile rule."""
        assert classify_comparable_profile(make_fundamentals(**groups)) is expected
