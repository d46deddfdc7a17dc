"""DCF Valuation Model - two-phase discounted free cash flow per share."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from fairvalue.config import Config, config as default_config
from fairvalue.constants import (
    BETA_RISK_PREMIUMS,
    DCF_CONFIDENCE_DECAY,
    DCF_DECLINE_GROWTH_CAP,
    DCF_DECLINE_MULTIPLIER,
    DCF_HIGH_GROWTH_YEARS,
    DCF_LIFECYCLE_BUCKETS,
    DCF_MAX_INITIAL_GROWTH,
    DCF_MAX_TERMINAL_GROWTH,
    DCF_MIN_INITIAL_GROWTH,
    DCF_SECTOR_GROWTH_FACTORS,
    DCF_SIZE_FACTORS,
    DCF_TERMINAL_GROWTH_WACC_SHARE,
    DCF_TRANSITION_YEARS,
    DEBT_SPREAD_BY_COVERAGE,
    DEFAULT_BETA,
    DEFAULT_DEBT_SPREAD,
    ONE,
    STABLE_EARNINGS_THRESHOLD,
    ZERO,
)
from fairvalue.core.numeric import clamp, dsum, first_nonzero
from fairvalue.domain.instrument import FundamentalData
from fairvalue.logging_config import get_logger
from fairvalue.valuation.classifier import classify_sector

logger = get_logger(__name__)


class CompanySize(Enum):
    """Size bucket estimated from risk and payout profile."""

    LARGE = "large"
    MID = "mid"
    SMALL = "small"

    def __str__(self) -> str:
        return self.value


def effective_beta(data: FundamentalData) -> Decimal:
    """Beta with missing (<= 0) values replaced by the market beta."""
    beta = data.market_risk.beta
    return beta if beta > 0 else DEFAULT_BETA


def cost_of_equity(data: FundamentalData, cfg: Config = default_config) -> Decimal:
    """CAPM: risk-free rate + beta x market risk premium."""
    return cfg.risk_free_rate + effective_beta(data) * cfg.market_risk_premium


def beta_risk_premium(beta: Decimal) -> Decimal:
    for floor, premium in BETA_RISK_PREMIUMS:
        if beta > floor:
            return premium
    return ZERO


class DCFModel:
    """
    Two-phase discounted cash flow model.

    Phase 1 grows the current per-share FCF at an adjusted initial rate for
    five years; phase 2 fades that rate linearly to the long-term rate over
    another five. Every projected year is haircut by a confidence factor
    that decays 1.5% per year, the Gordon terminal value by a further 10%,
    and the total by the margin of safety.
    """

    def __init__(self, cfg: Optional[Config] = None):
        self.config = cfg or default_config

    # ------------------------------------------------------------------
    # Discount rate
    # ------------------------------------------------------------------

    def cost_of_debt(self, data: FundamentalData) -> Decimal:
        """After-tax cost of debt from an interest-coverage credit spread."""
        coverage = data.stability.interest_coverage
        spread = DEFAULT_DEBT_SPREAD
        for floor, tier_spread in DEBT_SPREAD_BY_COVERAGE:
            if coverage > floor:
                spread = tier_spread
                break
        pre_tax = self.config.risk_free_rate + spread
        return pre_tax * (ONE - self.config.tax_rate)

    def calculate_wacc(self, data: FundamentalData) -> Decimal:
        """WACC from capital-structure weights, clamped, plus a beta premium."""
        leverage = max(ZERO, data.stability.debt_to_equity)
        equity_weight = ONE / (ONE + leverage)
        debt_weight = leverage / (ONE + leverage)

        wacc = equity_weight * cost_of_equity(data, self.config) + debt_weight * self.cost_of_debt(data)
        wacc = clamp(wacc, self.config.min_wacc, self.config.max_wacc)
        return wacc + beta_risk_premium(effective_beta(data))

    # ------------------------------------------------------------------
    # Growth
    # ------------------------------------------------------------------

    @staticmethod
    def estimate_size(data: FundamentalData) -> CompanySize:
        beta = data.market_risk.beta
        pays_dividend = data.dividend.pays_dividend
        if (
            0 < beta < Decimal("0.9")
            and data.stability.earnings_stability >= STABLE_EARNINGS_THRESHOLD
            and pays_dividend
        ):
            return CompanySize.LARGE
        if beta > Decimal("1.3") and not pays_dividend:
            return CompanySize.SMALL
        return CompanySize.MID

    def initial_growth(self, data: FundamentalData) -> Decimal:
        """Phase-1 growth after size, life-cycle and sector adjustments."""
        growth = first_nonzero(
            data.growth.predicted_fcf_growth,
            data.cash_flow.projected_fcf_growth,
            data.growth.predicted_eps_growth,
        )
        growth *= DCF_SIZE_FACTORS[self.estimate_size(data).value]

        revenue_growth = data.growth.revenue_growth
        for floor, multiplier, cap in DCF_LIFECYCLE_BUCKETS:
            if revenue_growth > floor:
                growth *= multiplier
                if cap is not None:
                    growth = min(growth, cap)
                break
        else:
            growth = min(growth * DCF_DECLINE_MULTIPLIER, DCF_DECLINE_GROWTH_CAP)

        sector = classify_sector(data)
        growth *= DCF_SECTOR_GROWTH_FACTORS.get(sector.value, ONE)

        return clamp(growth, DCF_MIN_INITIAL_GROWTH, DCF_MAX_INITIAL_GROWTH)

    def long_term_growth(self, data: FundamentalData, wacc: Decimal) -> Decimal:
        reported = data.growth.long_term_growth_rate
        base = reported if reported > 0 else self.config.default_long_term_growth
        return min(base, DCF_TERMINAL_GROWTH_WACC_SHARE * wacc, DCF_MAX_TERMINAL_GROWTH)

    # ------------------------------------------------------------------
    # Valuation
    # ------------------------------------------------------------------

    def project(self, data: FundamentalData) -> Dict[str, Any]:
        """
        Full DCF breakdown.

        Returns:
            Dict with value_per_share, cash_flows [{year, growth, fcf, pv}],
            pv_explicit, terminal_info and the inputs used. value_per_share
            is zero when current FCF is not positive.
        """
        fcf0 = data.cash_flow.current_fcf
        wacc = self.calculate_wacc(data)
        inputs = {
            "current_fcf": fcf0,
            "wacc": wacc,
            "size": str(self.estimate_size(data)),
        }

        if fcf0 <= 0:
            logger.debug("DCF skipped: non-positive FCF %s", fcf0)
            return {
                "value_per_share": ZERO,
                "cash_flows": [],
                "pv_explicit": ZERO,
                "terminal_info": {},
                "inputs": inputs,
                "valuation_method": "DCF",
            }

        growth = self.initial_growth(data)
        term_growth = self.long_term_growth(data, wacc)
        if wacc <= term_growth:
            raise ValueError(f"WACC ({wacc:.2%}) must be > terminal growth ({term_growth:.2%})")
        inputs.update({"initial_growth": growth, "term_growth": term_growth})

        discount = ONE + wacc
        fcf = fcf0
        cash_flows: List[Dict[str, Decimal]] = []
        total_years = DCF_HIGH_GROWTH_YEARS + DCF_TRANSITION_YEARS

        for year in range(1, total_years + 1):
            if year <= DCF_HIGH_GROWTH_YEARS:
                rate = growth
            else:
                step = Decimal(year - DCF_HIGH_GROWTH_YEARS) / Decimal(DCF_TRANSITION_YEARS)
                rate = growth + (term_growth - growth) * step
            fcf *= ONE + rate
            confidence = ONE - DCF_CONFIDENCE_DECAY * year
            pv = fcf / discount ** year * confidence
            cash_flows.append({"year": year, "growth": rate, "fcf": fcf, "pv": pv})

        pv_explicit = dsum(row["pv"] for row in cash_flows)

        term_value = fcf * (ONE + term_growth) / (wacc - term_growth)
        term_pv = term_value / discount ** total_years * self.config.terminal_quality_factor
        terminal_info = {
            "method": "gordon_growth",
            "perpetuity_growth": term_growth,
            "terminal_fcf": fcf * (ONE + term_growth),
            "terminal_value": term_value,
            "terminal_pv": term_pv,
        }

        value = (pv_explicit + term_pv) * (ONE - self.config.margin_of_safety)
        logger.debug(
            "DCF: fcf0=%s wacc=%.4f g0=%.4f g=%.4f -> %.2f",
            fcf0, wacc, growth, term_growth, value,
        )

        return {
            "value_per_share": value,
            "cash_flows": cash_flows,
            "pv_explicit": pv_explicit,
            "terminal_info": terminal_info,
            "inputs": inputs,
            "valuation_method": "DCF",
        }

    def calculate(self, data: FundamentalData) -> Decimal:
        """Per-share DCF value; zero means no contribution."""
        return self.project(data)["value_per_share"]
