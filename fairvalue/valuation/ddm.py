"""DDM Valuation Model - multi-stage dividend discount with buyback support."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from fairvalue.config import Config, config as default_config
from fairvalue.constants import (
    BUYBACK_EPS_GROWTH_SHARE,
    BUYBACK_HIGH_GROWTH_YEARS,
    BUYBACK_MAX_GROWTH,
    BUYBACK_MAX_PAYOUT,
    BUYBACK_MAX_UPLIFT,
    BUYBACK_MAX_YIELD,
    BUYBACK_MIN_FCF_YIELD,
    BUYBACK_MIN_MEANINGFUL_YIELD,
    BUYBACK_SUSTAINABILITY_HAIRCUT,
    BUYBACK_TRANSITION_YEARS,
    BUYBACK_UPLIFT_PER_YIELD,
    DIVIDEND_DEFAULT_PHASES,
    DIVIDEND_EPS_GROWTH_MULTIPLIER,
    DIVIDEND_HIGH_PAYOUT,
    DIVIDEND_MAX_GROWTH,
    DIVIDEND_MAX_TERMINAL_GROWTH,
    DIVIDEND_MIN_GROWTH,
    DIVIDEND_PHASES,
    DIVIDEND_SUSTAINABILITY_FACTOR,
    MIN_DISCOUNT_SPREAD,
    ONE,
    ZERO,
)
from fairvalue.core.numeric import clamp, dsum, first_nonzero, safe_div
from fairvalue.domain.instrument import FundamentalData
from fairvalue.logging_config import get_logger
from fairvalue.valuation.dcf import cost_of_equity

logger = get_logger(__name__)

HALF = Decimal("0.5")


class DDMModel:
    """
    Dividend discount model.

    Values the per-share stream of dividends, or of buyback benefit for
    companies that return cash through repurchases only. Returns zero when
    neither stream exists.
    """

    def __init__(self, cfg: Optional[Config] = None):
        self.config = cfg or default_config

    def estimate_buyback_yield(self, data: FundamentalData) -> Decimal:
        """
        Implied buyback yield from free cash flow not paid out as dividends.

        Only companies with a low payout ratio and a rich FCF yield are
        assumed to repurchase shares.
        """
        payout = data.dividend.payout_ratio
        fcf_yield = safe_div(data.cash_flow.current_fcf, data.price)
        if payout >= BUYBACK_MAX_PAYOUT or fcf_yield <= BUYBACK_MIN_FCF_YIELD:
            return ZERO

        estimate = min(BUYBACK_MAX_YIELD, fcf_yield * (ONE - max(payout, ZERO)) * HALF)
        if estimate <= BUYBACK_MIN_MEANINGFUL_YIELD:
            return ZERO
        return estimate

    def discount_rate(self, data: FundamentalData) -> Decimal:
        required = data.cost_of_capital.required_return_on_equity
        if required > 0:
            return required
        return cost_of_equity(data, self.config)

    def _long_term_growth(self, data: FundamentalData) -> Decimal:
        reported = data.growth.long_term_growth_rate
        return reported if reported > 0 else self.config.default_long_term_growth

    @staticmethod
    def _cap_below(rate: Decimal, r: Decimal) -> Decimal:
        """Keep a terminal rate at least one point below the discount rate."""
        return min(rate, r - MIN_DISCOUNT_SPREAD)

    @staticmethod
    def _discount_stream(
        start: Decimal,
        r: Decimal,
        high_rate: Decimal,
        terminal_rate: Decimal,
        high_years: int,
        transition_years: int,
    ) -> Tuple[List[Dict[str, Decimal]], Decimal]:
        """Grow and discount a payment stream; returns (rows, last payment)."""
        rows = []
        payment = start
        discount = ONE + r
        for year in range(1, high_years + transition_years + 1):
            if year <= high_years:
                rate = high_rate
            else:
                step = Decimal(year - high_years) / Decimal(transition_years)
                rate = high_rate + (terminal_rate - high_rate) * step
            payment *= ONE + rate
            rows.append({"year": year, "growth": rate, "payment": payment, "pv": payment / discount ** year})
        return rows, payment

    def project(self, data: FundamentalData) -> Dict[str, Any]:
        """Full DDM breakdown with the path taken and every yearly payment."""
        r = self.discount_rate(data)
        buyback_yield = self.estimate_buyback_yield(data)
        dividend = data.dividend.current_annual_dividend
        result: Dict[str, Any] = {
            "value_per_share": ZERO,
            "path": "none",
            "discount_rate": r,
            "buyback_yield": buyback_yield,
            "payments": [],
        }

        if dividend <= 0 and buyback_yield <= 0:
            logger.debug("DDM skipped: no dividend and no buyback")
            return result

        if dividend <= 0:
            result.update(self._buyback_only(data, r, buyback_yield))
        else:
            result.update(self._dividend_path(data, r, dividend, buyback_yield))

        logger.debug("DDM (%s): r=%.4f -> %.2f", result["path"], r, result["value_per_share"])
        return result

    def _buyback_only(self, data: FundamentalData, r: Decimal, buyback_yield: Decimal) -> Dict[str, Any]:
        benefit = data.price * buyback_yield
        high_rate = clamp(
            data.growth.predicted_eps_growth * BUYBACK_EPS_GROWTH_SHARE, ZERO, BUYBACK_MAX_GROWTH
        )
        sustainable = min(
            self._long_term_growth(data) + MIN_DISCOUNT_SPREAD, buyback_yield * HALF
        )
        sustainable = self._cap_below(sustainable, r)

        rows, last = self._discount_stream(
            benefit, r, high_rate, sustainable,
            BUYBACK_HIGH_GROWTH_YEARS, BUYBACK_TRANSITION_YEARS,
        )
        years = BUYBACK_HIGH_GROWTH_YEARS + BUYBACK_TRANSITION_YEARS
        terminal = last * (ONE + sustainable) / (r - sustainable)
        terminal_pv = terminal / (ONE + r) ** years

        value = (dsum(row["pv"] for row in rows) + terminal_pv) * BUYBACK_SUSTAINABILITY_HAIRCUT
        return {
            "value_per_share": value,
            "path": "buyback",
            "high_growth": high_rate,
            "terminal_growth": sustainable,
            "terminal_pv": terminal_pv,
            "payments": rows,
        }

    def _dividend_path(
        self, data: FundamentalData, r: Decimal, dividend: Decimal, buyback_yield: Decimal
    ) -> Dict[str, Any]:
        dividend_growth = first_nonzero(data.dividend.dividend_growth, data.growth.dividend_growth)
        eps_growth = data.growth.predicted_eps_growth
        if eps_growth != 0:
            sustainable = min(dividend_growth, eps_growth * DIVIDEND_EPS_GROWTH_MULTIPLIER)
        else:
            sustainable = dividend_growth
        sustainable = clamp(sustainable, DIVIDEND_MIN_GROWTH, DIVIDEND_MAX_GROWTH)

        high_years, transition_years = DIVIDEND_DEFAULT_PHASES
        for floor, phase_high, phase_transition in DIVIDEND_PHASES:
            if sustainable > floor:
                high_years, transition_years = phase_high, phase_transition
                break

        terminal_rate = self._cap_below(
            min(self._long_term_growth(data), DIVIDEND_MAX_TERMINAL_GROWTH), r
        )

        rows, last = self._discount_stream(
            dividend, r, sustainable, terminal_rate, high_years, transition_years
        )
        years = high_years + transition_years
        terminal = last * (ONE + terminal_rate) / (r - terminal_rate)
        if data.dividend.payout_ratio > DIVIDEND_HIGH_PAYOUT:
            terminal *= DIVIDEND_SUSTAINABILITY_FACTOR
        terminal_pv = terminal / (ONE + r) ** years

        value = dsum(row["pv"] for row in rows) + terminal_pv
        uplift = ONE
        if buyback_yield > 0:
            uplift = min(BUYBACK_MAX_UPLIFT, ONE + BUYBACK_UPLIFT_PER_YIELD * buyback_yield)
            value *= uplift

        return {
            "value_per_share": value,
            "path": "dividend",
            "high_growth": sustainable,
            "phases": (high_years, transition_years),
            "terminal_growth": terminal_rate,
            "terminal_pv": terminal_pv,
            "buyback_uplift": uplift,
            "payments": rows,
        }

    def calculate(self, data: FundamentalData) -> Decimal:
        """Per-share DDM value; zero means no contribution."""
        return self.project(data)["value_per_share"]
