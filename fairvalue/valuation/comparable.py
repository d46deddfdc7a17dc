"""Comparable Valuation Model - sector multiples adjusted for growth and quality."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional

from fairvalue.config import Config, config as default_config
from fairvalue.constants import (
    COMBINED_PREMIUM_BOUNDS,
    COMPARABLE_METRICS,
    COMPARABLE_WEIGHTS,
    DEFAULT_EV_SALES_RATIO,
    DEFAULT_FORWARD_PE_RATIO,
    DEFAULT_SECTOR_GROWTH,
    DEFAULT_SECTOR_NET_MARGIN,
    DEFAULT_SECTOR_PEG,
    DEFAULT_SECTOR_PRICE_BOOK,
    DEFAULT_SECTOR_PRICE_FCF,
    DEFAULT_SECTOR_ROE,
    GROWTH_PREMIUM_BOUNDS,
    GROWTH_PREMIUM_SCALE,
    NET_DEBT_BOOK_OFFSET,
    ONE,
    QUALITY_PREMIUM_BOUNDS,
    QUALITY_PREMIUM_WEIGHT,
    SECTOR_DEFAULT_MULTIPLES,
    ZERO,
)
from fairvalue.core.numeric import clamp, dsum, first_positive, safe_div
from fairvalue.domain.instrument import FundamentalData
from fairvalue.logging_config import get_logger
from fairvalue.valuation.classifier import ComparableProfile, classify_comparable_profile, classify_sector

logger = get_logger(__name__)

HUNDRED = Decimal("100")


def weights_for(profile: ComparableProfile) -> Dict[str, Decimal]:
    """Metric weight vector for a comparable profile."""
    return dict(zip(COMPARABLE_METRICS, COMPARABLE_WEIGHTS[profile.value]))


class ComparableModel:
    """
    Relative valuation against sector multiples.

    Each of eight multiples is applied to the matching per-share figure.
    Sector multiples are lifted or cut by a growth premium and a quality
    premium, EV-based results are reduced by net debt per share, and the
    results are blended with a weight vector chosen by the company profile.
    """

    def __init__(self, cfg: Optional[Config] = None):
        self.config = cfg or default_config

    def sector_multiples(self, data: FundamentalData) -> Dict[str, Decimal]:
        """Peer multiples with sector-table and ratio fallbacks for missing values."""
        comparable = data.comparable
        default_pe, default_ev_ebitda, default_ps = SECTOR_DEFAULT_MULTIPLES[classify_sector(data).value]

        pe = first_positive(comparable.sector_average_pe, default_pe)
        price_sales = first_positive(comparable.sector_price_sales, default_ps)
        return {
            "pe": pe,
            "forward_pe": first_positive(comparable.sector_forward_pe, pe * DEFAULT_FORWARD_PE_RATIO),
            "ev_ebitda": first_positive(comparable.peer_ev_ebitda, default_ev_ebitda),
            "price_sales": price_sales,
            "price_book": first_positive(comparable.sector_price_book, DEFAULT_SECTOR_PRICE_BOOK),
            "peg": first_positive(comparable.sector_peg, DEFAULT_SECTOR_PEG),
            "ev_sales": first_positive(comparable.sector_ev_sales, price_sales * DEFAULT_EV_SALES_RATIO),
            "price_fcf": first_positive(comparable.sector_price_fcf, DEFAULT_SECTOR_PRICE_FCF),
        }

    @staticmethod
    def growth_premium(data: FundamentalData) -> Decimal:
        growth = data.growth.predicted_eps_growth
        if growth == 0:
            return ZERO
        sector_growth = first_positive(data.comparable.sector_average_growth, DEFAULT_SECTOR_GROWTH)
        premium = GROWTH_PREMIUM_SCALE * (growth / sector_growth - ONE)
        return clamp(premium, *GROWTH_PREMIUM_BOUNDS)

    @staticmethod
    def quality_premium(data: FundamentalData) -> Decimal:
        premium = ZERO
        roe = data.profitability.roe
        if roe != 0:
            sector_roe = first_positive(data.comparable.sector_average_roe, DEFAULT_SECTOR_ROE)
            premium += QUALITY_PREMIUM_WEIGHT * (roe / sector_roe - ONE)
        margin = data.profitability.net_margin
        if margin != 0:
            sector_margin = first_positive(data.comparable.sector_average_net_margin, DEFAULT_SECTOR_NET_MARGIN)
            premium += QUALITY_PREMIUM_WEIGHT * (margin / sector_margin - ONE)
        return clamp(premium, *QUALITY_PREMIUM_BOUNDS)

    @staticmethod
    def net_debt_per_share(data: FundamentalData) -> Decimal:
        """Net debt approximated from leverage and book value, never negative."""
        book = data.valuation.book_value_per_share
        if book <= 0:
            return ZERO
        leverage = max(ZERO, data.stability.debt_to_equity)
        return max(ZERO, leverage * book - NET_DEBT_BOOK_OFFSET * book)

    def fair_values(self, data: FundamentalData) -> Dict[str, Decimal]:
        """Per-metric fair value; zero marks a metric that cannot be used."""
        multiples = self.sector_multiples(data)
        premium = clamp(
            self.growth_premium(data) + self.quality_premium(data), *COMBINED_PREMIUM_BOUNDS
        )
        adjust = ONE + premium
        net_debt = self.net_debt_per_share(data)

        eps = data.earnings.eps
        growth = data.growth.predicted_eps_growth
        forward_eps = first_positive(
            data.earnings.forward_eps,
            data.valuation.forward_eps,
            eps * (ONE + growth) if eps > 0 else ZERO,
        )
        ebitda = data.earnings.ebitda
        sales = data.revenue.sales_per_share
        book = data.valuation.book_value_per_share
        fcf = data.cash_flow.current_fcf

        def positive(value: Decimal) -> Decimal:
            return value if value > 0 else ZERO

        values = {
            "pe": eps * multiples["pe"] * adjust if eps > 0 else ZERO,
            "forward_pe": forward_eps * multiples["forward_pe"] * adjust,
            "ev_ebitda": positive(ebitda * multiples["ev_ebitda"] * adjust - net_debt) if ebitda > 0 else ZERO,
            "price_sales": positive(sales * multiples["price_sales"] * adjust),
            "price_book": positive(book * multiples["price_book"] * adjust),
            "peg": eps * multiples["peg"] * growth * HUNDRED if eps > 0 and growth > 0 else ZERO,
            "ev_sales": positive(sales * multiples["ev_sales"] * adjust - net_debt) if sales > 0 else ZERO,
            "price_fcf": positive(fcf * multiples["price_fcf"] * adjust),
        }
        return values

    def project(self, data: FundamentalData) -> Dict[str, Any]:
        profile = classify_comparable_profile(data)
        weights = weights_for(profile)
        values = self.fair_values(data)

        used = {
            metric: weight
            for metric, weight in weights.items()
            if weight > 0 and values[metric] > 0
        }
        total_weight = dsum(used.values())

        if total_weight > 0:
            value = safe_div(dsum(values[m] * w for m, w in used.items()), total_weight)
            fallback = False
        else:
            value = data.price
            fallback = True
            logger.debug("Comparable: no usable multiple, falling back to price %s", data.price)

        logger.debug("Comparable (%s): %d metrics -> %.2f", profile, len(used), value)
        return {
            "value_per_share": value,
            "profile": str(profile),
            "weights": weights,
            "fair_values": values,
            "metrics_used": sorted(used),
            "growth_premium": self.growth_premium(data),
            "quality_premium": self.quality_premium(data),
            "net_debt_per_share": self.net_debt_per_share(data),
            "fallback": fallback,
        }

    def calculate(self, data: FundamentalData) -> Decimal:
        """Per-share comparable value; the last price when nothing is usable."""
        return self.project(data)["value_per_share"]
