"""
Centralized constants for the Fair Value Advisor.

All magic numbers and hardcoded values should be defined here.
This makes the valuation models easier to tune and self-documenting.
Every rate is a Decimal fraction (0.05 = 5%) unless the name says PCT.
"""

from decimal import Decimal
from typing import Final

# =============================================================================
# TRADING CALENDAR
# =============================================================================
TRADING_DAYS_PER_MONTH: Final[int] = 21
TRADING_DAYS_PER_QUARTER: Final[int] = 63
MIN_MOMENTUM_HISTORY_DAYS: Final[int] = 90

# =============================================================================
# NUMERIC
# =============================================================================
ZERO: Final[Decimal] = Decimal("0")
ONE: Final[Decimal] = Decimal("1")
MONEY_QUANTUM: Final[Decimal] = Decimal("0.01")
NEUTRAL_SCORE: Final[Decimal] = Decimal("5")
MAX_SCORE: Final[Decimal] = Decimal("10")

# =============================================================================
# COST OF CAPITAL (CAPM)
# =============================================================================
RISK_FREE_RATE: Final[Decimal] = Decimal("0.035")
MARKET_RISK_PREMIUM: Final[Decimal] = Decimal("0.05")
CORPORATE_TAX_RATE: Final[Decimal] = Decimal("0.21")
DEFAULT_BETA: Final[Decimal] = Decimal("1.0")
MIN_WACC: Final[Decimal] = Decimal("0.03")
MAX_WACC: Final[Decimal] = Decimal("0.25")

# (interest coverage floor, credit spread) - first match wins
DEBT_SPREAD_BY_COVERAGE: Final[tuple] = (
    (Decimal("8"), Decimal("0.01")),
    (Decimal("4"), Decimal("0.02")),
    (Decimal("2"), Decimal("0.035")),
)
DEFAULT_DEBT_SPREAD: Final[Decimal] = Decimal("0.05")

# (beta floor, extra discount rate) - first match wins
BETA_RISK_PREMIUMS: Final[tuple] = (
    (Decimal("2.0"), Decimal("0.03")),
    (Decimal("1.5"), Decimal("0.02")),
    (Decimal("1.2"), Decimal("0.01")),
    (Decimal("1.0"), Decimal("0.005")),
)

# =============================================================================
# DCF MODEL
# =============================================================================
DCF_HIGH_GROWTH_YEARS: Final[int] = 5
DCF_TRANSITION_YEARS: Final[int] = 5
DCF_CONFIDENCE_DECAY: Final[Decimal] = Decimal("0.015")
DCF_TERMINAL_QUALITY_FACTOR: Final[Decimal] = Decimal("0.9")
DCF_MARGIN_OF_SAFETY: Final[Decimal] = Decimal("0.10")
DCF_MAX_TERMINAL_GROWTH: Final[Decimal] = Decimal("0.03")
DCF_TERMINAL_GROWTH_WACC_SHARE: Final[Decimal] = Decimal("0.6")
DEFAULT_LONG_TERM_GROWTH: Final[Decimal] = Decimal("0.025")
DCF_MIN_INITIAL_GROWTH: Final[Decimal] = Decimal("-0.10")
DCF_MAX_INITIAL_GROWTH: Final[Decimal] = Decimal("0.25")

DCF_SIZE_FACTORS: Final[dict] = {
    "large": Decimal("0.9"),
    "mid": Decimal("1.0"),
    "small": Decimal("1.1"),
}

# (revenue growth floor, growth multiplier, growth cap or None)
DCF_LIFECYCLE_BUCKETS: Final[tuple] = (
    (Decimal("0.25"), Decimal("0.85"), Decimal("0.25")),
    (Decimal("0.10"), Decimal("0.95"), None),
    (Decimal("0.03"), Decimal("1.0"), None),
)
DCF_DECLINE_MULTIPLIER: Final[Decimal] = Decimal("0.8")
DCF_DECLINE_GROWTH_CAP: Final[Decimal] = Decimal("0.03")

DCF_SECTOR_GROWTH_FACTORS: Final[dict] = {
    "Technology": Decimal("1.05"),
    "Utilities": Decimal("0.9"),
    "Financial": Decimal("0.95"),
}

# =============================================================================
# DDM MODEL
# =============================================================================
BUYBACK_MAX_PAYOUT: Final[Decimal] = Decimal("0.30")
BUYBACK_MIN_FCF_YIELD: Final[Decimal] = Decimal("0.05")
BUYBACK_MAX_YIELD: Final[Decimal] = Decimal("0.05")
BUYBACK_MIN_MEANINGFUL_YIELD: Final[Decimal] = Decimal("0.001")
BUYBACK_SUSTAINABILITY_HAIRCUT: Final[Decimal] = Decimal("0.9")
BUYBACK_EPS_GROWTH_SHARE: Final[Decimal] = Decimal("0.8")
BUYBACK_MAX_GROWTH: Final[Decimal] = Decimal("0.20")
BUYBACK_HIGH_GROWTH_YEARS: Final[int] = 5
BUYBACK_TRANSITION_YEARS: Final[int] = 5
BUYBACK_MAX_UPLIFT: Final[Decimal] = Decimal("1.3")
BUYBACK_UPLIFT_PER_YIELD: Final[Decimal] = Decimal("5")

DIVIDEND_EPS_GROWTH_MULTIPLIER: Final[Decimal] = Decimal("1.1")
DIVIDEND_MIN_GROWTH: Final[Decimal] = Decimal("-0.05")
DIVIDEND_MAX_GROWTH: Final[Decimal] = Decimal("0.25")
DIVIDEND_MAX_TERMINAL_GROWTH: Final[Decimal] = Decimal("0.04")
DIVIDEND_HIGH_PAYOUT: Final[Decimal] = Decimal("0.80")
DIVIDEND_SUSTAINABILITY_FACTOR: Final[Decimal] = Decimal("0.9")
MIN_DISCOUNT_SPREAD: Final[Decimal] = Decimal("0.01")

# (sustainable growth floor, high-growth years, transition years)
DIVIDEND_PHASES: Final[tuple] = (
    (Decimal("0.15"), 7, 5),
    (Decimal("0.08"), 5, 5),
)
DIVIDEND_DEFAULT_PHASES: Final[tuple] = (3, 4)

# =============================================================================
# COMPARABLE MODEL
# =============================================================================
COMPARABLE_METRICS: Final[tuple] = (
    "pe", "forward_pe", "ev_ebitda", "price_sales",
    "price_book", "peg", "ev_sales", "price_fcf",
)

COMPARABLE_WEIGHTS: Final[dict] = {
    "stable_profitable": (
        Decimal("0.20"), Decimal("0.15"), Decimal("0.20"), Decimal("0.05"),
        Decimal("0.10"), Decimal("0.05"), Decimal("0.05"), Decimal("0.20"),
    ),
    "growth": (
        Decimal("0.05"), Decimal("0.20"), Decimal("0.10"), Decimal("0.15"),
        Decimal("0.00"), Decimal("0.20"), Decimal("0.15"), Decimal("0.15"),
    ),
    "distressed": (
        Decimal("0.00"), Decimal("0.00"), Decimal("0.10"), Decimal("0.25"),
        Decimal("0.25"), Decimal("0.00"), Decimal("0.25"), Decimal("0.15"),
    ),
    "value": (
        Decimal("0.25"), Decimal("0.15"), Decimal("0.15"), Decimal("0.05"),
        Decimal("0.20"), Decimal("0.00"), Decimal("0.05"), Decimal("0.15"),
    ),
    "high_margin": (
        Decimal("0.15"), Decimal("0.15"), Decimal("0.25"), Decimal("0.10"),
        Decimal("0.05"), Decimal("0.05"), Decimal("0.05"), Decimal("0.20"),
    ),
}

# Sector fallbacks when peer multiples are missing: (P/E, EV/EBITDA, P/S)
SECTOR_DEFAULT_MULTIPLES: Final[dict] = {
    "Technology": (Decimal("25"), Decimal("18"), Decimal("5.0")),
    "Consumer": (Decimal("20"), Decimal("12"), Decimal("1.5")),
    "Utilities": (Decimal("17"), Decimal("10"), Decimal("2.5")),
    "Industrial": (Decimal("18"), Decimal("11"), Decimal("1.2")),
    "Healthcare": (Decimal("22"), Decimal("14"), Decimal("4.0")),
    "Financial": (Decimal("13"), Decimal("9"), Decimal("2.0")),
    "Other": (Decimal("16"), Decimal("10"), Decimal("1.8")),
}

DEFAULT_FORWARD_PE_RATIO: Final[Decimal] = Decimal("0.9")
DEFAULT_SECTOR_PRICE_BOOK: Final[Decimal] = Decimal("2.0")
DEFAULT_SECTOR_PEG: Final[Decimal] = Decimal("1.5")
DEFAULT_EV_SALES_RATIO: Final[Decimal] = Decimal("1.1")
DEFAULT_SECTOR_PRICE_FCF: Final[Decimal] = Decimal("20")
DEFAULT_SECTOR_ROE: Final[Decimal] = Decimal("0.15")
DEFAULT_SECTOR_NET_MARGIN: Final[Decimal] = Decimal("0.10")
DEFAULT_SECTOR_GROWTH: Final[Decimal] = Decimal("0.08")

GROWTH_PREMIUM_SCALE: Final[Decimal] = Decimal("0.5")
GROWTH_PREMIUM_BOUNDS: Final[tuple] = (Decimal("-0.20"), Decimal("0.30"))
QUALITY_PREMIUM_WEIGHT: Final[Decimal] = Decimal("0.15")
QUALITY_PREMIUM_BOUNDS: Final[tuple] = (Decimal("-0.25"), Decimal("0.35"))
COMBINED_PREMIUM_BOUNDS: Final[tuple] = (Decimal("-0.30"), Decimal("0.50"))
NET_DEBT_BOOK_OFFSET: Final[Decimal] = Decimal("0.1")

# =============================================================================
# SCORE MODEL
# =============================================================================
SCORE_CATEGORIES: Final[tuple] = (
    "valuation", "growth", "quality", "financial_health",
    "risk", "sentiment", "liquidity", "esg",
)

SCORE_BASE_WEIGHTS: Final[dict] = {
    "valuation": Decimal("0.20"),
    "growth": Decimal("0.15"),
    "quality": Decimal("0.15"),
    "financial_health": Decimal("0.15"),
    "risk": Decimal("0.15"),
    "sentiment": Decimal("0.10"),
    "liquidity": Decimal("0.05"),
    "esg": Decimal("0.05"),
}

SCORE_SECTOR_ADJUSTMENTS: Final[dict] = {
    "Technology": {"growth": Decimal("0.05"), "valuation": Decimal("-0.05")},
    "Utilities": {"risk": Decimal("0.05"), "growth": Decimal("-0.05")},
    "Financial": {"risk": Decimal("0.05"), "growth": Decimal("-0.05")},
    "Healthcare": {"quality": Decimal("0.05"), "sentiment": Decimal("-0.05")},
    "Consumer": {"quality": Decimal("0.05"), "growth": Decimal("-0.05")},
    "Industrial": {"financial_health": Decimal("0.05"), "sentiment": Decimal("-0.05")},
    "Other": {},
}

SCORE_COMPANY_TYPE_ADJUSTMENTS: Final[dict] = {
    "HighGrowth": {
        "growth": Decimal("0.10"), "valuation": Decimal("-0.05"),
        "financial_health": Decimal("-0.05"),
    },
    "Unprofitable": {
        "financial_health": Decimal("0.10"), "quality": Decimal("-0.05"),
        "valuation": Decimal("-0.05"),
    },
    "Value": {
        "valuation": Decimal("0.10"), "growth": Decimal("-0.05"),
        "sentiment": Decimal("-0.05"),
    },
    "Income": {
        "financial_health": Decimal("0.05"), "quality": Decimal("0.05"),
        "growth": Decimal("-0.10"),
    },
    "Defensive": {
        "risk": Decimal("0.05"), "quality": Decimal("0.05"),
        "growth": Decimal("-0.05"), "sentiment": Decimal("-0.05"),
    },
    "Aggressive": {
        "risk": Decimal("0.10"), "growth": Decimal("-0.05"),
        "valuation": Decimal("-0.05"),
    },
    "Balanced": {},
}

# (median, exceptional) anchors for higher-is-better metrics
SCORE_ANCHORS: Final[dict] = {
    "revenue_growth": (Decimal("0.05"), Decimal("0.25")),
    "eps_growth": (Decimal("0.07"), Decimal("0.30")),
    "fcf_growth": (Decimal("0.05"), Decimal("0.25")),
    "profit_growth": (Decimal("0.06"), Decimal("0.30")),
    "roe": (Decimal("0.10"), Decimal("0.25")),
    "roa": (Decimal("0.05"), Decimal("0.15")),
    "net_margin": (Decimal("0.08"), Decimal("0.25")),
    "operating_margin": (Decimal("0.12"), Decimal("0.30")),
    "roic": (Decimal("0.10"), Decimal("0.25")),
    "gross_margin": (Decimal("0.35"), Decimal("0.65")),
    "current_ratio": (Decimal("1.5"), Decimal("3.0")),
    "quick_ratio": (Decimal("1.0"), Decimal("2.0")),
    "interest_coverage": (Decimal("5"), Decimal("15")),
    "earnings_stability": (Decimal("0.5"), Decimal("0.9")),
    "sharpe_ratio": (Decimal("0.5"), Decimal("1.5")),
    "institutional_ownership": (Decimal("0.5"), Decimal("0.8")),
    "insider_buying": (Decimal("0.3"), Decimal("0.7")),
}

# (exceptional, median) anchors for lower-is-better metrics
SCORE_INVERSE_ANCHORS: Final[dict] = {
    "relative_multiple": (Decimal("0.6"), Decimal("1.0")),
    "peg": (Decimal("0.75"), Decimal("1.5")),
    "debt_to_equity": (Decimal("0.3"), Decimal("1.0")),
    "beta": (Decimal("0.6"), Decimal("1.0")),
    "volatility": (Decimal("0.15"), Decimal("0.25")),
}

MARGIN_TREND_BONUS: Final[Decimal] = Decimal("0.5")
STUB_CATEGORY_SCORE: Final[Decimal] = Decimal("5.0")

# =============================================================================
# INTRINSIC VALUE AGGREGATOR
# =============================================================================
AGGREGATOR_MODELS: Final[tuple] = ("dcf", "ddm", "comparable", "score")
AGGREGATOR_BASE_WEIGHTS: Final[dict] = {
    "dcf": Decimal("0.40"),
    "ddm": Decimal("0.20"),
    "comparable": Decimal("0.20"),
    "score": Decimal("0.20"),
}
AGGREGATOR_FALLBACK_WEIGHTS: Final[dict] = {
    "dcf": Decimal("0.50"),
    "ddm": Decimal("0.00"),
    "comparable": Decimal("0.30"),
    "score": Decimal("0.20"),
}
MODEL_VALUE_BOUNDS: Final[tuple] = (Decimal("0.2"), Decimal("5"))
FINAL_VALUE_BOUNDS: Final[tuple] = (Decimal("0.3"), Decimal("2"))
HIGH_YIELD_THRESHOLD: Final[Decimal] = Decimal("0.04")
HIGH_GROWTH_THRESHOLD: Final[Decimal] = Decimal("0.15")
LOW_GROWTH_THRESHOLD: Final[Decimal] = Decimal("0.05")
STABLE_EARNINGS_THRESHOLD: Final[Decimal] = Decimal("0.7")
LOW_BETA_THRESHOLD: Final[Decimal] = Decimal("0.8")
WEIGHT_SHIFT: Final[Decimal] = Decimal("0.05")
OUTLIER_DEVIATION: Final[Decimal] = Decimal("1.0")
OUTLIER_WEIGHT_FACTOR: Final[Decimal] = Decimal("0.8")

# =============================================================================
# RECOMMENDATION ENGINE
# =============================================================================
# (return floor, score) - first match wins, below the last floor scores 1.5
MOMENTUM_BUCKETS: Final[tuple] = (
    (Decimal("0.10"), Decimal("9")),
    (Decimal("0.05"), Decimal("7.5")),
    (Decimal("0"), Decimal("6")),
    (Decimal("-0.05"), Decimal("4.5")),
    (Decimal("-0.10"), Decimal("3")),
)
MOMENTUM_FLOOR_SCORE: Final[Decimal] = Decimal("1.5")
MOMENTUM_SHORT_WEIGHT: Final[Decimal] = Decimal("0.6")
MOMENTUM_LONG_WEIGHT: Final[Decimal] = Decimal("0.4")

TECHNICAL_PLACEHOLDER_SCORE: Final[Decimal] = Decimal("5.0")

# Quality factor thresholds
QUALITY_MIN_ROE: Final[Decimal] = Decimal("0.12")
QUALITY_MIN_NET_MARGIN: Final[Decimal] = Decimal("0.08")
QUALITY_STRONG_REVENUE_GROWTH: Final[Decimal] = Decimal("0.10")
QUALITY_STRONG_EPS_GROWTH: Final[Decimal] = Decimal("0.15")
QUALITY_MAX_LEVERAGE: Final[Decimal] = Decimal("1.0")
QUALITY_MIN_CURRENT_RATIO: Final[Decimal] = Decimal("1.2")
QUALITY_MAX_SUSTAINABLE_PAYOUT: Final[Decimal] = Decimal("0.60")
QUALITY_POSITIVE_CONSENSUS: Final[Decimal] = Decimal("4.0")
QUALITY_WEAK_ROE: Final[Decimal] = Decimal("0.05")
QUALITY_HIGH_LEVERAGE: Final[Decimal] = Decimal("2.0")
QUALITY_UNSUSTAINABLE_PAYOUT: Final[Decimal] = Decimal("0.90")
QUALITY_NEGATIVE_CONSENSUS: Final[Decimal] = Decimal("2.5")
QUALITY_MIN_INTEREST_COVERAGE: Final[Decimal] = Decimal("2")
RISK_MIN_INTEREST_COVERAGE: Final[Decimal] = Decimal("3")

# (company/sector ratio ceiling, score) - first match wins
VALUATION_GRADE_BUCKETS: Final[tuple] = (
    (Decimal("0.6"), Decimal("10")),
    (Decimal("0.8"), Decimal("8")),
    (Decimal("0.95"), Decimal("6.5")),
    (Decimal("1.05"), Decimal("5")),
    (Decimal("1.25"), Decimal("3")),
)
VALUATION_GRADE_FLOOR: Final[Decimal] = Decimal("1.5")

BASE_THRESHOLDS: Final[dict] = {
    "strong_buy": Decimal("30"),
    "buy": Decimal("15"),
    "accumulate": Decimal("5"),
    "reduce": Decimal("-5"),
    "sell": Decimal("-15"),
    "strong_sell": Decimal("-30"),
}
THRESHOLD_VOLATILITY_SCALES: Final[dict] = {
    "strong_buy": Decimal("0.5"),
    "buy": Decimal("0.3"),
    "accumulate": Decimal("0.1"),
    "reduce": Decimal("-0.1"),
    "sell": Decimal("-0.3"),
    "strong_sell": Decimal("-0.5"),
}
REFERENCE_VOLATILITY: Final[Decimal] = Decimal("0.20")
SECTOR_THRESHOLD_NUDGES: Final[dict] = {
    "Technology": Decimal("3"),
    "Financial": Decimal("2"),
    "Utilities": Decimal("-3"),
}

SIMPLE_THRESHOLDS: Final[tuple] = (
    Decimal("20"), Decimal("10"), Decimal("0"),
    Decimal("-5"), Decimal("-10"), Decimal("-20"),
)
SIMPLE_TIME_HORIZON: Final[str] = "12 months"

# weights over (momentum, technical, valuation grade, quality)
HORIZON_SIGNAL_WEIGHTS: Final[dict] = {
    "short": (Decimal("0.40"), Decimal("0.30"), Decimal("0.10"), Decimal("0.20")),
    "mid": (Decimal("0.25"), Decimal("0.15"), Decimal("0.30"), Decimal("0.30")),
    "long": (Decimal("0.05"), Decimal("0.05"), Decimal("0.45"), Decimal("0.45")),
}
SIGNAL_DEVIATION_SCALE: Final[Decimal] = Decimal("2")
HORIZON_LABELS: Final[dict] = {
    "short": "Short-term (1-3 months)",
    "mid": "Mid-term (6-12 months)",
    "long": "Long-term (2-3 years)",
}

HIGH_RISK_TARGET_ADJUSTMENT: Final[Decimal] = Decimal("0.85")
LONG_BULLISH_TARGET_ADJUSTMENT: Final[Decimal] = Decimal("1.1")

# Risk point buckets: (floor, points) - first match wins
RISK_BETA_POINTS: Final[tuple] = (
    (Decimal("1.8"), 5),
    (Decimal("1.2"), 4),
    (Decimal("1.0"), 2),
    (Decimal("0.8"), 1),
)
RISK_VOLATILITY_POINTS: Final[tuple] = (
    (Decimal("0.45"), 3),
    (Decimal("0.30"), 2),
    (Decimal("0.20"), 1),
)
RISK_LEVERAGE_POINTS: Final[tuple] = (
    (Decimal("2.0"), 2),
    (Decimal("1.0"), 1),
)
RISK_MAX_POINTS: Final[int] = 10
SIMPLE_HIGH_BETA: Final[Decimal] = Decimal("1.2")
SIMPLE_LOW_BETA: Final[Decimal] = Decimal("0.8")

# (points ceiling, label) - first match wins, otherwise "Very High"
RISK_LABEL_BUCKETS: Final[tuple] = (
    (2, "Very Low"),
    (4, "Low"),
    (6, "Medium"),
    (8, "High"),
)
RISK_HIGH_BETA_FLOOR: Final[Decimal] = Decimal("1.2")
RISK_VERY_HIGH_BETA_FLOOR: Final[Decimal] = Decimal("1.8")

# (average ratio floor, label) - first match wins
SECTOR_POSITION_BUCKETS: Final[tuple] = (
    (Decimal("1.3"), "Leader"),
    (Decimal("1.1"), "Strong"),
    (Decimal("0.9"), "Average"),
    (Decimal("0.7"), "Below Average"),
)

# =============================================================================
# BATCH PROCESSING
# =============================================================================
MAX_PARALLEL_WORKERS: Final[int] = 8
