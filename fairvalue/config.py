"""
Application configuration for the Fair Value Advisor.

This module provides a clean configuration interface using a frozen dataclass.
All magic numbers are imported from constants.py for easy modification.

Usage:
    from fairvalue.config import config

    # Access configuration
    risk_free_rate = config.risk_free_rate

    # Pick up FAIRVALUE_* overrides from the environment / config/fairvalue.env
    runtime_config = Config.from_env()

    # Application startup: settings plus logging handlers
    runtime_config = configure()
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from decimal import Decimal, InvalidOperation
from typing import Dict, Optional

from fairvalue.constants import (
    # Cost of capital
    RISK_FREE_RATE,
    MARKET_RISK_PREMIUM,
    CORPORATE_TAX_RATE,
    MIN_WACC,
    MAX_WACC,
    # DCF
    DCF_MARGIN_OF_SAFETY,
    DCF_TERMINAL_QUALITY_FACTOR,
    DEFAULT_LONG_TERM_GROWTH,
    # Aggregator
    AGGREGATOR_BASE_WEIGHTS,
    MODEL_VALUE_BOUNDS,
    FINAL_VALUE_BOUNDS,
    # Recommendation
    REFERENCE_VOLATILITY,
    # Batch
    MAX_PARALLEL_WORKERS,
)
from fairvalue.logging_config import LOG_LEVELS, get_logger, setup_logging

logger = get_logger(__name__)

ENV_PREFIX = "FAIRVALUE_"

RECOMMENDATION_MODES = ("advanced", "simple")


@dataclass(frozen=True)
class Config:
    """
    Immutable application configuration.

    All values are set from constants.py defaults.
    The frozen=True ensures configuration cannot be accidentally modified at runtime.
    """

    # =========================================================================
    # Cost of Capital
    # =========================================================================
    risk_free_rate: Decimal = RISK_FREE_RATE
    market_risk_premium: Decimal = MARKET_RISK_PREMIUM
    tax_rate: Decimal = CORPORATE_TAX_RATE
    min_wacc: Decimal = MIN_WACC
    max_wacc: Decimal = MAX_WACC

    # =========================================================================
    # DCF
    # =========================================================================
    margin_of_safety: Decimal = DCF_MARGIN_OF_SAFETY
    terminal_quality_factor: Decimal = DCF_TERMINAL_QUALITY_FACTOR
    default_long_term_growth: Decimal = DEFAULT_LONG_TERM_GROWTH

    # =========================================================================
    # Aggregator sanity bounds (multiples of last price)
    # =========================================================================
    model_min_multiple: Decimal = MODEL_VALUE_BOUNDS[0]
    model_max_multiple: Decimal = MODEL_VALUE_BOUNDS[1]
    final_min_multiple: Decimal = FINAL_VALUE_BOUNDS[0]
    final_max_multiple: Decimal = FINAL_VALUE_BOUNDS[1]

    # =========================================================================
    # Recommendation
    # =========================================================================
    recommendation_mode: str = "advanced"  # "advanced" or "simple"
    reference_volatility: Decimal = REFERENCE_VOLATILITY

    # =========================================================================
    # Batch processing & logging
    # =========================================================================
    max_workers: int = MAX_PARALLEL_WORKERS
    log_level: str = "INFO"
    log_file: str = ""  # empty: console only

    def __post_init__(self) -> None:
        if self.recommendation_mode not in RECOMMENDATION_MODES:
            raise ValueError(
                f"recommendation_mode must be one of {RECOMMENDATION_MODES}, "
                f"got {self.recommendation_mode!r}"
            )
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be positive, got {self.max_workers}")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}, got {self.log_level!r}")

    @property
    def aggregator_base_weights(self) -> Dict[str, Decimal]:
        """Starting model weights for the intrinsic value blend."""
        return AGGREGATOR_BASE_WEIGHTS.copy()

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "Config":
        """
        Build a configuration with FAIRVALUE_* overrides applied.

        Args:
            environ: Mapping to read from (defaults to os.environ after
                     loading config/fairvalue.env)

        Returns:
            Config instance

        Example:
            FAIRVALUE_RECOMMENDATION_MODE=simple FAIRVALUE_MAX_WORKERS=4
        """
        if environ is None:
            from fairvalue.env_loader import load_environment_variables

            load_environment_variables()
            environ = dict(os.environ)

        overrides = {}
        for field_ in fields(cls):
            raw = environ.get(ENV_PREFIX + field_.name.upper())
            if raw is None or raw.strip() == "":
                continue
            overrides[field_.name] = _coerce(field_.name, raw.strip(), field_.default)

        return replace(cls(), **overrides)


def _coerce(name: str, raw: str, default: object) -> object:
    """Convert an environment string to the type of the field default."""
    if isinstance(default, Decimal):
        try:
            return Decimal(raw)
        except InvalidOperation as e:
            raise ValueError(f"{ENV_PREFIX}{name.upper()} is not a number: {raw!r}") from e
    if isinstance(default, int):
        try:
            return int(raw)
        except ValueError as e:
            raise ValueError(f"{ENV_PREFIX}{name.upper()} is not an integer: {raw!r}") from e
    if name == "log_level":
        return raw.upper()
    if name == "recommendation_mode":
        return raw.lower()
    return raw


# Global configuration instance
config = Config()


def configure(env_file: Optional[str] = None, colored: bool = True) -> Config:
    """
    Load settings and install logging handlers for an application run.

    Reads the env file (default: config/fairvalue.env) without overriding
    the process environment, builds the configuration from FAIRVALUE_*
    variables and sets up logging from its log_level and log_file.

    Returns:
        The runtime Config; pass it to RecommendationEngine(cfg=...).
    """
    from fairvalue.env_loader import load_environment_variables

    load_environment_variables(env_file)
    runtime = Config.from_env(dict(os.environ))
    setup_logging(level=runtime.log_level, log_file=runtime.log_file or None, colored=colored)
    logger.info(
        "Configured: mode=%s, workers=%d, log level %s",
        runtime.recommendation_mode, runtime.max_workers, runtime.log_level,
    )
    return runtime
