"""Recommendation value object and its graded enums."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict

from fairvalue.constants import ZERO


class RecommendationAction(Enum):
    """Seven-grade action scale; the value doubles as the numeric score."""

    STRONG_BUY = 1
    BUY = 2
    ACCUMULATE = 3
    HOLD = 4
    REDUCE = 5
    SELL = 6
    STRONG_SELL = 7

    def __str__(self) -> str:
        return self.label

    @property
    def label(self) -> str:
        """Display name, e.g. 'Strong Buy'."""
        return self.name.replace("_", " ").title()

    @property
    def is_bullish(self) -> bool:
        return self.value <= RecommendationAction.ACCUMULATE.value

    @property
    def is_bearish(self) -> bool:
        return self.value >= RecommendationAction.REDUCE.value


class RiskLevel(Enum):
    """Five-grade risk label, ordered from lowest to highest."""

    VERY_LOW = "Very Low"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    VERY_HIGH = "Very High"

    def __str__(self) -> str:
        return self.value

    @property
    def rank(self) -> int:
        return list(RiskLevel).index(self)

    @property
    def is_elevated(self) -> bool:
        """High or Very High."""
        return self.rank >= RiskLevel.HIGH.rank

    @classmethod
    def at_least(cls, level: "RiskLevel", floor: "RiskLevel") -> "RiskLevel":
        """Return the higher of two levels."""
        return level if level.rank >= floor.rank else floor


class SectorPosition(Enum):
    """Standing of a company against its sector averages."""

    LEADER = "Leader"
    STRONG = "Strong"
    AVERAGE = "Average"
    BELOW_AVERAGE = "Below Average"
    LAGGARD = "Laggard"
    UNKNOWN = ""

    def __str__(self) -> str:
        return self.value


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Recommendation:
    """
    Graded recommendation for one instrument.

    `score` always equals `action.value`. `generated_at` is display metadata
    and does not take part in equality, so evaluating the same inputs twice
    yields equal recommendations.
    """

    action: RecommendationAction
    time_horizon: str
    target_price: Decimal
    rationale: str
    risk_level: RiskLevel
    sector_position: SectorPosition = SectorPosition.UNKNOWN
    short_term_outlook: str = ""
    mid_term_outlook: str = ""
    long_term_outlook: str = ""
    intrinsic_value: Decimal = ZERO
    deviation_pct: Decimal = ZERO
    generated_at: datetime = field(default_factory=_utcnow, compare=False)

    @property
    def score(self) -> int:
        return self.action.value

    def __str__(self) -> str:
        return (
            f"{self.action.label} ({self.time_horizon}) target {self.target_price}, "
            f"risk {self.risk_level}"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "action": self.action.label,
            "score": self.score,
            "time_horizon": self.time_horizon,
            "target_price": self.target_price,
            "rationale": self.rationale,
            "risk_level": self.risk_level.value,
            "sector_position": self.sector_position.value,
            "short_term_outlook": self.short_term_outlook,
            "mid_term_outlook": self.mid_term_outlook,
            "long_term_outlook": self.long_term_outlook,
            "intrinsic_value": self.intrinsic_value,
            "deviation_pct": self.deviation_pct,
            "generated_at": self.generated_at.isoformat(),
        }