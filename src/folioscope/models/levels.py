"""Support and resistance level models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from folioscope.models.analysis import Strength


class LevelType(str, Enum):
    """Side of the current price a level sits on."""

    SUPPORT = "support"
    RESISTANCE = "resistance"

    @classmethod
    def for_price(cls, price: float, current_price: float) -> "LevelType":
        """Support below the current price, resistance at or above it."""
        return cls.SUPPORT if price < current_price else cls.RESISTANCE


class PivotMethod(str, Enum):
    """Published pivot point formulas."""

    STANDARD = "Standard"
    FIBONACCI = "Fibonacci"
    CAMARILLA = "Camarilla"
    WOODIE = "Woodie"
    DEMARK = "DeMark"


@dataclass(frozen=True)
class PivotPoints:
    """Pivot with three resistance and three support rungs."""

    pivot: float
    r1: float
    r2: float
    r3: float
    s1: float
    s2: float
    s3: float
    method: PivotMethod

    def as_ladder(self) -> list[float]:
        """Levels from lowest to highest: s3, s2, s1, pivot, r1, r2, r3."""
        return [self.s3, self.s2, self.s1, self.pivot, self.r1, self.r2, self.r3]


@dataclass(frozen=True)
class FibonacciLevels:
    """Fibonacci ratios mapped onto a swing range.

    Attribute suffixes are the ratio in tenths of a percent
    (``level_618`` is the 61.8% level).
    """

    level_0: float
    level_236: float
    level_382: float
    level_500: float
    level_618: float
    level_786: float
    level_1000: float
    level_1272: float
    level_1618: float


@dataclass(frozen=True)
class SwingRange:
    """Extremes of the recent window used for Fibonacci levels.

    Indexes are positions inside the lookback window.
    """

    swing_high: float
    swing_high_index: int
    swing_low: float
    swing_low_index: int

    @property
    def is_uptrend(self) -> bool:
        """The low came before the high."""
        return self.swing_low_index < self.swing_high_index


@dataclass(frozen=True)
class VolumeProfileBin:
    """One price bucket of a volume profile."""

    price: float
    volume: float
    volume_percent: float
    is_poc: bool
    is_hvn: bool
    is_lvn: bool


@dataclass(frozen=True)
class SwingPoint:
    """Fractal swing high or low.

    Attributes:
        index: Bar index of the swing
        price: High (for a swing high) or low (for a swing low)
        kind: "high" or "low"
        strength: Mean distance to the neighbouring extremes
    """

    index: int
    price: float
    kind: str
    strength: float


@dataclass
class PriceLevel:
    """Candidate support/resistance level produced by one detector.

    ``sources`` keeps every detector that contributed after merging.
    """

    price: float
    type: LevelType
    strength: Strength
    sources: list[str]
    touches: int = 0
    volume_at_level: Optional[float] = None

    @property
    def source(self) -> str:
        """Combined source label."""
        return ", ".join(self.sources)


@dataclass(frozen=True)
class SupportResistance:
    """Consolidated support or resistance level."""

    type: LevelType
    price: float
    strength: Strength
    source: str
    touches: int = 0
    score: float = field(default=0.0, compare=False)
