"""Indicator analysis results and their closed tag enumerations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SignalDirection(str, Enum):
    """Directional read of an indicator."""

    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class Strength(str, Enum):
    """Confidence tier attached to a signal or a price level."""

    WEAK = "weak"
    MODERATE = "moderate"
    STRONG = "strong"

    @property
    def rank(self) -> int:
        """Numeric rank used when merging and scoring levels."""
        return {
            Strength.WEAK: 1,
            Strength.MODERATE: 2,
            Strength.STRONG: 3,
        }[self]


class Divergence(str, Enum):
    """Price/oscillator divergence tag."""

    BULLISH = "bullish"
    BEARISH = "bearish"
    NONE = "none"


class Crossover(str, Enum):
    """Line crossover on the latest bar."""

    BULLISH = "bullish"
    BEARISH = "bearish"
    NONE = "none"


class TrendStrength(str, Enum):
    """ADX trend strength tier."""

    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"
    ABSENT = "absent"


class TrendDirection(str, Enum):
    """Dominant directional index."""

    BULLISH = "bullish"
    BEARISH = "bearish"
    SIDEWAYS = "sideways"

    @property
    def as_signal(self) -> SignalDirection:
        """Map to a signal direction (sideways reads as neutral)."""
        return {
            TrendDirection.BULLISH: SignalDirection.BULLISH,
            TrendDirection.BEARISH: SignalDirection.BEARISH,
            TrendDirection.SIDEWAYS: SignalDirection.NEUTRAL,
        }[self]


class CloudStatus(str, Enum):
    """Close position relative to the Ichimoku cloud."""

    ABOVE = "above"
    BELOW = "below"
    INSIDE = "inside"


class ObvTrend(str, Enum):
    """Direction of on-balance volume over the recent window."""

    RISING = "rising"
    FALLING = "falling"
    FLAT = "flat"


class VolumeSignal(str, Enum):
    """Current volume versus its average."""

    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"


@dataclass(frozen=True)
class IndicatorSignal:
    """Tagged reading of one indicator.

    Attributes:
        value: Headline numeric value
        signal: Bullish, bearish or neutral
        strength: Confidence tier
        description: Short human-readable reason
    """

    value: float
    signal: SignalDirection
    strength: Strength
    description: str


@dataclass(frozen=True)
class RSIAnalysis:
    """RSI reading with zone and divergence tags."""

    value: float
    signal: IndicatorSignal
    divergence: Divergence
    period: int = 14

    @property
    def overbought(self) -> bool:
        return self.value > 70

    @property
    def oversold(self) -> bool:
        return self.value < 30

    @property
    def neutral(self) -> bool:
        return 30 <= self.value <= 70


@dataclass(frozen=True)
class MACDAnalysis:
    """MACD lines with crossover, trend and divergence tags."""

    macd: float
    signal: float
    histogram: float
    crossover: Crossover
    trend: SignalDirection
    divergence: Divergence
    fast_period: int = 12
    slow_period: int = 26
    signal_period: int = 9


@dataclass(frozen=True)
class StochasticAnalysis:
    """Stochastic %K/%D with crossover tag."""

    k: float
    d: float
    signal: IndicatorSignal
    crossover: Crossover
    k_period: int = 14
    d_period: int = 3


@dataclass(frozen=True)
class BollingerBandsAnalysis:
    """Bollinger bands with %B, bandwidth and squeeze flag.

    Attributes:
        percent_b: Close position within the bands (0 = lower, 1 = upper)
        bandwidth: Band width as a percentage of the middle band
        squeeze: Bandwidth near its trailing minimum
    """

    upper: float
    middle: float
    lower: float
    bandwidth: float
    percent_b: float
    squeeze: bool
    signal: IndicatorSignal
    period: int = 20
    multiplier: float = 2.0


@dataclass(frozen=True)
class ADXAnalysis:
    """ADX trend strength with the dominant direction."""

    adx: float
    plus_di: float
    minus_di: float
    strength: TrendStrength
    direction: TrendDirection
    period: int = 14


@dataclass(frozen=True)
class IchimokuAnalysis:
    """Ichimoku lines and cloud position."""

    tenkan_sen: float
    kijun_sen: float
    senkou_span_a: float
    senkou_span_b: float
    chikou_span: float
    cloud_status: CloudStatus
    signal: IndicatorSignal


@dataclass(frozen=True)
class VolumeAnalysis:
    """Volume flow readings."""

    obv: float
    obv_trend: ObvTrend
    vwap: float
    volume_ratio: float
    volume_signal: VolumeSignal

    @classmethod
    def neutral(cls) -> "VolumeAnalysis":
        """Reading used when the series carries no volume."""
        return cls(
            obv=0.0,
            obv_trend=ObvTrend.FLAT,
            vwap=0.0,
            volume_ratio=1.0,
            volume_signal=VolumeSignal.NORMAL,
        )
