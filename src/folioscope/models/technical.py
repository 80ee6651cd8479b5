"""Bundled technical analysis of one price series."""

from __future__ import annotations

from dataclasses import dataclass, field

from folioscope.models.analysis import (
    ADXAnalysis,
    BollingerBandsAnalysis,
    IchimokuAnalysis,
    IndicatorSignal,
    MACDAnalysis,
    RSIAnalysis,
    StochasticAnalysis,
    VolumeAnalysis,
)
from folioscope.models.levels import SupportResistance


@dataclass(frozen=True)
class TechnicalIndicators:
    """Headline raw indicator values.

    Attributes:
        avg_volume: 20-bar volume SMA, 0 when the series has no volume
    """

    rsi: float
    macd: float
    macd_signal: float
    macd_histogram: float
    ema20: float
    ema50: float
    ema200: float
    bollinger_upper: float
    bollinger_middle: float
    bollinger_lower: float
    atr: float
    volume: float
    avg_volume: float


@dataclass
class TechnicalAnalysis:
    """Raw values, per-indicator analyses, levels and the overall signal."""

    indicators: TechnicalIndicators
    rsi: RSIAnalysis
    macd: MACDAnalysis
    stochastic: StochasticAnalysis
    bollinger_bands: BollingerBandsAnalysis
    adx: ADXAnalysis
    ichimoku: IchimokuAnalysis
    volume: VolumeAnalysis
    overall_signal: IndicatorSignal
    support_resistance: list[SupportResistance] = field(default_factory=list)
    current_price: float = 0.0

    @property
    def supports(self) -> list[SupportResistance]:
        return [sr for sr in self.support_resistance if sr.type.value == "support"]

    @property
    def resistances(self) -> list[SupportResistance]:
        return [sr for sr in self.support_resistance if sr.type.value == "resistance"]
