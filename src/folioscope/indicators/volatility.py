"""Volatility indicators: Bollinger Bands and ATR."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import pandas as pd

from folioscope.indicators.base import sma, standard_deviation, true_range, wilder_smoothing
from folioscope.models.analysis import (
    BollingerBandsAnalysis,
    IndicatorSignal,
    SignalDirection,
    Strength,
)


@dataclass(frozen=True)
class BollingerBands:
    """Bands at the latest close.

    Attributes:
        bandwidth: (upper - lower) / middle * 100
        percent_b: (close - lower) / (upper - lower), 0.5 on zero width
    """

    upper: float
    middle: float
    lower: float
    bandwidth: float
    percent_b: float


def bollinger_bands(
    closes: Sequence[float],
    period: int = 20,
    multiplier: float = 2.0,
) -> BollingerBands:
    """Bollinger Bands; flat at the last close when there are fewer than ``period`` closes."""
    if len(closes) < period:
        price = float(closes[-1]) if closes else 0.0
        return BollingerBands(price, price, price, 0.0, 0.5)

    middle = sma(closes, period)
    deviation = standard_deviation(closes, period)
    upper = middle + multiplier * deviation
    lower = middle - multiplier * deviation
    bandwidth = (upper - lower) / middle * 100 if middle != 0 else 0.0
    percent_b = (closes[-1] - lower) / (upper - lower) if upper != lower else 0.5
    return BollingerBands(upper, middle, lower, bandwidth, percent_b)


def bandwidth_history(
    closes: Sequence[float],
    period: int = 20,
    multiplier: float = 2.0,
) -> list[float]:
    """Bandwidth of every prefix with at least ``period`` closes, oldest first."""
    if len(closes) < period:
        return []
    series = pd.Series(closes, dtype=float)
    middle = series.rolling(period).mean()
    width = 2 * multiplier * series.rolling(period).std(ddof=0)
    bandwidth = (width / middle * 100).where(middle != 0, 0.0)
    return bandwidth.iloc[period - 1 :].tolist()


def analyze_bollinger_bands(
    closes: Sequence[float],
    period: int = 20,
    multiplier: float = 2.0,
    squeeze_lookback: int = 120,
) -> BollingerBandsAnalysis:
    """Bollinger Bands with squeeze detection and band signals.

    A squeeze is a bandwidth within 10% of the minimum of the trailing
    ``squeeze_lookback`` bandwidth readings. Without any history there is
    no squeeze.
    """
    bands = bollinger_bands(closes, period, multiplier)
    history = bandwidth_history(closes, period, multiplier)[-squeeze_lookback:]
    squeeze = bool(history) and bands.bandwidth <= min(history) * 1.1

    close = closes[-1] if closes else 0.0
    signal = SignalDirection.NEUTRAL
    strength = Strength.WEAK
    description = "Price inside the bands"

    if close > bands.upper:
        signal = SignalDirection.BEARISH
        strength = Strength.STRONG if bands.percent_b > 1.2 else Strength.MODERATE
        description = "Price above upper band - overbought/strong momentum"
    elif close < bands.lower:
        signal = SignalDirection.BULLISH
        strength = Strength.STRONG if bands.percent_b < -0.2 else Strength.MODERATE
        description = "Price below lower band - oversold/potential bounce"
    elif squeeze:
        strength = Strength.MODERATE
        description = "Squeeze detected - potential breakout incoming"
    elif bands.percent_b > 0.8:
        signal = SignalDirection.BEARISH
        description = "Price near upper band"
    elif bands.percent_b < 0.2:
        signal = SignalDirection.BULLISH
        description = "Price near lower band"

    return BollingerBandsAnalysis(
        upper=bands.upper,
        middle=bands.middle,
        lower=bands.lower,
        bandwidth=bands.bandwidth,
        percent_b=bands.percent_b,
        squeeze=squeeze,
        signal=IndicatorSignal(bands.percent_b * 100, signal, strength, description),
        period=period,
        multiplier=multiplier,
    )


def atr(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 14,
) -> float:
    """Average True Range (Wilder); 0 with fewer than period + 1 bars."""
    if len(highs) < period + 1:
        return 0.0
    return wilder_smoothing(true_range(highs, lows, closes), period)
