"""Momentum oscillators: RSI, Stochastic, Williams %R and CCI."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import pandas as pd

from folioscope.indicators.base import WilderState, sma
from folioscope.models.analysis import (
    Crossover,
    Divergence,
    IndicatorSignal,
    RSIAnalysis,
    SignalDirection,
    StochasticAnalysis,
    Strength,
)

logger = logging.getLogger(__name__)

# Bars at the end of a divergence window excluded from the "previous" extreme
DIVERGENCE_RECENT_BARS = 5


# =============================================================================
# RSI
# =============================================================================


def rsi_series(closes: Sequence[float], period: int = 14) -> list[float]:
    """RSI for every close using Wilder smoothing of gains and losses.

    The first ``period`` entries are 50. A flat or rising window with no
    losses reads 100.

    Args:
        closes: Closing prices, earliest first
        period: Smoothing period

    Returns:
        List aligned with ``closes``
    """
    if len(closes) < period + 1:
        return [50.0] * len(closes)

    gains = WilderState(period)
    losses = WilderState(period)
    result = [50.0] * period
    for i in range(1, len(closes)):
        change = closes[i] - closes[i - 1]
        gains.update(change if change > 0 else 0.0)
        losses.update(-change if change <= 0 else 0.0)
        if not gains.ready:
            continue
        if losses.value == 0:
            result.append(100.0)
        else:
            rs = gains.value / losses.value
            result.append(100 - 100 / (1 + rs))
    return result


def rsi(closes: Sequence[float], period: int = 14) -> float:
    """Latest RSI value (50 when there are fewer than period + 1 closes)."""
    if len(closes) < period + 1:
        return 50.0
    return rsi_series(closes, period)[-1]


def detect_rsi_divergence(
    closes: Sequence[float],
    rsi_values: Sequence[float],
    lookback: int = 20,
) -> Divergence:
    """Compare the latest close and RSI against the earlier part of the window.

    Bullish when price undercuts the window low (excluding the last five
    bars) while RSI holds above its own low and below 40. Bearish mirrors
    with highs and RSI above 60.
    """
    if len(closes) < lookback or len(rsi_values) < lookback:
        return Divergence.NONE

    recent_closes = list(closes[-lookback:])
    recent_rsi = list(rsi_values[-lookback:])
    earlier_closes = recent_closes[:-DIVERGENCE_RECENT_BARS]
    earlier_rsi = recent_rsi[:-DIVERGENCE_RECENT_BARS]
    price = recent_closes[-1]
    current = recent_rsi[-1]

    if price < min(earlier_closes) and current > min(earlier_rsi) and current < 40:
        return Divergence.BULLISH
    if price > max(earlier_closes) and current < max(earlier_rsi) and current > 60:
        return Divergence.BEARISH
    return Divergence.NONE


def analyze_rsi(
    closes: Sequence[float],
    period: int = 14,
    divergence_lookback: int = 20,
) -> RSIAnalysis:
    """RSI with signal bands, zones and divergence override."""
    series = rsi_series(closes, period)
    value = series[-1] if len(closes) >= period + 1 else 50.0
    divergence = detect_rsi_divergence(closes, series, divergence_lookback)

    if value > 70:
        signal = SignalDirection.BEARISH
        strength = Strength.STRONG if value > 80 else Strength.MODERATE
        description = f"Overbought ({value:.1f}) - potential reversal or pullback"
    elif value < 30:
        signal = SignalDirection.BULLISH
        strength = Strength.STRONG if value < 20 else Strength.MODERATE
        description = f"Oversold ({value:.1f}) - potential bounce"
    elif value > 50:
        signal = SignalDirection.BULLISH
        strength = Strength.WEAK
        description = f"Bullish momentum ({value:.1f})"
    else:
        signal = SignalDirection.BEARISH
        strength = Strength.WEAK
        description = f"Bearish momentum ({value:.1f})"

    if divergence is Divergence.BULLISH:
        signal = SignalDirection.BULLISH
        strength = Strength.MODERATE
        description = (
            "Bullish divergence detected - price making lower lows while RSI making higher lows"
        )
    elif divergence is Divergence.BEARISH:
        signal = SignalDirection.BEARISH
        strength = Strength.MODERATE
        description = (
            "Bearish divergence detected - price making higher highs while RSI making lower highs"
        )

    return RSIAnalysis(
        value=value,
        signal=IndicatorSignal(value, signal, strength, description),
        divergence=divergence,
        period=period,
    )


# =============================================================================
# Stochastic
# =============================================================================


@dataclass(frozen=True)
class StochasticValues:
    k: float
    d: float


def stochastic_k_series(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    k_period: int = 14,
) -> list[float]:
    """%K for every bar from index ``k_period - 1`` on (50 on a zero range)."""
    if len(closes) < k_period:
        return []
    highest = pd.Series(highs, dtype=float).rolling(k_period).max()
    lowest = pd.Series(lows, dtype=float).rolling(k_period).min()
    values: list[float] = []
    for i in range(k_period - 1, len(closes)):
        price_range = highest.iloc[i] - lowest.iloc[i]
        if price_range == 0:
            values.append(50.0)
        else:
            values.append((closes[i] - lowest.iloc[i]) / price_range * 100)
    return values


def stochastic(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    k_period: int = 14,
    d_period: int = 3,
) -> StochasticValues:
    """Latest %K and %D (SMA of %K); (50, 50) with fewer than k + d bars."""
    if len(closes) < k_period + d_period:
        return StochasticValues(50.0, 50.0)
    k_values = stochastic_k_series(highs, lows, closes, k_period)
    return StochasticValues(k_values[-1], sma(k_values, d_period))


def analyze_stochastic(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    k_period: int = 14,
    d_period: int = 3,
) -> StochasticAnalysis:
    """Stochastic with crossover against the previous bar and band signals."""
    n = len(closes)
    if n < k_period + d_period:
        current = StochasticValues(50.0, 50.0)
        previous = StochasticValues(50.0, 50.0)
    else:
        k_values = stochastic_k_series(highs, lows, closes, k_period)
        current = StochasticValues(k_values[-1], sma(k_values, d_period))
        if n - 1 < k_period + d_period:
            previous = StochasticValues(50.0, 50.0)
        else:
            previous = StochasticValues(k_values[-2], sma(k_values[:-1], d_period))

    k, d = current.k, current.d
    crossover = Crossover.NONE
    if previous.k < previous.d and k > d:
        crossover = Crossover.BULLISH
    elif previous.k > previous.d and k < d:
        crossover = Crossover.BEARISH

    signal = SignalDirection.NEUTRAL
    strength = Strength.WEAK
    description = "No extreme reading"
    if k > 80 and d > 80:
        signal = SignalDirection.BEARISH
        strength = Strength.STRONG if k > 90 else Strength.MODERATE
        description = "Overbought territory - potential reversal"
    elif k < 20 and d < 20:
        signal = SignalDirection.BULLISH
        strength = Strength.STRONG if k < 10 else Strength.MODERATE
        description = "Oversold territory - potential bounce"
    elif crossover is Crossover.BULLISH and k < 50:
        signal = SignalDirection.BULLISH
        strength = Strength.MODERATE
        description = "Bullish crossover in lower half"
    elif crossover is Crossover.BEARISH and k > 50:
        signal = SignalDirection.BEARISH
        strength = Strength.MODERATE
        description = "Bearish crossover in upper half"

    return StochasticAnalysis(
        k=k,
        d=d,
        signal=IndicatorSignal(k, signal, strength, description),
        crossover=crossover,
        k_period=k_period,
        d_period=d_period,
    )


# =============================================================================
# Williams %R and CCI
# =============================================================================


def williams_r(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 14,
) -> float:
    """Williams %R in [-100, 0]; -50 on short data or a zero range."""
    if len(closes) < period:
        return -50.0
    highest = max(highs[-period:])
    lowest = min(lows[-period:])
    price_range = highest - lowest
    if price_range == 0:
        return -50.0
    return (highest - closes[-1]) / price_range * -100


def cci(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 20,
) -> float:
    """Commodity Channel Index of the latest typical price (0 when undefined)."""
    if len(closes) < period:
        return 0.0
    typical = [(h + l + c) / 3 for h, l, c in zip(highs, lows, closes)]
    mean_tp = sma(typical, period)
    mean_deviation = sum(abs(tp - mean_tp) for tp in typical[-period:]) / period
    if mean_deviation == 0:
        logger.debug("CCI mean deviation is zero, returning 0")
        return 0.0
    return (typical[-1] - mean_tp) / (0.015 * mean_deviation)
