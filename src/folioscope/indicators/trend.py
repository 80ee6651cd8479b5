"""Trend indicators: MACD, ADX and Ichimoku."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from folioscope.indicators.base import WilderState, ema_series, true_range, wilder_smoothing
from folioscope.indicators.momentum import DIVERGENCE_RECENT_BARS
from folioscope.models.analysis import (
    ADXAnalysis,
    CloudStatus,
    Crossover,
    Divergence,
    IchimokuAnalysis,
    IndicatorSignal,
    MACDAnalysis,
    SignalDirection,
    Strength,
    TrendDirection,
    TrendStrength,
)


# =============================================================================
# MACD
# =============================================================================


@dataclass(frozen=True)
class MACDValues:
    macd: float
    signal: float
    histogram: float


@dataclass(frozen=True)
class MACDSeries:
    """Aligned MACD, signal and histogram lines."""

    macd: list[float]
    signal: list[float]
    histogram: list[float]


def macd_series(
    closes: Sequence[float],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> MACDSeries:
    """MACD lines for every close; all zeros with fewer than slow + signal closes."""
    n = len(closes)
    if n < slow_period + signal_period:
        zeros = [0.0] * n
        return MACDSeries(zeros, list(zeros), list(zeros))

    fast = ema_series(closes, fast_period)
    slow = ema_series(closes, slow_period)
    macd_line = [f - s for f, s in zip(fast, slow)]
    signal_line = ema_series(macd_line, signal_period)
    histogram = [m - s for m, s in zip(macd_line, signal_line)]
    return MACDSeries(macd_line, signal_line, histogram)


def macd(
    closes: Sequence[float],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> MACDValues:
    """Latest MACD values."""
    if len(closes) < slow_period + signal_period:
        return MACDValues(0.0, 0.0, 0.0)
    lines = macd_series(closes, fast_period, slow_period, signal_period)
    return MACDValues(lines.macd[-1], lines.signal[-1], lines.histogram[-1])


def histogram_history(
    lines: MACDSeries,
    slow_period: int = 26,
    signal_period: int = 9,
) -> list[float]:
    """Histogram of every prefix long enough to carry a MACD reading.

    Entry j equals the histogram computed on ``closes[: slow + signal + j]``;
    the EMAs are causal, so this is a slice of the full-series histogram.
    """
    return lines.histogram[slow_period + signal_period - 1 :]


def detect_macd_divergence(
    closes: Sequence[float],
    histogram: Sequence[float],
    lookback: int = 30,
) -> Divergence:
    """Price versus MACD histogram divergence over the last ``lookback`` bars.

    Args:
        closes: Closing prices
        histogram: Prefix histogram history (see ``histogram_history``)
        lookback: Window length
    """
    if len(histogram) < lookback or len(closes) < lookback:
        return Divergence.NONE

    recent_hist = list(histogram[-lookback:])
    recent_closes = list(closes[-lookback:])
    earlier_closes = recent_closes[:-DIVERGENCE_RECENT_BARS]
    earlier_hist = recent_hist[:-DIVERGENCE_RECENT_BARS]
    price = recent_closes[-1]
    current = recent_hist[-1]

    if price < min(earlier_closes) and current > min(earlier_hist):
        return Divergence.BULLISH
    if price > max(earlier_closes) and current < max(earlier_hist):
        return Divergence.BEARISH
    return Divergence.NONE


def analyze_macd(
    closes: Sequence[float],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
    divergence_lookback: int = 30,
) -> MACDAnalysis:
    """MACD with crossover, trend and divergence tags."""
    n = len(closes)
    minimum = slow_period + signal_period
    lines = macd_series(closes, fast_period, slow_period, signal_period)
    if n < minimum:
        current = MACDValues(0.0, 0.0, 0.0)
    else:
        current = MACDValues(lines.macd[-1], lines.signal[-1], lines.histogram[-1])
    previous_histogram = lines.histogram[-2] if n - 1 >= minimum else 0.0

    crossover = Crossover.NONE
    if previous_histogram < 0 < current.histogram:
        crossover = Crossover.BULLISH
    elif previous_histogram > 0 > current.histogram:
        crossover = Crossover.BEARISH

    trend = SignalDirection.NEUTRAL
    if current.macd > 0 and current.histogram > 0:
        trend = SignalDirection.BULLISH
    elif current.macd < 0 and current.histogram < 0:
        trend = SignalDirection.BEARISH

    if n < divergence_lookback + minimum:
        divergence = Divergence.NONE
    else:
        divergence = detect_macd_divergence(
            closes,
            histogram_history(lines, slow_period, signal_period),
            divergence_lookback,
        )

    return MACDAnalysis(
        macd=current.macd,
        signal=current.signal,
        histogram=current.histogram,
        crossover=crossover,
        trend=trend,
        divergence=divergence,
        fast_period=fast_period,
        slow_period=slow_period,
        signal_period=signal_period,
    )


# =============================================================================
# ADX
# =============================================================================


@dataclass(frozen=True)
class ADXValues:
    adx: float
    plus_di: float
    minus_di: float


def adx(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 14,
) -> ADXValues:
    """Average Directional Index with the +DI/-DI lines.

    Returns zeros with fewer than ``2 * period`` bars.
    """
    if len(highs) < period * 2:
        return ADXValues(0.0, 0.0, 0.0)

    ranges = true_range(highs, lows, closes)
    plus_state = WilderState(period)
    minus_state = WilderState(period)
    tr_state = WilderState(period)
    dx_values: list[float] = []

    for i in range(1, len(highs)):
        up_move = highs[i] - highs[i - 1]
        down_move = lows[i - 1] - lows[i]
        plus_dm = up_move if up_move > down_move and up_move > 0 else 0.0
        minus_dm = down_move if down_move > up_move and down_move > 0 else 0.0

        was_ready = tr_state.ready
        plus_state.update(plus_dm)
        minus_state.update(minus_dm)
        tr_state.update(ranges[i - 1])
        if not was_ready:
            continue

        pdi = plus_state.value / tr_state.value * 100 if tr_state.value > 0 else 0.0
        mdi = minus_state.value / tr_state.value * 100 if tr_state.value > 0 else 0.0
        di_sum = pdi + mdi
        dx_values.append(abs(pdi - mdi) / di_sum * 100 if di_sum > 0 else 0.0)

    smoothed_tr = tr_state.value
    plus_di = plus_state.value / smoothed_tr * 100 if smoothed_tr > 0 else 0.0
    minus_di = minus_state.value / smoothed_tr * 100 if smoothed_tr > 0 else 0.0
    return ADXValues(wilder_smoothing(dx_values, period), plus_di, minus_di)


def analyze_adx(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 14,
) -> ADXAnalysis:
    """ADX with a strength tier and the dominant direction."""
    values = adx(highs, lows, closes, period)

    if values.adx > 40:
        strength = TrendStrength.STRONG
    elif values.adx > 25:
        strength = TrendStrength.MODERATE
    elif values.adx > 20:
        strength = TrendStrength.WEAK
    else:
        strength = TrendStrength.ABSENT

    if strength is TrendStrength.ABSENT:
        direction = TrendDirection.SIDEWAYS
    elif values.plus_di > values.minus_di:
        direction = TrendDirection.BULLISH
    else:
        direction = TrendDirection.BEARISH

    return ADXAnalysis(
        adx=values.adx,
        plus_di=values.plus_di,
        minus_di=values.minus_di,
        strength=strength,
        direction=direction,
        period=period,
    )


# =============================================================================
# Ichimoku
# =============================================================================


@dataclass(frozen=True)
class IchimokuLines:
    tenkan_sen: float
    kijun_sen: float
    senkou_span_a: float
    senkou_span_b: float
    chikou_span: float


def _midpoint(highs: Sequence[float], lows: Sequence[float], period: int) -> float:
    return (max(highs[-period:]) + min(lows[-period:])) / 2


def ichimoku(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    tenkan_period: int = 9,
    kijun_period: int = 26,
    senkou_b_period: int = 52,
) -> IchimokuLines:
    """Ichimoku lines at the latest bar (not shifted forward).

    Every line equals the latest close when there are too few bars.
    """
    current_close = closes[-1] if closes else 0.0
    if len(highs) < max(tenkan_period, kijun_period, senkou_b_period):
        return IchimokuLines(current_close, current_close, current_close, current_close, current_close)

    tenkan = _midpoint(highs, lows, tenkan_period)
    kijun = _midpoint(highs, lows, kijun_period)
    return IchimokuLines(
        tenkan_sen=tenkan,
        kijun_sen=kijun,
        senkou_span_a=(tenkan + kijun) / 2,
        senkou_span_b=_midpoint(highs, lows, senkou_b_period),
        chikou_span=current_close,
    )


def analyze_ichimoku(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
) -> IchimokuAnalysis:
    """Ichimoku lines with cloud position and signal."""
    lines = ichimoku(highs, lows, closes)
    close = closes[-1] if closes else 0.0
    cloud_top = max(lines.senkou_span_a, lines.senkou_span_b)
    cloud_bottom = min(lines.senkou_span_a, lines.senkou_span_b)

    if close > cloud_top:
        cloud_status = CloudStatus.ABOVE
    elif close < cloud_bottom:
        cloud_status = CloudStatus.BELOW
    else:
        cloud_status = CloudStatus.INSIDE

    if (
        cloud_status is CloudStatus.ABOVE
        and lines.tenkan_sen > lines.kijun_sen
        and lines.senkou_span_a > lines.senkou_span_b
    ):
        signal, strength = SignalDirection.BULLISH, Strength.STRONG
        description = "Strong bullish - price above bullish cloud, TK cross positive"
    elif (
        cloud_status is CloudStatus.BELOW
        and lines.tenkan_sen < lines.kijun_sen
        and lines.senkou_span_a < lines.senkou_span_b
    ):
        signal, strength = SignalDirection.BEARISH, Strength.STRONG
        description = "Strong bearish - price below bearish cloud, TK cross negative"
    elif cloud_status is CloudStatus.ABOVE:
        signal, strength = SignalDirection.BULLISH, Strength.MODERATE
        description = "Bullish - price above cloud"
    elif cloud_status is CloudStatus.BELOW:
        signal, strength = SignalDirection.BEARISH, Strength.MODERATE
        description = "Bearish - price below cloud"
    else:
        signal, strength = SignalDirection.NEUTRAL, Strength.WEAK
        description = "Neutral - price inside cloud, consolidation zone"

    return IchimokuAnalysis(
        tenkan_sen=lines.tenkan_sen,
        kijun_sen=lines.kijun_sen,
        senkou_span_a=lines.senkou_span_a,
        senkou_span_b=lines.senkou_span_b,
        chikou_span=lines.chikou_span,
        cloud_status=cloud_status,
        signal=IndicatorSignal(0.0, signal, strength, description),
    )
