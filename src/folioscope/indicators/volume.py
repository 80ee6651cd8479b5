"""Volume indicators: OBV, VWAP and the volume analysis."""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from folioscope.indicators.base import sma
from folioscope.models.analysis import ObvTrend, VolumeAnalysis, VolumeSignal

OBV_TREND_WINDOW = 10


def obv_series(closes: Sequence[float], volumes: Sequence[float]) -> list[float]:
    """Running on-balance volume for every bar after the first."""
    if len(closes) < 2:
        return []
    close = pd.Series(closes, dtype=float)
    volume = pd.Series(volumes, dtype=float)
    change = close.diff()
    signed = volume.where(change > 0, 0.0) - volume.where(change < 0, 0.0)
    return signed.iloc[1:].cumsum().tolist()


def obv(closes: Sequence[float], volumes: Sequence[float]) -> float:
    """On-balance volume; the last volume (or 0) with fewer than two bars."""
    if len(closes) < 2:
        return float(volumes[-1]) if volumes else 0.0
    return obv_series(closes, volumes)[-1]


def vwap(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    volumes: Sequence[float],
) -> float:
    """Volume-weighted typical price; the last close when there is no volume."""
    if not closes:
        return 0.0
    total_volume = sum(volumes)
    if total_volume <= 0:
        return float(closes[-1])
    weighted = sum((h + l + c) / 3 * v for h, l, c, v in zip(highs, lows, closes, volumes))
    return weighted / total_volume


def analyze_volume(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    volumes: Sequence[float],
    avg_period: int = 20,
) -> VolumeAnalysis:
    """OBV trend over the last ten readings and volume versus its average.

    The OBV trend is rising or falling when the change over the window
    exceeds 5% of the window's first reading.
    """
    running = obv_series(closes, volumes)
    recent = running[-OBV_TREND_WINDOW:]
    trend = ObvTrend.FLAT
    if len(recent) >= 2:
        change = recent[-1] - recent[0]
        threshold = abs(recent[0]) * 0.05
        if change > threshold:
            trend = ObvTrend.RISING
        elif change < -threshold:
            trend = ObvTrend.FALLING

    current_volume = float(volumes[-1]) if volumes else 0.0
    average = sma(volumes, avg_period)
    ratio = current_volume / average if average > 0 else 1.0
    if ratio > 1.5:
        signal = VolumeSignal.HIGH
    elif ratio < 0.5:
        signal = VolumeSignal.LOW
    else:
        signal = VolumeSignal.NORMAL

    return VolumeAnalysis(
        obv=running[-1] if running else (float(volumes[-1]) if volumes else 0.0),
        obv_trend=trend,
        vwap=vwap(highs, lows, closes, volumes),
        volume_ratio=ratio,
        volume_signal=signal,
    )
