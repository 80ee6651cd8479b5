"""Moving averages, smoothing and dispersion primitives.

Scalar helpers return the value for the latest bar; ``*_series`` helpers
return one value per input point. Short inputs never raise: each helper
falls back to a documented neutral value.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

import pandas as pd


def sma(data: Sequence[float], period: int) -> float:
    """Simple moving average of the last ``period`` values.

    Args:
        data: Values, earliest first
        period: Window length

    Returns:
        Mean of the window, the last value when there are fewer than
        ``period`` points, or 0 for empty input
    """
    if len(data) < period:
        return float(data[-1]) if data else 0.0
    window = data[-period:]
    return sum(window) / period


def sma_series(data: Sequence[float], period: int) -> list[float]:
    """Trailing SMA for every point; raw values until the window fills."""
    if not data:
        return []
    values = pd.Series(data, dtype=float)
    rolled = values.rolling(period).mean()
    return rolled.where(rolled.notna(), values).tolist()


class EmaState:
    """Incremental exponential moving average.

    The average is seeded with the SMA of the first ``period`` values and
    then updated with multiplier ``2 / (period + 1)``.
    """

    def __init__(self, period: int) -> None:
        self.period = period
        self.multiplier = 2 / (period + 1)
        self._warmup: list[float] = []
        self.value: Optional[float] = None

    @property
    def ready(self) -> bool:
        return self.value is not None

    def update(self, x: float) -> Optional[float]:
        """Advance one point and return the average (None while warming up)."""
        if self.value is None:
            self._warmup.append(x)
            if len(self._warmup) == self.period:
                self.value = sum(self._warmup) / self.period
                self._warmup = []
            return self.value
        self.value = (x - self.value) * self.multiplier + self.value
        return self.value


class WilderState:
    """Incremental Wilder smoothing: ``(prev * (n - 1) + x) / n``."""

    def __init__(self, period: int) -> None:
        self.period = period
        self._warmup: list[float] = []
        self.value: Optional[float] = None

    @property
    def ready(self) -> bool:
        return self.value is not None

    def update(self, x: float) -> Optional[float]:
        """Advance one point and return the smoothed value (None while warming up)."""
        if self.value is None:
            self._warmup.append(x)
            if len(self._warmup) == self.period:
                self.value = sum(self._warmup) / self.period
                self._warmup = []
            return self.value
        self.value = (self.value * (self.period - 1) + x) / self.period
        return self.value


def ema(data: Sequence[float], period: int) -> float:
    """Exponential moving average of the series.

    Returns 0 for empty input and the last value when there are fewer than
    ``period`` points.
    """
    if not data:
        return 0.0
    if len(data) < period:
        return float(data[-1])
    state = EmaState(period)
    for x in data:
        state.update(x)
    return state.value


def ema_series(data: Sequence[float], period: int) -> list[float]:
    """EMA for every point.

    The first ``period`` entries repeat the SMA seed. A short input yields
    a constant series of its last value.
    """
    if not data:
        return []
    if len(data) < period:
        return [float(data[-1])] * len(data)
    state = EmaState(period)
    for x in data[:period]:
        state.update(x)
    result = [state.value] * period
    for x in data[period:]:
        result.append(state.update(x))
    return result


def wilder_smoothing(data: Sequence[float], period: int) -> float:
    """Wilder-smoothed value of the series (last value or 0 when short)."""
    if len(data) < period:
        return float(data[-1]) if data else 0.0
    state = WilderState(period)
    for x in data:
        state.update(x)
    return state.value


def standard_deviation(data: Sequence[float], period: int) -> float:
    """Population standard deviation of the last ``period`` values (0 when short)."""
    if len(data) < period:
        return 0.0
    window = data[-period:]
    mean = sum(window) / period
    variance = sum((x - mean) ** 2 for x in window) / period
    return math.sqrt(variance)


def true_range(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
) -> list[float]:
    """True range of every bar after the first."""
    return [
        max(
            highs[i] - lows[i],
            abs(highs[i] - closes[i - 1]),
            abs(lows[i] - closes[i - 1]),
        )
        for i in range(1, len(highs))
    ]
