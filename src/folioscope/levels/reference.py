"""Reference levels that do not come from price action.

Round numbers attract resting orders, and the widely watched simple moving
averages act as dynamic support or resistance.
"""

from __future__ import annotations

import math
from typing import Sequence

from folioscope.indicators.base import sma, sma_series
from folioscope.models.analysis import Strength
from folioscope.models.levels import LevelType, PriceLevel

MOVING_AVERAGE_PERIODS = (20, 50, 100, 200)


def round_number_interval(price: float) -> float:
    """Spacing between round numbers for a price of this magnitude."""
    if price >= 1000:
        return 100.0
    if price >= 100:
        return 10.0
    if price >= 10:
        return 1.0
    if price >= 1:
        return 0.5
    return 0.1


def _steps(start: float, upper: float, interval: float) -> list[float]:
    # Index-based stepping keeps 0.1 and 0.5 intervals free of float drift.
    levels = []
    k = 0
    while True:
        level = round(start + k * interval, 10)
        if level > upper:
            return levels
        levels.append(level)
        k += 1


def psychological_levels(current_price: float, price_range: float = 0.2) -> list[PriceLevel]:
    """Round numbers within ``price_range`` of the current price.

    Levels closer to the price than a tenth of the interval are skipped.
    When the interval is 100 or more, half-levels (50, 150, ...) are added
    as well.

    Args:
        current_price: Latest price
        price_range: Fraction above and below the price to search

    Returns:
        Weak levels, untouched
    """
    interval = round_number_interval(current_price)
    lower = current_price * (1 - price_range)
    upper = current_price * (1 + price_range)
    start = math.ceil(lower / interval) * interval

    levels = [
        PriceLevel(
            price=level,
            type=LevelType.for_price(level, current_price),
            strength=Strength.WEAK,
            sources=["Psychological Level"],
        )
        for level in _steps(start, upper, interval)
        if abs(level - current_price) > interval * 0.1
    ]

    if interval >= 100:
        levels.extend(
            PriceLevel(
                price=level,
                type=LevelType.for_price(level, current_price),
                strength=Strength.WEAK,
                sources=["Psychological Half-Level"],
            )
            for level in _steps(start - interval / 2, upper, interval)
            if level >= lower and abs(level - current_price) > interval * 0.05
        )
    return levels


def moving_average_levels(closes: Sequence[float], current_price: float) -> list[PriceLevel]:
    """SMA 20/50/100/200 as dynamic levels.

    Touches count how often the close crossed its moving average over the
    last ``period`` bars. The 200-bar average is strong, 50 and 100 are
    moderate and 20 is weak.
    """
    levels = []
    n = len(closes)
    for period in MOVING_AVERAGE_PERIODS:
        if n < period:
            continue
        average = sma(closes, period)
        history = sma_series(closes, period)
        recent = closes[-period:]

        crossings = 0
        for i in range(1, period):
            # Average over closes[: n - period + i], i.e. ending one bar back.
            ma_at_i = history[n - period + i - 1]
            crossed_up = recent[i - 1] < ma_at_i < recent[i]
            crossed_down = recent[i - 1] > ma_at_i > recent[i]
            if crossed_up or crossed_down:
                crossings += 1

        if period == 200:
            strength = Strength.STRONG
        elif period >= 50:
            strength = Strength.MODERATE
        else:
            strength = Strength.WEAK

        levels.append(
            PriceLevel(
                price=average,
                type=LevelType.for_price(average, current_price),
                strength=strength,
                sources=[f"SMA {period}"],
                touches=crossings,
            )
        )
    return levels
