"""Fibonacci retracement and extension levels."""

from __future__ import annotations

from typing import Sequence

from folioscope.core.errors import InvalidInputError
from folioscope.models.levels import FibonacciLevels, SwingRange

RATIOS = (0.236, 0.382, 0.5, 0.618, 0.786)


def find_swing_range(
    highs: Sequence[float],
    lows: Sequence[float],
    lookback: int = 50,
) -> SwingRange:
    """Highest high and lowest low of the last ``lookback`` bars.

    Ties resolve to the most recent occurrence. Indexes are relative to the
    start of the window.

    Raises:
        InvalidInputError: If there are no bars
    """
    if not highs or not lows:
        raise InvalidInputError("cannot find a swing range without bars", field="highs")
    recent_highs = list(highs[-lookback:])
    recent_lows = list(lows[-lookback:])
    swing_high = max(recent_highs)
    swing_low = min(recent_lows)
    return SwingRange(
        swing_high=swing_high,
        swing_high_index=len(recent_highs) - 1 - recent_highs[::-1].index(swing_high),
        swing_low=swing_low,
        swing_low_index=len(recent_lows) - 1 - recent_lows[::-1].index(swing_low),
    )


def fibonacci_retracement(swing_high: float, swing_low: float, is_uptrend: bool) -> FibonacciLevels:
    """Retracement levels measured back from the end of the move.

    In an uptrend the 0% level is the swing high and 100% the swing low;
    in a downtrend the mapping is mirrored.
    """
    price_range = swing_high - swing_low
    if is_uptrend:
        r236, r382, r500, r618, r786 = (swing_high - price_range * r for r in RATIOS)
        return FibonacciLevels(
            level_0=swing_high,
            level_236=r236,
            level_382=r382,
            level_500=r500,
            level_618=r618,
            level_786=r786,
            level_1000=swing_low,
            level_1272=swing_high - price_range * 1.272,
            level_1618=swing_high - price_range * 1.618,
        )
    r236, r382, r500, r618, r786 = (swing_low + price_range * r for r in RATIOS)
    return FibonacciLevels(
        level_0=swing_low,
        level_236=r236,
        level_382=r382,
        level_500=r500,
        level_618=r618,
        level_786=r786,
        level_1000=swing_high,
        level_1272=swing_low + price_range * 1.272,
        level_1618=swing_low + price_range * 1.618,
    )


def fibonacci_extension(swing_high: float, swing_low: float, is_uptrend: bool) -> FibonacciLevels:
    """Extension targets projected beyond the swing in the trend direction."""
    price_range = swing_high - swing_low
    if is_uptrend:
        e236, e382, e500, e618, e786 = (swing_high + price_range * r for r in RATIOS)
        return FibonacciLevels(
            level_0=swing_low,
            level_236=e236,
            level_382=e382,
            level_500=e500,
            level_618=e618,
            level_786=e786,
            level_1000=swing_high + price_range,
            level_1272=swing_high + price_range * 1.272,
            level_1618=swing_high + price_range * 1.618,
        )
    e236, e382, e500, e618, e786 = (swing_low - price_range * r for r in RATIOS)
    return FibonacciLevels(
        level_0=swing_high,
        level_236=e236,
        level_382=e382,
        level_500=e500,
        level_618=e618,
        level_786=e786,
        level_1000=swing_low - price_range,
        level_1272=swing_low - price_range * 1.272,
        level_1618=swing_low - price_range * 1.618,
    )
