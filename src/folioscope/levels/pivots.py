"""Pivot point formulas.

Every method takes the bar before the latest one and returns a ladder
satisfying ``s3 < s2 < s1 < pivot < r1 < r2 < r3`` whenever that bar has a
non-zero range.
"""

from __future__ import annotations

from folioscope.models.bar import PriceSeries
from folioscope.models.levels import PivotMethod, PivotPoints


def standard_pivots(high: float, low: float, close: float) -> PivotPoints:
    """Classic floor-trader pivots."""
    pivot = (high + low + close) / 3
    return PivotPoints(
        pivot=pivot,
        r1=2 * pivot - low,
        r2=pivot + (high - low),
        r3=high + 2 * (pivot - low),
        s1=2 * pivot - high,
        s2=pivot - (high - low),
        s3=low - 2 * (high - pivot),
        method=PivotMethod.STANDARD,
    )


def fibonacci_pivots(high: float, low: float, close: float) -> PivotPoints:
    """Pivots spaced by 38.2%, 61.8% and 100% of the range."""
    pivot = (high + low + close) / 3
    price_range = high - low
    return PivotPoints(
        pivot=pivot,
        r1=pivot + 0.382 * price_range,
        r2=pivot + 0.618 * price_range,
        r3=pivot + 1.000 * price_range,
        s1=pivot - 0.382 * price_range,
        s2=pivot - 0.618 * price_range,
        s3=pivot - 1.000 * price_range,
        method=PivotMethod.FIBONACCI,
    )


def camarilla_pivots(high: float, low: float, close: float) -> PivotPoints:
    """Camarilla levels centred on the close.

    The rungs are offsets of ``range * 1.1 / {12, 6, 4}`` around the close,
    so the close is the pivot of the ladder.
    """
    price_range = high - low
    return PivotPoints(
        pivot=close,
        r1=close + price_range * 1.1 / 12,
        r2=close + price_range * 1.1 / 6,
        r3=close + price_range * 1.1 / 4,
        s1=close - price_range * 1.1 / 12,
        s2=close - price_range * 1.1 / 6,
        s3=close - price_range * 1.1 / 4,
        method=PivotMethod.CAMARILLA,
    )


def woodie_pivots(high: float, low: float, close: float) -> PivotPoints:
    """Woodie pivots, weighting the close twice."""
    pivot = (high + low + 2 * close) / 4
    return PivotPoints(
        pivot=pivot,
        r1=2 * pivot - low,
        r2=pivot + (high - low),
        r3=high + 2 * (pivot - low),
        s1=2 * pivot - high,
        s2=pivot - (high - low),
        s3=low - 2 * (high - pivot),
        method=PivotMethod.WOODIE,
    )


def demark_pivots(open_: float, high: float, low: float, close: float) -> PivotPoints:
    """DeMark pivots; the weighting depends on the close versus the open."""
    if close < open_:
        x = high + 2 * low + close
    elif close > open_:
        x = 2 * high + low + close
    else:
        x = high + low + 2 * close

    price_range = high - low
    r1 = x / 2 - low
    s1 = x / 2 - high
    return PivotPoints(
        pivot=x / 4,
        r1=r1,
        r2=r1 + price_range * 0.5,
        r3=r1 + price_range,
        s1=s1,
        s2=s1 - price_range * 0.5,
        s3=s1 - price_range,
        method=PivotMethod.DEMARK,
    )


def all_pivots(series: PriceSeries) -> dict[PivotMethod, PivotPoints]:
    """Every pivot method applied to the previous bar of ``series``."""
    open_, high, low, close = series.previous_bar()
    return {
        PivotMethod.STANDARD: standard_pivots(high, low, close),
        PivotMethod.FIBONACCI: fibonacci_pivots(high, low, close),
        PivotMethod.CAMARILLA: camarilla_pivots(high, low, close),
        PivotMethod.WOODIE: woodie_pivots(high, low, close),
        PivotMethod.DEMARK: demark_pivots(open_, high, low, close),
    }
