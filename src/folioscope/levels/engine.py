"""Support/resistance engine: run every detector and consolidate."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from folioscope.core.errors import InvalidInputError
from folioscope.levels.consolidate import consolidate_levels
from folioscope.levels.fibonacci import (
    fibonacci_extension,
    fibonacci_retracement,
    find_swing_range,
)
from folioscope.levels.pivots import all_pivots, fibonacci_pivots, standard_pivots
from folioscope.levels.reference import moving_average_levels, psychological_levels
from folioscope.levels.swings import (
    cluster_price_levels,
    detect_swing_points,
    swing_points_to_levels,
)
from folioscope.levels.volume_profile import volume_profile, volume_profile_levels
from folioscope.models.analysis import Strength
from folioscope.models.bar import Bar, PriceSeries
from folioscope.models.config import LevelParams
from folioscope.models.levels import (
    FibonacciLevels,
    LevelType,
    PivotMethod,
    PivotPoints,
    PriceLevel,
    SupportResistance,
    SwingPoint,
    VolumeProfileBin,
)

logger = logging.getLogger(__name__)

FIBONACCI_LEVEL_STRENGTHS = (
    ("level_236", "23.6%", Strength.WEAK),
    ("level_382", "38.2%", Strength.MODERATE),
    ("level_500", "50%", Strength.MODERATE),
    ("level_618", "61.8%", Strength.STRONG),
    ("level_786", "78.6%", Strength.WEAK),
)


def pivot_levels(pivots: PivotPoints, current_price: float) -> list[PriceLevel]:
    """Pivot, R1/R2 and S1/S2 of one method as candidate levels.

    The rungs keep their nominal side; only the pivot is typed by its
    position relative to the price.
    """
    method = pivots.method.value
    return [
        PriceLevel(
            price=pivots.pivot,
            type=LevelType.for_price(pivots.pivot, current_price),
            strength=Strength.MODERATE,
            sources=[f"{method} Pivot"],
        ),
        PriceLevel(pivots.r1, LevelType.RESISTANCE, Strength.MODERATE, [f"{method} R1"]),
        PriceLevel(pivots.r2, LevelType.RESISTANCE, Strength.WEAK, [f"{method} R2"]),
        PriceLevel(pivots.s1, LevelType.SUPPORT, Strength.MODERATE, [f"{method} S1"]),
        PriceLevel(pivots.s2, LevelType.SUPPORT, Strength.WEAK, [f"{method} S2"]),
    ]


def fibonacci_price_levels(
    levels: FibonacciLevels,
    current_price: float,
    prefix: str = "Fib Retracement",
) -> list[PriceLevel]:
    """The five interior Fibonacci ratios as candidate levels; 61.8% is strong."""
    result = []
    for attr, name, strength in FIBONACCI_LEVEL_STRENGTHS:
        price = getattr(levels, attr)
        result.append(
            PriceLevel(
                price=price,
                type=LevelType.for_price(price, current_price),
                strength=strength,
                sources=[f"{prefix} {name}"],
            )
        )
    return result


def _candidate_levels(
    series: PriceSeries,
    current_price: float,
    params: LevelParams,
    profile: Optional[list[VolumeProfileBin]] = None,
    swings: Optional[list[SwingPoint]] = None,
) -> list[PriceLevel]:
    highs, lows, closes = series.highs, series.lows, series.closes
    _, prev_high, prev_low, prev_close = series.previous_bar()

    candidates: list[PriceLevel] = []
    candidates += pivot_levels(standard_pivots(prev_high, prev_low, prev_close), current_price)
    candidates += pivot_levels(fibonacci_pivots(prev_high, prev_low, prev_close), current_price)

    swing_range = find_swing_range(highs, lows, params.fibonacci_lookback)
    retracement = fibonacci_retracement(
        swing_range.swing_high, swing_range.swing_low, swing_range.is_uptrend
    )
    candidates += fibonacci_price_levels(retracement, current_price)

    if profile is None and series.has_volume:
        profile = volume_profile(highs, lows, series.volumes, params.volume_bins)
    elif profile is None:
        logger.debug("No volume in series, skipping volume profile levels")
    if profile:
        candidates += volume_profile_levels(profile, current_price)

    if swings is None:
        swings = detect_swing_points(highs, lows, params.swing_left_bars, params.swing_right_bars)
    candidates += swing_points_to_levels(swings, current_price, params.swing_tolerance)
    candidates += cluster_price_levels(
        highs, lows, closes, params.cluster_tolerance, params.cluster_min_touches
    )
    candidates += psychological_levels(current_price, params.psychological_range)
    candidates += moving_average_levels(closes, current_price)
    return candidates


def calculate_support_resistance(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    volumes: Optional[Sequence[float]],
    current_price: float,
    params: Optional[LevelParams] = None,
) -> list[SupportResistance]:
    """Consolidated support and resistance levels for a price history.

    Combines standard and Fibonacci pivots of the previous bar, Fibonacci
    retracement of the recent swing, the volume profile (only when the
    series carries volume), fractal swings, price clusters, round numbers
    and moving averages.

    Args:
        highs: High prices, earliest first
        lows: Low prices
        closes: Closing prices
        volumes: Volumes; None or all zeros skips the volume profile
        current_price: Price the levels are ranked against
        params: Detection parameters (defaults if omitted)

    Returns:
        Consolidated levels sorted by price ascending

    Raises:
        InvalidInputError: If the series is empty or the columns differ in length
    """
    if not closes:
        raise InvalidInputError("price series is empty", field="closes")
    params = params or LevelParams()
    n = len(closes)
    series = PriceSeries(
        opens=tuple(closes),
        highs=tuple(highs),
        lows=tuple(lows),
        closes=tuple(closes),
        volumes=tuple(volumes) if volumes else (0.0,) * n,
    )
    candidates = _candidate_levels(series, current_price, params)
    return consolidate_levels(
        candidates, current_price, params.merge_tolerance, params.max_levels
    )


@dataclass
class ComprehensiveSRAnalysis:
    """Every intermediate of a support/resistance run.

    Attributes:
        pivots: Pivot ladders of every method, from the previous bar
        retracement: Fibonacci retracement of the recent swing
        extension: Fibonacci extension of the recent swing
        trend: "uptrend" when the swing low precedes the swing high, else "downtrend"
        volume_profile: Volume-at-price buckets (empty without a price range)
        swing_points: Fractal swing highs and lows
        key_levels: Every candidate level before consolidation
        consolidated: Ranked, deduplicated levels
    """

    pivots: dict[PivotMethod, PivotPoints]
    retracement: FibonacciLevels
    extension: FibonacciLevels
    trend: str
    volume_profile: list[VolumeProfileBin]
    swing_points: list[SwingPoint]
    key_levels: list[PriceLevel]
    consolidated: list[SupportResistance]


def comprehensive_sr_analysis(
    data: PriceSeries | Sequence[Bar],
    params: Optional[LevelParams] = None,
) -> ComprehensiveSRAnalysis:
    """Run every detector on a series and keep the intermediates.

    The latest close is the reference price.

    Raises:
        InvalidInputError: If the series is empty
    """
    series = PriceSeries.coerce(data)
    if not len(series):
        raise InvalidInputError("price series is empty", field="bars")
    params = params or LevelParams()
    current_price = series.last_close

    swing_range = find_swing_range(series.highs, series.lows, params.fibonacci_lookback)
    is_uptrend = swing_range.is_uptrend
    profile = volume_profile(series.highs, series.lows, series.volumes, params.volume_bins)
    swings = detect_swing_points(
        series.highs, series.lows, params.swing_left_bars, params.swing_right_bars
    )

    key_levels = _candidate_levels(
        series,
        current_price,
        params,
        profile=profile if series.has_volume else [],
        swings=swings,
    )
    return ComprehensiveSRAnalysis(
        pivots=all_pivots(series),
        retracement=fibonacci_retracement(swing_range.swing_high, swing_range.swing_low, is_uptrend),
        extension=fibonacci_extension(swing_range.swing_high, swing_range.swing_low, is_uptrend),
        trend="uptrend" if is_uptrend else "downtrend",
        volume_profile=profile,
        swing_points=swings,
        key_levels=key_levels,
        consolidated=consolidate_levels(
            key_levels, current_price, params.merge_tolerance, params.max_levels
        ),
    )
