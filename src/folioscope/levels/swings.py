"""Price-action levels: fractal swing points and price clusters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from folioscope.models.analysis import Strength
from folioscope.models.levels import LevelType, PriceLevel, SwingPoint


def detect_swing_points(
    highs: Sequence[float],
    lows: Sequence[float],
    left_bars: int = 5,
    right_bars: int = 5,
) -> list[SwingPoint]:
    """Fractal swing highs and lows.

    A bar is a swing high when its high is strictly above every other high
    within ``left_bars`` before and ``right_bars`` after it (swing lows
    mirror this). Strength is the mean distance to the most extreme
    neighbour on each side.
    """
    points: list[SwingPoint] = []
    for i in range(left_bars, len(highs) - right_bars):
        neighbours = [j for j in range(i - left_bars, i + right_bars + 1) if j != i]

        if all(highs[j] < highs[i] for j in neighbours):
            left_max = max(highs[i - left_bars : i])
            right_max = max(highs[i + 1 : i + right_bars + 1])
            points.append(
                SwingPoint(
                    index=i,
                    price=highs[i],
                    kind="high",
                    strength=((highs[i] - left_max) + (highs[i] - right_max)) / 2,
                )
            )

        if all(lows[j] > lows[i] for j in neighbours):
            left_min = min(lows[i - left_bars : i])
            right_min = min(lows[i + 1 : i + right_bars + 1])
            points.append(
                SwingPoint(
                    index=i,
                    price=lows[i],
                    kind="low",
                    strength=((left_min - lows[i]) + (right_min - lows[i])) / 2,
                )
            )
    return points


@dataclass
class _Group:
    prices: list[float] = field(default_factory=list)
    center: float = 0.0

    @property
    def mean(self) -> float:
        return sum(self.prices) / len(self.prices)


def swing_points_to_levels(
    points: Sequence[SwingPoint],
    current_price: float,
    tolerance: float = 0.02,
) -> list[PriceLevel]:
    """Group swings lying within ``tolerance`` of a group's first price.

    Groups of four or more swings are strong, two or three moderate.
    """
    groups: list[_Group] = []
    for point in points:
        if point.price == 0:
            continue
        group = next(
            (g for g in groups if abs(g.prices[0] - point.price) / point.price < tolerance),
            None,
        )
        if group is None:
            groups.append(_Group([point.price]))
        else:
            group.prices.append(point.price)

    levels = []
    for group in groups:
        touches = len(group.prices)
        if touches >= 4:
            strength = Strength.STRONG
        elif touches >= 2:
            strength = Strength.MODERATE
        else:
            strength = Strength.WEAK
        price = group.mean
        levels.append(
            PriceLevel(
                price=price,
                type=LevelType.for_price(price, current_price),
                strength=strength,
                sources=["Swing Points"],
                touches=touches,
            )
        )
    return levels


def cluster_price_levels(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    tolerance: float = 0.015,
    min_touches: int = 3,
) -> list[PriceLevel]:
    """Greedy single-pass clustering of highs, lows and wide-candle midpoints.

    A point joins the first cluster whose running mean is closer than
    ``tolerance`` times the latest close. Clusters with fewer than
    ``min_touches`` points are dropped; the rest are returned with the most
    touched first.
    """
    if not closes:
        return []

    points = list(highs) + list(lows)
    average_range = (max(highs) - min(lows)) / len(highs)
    points.extend(
        (h + l) / 2 for h, l in zip(highs, lows) if h - l > average_range * 1.5
    )

    current_price = closes[-1]
    threshold = current_price * tolerance
    clusters: list[_Group] = []
    for price in points:
        for cluster in clusters:
            if abs(price - cluster.center) < threshold:
                cluster.prices.append(price)
                cluster.center = cluster.mean
                break
        else:
            clusters.append(_Group([price], center=price))

    levels = []
    for cluster in clusters:
        center = cluster.center
        touches = len(cluster.prices)
        if touches < min_touches:
            continue
        if touches >= 8:
            strength = Strength.STRONG
        elif touches >= 5:
            strength = Strength.MODERATE
        else:
            strength = Strength.WEAK
        levels.append(
            PriceLevel(
                price=center,
                type=LevelType.for_price(center, current_price),
                strength=strength,
                sources=["Price Cluster"],
                touches=touches,
            )
        )
    levels.sort(key=lambda level: level.touches, reverse=True)
    return levels
