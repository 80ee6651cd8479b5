"""Volume-at-price histogram and the levels it implies."""

from __future__ import annotations

import logging
import math
from typing import Sequence

from folioscope.models.analysis import Strength
from folioscope.models.levels import LevelType, PriceLevel, VolumeProfileBin

logger = logging.getLogger(__name__)


def volume_profile(
    highs: Sequence[float],
    lows: Sequence[float],
    volumes: Sequence[float],
    num_bins: int = 50,
) -> list[VolumeProfileBin]:
    """Bucket traded volume by price.

    The full high-low span of the series is split into ``num_bins`` equal
    buckets. Each bar's volume is shared equally between the buckets from
    the one holding its low to the one holding its high.

    Args:
        highs: High prices
        lows: Low prices
        volumes: Bar volumes
        num_bins: Number of buckets

    Returns:
        Buckets ordered by price, or an empty list when the series is empty
        or has no price range
    """
    if not highs:
        return []
    price_high = max(highs)
    price_low = min(lows)
    bin_size = (price_high - price_low) / num_bins
    if bin_size == 0:
        logger.debug("Volume profile skipped: series has no price range")
        return []

    def bucket(price: float) -> int:
        return min(max(int(math.floor((price - price_low) / bin_size)), 0), num_bins - 1)

    totals = [0.0] * num_bins
    for high, low, volume in zip(highs, lows, volumes):
        first, last = bucket(low), bucket(high)
        share = volume / (last - first + 1)
        for i in range(first, last + 1):
            totals[i] += share

    total_volume = sum(totals)
    average = total_volume / num_bins
    max_volume = max(totals)
    poc_index = totals.index(max_volume)

    return [
        VolumeProfileBin(
            price=price_low + bin_size * (i + 0.5),
            volume=volume,
            volume_percent=volume / total_volume * 100 if total_volume > 0 else 0.0,
            is_poc=i == poc_index,
            is_hvn=volume > 0 and volume >= average * 1.5,
            is_lvn=volume < average * 0.5,
        )
        for i, volume in enumerate(totals)
    ]


def volume_profile_levels(
    profile: Sequence[VolumeProfileBin],
    current_price: float,
) -> list[PriceLevel]:
    """Point of control, high-volume nodes and isolated low-volume nodes.

    A low-volume node is kept only when no high-volume node lies within 10%
    of the profile's price span.
    """
    if not profile:
        return []

    levels: list[PriceLevel] = []
    for node in profile:
        if node.is_poc:
            levels.append(_node_level(node, current_price, Strength.STRONG, "Volume POC"))

    hvns = [node for node in profile if node.is_hvn and not node.is_poc]
    for node in hvns:
        levels.append(_node_level(node, current_price, Strength.MODERATE, "Volume HVN"))

    prices = [node.price for node in profile]
    gap = (max(prices) - min(prices)) * 0.1
    for node in profile:
        if not node.is_lvn:
            continue
        if any(abs(h.price - node.price) < gap for h in hvns):
            continue
        levels.append(_node_level(node, current_price, Strength.WEAK, "Volume LVN"))

    return levels


def _node_level(
    node: VolumeProfileBin,
    current_price: float,
    strength: Strength,
    source: str,
) -> PriceLevel:
    return PriceLevel(
        price=node.price,
        type=LevelType.for_price(node.price, current_price),
        strength=strength,
        sources=[source],
        touches=round(node.volume_percent),
        volume_at_level=node.volume,
    )
