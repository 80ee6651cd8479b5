"""Merge candidate levels from every detector into a ranked shortlist."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from folioscope.models.levels import LevelType, PriceLevel, SupportResistance

logger = logging.getLogger(__name__)


def score_level(level: PriceLevel, current_price: float) -> float:
    """Relevance score of a merged level.

    ``strength * 30 + min(touches * 5, 25) + max(0, 20 - distance * 100) +
    sources * 10``, where distance is relative to the current price.
    """
    distance = abs(level.price - current_price) / current_price
    return (
        level.strength.rank * 30
        + min(level.touches * 5, 25)
        + max(0.0, 20 - distance * 100)
        + len(level.sources) * 10
    )


def merge_levels(
    levels: Sequence[PriceLevel],
    current_price: float,
    tolerance: float = 0.01,
) -> list[PriceLevel]:
    """Merge levels closer than ``tolerance`` of the current price.

    Levels are walked in ascending price order and each joins the first
    merged level within range. A merge keeps the stronger tier, adds the
    touches, records any new source and moves the price to the midpoint of
    the two.
    """
    merged: list[PriceLevel] = []
    for level in sorted(levels, key=lambda lv: lv.price):
        existing = next(
            (m for m in merged if abs(m.price - level.price) / current_price < tolerance),
            None,
        )
        if existing is None:
            merged.append(replace(level, sources=list(level.sources)))
            continue

        if level.strength.rank > existing.strength.rank:
            existing.strength = level.strength
        existing.touches += level.touches
        for source in level.sources:
            if source not in existing.sources:
                existing.sources.append(source)
        existing.price = (existing.price + level.price) / 2
    return merged


def consolidate_levels(
    levels: Sequence[PriceLevel],
    current_price: float,
    tolerance: float = 0.01,
    max_levels: int = 6,
) -> list[SupportResistance]:
    """Deduplicate, score and cap candidate levels.

    Args:
        levels: Candidates from all detectors
        current_price: Latest price
        tolerance: Merge distance as a fraction of the current price
        max_levels: Total levels returned; each side gets half

    Returns:
        Up to ``max_levels // 2`` supports below and resistances above the
        price, sorted by price ascending
    """
    if current_price <= 0:
        logger.debug(f"Skipping consolidation for non-positive price {current_price}")
        return []

    merged = merge_levels(levels, current_price, tolerance)
    scored = sorted(
        ((score_level(level, current_price), level) for level in merged),
        key=lambda pair: pair[0],
        reverse=True,
    )

    per_side = max_levels // 2
    supports = [pair for pair in scored if pair[1].price < current_price][:per_side]
    resistances = [pair for pair in scored if pair[1].price > current_price][:per_side]

    result = [
        SupportResistance(
            type=LevelType.for_price(level.price, current_price),
            price=level.price,
            strength=level.strength,
            source=level.source,
            touches=level.touches,
            score=score,
        )
        for score, level in supports + resistances
    ]
    result.sort(key=lambda sr: sr.price)
    return result
