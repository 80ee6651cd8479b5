"""One-call entry points over the indicator engine and the synthesizer."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from folioscope.core.errors import InvalidInputError
from folioscope.indicators.engine import calculate_all_indicators
from folioscope.indicators.volatility import atr
from folioscope.levels.engine import calculate_support_resistance
from folioscope.levels.pivots import standard_pivots
from folioscope.models.bar import Bar, PriceSeries
from folioscope.models.config import EngineConfig
from folioscope.models.levels import LevelType
from folioscope.models.signal import ComprehensiveInterpretation, QuickSignal, TradingLevels
from folioscope.signals.synthesizer import comprehensive_interpretation

logger = logging.getLogger(__name__)

# Bars needed before levels are derived from the series itself
MIN_LEVEL_BARS = 10


def full_technical_analysis(
    data: PriceSeries | Sequence[Bar],
    config: Optional[EngineConfig] = None,
) -> Optional[ComprehensiveInterpretation]:
    """
    Indicators, levels and their interpretation in one call.

    Args:
        data: Bars or a price series, earliest first
        config: Engine configuration (defaults if omitted)

    Returns:
        ComprehensiveInterpretation, or None when the series is shorter than
        ``config.min_analysis_bars``
    """
    series = PriceSeries.coerce(data)
    config = config or EngineConfig()
    if len(series) < config.min_analysis_bars:
        logger.debug(
            f"Insufficient data for analysis: {len(series)} bars, "
            f"need {config.min_analysis_bars}"
        )
        return None
    analysis = calculate_all_indicators(series, config)
    return comprehensive_interpretation(analysis, series.last_close)


def quick_signal(
    data: PriceSeries | Sequence[Bar],
    config: Optional[EngineConfig] = None,
) -> QuickSignal:
    """Action, confidence, RSI and trend direction; neutral on short series."""
    series = PriceSeries.coerce(data)
    config = config or EngineConfig()
    if len(series) < config.min_analysis_bars:
        return QuickSignal.insufficient()

    analysis = calculate_all_indicators(series, config)
    interpretation = comprehensive_interpretation(analysis, series.last_close)
    return QuickSignal(
        action=interpretation.overall_signal.action,
        confidence=interpretation.overall_signal.confidence,
        rsi=analysis.indicators.rsi,
        trend=analysis.adx.direction.as_signal,
    )


def key_trading_levels(
    data: PriceSeries | Sequence[Bar],
    config: Optional[EngineConfig] = None,
) -> TradingLevels:
    """
    Nearest levels and an ATR-based trade plan.

    The stop sits half an ATR under the nearest support but never more than
    two ATRs under the price; the target is the nearest resistance.

    Raises:
        InvalidInputError: If the series is empty
    """
    series = PriceSeries.coerce(data)
    if not len(series):
        raise InvalidInputError("price series is empty", field="bars")
    config = config or EngineConfig()
    price = series.last_close

    if len(series) < MIN_LEVEL_BARS:
        return TradingLevels(
            current_price=price,
            nearest_support=price * 0.95,
            nearest_resistance=price * 1.05,
            pivot=price,
            stop_loss=price * 0.97,
            take_profit=price * 1.06,
            risk_reward_ratio=2.0,
        )

    highs, lows, closes = series.highs, series.lows, series.closes
    levels = calculate_support_resistance(
        highs, lows, closes, series.volumes, price, config.levels
    )
    supports = sorted(
        (sr.price for sr in levels if sr.type is LevelType.SUPPORT), reverse=True
    )
    resistances = sorted(sr.price for sr in levels if sr.type is LevelType.RESISTANCE)
    nearest_support = supports[0] if supports else price * 0.95
    nearest_resistance = resistances[0] if resistances else price * 1.05

    _, prev_high, prev_low, prev_close = series.previous_bar()
    average_range = atr(highs, lows, closes, config.indicators.atr_period)
    stop_loss = max(nearest_support - average_range * 0.5, price - average_range * 2)
    risk = price - stop_loss
    reward = nearest_resistance - price

    return TradingLevels(
        current_price=price,
        nearest_support=nearest_support,
        nearest_resistance=nearest_resistance,
        pivot=standard_pivots(prev_high, prev_low, prev_close).pivot,
        stop_loss=stop_loss,
        take_profit=nearest_resistance,
        risk_reward_ratio=reward / risk if risk > 0 else 0.0,
    )
