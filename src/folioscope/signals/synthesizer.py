"""Weighted trading signal and the full interpretation bundle."""

from __future__ import annotations

import logging
from typing import Optional

from folioscope.models.analysis import (
    CloudStatus,
    Crossover,
    Divergence,
    ObvTrend,
    SignalDirection,
    TrendDirection,
    TrendStrength,
    VolumeSignal,
)
from folioscope.models.levels import LevelType, SupportResistance
from folioscope.models.signal import (
    ComprehensiveInterpretation,
    KeyLevels,
    PriceTargets,
    TradeAction,
    TradingSignal,
)
from folioscope.models.technical import TechnicalAnalysis
from folioscope.signals.condition import assess_market_condition
from folioscope.signals.interpret import (
    interpret_adx,
    interpret_bollinger_bands,
    interpret_ichimoku,
    interpret_macd,
    interpret_rsi,
    interpret_stochastic,
    interpret_volume,
)

logger = logging.getLogger(__name__)

SIGNAL_WEIGHTS = {
    "rsi": 15,
    "macd": 20,
    "stochastic": 10,
    "bollinger": 10,
    "adx": 15,
    "ichimoku": 15,
    "volume": 15,
}
MAX_NOTES = 5


def nearest_level(
    levels: list[SupportResistance],
    level_type: LevelType,
    current_price: float,
) -> Optional[float]:
    """Price of the level of ``level_type`` closest to the current price."""
    candidates = [sr for sr in levels if sr.type is level_type]
    if not candidates:
        return None
    return min(candidates, key=lambda sr: abs(sr.price - current_price)).price


def risk_reward(current_price: float, support: float, resistance: float) -> float:
    """``(resistance - price) / (price - support)``; 0 when the price sits on support."""
    risk = current_price - support
    if risk == 0:
        return 0.0
    return (resistance - current_price) / risk


def action_for_score(net_score: float) -> TradeAction:
    """Map a net score in [-1, 1] to an action."""
    if net_score > 0.4:
        return TradeAction.STRONG_BUY
    if net_score > 0.15:
        return TradeAction.BUY
    if net_score < -0.4:
        return TradeAction.STRONG_SELL
    if net_score < -0.15:
        return TradeAction.SELL
    return TradeAction.NEUTRAL


def generate_trading_signal(analysis: TechnicalAnalysis, current_price: float) -> TradingSignal:
    """
    Combine the indicator analyses into one weighted recommendation.

    Each indicator votes its weight for the bulls or the bears; the net
    score is ``(bullish - bearish) / 100``. ADX only votes when a trend is
    present and volume only when it is high with a directional OBV.

    Args:
        analysis: Output of ``calculate_all_indicators``
        current_price: Price the targets are measured from

    Returns:
        TradingSignal with up to five reasons and five risks
    """
    w = SIGNAL_WEIGHTS
    bullish = 0
    bearish = 0
    reasons: list[str] = []
    risks: list[str] = []

    rsi = analysis.rsi
    if rsi.signal.signal is SignalDirection.BULLISH:
        bullish += w["rsi"]
        if rsi.divergence is Divergence.BULLISH:
            reasons.append("Bullish RSI divergence detected")
        if rsi.oversold:
            reasons.append("RSI in oversold territory")
    elif rsi.signal.signal is SignalDirection.BEARISH:
        bearish += w["rsi"]
        if rsi.divergence is Divergence.BEARISH:
            risks.append("Bearish RSI divergence present")
        if rsi.overbought:
            risks.append("RSI in overbought territory")

    macd = analysis.macd
    if macd.trend is SignalDirection.BULLISH:
        bullish += w["macd"]
        if macd.crossover is Crossover.BULLISH:
            reasons.append("MACD bullish crossover")
    elif macd.trend is SignalDirection.BEARISH:
        bearish += w["macd"]
        if macd.crossover is Crossover.BEARISH:
            risks.append("MACD bearish crossover")

    if analysis.stochastic.signal.signal is SignalDirection.BULLISH:
        bullish += w["stochastic"]
    elif analysis.stochastic.signal.signal is SignalDirection.BEARISH:
        bearish += w["stochastic"]

    bands = analysis.bollinger_bands
    if bands.signal.signal is SignalDirection.BULLISH:
        bullish += w["bollinger"]
        reasons.append("Price near lower Bollinger Band")
    elif bands.signal.signal is SignalDirection.BEARISH:
        bearish += w["bollinger"]
        risks.append("Price extended above upper Bollinger Band")
    if bands.squeeze:
        reasons.append("Bollinger squeeze suggests imminent volatility expansion")

    adx = analysis.adx
    if adx.strength is not TrendStrength.ABSENT:
        if adx.direction is TrendDirection.BULLISH:
            bullish += w["adx"]
            if adx.strength is TrendStrength.STRONG:
                reasons.append("Strong uptrend confirmed by ADX")
        elif adx.direction is TrendDirection.BEARISH:
            bearish += w["adx"]
            if adx.strength is TrendStrength.STRONG:
                risks.append("Strong downtrend confirmed by ADX")

    ichimoku = analysis.ichimoku
    if ichimoku.signal.signal is SignalDirection.BULLISH:
        bullish += w["ichimoku"]
        if ichimoku.cloud_status is CloudStatus.ABOVE:
            reasons.append("Price above Ichimoku cloud")
    elif ichimoku.signal.signal is SignalDirection.BEARISH:
        bearish += w["ichimoku"]
        if ichimoku.cloud_status is CloudStatus.BELOW:
            risks.append("Price below Ichimoku cloud")

    volume = analysis.volume
    if volume.volume_signal is VolumeSignal.HIGH:
        if volume.obv_trend is ObvTrend.RISING:
            bullish += w["volume"]
            reasons.append("High volume with rising OBV indicates accumulation")
        elif volume.obv_trend is ObvTrend.FALLING:
            bearish += w["volume"]
            risks.append("High volume with falling OBV indicates distribution")

    net_score = (bullish - bearish) / sum(w.values())
    action = action_for_score(net_score)

    support = nearest_level(analysis.support_resistance, LevelType.SUPPORT, current_price)
    resistance = nearest_level(analysis.support_resistance, LevelType.RESISTANCE, current_price)
    if support is None:
        support = current_price * 0.95
    if resistance is None:
        resistance = current_price * 1.05

    logger.debug(
        f"Signal {action.value}: bullish={bullish} bearish={bearish} net={net_score:.3f}"
    )
    return TradingSignal(
        action=action,
        confidence=min(round(abs(net_score) * 100), 100),
        reasons=reasons[:MAX_NOTES],
        risks=risks[:MAX_NOTES],
        price_targets=PriceTargets(support=support, resistance=resistance),
        net_score=net_score,
    )


def comprehensive_interpretation(
    analysis: TechnicalAnalysis,
    current_price: float,
) -> ComprehensiveInterpretation:
    """Interpret every indicator, classify the market and summarise the signal."""
    indicators = [
        interpret_rsi(analysis.rsi),
        interpret_macd(analysis.macd),
        interpret_stochastic(analysis.stochastic),
        interpret_bollinger_bands(analysis.bollinger_bands),
        interpret_adx(analysis.adx),
        interpret_ichimoku(analysis.ichimoku),
        interpret_volume(analysis.volume),
    ]
    condition = assess_market_condition(analysis)
    signal = generate_trading_signal(analysis, current_price)

    total = len(indicators)
    bullish = sum(1 for i in indicators if i.signal is SignalDirection.BULLISH)
    bearish = sum(1 for i in indicators if i.signal is SignalDirection.BEARISH)

    if signal.action is TradeAction.STRONG_BUY:
        summary = f"Strong buying opportunity. {bullish}/{total} indicators bullish. "
    elif signal.action is TradeAction.BUY:
        summary = f"Moderate bullish bias. {bullish}/{total} indicators bullish. "
    elif signal.action is TradeAction.STRONG_SELL:
        summary = f"Strong selling pressure. {bearish}/{total} indicators bearish. "
    elif signal.action is TradeAction.SELL:
        summary = f"Moderate bearish bias. {bearish}/{total} indicators bearish. "
    else:
        summary = f"Mixed signals - market undecided. {bullish} bullish, {bearish} bearish. "
    summary += condition.description

    targets = signal.price_targets
    summary += f" Support at {targets.support:.2f}, resistance at {targets.resistance:.2f}."

    return ComprehensiveInterpretation(
        overall_signal=signal,
        market_condition=condition,
        indicators=indicators,
        key_levels=KeyLevels(
            nearest_support=targets.support,
            nearest_resistance=targets.resistance,
            risk_reward_ratio=risk_reward(current_price, targets.support, targets.resistance),
        ),
        summary=summary,
    )
