"""Market condition: trend, volatility and momentum tiers."""

from __future__ import annotations

from folioscope.models.analysis import SignalDirection, TrendDirection, TrendStrength
from folioscope.models.signal import MarketCondition, MarketTrend, Momentum, Volatility
from folioscope.models.technical import TechnicalAnalysis

# Bollinger bandwidth (percent of the middle band) above which volatility is high
HIGH_VOLATILITY_BANDWIDTH = 10.0


def classify_trend(strength: TrendStrength, direction: TrendDirection) -> MarketTrend:
    """Map the ADX tier and direction to a market trend."""
    bullish = direction is TrendDirection.BULLISH
    if strength is TrendStrength.STRONG:
        return MarketTrend.STRONG_UPTREND if bullish else MarketTrend.STRONG_DOWNTREND
    if strength is TrendStrength.MODERATE:
        return MarketTrend.UPTREND if bullish else MarketTrend.DOWNTREND
    return MarketTrend.SIDEWAYS


def assess_market_condition(analysis: TechnicalAnalysis) -> MarketCondition:
    """
    Classify the market from ADX, Bollinger bandwidth, MACD and RSI.

    Volatility is low during a squeeze and high when the bandwidth exceeds
    10%. Momentum is only tagged when the histogram is positive and RSI sits
    more than 15 points from 50; the MACD trend then decides whether it is
    increasing or decreasing.

    Args:
        analysis: Output of ``calculate_all_indicators``

    Returns:
        MarketCondition with a narrative description
    """
    trend = classify_trend(analysis.adx.strength, analysis.adx.direction)

    bands = analysis.bollinger_bands
    if bands.squeeze:
        volatility = Volatility.LOW
    elif bands.bandwidth > HIGH_VOLATILITY_BANDWIDTH:
        volatility = Volatility.HIGH
    else:
        volatility = Volatility.NORMAL

    if analysis.macd.histogram > 0 and abs(analysis.rsi.value - 50) > 15:
        momentum = (
            Momentum.INCREASING
            if analysis.macd.trend is SignalDirection.BULLISH
            else Momentum.DECREASING
        )
    else:
        momentum = Momentum.STABLE

    return MarketCondition(
        trend=trend,
        volatility=volatility,
        momentum=momentum,
        description=_describe(trend, volatility, momentum),
    )


def _describe(trend: MarketTrend, volatility: Volatility, momentum: Momentum) -> str:
    if trend is MarketTrend.STRONG_UPTREND:
        description = "Market in a strong uptrend with clear bullish momentum. "
    elif trend is MarketTrend.STRONG_DOWNTREND:
        description = "Market in a strong downtrend with persistent selling pressure. "
    elif trend is MarketTrend.SIDEWAYS:
        description = "Market is consolidating without clear direction. "
    else:
        description = f"Market showing {trend.value.replace('_', ' ')}. "

    if volatility is Volatility.HIGH:
        description += "High volatility present - expect larger price swings. "
    elif volatility is Volatility.LOW:
        description += "Low volatility squeeze - breakout imminent. "

    if momentum is Momentum.INCREASING:
        description += "Momentum is accelerating."
    elif momentum is Momentum.DECREASING:
        description += "Momentum is fading."
    return description
