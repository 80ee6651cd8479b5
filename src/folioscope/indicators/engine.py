"""Indicator engine: every indicator of a series in one bundle."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from folioscope.core.errors import InvalidInputError
from folioscope.indicators.base import ema, sma
from folioscope.indicators.momentum import analyze_rsi, analyze_stochastic
from folioscope.indicators.trend import analyze_adx, analyze_ichimoku, analyze_macd
from folioscope.indicators.volatility import analyze_bollinger_bands, atr
from folioscope.indicators.volume import analyze_volume
from folioscope.levels.engine import calculate_support_resistance
from folioscope.models.analysis import (
    ADXAnalysis,
    BollingerBandsAnalysis,
    Crossover,
    Divergence,
    IchimokuAnalysis,
    IndicatorSignal,
    MACDAnalysis,
    RSIAnalysis,
    SignalDirection,
    StochasticAnalysis,
    Strength,
    TrendStrength,
    VolumeAnalysis,
)
from folioscope.models.bar import Bar, PriceSeries
from folioscope.models.config import EngineConfig
from folioscope.models.technical import TechnicalAnalysis, TechnicalIndicators

logger = logging.getLogger(__name__)

# Vote weights for the overall signal; ADX is weighted by trend strength
OVERALL_WEIGHTS = {
    "rsi": 1.5,
    "macd": 2.0,
    "stochastic": 1.0,
    "bollinger": 1.0,
    "ichimoku": 1.5,
}
ADX_WEIGHTS = {TrendStrength.STRONG: 2.0, TrendStrength.MODERATE: 1.5}


def calculate_all_indicators(
    data: PriceSeries | Sequence[Bar],
    config: Optional[EngineConfig] = None,
) -> TechnicalAnalysis:
    """
    Compute every indicator, its analysis and the support/resistance map.

    Volume is optional: a series without any volume gets the neutral
    volume analysis, an average volume of 0 and no volume-profile levels.

    Args:
        data: Bars or a price series, earliest first
        config: Engine configuration (defaults if omitted)

    Returns:
        TechnicalAnalysis bundle priced at the latest close

    Raises:
        InvalidInputError: If the series is empty
    """
    series = PriceSeries.coerce(data)
    if not len(series):
        raise InvalidInputError("cannot analyse an empty price series", field="bars")
    config = config or EngineConfig()
    p = config.indicators

    highs, lows, closes, volumes = series.highs, series.lows, series.closes, series.volumes
    has_volume = series.has_volume
    if not has_volume:
        logger.debug("Series has no volume, using neutral volume analysis")

    rsi_analysis = analyze_rsi(closes, p.rsi_period, p.rsi_divergence_lookback)
    macd_analysis = analyze_macd(
        closes, p.macd_fast, p.macd_slow, p.macd_signal, p.macd_divergence_lookback
    )
    stochastic = analyze_stochastic(highs, lows, closes, p.stochastic_k, p.stochastic_d)
    bollinger = analyze_bollinger_bands(
        closes, p.bollinger_period, p.bollinger_multiplier, p.squeeze_lookback
    )
    adx = analyze_adx(highs, lows, closes, p.adx_period)
    ichimoku = analyze_ichimoku(highs, lows, closes)
    volume = (
        analyze_volume(highs, lows, closes, volumes, p.volume_average_period)
        if has_volume
        else VolumeAnalysis.neutral()
    )

    indicators = TechnicalIndicators(
        rsi=rsi_analysis.value,
        macd=macd_analysis.macd,
        macd_signal=macd_analysis.signal,
        macd_histogram=macd_analysis.histogram,
        ema20=ema(closes, 20),
        ema50=ema(closes, 50),
        ema200=ema(closes, 200),
        bollinger_upper=bollinger.upper,
        bollinger_middle=bollinger.middle,
        bollinger_lower=bollinger.lower,
        atr=atr(highs, lows, closes, p.atr_period),
        volume=volumes[-1],
        avg_volume=sma(volumes, p.volume_average_period) if has_volume else 0.0,
    )

    current_price = series.last_close
    levels = calculate_support_resistance(
        highs, lows, closes, volumes, current_price, config.levels
    )

    return TechnicalAnalysis(
        indicators=indicators,
        rsi=rsi_analysis,
        macd=macd_analysis,
        stochastic=stochastic,
        bollinger_bands=bollinger,
        adx=adx,
        ichimoku=ichimoku,
        volume=volume,
        overall_signal=overall_signal(
            rsi_analysis, macd_analysis, stochastic, bollinger, adx, ichimoku
        ),
        support_resistance=levels,
        current_price=current_price,
    )


def overall_signal(
    rsi: RSIAnalysis,
    macd: MACDAnalysis,
    stochastic: StochasticAnalysis,
    bollinger: BollingerBandsAnalysis,
    adx: ADXAnalysis,
    ichimoku: IchimokuAnalysis,
) -> IndicatorSignal:
    """Weighted vote of the indicator signals.

    The net score is ``(bullish - bearish) / total weight``. Above 0.3 is
    bullish (strong above 0.6), below -0.3 bearish; the signal value is the
    net score times 100.
    """
    votes = [
        (rsi.signal.signal, OVERALL_WEIGHTS["rsi"]),
        (macd.trend, OVERALL_WEIGHTS["macd"]),
        (stochastic.signal.signal, OVERALL_WEIGHTS["stochastic"]),
        (bollinger.signal.signal, OVERALL_WEIGHTS["bollinger"]),
        (ichimoku.signal.signal, OVERALL_WEIGHTS["ichimoku"]),
        (adx.direction.as_signal, ADX_WEIGHTS.get(adx.strength, 1.0)),
    ]

    total = sum(weight for _, weight in votes)
    bullish = sum(weight for signal, weight in votes if signal is SignalDirection.BULLISH)
    bearish = sum(weight for signal, weight in votes if signal is SignalDirection.BEARISH)
    net_score = (bullish - bearish) / total

    if net_score > 0.3:
        signal = SignalDirection.BULLISH
        strength = Strength.STRONG if net_score > 0.6 else Strength.MODERATE
    elif net_score < -0.3:
        signal = SignalDirection.BEARISH
        strength = Strength.STRONG if net_score < -0.6 else Strength.MODERATE
    else:
        signal = SignalDirection.NEUTRAL
        strength = Strength.WEAK

    return IndicatorSignal(
        value=net_score * 100,
        signal=signal,
        strength=strength,
        description=_overall_description(signal, strength, rsi, macd, adx),
    )


def _overall_description(
    signal: SignalDirection,
    strength: Strength,
    rsi: RSIAnalysis,
    macd: MACDAnalysis,
    adx: ADXAnalysis,
) -> str:
    if signal is SignalDirection.NEUTRAL:
        parts = ["Neutral/Consolidating"]
    elif strength is Strength.STRONG:
        parts = [f"Strong {signal.value} momentum"]
    else:
        parts = [f"Moderate {signal.value} bias"]

    if rsi.divergence is not Divergence.NONE:
        parts.append(f"{rsi.divergence.value} RSI divergence")
    if macd.crossover is not Crossover.NONE:
        parts.append(f"MACD {macd.crossover.value} crossover")

    if adx.strength is TrendStrength.STRONG:
        parts.append("strong trend")
    elif adx.strength is TrendStrength.ABSENT:
        parts.append("ranging market")
    return ", ".join(parts)
