"""Plain-language readings of each indicator analysis."""

from __future__ import annotations

from folioscope.models.analysis import (
    ADXAnalysis,
    BollingerBandsAnalysis,
    CloudStatus,
    Crossover,
    Divergence,
    IchimokuAnalysis,
    MACDAnalysis,
    ObvTrend,
    RSIAnalysis,
    SignalDirection,
    StochasticAnalysis,
    TrendDirection,
    TrendStrength,
    VolumeAnalysis,
    VolumeSignal,
)
from folioscope.models.signal import IndicatorInterpretation

BULLISH = SignalDirection.BULLISH
BEARISH = SignalDirection.BEARISH
NEUTRAL = SignalDirection.NEUTRAL


def interpret_rsi(rsi: RSIAnalysis) -> IndicatorInterpretation:
    """RSI bands from extreme overbought (>80) to extreme oversold (<=20).

    A divergence overrides the band signal and its suggested action.
    """
    value = rsi.value
    if value > 80:
        signal = BEARISH
        interpretation = (
            f"RSI at {value:.1f} indicates extreme overbought conditions. "
            "Historically, such levels often precede corrections or consolidation."
        )
        actionable = (
            "Consider taking profits or tightening stop losses. Avoid adding new long positions."
        )
    elif value > 70:
        signal = BEARISH
        interpretation = (
            f"RSI at {value:.1f} shows overbought territory. "
            "Momentum is strong but sustainability is questionable."
        )
        actionable = "Watch for bearish divergence or failure to make new highs."
    elif value > 60:
        signal = BULLISH
        interpretation = (
            f"RSI at {value:.1f} indicates healthy bullish momentum without overextension."
        )
        actionable = (
            "Trend following strategies are appropriate. Look for pullbacks to add positions."
        )
    elif value > 40:
        signal = NEUTRAL
        interpretation = (
            f"RSI at {value:.1f} suggests neutral momentum. "
            "Market is neither overbought nor oversold."
        )
        actionable = "Wait for clearer signals or trade range-bound strategies."
    elif value > 30:
        signal = BEARISH
        interpretation = f"RSI at {value:.1f} indicates weakening momentum but not yet oversold."
        actionable = "Avoid catching falling knives. Wait for reversal confirmation."
    elif value > 20:
        signal = BULLISH
        interpretation = (
            f"RSI at {value:.1f} shows oversold conditions. Potential bounce opportunity forming."
        )
        actionable = "Start watching for reversal patterns. Consider scaling into positions."
    else:
        signal = BULLISH
        interpretation = (
            f"RSI at {value:.1f} indicates extreme oversold conditions. Strong bounce potential."
        )
        actionable = (
            "Look for bullish reversal candles as entry signals. Set stops below recent lows."
        )

    if rsi.divergence is Divergence.BULLISH:
        signal = BULLISH
        interpretation += (
            " BULLISH DIVERGENCE detected - price making lower lows while RSI makes higher lows."
        )
        actionable = "Strong reversal signal. Watch for confirmation with price action."
    elif rsi.divergence is Divergence.BEARISH:
        signal = BEARISH
        interpretation += (
            " BEARISH DIVERGENCE detected - price making higher highs while RSI makes lower highs."
        )
        actionable = "Warning signal for longs. Consider reducing exposure."

    return IndicatorInterpretation(
        indicator=f"RSI ({rsi.period})",
        value=f"{value:.2f}",
        signal=signal,
        interpretation=interpretation,
        actionable=actionable,
    )


def interpret_macd(macd: MACDAnalysis) -> IndicatorInterpretation:
    """MACD line and histogram quadrant, then crossover and divergence overrides."""
    line, histogram = macd.macd, macd.histogram
    if line > 0 and histogram > 0:
        signal = BULLISH
        interpretation = (
            f"MACD Line ({line:.4f}) is positive with expanding histogram ({histogram:.4f}). "
            "Strong bullish momentum."
        )
        actionable = "Trend is your friend. Look for pullbacks to support levels for entries."
    elif line > 0 and histogram < 0:
        signal = NEUTRAL
        interpretation = (
            "MACD Line positive but histogram contracting. "
            "Momentum is weakening despite overall bullish bias."
        )
        actionable = "Caution for new longs. Existing positions may need tighter stops."
    elif line < 0 and histogram < 0:
        signal = BEARISH
        interpretation = (
            f"MACD Line ({line:.4f}) is negative with expanding bearish histogram. "
            "Strong downward momentum."
        )
        actionable = "Avoid bottom fishing. Wait for stabilization signals."
    elif line < 0 and histogram > 0:
        signal = NEUTRAL
        interpretation = (
            "MACD Line negative but histogram improving. Selling pressure may be exhausting."
        )
        actionable = (
            "Early signs of potential reversal. Wait for MACD to cross above signal line."
        )
    else:
        signal = NEUTRAL
        interpretation = "MACD is near the zero line indicating indecision."
        actionable = "Range-bound strategies may work best."

    if macd.crossover is Crossover.BULLISH:
        signal = BULLISH
        interpretation = "BULLISH CROSSOVER: MACD just crossed above Signal line. " + interpretation
        actionable = "Classic buy signal. Consider entering with stop below recent low."
    elif macd.crossover is Crossover.BEARISH:
        signal = BEARISH
        interpretation = "BEARISH CROSSOVER: MACD just crossed below Signal line. " + interpretation
        actionable = "Classic sell signal. Consider reducing long exposure."

    if macd.divergence is not Divergence.NONE:
        interpretation += f" {macd.divergence.value.upper()} DIVERGENCE present."
        signal = BULLISH if macd.divergence is Divergence.BULLISH else BEARISH

    return IndicatorInterpretation(
        indicator=f"MACD ({macd.fast_period}, {macd.slow_period}, {macd.signal_period})",
        value=f"{line:.4f} / {macd.signal:.4f}",
        signal=signal,
        interpretation=interpretation,
        actionable=actionable,
    )


def interpret_stochastic(stoch: StochasticAnalysis) -> IndicatorInterpretation:
    k, d = stoch.k, stoch.d
    if k > 80 and d > 80:
        signal = BEARISH
        interpretation = f"Stochastic %K({k:.1f}) and %D({d:.1f}) both in overbought territory."
        actionable = "Wait for %K to cross below %D for sell signal. Avoid new longs."
    elif k < 20 and d < 20:
        signal = BULLISH
        interpretation = f"Stochastic %K({k:.1f}) and %D({d:.1f}) both in oversold territory."
        actionable = "Watch for %K crossing above %D for buy signal."
    elif d < k < 80:
        signal = BULLISH
        interpretation = f"%K({k:.1f}) above %D({d:.1f}) with room to run before overbought."
        actionable = "Momentum favors bulls. Ride the trend."
    elif 20 < k < d:
        signal = BEARISH
        interpretation = f"%K({k:.1f}) below %D({d:.1f}) indicating bearish momentum."
        actionable = "Avoid catching falling knives."
    else:
        signal = NEUTRAL
        interpretation = f"Stochastic showing mixed signals with %K at {k:.1f}."
        actionable = "Wait for clearer direction."

    if stoch.crossover is Crossover.BULLISH:
        signal = BULLISH
        interpretation += " BULLISH CROSSOVER just occurred!"
        actionable = "Buy signal triggered. Enter with defined risk."
    elif stoch.crossover is Crossover.BEARISH:
        signal = BEARISH
        interpretation += " BEARISH CROSSOVER just occurred!"
        actionable = "Sell signal triggered. Consider taking profits."

    return IndicatorInterpretation(
        indicator=f"Stochastic ({stoch.k_period}, {stoch.d_period})",
        value=f"%K: {k:.1f}, %D: {d:.1f}",
        signal=signal,
        interpretation=interpretation,
        actionable=actionable,
    )


def interpret_bollinger_bands(bb: BollingerBandsAnalysis) -> IndicatorInterpretation:
    """A squeeze outranks band position; only closes outside the bands carry a direction."""
    percent_b = bb.percent_b
    if bb.squeeze:
        signal = NEUTRAL
        interpretation = (
            f"Bollinger Band SQUEEZE detected! Bandwidth at {bb.bandwidth:.2f}% is very narrow."
        )
        actionable = (
            "Major move incoming. Prepare for breakout in either direction. "
            "Set alerts above and below bands."
        )
    elif percent_b > 1:
        signal = BEARISH
        interpretation = (
            f"Price trading above upper band ({percent_b:.2f} %B). "
            "Extended but could indicate strong momentum."
        )
        actionable = "Caution - mean reversion likely. Tighten stops for longs."
    elif percent_b < 0:
        signal = BULLISH
        interpretation = (
            f"Price trading below lower band ({percent_b:.2f} %B). "
            "Oversold but could indicate capitulation."
        )
        actionable = "Look for reversal confirmation before entering long."
    elif percent_b > 0.8:
        signal = NEUTRAL
        interpretation = f"Price near upper band ({percent_b * 100:.0f}%). Testing resistance."
        actionable = "Watch for rejection or breakout above band."
    elif percent_b < 0.2:
        signal = NEUTRAL
        interpretation = f"Price near lower band ({percent_b * 100:.0f}%). Testing support."
        actionable = "Watch for bounce or breakdown below band."
    else:
        signal = NEUTRAL
        interpretation = f"Price in middle of bands ({percent_b * 100:.0f}%). No extreme readings."
        actionable = "Focus on other indicators for direction."

    return IndicatorInterpretation(
        indicator=f"Bollinger Bands ({bb.period}, {bb.multiplier:g})",
        value=f"Upper: {bb.upper:.2f}, Mid: {bb.middle:.2f}, Lower: {bb.lower:.2f}",
        signal=signal,
        interpretation=interpretation,
        actionable=actionable,
    )


def interpret_adx(adx: ADXAnalysis) -> IndicatorInterpretation:
    value, plus_di, minus_di = adx.adx, adx.plus_di, adx.minus_di
    bullish = adx.direction is TrendDirection.BULLISH

    if adx.strength is TrendStrength.ABSENT:
        signal = NEUTRAL
        interpretation = f"ADX at {value:.1f} indicates NO TREND. Market is ranging."
        actionable = "Use range-bound strategies. Buy support, sell resistance."
    elif adx.strength is TrendStrength.WEAK:
        signal = NEUTRAL
        interpretation = f"ADX at {value:.1f} shows WEAK trend. Direction uncertain."
        actionable = "Be cautious with trend-following strategies."
    elif adx.strength is TrendStrength.MODERATE and bullish:
        signal = BULLISH
        interpretation = (
            f"ADX at {value:.1f} with +DI({plus_di:.1f}) > -DI({minus_di:.1f}). Moderate uptrend."
        )
        actionable = "Follow the trend. Buy dips to moving averages."
    elif adx.strength is TrendStrength.MODERATE:
        signal = BEARISH
        interpretation = (
            f"ADX at {value:.1f} with -DI({minus_di:.1f}) > +DI({plus_di:.1f}). Moderate downtrend."
        )
        actionable = "Avoid buying. Wait for trend exhaustion."
    elif bullish:
        signal = BULLISH
        interpretation = f"ADX at {value:.1f} indicates STRONG UPTREND! +DI dominating."
        actionable = "Trend is powerful. Stay long, add on pullbacks."
    else:
        signal = BEARISH
        interpretation = f"ADX at {value:.1f} indicates STRONG DOWNTREND! -DI dominating."
        actionable = "Powerful selling pressure. Do not fight the trend."

    return IndicatorInterpretation(
        indicator=f"ADX ({adx.period})",
        value=f"ADX: {value:.1f}, +DI: {plus_di:.1f}, -DI: {minus_di:.1f}",
        signal=signal,
        interpretation=interpretation,
        actionable=actionable,
    )


def interpret_ichimoku(ichimoku: IchimokuAnalysis) -> IndicatorInterpretation:
    tenkan, kijun = ichimoku.tenkan_sen, ichimoku.kijun_sen
    span_a, span_b = ichimoku.senkou_span_a, ichimoku.senkou_span_b
    status = ichimoku.cloud_status

    if status is CloudStatus.ABOVE and tenkan > kijun and span_a > span_b:
        signal = BULLISH
        interpretation = "STRONG BULLISH: Price above green cloud, TK cross positive."
        actionable = "All Ichimoku signals aligned bullish. Stay long with cloud as support."
    elif status is CloudStatus.BELOW and tenkan < kijun and span_a < span_b:
        signal = BEARISH
        interpretation = "STRONG BEARISH: Price below red cloud, TK cross negative."
        actionable = "All signals aligned bearish. Avoid longs."
    elif status is CloudStatus.ABOVE:
        signal = BULLISH
        interpretation = "Price above cloud indicates bullish bias."
        actionable = "Cloud acts as support. Buy bounces off cloud."
    elif status is CloudStatus.BELOW:
        signal = BEARISH
        interpretation = "Price below cloud indicates bearish bias."
        actionable = "Cloud acts as resistance. Sell rallies to cloud."
    else:
        signal = NEUTRAL
        interpretation = "Price inside cloud - no clear direction."
        actionable = "Wait for price to exit cloud for clarity."

    if tenkan > kijun and status is not CloudStatus.BELOW:
        interpretation += " Tenkan above Kijun supports bulls."
    elif tenkan < kijun and status is not CloudStatus.ABOVE:
        interpretation += " Tenkan below Kijun supports bears."

    return IndicatorInterpretation(
        indicator="Ichimoku Cloud",
        value=f"TK: {tenkan:.2f}, KJ: {kijun:.2f}",
        signal=signal,
        interpretation=interpretation,
        actionable=actionable,
    )


def interpret_volume(volume: VolumeAnalysis) -> IndicatorInterpretation:
    ratio_percent = volume.volume_ratio * 100
    if volume.volume_signal is VolumeSignal.HIGH and volume.obv_trend is ObvTrend.RISING:
        signal = BULLISH
        interpretation = (
            f"Volume {ratio_percent:.0f}% of average with rising OBV. Strong buying pressure."
        )
        actionable = "Institutional accumulation possible. Follow the money."
    elif volume.volume_signal is VolumeSignal.HIGH and volume.obv_trend is ObvTrend.FALLING:
        signal = BEARISH
        interpretation = f"Volume {ratio_percent:.0f}% of average with falling OBV. Heavy selling."
        actionable = "Distribution phase. Avoid longs."
    elif volume.volume_signal is VolumeSignal.LOW:
        signal = NEUTRAL
        interpretation = f"Volume {ratio_percent:.0f}% of average. Low participation."
        actionable = "Moves on low volume are less reliable. Wait for volume confirmation."
    else:
        signal = NEUTRAL
        interpretation = f"Normal volume with {volume.obv_trend.value} OBV trend."
        actionable = "Volume confirms recent price action."

    return IndicatorInterpretation(
        indicator="Volume Analysis",
        value=f"{ratio_percent:.0f}% of avg, VWAP: {volume.vwap:.2f}",
        signal=signal,
        interpretation=interpretation,
        actionable=actionable,
    )
