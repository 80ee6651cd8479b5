"""Tests for interpretations, market condition and trading signals."""

import pytest

from folioscope.core.errors import InvalidInputError
from folioscope.models import (
    ADXAnalysis,
    BollingerBandsAnalysis,
    CloudStatus,
    Crossover,
    Divergence,
    IchimokuAnalysis,
    IndicatorSignal,
    LevelType,
    MACDAnalysis,
    MarketTrend,
    Momentum,
    ObvTrend,
    PriceSeries,
    QuickSignal,
    RSIAnalysis,
    SignalDirection,
    StochasticAnalysis,
    Strength,
    SupportResistance,
    TechnicalAnalysis,
    TechnicalIndicators,
    TradeAction,
    TrendDirection,
    TrendStrength,
    Volatility,
    VolumeAnalysis,
    VolumeSignal,
)
from folioscope.models import EngineConfig
from folioscope.signals import (
    action_for_score,
    assess_market_condition,
    classify_trend,
    comprehensive_interpretation,
    full_technical_analysis,
    generate_trading_signal,
    interpret_adx,
    interpret_bollinger_bands,
    interpret_macd,
    interpret_rsi,
    interpret_stochastic,
    key_trading_levels,
    nearest_level,
    quick_signal,
    risk_reward,
)

BULLISH = SignalDirection.BULLISH
NEUTRAL = SignalDirection.NEUTRAL


def _signal(direction: SignalDirection, value: float = 0.0) -> IndicatorSignal:
    return IndicatorSignal(value, direction, Strength.MODERATE, "")


def build_analysis(bullish: bool, levels: list[SupportResistance] | None = None) -> TechnicalAnalysis:
    """Hand-built analysis that is either uniformly bullish or flat."""
    direction = BULLISH if bullish else NEUTRAL
    rsi_value = 25.0 if bullish else 50.0
    histogram = 0.5 if bullish else 0.0
    return TechnicalAnalysis(
        indicators=TechnicalIndicators(
            rsi=rsi_value,
            macd=1.0 if bullish else 0.0,
            macd_signal=0.5 if bullish else 0.0,
            macd_histogram=histogram,
            ema20=100.0,
            ema50=100.0,
            ema200=100.0,
            bollinger_upper=110.0,
            bollinger_middle=100.0,
            bollinger_lower=90.0,
            atr=2.0,
            volume=1_000_000.0,
            avg_volume=500_000.0,
        ),
        rsi=RSIAnalysis(
            value=rsi_value,
            signal=_signal(direction, rsi_value),
            divergence=Divergence.BULLISH if bullish else Divergence.NONE,
        ),
        macd=MACDAnalysis(
            macd=1.0 if bullish else 0.0,
            signal=0.5 if bullish else 0.0,
            histogram=histogram,
            crossover=Crossover.BULLISH if bullish else Crossover.NONE,
            trend=direction,
            divergence=Divergence.NONE,
        ),
        stochastic=StochasticAnalysis(
            k=15.0 if bullish else 50.0,
            d=12.0 if bullish else 50.0,
            signal=_signal(direction),
            crossover=Crossover.NONE,
        ),
        bollinger_bands=BollingerBandsAnalysis(
            upper=110.0,
            middle=100.0,
            lower=90.0,
            bandwidth=20.0,
            percent_b=0.1 if bullish else 0.5,
            squeeze=bullish,
            signal=_signal(direction),
        ),
        adx=ADXAnalysis(
            adx=45.0 if bullish else 10.0,
            plus_di=30.0,
            minus_di=10.0,
            strength=TrendStrength.STRONG if bullish else TrendStrength.ABSENT,
            direction=TrendDirection.BULLISH if bullish else TrendDirection.SIDEWAYS,
        ),
        ichimoku=IchimokuAnalysis(
            tenkan_sen=101.0,
            kijun_sen=99.0,
            senkou_span_a=98.0,
            senkou_span_b=97.0,
            chikou_span=100.0,
            cloud_status=CloudStatus.ABOVE if bullish else CloudStatus.INSIDE,
            signal=_signal(direction),
        ),
        volume=VolumeAnalysis(
            obv=1e7,
            obv_trend=ObvTrend.RISING if bullish else ObvTrend.FLAT,
            vwap=100.0,
            volume_ratio=2.0 if bullish else 1.0,
            volume_signal=VolumeSignal.HIGH if bullish else VolumeSignal.NORMAL,
        ),
        overall_signal=_signal(direction),
        support_resistance=levels or [],
        current_price=100.0,
    )


LEVELS = [
    SupportResistance(LevelType.SUPPORT, 95.0, Strength.STRONG, "Volume POC"),
    SupportResistance(LevelType.SUPPORT, 98.0, Strength.WEAK, "Standard S1"),
    SupportResistance(LevelType.RESISTANCE, 105.0, Strength.MODERATE, "SMA 50"),
    SupportResistance(LevelType.RESISTANCE, 112.0, Strength.WEAK, "Psychological Level"),
]


class TestHelpers:
    """Tests for the scoring helpers."""

    @pytest.mark.parametrize(
        ("score", "action"),
        [
            (0.5, TradeAction.STRONG_BUY),
            (0.41, TradeAction.STRONG_BUY),
            (0.4, TradeAction.BUY),
            (0.2, TradeAction.BUY),
            (0.15, TradeAction.NEUTRAL),
            (0.0, TradeAction.NEUTRAL),
            (-0.15, TradeAction.NEUTRAL),
            (-0.2, TradeAction.SELL),
            (-0.4, TradeAction.SELL),
            (-0.5, TradeAction.STRONG_SELL),
        ],
    )
    def test_action_for_score(self, score: float, action: TradeAction) -> None:
        """Test score thresholds are exclusive."""
        assert action_for_score(score) is action

    def test_risk_reward(self) -> None:
        """Test reward over risk, and zero risk."""
        assert risk_reward(100.0, 98.0, 105.0) == pytest.approx(2.5)
        assert risk_reward(100.0, 100.0, 105.0) == 0.0

    def test_nearest_level(self) -> None:
        """Test the closest level of the requested side is returned."""
        assert nearest_level(LEVELS, LevelType.SUPPORT, 100.0) == 98.0
        assert nearest_level(LEVELS, LevelType.RESISTANCE, 100.0) == 105.0
        assert nearest_level([], LevelType.SUPPORT, 100.0) is None

    def test_classify_trend(self) -> None:
        """Test ADX tiers map to market trends."""
        assert classify_trend(TrendStrength.STRONG, TrendDirection.BEARISH) is (
            MarketTrend.STRONG_DOWNTREND
        )
        assert classify_trend(TrendStrength.MODERATE, TrendDirection.BULLISH) is MarketTrend.UPTREND
        assert classify_trend(TrendStrength.WEAK, TrendDirection.BULLISH) is MarketTrend.SIDEWAYS


class TestInterpretations:
    """Tests for indicator interpretations."""

    def test_labels_include_parameters(self) -> None:
        """Test labels name the indicator and its periods."""
        analysis = build_analysis(bullish=True)

        assert interpret_rsi(analysis.rsi).indicator == "RSI (14)"
        assert interpret_macd(analysis.macd).indicator == "MACD (12, 26, 9)"
        assert interpret_stochastic(analysis.stochastic).indicator == "Stochastic (14, 3)"
        assert interpret_bollinger_bands(analysis.bollinger_bands).indicator == (
            "Bollinger Bands (20, 2)"
        )
        assert interpret_adx(analysis.adx).indicator == "ADX (14)"

    def test_rsi_divergence_overrides(self) -> None:
        """Test a divergence forces the signal and mentions itself."""
        rsi = RSIAnalysis(
            value=75.0, signal=_signal(SignalDirection.BEARISH), divergence=Divergence.BULLISH
        )

        reading = interpret_rsi(rsi)

        assert reading.signal is BULLISH
        assert "BULLISH DIVERGENCE" in reading.interpretation
        assert reading.value == "75.00"


class TestMarketCondition:
    """Tests for assess_market_condition."""

    def test_bullish_condition(self) -> None:
        """Test strong trend, squeeze and rising momentum are recognised."""
        condition = assess_market_condition(build_analysis(bullish=True))

        assert condition.trend is MarketTrend.STRONG_UPTREND
        assert condition.volatility is Volatility.LOW
        assert condition.momentum is Momentum.INCREASING
        assert condition.description.startswith("Market in a strong uptrend")

    def test_flat_condition(self) -> None:
        """Test a trendless market with wide bands."""
        condition = assess_market_condition(build_analysis(bullish=False))

        assert condition.trend is MarketTrend.SIDEWAYS
        assert condition.volatility is Volatility.HIGH
        assert condition.momentum is Momentum.STABLE


class TestTradingSignal:
    """Tests for the weighted recommendation."""

    def test_all_bullish(self) -> None:
        """Test unanimous bulls give a full-confidence strong buy."""
        signal = generate_trading_signal(build_analysis(True, LEVELS), 100.0)

        assert signal.action is TradeAction.STRONG_BUY
        assert signal.confidence == 100
        assert signal.net_score == pytest.approx(1.0)
        assert len(signal.reasons) == 5
        assert signal.reasons[0] == "Bullish RSI divergence detected"
        assert signal.risks == []
        assert signal.price_targets.support == 98.0
        assert signal.price_targets.resistance == 105.0

    def test_neutral_uses_fallback_targets(self) -> None:
        """Test no votes give neutral and targets 5% either side."""
        signal = generate_trading_signal(build_analysis(False), 100.0)

        assert signal.action is TradeAction.NEUTRAL
        assert signal.confidence == 0
        assert signal.price_targets.support == pytest.approx(95.0)
        assert signal.price_targets.resistance == pytest.approx(105.0)

    def test_comprehensive_interpretation(self) -> None:
        """Test the bundle summary and key levels."""
        result = comprehensive_interpretation(build_analysis(True, LEVELS), 100.0)

        assert len(result.indicators) == 7
        assert result.summary.startswith("Strong buying opportunity. ")
        assert result.summary.endswith("Support at 98.00, resistance at 105.00.")
        assert result.key_levels.risk_reward_ratio == pytest.approx(2.5)

    def test_neutral_summary(self) -> None:
        """Test mixed signals are summarised as undecided."""
        result = comprehensive_interpretation(build_analysis(False), 100.0)
        assert result.summary.startswith("Mixed signals - market undecided.")


class TestAnalysisEntryPoints:
    """Tests for full_technical_analysis, quick_signal and key_trading_levels."""

    def test_full_analysis_short_series(self, make_series) -> None:
        """Test a series below the minimum gives no analysis."""
        assert full_technical_analysis(make_series(20)) is None

    def test_full_analysis(self, wave_series: PriceSeries) -> None:
        """Test a long series is analysed."""
        result = full_technical_analysis(wave_series)

        assert result is not None
        assert 0 <= result.overall_signal.confidence <= 100
        assert len(result.indicators) == 7

    def test_min_bars_config(self, make_series) -> None:
        """Test the minimum bar count comes from the config."""
        config = EngineConfig(min_analysis_bars=10)
        assert full_technical_analysis(make_series(20), config) is not None

    def test_quick_signal_short_series(self, make_series) -> None:
        """Test a short series gives the insufficient-data reading."""
        assert quick_signal(make_series(5)) == QuickSignal.insufficient()

    def test_quick_signal(self, uptrend_series: PriceSeries) -> None:
        """Test the quick read carries RSI and trend."""
        result = quick_signal(uptrend_series)

        assert result.rsi > 50
        assert result.trend in set(SignalDirection)

    def test_key_levels_empty_raises(self) -> None:
        """Test an empty series raises."""
        with pytest.raises(InvalidInputError):
            key_trading_levels([])

    def test_key_levels_short_series(self, make_series) -> None:
        """Test fixed percentages are used below ten bars."""
        series = make_series(5)
        price = series.last_close

        levels = key_trading_levels(series)

        assert levels.nearest_support == pytest.approx(price * 0.95)
        assert levels.nearest_resistance == pytest.approx(price * 1.05)
        assert levels.pivot == price
        assert levels.stop_loss == pytest.approx(price * 0.97)
        assert levels.take_profit == pytest.approx(price * 1.06)
        assert levels.risk_reward_ratio == 2.0

    def test_key_levels(self, wave_series: PriceSeries) -> None:
        """Test the ATR-based plan brackets the price."""
        levels = key_trading_levels(wave_series)
        price = wave_series.last_close

        assert levels.nearest_support < price < levels.nearest_resistance
        assert levels.stop_loss < price
        assert levels.take_profit == levels.nearest_resistance
        assert levels.risk_reward_ratio >= 0
