"""Tests for indicator primitives and the indicator engine."""

import pytest

from folioscope.core.errors import InvalidInputError
from folioscope.indicators import (
    analyze_bollinger_bands,
    analyze_rsi,
    analyze_stochastic,
    atr,
    bollinger_bands,
    cci,
    ema,
    ema_series,
    macd,
    macd_series,
    obv,
    rsi,
    rsi_series,
    sma,
    sma_series,
    standard_deviation,
    stochastic,
    vwap,
    williams_r,
)
from folioscope.indicators.engine import calculate_all_indicators
from folioscope.indicators.trend import adx, histogram_history, ichimoku
from folioscope.indicators.volatility import bandwidth_history
from folioscope.models import (
    Bar,
    LevelType,
    ObvTrend,
    PriceSeries,
    SignalDirection,
    VolumeAnalysis,
    VolumeSignal,
)


class TestMovingAverages:
    """Tests for SMA, EMA and dispersion."""

    def test_sma(self) -> None:
        """Test SMA of the last window."""
        assert sma([1, 2, 3, 4, 5], 3) == pytest.approx(4.0)

    def test_sma_short_and_empty(self) -> None:
        """Test short input returns the last value and empty input zero."""
        assert sma([7, 9], 5) == 9.0
        assert sma([], 5) == 0.0

    def test_sma_series_matches_prefixes(self, wave_series: PriceSeries) -> None:
        """Test every series entry equals the SMA of the prefix."""
        closes = wave_series.closes[:60]
        series = sma_series(closes, 20)

        for i in range(len(closes)):
            assert series[i] == pytest.approx(sma(closes[: i + 1], 20))

    def test_ema_jump(self) -> None:
        """Test one step of the EMA recurrence after an SMA seed."""
        assert ema([10.0] * 20 + [20.0], 10) == pytest.approx(10 + 10 * 2 / 11)

    def test_ema_short(self) -> None:
        """Test short input returns the last value."""
        assert ema([1.0, 2.0, 3.0], 10) == 3.0
        assert ema_series([1.0, 2.0, 3.0], 10) == [3.0, 3.0, 3.0]

    def test_ema_series_matches_prefixes(self, wave_series: PriceSeries) -> None:
        """Test series entries equal the EMA of each long-enough prefix."""
        closes = wave_series.closes[:80]
        series = ema_series(closes, 12)

        for i in range(11, len(closes)):
            assert series[i] == pytest.approx(ema(closes[: i + 1], 12))

    def test_standard_deviation(self) -> None:
        """Test population standard deviation."""
        assert standard_deviation([2, 4, 4, 4, 5, 5, 7, 9], 8) == pytest.approx(2.0)
        assert standard_deviation([1, 2], 8) == 0.0


class TestMomentum:
    """Tests for RSI, stochastic, Williams %R and CCI."""

    def test_rsi_bounds(self, wave_series: PriceSeries) -> None:
        """Test RSI stays within 0-100."""
        assert all(0 <= v <= 100 for v in rsi_series(wave_series.closes, 14))

    def test_rsi_rising_is_100(self) -> None:
        """Test a series with no losses reads 100."""
        assert rsi([float(i) for i in range(1, 31)]) == pytest.approx(100.0)

    def test_rsi_short_is_50(self) -> None:
        """Test short input reads 50."""
        assert rsi([1.0, 2.0, 3.0]) == 50.0
        assert rsi_series([1.0, 2.0, 3.0]) == [50.0, 50.0, 50.0]

    def test_rsi_series_matches_prefixes(self, wave_series: PriceSeries) -> None:
        """Test series entries equal the RSI of each prefix."""
        closes = wave_series.closes[:60]
        series = rsi_series(closes, 14)

        assert len(series) == len(closes)
        for i in range(14, len(closes)):
            assert series[i] == pytest.approx(rsi(closes[: i + 1], 14))

    def test_analyze_rsi_overbought(self) -> None:
        """Test a rising series is flagged overbought and bearish."""
        analysis = analyze_rsi([float(i) for i in range(1, 31)])

        assert analysis.overbought
        assert analysis.signal.signal is SignalDirection.BEARISH

    def test_stochastic_bounds(self, wave_series: PriceSeries) -> None:
        """Test %K and %D stay within 0-100."""
        values = stochastic(wave_series.highs, wave_series.lows, wave_series.closes)
        assert 0 <= values.k <= 100
        assert 0 <= values.d <= 100

    def test_stochastic_short(self) -> None:
        """Test short input reads 50/50 with no crossover."""
        values = stochastic([2.0] * 5, [1.0] * 5, [1.5] * 5)
        assert (values.k, values.d) == (50.0, 50.0)
        analysis = analyze_stochastic([2.0] * 5, [1.0] * 5, [1.5] * 5)
        assert analysis.signal.signal is SignalDirection.NEUTRAL

    def test_williams_r(self, wave_series: PriceSeries) -> None:
        """Test Williams %R bounds and short fallback."""
        value = williams_r(wave_series.highs, wave_series.lows, wave_series.closes)
        assert -100 <= value <= 0
        assert williams_r([2.0], [1.0], [1.5]) == -50.0

    def test_cci_flat_is_zero(self) -> None:
        """Test a flat series has zero CCI."""
        assert cci([11.0] * 30, [9.0] * 30, [10.0] * 30) == 0.0


class TestTrend:
    """Tests for MACD, ADX and Ichimoku."""

    def test_macd_identity(self, wave_series: PriceSeries) -> None:
        """Test histogram equals MACD minus signal."""
        values = macd(wave_series.closes)
        assert values.histogram == pytest.approx(values.macd - values.signal)

    def test_macd_short_is_zero(self) -> None:
        """Test short input reads zero."""
        values = macd([float(i) for i in range(30)])
        assert (values.macd, values.signal, values.histogram) == (0.0, 0.0, 0.0)

    def test_histogram_history_matches_prefixes(self, wave_series: PriceSeries) -> None:
        """Test the history equals the histogram of each prefix."""
        closes = wave_series.closes[:60]
        history = histogram_history(macd_series(closes))

        assert len(history) == len(closes) - 34
        for j, value in enumerate(history):
            assert value == pytest.approx(macd(closes[: 35 + j]).histogram)

    def test_adx_short_is_zero(self) -> None:
        """Test fewer than two periods of bars reads zero."""
        values = adx([2.0] * 20, [1.0] * 20, [1.5] * 20)
        assert (values.adx, values.plus_di, values.minus_di) == (0.0, 0.0, 0.0)

    def test_adx_uptrend(self, uptrend_series: PriceSeries) -> None:
        """Test +DI leads in an uptrend."""
        s = uptrend_series
        values = adx(s.highs, s.lows, s.closes)
        assert values.plus_di > values.minus_di
        assert 0 <= values.adx <= 100

    def test_ichimoku_short(self) -> None:
        """Test every line equals the close on short input."""
        lines = ichimoku([2.0] * 10, [1.0] * 10, [1.5] * 10)
        assert lines.tenkan_sen == lines.senkou_span_b == lines.chikou_span == 1.5


class TestVolatility:
    """Tests for Bollinger Bands and ATR."""

    def test_bands_are_symmetric(self, wave_series: PriceSeries) -> None:
        """Test upper and lower bands are equidistant from the middle."""
        bands = bollinger_bands(wave_series.closes)
        assert bands.upper - bands.middle == pytest.approx(bands.middle - bands.lower)
        assert bands.lower < bands.middle < bands.upper

    def test_flat_series(self) -> None:
        """Test a flat series has zero bandwidth and %B of 0.5."""
        bands = bollinger_bands([100.0] * 30)
        assert bands.bandwidth == 0.0
        assert bands.percent_b == 0.5

    def test_short_series_has_no_squeeze(self) -> None:
        """Test short input gives flat bands and no squeeze."""
        analysis = analyze_bollinger_bands([100.0, 101.0])
        assert analysis.upper == analysis.lower == 101.0
        assert not analysis.squeeze

    def test_bandwidth_history_matches_prefixes(self, wave_series: PriceSeries) -> None:
        """Test each history entry equals the bandwidth of the matching prefix."""
        closes = wave_series.closes[:80]

        history = bandwidth_history(closes, 20)

        assert len(history) == len(closes) - 19
        assert history == pytest.approx(
            [bollinger_bands(closes[:i], 20).bandwidth for i in range(20, len(closes) + 1)]
        )

    def test_squeeze_after_wide_swings(self) -> None:
        """Test narrow bars after wide swings are flagged as a squeeze."""
        wide = [90.0 if i % 2 else 110.0 for i in range(40)]
        narrow = [100.0 + (0.01 if i % 2 else -0.01) for i in range(30)]

        analysis = analyze_bollinger_bands(wide + narrow)

        assert analysis.squeeze

    def test_no_squeeze_after_expansion(self) -> None:
        """Test wide swings after a quiet stretch are not a squeeze."""
        narrow = [100.0 + (0.01 if i % 2 else -0.01) for i in range(30)]
        wide = [90.0 if i % 2 else 110.0 for i in range(40)]

        analysis = analyze_bollinger_bands(narrow + wide)

        assert not analysis.squeeze

    def test_atr_constant_range(self) -> None:
        """Test a constant two-point range gives an ATR of 2."""
        closes = [100.0] * 30
        assert atr([101.0] * 30, [99.0] * 30, closes) == pytest.approx(2.0)

    def test_atr_short(self) -> None:
        """Test short input reads zero."""
        assert atr([101.0] * 5, [99.0] * 5, [100.0] * 5) == 0.0


class TestVolume:
    """Tests for OBV and VWAP."""

    def test_obv(self) -> None:
        """Test volume is added on up closes and subtracted on down closes."""
        assert obv([1.0, 2.0, 1.0, 1.0], [10.0, 20.0, 30.0, 40.0]) == pytest.approx(-10.0)

    def test_vwap(self) -> None:
        """Test VWAP weights the typical price by volume."""
        value = vwap([3.0, 6.0], [1.0, 4.0], [2.0, 5.0], [1.0, 3.0])
        assert value == pytest.approx((2.0 * 1 + 5.0 * 3) / 4)

    def test_vwap_without_volume(self) -> None:
        """Test no volume falls back to the last close."""
        assert vwap([3.0, 6.0], [1.0, 4.0], [2.0, 5.0], [0.0, 0.0]) == 5.0


class TestCalculateAllIndicators:
    """Tests for the indicator engine."""

    def test_empty_raises(self) -> None:
        """Test an empty series raises."""
        with pytest.raises(InvalidInputError):
            calculate_all_indicators([])

    def test_accepts_bars(self) -> None:
        """Test bar records are accepted as input."""
        bars = [
            Bar(open=c, high=c + 1, low=c - 1, close=c, volume=100)
            for c in (10 + i * 0.1 for i in range(40))
        ]
        analysis = calculate_all_indicators(bars)
        assert analysis.current_price == pytest.approx(13.9)

    def test_wave_series(self, wave_series: PriceSeries) -> None:
        """Test the bundle is internally consistent."""
        analysis = calculate_all_indicators(wave_series)

        assert analysis.current_price == wave_series.last_close
        assert analysis.indicators.rsi == analysis.rsi.value
        assert analysis.indicators.avg_volume > 0
        assert -100 <= analysis.overall_signal.value <= 100
        for level in analysis.support_resistance:
            expected = LevelType.for_price(level.price, analysis.current_price)
            assert level.type is expected
        prices = [level.price for level in analysis.support_resistance]
        assert prices == sorted(prices)

    def test_uptrend(self, uptrend_series: PriceSeries) -> None:
        """Test moving averages stack in an uptrend."""
        analysis = calculate_all_indicators(uptrend_series)
        values = analysis.indicators

        assert values.ema20 > values.ema50 > values.ema200
        assert values.rsi > 50
        assert analysis.macd.macd > 0

    def test_no_volume(self, no_volume_series: PriceSeries) -> None:
        """Test a series without volume gets the neutral volume analysis."""
        analysis = calculate_all_indicators(no_volume_series)

        assert analysis.volume == VolumeAnalysis.neutral()
        assert analysis.volume.obv_trend is ObvTrend.FLAT
        assert analysis.volume.volume_signal is VolumeSignal.NORMAL
        assert analysis.indicators.avg_volume == 0.0
