"""Technical indicators.

Primitives (moving averages, oscillators, bands, trend and volume
measures) and their per-indicator analyses. The full bundle, which also
needs the support/resistance engine, lives in
``folioscope.indicators.engine``.
"""

from folioscope.indicators.base import (
    EmaState,
    WilderState,
    ema,
    ema_series,
    sma,
    sma_series,
    standard_deviation,
    true_range,
    wilder_smoothing,
)
from folioscope.indicators.momentum import (
    StochasticValues,
    analyze_rsi,
    analyze_stochastic,
    cci,
    detect_rsi_divergence,
    rsi,
    rsi_series,
    stochastic,
    stochastic_k_series,
    williams_r,
)
from folioscope.indicators.trend import (
    ADXValues,
    IchimokuLines,
    MACDSeries,
    MACDValues,
    adx,
    analyze_adx,
    analyze_ichimoku,
    analyze_macd,
    detect_macd_divergence,
    ichimoku,
    macd,
    macd_series,
)
from folioscope.indicators.volatility import (
    BollingerBands,
    analyze_bollinger_bands,
    atr,
    bandwidth_history,
    bollinger_bands,
)
from folioscope.indicators.volume import analyze_volume, obv, obv_series, vwap

__all__ = [
    # Moving averages and smoothing
    "sma",
    "sma_series",
    "ema",
    "ema_series",
    "EmaState",
    "WilderState",
    "wilder_smoothing",
    "standard_deviation",
    "true_range",
    # Momentum
    "rsi",
    "rsi_series",
    "analyze_rsi",
    "detect_rsi_divergence",
    "stochastic",
    "stochastic_k_series",
    "StochasticValues",
    "analyze_stochastic",
    "williams_r",
    "cci",
    # Trend
    "macd",
    "macd_series",
    "MACDValues",
    "MACDSeries",
    "analyze_macd",
    "detect_macd_divergence",
    "adx",
    "ADXValues",
    "analyze_adx",
    "ichimoku",
    "IchimokuLines",
    "analyze_ichimoku",
    # Volatility
    "bollinger_bands",
    "BollingerBands",
    "bandwidth_history",
    "analyze_bollinger_bands",
    "atr",
    # Volume
    "obv",
    "obv_series",
    "vwap",
    "analyze_volume",
]
