"""Trading signals: indicator interpretations, market condition and recommendations."""

from folioscope.signals.analysis import (
    full_technical_analysis,
    key_trading_levels,
    quick_signal,
)
from folioscope.signals.condition import assess_market_condition, classify_trend
from folioscope.signals.interpret import (
    interpret_adx,
    interpret_bollinger_bands,
    interpret_ichimoku,
    interpret_macd,
    interpret_rsi,
    interpret_stochastic,
    interpret_volume,
)
from folioscope.signals.synthesizer import (
    SIGNAL_WEIGHTS,
    action_for_score,
    comprehensive_interpretation,
    generate_trading_signal,
    nearest_level,
    risk_reward,
)

__all__ = [
    # Interpretations
    "interpret_rsi",
    "interpret_macd",
    "interpret_stochastic",
    "interpret_bollinger_bands",
    "interpret_adx",
    "interpret_ichimoku",
    "interpret_volume",
    # Condition and signal
    "assess_market_condition",
    "classify_trend",
    "generate_trading_signal",
    "comprehensive_interpretation",
    "action_for_score",
    "nearest_level",
    "risk_reward",
    "SIGNAL_WEIGHTS",
    # Entry points
    "full_technical_analysis",
    "quick_signal",
    "key_trading_levels",
]
