"""Data models: input records (pydantic) and computed result bundles."""

from folioscope.models.analysis import (
    ADXAnalysis,
    BollingerBandsAnalysis,
    CloudStatus,
    Crossover,
    Divergence,
    IchimokuAnalysis,
    IndicatorSignal,
    MACDAnalysis,
    ObvTrend,
    RSIAnalysis,
    SignalDirection,
    StochasticAnalysis,
    Strength,
    TrendDirection,
    TrendStrength,
    VolumeAnalysis,
    VolumeSignal,
)
from folioscope.models.bar import Bar, PriceSeries, bars_to_frame
from folioscope.models.config import (
    EngineConfig,
    IndicatorParams,
    LedgerParams,
    LevelParams,
)
from folioscope.models.currency import (
    CurrencyContribution,
    HoldingCurrencyPnL,
    PortfolioCurrencyPnL,
    RealizedCurrencyPnL,
    RealizedCurrencySummary,
)
from folioscope.models.holding import Holding, TradeLot
from folioscope.models.levels import (
    FibonacciLevels,
    LevelType,
    PivotMethod,
    PivotPoints,
    PriceLevel,
    SupportResistance,
    SwingPoint,
    SwingRange,
    VolumeProfileBin,
)
from folioscope.models.performance import (
    CompletedTrade,
    DailyChange,
    OpenPosition,
    PerformanceStats,
    PeriodPerformance,
    PortfolioValue,
    PositionPnL,
)
from folioscope.models.quote import ExchangeRate, Quote
from folioscope.models.signal import (
    ComprehensiveInterpretation,
    IndicatorInterpretation,
    KeyLevels,
    MarketCondition,
    MarketTrend,
    Momentum,
    PriceTargets,
    QuickSignal,
    TradeAction,
    TradingLevels,
    TradingSignal,
    Volatility,
)
from folioscope.models.technical import TechnicalAnalysis, TechnicalIndicators
from folioscope.models.transaction import Transaction, TransactionType

__all__ = [
    # Input records
    "Bar",
    "PriceSeries",
    "bars_to_frame",
    "Quote",
    "ExchangeRate",
    "Transaction",
    "TransactionType",
    "Holding",
    "TradeLot",
    # Config models
    "EngineConfig",
    "IndicatorParams",
    "LevelParams",
    "LedgerParams",
    # Indicator analyses
    "SignalDirection",
    "Strength",
    "Divergence",
    "Crossover",
    "TrendStrength",
    "TrendDirection",
    "CloudStatus",
    "ObvTrend",
    "VolumeSignal",
    "IndicatorSignal",
    "RSIAnalysis",
    "MACDAnalysis",
    "StochasticAnalysis",
    "BollingerBandsAnalysis",
    "ADXAnalysis",
    "IchimokuAnalysis",
    "VolumeAnalysis",
    "TechnicalIndicators",
    "TechnicalAnalysis",
    # Levels
    "LevelType",
    "PivotMethod",
    "PivotPoints",
    "FibonacciLevels",
    "SwingRange",
    "VolumeProfileBin",
    "SwingPoint",
    "PriceLevel",
    "SupportResistance",
    # Signals
    "TradeAction",
    "MarketTrend",
    "Volatility",
    "Momentum",
    "MarketCondition",
    "IndicatorInterpretation",
    "PriceTargets",
    "TradingSignal",
    "KeyLevels",
    "ComprehensiveInterpretation",
    "QuickSignal",
    "TradingLevels",
    # Performance
    "CompletedTrade",
    "OpenPosition",
    "PerformanceStats",
    "PeriodPerformance",
    "PositionPnL",
    "PortfolioValue",
    "DailyChange",
    # Currency
    "HoldingCurrencyPnL",
    "PortfolioCurrencyPnL",
    "RealizedCurrencyPnL",
    "RealizedCurrencySummary",
    "CurrencyContribution",
]
