"""Trading recommendation and interpretation models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from folioscope.models.analysis import SignalDirection


class TradeAction(str, Enum):
    """Aggregate recommendation."""

    STRONG_BUY = "strong_buy"
    BUY = "buy"
    NEUTRAL = "neutral"
    SELL = "sell"
    STRONG_SELL = "strong_sell"

    @property
    def label(self) -> str:
        """Display label."""
        return {
            TradeAction.STRONG_BUY: "Strong Buy",
            TradeAction.BUY: "Buy",
            TradeAction.NEUTRAL: "Neutral",
            TradeAction.SELL: "Sell",
            TradeAction.STRONG_SELL: "Strong Sell",
        }[self]

    @property
    def style(self) -> str:
        """Rich style used when rendering the action."""
        return {
            TradeAction.STRONG_BUY: "bold green",
            TradeAction.BUY: "green",
            TradeAction.NEUTRAL: "dim",
            TradeAction.SELL: "red",
            TradeAction.STRONG_SELL: "bold red",
        }[self]


class MarketTrend(str, Enum):
    STRONG_UPTREND = "strong_uptrend"
    UPTREND = "uptrend"
    SIDEWAYS = "sideways"
    DOWNTREND = "downtrend"
    STRONG_DOWNTREND = "strong_downtrend"


class Volatility(str, Enum):
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"


class Momentum(str, Enum):
    INCREASING = "increasing"
    STABLE = "stable"
    DECREASING = "decreasing"


@dataclass(frozen=True)
class MarketCondition:
    """Trend, volatility and momentum tiers with a narrative."""

    trend: MarketTrend
    volatility: Volatility
    momentum: Momentum
    description: str


@dataclass(frozen=True)
class IndicatorInterpretation:
    """Human-readable reading of one indicator.

    Attributes:
        indicator: Indicator label including its parameters, e.g. "RSI (14)"
        value: Formatted value string
        signal: Direction after divergence/crossover overrides
        interpretation: What the reading means
        actionable: Suggested response
    """

    indicator: str
    value: str
    signal: SignalDirection
    interpretation: str
    actionable: str


@dataclass(frozen=True)
class PriceTargets:
    """Nearest support and resistance around the current price."""

    support: float
    resistance: float


@dataclass
class TradingSignal:
    """Weighted recommendation.

    Attributes:
        action: Recommended action
        confidence: 0-100
        reasons: Up to five supporting observations
        risks: Up to five opposing observations
        price_targets: Nearest support and resistance
        net_score: (bullish weight - bearish weight) / total weight
    """

    action: TradeAction
    confidence: int
    reasons: list[str] = field(default_factory=list)
    risks: list[str] = field(default_factory=list)
    price_targets: PriceTargets | None = None
    net_score: float = 0.0


@dataclass(frozen=True)
class KeyLevels:
    nearest_support: float
    nearest_resistance: float
    risk_reward_ratio: float


@dataclass
class ComprehensiveInterpretation:
    """Everything a reader needs to act on one symbol's analysis."""

    overall_signal: TradingSignal
    market_condition: MarketCondition
    indicators: list[IndicatorInterpretation]
    key_levels: KeyLevels
    summary: str


@dataclass(frozen=True)
class QuickSignal:
    """Headline read for list views.

    Attributes:
        action: Recommended action
        confidence: 0-100
        rsi: Latest RSI
        trend: ADX direction, sideways reading as neutral
    """

    action: TradeAction
    confidence: int
    rsi: float
    trend: SignalDirection

    @classmethod
    def insufficient(cls) -> "QuickSignal":
        """Reading used when the series is too short to analyse."""
        return cls(TradeAction.NEUTRAL, 0, 50.0, SignalDirection.NEUTRAL)


@dataclass(frozen=True)
class TradingLevels:
    """Nearest levels and an ATR-based trade plan.

    Attributes:
        current_price: Latest close
        nearest_support: Highest support below the price (price * 0.95 if none)
        nearest_resistance: Lowest resistance above the price (price * 1.05 if none)
        pivot: Standard pivot of the previous bar
        stop_loss: Suggested stop below the nearest support
        take_profit: Nearest resistance
        risk_reward_ratio: Reward over risk, 0 when risk is not positive
    """

    current_price: float
    nearest_support: float
    nearest_resistance: float
    pivot: float
    stop_loss: float
    take_profit: float
    risk_reward_ratio: float
