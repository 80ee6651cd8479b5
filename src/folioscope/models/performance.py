"""Realized and unrealized performance result types."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class CompletedTrade:
    """One FIFO match between a buy lot and (part of) a sell.

    Attributes:
        id: Stable identifier, "<sell id>-<buy id>"
        symbol: Trading symbol
        company_name: Issuer name from the sell transaction
        buy_date: Trade date of the matched lot
        sell_date: Trade date of the sell
        shares: Matched shares
        buy_price: Lot purchase price
        sell_price: Sell price
        buy_cost: shares * buy_price
        sell_proceeds: shares * sell_price
        realized_pnl: sell_proceeds - buy_cost
        realized_pnl_percent: realized_pnl / buy_cost * 100 (0 on zero cost)
        holding_days: Calendar days between buy and sell
    """

    id: str
    symbol: str
    company_name: str
    buy_date: date
    sell_date: date
    shares: Decimal
    buy_price: Decimal
    sell_price: Decimal
    buy_cost: Decimal
    sell_proceeds: Decimal
    realized_pnl: Decimal
    realized_pnl_percent: float
    holding_days: int

    @property
    def is_win(self) -> bool:
        return self.realized_pnl > 0


@dataclass(frozen=True)
class OpenPosition:
    """Unmatched lots of one symbol, valued at the current price."""

    symbol: str
    company_name: str
    shares: Decimal
    avg_cost: Decimal
    total_cost: Decimal
    current_price: Decimal
    current_value: Decimal
    unrealized_pnl: Decimal
    unrealized_pnl_percent: float
    buy_dates: list[date] = field(default_factory=list)


@dataclass
class PerformanceStats:
    """Aggregate trading performance.

    Rates and percentages are expressed in percent (55.0 = 55%).
    profit_factor and risk_reward_ratio are float('inf') when there are
    gains but no losses, and 0.0 when there are neither.
    """

    total_trades: int
    winning_trades: int
    losing_trades: int
    break_even_trades: int
    win_rate: float
    loss_rate: float
    total_profit: Decimal
    total_loss: Decimal
    net_realized_pnl: Decimal
    net_unrealized_pnl: Decimal
    total_pnl: Decimal
    avg_gain: Decimal
    avg_loss: Decimal
    avg_trade_return: Decimal
    avg_holding_days: float
    profit_factor: float
    risk_reward_ratio: float
    largest_win: Decimal
    largest_loss: Decimal
    max_consecutive_wins: int
    max_consecutive_losses: int
    expectancy: float
    completed_trades: list[CompletedTrade] = field(default_factory=list)
    open_positions: list[OpenPosition] = field(default_factory=list)


@dataclass(frozen=True)
class PeriodPerformance:
    """Realized results grouped by a key (a YYYY-MM month or a symbol).

    ``trades`` counts wins and losses only; break-even trades add to
    ``pnl`` but not to the count.
    """

    key: str
    trades: int
    pnl: Decimal
    win_rate: float
    avg_return: float = 0.0


@dataclass(frozen=True)
class PositionPnL:
    """Unrealized P&L of one position at a price."""

    pnl: Decimal
    pnl_percent: float


@dataclass(frozen=True)
class PortfolioValue:
    """Market value and cost of a set of holdings."""

    total_value: Decimal
    total_cost: Decimal
    total_pnl: Decimal
    total_pnl_percent: float


@dataclass(frozen=True)
class DailyChange:
    """Change in portfolio value since the previous close."""

    change: Decimal
    change_percent: float
