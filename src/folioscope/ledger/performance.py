"""Realized and unrealized trading performance from the transaction ledger."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from folioscope.ledger.fifo import LotMatch, LotQueue, match_transactions
from folioscope.models.performance import (
    CompletedTrade,
    OpenPosition,
    PerformanceStats,
    PeriodPerformance,
)
from folioscope.models.quote import Quote
from folioscope.models.transaction import Transaction

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _percent(part: Decimal, whole: Decimal) -> float:
    if whole <= 0:
        return 0.0
    return float(part / whole * 100)


def _ratio(numerator: Decimal, denominator: Decimal) -> float:
    """numerator / denominator, inf when only the numerator is positive."""
    if denominator > 0:
        return float(numerator / denominator)
    return float("inf") if numerator > 0 else 0.0


def completed_trade(match: LotMatch) -> CompletedTrade:
    """Build the CompletedTrade for one FIFO match."""
    buy, sell = match.buy, match.sell
    buy_cost = match.shares * buy.price
    sell_proceeds = match.shares * sell.price
    realized = sell_proceeds - buy_cost
    return CompletedTrade(
        id=f"{sell.id}-{buy.id}",
        symbol=sell.symbol,
        company_name=sell.company_name,
        buy_date=buy.trade_date,
        sell_date=sell.trade_date,
        shares=match.shares,
        buy_price=buy.price,
        sell_price=sell.price,
        buy_cost=buy_cost,
        sell_proceeds=sell_proceeds,
        realized_pnl=realized,
        realized_pnl_percent=_percent(realized, buy_cost),
        holding_days=abs((sell.trade_date - buy.trade_date).days),
    )


def open_position(
    symbol: str,
    queue: LotQueue,
    quote: Optional[Quote] = None,
) -> Optional[OpenPosition]:
    """
    Aggregate the unsold lots of one symbol.

    Args:
        symbol: Trading symbol
        queue: Lots left after matching
        quote: Latest quote; the average cost is used as price without one

    Returns:
        OpenPosition, or None when no shares remain
    """
    lots = [lot for lot in queue if lot.remaining > 0]
    if not lots:
        return None

    shares = sum((lot.remaining for lot in lots), ZERO)
    total_cost = sum((lot.remaining * lot.buy.price for lot in lots), ZERO)
    avg_cost = total_cost / shares
    price = quote.current_price if quote and quote.current_price else avg_cost
    value = shares * price
    unrealized = value - total_cost

    return OpenPosition(
        symbol=symbol,
        company_name=lots[0].buy.company_name,
        shares=shares,
        avg_cost=avg_cost,
        total_cost=total_cost,
        current_price=price,
        current_value=value,
        unrealized_pnl=unrealized,
        unrealized_pnl_percent=_percent(unrealized, total_cost),
        buy_dates=[lot.buy.trade_date for lot in lots],
    )


def _max_streaks(trades: list[CompletedTrade]) -> tuple[int, int]:
    """Longest win and loss runs; a break-even trade ends both."""
    max_wins = max_losses = 0
    wins = losses = 0
    for trade in trades:
        if trade.realized_pnl > 0:
            wins += 1
            losses = 0
            max_wins = max(max_wins, wins)
        elif trade.realized_pnl < 0:
            losses += 1
            wins = 0
            max_losses = max(max_losses, losses)
        else:
            wins = losses = 0
    return max_wins, max_losses


def calculate_performance(
    transactions: Iterable[Transaction],
    quotes: Optional[Mapping[str, Quote]] = None,
) -> PerformanceStats:
    """
    Match the ledger FIFO and summarise realized and unrealized results.

    Every (buy lot, sell) match is one completed trade. Lots left over
    become one open position per symbol, valued at the quote when present.

    Args:
        transactions: Ledger entries in any order
        quotes: Latest quotes by symbol

    Returns:
        PerformanceStats with completed trades ordered by sell date
    """
    quotes = quotes or {}
    matches, queues = match_transactions(transactions)

    trades = sorted(
        (completed_trade(match) for match in matches), key=lambda t: t.sell_date
    )
    positions = []
    for symbol, queue in queues.items():
        position = open_position(symbol, queue, quotes.get(symbol))
        if position is not None:
            positions.append(position)

    winners = [t.realized_pnl for t in trades if t.realized_pnl > 0]
    losers = [-t.realized_pnl for t in trades if t.realized_pnl < 0]
    total_trades = len(trades)

    total_profit = sum(winners, ZERO)
    total_loss = sum(losers, ZERO)
    net_realized = total_profit - total_loss
    net_unrealized = sum((p.unrealized_pnl for p in positions), ZERO)

    win_rate = len(winners) / total_trades * 100 if total_trades else 0.0
    loss_rate = len(losers) / total_trades * 100 if total_trades else 0.0
    avg_gain = total_profit / len(winners) if winners else ZERO
    avg_loss = total_loss / len(losers) if losers else ZERO
    max_wins, max_losses = _max_streaks(trades)

    logger.debug(
        f"Matched {total_trades} trades, {len(positions)} open positions, "
        f"net realized {net_realized}"
    )
    return PerformanceStats(
        total_trades=total_trades,
        winning_trades=len(winners),
        losing_trades=len(losers),
        break_even_trades=total_trades - len(winners) - len(losers),
        win_rate=win_rate,
        loss_rate=loss_rate,
        total_profit=total_profit,
        total_loss=total_loss,
        net_realized_pnl=net_realized,
        net_unrealized_pnl=net_unrealized,
        total_pnl=net_realized + net_unrealized,
        avg_gain=avg_gain,
        avg_loss=avg_loss,
        avg_trade_return=net_realized / total_trades if total_trades else ZERO,
        avg_holding_days=(
            sum(t.holding_days for t in trades) / total_trades if total_trades else 0.0
        ),
        profit_factor=_ratio(total_profit, total_loss),
        risk_reward_ratio=_ratio(avg_gain, avg_loss),
        largest_win=max(winners, default=ZERO),
        largest_loss=max(losers, default=ZERO),
        max_consecutive_wins=max_wins,
        max_consecutive_losses=max_losses,
        expectancy=win_rate / 100 * float(avg_gain) - loss_rate / 100 * float(avg_loss),
        completed_trades=trades,
        open_positions=positions,
    )


def _breakdown(trades: Iterable[CompletedTrade], key) -> list[PeriodPerformance]:
    groups: dict[str, list[CompletedTrade]] = {}
    for trade in trades:
        groups.setdefault(key(trade), []).append(trade)

    result = []
    for group_key, group in groups.items():
        wins = sum(1 for t in group if t.realized_pnl > 0)
        losses = sum(1 for t in group if t.realized_pnl < 0)
        counted = wins + losses
        result.append(
            PeriodPerformance(
                key=group_key,
                trades=counted,
                pnl=sum((t.realized_pnl for t in group), ZERO),
                win_rate=wins / counted * 100 if counted else 0.0,
                avg_return=(
                    sum(t.realized_pnl_percent for t in group) / counted if counted else 0.0
                ),
            )
        )
    return result


def monthly_performance(trades: Iterable[CompletedTrade]) -> list[PeriodPerformance]:
    """Realized results per sell month (``YYYY-MM``), oldest month first."""
    months = _breakdown(trades, lambda t: t.sell_date.strftime("%Y-%m"))
    return sorted(months, key=lambda p: p.key)


def symbol_performance(trades: Iterable[CompletedTrade]) -> list[PeriodPerformance]:
    """
    Realized results per symbol, best P&L first.

    ``avg_return`` is the summed trade return percent divided by the number
    of winning and losing trades.
    """
    symbols = _breakdown(trades, lambda t: t.symbol)
    return sorted(symbols, key=lambda p: p.pnl, reverse=True)
