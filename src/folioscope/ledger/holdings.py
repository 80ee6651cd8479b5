"""Holding maintenance: lot averaging, valuation and FIFO replay."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Sequence

from folioscope.core.errors import InvalidInputError
from folioscope.ledger.fifo import LotQueue, match_transactions
from folioscope.models.config import LedgerParams
from folioscope.models.holding import Holding, TradeLot
from folioscope.models.performance import DailyChange, PortfolioValue, PositionPnL
from folioscope.models.quote import Quote
from folioscope.models.transaction import Transaction

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def average_cost(lots: Iterable[TradeLot]) -> Decimal:
    """Share-weighted average price of the lots, 0 when they hold no shares."""
    lots = list(lots)
    shares = sum((lot.shares for lot in lots), ZERO)
    if shares <= 0:
        return ZERO
    return sum((lot.cost for lot in lots), ZERO) / shares


def average_exchange_rate(lots: Iterable[TradeLot], default_rate: Decimal) -> Decimal:
    """
    Cost-weighted average purchase rate of the lots.

    Lots without a rate count at ``default_rate``; with no cost at all the
    default itself is returned.
    """
    cost = ZERO
    cost_local = ZERO
    for lot in lots:
        cost += lot.cost
        cost_local += lot.cost * (lot.exchange_rate or default_rate)
    if cost <= 0:
        return default_rate
    return cost_local / cost


def position_pnl(shares: Decimal, avg_cost: Decimal, current_price: Decimal) -> PositionPnL:
    """Unrealized P&L of ``shares`` bought at ``avg_cost`` and valued at ``current_price``."""
    cost_basis = shares * avg_cost
    pnl = shares * current_price - cost_basis
    percent = float(pnl / cost_basis * 100) if cost_basis > 0 else 0.0
    return PositionPnL(pnl=pnl, pnl_percent=percent)


def _price(holding: Holding, quotes: Mapping[str, Quote]) -> Decimal:
    quote = quotes.get(holding.symbol)
    if quote is not None and quote.current_price:
        return quote.current_price
    return holding.avg_cost


def portfolio_value(
    holdings: Iterable[Holding],
    quotes: Optional[Mapping[str, Quote]] = None,
) -> PortfolioValue:
    """
    Value holdings at their quotes.

    Holdings without a quote are valued at their average cost.

    Args:
        holdings: Holdings to value
        quotes: Latest quotes by symbol

    Returns:
        PortfolioValue with totals and the P&L percent of cost
    """
    quotes = quotes or {}
    value = ZERO
    cost = ZERO
    for holding in holdings:
        value += holding.market_value(_price(holding, quotes))
        cost += holding.cost_basis
    pnl = value - cost
    return PortfolioValue(
        total_value=value,
        total_cost=cost,
        total_pnl=pnl,
        total_pnl_percent=float(pnl / cost * 100) if cost > 0 else 0.0,
    )


def daily_change(
    holdings: Iterable[Holding],
    quotes: Optional[Mapping[str, Quote]] = None,
) -> DailyChange:
    """Change since the previous close over holdings that have a quote."""
    quotes = quotes or {}
    change = ZERO
    previous_value = ZERO
    for holding in holdings:
        quote = quotes.get(holding.symbol)
        if quote is None:
            continue
        change += holding.shares * quote.change
        previous_value += holding.shares * quote.previous_close
    percent = float(change / previous_value * 100) if previous_value > 0 else 0.0
    return DailyChange(change=change, change_percent=percent)


def top_movers(
    holdings: Sequence[Holding],
    quotes: Optional[Mapping[str, Quote]] = None,
    limit: int = 5,
) -> tuple[list[Holding], list[Holding]]:
    """
    Best and worst performing holdings of the session.

    Returns:
        ``(gainers, losers)``: up to ``limit`` holdings each, biggest move
        first. Holdings without a quote or a move are in neither list.
    """
    quotes = quotes or {}

    def move(holding: Holding) -> float:
        quote = quotes.get(holding.symbol)
        return quote.change_percent if quote is not None else 0.0

    ranked = sorted(holdings, key=move, reverse=True)
    gainers = [h for h in ranked if move(h) > 0][:limit]
    losers = [h for h in reversed(ranked) if move(h) < 0][:limit]
    return gainers, losers


def _lots(queue: LotQueue) -> list[TradeLot]:
    return [
        TradeLot(
            shares=lot.remaining,
            price=lot.buy.price,
            trade_date=lot.buy.trade_date,
            commission=lot.buy.commission,
            exchange_rate=lot.buy.exchange_rate,
        )
        for lot in queue
        if lot.remaining > 0
    ]


def _summarise(holding: Holding, lots: list[TradeLot], default_rate: Decimal) -> Holding:
    return holding.model_copy(
        update={
            "lots": lots,
            "shares": sum((lot.shares for lot in lots), ZERO),
            "avg_cost": average_cost(lots),
            "avg_exchange_rate": average_exchange_rate(lots, default_rate),
        }
    )


def rebuild_holding(
    symbol: str,
    transactions: Iterable[Transaction],
    params: Optional[LedgerParams] = None,
    portfolio_id: str = "default",
) -> Holding:
    """
    Replay a symbol's ledger FIFO into a holding.

    Only transactions of ``symbol`` in ``portfolio_id`` are used. The lots
    that survive matching give the share count, average cost and average
    purchase rate.

    Args:
        symbol: Trading symbol
        transactions: Ledger entries, any order; other symbols are ignored
        params: Ledger defaults (the rate assumed for lots without one)
        portfolio_id: Portfolio the holding belongs to

    Returns:
        The holding, with zero shares when everything was sold
    """
    params = params or LedgerParams()
    own = [
        tx for tx in transactions if tx.symbol == symbol and tx.portfolio_id == portfolio_id
    ]
    _, queues = match_transactions(own)
    lots = _lots(queues.get(symbol, LotQueue()))
    company_name = own[-1].company_name if own else ""
    holding = Holding(symbol=symbol, company_name=company_name, portfolio_id=portfolio_id)
    return _summarise(holding, lots, params.default_exchange_rate)


def apply_transaction(
    holding: Holding,
    transaction: Transaction,
    params: Optional[LedgerParams] = None,
) -> Holding:
    """
    Apply one transaction to a holding.

    A buy appends a lot; a sell consumes lots oldest first. Averages are
    recomputed from the remaining lots.

    Args:
        holding: Current holding
        transaction: Transaction of the same symbol
        params: Ledger defaults

    Returns:
        A new Holding; the input is left unchanged

    Raises:
        InvalidInputError: If the symbol differs or a sell exceeds the
            shares held
    """
    params = params or LedgerParams()
    if transaction.symbol != holding.symbol:
        raise InvalidInputError(
            f"transaction for {transaction.symbol} applied to holding {holding.symbol}",
            field="symbol",
        )

    lots = [lot.model_copy() for lot in holding.lots]
    if transaction.is_buy:
        lots.append(
            TradeLot(
                shares=transaction.shares,
                price=transaction.price,
                trade_date=transaction.trade_date,
                commission=transaction.commission,
                exchange_rate=transaction.exchange_rate,
            )
        )
    else:
        held = sum((lot.shares for lot in lots), ZERO)
        if transaction.shares > held:
            raise InvalidInputError(
                f"cannot sell {transaction.shares} {holding.symbol}, only {held} held",
                field="shares",
            )
        unsold = transaction.shares
        while unsold > 0:
            lot = lots[0]
            taken = min(unsold, lot.shares)
            lot.shares -= taken
            unsold -= taken
            if lot.shares <= 0:
                lots.pop(0)

    updated = _summarise(holding, lots, params.default_exchange_rate)
    if transaction.company_name:
        updated = updated.model_copy(update={"company_name": transaction.company_name})
    logger.debug(f"Applied {transaction} -> {updated}")
    return updated
