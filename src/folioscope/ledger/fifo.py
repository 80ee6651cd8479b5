"""FIFO lot matching shared by the performance ledger and the currency decomposer."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Iterator

from folioscope.models.transaction import Transaction

logger = logging.getLogger(__name__)


@dataclass
class OpenLot:
    """A buy transaction and the shares of it not yet sold."""

    buy: Transaction
    remaining: Decimal


@dataclass(frozen=True)
class LotMatch:
    """Shares of one buy lot closed by one sell.

    Attributes:
        buy: Buy transaction the shares came from
        sell: Sell transaction that closed them
        shares: Matched share count
    """

    buy: Transaction
    sell: Transaction
    shares: Decimal


class LotQueue:
    """Buy lots of one symbol, oldest first.

    A queue is created and consumed within a single ledger pass; nothing
    outside that pass holds a reference to its lots.
    """

    def __init__(self) -> None:
        self._lots: deque[OpenLot] = deque()

    def __len__(self) -> int:
        return len(self._lots)

    def __iter__(self) -> Iterator[OpenLot]:
        return iter(self._lots)

    @property
    def total_shares(self) -> Decimal:
        """Shares still open across all lots."""
        return sum((lot.remaining for lot in self._lots), Decimal("0"))

    def push(self, buy: Transaction) -> None:
        """Append a buy as a new lot."""
        self._lots.append(OpenLot(buy=buy, remaining=buy.shares))

    def consume(self, sell: Transaction) -> tuple[list[LotMatch], Decimal]:
        """Close lots from the front of the queue against a sell.

        Each step matches ``min(unsold, lot.remaining)`` shares and drops the
        lot once it is exhausted.

        Args:
            sell: Sell transaction

        Returns:
            The matches in lot order, and the sell shares left unmatched
            when the queue ran dry
        """
        matches: list[LotMatch] = []
        unsold = sell.shares
        while unsold > 0 and self._lots:
            lot = self._lots[0]
            shares = min(unsold, lot.remaining)
            matches.append(LotMatch(buy=lot.buy, sell=sell, shares=shares))
            lot.remaining -= shares
            unsold -= shares
            if lot.remaining <= 0:
                self._lots.popleft()
        return matches, unsold


def group_by_symbol(transactions: Iterable[Transaction]) -> dict[str, list[Transaction]]:
    """Group transactions by symbol, each group in trade-date order.

    Symbols keep the order of their first appearance. On the same day buys
    come before sells; otherwise input order is kept.
    """
    grouped: dict[str, list[Transaction]] = {}
    for tx in transactions:
        grouped.setdefault(tx.symbol, []).append(tx)
    return {
        symbol: sorted(txs, key=lambda tx: (tx.trade_date, not tx.is_buy))
        for symbol, txs in grouped.items()
    }


def match_transactions(
    transactions: Iterable[Transaction],
) -> tuple[list[LotMatch], dict[str, LotQueue]]:
    """
    Replay a ledger and match every sell against earlier buys, FIFO.

    Buys enter their symbol's queue as they are reached in date order, so a
    sell only closes lots bought on or before its trade date, including
    buys listed after it on the same day. Sell shares with no lot left to
    close are logged and dropped.

    Args:
        transactions: Ledger entries in any order

    Returns:
        All matches (grouped by symbol, chronological within a symbol) and
        the queue of still-open lots for every symbol
    """
    matches: list[LotMatch] = []
    queues: dict[str, LotQueue] = {}
    for symbol, txs in group_by_symbol(transactions).items():
        queue = queues.setdefault(symbol, LotQueue())
        for tx in txs:
            if tx.is_buy:
                queue.push(tx)
                continue
            closed, unsold = queue.consume(tx)
            matches.extend(closed)
            if unsold > 0:
                logger.debug(f"Sell {tx.id} of {symbol} has {unsold} shares with no open lot")
    return matches, queues
