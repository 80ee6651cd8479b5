"""Split P&L into a stock-price part and an exchange-rate part.

Prices are in the base (quote) currency of the security and P&L is reported
in the investor's local currency. For a position bought at ``avg_cost`` when
the rate was ``avg_rate`` and now worth ``price`` at ``rate``::

    stock_pnl_local    = shares * (price - avg_cost) * rate
    currency_pnl_local = shares * avg_cost * (rate - avg_rate)
    total_pnl_local    = shares * price * rate - shares * avg_cost * avg_rate

and the two parts always add up to the total.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Union

from folioscope.core.errors import InvalidInputError
from folioscope.ledger.fifo import match_transactions
from folioscope.models.config import LedgerParams
from folioscope.models.currency import (
    CurrencyContribution,
    HoldingCurrencyPnL,
    PortfolioCurrencyPnL,
    RealizedCurrencyPnL,
    RealizedCurrencySummary,
)
from folioscope.models.holding import Holding
from folioscope.models.quote import ExchangeRate, Quote
from folioscope.models.transaction import Transaction

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

RateLike = Union[Decimal, ExchangeRate]


def _rate(rate: RateLike) -> Decimal:
    value = rate.rate if isinstance(rate, ExchangeRate) else Decimal(rate)
    if value <= 0:
        raise InvalidInputError(f"exchange rate must be positive, got {value}", field="rate")
    return value


def _percent(part: Decimal, whole: Decimal) -> float:
    return float(part / whole * 100) if whole > 0 else 0.0


def holding_currency_pnl(
    holding: Holding,
    current_price: Decimal,
    current_rate: RateLike,
) -> HoldingCurrencyPnL:
    """
    Decompose the unrealized P&L of one holding.

    Args:
        holding: Holding with its average cost and average purchase rate
        current_price: Latest price in the base currency
        current_rate: Latest local units per base unit

    Returns:
        HoldingCurrencyPnL; percent fields are 0 when the cost is 0

    Raises:
        InvalidInputError: If the rate is not positive
    """
    rate = _rate(current_rate)
    avg_rate = holding.avg_exchange_rate

    cost_base = holding.shares * holding.avg_cost
    cost_local = cost_base * avg_rate
    value_base = holding.shares * current_price
    value_local = value_base * rate

    stock_pnl_base = value_base - cost_base
    currency_pnl_local = cost_base * (rate - avg_rate)
    total_pnl_local = value_local - cost_local

    return HoldingCurrencyPnL(
        symbol=holding.symbol,
        company_name=holding.company_name,
        shares=holding.shares,
        cost_base=cost_base,
        cost_local=cost_local,
        avg_purchase_rate=avg_rate,
        current_rate=rate,
        current_price=current_price,
        value_base=value_base,
        value_local=value_local,
        stock_pnl_base=stock_pnl_base,
        stock_pnl_local=stock_pnl_base * rate,
        stock_pnl_percent=_percent(stock_pnl_base, cost_base),
        currency_pnl_local=currency_pnl_local,
        currency_pnl_percent=_percent(currency_pnl_local, cost_local),
        total_pnl_local=total_pnl_local,
        total_pnl_percent=_percent(total_pnl_local, cost_local),
    )


def portfolio_currency_pnl(
    holdings: Iterable[Holding],
    quotes: Optional[Mapping[str, Quote]],
    current_rate: RateLike,
) -> PortfolioCurrencyPnL:
    """
    Decompose every open holding and total the results.

    Holdings without shares are skipped and holdings without a quote are
    priced at their average cost. Today's change uses the quote's change
    since the previous close.

    Args:
        holdings: Holdings to analyse
        quotes: Latest quotes by symbol
        current_rate: Latest local units per base unit

    Returns:
        PortfolioCurrencyPnL with one entry per open holding
    """
    rate = _rate(current_rate)
    quotes = quotes or {}

    analyses: list[HoldingCurrencyPnL] = []
    today_base = ZERO
    for holding in holdings:
        if holding.shares <= 0:
            continue
        quote = quotes.get(holding.symbol)
        price = quote.current_price if quote is not None and quote.current_price else holding.avg_cost
        analyses.append(holding_currency_pnl(holding, price, rate))
        if quote is not None:
            today_base += quote.change * holding.shares

    def total(attr: str) -> Decimal:
        return sum((getattr(a, attr) for a in analyses), ZERO)

    cost_base = total("cost_base")
    cost_local = total("cost_local")
    value_local = total("value_local")
    stock_pnl_base = total("stock_pnl_base")
    currency_pnl_local = total("currency_pnl_local")
    pnl_local = value_local - cost_local

    return PortfolioCurrencyPnL(
        total_cost_base=cost_base,
        total_cost_local=cost_local,
        total_value_base=total("value_base"),
        total_value_local=value_local,
        total_stock_pnl_base=stock_pnl_base,
        total_stock_pnl_local=total("stock_pnl_local"),
        total_stock_pnl_percent=_percent(stock_pnl_base, cost_base),
        total_currency_pnl_local=currency_pnl_local,
        total_currency_pnl_percent=_percent(currency_pnl_local, cost_local),
        total_pnl_local=pnl_local,
        total_pnl_percent=_percent(pnl_local, cost_local),
        today_change_base=today_base,
        today_change_local=today_base * rate,
        current_rate=rate,
        holdings=analyses,
    )


def realized_currency_pnl(
    transactions: Iterable[Transaction],
    params: Optional[LedgerParams] = None,
) -> list[RealizedCurrencyPnL]:
    """
    Decompose every FIFO-matched sale using the rates recorded on the trades.

    The stock part is converted at the sell rate and the currency part is
    the buy cost revalued from the buy rate to the sell rate. Transactions
    without a rate use ``params.default_exchange_rate``.

    Args:
        transactions: Ledger entries in any order
        params: Ledger defaults

    Returns:
        One entry per (buy lot, sell) match, grouped by symbol
    """
    params = params or LedgerParams()
    matches, _ = match_transactions(transactions)

    realized = []
    for match in matches:
        buy, sell = match.buy, match.sell
        buy_rate = buy.exchange_rate or params.default_exchange_rate
        sell_rate = sell.exchange_rate or params.default_exchange_rate

        stock_pnl_base = (sell.price - buy.price) * match.shares
        stock_pnl_local = stock_pnl_base * sell_rate
        currency_pnl_local = buy.price * match.shares * (sell_rate - buy_rate)

        realized.append(
            RealizedCurrencyPnL(
                trade_id=f"{sell.id}-{buy.trade_date.isoformat()}",
                symbol=sell.symbol,
                sell_date=sell.trade_date,
                shares=match.shares,
                buy_price=buy.price,
                sell_price=sell.price,
                buy_rate=buy_rate,
                sell_rate=sell_rate,
                stock_pnl_base=stock_pnl_base,
                stock_pnl_local=stock_pnl_local,
                currency_pnl_local=currency_pnl_local,
                total_pnl_local=stock_pnl_local + currency_pnl_local,
            )
        )
    logger.debug(f"Decomposed {len(realized)} realized matches")
    return realized


def realized_currency_summary(realized: list[RealizedCurrencyPnL]) -> RealizedCurrencySummary:
    """Totals plus the trades with the best and worst currency timing."""
    if not realized:
        return RealizedCurrencySummary(
            total_stock_pnl_base=ZERO,
            total_stock_pnl_local=ZERO,
            total_currency_pnl_local=ZERO,
            total_pnl_local=ZERO,
            trade_count=0,
        )

    ranked = sorted(realized, key=lambda r: r.currency_pnl_local, reverse=True)
    return RealizedCurrencySummary(
        total_stock_pnl_base=sum((r.stock_pnl_base for r in realized), ZERO),
        total_stock_pnl_local=sum((r.stock_pnl_local for r in realized), ZERO),
        total_currency_pnl_local=sum((r.currency_pnl_local for r in realized), ZERO),
        total_pnl_local=sum((r.total_pnl_local for r in realized), ZERO),
        trade_count=len(realized),
        best_currency_trade=ranked[0],
        worst_currency_trade=ranked[-1],
    )


def currency_contribution(stock_pnl_local: Decimal, currency_pnl_local: Decimal) -> CurrencyContribution:
    """Share of absolute P&L from price moves and from the exchange rate."""
    stock = abs(stock_pnl_local)
    currency = abs(currency_pnl_local)
    total = stock + currency
    if total == 0:
        return CurrencyContribution(stock_percent=0.0, currency_percent=0.0)
    return CurrencyContribution(
        stock_percent=float(stock / total * 100),
        currency_percent=float(currency / total * 100),
    )
