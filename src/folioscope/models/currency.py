"""Currency P&L decomposition result types.

"Base" amounts are in the quote currency of the security (USD for US
equities); "local" amounts are in the investor's home currency.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class HoldingCurrencyPnL:
    """Price-driven versus rate-driven P&L of one holding.

    Attributes:
        cost_base: shares * avg_cost
        cost_local: cost_base * avg_purchase_rate
        value_base: shares * current_price
        value_local: value_base * current_rate
        stock_pnl_base: value_base - cost_base
        stock_pnl_local: stock_pnl_base * current_rate
        currency_pnl_local: cost_base * (current_rate - avg_purchase_rate)
        total_pnl_local: value_local - cost_local
    """

    symbol: str
    company_name: str
    shares: Decimal
    cost_base: Decimal
    cost_local: Decimal
    avg_purchase_rate: Decimal
    current_rate: Decimal
    current_price: Decimal
    value_base: Decimal
    value_local: Decimal
    stock_pnl_base: Decimal
    stock_pnl_local: Decimal
    stock_pnl_percent: float
    currency_pnl_local: Decimal
    currency_pnl_percent: float
    total_pnl_local: Decimal
    total_pnl_percent: float


@dataclass
class PortfolioCurrencyPnL:
    """Portfolio totals of the holding decomposition."""

    total_cost_base: Decimal
    total_cost_local: Decimal
    total_value_base: Decimal
    total_value_local: Decimal
    total_stock_pnl_base: Decimal
    total_stock_pnl_local: Decimal
    total_stock_pnl_percent: float
    total_currency_pnl_local: Decimal
    total_currency_pnl_percent: float
    total_pnl_local: Decimal
    total_pnl_percent: float
    today_change_base: Decimal
    today_change_local: Decimal
    current_rate: Decimal
    holdings: list[HoldingCurrencyPnL] = field(default_factory=list)


@dataclass(frozen=True)
class RealizedCurrencyPnL:
    """Decomposition of one FIFO-matched sale using the rates at each trade."""

    trade_id: str
    symbol: str
    sell_date: date
    shares: Decimal
    buy_price: Decimal
    sell_price: Decimal
    buy_rate: Decimal
    sell_rate: Decimal
    stock_pnl_base: Decimal
    stock_pnl_local: Decimal
    currency_pnl_local: Decimal
    total_pnl_local: Decimal


@dataclass(frozen=True)
class RealizedCurrencySummary:
    """Totals over realized trades with the best and worst rate timing."""

    total_stock_pnl_base: Decimal
    total_stock_pnl_local: Decimal
    total_currency_pnl_local: Decimal
    total_pnl_local: Decimal
    trade_count: int
    best_currency_trade: Optional[RealizedCurrencyPnL] = None
    worst_currency_trade: Optional[RealizedCurrencyPnL] = None


@dataclass(frozen=True)
class CurrencyContribution:
    """Share of absolute P&L explained by price and by exchange rate."""

    stock_percent: float
    currency_percent: float
