"""Exchange-rate attribution of realized and unrealized P&L."""

from folioscope.currency.pnl import (
    currency_contribution,
    holding_currency_pnl,
    portfolio_currency_pnl,
    realized_currency_pnl,
    realized_currency_summary,
)

__all__ = [
    "holding_currency_pnl",
    "portfolio_currency_pnl",
    "realized_currency_pnl",
    "realized_currency_summary",
    "currency_contribution",
]
