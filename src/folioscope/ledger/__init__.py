"""Transaction ledger: FIFO matching, performance, holdings and statement import."""

from folioscope.ledger.fifo import LotMatch, LotQueue, OpenLot, group_by_symbol, match_transactions
from folioscope.ledger.holdings import (
    apply_transaction,
    average_cost,
    average_exchange_rate,
    daily_change,
    portfolio_value,
    position_pnl,
    rebuild_holding,
    top_movers,
)
from folioscope.ledger.performance import (
    calculate_performance,
    completed_trade,
    monthly_performance,
    open_position,
    symbol_performance,
)
from folioscope.ledger.statement import (
    ImportDiagnostic,
    StatementHolding,
    StatementImport,
    StatementRow,
    filter_duplicates,
    holdings_summary,
    parse_statement,
    to_transactions,
    transaction_key,
    validate_statement,
)

__all__ = [
    # FIFO
    "OpenLot",
    "LotMatch",
    "LotQueue",
    "group_by_symbol",
    "match_transactions",
    # Performance
    "calculate_performance",
    "completed_trade",
    "open_position",
    "monthly_performance",
    "symbol_performance",
    # Holdings
    "average_cost",
    "average_exchange_rate",
    "position_pnl",
    "portfolio_value",
    "daily_change",
    "top_movers",
    "rebuild_holding",
    "apply_transaction",
    # Statements
    "StatementRow",
    "StatementHolding",
    "StatementImport",
    "ImportDiagnostic",
    "parse_statement",
    "validate_statement",
    "transaction_key",
    "filter_duplicates",
    "holdings_summary",
    "to_transactions",
]
