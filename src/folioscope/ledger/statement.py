"""Broker monthly statement import.

A statement is a CSV export whose trade table starts at a header row::

    Symbol & Name,Trade Date,Settlement Date,Buy/Sell,Quantity,Traded Price,Gross Amount,Comm/Fee/Tax,VAT,Net Amount
    NVDA NVIDIA CORPORATION,25/11/2025,26/11/2025,BUY,0.5,172.12,86.06,-0.09,-0.01,86.16

Lines before the header and section banners after it are ignored. Rows
that cannot be used are reported as diagnostics rather than raising, so a
single bad line never blocks an import.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from folioscope.core.errors import StatementError
from folioscope.models.transaction import Transaction, TransactionType

logger = logging.getLogger(__name__)

HEADER_MARKER = "Symbol & Name"
COLUMN_COUNT = 10
SECTION_PREFIXES = ('""', "Options", "Currency")
ZERO = Decimal("0")


class StatementRow(BaseModel):
    """
    One trade line of a statement.

    Costs are stored as positive amounts even though statements print them
    negative.
    """

    symbol: str = Field(..., description="Trading symbol", min_length=1)
    company_name: str = Field(default="", description="Issuer name")
    trade_date: date = Field(..., description="Trade date")
    settlement_date: date = Field(..., description="Settlement date (trade date if absent)")
    type: TransactionType = Field(..., description="BUY or SELL")
    shares: Decimal = Field(..., description="Quantity traded", gt=0)
    price: Decimal = Field(..., description="Traded price", ge=0)
    gross_amount: Decimal = Field(default=ZERO, description="Gross amount")
    commission: Decimal = Field(default=ZERO, description="Commission, fees and tax", ge=0)
    vat: Decimal = Field(default=ZERO, description="VAT", ge=0)
    net_amount: Decimal = Field(default=ZERO, description="Net amount")

    model_config = ConfigDict(frozen=True)


@dataclass(frozen=True)
class ImportDiagnostic:
    """A statement line that was skipped.

    Attributes:
        line: 1-based line number in the statement (0 for file-level problems)
        reason: Why the line was skipped
        raw: The line as it appeared
    """

    line: int
    reason: str
    raw: str = ""


@dataclass
class StatementImport:
    """Parsed rows and the diagnostics for every skipped line."""

    rows: list[StatementRow] = field(default_factory=list)
    diagnostics: list[ImportDiagnostic] = field(default_factory=list)


@dataclass
class StatementHolding:
    """Net position of one symbol after replaying a statement."""

    symbol: str
    company_name: str
    shares: Decimal
    total_cost: Decimal

    @property
    def avg_cost(self) -> Decimal:
        return self.total_cost / self.shares if self.shares > 0 else ZERO


def _number(raw: str) -> Decimal:
    """Parse an amount, treating blanks and garbage as zero."""
    try:
        value = Decimal(raw.replace(",", ""))
    except InvalidOperation:
        return ZERO
    return value if value.is_finite() else ZERO


def _date(raw: str) -> Optional[date]:
    """Parse a DD/MM/YYYY date, None when malformed or out of range."""
    parts = raw.strip().split("/")
    if len(parts) != 3:
        return None
    try:
        day, month, year = (int(part) for part in parts)
    except ValueError:
        return None
    if not 1900 <= year <= 2100:
        return None
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _split_symbol(combined: str) -> tuple[str, str]:
    """Split ``"NVDA NVIDIA CORPORATION"`` into symbol and company name."""
    parts = combined.split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def _parse_row(fields: list[str]) -> Union[StatementRow, str]:
    """Build a row from the ten statement columns, or return the skip reason."""
    (symbol_name, trade_raw, settle_raw, side_raw, quantity_raw,
     price_raw, gross_raw, commission_raw, vat_raw, net_raw) = fields[:COLUMN_COUNT]

    if not symbol_name or not trade_raw or not side_raw or not quantity_raw:
        return "missing symbol, trade date, side or quantity"

    try:
        side = TransactionType.parse(side_raw)
    except ValueError:
        return f"invalid transaction type: {side_raw}"

    trade_date = _date(trade_raw)
    if trade_date is None:
        return f"invalid trade date: {trade_raw}"

    symbol, company_name = _split_symbol(symbol_name)
    shares = _number(quantity_raw)
    if shares <= 0:
        return f"non-positive quantity: {quantity_raw}"

    return StatementRow(
        symbol=symbol,
        company_name=company_name,
        trade_date=trade_date,
        settlement_date=_date(settle_raw) or trade_date,
        type=side,
        shares=shares,
        price=abs(_number(price_raw)),
        gross_amount=_number(gross_raw),
        commission=abs(_number(commission_raw)),
        vat=abs(_number(vat_raw)),
        net_amount=_number(net_raw),
    )


def parse_statement(content: str) -> StatementImport:
    """
    Parse a broker statement into trade rows.

    Args:
        content: Full CSV text of the statement

    Returns:
        StatementImport with the usable rows in file order and a diagnostic
        for each data line that was skipped
    """
    result = StatementImport()
    lines = content.splitlines()

    header = next((i for i, line in enumerate(lines) if HEADER_MARKER in line), None)
    if header is None:
        result.diagnostics.append(ImportDiagnostic(line=0, reason="statement header not found"))
        logger.debug("Statement header not found")
        return result

    for index in range(header + 1, len(lines)):
        line = lines[index].strip()
        if not line or line.startswith(SECTION_PREFIXES):
            continue

        fields = [value.strip() for value in next(csv.reader([line]))]
        if len(fields) < COLUMN_COUNT:
            reason = f"expected {COLUMN_COUNT} columns, found {len(fields)}"
            parsed: Union[StatementRow, str] = reason
        else:
            parsed = _parse_row(fields)

        if isinstance(parsed, str):
            result.diagnostics.append(ImportDiagnostic(line=index + 1, reason=parsed, raw=line))
            logger.debug(f"Skipping statement line {index + 1}: {parsed}")
        else:
            result.rows.append(parsed)
    return result


def validate_statement(content: str) -> StatementImport:
    """
    Parse a statement and require at least one usable row.

    Raises:
        StatementError: If the content is empty, has no header, or yields no
            transactions
    """
    if not content or not content.strip():
        raise StatementError("CSV content is empty")
    if HEADER_MARKER not in content:
        raise StatementError(f'CSV header not found. Expected "{HEADER_MARKER}" column.')
    parsed = parse_statement(content)
    if not parsed.rows:
        raise StatementError("No valid transactions found in CSV")
    return parsed


def _plain(value: Decimal) -> str:
    return format(value.normalize(), "f")


def transaction_key(record: Union[StatementRow, Transaction]) -> str:
    """Duplicate-detection key ``symbol|date|type|shares|price``."""
    return "|".join(
        [
            record.symbol,
            record.trade_date.isoformat(),
            record.type.value,
            _plain(record.shares),
            _plain(record.price),
        ]
    )


def filter_duplicates(
    rows: Iterable[StatementRow],
    existing: Iterable[Union[StatementRow, Transaction]] = (),
) -> tuple[list[StatementRow], list[StatementRow]]:
    """
    Split rows into new ones and ones already recorded.

    A row repeated within the same import counts as a duplicate after its
    first occurrence.

    Returns:
        ``(unique, duplicates)`` in input order
    """
    seen = {transaction_key(record) for record in existing}
    unique: list[StatementRow] = []
    duplicates: list[StatementRow] = []
    for row in rows:
        key = transaction_key(row)
        if key in seen:
            duplicates.append(row)
        else:
            unique.append(row)
            seen.add(key)
    return unique, duplicates


def holdings_summary(rows: Iterable[StatementRow]) -> dict[str, StatementHolding]:
    """
    Net positions implied by a statement.

    Buys add their net amount to the cost; sells reduce the cost at the
    running average. Same-day buys are applied before sells. Symbols
    that end flat or short are dropped.
    """
    summary: dict[str, StatementHolding] = {}
    for row in sorted(rows, key=lambda r: (r.trade_date, r.type is not TransactionType.BUY)):
        current = summary.setdefault(
            row.symbol, StatementHolding(row.symbol, row.company_name, ZERO, ZERO)
        )
        if row.type is TransactionType.BUY:
            current.shares += row.shares
            current.total_cost += row.net_amount
        else:
            avg = current.avg_cost
            current.shares -= row.shares
            current.total_cost = current.shares * avg
        current.company_name = row.company_name
    return {symbol: h for symbol, h in summary.items() if h.shares > 0}


def to_transactions(
    rows: Iterable[StatementRow],
    portfolio_id: str = "default",
    exchange_rate: Optional[Decimal] = None,
) -> list[Transaction]:
    """Convert statement rows to ledger transactions."""
    return [
        Transaction(
            portfolio_id=portfolio_id,
            symbol=row.symbol,
            company_name=row.company_name,
            type=row.type,
            shares=row.shares,
            price=row.price,
            trade_date=row.trade_date,
            settlement_date=row.settlement_date,
            gross_amount=abs(row.gross_amount),
            commission=row.commission,
            vat=row.vat,
            net_amount=row.net_amount,
            exchange_rate=exchange_rate,
        )
        for row in rows
    ]
