"""Tests for broker statement import."""

from datetime import date
from decimal import Decimal

import pytest

from folioscope.core.errors import StatementError
from folioscope.ledger.statement import (
    filter_duplicates,
    holdings_summary,
    parse_statement,
    to_transactions,
    transaction_key,
    validate_statement,
)
from folioscope.models import TransactionType

HEADER = (
    "Symbol & Name,Trade Date,Settlement Date,Buy/Sell,Quantity,Traded Price,"
    "Gross Amount,Comm/Fee/Tax,VAT,Net Amount"
)

STATEMENT = "\n".join(
    [
        "Monthly Statement",
        "Account,12345678",
        HEADER,
        "NVDA NVIDIA CORPORATION,25/11/2025,26/11/2025,BUY,0.5,172.12,86.06,-0.09,-0.01,86.16",
        "AAPL APPLE INC,01/10/2025,03/10/2025,BUY,2,190.00,380.00,-0.37,-0.03,380.40",
        "AAPL APPLE INC,15/10/2025,17/10/2025,SELL,1,200.00,200.00,-0.20,-0.01,199.79",
        "MSFT MICROSOFT CORP,31/02/2025,03/03/2025,BUY,1,400.00,400.00,-0.40,-0.03,400.43",
        "TSLA TESLA INC,01/10/2025,03/10/2025,HOLD,1,250.00,250.00,0,0,250.00",
        "",
        "Currency,USD",
        '"BRK ""B"" HOLDINGS",02/10/2025,,buy,"1,000",1.50,"1,500.00",0,0,"1,500.00"',
        "GOOG ALPHABET,01/10/2025",
        ",,,,,,,,,",
    ]
)


class TestParseStatement:
    """Tests for parse_statement."""

    @pytest.fixture
    def parsed(self):
        """The sample statement parsed."""
        return parse_statement(STATEMENT)

    def test_rows_in_file_order(self, parsed) -> None:
        """Test usable rows are returned in file order."""
        assert [row.symbol for row in parsed.rows] == ["NVDA", "AAPL", "AAPL", "BRK"]

    def test_row_fields(self, parsed) -> None:
        """Test symbol split, dates and positive costs."""
        nvda = parsed.rows[0]

        assert nvda.company_name == "NVIDIA CORPORATION"
        assert nvda.trade_date == date(2025, 11, 25)
        assert nvda.settlement_date == date(2025, 11, 26)
        assert nvda.type is TransactionType.BUY
        assert nvda.shares == Decimal("0.5")
        assert nvda.price == Decimal("172.12")
        assert nvda.commission == Decimal("0.09")
        assert nvda.vat == Decimal("0.01")
        assert nvda.net_amount == Decimal("86.16")

    def test_quoted_fields(self, parsed) -> None:
        """Test quoted names, thousands separators and lower-case sides."""
        brk = parsed.rows[3]

        assert brk.company_name == '"B" HOLDINGS'
        assert brk.type is TransactionType.BUY
        assert brk.shares == Decimal("1000")
        assert brk.gross_amount == Decimal("1500.00")

    def test_missing_settlement_uses_trade_date(self, parsed) -> None:
        """Test a blank settlement date falls back to the trade date."""
        brk = parsed.rows[3]
        assert brk.settlement_date == brk.trade_date == date(2025, 10, 2)

    def test_diagnostics(self, parsed) -> None:
        """Test skipped lines are reported with their 1-based line number."""
        reasons = {d.line: d.reason for d in parsed.diagnostics}

        assert reasons == {
            7: "invalid trade date: 31/02/2025",
            8: "invalid transaction type: HOLD",
            12: "expected 10 columns, found 2",
            13: "missing symbol, trade date, side or quantity",
        }

    def test_raw_line_kept(self, parsed) -> None:
        """Test diagnostics carry the offending line."""
        assert parsed.diagnostics[0].raw.startswith("MSFT MICROSOFT CORP")

    def test_non_positive_quantity(self) -> None:
        """Test zero quantity is skipped."""
        content = "\n".join(
            [HEADER, "AAPL APPLE INC,01/10/2025,03/10/2025,BUY,0,190,0,0,0,0"]
        )

        parsed = parse_statement(content)

        assert parsed.rows == []
        assert parsed.diagnostics[0].reason == "non-positive quantity: 0"

    def test_out_of_range_year(self) -> None:
        """Test years outside 1900-2100 are rejected."""
        content = "\n".join(
            [HEADER, "AAPL APPLE INC,01/10/2525,03/10/2525,BUY,1,190,190,0,0,190"]
        )

        parsed = parse_statement(content)

        assert parsed.diagnostics[0].reason == "invalid trade date: 01/10/2525"

    def test_missing_header(self) -> None:
        """Test a statement without a header yields a file-level diagnostic."""
        parsed = parse_statement("just,some,text")

        assert parsed.rows == []
        assert parsed.diagnostics[0].line == 0
        assert parsed.diagnostics[0].reason == "statement header not found"


class TestValidateStatement:
    """Tests for validate_statement."""

    def test_valid(self) -> None:
        """Test a valid statement parses."""
        assert len(validate_statement(STATEMENT).rows) == 4

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ("", "CSV content is empty"),
            ("   \n  ", "CSV content is empty"),
            ("a,b,c\n1,2,3", 'CSV header not found. Expected "Symbol & Name" column.'),
            (HEADER + "\n,,,,,,,,,", "No valid transactions found in CSV"),
        ],
    )
    def test_invalid(self, content: str, message: str) -> None:
        """Test unusable statements raise StatementError."""
        with pytest.raises(StatementError, match=message.replace(".", r"\.")):
            validate_statement(content)


class TestDuplicates:
    """Tests for duplicate detection."""

    def test_transaction_key(self) -> None:
        """Test the key normalises numbers."""
        rows = parse_statement(STATEMENT).rows

        assert transaction_key(rows[0]) == "NVDA|2025-11-25|BUY|0.5|172.12"
        assert transaction_key(rows[1]) == "AAPL|2025-10-01|BUY|2|190"

    def test_transaction_key_matches_ledger_entries(self) -> None:
        """Test a row and its converted transaction share a key."""
        row = parse_statement(STATEMENT).rows[0]
        (tx,) = to_transactions([row])

        assert transaction_key(tx) == transaction_key(row)

    def test_filter_against_existing(self) -> None:
        """Test rows already in the ledger are split off."""
        rows = parse_statement(STATEMENT).rows
        existing = to_transactions(rows[:1])

        unique, duplicates = filter_duplicates(rows, existing)

        assert [r.symbol for r in duplicates] == ["NVDA"]
        assert len(unique) == 3

    def test_filter_repeats_within_import(self) -> None:
        """Test a repeated row counts as a duplicate after its first use."""
        rows = parse_statement(STATEMENT).rows

        unique, duplicates = filter_duplicates([rows[1], rows[1]])

        assert unique == [rows[1]]
        assert duplicates == [rows[1]]


class TestConversion:
    """Tests for holdings_summary and to_transactions."""

    def test_holdings_summary(self) -> None:
        """Test net positions use the running average cost."""
        summary = holdings_summary(parse_statement(STATEMENT).rows)

        assert set(summary) == {"NVDA", "AAPL", "BRK"}
        assert summary["AAPL"].shares == Decimal("1")
        assert summary["AAPL"].total_cost == Decimal("190.20")
        assert summary["AAPL"].avg_cost == Decimal("190.20")
        assert summary["NVDA"].avg_cost == Decimal("172.32")

    def test_holdings_summary_drops_closed(self) -> None:
        """Test fully sold symbols are dropped."""
        content = "\n".join(
            [
                HEADER,
                "AAPL APPLE INC,01/10/2025,03/10/2025,BUY,1,190,190,0,0,190",
                "AAPL APPLE INC,02/10/2025,04/10/2025,SELL,1,200,200,0,0,200",
            ]
        )

        assert holdings_summary(parse_statement(content).rows) == {}

    def test_holdings_summary_same_day_buy_first(self) -> None:
        """Test a same-day buy is averaged in before a sell listed above it."""
        content = "\n".join(
            [
                HEADER,
                "AAPL APPLE INC,01/10/2025,03/10/2025,BUY,1,190,190,0,0,190",
                "AAPL APPLE INC,02/10/2025,04/10/2025,SELL,1,200,200,0,0,200",
                "AAPL APPLE INC,02/10/2025,04/10/2025,BUY,1,210,210,0,0,210",
            ]
        )

        summary = holdings_summary(parse_statement(content).rows)

        assert summary["AAPL"].shares == Decimal("1")
        assert summary["AAPL"].avg_cost == Decimal("200")

    def test_to_transactions(self) -> None:
        """Test rows convert to ledger transactions."""
        rows = parse_statement(STATEMENT).rows

        txs = to_transactions(rows, portfolio_id="ira", exchange_rate=Decimal("34.5"))

        assert len(txs) == 4
        sell = txs[2]
        assert sell.type is TransactionType.SELL
        assert sell.portfolio_id == "ira"
        assert sell.company_name == "APPLE INC"
        assert sell.exchange_rate == Decimal("34.5")
        assert sell.commission == Decimal("0.20")
        assert len({tx.id for tx in txs}) == 4
