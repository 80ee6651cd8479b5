"""Tests for holding maintenance and valuation."""

from datetime import date
from decimal import Decimal

import pytest

from folioscope.core.errors import InvalidInputError
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
from folioscope.models import Holding, LedgerParams, Quote, TradeLot


def _lot(shares: str, price: str, rate: str | None = None) -> TradeLot:
    return TradeLot(
        shares=Decimal(shares),
        price=Decimal(price),
        trade_date=date(2024, 1, 1),
        exchange_rate=Decimal(rate) if rate else None,
    )


class TestAverages:
    """Tests for lot averaging."""

    def test_average_cost(self) -> None:
        """Test the average is weighted by shares."""
        lots = [_lot("10", "100"), _lot("30", "120")]
        assert average_cost(lots) == Decimal("115")

    def test_average_cost_no_shares(self) -> None:
        """Test lots without shares average to zero."""
        assert average_cost([]) == Decimal("0")

    def test_average_exchange_rate_weighted_by_cost(self) -> None:
        """Test the rate average is weighted by lot cost."""
        lots = [_lot("10", "100", "33"), _lot("10", "100", "35")]
        assert average_exchange_rate(lots, Decimal("30")) == Decimal("34")

    def test_average_exchange_rate_uses_default(self) -> None:
        """Test lots without a rate count at the default."""
        lots = [_lot("10", "100", "33"), _lot("10", "100")]
        assert average_exchange_rate(lots, Decimal("35")) == Decimal("34")

    def test_average_exchange_rate_no_cost(self) -> None:
        """Test no cost returns the default rate."""
        assert average_exchange_rate([], Decimal("35")) == Decimal("35")


class TestValuation:
    """Tests for position and portfolio valuation."""

    @pytest.fixture
    def holdings(self) -> list[Holding]:
        """Two holdings with different cost bases."""
        return [
            Holding(symbol="AAPL", shares=Decimal("10"), avg_cost=Decimal("100")),
            Holding(symbol="MSFT", shares=Decimal("5"), avg_cost=Decimal("200")),
        ]

    def test_position_pnl(self) -> None:
        """Test unrealized P&L and percent of cost."""
        result = position_pnl(Decimal("10"), Decimal("100"), Decimal("110"))
        assert result.pnl == Decimal("100")
        assert result.pnl_percent == pytest.approx(10.0)

    def test_position_pnl_zero_cost(self) -> None:
        """Test zero cost gives a zero percent."""
        result = position_pnl(Decimal("10"), Decimal("0"), Decimal("5"))
        assert result.pnl == Decimal("50")
        assert result.pnl_percent == 0.0

    def test_portfolio_value_with_quotes(self, holdings: list[Holding]) -> None:
        """Test quoted holdings are valued at the quote, others at cost."""
        quotes = {"AAPL": Quote(symbol="AAPL", current_price=Decimal("120"))}

        value = portfolio_value(holdings, quotes)

        assert value.total_cost == Decimal("2000")
        assert value.total_value == Decimal("2200")
        assert value.total_pnl == Decimal("200")
        assert value.total_pnl_percent == pytest.approx(10.0)

    def test_portfolio_value_empty(self) -> None:
        """Test an empty portfolio is worth nothing."""
        value = portfolio_value([])
        assert value.total_value == Decimal("0")
        assert value.total_pnl_percent == 0.0

    def test_daily_change(self, holdings: list[Holding]) -> None:
        """Test the change uses quoted holdings only."""
        quotes = {
            "AAPL": Quote(
                symbol="AAPL",
                current_price=Decimal("105"),
                change=Decimal("5"),
                previous_close=Decimal("100"),
            )
        }

        change = daily_change(holdings, quotes)

        assert change.change == Decimal("50")
        assert change.change_percent == pytest.approx(5.0)

    def test_top_movers(self, holdings: list[Holding]) -> None:
        """Test gainers and losers are split and ranked by move."""
        extra = Holding(symbol="NVDA", shares=Decimal("1"), avg_cost=Decimal("50"))
        quotes = {
            "AAPL": Quote(symbol="AAPL", current_price=Decimal("1"), change_percent=2.0),
            "MSFT": Quote(symbol="MSFT", current_price=Decimal("1"), change_percent=-3.0),
            "NVDA": Quote(symbol="NVDA", current_price=Decimal("1"), change_percent=4.0),
        }

        gainers, losers = top_movers([*holdings, extra], quotes, limit=1)

        assert [h.symbol for h in gainers] == ["NVDA"]
        assert [h.symbol for h in losers] == ["MSFT"]


class TestRebuildHolding:
    """Tests for replaying the ledger into a holding."""

    def test_rebuild_after_partial_sell(self, buy, sell) -> None:
        """Test FIFO leaves the newer lot and its averages."""
        txs = [
            buy("AAPL", "10", "100", date(2024, 1, 1), "33"),
            buy("AAPL", "10", "120", date(2024, 1, 5), "35"),
            sell("AAPL", "10", "130", date(2024, 2, 1), "36", company_name="APPLE INC"),
            buy("MSFT", "3", "300", date(2024, 1, 1)),
        ]

        holding = rebuild_holding("AAPL", txs)

        assert holding.shares == Decimal("10")
        assert holding.avg_cost == Decimal("120")
        assert holding.avg_exchange_rate == Decimal("35")
        assert holding.company_name == "APPLE INC"
        assert len(holding.lots) == 1

    def test_rebuild_rate_average(self, buy) -> None:
        """Test equal-cost lots at 33 and 35 average to 34."""
        txs = [
            buy("AAPL", "10", "100", date(2024, 1, 1), "33"),
            buy("AAPL", "10", "100", date(2024, 1, 2), "35"),
        ]

        holding = rebuild_holding("AAPL", txs)

        assert holding.avg_exchange_rate == Decimal("34")
        assert holding.cost_basis == Decimal("2000")

    def test_rebuild_fully_sold(self, buy, sell) -> None:
        """Test a closed position has no shares and the default rate."""
        params = LedgerParams(default_exchange_rate=Decimal("32"))
        txs = [
            buy("AAPL", "5", "100", date(2024, 1, 1), "33"),
            sell("AAPL", "5", "110", date(2024, 1, 2)),
        ]

        holding = rebuild_holding("AAPL", txs, params)

        assert holding.shares == Decimal("0")
        assert holding.lots == []
        assert holding.avg_exchange_rate == Decimal("32")

    def test_rebuild_filters_portfolio(self, buy) -> None:
        """Test transactions of other portfolios are ignored."""
        txs = [
            buy("AAPL", "5", "100", date(2024, 1, 1), portfolio_id="ira"),
            buy("AAPL", "2", "100", date(2024, 1, 1)),
        ]

        assert rebuild_holding("AAPL", txs).shares == Decimal("2")
        assert rebuild_holding("AAPL", txs, portfolio_id="ira").shares == Decimal("5")


class TestApplyTransaction:
    """Tests for applying single transactions."""

    @pytest.fixture
    def holding(self, buy) -> Holding:
        """A holding with two lots."""
        return rebuild_holding(
            "AAPL",
            [
                buy("AAPL", "10", "100", date(2024, 1, 1)),
                buy("AAPL", "10", "120", date(2024, 1, 2)),
            ],
        )

    def test_apply_buy(self, holding: Holding, buy) -> None:
        """Test a buy appends a lot and updates the average."""
        updated = apply_transaction(holding, buy("AAPL", "20", "140", date(2024, 1, 3)))

        assert updated.shares == Decimal("40")
        assert updated.avg_cost == Decimal("125")
        assert len(updated.lots) == 3
        assert holding.shares == Decimal("20")

    def test_apply_sell_consumes_oldest(self, holding: Holding, sell) -> None:
        """Test a sell consumes the oldest lot first."""
        updated = apply_transaction(holding, sell("AAPL", "15", "130", date(2024, 1, 3)))

        assert updated.shares == Decimal("5")
        assert updated.avg_cost == Decimal("120")
        assert holding.lots[0].shares == Decimal("10")

    def test_apply_updates_company_name(self, holding: Holding, buy) -> None:
        """Test a named transaction sets the company name."""
        updated = apply_transaction(
            holding, buy("AAPL", "1", "100", date(2024, 1, 3), company_name="APPLE INC")
        )
        assert updated.company_name == "APPLE INC"

    def test_apply_oversell_raises(self, holding: Holding, sell) -> None:
        """Test selling more than held raises."""
        with pytest.raises(InvalidInputError) as exc_info:
            apply_transaction(holding, sell("AAPL", "25", "130", date(2024, 1, 3)))
        assert exc_info.value.field == "shares"

    def test_apply_other_symbol_raises(self, holding: Holding, buy) -> None:
        """Test a transaction of another symbol raises."""
        with pytest.raises(InvalidInputError) as exc_info:
            apply_transaction(holding, buy("MSFT", "1", "300", date(2024, 1, 3)))
        assert exc_info.value.field == "symbol"
