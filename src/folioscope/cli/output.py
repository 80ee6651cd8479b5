"""Rich output formatting for CLI commands."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from folioscope.ledger.statement import StatementImport
    from folioscope.models.currency import PortfolioCurrencyPnL, RealizedCurrencySummary
    from folioscope.models.performance import PerformanceStats, PeriodPerformance
    from folioscope.models.signal import ComprehensiveInterpretation, TradingLevels
    from folioscope.models.technical import TechnicalAnalysis


def _format_money(value: Decimal | float, symbol: str = "$") -> str:
    """Format a value as currency."""
    val = float(value) if isinstance(value, Decimal) else value
    sign = "-" if val < 0 else ""
    return f"{sign}{symbol}{abs(val):,.2f}"


def _format_percent(value: float, show_sign: bool = True) -> str:
    """Format a value already expressed in percent."""
    if show_sign and value >= 0:
        return f"+{value:.2f}%"
    return f"{value:.2f}%"


def _format_ratio(value: float) -> str:
    return "∞" if value == float("inf") else f"{value:.2f}"


def _color(value: Decimal | float) -> str:
    return "green" if value >= 0 else "red"


def _colored_money(value: Decimal | float, symbol: str = "$") -> str:
    color = _color(value)
    return f"[{color}]{_format_money(value, symbol)}[/{color}]"


def _label_table() -> Table:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Label", style="dim")
    table.add_column("Value", justify="right")
    return table


def print_analysis(
    symbol: str,
    analysis: TechnicalAnalysis,
    interpretation: ComprehensiveInterpretation,
    console: Console,
) -> None:
    """Print indicator readings, levels and the recommendation."""
    signal = interpretation.overall_signal
    console.print()
    console.print(
        Panel(
            f"[bold cyan]{symbol}[/bold cyan]  "
            f"[{signal.action.style}]{signal.action.label}[/{signal.action.style}] "
            f"({signal.confidence}% confidence)",
            expand=False,
        )
    )
    console.print(interpretation.summary)
    console.print()

    table = Table(title="Indicators")
    table.add_column("Indicator", style="cyan")
    table.add_column("Value", justify="right")
    table.add_column("Signal")
    table.add_column("Interpretation")
    for reading in interpretation.indicators:
        table.add_row(reading.indicator, reading.value, reading.signal.value, reading.interpretation)
    console.print(table)

    if analysis.support_resistance:
        levels = Table(title="Support / Resistance")
        levels.add_column("Type")
        levels.add_column("Price", justify="right")
        levels.add_column("Strength")
        levels.add_column("Source", style="dim")
        for level in reversed(analysis.support_resistance):
            style = "red" if level.type.value == "resistance" else "green"
            levels.add_row(
                f"[{style}]{level.type.value}[/{style}]",
                f"{level.price:,.2f}",
                level.strength.value,
                level.source,
            )
        console.print(levels)

    for reason in signal.reasons:
        console.print(f"  [green]+[/green] {reason}")
    for risk in signal.risks:
        console.print(f"  [red]-[/red] {risk}")


def print_trading_levels(symbol: str, levels: TradingLevels, console: Console) -> None:
    """Print the ATR-based trade plan."""
    console.print(f"[bold]Trading levels: {symbol}[/bold]")
    table = _label_table()
    table.add_row("Current Price:", f"{levels.current_price:,.2f}")
    table.add_row("Nearest Resistance:", f"{levels.nearest_resistance:,.2f}")
    table.add_row("Pivot:", f"{levels.pivot:,.2f}")
    table.add_row("Nearest Support:", f"{levels.nearest_support:,.2f}")
    table.add_row("Stop Loss:", f"[red]{levels.stop_loss:,.2f}[/red]")
    table.add_row("Take Profit:", f"[green]{levels.take_profit:,.2f}[/green]")
    table.add_row("Risk/Reward:", f"{levels.risk_reward_ratio:.2f}")
    console.print(table)


def print_performance(stats: PerformanceStats, console: Console) -> None:
    """Print trade statistics, completed trades and open positions."""
    console.print()
    console.print(Panel("[bold cyan]Trading Performance[/bold cyan]", expand=False))

    table = _label_table()
    table.add_row("Completed Trades:", str(stats.total_trades))
    table.add_row(
        "Wins / Losses / Flat:",
        f"{stats.winning_trades} / {stats.losing_trades} / {stats.break_even_trades}",
    )
    table.add_row("Win Rate:", _format_percent(stats.win_rate, show_sign=False))
    table.add_row("Net Realized:", _colored_money(stats.net_realized_pnl))
    table.add_row("Net Unrealized:", _colored_money(stats.net_unrealized_pnl))
    table.add_row("Total P&L:", _colored_money(stats.total_pnl))
    table.add_row("Avg Gain / Loss:", f"{_format_money(stats.avg_gain)} / {_format_money(stats.avg_loss)}")
    table.add_row("Profit Factor:", _format_ratio(stats.profit_factor))
    table.add_row("Risk/Reward:", _format_ratio(stats.risk_reward_ratio))
    table.add_row("Expectancy:", _colored_money(stats.expectancy))
    table.add_row("Avg Holding Days:", f"{stats.avg_holding_days:.1f}")
    table.add_row(
        "Max Streak (W/L):", f"{stats.max_consecutive_wins} / {stats.max_consecutive_losses}"
    )
    console.print(table)

    if stats.completed_trades:
        trades = Table(title="Completed Trades")
        trades.add_column("Symbol", style="cyan")
        trades.add_column("Bought")
        trades.add_column("Sold")
        trades.add_column("Shares", justify="right")
        trades.add_column("Buy", justify="right")
        trades.add_column("Sell", justify="right")
        trades.add_column("P&L", justify="right")
        trades.add_column("Return", justify="right")
        for trade in stats.completed_trades:
            trades.add_row(
                trade.symbol,
                trade.buy_date.isoformat(),
                trade.sell_date.isoformat(),
                f"{trade.shares:f}",
                _format_money(trade.buy_price),
                _format_money(trade.sell_price),
                _colored_money(trade.realized_pnl),
                _format_percent(trade.realized_pnl_percent),
            )
        console.print(trades)

    if stats.open_positions:
        positions = Table(title="Open Positions")
        positions.add_column("Symbol", style="cyan")
        positions.add_column("Shares", justify="right")
        positions.add_column("Avg Cost", justify="right")
        positions.add_column("Price", justify="right")
        positions.add_column("Unrealized", justify="right")
        positions.add_column("Return", justify="right")
        for position in stats.open_positions:
            positions.add_row(
                position.symbol,
                f"{position.shares:f}",
                _format_money(position.avg_cost),
                _format_money(position.current_price),
                _colored_money(position.unrealized_pnl),
                _format_percent(position.unrealized_pnl_percent),
            )
        console.print(positions)


def print_breakdown(title: str, rows: list[PeriodPerformance], console: Console) -> None:
    """Print a monthly or per-symbol breakdown."""
    if not rows:
        return
    table = Table(title=title)
    table.add_column("Key", style="cyan")
    table.add_column("Trades", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("Win Rate", justify="right")
    for row in rows:
        table.add_row(
            row.key,
            str(row.trades),
            _colored_money(row.pnl),
            _format_percent(row.win_rate, show_sign=False),
        )
    console.print(table)


def print_statement_import(parsed: StatementImport, console: Console) -> None:
    """Print parsed statement rows and skipped lines."""
    table = Table(title=f"Statement ({len(parsed.rows)} transactions)")
    table.add_column("Date")
    table.add_column("Symbol", style="cyan")
    table.add_column("Side")
    table.add_column("Shares", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Net", justify="right")
    for row in parsed.rows:
        side_color = "green" if row.type.value == "BUY" else "red"
        table.add_row(
            row.trade_date.isoformat(),
            row.symbol,
            f"[{side_color}]{row.type.value}[/{side_color}]",
            f"{row.shares:f}",
            _format_money(row.price),
            _format_money(row.net_amount),
        )
    console.print(table)

    for diagnostic in parsed.diagnostics:
        console.print(f"[yellow]Line {diagnostic.line}: {diagnostic.reason}[/yellow]")


def print_currency(
    portfolio: PortfolioCurrencyPnL,
    realized: RealizedCurrencySummary,
    local_symbol: str,
    console: Console,
) -> None:
    """Print the stock/currency split of unrealized and realized P&L."""
    console.print()
    console.print(
        Panel(
            f"[bold cyan]Currency Attribution[/bold cyan] (rate {portfolio.current_rate})",
            expand=False,
        )
    )

    table = Table(title="Open Holdings")
    table.add_column("Symbol", style="cyan")
    table.add_column("Cost", justify="right")
    table.add_column("Value", justify="right")
    table.add_column("Stock P&L", justify="right")
    table.add_column("Currency P&L", justify="right")
    table.add_column("Total", justify="right")
    for h in portfolio.holdings:
        table.add_row(
            h.symbol,
            _format_money(h.cost_local, local_symbol),
            _format_money(h.value_local, local_symbol),
            _colored_money(h.stock_pnl_local, local_symbol),
            _colored_money(h.currency_pnl_local, local_symbol),
            _colored_money(h.total_pnl_local, local_symbol),
        )
    table.add_row(
        "[bold]Total[/bold]",
        _format_money(portfolio.total_cost_local, local_symbol),
        _format_money(portfolio.total_value_local, local_symbol),
        _colored_money(portfolio.total_stock_pnl_local, local_symbol),
        _colored_money(portfolio.total_currency_pnl_local, local_symbol),
        _colored_money(portfolio.total_pnl_local, local_symbol),
    )
    console.print(table)

    summary = _label_table()
    summary.add_row("Realized Trades:", str(realized.trade_count))
    summary.add_row("Realized Stock P&L:", _colored_money(realized.total_stock_pnl_local, local_symbol))
    summary.add_row(
        "Realized Currency P&L:", _colored_money(realized.total_currency_pnl_local, local_symbol)
    )
    summary.add_row("Realized Total:", _colored_money(realized.total_pnl_local, local_symbol))
    if realized.best_currency_trade is not None:
        best = realized.best_currency_trade
        summary.add_row(
            "Best Rate Timing:",
            f"{best.symbol} {best.sell_date.isoformat()} "
            f"{_format_money(best.currency_pnl_local, local_symbol)}",
        )
    if realized.worst_currency_trade is not None:
        worst = realized.worst_currency_trade
        summary.add_row(
            "Worst Rate Timing:",
            f"{worst.symbol} {worst.sell_date.isoformat()} "
            f"{_format_money(worst.currency_pnl_local, local_symbol)}",
        )
    console.print(summary)
