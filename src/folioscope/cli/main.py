"""Folioscope CLI - Entry point for the folio command."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

import pandas as pd
import typer
from rich.console import Console
from rich.logging import RichHandler

from folioscope import __version__
from folioscope.cli.output import (
    print_analysis,
    print_breakdown,
    print_currency,
    print_performance,
    print_statement_import,
    print_trading_levels,
)
from folioscope.core.config import get_settings, load_engine_config
from folioscope.core.errors import FolioscopeError
from folioscope.models.bar import PriceSeries
from folioscope.models.config import EngineConfig
from folioscope.models.quote import Quote

app = typer.Typer(
    name="folio",
    help="Folioscope - portfolio analytics for retail investors",
    add_completion=False,
)
console = Console()
logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold green]folioscope[/bold green] version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(  # noqa: ARG001
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log engine debug output"),
) -> None:
    """Folioscope - portfolio analytics for retail investors."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="%H:%M:%S",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def _config(path: Optional[Path]) -> EngineConfig:
    """Engine configuration from a TOML file, or the environment."""
    if path is None:
        return get_settings()
    try:
        return load_engine_config(path)
    except FileNotFoundError as e:
        raise typer.BadParameter(f"Config file not found: {path}") from e


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8-sig")
    except FileNotFoundError as e:
        raise typer.BadParameter(f"File not found: {path}") from e


def _load_prices(path: Path) -> PriceSeries:
    """Read an OHLCV CSV, oldest row first after sorting by its date column."""
    try:
        frame = pd.read_csv(path)
    except FileNotFoundError as e:
        raise typer.BadParameter(f"File not found: {path}") from e
    frame.columns = [str(c).strip().lower() for c in frame.columns]
    for column in ("date", "timestamp"):
        if column in frame.columns:
            frame[column] = pd.to_datetime(frame[column])
            frame = frame.sort_values(column, kind="stable")
            break
    logger.debug(f"Loaded {len(frame)} bars from {path}")
    return PriceSeries.from_frame(frame)


def _decimal(raw: str, name: str) -> Decimal:
    try:
        return Decimal(raw)
    except InvalidOperation as e:
        raise typer.BadParameter(f"Invalid {name}: {raw}") from e


def _parse_quotes(prices: Optional[list[str]]) -> dict[str, Quote]:
    """Parse ``SYMBOL=PRICE`` options into quotes."""
    quotes: dict[str, Quote] = {}
    for item in prices or []:
        symbol, sep, raw = item.partition("=")
        if not sep or not symbol.strip():
            raise typer.BadParameter(f"Invalid price: {item}. Use SYMBOL=PRICE.")
        symbol = symbol.strip().upper()
        price = _decimal(raw.strip(), "price")
        if price <= 0:
            raise typer.BadParameter(f"Price must be positive: {item}")
        quotes[symbol] = Quote(symbol=symbol, current_price=price)
    return quotes


def _fail(error: Exception) -> typer.Exit:
    console.print(f"[red]Error: {error}[/red]")
    return typer.Exit(1)


PRICE_OPTION = typer.Option(
    None, "--price", "-p", help="Current price as SYMBOL=PRICE (repeatable)"
)
CONFIG_OPTION = typer.Option(None, "--config", help="Engine config file (TOML)")


@app.command()
def analyze(
    prices: Path = typer.Argument(..., help="OHLCV CSV with open,high,low,close[,volume] columns"),
    symbol: str = typer.Option("", "--symbol", "-s", help="Symbol shown in the report"),
    config: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Run the indicator engine and print the recommendation."""
    from folioscope.indicators.engine import calculate_all_indicators
    from folioscope.signals.synthesizer import comprehensive_interpretation

    engine_config = _config(config)
    try:
        series = _load_prices(prices)
    except FolioscopeError as e:
        raise _fail(e) from e

    if len(series) < engine_config.min_analysis_bars:
        console.print(
            f"[yellow]Need at least {engine_config.min_analysis_bars} bars, "
            f"got {len(series)}.[/yellow]"
        )
        raise typer.Exit(1)

    analysis = calculate_all_indicators(series, engine_config)
    interpretation = comprehensive_interpretation(analysis, series.last_close)
    print_analysis(symbol.upper() or prices.stem.upper(), analysis, interpretation, console)


@app.command()
def levels(
    prices: Path = typer.Argument(..., help="OHLCV CSV with open,high,low,close[,volume] columns"),
    symbol: str = typer.Option("", "--symbol", "-s", help="Symbol shown in the report"),
    config: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Print nearest support/resistance and an ATR-based trade plan."""
    from folioscope.signals.analysis import key_trading_levels

    engine_config = _config(config)
    try:
        plan = key_trading_levels(_load_prices(prices), engine_config)
    except FolioscopeError as e:
        raise _fail(e) from e
    print_trading_levels(symbol.upper() or prices.stem.upper(), plan, console)


@app.command("import")
def import_statement(
    statement: Path = typer.Argument(..., help="Broker monthly statement CSV"),
) -> None:
    """Parse a broker statement and show what would be imported."""
    from folioscope.ledger.statement import holdings_summary, validate_statement

    try:
        parsed = validate_statement(_read_text(statement))
    except FolioscopeError as e:
        raise _fail(e) from e

    print_statement_import(parsed, console)
    for symbol, holding in holdings_summary(parsed.rows).items():
        console.print(
            f"  [cyan]{symbol}[/cyan] {holding.shares:f} shares @ {holding.avg_cost:.2f}"
        )


@app.command()
def performance(
    statement: Path = typer.Argument(..., help="Broker monthly statement CSV"),
    prices: Optional[list[str]] = PRICE_OPTION,
    breakdown: bool = typer.Option(
        True, "--breakdown/--no-breakdown", help="Show monthly and per-symbol results"
    ),
) -> None:
    """FIFO-match a statement and print trading performance."""
    from folioscope.ledger.performance import (
        calculate_performance,
        monthly_performance,
        symbol_performance,
    )
    from folioscope.ledger.statement import to_transactions, validate_statement

    try:
        parsed = validate_statement(_read_text(statement))
    except FolioscopeError as e:
        raise _fail(e) from e

    stats = calculate_performance(to_transactions(parsed.rows), _parse_quotes(prices))
    print_performance(stats, console)
    if breakdown:
        print_breakdown("Monthly", monthly_performance(stats.completed_trades), console)
        print_breakdown("By Symbol", symbol_performance(stats.completed_trades), console)


@app.command()
def currency(
    statement: Path = typer.Argument(..., help="Broker monthly statement CSV"),
    rate: str = typer.Option(..., "--rate", "-r", help="Current local units per base unit"),
    purchase_rate: Optional[str] = typer.Option(
        None, "--purchase-rate", help="Rate recorded on the statement trades"
    ),
    prices: Optional[list[str]] = PRICE_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Split statement P&L into stock-price and exchange-rate parts."""
    from folioscope.currency.pnl import (
        portfolio_currency_pnl,
        realized_currency_pnl,
        realized_currency_summary,
    )
    from folioscope.ledger.holdings import rebuild_holding
    from folioscope.ledger.statement import to_transactions, validate_statement

    engine_config = _config(config)
    current_rate = _decimal(rate, "rate")
    trade_rate = _decimal(purchase_rate, "purchase rate") if purchase_rate else None

    try:
        parsed = validate_statement(_read_text(statement))
        transactions = to_transactions(parsed.rows, exchange_rate=trade_rate)
        symbols = dict.fromkeys(tx.symbol for tx in transactions)
        holdings = [
            rebuild_holding(symbol, transactions, engine_config.ledger) for symbol in symbols
        ]
        portfolio = portfolio_currency_pnl(holdings, _parse_quotes(prices), current_rate)
        realized = realized_currency_summary(
            realized_currency_pnl(transactions, engine_config.ledger)
        )
    except FolioscopeError as e:
        raise _fail(e) from e

    print_currency(portfolio, realized, f"{engine_config.ledger.local_currency} ", console)


if __name__ == "__main__":
    app()
