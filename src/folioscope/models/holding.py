"""Holding and trade lot models."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from folioscope.models.config import DEFAULT_EXCHANGE_RATE


class TradeLot(BaseModel):
    """
    Shares bought in one transaction and still held.

    Attributes:
        shares: Shares remaining in the lot
        price: Purchase price per share
        trade_date: Purchase date
        commission: Commission paid on the purchase
        exchange_rate: Local currency per quote unit at purchase
    """

    shares: Decimal = Field(..., description="Shares remaining", ge=0)
    price: Decimal = Field(..., description="Purchase price per share", ge=0)
    trade_date: date = Field(..., description="Purchase date")
    commission: Decimal = Field(default=Decimal("0"), description="Commission paid", ge=0)
    exchange_rate: Optional[Decimal] = Field(
        default=None, description="Purchase exchange rate", gt=0
    )

    @property
    def cost(self) -> Decimal:
        """Cost of the remaining shares."""
        return self.shares * self.price


class Holding(BaseModel):
    """
    A position in a single symbol, derived from the transaction ledger.

    Only the lot matching and averaging functions in
    ``folioscope.ledger.holdings`` change a holding.

    Attributes:
        symbol: Trading symbol
        company_name: Issuer name
        portfolio_id: Owning portfolio
        shares: Shares remaining
        avg_cost: Weighted-average cost per share
        avg_exchange_rate: Cost-weighted average purchase exchange rate
        lots: Open lots, oldest first
    """

    symbol: str = Field(..., description="Trading symbol")
    company_name: str = Field(default="", description="Issuer name")
    portfolio_id: str = Field(default="default", description="Owning portfolio")
    shares: Decimal = Field(default=Decimal("0"), description="Shares held", ge=0)
    avg_cost: Decimal = Field(default=Decimal("0"), description="Average cost per share", ge=0)
    avg_exchange_rate: Decimal = Field(
        default=DEFAULT_EXCHANGE_RATE, description="Average purchase exchange rate", gt=0
    )
    lots: list[TradeLot] = Field(default_factory=list, description="Open lots, oldest first")

    @property
    def cost_basis(self) -> Decimal:
        """Total cost basis for this holding."""
        return self.shares * self.avg_cost

    def market_value(self, price: Decimal) -> Decimal:
        """Calculate market value at given price."""
        return self.shares * price

    def unrealized_pnl(self, price: Decimal) -> Decimal:
        """Calculate unrealized profit/loss at given price."""
        return self.market_value(price) - self.cost_basis

    def unrealized_pnl_percent(self, price: Decimal) -> float:
        """Calculate unrealized P&L as a percentage of cost."""
        if self.cost_basis == 0:
            return 0.0
        return float(self.unrealized_pnl(price) / self.cost_basis * 100)

    def __str__(self) -> str:
        return f"Holding({self.symbol}: {self.shares} shares @ ${self.avg_cost} avg)"
