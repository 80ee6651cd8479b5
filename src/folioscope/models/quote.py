"""Market quote and exchange rate models."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Quote(BaseModel):
    """
    Latest market quote for a symbol, as supplied by a quote provider.

    Attributes:
        symbol: Trading symbol
        current_price: Last traded price
        change: Absolute change versus the previous close
        change_percent: Percentage change versus the previous close
        open: Session open
        high: Session high
        low: Session low
        previous_close: Previous session close
        volume: Session volume
        last_updated: When the quote was produced
    """

    symbol: str = Field(..., description="Trading symbol")
    current_price: Decimal = Field(..., description="Last traded price", ge=0)
    change: Decimal = Field(default=Decimal("0"), description="Change vs previous close")
    change_percent: float = Field(default=0.0, description="Percent change vs previous close")
    open: Decimal = Field(default=Decimal("0"), description="Session open", ge=0)
    high: Decimal = Field(default=Decimal("0"), description="Session high", ge=0)
    low: Decimal = Field(default=Decimal("0"), description="Session low", ge=0)
    previous_close: Decimal = Field(default=Decimal("0"), description="Previous close", ge=0)
    volume: int = Field(default=0, description="Session volume", ge=0)
    last_updated: Optional[datetime] = Field(default=None, description="Quote timestamp")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"Quote({self.symbol} ${self.current_price} {self.change_percent:+.2f}%)"


class ExchangeRate(BaseModel):
    """
    Units of local currency per unit of the quote currency.

    Attributes:
        rate: Exchange rate value
        timestamp: When the rate was observed
    """

    rate: Decimal = Field(..., description="Local units per base unit", gt=0)
    timestamp: Optional[datetime] = Field(default=None, description="Rate timestamp")

    model_config = ConfigDict(frozen=True)
