"""Transaction ledger records."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class TransactionType(str, Enum):
    """Side of a ledger entry."""

    BUY = "BUY"
    SELL = "SELL"

    @classmethod
    def parse(cls, raw: str) -> "TransactionType":
        """Parse a case-insensitive side label such as ``"buy"`` or ``" SELL"``."""
        return cls(raw.strip().upper())


class Transaction(BaseModel):
    """
    Immutable record of an executed trade.

    The full transaction history is the source of truth; holdings and
    performance figures are derived from it.

    Attributes:
        id: Unique transaction identifier (UUID)
        portfolio_id: Portfolio the trade belongs to
        symbol: Trading symbol
        company_name: Issuer name, when known
        type: BUY or SELL
        shares: Number of shares traded
        price: Price per share in the quote currency
        trade_date: Trade date
        settlement_date: Settlement date, when known
        gross_amount: shares * price
        commission: Commission and fees (positive)
        vat: Tax on commission (positive)
        net_amount: Cash moved including costs
        exchange_rate: Local currency per quote currency unit at execution
        notes: Free-form note
    """

    id: str = Field(default_factory=lambda: str(uuid4()), description="Unique transaction ID")
    portfolio_id: str = Field(default="default", description="Owning portfolio")
    symbol: str = Field(..., description="Trading symbol", min_length=1)
    company_name: str = Field(default="", description="Issuer name")
    type: TransactionType = Field(..., description="BUY or SELL")
    shares: Decimal = Field(..., description="Number of shares", gt=0)
    price: Decimal = Field(..., description="Price per share", ge=0)
    trade_date: date = Field(..., description="Trade date")
    settlement_date: Optional[date] = Field(default=None, description="Settlement date")
    gross_amount: Decimal = Field(default=Decimal("0"), description="shares * price", ge=0)
    commission: Decimal = Field(default=Decimal("0"), description="Commission and fees", ge=0)
    vat: Decimal = Field(default=Decimal("0"), description="Tax on commission", ge=0)
    net_amount: Decimal = Field(default=Decimal("0"), description="Net cash moved")
    exchange_rate: Optional[Decimal] = Field(
        default=None, description="Local currency per quote unit at execution", gt=0
    )
    notes: Optional[str] = Field(default=None, description="Free-form note")

    model_config = ConfigDict(frozen=True)

    @property
    def is_buy(self) -> bool:
        return self.type is TransactionType.BUY

    def __str__(self) -> str:
        return (
            f"Transaction({self.type.value} {self.shares} {self.symbol} "
            f"@ ${self.price} on {self.trade_date.isoformat()})"
        )

    @classmethod
    def create_buy(
        cls,
        symbol: str,
        shares: Decimal,
        price: Decimal,
        trade_date: date,
        exchange_rate: Optional[Decimal] = None,
        commission: Decimal = Decimal("0"),
        vat: Decimal = Decimal("0"),
        **kwargs,
    ) -> "Transaction":
        """
        Factory method to create a buy from shares and price.

        Gross and net amounts are derived; costs are added to the net.
        """
        gross = shares * price
        return cls(
            symbol=symbol,
            type=TransactionType.BUY,
            shares=shares,
            price=price,
            trade_date=trade_date,
            gross_amount=gross,
            commission=commission,
            vat=vat,
            net_amount=gross + commission + vat,
            exchange_rate=exchange_rate,
            **kwargs,
        )

    @classmethod
    def create_sell(
        cls,
        symbol: str,
        shares: Decimal,
        price: Decimal,
        trade_date: date,
        exchange_rate: Optional[Decimal] = None,
        commission: Decimal = Decimal("0"),
        vat: Decimal = Decimal("0"),
        **kwargs,
    ) -> "Transaction":
        """
        Factory method to create a sell from shares and price.

        Costs are deducted from the net proceeds.
        """
        gross = shares * price
        return cls(
            symbol=symbol,
            type=TransactionType.SELL,
            shares=shares,
            price=price,
            trade_date=trade_date,
            gross_amount=gross,
            commission=commission,
            vat=vat,
            net_amount=gross - commission - vat,
            exchange_rate=exchange_rate,
            **kwargs,
        )
