"""Test configuration and fixtures for pytest."""

from __future__ import annotations

import math
from datetime import date
from decimal import Decimal
from typing import Optional

import pytest

from folioscope.models import PriceSeries, Transaction


def _make_series(
    n: int,
    start: float = 100.0,
    slope: float = 0.0,
    amplitude: float = 5.0,
    period: float = 20.0,
    with_volume: bool = True,
) -> PriceSeries:
    """Deterministic wave around a linear drift."""
    opens, highs, lows, closes, volumes = [], [], [], [], []
    previous = start
    for i in range(n):
        close = start + slope * i + amplitude * math.sin(2 * math.pi * i / period)
        high = max(previous, close) + 1.0
        low = min(previous, close) - 1.0
        opens.append(previous)
        highs.append(high)
        lows.append(low)
        closes.append(close)
        volumes.append(1_000_000.0 + 200_000.0 * math.cos(i) if with_volume else 0.0)
        previous = close
    return PriceSeries(
        opens=tuple(opens),
        highs=tuple(highs),
        lows=tuple(lows),
        closes=tuple(closes),
        volumes=tuple(volumes),
    )


def _buy(
    symbol: str,
    shares: str,
    price: str,
    day: date,
    rate: Optional[str] = None,
    **kwargs,
) -> Transaction:
    """Buy transaction with Decimal fields built from strings."""
    return Transaction.create_buy(
        symbol=symbol,
        shares=Decimal(shares),
        price=Decimal(price),
        trade_date=day,
        exchange_rate=Decimal(rate) if rate else None,
        **kwargs,
    )


def _sell(
    symbol: str,
    shares: str,
    price: str,
    day: date,
    rate: Optional[str] = None,
    **kwargs,
) -> Transaction:
    """Sell transaction with Decimal fields built from strings."""
    return Transaction.create_sell(
        symbol=symbol,
        shares=Decimal(shares),
        price=Decimal(price),
        trade_date=day,
        exchange_rate=Decimal(rate) if rate else None,
        **kwargs,
    )


@pytest.fixture
def wave_series() -> PriceSeries:
    """250 bars oscillating around 100 with volume."""
    return _make_series(250)


@pytest.fixture
def uptrend_series() -> PriceSeries:
    """250 bars drifting upward with volume."""
    return _make_series(250, start=50.0, slope=0.5, amplitude=2.0)


@pytest.fixture
def no_volume_series() -> PriceSeries:
    """120 bars without any volume."""
    return _make_series(120, with_volume=False)


@pytest.fixture
def make_series():
    """Factory for deterministic price series."""
    return _make_series


@pytest.fixture
def buy():
    """Factory for buy transactions."""
    return _buy


@pytest.fixture
def sell():
    """Factory for sell transactions."""
    return _sell
