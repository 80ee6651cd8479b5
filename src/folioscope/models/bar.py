"""OHLCV bar and price series models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, model_validator

from folioscope.core.errors import InvalidInputError


class Bar(BaseModel):
    """
    OHLCV bar data representing a single candlestick.

    Prices are floats: indicator math is ratio arithmetic, not money.

    Attributes:
        open: Opening price
        high: Highest price during the period
        low: Lowest price during the period
        close: Closing price
        volume: Trading volume (0 when the feed carries none)
        timestamp: Bar timestamp (start of the period)
    """

    open: float = Field(..., description="Opening price", ge=0)
    high: float = Field(..., description="Highest price", ge=0)
    low: float = Field(..., description="Lowest price", ge=0)
    close: float = Field(..., description="Closing price", ge=0)
    volume: float = Field(default=0.0, description="Trading volume", ge=0)
    timestamp: Optional[datetime] = Field(default=None, description="Bar timestamp")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_range(self) -> "Bar":
        if self.high < self.low:
            raise ValueError(f"high {self.high} is below low {self.low}")
        return self

    def __str__(self) -> str:
        when = self.timestamp.date() if self.timestamp else "-"
        return (
            f"Bar({when} O:{self.open} H:{self.high} L:{self.low} "
            f"C:{self.close} V:{self.volume})"
        )


@dataclass(frozen=True)
class PriceSeries:
    """Column view of a chronologically ordered run of bars.

    Attributes:
        opens: Opening prices, earliest first
        highs: High prices
        lows: Low prices
        closes: Closing prices
        volumes: Volumes (zeros when absent)
    """

    opens: tuple[float, ...]
    highs: tuple[float, ...]
    lows: tuple[float, ...]
    closes: tuple[float, ...]
    volumes: tuple[float, ...]

    def __post_init__(self) -> None:
        n = len(self.closes)
        for name in ("opens", "highs", "lows", "volumes"):
            if len(getattr(self, name)) != n:
                raise InvalidInputError(
                    f"expected {n} values, got {len(getattr(self, name))}", field=name
                )

    def __len__(self) -> int:
        return len(self.closes)

    @classmethod
    def from_bars(cls, bars: Sequence[Bar]) -> "PriceSeries":
        """Build a series from bar records."""
        return cls(
            opens=tuple(b.open for b in bars),
            highs=tuple(b.high for b in bars),
            lows=tuple(b.low for b in bars),
            closes=tuple(b.close for b in bars),
            volumes=tuple(b.volume for b in bars),
        )

    @classmethod
    def coerce(cls, data: "PriceSeries | Sequence[Bar]") -> "PriceSeries":
        """Return ``data`` unchanged if it is already a series, else build one from bars."""
        if isinstance(data, PriceSeries):
            return data
        return cls.from_bars(data)

    @classmethod
    def from_frame(cls, frame: pd.DataFrame) -> "PriceSeries":
        """Build a series from a DataFrame with open/high/low/close[/volume] columns."""
        missing = {"open", "high", "low", "close"} - set(frame.columns)
        if missing:
            raise InvalidInputError(f"missing columns {sorted(missing)}", field="frame")
        volume = (
            frame["volume"].fillna(0).astype(float)
            if "volume" in frame.columns
            else pd.Series(0.0, index=frame.index)
        )
        return cls(
            opens=tuple(frame["open"].astype(float)),
            highs=tuple(frame["high"].astype(float)),
            lows=tuple(frame["low"].astype(float)),
            closes=tuple(frame["close"].astype(float)),
            volumes=tuple(volume),
        )

    @property
    def has_volume(self) -> bool:
        """True when any bar carries volume."""
        return any(v > 0 for v in self.volumes)

    @property
    def last_close(self) -> float:
        """Most recent close, or 0 for an empty series."""
        return self.closes[-1] if self.closes else 0.0

    def previous_bar(self) -> tuple[float, float, float, float]:
        """Return (open, high, low, close) of the bar before the latest one.

        Falls back to the latest bar when there is only one.
        """
        if not self.closes:
            raise InvalidInputError("price series is empty", field="series")
        i = -2 if len(self.closes) >= 2 else -1
        return self.opens[i], self.highs[i], self.lows[i], self.closes[i]

    def to_frame(self) -> pd.DataFrame:
        """Convert to a DataFrame with one row per bar."""
        return pd.DataFrame(
            {
                "open": self.opens,
                "high": self.highs,
                "low": self.lows,
                "close": self.closes,
                "volume": self.volumes,
            }
        )


def bars_to_frame(bars: Sequence[Bar]) -> pd.DataFrame:
    """
    Convert bar records to a DataFrame indexed by timestamp when available.

    Args:
        bars: Bars, earliest first

    Returns:
        DataFrame with columns [open, high, low, close, volume]
    """
    frame = PriceSeries.from_bars(bars).to_frame()
    if bars and all(b.timestamp is not None for b in bars):
        frame.index = pd.DatetimeIndex([b.timestamp for b in bars], name="timestamp")
    return frame
