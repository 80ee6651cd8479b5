"""Configuration models for Folioscope."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Local currency per base unit assumed for lots recorded without a rate
DEFAULT_EXCHANGE_RATE = Decimal("35")


class IndicatorParams(BaseModel):
    """Lookback periods for the indicator engine.

    Defaults are the conventional published settings.
    """

    rsi_period: int = Field(default=14, description="RSI lookback", ge=2, le=100)
    rsi_divergence_lookback: int = Field(
        default=20,
        description="Bars inspected for RSI divergence",
        ge=10,
        le=200,
    )
    macd_fast: int = Field(default=12, description="MACD fast EMA period", ge=2, le=100)
    macd_slow: int = Field(default=26, description="MACD slow EMA period", ge=3, le=200)
    macd_signal: int = Field(default=9, description="MACD signal EMA period", ge=2, le=50)
    macd_divergence_lookback: int = Field(
        default=30,
        description="Histogram values inspected for MACD divergence",
        ge=10,
        le=200,
    )
    stochastic_k: int = Field(default=14, description="Stochastic %K period", ge=2, le=100)
    stochastic_d: int = Field(default=3, description="Stochastic %D period", ge=1, le=20)
    bollinger_period: int = Field(default=20, description="Bollinger SMA period", ge=2, le=200)
    bollinger_multiplier: float = Field(
        default=2.0,
        description="Standard deviations between the middle and outer bands",
        gt=0,
        le=5,
    )
    squeeze_lookback: int = Field(
        default=120,
        description="Bandwidth history inspected for a squeeze",
        ge=10,
        le=500,
    )
    atr_period: int = Field(default=14, description="ATR period", ge=2, le=100)
    adx_period: int = Field(default=14, description="ADX period", ge=2, le=100)
    volume_average_period: int = Field(
        default=20,
        description="Bars in the average volume baseline",
        ge=2,
        le=200,
    )

    model_config = ConfigDict(frozen=True)


class LevelParams(BaseModel):
    """Tuning knobs for support/resistance detection."""

    fibonacci_lookback: int = Field(default=50, description="Bars used to find the swing range", ge=5)
    volume_bins: int = Field(default=50, description="Volume profile bucket count", ge=5, le=500)
    swing_left_bars: int = Field(default=5, description="Bars left of a fractal", ge=1, le=50)
    swing_right_bars: int = Field(default=5, description="Bars right of a fractal", ge=1, le=50)
    swing_tolerance: float = Field(
        default=0.02,
        description="Relative distance within which swing points group",
        gt=0,
        le=0.2,
    )
    cluster_tolerance: float = Field(
        default=0.015,
        description="Cluster band as a fraction of the current price",
        gt=0,
        le=0.2,
    )
    cluster_min_touches: int = Field(default=3, description="Touches needed to keep a cluster", ge=1)
    psychological_range: float = Field(
        default=0.2,
        description="Band around the current price searched for round numbers",
        gt=0,
        le=1,
    )
    merge_tolerance: float = Field(
        default=0.01,
        description="Relative distance within which candidate levels merge",
        gt=0,
        le=0.2,
    )
    max_levels: int = Field(default=6, description="Levels returned after consolidation", ge=2, le=40)

    model_config = ConfigDict(frozen=True)


class LedgerParams(BaseModel):
    """Defaults used by the ledger and currency decomposition."""

    default_exchange_rate: Decimal = Field(
        default=DEFAULT_EXCHANGE_RATE,
        description="Purchase rate assumed when a lot carries none",
        gt=0,
    )
    base_currency: str = Field(default="USD", description="Currency prices are quoted in")
    local_currency: str = Field(default="THB", description="Currency P&L is reported in")

    model_config = ConfigDict(frozen=True)


class EngineConfig(BaseSettings):
    """Main engine configuration.

    Loads configuration from environment variables with FOLIOSCOPE_ prefix,
    e.g. ``FOLIOSCOPE_INDICATORS__RSI_PERIOD=21``.

    Attributes:
        indicators: Indicator lookback periods
        levels: Support/resistance detection parameters
        ledger: Ledger and currency defaults
        data_dir: Directory holding statements and price files
        min_analysis_bars: Bars required before a full analysis is produced
    """

    indicators: IndicatorParams = Field(default_factory=IndicatorParams)
    levels: LevelParams = Field(default_factory=LevelParams)
    ledger: LedgerParams = Field(default_factory=LedgerParams)
    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".folioscope",
        description="Data directory",
    )
    min_analysis_bars: int = Field(
        default=30,
        description="Bars required before a full analysis is produced",
        ge=1,
    )

    model_config = SettingsConfigDict(
        env_prefix="FOLIOSCOPE_",
        env_nested_delimiter="__",
        extra="ignore",
    )
