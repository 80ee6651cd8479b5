"""Unit tests for configuration models and loading."""

from decimal import Decimal
from pathlib import Path

import pytest
from pydantic import ValidationError

from folioscope.core.config import (
    get_settings,
    load_engine_config,
    load_toml,
    reset_settings,
)
from folioscope.models.config import (
    EngineConfig,
    IndicatorParams,
    LedgerParams,
    LevelParams,
)


@pytest.fixture(autouse=True)
def _clean_settings():
    """Drop the cached settings around every test."""
    reset_settings()
    yield
    reset_settings()


class TestParams:
    """Tests for the parameter groups."""

    def test_indicator_defaults(self) -> None:
        """Test conventional indicator periods."""
        params = IndicatorParams()
        assert params.rsi_period == 14
        assert (params.macd_fast, params.macd_slow, params.macd_signal) == (12, 26, 9)
        assert (params.stochastic_k, params.stochastic_d) == (14, 3)
        assert params.bollinger_multiplier == 2.0

    def test_level_defaults(self) -> None:
        """Test default level detection parameters."""
        params = LevelParams()
        assert params.max_levels == 6
        assert params.volume_bins == 50
        assert params.fibonacci_lookback == 50

    def test_ledger_defaults(self) -> None:
        """Test default currencies and exchange rate."""
        params = LedgerParams()
        assert params.default_exchange_rate == Decimal("35")
        assert (params.base_currency, params.local_currency) == ("USD", "THB")

    @pytest.mark.parametrize(
        ("model", "kwargs"),
        [
            (IndicatorParams, {"rsi_period": 1}),
            (IndicatorParams, {"bollinger_multiplier": 0}),
            (LevelParams, {"max_levels": 1}),
            (LedgerParams, {"default_exchange_rate": Decimal("0")}),
        ],
    )
    def test_out_of_range_rejected(self, model, kwargs: dict) -> None:
        """Test out-of-range values fail validation."""
        with pytest.raises(ValidationError):
            model(**kwargs)

    def test_params_are_frozen(self) -> None:
        """Test parameter groups cannot be mutated."""
        params = IndicatorParams()
        with pytest.raises(ValidationError):
            params.rsi_period = 21


class TestEngineConfig:
    """Tests for EngineConfig."""

    def test_default_config(self) -> None:
        """Test default engine configuration."""
        config = EngineConfig()
        assert config.min_analysis_bars == 30
        assert config.data_dir == Path.home() / ".folioscope"
        assert config.indicators == IndicatorParams()

    def test_min_bars_must_be_positive(self) -> None:
        """Test a zero bar minimum is rejected."""
        with pytest.raises(ValidationError):
            EngineConfig(min_analysis_bars=0)

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that FOLIOSCOPE_ env prefix works."""
        monkeypatch.setenv("FOLIOSCOPE_MIN_ANALYSIS_BARS", "40")
        monkeypatch.setenv("FOLIOSCOPE_DATA_DIR", "/tmp/folioscope_test")

        config = EngineConfig()

        assert config.min_analysis_bars == 40
        assert config.data_dir == Path("/tmp/folioscope_test")

    def test_nested_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test nested values use a double underscore."""
        monkeypatch.setenv("FOLIOSCOPE_INDICATORS__RSI_PERIOD", "21")

        config = EngineConfig()

        assert config.indicators.rsi_period == 21
        assert config.indicators.macd_fast == 12


class TestLoadEngineConfig:
    """Tests for TOML loading."""

    def test_no_path_gives_defaults(self) -> None:
        """Test omitting the path returns the defaults."""
        assert load_engine_config() == EngineConfig()

    def test_load_from_toml(self, tmp_path: Path) -> None:
        """Test file sections override the defaults."""
        path = tmp_path / "folioscope.toml"
        path.write_text(
            "min_analysis_bars = 40\n"
            "\n"
            "[indicators]\n"
            "rsi_period = 21\n"
            "\n"
            "[levels]\n"
            "max_levels = 8\n"
            "\n"
            "[ledger]\n"
            'default_exchange_rate = "33.5"\n'
        )

        config = load_engine_config(path)

        assert config.min_analysis_bars == 40
        assert config.indicators.rsi_period == 21
        assert config.levels.max_levels == 8
        assert config.levels.volume_bins == 50
        assert config.ledger.default_exchange_rate == Decimal("33.5")

    def test_invalid_values_raise(self, tmp_path: Path) -> None:
        """Test invalid values in the file fail validation."""
        path = tmp_path / "bad.toml"
        path.write_text("[indicators]\nrsi_period = 0\n")

        with pytest.raises(ValidationError):
            load_engine_config(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_toml(tmp_path / "missing.toml")


class TestSettingsSingleton:
    """Tests for get_settings and reset_settings."""

    def test_cached(self) -> None:
        """Test settings are loaded once."""
        assert get_settings() is get_settings()

    def test_reset_reloads(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a reset picks up new environment values."""
        first = get_settings()
        monkeypatch.setenv("FOLIOSCOPE_MIN_ANALYSIS_BARS", "50")
        reset_settings()

        second = get_settings()

        assert second is not first
        assert second.min_analysis_bars == 50
