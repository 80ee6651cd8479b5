"""Configuration loading utilities."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

# tomllib is available in Python 3.11+, use tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from folioscope.models.config import EngineConfig

logger = logging.getLogger(__name__)


def load_toml(path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents as a dictionary.

    Args:
        path: Path to the TOML file

    Returns:
        Dictionary with TOML contents

    Raises:
        FileNotFoundError: If file doesn't exist
        tomllib.TOMLDecodeError: If file is invalid TOML
    """
    with open(path, "rb") as f:
        return tomllib.load(f)


def load_engine_config(path: Path | None = None) -> EngineConfig:
    """Load engine configuration from a TOML file and the environment.

    Values in the file override environment defaults section by section.

    Args:
        path: Optional path to a TOML file

    Returns:
        EngineConfig object

    Example TOML format:
        min_analysis_bars = 40

        [indicators]
        rsi_period = 21

        [levels]
        max_levels = 8
    """
    if path is None:
        return EngineConfig()
    data = load_toml(path)
    logger.debug(f"Loaded engine config sections {sorted(data)} from {path}")
    return EngineConfig(**data)


# Singleton settings instance
_settings: EngineConfig | None = None


def get_settings() -> EngineConfig:
    """Get or create the settings singleton.

    This ensures we only load settings once and reuse them.
    """
    global _settings
    if _settings is None:
        from dotenv import load_dotenv
        load_dotenv()  # Ensure .env is loaded
        _settings = EngineConfig()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call reloads them."""
    global _settings
    _settings = None
