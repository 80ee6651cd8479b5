"""Core utilities, configuration and errors."""

from folioscope.core.config import (
    get_settings,
    load_engine_config,
    load_toml,
    reset_settings,
)
from folioscope.core.errors import FolioscopeError, InvalidInputError, StatementError

__all__ = [
    "load_toml",
    "load_engine_config",
    "get_settings",
    "reset_settings",
    "FolioscopeError",
    "InvalidInputError",
    "StatementError",
]
