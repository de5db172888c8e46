"""Configuration management for testtoolkit."""

from testtoolkit.config.settings import (
    ToolkitConfig,
    get_config,
    load_config,
    reset_config,
    set_config,
)

__all__ = [
    "ToolkitConfig",
    "load_config",
    "get_config",
    "set_config",
    "reset_config",
]
