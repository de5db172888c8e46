"""Configuration settings and loading."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from testtoolkit.errors import ConfigValidationError, ErrorContext

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ToolkitConfig(BaseSettings):
    """Configuration for testtoolkit."""

    model_config = SettingsConfigDict(
        env_prefix="TESTTOOLKIT_",
        extra="ignore",
    )

    log_level: str = "WARNING"
    product_warning_threshold: int = Field(
        default=100_000,
        description="Log a warning when a Cartesian product exceeds this size (0 disables)",
    )
    singleton_owner: str = Field(
        default="testtoolkit.singleton.Singleton",
        description="Dotted path of the class that holds the singleton registry",
    )
    singleton_attribute: str = Field(
        default="_instances",
        description="Name of the class attribute holding the singleton registry",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = str(v).upper()
        if level not in VALID_LOG_LEVELS:
            raise ConfigValidationError(
                message=f"Invalid log level: {v!r}. Valid: {', '.join(VALID_LOG_LEVELS)}",
                field="log_level",
                value=v,
                context=ErrorContext(extra={"valid_levels": list(VALID_LOG_LEVELS)}),
            )
        return level

    @field_validator("product_warning_threshold")
    @classmethod
    def validate_threshold(cls, v: int) -> int:
        if v < 0:
            raise ConfigValidationError(
                message="product_warning_threshold must be zero or positive",
                field="product_warning_threshold",
                value=v,
            )
        return v

    @field_validator("singleton_owner")
    @classmethod
    def validate_singleton_owner(cls, v: str) -> str:
        module, sep, name = v.replace(":", ".").rpartition(".")
        if not sep or not module or not name:
            raise ConfigValidationError(
                message="singleton_owner must be a dotted path like 'package.module.Class'",
                field="singleton_owner",
                value=v,
            )
        return v

    @field_validator("singleton_attribute")
    @classmethod
    def validate_singleton_attribute(cls, v: str) -> str:
        if not v.isidentifier():
            raise ConfigValidationError(
                message=f"singleton_attribute must be a valid identifier, got {v!r}",
                field="singleton_attribute",
                value=v,
            )
        return v


_config: ToolkitConfig | None = None


def load_config(config_path: str | Path | None = None) -> ToolkitConfig:
    """Load configuration from file and environment.

    Priority: env vars > config file > defaults
    """
    config_data: dict[str, Any] = {}

    if config_path is not None:
        config_path = Path(config_path)
        if config_path.exists():
            config_data = _load_yaml(config_path)
        else:
            logger.debug(f"Config file {config_path} not found, using defaults")

    config_data.update(_get_env_overrides())

    try:
        return ToolkitConfig(**config_data)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigValidationError(
            message=f"Invalid configuration: {first.get('msg', e)}",
            field=field or None,
            value=first.get("input"),
            cause=e,
        ) from e


def _load_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML mapping from ``path``."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(
            message=f"Failed to parse YAML configuration: {e}",
            cause=e,
            path=str(path),
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigValidationError(
            message=f"Configuration must be a YAML mapping, got {type(data).__name__}",
            value=data,
            path=str(path),
        )
    return data


def _get_env_overrides() -> dict[str, Any]:
    """Get configuration overrides from environment variables."""
    overrides: dict[str, Any] = {}

    env_mappings = {
        "TESTTOOLKIT_LOG_LEVEL": "log_level",
        "TESTTOOLKIT_PRODUCT_WARNING_THRESHOLD": "product_warning_threshold",
        "TESTTOOLKIT_SINGLETON_OWNER": "singleton_owner",
        "TESTTOOLKIT_SINGLETON_ATTRIBUTE": "singleton_attribute",
    }

    for env_key, config_key in env_mappings.items():
        value = os.environ.get(env_key)
        if value is not None:
            overrides[config_key] = value

    return overrides


def get_config() -> ToolkitConfig:
    """Return the process configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: ToolkitConfig) -> None:
    """Replace the process configuration."""
    global _config
    _config = config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config
    _config = None
