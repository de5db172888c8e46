"""Logging helpers for testtoolkit."""

from testtoolkit.observability.logging import (
    ROOT_LOGGER_NAME,
    HumanReadableFormatter,
    configure_logging,
)

__all__ = [
    "ROOT_LOGGER_NAME",
    "HumanReadableFormatter",
    "configure_logging",
]
