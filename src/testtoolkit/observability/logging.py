"""Logging setup for testtoolkit.

The library logs through ``logging.getLogger(__name__)`` in every module, so
all records land under the ``testtoolkit`` logger. Nothing is printed unless
the application (or a test session) calls :func:`configure_logging` or
configures logging itself.

Example:
    >>> from testtoolkit.observability import configure_logging
    >>> configure_logging(level="DEBUG")
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime

ROOT_LOGGER_NAME = "testtoolkit"


class HumanReadableFormatter(logging.Formatter):
    """Human-readable formatter for console output.

    Example:
        >>> formatter = HumanReadableFormatter(use_colors=False)
        >>> handler.setFormatter(formatter)
    """

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors and self._supports_color()

    @staticmethod
    def _supports_color() -> bool:
        """Check if the terminal supports colors."""
        if os.environ.get("NO_COLOR"):
            return False
        if sys.platform == "win32":
            return os.environ.get("ANSICON") is not None or "WT_SESSION" in os.environ
        return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]

        if self.use_colors:
            color = self.COLORS.get(record.levelname, "")
            level = f"{color}{record.levelname:8}{self.RESET}"
        else:
            level = f"{record.levelname:8}"

        base = f"{timestamp} {level} [{record.name}] {record.getMessage()}"

        if record.exc_info:
            base += "\n" + self.formatException(record.exc_info)

        return base


def configure_logging(
    level: int | str | None = None,
    use_colors: bool = True,
) -> logging.Logger:
    """Configure the ``testtoolkit`` logger.

    Installs a single stream handler on the package logger, replacing any
    handler installed by a previous call. The root logger is left alone.

    Args:
        level: Minimum log level. Defaults to ``log_level`` from the
            active configuration.
        use_colors: Use ANSI colors when the terminal supports them.

    Returns:
        The configured package logger.
    """
    if level is None:
        from testtoolkit.config import get_config

        level = get_config().log_level

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.handlers.clear()
    package_logger.propagate = False

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(HumanReadableFormatter(use_colors=use_colors))

    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return package_logger
