"""Tests for logging configuration."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator

import pytest

from testtoolkit.config import ToolkitConfig, set_config
from testtoolkit.observability import ROOT_LOGGER_NAME, HumanReadableFormatter, configure_logging


@pytest.fixture
def package_logger() -> Iterator[logging.Logger]:
    """Restore the package logger after configure_logging() changes it."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_installs_single_handler(self, package_logger: logging.Logger) -> None:
        configure_logging("DEBUG")
        configure_logging("INFO")
        assert len(package_logger.handlers) == 1
        assert package_logger.level == logging.INFO
        assert isinstance(package_logger.handlers[0].formatter, HumanReadableFormatter)

    def test_level_from_config(self, package_logger: logging.Logger) -> None:
        set_config(ToolkitConfig(log_level="ERROR"))
        configure_logging()
        assert package_logger.level == logging.ERROR

    def test_root_logger_untouched(self, package_logger: logging.Logger) -> None:
        root_handlers = list(logging.getLogger().handlers)
        configure_logging("DEBUG")
        assert logging.getLogger().handlers == root_handlers

    def test_output(
        self, package_logger: logging.Logger, capsys: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging("DEBUG", use_colors=False)
        logging.getLogger("testtoolkit.data").debug("hello")
        err = capsys.readouterr().err
        assert "DEBUG" in err
        assert "[testtoolkit.data] hello" in err


class TestHumanReadableFormatter:
    """Tests for HumanReadableFormatter."""

    def test_plain_format(self) -> None:
        formatter = HumanReadableFormatter(use_colors=False)
        record = logging.LogRecord("testtoolkit.access", logging.WARNING, __file__, 1, "msg %s", ("x",), None)
        line = formatter.format(record)
        assert line.endswith("WARNING  [testtoolkit.access] msg x")

    def test_includes_exception(self) -> None:
        formatter = HumanReadableFormatter(use_colors=False)
        try:
            raise ValueError("broken")
        except ValueError:
            record = logging.LogRecord(
                "testtoolkit", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )
        assert "ValueError: broken" in formatter.format(record)
