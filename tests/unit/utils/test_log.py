"""Tests for run logger setup."""

import io
import logging

import pytest
from dircull.utils.log import LOGGER_NAME, configure_logging, verbosity_to_level
from rich.console import Console


class TestVerbosityToLevel:
    """Tests for verbosity_to_level."""

    @pytest.mark.parametrize(
        ("verbose", "quiet", "expected"),
        [
            (0, 0, logging.WARNING),
            (1, 0, logging.INFO),
            (2, 0, logging.DEBUG),
            (5, 0, logging.DEBUG),
            (0, 1, logging.ERROR),
            (0, 2, logging.CRITICAL),
            (0, 9, logging.CRITICAL),
            (1, 1, logging.WARNING),
        ],
    )
    def test_levels(self, verbose: int, quiet: int, expected: int) -> None:
        assert verbosity_to_level(verbose, quiet) == expected


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_writes_to_console(self) -> None:
        buffer = io.StringIO()
        log = configure_logging(logging.INFO, Console(file=buffer, width=200))

        log.info("Culling directory: /data")
        log.debug("hidden detail")

        output = buffer.getvalue()
        assert "Culling directory: /data" in output
        assert "hidden detail" not in output

    def test_does_not_touch_root_logger(self) -> None:
        root_handlers = list(logging.getLogger().handlers)

        log = configure_logging(logging.DEBUG, Console(file=io.StringIO()))

        assert log.name == LOGGER_NAME
        assert log.propagate is False
        assert logging.getLogger().handlers == root_handlers

    def test_reconfiguring_replaces_handler(self) -> None:
        configure_logging(logging.INFO, Console(file=io.StringIO()))
        log = configure_logging(logging.WARNING, Console(file=io.StringIO()))

        assert len(log.handlers) == 1
        assert log.level == logging.WARNING
