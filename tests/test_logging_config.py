"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from tempo_insight.logging_config import get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("tempo_insight")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_levels(self):
        """verbose, default and quiet map to DEBUG, WARNING and ERROR."""
        assert setup_logging(verbose=True).level == logging.DEBUG
        assert setup_logging().level == logging.WARNING
        assert setup_logging(quiet=True).level == logging.ERROR
        assert setup_logging(verbose=True, quiet=True).level == logging.ERROR

    def test_rich_handler_installed(self):
        """Records are rendered by rich on the package logger."""
        logger = setup_logging()
        assert [type(h) for h in logger.handlers] == [RichHandler]
        assert logger.propagate is False

    def test_repeated_setup_replaces_handlers(self):
        """Calling setup twice does not duplicate output."""
        setup_logging()
        logger = setup_logging(verbose=True)
        assert len(logger.handlers) == 1

    def test_log_file(self, tmp_path):
        """A log file receives records as well."""
        log_file = tmp_path / "tempo.log"
        logger = setup_logging(verbose=True, log_file=str(log_file))
        get_logger("temporal.sessions").debug("hello from the test")
        for handler in logger.handlers:
            handler.flush()

        text = log_file.read_text()
        assert "hello from the test" in text
        assert "tempo_insight.temporal.sessions" in text


class TestGetLogger:
    """Tests for get_logger."""

    def test_prefixes_short_names(self):
        """Short names live under the package logger."""
        assert get_logger("cli").name == "tempo_insight.cli"
        assert get_logger().name == "tempo_insight"

    def test_module_names_unchanged(self):
        """Names already in the package are kept."""
        assert get_logger("tempo_insight.cache").name == "tempo_insight.cache"
        assert get_logger("tempo_insight").name == "tempo_insight"

    def test_lookalike_prefix(self):
        """A name that merely starts with the package name is still prefixed."""
        assert get_logger("tempo_insightful").name == "tempo_insight.tempo_insightful"
