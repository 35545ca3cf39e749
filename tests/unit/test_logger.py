"""Tests for logging setup."""

import io
import logging
from unittest.mock import patch

import pytest
from rich.logging import RichHandler

from dibbla.logger import setup_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    saved_level = root.level
    httpx_level = logging.getLogger("httpx").level
    yield root
    root.setLevel(saved_level)
    logging.getLogger("httpx").setLevel(httpx_level)


class TestSetupLogging:
    # pytest attaches its capture handlers per test phase, so each test swaps
    # in an empty handler list only around the code under test.

    def test_plain_handler_by_default(self, root_logger):
        stream = io.StringIO()

        with patch.object(root_logger, "handlers", []):
            setup_logging(logging.INFO, stream=stream)
            logging.getLogger("dibbla.test").info("hello")

        assert "hello" in stream.getvalue()
        assert "INFO" in stream.getvalue()

    def test_rich_handler_when_enabled(self, root_logger, monkeypatch):
        monkeypatch.setenv("DIBBLA_RICH_LOGS", "true")

        with patch.object(root_logger, "handlers", []):
            setup_logging(logging.INFO, stream=io.StringIO())
            handlers = list(root_logger.handlers)

        assert len(handlers) == 1
        assert isinstance(handlers[0], RichHandler)

    def test_level_from_string(self, root_logger):
        with patch.object(root_logger, "handlers", []):
            setup_logging("debug", stream=io.StringIO())

        assert root_logger.level == logging.DEBUG

    def test_log_level_env_override(self, root_logger, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "error")

        with patch.object(root_logger, "handlers", []):
            setup_logging(logging.DEBUG, stream=io.StringIO())

        assert root_logger.level == logging.ERROR

    def test_existing_handlers_are_kept(self, root_logger):
        existing = logging.StreamHandler(io.StringIO())

        with patch.object(root_logger, "handlers", [existing]):
            setup_logging(logging.INFO)
            handlers = list(root_logger.handlers)

        assert handlers == [existing]

    def test_httpx_quiet_unless_debug(self, root_logger):
        with patch.object(root_logger, "handlers", []):
            setup_logging(logging.INFO, stream=io.StringIO())

        assert logging.getLogger("httpx").level == logging.WARNING
