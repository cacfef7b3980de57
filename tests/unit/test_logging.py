"""Unit tests for structured logging utilities."""

from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock

import pytest
import structlog

from kubescrape.utils.logging import get_logger, log_error, log_operation, setup_logging

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset structlog configuration around each test."""
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


class TestSetupLogging:
    """Test setup_logging function."""

    def test_json_format_renders_last(self):
        """Test JSON format ends with the JSON renderer."""
        setup_logging(format="json")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_format_renders_last(self):
        """Test console format ends with the console renderer."""
        setup_logging(format="console")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_includes_timestamp_and_level(self):
        """Test timestamps and log levels are added."""
        setup_logging()

        processors = structlog.get_config()["processors"]
        assert any(isinstance(p, structlog.processors.TimeStamper) for p in processors)
        assert "add_log_level" in str(processors)
        assert "merge_contextvars" in str(processors)

    def test_caches_logger(self):
        """Test setup_logging configures logger caching."""
        setup_logging()

        assert structlog.get_config()["cache_logger_on_first_use"] is True

    def test_json_output(self, capsys):
        """Test events are written as JSON lines."""
        setup_logging(level="DEBUG", format="json", output="stdout")

        get_logger("test").info("kubelet_config_derived", scheme="https")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        event = json.loads(line)
        assert event["event"] == "kubelet_config_derived"
        assert event["scheme"] == "https"
        assert event["level"] == "info"
        assert "timestamp" in event

    def test_stderr_output(self, capsys):
        """Test events can be routed to stderr."""
        setup_logging(level="INFO", format="json", output="stderr")

        get_logger("test").warning("node_address_not_found")

        captured = capsys.readouterr()
        assert "node_address_not_found" in captured.err
        assert "node_address_not_found" not in captured.out

    def test_level_filters_events(self, capsys):
        """Test events below the configured level are dropped."""
        setup_logging(level="WARNING", format="json")

        logger = get_logger("test")
        logger.debug("debug_event")
        logger.info("info_event")

        assert capsys.readouterr().out == ""

    def test_invalid_level_defaults_to_info(self, capsys):
        """Test an unknown level falls back to INFO."""
        setup_logging(level="INVALID", format="json")

        logger = get_logger("test")
        logger.debug("debug_event")
        logger.info("info_event")

        out = capsys.readouterr().out
        assert "debug_event" not in out
        assert "info_event" in out

    def test_lowercase_level(self, capsys):
        """Test lowercase level names are accepted."""
        setup_logging(level="debug", format="json")

        get_logger("test").debug("debug_event")

        assert "debug_event" in capsys.readouterr().out


class TestLogOperation:
    """Test log_operation helper function."""

    def test_log_operation_with_context(self):
        """Test log_operation prefixes the operation name."""
        logger = MagicMock()

        log_operation(logger, "derive", scheme="http", port=10250)

        logger.info.assert_called_once_with("operation_derive", scheme="http", port=10250)


class TestLogError:
    """Test log_error helper function."""

    def test_log_error_basic(self):
        """Test log_error logs error type and message."""
        logger = MagicMock()

        log_error(logger, ValueError("Test error"))

        call_args = logger.error.call_args
        assert call_args[0][0] == "error_occurred"
        assert call_args[1]["error_type"] == "ValueError"
        assert call_args[1]["error_message"] == "Test error"
        assert call_args[1]["exc_info"] is True
        assert "operation" not in call_args[1]

    def test_log_error_with_operation_and_context(self):
        """Test log_error includes operation and extra context."""
        logger = MagicMock()

        log_error(logger, KeyError("host"), operation="derive", path="base.yaml")

        call_args = logger.error.call_args
        assert call_args[1]["operation"] == "derive"
        assert call_args[1]["path"] == "base.yaml"
        assert call_args[1]["error_type"] == "KeyError"

    def test_log_error_without_traceback(self, capsys):
        """Test log_error can leave out the traceback."""
        setup_logging(level="ERROR", format="json")

        try:
            raise ValueError("bad config")
        except ValueError as e:
            log_error(get_logger("test"), e, operation="derive", exc_info=False)

        event = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert event["error_message"] == "bad config"
        assert "exception" not in event

    def test_log_error_with_real_logger(self, capsys):
        """Test log_error renders through a configured logger."""
        setup_logging(level="ERROR", format="json")

        try:
            raise RuntimeError("boom")
        except RuntimeError as e:
            log_error(get_logger("test"), e, operation="derive")

        event = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert event["error_type"] == "RuntimeError"
        assert event["operation"] == "derive"
        assert "exception" in event
        assert logging.getLevelName(logging.ERROR).lower() == event["level"]
