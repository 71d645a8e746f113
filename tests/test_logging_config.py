"""Tests for logging configuration and formatters."""

import json
import logging

import pytest

from skillmatch.logging import ComponentLoggerAdapter, get_logger
from skillmatch.logging.config import (
    SERVICE_NAME,
    ContextualFilter,
    JSONFormatter,
    KeyValueFormatter,
    configure_logging,
)
from skillmatch.logging.context import log_context


@pytest.fixture
def logger():
    test_logger = logging.getLogger("skillmatch.tests")
    test_logger.setLevel(logging.DEBUG)
    test_logger.handlers.clear()
    yield test_logger
    test_logger.handlers.clear()


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(logger, message="Test message", extra=None):
    return logger.makeRecord("test", logging.INFO, "test.py", 1, message, (), None, extra=extra)


def test_json_formatter_mandatory_fields(logger):
    log_obj = json.loads(JSONFormatter().format(_record(logger)))

    assert log_obj["level"] == "INFO"
    assert log_obj["message"] == "Test message"
    assert log_obj["logger"] == "test"
    assert log_obj["timestamp"].endswith("Z")
    assert len(log_obj["timestamp"]) == 24


def test_json_formatter_extra_fields(logger):
    record = _record(
        logger,
        extra={"event": "registry.skill.created", "confidence": 0.6, "keywords": ("a", "b")},
    )

    log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["event"] == "registry.skill.created"
    assert log_obj["confidence"] == 0.6
    assert log_obj["keywords"] == ["a", "b"]
    assert "name" not in log_obj


def test_contextual_filter_adds_static_and_scoped_fields(logger):
    log_filter = ContextualFilter(environment="test")

    with log_context(user_id=42, command="rank"):
        record = _record(logger)
        log_filter.filter(record)

    assert record.service == SERVICE_NAME
    assert record.environment == "test"
    assert record.user_id == 42
    assert record.command == "rank"


def test_contextual_filter_explicit_extra_wins(logger):
    log_filter = ContextualFilter()

    with log_context(user_id=42):
        record = _record(logger, extra={"user_id": 7})
        log_filter.filter(record)

    assert record.user_id == 7


def test_key_value_formatter_extras(logger):
    formatter = KeyValueFormatter("[%(levelname)s] %(name)s: %(message)s")
    record = _record(
        logger,
        extra={"event": "match.created", "match_id": 5, "reason": "has spaces", "flag": True, "none": None},
    )

    output = formatter.format(record)

    assert output.startswith("[INFO] test: Test message")
    assert "event=match.created" in output
    assert "match_id=5" in output
    assert 'reason="has spaces"' in output
    assert "flag=true" in output
    assert "none=null" in output


def test_configure_logging_invalid_level():
    with pytest.raises(ValueError, match="Invalid log level"):
        configure_logging(level="LOUD")


def test_configure_logging_invalid_format():
    with pytest.raises(ValueError, match="Invalid log format"):
        configure_logging(format_type="xml")


@pytest.mark.parametrize(
    "format_type,formatter_class",
    [("json", JSONFormatter), ("key-value", KeyValueFormatter)],
)
def test_configure_logging_installs_single_handler(restore_root_logger, format_type, formatter_class):
    configure_logging(level="DEBUG", format_type=format_type, environment="test")

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, formatter_class)
    assert root.level == logging.DEBUG


def test_get_logger_with_component_merges_extra():
    adapter = get_logger("skillmatch.tests", component="registry")

    assert isinstance(adapter, ComponentLoggerAdapter)
    msg, kwargs = adapter.process("hello", {"extra": {"event": "x"}})
    assert kwargs["extra"] == {"component": "registry", "event": "x"}


def test_get_logger_without_component_returns_plain_logger():
    assert isinstance(get_logger("skillmatch.tests"), logging.Logger)
