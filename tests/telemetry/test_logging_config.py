"""
Tests for the structured logging configuration.
"""

import logging

import structlog

from pyncat.telemetry import configure_logging, get_logger
from pyncat.telemetry.config import get_env_bool


def test_get_env_bool(monkeypatch):
    """Test parsing boolean environment variables."""
    monkeypatch.delenv("PYNCAT_TEST_BOOL", raising=False)
    assert get_env_bool("PYNCAT_TEST_BOOL") is False
    assert get_env_bool("PYNCAT_TEST_BOOL", True) is True

    for value in ("true", "1", "yes", "Y", "t"):
        monkeypatch.setenv("PYNCAT_TEST_BOOL", value)
        assert get_env_bool("PYNCAT_TEST_BOOL") is True

    for value in ("false", "0", "no", "off"):
        monkeypatch.setenv("PYNCAT_TEST_BOOL", value)
        assert get_env_bool("PYNCAT_TEST_BOOL") is False


def test_configure_logging_levels():
    assert configure_logging(debug=True) == logging.DEBUG
    assert logging.getLogger("pyncat").level == logging.DEBUG

    assert configure_logging(debug=False) == logging.WARNING
    assert logging.getLogger("pyncat").level == logging.WARNING


def test_configure_logging_from_env(monkeypatch):
    monkeypatch.setenv("PYNCAT_DEBUG", "1")
    assert configure_logging() == logging.DEBUG


def test_debug_events_go_to_stderr(capsys):
    """Test that diagnostic events never reach standard output."""
    configure_logging(debug=True)
    get_logger("pyncat.tests").debug("pipeline.connected", pipeline="StreamPipe")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "pipeline.connected" in captured.err
    assert "pipeline=StreamPipe" in captured.err


def test_debug_events_hidden_by_default(capsys):
    configure_logging(debug=False)
    get_logger("pyncat.tests").debug("pipeline.connected")

    assert "pipeline.connected" not in capsys.readouterr().err


def test_extra_processors():
    """Test that extra processors run before rendering."""
    seen = []

    def record(logger, method_name, event_dict):
        seen.append(event_dict["event"])
        return event_dict

    configure_logging(debug=True, log_processors=[record])
    get_logger("pyncat.tests").info("node.disposed")

    assert seen == ["node.disposed"]
    assert structlog.is_configured()
