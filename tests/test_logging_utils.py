"""Tests for logging helpers."""

import logging

import pytest

from common.logging_utils import configure_logging, extra_context, is_debug_enabled


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


def test_configure_logging_from_env(root_logger, monkeypatch):
    monkeypatch.setenv("MANIFESTGATE_LOG_LEVEL", "debug")
    configure_logging()
    assert root_logger.level == logging.DEBUG


def test_configure_logging_argument_wins(root_logger, monkeypatch):
    monkeypatch.setenv("MANIFESTGATE_LOG_LEVEL", "DEBUG")
    configure_logging("warning")
    assert root_logger.level == logging.WARNING


def test_configure_logging_unknown_level(root_logger):
    configure_logging("chatty")
    assert root_logger.level == logging.INFO


def test_configure_logging_idempotent(root_logger):
    configure_logging("INFO")
    configure_logging("ERROR")
    ours = [h for h in root_logger.handlers if h.get_name() == "manifestgate"]
    assert len(ours) == 1
    assert root_logger.level == logging.ERROR


def test_is_debug_enabled():
    logger = logging.getLogger("manifestgate.test.debug")
    logger.setLevel(logging.DEBUG)
    assert is_debug_enabled(logger)
    logger.setLevel(logging.INFO)
    assert not is_debug_enabled(logger)


def test_extra_context_drops_none():
    assert extra_context(event="x", path=None, component="loader") == {
        "event": "x",
        "component": "loader",
    }
