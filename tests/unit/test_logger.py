"""Tests for logging setup and context-tagged loggers."""

import io
import json
import logging

import pytest

from src.common.logger import get_logger, set_global_debug_mode, setup_logging


@pytest.fixture
def stream():
    stream = io.StringIO()
    yield stream
    setup_logging(level="WARNING")


def test_context_prefix(stream):
    setup_logging(level="INFO", stream=stream)

    get_logger("tracker.test.context", context="board").info("Rolled back move")

    assert "[board] Rolled back move" in stream.getvalue()


def test_no_context_no_prefix(stream):
    setup_logging(level="INFO", stream=stream)

    get_logger("tracker.test.plain").info("started")

    assert "tracker.test.plain: started" in stream.getvalue()
    assert "[None]" not in stream.getvalue()


def test_json_format(stream):
    setup_logging(level="INFO", format="json", stream=stream)

    get_logger("tracker.test.json", context="api").warning('bad "status" value')

    entry = json.loads(stream.getvalue().strip())
    assert entry["level"] == "WARNING"
    assert entry["name"] == "tracker.test.json"
    assert entry["message"] == '[api] bad "status" value'


def test_level_filters(stream):
    setup_logging(level="WARNING", stream=stream)

    get_logger("tracker.test.level").info("hidden")

    assert stream.getvalue() == ""


def test_debug_mode_lowers_logger_level():
    set_global_debug_mode(True)
    try:
        logger = get_logger("tracker.test.debug")
    finally:
        set_global_debug_mode(False)

    assert logger.logger.level == logging.DEBUG
