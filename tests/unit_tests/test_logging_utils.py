"""Unit tests for structured logging helpers."""

from __future__ import annotations

import json
import logging

import pytest

from file_converter.logging_utils import ROOT_LOGGER, JsonFormatter, configure_logging, log_event


def test_log_event_attaches_fields(caplog: pytest.LogCaptureFixture) -> None:
    """Carry event name and fields on the record."""
    logger = logging.getLogger(f"{ROOT_LOGGER}.tests")
    with caplog.at_level(logging.DEBUG, logger=ROOT_LOGGER):
        log_event(logger, "dispatch.route", category="image", target="png", skipped=None)

    record = caplog.records[-1]
    assert record.getMessage() == "dispatch.route category=image target=png"
    assert record.__dict__["event"] == "dispatch.route"
    assert record.__dict__["category"] == "image"
    assert "skipped" not in record.__dict__


def test_log_event_renames_reserved_keys(caplog: pytest.LogCaptureFixture) -> None:
    """Avoid clobbering LogRecord attributes such as ``filename``."""
    logger = logging.getLogger(f"{ROOT_LOGGER}.tests")
    with caplog.at_level(logging.DEBUG, logger=ROOT_LOGGER):
        log_event(logger, "delivery.done", level=logging.INFO, filename="a.png")

    record = caplog.records[-1]
    assert record.__dict__["field_filename"] == "a.png"
    assert record.filename.endswith(".py")


def test_log_event_skips_disabled_level(caplog: pytest.LogCaptureFixture) -> None:
    """Emit nothing when the level is filtered out."""
    logger = logging.getLogger(f"{ROOT_LOGGER}.tests")
    with caplog.at_level(logging.WARNING, logger=ROOT_LOGGER):
        log_event(logger, "dispatch.start", target="pdf")
    assert not caplog.records


def test_json_formatter_merges_extra() -> None:
    """Render one JSON object including extra attributes."""
    record = logging.LogRecord(ROOT_LOGGER, logging.WARNING, __file__, 1, "hello %s", ("x",), None)
    record.event = "dispatch.done"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "hello x"
    assert payload["level"] == "WARNING"
    assert payload["event"] == "dispatch.done"


def test_configure_logging_replaces_handler() -> None:
    """Keep a single handler across repeated configuration."""
    logger = configure_logging(logging.DEBUG, json_mode=True)
    configure_logging(logging.INFO)
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO
    assert not isinstance(logger.handlers[0].formatter, JsonFormatter)
