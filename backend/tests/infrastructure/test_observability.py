"""Structured logging — JSONFormatter fields and request-id stamping."""

import json
import logging

from app.core.request_context import current_request_id
from app.infrastructure.observability import (
    JSONFormatter, RequestIdFilter, setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "app.test", logging.INFO, __file__, 1, "hello %s", ("world",), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_basic_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "app.test"
    assert payload["message"] == "hello world"
    assert "timestamp" in payload


def test_json_formatter_surfaces_extras():
    payload = json.loads(JSONFormatter().format(
        _record(request_id="abcd1234", status_code=201, elapsed_ms=3.2),
    ))
    assert payload["request_id"] == "abcd1234"
    assert payload["status_code"] == 201
    assert payload["elapsed_ms"] == 3.2


def test_json_formatter_omits_missing_extras():
    payload = json.loads(JSONFormatter().format(_record()))
    assert "request_id" not in payload


def test_request_id_filter_reads_context_var():
    token = current_request_id.set("feedbeef")
    try:
        record = _record()
        RequestIdFilter().filter(record)
    finally:
        current_request_id.reset(token)
    assert record.request_id == "feedbeef"


def test_request_id_filter_keeps_explicit_value():
    token = current_request_id.set("feedbeef")
    try:
        record = _record(request_id="explicit")
        RequestIdFilter().filter(record)
    finally:
        current_request_id.reset(token)
    assert record.request_id == "explicit"


def test_setup_logging_replaces_previous_handler():
    root = logging.getLogger()
    level = root.level
    try:
        first = setup_logging("DEBUG", "json")
        second = setup_logging("INFO", "text")
        assert first not in root.handlers
        assert second in root.handlers
        assert root.level == logging.INFO
    finally:
        root.removeHandler(second)
        root.setLevel(level)
