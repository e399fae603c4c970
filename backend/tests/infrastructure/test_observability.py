"""Structured logging - JSON records carry request extras when present."""

import json
import logging

from favorites_api.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "favorites_api.test", logging.INFO, __file__, 1, "hello %s", ("world",), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "favorites_api.test"
    assert log["message"] == "hello world"
    assert "timestamp" in log


def test_json_formatter_includes_known_extras_only():
    log = json.loads(JSONFormatter().format(
        _record(favorite_id=7, error_code="BAD_INPUT", unrelated="x"),
    ))
    assert log["favorite_id"] == 7
    assert log["error_code"] == "BAD_INPUT"
    assert "unrelated" not in log
    assert "session_id" not in log


def test_setup_logging_does_not_stack_handlers():
    setup_logging("DEBUG", "text")
    setup_logging("WARNING", "json")
    ours = [h for h in logging.root.handlers if h.get_name() == "favorites_api"]
    assert len(ours) == 1
    assert isinstance(ours[0].formatter, JSONFormatter)
    assert logging.root.level == logging.WARNING
