"""Tests for the shared logging setup."""

import json
import logging

from common.logging import JsonFormatter, configure_logging


def test_json_formatter_includes_extra_fields():
    record = logging.makeLogRecord(
        {"name": "app.test", "levelname": "INFO", "msg": "GET %s", "args": ("/health",), "request_id": "abc"}
    )

    doc = json.loads(JsonFormatter().format(record))

    assert doc["message"] == "GET /health"
    assert doc["logger"] == "app.test"
    assert doc["request_id"] == "abc"


def test_configure_logging_does_not_stack_handlers():
    root = logging.getLogger()

    configure_logging("debug")
    configure_logging("warning", json_format=True)

    ours = [h for h in root.handlers if getattr(h, "_common_handler", False)]
    assert len(ours) == 1
    assert isinstance(ours[0].formatter, JsonFormatter)
    assert root.level == logging.WARNING
