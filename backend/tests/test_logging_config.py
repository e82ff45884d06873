"""
Tests for gadgetsinc/core/logging_config.py
"""
import json
import logging
import sys

from gadgetsinc.core.logging_config import ColoredFormatter, JSONFormatter


def _record(msg="Tool get_product executed in 3ms", **extra):
    record = logging.LogRecord(
        name="gadgetsinc.services.tools.executor",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_fields(self):
        data = json.loads(JSONFormatter("gadgetsinc-shipping").format(_record(request_id="abc123")))

        assert data["level"] == "INFO"
        assert data["service"] == "gadgetsinc-shipping"
        assert data["message"] == "Tool get_product executed in 3ms"
        assert data["extra"] == {"request_id": "abc123"}

    def test_exception_info(self):
        try:
            raise ValueError("bad frame")
        except ValueError:
            record = _record()
            record.exc_info = sys.exc_info()

        data = json.loads(JSONFormatter().format(record))

        assert data["exception"]["type"] == "ValueError"
        assert data["exception"]["message"] == "bad frame"


def test_colored_formatter_includes_logger_name():
    output = ColoredFormatter().format(_record())

    assert "gadgetsinc.services.tools.executor" in output
    assert "INFO" in output
