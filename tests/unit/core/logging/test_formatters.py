"""
Tests for log formatters.

Tests JSONFormatter, TextFormatter, ColoredFormatter, and get_formatter.
"""

import json
import logging

import pytest

from src.quickfire.core.logging.formatters import (
    ColoredFormatter,
    JSONFormatter,
    TextFormatter,
    extra_fields,
    get_formatter,
)


def make_record(msg="Request completed", level=logging.INFO, **extra):
    record = logging.LogRecord(
        name="quickfire.network",
        level=level,
        pathname="network_manager.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestExtraFields:
    def test_only_custom_attributes(self):
        record = make_record(status_code=200, _private=1)

        assert extra_fields(record) == {"status_code": 200}


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_basic_format(self):
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "quickfire.network"
        assert data["message"] == "Request completed"
        assert data["timestamp"].endswith("+00:00")

    def test_includes_extra_fields(self):
        record = make_record(method="GET", status_code=200, duration_ms=12.5)

        data = json.loads(JSONFormatter().format(record))

        assert data["method"] == "GET"
        assert data["status_code"] == 200
        assert data["duration_ms"] == 12.5

    def test_non_serializable_values(self):
        record = make_record(level_obj=object())

        data = json.loads(JSONFormatter().format(record))

        assert "object" in data["level_obj"]

    def test_exception_info(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            import sys
            record = make_record()
            record.exc_info = sys.exc_info()

        data = json.loads(JSONFormatter().format(record))

        assert "RuntimeError: boom" in data["exception"]


class TestTextFormatter:
    """Tests for TextFormatter."""

    def test_format(self):
        output = TextFormatter().format(make_record(method="GET", status_code=200))

        assert "[INFO]" in output
        assert "[quickfire.network]" in output
        assert "Request completed" in output
        assert output.endswith("method=GET status_code=200")


class TestColoredFormatter:
    """Tests for ColoredFormatter."""

    def test_colors_level(self):
        output = ColoredFormatter().format(make_record(level=logging.ERROR))

        assert "\033[31mERROR\033[0m" in output

    def test_restores_levelname(self):
        record = make_record(level=logging.WARNING)

        ColoredFormatter().format(record)

        assert record.levelname == "WARNING"


class TestGetFormatter:
    @pytest.mark.parametrize("name, cls", [
        ("json", JSONFormatter),
        ("TEXT", TextFormatter),
        ("colored", ColoredFormatter),
    ])
    def test_known(self, name, cls):
        assert isinstance(get_formatter(name), cls)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown format type"):
            get_formatter("xml")
