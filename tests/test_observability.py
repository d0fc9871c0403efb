"""Tests for logging setup."""

import json
import logging

from folio.observability import JSONFormatter, setup_logging


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord("folio.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_basic_fields(self):
        data = json.loads(JSONFormatter().format(_record()))
        assert data["level"] == "INFO"
        assert data["logger"] == "folio.test"
        assert data["message"] == "hello world"
        assert "timestamp" in data

    def test_extra_fields_surface(self):
        data = json.loads(JSONFormatter().format(_record(store="genres", duration_ms=1.5)))
        assert data["store"] == "genres"
        assert data["duration_ms"] == 1.5
        assert "path" not in data


class TestSetupLogging:
    def test_replaces_own_handler(self):
        root = logging.getLogger()
        before = list(root.handlers)
        level = root.level
        try:
            setup_logging("DEBUG", "json")
            setup_logging("WARNING", "text")
            ours = [h for h in root.handlers if getattr(h, "_folio", False)]
            assert len(ours) == 1
            assert not isinstance(ours[0].formatter, JSONFormatter)
            assert root.level == logging.WARNING
        finally:
            for handler in list(root.handlers):
                if handler not in before:
                    root.removeHandler(handler)
            root.setLevel(level)
