"""Tests for StructuredFormatter and logging configuration."""

from __future__ import annotations

import io
import json
import logging

import pytest

from sqlscript.logging import (
    ROOT_LOGGER_NAME,
    LoggingSettings,
    LogLevel,
    StructuredFormatter,
    configure_logging,
    get_logger,
)


def make_record(msg: str = "Executing statement", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "sqlscript.runner", logging.DEBUG, __file__, 1, msg, None, None
    )
    record.__dict__.update(extra)
    return record


def test_text_format_appends_extra_fields() -> None:
    formatter = StructuredFormatter(include_timestamp=False)
    output = formatter.format(make_record(delimiter="$$", count=2))
    assert output == "Executing statement [DEBUG] delimiter=$$ count=2"


def test_text_format_quotes_whitespace() -> None:
    formatter = StructuredFormatter(include_timestamp=False, include_level=False)
    output = formatter.format(make_record(sql="SELECT 1\n"))
    assert output == 'Executing statement sql="SELECT 1\\n"'


def test_json_format() -> None:
    formatter = StructuredFormatter(json_format=True, include_timestamp=False)
    data = json.loads(formatter.format(make_record(delimiter=";")))
    assert data["message"] == "Executing statement"
    assert data["level"] == "DEBUG"
    assert data["name"] == "sqlscript.runner"
    assert data["delimiter"] == ";"


def test_exception_rendered_as_text() -> None:
    formatter = StructuredFormatter(include_timestamp=False, include_level=False)
    output = formatter.format(make_record(error=RuntimeError("gone")))
    assert output == "Executing statement error=gone"


def test_log_level_conversion() -> None:
    assert LogLevel.from_string("debug") is LogLevel.DEBUG
    assert LogLevel.WARNING.to_stdlib_level() == logging.WARNING
    with pytest.raises(ValueError):
        LogLevel.from_string("loud")


def test_settings_normalize_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SQLSCRIPT_LOGGING_LEVEL", "debug")
    assert LoggingSettings().level == "DEBUG"


def test_settings_expose_stdlib_level() -> None:
    assert LoggingSettings(level="error").stdlib_level == logging.ERROR


def test_settings_reject_unknown_level() -> None:
    with pytest.raises(ValueError):
        LoggingSettings(level="loud")


def test_configure_logging_installs_single_handler() -> None:
    settings = LoggingSettings(level="DEBUG", console_enabled=True)
    configure_logging(settings)
    root = configure_logging(settings)
    try:
        assert root.name == ROOT_LOGGER_NAME
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert root.propagate is False
    finally:
        configure_logging(LoggingSettings(level="WARNING"))


def test_get_logger_is_child_of_package_logger() -> None:
    stream = io.StringIO()
    root = configure_logging(LoggingSettings(level="DEBUG", console_enabled=False))
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter(include_timestamp=False))
    root.addHandler(handler)
    try:
        get_logger("sqlscript.runner").debug(
            "Delimiter changed", extra={"delimiter": "$$"}
        )
        assert stream.getvalue() == "Delimiter changed [DEBUG] delimiter=$$\n"
    finally:
        configure_logging(LoggingSettings(level="WARNING"))
