# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: sqlscript
"""
Logger implementation for sqlscript.

This module configures Python's standard logging for the `sqlscript`
package, adding structured output of the `extra` fields passed with each
record.
"""

from __future__ import annotations

import datetime
import enum
import json
import logging
import sys
import threading
from logging import StreamHandler
from typing import Any

from sqlscript.logging.config import LoggingSettings, LogLevel

ROOT_LOGGER_NAME = "sqlscript"

_configure_lock = threading.Lock()
_configured = False

# Attributes every LogRecord carries; anything else came in through `extra`.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


class StructuredFormatter(logging.Formatter):
    """Formatter that renders `extra` fields as key=value pairs or JSON."""

    def __init__(
        self,
        json_format: bool = False,
        include_timestamp: bool = True,
        include_level: bool = True,
    ) -> None:
        """Initialize a structured formatter.

        Args:
            json_format: Whether to format logs as JSON
            include_timestamp: Whether to include timestamps in logs
            include_level: Whether to include log level in logs
        """
        self.json_format = json_format
        self.include_timestamp = include_timestamp
        self.include_level = include_level

        fmt = "%(message)s"
        if include_timestamp:
            fmt = "%(asctime)s " + fmt
        if include_level and not json_format:
            fmt = fmt + " [%(levelname)s]"

        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record with structured data.

        Args:
            record: The log record to format

        Returns:
            Formatted log string
        """
        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS
        }

        if self.json_format:
            return self._format_json(record, extra)
        message = super().format(record)
        return self._format_text(message, extra)

    def _format_json(self, record: logging.LogRecord, extra: dict[str, Any]) -> str:
        log_data = {
            "message": record.getMessage(),
            "name": record.name,
            **{k: self._format_value(v) for k, v in extra.items()},
        }

        if self.include_level:
            log_data["level"] = record.levelname

        if self.include_timestamp:
            log_data["timestamp"] = self.formatTime(record, self.datefmt)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
            log_data["error"] = str(record.exc_info[1])

        return json.dumps(log_data)

    def _format_text(self, message: str, extra: dict[str, Any]) -> str:
        if not extra:
            return message

        ctx_str = " ".join(f"{k}={self._format_value(v)}" for k, v in extra.items())
        return f"{message} {ctx_str}"

    def _format_value(self, value: Any) -> str:
        """Format a value for text output.

        Args:
            value: Value to format

        Returns:
            Formatted value string
        """
        if isinstance(value, str):
            # Quote strings that contain whitespace
            if any(c.isspace() for c in value):
                return json.dumps(value)
            return value
        if isinstance(value, datetime.datetime | datetime.date):
            return value.isoformat()
        if isinstance(value, enum.Enum):
            return value.name
        if isinstance(value, BaseException):
            return str(value)
        try:
            return json.dumps(value)
        except TypeError:
            return str(value)


def configure_logging(settings: LoggingSettings | None = None) -> logging.Logger:
    """
    Configure the package root logger from settings.

    Replaces any handlers previously installed on the `sqlscript` logger.

    Args:
        settings: Logging settings (loaded from the environment if None)

    Returns:
        The configured package root logger
    """
    global _configured

    settings = settings or LoggingSettings.load()
    root = logging.getLogger(ROOT_LOGGER_NAME)

    with _configure_lock:
        root.setLevel(settings.stdlib_level)

        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()

        formatter = StructuredFormatter(
            json_format=settings.json_format,
            include_timestamp=settings.include_timestamp,
            include_level=settings.include_level,
        )

        if settings.console_enabled:
            console = StreamHandler(sys.stderr)
            console.setFormatter(formatter)
            root.addHandler(console)

        if settings.file_enabled and settings.file_path:
            file_handler = logging.FileHandler(settings.file_path)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

        root.propagate = False
        _configured = True

    return root


def get_logger(name: str, level: LogLevel | None = None) -> logging.Logger:
    """Get a logger for the specified name.

    The package root logger is configured from the environment on first use.

    Args:
        name: Logger name (typically __name__)
        level: Optional log level override

    Returns:
        Configured logger instance
    """
    if not _configured:
        configure_logging()

    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level.to_stdlib_level())
    return logger
