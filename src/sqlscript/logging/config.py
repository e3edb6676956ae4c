# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: sqlscript
"""
Configuration for sqlscript logging, loaded from the environment.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    """Levels accepted by `SQLSCRIPT_LOGGING_LEVEL`."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_stdlib_level(self) -> int:
        return int(getattr(logging, self.value))

    @classmethod
    def from_string(cls, value: str) -> LogLevel:
        """Parse a level name, ignoring case.

        Raises:
            ValueError: If the name is not a known level
        """
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise ValueError(f"Invalid log level: {value}") from None


class LoggingSettings(BaseSettings):
    """
    Configuration settings for sqlscript logging.
    Loads from environment variables with the `SQLSCRIPT_LOGGING_` prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="SQLSCRIPT_LOGGING_",
        extra="ignore",
        case_sensitive=False,
        frozen=False,
    )

    level: str = Field(default=LogLevel.WARNING.value, description="Log level")
    json_format: bool = Field(default=False, description="Enable JSON log format")
    include_timestamp: bool = Field(
        default=True, description="Include timestamp in logs"
    )
    include_level: bool = Field(default=True, description="Include log level in logs")
    console_enabled: bool = Field(default=True, description="Enable console logging")
    file_enabled: bool = Field(default=False, description="Enable file logging")
    file_path: str | None = Field(default=None, description="Path to log file")

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: Any) -> str:
        """Validate that the level is a valid log level."""
        if isinstance(v, LogLevel):
            return v.value
        if not isinstance(v, str):
            raise ValueError(f"Log level must be a string, got {type(v).__name__}")
        try:
            return LogLevel.from_string(v).value
        except ValueError:
            raise ValueError(f"Invalid log level: {v}")

    @property
    def stdlib_level(self) -> int:
        """The configured level as a standard library logging level."""
        return LogLevel.from_string(self.level).to_stdlib_level()

    @classmethod
    def load(cls) -> LoggingSettings:
        """
        Load logging settings from environment variables or defaults.
        Returns:
            LoggingSettings: Loaded and validated settings instance.
        """
        return cls()
