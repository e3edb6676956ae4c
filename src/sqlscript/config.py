# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: sqlscript
"""Configuration for the script runner."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DELIMITER = ";"


class ScriptRunnerSettings(BaseSettings):
    """Configuration settings for a script run.

    Settings can be configured via environment variables with the
    `SQLSCRIPT_RUNNER_` prefix.
    """

    stop_on_error: bool = Field(
        default=False, description="Abort the run on the first failing statement"
    )
    throw_warning: bool = Field(
        default=False,
        description="Treat a warning attached to a statement as a failure",
    )
    auto_commit: bool = Field(
        default=False, description="Auto-commit mode to put the connection in"
    )
    send_full_script: bool = Field(
        default=False, description="Submit the whole script as one statement"
    )
    remove_crs: bool = Field(
        default=False, description="Replace CRLF with LF before execution"
    )
    escape_processing: bool = Field(
        default=True, description="Driver-level escape processing flag"
    )
    delimiter: str = Field(
        default=DEFAULT_DELIMITER, description="Statement terminator"
    )
    full_line_delimiter: bool = Field(
        default=False,
        description="Only a line consisting of the delimiter ends a statement",
    )

    @field_validator("delimiter")
    @classmethod
    def validate_delimiter(cls, v: str) -> str:
        """Ensure the delimiter can match something."""
        if not v:
            raise ValueError("Delimiter must not be empty")
        return v

    model_config = SettingsConfigDict(
        env_prefix="SQLSCRIPT_RUNNER_",
        case_sensitive=False,
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
    )
