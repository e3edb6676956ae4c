# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
"""
SQLAlchemy engine and connection helpers for running scripts.
"""

from __future__ import annotations

from collections.abc import Generator, Iterable
from contextlib import contextmanager
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from sqlscript.config import ScriptRunnerSettings
from sqlscript.dbapi import DBAPIConnection
from sqlscript.logging import get_logger
from sqlscript.runner import ScriptRunner
from sqlscript.writers import ScriptWriter

logger = get_logger(__name__)


class EngineSettings(BaseSettings):
    """Database settings, read from `SQLSCRIPT_DB_*` environment variables."""

    url: str = Field(default="sqlite://", description="SQLAlchemy database URL")
    echo: bool = Field(default=False, description="Echo SQLAlchemy activity")
    pool_size: int | None = None
    max_overflow: int | None = None
    pool_timeout: int | None = None
    pool_recycle: int | None = None
    connect_args: dict[str, Any] = Field(default_factory=dict)

    model_config = SettingsConfigDict(
        env_prefix="SQLSCRIPT_DB_",
        case_sensitive=False,
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
    )


class ScriptEngineFactory:
    """
    Factory for the SQLAlchemy Engine scripts are run against.
    """

    def __init__(self, settings: EngineSettings | None = None):
        self.settings = settings or EngineSettings()
        self._engine: Engine | None = None

    def get_engine(self) -> Engine:
        if self._engine is None:
            # Pool options are only passed when set; not every pool accepts them.
            pool_options = {
                name: value
                for name in ("pool_size", "max_overflow", "pool_timeout", "pool_recycle")
                if (value := getattr(self.settings, name)) is not None
            }
            self._engine = create_engine(
                self.settings.url,
                echo=self.settings.echo,
                connect_args=self.settings.connect_args,
                **pool_options,
            )
        return self._engine

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None


@contextmanager
def raw_connection(factory: ScriptEngineFactory) -> Generator[DBAPIConnection, None, None]:
    """
    Context manager for acquiring and releasing a driver-level connection.

    The pooled connection is returned to the pool on exit.
    """
    pooled = factory.get_engine().raw_connection()
    try:
        yield DBAPIConnection(pooled.dbapi_connection)
    finally:
        try:
            pooled.close()
        except Exception as e:
            logger.debug("Ignoring failure releasing connection", extra={"error": e})


def run_script(
    factory: ScriptEngineFactory,
    reader: Iterable[str],
    settings: ScriptRunnerSettings | None = None,
    log_writer: ScriptWriter | None = None,
    error_writer: ScriptWriter | None = None,
) -> None:
    """
    Run one script on a fresh connection from the factory's engine.

    Args:
        factory: Engine factory to take the connection from
        reader: Open text source holding the script
        settings: Run configuration
        log_writer: Sink for echoed lines, statements and result rows
        error_writer: Sink for failure diagnostics
    """
    with raw_connection(factory) as connection:
        runner = ScriptRunner(
            connection,
            settings=settings,
            log_writer=log_writer,
            error_writer=error_writer,
        )
        runner.run_script(reader)
