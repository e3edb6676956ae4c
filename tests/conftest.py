"""Top-level pytest configuration for sqlscript."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

import pytest

# Import modules for their side effects so the error registry is populated
import sqlscript.errors.base
import sqlscript.runner_errors

from sqlscript.config import ScriptRunnerSettings
from sqlscript.runner import ScriptRunner
from sqlscript.writers import CollectingWriter


class FakeResultSet:
    """In-memory result set."""

    def __init__(
        self, labels: list[str], rows: list[Sequence[str | None]], fail: Exception | None = None
    ) -> None:
        self.labels = labels
        self.rows = rows
        self.fail = fail

    def column_labels(self) -> list[str]:
        return list(self.labels)

    def __iter__(self) -> Iterator[Sequence[str | None]]:
        for row in self.rows:
            if self.fail is not None:
                raise self.fail
            yield row


class FakeStatement:
    """Statement that records what it was asked to do on its connection."""

    def __init__(self, connection: FakeConnection) -> None:
        self.connection = connection
        self.escape_processing: bool | None = None
        self.closed = False
        self._sql: str | None = None

    def set_escape_processing(self, enabled: bool) -> None:
        self.escape_processing = enabled

    def execute(self, sql: str) -> bool:
        self._sql = sql
        self.connection.executed.append(sql)
        for fragment, error in self.connection.fail_on.items():
            if fragment in sql:
                raise error
        return self._match(self.connection.results) is not None

    def get_warnings(self) -> Any | None:
        return self._match(self.connection.warn_on)

    def get_result_set(self) -> FakeResultSet | None:
        return self._match(self.connection.results)

    def close(self) -> None:
        self.closed = True
        if self.connection.fail_on_statement_close:
            raise RuntimeError("pool refused to close statement")

    def _match(self, table: dict[str, Any]) -> Any | None:
        for fragment, value in table.items():
            if self._sql is not None and fragment in self._sql:
                return value
        return None


class FakeConnection:
    """
    Connection double capturing submitted SQL and transaction calls.

    Statements containing a key of `fail_on` raise the mapped exception,
    keys of `results` produce the mapped result set and keys of `warn_on`
    attach the mapped warning.
    """

    def __init__(self, auto_commit: bool = True) -> None:
        self.auto_commit = auto_commit
        self.executed: list[str] = []
        self.calls: list[str] = []
        self.statements: list[FakeStatement] = []
        self.fail_on: dict[str, Exception] = {}
        self.results: dict[str, FakeResultSet] = {}
        self.warn_on: dict[str, Any] = {}
        self.fail_on_set_auto_commit: Exception | None = None
        self.fail_on_commit: Exception | None = None
        self.fail_on_rollback: Exception | None = None
        self.fail_on_statement_close = False

    def get_auto_commit(self) -> bool:
        return self.auto_commit

    def set_auto_commit(self, auto_commit: bool) -> None:
        self.calls.append(f"set_auto_commit({auto_commit})")
        if self.fail_on_set_auto_commit is not None:
            raise self.fail_on_set_auto_commit
        self.auto_commit = auto_commit

    def commit(self) -> None:
        self.calls.append("commit")
        if self.fail_on_commit is not None:
            raise self.fail_on_commit

    def rollback(self) -> None:
        self.calls.append("rollback")
        if self.fail_on_rollback is not None:
            raise self.fail_on_rollback

    def create_statement(self) -> FakeStatement:
        statement = FakeStatement(self)
        self.statements.append(statement)
        return statement

    def close(self) -> None:
        self.calls.append("close")

    def executed_sql(self) -> list[str]:
        """Submitted statements with surrounding whitespace removed."""
        return [sql.strip() for sql in self.executed]


@pytest.fixture
def connection() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def log_writer() -> CollectingWriter:
    return CollectingWriter()


@pytest.fixture
def error_writer() -> CollectingWriter:
    return CollectingWriter()


@pytest.fixture
def settings() -> ScriptRunnerSettings:
    """Runner settings isolated from the environment and any .env file."""
    return ScriptRunnerSettings(
        _env_file=None,
        stop_on_error=False,
        throw_warning=False,
        auto_commit=True,
        send_full_script=False,
        remove_crs=False,
        escape_processing=True,
        delimiter=";",
        full_line_delimiter=False,
    )


@pytest.fixture
def runner(
    connection: FakeConnection,
    settings: ScriptRunnerSettings,
    log_writer: CollectingWriter,
    error_writer: CollectingWriter,
) -> ScriptRunner:
    return ScriptRunner(
        connection,
        settings=settings,
        log_writer=log_writer,
        error_writer=error_writer,
    )


@pytest.fixture
def make_result_set() -> type[FakeResultSet]:
    return FakeResultSet
