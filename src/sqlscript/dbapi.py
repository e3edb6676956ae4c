# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: sqlscript
"""
Adapter from a PEP 249 (DB-API 2.0) connection to the runner protocols.
"""

from __future__ import annotations

import sqlite3
import warnings
from collections.abc import Iterator
from typing import Any

from sqlscript.logging import get_logger

# Raised by sqlite3 when one execute call is given several statements.
MULTIPLE_STATEMENTS_MESSAGE = "one statement at a time"

logger = get_logger(__name__)


class DBAPIResultSet:
    """Rows of an executed DB-API cursor."""

    def __init__(self, cursor: Any) -> None:
        self._cursor = cursor

    def column_labels(self) -> list[str]:
        return [str(column[0]) for column in self._cursor.description]

    def __iter__(self) -> Iterator[tuple[str | None, ...]]:
        for row in self._cursor.fetchall():
            yield tuple(None if value is None else str(value) for value in row)


class DBAPIStatement:
    """
    A statement backed by one DB-API cursor.

    Warnings the driver issues through Python's `warnings` module while
    executing are recorded and exposed via `get_warnings`. Text holding
    several statements is handed to `executescript` on drivers that
    offer it (sqlite3), since their `execute` takes one statement.
    """

    def __init__(self, connection: DBAPIConnection) -> None:
        self._connection = connection
        self._cursor = connection.raw.cursor()
        self._warnings: list[Warning] = []
        self.escape_processing = True

    def set_escape_processing(self, enabled: bool) -> None:
        # DB-API has no escape processing switch; the flag is kept for inspection.
        self.escape_processing = enabled

    def execute(self, sql: str) -> bool:
        commits_each_statement = (
            self._connection.emulates_auto_commit and self._connection.get_auto_commit()
        )
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            try:
                self._submit(sql)
            except Exception:
                # The driver may have opened a transaction for the failed statement.
                if commits_each_statement:
                    self._discard_transaction()
                raise
        self._warnings = [w.message for w in caught if isinstance(w.message, Warning)]
        if commits_each_statement:
            self._connection.raw.commit()
        return self._cursor.description is not None

    def _submit(self, sql: str) -> None:
        try:
            self._cursor.execute(sql)
        except sqlite3.ProgrammingError as e:
            if MULTIPLE_STATEMENTS_MESSAGE not in str(e):
                raise
            logger.debug("Submitting multi-statement text as a script")
            self._cursor.executescript(sql)

    def _discard_transaction(self) -> None:
        try:
            self._connection.raw.rollback()
        except Exception as e:
            logger.debug("Ignoring failure rolling back", extra={"error": e})

    def get_warnings(self) -> Warning | None:
        """Get the first warning raised by the last execution."""
        return self._warnings[0] if self._warnings else None

    def get_result_set(self) -> DBAPIResultSet | None:
        if self._cursor.description is None:
            return None
        return DBAPIResultSet(self._cursor)

    def close(self) -> None:
        self._cursor.close()


class DBAPIConnection:
    """
    Wraps a DB-API connection.

    Drivers exposing a boolean `autocommit` attribute (psycopg, sqlite3 with
    explicit transaction control, ...) have it read and written directly.
    For other drivers auto-commit is emulated by committing after every
    successful statement.
    """

    def __init__(self, raw: Any) -> None:
        self.raw = raw
        self._auto_commit = False

    @property
    def emulates_auto_commit(self) -> bool:
        return not isinstance(getattr(self.raw, "autocommit", None), bool)

    def get_auto_commit(self) -> bool:
        if self.emulates_auto_commit:
            return self._auto_commit
        return bool(self.raw.autocommit)

    def set_auto_commit(self, auto_commit: bool) -> None:
        if not self.emulates_auto_commit:
            self.raw.autocommit = auto_commit
        self._auto_commit = auto_commit

    def commit(self) -> None:
        self.raw.commit()

    def rollback(self) -> None:
        self.raw.rollback()

    def create_statement(self) -> DBAPIStatement:
        return DBAPIStatement(self)

    def close(self) -> None:
        self.raw.close()
