# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: sqlscript
"""
protocols
Capabilities the script runner needs from a database connection
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ResultSetProtocol(Protocol):
    """Rows produced by a statement."""

    def column_labels(self) -> list[str]:
        """Get the label of every column, in order."""
        ...

    def __iter__(self) -> Iterator[Sequence[str | None]]:
        """Iterate over rows as string-coerced column values (None for NULL)."""
        ...


@runtime_checkable
class StatementProtocol(Protocol):
    """A single-use statement created from a connection."""

    def set_escape_processing(self, enabled: bool) -> None:
        """Enable or disable driver-level escape processing."""
        ...

    def execute(self, sql: str) -> bool:
        """Execute SQL text.

        Args:
            sql: The statement (or whole script) to submit

        Returns:
            True if the statement produced a result set

        Raises:
            Exception: Whatever the driver raises on failure
        """
        ...

    def get_warnings(self) -> Any | None:
        """Get the warning attached to the last execution, or None."""
        ...

    def get_result_set(self) -> ResultSetProtocol | None:
        """Get the rows produced by the last execution, if any."""
        ...

    def close(self) -> None:
        """Release the statement."""
        ...


@runtime_checkable
class ConnectionProtocol(Protocol):
    """Connection capability. The script runner never owns it."""

    def get_auto_commit(self) -> bool: ...

    def set_auto_commit(self, auto_commit: bool) -> None: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...

    def create_statement(self) -> StatementProtocol: ...

    def close(self) -> None: ...
