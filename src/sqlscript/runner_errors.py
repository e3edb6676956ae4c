# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: sqlscript
"""
runner_errors
Script runner error definitions for sqlscript
"""

from __future__ import annotations

from typing import Any, Final

from sqlscript.errors.base import ErrorCategory, ErrorCode, ErrorSeverity, SQLScriptError

# Define error category and codes
SCRIPT_RUNNER = ErrorCategory.get_or_create("SCRIPT_RUNNER")
SCRIPT_RUNNER_ERROR: Final = ErrorCode.get_or_create(
    "SCRIPT_RUNNER_ERROR", SCRIPT_RUNNER
)
SCRIPT_RUNNER_CONNECTION_CONFIG: Final = ErrorCode.get_or_create(
    "SCRIPT_RUNNER_CONNECTION_CONFIG", SCRIPT_RUNNER
)
SCRIPT_RUNNER_RUN_FAILED: Final = ErrorCode.get_or_create(
    "SCRIPT_RUNNER_RUN_FAILED", SCRIPT_RUNNER
)
SCRIPT_RUNNER_STATEMENT_FAILED: Final = ErrorCode.get_or_create(
    "SCRIPT_RUNNER_STATEMENT_FAILED", SCRIPT_RUNNER
)
SCRIPT_RUNNER_WARNING: Final = ErrorCode.get_or_create(
    "SCRIPT_RUNNER_WARNING", SCRIPT_RUNNER
)
SCRIPT_RUNNER_MALFORMED_SCRIPT: Final = ErrorCode.get_or_create(
    "SCRIPT_RUNNER_MALFORMED_SCRIPT", SCRIPT_RUNNER
)
SCRIPT_RUNNER_COMMIT_FAILED: Final = ErrorCode.get_or_create(
    "SCRIPT_RUNNER_COMMIT_FAILED", SCRIPT_RUNNER
)


class ScriptRunnerError(SQLScriptError):
    """Base class for all script runner errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = SCRIPT_RUNNER_ERROR,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize a script runner error.

        Args:
            message: Human-readable error message
            code: Error code
            severity: How severe this error is
            context: Additional context information
            **kwargs: Additional context keys (will be merged with context)
        """
        super().__init__(
            message,
            code=code,
            severity=severity,
            context=context,
            **kwargs,
        )


class ConnectionConfigurationError(ScriptRunnerError):
    """The connection's auto-commit flag could not be reconciled."""

    def __init__(self, message: str, auto_commit: bool, **kwargs: Any) -> None:
        super().__init__(
            message,
            code=SCRIPT_RUNNER_CONNECTION_CONFIG,
            severity=ErrorSeverity.CRITICAL,
            auto_commit=auto_commit,
            **kwargs,
        )
        self.auto_commit = auto_commit


class RunExecutionFailure(ScriptRunnerError):
    """A run was aborted; carries the command text assembled so far."""

    def __init__(self, message: str, command: str, **kwargs: Any) -> None:
        super().__init__(
            message,
            code=SCRIPT_RUNNER_RUN_FAILED,
            command=command,
            **kwargs,
        )
        self.command = command


class StatementExecutionError(ScriptRunnerError):
    """A single statement failed to execute."""

    def __init__(
        self,
        message: str,
        statement: str,
        code: ErrorCode = SCRIPT_RUNNER_STATEMENT_FAILED,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message,
            code=code,
            severity=severity,
            statement=statement,
            **kwargs,
        )
        self.statement = statement


class WarningEscalationError(StatementExecutionError):
    """The driver attached a warning to a statement and warnings are escalated.

    Some databases (Oracle for one) report compilation errors in
    CREATE PROCEDURE / FUNCTION bodies as warnings rather than failures.
    """

    def __init__(self, message: str, statement: str, warning: Any) -> None:
        super().__init__(
            message,
            statement=statement,
            code=SCRIPT_RUNNER_WARNING,
            severity=ErrorSeverity.WARNING,
        )
        self.warning = warning


class MalformedScriptError(ScriptRunnerError):
    """The script ended with a statement missing its terminating delimiter."""

    def __init__(self, message: str, command: str, delimiter: str) -> None:
        super().__init__(
            message,
            code=SCRIPT_RUNNER_MALFORMED_SCRIPT,
            command=command,
            delimiter=delimiter,
        )
        self.command = command
        self.delimiter = delimiter


class TransactionCommitError(ScriptRunnerError):
    """Committing the run's transaction failed."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, code=SCRIPT_RUNNER_COMMIT_FAILED, **kwargs)
