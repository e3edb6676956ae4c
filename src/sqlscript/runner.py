# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: sqlscript
"""
Script runner.

Executes a stream of SQL text against a connection, either as one
submission or statement by statement, splitting on a delimiter that a
`-- @DELIMITER <token>` comment can change mid-script.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Final

from sqlscript.config import ScriptRunnerSettings
from sqlscript.logging import get_logger
from sqlscript.protocols import ConnectionProtocol, StatementProtocol
from sqlscript.result import Failure, Result, Success
from sqlscript.runner_errors import (
    ConnectionConfigurationError,
    MalformedScriptError,
    RunExecutionFailure,
    ScriptRunnerError,
    StatementExecutionError,
    TransactionCommitError,
    WarningEscalationError,
)
from sqlscript.writers import ScriptWriter

LINE_SEPARATOR: Final = "\n"

DELIMITER_PATTERN: Final = re.compile(
    r"^\s*((--)|(//))?\s*(//)?\s*@DELIMITER\s+([^\s]+)", re.IGNORECASE
)

logger = get_logger(__name__)


@dataclass
class ParseState:
    """Mutable state of one incremental run."""

    delimiter: str
    command: list[str] = field(default_factory=list)

    def append(self, text: str) -> None:
        self.command.append(text)

    def text(self) -> str:
        return "".join(self.command)

    def is_blank(self) -> bool:
        return not self.text().strip()

    def clear(self) -> None:
        self.command.clear()


def _describe(error: Exception) -> str:
    """Text of the underlying failure, without the error code prefix."""
    if isinstance(error, StatementExecutionError) and error.__cause__ is not None:
        return str(error.__cause__)
    if isinstance(error, ScriptRunnerError):
        return error.message
    return str(error)


def read_lines(reader: Iterable[str]) -> Iterator[str]:
    """Yield lines from a text source with their line terminator removed."""
    for line in reader:
        if line.endswith("\n"):
            line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
        yield line


class ScriptRunner:
    """
    Runs SQL scripts against a single connection.

    The runner is bound to one connection for its whole lifetime and does not
    own it: the caller opens and closes both the connection and the script
    source. Settings may be changed between runs; each run works on a copy.
    """

    def __init__(
        self,
        connection: ConnectionProtocol,
        settings: ScriptRunnerSettings | None = None,
        log_writer: ScriptWriter | None = None,
        error_writer: ScriptWriter | None = None,
    ) -> None:
        """Initialize a script runner.

        Args:
            connection: Connection every statement is executed on
            settings: Run configuration (defaults read from the environment)
            log_writer: Sink for echoed lines, statements and result rows
            error_writer: Sink for failure diagnostics
        """
        self.connection = connection
        self.settings = settings or ScriptRunnerSettings()
        self.log_writer = log_writer
        self.error_writer = error_writer

    def set_stop_on_error(self, stop_on_error: bool) -> None:
        self.settings.stop_on_error = stop_on_error

    def set_throw_warning(self, throw_warning: bool) -> None:
        self.settings.throw_warning = throw_warning

    def set_auto_commit(self, auto_commit: bool) -> None:
        self.settings.auto_commit = auto_commit

    def set_send_full_script(self, send_full_script: bool) -> None:
        self.settings.send_full_script = send_full_script

    def set_remove_crs(self, remove_crs: bool) -> None:
        self.settings.remove_crs = remove_crs

    def set_escape_processing(self, escape_processing: bool) -> None:
        self.settings.escape_processing = escape_processing

    def set_delimiter(self, delimiter: str) -> None:
        self.settings.delimiter = delimiter

    def set_full_line_delimiter(self, full_line_delimiter: bool) -> None:
        self.settings.full_line_delimiter = full_line_delimiter

    def set_log_writer(self, log_writer: ScriptWriter | None) -> None:
        self.log_writer = log_writer

    def set_error_writer(self, error_writer: ScriptWriter | None) -> None:
        self.error_writer = error_writer

    def run_script(self, reader: Iterable[str]) -> None:
        """
        Run a script read from a line source.

        Args:
            reader: Open text source; iterated to exhaustion, never closed

        Raises:
            ConnectionConfigurationError: If auto-commit could not be set
            RunExecutionFailure: If reading or executing aborted the run
            MalformedScriptError: If the last statement lacks its delimiter
        """
        settings = self.settings.model_copy()
        logger.debug(
            "Running script",
            extra={
                "full_script": settings.send_full_script,
                "delimiter": settings.delimiter,
                "stop_on_error": settings.stop_on_error,
            },
        )
        self._set_auto_commit(settings)
        try:
            if settings.send_full_script:
                self._execute_full_script(reader, settings)
            else:
                self._execute_line_by_line(reader, settings)
        finally:
            self._rollback_connection()

    def close_connection(self) -> None:
        """Close the bound connection, ignoring any failure."""
        try:
            self.connection.close()
        except Exception as e:
            logger.debug("Ignoring failure closing connection", extra={"error": e})

    def _execute_full_script(
        self, reader: Iterable[str], settings: ScriptRunnerSettings
    ) -> None:
        script: list[str] = []
        try:
            for line in read_lines(reader):
                script.append(line)
                script.append(LINE_SEPARATOR)
            command = "".join(script)
            self._println(command)
            self._execute_statement(command, settings)
            self._commit_connection()
        except Exception as e:
            command = "".join(script)
            message = f"Error executing: {command}.  Cause: {_describe(e)}"
            self._println_error(message)
            raise RunExecutionFailure(message, command=command) from e

    def _execute_line_by_line(
        self, reader: Iterable[str], settings: ScriptRunnerSettings
    ) -> None:
        state = ParseState(delimiter=settings.delimiter)
        try:
            for line in read_lines(reader):
                self._handle_line(state, line, settings)
            self._commit_connection()
        except Exception as e:
            command = state.text()
            message = f"Error executing: {command}.  Cause: {_describe(e)}"
            self._println_error(message)
            raise RunExecutionFailure(message, command=command) from e
        self._check_for_missing_line_terminator(state)

    def _set_auto_commit(self, settings: ScriptRunnerSettings) -> None:
        auto_commit = settings.auto_commit
        try:
            if auto_commit != self.connection.get_auto_commit():
                self.connection.set_auto_commit(auto_commit)
        except Exception as e:
            raise ConnectionConfigurationError(
                f"Could not set AutoCommit to {auto_commit}. Cause: {e}",
                auto_commit=auto_commit,
            ) from e

    def _commit_connection(self) -> None:
        try:
            if not self.connection.get_auto_commit():
                self.connection.commit()
        except Exception as e:
            raise TransactionCommitError(
                f"Could not commit transaction. Cause: {e}"
            ) from e

    def _rollback_connection(self) -> None:
        # Runs on every exit path; a failure here must not mask the run's outcome.
        try:
            if not self.connection.get_auto_commit():
                self.connection.rollback()
        except Exception as e:
            logger.debug("Ignoring failure rolling back", extra={"error": e})

    def _check_for_missing_line_terminator(self, state: ParseState) -> None:
        if state.is_blank():
            return
        command = state.text()
        message = (
            f"Line missing end-of-line terminator ({state.delimiter}) => {command}"
        )
        self._println_error(f"Error executing: {command}.  Cause: {message}")
        raise MalformedScriptError(
            message, command=command, delimiter=state.delimiter
        )

    def _handle_line(
        self, state: ParseState, line: str, settings: ScriptRunnerSettings
    ) -> None:
        trimmed_line = line.strip()
        if self._line_is_comment(trimmed_line):
            match = DELIMITER_PATTERN.search(trimmed_line)
            if match:
                state.delimiter = match.group(5)
                logger.debug(
                    "Delimiter changed", extra={"delimiter": state.delimiter}
                )
            self._println(trimmed_line)
        elif self._command_ready_to_execute(trimmed_line, state.delimiter, settings):
            # Anything after the last delimiter on the line is dropped.
            state.append(line[: line.rfind(state.delimiter)])
            state.append(LINE_SEPARATOR)
            command = state.text()
            self._println(command)
            self._execute_statement(command, settings)
            state.clear()
        elif trimmed_line:
            state.append(line)
            state.append(LINE_SEPARATOR)

    @staticmethod
    def _line_is_comment(trimmed_line: str) -> bool:
        return trimmed_line.startswith("//") or trimmed_line.startswith("--")

    @staticmethod
    def _command_ready_to_execute(
        trimmed_line: str, delimiter: str, settings: ScriptRunnerSettings
    ) -> bool:
        if settings.full_line_delimiter:
            return trimmed_line == delimiter
        return delimiter in trimmed_line

    def _execute_statement(self, command: str, settings: ScriptRunnerSettings) -> None:
        sql = command.replace("\r\n", "\n") if settings.remove_crs else command
        statement = self.connection.create_statement()
        try:
            statement.set_escape_processing(settings.escape_processing)
            logger.debug("Executing statement", extra={"sql": sql})
            outcome = self._submit(statement, sql, settings)
            if outcome.is_failure:
                if settings.stop_on_error:
                    raise outcome.error
                self._println_error(
                    f"Error executing: {command}.  Cause: {_describe(outcome.error)}"
                )
            self._print_results(statement, outcome.unwrap_or(False))
        finally:
            self._close_statement(statement)

    def _submit(
        self, statement: StatementProtocol, sql: str, settings: ScriptRunnerSettings
    ) -> Result[bool, StatementExecutionError]:
        try:
            has_results = statement.execute(sql)
        except Exception as e:
            error = StatementExecutionError(
                f"Error executing: {sql}.  Cause: {e}", statement=sql
            )
            error.__cause__ = e
            return Failure(error)

        # Warnings are only checked when they can stop the run.
        if settings.stop_on_error and settings.throw_warning:
            warning = statement.get_warnings()
            if warning is not None:
                return Failure(
                    WarningEscalationError(
                        f"Warning executing: {sql}.  Warning: {warning}",
                        statement=sql,
                        warning=warning,
                    )
                )
        return Success(bool(has_results))

    def _print_results(self, statement: StatementProtocol, has_results: bool) -> None:
        if not has_results:
            return
        try:
            result_set = statement.get_result_set()
            if result_set is None:
                return
            self._println(
                "".join(f"{label}\t" for label in result_set.column_labels())
            )
            for row in result_set:
                self._println(
                    "".join(
                        f"{'null' if value is None else value}\t" for value in row
                    )
                )
        except Exception as e:
            self._println_error(f"Error printing results: {e}")

    @staticmethod
    def _close_statement(statement: StatementProtocol) -> None:
        # Some connection pools fail when closing statements; the result stands.
        try:
            statement.close()
        except Exception as e:
            logger.debug("Ignoring failure closing statement", extra={"error": e})

    def _println(self, text: str) -> None:
        if self.log_writer is not None:
            self.log_writer.write_line(text)

    def _println_error(self, text: str) -> None:
        if self.error_writer is not None:
            self.error_writer.write_line(text)
