# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: sqlscript

"""
sqlscript: run SQL scripts against a database connection.

Scripts are split into statements on a configurable delimiter (changeable
mid-script with a `-- @DELIMITER <token>` comment) or submitted whole, with
commit/rollback handled around the run.
"""

from __future__ import annotations

from sqlscript.config import DEFAULT_DELIMITER, ScriptRunnerSettings
from sqlscript.dbapi import DBAPIConnection
from sqlscript.engine import EngineSettings, ScriptEngineFactory, raw_connection, run_script
from sqlscript.protocols import ConnectionProtocol, ResultSetProtocol, StatementProtocol
from sqlscript.runner import ParseState, ScriptRunner
from sqlscript.runner_errors import (
    ConnectionConfigurationError,
    MalformedScriptError,
    RunExecutionFailure,
    ScriptRunnerError,
    StatementExecutionError,
    TransactionCommitError,
    WarningEscalationError,
)
from sqlscript.writers import (
    CollectingWriter,
    LoggerWriter,
    NullWriter,
    ScriptWriter,
    StreamWriter,
)

__all__ = [
    # Runner
    "DEFAULT_DELIMITER",
    "ParseState",
    "ScriptRunner",
    "ScriptRunnerSettings",
    # Connections
    "ConnectionProtocol",
    "DBAPIConnection",
    "EngineSettings",
    "ResultSetProtocol",
    "ScriptEngineFactory",
    "StatementProtocol",
    "raw_connection",
    "run_script",
    # Errors
    "ConnectionConfigurationError",
    "MalformedScriptError",
    "RunExecutionFailure",
    "ScriptRunnerError",
    "StatementExecutionError",
    "TransactionCommitError",
    "WarningEscalationError",
    # Writers
    "CollectingWriter",
    "LoggerWriter",
    "NullWriter",
    "ScriptWriter",
    "StreamWriter",
]
