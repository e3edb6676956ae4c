# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: sqlscript
"""
Output sinks for the script runner.

The runner writes processed lines, assembled statements and result tables to
a log sink and failure diagnostics to an error sink. Either sink may be
None, which disables it.
"""

from __future__ import annotations

import logging
import sys
from typing import Protocol, TextIO, runtime_checkable


@runtime_checkable
class ScriptWriter(Protocol):
    """A line-oriented output sink."""

    def write_line(self, text: str) -> None:
        """Write text followed by a line break and flush it."""
        ...


class StreamWriter:
    """Writes lines to a text stream, flushing after each one."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream

    def write_line(self, text: str) -> None:
        self.stream.write(f"{text}\n")
        self.stream.flush()

    @classmethod
    def stdout(cls) -> StreamWriter:
        return cls(sys.stdout)

    @classmethod
    def stderr(cls) -> StreamWriter:
        return cls(sys.stderr)


class LoggerWriter:
    """Forwards each line to a standard library logger at a fixed level."""

    def __init__(self, logger: logging.Logger, level: int = logging.INFO) -> None:
        self.logger = logger
        self.level = level

    def write_line(self, text: str) -> None:
        self.logger.log(self.level, text.rstrip("\n"))


class CollectingWriter:
    """Keeps every line in memory, in order."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def write_line(self, text: str) -> None:
        self.lines.append(text)

    def getvalue(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)


class NullWriter:
    """Discards everything written to it."""

    def write_line(self, text: str) -> None:
        pass
