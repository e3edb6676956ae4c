# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
#
# SPDX-License-Identifier: MIT

"""
Result objects for functional error handling in sqlscript.

The runner uses these to separate a statement that failed (and may be
logged and skipped) from a failure that has to abort the whole run.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


class Result(Generic[T, E], ABC):
    """Outcome of submitting one statement."""

    @property
    @abstractmethod
    def is_failure(self) -> bool: ...

    @abstractmethod
    def unwrap_or(self, default: T) -> T: ...


@dataclass(frozen=True)
class Success(Result[T, E], Generic[T, E]):
    """
    Represents a successful result with a value.

    Attributes:
        value: The successful result value
    """

    value: T

    @property
    def is_failure(self) -> bool:
        return False

    @property
    def error(self) -> None:
        return None

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass(frozen=True)
class Failure(Result[T, E], Generic[T, E]):
    """
    Represents a failed result with an error.

    Attributes:
        error: The error that caused the failure
    """

    error: E

    @property
    def is_failure(self) -> bool:
        return True

    def unwrap_or(self, default: T) -> T:
        return default
