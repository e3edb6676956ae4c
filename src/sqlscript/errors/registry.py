# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: sqlscript
"""Error registry for sqlscript error codes and categories."""

import threading
from typing import Any


class ErrorRegistry:
    """Singleton registry for all error codes and categories in sqlscript."""

    _instance = None
    _lock = threading.RLock()

    def __new__(cls) -> "ErrorRegistry":
        with cls._lock:
            if cls._instance is None:
                instance = super().__new__(cls)
                instance._categories = {}
                instance._codes = {}
                cls._instance = instance
            return cls._instance

    def register_category(self, name: str, parent: Any = None) -> Any:
        """Register a category in the registry.

        Args:
            name: The category name
            parent: Optional parent category

        Returns:
            The registered ErrorCategory
        """
        with self._lock:
            if name in self._categories:
                return self._categories[name]

            from sqlscript.errors.base import ErrorCategory

            category = ErrorCategory(name, parent)
            self._categories[name] = category
            return category

    def register_code(self, code: str, category_name: str) -> Any:
        """Register a code under a category, creating the category if needed."""
        with self._lock:
            if code in self._codes:
                return self._codes[code]

            category = self.get_category(category_name)

            from sqlscript.errors.base import ErrorCode

            error_code = ErrorCode(code, category)
            self._codes[code] = error_code
            return error_code

    def get_category(self, name: str, parent: Any = None) -> Any:
        with self._lock:
            if name in self._categories:
                return self._categories[name]
            return self.register_category(name, parent)

    def get_code(self, code: str, category_name: str = "INTERNAL") -> Any:
        with self._lock:
            if code in self._codes:
                return self._codes[code]
            return self.register_code(code, category_name)

    def lookup_code(self, code: str) -> Any:
        """Look up an error code without creating it if missing.

        Args:
            code: The error code string

        Returns:
            The ErrorCode, or None if it was never registered
        """
        with self._lock:
            return self._codes.get(code)

    def lookup_category(self, name: str) -> Any:
        with self._lock:
            return self._categories.get(name)

    def get_all_codes(self) -> list[Any]:
        with self._lock:
            return list(self._codes.values())

    def get_all_categories(self) -> list[Any]:
        with self._lock:
            return list(self._categories.values())


registry = ErrorRegistry()
