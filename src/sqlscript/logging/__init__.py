# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: sqlscript

"""
Public API for sqlscript logging.
"""

from __future__ import annotations

from sqlscript.logging.config import LoggingSettings, LogLevel
from sqlscript.logging.logger import (
    ROOT_LOGGER_NAME,
    StructuredFormatter,
    configure_logging,
    get_logger,
)

__all__ = [
    "LogLevel",
    "LoggingSettings",
    "ROOT_LOGGER_NAME",
    "StructuredFormatter",
    "configure_logging",
    "get_logger",
]
