"""
Checker context for cross-cutting options.

This module defines the CheckerContext dataclass which holds options that
affect more than one stage of checking (logging, call compatibility, etc.).
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Hierarchical logging levels for the tinyts checker."""
    SILENT = 0      # No logging
    ERROR = 3       # Error messages only
    WARNING = 6     # Warning messages (default)
    INFO = 10       # General progress messages (-v)
    DEBUG = 30      # Per-term tracing of the checker (-vvv)


@dataclass
class CheckerContext:
    """
    Holds cross-cutting checker options.

    Attributes:
        log_rich_format:        If True, emit logs in rich format: may include log level, timestamps, etc.
        log_level:              Current logging level.
        call_subtyping:         If True, call arguments are accepted when they are subtypes of the
                                declared parameter types. Off by default: calls require equal types.
    """
    log_rich_format: bool = False
    log_level: LogLevel = LogLevel.WARNING
    call_subtyping: bool = False

    @staticmethod
    def default() -> 'CheckerContext':
        """Create a CheckerContext with default settings."""
        return CheckerContext(log_level=LogLevel.WARNING)
