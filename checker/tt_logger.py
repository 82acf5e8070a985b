"""
Logging utilities for the tinyts checker.

All output goes to stderr and is gated by the CheckerContext log level.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import sys
import time
from typing import Optional

from tt_context import CheckerContext, LogLevel

_LEVEL_TAGS = {
    LogLevel.ERROR: "ERROR",
    LogLevel.WARNING: "WARNING",
    LogLevel.INFO: "INFO",
    LogLevel.DEBUG: "DEBUG",
}


def _rich_prefix(log_level: LogLevel) -> str:
    tag = _LEVEL_TAGS.get(log_level)
    if tag is None:
        return ""
    timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
    return f"{timestamp} [{tag}] "


def log_enabled(context: Optional[CheckerContext], log_level: LogLevel) -> bool:
    """True when a message at `log_level` would be printed."""
    return context is None or context.log_level >= log_level


def log(context: Optional[CheckerContext], log_level: LogLevel, message: str) -> None:
    """
    Print `message` to stderr if the context's level admits `log_level`.

    Without a context the message is printed unconditionally, so errors
    are never lost.
    """
    if context is None:
        print(message, file=sys.stderr)
        return
    if not log_enabled(context, log_level):
        return
    prefix = _rich_prefix(log_level) if context.log_rich_format else ""
    print(f"{prefix}{message}", file=sys.stderr)


def log_error(context: Optional[CheckerContext], message: str) -> None:
    log(context, LogLevel.ERROR, message)


def log_warning(context: Optional[CheckerContext], message: str) -> None:
    log(context, LogLevel.WARNING, message)


def log_info(context: Optional[CheckerContext], message: str) -> None:
    log(context, LogLevel.INFO, message)


def log_debug(context: Optional[CheckerContext], message: str) -> None:
    log(context, LogLevel.DEBUG, message)


def log_stage(context: Optional[CheckerContext], stage: str, source: Optional[str] = None) -> None:
    """
    Log the start of a checking stage.

    Args:
        context: The checker context containing logging flags.
        stage: The name of the stage (e.g., "Lexing", "Parsing").
        source: Optional file name being processed.
    """
    if source:
        log(context, LogLevel.INFO, f"{stage} '{source}'")
    else:
        log(context, LogLevel.INFO, f"{stage}...")


def log_trace(context: Optional[CheckerContext], depth: int, message: str) -> None:
    """Debug-level message indented by recursion depth (used by the type checker)."""
    if context is None or not log_enabled(context, LogLevel.DEBUG):
        return
    log(context, LogLevel.DEBUG, f"{'  ' * depth}{message}")
