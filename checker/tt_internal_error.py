#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass
from typing import Optional

from tt_ast import Node

_FALLBACK_ICE_CODE = "ICE-9999"


@dataclass
class InternalCheckerError(RuntimeError):
    """
    Raised for checker bugs: a term with no typing rule, or a type the
    relations do not know. User mistakes are TypeCheckErrors instead.

    `term` is the node the checker was looking at, when there is one; its
    class name and span end up in `format()`.
    """
    message: str
    term: Optional[Node] = None
    filename: Optional[str] = None

    def __str__(self) -> str:
        return self.message

    def code(self) -> str:
        if self.message.startswith("[ICE-") and "]" in self.message:
            return self.message[1:self.message.index("]")]
        return _FALLBACK_ICE_CODE

    def format(self) -> str:
        message = self.message
        if self.code() == _FALLBACK_ICE_CODE and not message.startswith("["):
            message = f"[{_FALLBACK_ICE_CODE}] {message}"
        if self.term is not None:
            message += f" (term '{type(self.term).__name__}')"

        loc = self.filename or ""
        span = getattr(self.term, "span", None)
        if span is not None:
            loc = f"{loc or '<input>'}:{span.start_line}:{span.start_column}"
        if loc:
            return f"{loc}: internal checker error: {message}"
        return f"internal checker error: {message}"
