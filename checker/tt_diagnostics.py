#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import os
from dataclasses import dataclass
from typing import Optional

from tt_ast import Node
from tt_lexer import Token


DIAGNOSTIC_CODE_FAMILIES = {
    "LEX": [
        "LEX-0010",  # unterminated block comment
        "LEX-0020",  # unexpected character
        "LEX-0030",  # malformed number literal
    ],
    "PAR": [
        "PAR-0010",
        "PAR-0020",
        "PAR-0021",
        "PAR-0030",
        "PAR-0031",
        "PAR-0032",
        "PAR-0033",
        "PAR-0034",
        "PAR-0036",
        "PAR-0037",
        "PAR-0038",
        "PAR-0039",
        "PAR-0040",
        "PAR-0041",
        "PAR-0042",
        "PAR-0043",
        "PAR-0050",
        "PAR-0051",
        "PAR-0052",
        "PAR-0053",
        "PAR-0054",
        "PAR-0055",
        "PAR-0056",
        "PAR-0060",
        "PAR-0061",
        "PAR-0062",
        "PAR-0063",
        "PAR-0070",
        "PAR-0071",
        "PAR-0072",
        "PAR-0073",
        "PAR-0074",
        "PAR-0080",
    ],
    "DRV": [
        "DRV-0010",
    ],
    "TTC": [
        "TTC-0010",  # ttc tok/ast: cannot read source file
    ],
    # ICE codes are internal checker errors raised as exceptions,
    # not user-facing diagnostics; they are excluded from this registry.
    "TYP": [
        "TYP-0010", "TYP-0011",
        "TYP-0020",
        "TYP-0030",
        "TYP-0040", "TYP-0041", "TYP-0042",
        "TYP-0050", "TYP-0051", "TYP-0052",
        "TYP-0060", "TYP-0061", "TYP-0062",
    ],
}


@dataclass
class Diagnostic:
    kind: str  # "error" or "warning"
    message: str
    filename: Optional[str] = None  # file path

    # Primary location (start of the span)
    line: Optional[int] = None
    column: Optional[int] = None

    # Optional end of span (exclusive)
    end_line: Optional[int] = None
    end_column: Optional[int] = None

    # Return the one-line header; snippets will be printed at the call site
    def format(self) -> str:
        loc = ""
        if self.filename is not None:
            loc += f"{os.path.abspath(str(self.filename))}"
        if self.line is not None:
            loc += f":{self.line}"
            if self.column is not None:
                loc += f":{self.column}"
        if loc:
            loc += ": "
        return f"{loc}{self.kind}: {self.message}"

    def code(self) -> Optional[str]:
        """The `XXX-NNNN` code embedded in the message, if any."""
        start = self.message.find("[")
        end = self.message.find("]", start + 1)
        if start < 0 or end < 0:
            return None
        return self.message[start + 1:end]


def diag_from_node(
        kind: str,
        message: str,
        *,
        filename: Optional[str],
        node: Optional[Node],
) -> Diagnostic:
    line = column = end_line = end_column = None
    if node is not None and node.span is not None:
        s = node.span
        line = s.start_line
        column = s.start_column
        end_line = s.end_line
        end_column = s.end_column
    return Diagnostic(
        kind=kind,
        message=message,
        filename=filename,
        line=line,
        column=column,
        end_line=end_line,
        end_column=end_column,
    )


def diag_from_token(
        kind: str,
        message: str,
        *,
        filename: Optional[str],
        token: Optional[Token],
) -> Diagnostic:
    line = column = end_line = end_column = None
    if token is not None:
        line = token.line
        column = token.column
        end_line = token.line
        end_column = token.column + max(1, len(token.text))
    return Diagnostic(
        kind=kind,
        message=message,
        filename=filename,
        line=line,
        column=column,
        end_line=end_line,
        end_column=end_column,
    )
