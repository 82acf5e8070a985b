#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import is_dataclass, fields
from typing import List, Any, Optional

from tt_ast import Span, Node, Term
from tt_types import Type, Param, format_type


def _format_span(span: Optional[Span]) -> str:
    if span is None:
        return ""
    return f" @{span.start_line}:{span.start_column}-{span.end_line}:{span.end_column}"


def _format_scalar(value: Any) -> str:
    if isinstance(value, Type):
        return format_type(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value)


def _format_params(params: List[Param]) -> str:
    return "(" + ", ".join(f"{p.name}: {format_type(p.type)}" for p in params) + ")"


def format_node(node: Any, indent: int = 0) -> List[str]:
    """
    Reflection-based term pretty-printer.

    - Shows the node class name with scalar fields inline; types print in
      surface syntax, parameter lists as `(x: number, ...)`.
    - Child terms go on their own lines, indented under the field name.
    - Appends a span annotation like `@1:1-3:9` when available.
    """
    ind = "  " * indent

    if isinstance(node, list):
        lines: List[str] = []
        for elem in node:
            lines.extend(format_node(elem, indent))
        return lines

    if not (isinstance(node, Node) and is_dataclass(node)):
        return [ind + _format_scalar(node)]

    inline_parts: List[str] = []
    child_fields = []
    for f in fields(node):
        if f.name == "span":
            continue
        value = getattr(node, f.name)
        if isinstance(value, list) and not value:
            inline_parts.append(f"{f.name}=[]")
        elif isinstance(value, Node) or (isinstance(value, list) and isinstance(value[0], Node)):
            child_fields.append((f.name, value))
        elif isinstance(value, list) and all(isinstance(p, Param) for p in value):
            inline_parts.append(f"{f.name}={_format_params(value)}")
        elif value is not None:
            inline_parts.append(f"{f.name}={_format_scalar(value)}")

    header = node.__class__.__name__
    if inline_parts:
        header = f"{header}({', '.join(inline_parts)})"
    header += _format_span(node.span)

    lines = [ind + header]
    for name, value in child_fields:
        lines.append(ind + "  " + f"{name}:")
        lines.extend(format_node(value, indent + 2))
    return lines


def format_term(term: Term) -> str:
    """
    Convenience: pretty-print a whole term tree as a string.
    """
    return "\n".join(format_node(term, indent=0))
