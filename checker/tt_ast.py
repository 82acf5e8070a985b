#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass, field
from typing import Optional, List

from tt_types import Type, Param


# ==========================
# AST definitions
# ==========================


@dataclass
class Span:
    start_line: int
    start_column: int
    end_line: int
    end_column: int


@dataclass
class Node:
    span: Optional[Span] = field(default=None, repr=False, compare=False, kw_only=True)


class Term(Node):
    """Base class for all terms; the checker maps each one to a Type."""
    pass


# --- literals ---

@dataclass
class TrueLiteral(Term):
    pass


@dataclass
class FalseLiteral(Term):
    pass


@dataclass
class NumberLiteral(Term):
    value: float


# --- expressions ---

@dataclass
class IfExpr(Term):
    cond: Term
    thn: Term
    els: Term


@dataclass
class AddExpr(Term):
    left: Term
    right: Term


@dataclass
class VarRef(Term):
    name: str


@dataclass
class FuncExpr(Term):
    params: List[Param]
    ret_type: Optional[Type]  # None when the return type is left to inference
    body: Term


@dataclass
class CallExpr(Term):
    func: Term
    args: List[Term]


@dataclass
class PropertyTerm(Node):
    name: str
    term: Term


@dataclass
class ObjectNewExpr(Term):
    props: List[PropertyTerm]


@dataclass
class ObjectGetExpr(Term):
    obj: Term
    prop_name: str


# --- binders and sequencing ---

@dataclass
class SeqExpr(Term):
    body: Term
    rest: Term


@dataclass
class ConstDecl(Term):
    name: str
    init: Term
    rest: Term


@dataclass
class RecFuncDecl(Term):
    func_name: str
    params: List[Param]
    ret_type: Type
    body: Term
    rest: Term
