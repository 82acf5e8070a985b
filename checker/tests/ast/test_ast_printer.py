#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from conftest import NUM
from tt_ast import AddExpr, CallExpr, FuncExpr, NumberLiteral, ObjectNewExpr, VarRef
from tt_ast_printer import format_term
from tt_parser import parse_source
from tt_types import Param


def test_nested_term_layout():
    term = FuncExpr([Param("x", NUM)], NUM, AddExpr(VarRef("x"), NumberLiteral(1)))

    assert format_term(term).splitlines() == [
        "FuncExpr(params=(x: number), ret_type=number)",
        "  body:",
        "    AddExpr",
        "      left:",
        "        VarRef(name='x')",
        "      right:",
        "        NumberLiteral(value=1)",
    ]


def test_argument_lists_and_empty_lists():
    term = CallExpr(VarRef("f"), [NumberLiteral(2.5), ObjectNewExpr([])])

    assert format_term(term).splitlines() == [
        "CallExpr",
        "  func:",
        "    VarRef(name='f')",
        "  args:",
        "    NumberLiteral(value=2.5)",
        "    ObjectNewExpr(props=[])",
    ]


def test_inferred_return_type_is_omitted():
    term = FuncExpr([], None, NumberLiteral(0))

    assert format_term(term).splitlines()[0] == "FuncExpr(params=[])"


def test_span_annotations():
    out = format_term(parse_source("1 + 22")).splitlines()

    assert out[0] == "AddExpr @1:1-1:7"
    assert out[2] == "    NumberLiteral(value=1) @1:1-1:2"
