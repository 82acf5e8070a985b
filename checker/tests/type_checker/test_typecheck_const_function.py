"""
Pins the behavior of `const name = (params): R => body; rest`.

The function's signature is built from its declared types and bound
before `rest` is checked. The declared return type R is compared with
the type of `rest`, and the function body itself is not checked in this
form. These tests record that behavior so any change to it is deliberate.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import pytest

from conftest import BOOL, NUM, fn
from tt_ast import TrueLiteral, NumberLiteral, AddExpr, VarRef, FuncExpr, CallExpr, ConstDecl
from tt_typecheck import TypeCheckError, typecheck
from tt_types import Param


def _inc(ret_type=NUM, body=None):
    if body is None:
        body = AddExpr(VarRef("x"), NumberLiteral(1))
    return FuncExpr([Param("x", NUM)], ret_type, body)


def test_return_type_is_required():
    init = _inc(ret_type=None)

    with pytest.raises(TypeCheckError) as excinfo:
        typecheck(ConstDecl("inc", init, NumberLiteral(0)))

    assert "[TYP-0042] return type is required for function" in excinfo.value.message
    assert excinfo.value.node is init


def test_rest_matching_declared_return_type_is_accepted():
    term = ConstDecl("inc", _inc(), CallExpr(VarRef("inc"), [NumberLiteral(1)]))

    assert typecheck(term) is NUM


def test_rest_not_matching_declared_return_type_is_rejected():
    term = ConstDecl("inc", _inc(), TrueLiteral())

    with pytest.raises(TypeCheckError) as excinfo:
        typecheck(term)

    assert "[TYP-0041] wrong return type" in excinfo.value.message
    assert excinfo.value.node is term


def test_returning_the_function_itself_is_rejected():
    term = ConstDecl("inc", _inc(), VarRef("inc"))

    with pytest.raises(TypeCheckError) as excinfo:
        typecheck(term)

    assert "expected 'number', got '(x: number) => number'" in excinfo.value.message


def test_body_is_not_checked():
    # the body is ill-typed (boolean + number) but only `rest` is compared
    bad_body = AddExpr(TrueLiteral(), NumberLiteral(1))
    term = ConstDecl("inc", _inc(body=bad_body), NumberLiteral(0))

    assert typecheck(term) is NUM


def test_name_is_visible_in_rest():
    term = ConstDecl("isPos", _inc(ret_type=BOOL, body=TrueLiteral()), CallExpr(VarRef("isPos"), [NumberLiteral(3)]))

    assert typecheck(term) is BOOL


def test_non_function_init_has_no_return_type_check():
    term = ConstDecl("f", VarRef("g"), VarRef("f"))

    assert typecheck(term, {"g": fn(NUM, ret=NUM)}) == fn(NUM, ret=NUM)
