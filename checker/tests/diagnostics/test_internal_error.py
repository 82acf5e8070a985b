#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import pytest

from tt_ast import NumberLiteral, Span, VarRef
from tt_internal_error import InternalCheckerError
from tt_relations import type_eq
from tt_types import Type


def test_format_without_location():
    ice = InternalCheckerError("boom")

    assert ice.format() == "internal checker error: [ICE-9999] boom"
    assert ice.code() == "ICE-9999"


def test_format_with_filename_only():
    ice = InternalCheckerError("boom", filename="prog.ts")

    assert ice.format() == "prog.ts: internal checker error: [ICE-9999] boom"


def test_format_names_the_term_and_its_span():
    term = VarRef("x", span=Span(start_line=3, start_column=15, end_line=3, end_column=16))
    ice = InternalCheckerError("[ICE-0001] not implemented", term, "prog.ts")

    assert ice.code() == "ICE-0001"
    assert ice.format() == "prog.ts:3:15: internal checker error: [ICE-0001] not implemented (term 'VarRef')"


def test_span_without_filename():
    term = NumberLiteral(1, span=Span(1, 2, 1, 3))
    ice = InternalCheckerError("[ICE-0001] not implemented", term)

    assert ice.format() == "<input>:1:2: internal checker error: [ICE-0001] not implemented (term 'NumberLiteral')"


def test_term_without_span():
    ice = InternalCheckerError("[ICE-0001] not implemented", VarRef("x"))

    assert ice.format() == "internal checker error: [ICE-0001] not implemented (term 'VarRef')"


def test_is_not_a_user_error():
    ice = InternalCheckerError("boom")

    assert isinstance(ice, RuntimeError)
    assert str(ice) == "boom"


def test_unknown_type_in_relations():
    class StrayType(Type):
        pass

    with pytest.raises(InternalCheckerError) as excinfo:
        type_eq(StrayType(), StrayType())

    assert excinfo.value.code() == "ICE-0002"
