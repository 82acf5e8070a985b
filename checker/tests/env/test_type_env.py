#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from conftest import BOOL, NUM, fn
from tt_env import TypeEnv
from tt_types import Param


def test_empty_env_has_no_bindings():
    env = TypeEnv.empty()

    assert env.lookup("x") is None
    assert "x" not in env
    assert env.names() == []
    assert env.depth() == 0


def test_extend_does_not_mutate_receiver():
    base = TypeEnv.empty()
    extended = base.extend("x", NUM)

    assert extended.lookup("x") is NUM
    assert base.lookup("x") is None
    assert extended.parent is base


def test_shadowing_is_scoped():
    outer = TypeEnv.empty().extend("x", NUM)
    inner = outer.extend("x", BOOL)

    assert inner.lookup("x") is BOOL
    assert outer.lookup("x") is NUM
    assert inner.names() == ["x"]


def test_extend_params_layers_one_scope():
    base = TypeEnv.of({"f": fn(NUM, ret=NUM)})
    env = base.extend_params([Param("a", NUM), Param("b", BOOL)])

    assert env.lookup("a") is NUM
    assert env.lookup("b") is BOOL
    assert env.lookup("f") == fn(NUM, ret=NUM)
    assert env.depth() == 1
    assert "a" not in base


def test_extend_params_last_duplicate_wins():
    env = TypeEnv.empty().extend_params([Param("a", NUM), Param("a", BOOL)])

    assert env.lookup("a") is BOOL


def test_of_copies_the_mapping():
    bindings = {"x": NUM}
    env = TypeEnv.of(bindings)
    bindings["x"] = BOOL

    assert env.lookup("x") is NUM


def test_names_lists_innermost_first():
    env = TypeEnv.of({"a": NUM, "b": NUM}).extend("c", BOOL).extend("a", BOOL)

    assert env.names() == ["a", "c", "b"]


def test_contains_rejects_non_strings():
    env = TypeEnv.empty().extend("x", NUM)

    assert "x" in env
    assert 1 not in env
