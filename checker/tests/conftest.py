#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

import sys
from pathlib import Path
from textwrap import dedent

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from tt_driver import CheckerDriver
from tt_parser import Parser
from tt_types import (
    Param, PropertyType, get_boolean_type, get_number_type, make_func_type, make_object_type)


# --- type construction shorthands for tests ---

BOOL = get_boolean_type()
NUM = get_number_type()


def fn(*param_types, ret):
    """Function type with positional parameters named p0, p1, ..."""
    return make_func_type([Param(f"p{i}", t) for i, t in enumerate(param_types)], ret)


def obj(**props):
    return make_object_type([PropertyType(name, t) for name, t in props.items()])


@pytest.fixture
def parse_src():
    """Parse tinyts source into a term.

    Usage:
        def test_something(parse_src):
            term = parse_src("1 + 2")
    """

    def _parse(src: str):
        return Parser.from_source(dedent(src)).parse_program()

    return _parse


@pytest.fixture
def check_src():
    """Run the whole pipeline on a source string.

    Returns a CheckResult; `result.type` is set on success, otherwise
    `result.diagnostics` holds the error.

    Usage:
        def test_something(check_src):
            result = check_src("const x = 1; x + 2")
            assert not result.has_errors()
    """

    def _check(src: str, **kwargs):
        driver = CheckerDriver(**kwargs)
        return driver.check_source(dedent(src), filename=None)

    return _check


@pytest.fixture
def write_ts_file(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        file_path = tmp_path / name
        file_path.write_text(dedent(content))
        return file_path

    return _write


def has_error_code(diagnostics, code: str) -> bool:
    """Check if any diagnostic contains the given error code.

    Args:
        diagnostics: List of Diagnostic objects
        code: Error code string like "TYP-0011" or "[TYP-0011]"

    Returns:
        True if any diagnostic message contains the error code
    """
    if not code.startswith("["):
        code = f"[{code}]"
    return any(code in d.message for d in diagnostics)
