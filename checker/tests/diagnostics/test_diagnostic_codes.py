#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

from pathlib import Path

import pytest

import ttc
from conftest import has_error_code
from tt_ast import NumberLiteral, ObjectNewExpr, PropertyTerm
from tt_diagnostics import DIAGNOSTIC_CODE_FAMILIES
from tt_driver import CheckerDriver
from tt_parser import ParseError, Parser
from tt_typecheck import TypeCheckError, typecheck


LEX_TRIGGERS = {
    "LEX-0010": "1 /* unterminated",
    "LEX-0020": "@",
    "LEX-0030": "12abc",
}

PAR_TRIGGERS = {
    "PAR-0010": "const let = 1; 1",
    "PAR-0021": "1 2",
    "PAR-0030": "1 - 2",
    "PAR-0031": "(x: number) => { return x; x }",
    "PAR-0032": "true ? 1 2",
    "PAR-0033": "f(1",
    "PAR-0034": "o.1",
    "PAR-0036": "{ x: 1, 2 }",
    "PAR-0037": "{ x 1 }",
    "PAR-0038": "{ x: 1 y: 2 }",
    "PAR-0039": "(1 + 2",
    "PAR-0040": "const x = 1;",
    "PAR-0041": "const = 1; 1",
    "PAR-0042": "const x 1; x",
    "PAR-0043": "const x = 1 x",
    "PAR-0050": "function (x: number): number { return x; } 1",
    "PAR-0051": "function f(x): number { return x; } 1",
    "PAR-0052": "function f(x: number) { return x; } 1",
    "PAR-0053": "(x: number) x",
    "PAR-0054": "function f: number { return 1; } 1",
    "PAR-0055": "function f(1: number): number { return 1; } 1",
    "PAR-0056": "function f(x: number y: number): number { return x; } 1",
    "PAR-0060": "function f(x: number): number return x; 1",
    "PAR-0061": "return 1",
    "PAR-0062": "function f(x: number): number { x; } 1",
    "PAR-0063": "(x: number) => { return x;",
    "PAR-0070": "(x: string) => x",
    "PAR-0071": "(x: 1) => x",
    "PAR-0072": "(f: (x: number) number) => f",
    "PAR-0073": "(o: { a number }) => o",
    "PAR-0074": "{ a: 1, a: 2 }",
    "PAR-0080": "",
}

# Codes only reachable through a standalone type annotation.
TYPE_ANNOTATION_TRIGGERS = {
    "PAR-0020": "number boolean",
}

TYP_TRIGGERS = {
    "TYP-0010": "1 ? 2 : 3",
    "TYP-0011": "true ? 1 : false",
    "TYP-0020": "1 + true",
    "TYP-0030": "x",
    "TYP-0040": "(x: number): boolean => x",
    "TYP-0041": "function f(x: number): boolean { return x; } f(1)",
    "TYP-0042": "const f = (x: number) => x; f(1)",
    "TYP-0050": "1(2)",
    "TYP-0051": "((x: number): number => x)(1, 2)",
    "TYP-0052": "((x: number): number => x)(true)",
    "TYP-0060": "true.x",
    "TYP-0061": "{ a: 1 }.b",
}

DRV_TRIGGERS = {
    "DRV-0010": "missing-file",
}

# Reported by the ttc front end itself, for each listed subcommand.
CLI_TRIGGERS = {
    "TTC-0010": ["tok", "ast"],
}


def _all_codes() -> list[str]:
    codes: list[str] = []
    for family in DIAGNOSTIC_CODE_FAMILIES.values():
        codes.extend(family)
    return codes


def _check_with_driver(tmp_path: Path, mode: str):
    driver = CheckerDriver()

    if mode == "missing-file":
        return driver.check_file(tmp_path / "missing.ts")

    raise ValueError(f"unknown driver trigger mode: {mode}")


@pytest.mark.parametrize("code", _all_codes())
def test_diagnostic_code_triggers(code, check_src, tmp_path, capsys):
    if code in CLI_TRIGGERS:
        for command in CLI_TRIGGERS[code]:
            with pytest.raises(SystemExit) as exc:
                ttc.main([command, str(tmp_path / "missing.ts")])
            assert exc.value.code == 1
            assert f"[{code}]" in capsys.readouterr().err
        return

    if code in DRV_TRIGGERS:
        result = _check_with_driver(tmp_path, DRV_TRIGGERS[code])
        assert result.has_errors()
        assert has_error_code(result.diagnostics, code)
        return

    if code in TYPE_ANNOTATION_TRIGGERS:
        with pytest.raises(ParseError) as excinfo:
            Parser.from_source(TYPE_ANNOTATION_TRIGGERS[code]).parse_type()
        assert f"[{code}]" in excinfo.value.message
        return

    if code == "TYP-0062":
        # The parser rejects duplicate names first, so build the term directly.
        term = ObjectNewExpr([PropertyTerm("a", NumberLiteral(1)), PropertyTerm("a", NumberLiteral(2))])
        with pytest.raises(TypeCheckError) as excinfo:
            typecheck(term)
        assert f"[{code}]" in excinfo.value.message
        return

    for triggers in (LEX_TRIGGERS, PAR_TRIGGERS, TYP_TRIGGERS):
        if code in triggers:
            result = check_src(triggers[code])
            assert result.has_errors()
            assert has_error_code(result.diagnostics, code), [d.message for d in result.diagnostics]
            return

    pytest.fail(f"no trigger for diagnostic code {code}")


def test_every_trigger_is_registered():
    registered = set(_all_codes())
    triggered = (set(LEX_TRIGGERS) | set(PAR_TRIGGERS) | set(TYPE_ANNOTATION_TRIGGERS) | set(TYP_TRIGGERS)
                 | set(DRV_TRIGGERS) | set(CLI_TRIGGERS) | {"TYP-0062"})

    assert triggered == registered


def test_diagnostic_code_extraction(check_src):
    result = check_src("1 + true")

    assert [d.code() for d in result.diagnostics] == ["TYP-0020"]
