#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import argparse
from pathlib import Path
from typing import List, Tuple

from tt_ast_printer import format_term
from tt_context import CheckerContext, LogLevel
from tt_diagnostics import Diagnostic
from tt_driver import CheckerDriver, CheckResult
from tt_internal_error import InternalCheckerError
from tt_lexer import TokenKind, Lexer, LexerError
from tt_logger import log_error
from tt_parser import ParseError
from tt_types import format_type


def _caret_range(diag: Diagnostic, src_line: str) -> Tuple[int, int]:
    """1-based start column and caret count of `diag` on its first line."""
    start = max(1, diag.column)
    if diag.end_line is None or diag.end_column is None:
        return start, 1
    # spans running past this line are underlined to its end
    end = diag.end_column if diag.end_line == diag.line else len(src_line) + 1
    return start, max(1, end - start)


def render_snippet(diag: Diagnostic, lines: List[str]) -> List[str]:
    """
    The offending source line in a numbered gutter, plus a caret underline
    when the diagnostic has a column. Empty when the line is unknown.
    """
    if diag.line is None or not 1 <= diag.line <= len(lines):
        return []
    src_line = lines[diag.line - 1]
    gutter = max(5, len(str(diag.line)))
    out = [f"{diag.line:>{gutter}} | {src_line}"]
    if diag.column is not None:
        start, width = _caret_range(diag, src_line)
        out.append(f"{'':>{gutter}} | {' ' * (start - 1)}{'^' * width}")
    return out


def print_diagnostics(result: CheckResult, context: CheckerContext) -> None:
    lines = result.source.splitlines() if result.source is not None else []
    for diag in result.diagnostics:
        log_error(context, diag.format())
        for snippet_line in render_snippet(diag, lines):
            log_error(context, snippet_line)


def build_checker_context(args: argparse.Namespace) -> CheckerContext:
    """Build a CheckerContext from command-line arguments."""
    verbosity = getattr(args, 'verbosity', 0)
    if verbosity >= 3:
        log_level = LogLevel.DEBUG
    elif verbosity >= 1:
        log_level = LogLevel.INFO
    else:
        log_level = LogLevel.ERROR

    return CheckerContext(
        log_rich_format=getattr(args, 'log', False),
        log_level=log_level,
        call_subtyping=getattr(args, 'subtyping', False),
    )


def cmd_check(args: argparse.Namespace) -> int:
    """Type-check a source file and print the program's type."""
    context = build_checker_context(args)
    driver = CheckerDriver(context=context)
    try:
        result = driver.check_file(args.source)
    except InternalCheckerError as e:
        log_error(context, e.format())
        return 1
    print_diagnostics(result, context=context)
    if result.has_errors():
        return 1
    print(format_type(result.type))
    return 0


def cmd_ast(args: argparse.Namespace) -> int:
    """Pretty-print the parsed term."""
    context = build_checker_context(args)
    driver = CheckerDriver(context=context)
    path = Path(args.source)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        log_error(context, f"error: [TTC-0010] cannot read {path}: {e}")
        return 1

    try:
        term = driver.parse_source(text, filename=str(path))
    except LexerError as e:
        log_error(context, f"{path}:{e.line}:{e.column}: error: syntax: {e.message}")
        return 1
    except ParseError as e:
        loc = f"{path}:{e.token.line}:{e.token.column}" if e.token is not None else str(path)
        log_error(context, f"{loc}: error: {e.message}")
        return 1

    print(format_term(term))
    return 0


def cmd_tok(args: argparse.Namespace) -> int:
    """Dump lexer tokens."""
    context = build_checker_context(args)
    path = Path(args.source)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        log_error(context, f"error: [TTC-0010] cannot read {path}: {e}")
        return 1

    try:
        tokens = Lexer(text, filename=str(path)).tokenize()
    except LexerError as e:
        log_error(context, f"{path}:{e.line}:{e.column}: error: syntax: {e.message}")
        return 1

    for tok in tokens:
        if not args.include_eof and tok.kind is TokenKind.EOF:
            continue
        # Format: file:line:col: KIND  'text'
        print(
            f"{path}:{tok.line}:{tok.column}:\t"
            f"{tok.kind.name:<12} {tok.text!r}"
        )
    return 0


def _add_source_arg(parser: argparse.ArgumentParser) -> None:
    """Add the source file argument."""
    parser.add_argument("source", help="Source file to process (e.g. 'examples/fib.ts')")


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(prog="ttc", description="tinyts static type checker")
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    parser.add_argument("-v", "--verbose",
                        action='count',
                        default=0,
                        dest='verbosity',
                        help="Increase verbosity: -v=INFO, -vvv=DEBUG (traces every checked term)")
    parser.add_argument("-l", "--log",
                        action='store_true',
                        default=False,
                        help="Enable rich log formatting (timestamps, levels)")

    ###########################
    # check command
    ###########################
    p_check = subparsers.add_parser("check", help="Parse and type-check a file", aliases=["analyze"])
    p_check.add_argument("--subtyping",
                         action="store_true",
                         help="Accept call arguments whose types are subtypes of the parameter types")
    _add_source_arg(p_check)
    p_check.set_defaults(func=cmd_check)

    ###########################
    # tok command
    ###########################
    p_tok = subparsers.add_parser("tok", help="Dump lexer tokens", aliases=["tokens"])
    p_tok.add_argument("--include-eof", "-I", action="store_true",
                       help="Include the EOF token in the output")
    _add_source_arg(p_tok)
    p_tok.set_defaults(func=cmd_tok)

    ###########################
    # ast command
    ###########################
    p_ast = subparsers.add_parser("ast", help="Pretty-print the parsed term")
    _add_source_arg(p_ast)
    p_ast.set_defaults(func=cmd_ast)

    args = parser.parse_args(argv)

    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
