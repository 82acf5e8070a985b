#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional, Union

from tt_ast import Term
from tt_context import CheckerContext
from tt_diagnostics import Diagnostic, diag_from_node, diag_from_token
from tt_env import TypeEnv
from tt_lexer import LexerError, Lexer
from tt_logger import log_debug, log_info, log_stage
from tt_parser import Parser, ParseError
from tt_typecheck import TypeChecker, TypeCheckError
from tt_types import Type, format_type


@dataclass
class CheckResult:
    """
    Outcome of checking one source text.

    On success `type` holds the program's type and `diagnostics` is empty.
    On failure `diagnostics` holds the single error that stopped the
    pipeline; `term` is set whenever parsing got that far. `source` is the
    checked text, kept for rendering diagnostics.
    """
    filename: Optional[str] = None
    context: CheckerContext = field(default_factory=CheckerContext.default)
    source: Optional[str] = None
    term: Optional[Term] = None
    type: Optional[Type] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def has_errors(self) -> bool:
        return any(d.kind == "error" for d in self.diagnostics)


class CheckerDriver:
    """
    Pipeline driver:
      - read file
      - tokenize
      - parse into a single term
      - type-check the term against a top-level environment

    User errors (lexing, parsing, typing) become diagnostics on the
    returned CheckResult. Internal checker errors propagate.
    """

    def __init__(self, context: CheckerContext | None = None):
        self.context = context or CheckerContext.default()

    # --- Public API ---

    def parse_source(self, source: str, filename: Optional[str] = None) -> Term:
        """Lex and parse; raises LexerError or ParseError."""
        log_stage(self.context, "Lexing", filename)
        tokens = Lexer(source, filename=filename or "<input>").tokenize()
        log_debug(self.context, f"Lexed {len(tokens)} token(s)")
        log_stage(self.context, "Parsing", filename)
        return Parser(tokens, filename=filename).parse_program()

    def check_source(
            self,
            source: str,
            filename: Optional[str] = None,
            env: Union[TypeEnv, Mapping[str, Type], None] = None,
    ) -> CheckResult:
        result = CheckResult(filename=filename, context=self.context, source=source)

        try:
            result.term = self.parse_source(source, filename)
        except LexerError as e:
            result.diagnostics.append(
                Diagnostic(
                    kind="error",
                    message=f"syntax: {e.message}",
                    filename=filename,
                    line=e.line,
                    column=e.column,
                )
            )
            return result
        except ParseError as e:
            result.diagnostics.append(
                diag_from_token(
                    kind="error",
                    message=e.message,
                    token=e.token,
                    filename=filename,
                )
            )
            return result

        log_stage(self.context, "Type checking", filename)
        checker = TypeChecker(context=self.context, filename=filename)
        try:
            result.type = checker.check(result.term, env)
        except TypeCheckError as e:
            result.diagnostics.append(
                diag_from_node(
                    kind="error",
                    message=e.message,
                    node=e.node,
                    filename=filename,
                )
            )
            return result

        log_info(self.context, f"Program type: {format_type(result.type)}")
        return result

    def check_file(self, path: Union[str, Path]) -> CheckResult:
        path = Path(path)
        try:
            source = path.read_text(encoding="utf-8")
        except OSError as e:
            result = CheckResult(filename=str(path), context=self.context)
            result.diagnostics.append(
                Diagnostic(kind="error", message=f"file: [DRV-0010] cannot read {path}: {e.strerror or e}")
            )
            return result
        return self.check_source(source, filename=str(path))
