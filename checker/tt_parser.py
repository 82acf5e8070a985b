#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass
from typing import List, Optional

from tt_ast import (
    Span, Term, TrueLiteral, FalseLiteral, NumberLiteral, IfExpr, AddExpr, VarRef, FuncExpr, CallExpr,
    PropertyTerm, ObjectNewExpr, ObjectGetExpr, SeqExpr, ConstDecl, RecFuncDecl)
from tt_lexer import TokenKind, Token, Lexer, is_reserved_keyword
from tt_types import (
    Type, Param, PropertyType, get_boolean_type, get_number_type, make_func_type, make_object_type)


# ==========================
# Parser
# ==========================

@dataclass
class ParseError(Exception):
    message: str
    token: Optional[Token] = None
    filename: Optional[str] = None


class Parser:
    """
    Recursive-descent parser for the tinyts surface syntax.

    A program is a statement sequence folded into a single term:

        const x = e; rest            -> ConstDecl(x, e, rest)
        function f(p: T): R { .. } rest  -> RecFuncDecl(f, [p], R, body, rest)
        e; rest                      -> SeqExpr(e, rest)
        e                            -> e

    Function bodies use the same sequence rules but must end in `return e;`.
    """

    def __init__(self, tokens: List[Token], filename: Optional[str] = None) -> None:
        self.tokens = tokens
        self.index = 0
        self.filename = filename

    @classmethod
    def from_source(cls, source: str) -> "Parser":
        lexer = Lexer.from_source(source)
        tokens = lexer.tokenize()
        return cls(tokens)

    # --- token utilities ---

    def _peek(self) -> Token:
        return self.tokens[self.index]

    def _peek_at(self, offset: int) -> Token:
        pos = min(self.index + offset, len(self.tokens) - 1)
        return self.tokens[pos]

    def _last(self) -> Token:
        return self.tokens[self.index - 1 if self.index > 0 else 0]

    def _at_end(self) -> bool:
        return self._peek().kind is TokenKind.EOF

    def _advance(self) -> Token:
        tok = self._peek()
        if not self._at_end():
            self.index += 1
        return tok

    def _check(self, kind: TokenKind) -> bool:
        return self._peek().kind is kind

    def _match(self, *kinds: TokenKind) -> bool:
        if self._peek().kind in kinds:
            self._advance()
            return True
        return False

    def _expect(self, kind: TokenKind, msg: str) -> Token:
        if not self._check(kind):
            raise ParseError(f"{msg}, got {self._peek()} instead", self._peek(), self.filename)
        return self._advance()

    def _expect_name(self, msg: str) -> Token:
        tok = self._peek()
        if tok.kind is TokenKind.FUTURE_EXTENSION:
            raise ParseError(
                f"[PAR-0010] invalid name '{tok.text}': reserved keyword",
                tok,
                self.filename,
            )
        return self._expect(TokenKind.IDENT, msg)

    def _span_start(self) -> Span:
        here = self._peek()
        return Span(here.line, here.column, here.line, here.column)

    def _extend_span(self, start: Span) -> Span:
        here = self._last()
        return Span(
            start.start_line,
            start.start_column,
            here.line,
            here.column + len(here.text),
        )

    # --- entry points ---

    def parse_program(self, filename: Optional[str] = None) -> Term:
        if filename is not None:
            self.filename = filename
        if self._at_end():
            raise ParseError("[PAR-0080] empty program: expected an expression", self._peek(), self.filename)
        term = self._parse_sequence(in_function=False)
        if not self._at_end():
            raise ParseError(f"[PAR-0020] expected end of input, got {self._peek()} instead",
                             self._peek(), self.filename)
        return term

    def parse_type(self) -> Type:
        """Parse a standalone type annotation (e.g. for a prelude environment)."""
        ty = self._parse_type()
        if not self._at_end():
            raise ParseError(f"[PAR-0020] expected end of input, got {self._peek()} instead",
                             self._peek(), self.filename)
        return ty

    # --- statement sequences ---

    def _at_sequence_end(self, in_function: bool) -> bool:
        return self._check(TokenKind.RBRACE) if in_function else self._at_end()

    def _parse_sequence(self, *, in_function: bool) -> Term:
        if self._check(TokenKind.CONST):
            return self._parse_const(in_function)
        if self._check(TokenKind.FUNCTION):
            return self._parse_function_decl(in_function)
        if self._check(TokenKind.RETURN):
            if not in_function:
                raise ParseError("[PAR-0061] 'return' outside of a function body", self._peek(), self.filename)
            self._advance()
            value = self._parse_expr()
            self._match(TokenKind.SEMI)
            if not self._check(TokenKind.RBRACE) and not self._at_end():
                raise ParseError(f"[PAR-0031] expected '}}' after return statement, got {self._peek()} instead",
                                 self._peek(), self.filename)
            return value

        start = self._span_start()
        expr = self._parse_expr()
        if self._match(TokenKind.SEMI):
            if self._at_sequence_end(in_function):
                if in_function:
                    raise ParseError("[PAR-0062] function body must end with a 'return' statement",
                                     self._peek(), self.filename)
                return expr
            rest = self._parse_sequence(in_function=in_function)
            return SeqExpr(expr, rest, span=self._extend_span(start))

        if in_function:
            raise ParseError("[PAR-0062] function body must end with a 'return' statement",
                             self._peek(), self.filename)
        if not self._at_end():
            raise ParseError(f"[PAR-0021] expected ';' or end of input after expression, got {self._peek()} instead",
                             self._peek(), self.filename)
        return expr

    def _parse_rest_after_decl(self, in_function: bool) -> Term:
        if self._at_sequence_end(in_function):
            raise ParseError("[PAR-0040] expected an expression after declaration", self._peek(), self.filename)
        return self._parse_sequence(in_function=in_function)

    def _parse_const(self, in_function: bool) -> Term:
        # const <name> = <expr> ; <rest>
        start = self._span_start()
        self._expect(TokenKind.CONST, "[PAR-0041] expected 'const'")
        name_tok = self._expect_name("[PAR-0041] expected identifier after 'const'")
        self._expect(TokenKind.EQ, f"[PAR-0042] expected '=' after '{name_tok.text}'")
        init = self._parse_expr()
        self._expect(TokenKind.SEMI, "[PAR-0043] expected ';' after const initializer")
        rest = self._parse_rest_after_decl(in_function)
        return ConstDecl(name_tok.text, init, rest, span=self._extend_span(start))

    def _parse_function_decl(self, in_function: bool) -> Term:
        # function <name> ( <params> ) : <type> { <body> } <rest>
        start = self._span_start()
        self._expect(TokenKind.FUNCTION, "[PAR-0050] expected 'function'")
        name_tok = self._expect_name("[PAR-0050] expected function name after 'function'")
        params = self._parse_params()
        if not self._match(TokenKind.COLON):
            raise ParseError(f"[PAR-0052] return type annotation is required for function '{name_tok.text}'",
                             self._peek(), self.filename)
        ret_type = self._parse_type()
        body = self._parse_function_body()
        self._match(TokenKind.SEMI)
        rest = self._parse_rest_after_decl(in_function)
        return RecFuncDecl(name_tok.text, params, ret_type, body, rest, span=self._extend_span(start))

    def _parse_params(self) -> List[Param]:
        self._expect(TokenKind.LPAREN, "[PAR-0054] expected '(' to start parameter list")
        params: List[Param] = []
        if not self._check(TokenKind.RPAREN):
            while True:
                name_tok = self._expect_name("[PAR-0055] expected parameter name")
                if not self._match(TokenKind.COLON):
                    raise ParseError(
                        f"[PAR-0051] type annotation is required for parameter '{name_tok.text}'",
                        self._peek(),
                        self.filename,
                    )
                params.append(Param(name_tok.text, self._parse_type()))
                if not self._match(TokenKind.COMMA):
                    break
        self._expect(TokenKind.RPAREN, "[PAR-0056] expected ')' after parameters")
        return params

    def _parse_function_body(self) -> Term:
        self._expect(TokenKind.LBRACE, "[PAR-0060] expected '{' to start function body")
        body = self._parse_sequence(in_function=True)
        self._expect(TokenKind.RBRACE, "[PAR-0063] expected '}' after function body")
        return body

    # --- expressions ---

    _RESERVED_OPS = {
        TokenKind.MINUS: "'-' (subtraction)",
        TokenKind.STAR: "'*' (multiplication)",
        TokenKind.SLASH: "'/' (division)",
        TokenKind.LT: "'<' (comparison)",
        TokenKind.GT: "'>' (comparison)",
        TokenKind.EQEQ: "equality",
        TokenKind.BANG: "'!' (logical not)",
    }

    def _check_reserved_op(self) -> None:
        """Raise a diagnostic if the next token is an operator the language does not have."""
        tok = self._peek()
        desc = self._RESERVED_OPS.get(tok.kind)
        if desc is not None:
            raise ParseError(
                f"[PAR-0030] {desc} operator is not supported",
                tok,
                self.filename,
            )

    def _parse_expr(self) -> Term:
        return self._parse_cond_expr()

    def _parse_cond_expr(self) -> Term:
        # <add> ? <expr> : <expr>   (right-associative)
        start = self._span_start()
        cond = self._parse_add_expr()
        if self._match(TokenKind.QUESTION):
            thn = self._parse_expr()
            self._expect(TokenKind.COLON, "[PAR-0032] expected ':' in conditional expression")
            els = self._parse_expr()
            return IfExpr(cond, thn, els, span=self._extend_span(start))
        return cond

    def _parse_add_expr(self) -> Term:
        start = self._span_start()
        expr = self._parse_postfix_expr()
        self._check_reserved_op()
        while self._match(TokenKind.PLUS):
            right = self._parse_postfix_expr()
            self._check_reserved_op()
            expr = AddExpr(expr, right, span=self._extend_span(start))
        return expr

    def _parse_postfix_expr(self) -> Term:
        start = self._span_start()
        expr = self._parse_primary_expr()
        while True:
            if self._match(TokenKind.LPAREN):
                # call
                args: List[Term] = []
                if not self._check(TokenKind.RPAREN):
                    while True:
                        args.append(self._parse_expr())
                        if not self._match(TokenKind.COMMA):
                            break
                self._expect(TokenKind.RPAREN, "[PAR-0033] expected ')' after arguments")
                expr = CallExpr(expr, args, span=self._extend_span(start))
                continue
            if self._match(TokenKind.DOT):
                prop_tok = self._expect(TokenKind.IDENT, "[PAR-0034] expected property name after '.'")
                expr = ObjectGetExpr(expr, prop_tok.text, span=self._extend_span(start))
                continue
            break
        return expr

    def _is_arrow_start(self) -> bool:
        """At '(': `()` or `(ident :` can only start an arrow function."""
        if not self._check(TokenKind.LPAREN):
            return False
        nxt = self._peek_at(1)
        if nxt.kind is TokenKind.RPAREN:
            return True
        return nxt.kind in (TokenKind.IDENT, TokenKind.FUTURE_EXTENSION) and self._peek_at(2).kind is TokenKind.COLON

    def _is_object_literal_start(self) -> bool:
        """At '{': `{}` or `{ ident :` is an object literal, anything else a block."""
        if not self._check(TokenKind.LBRACE):
            return False
        nxt = self._peek_at(1)
        if nxt.kind is TokenKind.RBRACE:
            return True
        return nxt.kind is TokenKind.IDENT and self._peek_at(2).kind is TokenKind.COLON

    def _parse_arrow_func(self) -> Term:
        # ( <params> ) [: <type>] => <expr> | { <body> }
        start = self._span_start()
        params = self._parse_params()
        ret_type: Optional[Type] = None
        if self._match(TokenKind.COLON):
            ret_type = self._parse_type()
        self._expect(TokenKind.ARROW, "[PAR-0053] expected '=>' in arrow function")
        if self._check(TokenKind.LBRACE) and not self._is_object_literal_start():
            body = self._parse_function_body()
        else:
            body = self._parse_expr()
        return FuncExpr(params, ret_type, body, span=self._extend_span(start))

    def _parse_object_literal(self) -> Term:
        start = self._span_start()
        self._advance()  # '{'
        props: List[PropertyTerm] = []
        seen = set()
        while not self._check(TokenKind.RBRACE):
            prop_start = self._span_start()
            name_tok = self._expect(TokenKind.IDENT, "[PAR-0036] expected property name in object literal")
            if name_tok.text in seen:
                raise ParseError(f"[PAR-0074] duplicate property name '{name_tok.text}'", name_tok, self.filename)
            seen.add(name_tok.text)
            self._expect(TokenKind.COLON, f"[PAR-0037] expected ':' after property name '{name_tok.text}'")
            value = self._parse_expr()
            props.append(PropertyTerm(name_tok.text, value, span=self._extend_span(prop_start)))
            if not self._match(TokenKind.COMMA):
                break
        self._expect(TokenKind.RBRACE, "[PAR-0038] expected '}' after object literal")
        return ObjectNewExpr(props, span=self._extend_span(start))

    def _parse_primary_expr(self) -> Term:
        start = self._span_start()
        tok = self._peek()

        # Literals
        if self._match(TokenKind.NUMBER):
            return NumberLiteral(float(tok.text), span=self._extend_span(start))
        if self._match(TokenKind.TRUE):
            return TrueLiteral(span=self._extend_span(start))
        if self._match(TokenKind.FALSE):
            return FalseLiteral(span=self._extend_span(start))

        if self._check(TokenKind.IDENT) or self._check(TokenKind.FUTURE_EXTENSION):
            name_tok = self._expect_name("[PAR-0080] expected identifier")
            return VarRef(name_tok.text, span=self._extend_span(start))

        if self._is_arrow_start():
            return self._parse_arrow_func()

        # Parenthesized expression; no node of its own
        if self._match(TokenKind.LPAREN):
            inner = self._parse_expr()
            self._expect(TokenKind.RPAREN, "[PAR-0039] expected ')' after expression")
            return inner

        if self._check(TokenKind.LBRACE):
            return self._parse_object_literal()

        raise ParseError(f"[PAR-0080] unexpected token in expression: {tok.kind.name}:'{tok.text}'", tok,
                         self.filename)

    # --- types ---

    def _parse_type(self) -> Type:
        tok = self._peek()
        if self._match(TokenKind.IDENT):
            if tok.text == "boolean":
                return get_boolean_type()
            if tok.text == "number":
                return get_number_type()
            raise ParseError(f"[PAR-0070] unknown type name '{tok.text}'", tok, self.filename)
        if self._check(TokenKind.LPAREN):
            params = self._parse_params()
            self._expect(TokenKind.ARROW, "[PAR-0072] expected '=>' in function type")
            return make_func_type(params, self._parse_type())
        if self._check(TokenKind.LBRACE):
            return self._parse_object_type()
        if tok.kind is TokenKind.FUTURE_EXTENSION or is_reserved_keyword(tok.text):
            raise ParseError(f"[PAR-0070] unknown type name '{tok.text}'", tok, self.filename)
        raise ParseError(f"[PAR-0071] expected type, got {tok} instead", tok, self.filename)

    def _parse_object_type(self) -> Type:
        # { name: T; name: T } with ';' or ',' separators
        self._expect(TokenKind.LBRACE, "[PAR-0073] expected '{' to start object type")
        props: List[PropertyType] = []
        seen = set()
        while not self._check(TokenKind.RBRACE):
            name_tok = self._expect(TokenKind.IDENT, "[PAR-0073] expected property name in object type")
            if name_tok.text in seen:
                raise ParseError(f"[PAR-0074] duplicate property name '{name_tok.text}'", name_tok, self.filename)
            seen.add(name_tok.text)
            self._expect(TokenKind.COLON, f"[PAR-0073] expected ':' after property name '{name_tok.text}'")
            props.append(PropertyType(name_tok.text, self._parse_type()))
            if not self._match(TokenKind.SEMI, TokenKind.COMMA):
                break
        self._expect(TokenKind.RBRACE, "[PAR-0073] expected '}' after object type")
        return make_object_type(props)


def parse_source(source: str, filename: Optional[str] = None) -> Term:
    """Lex and parse `source` into a term; raises LexerError or ParseError."""
    tokens = Lexer(source, filename=filename or "<input>").tokenize()
    return Parser(tokens, filename=filename).parse_program()
