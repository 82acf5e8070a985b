#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass
from enum import Enum, auto
from typing import List


# ==========================
# Tokens and lexer
# ==========================

class TokenKind(Enum):
    # Special
    EOF = auto()

    IDENT = auto()  # identifier, e.g. x, add, etc.
    NUMBER = auto()  # number literal, e.g. 42, 3.5

    # Keywords
    TRUE = auto()
    FALSE = auto()
    CONST = auto()
    FUNCTION = auto()
    RETURN = auto()

    # Punctuation / operators
    LBRACE = auto()  # {
    RBRACE = auto()  # }
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    COMMA = auto()  # ,
    SEMI = auto()  # ;
    COLON = auto()  # :
    DOT = auto()  # .
    QUESTION = auto()  # ?
    PLUS = auto()  # +
    ARROW = auto()  # =>
    EQ = auto()  # =

    # Reserved operators (not supported, lexed for diagnostics)
    MINUS = auto()  # -
    STAR = auto()  # *
    SLASH = auto()  # /
    LT = auto()  # <
    GT = auto()  # >
    BANG = auto()  # !
    EQEQ = auto()  # == or ===

    FUTURE_EXTENSION = auto()  # placeholder for future keywords


KEYWORDS = {
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "const": TokenKind.CONST,
    "function": TokenKind.FUNCTION,
    "return": TokenKind.RETURN,
    "boolean": TokenKind.IDENT,
    "number": TokenKind.IDENT,
    "let": TokenKind.FUTURE_EXTENSION,
    "var": TokenKind.FUTURE_EXTENSION,
    "if": TokenKind.FUTURE_EXTENSION,
    "else": TokenKind.FUTURE_EXTENSION,
    "string": TokenKind.FUTURE_EXTENSION,
    "null": TokenKind.FUTURE_EXTENSION,
    "undefined": TokenKind.FUTURE_EXTENSION,
    "type": TokenKind.FUTURE_EXTENSION,
}


@dataclass
class Token:
    kind: TokenKind
    text: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"{self.text!r}" if self.kind != TokenKind.EOF else "end-of-file"


@dataclass
class LexerError(Exception):
    message: str
    filename: str
    line: int
    column: int


def is_reserved_keyword(word: str) -> bool:
    return word in KEYWORDS


def _is_digit(c: str) -> bool:
    # ASCII only; float() rejects other Unicode digits
    return "0" <= c <= "9"


class Lexer:
    def __init__(self, source: str, filename: str = "<input>") -> None:
        self.source = source
        self.filename = filename
        self.length = len(source)
        self.index = 0
        self.line = 1
        self.column = 1

    @classmethod
    def from_source(cls, source: str) -> "Lexer":
        return cls(source)

    # --- low-level char utilities ---

    def _at_end(self) -> bool:
        return self.index >= self.length

    def _peek(self) -> str:
        if self._at_end():
            return "\0"
        return self.source[self.index]

    def _peek_next(self) -> str:
        if self.index + 1 >= self.length:
            return "\0"
        return self.source[self.index + 1]

    def _advance(self) -> str:
        c = self._peek()
        if not self._at_end():
            self.index += 1
            if c == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        return c

    # --- main API ---

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        while True:
            tok = self._next_token()
            tokens.append(tok)
            if tok.kind is TokenKind.EOF:
                break
        return tokens

    _SINGLE_CHAR_TOKENS = {
        "(": TokenKind.LPAREN,
        ")": TokenKind.RPAREN,
        "{": TokenKind.LBRACE,
        "}": TokenKind.RBRACE,
        ",": TokenKind.COMMA,
        ";": TokenKind.SEMI,
        ":": TokenKind.COLON,
        ".": TokenKind.DOT,
        "?": TokenKind.QUESTION,
        "+": TokenKind.PLUS,
        "-": TokenKind.MINUS,
        "*": TokenKind.STAR,
        "/": TokenKind.SLASH,
        "<": TokenKind.LT,
        ">": TokenKind.GT,
    }

    def _next_token(self) -> Token:
        self._skip_ws_and_comments()
        start_line, start_col = self.line, self.column

        if self._at_end():
            return Token(TokenKind.EOF, "", start_line, start_col)

        c = self._advance()

        # identifiers / keywords
        if c.isalpha() or c == "_" or c == "$":
            ident = [c]
            while self._peek().isalnum() or self._peek() in ("_", "$"):
                ident.append(self._advance())
            text = "".join(ident)
            return Token(KEYWORDS.get(text, TokenKind.IDENT), text, start_line, start_col)

        # numbers
        if _is_digit(c):
            text = self._read_number(c, start_line, start_col)
            return Token(TokenKind.NUMBER, text, start_line, start_col)

        # operators with lookahead

        if c == "=":
            if self._peek() == ">":
                self._advance()
                return Token(TokenKind.ARROW, "=>", start_line, start_col)
            if self._peek() == "=":
                self._advance()
                text = "=="
                if self._peek() == "=":
                    self._advance()
                    text = "==="
                return Token(TokenKind.EQEQ, text, start_line, start_col)
            return Token(TokenKind.EQ, c, start_line, start_col)

        if c == "!":
            return Token(TokenKind.BANG, c, start_line, start_col)

        kind = self._SINGLE_CHAR_TOKENS.get(c)
        if kind is not None:
            return Token(kind, c, start_line, start_col)

        raise LexerError(f"[LEX-0020] unexpected character {c!r} at {start_line}:{start_col}", self.filename,
                         start_line, start_col)

    def _read_number(self, c: str, start_line: int, start_col: int) -> str:
        digits = [c]
        while _is_digit(self._peek()):
            digits.append(self._advance())
        # fractional part: a dot directly followed by a digit
        if self._peek() == "." and _is_digit(self._peek_next()):
            digits.append(self._advance())
            while _is_digit(self._peek()):
                digits.append(self._advance())
        if self._peek().isalnum() or self._peek() == "_":
            raise LexerError(f"[LEX-0030] invalid character '{self._peek()}' after number literal",
                             self.filename, self.line, self.column)
        return "".join(digits)

    def _skip_ws_and_comments(self) -> None:
        while True:
            c = self._peek()
            if c in (" ", "\t", "\r", "\n"):
                self._advance()
                continue
            if c == "/" and self._peek_next() == "/":
                # line comment
                self._advance()  # '/'
                self._advance()  # second '/'
                while self._peek() not in ("\n", "\0"):
                    self._advance()
                continue
            if c == "/" and self._peek_next() == "*":
                # block comment
                self._advance()  # '/'
                self._advance()  # '*'
                while True:
                    if self._at_end():
                        raise LexerError("[LEX-0010] unterminated block comment", self.filename, self.line, self.column)
                    if self._peek() == "*" and self._peek_next() == "/":
                        self._advance()  # '*'
                        self._advance()  # '/'
                        break
                    self._advance()
                continue
            break
