"""Lexer - tokenizes the text between `${` and the matching `}`."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional

from makemake.exceptions import LexError


class CharStream:
    """Single-pass character source with one character of push-back.

    The expander and the lexer read from the same stream, so the lexer must
    never consume characters past the `}` that closes an expression.
    """

    def __init__(self, chunks: Iterable[str]):
        self._chars = itertools.chain.from_iterable(chunks)
        self._pending: Optional[str] = None

    @classmethod
    def from_text(cls, text: str) -> "CharStream":
        return cls((text,))

    def __iter__(self) -> "CharStream":
        return self

    def __next__(self) -> str:
        if self._pending is not None:
            c, self._pending = self._pending, None
            return c
        return next(self._chars)

    def push_back(self, c: str) -> None:
        self._pending = c


class TokenKind(Enum):
    CLOSE_BRACKET = "}"
    QUESTION = "?"
    COLON = ":"
    OPEN_PAREN = "("
    CLOSE_PAREN = ")"
    EQUALS = "=="
    NULL_CHECK = "??"
    IDENT = "identifier"
    LITERAL = "literal"
    POUND = "#"
    COMMA = ","
    ASSIGN = "="
    MINUS = "-"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str = ""

    def __str__(self) -> str:
        if self.kind in (TokenKind.IDENT, TokenKind.LITERAL):
            return self.text
        return self.kind.value


_SINGLE = {
    "}": TokenKind.CLOSE_BRACKET,
    ":": TokenKind.COLON,
    "(": TokenKind.OPEN_PAREN,
    ")": TokenKind.CLOSE_PAREN,
    "#": TokenKind.POUND,
    ",": TokenKind.COMMA,
    "-": TokenKind.MINUS,
}

_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "\\": "\\",
    "'": "'",
}


class Lexer:
    """Lazy token iterator over a character stream.

    Yields tokens until the stream ends. A `}` is emitted as CLOSE_BRACKET;
    deciding where the expression stops is left to the parser.
    """

    def __init__(self, chars: Iterator[str]):
        self._chars = chars
        # lookahead character; None once consumed or at end of input
        self._cur: Optional[str] = None

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self._next_token()
        if token is None:
            raise StopIteration
        return token

    def _read(self) -> Optional[str]:
        self._cur = next(self._chars, None)
        return self._cur

    def _next_token(self) -> Optional[Token]:
        if self._cur is None:
            self._read()

        while self._cur is not None and self._cur.isspace():
            self._read()

        c = self._cur
        if c is None:
            return None

        kind = _SINGLE.get(c)
        if kind is not None:
            self._cur = None
            return Token(kind)

        if c == "?":
            return self._pair("?", TokenKind.NULL_CHECK, TokenKind.QUESTION)
        if c == "=":
            return self._pair("=", TokenKind.EQUALS, TokenKind.ASSIGN)
        if c == "'":
            return self._read_literal()
        if c.isalpha() or c == "_":
            return self._read_ident()

        raise LexError(f"unexpected character '{c}'")

    def _pair(self, second: str, double: TokenKind, single: TokenKind) -> Token:
        """Lex a one-or-two character operator such as `?`/`??`."""
        if self._read() == second:
            self._cur = None
            return Token(double)
        return Token(single)

    def _read_ident(self) -> Token:
        ident = [self._cur]
        while True:
            c = self._read()
            if c is None or not (c.isalnum() or c == "_"):
                break
            ident.append(c)
        return Token(TokenKind.IDENT, "".join(ident))

    def _read_literal(self) -> Token:
        lit = []
        while True:
            c = self._read()
            if c is None:
                raise LexError("expected `'` to close the literal")
            if c == "'":
                self._cur = None
                return Token(TokenKind.LITERAL, "".join(lit))
            if c == "\\":
                lit.append(self._escape())
            else:
                lit.append(c)

    def _escape(self) -> str:
        c = self._read()
        if c is None:
            raise LexError("expected escape sequence")
        return _ESCAPES.get(c, c)


def tokenize(source: str) -> list[Token]:
    """Tokenize a whole string. Mostly useful for debugging and tests."""
    return list(Lexer(CharStream.from_text(source)))
