"""Parser - recursive descent over the lexer's token stream.

Grammar:

    expr       := concat ( '?' expr ':' expr | '??' expr )?
    concat     := ( '(' expr ')' | ident | literal | '#' call | '==' concat )*
    call       := ident '(' expr ( ',' ( '-' ident | ident ( '=' expr )? ) )* ')'

The first error aborts parsing; there is no recovery.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional

from makemake.exceptions import ParseError
from makemake.expr.lexer import CharStream, Lexer, Token, TokenKind
from makemake.expr.node import (
    Call,
    Condition,
    Equals,
    Expr,
    Literal,
    NullCheck,
    Variable,
    concat,
)


class Parser:
    """One-token-lookahead parser producing an expression tree."""

    def __init__(self, tokens: Iterator[Token]):
        self._tokens = tokens
        self._tok: Optional[Token] = None
        self._advance()

    def parse(self, delimited: bool = True) -> Expr:
        """Parse a whole expression.

        Args:
            delimited: If True the expression must be closed by `}` (which is
                left unconsumed in the underlying stream). Otherwise it must
                run to the end of input.

        Returns:
            The expression tree, or None for an empty expression.
        """
        expr = self._expr()
        if delimited:
            if not self._at(TokenKind.CLOSE_BRACKET):
                raise ParseError("'}'")
        elif self._tok is not None:
            raise ParseError("end of expression")
        return expr

    def _advance(self) -> None:
        self._tok = next(self._tokens, None)

    def _at(self, kind: TokenKind) -> bool:
        return self._tok is not None and self._tok.kind is kind

    def _expect(self, kind: TokenKind, what: str) -> None:
        if not self._at(kind):
            raise ParseError(what)
        self._advance()

    def _expect_ident(self) -> str:
        if not self._at(TokenKind.IDENT):
            raise ParseError("identifier")
        name = self._tok.text
        self._advance()
        return name

    def _expr(self) -> Expr:
        res = self._concat()

        if self._at(TokenKind.QUESTION):
            self._advance()
            success = self._expr()
            self._expect(TokenKind.COLON, "':'")
            failure = self._expr()
            return Condition(res, success, failure)

        if self._at(TokenKind.NULL_CHECK):
            self._advance()
            return NullCheck(res, self._expr())

        return res

    def _concat(self) -> Expr:
        res: Expr = None

        while self._tok is not None:
            tok = self._tok
            if tok.kind is TokenKind.OPEN_PAREN:
                self._advance()
                inner = self._expr()
                self._expect(TokenKind.CLOSE_PAREN, "')'")
                res = concat(res, inner)
            elif tok.kind is TokenKind.IDENT:
                self._advance()
                res = concat(res, Variable(tok.text))
            elif tok.kind is TokenKind.LITERAL:
                self._advance()
                res = concat(res, Literal(tok.text))
            elif tok.kind is TokenKind.POUND:
                self._advance()
                res = concat(res, self._call())
            elif tok.kind is TokenKind.EQUALS:
                self._advance()
                res = Equals(res, self._concat())
            else:
                break

        return res

    def _call(self) -> Call:
        function = self._expect_ident()
        self._expect(TokenKind.OPEN_PAREN, "'('")
        file = self._expr()

        define: Dict[str, Expr] = {}
        undefine: List[str] = []
        while self._at(TokenKind.COMMA):
            self._advance()
            if self._at(TokenKind.MINUS):
                self._advance()
                undefine.append(self._expect_ident())
                continue

            name = self._expect_ident()
            if self._at(TokenKind.ASSIGN):
                self._advance()
                define[name] = self._expr()
            else:
                define[name] = None

        self._expect(TokenKind.CLOSE_PAREN, "')'")
        return Call(function, file, define, undefine)


def parse(chars: Iterator[str], delimited: bool = True) -> Expr:
    """Parse one expression from a character stream.

    With `delimited` the stream is positioned right after the closing `}`
    when this returns.
    """
    return Parser(Lexer(chars)).parse(delimited)


def parse_expression(source: str) -> Expr:
    """Parse a bare expression string (no surrounding `${` `}`)."""
    return parse(CharStream.from_text(source), delimited=False)
