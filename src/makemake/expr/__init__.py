"""Expression engine for `${...}` markers in template files and names."""

from makemake.expr.evaluator import ExpandContext, evaluate
from makemake.expr.expand import evaluate_expression, expand, expand_file, expand_text
from makemake.expr.lexer import CharStream, Lexer, Token, TokenKind
from makemake.expr.parser import Parser, parse, parse_expression

__all__ = [
    "CharStream",
    "ExpandContext",
    "Lexer",
    "Parser",
    "Token",
    "TokenKind",
    "evaluate",
    "evaluate_expression",
    "expand",
    "expand_file",
    "expand_text",
    "parse",
    "parse_expression",
]
