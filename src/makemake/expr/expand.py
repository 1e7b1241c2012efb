"""Expansion of `${...}` expressions embedded in text."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Mapping, Optional

from makemake.expr.evaluator import ExpandContext, Sink, evaluate
from makemake.expr.lexer import CharStream
from makemake.expr.parser import parse, parse_expression

log = logging.getLogger(__name__)


def expand(chars: CharStream, out: Sink, ctx: ExpandContext) -> None:
    """Copy `chars` to `out`, replacing every `${...}` with its evaluation.

    Each expression is parsed straight off the stream and evaluated before
    scanning resumes after its closing `}`.
    """
    for c in chars:
        if c != "$":
            out.write(c)
            continue

        nxt = next(chars, None)
        if nxt != "{":
            out.write("$")
            if nxt is None:
                break
            chars.push_back(nxt)
            continue

        after = next(chars, None)
        if after is None:
            out.write("${")
            break
        chars.push_back(after)

        evaluate(parse(chars), out, ctx)


def expand_text(text: str, ctx: ExpandContext) -> str:
    """Expand a string, e.g. a file name template or a hook command."""
    buf = io.StringIO()
    expand(CharStream.from_text(text), buf, ctx)
    return buf.getvalue()


def expand_file(src: Path, dest: Path, ctx: ExpandContext) -> None:
    """Stream `src` through the expander into `dest`."""
    log.debug(f"Expanding {src} -> {dest}")
    with open(src, encoding="utf-8", newline="") as fin, open(
        dest, "w", encoding="utf-8", newline=""
    ) as fout:
        expand(CharStream(fin), fout, ctx)


def evaluate_expression(
    source: str,
    vars: Mapping[str, str],
    template_dir: Optional[Path] = None,
) -> tuple[str, bool]:
    """Evaluate a bare expression and return (text, presence).

    Example:
        >>> evaluate_expression("name ?? 'World'", {})
        ('World', True)
    """
    ctx = ExpandContext(vars=vars, template_dir=template_dir or Path.cwd())
    buf = io.StringIO()
    present = evaluate(parse_expression(source), buf, ctx)
    return buf.getvalue(), present
