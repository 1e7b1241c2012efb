"""Evaluator - renders expression trees against a variable context.

Every node writes its output to a sink and returns a presence flag: whether
it resolved to something. Presence is distinct from rendering empty text.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Mapping, Protocol

from makemake.exceptions import EvalError
from makemake.expr.node import (
    Call,
    Concat,
    Condition,
    Equals,
    Expr,
    Literal,
    NullCheck,
    Variable,
)

log = logging.getLogger(__name__)


class Sink(Protocol):
    def write(self, s: str) -> int: ...


class Discard:
    """Sink that drops everything written to it."""

    def write(self, s: str) -> int:
        return len(s)


@dataclass(frozen=True)
class ExpandContext:
    """Variables visible to an expansion and the template root.

    Function calls resolve their file argument against `template_dir`,
    never against the working directory.
    """

    vars: Mapping[str, str]
    template_dir: Path

    def derive(self, define: Mapping[str, str], undefine: list[str]) -> "ExpandContext":
        """Copy of this context with `undefine` removed, then `define` applied."""
        vars = dict(self.vars)
        for name in undefine:
            vars.pop(name, None)
        vars.update(define)
        return ExpandContext(vars=vars, template_dir=self.template_dir)


def evaluate(expr: Expr, out: Sink, ctx: ExpandContext) -> bool:
    """Evaluate `expr` into `out` and return its presence flag."""
    if expr is None:
        return False
    return _EVALUATORS[type(expr)](expr, out, ctx)


def render(expr: Expr, ctx: ExpandContext) -> tuple[str, bool]:
    """Evaluate into a fresh buffer and return (text, presence)."""
    buf = io.StringIO()
    present = evaluate(expr, buf, ctx)
    return buf.getvalue(), present


def _eval_variable(node: Variable, out: Sink, ctx: ExpandContext) -> bool:
    value = ctx.vars.get(node.name)
    if value is None:
        return False
    out.write(value)
    return True


def _eval_literal(node: Literal, out: Sink, ctx: ExpandContext) -> bool:
    out.write(node.value)
    return True


def _eval_concat(node: Concat, out: Sink, ctx: ExpandContext) -> bool:
    present = False
    for item in node.items:
        # evaluate every child, even after one was present
        present = evaluate(item, out, ctx) or present
    return present


def _eval_equals(node: Equals, out: Sink, ctx: ExpandContext) -> bool:
    left, lpresent = render(node.left, ctx)
    right, rpresent = render(node.right, ctx)
    if lpresent == rpresent and left == right:
        out.write(left)
        return True
    return False


def _eval_condition(node: Condition, out: Sink, ctx: ExpandContext) -> bool:
    if evaluate(node.cond, Discard(), ctx):
        return evaluate(node.success, out, ctx)
    return evaluate(node.failure, out, ctx)


def _eval_null_check(node: NullCheck, out: Sink, ctx: ExpandContext) -> bool:
    text, present = render(node.primary, ctx)
    if present:
        out.write(text)
        return True
    return evaluate(node.fallback, out, ctx)


def _eval_call(node: Call, out: Sink, ctx: ExpandContext) -> bool:
    function = _FUNCTIONS.get(node.function)
    if function is None:
        raise EvalError(f"unknown function '{node.function}'")
    return function(node, out, ctx)


def _resolve_file(node: Call, ctx: ExpandContext) -> Path:
    name, _ = render(node.file, ctx)
    return ctx.template_dir / name


def _check_no_arguments(node: Call) -> None:
    if node.define or node.undefine:
        raise EvalError(f"too many arguments to function '#{node.function}'")


def _call_exists(node: Call, out: Sink, ctx: ExpandContext) -> bool:
    _check_no_arguments(node)
    return _resolve_file(node, ctx).exists()


def _call_include(node: Call, out: Sink, ctx: ExpandContext) -> bool:
    _check_no_arguments(node)
    path = _resolve_file(node, ctx)
    if not path.exists():
        log.debug(f"include: {path} does not exist")
        return False

    try:
        with open(path, encoding="utf-8", newline="") as f:
            for chunk in iter(lambda: f.read(io.DEFAULT_BUFFER_SIZE), ""):
                out.write(chunk)
    except (OSError, UnicodeDecodeError) as e:
        raise EvalError(f"include: failed to read {path}: {e}") from e
    return True


def _call_make(node: Call, out: Sink, ctx: ExpandContext) -> bool:
    from makemake.expr.expand import expand
    from makemake.expr.lexer import CharStream

    path = _resolve_file(node, ctx)
    if not path.exists():
        log.debug(f"make: {path} does not exist")
        return False

    inner = ctx
    if node.define or node.undefine:
        # absent values still define the variable, as the empty string
        define = {name: render(value, ctx)[0] for name, value in node.define.items()}
        inner = ctx.derive(define, node.undefine)

    try:
        with open(path, encoding="utf-8", newline="") as f:
            expand(CharStream(f), out, inner)
    except (OSError, UnicodeDecodeError) as e:
        raise EvalError(f"make: failed to read {path}: {e}") from e
    return True


_EVALUATORS: Dict[type, Callable[..., bool]] = {
    Variable: _eval_variable,
    Literal: _eval_literal,
    Concat: _eval_concat,
    Equals: _eval_equals,
    Condition: _eval_condition,
    NullCheck: _eval_null_check,
    Call: _eval_call,
}

_FUNCTIONS: Dict[str, Callable[[Call, Sink, ExpandContext], bool]] = {
    "exists": _call_exists,
    "include": _call_include,
    "make": _call_make,
}
