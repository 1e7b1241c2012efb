"""Expression tree produced by the parser.

An absent expression (`${}` or an empty branch) is represented by plain
`None`. Every other node is one of the dataclasses below.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union


@dataclass
class Variable:
    """Lookup of `name` in the active variable mapping."""

    name: str


@dataclass
class Literal:
    """Quoted text, always present."""

    value: str


@dataclass
class Concat:
    """Adjacent terms rendered one after another."""

    items: List["Node"] = field(default_factory=list)


@dataclass
class Equals:
    """`left == right`, present only when both sides agree."""

    left: "Expr"
    right: "Expr"


@dataclass
class Condition:
    """`cond ? success : failure`, dispatched on the presence of `cond`."""

    cond: "Expr"
    success: "Expr"
    failure: "Expr"


@dataclass
class NullCheck:
    """`primary ?? fallback`."""

    primary: "Expr"
    fallback: "Expr"


@dataclass
class Call:
    """`#function(file, name=expr, -name)`.

    `define` maps a variable to its new value expression (None clears it to
    the empty string); `undefine` lists variables removed in the callee.
    """

    function: str
    file: "Expr"
    define: Dict[str, "Expr"] = field(default_factory=dict)
    undefine: List[str] = field(default_factory=list)


Node = Union[Variable, Literal, Concat, Equals, Condition, NullCheck, Call]
Expr = Optional[Node]


def concat(acc: Expr, term: Expr) -> Expr:
    """Append `term` to the accumulated expression.

    A single term is kept as is; the Concat wrapper is only created once a
    second term shows up.
    """
    if term is None:
        return acc
    if acc is None:
        return term
    if isinstance(acc, Concat):
        acc.items.append(term)
        return acc
    return Concat([acc, term])
