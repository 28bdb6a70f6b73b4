"""
Odoo domain expressions.

Filters are built as a small tree and serialized to Odoo's prefix
notation only at the edge, e.g.

    Or([Comparison("email", "=", e), Comparison("name", "ilike", n)])
    -> ["|", ["email", "=", e], ["name", "ilike", n]]
"""

from dataclasses import dataclass, field
from typing import Any, List, Union


@dataclass(frozen=True)
class Comparison:
    field: str
    op: str
    value: Any


@dataclass(frozen=True)
class And:
    terms: List["Expr"] = field(default_factory=list)


@dataclass(frozen=True)
class Or:
    terms: List["Expr"] = field(default_factory=list)


Expr = Union[Comparison, And, Or]


def _serialize(expr: Expr) -> list:
    if isinstance(expr, Comparison):
        return [[expr.field, expr.op, expr.value]]
    if isinstance(expr, (And, Or)):
        parts = [p for t in expr.terms for p in [_serialize(t)] if p]
        if not parts:
            return []
        prefix = "&" if isinstance(expr, And) else "|"
        out = [prefix] * (len(parts) - 1)
        for p in parts:
            out.extend(p)
        return out
    raise TypeError(f"not a domain expression: {expr!r}")


def to_domain(expr: Expr) -> list:
    """Serialize ``expr``; a top-level And is plain concatenation."""
    if isinstance(expr, And):
        out = []
        for t in expr.terms:
            out.extend(_serialize(t))
        return out
    return _serialize(expr)
