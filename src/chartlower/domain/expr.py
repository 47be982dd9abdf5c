"""Tiny arithmetic expression tree for size formulas.

Size formulas are built as trees so tests (and callers) can evaluate
them against a datum, and rendered to the target grammar's expression
strings only at assembly time.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from chartlower.domain.naming import datum_ref


def format_number(value: float) -> str:
    """Render a number the way the expression language expects (``20`` not ``20.0``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class Expr(ABC):
    """Base class for expression nodes."""

    @abstractmethod
    def render(self) -> str:
        """Expression-language source for this node."""

    @abstractmethod
    def evaluate(self, datum: Mapping[str, Any]) -> float:
        """Value of this node for one row."""

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class Literal(Expr):
    value: float

    def render(self) -> str:
        return format_number(self.value)

    def evaluate(self, datum: Mapping[str, Any]) -> float:
        return self.value


@dataclass(frozen=True)
class DatumRef(Expr):
    """Reference to a field of the row the formula runs on."""

    field: str

    def render(self) -> str:
        return datum_ref(self.field)

    def evaluate(self, datum: Mapping[str, Any]) -> float:
        return datum[self.field]


@dataclass(frozen=True)
class Add(Expr):
    left: Expr
    right: Expr

    def render(self) -> str:
        return f"{self.left.render()} + {self.right.render()}"

    def evaluate(self, datum: Mapping[str, Any]) -> float:
        return self.left.evaluate(datum) + self.right.evaluate(datum)


@dataclass(frozen=True)
class Mul(Expr):
    left: Expr
    right: Expr

    def render(self) -> str:
        return f"{self.left.render()} * {self.right.render()}"

    def evaluate(self, datum: Mapping[str, Any]) -> float:
        return self.left.evaluate(datum) * self.right.evaluate(datum)


@dataclass(frozen=True)
class Group(Expr):
    """Parenthesized sub-expression."""

    inner: Expr

    def render(self) -> str:
        return f"({self.inner.render()})"

    def evaluate(self, datum: Mapping[str, Any]) -> float:
        return self.inner.evaluate(datum)


def as_expr(value: Expr | float) -> Expr:
    """Wrap a bare number as a :class:`Literal`."""
    if isinstance(value, Expr):
        return value
    return Literal(value)
