"""Layout size components and their single-use hand-off.

A facet parent takes its child's size component for a dimension; the
child's slot is emptied in the same step, so a component can only ever
be merged once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from chartlower.compile.errors import SizeComponentConsumedError
from chartlower.domain.expr import Expr

Dimension = Literal["width", "height"]


@dataclass(frozen=True)
class SizeFormula:
    """``field = expr`` evaluated once per layout row."""

    field: str
    expr: Expr

    def to_dict(self) -> dict[str, Any]:
        return {"type": "formula", "field": self.field, "expr": self.expr.render()}


@dataclass
class SizeComponent:
    """Distinct-count fields plus ordered formulas for one dimension.

    ``distinct`` is a dict used as an insertion-ordered set.
    """

    distinct: dict[str, None] = field(default_factory=dict)
    formulas: list[SizeFormula] = field(default_factory=list)

    @property
    def distinct_fields(self) -> list[str]:
        return list(self.distinct)


@dataclass
class LayoutComponent:
    width: SizeComponent | None = None
    height: SizeComponent | None = None

    @property
    def is_empty(self) -> bool:
        return self.width is None and self.height is None

    def get(self, dimension: Dimension) -> SizeComponent | None:
        return self.width if dimension == "width" else self.height

    def take(self, dimension: Dimension) -> SizeComponent:
        """Move the component for *dimension* out, leaving the slot empty."""
        component = self.get(dimension)
        if component is None:
            raise SizeComponentConsumedError(dimension)
        if dimension == "width":
            self.width = None
        else:
            self.height = None
        return component


@dataclass
class ModelComponent:
    """Per-model compile output filled in by the passes."""

    layout: LayoutComponent | None = None
