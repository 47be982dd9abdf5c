"""Literal lookup tables backing finite time-unit domains.

A ``month`` y-axis reads its domain from ``{data: "month", field:
"date"}``; this module emits that ``month`` dataset (values 0..11, each
turned into a date by a formula) once per unit used in the tree.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from chartlower.compile.model import FacetModel
from chartlower.domain.naming import datum_ref
from chartlower.domain.timeunit import datetime_expression, raw_domain

if TYPE_CHECKING:
    from chartlower.compile.model import Model

_VALUE_FIELD = "data"
_DATE_FIELD = "date"


def assemble_time_unit_tables(model: Model) -> list[dict[str, Any]]:
    """One dataset per distinct finite time unit used anywhere in *model*'s tree."""
    tables: dict[str, dict[str, Any]] = {}
    node: Model | None = model
    while node is not None:
        for channel, field_def in node.for_each():
            unit = field_def.time_unit
            if unit is None or unit in tables:
                continue
            values = raw_domain(unit, channel)
            if values is None:
                continue
            tables[unit] = {
                "name": unit,
                "values": values,
                "transform": [
                    {
                        "type": "formula",
                        "field": _DATE_FIELD,
                        "expr": datetime_expression(unit, datum_ref(_VALUE_FIELD), only_ref=True),
                    }
                ],
            }
        node = node.child() if isinstance(node, FacetModel) else None
    return list(tables.values())
