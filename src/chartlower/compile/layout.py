"""Layout pass — pixel size formulas for unit and facet views.

Sizes are compiled bottom-up. A unit view produces one size component
per dimension; a facet view takes its child's component for the same
dimension, adds its own formula on top, and merges the distinct-count
requirements so one aggregation serves every level. The assembler then
turns the root's components into a single ``layout`` dataset.

Only shared scales are supported: all panels of a facet have the same
size, so width and height can be computed from one data source.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from chartlower.compile.cardinality import cardinality, distinct_fields
from chartlower.compile.components import Dimension, LayoutComponent, SizeComponent, SizeFormula
from chartlower.compile.errors import (
    IndependentScaleNotSupportedError,
    SizeComponentConsumedError,
)
from chartlower.compile.model import FacetModel
from chartlower.domain.expr import Add, DatumRef, Expr, Group, Literal, Mul, as_expr
from chartlower.domain.types import Channel, DataSource, Mark

if TYPE_CHECKING:
    from chartlower.compile.model import Model, UnitModel

logger = logging.getLogger(__name__)


def compile_layout(model: Model) -> LayoutComponent:
    """Compile layout components for the whole tree, children first."""
    if isinstance(model, FacetModel):
        compile_layout(model.child())
        layout = parse_facet_layout(model)
    else:
        layout = parse_unit_layout(model)
    model.component.layout = layout
    return layout


# --- unit ---


def parse_unit_layout(model: UnitModel) -> LayoutComponent:
    return LayoutComponent(
        width=parse_unit_size_layout(model, Channel.X),
        height=parse_unit_size_layout(model, Channel.Y),
    )


def parse_unit_size_layout(model: UnitModel, channel: Channel) -> SizeComponent:
    distinct = distinct_fields(model, channel) if _has_band_sized_scale(model, channel) else {}
    formula = SizeFormula(model.size_field_name(channel), unit_size_expr(model, channel))
    return SizeComponent(distinct=distinct, formulas=[formula])


def _has_band_sized_scale(model: Model, channel: Channel) -> bool:
    return model.is_ordinal_scale(channel) and model.has_fixed_band_size(channel)


def unit_size_expr(model: UnitModel, channel: Channel) -> Expr:
    """Size of one cell along *channel*.

    An ordinal axis with a fixed band size gets ``(cardinality + 1) *
    bandSize``; the extra band is half a band of margin on each side.
    """
    config = model.config()
    if model.has(channel):
        if _has_band_sized_scale(model, channel):
            count = as_expr(cardinality(model, channel))
            return Mul(Group(Add(count, Literal(1))), Literal(model.band_size(channel)))
        return Literal(model.static_cell_size(channel))

    # Text tables without an x field need a wider column.
    if model.mark() == Mark.TEXT and channel == Channel.X:
        return Literal(config.scale.text_band_width)
    return Literal(config.scale.band_size)


# --- facet ---


def parse_facet_layout(model: FacetModel) -> LayoutComponent:
    return LayoutComponent(
        width=parse_facet_size_layout(model, Channel.COLUMN),
        height=parse_facet_size_layout(model, Channel.ROW),
    )


def parse_facet_size_layout(model: FacetModel, channel: Channel) -> SizeComponent:
    """Fold the child's size component for *channel*'s dimension into this facet's.

    The child's component is taken, not copied: its slot is empty
    afterwards and a second call raises ``SizeComponentConsumedError``.
    """
    if not model.config().facet.shared_scales:
        raise IndependentScaleNotSupportedError()

    dimension: Dimension = "height" if channel == Channel.ROW else "width"
    child = model.child()
    child_layout = child.component.layout
    if child_layout is None:
        raise SizeComponentConsumedError(dimension)
    child_component = child_layout.take(dimension)

    distinct = distinct_fields(model, channel) if model.has(channel) else {}
    distinct.update(child_component.distinct)

    formula = SizeFormula(
        model.size_field_name(channel),
        facet_size_expr(model, channel, child.size_field_name(channel)),
    )
    logger.debug("Merged child %s into facet %s", dimension, channel)
    return SizeComponent(distinct=distinct, formulas=[*child_component.formulas, formula])


def facet_size_expr(model: FacetModel, channel: Channel, inner_size: str) -> Expr:
    inner = DatumRef(inner_size)
    if model.has(channel):
        padded = Group(Add(inner, Literal(model.padding(channel))))
        return Mul(padded, as_expr(cardinality(model, channel)))
    # A single panel still needs the facet's outer padding.
    return Add(inner, Literal(model.config().facet.padding))


# --- assembly ---


def assemble_layout(
    model: Model, layout_data: list[dict[str, Any]] | None = None
) -> list[dict[str, Any]]:
    """Append the ``layout`` dataset for *model* to *layout_data*.

    Returns *layout_data* unchanged when the model has no size components.
    """
    layout_data = list(layout_data or [])
    layout = model.component.layout
    if layout is None or layout.is_empty:
        return layout_data

    if not model.config().facet.shared_scales:
        # Independent scales would need width and height joined per panel.
        raise IndependentScaleNotSupportedError()

    components = [c for c in (layout.width, layout.height) if c is not None]
    distinct: dict[str, None] = {}
    for component in components:
        distinct.update(component.distinct)
    formulas = [f.to_dict() for component in components for f in component.formulas]

    name = model.data_name(DataSource.LAYOUT)
    if distinct:
        dataset: dict[str, Any] = {
            "name": name,
            "source": model.data_table_name(),
            "transform": [
                {
                    "type": "aggregate",
                    "summarize": [{"field": field, "ops": ["distinct"]} for field in distinct],
                },
                *formulas,
            ],
        }
    else:
        dataset = {"name": name, "values": [{}], "transform": formulas}
    return [*layout_data, dataset]
