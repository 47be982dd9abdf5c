"""Scale assembly — one logical channel to one or more scale definitions.

Color channels drawn through an intermediate encoding get auxiliary
legend scales emitted *before* the primary scale:

* categorical (rank) color: ``color_legend``, ``color``
* binned color: ``color_legend``, ``color_legend_label``, ``color``
* time-unit color: ``color_legend``, ``color``

The primary scale is always named after its channel.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from chartlower.compile.domain import DomainDescriptor, domain, min_sort, uses_rank_encoding
from chartlower.domain.naming import legend_label_scale_name, legend_scale_name, rank_field
from chartlower.domain.types import (
    CONTINUOUS_SCALES,
    POSITION_CHANNELS,
    Channel,
    FieldType,
    Mark,
    ScaleType,
    SortOrder,
    has_scale,
)

if TYPE_CHECKING:
    from chartlower.compile.model import Model

logger = logging.getLogger(__name__)

_ROUNDED_CHANNELS = frozenset({Channel.X, Channel.Y, Channel.ROW, Channel.COLUMN, Channel.SIZE})


def compile_scales(channels: Iterable[Channel], model: Model) -> list[dict[str, Any]]:
    """Emit scale definitions for *channels* in order, legend scales first."""
    scales: list[dict[str, Any]] = []
    for channel in channels:
        if not model.has(channel) or not has_scale(channel):
            continue
        field_def = model.field_def(channel)

        if channel == Channel.COLOR and field_def.legend:
            if uses_rank_encoding(model, channel) or field_def.is_binned or field_def.time_unit:
                scales.append(color_legend_scale(model, channel))
            if field_def.is_binned:
                scales.append(bin_legend_label_scale(model, channel))

        scales.append(main_scale(model, channel))
        logger.debug("Compiled scales for %s", channel)
    return scales


def _sorted_ref(model: Model, field: str) -> dict[str, Any]:
    return {"data": model.data_table_name(), "field": field, "sort": True}


def color_legend_scale(model: Model, channel: Channel) -> dict[str, Any]:
    """Inverse scale from legend key to the displayed value.

    Rank-encoded colors key on ``rank_<field>``; binned and time-unit
    colors key on their own (already ordered) field.
    """
    field = model.field(channel)
    key = rank_field(field) if uses_rank_encoding(model, channel) else field
    return {
        "name": legend_scale_name(channel),
        "type": ScaleType.ORDINAL,
        "domain": _sorted_ref(model, key),
        "range": _sorted_ref(model, field),
    }


def bin_legend_label_scale(model: Model, channel: Channel) -> dict[str, Any]:
    """Maps ``bin_<f>_start`` to its ``bin_<f>_range`` label."""
    start = model.field(channel, bin_suffix="start")
    return {
        "name": legend_label_scale_name(channel),
        "type": ScaleType.ORDINAL,
        "domain": _sorted_ref(model, start),
        "range": {
            "data": model.data_table_name(),
            "field": model.field(channel, bin_suffix="range"),
            # min or max is the same: each range has exactly one start
            "sort": min_sort(start),
        },
    }


def main_scale(model: Model, channel: Channel) -> dict[str, Any]:
    """The scale named after *channel*, with the resolved scale type.

    A binned color stays ``linear`` over ``bin_<field>_range``; the legend
    and label scales carry the readable ordering.
    """
    scale_type = model.scale_type(channel)
    field_def = model.field_def(channel)

    dom = domain(model, channel, scale_type)
    scale_def: dict[str, Any] = {
        "name": str(channel),
        "type": scale_type,
        "domain": dom.to_dict() if isinstance(dom, DomainDescriptor) else dom,
    }
    scale_def.update(range_mixins(model, channel, scale_type))

    if field_def.sort_order == SortOrder.DESCENDING:
        scale_def["reverse"] = True

    for prop, value in _optional_properties(model, channel, scale_type).items():
        if value is not None:
            scale_def[prop] = value
    return scale_def


def range_mixins(model: Model, channel: Channel, scale_type: ScaleType | None) -> dict[str, Any]:
    """Range (or band size) for the primary scale of *channel*."""
    config = model.config()
    scale = model.scale_config(channel)

    if (
        scale_type == ScaleType.ORDINAL
        and channel in POSITION_CHANNELS
        and model.has_fixed_band_size(channel)
    ):
        return {"bandSize": model.band_size(channel)}

    if scale.range is not None and channel not in (
        Channel.X,
        Channel.Y,
        Channel.ROW,
        Channel.COLUMN,
    ):
        return {"range": scale.range}

    match channel:
        case Channel.ROW:
            return {"range": "height"}
        case Channel.COLUMN:
            return {"range": "width"}
        case Channel.X:
            return {"rangeMin": 0, "rangeMax": config.cell.width}
        case Channel.Y:
            return {"rangeMin": config.cell.height, "rangeMax": 0}
        case Channel.SIZE:
            return {"range": _size_range(model)}
        case Channel.SHAPE:
            return {"range": config.scale.shape_range}
        case Channel.COLOR:
            if model.field_def(channel).type == FieldType.NOMINAL:
                return {"range": config.scale.nominal_color_range}
            return {"range": config.scale.sequential_color_range}
        case Channel.OPACITY:
            return {"range": config.scale.opacity}
    return {}


def _size_range(model: Model) -> list[float]:
    scale_config = model.config().scale
    mark = model.mark()

    if mark == Mark.BAR:
        if scale_config.bar_size_range is not None:
            return scale_config.bar_size_range
        dimension = Channel.Y if model.config().mark.orient == "horizontal" else Channel.X
        return [model.config().mark.bar_thin_size, _fixed_band_size(model, dimension)]
    if mark == Mark.TEXT:
        return scale_config.font_size_range
    if mark == Mark.RULE:
        return scale_config.rule_size_range
    if mark == Mark.TICK:
        return scale_config.tick_size_range

    # point, square, circle
    if scale_config.point_size_range is not None:
        return scale_config.point_size_range
    band_size = min(_fixed_band_size(model, Channel.X), _fixed_band_size(model, Channel.Y))
    return [9, (band_size - 2) * (band_size - 2)]


def _fixed_band_size(model: Model, channel: Channel) -> float:
    """Numeric band size of an ordinal position channel, else the default."""
    if model.is_ordinal_scale(channel) and model.has_fixed_band_size(channel):
        return float(model.band_size(channel))
    return model.config().scale.band_size


def _optional_properties(
    model: Model, channel: Channel, scale_type: ScaleType | None
) -> dict[str, Any]:
    scale = model.scale_config(channel)
    field_def = model.field_def(channel)
    props: dict[str, Any] = {}

    if channel in _ROUNDED_CHANNELS:
        props["round"] = model.config().scale.round if scale.round is None else scale.round

    if scale_type in CONTINUOUS_SCALES:
        props["nice"] = scale.nice if scale.nice is not None else channel in POSITION_CHANNELS

    if scale_type not in (ScaleType.TIME, ScaleType.UTC, ScaleType.ORDINAL):
        props["zero"] = (
            scale.zero
            if scale.zero is not None
            else (not field_def.is_binned and channel in POSITION_CHANNELS)
        )

    if scale_type == ScaleType.ORDINAL:
        if channel not in (Channel.ROW, Channel.COLUMN):
            props["padding"] = model.padding(channel)
        if channel in POSITION_CHANNELS and model.mark() != Mark.BAR:
            props["points"] = True
    return props
