"""Domain inference — which dataset and field a scale reads its domain from.

The decision is a first-match table over the channel's field definition
and the target scale kind:

1. explicit literal domain -> the literal list, not data driven
2. binned -> ``bin_<f>_range`` sorted by ``bin_<f>_start``
3. ``sum`` aggregate -> summary table (``sum_sum_<f>`` when stacked)
4. other aggregate -> raw field in source if useRawDomain, else summary
5. temporal -> literal time-unit table, or the (time-unit) field
6. everything else -> the field, with a sort directive on ordinal scales

Sum extents must come from the summary because a raw scan would miss
the summed values. Bin and cyclical time domains need their own order,
which a plain sort of the values would not give.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from chartlower.domain.fielddef import SortField
from chartlower.domain.naming import aggregate_field, rank_field
from chartlower.domain.timeunit import raw_domain
from chartlower.domain.types import Channel, DataSource, FieldType, ScaleType, SortOrder

if TYPE_CHECKING:
    from chartlower.compile.model import Model

logger = logging.getLogger(__name__)

Sort = dict[str, str] | bool | None

_DATE_FIELD = "date"


@dataclass(frozen=True)
class DomainDescriptor:
    """Data-driven scale domain: ``{data, field[, sort]}``."""

    data: str
    field: str
    sort: Sort = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"data": self.data, "field": self.field}
        if self.sort is not None:
            result["sort"] = self.sort
        return result


def min_sort(field: str) -> dict[str, str]:
    """Order a domain by the minimum of *field* per value."""
    return {"field": field, "op": "min"}


def uses_rank_encoding(model: Model, channel: Channel) -> bool:
    """Categorical colors are drawn through a ``rank_<field>`` encoding."""
    if channel != Channel.COLOR:
        return False
    field_def = model.field_def(channel)
    return (
        field_def.type in (FieldType.ORDINAL, FieldType.NOMINAL)
        and not field_def.is_binned
        and not field_def.time_unit
    )


def domain_sort(model: Model, channel: Channel, scale_type: ScaleType | None) -> Sort:
    """Sort directive for a discrete domain; None for continuous scales."""
    if scale_type != ScaleType.ORDINAL:
        return None
    sort = model.field_def(channel).sort
    if isinstance(sort, SortField):
        return sort.to_dict()
    if sort is False or sort == SortOrder.NONE:
        return None
    return True


def domain(
    model: Model, channel: Channel, scale_type: ScaleType | None
) -> DomainDescriptor | list[Any]:
    """Infer the domain for *channel* rendered through a *scale_type* scale."""
    field_def = model.field_def(channel)
    scale = model.scale_config(channel)

    if scale.domain is not None:
        return list(scale.domain)

    if field_def.is_binned:
        start = model.field(channel, bin_suffix="start")
        return DomainDescriptor(
            data=model.data_table_name(),
            field=model.field(channel, bin_suffix="range"),
            sort=min_sort(start),
        )

    if field_def.aggregate == "sum":
        field = model.field(channel)
        stack = model.stack()
        if stack is not None and stack.field_channel == channel:
            # Stacked extents are sums of the per-group sums.
            field = aggregate_field("sum", field)
        return DomainDescriptor(data=DataSource.SUMMARY, field=field)

    if field_def.aggregate:
        if model.use_raw_domain(channel):
            return DomainDescriptor(
                data=DataSource.SOURCE, field=model.field(channel, no_aggregate=True)
            )
        return DomainDescriptor(data=DataSource.SUMMARY, field=model.field(channel))

    if field_def.type == FieldType.TEMPORAL:
        return _temporal_domain(model, channel)

    field = model.field(channel)
    if uses_rank_encoding(model, channel):
        field = rank_field(field)

    sort = domain_sort(model, channel, scale_type)
    if isinstance(sort, dict):
        # Sorting by an aggregate of another field needs the unaggregated rows.
        return DomainDescriptor(data=DataSource.SOURCE, field=field, sort=sort)
    return DomainDescriptor(data=model.data_table_name(), field=field, sort=sort)


def _temporal_domain(model: Model, channel: Channel) -> DomainDescriptor:
    time_unit = model.field_def(channel).time_unit
    if time_unit and raw_domain(time_unit, channel) is not None:
        logger.debug("Using %s lookup table for %s domain", time_unit, channel)
        return DomainDescriptor(data=time_unit, field=_DATE_FIELD)

    data = DataSource.SOURCE if model.use_raw_domain(channel) else model.data_table_name()
    field = model.field(channel)
    if time_unit:
        return DomainDescriptor(data=data, field=field, sort=min_sort(field))
    return DomainDescriptor(data=data, field=field)
