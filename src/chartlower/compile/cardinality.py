"""Cardinality — how many distinct values a channel's domain holds.

Priority: explicit literal domain length, then a finite time-unit
domain, then a runtime distinct count. The last case is a reference to
``distinct_<field>``, which only exists if the layout pass emits the
matching aggregation; :func:`distinct_fields` reports that requirement.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chartlower.compile.errors import AmbiguousCardinalityError
from chartlower.domain.expr import DatumRef
from chartlower.domain.naming import distinct_field
from chartlower.domain.timeunit import raw_domain

if TYPE_CHECKING:
    from chartlower.compile.model import Model
    from chartlower.domain.types import Channel


def distinct_count_ref(model: Model, channel: Channel) -> DatumRef:
    """Reference to the runtime distinct count of *channel*'s field.

    Raises:
        AmbiguousCardinalityError: the scale declares a literal domain,
            so its cardinality is already known.
    """
    if model.scale_config(channel).domain is not None:
        raise AmbiguousCardinalityError(channel)
    return DatumRef(distinct_field(model.field(channel)))


def cardinality(model: Model, channel: Channel) -> int | DatumRef:
    """Static count when known, else a datum reference to a distinct count."""
    domain = model.scale_config(channel).domain
    if domain is not None:
        return len(domain)

    values = raw_domain(model.field_def(channel).time_unit, channel)
    if values is not None:
        return len(values)

    return distinct_count_ref(model, channel)


def distinct_fields(model: Model, channel: Channel) -> dict[str, None]:
    """Fields that need a distinct-count aggregation for *channel*'s size.

    Only ordinal scales contribute; an empty dict means nothing to count.
    """
    if not model.is_ordinal_scale(channel):
        return {}
    if isinstance(cardinality(model, channel), DatumRef):
        return {model.field(channel): None}
    return {}
