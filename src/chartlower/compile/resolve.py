"""Field/channel type resolution — which scale kind a channel gets.

Never raises: combinations with no specific rule resolve to ordinal.
"""

from __future__ import annotations

import logging

from chartlower.domain.fielddef import FieldDef
from chartlower.domain.timeunit import is_cyclical
from chartlower.domain.types import (
    DISCRETE_CHANNELS,
    Channel,
    FieldType,
    Mark,
    ScaleType,
    has_scale,
)

logger = logging.getLogger(__name__)

# Binned quantitative fields stay continuous only on these channels.
_LINEAR_BIN_CHANNELS: frozenset[Channel] = frozenset({Channel.X, Channel.Y, Channel.COLOR})


def resolve_scale_kind(field_def: FieldDef, channel: Channel, mark: Mark | None) -> ScaleType | None:
    """Return the effective scale kind for *channel*, or None if it has no scale.

    *mark* is accepted so mark-specific overrides can slot in here; the
    current rules do not depend on it.
    """
    if not has_scale(channel):
        return None

    # Facets and shapes cannot be continuous, whatever the field says.
    if channel in DISCRETE_CHANNELS:
        return ScaleType.ORDINAL

    if field_def.scale.type is not None:
        return field_def.scale.type

    match field_def.type:
        case FieldType.TEMPORAL:
            if field_def.time_unit and is_cyclical(field_def.time_unit):
                return ScaleType.ORDINAL
            return ScaleType.TIME
        case FieldType.NOMINAL:
            return ScaleType.ORDINAL
        case FieldType.ORDINAL:
            # Ordinal colors are encoded by rank on a sequential ramp.
            if channel == Channel.COLOR:
                return ScaleType.LINEAR
            return ScaleType.ORDINAL
        case FieldType.QUANTITATIVE:
            if field_def.is_binned and channel not in _LINEAR_BIN_CHANNELS:
                return ScaleType.ORDINAL
            return ScaleType.LINEAR

    logger.debug("No scale rule for %s on %s, falling back to ordinal", field_def.type, channel)
    return ScaleType.ORDINAL
