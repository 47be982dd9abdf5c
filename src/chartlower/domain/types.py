"""Encoding vocabulary: channels, field types, scale kinds, marks.

Values are the literal strings of the target grammar's JSON, so enum
members can be dropped straight into emitted scale and data blocks.
"""

from __future__ import annotations

from enum import StrEnum


class Channel(StrEnum):
    """Visual encoding slots."""

    X = "x"
    Y = "y"
    ROW = "row"
    COLUMN = "column"
    COLOR = "color"
    SHAPE = "shape"
    SIZE = "size"
    OPACITY = "opacity"
    TEXT = "text"
    LABEL = "label"
    DETAIL = "detail"
    PATH = "path"
    ORDER = "order"


class FieldType(StrEnum):
    """Measurement type declared on a field definition."""

    QUANTITATIVE = "quantitative"
    ORDINAL = "ordinal"
    NOMINAL = "nominal"
    TEMPORAL = "temporal"


class ScaleType(StrEnum):
    """Effective scale kind chosen by the type resolver."""

    LINEAR = "linear"
    LOG = "log"
    POW = "pow"
    SQRT = "sqrt"
    TIME = "time"
    UTC = "utc"
    ORDINAL = "ordinal"


class Mark(StrEnum):
    """Mark types consulted by the scale and layout passes."""

    POINT = "point"
    CIRCLE = "circle"
    SQUARE = "square"
    BAR = "bar"
    LINE = "line"
    AREA = "area"
    TICK = "tick"
    RULE = "rule"
    TEXT = "text"


class SortOrder(StrEnum):
    """String sort directives accepted on a field definition."""

    ASCENDING = "ascending"
    DESCENDING = "descending"
    NONE = "none"


class DataSource(StrEnum):
    """Named datasets produced upstream of the scale pass."""

    SOURCE = "source"
    SUMMARY = "summary"
    LAYOUT = "layout"


# --- Channel groups ---

# Channels that never get a scale.
UNSCALED_CHANNELS: frozenset[Channel] = frozenset(
    {Channel.DETAIL, Channel.TEXT, Channel.LABEL, Channel.PATH, Channel.ORDER}
)

# Channels that cannot carry a continuous scale.
DISCRETE_CHANNELS: frozenset[Channel] = frozenset({Channel.ROW, Channel.COLUMN, Channel.SHAPE})

POSITION_CHANNELS: frozenset[Channel] = frozenset({Channel.X, Channel.Y})

FACET_CHANNELS: frozenset[Channel] = frozenset({Channel.ROW, Channel.COLUMN})

CONTINUOUS_SCALES: frozenset[ScaleType] = frozenset(
    {
        ScaleType.LINEAR,
        ScaleType.LOG,
        ScaleType.POW,
        ScaleType.SQRT,
        ScaleType.TIME,
        ScaleType.UTC,
    }
)


def has_scale(channel: Channel) -> bool:
    """Whether *channel* is rendered through a scale at all."""
    return channel not in UNSCALED_CHANNELS
