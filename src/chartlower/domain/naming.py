"""Field and scale naming contract.

Every derived field or scale name the compiler emits is built here so
the wire format lives in one place. Pure functions, no model access.

Examples::

    bin_field("origin", "range")      -> "bin_origin_range"
    aggregate_field("sum", "origin")  -> "sum_origin"
    time_unit_field("yearmonth", "d") -> "yearmonth_d"
    legend_scale_name("color")        -> "color_legend"
"""

from __future__ import annotations

from typing import Literal

BinSuffix = Literal["start", "mid", "end", "range"]

COUNT_FIELD = "count"
DATUM_PREFIX = "datum."
LEGEND_SUFFIX = "_legend"
LEGEND_LABEL_SUFFIX = "_legend_label"


def bin_field(field: str, suffix: BinSuffix = "start") -> str:
    """Name of a bin transform output: ``bin_<field>_<suffix>``."""
    return f"bin_{field}_{suffix}"


def aggregate_field(op: str, field: str) -> str:
    """Name of a summarized field: ``<op>_<field>``.

    ``count`` has no input field and always yields ``count``.
    """
    if op == "count":
        return COUNT_FIELD
    return f"{op}_{field}"


def time_unit_field(time_unit: str, field: str) -> str:
    """Name of a time-unit transform output: ``<timeUnit>_<field>``."""
    return f"{time_unit}_{field}"


def rank_field(field: str) -> str:
    """Rank encoding of a categorical field: ``rank_<field>``."""
    return f"rank_{field}"


def distinct_field(field: str) -> str:
    """Output of a distinct-count aggregation: ``distinct_<field>``."""
    return f"distinct_{field}"


def datum_ref(field: str) -> str:
    """Expression reference to a field of the current datum."""
    return f"{DATUM_PREFIX}{field}"


def legend_scale_name(channel: str) -> str:
    """Auxiliary inverse scale used as the legend key."""
    return f"{channel}{LEGEND_SUFFIX}"


def legend_label_scale_name(channel: str) -> str:
    """Auxiliary scale mapping legend keys to human-readable labels."""
    return f"{channel}{LEGEND_LABEL_SUFFIX}"


def prefixed_name(prefix: str | None, name: str) -> str:
    """Qualify a dataset or size field with a model name prefix."""
    return f"{prefix}_{name}" if prefix else name
