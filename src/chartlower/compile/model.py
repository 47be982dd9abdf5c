"""Compiled model tree — the read-only queries the scale and layout passes use.

Two node kinds: :class:`UnitModel` (a single mark with an encoding) and
:class:`FacetModel` (a row/column grid around one child). Layered
composition is not modeled.

Usage::

    model = build_model({"mark": "bar", "encoding": {...}}, config)
    model.field(Channel.Y)          # "sum_origin"
    model.data_table_name()         # "summary"
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from chartlower.compile.components import ModelComponent
from chartlower.compile.resolve import resolve_scale_kind
from chartlower.config.models import CompileConfig
from chartlower.domain.fielddef import BANDSIZE_FIT, FieldDef, ScaleConfig
from chartlower.domain.naming import BinSuffix, aggregate_field, bin_field, prefixed_name, time_unit_field
from chartlower.domain.types import (
    FACET_CHANNELS,
    Channel,
    DataSource,
    FieldType,
    Mark,
    ScaleType,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StackProperties:
    """How a stacked bar/area chart splits its channels."""

    groupby_channel: Channel
    field_channel: Channel
    stack_channel: Channel


class Model:
    """Base model node. Subclasses provide the encoding and the mark."""

    def __init__(
        self,
        encoding: Mapping[Channel, FieldDef],
        config: CompileConfig,
        name: str | None = None,
    ) -> None:
        self._encoding = dict(encoding)
        self._config = config
        self._name = name
        self.component = ModelComponent()

    # --- encoding queries ---

    def has(self, channel: Channel) -> bool:
        return channel in self._encoding

    def channels(self) -> list[Channel]:
        return list(self._encoding)

    def field_def(self, channel: Channel) -> FieldDef:
        return self._encoding[channel]

    def for_each(self) -> Iterator[tuple[Channel, FieldDef]]:
        yield from self._encoding.items()

    def field(
        self,
        channel: Channel,
        *,
        no_aggregate: bool = False,
        bin_suffix: BinSuffix = "start",
    ) -> str:
        """Name of *channel*'s field as it appears in this model's data table."""
        field_def = self.field_def(channel)
        name = field_def.field_name
        if field_def.aggregate and not no_aggregate:
            return aggregate_field(field_def.aggregate, name)
        if field_def.time_unit:
            return time_unit_field(field_def.time_unit, name)
        if field_def.is_binned:
            return bin_field(name, bin_suffix)
        return name

    def mark(self) -> Mark | None:
        raise NotImplementedError

    def is_aggregate(self) -> bool:
        return any(fd.aggregate for fd in self._encoding.values())

    # --- scale queries ---

    def scale_config(self, channel: Channel) -> ScaleConfig:
        return self.field_def(channel).scale

    def scale_type(self, channel: Channel) -> ScaleType | None:
        return resolve_scale_kind(self.field_def(channel), channel, self.mark())

    def is_ordinal_scale(self, channel: Channel) -> bool:
        return self.has(channel) and self.scale_type(channel) == ScaleType.ORDINAL

    def band_size(self, channel: Channel) -> float | str:
        """Configured band size for *channel* (a number or ``"fit"``)."""
        band_size = self.scale_config(channel).band_size
        return self._config.scale.band_size if band_size is None else band_size

    def has_fixed_band_size(self, channel: Channel) -> bool:
        return self.band_size(channel) != BANDSIZE_FIT

    def padding(self, channel: Channel) -> float:
        padding = self.scale_config(channel).padding
        if padding is not None:
            return padding
        if channel in FACET_CHANNELS:
            return self._config.facet.padding
        return self._config.scale.padding

    def use_raw_domain(self, channel: Channel) -> bool:
        flag = self.scale_config(channel).use_raw_domain
        return self._config.scale.use_raw_domain if flag is None else flag

    def stack(self) -> StackProperties | None:
        return None

    # --- naming and config ---

    @property
    def name(self) -> str | None:
        return self._name

    def config(self) -> CompileConfig:
        return self._config

    def data_table_name(self) -> str:
        return str(DataSource.SUMMARY if self.is_aggregate() else DataSource.SOURCE)

    def data_name(self, kind: str) -> str:
        """Name of an output dataset produced for this model."""
        return prefixed_name(self._name, kind)

    def size_field_name(self, channel: Channel) -> str:
        """Field the computed pixel size for *channel* is written to."""
        dimension = "width" if channel in (Channel.X, Channel.COLUMN) else "height"
        return prefixed_name(self._name, dimension)

    def static_cell_size(self, channel: Channel) -> float:
        cell = self._config.cell
        return cell.width if channel in (Channel.X, Channel.COLUMN) else cell.height

    def child(self) -> Model:
        raise TypeError(f"{type(self).__name__} has no child model")


class UnitModel(Model):
    """A leaf view: one mark and its encoding."""

    def __init__(
        self,
        mark: Mark,
        encoding: Mapping[Channel, FieldDef],
        config: CompileConfig,
        name: str | None = None,
    ) -> None:
        super().__init__(encoding, config, name)
        self._mark = mark

    def mark(self) -> Mark:
        return self._mark

    def is_measure(self, channel: Channel) -> bool:
        if not self.has(channel):
            return False
        field_def = self.field_def(channel)
        return field_def.type == FieldType.QUANTITATIVE and not field_def.is_binned

    def stack(self) -> StackProperties | None:
        """Stacking applies to aggregated bar/area marks split by color or detail."""
        if self.has(Channel.COLOR):
            stack_channel = Channel.COLOR
        elif self.has(Channel.DETAIL):
            stack_channel = Channel.DETAIL
        else:
            return None

        if self._mark not in (Mark.BAR, Mark.AREA) or not self._config.mark.stacked:
            return None
        if not self.is_aggregate():
            return None

        x_measure = self.is_measure(Channel.X)
        y_measure = self.is_measure(Channel.Y)
        if x_measure and not y_measure:
            return StackProperties(Channel.Y, Channel.X, stack_channel)
        if y_measure and not x_measure:
            return StackProperties(Channel.X, Channel.Y, stack_channel)
        return None


class FacetModel(Model):
    """A grid of panels keyed by row/column fields around one child view."""

    def __init__(
        self,
        facet: Mapping[Channel, FieldDef],
        child: Model,
        config: CompileConfig,
        name: str | None = None,
    ) -> None:
        super().__init__(facet, config, name)
        self._child = child

    def child(self) -> Model:
        return self._child

    def mark(self) -> Mark | None:
        return self._child.mark()

    def is_aggregate(self) -> bool:
        # Facet fields are never aggregated; the panels share the child's table.
        return self._child.is_aggregate()


# --- construction ---


def _parse_encoding(raw: Mapping[str, Any]) -> dict[Channel, FieldDef]:
    encoding: dict[Channel, FieldDef] = {}
    for key, value in raw.items():
        try:
            channel = Channel(key)
        except ValueError:
            logger.warning("Ignoring unknown channel %r", key)
            continue
        encoding[channel] = FieldDef.model_validate(value)
    return encoding


def build_model(
    spec: Mapping[str, Any],
    config: CompileConfig | None = None,
    name: str | None = None,
) -> Model:
    """Build a model tree from a plain (already validated) spec mapping.

    A spec with a ``facet`` key becomes a :class:`FacetModel` whose child
    is built from ``spec["spec"]``; anything else is a :class:`UnitModel`.
    Raises pydantic ``ValidationError`` for malformed field definitions.
    """
    config = config or CompileConfig()
    name = spec.get("name", name)

    if "facet" in spec:
        facet = _parse_encoding(spec["facet"])
        child = build_model(spec.get("spec", {}), config, prefixed_name(name, "child"))
        return FacetModel(facet, child, config, name)

    mark = Mark(spec.get("mark", Mark.POINT))
    return UnitModel(mark, _parse_encoding(spec.get("encoding", {})), config, name)
