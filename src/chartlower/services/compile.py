"""CompileService — run the scale and layout passes over one spec.

Builds the model tree, runs the scale pass over every node, compiles
layout components bottom-up, and assembles the datasets the scales and
sizes depend on. Bad input becomes a failed ServiceResult, never an
exception.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from chartlower.compile.data import assemble_time_unit_tables
from chartlower.compile.errors import CompileError
from chartlower.compile.layout import assemble_layout, compile_layout
from chartlower.compile.model import FacetModel, Model, build_model
from chartlower.compile.scale import compile_scales
from chartlower.config.models import CompileConfig
from chartlower.domain.types import Channel
from chartlower.services.result import ServiceResult
from chartlower.services.telemetry import timed_pass, traced

logger = logging.getLogger(__name__)

_CHANNEL_NAMES = frozenset(str(c) for c in Channel)


def _tree(model: Model) -> list[Model]:
    """Nodes of *model*'s tree, root first."""
    nodes = [model]
    while isinstance(nodes[-1], FacetModel):
        nodes.append(nodes[-1].child())
    return nodes


def _unknown_channels(spec: Mapping[str, Any]) -> list[str]:
    unknown: list[str] = []
    node: Mapping[str, Any] | None = spec
    while node is not None:
        for key in ("facet", "encoding"):
            unknown.extend(k for k in node.get(key, {}) if k not in _CHANNEL_NAMES)
        node = node.get("spec") if "facet" in node else None
    return unknown


class CompileService:
    """Lower a declarative chart spec to scale and data blocks."""

    def __init__(self, config: CompileConfig | None = None) -> None:
        self._config = config or CompileConfig()

    @traced
    def compile(self, spec: Mapping[str, Any]) -> ServiceResult:
        """Compile *spec* into ``{"scales": [...], "data": [...]}``."""
        op = "compile"
        warnings = [f"Ignored unknown channel: {name}" for name in _unknown_channels(spec)]

        try:
            with timed_pass("build_model") as stats:
                model = build_model(spec, self._config)
                if stats:
                    stats.record(root=type(model).__name__, nodes=len(_tree(model)))

            with timed_pass("scale_pass") as stats:
                scales: list[dict[str, Any]] = []
                for node in _tree(model):
                    scales.extend(compile_scales(node.channels(), node))
                if stats:
                    legends = [s["name"] for s in scales if "_legend" in s["name"]]
                    stats.record(scales=len(scales), legend_scales=legends)

            with timed_pass("layout_pass") as stats:
                layout = compile_layout(model)
                data = assemble_layout(model, assemble_time_unit_tables(model))
                if stats:
                    sizes = [c for c in (layout.width, layout.height) if c is not None]
                    stats.record(
                        distinct_fields=[f for c in sizes for f in c.distinct_fields],
                        formulas=sum(len(c.formulas) for c in sizes),
                        datasets=[d["name"] for d in data],
                    )
        except CompileError as exc:
            logger.debug("Compile failed: %s", exc)
            return ServiceResult.failure(op, exc.code, str(exc))
        except ValueError as exc:
            # pydantic ValidationError is a ValueError subclass.
            return ServiceResult.failure(op, "INVALID_SPEC", str(exc))

        return ServiceResult(
            ok=True,
            op=op,
            data={"scales": scales, "data": data},
            warnings=warnings,
        )
