"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, chartlower.toml only contains
overrides. The root :class:`CompileConfig` is immutable and is handed
to every model the compiler builds; no compiler code reads ambient state.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# --- chartlower.toml sections ---


class ScaleDefaults(BaseModel):
    """[scale] section."""

    model_config = {"frozen": True}

    band_size: float = 21
    text_band_width: float = 90
    padding: float = 1
    use_raw_domain: bool = False
    round: bool = True
    nominal_color_range: str | list[str] = "category10"
    sequential_color_range: list[str] = Field(default_factory=lambda: ["#AFC6A3", "#09622A"])
    shape_range: str | list[str] = "shapes"
    point_size_range: list[float] | None = None
    bar_size_range: list[float] | None = None
    font_size_range: list[float] = Field(default_factory=lambda: [8, 40])
    rule_size_range: list[float] = Field(default_factory=lambda: [1, 5])
    tick_size_range: list[float] = Field(default_factory=lambda: [1, 20])
    opacity: list[float] = Field(default_factory=lambda: [0.3, 0.8])


class CellConfig(BaseModel):
    """[cell] section — static size of a non-ordinal unit view."""

    model_config = {"frozen": True}

    width: float = 200
    height: float = 200


class FacetConfig(BaseModel):
    """[facet] section."""

    model_config = {"frozen": True}

    padding: float = 16
    shared_scales: bool = True


class MarkDefaults(BaseModel):
    """[mark] section."""

    model_config = {"frozen": True}

    bar_thin_size: float = 2
    orient: str | None = None
    stacked: bool = True


class CompileConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    scale: ScaleDefaults = Field(default_factory=ScaleDefaults)
    cell: CellConfig = Field(default_factory=CellConfig)
    facet: FacetConfig = Field(default_factory=FacetConfig)
    mark: MarkDefaults = Field(default_factory=MarkDefaults)

    @classmethod
    def from_overrides(cls, overrides: dict[str, Any] | None = None) -> CompileConfig:
        """Validate a sparse nested override dict on top of the defaults."""
        return cls.model_validate(overrides or {})
