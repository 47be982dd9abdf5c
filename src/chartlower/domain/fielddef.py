"""Field and scale definitions as they arrive from the declarative spec.

These are already-validated inputs; the models only enforce the few
structural invariants the compiler relies on (bin and aggregate are
exclusive, time units belong to temporal fields, ``"fit"`` band sizes
belong to ordinal scales).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from chartlower.domain.timeunit import normalize
from chartlower.domain.types import FieldType, ScaleType, SortOrder

BANDSIZE_FIT = "fit"


class BinParams(BaseModel):
    """Bin transform parameters."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    maxbins: int = Field(default=10, validation_alias=AliasChoices("maxbins", "maxBins"))


class SortField(BaseModel):
    """Sort a discrete domain by an aggregate over another field."""

    model_config = ConfigDict(frozen=True)

    field: str
    op: str
    order: SortOrder | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "op": self.op}


class ScaleConfig(BaseModel):
    """Per-channel scale overrides. ``None`` means "use the configured default"."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: ScaleType | None = None
    domain: list[Any] | None = None
    range: list[Any] | str | None = None
    use_raw_domain: bool | None = Field(default=None, alias="useRawDomain")
    band_size: float | Literal["fit"] | None = Field(default=None, alias="bandSize")
    padding: float | None = None
    round: bool | None = None
    nice: bool | None = None
    zero: bool | None = None

    @model_validator(mode="after")
    def _fit_requires_ordinal(self) -> ScaleConfig:
        if self.band_size == BANDSIZE_FIT and self.type not in (None, ScaleType.ORDINAL):
            msg = f"bandSize 'fit' is only valid for ordinal scales, not {self.type}"
            raise ValueError(msg)
        return self


class FieldDef(BaseModel):
    """One channel's field definition.

    ``type`` may be omitted: aggregated or binned fields default to
    quantitative, everything else to nominal.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    field: str | None = None
    type: FieldType = FieldType.NOMINAL
    aggregate: str | None = None
    bin: BinParams | bool = False
    time_unit: str | None = Field(default=None, alias="timeUnit")
    sort: SortField | SortOrder | bool | None = None
    scale: ScaleConfig = Field(default_factory=ScaleConfig)
    legend: bool = True

    @model_validator(mode="before")
    @classmethod
    def _default_type(cls, data: Any) -> Any:
        if isinstance(data, dict) and "type" not in data:
            measured = data.get("aggregate") or data.get("bin")
            data = {**data, "type": FieldType.QUANTITATIVE if measured else FieldType.NOMINAL}
        return data

    @field_validator("time_unit")
    @classmethod
    def _normalize_time_unit(cls, value: str | None) -> str | None:
        return normalize(value) if value else None

    @model_validator(mode="after")
    def _check_exclusive(self) -> FieldDef:
        if self.is_binned and self.aggregate:
            msg = f"field {self.field!r} cannot be both binned and aggregated"
            raise ValueError(msg)
        if self.time_unit and self.type != FieldType.TEMPORAL:
            msg = f"timeUnit {self.time_unit!r} requires a temporal field, got {self.type}"
            raise ValueError(msg)
        return self

    @property
    def is_binned(self) -> bool:
        return bool(self.bin)

    @property
    def field_name(self) -> str:
        """Raw input field (``*`` when only counting)."""
        return self.field or "*"

    @property
    def sort_order(self) -> SortOrder | None:
        """Ascending/descending direction regardless of how sort was given."""
        if isinstance(self.sort, SortField):
            return self.sort.order
        if isinstance(self.sort, SortOrder):
            return self.sort
        return None
