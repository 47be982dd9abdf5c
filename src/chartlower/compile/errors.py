"""Compiler errors.

The passes degrade to defaults for unsupported combinations; these are
the few conditions that are surfaced instead of guessed.
"""

from __future__ import annotations


class CompileError(Exception):
    """Base class for errors raised by the compile passes."""

    code = "COMPILE_ERROR"


class AmbiguousCardinalityError(CompileError):
    """A data-driven cardinality was requested for a scale with a literal domain."""

    code = "AMBIGUOUS_CARDINALITY"

    def __init__(self, channel: str) -> None:
        super().__init__(
            f"channel {channel!r} has an explicit domain; its cardinality is static, "
            "not a distinct count"
        )
        self.channel = channel


class SizeComponentConsumedError(CompileError):
    """A child's size component was merged into its parent twice."""

    code = "SIZE_COMPONENT_CONSUMED"

    def __init__(self, dimension: str) -> None:
        super().__init__(f"{dimension} size component was already consumed by a parent")
        self.dimension = dimension


class IndependentScaleNotSupportedError(CompileError):
    """Layout with per-panel (non-shared) scales is not implemented."""

    code = "INDEPENDENT_SCALE_UNSUPPORTED"

    def __init__(self) -> None:
        super().__init__("layout for independent (non-shared) facet scales is not supported")
