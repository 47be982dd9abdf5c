"""Per-pass compile tracing for ``--verbose`` runs.

A traced service call opens a :class:`CompileTrace`; each pass inside it
runs under :func:`timed_pass` and records what it produced (scale
counts, distinct fields, formula counts, dataset names). The finished
trace lands in ``ServiceResult.meta["telemetry"]`` and in one structlog
event. With tracing off, every hook is a single ContextVar read.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Concatenate, ParamSpec, TypeVar

import structlog

from chartlower.services.result import ServiceResult

_tracing: ContextVar[bool] = ContextVar("_tracing", default=False)
_active_trace: ContextVar[CompileTrace | None] = ContextVar("_active_trace", default=None)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


@dataclass
class PassStats:
    """Timing and output facts of one compile pass."""

    name: str
    facts: dict[str, Any] = field(default_factory=dict)
    started: float = field(default_factory=time.perf_counter)
    duration_ms: float | None = None

    def record(self, **facts: Any) -> None:
        self.facts.update(facts)

    def as_dict(self) -> dict[str, Any]:
        return {"name": self.name, "duration_ms": self.duration_ms or 0.0, **self.facts}


@dataclass
class CompileTrace:
    """All passes of one traced operation, in run order."""

    operation: str
    passes: list[PassStats] = field(default_factory=list)
    started: float = field(default_factory=time.perf_counter)
    duration_ms: float | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.operation,
            "duration_ms": self.duration_ms or 0.0,
            "passes": [p.as_dict() for p in self.passes],
        }


@contextmanager
def timed_pass(name: str) -> Iterator[PassStats | None]:
    """Time a pass of the active trace; yields None when nothing is traced."""
    trace = _active_trace.get() if _tracing.get() else None
    if trace is None:
        yield None
        return

    stats = PassStats(name)
    trace.passes.append(stats)
    try:
        yield stats
    finally:
        stats.duration_ms = _elapsed_ms(stats.started)


_S = TypeVar("_S")
_P = ParamSpec("_P")


def traced(
    method: Callable[Concatenate[_S, _P], ServiceResult],
) -> Callable[Concatenate[_S, _P], ServiceResult]:
    """Trace a service method and attach the pass breakdown to its result."""

    @functools.wraps(method)
    def wrapper(self: _S, *args: _P.args, **kwargs: _P.kwargs) -> ServiceResult:
        if not _tracing.get():
            return method(self, *args, **kwargs)

        trace = CompileTrace(method.__qualname__)
        token = _active_trace.set(trace)
        try:
            result = method(self, *args, **kwargs)
        finally:
            _active_trace.reset(token)
            trace.duration_ms = _elapsed_ms(trace.started)

        structlog.get_logger("chartlower.telemetry").debug(
            "compile.traced",
            operation=trace.operation,
            ok=result.ok,
            duration_ms=trace.duration_ms,
            passes=[p.name for p in trace.passes],
        )
        meta = {**(result.meta or {}), "telemetry": trace.as_dict()}
        return result.model_copy(update={"meta": meta})

    return wrapper


def set_tracing(enabled: bool) -> None:
    """Switch tracing on or off for the current context."""
    _tracing.set(enabled)
