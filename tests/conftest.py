"""Shared pytest fixtures for chartlower tests."""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import pytest
from click.testing import CliRunner

from chartlower.compile.model import Model, build_model
from chartlower.config.models import CompileConfig
from chartlower.services.telemetry import set_tracing

ModelFactory = Callable[..., Model]


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """``-v`` invocations switch tracing on for the whole context; undo it."""
    yield
    set_tracing(False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def config() -> CompileConfig:
    """Default compiler configuration."""
    return CompileConfig()


@pytest.fixture
def parse_model() -> ModelFactory:
    """Build a model from a spec dict, with optional nested config overrides.

    Usage::

        model = parse_model({"mark": "point", "encoding": {...}})
        model = parse_model(spec, config={"facet": {"padding": 10}})
    """

    def _parse(spec: dict[str, Any], *, config: dict[str, Any] | None = None) -> Model:
        return build_model(spec, CompileConfig.from_overrides(config))

    return _parse
