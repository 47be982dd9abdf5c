"""Tests for the layout size pass and layout dataset assembly."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from chartlower.compile.errors import (
    IndependentScaleNotSupportedError,
    SizeComponentConsumedError,
)
from chartlower.compile.layout import (
    assemble_layout,
    compile_layout,
    parse_facet_size_layout,
    parse_unit_layout,
)
from chartlower.compile.model import Model
from chartlower.domain.types import Channel

FACET_SPEC: dict[str, Any] = {
    "facet": {"row": {"field": "r", "type": "nominal"}},
    "spec": {
        "mark": "point",
        "encoding": {"y": {"field": "origin", "type": "ordinal"}},
    },
}


def _formulas(component: Any) -> list[tuple[str, str]]:
    return [(f.field, f.expr.render()) for f in component.formulas]


class TestUnitLayout:
    def test_literal_domain_band(self, parse_model: Callable[..., Model]) -> None:
        model = parse_model(
            {
                "mark": "point",
                "encoding": {
                    "y": {
                        "field": "origin",
                        "type": "ordinal",
                        "scale": {"domain": [1, 2, 3], "bandSize": 20},
                    }
                },
            }
        )
        layout = parse_unit_layout(model)
        assert layout.height is not None
        assert layout.height.distinct == {}
        assert _formulas(layout.height) == [("height", "(3 + 1) * 20")]
        assert layout.height.formulas[0].expr.evaluate({}) == 80

    def test_data_driven_band(self, parse_model: Callable[..., Model]) -> None:
        model = parse_model({"encoding": {"x": {"field": "origin", "type": "ordinal"}}})
        layout = parse_unit_layout(model)
        assert layout.width is not None
        assert layout.width.distinct_fields == ["origin"]
        assert _formulas(layout.width) == [("width", "(datum.distinct_origin + 1) * 21")]

    def test_finite_time_unit_band(self, parse_model: Callable[..., Model]) -> None:
        model = parse_model({"encoding": {"y": {"field": "t", "type": "temporal", "timeUnit": "month"}}})
        layout = parse_unit_layout(model)
        assert layout.height is not None
        assert layout.height.distinct == {}
        assert layout.height.formulas[0].expr.evaluate({}) == (12 + 1) * 21

    def test_continuous_uses_cell(self, parse_model: Callable[..., Model]) -> None:
        model = parse_model(
            {"encoding": {"x": {"field": "hp", "type": "quantitative"}}},
            config={"cell": {"width": 300}},
        )
        layout = parse_unit_layout(model)
        assert layout.width is not None
        assert _formulas(layout.width) == [("width", "300")]

    def test_fit_band_uses_cell(self, parse_model: Callable[..., Model]) -> None:
        model = parse_model(
            {"encoding": {"x": {"field": "origin", "type": "ordinal", "scale": {"bandSize": "fit"}}}}
        )
        layout = parse_unit_layout(model)
        assert layout.width is not None
        assert layout.width.distinct == {}
        assert _formulas(layout.width) == [("width", "200")]

    def test_absent_channel_is_one_band(self, parse_model: Callable[..., Model]) -> None:
        model = parse_model({"mark": "point", "encoding": {}})
        layout = parse_unit_layout(model)
        assert layout.width is not None
        assert layout.height is not None
        assert _formulas(layout.width) == [("width", "21")]
        assert _formulas(layout.height) == [("height", "21")]

    def test_text_table_column(self, parse_model: Callable[..., Model]) -> None:
        model = parse_model({"mark": "text", "encoding": {"y": {"field": "a", "type": "nominal"}}})
        layout = parse_unit_layout(model)
        assert layout.width is not None
        assert _formulas(layout.width) == [("width", "90")]


class TestFacetLayout:
    def test_merges_child(self, parse_model: Callable[..., Model]) -> None:
        model = parse_model(FACET_SPEC)
        layout = compile_layout(model)

        assert layout.height is not None
        assert layout.height.distinct_fields == ["r", "origin"]
        assert _formulas(layout.height) == [
            ("child_height", "(datum.distinct_origin + 1) * 21"),
            ("height", "(datum.child_height + 16) * datum.distinct_r"),
        ]

    def test_absent_facet_channel_adds_padding(self, parse_model: Callable[..., Model]) -> None:
        model = parse_model(FACET_SPEC)
        layout = compile_layout(model)
        assert layout.width is not None
        assert layout.width.distinct == {}
        assert _formulas(layout.width) == [
            ("child_width", "21"),
            ("width", "datum.child_width + 16"),
        ]

    def test_child_components_are_consumed(self, parse_model: Callable[..., Model]) -> None:
        model = parse_model(FACET_SPEC)
        compile_layout(model)
        child_layout = model.child().component.layout
        assert child_layout is not None
        assert child_layout.is_empty

    def test_second_merge_raises(self, parse_model: Callable[..., Model]) -> None:
        model = parse_model(FACET_SPEC)
        compile_layout(model)
        with pytest.raises(SizeComponentConsumedError) as exc_info:
            parse_facet_size_layout(model, Channel.ROW)
        assert exc_info.value.dimension == "height"

    def test_uncompiled_child_raises(self, parse_model: Callable[..., Model]) -> None:
        model = parse_model(FACET_SPEC)
        with pytest.raises(SizeComponentConsumedError):
            parse_facet_size_layout(model, Channel.COLUMN)

    def test_evaluates_with_literal_domains(self, parse_model: Callable[..., Model]) -> None:
        model = parse_model(
            {
                "facet": {"column": {"field": "c", "scale": {"domain": ["a", "b"]}}},
                "spec": {
                    "mark": "point",
                    "encoding": {
                        "x": {"field": "o", "type": "ordinal", "scale": {"domain": [1, 2, 3]}}
                    },
                },
            },
            config={"facet": {"padding": 10}},
        )
        layout = compile_layout(model)
        assert layout.width is not None
        row: dict[str, float] = {}
        for formula in layout.width.formulas:
            row[formula.field] = formula.expr.evaluate(row)
        # (3 + 1) * 21 = 84 per panel, two padded panels
        assert row == {"child_width": 84, "width": (84 + 10) * 2}

    def test_independent_scales_unsupported(self, parse_model: Callable[..., Model]) -> None:
        model = parse_model(FACET_SPEC, config={"facet": {"shared_scales": False}})
        with pytest.raises(IndependentScaleNotSupportedError):
            compile_layout(model)


class TestAssembleLayout:
    def test_with_distinct_counts(self, parse_model: Callable[..., Model]) -> None:
        model = parse_model(FACET_SPEC)
        compile_layout(model)
        [dataset] = assemble_layout(model)

        assert dataset["name"] == "layout"
        assert dataset["source"] == "source"
        aggregate, *formulas = dataset["transform"]
        assert aggregate == {
            "type": "aggregate",
            "summarize": [
                {"field": "r", "ops": ["distinct"]},
                {"field": "origin", "ops": ["distinct"]},
            ],
        }
        assert [f["field"] for f in formulas] == [
            "child_width",
            "width",
            "child_height",
            "height",
        ]
        assert all(f["type"] == "formula" for f in formulas)

    def test_aggregated_chart_counts_summary(self, parse_model: Callable[..., Model]) -> None:
        model = parse_model(
            {
                "mark": "bar",
                "encoding": {
                    "x": {"field": "origin", "type": "nominal"},
                    "y": {"aggregate": "mean", "field": "hp"},
                },
            }
        )
        compile_layout(model)
        [dataset] = assemble_layout(model)
        assert dataset["source"] == "summary"

    def test_static_sizes_use_inline_row(self, parse_model: Callable[..., Model]) -> None:
        model = parse_model({"encoding": {"x": {"field": "hp", "type": "quantitative"}}})
        compile_layout(model)
        [dataset] = assemble_layout(model)
        assert dataset == {
            "name": "layout",
            "values": [{}],
            "transform": [
                {"type": "formula", "field": "width", "expr": "200"},
                {"type": "formula", "field": "height", "expr": "21"},
            ],
        }

    def test_appends_to_existing_data(self, parse_model: Callable[..., Model]) -> None:
        model = parse_model({"encoding": {"x": {"field": "hp", "type": "quantitative"}}})
        compile_layout(model)
        existing = [{"name": "month", "values": []}]
        result = assemble_layout(model, existing)
        assert [d["name"] for d in result] == ["month", "layout"]
        assert existing == [{"name": "month", "values": []}]

    def test_noop_without_components(self, parse_model: Callable[..., Model]) -> None:
        model = parse_model({"encoding": {"x": {"field": "hp", "type": "quantitative"}}})
        existing = [{"name": "month", "values": []}]
        assert assemble_layout(model, existing) == existing
        assert assemble_layout(model) == []

    def test_independent_scales_unsupported(self, parse_model: Callable[..., Model]) -> None:
        model = parse_model(
            {"encoding": {"x": {"field": "hp", "type": "quantitative"}}},
            config={"facet": {"shared_scales": False}},
        )
        compile_layout(model)
        with pytest.raises(IndependentScaleNotSupportedError):
            assemble_layout(model)

    def test_named_model_prefixes_dataset(self, parse_model: Callable[..., Model]) -> None:
        model = parse_model(
            {"name": "main", "encoding": {"x": {"field": "hp", "type": "quantitative"}}}
        )
        compile_layout(model)
        [dataset] = assemble_layout(model)
        assert dataset["name"] == "main_layout"
        assert dataset["transform"][0]["field"] == "main_width"
