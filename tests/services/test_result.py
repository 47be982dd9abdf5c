"""Tests for ServiceResult and ServiceError."""

import json

import pytest

from chartlower.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="compile", data={"scales": [], "data": []})
        assert result.ok is True
        assert result.op == "compile"
        assert result.data == {"scales": [], "data": []}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_failure_helper(self) -> None:
        result = ServiceResult.failure("compile", "INVALID_SPEC", "bad mark", field="mark")
        assert result.ok is False
        assert result.data == {}
        assert result.error == ServiceError(
            code="INVALID_SPEC", message="bad mark", detail={"field": "mark"}
        )

    def test_json_serialization(self) -> None:
        result = ServiceResult(
            ok=True,
            op="compile",
            data={"scales": [{"name": "x"}]},
            meta={"duration_ms": 42},
        )
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["scales"][0]["name"] == "x"
        assert parsed["meta"]["duration_ms"] == 42

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="compile")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_default_detail(self) -> None:
        error = ServiceError(code="COMPILE_ERROR", message="boom")
        assert error.detail == {}
