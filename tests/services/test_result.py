"""Tests for ServiceResult and ServiceError."""

import json

import pytest

from notemap.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="rewrite_style", data={"rewritten": ["sprite"]})
        assert result.ok is True
        assert result.op == "rewrite_style"
        assert result.warnings == []
        assert result.error is None

    def test_failure_helper(self) -> None:
        result = ServiceResult.failure("classify_reference", "MALFORMED_LOCATOR", "bad", reference="x")
        assert result.ok is False
        assert result.error == ServiceError(
            code="MALFORMED_LOCATOR", message="bad", detail={"reference": "x"}
        )

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="test", data={"key": "value"}, warnings=["w"])
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["key"] == "value"
        assert parsed["warnings"] == ["w"]

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]
