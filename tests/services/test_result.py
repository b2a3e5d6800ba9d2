"""Tests for the ServiceResult contract."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from semmap.services.result import ErrorCode, ServiceError, ServiceResult


class TestServiceResult:
    def test_success_defaults(self) -> None:
        result = ServiceResult(ok=True, op="validate")
        assert result.data == {}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_failure_carries_error(self) -> None:
        result = ServiceResult(
            ok=False,
            op="update",
            error=ServiceError(code=ErrorCode.IO_ERROR, message="denied", detail={"path": "x"}),
        )
        assert result.error is not None
        assert result.error.code == "IO_ERROR"
        assert result.error.detail == {"path": "x"}

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="deps")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]

    def test_json_dump(self) -> None:
        result = ServiceResult(ok=True, op="generate", data={"files": 3})
        dumped = result.model_dump(mode="json")
        assert dumped["op"] == "generate"
        assert dumped["data"] == {"files": 3}
