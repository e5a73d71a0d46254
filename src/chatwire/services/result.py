"""ServiceResult and ServiceError — the contract between services and the CLI.

INVARIANT: Service methods never raise for bad input data. They return a
ServiceResult with ``ok=False`` and a structured ServiceError instead.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Stable, machine-readable failure codes."""

    SCHEMA_VIOLATION = "SCHEMA_VIOLATION"
    UNKNOWN_SCHEMA = "UNKNOWN_SCHEMA"
    INVALID_JSON = "INVALID_JSON"
    ENCODE_FAILED = "ENCODE_FAILED"


class ServiceError(BaseModel):
    """Why an operation failed.

    Field-level failures travel as ``detail["issues"]``: a list of
    ``FieldIssue`` dumps (path, kind, message, raw).
    """

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @property
    def issues(self) -> list[dict[str, Any]]:
        return list(self.detail.get("issues") or [])


class ServiceResult(BaseModel):
    """Outcome of one codec operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``decode``, ``encode``, ``check``, ``schemas``,
            ``schema``); selects the human renderer.
        data: Operation-specific payload on success.
        warnings: Non-fatal findings, e.g. deprecated fields on the wire.
        error: Set when ``ok`` is False.
        meta: Telemetry span tree under ``--verbose``, otherwise None.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: ErrorCode,
        message: str,
        **detail: Any,
    ) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
