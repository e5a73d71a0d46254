"""CodecService — decode, re-encode and validate payloads by schema name.

Wraps the pure codec in the ServiceResult contract so the CLI (and any
other adapter) gets structured success and failure payloads instead of
exceptions. Schemas are resolved through the registry by schema name
(``Message``) or gateway event name (``MESSAGE_CREATE``).
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chatwire.domain.codec import decode, encode
from chatwire.domain.errors import DecodeError, EncodeError
from chatwire.domain.presence import FieldState, state_of
from chatwire.domain.wiretypes import CodecOptions
from chatwire.models.registry import SchemaRegistry, UnknownSchemaError, default_registry
from chatwire.services.result import ErrorCode, ServiceError, ServiceResult
from chatwire.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from chatwire.config.settings import ChatwireSettings
    from chatwire.domain.schema import Record, Schema

logger = logging.getLogger(__name__)


class _Failure(Exception):
    """Internal short-circuit carrying a ready ServiceError."""

    def __init__(self, code: ErrorCode, message: str, **detail: Any) -> None:
        self.error = ServiceError(code=code, message=message, detail=detail)
        super().__init__(message)

    def result(self, op: str) -> ServiceResult:
        return ServiceResult(ok=False, op=op, error=self.error)


class CodecService:
    """Schema-aware payload operations returning ServiceResult."""

    def __init__(
        self,
        registry: SchemaRegistry | None = None,
        options: CodecOptions | None = None,
    ) -> None:
        self._registry = registry if registry is not None else default_registry()
        self._options = options or CodecOptions()

    @classmethod
    def from_settings(cls, settings: ChatwireSettings) -> CodecService:
        """Build a service honouring the ``[codec]`` configuration section."""
        return cls(options=settings.codec_options())

    # ── Operations ───────────────────────────────────────────────────

    @traced
    def decode(self, name: str, source: str | bytes | dict[str, Any]) -> ServiceResult:
        """Decode a payload and report the presence state of every field."""
        op = "decode"
        try:
            schema = self._schema(name)
            record = self._decode(schema, self._parse(source))
            canonical = self._encode(schema, record)
        except _Failure as failure:
            return failure.result(op)

        fields = [
            {
                "name": spec.name,
                "wire_name": spec.wire_name,
                "state": state_of(getattr(record, spec.name)).value,
                "value": canonical.get(spec.wire_name),
            }
            for spec in schema.fields
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "schema": schema.name,
                "fields": fields,
                "unknown_fields": sorted(record.unknown_fields),
                "payload": canonical,
            },
            warnings=self._deprecation_warnings(schema, record),
        )

    @traced
    def encode(self, name: str, source: str | bytes | dict[str, Any]) -> ServiceResult:
        """Decode then re-encode a payload into its canonical wire form."""
        op = "encode"
        try:
            schema = self._schema(name)
            record = self._decode(schema, self._parse(source))
            canonical = self._encode(schema, record)
        except _Failure as failure:
            return failure.result(op)
        return ServiceResult(ok=True, op=op, data={"schema": schema.name, "payload": canonical})

    @traced
    def check(
        self,
        name: str,
        source: str | bytes | dict[str, Any],
        *,
        strict: bool = False,
    ) -> ServiceResult:
        """Report every schema violation in a payload.

        Violations are data, not failures: the result is ``ok`` unless
        *strict* is set and the payload is invalid.
        """
        op = "check"
        try:
            schema = self._schema(name)
            payload = self._parse(source)
        except _Failure as failure:
            return failure.result(op)

        try:
            with trace_span("decode") as span:
                decode(payload, schema, options=self._options)
            issues: list[dict[str, Any]] = []
        except DecodeError as exc:
            issues = [issue.model_dump(mode="json") for issue in exc.issues]
            if span is not None:
                span.annotate("issues", len(issues))

        data = {
            "schema": schema.name,
            "valid": not issues,
            "count": len(issues),
            "issues": issues,
        }
        if strict and issues:
            return ServiceResult.failure(
                op,
                ErrorCode.SCHEMA_VIOLATION,
                _violation_message(schema.name, len(issues)),
                **data,
            )
        return ServiceResult(ok=True, op=op, data=data)

    @traced
    def list_schemas(self) -> ServiceResult:
        items = [
            {
                "name": schema.name,
                "events": self._registry.events_for(schema),
                "fields": len(schema.fields),
                "description": schema.description,
            }
            for schema in self._registry
        ]
        return ServiceResult(ok=True, op="schemas", data={"count": len(items), "items": items})

    @traced
    def describe_schema(self, name: str) -> ServiceResult:
        op = "schema"
        try:
            schema = self._schema(name)
        except _Failure as failure:
            return failure.result(op)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "name": schema.name,
                "description": schema.description,
                "events": self._registry.events_for(schema),
                "fields": [
                    {
                        "name": spec.name,
                        "wire_name": spec.wire_name,
                        "type": spec.type.name,
                        "presence": spec.presence.value,
                        "deprecated": spec.deprecated,
                    }
                    for spec in schema.fields
                ],
                "aliases": [
                    {"legacy": alias.legacy, "current": alias.current}
                    for alias in schema.aliases
                ],
            },
        )

    # ── Helpers ──────────────────────────────────────────────────────

    def _schema(self, name: str) -> Schema:
        try:
            return self._registry.resolve(name)
        except UnknownSchemaError as exc:
            known = [s.name for s in self._registry]
            raise _Failure(ErrorCode.UNKNOWN_SCHEMA, str(exc), name=name, known=known) from exc

    @staticmethod
    def _parse(source: str | bytes | dict[str, Any]) -> Any:
        if isinstance(source, bytes):
            try:
                source = source.decode("utf-8")
            except UnicodeDecodeError as exc:
                msg = f"Invalid JSON: payload is not UTF-8 (byte {exc.start})"
                raise _Failure(ErrorCode.INVALID_JSON, msg) from exc
        if not isinstance(source, str):
            return source
        try:
            return json.loads(source)
        except json.JSONDecodeError as exc:
            msg = f"Invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})"
            raise _Failure(ErrorCode.INVALID_JSON, msg) from exc

    def _decode(self, schema: Schema, payload: Any) -> Record:
        with trace_span("decode") as span:
            try:
                record = decode(payload, schema, options=self._options)
            except DecodeError as exc:
                issues = [issue.model_dump(mode="json") for issue in exc.issues]
                if span is not None:
                    span.annotate("issues", len(issues))
                logger.debug("%s payload rejected: %d issues", schema.name, len(issues))
                raise _Failure(
                    ErrorCode.SCHEMA_VIOLATION,
                    _violation_message(schema.name, len(issues)),
                    schema=schema.name,
                    issues=issues,
                ) from exc
            if span is not None:
                span.annotate("unknown_fields", len(record.unknown_fields))
        return record

    def _encode(self, schema: Schema, record: Record) -> dict[str, Any]:
        with trace_span("encode"):
            try:
                return encode(record, schema, options=self._options)
            except EncodeError as exc:
                raise _Failure(
                    ErrorCode.ENCODE_FAILED,
                    str(exc),
                    issues=[i.model_dump(mode="json") for i in exc.issues],
                ) from exc

    @staticmethod
    def _deprecation_warnings(schema: Schema, record: Record) -> list[str]:
        return [
            f"Deprecated field present: {spec.wire_name}"
            for spec in schema.fields
            if spec.deprecated and state_of(getattr(record, spec.name)) is not FieldState.ABSENT
        ]


def _violation_message(schema: str, count: int) -> str:
    noun = "violation" if count == 1 else "violations"
    return f"{count} schema {noun} in {schema} payload"
