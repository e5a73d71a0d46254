"""Presence-aware decode/encode between wire objects and records.

Decode walks the schema in declaration order and resolves each field to
``ABSENT``, ``NULL`` or a converted value. Every field failure is
collected; if any occurred a single ``DecodeError`` is raised carrying all
of them. Encode is the mirror image: absent keys are omitted, null keys
are emitted as ``null``, identifiers are emitted as strings.

Both directions are pure functions over their inputs.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from chatwire.domain.errors import (
    DecodeError,
    EncodeError,
    FieldError,
    MissingRequiredField,
    TypeMismatch,
    UnexpectedNull,
    UnknownVariant,
    wire_type_name,
)
from chatwire.domain.presence import ABSENT, NULL
from chatwire.domain.schema import UNKNOWN_FIELDS_ATTR, FieldSpec, Record, Schema
from chatwire.domain.wiretypes import CodecContext, CodecOptions, WireType, freeze, thaw

logger = logging.getLogger(__name__)

type SchemaRef = Schema | Callable[[], Schema]


def _resolve(ref: SchemaRef) -> Schema:
    return ref if isinstance(ref, Schema) else ref()


# ── Public API ────────────────────────────────────────────────────────


def decode(
    raw: Any,
    schema: Schema,
    *,
    options: CodecOptions | None = None,
) -> Record:
    """Decode a wire object into a frozen record of *schema*.

    Raises:
        DecodeError: With every field-level failure found in *raw*.
    """
    ctx = CodecContext(options or CodecOptions())
    if not isinstance(raw, Mapping):
        raise DecodeError(
            schema.name, [TypeMismatch("", "object", wire_type_name(raw), raw=raw)]
        )
    return _decode_record(raw, schema, ctx)


def encode(
    record: Record,
    schema: Schema,
    *,
    options: CodecOptions | None = None,
) -> dict[str, Any]:
    """Encode *record* into a wire object in schema declaration order.

    Raises:
        EncodeError: If the record cannot satisfy its schema on the wire.
    """
    ctx = CodecContext(options or CodecOptions())
    return _encode_record(record, schema, ctx)


# ── Records ───────────────────────────────────────────────────────────


def _decode_field(raw: Mapping[str, Any], spec: FieldSpec, ctx: CodecContext) -> Any:
    if spec.wire_name not in raw:
        if spec.presence.allows_absent:
            return ABSENT
        raise MissingRequiredField()
    value = raw[spec.wire_name]
    if value is None:
        if spec.presence.allows_null:
            return NULL
        raise UnexpectedNull()
    return spec.type.decode(value, ctx)


def _decode_record(raw: Mapping[str, Any], schema: Schema, ctx: CodecContext) -> Record:
    inner = ctx.within(raw)
    values: dict[str, Any] = {}
    errors: list[FieldError] = []
    for spec in schema.fields:
        try:
            values[spec.name] = _decode_field(raw, spec, inner)
        except FieldError as exc:
            errors.append(exc.prefixed(spec.wire_name))
        except DecodeError as exc:
            errors.extend(exc.prefixed(spec.wire_name))
    if errors:
        logger.debug("Decoding %s failed with %d field errors", schema.name, len(errors))
        raise DecodeError(schema.name, errors)

    if schema.preserve_unknown and ctx.options.preserve_unknown_fields:
        extra = {key: value for key, value in raw.items() if key not in schema.wire_names}
        if extra:
            logger.debug("Preserving unknown %s keys: %s", schema.name, sorted(extra))
            values[UNKNOWN_FIELDS_ATTR] = freeze(extra)

    record = schema.record_cls(**values)
    if ctx.options.reconcile_deprecated:
        for alias in schema.aliases:
            record = alias.reconcile(record)
    return record


def _encode_record(record: Any, schema: Schema, ctx: CodecContext) -> dict[str, Any]:
    if not isinstance(record, schema.record_cls):
        raise EncodeError(
            schema.name,
            [TypeMismatch("", schema.record_cls.__name__, type(record).__name__)],
        )
    out: dict[str, Any] = {}
    errors: list[FieldError] = []
    for spec in schema.fields:
        value = getattr(record, spec.name)
        if value is ABSENT:
            if not spec.presence.allows_absent:
                errors.append(MissingRequiredField(spec.wire_name))
            continue
        if value is NULL:
            if spec.presence.allows_null:
                out[spec.wire_name] = None
            else:
                errors.append(UnexpectedNull(spec.wire_name))
            continue
        try:
            out[spec.wire_name] = spec.type.encode(value, ctx)
        except FieldError as exc:
            errors.append(exc.prefixed(spec.wire_name))
        except EncodeError as exc:
            errors.extend(exc.prefixed(spec.wire_name))
    if errors:
        raise EncodeError(schema.name, errors)

    if schema.preserve_unknown and ctx.options.preserve_unknown_fields:
        for key, value in record.unknown_fields.items():
            if key not in out:
                out[key] = thaw(value)
    return out


class RecordType(WireType):
    """A nested record, referenced directly or lazily for recursive schemas."""

    def __init__(self, schema: SchemaRef) -> None:
        self._schema = schema

    @property
    def schema(self) -> Schema:
        return _resolve(self._schema)

    @property
    def name(self) -> str:  # type: ignore[override]
        return self.schema.name

    def decode(self, raw: Any, ctx: CodecContext) -> Record:
        if not isinstance(raw, Mapping):
            raise TypeMismatch("", "object", wire_type_name(raw), raw=raw)
        return _decode_record(raw, self.schema, ctx)

    def encode(self, value: Any, ctx: CodecContext) -> dict[str, Any]:
        return _encode_record(value, self.schema, ctx)


# ── Unions ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Unknown:
    """An unrecognised union variant, kept verbatim for re-encoding."""

    discriminator: str | int | None
    raw: Mapping[str, Any] = field(hash=False)


class UnionType(WireType):
    """A closed set of record variants selected by a discriminator.

    The discriminator is read from the object itself (``type`` of a
    component) or, with ``sibling=True``, from the enclosing object.
    """

    def __init__(
        self,
        name: str,
        discriminator: str,
        variants: Mapping[Any, SchemaRef],
        *,
        sibling: bool = False,
        forward_compatible: bool = False,
    ) -> None:
        self.name = name
        self.discriminator = discriminator
        self._variants = dict(variants)
        self.sibling = sibling
        self.forward_compatible = forward_compatible

    @property
    def variants(self) -> dict[Any, Schema]:
        return {tag: _resolve(ref) for tag, ref in self._variants.items()}

    def _tag_of(self, raw: Mapping[str, Any], ctx: CodecContext) -> Any:
        if self.sibling:
            return (ctx.parent or {}).get(self.discriminator)
        if self.discriminator not in raw:
            raise MissingRequiredField(self.discriminator)
        return raw[self.discriminator]

    def decode(self, raw: Any, ctx: CodecContext) -> Record | Unknown:
        if not isinstance(raw, Mapping):
            raise TypeMismatch("", "object", wire_type_name(raw), raw=raw)
        tag = self._tag_of(raw, ctx)
        if tag is not None and not _is_tag(tag):
            path = "" if self.sibling else self.discriminator
            raise TypeMismatch(path, "string|integer", wire_type_name(tag), raw=tag)
        ref = self._variants.get(tag)
        if ref is None:
            if not self.forward_compatible:
                raise UnknownVariant("", tag)
            logger.debug("Keeping unknown %s variant %r", self.name, tag)
            return Unknown(discriminator=tag, raw=freeze(raw))
        return _decode_record(raw, _resolve(ref), ctx)

    def encode(self, value: Any, ctx: CodecContext) -> dict[str, Any]:
        if isinstance(value, Unknown):
            return thaw(value.raw)
        for schema in self.variants.values():
            if type(value) is schema.record_cls:
                return _encode_record(value, schema, ctx)
        raise TypeMismatch("", self.name, type(value).__name__)


def _is_tag(value: Any) -> bool:
    return isinstance(value, (str, int)) and not isinstance(value, bool)
