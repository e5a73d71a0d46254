"""Conversions between JSON values and semantic values.

Each ``WireType`` knows how to decode one JSON value into its semantic
Python value and how to encode it back. Leaf types raise a single
``FieldError`` with an empty path; the caller relocates it under the
field's wire name. Composite types (arrays here, records and unions in
:mod:`chatwire.domain.codec`) aggregate child failures into one
``DecodeError`` / ``EncodeError``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum, IntFlag
from types import MappingProxyType
from typing import Any

from chatwire.domain.errors import (
    DecodeError,
    EncodeError,
    FieldError,
    InvalidIdentifierFormat,
    InvalidTimestampFormat,
    TypeMismatch,
    UnexpectedNull,
    UnknownVariant,
    wire_type_name,
)
from chatwire.domain.presence import NULL
from chatwire.domain.snowflake import Snowflake
from chatwire.domain.timestamps import format_timestamp, parse_timestamp

logger = logging.getLogger(__name__)

# Bit sets are unsigned 64-bit integers.
_FLAGS_LIMIT = 1 << 64


@dataclass(frozen=True)
class CodecOptions:
    """Behaviour switches shared by every decode/encode call."""

    preserve_unknown_fields: bool = True
    reconcile_deprecated: bool = True
    allow_numeric_ids: bool = True


@dataclass(frozen=True)
class CodecContext:
    """Per-call state threaded through nested conversions.

    ``parent`` is the wire object that contains the value being decoded,
    used by unions whose discriminator lives in a sibling key.
    """

    options: CodecOptions = CodecOptions()
    parent: Mapping[str, Any] | None = None

    def within(self, parent: Mapping[str, Any]) -> CodecContext:
        return replace(self, parent=parent)


def freeze(raw: Any) -> Any:
    """Convert a JSON tree into read-only mappings and tuples."""
    if isinstance(raw, Mapping):
        return MappingProxyType({key: freeze(value) for key, value in raw.items()})
    if isinstance(raw, (list, tuple)):
        return tuple(freeze(item) for item in raw)
    return raw


def thaw(value: Any) -> Any:
    """Inverse of :func:`freeze`: produce plain dicts and lists."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    return value


class WireType:
    """Base class for all wire types."""

    name: str = "value"

    def decode(self, raw: Any, ctx: CodecContext) -> Any:
        raise NotImplementedError

    def encode(self, value: Any, ctx: CodecContext) -> Any:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


def _is_instance(value: Any, accepts: tuple[type, ...]) -> bool:
    if isinstance(value, bool) and bool not in accepts:
        return False
    return isinstance(value, accepts)


class Scalar(WireType):
    """A JSON primitive passed through unchanged."""

    def __init__(self, name: str, *accepts: type) -> None:
        self.name = name
        self._accepts = accepts

    def decode(self, raw: Any, ctx: CodecContext) -> Any:
        if not _is_instance(raw, self._accepts):
            raise TypeMismatch("", self.name, wire_type_name(raw), raw=raw)
        return raw

    def encode(self, value: Any, ctx: CodecContext) -> Any:
        if not _is_instance(value, self._accepts):
            raise TypeMismatch("", self.name, type(value).__name__)
        return value


class SnowflakeType(WireType):
    name = "snowflake"

    def decode(self, raw: Any, ctx: CodecContext) -> Snowflake:
        try:
            return Snowflake.parse(raw, allow_numeric=ctx.options.allow_numeric_ids)
        except ValueError as exc:
            raise InvalidIdentifierFormat("", raw, str(exc)) from exc

    def encode(self, value: Any, ctx: CodecContext) -> str:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeMismatch("", self.name, type(value).__name__)
        try:
            return Snowflake(int(value)).to_wire()
        except ValueError as exc:
            raise InvalidIdentifierFormat("", value, str(exc)) from exc


class TimestampType(WireType):
    name = "timestamp"

    def decode(self, raw: Any, ctx: CodecContext) -> datetime:
        if not isinstance(raw, str):
            raise TypeMismatch("", self.name, wire_type_name(raw), raw=raw)
        try:
            return parse_timestamp(raw)
        except ValueError as exc:
            raise InvalidTimestampFormat("", raw) from exc

    def encode(self, value: Any, ctx: CodecContext) -> str:
        if not isinstance(value, datetime):
            raise TypeMismatch("", self.name, type(value).__name__)
        try:
            return format_timestamp(value)
        except ValueError as exc:
            raise InvalidTimestampFormat("", str(value)) from exc


class EnumType(WireType):
    """An integer or string enum (including ``IntFlag`` bit sets).

    Unknown values fail with ``UnknownVariant`` unless the field is
    forward-compatible, in which case the raw value is kept as-is.
    """

    def __init__(self, enum_cls: type[Enum], *, forward_compatible: bool = False) -> None:
        self.enum_cls = enum_cls
        self.name = enum_cls.__name__
        self.forward_compatible = forward_compatible
        self._wire: tuple[type, ...] = (str,) if issubclass(enum_cls, str) else (int,)
        self._is_flags = issubclass(enum_cls, IntFlag)

    def decode(self, raw: Any, ctx: CodecContext) -> Any:
        if not _is_instance(raw, self._wire):
            raise TypeMismatch("", self.name, wire_type_name(raw), raw=raw)
        if self._is_flags and not 0 <= raw < _FLAGS_LIMIT:
            return self._unknown(raw)
        try:
            return self.enum_cls(raw)
        except ValueError:
            return self._unknown(raw)

    def _unknown(self, raw: Any) -> Any:
        if not self.forward_compatible:
            raise UnknownVariant("", raw)
        logger.debug("Keeping unknown %s value %r", self.name, raw)
        return raw

    def encode(self, value: Any, ctx: CodecContext) -> Any:
        if isinstance(value, self.enum_cls):
            return value.value
        if self.forward_compatible and _is_instance(value, self._wire):
            return value
        raise TypeMismatch("", self.name, type(value).__name__)


class ArrayOf(WireType):
    """A JSON array of one item type, decoded into a tuple."""

    def __init__(self, item: WireType, *, nullable_items: bool = False) -> None:
        self.item = item
        self.nullable_items = nullable_items

    @property
    def name(self) -> str:  # type: ignore[override]
        return f"array<{self.item.name}>"

    def decode(self, raw: Any, ctx: CodecContext) -> tuple[Any, ...]:
        if not isinstance(raw, list):
            raise TypeMismatch("", "array", wire_type_name(raw), raw=raw)
        items: list[Any] = []
        errors: list[FieldError] = []
        for index, element in enumerate(raw):
            where = f"[{index}]"
            if element is None:
                if self.nullable_items:
                    items.append(NULL)
                else:
                    errors.append(UnexpectedNull(where))
                continue
            try:
                items.append(self.item.decode(element, ctx))
            except FieldError as exc:
                errors.append(exc.prefixed(where))
            except DecodeError as exc:
                errors.extend(exc.prefixed(where))
        if errors:
            raise DecodeError(self.name, errors)
        return tuple(items)

    def encode(self, value: Any, ctx: CodecContext) -> list[Any]:
        if not isinstance(value, (list, tuple)):
            raise TypeMismatch("", "array", type(value).__name__)
        out: list[Any] = []
        errors: list[FieldError] = []
        for index, element in enumerate(value):
            where = f"[{index}]"
            if element is NULL:
                if self.nullable_items:
                    out.append(None)
                else:
                    errors.append(UnexpectedNull(where))
                continue
            try:
                out.append(self.item.encode(element, ctx))
            except FieldError as exc:
                errors.append(exc.prefixed(where))
            except EncodeError as exc:
                errors.extend(exc.prefixed(where))
        if errors:
            raise EncodeError(self.name, errors)
        return out


STRING = Scalar("string", str)
INTEGER = Scalar("integer", int)
BOOLEAN = Scalar("boolean", bool)
STRING_OR_INTEGER = Scalar("string|integer", str, int)
SNOWFLAKE = SnowflakeType()
TIMESTAMP = TimestampType()
