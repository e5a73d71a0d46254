"""Explicit record schemas.

A ``Schema`` is declared once per record type and reused by every
decode/encode call. It binds each record attribute to a wire name, a
``WireType`` and a ``Presence`` policy, in declaration order:

    USER = Schema(
        "User",
        User,
        [
            required("id", SNOWFLAKE),
            required("username", STRING),
            optional("bot", BOOLEAN),
        ],
    )

INVARIANT: Records are frozen. Schemas never mutate after construction.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from chatwire.domain.errors import SchemaDefinitionError
from chatwire.domain.presence import ABSENT, Presence, is_set
from chatwire.domain.wiretypes import WireType

logger = logging.getLogger(__name__)

UNKNOWN_FIELDS_ATTR = "unknown_fields"


def _no_unknown_fields() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True, kw_only=True)
class Record:
    """Base class for decoded records.

    ``unknown_fields`` holds wire keys the schema does not declare, so
    they survive a decode/encode round trip.
    """

    unknown_fields: Mapping[str, Any] = field(
        default_factory=_no_unknown_fields, repr=False, hash=False
    )


@dataclass(frozen=True)
class FieldSpec:
    """Binding of one record attribute to its wire representation."""

    name: str
    wire_name: str
    type: WireType
    presence: Presence = Presence.REQUIRED
    deprecated: bool = False


def required(name: str, wire_type: WireType, *, wire: str | None = None) -> FieldSpec:
    return FieldSpec(name, wire or name, wire_type, Presence.REQUIRED)


def nullable(name: str, wire_type: WireType, *, wire: str | None = None) -> FieldSpec:
    return FieldSpec(name, wire or name, wire_type, Presence.NULLABLE)


def optional(
    name: str,
    wire_type: WireType,
    *,
    wire: str | None = None,
    deprecated: bool = False,
) -> FieldSpec:
    return FieldSpec(name, wire or name, wire_type, Presence.OPTIONAL, deprecated)


def optional_nullable(name: str, wire_type: WireType, *, wire: str | None = None) -> FieldSpec:
    return FieldSpec(name, wire or name, wire_type, Presence.OPTIONAL_NULLABLE)


@dataclass(frozen=True)
class DeprecatedAlias:
    """A legacy field superseded by a newer one that both still travel.

    Reconciliation runs after decode. Precedence: the newer field wins
    when both are present; the legacy value is converted into the newer
    field only when the newer field is absent. The legacy field itself
    is left exactly as received.

    A record holding only the legacy value therefore does not survive
    ``decode(encode(record))`` unchanged: the second decode fills the
    newer field. Records produced by decode are already reconciled and
    round-trip exactly.
    """

    legacy: str
    current: str
    convert: Callable[[Any], Any] | None = None

    def reconcile(self, record: Record) -> Record:
        legacy_value = getattr(record, self.legacy)
        if getattr(record, self.current) is not ABSENT or not is_set(legacy_value):
            return record
        if self.convert is None:
            return record
        logger.debug("Filling %s from deprecated %s", self.current, self.legacy)
        return dataclasses.replace(record, **{self.current: self.convert(legacy_value)})


class Schema:
    """Ordered field list plus the record class it constructs."""

    def __init__(
        self,
        name: str,
        record_cls: type[Record],
        fields: Sequence[FieldSpec],
        *,
        aliases: Iterable[DeprecatedAlias] = (),
        preserve_unknown: bool = True,
        description: str = "",
    ) -> None:
        self.name = name
        self.record_cls = record_cls
        self.fields: tuple[FieldSpec, ...] = tuple(fields)
        self.aliases: tuple[DeprecatedAlias, ...] = tuple(aliases)
        self.preserve_unknown = preserve_unknown
        self.description = description
        self.wire_names = frozenset(spec.wire_name for spec in self.fields)
        self._validate()

    def _validate(self) -> None:
        if not dataclasses.is_dataclass(self.record_cls) or not issubclass(
            self.record_cls, Record
        ):
            msg = f"{self.name}: record class must be a Record dataclass"
            raise SchemaDefinitionError(msg)

        attrs = {f.name for f in dataclasses.fields(self.record_cls)}
        seen_names: set[str] = set()
        seen_wire: set[str] = set()
        for spec in self.fields:
            if spec.name in seen_names:
                msg = f"{self.name}: duplicate field {spec.name!r}"
                raise SchemaDefinitionError(msg)
            if spec.wire_name in seen_wire:
                msg = f"{self.name}: duplicate wire name {spec.wire_name!r}"
                raise SchemaDefinitionError(msg)
            if spec.name not in attrs:
                msg = f"{self.name}: {self.record_cls.__name__} has no attribute {spec.name!r}"
                raise SchemaDefinitionError(msg)
            seen_names.add(spec.name)
            seen_wire.add(spec.wire_name)

        declared = attrs - {UNKNOWN_FIELDS_ATTR}
        if declared != seen_names:
            missing = ", ".join(sorted(declared - seen_names))
            msg = f"{self.name}: record attributes without a field spec: {missing}"
            raise SchemaDefinitionError(msg)

        for alias in self.aliases:
            for attr in (alias.legacy, alias.current):
                if attr not in seen_names:
                    msg = f"{self.name}: alias refers to unknown field {attr!r}"
                    raise SchemaDefinitionError(msg)

    def field(self, name: str) -> FieldSpec:
        """Look up a field spec by attribute name."""
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)

    def __repr__(self) -> str:
        return f"<Schema {self.name} ({len(self.fields)} fields)>"
