"""Tests for schema declaration and deprecated-alias reconciliation."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from chatwire.domain.errors import SchemaDefinitionError
from chatwire.domain.presence import ABSENT, NULL, Maybe, MaybeNull, Presence
from chatwire.domain.schema import (
    DeprecatedAlias,
    Record,
    Schema,
    nullable,
    optional,
    optional_nullable,
    required,
)
from chatwire.domain.wiretypes import INTEGER, STRING


@dataclass(frozen=True, kw_only=True)
class Pair(Record):
    left: str
    right: Maybe[int] = ABSENT


@dataclass(frozen=True, kw_only=True)
class Legacy(Record):
    total: Maybe[int] = ABSENT
    count: MaybeNull[str] = ABSENT


class TestFieldHelpers:
    def test_presence_policies(self) -> None:
        assert required("a", STRING).presence is Presence.REQUIRED
        assert nullable("a", STRING).presence is Presence.NULLABLE
        assert optional("a", STRING).presence is Presence.OPTIONAL
        assert optional_nullable("a", STRING).presence is Presence.OPTIONAL_NULLABLE

    def test_wire_name_override(self) -> None:
        spec = optional("kind", STRING, wire="type")
        assert spec.name == "kind"
        assert spec.wire_name == "type"

    def test_deprecated_flag(self) -> None:
        assert optional("a", STRING, deprecated=True).deprecated


class TestSchema:
    def test_field_order_and_lookup(self) -> None:
        schema = Schema("Pair", Pair, [required("left", STRING), optional("right", INTEGER)])
        assert [f.wire_name for f in schema.fields] == ["left", "right"]
        assert schema.field("right").presence is Presence.OPTIONAL
        assert schema.wire_names == frozenset({"left", "right"})
        with pytest.raises(KeyError):
            schema.field("missing")

    def test_rejects_non_record(self) -> None:
        with pytest.raises(SchemaDefinitionError, match="Record dataclass"):
            Schema("Bad", dict, [])  # type: ignore[arg-type]

    def test_rejects_duplicate_wire_name(self) -> None:
        with pytest.raises(SchemaDefinitionError, match="duplicate wire name"):
            Schema(
                "Pair",
                Pair,
                [required("left", STRING), optional("right", INTEGER, wire="left")],
            )

    def test_rejects_unknown_attribute(self) -> None:
        with pytest.raises(SchemaDefinitionError, match="no attribute 'middle'"):
            Schema(
                "Pair",
                Pair,
                [
                    required("left", STRING),
                    optional("right", INTEGER),
                    optional("middle", INTEGER),
                ],
            )

    def test_rejects_undeclared_attribute(self) -> None:
        with pytest.raises(SchemaDefinitionError, match="without a field spec: right"):
            Schema("Pair", Pair, [required("left", STRING)])

    def test_rejects_alias_to_unknown_field(self) -> None:
        with pytest.raises(SchemaDefinitionError, match="alias"):
            Schema(
                "Pair",
                Pair,
                [required("left", STRING), optional("right", INTEGER)],
                aliases=[DeprecatedAlias("left", "nowhere")],
            )


class TestDeprecatedAlias:
    alias = DeprecatedAlias("count", "total", lambda raw: int(raw))

    def test_fills_absent_current(self) -> None:
        assert self.alias.reconcile(Legacy(count="3")) == Legacy(total=3, count="3")

    def test_current_wins(self) -> None:
        record = Legacy(total=5, count="3")
        assert self.alias.reconcile(record) is record

    def test_null_legacy_ignored(self) -> None:
        record = Legacy(count=NULL)
        assert self.alias.reconcile(record) is record

    def test_nothing_to_do(self) -> None:
        record = Legacy()
        assert self.alias.reconcile(record) is record

    def test_without_converter(self) -> None:
        record = Legacy(count="3")
        assert DeprecatedAlias("count", "total").reconcile(record) is record
