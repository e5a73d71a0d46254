"""Emoji and reaction records."""

from __future__ import annotations

from dataclasses import dataclass

from chatwire.domain.codec import RecordType
from chatwire.domain.presence import ABSENT, Maybe, Nullable
from chatwire.domain.schema import Record, Schema, nullable, optional, required
from chatwire.domain.snowflake import Snowflake
from chatwire.domain.wiretypes import BOOLEAN, INTEGER, SNOWFLAKE, STRING


@dataclass(frozen=True, kw_only=True)
class Emoji(Record):
    """Partial emoji. Unicode emoji have a null ``id``."""

    id: Nullable[Snowflake]
    name: Nullable[str]
    animated: Maybe[bool] = ABSENT


@dataclass(frozen=True, kw_only=True)
class Reaction(Record):
    count: int
    me: bool
    emoji: Emoji


EMOJI = Schema(
    "Emoji",
    Emoji,
    [
        nullable("id", SNOWFLAKE),
        nullable("name", STRING),
        optional("animated", BOOLEAN),
    ],
)

REACTION = Schema(
    "Reaction",
    Reaction,
    [
        required("count", INTEGER),
        required("me", BOOLEAN),
        required("emoji", RecordType(EMOJI)),
    ],
)
