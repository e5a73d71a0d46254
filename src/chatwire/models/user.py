"""User and guild member records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from chatwire.domain.codec import RecordType
from chatwire.domain.presence import ABSENT, Maybe, MaybeNull, Nullable
from chatwire.domain.schema import (
    Record,
    Schema,
    nullable,
    optional,
    optional_nullable,
    required,
)
from chatwire.domain.snowflake import Snowflake
from chatwire.domain.wiretypes import (
    BOOLEAN,
    INTEGER,
    SNOWFLAKE,
    STRING,
    TIMESTAMP,
    ArrayOf,
)


@dataclass(frozen=True, kw_only=True)
class GuildMember(Record):
    """A user's membership in a guild.

    Message payloads carry a partial member: ``user`` is omitted and
    ``deaf``/``mute`` may be missing.
    """

    user: Maybe[User] = ABSENT
    nick: MaybeNull[str] = ABSENT
    avatar: MaybeNull[str] = ABSENT
    roles: tuple[Snowflake, ...]
    joined_at: datetime
    premium_since: MaybeNull[datetime] = ABSENT
    deaf: Maybe[bool] = ABSENT
    mute: Maybe[bool] = ABSENT
    pending: Maybe[bool] = ABSENT
    communication_disabled_until: MaybeNull[datetime] = ABSENT


@dataclass(frozen=True, kw_only=True)
class User(Record):
    """A user account (or a webhook posing as one)."""

    id: Snowflake
    username: str
    discriminator: str
    avatar: Nullable[str]
    bot: Maybe[bool] = ABSENT
    system: Maybe[bool] = ABSENT
    public_flags: Maybe[int] = ABSENT
    member: Maybe[GuildMember] = ABSENT


GUILD_MEMBER = Schema(
    "GuildMember",
    GuildMember,
    [
        optional("user", RecordType(lambda: USER)),
        optional_nullable("nick", STRING),
        optional_nullable("avatar", STRING),
        required("roles", ArrayOf(SNOWFLAKE)),
        required("joined_at", TIMESTAMP),
        optional_nullable("premium_since", TIMESTAMP),
        optional("deaf", BOOLEAN),
        optional("mute", BOOLEAN),
        optional("pending", BOOLEAN),
        optional_nullable("communication_disabled_until", TIMESTAMP),
    ],
)

USER = Schema(
    "User",
    User,
    [
        required("id", SNOWFLAKE),
        required("username", STRING),
        required("discriminator", STRING),
        nullable("avatar", STRING),
        optional("bot", BOOLEAN),
        optional("system", BOOLEAN),
        optional("public_flags", INTEGER),
        optional("member", RecordType(GUILD_MEMBER)),
    ],
    description="User object; mentions carry an additional partial member.",
)