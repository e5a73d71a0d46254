"""Channel records embedded in messages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from chatwire.domain.presence import ABSENT, Maybe, MaybeNull
from chatwire.domain.schema import Record, Schema, optional, optional_nullable, required
from chatwire.domain.snowflake import Snowflake
from chatwire.domain.wiretypes import INTEGER, SNOWFLAKE, STRING, EnumType


class ChannelType(IntEnum):
    GUILD_TEXT = 0
    DM = 1
    GUILD_VOICE = 2
    GROUP_DM = 3
    GUILD_CATEGORY = 4
    GUILD_NEWS = 5
    GUILD_STORE = 6
    GUILD_NEWS_THREAD = 10
    GUILD_PUBLIC_THREAD = 11
    GUILD_PRIVATE_THREAD = 12
    GUILD_STAGE_VOICE = 13


CHANNEL_TYPE = EnumType(ChannelType, forward_compatible=True)


@dataclass(frozen=True, kw_only=True)
class ChannelMention(Record):
    """A channel mentioned in a crossposted message."""

    id: Snowflake
    guild_id: Snowflake
    type: ChannelType | int
    name: str


@dataclass(frozen=True, kw_only=True)
class Channel(Record):
    """Partial channel, as sent for the thread started from a message."""

    id: Snowflake
    type: ChannelType | int
    guild_id: Maybe[Snowflake] = ABSENT
    name: Maybe[str] = ABSENT
    parent_id: MaybeNull[Snowflake] = ABSENT
    owner_id: Maybe[Snowflake] = ABSENT
    last_message_id: MaybeNull[Snowflake] = ABSENT
    message_count: Maybe[int] = ABSENT
    member_count: Maybe[int] = ABSENT


CHANNEL_MENTION = Schema(
    "ChannelMention",
    ChannelMention,
    [
        required("id", SNOWFLAKE),
        required("guild_id", SNOWFLAKE),
        required("type", CHANNEL_TYPE),
        required("name", STRING),
    ],
)

CHANNEL = Schema(
    "Channel",
    Channel,
    [
        required("id", SNOWFLAKE),
        required("type", CHANNEL_TYPE),
        optional("guild_id", SNOWFLAKE),
        optional("name", STRING),
        optional_nullable("parent_id", SNOWFLAKE),
        optional("owner_id", SNOWFLAKE),
        optional_nullable("last_message_id", SNOWFLAKE),
        optional("message_count", INTEGER),
        optional("member_count", INTEGER),
    ],
)
