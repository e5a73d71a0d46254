"""Message record and the records embedded in it.

``Message`` is the payload of ``MESSAGE_CREATE`` and ``MESSAGE_UPDATE``
gateway events and of the REST message endpoints.

Two fields keep their three presence states apart on purpose:
``edited_timestamp`` is always sent but is ``null`` until the message is
edited, and ``referenced_message`` is absent when the message is not a
reply but ``null`` when the replied-to message was deleted.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum, IntFlag

from chatwire.domain.codec import RecordType
from chatwire.domain.presence import ABSENT, Maybe, MaybeNull, Nullable
from chatwire.domain.schema import (
    DeprecatedAlias,
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
    STRING_OR_INTEGER,
    TIMESTAMP,
    ArrayOf,
    EnumType,
)
from chatwire.models.channel import CHANNEL, CHANNEL_MENTION, Channel, ChannelMention
from chatwire.models.components import COMPONENT, Component
from chatwire.models.emoji import REACTION, Reaction
from chatwire.models.user import GUILD_MEMBER, USER, GuildMember, User


class MessageType(IntEnum):
    DEFAULT = 0
    RECIPIENT_ADD = 1
    RECIPIENT_REMOVE = 2
    CALL = 3
    CHANNEL_NAME_CHANGE = 4
    CHANNEL_ICON_CHANGE = 5
    CHANNEL_PINNED_MESSAGE = 6
    GUILD_MEMBER_JOIN = 7
    USER_PREMIUM_GUILD_SUBSCRIPTION = 8
    USER_PREMIUM_GUILD_SUBSCRIPTION_TIER_1 = 9
    USER_PREMIUM_GUILD_SUBSCRIPTION_TIER_2 = 10
    USER_PREMIUM_GUILD_SUBSCRIPTION_TIER_3 = 11
    CHANNEL_FOLLOW_ADD = 12
    GUILD_DISCOVERY_DISQUALIFIED = 14
    GUILD_DISCOVERY_REQUALIFIED = 15
    GUILD_DISCOVERY_GRACE_PERIOD_INITIAL_WARNING = 16
    GUILD_DISCOVERY_GRACE_PERIOD_FINAL_WARNING = 17
    THREAD_CREATED = 18
    REPLY = 19
    CHAT_INPUT_COMMAND = 20
    THREAD_STARTER_MESSAGE = 21
    GUILD_INVITE_REMINDER = 22
    CONTEXT_MENU_COMMAND = 23


class MessageFlags(IntFlag):
    CROSSPOSTED = 1 << 0
    IS_CROSSPOST = 1 << 1
    SUPPRESS_EMBEDS = 1 << 2
    SOURCE_MESSAGE_DELETED = 1 << 3
    URGENT = 1 << 4
    HAS_THREAD = 1 << 5
    EPHEMERAL = 1 << 6
    LOADING = 1 << 7
    FAILED_TO_MENTION_SOME_ROLES_IN_THREAD = 1 << 8


class MessageActivityType(IntEnum):
    JOIN = 1
    SPECTATE = 2
    LISTEN = 3
    JOIN_REQUEST = 5


class InteractionType(IntEnum):
    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    APPLICATION_COMMAND_AUTOCOMPLETE = 4
    MODAL_SUBMIT = 5


class StickerType(IntEnum):
    STANDARD = 1
    GUILD = 2


class StickerFormatType(IntEnum):
    PNG = 1
    APNG = 2
    LOTTIE = 3


# --- Embedded records ---


@dataclass(frozen=True, kw_only=True)
class Attachment(Record):
    id: Snowflake
    filename: str
    description: Maybe[str] = ABSENT
    content_type: Maybe[str] = ABSENT
    size: int
    url: str
    proxy_url: str
    height: MaybeNull[int] = ABSENT
    width: MaybeNull[int] = ABSENT
    ephemeral: Maybe[bool] = ABSENT


@dataclass(frozen=True, kw_only=True)
class EmbedFooter(Record):
    text: str
    icon_url: Maybe[str] = ABSENT
    proxy_icon_url: Maybe[str] = ABSENT


@dataclass(frozen=True, kw_only=True)
class EmbedMedia(Record):
    """Image, thumbnail or video of an embed."""

    url: Maybe[str] = ABSENT
    proxy_url: Maybe[str] = ABSENT
    height: Maybe[int] = ABSENT
    width: Maybe[int] = ABSENT


@dataclass(frozen=True, kw_only=True)
class EmbedAuthor(Record):
    name: str
    url: Maybe[str] = ABSENT
    icon_url: Maybe[str] = ABSENT
    proxy_icon_url: Maybe[str] = ABSENT


@dataclass(frozen=True, kw_only=True)
class EmbedField(Record):
    name: str
    value: str
    inline: Maybe[bool] = ABSENT


@dataclass(frozen=True, kw_only=True)
class Embed(Record):
    title: Maybe[str] = ABSENT
    type: Maybe[str] = ABSENT
    description: Maybe[str] = ABSENT
    url: Maybe[str] = ABSENT
    timestamp: Maybe[datetime] = ABSENT
    color: Maybe[int] = ABSENT
    footer: Maybe[EmbedFooter] = ABSENT
    image: Maybe[EmbedMedia] = ABSENT
    thumbnail: Maybe[EmbedMedia] = ABSENT
    video: Maybe[EmbedMedia] = ABSENT
    author: Maybe[EmbedAuthor] = ABSENT
    fields: Maybe[tuple[EmbedField, ...]] = ABSENT


@dataclass(frozen=True, kw_only=True)
class MessageActivity(Record):
    type: MessageActivityType | int
    party_id: Maybe[str] = ABSENT


@dataclass(frozen=True, kw_only=True)
class MessageApplication(Record):
    """Partial application sent with Rich Presence embeds."""

    id: Snowflake
    name: str
    icon: Nullable[str]
    description: str
    cover_image: Maybe[str] = ABSENT


@dataclass(frozen=True, kw_only=True)
class MessageReference(Record):
    """Source of a crosspost, channel follow add, pin or reply."""

    message_id: Maybe[Snowflake] = ABSENT
    channel_id: Maybe[Snowflake] = ABSENT
    guild_id: Maybe[Snowflake] = ABSENT
    fail_if_not_exists: Maybe[bool] = ABSENT


@dataclass(frozen=True, kw_only=True)
class MessageInteraction(Record):
    id: Snowflake
    type: InteractionType | int
    name: str
    user: User
    member: Maybe[GuildMember] = ABSENT


@dataclass(frozen=True, kw_only=True)
class StickerItem(Record):
    id: Snowflake
    name: str
    format_type: StickerFormatType | int


@dataclass(frozen=True, kw_only=True)
class Sticker(Record):
    """Full sticker object; only sent in the deprecated ``stickers`` field."""

    id: Snowflake
    pack_id: Maybe[Snowflake] = ABSENT
    name: str
    description: Nullable[str]
    tags: str
    type: StickerType | int
    format_type: StickerFormatType | int
    available: Maybe[bool] = ABSENT
    guild_id: Maybe[Snowflake] = ABSENT
    user: Maybe[User] = ABSENT
    sort_value: Maybe[int] = ABSENT


def sticker_items_from_stickers(stickers: tuple[Sticker, ...]) -> tuple[StickerItem, ...]:
    """Project legacy full stickers onto sticker items."""
    return tuple(
        StickerItem(id=sticker.id, name=sticker.name, format_type=sticker.format_type)
        for sticker in stickers
    )


@dataclass(frozen=True, kw_only=True)
class Message(Record):
    """A message sent in a channel."""

    id: Snowflake
    channel_id: Snowflake
    guild_id: Maybe[Snowflake] = ABSENT
    author: User
    member: Maybe[GuildMember] = ABSENT
    content: str
    timestamp: datetime
    edited_timestamp: Nullable[datetime]
    tts: bool
    mention_everyone: bool
    mentions: tuple[User, ...]
    mention_roles: tuple[Snowflake, ...]
    mention_channels: Maybe[tuple[ChannelMention, ...]] = ABSENT
    attachments: tuple[Attachment, ...]
    embeds: tuple[Embed, ...]
    reactions: Maybe[tuple[Reaction, ...]] = ABSENT
    nonce: Maybe[str | int] = ABSENT
    pinned: bool
    webhook_id: Maybe[Snowflake] = ABSENT
    type: MessageType | int
    activity: Maybe[MessageActivity] = ABSENT
    application: Maybe[MessageApplication] = ABSENT
    application_id: Maybe[Snowflake] = ABSENT
    message_reference: Maybe[MessageReference] = ABSENT
    flags: Maybe[MessageFlags] = ABSENT
    referenced_message: MaybeNull[Message] = ABSENT
    interaction: Maybe[MessageInteraction] = ABSENT
    thread: Maybe[Channel] = ABSENT
    components: Maybe[tuple[Component, ...]] = ABSENT
    sticker_items: Maybe[tuple[StickerItem, ...]] = ABSENT
    stickers: Maybe[tuple[Sticker, ...]] = ABSENT


# --- Schemas ---

ATTACHMENT = Schema(
    "Attachment",
    Attachment,
    [
        required("id", SNOWFLAKE),
        required("filename", STRING),
        optional("description", STRING),
        optional("content_type", STRING),
        required("size", INTEGER),
        required("url", STRING),
        required("proxy_url", STRING),
        optional_nullable("height", INTEGER),
        optional_nullable("width", INTEGER),
        optional("ephemeral", BOOLEAN),
    ],
)

EMBED_FOOTER = Schema(
    "EmbedFooter",
    EmbedFooter,
    [
        required("text", STRING),
        optional("icon_url", STRING),
        optional("proxy_icon_url", STRING),
    ],
)

EMBED_MEDIA = Schema(
    "EmbedMedia",
    EmbedMedia,
    [
        optional("url", STRING),
        optional("proxy_url", STRING),
        optional("height", INTEGER),
        optional("width", INTEGER),
    ],
)

EMBED_AUTHOR = Schema(
    "EmbedAuthor",
    EmbedAuthor,
    [
        required("name", STRING),
        optional("url", STRING),
        optional("icon_url", STRING),
        optional("proxy_icon_url", STRING),
    ],
)

EMBED_FIELD = Schema(
    "EmbedField",
    EmbedField,
    [
        required("name", STRING),
        required("value", STRING),
        optional("inline", BOOLEAN),
    ],
)

EMBED = Schema(
    "Embed",
    Embed,
    [
        optional("title", STRING),
        optional("type", STRING),
        optional("description", STRING),
        optional("url", STRING),
        optional("timestamp", TIMESTAMP),
        optional("color", INTEGER),
        optional("footer", RecordType(EMBED_FOOTER)),
        optional("image", RecordType(EMBED_MEDIA)),
        optional("thumbnail", RecordType(EMBED_MEDIA)),
        optional("video", RecordType(EMBED_MEDIA)),
        optional("author", RecordType(EMBED_AUTHOR)),
        optional("fields", ArrayOf(RecordType(EMBED_FIELD))),
    ],
)

MESSAGE_ACTIVITY = Schema(
    "MessageActivity",
    MessageActivity,
    [
        required("type", EnumType(MessageActivityType, forward_compatible=True)),
        optional("party_id", STRING),
    ],
)

MESSAGE_APPLICATION = Schema(
    "MessageApplication",
    MessageApplication,
    [
        required("id", SNOWFLAKE),
        required("name", STRING),
        nullable("icon", STRING),
        required("description", STRING),
        optional("cover_image", STRING),
    ],
)

MESSAGE_REFERENCE = Schema(
    "MessageReference",
    MessageReference,
    [
        optional("message_id", SNOWFLAKE),
        optional("channel_id", SNOWFLAKE),
        optional("guild_id", SNOWFLAKE),
        optional("fail_if_not_exists", BOOLEAN),
    ],
)

MESSAGE_INTERACTION = Schema(
    "MessageInteraction",
    MessageInteraction,
    [
        required("id", SNOWFLAKE),
        required("type", EnumType(InteractionType, forward_compatible=True)),
        required("name", STRING),
        required("user", RecordType(USER)),
        optional("member", RecordType(GUILD_MEMBER)),
    ],
)

STICKER_FORMAT_TYPE = EnumType(StickerFormatType, forward_compatible=True)

STICKER_ITEM = Schema(
    "StickerItem",
    StickerItem,
    [
        required("id", SNOWFLAKE),
        required("name", STRING),
        required("format_type", STICKER_FORMAT_TYPE),
    ],
)

STICKER = Schema(
    "Sticker",
    Sticker,
    [
        required("id", SNOWFLAKE),
        optional("pack_id", SNOWFLAKE),
        required("name", STRING),
        nullable("description", STRING),
        required("tags", STRING),
        required("type", EnumType(StickerType, forward_compatible=True)),
        required("format_type", STICKER_FORMAT_TYPE),
        optional("available", BOOLEAN),
        optional("guild_id", SNOWFLAKE),
        optional("user", RecordType(USER)),
        optional("sort_value", INTEGER),
    ],
)

MESSAGE = Schema(
    "Message",
    Message,
    [
        required("id", SNOWFLAKE),
        required("channel_id", SNOWFLAKE),
        optional("guild_id", SNOWFLAKE),
        required("author", RecordType(USER)),
        optional("member", RecordType(GUILD_MEMBER)),
        required("content", STRING),
        required("timestamp", TIMESTAMP),
        nullable("edited_timestamp", TIMESTAMP),
        required("tts", BOOLEAN),
        required("mention_everyone", BOOLEAN),
        required("mentions", ArrayOf(RecordType(USER))),
        required("mention_roles", ArrayOf(SNOWFLAKE)),
        optional("mention_channels", ArrayOf(RecordType(CHANNEL_MENTION))),
        required("attachments", ArrayOf(RecordType(ATTACHMENT))),
        required("embeds", ArrayOf(RecordType(EMBED))),
        optional("reactions", ArrayOf(RecordType(REACTION))),
        optional("nonce", STRING_OR_INTEGER),
        required("pinned", BOOLEAN),
        optional("webhook_id", SNOWFLAKE),
        required("type", EnumType(MessageType, forward_compatible=True)),
        optional("activity", RecordType(MESSAGE_ACTIVITY)),
        optional("application", RecordType(MESSAGE_APPLICATION)),
        optional("application_id", SNOWFLAKE),
        optional("message_reference", RecordType(MESSAGE_REFERENCE)),
        optional("flags", EnumType(MessageFlags)),
        optional_nullable("referenced_message", RecordType(lambda: MESSAGE)),
        optional("interaction", RecordType(MESSAGE_INTERACTION)),
        optional("thread", RecordType(CHANNEL)),
        optional("components", ArrayOf(COMPONENT)),
        optional("sticker_items", ArrayOf(RecordType(STICKER_ITEM))),
        optional("stickers", ArrayOf(RecordType(STICKER)), deprecated=True),
    ],
    aliases=[
        DeprecatedAlias("stickers", "sticker_items", sticker_items_from_stickers),
    ],
    description="Message payload of MESSAGE_CREATE / MESSAGE_UPDATE.",
)
