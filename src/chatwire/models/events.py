"""Gateway event payloads that are not full resources."""

from __future__ import annotations

from dataclasses import dataclass

from chatwire.domain.presence import ABSENT, Maybe
from chatwire.domain.schema import Record, Schema, optional, required
from chatwire.domain.snowflake import Snowflake
from chatwire.domain.wiretypes import SNOWFLAKE


@dataclass(frozen=True, kw_only=True)
class MessageReactionRemoveAll(Record):
    """Sent when a user explicitly removes all reactions from a message."""

    channel_id: Snowflake
    message_id: Snowflake
    guild_id: Maybe[Snowflake] = ABSENT


MESSAGE_REACTION_REMOVE_ALL = Schema(
    "MessageReactionRemoveAll",
    MessageReactionRemoveAll,
    [
        required("channel_id", SNOWFLAKE),
        required("message_id", SNOWFLAKE),
        optional("guild_id", SNOWFLAKE),
    ],
    description="Payload of MESSAGE_REACTION_REMOVE_ALL.",
)
