"""Record schemas for the chat platform's REST and gateway payloads."""

from chatwire.models.events import MESSAGE_REACTION_REMOVE_ALL, MessageReactionRemoveAll
from chatwire.models.message import MESSAGE, Message
from chatwire.models.registry import SchemaRegistry, UnknownSchemaError, default_registry
from chatwire.models.user import USER, User

__all__ = [
    "MESSAGE",
    "MESSAGE_REACTION_REMOVE_ALL",
    "USER",
    "Message",
    "MessageReactionRemoveAll",
    "SchemaRegistry",
    "UnknownSchemaError",
    "User",
    "default_registry",
]
