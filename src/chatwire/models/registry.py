"""Schema registry — lookup by schema name or gateway event name.

The registry is populated once at import time and only read afterwards,
so sharing it across threads is safe.
"""

from __future__ import annotations

import functools
from collections.abc import Iterator

from chatwire.domain.schema import Schema


class UnknownSchemaError(LookupError):
    """Raised when a name matches neither a schema nor an event."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown schema or event: {name}")


class SchemaRegistry:
    """Maps schema names (``Message``) and event names (``MESSAGE_CREATE``)."""

    def __init__(self) -> None:
        self._schemas: dict[str, Schema] = {}
        self._events: dict[str, Schema] = {}

    def register(self, schema: Schema, *events: str) -> Schema:
        """Register *schema* under its name and any gateway *events*."""
        existing = self._schemas.get(schema.name)
        if existing is not None and existing is not schema:
            msg = f"Schema name already registered: {schema.name}"
            raise ValueError(msg)
        self._schemas[schema.name] = schema
        for event in events:
            self._events[event.upper()] = schema
        return schema

    def get(self, name: str) -> Schema:
        try:
            return self._schemas[name]
        except KeyError:
            raise UnknownSchemaError(name) from None

    def for_event(self, event: str) -> Schema:
        try:
            return self._events[event.upper()]
        except KeyError:
            raise UnknownSchemaError(event) from None

    def resolve(self, name: str) -> Schema:
        """Resolve a schema name first, then an event name."""
        if name in self._schemas:
            return self._schemas[name]
        return self.for_event(name)

    def events_for(self, schema: Schema) -> list[str]:
        return sorted(event for event, target in self._events.items() if target is schema)

    def __iter__(self) -> Iterator[Schema]:
        return iter(sorted(self._schemas.values(), key=lambda s: s.name))

    def __len__(self) -> int:
        return len(self._schemas)

    def __contains__(self, name: object) -> bool:
        return name in self._schemas or (isinstance(name, str) and name.upper() in self._events)


@functools.cache
def default_registry() -> SchemaRegistry:
    """Registry of every built-in schema, keyed by name and gateway event."""
    from chatwire.models import channel, components, emoji, events, message, user

    registry = SchemaRegistry()
    registry.register(message.MESSAGE, "MESSAGE_CREATE", "MESSAGE_UPDATE")
    registry.register(events.MESSAGE_REACTION_REMOVE_ALL, "MESSAGE_REACTION_REMOVE_ALL")
    for schema in (
        user.USER,
        user.GUILD_MEMBER,
        channel.CHANNEL,
        channel.CHANNEL_MENTION,
        emoji.EMOJI,
        emoji.REACTION,
        components.ACTION_ROW,
        components.BUTTON,
        components.SELECT_MENU,
        components.SELECT_OPTION,
        components.TEXT_INPUT,
        message.ATTACHMENT,
        message.EMBED,
        message.MESSAGE_REFERENCE,
        message.MESSAGE_INTERACTION,
        message.STICKER_ITEM,
        message.STICKER,
    ):
        registry.register(schema)
    return registry
