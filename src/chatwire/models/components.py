"""Interactive message components.

Components form a closed union keyed by their ``type`` field. Action
rows nest further components. The union is forward-compatible: a
component type this library does not know decodes to
:class:`~chatwire.domain.codec.Unknown` and re-encodes verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from chatwire.domain.codec import RecordType, UnionType, Unknown
from chatwire.domain.presence import ABSENT, Maybe
from chatwire.domain.schema import Record, Schema, optional, required
from chatwire.domain.wiretypes import BOOLEAN, INTEGER, STRING, ArrayOf, EnumType
from chatwire.models.emoji import EMOJI, Emoji


class ComponentType(IntEnum):
    ACTION_ROW = 1
    BUTTON = 2
    SELECT_MENU = 3
    TEXT_INPUT = 4


class ButtonStyle(IntEnum):
    PRIMARY = 1
    SECONDARY = 2
    SUCCESS = 3
    DANGER = 4
    LINK = 5


class TextInputStyle(IntEnum):
    SHORT = 1
    PARAGRAPH = 2


@dataclass(frozen=True, kw_only=True)
class ActionRow(Record):
    type: ComponentType = ComponentType.ACTION_ROW
    components: tuple[Component, ...]


@dataclass(frozen=True, kw_only=True)
class Button(Record):
    type: ComponentType = ComponentType.BUTTON
    style: ButtonStyle
    label: Maybe[str] = ABSENT
    emoji: Maybe[Emoji] = ABSENT
    custom_id: Maybe[str] = ABSENT
    url: Maybe[str] = ABSENT
    disabled: Maybe[bool] = ABSENT


@dataclass(frozen=True, kw_only=True)
class SelectOption(Record):
    label: str
    value: str
    description: Maybe[str] = ABSENT
    emoji: Maybe[Emoji] = ABSENT
    default: Maybe[bool] = ABSENT


@dataclass(frozen=True, kw_only=True)
class SelectMenu(Record):
    type: ComponentType = ComponentType.SELECT_MENU
    custom_id: str
    options: tuple[SelectOption, ...]
    placeholder: Maybe[str] = ABSENT
    min_values: Maybe[int] = ABSENT
    max_values: Maybe[int] = ABSENT
    disabled: Maybe[bool] = ABSENT


@dataclass(frozen=True, kw_only=True)
class TextInput(Record):
    type: ComponentType = ComponentType.TEXT_INPUT
    custom_id: str
    style: TextInputStyle
    label: str
    min_length: Maybe[int] = ABSENT
    max_length: Maybe[int] = ABSENT
    required: Maybe[bool] = ABSENT
    value: Maybe[str] = ABSENT
    placeholder: Maybe[str] = ABSENT


type Component = ActionRow | Button | SelectMenu | TextInput | Unknown

COMPONENT_TYPE = EnumType(ComponentType, forward_compatible=True)

COMPONENT = UnionType(
    "Component",
    "type",
    {
        ComponentType.ACTION_ROW: lambda: ACTION_ROW,
        ComponentType.BUTTON: lambda: BUTTON,
        ComponentType.SELECT_MENU: lambda: SELECT_MENU,
        ComponentType.TEXT_INPUT: lambda: TEXT_INPUT,
    },
    forward_compatible=True,
)

ACTION_ROW = Schema(
    "ActionRow",
    ActionRow,
    [
        required("type", COMPONENT_TYPE),
        required("components", ArrayOf(COMPONENT)),
    ],
)

BUTTON = Schema(
    "Button",
    Button,
    [
        required("type", COMPONENT_TYPE),
        required("style", EnumType(ButtonStyle)),
        optional("label", STRING),
        optional("emoji", RecordType(EMOJI)),
        optional("custom_id", STRING),
        optional("url", STRING),
        optional("disabled", BOOLEAN),
    ],
)

SELECT_OPTION = Schema(
    "SelectOption",
    SelectOption,
    [
        required("label", STRING),
        required("value", STRING),
        optional("description", STRING),
        optional("emoji", RecordType(EMOJI)),
        optional("default", BOOLEAN),
    ],
)

SELECT_MENU = Schema(
    "SelectMenu",
    SelectMenu,
    [
        required("type", COMPONENT_TYPE),
        required("custom_id", STRING),
        required("options", ArrayOf(RecordType(SELECT_OPTION))),
        optional("placeholder", STRING),
        optional("min_values", INTEGER),
        optional("max_values", INTEGER),
        optional("disabled", BOOLEAN),
    ],
)

TEXT_INPUT = Schema(
    "TextInput",
    TextInput,
    [
        required("type", COMPONENT_TYPE),
        required("custom_id", STRING),
        required("style", EnumType(TextInputStyle)),
        required("label", STRING),
        optional("min_length", INTEGER),
        optional("max_length", INTEGER),
        optional("required", BOOLEAN),
        optional("value", STRING),
        optional("placeholder", STRING),
    ],
)
