"""Field presence: policies and the absent/null sentinels.

A wire key can be in one of three states:
- absent: the key does not appear in the payload (``ABSENT``)
- present-null: the key appears with ``null`` (``NULL``)
- present-value: the key carries a concrete value

INVARIANT: ``ABSENT`` and ``NULL`` are distinct singletons and neither is
``None``. Collapsing them would lose partial-update semantics.
"""

from __future__ import annotations

from enum import Enum, StrEnum
from typing import Any, Final


class Absent(Enum):
    """Sentinel type for a key that was never sent."""

    ABSENT = "absent"

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


class Null(Enum):
    """Sentinel type for a key that was sent as ``null``."""

    NULL = "null"

    def __repr__(self) -> str:
        return "NULL"

    def __bool__(self) -> bool:
        return False


ABSENT: Final = Absent.ABSENT
NULL: Final = Null.NULL

type Maybe[T] = T | Absent
type MaybeNull[T] = T | Null | Absent
type Nullable[T] = T | Null


class Presence(StrEnum):
    """Per-field rule for whether a key may be absent or null."""

    REQUIRED = "required"
    NULLABLE = "nullable"
    OPTIONAL = "optional"
    OPTIONAL_NULLABLE = "optional-nullable"

    @property
    def allows_absent(self) -> bool:
        return self in (Presence.OPTIONAL, Presence.OPTIONAL_NULLABLE)

    @property
    def allows_null(self) -> bool:
        return self in (Presence.NULLABLE, Presence.OPTIONAL_NULLABLE)


class FieldState(StrEnum):
    """Observed state of a decoded field value."""

    ABSENT = "absent"
    NULL = "null"
    VALUE = "value"


def state_of(value: Any) -> FieldState:
    """Classify a field value by presence state."""
    if value is ABSENT:
        return FieldState.ABSENT
    if value is NULL:
        return FieldState.NULL
    return FieldState.VALUE


def is_set(value: Any) -> bool:
    """True when *value* is a concrete value (neither absent nor null)."""
    return value is not ABSENT and value is not NULL
