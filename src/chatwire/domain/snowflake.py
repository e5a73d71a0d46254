"""Snowflake identifiers.

Snowflakes are unsigned 64-bit integers. On the wire they travel as
decimal strings because many JSON consumers store numbers as IEEE
doubles and lose precision above 2**53.

INVARIANT: A Snowflake always encodes to a string.
"""

from __future__ import annotations

import re
from typing import Any

SNOWFLAKE_MAX = 2**64 - 1
SAFE_INTEGER_MAX = 2**53 - 1

_DIGITS = re.compile(r"^[0-9]{1,20}$")


class Snowflake(int):
    """A 64-bit unsigned identifier."""

    __slots__ = ()

    def __new__(cls, value: int) -> Snowflake:
        if isinstance(value, bool) or not isinstance(value, int):
            msg = f"Snowflake requires an int, got {type(value).__name__}"
            raise TypeError(msg)
        if not 0 <= value <= SNOWFLAKE_MAX:
            msg = f"Snowflake out of range: {value}"
            raise ValueError(msg)
        return super().__new__(cls, value)

    @classmethod
    def parse(cls, raw: Any, *, allow_numeric: bool = True) -> Snowflake:
        """Parse a wire value into a Snowflake.

        Accepts a string of digits (the primary form) or, when
        *allow_numeric* is set, a JSON integer within the 53-bit
        safe-integer range (legacy form).

        Raises:
            ValueError: If *raw* is not an acceptable identifier.
        """
        if isinstance(raw, str):
            if not _DIGITS.fullmatch(raw):
                msg = f"not a decimal identifier: {raw!r}"
                raise ValueError(msg)
            value = int(raw)
            if value > SNOWFLAKE_MAX:
                msg = f"identifier exceeds 64 bits: {raw}"
                raise ValueError(msg)
            return cls(value)
        if allow_numeric and isinstance(raw, int) and not isinstance(raw, bool):
            if not 0 <= raw <= SAFE_INTEGER_MAX:
                msg = f"numeric identifier outside the safe-integer range: {raw}"
                raise ValueError(msg)
            return cls(raw)
        msg = f"identifier must be a digit string, got {raw!r}"
        raise ValueError(msg)

    def to_wire(self) -> str:
        return int.__repr__(self)

    def __repr__(self) -> str:
        return f"Snowflake({int.__repr__(self)})"

    def __str__(self) -> str:
        return int.__repr__(self)
