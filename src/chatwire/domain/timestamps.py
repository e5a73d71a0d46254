"""ISO-8601 timestamp parsing and formatting.

Wire timestamps always carry a UTC offset, e.g.
``2022-03-01T18:04:05.123000+00:00``. A trailing ``Z`` is accepted.
"""

from __future__ import annotations

import re
from datetime import datetime

_ISO_8601 = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{1,6})?(Z|[+-]\d{2}:\d{2})$"
)


def parse_timestamp(text: str) -> datetime:
    """Parse a wire timestamp into an aware datetime.

    Raises:
        ValueError: If *text* is not ISO-8601 with an offset.
    """
    if not _ISO_8601.fullmatch(text):
        msg = f"not an ISO-8601 timestamp with offset: {text!r}"
        raise ValueError(msg)
    return datetime.fromisoformat(text)


def format_timestamp(value: datetime) -> str:
    """Format an aware datetime in the fixed wire form (microsecond precision)."""
    if value.tzinfo is None or value.utcoffset() is None:
        msg = "timestamps must be timezone-aware"
        raise ValueError(msg)
    return value.isoformat(timespec="microseconds")
