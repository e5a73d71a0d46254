"""Codec error taxonomy.

Field-level failures are ``FieldError`` subclasses carrying a dotted
field path (``author.id``, ``mentions[2].id``), an ``ErrorKind`` and the
offending raw value. Decode and encode never stop at the first failure:
they collect every ``FieldError`` and raise one aggregated
``DecodeError`` / ``EncodeError``.

All of these are data-validation errors; none is fatal to the process.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from typing import Any, ClassVar

from pydantic import BaseModel


class ErrorKind(StrEnum):
    """Machine-readable category of a field-level failure."""

    MISSING_REQUIRED_FIELD = "missing_required_field"
    UNEXPECTED_NULL = "unexpected_null"
    TYPE_MISMATCH = "type_mismatch"
    UNKNOWN_VARIANT = "unknown_variant"
    INVALID_IDENTIFIER_FORMAT = "invalid_identifier_format"
    INVALID_TIMESTAMP_FORMAT = "invalid_timestamp_format"


class FieldIssue(BaseModel):
    """Structured, serializable report entry for one field failure."""

    model_config = {"frozen": True}

    path: str
    kind: ErrorKind
    message: str
    raw: Any = None


def join_path(prefix: str, path: str) -> str:
    """Join a parent path segment with a child path."""
    if not path:
        return prefix
    if not prefix:
        return path
    if path.startswith("["):
        return f"{prefix}{path}"
    return f"{prefix}.{path}"


def wire_type_name(raw: Any) -> str:
    """Name the JSON type of a decoded wire value."""
    if raw is None:
        return "null"
    if isinstance(raw, bool):
        return "boolean"
    if isinstance(raw, (int, float)):
        return "number"
    if isinstance(raw, str):
        return "string"
    if isinstance(raw, (list, tuple)):
        return "array"
    if isinstance(raw, dict):
        return "object"
    return type(raw).__name__


class FieldError(ValueError):
    """Base class for a failure located at one field path."""

    kind: ClassVar[ErrorKind]

    def __init__(self, path: str, message: str, *, raw: Any = None) -> None:
        self.path = path
        self.reason = message
        self.raw = raw
        super().__init__(self._format())

    def _format(self) -> str:
        where = self.path or "<root>"
        return f"{where}: {self.reason}"

    def __str__(self) -> str:
        return self._format()

    def prefixed(self, prefix: str) -> FieldError:
        """Return a copy of this error relocated under *prefix*."""
        clone = type(self).__new__(type(self))
        clone.__dict__.update(self.__dict__)
        clone.path = join_path(prefix, self.path)
        clone.args = (clone._format(),)
        return clone

    def to_issue(self) -> FieldIssue:
        return FieldIssue(path=self.path, kind=self.kind, message=self.reason, raw=self.raw)


class MissingRequiredField(FieldError):
    kind = ErrorKind.MISSING_REQUIRED_FIELD

    def __init__(self, path: str = "") -> None:
        super().__init__(path, "required field is missing")


class UnexpectedNull(FieldError):
    kind = ErrorKind.UNEXPECTED_NULL

    def __init__(self, path: str = "") -> None:
        super().__init__(path, "field does not accept null")


class TypeMismatch(FieldError):
    kind = ErrorKind.TYPE_MISMATCH

    def __init__(self, path: str, expected: str, actual: str, *, raw: Any = None) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(path, f"expected {expected}, got {actual}", raw=raw)


class UnknownVariant(FieldError):
    kind = ErrorKind.UNKNOWN_VARIANT

    def __init__(self, path: str, discriminator: Any) -> None:
        self.discriminator = discriminator
        super().__init__(path, f"unknown variant {discriminator!r}", raw=discriminator)


class InvalidIdentifierFormat(FieldError):
    kind = ErrorKind.INVALID_IDENTIFIER_FORMAT

    def __init__(self, path: str, raw: Any, reason: str = "") -> None:
        super().__init__(path, reason or f"invalid identifier {raw!r}", raw=raw)


class InvalidTimestampFormat(FieldError):
    kind = ErrorKind.INVALID_TIMESTAMP_FORMAT

    def __init__(self, path: str, raw_text: str) -> None:
        self.raw_text = raw_text
        super().__init__(path, f"invalid timestamp {raw_text!r}", raw=raw_text)


class _AggregateError(ValueError):
    """Shared shape of DecodeError and EncodeError."""

    verb: ClassVar[str] = "process"

    def __init__(self, schema: str, errors: Iterable[FieldError]) -> None:
        self.schema = schema
        self.errors: tuple[FieldError, ...] = tuple(errors)
        count = len(self.errors)
        noun = "error" if count == 1 else "errors"
        super().__init__(f"cannot {self.verb} {schema}: {count} field {noun}")

    @property
    def issues(self) -> list[FieldIssue]:
        return [err.to_issue() for err in self.errors]

    def prefixed(self, prefix: str) -> list[FieldError]:
        return [err.prefixed(prefix) for err in self.errors]


class DecodeError(_AggregateError):
    """Raised when a wire object violates its schema."""

    verb = "decode"


class EncodeError(_AggregateError):
    """Raised when a record cannot be represented on the wire."""

    verb = "encode"


class SchemaDefinitionError(TypeError):
    """Raised when a schema declaration is internally inconsistent."""
