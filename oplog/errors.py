from __future__ import annotations

from enum import Enum
from typing import Optional


class OplogError(Exception):
    """Base exception for oplog errors."""


class DecodeError(OplogError):
    """A document could not be decoded into an operation."""


class FieldAccess(str, Enum):
    NOT_PRESENT = "not_present"
    UNEXPECTED_TYPE = "unexpected_type"


class UnknownOperation(DecodeError):
    """The op tag held a value outside the recognized set."""

    def __init__(self, tag: str) -> None:
        super().__init__(f"Unknown operation tag: {tag!r}")
        self.tag = tag


class MissingField(DecodeError):
    """
    A required field was absent or had the wrong type for its role.

    ``field`` is a dotted path relative to the record being decoded
    (e.g. ``"lsid.uid"``); ``role`` names what the value was going to be used
    for (``"query"``, ``"update"``, ...) when that differs from the key.
    """

    def __init__(
        self,
        field: str,
        reason: FieldAccess = FieldAccess.NOT_PRESENT,
        *,
        role: Optional[str] = None,
        expected: Optional[str] = None,
    ) -> None:
        detail = "is not present" if reason == FieldAccess.NOT_PRESENT else f"is not a {expected or 'valid value'}"
        label = f"{field!r} ({role})" if role else repr(field)
        super().__init__(f"Field {label} {detail}")
        self.field = field
        self.reason = reason
        self.role = role
        self.expected = expected


class InvalidOperation(DecodeError):
    """A value expected to be an oplog record was not one."""

    def __init__(self, message: str, *, index: Optional[int] = None) -> None:
        super().__init__(message)
        self.index = index


class StreamError(OplogError):
    """A document in a stream failed to decode under the RAISE policy."""

    def __init__(self, offset: int, error: DecodeError) -> None:
        super().__init__(f"Document at offset {offset} failed to decode: {error}")
        self.offset = offset
        self.error = error
