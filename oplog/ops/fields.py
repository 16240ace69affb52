"""
Fallible projections over raw oplog documents.

Every accessor either returns a value of the requested BSON type or raises
``MissingField`` naming the field, mirroring the typed getters of a BSON
document (``get_str``, ``get_document``, ...).
"""
from __future__ import annotations

import base64
import struct
import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Optional

from bson.timestamp import Timestamp

from ..errors import FieldAccess, MissingField

_MISSING = object()


def _lookup(
    document: Mapping[str, Any],
    key: str,
    path: Optional[str],
    role: Optional[str],
) -> Any:
    value = document.get(key, _MISSING)
    if value is _MISSING:
        raise MissingField(path or key, FieldAccess.NOT_PRESENT, role=role)
    return value


def _mismatch(key: str, path: Optional[str], role: Optional[str], expected: str) -> MissingField:
    return MissingField(path or key, FieldAccess.UNEXPECTED_TYPE, role=role, expected=expected)


def get_str(
    document: Mapping[str, Any],
    key: str,
    *,
    path: Optional[str] = None,
    role: Optional[str] = None,
) -> str:
    value = _lookup(document, key, path, role)
    if not isinstance(value, str):
        raise _mismatch(key, path, role, "string")
    return value


def get_document(
    document: Mapping[str, Any],
    key: str,
    *,
    path: Optional[str] = None,
    role: Optional[str] = None,
) -> Mapping[str, Any]:
    value = _lookup(document, key, path, role)
    if not isinstance(value, Mapping):
        raise _mismatch(key, path, role, "document")
    return value


def get_array(
    document: Mapping[str, Any],
    key: str,
    *,
    path: Optional[str] = None,
    role: Optional[str] = None,
) -> list[Any] | tuple[Any, ...]:
    value = _lookup(document, key, path, role)
    if not isinstance(value, (list, tuple)):
        raise _mismatch(key, path, role, "array")
    return value


def get_timestamp(
    document: Mapping[str, Any],
    key: str = "ts",
    *,
    path: Optional[str] = None,
) -> Timestamp:
    value = _lookup(document, key, path, "timestamp")
    if not isinstance(value, Timestamp):
        raise _mismatch(key, path, "timestamp", "timestamp")
    return value


def get_binary(
    document: Mapping[str, Any],
    key: str,
    *,
    path: Optional[str] = None,
    role: Optional[str] = None,
) -> bytes:
    """
    Return the raw bytes of a binary field.

    Accepts ``bson.binary.Binary`` of any subtype (it subclasses ``bytes``),
    plain ``bytes`` and ``uuid.UUID``, which is what a subtype 4 binary decodes
    to when the caller's codec options set a UUID representation.
    """
    value = _lookup(document, key, path, role)
    if isinstance(value, uuid.UUID):
        return value.bytes
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise _mismatch(key, path, role, "binary")


def clone_document(document: Mapping[str, Any]) -> dict[str, Any]:
    """
    Copy a (possibly nested) document into plain dicts and lists.

    Key order is preserved. Scalars are shared, BSON scalar types being immutable.
    """
    return {key: _clone_value(value) for key, value in document.items()}


def _clone_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return clone_document(value)
    if isinstance(value, (list, tuple)):
        return [_clone_value(item) for item in value]
    return value


def to_datetime(position: Timestamp) -> datetime:
    """
    Convert a log position into a UTC datetime.

    Only the seconds component contributes; the ordinal counts operations
    within that second and is not a sub-second offset. It stays available on
    the operation's ``position``.
    """
    return datetime.fromtimestamp(position.time, tz=timezone.utc)


def encode_uid(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def derive_uid(document: Mapping[str, Any]) -> str:
    """Base64 of the session id bytes at ``lsid.uid``."""
    lsid = get_document(document, "lsid", role="session")
    raw = get_binary(lsid, "uid", path="lsid.uid", role="session")
    if not raw:
        raise _mismatch("uid", "lsid.uid", "session", "non-empty binary")
    return encode_uid(raw)


def position_uid(position: Timestamp) -> str:
    """Base64 of the 8-byte big-endian (seconds, ordinal) log position."""
    return encode_uid(struct.pack(">II", position.time, position.inc))
