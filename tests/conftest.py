from __future__ import annotations

import base64
import hashlib
import uuid
from collections.abc import Callable
from typing import Any

import pytest
from bson.binary import Binary
from bson.int64 import Int64
from bson.timestamp import Timestamp

SESSION_ID = uuid.UUID("6f1c5a84-3b5e-4a53-9a3e-2d0f5c1e7b90")
SESSION_UID_BYTES = hashlib.sha256(b"oplog-test-user@admin").digest()


@pytest.fixture
def session_uid() -> str:
    """The uid every record built by make_record is expected to decode to."""
    return base64.b64encode(SESSION_UID_BYTES).decode("ascii")


@pytest.fixture
def lsid() -> dict[str, Any]:
    """
    A logical session id as the server writes it: a subtype 4 ``id`` and a
    generic-subtype ``uid`` holding the hashed user.
    """
    return {
        "id": Binary(SESSION_ID.bytes, 4),
        "uid": Binary(SESSION_UID_BYTES),
    }


@pytest.fixture
def make_record(lsid: dict[str, Any]) -> Callable[..., dict[str, Any]]:
    """
    Factory fixture building oplog records.

    Usage:
        record = make_record("i", ns="foo.bar", o={"foo": "bar"})
        record = make_record("n", session=False, o={"msg": "initiating set"})
    """

    def _make(
        op: str,
        *,
        seconds: int = 1479561394,
        ordinal: int = 0,
        session: bool = True,
        **fields: Any,
    ) -> dict[str, Any]:
        record: dict[str, Any] = {
            "ts": Timestamp(seconds, ordinal),
            "t": Int64(2),
            "h": Int64(-1742072865587022793),
            "v": 2,
            "op": op,
        }
        if session:
            record["lsid"] = lsid
        record.update(fields)
        return record

    return _make
