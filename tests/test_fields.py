from __future__ import annotations

import uuid
from datetime import datetime, timezone

import pytest
from bson.binary import Binary
from bson.son import SON
from bson.timestamp import Timestamp

from oplog.errors import FieldAccess, MissingField
from oplog.ops.fields import (
    clone_document,
    derive_uid,
    get_array,
    get_binary,
    get_document,
    get_str,
    get_timestamp,
    position_uid,
    to_datetime,
)


class TestAccessors:
    """Tests for the typed field accessors."""

    def test_get_str(self) -> None:
        assert get_str({"ns": "foo.bar"}, "ns") == "foo.bar"

    def test_missing_field_uses_path_and_role(self) -> None:
        with pytest.raises(MissingField) as excinfo:
            get_str({}, "msg", path="o.msg", role="message")

        err = excinfo.value
        assert err.field == "o.msg"
        assert err.role == "message"
        assert err.reason == FieldAccess.NOT_PRESENT
        assert "o.msg" in str(err)

    def test_none_is_present_but_mistyped(self) -> None:
        with pytest.raises(MissingField) as excinfo:
            get_document({"o": None}, "o")

        assert excinfo.value.reason == FieldAccess.UNEXPECTED_TYPE
        assert excinfo.value.expected == "document"

    def test_get_array_rejects_strings(self) -> None:
        assert get_array({"a": [1, 2]}, "a") == [1, 2]
        with pytest.raises(MissingField):
            get_array({"a": "12"}, "a")

    def test_get_timestamp(self) -> None:
        ts = Timestamp(1479561394, 3)

        assert get_timestamp({"ts": ts}) is ts
        with pytest.raises(MissingField) as excinfo:
            get_timestamp({"ts": datetime.now(timezone.utc)})
        assert excinfo.value.role == "timestamp"

    def test_get_binary(self) -> None:
        value = uuid.uuid4()

        assert get_binary({"b": Binary(b"\x01\x02", 0)}, "b") == b"\x01\x02"
        assert get_binary({"b": Binary(value.bytes, 4)}, "b") == value.bytes
        assert get_binary({"b": value}, "b") == value.bytes
        assert get_binary({"b": b"raw"}, "b") == b"raw"
        with pytest.raises(MissingField):
            get_binary({"b": 12}, "b")


class TestCloneDocument:
    """Tests for clone_document()."""

    def test_produces_plain_containers(self) -> None:
        source = SON([("z", SON([("inner", (1, 2))])), ("a", [SON([("k", "v")])])])

        cloned = clone_document(source)

        assert cloned == {"z": {"inner": [1, 2]}, "a": [{"k": "v"}]}
        assert list(cloned) == ["z", "a"]
        assert type(cloned["z"]) is dict
        assert type(cloned["a"][0]) is dict

    def test_does_not_share_containers(self) -> None:
        source = {"a": {"b": [1]}}

        cloned = clone_document(source)
        source["a"]["b"].append(2)

        assert cloned == {"a": {"b": [1]}}


class TestDerivations:
    """Tests for uid and timestamp derivation."""

    def test_derive_uid(self) -> None:
        assert derive_uid({"lsid": {"uid": Binary(b"\x00\x01\x02\x03")}}) == "AAECAw=="

    def test_derive_uid_requires_lsid(self) -> None:
        with pytest.raises(MissingField) as excinfo:
            derive_uid({})

        assert excinfo.value.field == "lsid"
        assert excinfo.value.role == "session"

    def test_position_uid_is_eight_bytes(self) -> None:
        # 8 bytes encode to 12 base64 characters with one padding character
        uid = position_uid(Timestamp(1, 2))

        assert uid == "AAAAAQAAAAI="

    def test_to_datetime(self) -> None:
        assert to_datetime(Timestamp(0, 9)) == datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert to_datetime(Timestamp(1479419535, 0)).timestamp() == 1479419535
