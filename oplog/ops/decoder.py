from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any, Optional

from bson.errors import InvalidBSON

from ..config import DecoderConfig
from ..errors import InvalidOperation, MissingField, UnknownOperation
from .fields import (
    clone_document,
    derive_uid,
    get_array,
    get_document,
    get_str,
    get_timestamp,
    position_uid,
    to_datetime,
)
from .models import ApplyOps, Command, Delete, Insert, Noop, Operation, Update

BATCH_FIELD = "applyOps"


class OperationDecoder:
    """
    Converts raw oplog documents into ``Operation`` values.

    The decoder is stateless once constructed: no I/O, no logging, no shared
    mutable state. One instance can serve any number of threads.

    Any document is accepted, so every step may fail. Failures are raised as
    ``DecodeError`` subclasses and nothing else:

    - ``MissingField``: a required field is absent or has the wrong type
    - ``UnknownOperation``: the ``op`` tag is not one of n/i/u/d/c
    - ``InvalidOperation``: a value that must be a record is not one

    Decoding is all-or-nothing; there are no partial results.

    Usage:
        decoder = OperationDecoder(DecoderConfig(require_noop_session=True))
        op = decoder.decode({
            "ts": Timestamp(1479561394, 0),
            "op": "i",
            "ns": "foo.bar",
            "o": {"foo": "bar"},
            "lsid": {"uid": Binary(b"...", 4)},
        })
    """

    def __init__(self, config: Optional[DecoderConfig] = None) -> None:
        self.config = config or DecoderConfig()

    def decode(self, document: Any) -> Operation:
        """
        Decode a single oplog document.

        Raises:
            DecodeError: If the document is not a valid operation
        """
        try:
            return self._decode(document, depth=0)
        except RecursionError as exc:
            raise InvalidOperation("Document nesting is too deep to decode") from exc
        except InvalidBSON as exc:
            raise InvalidOperation(f"Document is not valid BSON: {exc}") from exc

    def _decode(self, document: Any, depth: int) -> Operation:
        if not isinstance(document, Mapping):
            raise InvalidOperation(f"Expected a document, got {type(document).__name__}")

        tag = get_str(document, "op")

        if tag == "n":
            return self._noop(document)
        elif tag == "i":
            return self._insert(document)
        elif tag == "u":
            return self._update(document)
        elif tag == "d":
            return self._delete(document)
        elif tag == "c":
            return self._command(document, depth)
        raise UnknownOperation(tag)

    def _noop(self, document: Mapping[str, Any]) -> Noop:
        position = get_timestamp(document)

        # "o" is not always a document for no-ops
        message = None
        payload = document.get("o")
        if isinstance(payload, Mapping):
            msg = payload.get("msg")
            if isinstance(msg, str):
                message = msg

        # Server-generated no-ops carry no session; fall back to the log position
        if "lsid" in document or self.config.require_noop_session:
            uid = derive_uid(document)
        else:
            uid = position_uid(position)

        return Noop(
            uid=uid,
            timestamp=to_datetime(position),
            position=position,
            message=message,
        )

    def _insert(self, document: Mapping[str, Any]) -> Insert:
        position = get_timestamp(document)
        namespace = get_str(document, "ns", role="namespace")
        payload = get_document(document, "o", role="document")

        return Insert(
            uid=derive_uid(document),
            timestamp=to_datetime(position),
            position=position,
            namespace=namespace,
            document=clone_document(payload),
        )

    def _update(self, document: Mapping[str, Any]) -> Update:
        position = get_timestamp(document)
        namespace = get_str(document, "ns", role="namespace")
        update = get_document(document, "o", role="update")
        query = get_document(document, "o2", role="query")

        return Update(
            uid=derive_uid(document),
            timestamp=to_datetime(position),
            position=position,
            namespace=namespace,
            query=clone_document(query),
            update=clone_document(update),
        )

    def _delete(self, document: Mapping[str, Any]) -> Delete:
        position = get_timestamp(document)
        namespace = get_str(document, "ns", role="namespace")
        query = get_document(document, "o", role="query")

        return Delete(
            uid=derive_uid(document),
            timestamp=to_datetime(position),
            position=position,
            namespace=namespace,
            query=clone_document(query),
        )

    def _command(self, document: Mapping[str, Any], depth: int) -> Command | ApplyOps:
        """
        Return a command, or an applyOps batch when the command document holds
        a non-empty ``applyOps`` array.
        """
        position = get_timestamp(document)
        namespace = get_str(document, "ns", role="namespace")
        payload = get_document(document, "o", role="command")
        uid = derive_uid(document)

        try:
            batch = get_array(payload, BATCH_FIELD, path=f"o.{BATCH_FIELD}")
        except MissingField:
            batch = ()

        if batch:
            return ApplyOps(
                uid=uid,
                timestamp=to_datetime(position),
                position=position,
                namespace=namespace,
                operations=tuple(self._decode_batch(batch, depth + 1)),
            )

        return Command(
            uid=uid,
            timestamp=to_datetime(position),
            position=position,
            namespace=namespace,
            command=clone_document(payload),
        )

    def _decode_batch(self, batch: Sequence[Any], depth: int) -> Iterator[Operation]:
        # Each element is a full oplog record with its own ts/ns/lsid
        if depth > self.config.max_batch_depth:
            raise InvalidOperation(
                f"{BATCH_FIELD} nesting exceeds {self.config.max_batch_depth} levels"
            )
        for index, element in enumerate(batch):
            if not isinstance(element, Mapping):
                raise InvalidOperation(
                    f"{BATCH_FIELD}[{index}] is not a document: {type(element).__name__}",
                    index=index,
                )
            yield self._decode(element, depth)


_default_decoder = OperationDecoder()


def decode(document: Any) -> Operation:
    """Decode a single oplog document with the default configuration."""
    return _default_decoder.decode(document)
