from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Optional

from .config import ReaderConfig
from .errors import DecodeError, StreamError
from .ops.decoder import OperationDecoder
from .ops.metrics import UNKNOWN_KIND, observe_decode, observe_decode_error
from .ops.models import Operation
from .policy import ErrorPolicy

logger = logging.getLogger(__name__)


class OplogReader:
    """
    Applies the decoder to a stream of oplog documents supplied by the caller.

    The OplogReader is a control-flow abstraction, not a tailing cursor.
    It coordinates:
    - Decoding each document in source order
    - The per-document error policy
    - Delivery to user code

    It deliberately avoids connections, position tracking and retries. Where
    documents come from (a tailable cursor, a change stream, a dump file) is
    the caller's concern.

    Error policies:
    - ErrorPolicy.RAISE: the first malformed document raises StreamError
    - ErrorPolicy.SKIP: malformed documents are logged, counted and skipped

    Usage:
        reader = OplogReader(ReaderConfig(error_policy=ErrorPolicy.SKIP))

        # Option 1: Iterator
        for op in reader.iter_operations(cursor):
            ...

        # Option 2: Template method
        def handler(op: Operation) -> None:
            ...

        reader.run(cursor, handler=handler)
    """

    def __init__(self, config: Optional[ReaderConfig] = None) -> None:
        self.config = config or ReaderConfig()
        self._decoder = OperationDecoder(self.config.decoder)
        self.skipped = 0

    def read(self, document: Any, offset: int = 0) -> Optional[Operation]:
        """
        Decode one document under the configured error policy.

        Args:
            document: Raw oplog document
            offset: Position of the document in its stream, used in logs and errors

        Returns:
            The decoded Operation, or None if it was skipped

        Raises:
            StreamError: If decoding fails and the policy is RAISE
        """
        start = time.monotonic()
        try:
            op = self._decoder.decode(document)
        except DecodeError as exc:
            observe_decode(UNKNOWN_KIND, "error", time.monotonic() - start)
            observe_decode_error(type(exc).__name__)
            if self.config.error_policy == ErrorPolicy.SKIP:
                self.skipped += 1
                logger.warning("Skipping oplog document at offset %d: %s", offset, exc)
                return None
            raise StreamError(offset, exc) from exc

        observe_decode(op.kind.value, "success", time.monotonic() - start)
        logger.debug("Decoded %s", op)
        return op

    def iter_operations(self, documents: Iterable[Any]) -> Iterator[Operation]:
        """
        Yield decoded operations in source order.

        Skipped documents produce nothing; under RAISE the first failure
        ends iteration with StreamError.
        """
        for offset, document in enumerate(documents):
            op = self.read(document, offset)
            if op is not None:
                yield op

    def run(
        self,
        documents: Iterable[Any],
        *,
        handler: Callable[[Operation], None],
    ) -> int:
        """
        Template-method runner: decode each document, then handler(op).

        - Does not retry
        - Does not swallow handler exceptions

        Returns:
            Number of operations delivered to the handler
        """
        delivered = 0
        for op in self.iter_operations(documents):
            handler(op)
            delivered += 1
        return delivered
