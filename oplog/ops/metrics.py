from __future__ import annotations

from ..metrics.registry import (
    OPLOG_DECODE_ERRORS_TOTAL,
    OPLOG_DECODE_LATENCY_SECONDS,
    OPLOG_DECODE_TOTAL,
)

UNKNOWN_KIND = "unknown"


def observe_decode(kind: str, status: str, latency_s: float) -> None:
    """
    Record one decode attempt.

    ``kind`` is the decoded ``OperationKind`` value, or ``UNKNOWN_KIND`` when
    decoding failed before a variant was produced.
    """
    OPLOG_DECODE_TOTAL.labels(kind=kind, status=status).inc()
    OPLOG_DECODE_LATENCY_SECONDS.labels(kind=kind).observe(latency_s)


def observe_decode_error(error: str) -> None:
    OPLOG_DECODE_ERRORS_TOTAL.labels(error=error).inc()
