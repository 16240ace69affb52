from .registry import (
    OPLOG_DECODE_ERRORS_TOTAL,
    OPLOG_DECODE_LATENCY_SECONDS,
    OPLOG_DECODE_TOTAL,
)

__all__ = [
    "OPLOG_DECODE_TOTAL",
    "OPLOG_DECODE_ERRORS_TOTAL",
    "OPLOG_DECODE_LATENCY_SECONDS",
]
