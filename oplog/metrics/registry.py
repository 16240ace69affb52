from prometheus_client import Counter, Histogram

OPLOG_DECODE_TOTAL = Counter(
    "oplog_decode_total",
    "Oplog documents passed through the decoder",
    ["kind", "status"],
)

OPLOG_DECODE_ERRORS_TOTAL = Counter(
    "oplog_decode_errors_total",
    "Oplog documents that failed to decode, by error class",
    ["error"],
)

OPLOG_DECODE_LATENCY_SECONDS = Histogram(
    "oplog_decode_latency_seconds",
    "Time spent decoding a single oplog document",
    ["kind"],
)
