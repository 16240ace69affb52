from .decoder import BATCH_FIELD, OperationDecoder, decode
from .models import (
    OPERATION_TYPES,
    ApplyOps,
    Command,
    Delete,
    Insert,
    Noop,
    Operation,
    OperationKind,
    Update,
)

__all__ = [
    "decode",
    "OperationDecoder",
    "BATCH_FIELD",
    "Operation",
    "OperationKind",
    "OPERATION_TYPES",
    "Noop",
    "Insert",
    "Update",
    "Delete",
    "Command",
    "ApplyOps",
]
