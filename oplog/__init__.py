from .config import DecoderConfig, ReaderConfig
from .errors import (
    DecodeError,
    FieldAccess,
    InvalidOperation,
    MissingField,
    OplogError,
    StreamError,
    UnknownOperation,
)
from .ops import (
    ApplyOps,
    Command,
    Delete,
    Insert,
    Noop,
    Operation,
    OperationDecoder,
    OperationKind,
    Update,
    decode,
)
from .policy import ErrorPolicy
from .reader import OplogReader

__all__ = [
    "decode",
    "OperationDecoder",
    "OplogReader",
    "DecoderConfig",
    "ReaderConfig",
    "ErrorPolicy",
    "Operation",
    "OperationKind",
    "Noop",
    "Insert",
    "Update",
    "Delete",
    "Command",
    "ApplyOps",
    "OplogError",
    "DecodeError",
    "UnknownOperation",
    "MissingField",
    "InvalidOperation",
    "FieldAccess",
    "StreamError",
]
