from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Optional, Union

from bson.timestamp import Timestamp


class OperationKind(str, Enum):
    NOOP = "noop"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    COMMAND = "command"
    APPLY_OPS = "apply_ops"


@dataclass(frozen=True)
class Noop:
    """
    A no-op as inserted periodically by MongoDB or used to initiate a replica set.
    """
    kind: ClassVar[OperationKind] = OperationKind.NOOP

    uid: str
    timestamp: datetime
    position: Timestamp
    message: Optional[str] = None

    def __str__(self) -> str:
        return f"No-op #{self.uid} at {self.timestamp}: {self.message!r}"


@dataclass(frozen=True)
class Insert:
    """
    An insert of a document into a specific database and collection.
    """
    kind: ClassVar[OperationKind] = OperationKind.INSERT

    uid: str
    timestamp: datetime
    position: Timestamp
    namespace: str  # "<database>.<collection>", verbatim
    document: dict[str, Any]

    def __str__(self) -> str:
        return f"Insert #{self.uid} into {self.namespace} at {self.timestamp}: {self.document}"


@dataclass(frozen=True)
class Update:
    """
    An update of the document(s) matching ``query`` in a namespace.
    """
    kind: ClassVar[OperationKind] = OperationKind.UPDATE

    uid: str
    timestamp: datetime
    position: Timestamp
    namespace: str
    query: dict[str, Any]
    update: dict[str, Any]

    def __str__(self) -> str:
        return (
            f"Update #{self.uid} {self.namespace} with {self.query} "
            f"at {self.timestamp}: {self.update}"
        )


@dataclass(frozen=True)
class Delete:
    """
    The deletion of the document(s) matching ``query`` in a namespace.
    """
    kind: ClassVar[OperationKind] = OperationKind.DELETE

    uid: str
    timestamp: datetime
    position: Timestamp
    namespace: str
    query: dict[str, Any]

    def __str__(self) -> str:
        return f"Delete #{self.uid} from {self.namespace} at {self.timestamp}: {self.query}"


@dataclass(frozen=True)
class Command:
    """
    A command such as the creation or deletion of a collection.
    """
    kind: ClassVar[OperationKind] = OperationKind.COMMAND

    uid: str
    timestamp: datetime
    position: Timestamp
    namespace: str  # usually "<database>.$cmd"
    command: dict[str, Any]

    def __str__(self) -> str:
        return f"Command #{self.uid} {self.namespace} at {self.timestamp}: {self.command}"


@dataclass(frozen=True)
class ApplyOps:
    """
    A batch of operations applied as one atomic unit.

    ``operations`` keeps the order of the source ``applyOps`` array and is
    never empty.
    """
    kind: ClassVar[OperationKind] = OperationKind.APPLY_OPS

    uid: str
    timestamp: datetime
    position: Timestamp
    namespace: str
    operations: tuple[Operation, ...]

    def __str__(self) -> str:
        return (
            f"ApplyOps #{self.uid} {self.namespace} at {self.timestamp}: "
            f"{len(self.operations)} operations"
        )


Operation = Union[Noop, Insert, Update, Delete, Command, ApplyOps]

OPERATION_TYPES: tuple[type, ...] = (Noop, Insert, Update, Delete, Command, ApplyOps)
