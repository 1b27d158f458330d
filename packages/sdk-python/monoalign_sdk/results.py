"""
Operation Results
=================

Value types returned by every monoalign flow. Flows never exit the process;
the CLI maps an OperationResult to an exit code in one place.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


class ChangeAction(str, Enum):
    """What happened to one dependency entry."""

    ADD = "add"
    UPDATE = "update"
    REMOVE = "remove"


@dataclass(frozen=True)
class ChangeRecord:
    """
    One previewed or applied manifest change.

    Attributes:
        workspace: Workspace name
        path: Workspace directory
        bucket: Manifest key affected (dependency bucket, or "version")
        after: New value (None for removals)
        before: Previous value (None for additions)
        action: add, update or remove
    """

    workspace: str
    path: Path
    bucket: str
    after: Optional[str]
    before: Optional[str] = None
    action: ChangeAction = ChangeAction.UPDATE


class OperationStatus(str, Enum):
    """Outcome of a flow."""

    SUCCESS = "success"
    NOOP = "noop"
    CANCELLED = "cancelled"
    ERROR = "error"


@dataclass
class OperationResult:
    """
    Result of a user-facing flow.

    Attributes:
        status: Overall outcome
        message: Short summary for display
        changes: Change records that were applied (or previewed, for dry runs)
        affected_paths: Workspace directories that may need an install
        dry_run: Whether nothing was written
    """

    status: OperationStatus
    message: str = ""
    changes: List[ChangeRecord] = field(default_factory=list)
    affected_paths: List[Path] = field(default_factory=list)
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return self.status in (OperationStatus.SUCCESS, OperationStatus.NOOP)

    @classmethod
    def noop(cls, message: str) -> "OperationResult":
        return cls(status=OperationStatus.NOOP, message=message)

    @classmethod
    def cancelled(cls, message: str = "Operation cancelled") -> "OperationResult":
        return cls(status=OperationStatus.CANCELLED, message=message)


def unique_paths(paths) -> List[Path]:
    """De-duplicate paths keeping first-seen order."""
    seen = set()
    result: List[Path] = []
    for path in paths:
        path = Path(path)
        if path not in seen:
            seen.add(path)
            result.append(path)
    return result
