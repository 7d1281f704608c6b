"""
File Change Tracker - Append-only ledger of file mutations made by agents.

Used for diff review after a pipeline run. The ledger is history, not a
latest-state index: the same path may appear many times.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class ChangeOperation(str, Enum):
    """Kind of file mutation."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass
class FileChange:
    """A single recorded mutation."""
    file_path: str
    operation: ChangeOperation
    old_content: Optional[str] = None
    new_content: Optional[str] = None
    timestamp: int = 0


@dataclass
class FileDiff:
    """Before/after pair for one recorded change."""
    before: str
    after: str


def _now_ms() -> int:
    return int(time.time() * 1000)


class FileChangeTracker:
    """
    Records file creates, updates and deletes.

    The operation is derived, never supplied: prior content at record time
    means ``update``, no prior content means ``create``. Growth is unbounded
    for the lifetime of an editing session.
    """

    def __init__(self):
        self._changes: List[FileChange] = []

    def record_change(
        self,
        file_path: str,
        new_content: str,
        old_content: Optional[str] = None
    ) -> FileChange:
        """Record a write; ``update`` iff ``old_content`` is non-empty."""
        operation = ChangeOperation.UPDATE if old_content else ChangeOperation.CREATE
        change = FileChange(
            file_path=file_path,
            operation=operation,
            old_content=old_content,
            new_content=new_content,
            timestamp=_now_ms(),
        )
        self._changes.append(change)
        return change

    def record_delete(self, file_path: str, old_content: str) -> FileChange:
        change = FileChange(
            file_path=file_path,
            operation=ChangeOperation.DELETE,
            old_content=old_content,
            timestamp=_now_ms(),
        )
        self._changes.append(change)
        return change

    def get_changes(self) -> List[FileChange]:
        return list(self._changes)

    def get_changes_for_file(self, file_path: str) -> List[FileChange]:
        """Full history for one path, oldest first."""
        return [c for c in self._changes if c.file_path == file_path]

    def get_diff_summary(self) -> str:
        """One line per change, plus a line count for creates and updates."""
        summary = ""
        for change in self._changes:
            summary += f"{change.operation.value.upper()}: {change.file_path}\n"
            if change.operation in (ChangeOperation.CREATE, ChangeOperation.UPDATE):
                lines = len(change.new_content.split("\n")) if change.new_content else 0
                summary += f"  Lines: {lines}\n"
        return summary

    def get_diff_for_file(self, file_path: str) -> Optional[FileDiff]:
        """
        Diff of the FIRST change recorded for ``file_path``.

        Later changes to the same path are not reflected here; use
        ``get_changes_for_file`` for the full history.
        """
        change = next((c for c in self._changes if c.file_path == file_path), None)
        if change is None:
            return None
        return FileDiff(
            before=change.old_content or "",
            after=change.new_content or "",
        )

    def clear(self) -> None:
        """Discard all history."""
        self._changes = []

    def __len__(self) -> int:
        return len(self._changes)
