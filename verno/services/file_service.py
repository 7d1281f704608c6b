"""
File Service - Workspace file operations used by the agents.

Wraps filesystem errors in PersistenceError and, when given a
FileChangeTracker, records every successful write for diff review.
"""

import logging
from pathlib import Path
from typing import Optional

from verno.core.errors import PersistenceError
from verno.services.file_changes import FileChangeTracker


class FileService:
    """
    Creates, reads, updates and deletes files.

    Usage:
        tracker = FileChangeTracker()
        files = FileService(change_tracker=tracker)
        await files.create_file("/ws/generated/index.ts", code)
        print(tracker.get_diff_summary())
    """

    def __init__(
        self,
        change_tracker: Optional[FileChangeTracker] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.change_tracker = change_tracker
        self.logger = logger or logging.getLogger(__name__)

    async def create_file(self, file_path: str, content: str) -> None:
        """Write ``content``, creating parent directories as needed."""
        path = Path(file_path)
        old_content = self._read_existing(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Failed to create file {file_path}: {e}", path=file_path) from e

        self.logger.debug(f"Wrote {len(content)} chars to {file_path}")
        if self.change_tracker is not None:
            self.change_tracker.record_change(file_path, content, old_content)

    async def read_file(self, file_path: str) -> str:
        try:
            return Path(file_path).read_text(encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Failed to read file {file_path}: {e}", path=file_path) from e

    async def update_file(self, file_path: str, content: str) -> None:
        """Overwrite an existing file."""
        path = Path(file_path)
        old_content = self._read_existing(path)
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Failed to update file {file_path}: {e}", path=file_path) from e

        if self.change_tracker is not None:
            self.change_tracker.record_change(file_path, content, old_content)

    async def delete_file(self, file_path: str) -> None:
        path = Path(file_path)
        old_content = self._read_existing(path)
        try:
            path.unlink()
        except OSError as e:
            raise PersistenceError(f"Failed to delete file {file_path}: {e}", path=file_path) from e

        if self.change_tracker is not None:
            self.change_tracker.record_delete(file_path, old_content or "")

    def _read_existing(self, path: Path) -> Optional[str]:
        """Prior content of ``path``, or None if it cannot be read."""
        if not path.is_file():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self.logger.warning(f"Could not read prior content of {path}: {e}")
            return None
