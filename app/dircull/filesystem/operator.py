"""File deletion operator.

Carries out a deletion plan with dry-run support. Every file is handled
independently: a failure is logged and recorded, and the remaining
files are still processed.
"""

import logging
from pathlib import Path

from dircull.filesystem.models import DeletionPlan, FileActionResult, FileEntry

logger = logging.getLogger(__name__)


class FileOperator:
    """Handles deletion of planned files.

    Attributes:
        _dry_run: If True, simulate deletions without modifying the filesystem.
    """

    def __init__(self, dry_run: bool = False, *, log: logging.Logger | None = None) -> None:
        """Initialize the FileOperator.

        Args:
            dry_run: If True, report what would be deleted without deleting.
            log: Logger for deletion outcomes (defaults to the module logger).
        """
        self._dry_run = dry_run
        self._log = log or logger

    @property
    def dry_run(self) -> bool:
        """Whether deletions are only simulated."""
        return self._dry_run

    def delete(self, plan: DeletionPlan) -> list[FileActionResult]:
        """Delete the planned files in plan order and return results.

        Args:
            plan: Deletion plan to carry out.

        Returns:
            List of FileActionResult, one per planned file.
        """
        if self._dry_run and plan.entries:
            self._log.info("Planned operations:")
        return [self._delete_single(entry) for entry in plan.entries]

    def _delete_single(self, entry: FileEntry) -> FileActionResult:
        """Delete a single file.

        Only files are removed. A path that no longer exists, or that has
        been replaced by a directory since the scan, is reported as failed.

        Args:
            entry: Planned file.

        Returns:
            FileActionResult indicating success or failure.
        """
        path = entry.path
        if self._dry_run:
            self._log.info("Dry-run: would delete %s", path)
            return FileActionResult(path=path, size=entry.size, success=True, dry_run=True)

        target = Path(path)
        try:
            if target.is_dir() and not target.is_symlink():
                return self._failed(entry, f"Path is a directory: {path}")
            target.unlink()
        except FileNotFoundError:
            return self._failed(entry, f"Path does not exist: {path}")
        except OSError as e:
            return self._failed(entry, str(e))

        self._log.info("Deleted file: %s", path)
        return FileActionResult(path=path, size=entry.size, success=True)

    def _failed(self, entry: FileEntry, error: str) -> FileActionResult:
        self._log.warning("Could not delete %s: %s", entry.path, error)
        return FileActionResult(path=entry.path, size=entry.size, success=False, error=error)
