"""Filesystem domain models for size-budget enforcement.

This module defines the immutable records that flow through a run:
scanned files, the filter rules applied to them, the deletion plan
and the per-file outcome of executing that plan.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dircull.filesystem.matching import PathMatcher


@dataclass(frozen=True, slots=True)
class FileEntry:
    """A regular file discovered during scanning.

    Metadata is captured once at scan time and is not refreshed later,
    even if the file changes before it is deleted. Two entries are the
    same file when their canonical paths are equal.

    Attributes:
        path: Canonical absolute path of the file.
        size: Size in bytes.
        modified_at: Last modification time as a POSIX timestamp.
    """

    path: str
    size: int = field(compare=False)
    modified_at: float = field(compare=False)

    def __post_init__(self) -> None:
        """Validate file entry data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.size < 0:
            msg = f"Size must be non-negative, got {self.size}"
            raise ValueError(msg)


class RuleKind(str, Enum):
    """How a file rule selects entries.

    Attributes:
        ALL: Every entry is selected.
        MATCHING: Only entries matching the pattern are selected.
        NOT_MATCHING: Only entries not matching the pattern are selected.
    """

    ALL = "all"
    MATCHING = "matching"
    NOT_MATCHING = "not_matching"


@dataclass(frozen=True, slots=True)
class FileRule:
    """Selection rule built from one of two mutually exclusive patterns.

    Used for the scope (include-only / exclude) and for eligibility
    (select-for-deletion / protect-from-deletion). A rule holds at most
    one matcher, so both patterns of a pair can never be active at once.

    Attributes:
        kind: Selection mode.
        matcher: Compiled pattern, required unless kind is ALL.
    """

    kind: RuleKind = RuleKind.ALL
    matcher: PathMatcher | None = None

    def __post_init__(self) -> None:
        """Validate that the matcher is present exactly when needed."""
        if self.kind == RuleKind.ALL and self.matcher is not None:
            msg = "A rule selecting all files cannot have a matcher"
            raise ValueError(msg)
        if self.kind != RuleKind.ALL and self.matcher is None:
            msg = f"A {self.kind.value} rule requires a matcher"
            raise ValueError(msg)

    def selects(self, entry: FileEntry) -> bool:
        """Check whether the rule selects a file entry."""
        if self.matcher is None:
            return True
        matched = self.matcher.matches(entry.path)
        return matched if self.kind == RuleKind.MATCHING else not matched


@dataclass(frozen=True, slots=True)
class DeletionPlan:
    """Ordered files chosen for deletion, oldest first.

    Attributes:
        entries: Files to delete in deletion order.
        size_to_free: Number of bytes the plan is meant to free.
    """

    entries: tuple[FileEntry, ...] = ()
    size_to_free: int = 0

    @property
    def paths(self) -> list[str]:
        """Paths of the planned files in deletion order."""
        return [entry.path for entry in self.entries]

    @property
    def planned_bytes(self) -> int:
        """Total size of all planned files."""
        return sum(entry.size for entry in self.entries)

    @property
    def is_sufficient(self) -> bool:
        """Whether deleting every planned file frees enough space."""
        return self.planned_bytes >= self.size_to_free

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True, slots=True)
class FileActionResult:
    """Result of a single file deletion.

    Attributes:
        path: Absolute path that was operated on.
        size: Scan-time size of the file in bytes.
        success: Whether the operation completed successfully.
        error: Error message if the operation failed, None otherwise.
        dry_run: Whether this was a dry-run (no actual deletion).
    """

    path: str
    size: int
    success: bool
    error: str | None = None
    dry_run: bool = False

    @property
    def failed(self) -> bool:
        """Whether the deletion was attempted and failed."""
        return not self.success
