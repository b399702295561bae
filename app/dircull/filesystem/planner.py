"""Eviction planning: choosing which files to delete.

The planner prefers the oldest files. It sorts the eligible files by
modification time and takes the shortest oldest-first prefix whose total
size reaches the number of bytes to free. If even all eligible files are
not enough, the whole eligible set is planned and the remaining deficit
stays unresolved.
"""

import logging
from collections.abc import Sequence

from dircull.filesystem.models import DeletionPlan, FileEntry

logger = logging.getLogger(__name__)


def sort_oldest_first(entries: Sequence[FileEntry]) -> list[FileEntry]:
    """Return a new list of entries ordered by modification time, oldest first.

    The sort is stable: entries with equal modification times keep their
    scan order.
    """
    return sorted(entries, key=lambda entry: entry.modified_at)


def plan_evictions(
    eligible: Sequence[FileEntry],
    size_to_free: int,
    log: logging.Logger | None = None,
) -> DeletionPlan:
    """Select the minimal oldest-first prefix that frees enough space.

    The input sequence is not modified.

    Args:
        eligible: Files that may be deleted.
        size_to_free: Number of bytes that must be freed.
        log: Logger for diagnostics (defaults to the module logger).

    Returns:
        DeletionPlan with the chosen files in deletion order.
    """
    log = log or logger
    if size_to_free <= 0:
        return DeletionPlan(size_to_free=0)

    ordered = sort_oldest_first(eligible)
    freed = 0
    cursor = 0
    while cursor < len(ordered) and freed < size_to_free:
        freed += ordered[cursor].size
        cursor += 1

    plan = DeletionPlan(entries=tuple(ordered[:cursor]), size_to_free=size_to_free)
    if not plan.is_sufficient:
        log.warning(
            "Eligible files total %d bytes, %d bytes short of the %d bytes to free",
            freed,
            size_to_free - freed,
            size_to_free,
        )
    return plan
