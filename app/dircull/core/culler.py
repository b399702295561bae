"""Run orchestration for a single culling pass.

A run goes through four strictly ordered phases: scan the directory,
filter the scan and compute how much must be freed, plan the deletions,
and execute the plan. Every fatal condition (bad root directory, invalid
pattern, unreadable metadata) is raised before the first deletion.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from dircull.core.sizes import format_size
from dircull.filesystem.matching import compile_matcher
from dircull.filesystem.models import DeletionPlan, FileActionResult
from dircull.filesystem.operator import FileOperator
from dircull.filesystem.planner import plan_evictions
from dircull.filesystem.rules import apply_rule, eligibility_rule, scope_rule, total_size
from dircull.filesystem.scanner import DirectoryScanner, canonicalize_root

if TYPE_CHECKING:
    from dircull.core.config import CullConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CullReport:
    """Summary of a culling run.

    Attributes:
        directory: Canonical directory that was culled.
        max_size: Configured size budget in bytes.
        scope_size: Total size of the in-scope files at scan time.
        size_to_free: Bytes that had to be freed to meet the budget.
        scanned_count: Number of regular files found.
        scope_count: Number of files counted toward the budget.
        eligible_count: Number of files that could be deleted.
        plan: Files chosen for deletion.
        results: Per-file outcome of executing the plan.
        dry_run: Whether deletions were only simulated.
    """

    directory: Path
    max_size: int
    scope_size: int
    size_to_free: int
    scanned_count: int = 0
    scope_count: int = 0
    eligible_count: int = 0
    plan: DeletionPlan = field(default_factory=DeletionPlan)
    results: tuple[FileActionResult, ...] = ()
    dry_run: bool = False

    @property
    def freed_bytes(self) -> int:
        """Bytes freed (or, in a dry run, bytes that would be freed)."""
        return sum(r.size for r in self.results if r.success)

    @property
    def failed_count(self) -> int:
        """Number of deletions that failed."""
        return sum(1 for r in self.results if r.failed)

    @property
    def budget_met(self) -> bool:
        """Whether the freed bytes cover the deficit."""
        return self.freed_bytes >= self.size_to_free

    def to_dict(self) -> dict[str, object]:
        """Serialize the report to a JSON-compatible dictionary."""
        return {
            "directory": str(self.directory),
            "max_size": self.max_size,
            "scope_size": self.scope_size,
            "size_to_free": self.size_to_free,
            "scanned_count": self.scanned_count,
            "scope_count": self.scope_count,
            "eligible_count": self.eligible_count,
            "dry_run": self.dry_run,
            "planned": [
                {"path": e.path, "size": e.size, "modified_at": e.modified_at}
                for e in self.plan.entries
            ],
            "results": [
                {
                    "path": r.path,
                    "size": r.size,
                    "success": r.success,
                    "error": r.error,
                    "dry_run": r.dry_run,
                }
                for r in self.results
            ],
            "freed_bytes": self.freed_bytes,
            "budget_met": self.budget_met,
        }


class Culler:
    """Runs the scan, filter, plan and execute phases for one configuration.

    Args:
        config: Validated run configuration.
        log: Logger passed to every component (defaults to the module logger).
    """

    def __init__(self, config: CullConfig, *, log: logging.Logger | None = None) -> None:
        self._config = config
        self._log = log or logger

    def run(self) -> CullReport:
        """Execute one culling pass.

        Returns:
            CullReport describing what was planned and done.

        Raises:
            ScanError: If the directory is invalid or file metadata is unreadable.
            PatternError: If a configured pattern is invalid.
        """
        config = self._config
        log = self._log

        root = canonicalize_root(config.directory)
        log.info("Culling directory: %s", root)
        log.info("Culling to size: %d (%s)", config.max_size, format_size(config.max_size))

        scope = scope_rule(
            include_only=compile_matcher(root, config.include_only, log),
            exclude=compile_matcher(root, config.exclude, log),
        )
        eligibility = eligibility_rule(
            select_for_deletion=compile_matcher(root, config.select_for_deletion, log),
            protect_from_deletion=compile_matcher(root, config.protect_from_deletion, log),
        )

        # Phase 1: scan
        files = list(DirectoryScanner(root, log=log).scan())

        # Phase 2: scope and deficit
        in_scope = apply_rule(files, scope)
        scope_size = total_size(in_scope)
        size_to_free = max(0, scope_size - config.max_size)
        log.info("Size to free: %d", size_to_free)

        if size_to_free == 0:
            return CullReport(
                directory=root,
                max_size=config.max_size,
                scope_size=scope_size,
                size_to_free=0,
                scanned_count=len(files),
                scope_count=len(in_scope),
                dry_run=config.dry_run,
            )

        deletable = apply_rule(files, eligibility)
        for entry in deletable:
            log.info("Matched file: %s", entry.path)

        # Phase 3: plan
        plan = plan_evictions(deletable, size_to_free, log)

        # Phase 4: execute
        results = FileOperator(dry_run=config.dry_run, log=log).delete(plan)

        report = CullReport(
            directory=root,
            max_size=config.max_size,
            scope_size=scope_size,
            size_to_free=size_to_free,
            scanned_count=len(files),
            scope_count=len(in_scope),
            eligible_count=len(deletable),
            plan=plan,
            results=tuple(results),
            dry_run=config.dry_run,
        )
        if not report.budget_met:
            log.warning(
                "Budget not met: %d of %d bytes freed",
                report.freed_bytes,
                size_to_free,
            )
        return report


def cull(config: CullConfig, log: logging.Logger | None = None) -> CullReport:
    """Run a single culling pass for a configuration."""
    return Culler(config, log=log).run()
