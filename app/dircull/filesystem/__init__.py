"""Filesystem scanning, filtering, planning and deletion.

This module provides the selection-and-eviction pipeline: directory
scanning, pattern matching, scope and eligibility rules, the oldest-first
eviction planner and the deletion operator.
"""

from dircull.filesystem.matching import PathMatcher, compile_matcher
from dircull.filesystem.models import (
    DeletionPlan,
    FileActionResult,
    FileEntry,
    FileRule,
    RuleKind,
)
from dircull.filesystem.operator import FileOperator
from dircull.filesystem.planner import plan_evictions, sort_oldest_first
from dircull.filesystem.rules import apply_rule, eligibility_rule, scope_rule, total_size
from dircull.filesystem.scanner import DirectoryScanner, canonicalize_root

__all__ = [
    "DeletionPlan",
    "DirectoryScanner",
    "FileActionResult",
    "FileEntry",
    "FileOperator",
    "FileRule",
    "PathMatcher",
    "RuleKind",
    "apply_rule",
    "canonicalize_root",
    "compile_matcher",
    "eligibility_rule",
    "plan_evictions",
    "scope_rule",
    "sort_oldest_first",
    "total_size",
]
