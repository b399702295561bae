"""Scope and eligibility filtering of scanned files.

The scope decides which files count toward the size budget, the
eligibility decides which files may be deleted. Both are built from a
pair of mutually exclusive patterns and are applied independently to
the full scan, so a file can count toward the budget while being
protected from deletion.
"""

from collections.abc import Iterable

from dircull.core.errors import ConfigError
from dircull.filesystem.matching import PathMatcher
from dircull.filesystem.models import FileEntry, FileRule, RuleKind


def _rule_from_pair(
    matching: PathMatcher | None,
    not_matching: PathMatcher | None,
    names: tuple[str, str],
) -> FileRule:
    if matching is not None and not_matching is not None:
        msg = f"{names[0]} and {names[1]} are mutually exclusive"
        raise ConfigError(msg)
    if matching is not None:
        return FileRule(RuleKind.MATCHING, matching)
    if not_matching is not None:
        return FileRule(RuleKind.NOT_MATCHING, not_matching)
    return FileRule()


def scope_rule(
    include_only: PathMatcher | None = None,
    exclude: PathMatcher | None = None,
) -> FileRule:
    """Build the rule selecting files that count toward the budget.

    Raises:
        ConfigError: If both matchers are given.
    """
    return _rule_from_pair(include_only, exclude, ("include_only", "exclude"))


def eligibility_rule(
    select_for_deletion: PathMatcher | None = None,
    protect_from_deletion: PathMatcher | None = None,
) -> FileRule:
    """Build the rule selecting files that may be deleted.

    Raises:
        ConfigError: If both matchers are given.
    """
    return _rule_from_pair(
        select_for_deletion,
        protect_from_deletion,
        ("select_for_deletion", "protect_from_deletion"),
    )


def apply_rule(entries: Iterable[FileEntry], rule: FileRule) -> list[FileEntry]:
    """Return the entries selected by a rule, preserving their order."""
    if rule.kind == RuleKind.ALL:
        return list(entries)
    return [entry for entry in entries if rule.selects(entry)]


def total_size(entries: Iterable[FileEntry]) -> int:
    """Sum the sizes of a collection of entries."""
    return sum(entry.size for entry in entries)
