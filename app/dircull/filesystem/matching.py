"""Glob pattern matching anchored to the target directory.

Patterns are always relative to the directory being culled, never to the
working directory of the process: the pattern is appended to the
canonical base directory and matched against canonical absolute paths.

Matching follows :mod:`fnmatch` semantics, so ``*`` and ``?`` also match
the path separator. In addition ``**/`` may match zero directories, so
``**/*.log`` matches log files at any depth including the top level.
"""

import fnmatch
import glob
import itertools
import logging
import re
from pathlib import Path

from dircull.core.errors import PatternError

logger = logging.getLogger(__name__)

_GLOBSTAR = "**/"

# Three or more consecutive stars are not a valid wildcard
_STAR_RUN = re.compile(r"\*{3,}")


class PathMatcher:
    """Compiled glob predicate bound to a base directory.

    Instances are immutable and stateless once constructed.

    Args:
        base_dir: Canonical base directory the pattern is relative to.
        pattern: Glob pattern relative to base_dir.

    Raises:
        PatternError: If the pattern syntax is invalid.
    """

    __slots__ = ("_base_dir", "_pattern", "_full_pattern", "_regexes")

    def __init__(self, base_dir: Path, pattern: str) -> None:
        _validate_pattern(pattern)
        self._base_dir = base_dir
        self._pattern = pattern
        self._full_pattern = f"{glob.escape(str(base_dir).rstrip('/'))}/{pattern}"
        try:
            self._regexes = tuple(
                re.compile(fnmatch.translate(variant))
                for variant in _expand_globstars(self._full_pattern)
            )
        except re.error as e:
            raise PatternError(f"Not a valid glob pattern: {pattern!r} ({e})") from e

    @property
    def pattern(self) -> str:
        """The pattern as given, relative to the base directory."""
        return self._pattern

    @property
    def full_pattern(self) -> str:
        """The pattern anchored to the base directory."""
        return self._full_pattern

    def matches(self, path: str | Path) -> bool:
        """Check whether a canonical absolute path matches the pattern."""
        path_str = str(path)
        return any(regex.match(path_str) for regex in self._regexes)

    def __repr__(self) -> str:
        return f"PathMatcher({self._full_pattern!r})"


def compile_matcher(
    base_dir: Path,
    pattern: str | None,
    log: logging.Logger | None = None,
) -> PathMatcher | None:
    """Compile an optional pattern relative to a base directory.

    Args:
        base_dir: Canonical base directory.
        pattern: Glob pattern, or None when the option is unset.
        log: Logger for diagnostics (defaults to the module logger).

    Returns:
        A PathMatcher, or None if no pattern was given.

    Raises:
        PatternError: If the pattern syntax is invalid.
    """
    if pattern is None:
        return None
    matcher = PathMatcher(base_dir, pattern)
    (log or logger).info("Using a matching pattern: %s", matcher.full_pattern)
    return matcher


def _validate_pattern(pattern: str) -> None:
    """Reject glob syntax that fnmatch would silently accept.

    Raises:
        PatternError: If the pattern is empty, has a malformed character
            class, or uses ``**`` other than as a whole path component.
    """
    if not pattern:
        raise PatternError("Glob pattern cannot be empty")

    if _STAR_RUN.search(pattern):
        raise PatternError(f"Not a valid glob pattern: {pattern!r} (too many '*')")

    for component in pattern.split("/"):
        if "**" in component and component != "**":
            raise PatternError(
                f"Not a valid glob pattern: {pattern!r} ('**' must be a whole path component)"
            )

    i = 0
    while i < len(pattern):
        if pattern[i] == "[":
            end = _class_end(pattern, i)
            if end is None:
                raise PatternError(
                    f"Not a valid glob pattern: {pattern!r} (unterminated character class)"
                )
            i = end
        i += 1


def _class_end(pattern: str, start: int) -> int | None:
    """Return the index of the ``]`` closing the class opened at start."""
    i = start + 1
    if i < len(pattern) and pattern[i] in "!^":
        i += 1
    # A leading ']' is a literal member, so an empty class never closes here
    if i < len(pattern) and pattern[i] == "]":
        i += 1
    while i < len(pattern) and pattern[i] != "]":
        i += 1
    return i if i < len(pattern) else None


def _expand_globstars(pattern: str) -> list[str]:
    """Expand each ``**/`` into the variants "any depth" and "no directory"."""
    parts = pattern.split(_GLOBSTAR)
    if len(parts) == 1:
        return [pattern]

    variants: list[str] = []
    for choice in itertools.product((_GLOBSTAR, ""), repeat=len(parts) - 1):
        pieces = [parts[0]]
        for separator, part in zip(choice, parts[1:], strict=True):
            pieces.extend((separator, part))
        variants.append("".join(pieces))
    return variants
