"""Directory scanner collecting the files of a directory tree.

Walks the tree below a canonical root directory and yields one
:class:`FileEntry` per regular file. Hidden entries (names starting with
a dot) are skipped, and hidden directories are pruned together with
everything below them.
"""

import logging
import os
import stat
from collections.abc import Iterator
from pathlib import Path

from dircull.core.errors import MetadataError, ScanError
from dircull.filesystem.models import FileEntry

logger = logging.getLogger(__name__)

HIDDEN_PREFIX = "."


def canonicalize_root(directory: Path) -> Path:
    """Resolve the target directory to a canonical absolute path.

    Args:
        directory: Directory as given by the user.

    Returns:
        Canonical absolute path of the directory.

    Raises:
        ScanError: If the path does not exist or is not a directory.
    """
    try:
        root = directory.expanduser().resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise ScanError(f"Directory path is not a proper path: {directory} ({e})") from e
    if not root.is_dir():
        raise ScanError(f"Not a directory: {root}")
    return root


def is_hidden(name: str) -> bool:
    """Check whether a directory entry name is hidden."""
    return name.startswith(HIDDEN_PREFIX)


class DirectoryScanner:
    """Recursively enumerates the regular files below a root directory.

    The root itself is never yielded. Symbolic links are not followed
    and are not reported as files. Errors while listing a subtree are
    logged and that subtree is skipped. An unreadable root directory or
    a failure to read the metadata of a listed file aborts the scan.

    Args:
        root: Canonical directory to scan (see :func:`canonicalize_root`).
        log: Logger for diagnostics (defaults to the module logger).
    """

    def __init__(self, root: Path, *, log: logging.Logger | None = None) -> None:
        self._root = root
        self._log = log or logger

    @property
    def root(self) -> Path:
        """The directory being scanned."""
        return self._root

    def scan(self) -> Iterator[FileEntry]:
        """Scan the tree and yield its regular, non-hidden files.

        Directories and files are visited in name order so that repeated
        scans of an unchanged tree yield the same sequence.

        Yields:
            FileEntry for each regular file.

        Raises:
            ScanError: If the root directory cannot be listed.
            MetadataError: If a file's size or modification time cannot be read.
        """
        for dirpath, dirnames, filenames in os.walk(self._root, onerror=self._on_walk_error):
            # Pruning in place stops os.walk from descending into hidden directories
            dirnames[:] = sorted(d for d in dirnames if not is_hidden(d))

            for name in sorted(filenames):
                if is_hidden(name):
                    continue
                entry = self._stat_entry(os.path.join(dirpath, name))
                if entry is not None:
                    yield entry

    def _stat_entry(self, path: str) -> FileEntry | None:
        """Read size and modification time of a single path.

        Args:
            path: Absolute path of a listed directory entry.

        Returns:
            FileEntry for regular files, None for anything else.

        Raises:
            MetadataError: If the path cannot be stat'ed.
        """
        try:
            st = os.lstat(path)
        except OSError as e:
            raise MetadataError(f"Could not get metadata from file {path}: {e}") from e

        if not stat.S_ISREG(st.st_mode):
            self._log.debug("Skipping non-regular file: %s", path)
            return None

        return FileEntry(path=path, size=st.st_size, modified_at=st.st_mtime)

    def _on_walk_error(self, error: OSError) -> None:
        """Report a traversal error and continue with the rest of the tree.

        Raises:
            ScanError: If the root directory itself cannot be listed.
        """
        if error.filename is not None and os.fspath(error.filename) == os.fspath(self._root):
            raise ScanError(f"Could not read directory {self._root}: {error}") from error
        self._log.warning("Traversal error: %s", error)
