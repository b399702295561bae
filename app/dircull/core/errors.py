"""Exception hierarchy for dircull.

Every fatal condition of a run derives from :class:`DirCullError` so the
CLI can report it uniformly. Recoverable per-file conditions are never
raised; they are logged and recorded in the run results instead.
"""


class DirCullError(Exception):
    """Base exception for all dircull errors."""


class ConfigError(DirCullError):
    """Raised when the run configuration is invalid or contradictory."""


class ConfigNotFoundError(ConfigError):
    """Raised when an explicitly requested config file does not exist."""


class ConfigParseError(ConfigError):
    """Raised when a config file is not valid TOML."""


class PatternError(DirCullError):
    """Raised when a glob pattern cannot be compiled."""


class ScanError(DirCullError):
    """Raised when the target directory cannot be scanned at all."""


class MetadataError(ScanError):
    """Raised when size or modification time of a file cannot be read."""
