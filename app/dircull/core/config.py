"""Run configuration for dircull.

Settings can be provided in a TOML file (by default
~/.config/dircull/config.toml) and on the command line. Command-line
values take precedence over file values. The merged result is validated
into a :class:`CullConfig` before any filesystem work starts.

Example config.toml::

    max_size = "5GiB"
    include_only = "**/*.log*"
    protect_from_deletion = "**/*.log"
"""

import logging
import tomllib
from pathlib import Path
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from dircull.core.errors import ConfigError, ConfigNotFoundError, ConfigParseError
from dircull.core.paths import get_config_path
from dircull.core.sizes import parse_size

logger = logging.getLogger(__name__)


class CullSettings(BaseModel):
    """Settings that may be stored in the config file.

    Attributes:
        max_size: Maximum total size of the in-scope files in bytes.
        dry_run: Only report planned deletions.
        include_only: Glob of files counted toward the budget. Files outside
            it are still eligible for deletion unless protected.
        exclude: Glob of files not counted toward the budget. Excluded files
            are still eligible for deletion unless protected.
        select_for_deletion: Glob of files that may be deleted (others are kept).
        protect_from_deletion: Glob of files that must never be deleted.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    max_size: Annotated[
        int | None,
        Field(ge=0, description="Size budget in bytes"),
    ] = None
    dry_run: bool = False
    include_only: str | None = None
    exclude: str | None = None
    select_for_deletion: str | None = None
    protect_from_deletion: str | None = None

    @field_validator("max_size", mode="before")
    @classmethod
    def parse_max_size(cls, v: object) -> object:
        """Accept human-readable sizes such as "500MB" or "2GiB"."""
        if isinstance(v, str):
            return parse_size(v)
        return v

    @model_validator(mode="after")
    def check_exclusive_patterns(self) -> "CullSettings":
        """Reject pattern pairs that cannot be combined."""
        if self.include_only is not None and self.exclude is not None:
            msg = "include_only and exclude are mutually exclusive"
            raise ValueError(msg)
        if self.select_for_deletion is not None and self.protect_from_deletion is not None:
            msg = "select_for_deletion and protect_from_deletion are mutually exclusive"
            raise ValueError(msg)
        return self


class CullConfig(CullSettings):
    """Validated configuration for a single run.

    Attributes:
        directory: Directory to keep within the budget.
        max_size: Maximum total size of the in-scope files in bytes (required).
        group: Group files sharing a stem into deletion units. Not supported.
    """

    directory: Path
    max_size: Annotated[int, Field(ge=0, description="Size budget in bytes")]
    group: bool = False

    @field_validator("group")
    @classmethod
    def reject_group(cls, v: bool) -> bool:
        """Grouping by stem is an explicit, unsupported mode."""
        if v:
            msg = "Grouping files by stem is not supported"
            raise ValueError(msg)
        return v


def load_settings(path: Path | None = None) -> CullSettings:
    """Load settings from a TOML config file.

    When no path is given the default config path is used, and a missing
    default file simply yields empty settings.

    Args:
        path: Explicit config file path, or None for the default location.

    Returns:
        Validated CullSettings.

    Raises:
        ConfigNotFoundError: If an explicitly given file does not exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or its content is invalid.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        if path is not None:
            raise ConfigNotFoundError(f"Config file not found: {config_path}")
        logger.debug("No config file at %s, using defaults", config_path)
        return CullSettings()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config file {config_path}: {e}") from e

    logger.debug("Loaded settings from %s", config_path)
    try:
        return CullSettings.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e


def build_config(
    directory: Path,
    settings: CullSettings | None = None,
    **overrides: Any,
) -> CullConfig:
    """Merge file settings with command-line overrides.

    Overrides whose value is None are ignored so that unset options fall
    back to the file settings.

    Args:
        directory: Directory to keep within the budget.
        settings: Settings loaded from the config file.
        **overrides: Command-line values keyed by CullConfig field name.

    Returns:
        Validated CullConfig.

    Raises:
        ConfigError: If the merged configuration is invalid.
    """
    data: dict[str, Any] = settings.model_dump(exclude_none=True) if settings else {}
    data.update({key: value for key, value in overrides.items() if value is not None})
    data["directory"] = directory

    # Command-line patterns replace their whole pair from the file
    for first, second in (
        ("include_only", "exclude"),
        ("select_for_deletion", "protect_from_deletion"),
    ):
        if overrides.get(first) is not None and overrides.get(second) is None:
            data.pop(second, None)
        elif overrides.get(second) is not None and overrides.get(first) is None:
            data.pop(first, None)

    if "max_size" not in data:
        msg = "No maximum size given on the command line or in the config file"
        raise ConfigError(msg)

    try:
        return CullConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(_describe_validation_error(e)) from e


def _describe_validation_error(error: ValueError | ValidationError) -> str:
    """Render the first validation message without pydantic's boilerplate."""
    if isinstance(error, ValidationError):
        errors = error.errors()
        if errors:
            message = str(errors[0].get("msg", error))
            return message.removeprefix("Value error, ")
    return str(error)
