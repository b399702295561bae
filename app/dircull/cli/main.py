"""Main CLI application entry point.

Defines the Typer application that culls a directory to a size budget.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from dircull import __version__
from dircull.cli.display import print_report
from dircull.core.config import build_config, load_settings
from dircull.core.culler import cull
from dircull.core.errors import ConfigError, DirCullError
from dircull.core.sizes import parse_size
from dircull.utils.formatting import console, err_console, print_error
from dircull.utils.log import configure_logging, verbosity_to_level

app = typer.Typer(
    name="dircull",
    help="Keep a directory within a size budget by deleting its oldest files.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


class OutputFormat(str, Enum):
    """Output format options for the run report."""

    TABLE = "table"
    JSON = "json"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"dircull version {__version__}")
        raise typer.Exit()


def _parse_max_size(value: str | None) -> int | None:
    """Convert the MAX_SIZE argument to bytes."""
    if value is None:
        return None
    try:
        return parse_size(value)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="'MAX_SIZE'") from e


@app.command()
def main(
    directory: Annotated[
        Path,
        typer.Argument(help="Directory to cull."),
    ],
    max_size: Annotated[
        str | None,
        typer.Argument(
            metavar="MAX_SIZE",
            help="Maximum size of the directory, in bytes or with a suffix, e.g. 3K, 5MiB.",
            show_default=False,
        ),
    ] = None,
    dry_run: Annotated[
        bool | None,
        typer.Option(
            "--dry-run/--no-dry-run",
            "-d",
            help="Only print the planned deletions.",
            show_default=False,
        ),
    ] = None,
    group: Annotated[
        bool,
        typer.Option(
            "--group",
            "-g",
            help="Treat files with the same stem as one unit (not supported).",
        ),
    ] = False,
    include_only: Annotated[
        str | None,
        typer.Option(
            "--include-only",
            "-i",
            help=(
                "Glob of files counted toward MAX_SIZE. Other files may still be"
                " deleted; use --protect-from-deletion to keep them."
            ),
        ),
    ] = None,
    exclude: Annotated[
        str | None,
        typer.Option(
            "--exclude",
            "-e",
            help=(
                "Glob of files not counted toward MAX_SIZE. They may still be"
                " deleted; use --protect-from-deletion to keep them."
            ),
        ),
    ] = None,
    select_for_deletion: Annotated[
        str | None,
        typer.Option(
            "--select-for-deletion",
            "-s",
            help="Glob of files that may be deleted.",
        ),
    ] = None,
    protect_from_deletion: Annotated[
        str | None,
        typer.Option(
            "--protect-from-deletion",
            "-p",
            help="Glob of files that must never be deleted.",
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Config file (default: ~/.config/dircull/config.toml).",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="Increase log verbosity."),
    ] = 0,
    quiet: Annotated[
        int,
        typer.Option("--quiet", "-q", count=True, help="Decrease log verbosity."),
    ] = 0,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Delete the oldest files of DIRECTORY until it fits into MAX_SIZE.

    Patterns are relative to DIRECTORY. Hidden files and directories are
    never counted or deleted.
    """
    size = _parse_max_size(max_size)
    log = configure_logging(verbosity_to_level(verbose, quiet), err_console)

    try:
        settings = load_settings(config_path)
        config = build_config(
            directory,
            settings,
            max_size=size,
            dry_run=dry_run,
            group=True if group else None,
            include_only=include_only,
            exclude=exclude,
            select_for_deletion=select_for_deletion,
            protect_from_deletion=protect_from_deletion,
        )
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=2) from e

    try:
        report = cull(config, log)
    except DirCullError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(report.to_dict()))
        return

    print_report(report)


if __name__ == "__main__":
    app()
