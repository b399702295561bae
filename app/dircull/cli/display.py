"""Rich display functions for culling reports.

Provides the table and summary printers used by the CLI to show the
deletion plan and its outcome.
"""

from datetime import datetime

from rich.markup import escape
from rich.table import Table

from dircull.core.culler import CullReport
from dircull.core.sizes import format_size
from dircull.filesystem.models import FileActionResult
from dircull.utils.formatting import console, print_info, print_success, print_warning


def _format_mtime(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M:%S")


def create_results_table(report: CullReport) -> Table:
    """Create a Rich table displaying the outcome of each planned deletion.

    Rows follow the plan order (oldest first). Dry-run results are shown
    as "dry-run", successful deletions as "deleted" and failures as
    "failed" with the error message.

    Args:
        report: Report of the run.

    Returns:
        Rich Table configured for results display.
    """
    title = "Planned Deletions (dry-run)" if report.dry_run else "Deletions"
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Path", no_wrap=True)
    table.add_column("Size", justify="right")
    table.add_column("Modified", style="muted")
    table.add_column("Details")

    modified = {entry.path: entry.modified_at for entry in report.plan.entries}
    for result in report.results:
        status, detail = _result_status(result)
        mtime = modified.get(result.path)
        table.add_row(
            status,
            escape(result.path),
            format_size(result.size),
            _format_mtime(mtime) if mtime is not None else "-",
            f"[muted]{escape(detail)}[/muted]",
        )

    return table


def _result_status(result: FileActionResult) -> tuple[str, str]:
    if result.dry_run:
        return "[info]dry-run[/info]", "Would delete"
    if result.success:
        return "[success]deleted[/success]", ""
    return "[error]failed[/error]", result.error or "Unknown error"


def print_report(report: CullReport) -> None:
    """Print the plan, the results and a summary line for a run.

    Args:
        report: Report of the run.
    """
    usage = f"{format_size(report.scope_size)} of {format_size(report.max_size)}"
    if report.size_to_free == 0:
        print_success(f"Within budget: {usage} used in {escape(str(report.directory))}")
        return

    console.print(
        f"[muted]{escape(str(report.directory))}: {usage} used, "
        f"{format_size(report.size_to_free)} to free[/muted]"
    )

    if not report.results:
        print_warning("No files are eligible for deletion.")
        return

    console.print(create_results_table(report))

    freed = format_size(report.freed_bytes)
    if report.dry_run:
        print_info(f"Dry-run: {len(report.results)} file(s) would be deleted, freeing {freed}.")
    elif report.failed_count:
        succeeded = len(report.results) - report.failed_count
        print_warning(f"{succeeded} deleted, {report.failed_count} failed ({freed} freed)")
    else:
        print_success(f"Deleted {len(report.results)} file(s), freeing {freed}.")

    if not report.budget_met:
        missing = format_size(report.size_to_free - report.freed_bytes)
        print_warning(f"Budget not met: {missing} still over the limit.")
