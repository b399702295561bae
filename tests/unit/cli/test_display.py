"""Tests for the Rich report display."""

from pathlib import Path

import pytest
from dircull.cli.display import create_results_table, print_report
from dircull.core.culler import CullReport
from dircull.filesystem.models import DeletionPlan, FileActionResult, FileEntry


def _report(results: tuple[FileActionResult, ...], dry_run: bool = False) -> CullReport:
    entries = tuple(
        FileEntry(path=r.path, size=r.size, modified_at=1_700_000_000.0) for r in results
    )
    return CullReport(
        directory=Path("/data"),
        max_size=100,
        scope_size=150,
        size_to_free=50,
        plan=DeletionPlan(entries=entries, size_to_free=50),
        results=results,
        dry_run=dry_run,
    )


class TestCreateResultsTable:
    """Tests for create_results_table."""

    def test_dry_run_title(self) -> None:
        result = FileActionResult(path="/data/a", size=50, success=True, dry_run=True)
        report = _report((result,), dry_run=True)

        table = create_results_table(report)

        assert table.title == "Planned Deletions (dry-run)"
        assert table.row_count == 1

    def test_live_title(self) -> None:
        report = _report((FileActionResult(path="/data/a", size=50, success=True),))

        assert create_results_table(report).title == "Deletions"


class TestPrintReport:
    """Tests for print_report summaries."""

    def test_within_budget(self, capsys: pytest.CaptureFixture[str]) -> None:
        report = CullReport(directory=Path("/data"), max_size=100, scope_size=10, size_to_free=0)

        print_report(report)

        assert "Within budget" in capsys.readouterr().out

    def test_all_deleted(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_report(_report((FileActionResult(path="/data/a", size=50, success=True),)))

        assert "Deleted 1 file(s)" in capsys.readouterr().out

    def test_failures_and_unmet_budget(self, capsys: pytest.CaptureFixture[str]) -> None:
        report = _report(
            (
                FileActionResult(path="/data/a", size=30, success=False, error="denied"),
                FileActionResult(path="/data/b", size=20, success=True),
            )
        )

        print_report(report)

        err = capsys.readouterr().err
        assert "1 deleted, 1 failed" in err
        assert "Budget not met" in err

    def test_nothing_eligible(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_report(_report(()))

        assert "No files are eligible" in capsys.readouterr().err
