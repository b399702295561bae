"""Tests for the culling run orchestration."""

import logging
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest
from dircull.core.config import CullConfig
from dircull.core.culler import CullReport, Culler, cull
from dircull.core.errors import MetadataError, PatternError, ScanError
from dircull.filesystem.models import DeletionPlan, FileActionResult, FileEntry
from dircull.filesystem.scanner import DirectoryScanner


def _config(directory: Path, max_size: int, **kwargs: object) -> CullConfig:
    return CullConfig(directory=directory, max_size=max_size, **kwargs)  # type: ignore[arg-type]


@pytest.fixture
def scenario(tmp_path: Path, make_file: Callable[..., Path]) -> Path:
    """Three files of 10, 20 and 30 bytes; the 30-byte file is the oldest."""
    make_file(tmp_path, "newest.log", 10, age=1)
    make_file(tmp_path, "middle.log", 20, age=2)
    make_file(tmp_path, "oldest.log", 30, age=3)
    return tmp_path


def _names(paths: list[str]) -> list[str]:
    return [Path(p).name for p in paths]


class TestCull:
    """End-to-end tests of a culling pass."""

    def test_deletes_oldest_files_until_within_budget(self, scenario: Path) -> None:
        """Budget 25 of 60 bytes: the 30 and 20 byte files are deleted."""
        report = cull(_config(scenario, 25))

        assert report.scope_size == 60
        assert report.size_to_free == 35
        assert _names(report.plan.paths) == ["oldest.log", "middle.log"]
        assert report.freed_bytes == 50
        assert report.budget_met
        assert sorted(p.name for p in scenario.iterdir()) == ["newest.log"]

    def test_dry_run_keeps_files(self, scenario: Path) -> None:
        report = cull(_config(scenario, 25, dry_run=True))

        assert report.dry_run
        assert _names(report.plan.paths) == ["oldest.log", "middle.log"]
        assert all(r.dry_run for r in report.results)
        assert len(list(scenario.iterdir())) == 3

    def test_dry_run_is_idempotent(self, scenario: Path) -> None:
        """Two dry runs on an unchanged tree produce the same plan."""
        first = cull(_config(scenario, 25, dry_run=True))
        second = cull(_config(scenario, 25, dry_run=True))

        assert first.plan == second.plan
        assert first.plan.paths == second.plan.paths

    @pytest.mark.parametrize("dry_run", [True, False])
    def test_within_budget_does_nothing(self, scenario: Path, dry_run: bool) -> None:
        """A budget at or above the total size frees nothing in both modes."""
        with patch("dircull.core.culler.plan_evictions") as mock_plan:
            report = cull(_config(scenario, 60, dry_run=dry_run))

        mock_plan.assert_not_called()
        assert report.size_to_free == 0
        assert report.results == ()
        assert report.budget_met
        assert len(list(scenario.iterdir())) == 3

    def test_protect_everything_leaves_budget_unmet(
        self, scenario: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Protecting all files plans nothing and is not an error."""
        with caplog.at_level(logging.WARNING):
            report = cull(_config(scenario, 10, protect_from_deletion="*"))

        assert report.eligible_count == 0
        assert len(report.plan) == 0
        assert not report.budget_met
        assert len(list(scenario.iterdir())) == 3
        assert "Budget not met" in caplog.text

    def test_protected_files_count_toward_budget(
        self, tmp_path: Path, make_file: Callable[..., Path]
    ) -> None:
        """Protected files are counted but only the others are deleted."""
        make_file(tmp_path, "app.log", 100, age=10)
        make_file(tmp_path, "app.log.1.gz", 40, age=5)
        make_file(tmp_path, "app.log.2.gz", 40, age=6)

        report = cull(_config(tmp_path, 130, protect_from_deletion="*.log"))

        assert report.scope_size == 180
        assert _names(report.plan.paths) == ["app.log.2.gz", "app.log.1.gz"]
        assert (tmp_path / "app.log").exists()

    def test_select_for_deletion(
        self, tmp_path: Path, make_file: Callable[..., Path]
    ) -> None:
        """Only selected files are deleted even if others are older."""
        make_file(tmp_path, "keep.dat", 50, age=100)
        make_file(tmp_path, "a.tmp", 50, age=2)
        make_file(tmp_path, "b.tmp", 50, age=1)

        report = cull(_config(tmp_path, 100, select_for_deletion="*.tmp"))

        assert _names(report.plan.paths) == ["a.tmp"]
        assert (tmp_path / "keep.dat").exists()

    def test_include_only_limits_scope(
        self, tmp_path: Path, make_file: Callable[..., Path]
    ) -> None:
        """Files outside the include pattern do not count toward the budget."""
        make_file(tmp_path, "big.iso", 1000, age=50)
        make_file(tmp_path, "logs/a.log", 30, age=2)
        make_file(tmp_path, "logs/b.log", 30, age=1)

        report = cull(_config(tmp_path, 40, include_only="logs/*"))

        assert report.scope_size == 60
        assert report.size_to_free == 20
        assert report.scope_count == 2
        assert report.scanned_count == 3
        # Eligibility covers the full scan, so the old, out-of-scope file goes first
        assert _names(report.plan.paths) == ["big.iso"]

    def test_exclude_limits_scope(self, tmp_path: Path, make_file: Callable[..., Path]) -> None:
        make_file(tmp_path, "a.log", 10, age=2)
        make_file(tmp_path, "b.lock", 500, age=3)

        report = cull(_config(tmp_path, 100, exclude="*.lock"))

        assert report.scope_size == 10
        assert report.size_to_free == 0

    def test_hidden_files_ignored(self, tmp_path: Path, make_file: Callable[..., Path]) -> None:
        """Hidden files neither count nor get deleted."""
        make_file(tmp_path, ".snapshots/old.bin", 1000, age=100)
        make_file(tmp_path, "data.bin", 10, age=1)

        report = cull(_config(tmp_path, 10))

        assert report.scope_size == 10
        assert report.size_to_free == 0
        assert (tmp_path / ".snapshots" / "old.bin").exists()

    def test_failed_deletion_is_reported(self, scenario: Path) -> None:
        """A failing deletion leaves the budget unmet without raising."""
        failing = [
            FileActionResult(path=str(scenario / "oldest.log"), size=30, success=False, error="x"),
            FileActionResult(path=str(scenario / "middle.log"), size=20, success=True),
        ]
        with patch("dircull.core.culler.FileOperator") as mock_operator_class:
            mock_operator_class.return_value.delete.return_value = failing
            report = cull(_config(scenario, 25))

        assert report.failed_count == 1
        assert report.freed_bytes == 20
        assert not report.budget_met

    def test_injected_logger_receives_progress(
        self, scenario: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Progress messages are written to the logger given to the Culler."""
        log = logging.getLogger("test.culler")

        with caplog.at_level(logging.INFO, logger="test.culler"):
            Culler(_config(scenario, 25, dry_run=True), log=log).run()

        messages = [r.getMessage() for r in caplog.records if r.name == "test.culler"]
        assert any(m.startswith("Culling directory:") for m in messages)
        assert "Size to free: 35" in messages
        assert sum(m.startswith("Matched file:") for m in messages) == 3
        assert sum(m.startswith("Dry-run: would delete") for m in messages) == 2


class TestCullErrors:
    """Fatal conditions abort before any deletion."""

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(ScanError):
            cull(_config(tmp_path / "missing", 0))

    def test_invalid_pattern(self, scenario: Path) -> None:
        with pytest.raises(PatternError):
            cull(_config(scenario, 0, exclude="[broken"))

        assert len(list(scenario.iterdir())) == 3

    def test_metadata_error_aborts_before_deleting(self, scenario: Path) -> None:
        with (
            patch.object(
                DirectoryScanner, "_stat_entry", side_effect=MetadataError("stat failed")
            ),
            pytest.raises(MetadataError),
        ):
            cull(_config(scenario, 0))

        assert len(list(scenario.iterdir())) == 3


class TestCullReport:
    """Tests for CullReport helpers."""

    def test_to_dict(self, tmp_path: Path) -> None:
        entry = FileEntry(path="/data/a", size=5, modified_at=1.0)
        report = CullReport(
            directory=tmp_path,
            max_size=10,
            scope_size=15,
            size_to_free=5,
            scanned_count=2,
            scope_count=2,
            eligible_count=1,
            plan=DeletionPlan(entries=(entry,), size_to_free=5),
            results=(FileActionResult(path="/data/a", size=5, success=True, dry_run=True),),
            dry_run=True,
        )

        data = report.to_dict()

        assert data["directory"] == str(tmp_path)
        assert data["planned"] == [{"path": "/data/a", "size": 5, "modified_at": 1.0}]
        assert data["freed_bytes"] == 5
        assert data["budget_met"] is True
