"""Tests for moving detected projects into destinations."""

import shutil
from pathlib import Path

import pytest

from projsort import mover as mover_module
from projsort.config import ConflictPolicy, Settings
from projsort.mover import (
    DestinationConflictError,
    MoveStatus,
    move_all,
    move_project,
)
from projsort.types import ProjectRecord, ProjectType


@pytest.fixture
def project(tmp_path: Path) -> ProjectRecord:
    path = tmp_path / "src" / "shop"
    path.mkdir(parents=True)
    (path / "package.json").write_text('{"name":"shop"}')
    return ProjectRecord(ProjectType.JAVASCRIPT, path, "shop")


@pytest.fixture
def dest(tmp_path: Path) -> Path:
    return tmp_path / "sorted" / "js"


def _settings(dest: Path, policy=ConflictPolicy.ERROR) -> Settings:
    return Settings(
        destinations={ProjectType.JAVASCRIPT: dest}, conflict_policy=policy
    )


class TestMoveProject:
    def test_moves_into_destination(self, project, dest):
        result = move_project(project, _settings(dest))

        assert result.status is MoveStatus.MOVED
        assert result.target == dest.resolve() / "shop"
        assert (dest / "shop" / "package.json").is_file()
        assert not project.path.exists()

    def test_unconfigured_type_is_left_alone(self, project, tmp_path):
        settings = Settings(destinations={ProjectType.PYTHON: tmp_path / "py"})
        result = move_project(project, settings)
        assert result.status is MoveStatus.UNCONFIGURED
        assert result.target is None
        assert project.path.exists()

    def test_dry_run_does_not_touch_disk(self, project, dest):
        result = move_project(project, _settings(dest), dry_run=True)
        assert result.status is MoveStatus.MOVED
        assert result.dry_run is True
        assert project.path.exists()
        assert not dest.exists()

    def test_already_in_destination(self, tmp_path):
        dest = tmp_path / "js"
        path = dest / "shop"
        path.mkdir(parents=True)
        record = ProjectRecord(ProjectType.JAVASCRIPT, path.resolve())
        result = move_project(record, _settings(dest))
        assert result.status is MoveStatus.SKIPPED
        assert path.exists()


class TestConflictPolicy:
    @pytest.fixture
    def occupied(self, dest: Path) -> Path:
        existing = dest / "shop"
        existing.mkdir(parents=True)
        (existing / "old.txt").write_text("old")
        return existing

    def test_error_is_default(self, project, dest, occupied):
        with pytest.raises(DestinationConflictError) as exc_info:
            move_project(project, _settings(dest))
        assert exc_info.value.record == project
        assert project.path.exists()
        assert (occupied / "old.txt").exists()

    def test_skip(self, project, dest, occupied):
        result = move_project(project, _settings(dest, ConflictPolicy.SKIP))
        assert result.status is MoveStatus.SKIPPED
        assert project.path.exists()
        assert (occupied / "old.txt").exists()

    def test_rename(self, project, dest, occupied):
        (dest / "shop-1").mkdir()
        result = move_project(project, _settings(dest, ConflictPolicy.RENAME))
        assert result.status is MoveStatus.MOVED
        assert result.target == dest.resolve() / "shop-2"
        assert (dest / "shop-2" / "package.json").is_file()
        assert (occupied / "old.txt").exists()

    def test_overwrite(self, project, dest, occupied):
        result = move_project(
            project, _settings(dest, ConflictPolicy.OVERWRITE)
        )
        assert result.status is MoveStatus.MOVED
        assert (dest / "shop" / "package.json").is_file()
        assert not (dest / "shop" / "old.txt").exists()

    def test_overwrite_dry_run_keeps_existing(self, project, dest, occupied):
        move_project(
            project, _settings(dest, ConflictPolicy.OVERWRITE), dry_run=True
        )
        assert (occupied / "old.txt").exists()
        assert project.path.exists()

    def test_overwrite_never_removes_an_ancestor_of_the_project(
        self, tmp_path
    ):
        dest = tmp_path / "d"
        path = dest / "foo" / "foo"
        path.mkdir(parents=True)
        (path / "main.py").write_text("")
        record = ProjectRecord(ProjectType.PYTHON, path, "foo")
        settings = Settings(
            destinations={ProjectType.PYTHON: dest},
            conflict_policy=ConflictPolicy.OVERWRITE,
        )

        results = move_all([record], settings)

        assert results[0].status is MoveStatus.FAILED
        assert results[0].error == "project is inside destination"
        assert (path / "main.py").is_file()

    def test_destination_inside_project_is_refused(self, project):
        dest = project.path / "out"
        for policy in ConflictPolicy:
            result = move_project(project, _settings(dest, policy))
            assert result.status is MoveStatus.FAILED
            assert result.error == "destination is inside project"
        assert (project.path / "package.json").is_file()
        assert not dest.exists()


class TestMoveAll:
    def _records(self, tmp_path: Path, names: list[str]):
        records = []
        for name in names:
            path = tmp_path / "src" / name
            path.mkdir(parents=True)
            records.append(ProjectRecord(ProjectType.JAVASCRIPT, path, name))
        return records

    def test_moves_in_order(self, tmp_path, dest):
        records = self._records(tmp_path, ["a", "b", "c"])
        results = move_all(records, _settings(dest))
        assert [r.record.name for r in results] == ["a", "b", "c"]
        assert all(r.status is MoveStatus.MOVED for r in results)

    def test_io_failure_is_recorded_and_skipped(
        self, tmp_path, dest, monkeypatch: pytest.MonkeyPatch
    ):
        records = self._records(tmp_path, ["a", "b"])
        real_move = shutil.move

        def flaky_move(src, dst):
            if src.endswith("a"):
                raise PermissionError(13, "Permission denied", src)
            return real_move(src, dst)

        monkeypatch.setattr(mover_module.shutil, "move", flaky_move)
        results = move_all(records, _settings(dest))

        assert [r.status for r in results] == [
            MoveStatus.FAILED,
            MoveStatus.MOVED,
        ]
        assert "Permission denied" in results[0].error

    def test_conflict_aborts(self, tmp_path, dest):
        records = self._records(tmp_path, ["a", "b"])
        (dest / "a").mkdir(parents=True)
        with pytest.raises(DestinationConflictError):
            move_all(records, _settings(dest))
        assert records[1].path.exists()


class TestTargetsClaimedInRun:
    """Targets taken earlier in a run count as occupied, dry run or not."""

    @pytest.fixture
    def records(self, tmp_path: Path) -> list[ProjectRecord]:
        records = []
        for parent in ("x", "y"):
            path = tmp_path / parent / "app"
            path.mkdir(parents=True)
            (path / "package.json").write_text('{"name":"app"}')
            records.append(ProjectRecord(ProjectType.JAVASCRIPT, path, "app"))
        return records

    def test_error_policy_fails_in_dry_run_too(self, records, dest):
        with pytest.raises(DestinationConflictError) as exc_info:
            move_all(records, _settings(dest), dry_run=True)
        assert exc_info.value.record == records[1]
        assert all(r.path.exists() for r in records)

    @pytest.mark.parametrize("dry_run", [True, False])
    def test_rename_picks_distinct_targets(self, records, dest, dry_run):
        results = move_all(
            records, _settings(dest, ConflictPolicy.RENAME), dry_run=dry_run
        )
        assert [r.target for r in results] == [
            dest.resolve() / "app",
            dest.resolve() / "app-1",
        ]
        assert all(r.status is MoveStatus.MOVED for r in results)

    def test_skip_matches_real_run(self, records, dest):
        settings = _settings(dest, ConflictPolicy.SKIP)
        dry = move_all(records, settings, dry_run=True)
        real = move_all(records, settings)
        assert [r.status for r in dry] == [r.status for r in real]
        assert [r.status for r in real] == [
            MoveStatus.MOVED,
            MoveStatus.SKIPPED,
        ]

    def test_overwrite_does_not_replace_a_project_moved_in_this_run(
        self, records, dest
    ):
        results = move_all(records, _settings(dest, ConflictPolicy.OVERWRITE))
        assert [r.status for r in results] == [
            MoveStatus.MOVED,
            MoveStatus.FAILED,
        ]
        assert (dest / "app" / "package.json").is_file()
        assert records[1].path.exists()
