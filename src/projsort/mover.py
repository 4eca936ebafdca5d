"""Relocate detected projects into their configured destinations."""

from __future__ import annotations

import shutil
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import structlog

from projsort.config import ConflictPolicy, Settings
from projsort.types import ProjectRecord, ProjsortError

logger = structlog.get_logger(__name__)


class DestinationConflictError(ProjsortError):
    """Destination already holds an entry with the project's name."""

    def __init__(self, record: ProjectRecord, target: Path) -> None:
        super().__init__(
            f"destination already exists: {target} "
            f"(while moving {record.path})"
        )
        self.record = record
        self.target = target


class MoveStatus(Enum):
    MOVED = "moved"
    SKIPPED = "skipped"
    UNCONFIGURED = "unconfigured"
    FAILED = "failed"


@dataclass
class MoveResult:
    record: ProjectRecord
    status: MoveStatus
    target: Path | None = None
    dry_run: bool = False
    error: str | None = None


def move_project(
    record: ProjectRecord,
    settings: Settings,
    dry_run: bool = False,
    claimed: set[Path] | None = None,
) -> MoveResult:
    """Move one project to ``<destination>/<project dir name>``.

    ``claimed`` holds targets taken earlier in the same run. They count as
    occupied, so a dry run reports the same outcome as a real one. The
    chosen target is added to it.

    Raises:
        DestinationConflictError: target exists and the policy is ``error``
        OSError: the move itself failed
    """
    if claimed is None:
        claimed = set()

    dest_dir = settings.destination_for(record.type)
    if dest_dir is None:
        logger.debug(
            "no destination configured",
            project_type=record.type.value,
            path=str(record.path),
        )
        return MoveResult(record, MoveStatus.UNCONFIGURED, dry_run=dry_run)

    dest_dir = dest_dir.expanduser().resolve()
    target = dest_dir / record.path.name
    source = record.path.parent.resolve() / record.path.name
    if source == target:
        logger.debug("project already in destination", path=str(record.path))
        claimed.add(target)
        return MoveResult(
            record, MoveStatus.SKIPPED, target=target, dry_run=dry_run
        )
    if target.is_relative_to(source):
        return _refuse(record, target, dry_run, "destination is inside project")
    if _occupied(target, claimed):
        policy = settings.conflict_policy
        if policy is ConflictPolicy.ERROR:
            raise DestinationConflictError(record, target)
        if policy is ConflictPolicy.SKIP:
            logger.warning(
                "destination exists, skipping",
                path=str(record.path),
                target=str(target),
            )
            return MoveResult(
                record, MoveStatus.SKIPPED, target=target, dry_run=dry_run
            )
        if policy is ConflictPolicy.RENAME:
            target = _next_free_name(target, claimed)
        elif policy is ConflictPolicy.OVERWRITE:
            # removing the target must never take the project with it
            if source.is_relative_to(target):
                return _refuse(
                    record, target, dry_run, "project is inside destination"
                )
            if target in claimed:
                return _refuse(
                    record,
                    target,
                    dry_run,
                    "destination already taken in this run",
                )
            logger.warning("overwriting destination", target=str(target))
            if not dry_run:
                _remove(target)

    claimed.add(target)
    if dry_run:
        logger.info(
            "would move project", path=str(record.path), target=str(target)
        )
        return MoveResult(record, MoveStatus.MOVED, target=target, dry_run=True)

    dest_dir.mkdir(parents=True, exist_ok=True)
    shutil.move(str(record.path), str(target))
    logger.info("moved project", path=str(record.path), target=str(target))
    return MoveResult(record, MoveStatus.MOVED, target=target)


def move_all(
    records: Iterable[ProjectRecord],
    settings: Settings,
    dry_run: bool = False,
) -> list[MoveResult]:
    """Move every record in order.

    A conflict under the ``error`` policy aborts the remaining moves; other
    I/O failures are recorded and the next record is processed.
    """
    results: list[MoveResult] = []
    claimed: set[Path] = set()
    for record in records:
        try:
            results.append(
                move_project(record, settings, dry_run=dry_run, claimed=claimed)
            )
        except DestinationConflictError:
            raise
        except OSError as e:
            logger.error(
                "failed to move project", path=str(record.path), error=str(e)
            )
            results.append(
                MoveResult(
                    record, MoveStatus.FAILED, dry_run=dry_run, error=str(e)
                )
            )
    return results


def _refuse(
    record: ProjectRecord, target: Path, dry_run: bool, reason: str
) -> MoveResult:
    logger.error(
        "refusing to move project",
        path=str(record.path),
        target=str(target),
        reason=reason,
    )
    return MoveResult(
        record,
        MoveStatus.FAILED,
        target=target,
        dry_run=dry_run,
        error=reason,
    )


def _occupied(target: Path, claimed: set[Path]) -> bool:
    return target in claimed or target.exists() or target.is_symlink()


def _next_free_name(target: Path, claimed: set[Path]) -> Path:
    n = 1
    while True:
        candidate = target.with_name(f"{target.name}-{n}")
        if not _occupied(candidate, claimed):
            return candidate
        n += 1


def _remove(target: Path) -> None:
    if target.is_dir() and not target.is_symlink():
        shutil.rmtree(target)
    else:
        target.unlink()
