"""Recursive project discovery.

The walk is strictly depth-first and single-threaded: a subtree is fully
visited before its next sibling, so registry order is discovery order along
the directory listing order (which is not sorted).
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from pathlib import Path

import structlog

from projsort.ignore import IgnoreFilter
from projsort.sniffer import ProjectSniffer
from projsort.types import ProjectRecord, ProjectRegistry, ProjsortError

logger = structlog.get_logger(__name__)


@dataclass
class WalkStats:
    visited: int = 0
    ignored: int = 0
    detected: int = 0
    errors: int = 0


class TraversalEngine:
    """Walks a directory tree and builds a :class:`ProjectRegistry`.

    Args:
        ignore_filter: Filter deciding which directories to skip. A fresh
            one (with an empty warn-once cache) is created if omitted.
        sniffer: Detector used on each candidate directory.
        follow_symlinks: Descend into symlinked directories. Real paths are
            tracked so a link cycle is visited at most once.
    """

    def __init__(
        self,
        ignore_filter: IgnoreFilter | None = None,
        sniffer: ProjectSniffer | None = None,
        follow_symlinks: bool = False,
    ) -> None:
        self.ignore_filter = ignore_filter or IgnoreFilter()
        self.sniffer = sniffer or ProjectSniffer()
        self.follow_symlinks = follow_symlinks
        self.stats = WalkStats()
        self._seen: set[Path] = set()

    def walk(self, root: Path | str) -> ProjectRegistry:
        """Detect every project under ``root``.

        Raises:
            ProjsortError: ``root`` does not exist or is not a directory
        """
        root = Path(root).expanduser()
        if not root.exists():
            raise ProjsortError(f"root path does not exist: {root}")
        if not root.is_dir():
            raise ProjsortError(f"root path is not a directory: {root}")
        root = root.resolve()

        self.stats = WalkStats()
        self._seen = {root}
        registry = ProjectRegistry()

        logger.info("starting project detection", root=str(root))

        record = self.sniffer.detect(root)
        if record is not None:
            self._register(registry, record)
        else:
            self._visit(root, registry)

        logger.info(
            "project detection finished",
            root=str(root),
            **asdict(self.stats),
        )
        return registry

    def _visit(self, directory: Path, registry: ProjectRegistry) -> None:
        self.stats.visited += 1
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as e:
            self.stats.errors += 1
            logger.error(
                "error listing directory", path=str(directory), error=str(e)
            )
            return

        for entry in entries:
            if not self._is_dir(entry):
                continue

            path = Path(entry.path)
            if self.ignore_filter.should_ignore(path):
                self.stats.ignored += 1
                continue

            if self.follow_symlinks:
                real = path.resolve()
                if real in self._seen:
                    logger.debug(
                        "skipping already visited directory",
                        path=str(path),
                        real_path=str(real),
                    )
                    continue
                self._seen.add(real)

            record = self.sniffer.detect(path)
            if record is not None:
                self._register(registry, record)
                continue

            self._visit(path, registry)

    def _is_dir(self, entry: os.DirEntry) -> bool:
        try:
            return entry.is_dir(follow_symlinks=self.follow_symlinks)
        except OSError as e:
            self.stats.errors += 1
            logger.error("error checking entry", path=entry.path, error=str(e))
            return False

    def _register(
        self, registry: ProjectRegistry, record: ProjectRecord
    ) -> None:
        registry.add(record)
        self.stats.detected += 1
        logger.info(
            "project detected",
            project_type=record.type.value,
            path=str(record.path),
        )
        logger.debug(
            "project record",
            project_type=record.type.value,
            name=record.name,
            version=record.version,
        )


def walk(
    root: Path | str,
    *,
    ignore_filter: IgnoreFilter | None = None,
    sniffer: ProjectSniffer | None = None,
    follow_symlinks: bool = False,
) -> ProjectRegistry:
    """Convenience wrapper running a fresh :class:`TraversalEngine`."""
    engine = TraversalEngine(
        ignore_filter=ignore_filter,
        sniffer=sniffer,
        follow_symlinks=follow_symlinks,
    )
    return engine.walk(root)
