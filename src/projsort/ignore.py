"""Directory ignore rules for the project walk."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

# IDE module marker; anything under a segment with this suffix is skipped
IML_SUFFIX = ".iml"

IGNORED_DIR_NAMES: frozenset[str] = frozenset(
    {
        ".idea",
        "node_modules",
        "build",
        "dist",
        ".git",
        "site-packages",
        "logs",
        "venv",
    }
)


class IgnoreFilter:
    """Decides whether a directory is excluded from traversal and detection.

    Each instance owns its own warn-once cache, so independent runs never
    share ignore state.
    """

    def __init__(self, extra_names: Iterable[str] = ()) -> None:
        self.names = IGNORED_DIR_NAMES | frozenset(extra_names)
        self.cache: set[Path] = set()

    def should_ignore(self, path: Path) -> bool:
        reason = self._match(path)
        if reason is None:
            try:
                os.lstat(path)
            except OSError as e:
                if path not in self.cache:
                    self.cache.add(path)
                    logger.error(
                        "error checking ignored status",
                        path=str(path),
                        error=str(e),
                    )
                return True
            return False

        if path not in self.cache:
            self.cache.add(path)
            logger.warning("ignoring folder", path=str(path), reason=reason)
        return True

    def _match(self, path: Path) -> str | None:
        if any(part.endswith(IML_SUFFIX) for part in path.parts):
            return "folder or parent ends with .iml"
        if path.name in self.names:
            return "ignored folder name"
        return None
