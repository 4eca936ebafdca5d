"""Per-directory project type detection."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

import structlog

from projsort.stack.manifest_parser import (
    PARSE_ERRORS,
    parse_gradle,
    parse_maven,
    parse_package_json,
    parse_pyproject,
)
from projsort.types import ProjectRecord, ProjectType

logger = structlog.get_logger(__name__)

Parser = Callable[[str], tuple[str, str]]

_GLOB_CHARS = frozenset("*?[")


@dataclass(frozen=True)
class MarkerCheck:
    """One entry of the detection table.

    ``markers`` are tried in order; the first that exists is the file handed
    to ``parser``. Every pattern in ``requires`` must also match for the
    check to succeed.
    """

    project_type: ProjectType
    markers: tuple[str, ...]
    parser: Parser | None = None
    requires: tuple[str, ...] = ()

    def probe(self, directory: Path) -> Path | None:
        found = None
        for marker in self.markers:
            found = _find_file(directory, marker)
            if found is not None:
                break
        if found is None:
            return None
        for pattern in self.requires:
            if _find_file(directory, pattern) is None:
                return None
        return found


# priority order: first successful check wins
DEFAULT_CHECKS: tuple[MarkerCheck, ...] = (
    MarkerCheck(ProjectType.JAVA_MAVEN, ("pom.xml",), parse_maven),
    MarkerCheck(
        ProjectType.JAVA_GRADLE,
        ("build.gradle", "build.gradle.kts"),
        parse_gradle,
    ),
    MarkerCheck(ProjectType.JAVASCRIPT, ("package.json",), parse_package_json),
    MarkerCheck(ProjectType.TYPESCRIPT, ("tsconfig.json",)),
    MarkerCheck(ProjectType.PYTHON, ("pyproject.toml",), parse_pyproject),
    MarkerCheck(
        ProjectType.PYTHON, ("setup.py", "requirements.txt", "main.py")
    ),
    MarkerCheck(ProjectType.CSHARP, ("*.csproj", "*.sln")),
    MarkerCheck(ProjectType.CPP, ("CMakeLists.txt",)),
    MarkerCheck(ProjectType.C, ("Makefile",), requires=("*.c",)),
    MarkerCheck(ProjectType.JAVA_NATIVE, ("*.iml",)),
)


def _find_file(directory: Path, pattern: str) -> Path | None:
    if _GLOB_CHARS.isdisjoint(pattern):
        candidate = directory / pattern
        return candidate if candidate.is_file() else None
    matches = sorted(p for p in directory.glob(pattern) if p.is_file())
    return matches[0] if matches else None


class ProjectSniffer:
    """Classifies a directory by the marker files it contains."""

    def __init__(
        self,
        checks: Sequence[MarkerCheck] = DEFAULT_CHECKS,
        parallel: bool = False,
    ) -> None:
        self.checks = tuple(checks)
        self.parallel = parallel

    def detect(self, path: Path) -> ProjectRecord | None:
        """Return a record for ``path`` if it is a project root, else None."""
        directory = path.absolute()

        if self.parallel:
            # probe concurrently, but commit in table order
            workers = max(1, len(self.checks))
            with ThreadPoolExecutor(max_workers=workers) as pool:
                markers = list(
                    pool.map(lambda c: self._probe(directory, c), self.checks)
                )
            for check, marker in zip(self.checks, markers):
                if marker is None:
                    continue
                record = self._resolve(directory, check, marker)
                if record is not None:
                    return record
            return None

        for check in self.checks:
            marker = self._probe(directory, check)
            if marker is None:
                continue
            record = self._resolve(directory, check, marker)
            if record is not None:
                return record
        return None

    def _probe(self, directory: Path, check: MarkerCheck) -> Path | None:
        try:
            return check.probe(directory)
        except OSError as e:
            logger.error(
                "error probing for marker files",
                path=str(directory),
                project_type=check.project_type.value,
                error=str(e),
            )
            return None

    def _resolve(
        self, directory: Path, check: MarkerCheck, marker: Path
    ) -> ProjectRecord | None:
        if check.parser is None:
            return ProjectRecord(type=check.project_type, path=directory)

        try:
            name, version = check.parser(marker.read_text(encoding="utf-8"))
        except OSError as e:
            logger.error("error reading file", path=str(marker), error=str(e))
            return None
        except PARSE_ERRORS as e:
            logger.warning(
                "failed to parse manifest", path=str(marker), error=str(e)
            )
            return None

        return ProjectRecord(
            type=check.project_type,
            path=directory,
            name=name,
            version=version,
        )
