"""Core data types shared by the scanner, sniffer and mover."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

UNKNOWN_NAME = "Unknown Project"
UNKNOWN_VERSION = "Unknown Version"


class ProjsortError(Exception):
    """Base error for projsort failures surfaced to the caller."""


class ProjectType(Enum):
    """Closed set of recognized project ecosystems.

    The value is the display tag; ``key`` is the stable identifier used in
    the settings file and on the command line.
    """

    JAVA_MAVEN = "Java (Maven)"
    JAVA_GRADLE = "Java (Gradle)"
    JAVA_NATIVE = "Java (Native)"
    JAVASCRIPT = "JavaScript"
    TYPESCRIPT = "TypeScript"
    PYTHON = "Python"
    C = "C"
    CSHARP = "C#"
    CPP = "C++"

    @property
    def key(self) -> str:
        return _TYPE_KEYS[self]

    @classmethod
    def from_key(cls, key: str) -> ProjectType:
        normalized = key.strip().lower()
        for member, member_key in _TYPE_KEYS.items():
            if member_key == normalized:
                return member
        valid = ", ".join(_TYPE_KEYS.values())
        raise ValueError(f"unknown project type {key!r} (expected: {valid})")


_TYPE_KEYS: dict[ProjectType, str] = {
    ProjectType.JAVA_MAVEN: "java-maven",
    ProjectType.JAVA_GRADLE: "java-gradle",
    ProjectType.JAVA_NATIVE: "java-native",
    ProjectType.JAVASCRIPT: "javascript",
    ProjectType.TYPESCRIPT: "typescript",
    ProjectType.PYTHON: "python",
    ProjectType.C: "c",
    ProjectType.CSHARP: "csharp",
    ProjectType.CPP: "cpp",
}


@dataclass(frozen=True)
class ProjectRecord:
    """A detected project root."""

    type: ProjectType
    path: Path
    name: str = UNKNOWN_NAME
    version: str = UNKNOWN_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "path": str(self.path),
            "name": self.name,
            "version": self.version,
        }


@dataclass
class ProjectRegistry:
    """Append-only, discovery-ordered collection of detected projects."""

    _records: list[ProjectRecord] = field(default_factory=list)
    _paths: set[Path] = field(default_factory=set)

    def add(self, record: ProjectRecord) -> None:
        if record.path in self._paths:
            raise ProjsortError(f"project already registered: {record.path}")
        self._records.append(record)
        self._paths.add(record.path)

    def by_type(self) -> dict[ProjectType, list[ProjectRecord]]:
        """Group records by type, keeping discovery order within groups."""
        groups: dict[ProjectType, list[ProjectRecord]] = {}
        for record in self._records:
            groups.setdefault(record.type, []).append(record)
        return groups

    def paths(self) -> set[Path]:
        return set(self._paths)

    def __iter__(self) -> Iterator[ProjectRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> ProjectRecord:
        return self._records[index]

    def __contains__(self, path: object) -> bool:
        return path in self._paths
