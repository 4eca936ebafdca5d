from __future__ import annotations

import json
import re
import tomllib

from projsort.types import UNKNOWN_NAME, UNKNOWN_VERSION


class ManifestParseError(ValueError):
    """Manifest was syntactically valid but not shaped like a manifest."""


# errors the sniffer treats as "this parser did not match"
PARSE_ERRORS: tuple[type[Exception], ...] = (
    json.JSONDecodeError,
    tomllib.TOMLDecodeError,
    ManifestParseError,
    UnicodeDecodeError,
)

_MAVEN_ARTIFACT = re.compile(r"<artifactId>(.*?)</artifactId>")
_MAVEN_VERSION = re.compile(r"<version>(.*?)</version>")
_GRADLE_PROJECT = re.compile(r"""project\s*['"](.*?)['"]""")
_GRADLE_VERSION = re.compile(r"""version\s*['"](.*?)['"]""")


def parse_maven(content: str) -> tuple[str, str]:
    """Extract ``(name, version)`` from a ``pom.xml``.

    Takes the first ``artifactId`` and ``version`` elements in the document,
    which may belong to the parent or a dependency rather than the project.
    """
    return (
        _first_group(_MAVEN_ARTIFACT, content, UNKNOWN_NAME),
        _first_group(_MAVEN_VERSION, content, UNKNOWN_VERSION),
    )


def parse_gradle(content: str) -> tuple[str, str]:
    """Extract ``(name, version)`` from a Gradle build script."""
    return (
        _first_group(_GRADLE_PROJECT, content, UNKNOWN_NAME),
        _first_group(_GRADLE_VERSION, content, UNKNOWN_VERSION),
    )


def parse_package_json(content: str) -> tuple[str, str]:
    """Extract ``(name, version)`` from a ``package.json``.

    Raises:
        json.JSONDecodeError: content is not valid JSON
        ManifestParseError: top-level value is not an object
    """
    data = json.loads(content)
    if not isinstance(data, dict):
        raise ManifestParseError("package.json is not a JSON object")
    return (
        _str_field(data, "name", UNKNOWN_NAME),
        _str_field(data, "version", UNKNOWN_VERSION),
    )


def parse_pyproject(content: str) -> tuple[str, str]:
    """Extract ``(name, version)`` from a ``pyproject.toml``.

    PEP 621 ``[project]`` wins; ``[tool.poetry]`` is the fallback.
    """
    data = tomllib.loads(content)
    project = data.get("project", {})
    poetry = data.get("tool", {}).get("poetry", {})
    if not isinstance(project, dict):
        project = {}
    if not isinstance(poetry, dict):
        poetry = {}

    name = _str_field(project, "name", "") or _str_field(
        poetry, "name", UNKNOWN_NAME
    )
    version = _str_field(project, "version", "") or _str_field(
        poetry, "version", UNKNOWN_VERSION
    )
    return name, version


def _first_group(pattern: re.Pattern[str], content: str, default: str) -> str:
    match = pattern.search(content)
    if match:
        return match.group(1)
    return default


def _str_field(data: dict, key: str, default: str) -> str:
    value = data.get(key)
    if isinstance(value, str) and value:
        return value
    return default
