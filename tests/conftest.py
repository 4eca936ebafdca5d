from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from textwrap import dedent

import pytest
import structlog

TreeBuilder = Callable[[dict[str, str]], Path]


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def make_tree(tmp_path: Path) -> TreeBuilder:
    """Build a directory tree from ``{relative path: file content}``.

    A key ending in ``/`` creates an empty directory.
    """
    root = tmp_path / "root"
    root.mkdir()

    def build(files: dict[str, str]) -> Path:
        for rel, content in files.items():
            path = root / rel
            if rel.endswith("/"):
                path.mkdir(parents=True, exist_ok=True)
                continue
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(dedent(content).lstrip())
        return root.resolve()

    return build


POM = """
    <project>
      <modelVersion>4.0.0</modelVersion>
      <groupId>com.example</groupId>
      <artifactId>{name}</artifactId>
      <version>{version}</version>
    </project>
"""


@pytest.fixture
def pom() -> Callable[..., str]:
    """Render a minimal pom.xml."""

    def render(name: str = "foo", version: str = "1.0") -> str:
        return POM.format(name=name, version=version)

    return render
