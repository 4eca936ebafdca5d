"""Human-readable rendering of scan and move results."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from rich.markup import escape
from rich.table import Table

from projsort import console
from projsort.mover import MoveResult, MoveStatus
from projsort.types import ProjectRecord, ProjectRegistry


def display_path(path: Path, root: Path) -> str:
    """Show ``path`` relative to ``root`` when it lives underneath it."""
    try:
        rel = path.relative_to(root)
    except ValueError:
        return str(path)
    return str(rel) if rel.parts else "."


def projects_table(registry: ProjectRegistry, root: Path) -> Table:
    table = Table(title=f"Projects ({len(registry)})")
    table.add_column("Type", style="magenta")
    table.add_column("Name", style="cyan")
    table.add_column("Version", style="green")
    table.add_column("Path", style="blue", overflow="fold")
    for record in registry:
        table.add_row(
            record.type.value,
            escape(record.name),
            escape(record.version),
            escape(display_path(record.path, root)),
        )
    return table


def print_projects(registry: ProjectRegistry, root: Path) -> None:
    if not len(registry):
        console.dim(f"no projects found under {root}")
        return
    console.print(projects_table(registry, root))


def print_project_info(record: ProjectRecord) -> None:
    """Per-project information block."""
    console.subheader(f"{escape(record.name)} Information")
    console.key_value("Path", record.path)
    console.key_value("Version", record.version)
    console.key_value("Type of project", record.type.value)


_STATUS_STYLE = {
    MoveStatus.MOVED: "green",
    MoveStatus.SKIPPED: "yellow",
    MoveStatus.UNCONFIGURED: "dim",
    MoveStatus.FAILED: "red",
}


def moves_table(results: Iterable[MoveResult], root: Path) -> Table:
    results = list(results)
    table = Table(title=f"Moves ({len(results)})")
    table.add_column("Status")
    table.add_column("Type", style="magenta")
    table.add_column("Project", style="blue", overflow="fold")
    table.add_column("Target", overflow="fold")
    for result in results:
        label = result.status.value
        if result.dry_run and result.status is MoveStatus.MOVED:
            label = "would move"
        style = _STATUS_STYLE[result.status]
        target = result.error or (str(result.target) if result.target else "-")
        table.add_row(
            f"[{style}]{label}[/]",
            result.record.type.value,
            escape(display_path(result.record.path, root)),
            escape(target),
        )
    return table
