"""Sort command - move detected projects into their destinations."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated, Literal

import tyro

from projsort import console
from projsort.cli._common import build_engine, setup_logging
from projsort.config import ConflictPolicy, get_settings_path, load_settings
from projsort.mover import MoveStatus, move_all
from projsort.report import moves_table


@dataclass
class Sort:
    """Detect projects and move each one to its configured destination."""

    path: Annotated[Path, tyro.conf.arg(aliases=("-p",))] = field(
        default_factory=Path.cwd,
        metadata={"help": "Directory to scan"},
    )
    dry_run: bool = field(
        default=False,
        metadata={"help": "Show what would be moved without moving"},
    )
    on_conflict: Literal["error", "skip", "rename", "overwrite"] | None = (
        field(
            default=None,
            metadata={
                "help": "Override the settings' policy for existing targets"
            },
        )
    )
    settings: Path | None = field(
        default=None,
        metadata={"help": "Settings file with per-type destinations"},
    )
    parallel: bool = field(
        default=False,
        metadata={"help": "Probe marker files concurrently"},
    )
    follow_symlinks: bool = field(
        default=False,
        metadata={"help": "Descend into symlinked directories"},
    )
    log_file: Path | None = field(
        default=None,
        metadata={"help": "Write log events to this file"},
    )
    debug: bool = field(
        default=False,
        metadata={"help": "Enable debug logging"},
    )

    def run(self) -> int:
        """Execute the sort command."""
        setup_logging(self.debug, self.log_file)

        settings = load_settings(self.settings)
        if self.on_conflict is not None:
            settings.conflict_policy = ConflictPolicy(self.on_conflict)

        if not settings.destinations:
            settings_path = self.settings or get_settings_path()
            console.error(f"no destinations configured in {settings_path}")
            console.dim(
                "run 'projsort config:set --type java-maven --dest <dir>' first"
            )
            return 1

        engine = build_engine(
            settings,
            parallel=self.parallel,
            follow_symlinks=self.follow_symlinks,
        )
        registry = engine.walk(self.path)
        root = self.path.expanduser().resolve()

        if not len(registry):
            console.dim(f"no projects found under {root}")
            return 0

        results = move_all(registry, settings, dry_run=self.dry_run)
        console.print(moves_table(results, root))

        moved = sum(1 for r in results if r.status is MoveStatus.MOVED)
        failed = sum(1 for r in results if r.status is MoveStatus.FAILED)
        verb = "would move" if self.dry_run else "moved"
        if failed:
            console.error(f"{failed} project(s) failed to move")
            return 1
        console.success(f"{verb} {moved} of {len(results)} project(s)")
        return 0
