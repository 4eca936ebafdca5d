"""Scan command - detect projects under a directory."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated

import tyro

from projsort import console
from projsort.cli._common import build_engine, setup_logging
from projsort.config import load_settings
from projsort.report import print_project_info, print_projects


@dataclass
class Scan:
    """Detect projects under a directory (read-only)."""

    path: Annotated[Path, tyro.conf.arg(aliases=("-p",))] = field(
        default_factory=Path.cwd,
        metadata={"help": "Directory to scan"},
    )
    json_output: Annotated[bool, tyro.conf.arg(name="json")] = field(
        default=False,
        metadata={"help": "Print the records as JSON"},
    )
    info: bool = field(
        default=False,
        metadata={"help": "Print an information block per project"},
    )
    parallel: bool = field(
        default=False,
        metadata={"help": "Probe marker files concurrently"},
    )
    follow_symlinks: bool = field(
        default=False,
        metadata={"help": "Descend into symlinked directories"},
    )
    settings: Path | None = field(
        default=None,
        metadata={"help": "Settings file (extra ignored folder names)"},
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
        """Execute the scan command."""
        setup_logging(self.debug, self.log_file)

        settings = load_settings(self.settings)
        engine = build_engine(
            settings,
            parallel=self.parallel,
            follow_symlinks=self.follow_symlinks,
        )
        registry = engine.walk(self.path)
        root = self.path.expanduser().resolve()

        if self.json_output:
            print(json.dumps([r.to_dict() for r in registry], indent=2))
            return 0

        print_projects(registry, root)
        if self.info:
            for record in registry:
                console.info("")
                print_project_info(record)

        stats = engine.stats
        console.dim(
            f"{stats.detected} projects, {stats.visited} folders visited, "
            f"{stats.ignored} ignored, {stats.errors} errors"
        )
        return 0
