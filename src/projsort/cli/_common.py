"""Helpers shared by CLI commands."""

from __future__ import annotations

from pathlib import Path

from projsort.config import Settings
from projsort.ignore import IgnoreFilter
from projsort.logging_config import configure_logging
from projsort.sniffer import ProjectSniffer
from projsort.walker import TraversalEngine


def setup_logging(debug: bool, log_file: Path | None) -> None:
    if debug or log_file is not None:
        configure_logging(debug=debug or None, log_file=log_file)


def build_engine(
    settings: Settings,
    parallel: bool = False,
    follow_symlinks: bool = False,
) -> TraversalEngine:
    return TraversalEngine(
        ignore_filter=IgnoreFilter(extra_names=settings.extra_ignored),
        sniffer=ProjectSniffer(parallel=parallel),
        follow_symlinks=follow_symlinks,
    )
