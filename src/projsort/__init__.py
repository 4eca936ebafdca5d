from projsort.config import ConflictPolicy, Settings, load_settings
from projsort.ignore import IGNORED_DIR_NAMES, IgnoreFilter
from projsort.mover import MoveResult, MoveStatus, move_all, move_project
from projsort.sniffer import DEFAULT_CHECKS, MarkerCheck, ProjectSniffer
from projsort.types import (
    ProjectRecord,
    ProjectRegistry,
    ProjectType,
    ProjsortError,
)
from projsort.walker import TraversalEngine, WalkStats, walk

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CHECKS",
    "IGNORED_DIR_NAMES",
    "ConflictPolicy",
    "IgnoreFilter",
    "MarkerCheck",
    "MoveResult",
    "MoveStatus",
    "ProjectRecord",
    "ProjectRegistry",
    "ProjectSniffer",
    "ProjectType",
    "ProjsortError",
    "Settings",
    "TraversalEngine",
    "WalkStats",
    "load_settings",
    "move_all",
    "move_project",
    "walk",
]
