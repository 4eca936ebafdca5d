"""Config commands - inspect and edit the settings file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated, Literal

import tyro

from projsort import console
from projsort.config import (
    ConflictPolicy,
    get_settings_path,
    load_settings,
    save_settings,
)
from projsort.types import ProjectType


@dataclass
class ConfigShow:
    """Show the current settings."""

    settings: Path | None = field(
        default=None,
        metadata={"help": "Settings file (default: XDG config dir)"},
    )

    def run(self) -> int:
        """Execute the config:show command."""
        path = self.settings or get_settings_path()
        settings = load_settings(path)

        console.header("Settings")
        console.key_value("file", path)
        console.key_value("conflict policy", settings.conflict_policy.value)
        console.key_value(
            "extra ignored", ", ".join(sorted(settings.extra_ignored)) or "-"
        )

        console.subheader("\nDestinations")
        for project_type in ProjectType:
            dest = settings.destination_for(project_type)
            console.key_value(
                f"{project_type.key} ({project_type.value})",
                dest if dest is not None else "-",
            )
        return 0


@dataclass
class ConfigSet:
    """Set a destination, the conflict policy, or extra ignored folders."""

    project_type: Annotated[str | None, tyro.conf.arg(name="type")] = field(
        default=None,
        metadata={"help": "Project type key (e.g., java-maven, python)"},
    )
    dest: Path | None = field(
        default=None,
        metadata={"help": "Destination directory for that type"},
    )
    conflict_policy: Literal["error", "skip", "rename", "overwrite"] | None = (
        field(
            default=None,
            metadata={"help": "Policy when a destination entry exists"},
        )
    )
    ignore: tuple[str, ...] = field(
        default=(),
        metadata={"help": "Extra folder names to ignore while scanning"},
    )
    settings: Path | None = field(
        default=None,
        metadata={"help": "Settings file (default: XDG config dir)"},
    )

    def run(self) -> int:
        """Execute the config:set command."""
        if (self.project_type is None) != (self.dest is None):
            console.error("--type and --dest must be given together")
            return 1
        if (
            self.project_type is None
            and self.conflict_policy is None
            and not self.ignore
        ):
            console.error("nothing to set")
            return 1

        settings = load_settings(self.settings)

        if self.project_type is not None and self.dest is not None:
            try:
                project_type = ProjectType.from_key(self.project_type)
            except ValueError as e:
                console.error(str(e))
                return 1
            settings.destinations[project_type] = (
                self.dest.expanduser().resolve()
            )
        if self.conflict_policy is not None:
            settings.conflict_policy = ConflictPolicy(self.conflict_policy)
        if self.ignore:
            settings.extra_ignored = settings.extra_ignored | set(self.ignore)

        path = save_settings(settings, self.settings)
        console.success(f"settings saved to {path}")
        return 0


@dataclass
class ConfigUnset:
    """Remove the destination configured for a project type."""

    project_type: Annotated[str, tyro.conf.arg(name="type")] = field(
        metadata={"help": "Project type key (e.g., java-maven, python)"},
    )
    settings: Path | None = field(
        default=None,
        metadata={"help": "Settings file (default: XDG config dir)"},
    )

    def run(self) -> int:
        """Execute the config:unset command."""
        try:
            project_type = ProjectType.from_key(self.project_type)
        except ValueError as e:
            console.error(str(e))
            return 1

        settings = load_settings(self.settings)
        if settings.destinations.pop(project_type, None) is None:
            console.warning(f"no destination set for {project_type.key}")
            return 0

        path = save_settings(settings, self.settings)
        console.success(f"removed {project_type.key} from {path}")
        return 0
