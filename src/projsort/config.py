"""Settings: per-type destinations, conflict policy and extra ignores.

Settings live in a JSON file:

    {
      "destinations": {"java-maven": "~/code/java/maven", ...},
      "conflict_policy": "error",
      "ignored": ["target"]
    }

Environment variables:
    PROJSORT_SETTINGS: Path of the settings file. Overrides the XDG
        location ($XDG_CONFIG_HOME/projsort/settings.json, falling back to
        ~/.config/projsort/settings.json).
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from projsort.types import ProjectType, ProjsortError

ENV_SETTINGS = "PROJSORT_SETTINGS"
SETTINGS_FILE_NAME = "settings.json"


class SettingsError(ProjsortError):
    """Settings file is unreadable or malformed."""


class ConflictPolicy(Enum):
    """What to do when the destination already holds a same-named entry."""

    ERROR = "error"
    SKIP = "skip"
    RENAME = "rename"
    OVERWRITE = "overwrite"


@dataclass
class Settings:
    destinations: dict[ProjectType, Path] = field(default_factory=dict)
    conflict_policy: ConflictPolicy = ConflictPolicy.ERROR
    extra_ignored: frozenset[str] = frozenset()

    def destination_for(self, project_type: ProjectType) -> Path | None:
        return self.destinations.get(project_type)

    def to_dict(self) -> dict:
        return {
            "destinations": {
                t.key: str(p) for t, p in self.destinations.items()
            },
            "conflict_policy": self.conflict_policy.value,
            "ignored": sorted(self.extra_ignored),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Settings:
        if not isinstance(data, dict):
            raise SettingsError("settings must be a JSON object")

        raw_destinations = data.get("destinations", {})
        if not isinstance(raw_destinations, dict):
            raise SettingsError("'destinations' must be an object")

        destinations: dict[ProjectType, Path] = {}
        for key, value in raw_destinations.items():
            try:
                project_type = ProjectType.from_key(key)
            except ValueError as e:
                raise SettingsError(str(e)) from e
            if not isinstance(value, str) or not value:
                raise SettingsError(f"destination for {key!r} must be a path")
            destinations[project_type] = Path(value).expanduser()

        policy_value = data.get("conflict_policy", ConflictPolicy.ERROR.value)
        try:
            policy = ConflictPolicy(policy_value)
        except ValueError as e:
            raise SettingsError(
                f"unknown conflict policy {policy_value!r}"
            ) from e

        ignored = data.get("ignored", [])
        if not isinstance(ignored, list) or not all(
            isinstance(name, str) for name in ignored
        ):
            raise SettingsError("'ignored' must be a list of folder names")

        return cls(
            destinations=destinations,
            conflict_policy=policy,
            extra_ignored=frozenset(ignored),
        )


def get_xdg_config_home() -> Path:
    """Get XDG config home directory.

    Returns $XDG_CONFIG_HOME if set, otherwise ~/.config
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_settings_path() -> Path:
    """Resolve the settings file location.

    Priority:
    1. PROJSORT_SETTINGS env var
    2. $XDG_CONFIG_HOME/projsort/settings.json
    """
    env_path = os.environ.get(ENV_SETTINGS)
    if env_path:
        return Path(env_path).expanduser()
    return get_xdg_config_home() / "projsort" / SETTINGS_FILE_NAME


def load_settings(path: Path | None = None) -> Settings:
    """Load settings, returning defaults when the file does not exist.

    Raises:
        SettingsError: file exists but cannot be read or parsed
    """
    path = path or get_settings_path()
    if not path.exists():
        return Settings()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise SettingsError(f"cannot read settings {path}: {e}") from e
    return Settings.from_dict(data)


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    path = path or get_settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(settings.to_dict(), indent=2) + "\n", encoding="utf-8"
    )
    return path
