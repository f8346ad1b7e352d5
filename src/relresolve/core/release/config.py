"""YAML release configuration loader.

A configuration file describes the shared resolver state and the releases
to build from it::

    lib_dirs: [_build/default/lib, /opt/erlang-libs]
    system_libs: true            # or a directory
    exclude_apps: [debugger]
    include_erts: false          # or a directory holding erts-<vsn>
    releases:
      - name: myrel
        vsn: "0.1.0"
        goals: [myapp, "cowboy@2.10.0", {name: recon, vsn: "2.5.3"}]
        config:
          exclude_apps: [observer]

Relative directories are resolved against the directory of the
configuration file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml

from relresolve.core.release.models import (
    OVERRIDE_KEYS,
    Release,
    State,
    coerce_names,
    coerce_path_or_bool,
    coerce_paths,
)
from relresolve.core.resolution.app_info import as_goal
from relresolve.discovery.code_path import CodePath
from relresolve.exceptions import ConfigError

_TOP_LEVEL_KEYS = set(OVERRIDE_KEYS) | {"releases"}
_RELEASE_KEYS = {"name", "vsn", "goals", "config"}


def _absolute(base_dir: Path, path: Path) -> Path:
    return path if path.is_absolute() else base_dir / path


def _settings(data: Mapping[str, Any], base_dir: Path) -> dict[str, Any]:
    """Validate resolver settings and resolve relative directories."""
    settings: dict[str, Any] = {}
    if "lib_dirs" in data:
        settings["lib_dirs"] = [
            _absolute(base_dir, p) for p in coerce_paths("lib_dirs", data["lib_dirs"])
        ]
    if "exclude_apps" in data:
        settings["exclude_apps"] = list(coerce_names("exclude_apps", data["exclude_apps"]))
    for key in ("system_libs", "include_erts"):
        if key in data:
            value = coerce_path_or_bool(key, data[key])
            settings[key] = value if isinstance(value, bool) else _absolute(base_dir, value)
    return settings


def _release(entry: Any, base_dir: Path) -> Release:
    if not isinstance(entry, dict):
        raise ConfigError(f"Release entry must be a mapping, got {entry!r}")
    unknown = sorted(set(entry) - _RELEASE_KEYS)
    if unknown:
        raise ConfigError(f"Unknown release keys: {', '.join(unknown)}")
    if "name" not in entry or "vsn" not in entry:
        raise ConfigError(f"Release entry needs a name and a vsn: {entry!r}")

    goals_raw = entry.get("goals") or []
    if not isinstance(goals_raw, list):
        raise ConfigError(f"goals must be a list, got {goals_raw!r}")
    try:
        goals = tuple(as_goal(g) for g in goals_raw)
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc

    overrides = entry.get("config") or {}
    if not isinstance(overrides, dict):
        raise ConfigError(f"Release config must be a mapping, got {overrides!r}")
    unknown = sorted(set(overrides) - set(OVERRIDE_KEYS))
    if unknown:
        raise ConfigError(f"Unknown release config keys: {', '.join(unknown)}")

    return Release(
        name=str(entry["name"]),
        vsn=str(entry["vsn"]),
        goals=goals,
        config=_settings(overrides, base_dir),
    )


def parse_config(
    data: Any,
    base_dir: Path,
    code_path: CodePath | None = None,
) -> tuple[State, list[Release]]:
    """Build the resolver state and releases from already-loaded config data.

    Raises:
        ConfigError: If the data does not have the documented shape.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")
    unknown = sorted(set(data) - _TOP_LEVEL_KEYS)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    releases_raw = data.get("releases") or []
    if not isinstance(releases_raw, list):
        raise ConfigError("releases must be a list")

    state = State(code_path=code_path).merge(_settings(data, base_dir))
    releases = [_release(entry, base_dir) for entry in releases_raw]
    return state, releases


def load_config(path: Path, code_path: CodePath | None = None) -> tuple[State, list[Release]]:
    """Read a YAML release configuration file.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, or does
            not have the documented shape.
    """
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot load configuration {path}: {exc}") from exc
    return parse_config(data, path.parent.resolve(), code_path=code_path)
