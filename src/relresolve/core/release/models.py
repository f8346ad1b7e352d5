"""Release definitions, realized releases and the resolver state.

``State`` carries everything the resolver needs besides the goals: the world
of known applications, library directories and the code path policy. A
release may override parts of it through its own ``config`` mapping; the
override is applied with ``State.merge`` and never mutates the original.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping, Union

from relresolve.core.resolution.app_info import AppInfo, Goal
from relresolve.discovery.code_path import CodePath
from relresolve.exceptions import ConfigError

PathOrBool = Union[bool, Path]

OVERRIDE_KEYS = ("lib_dirs", "exclude_apps", "system_libs", "include_erts")


def coerce_path_or_bool(key: str, value: Any) -> PathOrBool:
    """Validate a ``system_libs`` / ``include_erts`` style setting."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (str, Path)) and str(value):
        return Path(value)
    raise ConfigError(f"{key} must be a boolean or a directory, got {value!r}")


def coerce_names(key: str, value: Any) -> tuple[str, ...]:
    """Validate a list of application names."""
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{key} must be a list of application names, got {value!r}")
    return tuple(value)


def coerce_paths(key: str, value: Any) -> tuple[Path, ...]:
    """Validate a list of directories."""
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, (str, Path)) for v in value):
        raise ConfigError(f"{key} must be a list of directories, got {value!r}")
    return tuple(Path(v) for v in value)


# ---------------------------------------------------------------------------
# Releases
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RealizedRelease:
    """A release together with its resolved applications.

    Attributes:
        name: Release name.
        vsn: Release version.
        goals: The goals the release was resolved from.
        applications: Resolved applications, dependencies first.
        erts_vsn: Runtime system version, when one was detected.
    """

    name: str
    vsn: str
    goals: tuple[Goal, ...]
    applications: tuple[AppInfo, ...]
    erts_vsn: str | None = None

    def with_erts(self, erts_vsn: str) -> RealizedRelease:
        return replace(self, erts_vsn=erts_vsn)

    def format(self) -> str:
        """Human-readable multi-line summary of the release."""
        lines = [f"release: {self.name}-{self.vsn}"]
        if self.erts_vsn is not None:
            lines.append(f"erts-{self.erts_vsn}")
        lines.append("goals:")
        lines.extend(f"  {goal}" for goal in self.goals)
        lines.append("applications:")
        lines.extend(f"  {app.name}-{app.vsn} ({app.dir})" for app in self.applications)
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "vsn": self.vsn,
            "erts_vsn": self.erts_vsn,
            "goals": [str(g) for g in self.goals],
            "applications": [app.to_dict() for app in self.applications],
        }


@dataclass(frozen=True)
class Release:
    """A release definition: what to build, before resolution.

    Attributes:
        name: Release name.
        vsn: Release version.
        goals: Top-level applications, in the order they should appear.
        config: Per-release overrides of ``State`` settings.
    """

    name: str
    vsn: str
    goals: tuple[Goal, ...] = ()
    config: Mapping[str, Any] = field(default_factory=dict)

    def realize(self, apps: list[AppInfo]) -> RealizedRelease:
        return RealizedRelease(
            name=self.name,
            vsn=self.vsn,
            goals=self.goals,
            applications=tuple(apps),
        )


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class State:
    """Resolver inputs shared by all releases of one build.

    Attributes:
        available_apps: World of known applications by name.
        lib_dirs: Library directories, searched in order.
        system_libs: True/False to use the system code path as a fallback;
            a directory to search that directory first instead and never
            consult the code path.
        exclude_apps: Applications to leave out of releases.
        include_erts: False/True, or a directory holding ``erts-<vsn>``
            whose version is recorded on the realized release.
        code_path: System code path lookup; None builds one from the
            environment when needed.
        realized_releases: Releases solved so far.
    """

    available_apps: Mapping[str, AppInfo] = field(default_factory=dict)
    lib_dirs: tuple[Path, ...] = ()
    system_libs: PathOrBool = True
    exclude_apps: frozenset[str] = frozenset()
    include_erts: PathOrBool = False
    code_path: CodePath | None = None
    realized_releases: tuple[RealizedRelease, ...] = ()

    def merge(self, overrides: Mapping[str, Any]) -> State:
        """Return a copy with per-release ``overrides`` applied.

        ``lib_dirs`` are appended to the existing ones (duplicates dropped);
        the other keys replace the current value.

        Raises:
            ConfigError: For unknown keys or values of the wrong shape.
        """
        unknown = sorted(set(overrides) - set(OVERRIDE_KEYS))
        if unknown:
            raise ConfigError(f"Unknown release config keys: {', '.join(unknown)}")

        changes: dict[str, Any] = {}
        if "lib_dirs" in overrides:
            dirs = list(self.lib_dirs)
            for d in coerce_paths("lib_dirs", overrides["lib_dirs"]):
                if d not in dirs:
                    dirs.append(d)
            changes["lib_dirs"] = tuple(dirs)
        if "exclude_apps" in overrides:
            changes["exclude_apps"] = frozenset(
                coerce_names("exclude_apps", overrides["exclude_apps"])
            )
        for key in ("system_libs", "include_erts"):
            if key in overrides:
                changes[key] = coerce_path_or_bool(key, overrides[key])
        return replace(self, **changes)

    def add_realized_release(self, release: RealizedRelease) -> State:
        return replace(self, realized_releases=self.realized_releases + (release,))
