"""Goals and application descriptors: the data model of resolution.

A ``Goal`` is what the caller asks for (a name plus an optional version);
an ``AppInfo`` is what the locator found on disk or in the world. Both are
immutable so a resolved list can be shared freely between collaborators.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union


# ---------------------------------------------------------------------------
# Goal: a requested application
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Goal:
    """A requested application and an optional exact version.

    Attributes:
        name: Application name.
        vsn: Required version, or None to accept whatever version is found.
    """

    name: str
    vsn: str | None = None

    @classmethod
    def parse(cls, text: str) -> Goal:
        """Parse ``"name"`` or ``"name@vsn"`` into a Goal.

        Raises:
            ValueError: If the name or the version part is empty.
        """
        name, sep, vsn = text.strip().partition("@")
        if not name or (sep and not vsn):
            raise ValueError(f"Invalid goal: {text!r}")
        return cls(name, vsn or None)

    def __str__(self) -> str:
        return self.name if self.vsn is None else f"{self.name}@{self.vsn}"


GoalLike = Union[Goal, str, tuple, Mapping]


def as_goal(value: GoalLike) -> Goal:
    """Normalise a caller-supplied goal into a ``Goal``.

    Accepts a ``Goal``, a bare name (``"app"`` or ``"app@1.0"``), a
    ``(name, vsn)`` tuple or a mapping with ``name`` and optional ``vsn``.
    """
    if isinstance(value, Goal):
        return value
    if isinstance(value, str):
        return Goal.parse(value)
    if isinstance(value, tuple) and len(value) == 2:
        name, vsn = value
        return Goal(str(name), None if vsn is None else str(vsn))
    if isinstance(value, Mapping) and "name" in value:
        vsn = value.get("vsn")
        return Goal(str(value["name"]), None if vsn is None else str(vsn))
    raise ValueError(f"Invalid goal: {value!r}")


# ---------------------------------------------------------------------------
# AppInfo: a located application
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AppInfo:
    """Parsed metadata for one application.

    Attributes:
        name: Application name, unique within a resolution.
        vsn: Version string as declared by the application.
        applications: Names of required applications, in declared order.
        included_applications: Names of included applications. Treated
            exactly like ``applications`` when computing the closure.
        optional_applications: Names of applications that may be missing.
        dir: Root directory of the application (parent of ``ebin``).
        link: Provenance marker for applications linked rather than copied
            into a release.
    """

    name: str
    vsn: str
    applications: tuple[str, ...] = ()
    included_applications: tuple[str, ...] = ()
    optional_applications: tuple[str, ...] = ()
    dir: Path = field(default_factory=Path)
    link: bool = False

    @property
    def dependencies(self) -> tuple[str, ...]:
        """All dependency names in traversal order: required, included, optional."""
        return (
            self.applications
            + self.included_applications
            + self.optional_applications
        )

    def matches(self, name: str, vsn: str | None) -> bool:
        """True if this is ``name`` at ``vsn`` (any version when ``vsn`` is None)."""
        if self.name != name:
            return False
        return vsn is None or self.vsn == vsn

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "name": self.name,
            "vsn": self.vsn,
            "applications": list(self.applications),
            "included_applications": list(self.included_applications),
            "optional_applications": list(self.optional_applications),
            "dir": str(self.dir),
            "link": self.link,
        }


World = Mapping[str, AppInfo]
