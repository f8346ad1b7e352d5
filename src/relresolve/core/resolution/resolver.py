"""Dependency closure of a release's goals.

Expands each goal depth-first into the ordered list of applications it
needs. The result holds every application once, places each application
after all of its dependencies, and keeps the caller's goal order for
independent branches::

    goals [app1, app2], app1 -> libA, app2 -> libA
    => [libA, app1, app2]

Resolution is first-match and never backtracks: the first located version
of a name is the one used for the whole release.

Rules:
    - A name already in ``seen`` contributes nothing. Names are added to
      ``seen`` before their dependencies are expanded, which is what makes
      cyclic dependency graphs terminate.
    - A name that cannot be located is skipped only if the application
      that referenced it lists it in ``optional_applications``. It is then
      left out of ``seen`` so another application may still pull it in.
      Any other miss raises ``AppNotFound``.
    - An excluded application is dropped from the output but its
      dependencies are still resolved and kept. Whether an excluded
      application's own dependencies should also be dropped is an open
      question; they are kept.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Collection, Iterable, Sequence

from relresolve.core.resolution.app_info import AppInfo, Goal, GoalLike, World, as_goal
from relresolve.core.resolution.locator import find_app
from relresolve.discovery.code_path import CodePath
from relresolve.exceptions import AppNotFound

logger = logging.getLogger(__name__)


class Resolver:
    """Computes the ordered, deduplicated application closure of a set of goals.

    A ``Resolver`` holds the read-only inputs of a resolution; each call to
    ``resolve`` starts from an empty ``seen`` set, so one instance may serve
    several releases.

    Args:
        world: Known applications by name, consulted before any directory.
        lib_dirs: Ordered library directories to search on a world miss.
        check_code_path: Whether the system code path is the last fallback.
        exclude_apps: Names to leave out of the output (their dependencies
            are still included).
        code_path: System code path lookup; built from the environment on
            first use when None.
    """

    def __init__(
        self,
        world: World,
        lib_dirs: Sequence[Path] = (),
        check_code_path: bool = True,
        exclude_apps: Collection[str] = (),
        code_path: CodePath | None = None,
    ) -> None:
        self._world = world
        self._lib_dirs = [Path(d) for d in lib_dirs]
        self._check_code_path = check_code_path
        self._exclude_apps = frozenset(exclude_apps)
        self._code_path = code_path

    @property
    def code_path(self) -> CodePath | None:
        """The code path lookup, or None when the code path is disabled."""
        if not self._check_code_path:
            return None
        if self._code_path is None:
            self._code_path = CodePath.from_environment()
        return self._code_path

    def resolve(self, goals: Iterable[GoalLike]) -> list[AppInfo]:
        """Resolve ``goals`` into a dependency-ordered list of applications.

        Raises:
            AppNotFound: If a non-optional application cannot be located.
            BadAppFile: If a resource file met during the search is malformed.
        """
        goal_list = [as_goal(g) for g in goals]
        logger.debug(
            "Resolving goals=%s lib_dirs=%s check_code_path=%s exclude_apps=%s",
            [str(g) for g in goal_list],
            self._lib_dirs,
            self._check_code_path,
            sorted(self._exclude_apps),
        )
        seen: set[str] = set()
        return self._fold(goal_list, seen, ())

    def _fold(
        self,
        goals: Iterable[Goal],
        seen: set[str],
        optional: Collection[str],
    ) -> list[AppInfo]:
        """Expand sibling goals left to right, sharing ``seen``."""
        apps: list[AppInfo] = []
        for goal in goals:
            apps.extend(self._subset(goal, seen, optional))
        return apps

    def _subset(
        self,
        goal: Goal,
        seen: set[str],
        optional: Collection[str],
    ) -> list[AppInfo]:
        """Expand one goal. ``optional`` is the referencing application's optional list."""
        if goal.name in seen:
            return []

        app = find_app(
            goal.name,
            goal.vsn,
            self._world,
            self._lib_dirs,
            self._check_code_path,
            self.code_path,
        )
        if app is None:
            if goal.name in optional:
                logger.debug("Skipping missing optional application %s", goal.name)
                return []
            raise AppNotFound(goal.name, goal.vsn)

        seen.add(goal.name)
        apps = self._fold(
            (Goal(dep) for dep in app.dependencies),
            seen,
            app.optional_applications,
        )
        if goal.name in self._exclude_apps:
            logger.debug("Excluding %s from output, keeping its dependencies", goal.name)
            return apps
        apps.append(app)
        return apps


def resolve(
    goals: Iterable[GoalLike],
    world: World,
    lib_dirs: Sequence[Path] = (),
    check_code_path: bool = True,
    exclude_apps: Collection[str] = (),
    code_path: CodePath | None = None,
) -> list[AppInfo]:
    """Resolve ``goals`` into a dependency-ordered list of applications.

    Convenience wrapper around ``Resolver(...).resolve(goals)``.
    """
    resolver = Resolver(
        world,
        lib_dirs=lib_dirs,
        check_code_path=check_code_path,
        exclude_apps=exclude_apps,
        code_path=code_path,
    )
    return resolver.resolve(goals)
