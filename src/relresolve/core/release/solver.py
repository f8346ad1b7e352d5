"""Solving a release: from a ``Release`` definition to a ``RealizedRelease``.

Steps:
    1. Apply the release's config overrides to the state.
    2. Refuse a release without goals.
    3. Decide the search policy from ``system_libs``: a boolean keeps the
       library directories and enables the code path fallback; a directory
       is searched before the library directories and disables it.
    4. Resolve the goals and realize the release.
    5. If ``include_erts`` names a directory, record the ``erts-<vsn>``
       version found there.
"""

from __future__ import annotations

import logging
from pathlib import Path

from relresolve.core.release.models import RealizedRelease, Release, State
from relresolve.core.resolution.resolver import Resolver
from relresolve.exceptions import NoGoalsSpecified, ReleaseRuntimeError

logger = logging.getLogger(__name__)


def detect_erts_vsn(erts_dir: Path) -> str:
    """Return the version of the first ``erts-<vsn>`` directory in ``erts_dir``.

    Raises:
        ReleaseRuntimeError: If there is no such directory or its name does
            not split into ``erts`` and a version.
    """
    matches = sorted(Path(erts_dir).glob("erts-*"))
    if not matches:
        raise ReleaseRuntimeError(erts_dir)
    parts = [p for p in matches[0].name.split("-") if p]
    if len(parts) != 2:
        raise ReleaseRuntimeError(erts_dir)
    return parts[1]


def solve_release(release: Release, state: State) -> tuple[RealizedRelease, State]:
    """Resolve ``release`` against ``state``.

    The release's config overrides apply to this release only; the
    returned state is ``state`` with the realized release recorded.

    Returns:
        The realized release and the state with that release recorded.

    Raises:
        NoGoalsSpecified: If the release has no goals.
        ConfigError: If the release's config overrides are malformed.
        AppNotFound: If a required application cannot be located.
        BadAppFile: If a resource file met during the search is malformed.
        ReleaseRuntimeError: If ``include_erts`` names a directory without
            a runtime system.
    """
    logger.debug("Solving release %s-%s", release.name, release.vsn)
    merged = state.merge(release.config)

    if not release.goals:
        raise NoGoalsSpecified(release.name, release.vsn)

    if isinstance(merged.system_libs, bool):
        # The code path is consulted even when system libs are not bundled.
        check_code_path = True
        lib_dirs = list(merged.lib_dirs)
    else:
        logger.debug("System libs dir to search for apps %s", merged.system_libs)
        check_code_path = False
        lib_dirs = [merged.system_libs, *merged.lib_dirs]

    resolver = Resolver(
        merged.available_apps,
        lib_dirs=lib_dirs,
        check_code_path=check_code_path,
        exclude_apps=merged.exclude_apps,
        code_path=merged.code_path,
    )
    realized = release.realize(resolver.resolve(release.goals))
    logger.debug("Resolved %s-%s", realized.name, realized.vsn)
    logger.debug("%s", realized.format())

    if not isinstance(merged.include_erts, bool):
        realized = realized.with_erts(detect_erts_vsn(merged.include_erts))

    return realized, state.add_realized_release(realized)
