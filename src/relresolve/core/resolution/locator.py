"""Three-tier lookup of a single application.

Applications are first looked up in the world, the mapping of already known
``AppInfo`` descriptors handed in by the caller. If the application is not
there, or is there at another version, the library directories are searched
for ``<dir>/*/ebin/<name>.app``. Lastly, if still not found and the code path
is enabled, the system-wide code path is asked for the application's
installation directory.

Disabling the code path supports releases that must be built only from an
explicit set of directories: a miss in the library directories is then
final.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from relresolve.core.resolution.app_file import (
    APP_FILE_SUFFIX,
    EBIN_DIR,
    app_file_path,
    parse_app_file,
)
from relresolve.core.resolution.app_info import AppInfo, World
from relresolve.discovery.code_path import CodePath

logger = logging.getLogger(__name__)


def find_app_in_dirs(name: str, vsn: str | None, lib_dirs: Sequence[Path]) -> AppInfo | None:
    """Search each library directory in order; first matching candidate wins.

    Candidates within one directory are visited in sorted path order so the
    result does not depend on directory listing order.
    """
    pattern = f"*/{EBIN_DIR}/{name}{APP_FILE_SUFFIX}"
    for lib_dir in lib_dirs:
        matches = sorted(Path(lib_dir).glob(pattern))
        logger.debug("Searching %s for %s: %d candidate(s)", lib_dir, name, len(matches))
        for app_file in matches:
            app = parse_app_file(name, vsn, app_file)
            if app is not None:
                return app
    return None


def find_app_in_code_path(name: str, vsn: str | None, code_path: CodePath) -> AppInfo | None:
    """Ask the system code path where ``name`` lives and parse it from there."""
    app_dir = code_path.lib_dir(name)
    if app_dir is None:
        logger.debug("%s is not on the code path", name)
        return None
    return parse_app_file(name, vsn, app_file_path(app_dir, name))


def find_app(
    name: str,
    vsn: str | None,
    world: World,
    lib_dirs: Sequence[Path],
    check_code_path: bool,
    code_path: CodePath | None = None,
) -> AppInfo | None:
    """Locate application ``name`` at ``vsn`` (any version when None).

    Args:
        name: Application name.
        vsn: Required version, or None.
        world: Known applications by name, consulted first.
        lib_dirs: Directories searched in order when the world misses.
        check_code_path: Whether to fall back to the system code path.
        code_path: The system code path; built from the environment when
            None and needed.

    Returns:
        The located ``AppInfo``, or None if no tier has a match.

    Raises:
        BadAppFile: If a candidate resource file is malformed.
    """
    known = world.get(name)
    if known is not None:
        if known.matches(name, vsn):
            logger.debug("Found %s-%s in world", known.name, known.vsn)
            return known
        logger.debug("World has %s-%s but %s was requested", name, known.vsn, vsn)

    app = find_app_in_dirs(name, vsn, lib_dirs)
    if app is not None:
        logger.debug("Found %s-%s in %s", app.name, app.vsn, app.dir)
        return app

    if not check_code_path:
        logger.debug("%s not found in lib dirs and code path is disabled", name)
        return None

    if code_path is None:
        code_path = CodePath.from_environment()
    return find_app_in_code_path(name, vsn, code_path)
