"""System-wide application lookup, the last tier of the locator.

A runtime installation keeps its bundled applications under
``<root_dir>/lib/<name>-<vsn>``, and users may add further library
directories through ``ERL_LIBS``. ``CodePath.lib_dir`` answers "where is
application X installed?" the way the runtime's code server would, without
needing a running runtime.

Lookup order:
    1. Each directory of ``extra_dirs`` (``ERL_LIBS``), in order.
    2. ``<root_dir>/lib``.

Within the first directory that has any candidate, a sub-directory named
exactly ``<name>`` or ``<name>-<vsn>`` matches; among several versions the
highest wins.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
from pathlib import Path
from typing import Iterable, Mapping

logger = logging.getLogger(__name__)

ERL_LIBS_ENV = "ERL_LIBS"
ROOT_DIR_ENV = "RELRESOLVE_ROOT_DIR"

_PART_RE = re.compile(r"\d+|[^\d.\-_+]+")


def _version_key(vsn: str) -> tuple:
    """Sort key ordering ``1.10`` after ``1.9``; numeric parts beat text parts."""
    return tuple(
        (1, int(part), "") if part.isdigit() else (0, 0, part)
        for part in _PART_RE.findall(vsn)
    )


class CodePath:
    """Name-to-directory lookup over a runtime root and extra library dirs.

    Args:
        root_dir: Runtime installation root (contains ``lib/``), or None.
        extra_dirs: Additional library directories searched first.
    """

    def __init__(
        self,
        root_dir: Path | None = None,
        extra_dirs: Iterable[Path] = (),
    ) -> None:
        self.root_dir = Path(root_dir) if root_dir is not None else None
        self.extra_dirs = [Path(d) for d in extra_dirs]

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> CodePath:
        """Build a ``CodePath`` from ``ERL_LIBS`` and the runtime root.

        The root is taken from ``RELRESOLVE_ROOT_DIR`` if set, otherwise it is
        derived from the ``erl`` executable on ``PATH`` (``<root>/bin/erl``).
        """
        env = os.environ if environ is None else environ
        extra = [Path(p) for p in env.get(ERL_LIBS_ENV, "").split(os.pathsep) if p]

        root: Path | None = None
        if env.get(ROOT_DIR_ENV):
            root = Path(env[ROOT_DIR_ENV])
        else:
            erl = shutil.which("erl", path=env.get("PATH"))
            if erl is not None:
                root = Path(erl).resolve().parent.parent
        logger.debug("Code path root=%s extra_dirs=%s", root, extra)
        return cls(root_dir=root, extra_dirs=extra)

    @property
    def search_dirs(self) -> list[Path]:
        """Library directories in lookup order."""
        dirs = list(self.extra_dirs)
        if self.root_dir is not None:
            dirs.append(self.root_dir / "lib")
        return dirs

    def _candidates(self, lib: Path, name: str) -> list[tuple[str, Path]]:
        try:
            entries = list(lib.iterdir())
        except (PermissionError, OSError):
            logger.debug("Skipping unreadable library directory %s", lib)
            return []
        found: list[tuple[str, Path]] = []
        prefix = f"{name}-"
        for entry in entries:
            if not entry.is_dir():
                continue
            if entry.name == name:
                found.append(("", entry))
            elif entry.name.startswith(prefix) and entry.name[len(prefix):][:1].isdigit():
                found.append((entry.name[len(prefix):], entry))
        return found

    def lib_dir(self, name: str) -> Path | None:
        """Return the installation directory of application ``name``, or None."""
        for lib in self.search_dirs:
            candidates = self._candidates(lib, name)
            if candidates:
                vsn, path = max(candidates, key=lambda c: _version_key(c[0]))
                logger.debug("Code path hit for %s in %s (vsn=%s)", name, path, vsn or "-")
                return path
        return None
