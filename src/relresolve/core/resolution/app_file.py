"""Parsing of application resource files into ``AppInfo`` descriptors.

An application installed on disk is laid out as::

    <app_dir>/ebin/<name>.app

where ``<name>.app`` holds exactly one ``{application, Name, Props}`` term.
The file name is authoritative for the application name; the ``Name`` in
the term is ignored once the file has been located.

A file that cannot be read or does not have that shape is a fatal
``BadAppFile``: a release built on a misread descriptor is unsafe, so such
files are never skipped. A well-formed file whose version does not match the
one requested is an ordinary miss and yields ``None``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from relresolve.core.resolution.app_info import AppInfo
from relresolve.core.resolution.terms import Atom, TermSyntaxError, consult_file
from relresolve.exceptions import BadAppFile

logger = logging.getLogger(__name__)

EBIN_DIR = "ebin"
APP_FILE_SUFFIX = ".app"


def app_file_path(app_dir: Path, name: str) -> Path:
    """Return the resource file location for ``name`` inside ``app_dir``."""
    return Path(app_dir) / EBIN_DIR / f"{name}{APP_FILE_SUFFIX}"


def _get_value(props: list[Any], key: str, default: Any = None) -> Any:
    """First ``{key, Value}`` entry of a property list, like ``proplists:get_value/3``."""
    for entry in props:
        if (
            isinstance(entry, tuple)
            and len(entry) == 2
            and isinstance(entry[0], Atom)
            and entry[0] == key
        ):
            return entry[1]
    return default


def _names(path: Path, raw: Any, props: list[Any], key: str) -> tuple[str, ...]:
    value = _get_value(props, key, [])
    if not isinstance(value, list) or not all(isinstance(n, Atom) for n in value):
        raise BadAppFile(path, raw)
    return tuple(str(n) for n in value)


def parse_app_file(name: str, vsn: str | None, path: Path) -> AppInfo | None:
    """Parse the resource file at ``path`` as application ``name``.

    Args:
        name: The application name the file was located under.
        vsn: Required version, or None to accept any version.
        path: Path to ``<app_dir>/ebin/<name>.app``.

    Returns:
        The parsed ``AppInfo``, or None if the file declares no version or
        a version other than ``vsn``.

    Raises:
        BadAppFile: If the file cannot be read or parsed, or does not hold
            exactly one ``{application, Name, [Props]}`` term.
    """
    path = Path(path)
    logger.debug("Reading app file %s (name=%s, vsn=%s)", path, name, vsn)
    try:
        terms = consult_file(path)
    except (OSError, UnicodeDecodeError, TermSyntaxError) as exc:
        raise BadAppFile(path, exc) from exc

    if (
        len(terms) != 1
        or not isinstance(terms[0], tuple)
        or len(terms[0]) != 3
        or not isinstance(terms[0][0], Atom)
        or terms[0][0] != "application"
        or not isinstance(terms[0][2], list)
    ):
        raise BadAppFile(path, terms)

    props = terms[0][2]
    applications = _names(path, terms, props, "applications")
    included = _names(path, terms, props, "included_applications")
    optional = _names(path, terms, props, "optional_applications")

    declared = _get_value(props, "vsn")
    if declared is None:
        logger.debug("App file %s declares no vsn", path)
        return None
    if not isinstance(declared, str):
        raise BadAppFile(path, terms)
    if vsn is not None and declared != vsn:
        logger.debug("App file %s has vsn %s, wanted %s", path, declared, vsn)
        return None

    return AppInfo(
        name=name,
        vsn=str(declared),
        applications=applications,
        included_applications=included,
        optional_applications=optional,
        dir=path.parent.parent,
        link=False,
    )
