"""Application lookup and dependency-closure resolution.

This package is the core of release assembly: given top-level goals, a
world of known applications and ordered library directories, it computes
the deduplicated, dependency-ordered list of applications a release needs.

Components
----------
- ``app_info``: ``Goal`` and ``AppInfo`` data types.
- ``terms`` / ``app_file``: reading ``<app>/ebin/<name>.app`` resource files.
- ``locator``: world -> library directories -> system code path lookup.
- ``resolver``: depth-first closure with cycle guard, optional-dependency
  scoping and output exclusion.
"""

from relresolve.core.resolution.app_file import app_file_path, parse_app_file
from relresolve.core.resolution.app_info import AppInfo, Goal, World, as_goal
from relresolve.core.resolution.locator import (
    find_app,
    find_app_in_code_path,
    find_app_in_dirs,
)
from relresolve.core.resolution.resolver import Resolver, resolve
from relresolve.core.resolution.terms import Atom, TermSyntaxError, consult

__all__ = [
    "AppInfo",
    "Atom",
    "Goal",
    "Resolver",
    "TermSyntaxError",
    "World",
    "app_file_path",
    "as_goal",
    "consult",
    "find_app",
    "find_app_in_code_path",
    "find_app_in_dirs",
    "parse_app_file",
    "resolve",
]
