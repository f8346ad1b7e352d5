"""System-wide discovery of installed applications.

Public API::

    from relresolve.discovery import CodePath

    code_path = CodePath.from_environment()
    code_path.lib_dir("stdlib")  # Path('/usr/lib/erlang/lib/stdlib-5.2') or None
"""

from __future__ import annotations

from relresolve.discovery.code_path import CodePath

__all__ = ["CodePath"]
