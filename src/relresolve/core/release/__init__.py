"""Release definitions and the orchestration around the resolver.

Re-exports the public names so callers can write
``from relresolve.core.release import Release, State, solve_release``.
"""

from relresolve.core.release.config import load_config, parse_config
from relresolve.core.release.models import RealizedRelease, Release, State
from relresolve.core.release.solver import detect_erts_vsn, solve_release

__all__ = [
    "RealizedRelease",
    "Release",
    "State",
    "detect_erts_vsn",
    "load_config",
    "parse_config",
    "solve_release",
]
