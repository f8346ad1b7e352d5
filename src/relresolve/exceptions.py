"""relresolve exception hierarchy.

All public exceptions inherit from RelResolveError, giving callers a single
base class to catch when they want to handle any resolution failure without
swallowing unrelated errors. Every exception keeps the offending name,
version or path as attributes so an operator can fix the input.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class RelResolveError(Exception):
    """Base exception for all relresolve errors."""


class ConfigError(RelResolveError):
    """Raised when a release configuration is missing or malformed."""


class NoGoalsSpecified(ConfigError):
    """Raised when a release declares no applications to include.

    Detected before any lookup happens, so nothing on disk is touched.
    """

    def __init__(self, release_name: str, release_vsn: str) -> None:
        self.release_name = release_name
        self.release_vsn = release_vsn
        super().__init__(
            "No applications configured to be included in release "
            f"{release_name}-{release_vsn}"
        )


class ResolutionError(RelResolveError):
    """Raised when the dependency closure of a release cannot be computed."""


class AppNotFound(ResolutionError):
    """Raised when a required application is absent from every search tier.

    Attributes:
        name: The application that could not be located.
        vsn: The requested version, or None when any version would do.
    """

    def __init__(self, name: str, vsn: str | None = None) -> None:
        self.name = name
        self.vsn = vsn
        if vsn is None:
            message = f"Application needed for release not found: {name}"
        else:
            message = f"Application needed for release not found: {name}-{vsn}"
        super().__init__(message)


class ParseError(RelResolveError):
    """Raised when an application metadata file cannot be parsed."""


class BadAppFile(ParseError):
    """Raised when an ``.app`` file exists but does not hold one application term.

    Attributes:
        path: The offending file.
        raw: What reading the file produced instead (the parsed terms or
            the underlying error).
    """

    def __init__(self, path: Path, raw: Any) -> None:
        self.path = Path(path)
        self.raw = raw
        super().__init__(f"Bad app file {self.path}: {raw!r}")


class ReleaseRuntimeError(RelResolveError):
    """Raised when no runtime system (``erts-*``) can be found in a directory."""

    def __init__(self, dir: Path) -> None:
        self.dir = Path(dir)
        super().__init__(f"Unable to find erts in {self.dir}")
