"""Shared fixtures for CLI tests.

Provides a Click runner and a small project layout: a library directory
holding ``web -> [kernel, ranch]``, ``ranch -> [kernel]`` and ``kernel``.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def project_lib_dir(lib_dir: Path, make_app) -> Path:
    make_app(lib_dir, "web", "1.0.0", applications=["kernel", "ranch"])
    make_app(lib_dir, "ranch", "2.1.0", applications=["kernel"])
    make_app(lib_dir, "kernel", "9.2")
    return lib_dir
