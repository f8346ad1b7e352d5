"""Shared fixtures for relresolve tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence

import pytest


def quote_atom(name: str) -> str:
    """Render ``name`` as a quoted atom so any spelling reads back as an atom."""
    escaped = name.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _atom_list(names: Sequence[str]) -> str:
    return ", ".join(quote_atom(n) for n in names)


def render_app_file(
    name: str,
    vsn: str | None,
    applications: Sequence[str] = (),
    included: Sequence[str] = (),
    optional: Sequence[str] = (),
) -> str:
    """Render the text of a minimal but realistic ``.app`` resource file."""
    props = [f'{{description, "The {name} application"}}']
    if vsn is not None:
        props.append(f'{{vsn, "{vsn}"}}')
    props.append("{modules, []}")
    props.append(f"{{applications, [{_atom_list(applications)}]}}")
    if included:
        props.append(f"{{included_applications, [{_atom_list(included)}]}}")
    if optional:
        props.append(f"{{optional_applications, [{_atom_list(optional)}]}}")
    body = ",\n  ".join(props)
    return f"%% generated for tests\n{{application, {quote_atom(name)},\n [{body}]}}.\n"


@pytest.fixture
def make_app() -> Callable[..., Path]:
    """Factory installing an application under ``<lib_dir>/<name>-<vsn>/ebin``.

    Returns the application's root directory.
    """

    def _make(
        lib_dir: Path,
        name: str,
        vsn: str | None = "1.0.0",
        applications: Sequence[str] = (),
        included: Sequence[str] = (),
        optional: Sequence[str] = (),
        dir_name: str | None = None,
    ) -> Path:
        app_dir = lib_dir / (dir_name or f"{name}-{vsn}")
        ebin = app_dir / "ebin"
        ebin.mkdir(parents=True, exist_ok=True)
        (ebin / f"{name}.app").write_text(
            render_app_file(name, vsn, applications, included, optional)
        )
        return app_dir

    return _make


@pytest.fixture
def lib_dir(tmp_path: Path) -> Path:
    """An empty library directory."""
    path = tmp_path / "lib"
    path.mkdir()
    return path
