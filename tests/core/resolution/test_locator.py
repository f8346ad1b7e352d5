"""Tests for the three-tier application locator."""

from __future__ import annotations

from pathlib import Path

import pytest

from relresolve.core.resolution.app_info import AppInfo
from relresolve.core.resolution.locator import (
    find_app,
    find_app_in_code_path,
    find_app_in_dirs,
)
from relresolve.discovery.code_path import CodePath
from relresolve.exceptions import BadAppFile


@pytest.fixture
def empty_code_path(tmp_path: Path) -> CodePath:
    return CodePath(root_dir=tmp_path / "no-runtime")


class TestWorldTier:
    """Tier 1: the world of known applications."""

    def test_world_hit_any_version(self, empty_code_path: CodePath) -> None:
        known = AppInfo("a", "1.0")
        assert find_app("a", None, {"a": known}, [], True, empty_code_path) is known

    def test_world_hit_exact_version(self, empty_code_path: CodePath) -> None:
        known = AppInfo("a", "1.0")
        assert find_app("a", "1.0", {"a": known}, [], True, empty_code_path) is known

    def test_world_version_mismatch_falls_through_to_dirs(
        self, lib_dir: Path, make_app, empty_code_path: CodePath
    ) -> None:
        make_app(lib_dir, "a", "2.0")
        app = find_app("a", "2.0", {"a": AppInfo("a", "1.0")}, [lib_dir], False, empty_code_path)
        assert app is not None
        assert app.vsn == "2.0"
        assert app.dir == lib_dir / "a-2.0"

    def test_world_version_mismatch_without_fallback_is_miss(self) -> None:
        assert find_app("a", "2.0", {"a": AppInfo("a", "1.0")}, [], False) is None


class TestDirectoryTier:
    """Tier 2: ordered library directories."""

    def test_first_directory_wins(self, tmp_path: Path, make_app) -> None:
        first = tmp_path / "first"
        second = tmp_path / "second"
        make_app(first, "a", "1.0")
        make_app(second, "a", "2.0")
        app = find_app_in_dirs("a", None, [first, second])
        assert app.vsn == "1.0"

    def test_later_directory_used_for_version(self, tmp_path: Path, make_app) -> None:
        first = tmp_path / "first"
        second = tmp_path / "second"
        make_app(first, "a", "1.0")
        make_app(second, "a", "2.0")
        app = find_app_in_dirs("a", "2.0", [first, second])
        assert app.vsn == "2.0"
        assert app.dir == second / "a-2.0"

    def test_several_versions_in_one_directory(self, lib_dir: Path, make_app) -> None:
        make_app(lib_dir, "a", "1.0")
        make_app(lib_dir, "a", "1.1")
        assert find_app_in_dirs("a", "1.1", [lib_dir]).vsn == "1.1"
        # Unconstrained picks the first candidate in sorted path order.
        assert find_app_in_dirs("a", None, [lib_dir]).vsn == "1.0"

    def test_unversioned_directory_name(self, lib_dir: Path, make_app) -> None:
        make_app(lib_dir, "a", "0.3.0", dir_name="a")
        app = find_app_in_dirs("a", None, [lib_dir])
        assert app.dir == lib_dir / "a"

    def test_missing_directory_is_skipped(self, tmp_path: Path, lib_dir: Path, make_app) -> None:
        make_app(lib_dir, "a", "1.0")
        app = find_app_in_dirs("a", None, [tmp_path / "does-not-exist", lib_dir])
        assert app is not None

    def test_no_match_anywhere(self, lib_dir: Path, make_app) -> None:
        make_app(lib_dir, "a", "1.0")
        assert find_app_in_dirs("a", "5.0", [lib_dir]) is None
        assert find_app_in_dirs("b", None, [lib_dir]) is None

    def test_bad_app_file_is_fatal(self, lib_dir: Path) -> None:
        ebin = lib_dir / "a-1.0" / "ebin"
        ebin.mkdir(parents=True)
        (ebin / "a.app").write_text("not an app file")
        with pytest.raises(BadAppFile):
            find_app_in_dirs("a", None, [lib_dir])


class TestCodePathTier:
    """Tier 3: the system code path."""

    def test_code_path_used_when_enabled(self, tmp_path: Path, make_app) -> None:
        root = tmp_path / "runtime"
        make_app(root / "lib", "stdlib", "5.2")
        code_path = CodePath(root_dir=root)
        app = find_app("stdlib", None, {}, [], True, code_path)
        assert app is not None
        assert app.vsn == "5.2"

    def test_code_path_not_consulted_when_disabled(self, tmp_path: Path, make_app) -> None:
        root = tmp_path / "runtime"
        make_app(root / "lib", "stdlib", "5.2")
        code_path = CodePath(root_dir=root)
        assert find_app("stdlib", None, {}, [], False, code_path) is None

    def test_code_path_version_must_match(self, tmp_path: Path, make_app) -> None:
        root = tmp_path / "runtime"
        make_app(root / "lib", "stdlib", "5.2")
        code_path = CodePath(root_dir=root)
        assert find_app_in_code_path("stdlib", "4.0", code_path) is None

    def test_code_path_dir_without_app_file(self, tmp_path: Path) -> None:
        root = tmp_path / "runtime"
        (root / "lib" / "stdlib-5.2" / "ebin").mkdir(parents=True)
        with pytest.raises(BadAppFile) as excinfo:
            find_app_in_code_path("stdlib", None, CodePath(root_dir=root))
        assert excinfo.value.path == root / "lib" / "stdlib-5.2" / "ebin" / "stdlib.app"

    def test_dirs_take_precedence_over_code_path(
        self, tmp_path: Path, lib_dir: Path, make_app
    ) -> None:
        root = tmp_path / "runtime"
        make_app(root / "lib", "stdlib", "5.2")
        make_app(lib_dir, "stdlib", "4.0")
        app = find_app("stdlib", None, {}, [lib_dir], True, CodePath(root_dir=root))
        assert app.vsn == "4.0"
