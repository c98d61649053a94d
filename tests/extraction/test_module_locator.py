"""Tests for go.mod discovery and import path mapping."""

from __future__ import annotations

from pathlib import Path

import pytest

from metamodel.extraction import GoModuleLayout, ModuleInfo, find_module_info, parse_go_mod


class TestParseGoMod:
    """Tests for parse_go_mod."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("module example.com/app\n\ngo 1.21\n", "example.com/app"),
            ("// comment\n  module   github.com/a/b  \n", "github.com/a/b"),
            ('module "example.com/quoted"\n', "example.com/quoted"),
            ("go 1.21\n", None),
            ("", None),
        ],
    )
    def test_module_directive(self, text: str, expected: str | None) -> None:
        assert parse_go_mod(text) == expected


class TestFindModuleInfo:
    """Tests for find_module_info."""

    def test_finds_nearest_ancestor(self, go_project: Path) -> None:
        info = find_module_info(go_project / "models" / "user.go")
        assert info == ModuleInfo("example.com/app", go_project.resolve())

    def test_nested_module_wins(self, go_project: Path, go_file) -> None:
        go_file(go_project / "tools" / "go.mod", "module example.com/tools\n")
        source = go_file(go_project / "tools" / "gen" / "gen.go", "package gen\n")
        info = find_module_info(source)
        assert info is not None
        assert info.module_path == "example.com/tools"

    def test_no_manifest(self, tmp_path: Path, go_file) -> None:
        source = go_file(tmp_path / "orphan" / "a.go", "package orphan\n")
        # tmp_path lives under the system temp dir, which has no go.mod
        assert find_module_info(source) is None

    def test_manifest_without_module_directive(self, tmp_path: Path, go_file) -> None:
        go_file(tmp_path / "go.mod", "go 1.21\n")
        source = go_file(tmp_path / "a.go", "package a\n")
        assert find_module_info(source) is None


class TestModuleInfoContains:
    """Tests for ModuleInfo.contains."""

    @pytest.mark.parametrize(
        ("import_path", "expected"),
        [
            ("example.com/app", True),
            ("example.com/app/internal/entity", True),
            ("example.com/application", False),
            ("github.com/gofrs/uuid", False),
        ],
    )
    def test_contains(self, import_path: str, expected: bool) -> None:
        info = ModuleInfo("example.com/app", Path("/src/app"))
        assert info.contains(import_path) is expected


class TestGoModuleLayout:
    """Tests for GoModuleLayout."""

    def test_maps_sub_package(self) -> None:
        layout = GoModuleLayout(ModuleInfo("example.com/app", Path("/src/app")))
        assert layout.directory_for("example.com/app/internal/entity") == Path(
            "/src/app/internal/entity"
        )

    def test_maps_module_root(self) -> None:
        layout = GoModuleLayout(ModuleInfo("example.com/app", Path("/src/app")))
        assert layout.directory_for("example.com/app") == Path("/src/app")

    def test_external_path_not_found(self) -> None:
        layout = GoModuleLayout(ModuleInfo("example.com/app", Path("/src/app")))
        assert layout.directory_for("example.com/application/x") is None

    def test_without_module_info(self) -> None:
        assert GoModuleLayout(None).directory_for("example.com/app") is None
