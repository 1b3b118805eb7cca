from __future__ import annotations

from pathlib import Path

from src.platform_scaffold.plugins import find_plugins, read_packages_file
from src.platform_scaffold.scaffold import ensure_ready_for_platform_specific_tooling
from src.project.project import FlutterProject
from src.tooling.config import ToolingConfig

from pubspecs import PLUGIN_PUBSPEC


def _make_package(root: Path, pubspec: str) -> Path:
    (root / "lib").mkdir(parents=True)
    (root / "pubspec.yaml").write_text(pubspec)
    return root


def _app_with_dependencies(tmp_path: Path, packages: dict[str, Path]) -> FlutterProject:
    directory = tmp_path / "app"
    (directory / "android").mkdir(parents=True)
    (directory / "ios").mkdir()
    (directory / "pubspec.yaml").write_text("name: app\n")
    lines = ["# Generated by pub", "app:lib/"]
    lines += [f"{name}:{root.joinpath('lib').as_uri()}/" for name, root in packages.items()]
    (directory / ".packages").write_text("\n".join(lines) + "\n")
    return FlutterProject.from_directory(directory)


def test_read_packages_file_resolves_roots(tmp_path: Path) -> None:
    pkg = _make_package(tmp_path / "pub" / "foo", "name: foo\n")
    packages = tmp_path / ".packages"
    packages.write_text(f"# comment\nfoo:{(pkg / 'lib').as_uri()}/\nself:lib/\nbroken\n")
    out = read_packages_file(packages)
    assert out["foo"] == pkg
    assert out["self"] == tmp_path.resolve()
    assert "broken" not in out


def test_read_packages_file_missing(tmp_path: Path) -> None:
    assert read_packages_file(tmp_path / ".packages") == {}


def test_find_plugins_skips_plain_packages(tmp_path: Path) -> None:
    plugin = _make_package(tmp_path / "pub" / "my_plugin", PLUGIN_PUBSPEC)
    plain = _make_package(tmp_path / "pub" / "plain", "name: plain\n")
    project = _app_with_dependencies(tmp_path, {"my_plugin": plugin, "plain": plain})

    plugins = find_plugins(project)

    assert [p.name for p in plugins] == ["my_plugin"]
    assert plugins[0].android_class == "com.example.MyPlugin"
    assert plugins[0].ios_class == "FLTMyPlugin"


def test_preparation_writes_flutter_plugins_and_registrants(tmp_path: Path) -> None:
    plugin = _make_package(tmp_path / "pub" / "my_plugin", PLUGIN_PUBSPEC)
    project = _app_with_dependencies(tmp_path, {"my_plugin": plugin})

    ensure_ready_for_platform_specific_tooling(project, ToolingConfig())

    assert project.flutter_plugins_file.read_text() == f"my_plugin={plugin}/\n"
    assert "com.example.MyPlugin" in project.android.plugin_registrant_file.read_text()
    assert "FLTMyPlugin" in project.ios.plugin_registrant_implementation.read_text()


def test_flutter_plugins_file_removed_when_no_plugins(tmp_path: Path) -> None:
    project = _app_with_dependencies(tmp_path, {})
    project.flutter_plugins_file.write_text("stale=/nowhere/\n")

    ensure_ready_for_platform_specific_tooling(project, ToolingConfig())

    assert not project.flutter_plugins_file.exists()
