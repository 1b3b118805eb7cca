import sys
from pathlib import Path

import pytest

# Ensure the repo root is on sys.path so tests can import the local `src/` package.
ROOT = str(Path(__file__).resolve().parents[1])
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from pubspecs import MODULE_PUBSPEC, PLUGIN_PUBSPEC  # noqa: E402
from src.project.project import FlutterProject  # noqa: E402


@pytest.fixture(autouse=True)
def _clear_tooling_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # Generated files embed these; keep them deterministic per test.
    for name in (
        "FLUTTER_ROOT",
        "ANDROID_HOME",
        "ANDROID_SDK_ROOT",
        "FLUTTER_BUILD_MODE",
        "FLUTTER_TARGET",
        "FLUTTER_BUILD_DIR",
        "FLUTTER_TRACK_WIDGET_CREATION",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def some_project(tmp_path: Path) -> FlutterProject:
    directory = tmp_path / "some_project"
    directory.mkdir()
    (directory / ".packages").touch()
    (directory / "ios").mkdir()
    (directory / "android").mkdir()
    return FlutterProject.from_directory(directory)


@pytest.fixture
def plugin_project(tmp_path: Path) -> FlutterProject:
    directory = tmp_path / "plugin_project"
    (directory / "ios").mkdir(parents=True)
    (directory / "android").mkdir()
    (directory / "example").mkdir()
    (directory / "pubspec.yaml").write_text(PLUGIN_PUBSPEC)
    return FlutterProject.from_directory(directory)


@pytest.fixture
def module_project(tmp_path: Path) -> FlutterProject:
    directory = tmp_path / "module_project"
    directory.mkdir()
    (directory / ".packages").touch()
    (directory / "pubspec.yaml").write_text(MODULE_PUBSPEC)
    return FlutterProject.from_directory(directory)
