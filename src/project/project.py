"""In-memory model of a Flutter project directory.

Constructing a `FlutterProject` only reads the root and `example/` manifests;
nothing is created or written until the platform preparers run.
"""

from __future__ import annotations

import logging
import re
from functools import cached_property
from pathlib import Path

from src.manifest.manifest import FlutterManifest, load_manifest

logger = logging.getLogger(__name__)

MANIFEST_FILE = "pubspec.yaml"
EXAMPLE_DIR = "example"

_PRODUCT_BUNDLE_ID_RE = re.compile(r"^\s*PRODUCT_BUNDLE_IDENTIFIER\s*=\s*(.*);\s*$")
_APPLICATION_ID_RE = re.compile(r"""^\s*applicationId\s+['"]([^'"]*)['"]\s*(?://.*)?$""")
_GROUP_RE = re.compile(r"""^\s*group\s+['"]([^'"]*)['"]\s*(?://.*)?$""")


def _first_match(path: Path, pattern: re.Pattern[str]) -> str | None:
    if not path.is_file():
        return None
    for line in path.read_text(encoding="utf-8", errors="replace").splitlines():
        m = pattern.match(line)
        if m:
            return m.group(1)
    return None


class FlutterProject:
    def __init__(
        self,
        directory: Path,
        manifest: FlutterManifest,
        example_manifest: FlutterManifest,
    ) -> None:
        if directory is None:
            raise AssertionError("directory must not be None")
        self.directory = Path(directory)
        self.manifest = manifest
        self.example_manifest = example_manifest
        self.android = AndroidProject(self)
        self.ios = IosProject(self)

    @classmethod
    def from_directory(cls, directory: Path | None) -> FlutterProject:
        if directory is None:
            raise AssertionError("directory must not be None")
        directory = Path(directory)
        manifest = load_manifest(directory / MANIFEST_FILE)
        example_manifest = load_manifest(directory / EXAMPLE_DIR / MANIFEST_FILE)
        return cls(directory, manifest, example_manifest)

    @classmethod
    def from_path(cls, path: str) -> FlutterProject:
        return cls.from_directory(Path(path))

    @classmethod
    def current(cls) -> FlutterProject:
        return cls.from_directory(Path.cwd())

    def __repr__(self) -> str:
        return f"FlutterProject({str(self.directory)!r})"

    @property
    def is_module(self) -> bool:
        return self.manifest.is_module

    @property
    def is_plugin(self) -> bool:
        return self.manifest.is_plugin

    @property
    def has_example_app(self) -> bool:
        return (self.directory / EXAMPLE_DIR).is_dir()

    @cached_property
    def example(self) -> FlutterProject:
        """The `example/` sub-project (it may not exist on disk)."""
        return FlutterProject(
            self.directory / EXAMPLE_DIR,
            self.example_manifest,
            FlutterManifest.empty(),
        )

    @property
    def manifest_file(self) -> Path:
        return self.directory / MANIFEST_FILE

    @property
    def packages_file(self) -> Path:
        return self.directory / ".packages"

    @property
    def flutter_plugins_file(self) -> Path:
        return self.directory / ".flutter-plugins"

    @property
    def kind(self) -> str:
        if self.is_module:
            return "module"
        if self.is_plugin:
            return "plugin"
        if self.android.directory.is_dir() or self.ios.directory.is_dir():
            return "app"
        return "package"


class AndroidProject:
    def __init__(self, parent: FlutterProject) -> None:
        self.parent = parent

    @property
    def is_module(self) -> bool:
        return self.parent.is_module

    @property
    def directory(self) -> Path:
        name = ".android" if self.is_module else "android"
        return self.parent.directory / name

    @property
    def app_gradle_file(self) -> Path:
        return self.directory / "app" / "build.gradle"

    @property
    def gradle_file(self) -> Path:
        return self.directory / "build.gradle"

    @property
    def local_properties_file(self) -> Path:
        return self.directory / "local.properties"

    @property
    def settings_gradle_file(self) -> Path:
        return self.directory / "settings.gradle"

    @property
    def registrant_root(self) -> Path:
        # Apps register plugins from the `app` module; modules from the
        # generated `Flutter` library.
        return self.directory / ("Flutter" if self.is_module else "app")

    @property
    def plugin_registrant_file(self) -> Path:
        return (
            self.registrant_root
            / "src"
            / "main"
            / "java"
            / "io"
            / "flutter"
            / "plugins"
            / "GeneratedPluginRegistrant.java"
        )

    def application_id(self) -> str | None:
        return _first_match(self.app_gradle_file, _APPLICATION_ID_RE)

    def group(self) -> str | None:
        return _first_match(self.gradle_file, _GROUP_RE)


class IosProject:
    def __init__(self, parent: FlutterProject) -> None:
        self.parent = parent

    @property
    def is_module(self) -> bool:
        return self.parent.is_module

    @property
    def directory(self) -> Path:
        name = ".ios" if self.is_module else "ios"
        return self.parent.directory / name

    @property
    def flutter_dir(self) -> Path:
        return self.directory / "Flutter"

    @property
    def xcode_project_file(self) -> Path:
        return self.directory / "Runner.xcodeproj" / "project.pbxproj"

    @property
    def generated_xcode_properties_file(self) -> Path:
        return self.flutter_dir / "Generated.xcconfig"

    @property
    def podhelper_file(self) -> Path:
        return self.flutter_dir / "podhelper.rb"

    @property
    def plugin_registrant_dir(self) -> Path:
        if self.is_module:
            return self.flutter_dir / "FlutterPluginRegistrant" / "Classes"
        return self.directory / "Runner"

    @property
    def plugin_registrant_header(self) -> Path:
        return self.plugin_registrant_dir / "GeneratedPluginRegistrant.h"

    @property
    def plugin_registrant_implementation(self) -> Path:
        return self.plugin_registrant_dir / "GeneratedPluginRegistrant.m"

    def product_bundle_identifier(self) -> str | None:
        return _first_match(self.xcode_project_file, _PRODUCT_BUNDLE_ID_RE)
