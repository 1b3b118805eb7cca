from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlparse

from src.manifest.manifest import load_manifest
from src.platform_scaffold.files import delete_if_exists, write_if_changed

if TYPE_CHECKING:  # pragma: no cover
    from src.project.project import FlutterProject

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Plugin:
    name: str
    path: str
    android_package: str | None
    plugin_class: str | None
    ios_prefix: str | None

    @property
    def has_android(self) -> bool:
        return bool(self.android_package and self.plugin_class)

    @property
    def has_ios(self) -> bool:
        return bool(self.plugin_class)

    @property
    def android_class(self) -> str:
        return f"{self.android_package}.{self.plugin_class}"

    @property
    def ios_class(self) -> str:
        return f"{self.ios_prefix or ''}{self.plugin_class}"


def _uri_to_path(uri: str, *, base: Path) -> Path:
    parsed = urlparse(uri)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    return (base / unquote(uri)).resolve()


def read_packages_file(path: Path) -> dict[str, Path]:
    """Parse a `.packages` file into package name -> package root."""
    if not path.is_file():
        return {}
    out: dict[str, Path] = {}
    for raw in path.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        name, sep, uri = line.partition(":")
        if not sep or not name or not uri:
            logger.debug("ignoring malformed .packages line: %r", raw)
            continue
        lib_dir = _uri_to_path(uri, base=path.parent)
        # Entries point at the package's lib/ folder.
        out[name] = lib_dir.parent
    return out


def _plugin_from_package(name: str, root: Path) -> Plugin | None:
    manifest = load_manifest(root / "pubspec.yaml")
    if not manifest.is_plugin:
        return None
    return Plugin(
        name=name,
        path=str(root) + "/",
        android_package=manifest.android_package,
        plugin_class=manifest.plugin_class,
        ios_prefix=manifest.ios_prefix,
    )


def find_plugins(project: FlutterProject) -> list[Plugin]:
    plugins: list[Plugin] = []
    for name, root in read_packages_file(project.packages_file).items():
        if root.resolve() == project.directory.resolve():
            continue
        plugin = _plugin_from_package(name, root)
        if plugin is not None:
            plugins.append(plugin)
    return plugins


def render_flutter_plugins(plugins: list[Plugin]) -> str:
    return "".join(f"{p.name}={p.path}\n" for p in plugins)


def write_flutter_plugins_file(project: FlutterProject, plugins: list[Plugin]) -> None:
    if plugins:
        write_if_changed(project.flutter_plugins_file, render_flutter_plugins(plugins))
    else:
        delete_if_exists(project.flutter_plugins_file)
