"""Reading and validating `pubspec.yaml` manifests.

Only the `flutter` section is validated strictly; everything else in a pubspec
(dependencies, environment, ...) belongs to the package manager and is passed
through untouched.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.tooling.errors import ToolExit

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"^(?P<name>\d+\.\d+\.\d+)(?:-[0-9A-Za-z.-]+)?(?:\+(?P<number>\d+))?$")


class PluginSection(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    android_package: str | None = Field(default=None, alias="androidPackage")
    plugin_class: str | None = Field(default=None, alias="pluginClass")
    ios_prefix: str | None = Field(default=None, alias="iosPrefix")


class ModuleSection(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    android_package: str | None = Field(default=None, alias="androidPackage")
    ios_bundle_identifier: str | None = Field(default=None, alias="iosBundleIdentifier")


class FlutterSection(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    uses_material_design: bool | None = Field(default=None, alias="uses-material-design")
    assets: list[str] | None = None
    fonts: list[dict[str, Any]] | None = None
    plugin: PluginSection | None = None
    module: ModuleSection | None = None


@dataclass(frozen=True)
class FlutterManifest:
    descriptor: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    flutter: FlutterSection = field(default_factory=FlutterSection)

    @classmethod
    def empty(cls) -> FlutterManifest:
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.descriptor

    @property
    def app_name(self) -> str:
        return str(self.descriptor.get("name") or "")

    @property
    def version(self) -> str | None:
        v = self.descriptor.get("version")
        return str(v) if v is not None else None

    @property
    def build_name(self) -> str | None:
        m = _VERSION_RE.match(self.version or "")
        return m.group("name") if m else None

    @property
    def build_number(self) -> str | None:
        m = _VERSION_RE.match(self.version or "")
        return m.group("number") if m else None

    @property
    def uses_material_design(self) -> bool:
        return bool(self.flutter.uses_material_design)

    @property
    def assets(self) -> list[str]:
        return list(self.flutter.assets or [])

    @property
    def fonts(self) -> list[dict[str, Any]]:
        return list(self.flutter.fonts or [])

    @property
    def is_module(self) -> bool:
        return self.flutter.module is not None

    @property
    def is_plugin(self) -> bool:
        return self.flutter.plugin is not None

    @property
    def module_android_package(self) -> str | None:
        return self.flutter.module.android_package if self.flutter.module else None

    @property
    def module_ios_bundle_identifier(self) -> str | None:
        return self.flutter.module.ios_bundle_identifier if self.flutter.module else None

    @property
    def android_package(self) -> str | None:
        if self.flutter.module is not None:
            return self.flutter.module.android_package
        if self.flutter.plugin is not None:
            return self.flutter.plugin.android_package
        return None

    @property
    def plugin_class(self) -> str | None:
        return self.flutter.plugin.plugin_class if self.flutter.plugin else None

    @property
    def ios_prefix(self) -> str | None:
        return self.flutter.plugin.ios_prefix if self.flutter.plugin else None


def _format_validation_error(exc: ValidationError) -> str:
    parts: list[str] = []
    for err in exc.errors():
        loc = ".".join(["flutter", *(str(p) for p in err.get("loc", ()))])
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


def parse_manifest(text: str, *, source: str = "pubspec.yaml") -> FlutterManifest:
    try:
        payload = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ToolExit(f"Error parsing {source}: {exc}") from exc

    if payload is None:
        return FlutterManifest.empty()
    if not isinstance(payload, dict):
        raise ToolExit(f"Invalid {source}: expected a mapping at the top level")

    raw_flutter = payload.get("flutter")
    if raw_flutter is None:
        raw_flutter = {}
    if not isinstance(raw_flutter, dict):
        raise ToolExit(f"Invalid {source}: 'flutter' must be a mapping")

    # A bare `module:` or `plugin:` key still declares the project kind.
    raw_flutter = {
        k: ({} if v is None and k in ("module", "plugin") else v)
        for k, v in raw_flutter.items()
    }

    try:
        section = FlutterSection.model_validate(raw_flutter)
    except ValidationError as exc:
        raise ToolExit(
            f"Invalid {source}: {_format_validation_error(exc)}"
        ) from exc

    return FlutterManifest(descriptor=MappingProxyType(dict(payload)), flutter=section)


def load_manifest(path: Path) -> FlutterManifest:
    """Load `path`, treating a missing file as an empty manifest."""
    if not path.is_file():
        logger.debug("no manifest at %s", path)
        return FlutterManifest.empty()
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ToolExit(f"Error reading {path}: {exc}") from exc
    return parse_manifest(text, source=str(path))
