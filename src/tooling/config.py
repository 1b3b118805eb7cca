from __future__ import annotations

import os
from dataclasses import dataclass

_BUILD_MODES = ("debug", "profile", "release")


def _env_str(name: str) -> str:
    return str(os.environ.get(name) or "").strip()


def _env_bool(name: str, *, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in ("1", "true", "yes", "on"):
        return True
    if v in ("0", "false", "no", "off"):
        return False
    return default


def _build_mode(raw: str) -> str:
    v = (raw or "").strip().lower()
    return v if v in _BUILD_MODES else "debug"


@dataclass(frozen=True)
class ToolingConfig:
    flutter_root: str = ""
    android_sdk_root: str = ""
    build_mode: str = "debug"
    target: str = "lib/main.dart"
    build_dir: str = "build"
    track_widget_creation: bool = False

    @classmethod
    def from_env(cls) -> ToolingConfig:
        return cls(
            flutter_root=_env_str("FLUTTER_ROOT"),
            # ANDROID_HOME wins; ANDROID_SDK_ROOT is the newer spelling.
            android_sdk_root=_env_str("ANDROID_HOME") or _env_str("ANDROID_SDK_ROOT"),
            build_mode=_build_mode(_env_str("FLUTTER_BUILD_MODE")),
            target=_env_str("FLUTTER_TARGET") or "lib/main.dart",
            build_dir=_env_str("FLUTTER_BUILD_DIR") or "build",
            track_widget_creation=_env_bool(
                "FLUTTER_TRACK_WIDGET_CREATION", default=False
            ),
        )

    @property
    def framework_dir(self) -> str:
        if not self.flutter_root:
            return ""
        return os.path.join(self.flutter_root, "bin", "cache", "artifacts", "engine", "ios")
