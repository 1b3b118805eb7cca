from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from src.platform_scaffold.files import write_if_changed, write_if_missing

if TYPE_CHECKING:  # pragma: no cover
    from src.platform_scaffold.plugins import Plugin
    from src.project.project import FlutterProject
    from src.tooling.config import ToolingConfig

logger = logging.getLogger(__name__)


def _escape_property_value(value: str) -> str:
    # Java properties treat backslashes as escapes (Windows paths).
    return value.replace("\\", "\\\\")


def local_properties_updates(
    project: FlutterProject, config: ToolingConfig
) -> dict[str, str]:
    updates: dict[str, str] = {}
    if config.flutter_root:
        updates["flutter.sdk"] = _escape_property_value(config.flutter_root)
    if config.android_sdk_root:
        updates["sdk.dir"] = _escape_property_value(config.android_sdk_root)
    updates["flutter.buildMode"] = config.build_mode
    if project.manifest.build_name:
        updates["flutter.versionName"] = project.manifest.build_name
    if project.manifest.build_number:
        updates["flutter.versionCode"] = project.manifest.build_number
    return updates


def render_local_properties(existing: str, updates: dict[str, str]) -> str:
    """Apply `updates` to the text of a properties file.

    Existing lines (comments included) stay where they are; updated keys are
    replaced in place and new keys are appended in `updates` order.
    """
    pending = dict(updates)
    lines: list[str] = []
    for raw in existing.splitlines():
        key, sep, _ = raw.strip().partition("=")
        key = key.strip()
        if sep and key in pending:
            lines.append(f"{key}={pending.pop(key)}")
        else:
            lines.append(raw)
    lines.extend(f"{k}={v}" for k, v in pending.items())
    return "\n".join(lines) + "\n"


def render_settings_gradle(_project: FlutterProject) -> str:
    return (
        "// Generated file. Do not edit.\n"
        "\n"
        "rootProject.name = 'android_generated'\n"
        "setBinding(new Binding([gradle: this]))\n"
        "evaluate(new File(settingsDir, 'include_flutter.groovy'))\n"
    )


def render_include_flutter_groovy(_project: FlutterProject) -> str:
    return (
        "// Generated file. Do not edit.\n"
        "\n"
        "def scriptFile = getClass().protectionDomain.codeSource.location.toURI()\n"
        "def flutterProjectRoot = new File(scriptFile).parentFile.parentFile\n"
        "\n"
        "gradle.include ':flutter'\n"
        "gradle.project(':flutter').projectDir = new File(flutterProjectRoot, '.android/Flutter')\n"
        "\n"
        "def plugins = new Properties()\n"
        "def pluginsFile = new File(flutterProjectRoot, '.flutter-plugins')\n"
        "if (pluginsFile.exists()) {\n"
        "    pluginsFile.withReader('UTF-8') { reader -> plugins.load(reader) }\n"
        "}\n"
        "\n"
        "plugins.each { name, path ->\n"
        "    def pluginDirectory = flutterProjectRoot.toPath().resolve(path).resolve('android').toFile()\n"
        "    gradle.include \":$name\"\n"
        "    gradle.project(\":$name\").projectDir = pluginDirectory\n"
        "}\n"
    )


def render_module_build_gradle(project: FlutterProject) -> str:
    package = project.manifest.module_android_package or "com.example"
    return (
        "// Generated file. Do not edit.\n"
        "\n"
        "def localProperties = new Properties()\n"
        "def localPropertiesFile = new File(buildscript.sourceFile.parentFile.parentFile, 'local.properties')\n"
        "if (localPropertiesFile.exists()) {\n"
        "    localPropertiesFile.withReader('UTF-8') { reader -> localProperties.load(reader) }\n"
        "}\n"
        "\n"
        "def flutterRoot = localProperties.getProperty('flutter.sdk')\n"
        "if (flutterRoot == null) {\n"
        '    throw new GradleException("Flutter SDK not found. Define location with flutter.sdk in the local.properties file.")\n'
        "}\n"
        "\n"
        "apply plugin: 'com.android.library'\n"
        'apply from: "$flutterRoot/packages/flutter_tools/gradle/flutter.gradle"\n'
        "\n"
        f"group '{package}'\n"
        "version '1.0'\n"
        "\n"
        "android {\n"
        "    compileSdkVersion 27\n"
        "\n"
        "    defaultConfig {\n"
        "        minSdkVersion 16\n"
        "        targetSdkVersion 27\n"
        "    }\n"
        "}\n"
        "\n"
        "flutter {\n"
        "    source '../..'\n"
        "}\n"
    )


def render_module_android_manifest(project: FlutterProject) -> str:
    package = project.manifest.module_android_package or "com.example"
    return (
        '<manifest xmlns:android="http://schemas.android.com/apk/res/android"\n'
        f'    package="{package}">\n'
        "</manifest>\n"
    )


def render_module_gitignore(_project: FlutterProject) -> str:
    return ".gradle\n/local.properties\n/build\n*.iml\n"


def render_plugin_registrant(plugins: list[Plugin]) -> str:
    android_plugins = [p for p in plugins if p.has_android]
    imports = "".join(f"import {p.android_class};\n" for p in android_plugins)
    calls = "".join(
        f'    {p.plugin_class}.registerWith(registry.registrarFor("{p.android_class}"));\n'
        for p in android_plugins
    )
    return (
        "package io.flutter.plugins;\n"
        "\n"
        "import io.flutter.plugin.common.PluginRegistry;\n"
        + imports
        + "\n"
        "/**\n"
        " * Generated file. Do not edit.\n"
        " */\n"
        "public final class GeneratedPluginRegistrant {\n"
        "  public static void registerWith(PluginRegistry registry) {\n"
        "    if (alreadyRegisteredWith(registry)) {\n"
        "      return;\n"
        "    }\n"
        + calls
        + "  }\n"
        "\n"
        "  private static boolean alreadyRegisteredWith(PluginRegistry registry) {\n"
        "    final String key = GeneratedPluginRegistrant.class.getCanonicalName();\n"
        "    if (registry.hasPlugin(key)) {\n"
        "      return true;\n"
        "    }\n"
        "    registry.registrarFor(key);\n"
        "    return false;\n"
        "  }\n"
        "}\n"
    )


def _render_module_template(project: FlutterProject) -> None:
    root = project.android.directory
    files: list[tuple[Path, str]] = [
        (project.android.settings_gradle_file, render_settings_gradle(project)),
        (root / "include_flutter.groovy", render_include_flutter_groovy(project)),
        (root / "Flutter" / "build.gradle", render_module_build_gradle(project)),
        (
            root / "Flutter" / "src" / "main" / "AndroidManifest.xml",
            render_module_android_manifest(project),
        ),
        (root / ".gitignore", render_module_gitignore(project)),
    ]
    for path, content in files:
        write_if_missing(path, content)


def ensure_android_ready(
    project: FlutterProject, config: ToolingConfig, plugins: list[Plugin]
) -> None:
    android = project.android
    if android.is_module:
        _render_module_template(project)
    if not android.directory.is_dir():
        logger.debug("no android directory in %s", project.directory)
        return

    props = android.local_properties_file
    # Properties files written by Java tools are often Latin-1; keep their bytes.
    existing = (
        props.read_text(encoding="utf-8", errors="surrogateescape")
        if props.is_file()
        else ""
    )
    write_if_changed(
        props,
        render_local_properties(existing, local_properties_updates(project, config)),
        errors="surrogateescape",
    )
    write_if_changed(android.plugin_registrant_file, render_plugin_registrant(plugins))
