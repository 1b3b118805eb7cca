from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.platform_scaffold.files import write_if_changed, write_if_missing

if TYPE_CHECKING:  # pragma: no cover
    from src.platform_scaffold.plugins import Plugin
    from src.project.project import FlutterProject
    from src.tooling.config import ToolingConfig

logger = logging.getLogger(__name__)


def render_generated_xcconfig(project: FlutterProject, config: ToolingConfig) -> str:
    lines = ["// This is a generated file; do not edit or check into version control."]
    if config.flutter_root:
        lines.append(f"FLUTTER_ROOT={config.flutter_root}")
    lines.extend(
        [
            f"FLUTTER_APPLICATION_PATH={project.directory.resolve()}",
            f"FLUTTER_TARGET={config.target}",
            f"FLUTTER_BUILD_DIR={config.build_dir}",
            "SYMROOT=${SOURCE_ROOT}/../" + config.build_dir + "/ios",
        ]
    )
    if config.framework_dir:
        lines.append(f"FLUTTER_FRAMEWORK_DIR={config.framework_dir}")
    if project.manifest.build_name:
        lines.append(f"FLUTTER_BUILD_NAME={project.manifest.build_name}")
    if project.manifest.build_number:
        lines.append(f"FLUTTER_BUILD_NUMBER={project.manifest.build_number}")
    if config.track_widget_creation:
        lines.append("TRACK_WIDGET_CREATION=true")
    return "\n".join(lines) + "\n"


def render_podhelper(_project: FlutterProject) -> str:
    return (
        "# Generated file. Do not edit.\n"
        "\n"
        "def parse_KV_file(file, separator='=')\n"
        "  file_abs_path = File.expand_path(file)\n"
        "  if !File.exists? file_abs_path\n"
        "    return [];\n"
        "  end\n"
        "  pods_array = []\n"
        "  skip_line_start_symbols = [\"#\", \"/\"]\n"
        "  File.foreach(file_abs_path) { |line|\n"
        "    next if skip_line_start_symbols.any? { |symbol| line =~ /^\\s*#{symbol}/ }\n"
        "    plugin = line.split(pattern=separator)\n"
        "    if plugin.length == 2\n"
        "      podname = plugin[0].strip()\n"
        "      path = plugin[1].strip()\n"
        "      podpath = File.expand_path(\"#{path}\", file_abs_path)\n"
        "      pods_array.push({:name => podname, :path => podpath});\n"
        "    end\n"
        "  }\n"
        "  return pods_array\n"
        "end\n"
        "\n"
        "def flutter_root(f)\n"
        "  generated_xcode_build_settings = parse_KV_file(File.join(f, File.join('.ios', 'Flutter', 'Generated.xcconfig')))\n"
        "  if generated_xcode_build_settings.empty?\n"
        "    puts \"Generated.xcconfig must exist. Make sure `flutter packages get` is executed in the project.\"\n"
        "    exit\n"
        "  end\n"
        "  generated_xcode_build_settings.map { |p|\n"
        "    if p[:name] == 'FLUTTER_ROOT'\n"
        "      return p[:path]\n"
        "    end\n"
        "  }\n"
        "end\n"
        "\n"
        "flutter_application_path ||= File.join(__dir__, '..', '..')\n"
        "framework_dir = File.join(flutter_application_path, '.ios', 'Flutter')\n"
        "\n"
        "engine_dir = File.join(framework_dir, 'engine')\n"
        "if !File.exist?(engine_dir)\n"
        "  debug_framework_dir = File.join(flutter_root(flutter_application_path), 'bin', 'cache', 'artifacts', 'engine', 'ios')\n"
        "  FileUtils.mkdir_p(engine_dir)\n"
        "  FileUtils.cp_r(File.join(debug_framework_dir, 'Flutter.framework'), engine_dir)\n"
        "  FileUtils.cp(File.join(debug_framework_dir, 'Flutter.podspec'), engine_dir)\n"
        "end\n"
        "\n"
        "pod 'Flutter', :path => engine_dir\n"
        "pod 'FlutterPluginRegistrant', :path => File.join(framework_dir, 'FlutterPluginRegistrant')\n"
        "\n"
        "symlinks_dir = File.join(framework_dir, '.symlinks')\n"
        "FileUtils.mkdir_p(symlinks_dir)\n"
        "plugin_pods = parse_KV_file(File.join(flutter_application_path, '.flutter-plugins'))\n"
        "plugin_pods.map { |r|\n"
        "  symlink = File.join(symlinks_dir, r[:name])\n"
        "  FileUtils.rm_f(symlink)\n"
        "  File.symlink(r[:path], symlink)\n"
        "  pod r[:name], :path => File.join(symlink, 'ios')\n"
        "}\n"
    )


def render_registrant_podspec(plugins: list[Plugin]) -> str:
    deps = "".join(f"  s.dependency '{p.name}'\n" for p in plugins if p.has_ios)
    return (
        "#\n"
        "# Generated file, do not edit.\n"
        "#\n"
        "\n"
        "Pod::Spec.new do |s|\n"
        "  s.name             = 'FlutterPluginRegistrant'\n"
        "  s.version          = '0.0.1'\n"
        "  s.summary          = 'Registers plugins with your flutter app'\n"
        "  s.description      = <<-DESC\n"
        "Depends on all your plugins, and provides a function to register them.\n"
        "                       DESC\n"
        "  s.homepage         = 'https://flutter.io'\n"
        "  s.license          = { :type => 'BSD' }\n"
        "  s.author           = { 'Flutter Dev Team' => 'flutter-dev@googlegroups.com' }\n"
        "  s.ios.deployment_target = '8.0'\n"
        "  s.source_files =  \"Classes\", \"Classes/**/*.{h,m}\"\n"
        "  s.source           = { :path => '.' }\n"
        "  s.public_header_files = './Classes/**/*.h'\n"
        "  s.dependency 'Flutter'\n" + deps + "end\n"
    )


def render_registrant_header() -> str:
    return (
        "//\n"
        "//  Generated file. Do not edit.\n"
        "//\n"
        "\n"
        "#ifndef GeneratedPluginRegistrant_h\n"
        "#define GeneratedPluginRegistrant_h\n"
        "\n"
        "#import <Flutter/Flutter.h>\n"
        "\n"
        "@interface GeneratedPluginRegistrant : NSObject\n"
        "+ (void)registerWithRegistry:(NSObject<FlutterPluginRegistry>*)registry;\n"
        "@end\n"
        "\n"
        "#endif /* GeneratedPluginRegistrant_h */\n"
    )


def render_registrant_implementation(plugins: list[Plugin]) -> str:
    ios_plugins = [p for p in plugins if p.has_ios]
    imports = "".join(f"#import <{p.name}/{p.ios_class}.h>\n" for p in ios_plugins)
    calls = "".join(
        f'  [{p.ios_class} registerWithRegistrar:[registry registrarForPlugin:@"{p.ios_class}"]];\n'
        for p in ios_plugins
    )
    return (
        "//\n"
        "//  Generated file. Do not edit.\n"
        "//\n"
        "\n"
        '#import "GeneratedPluginRegistrant.h"\n'
        + imports
        + "\n"
        "@implementation GeneratedPluginRegistrant\n"
        "\n"
        "+ (void)registerWithRegistry:(NSObject<FlutterPluginRegistry>*)registry {\n"
        + calls
        + "}\n"
        "\n"
        "@end\n"
    )


def render_module_gitignore(_project: FlutterProject) -> str:
    return (
        "*.mode1v3\n*.mode2v3\n*.moved-aside\n*.pbxuser\n*.perspectivev3\n"
        "**/*sync/\n.sconsign.dblite\n.tags*\n**/.vagrant/\n**/DerivedData/\n"
        "Icon?\n**/Pods/\n**/.symlinks/\nprofile\nxcuserdata\n**/.generated/\n"
        "Flutter/App.framework\nFlutter/Flutter.framework\nFlutter/Generated.xcconfig\n"
        "Flutter/app.flx\nFlutter/app.zip\nFlutter/flutter_assets/\nFlutter/engine/\n"
        "ServiceDefinitions.json\n"
    )


def ensure_ios_ready(
    project: FlutterProject, config: ToolingConfig, plugins: list[Plugin]
) -> None:
    ios = project.ios
    if ios.is_module:
        write_if_missing(ios.podhelper_file, render_podhelper(project))
        write_if_missing(ios.directory / ".gitignore", render_module_gitignore(project))
    if not ios.directory.is_dir():
        logger.debug("no ios directory in %s", project.directory)
        return

    write_if_changed(
        ios.generated_xcode_properties_file, render_generated_xcconfig(project, config)
    )
    write_if_changed(ios.plugin_registrant_header, render_registrant_header())
    write_if_changed(
        ios.plugin_registrant_implementation, render_registrant_implementation(plugins)
    )
    if ios.is_module:
        write_if_changed(
            ios.plugin_registrant_dir.parent / "FlutterPluginRegistrant.podspec",
            render_registrant_podspec(plugins),
        )
