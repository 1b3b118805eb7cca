from __future__ import annotations

from pathlib import Path

from src.project.organization import organization_from_identifier, organization_names
from src.project.project import FlutterProject

from pubspecs import (
    gradle_file_with_application_id,
    gradle_file_with_group_id,
    project_file_with_bundle_id,
)


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)


def add_ios_with_bundle_id(directory: Path, ident: str) -> None:
    _write(directory / "ios" / "Runner.xcodeproj" / "project.pbxproj", project_file_with_bundle_id(ident))


def add_android_with_application_id(directory: Path, ident: str) -> None:
    _write(directory / "android" / "app" / "build.gradle", gradle_file_with_application_id(ident))


def add_android_with_group(directory: Path, ident: str) -> None:
    _write(directory / "android" / "build.gradle", gradle_file_with_group_id(ident))


def test_organization_from_identifier() -> None:
    assert organization_from_identifier("io.flutter.someProject") == "io.flutter"
    assert organization_from_identifier("single") is None
    assert organization_from_identifier(None) is None


def test_is_empty_if_project_not_created(tmp_path: Path) -> None:
    project = FlutterProject.from_directory(tmp_path / "missing")
    assert organization_names(project) == []


def test_is_empty_if_no_platform_folders_exist(tmp_path: Path) -> None:
    directory = tmp_path / "proj"
    directory.mkdir()
    assert organization_names(FlutterProject.from_directory(directory)) == []


def test_is_populated_from_ios_bundle_identifier(some_project: FlutterProject) -> None:
    add_ios_with_bundle_id(some_project.directory, "io.flutter.someProject")
    assert organization_names(some_project) == ["io.flutter"]


def test_is_populated_from_android_application_id(some_project: FlutterProject) -> None:
    add_android_with_application_id(some_project.directory, "io.flutter.someproject")
    assert organization_names(some_project) == ["io.flutter"]


def test_is_populated_from_ios_bundle_identifier_in_example(some_project: FlutterProject) -> None:
    add_ios_with_bundle_id(some_project.example.directory, "io.flutter.someProject")
    assert organization_names(some_project) == ["io.flutter"]


def test_is_populated_from_android_application_id_in_example(some_project: FlutterProject) -> None:
    add_android_with_application_id(some_project.example.directory, "io.flutter.someproject")
    assert organization_names(some_project) == ["io.flutter"]


def test_is_populated_from_android_group(some_project: FlutterProject) -> None:
    add_android_with_group(some_project.directory, "io.flutter.someproject")
    assert organization_names(some_project) == ["io.flutter"]


def test_is_singleton_if_sources_agree(some_project: FlutterProject) -> None:
    add_ios_with_bundle_id(some_project.directory, "io.flutter.someProject")
    add_android_with_application_id(some_project.directory, "io.flutter.someproject")
    assert organization_names(some_project) == ["io.flutter"]


def test_is_non_singleton_if_sources_disagree(some_project: FlutterProject) -> None:
    add_ios_with_bundle_id(some_project.directory, "io.flutter.someProject")
    add_android_with_application_id(some_project.directory, "io.clutter.someproject")
    assert organization_names(some_project) == ["io.flutter", "io.clutter"]


def test_matching_is_literal(some_project: FlutterProject) -> None:
    add_ios_with_bundle_id(some_project.directory, "IO.Flutter.app")
    add_android_with_application_id(some_project.directory, "io.flutter.app")
    assert organization_names(some_project) == ["IO.Flutter", "io.flutter"]


def test_trailing_gradle_comments_are_ignored(some_project: FlutterProject) -> None:
    _write(
        some_project.directory / "android" / "app" / "build.gradle",
        "android {\n    defaultConfig {\n        applicationId 'io.flutter.app' // release id\n    }\n}\n",
    )
    _write(
        some_project.directory / "android" / "build.gradle",
        "group \"io.clutter.lib\" // published group\n",
    )
    assert organization_names(some_project) == ["io.flutter", "io.clutter"]
