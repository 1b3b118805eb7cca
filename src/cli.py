from __future__ import annotations

import argparse
import logging
import sys

from src.platform_scaffold.scaffold import ensure_ready_for_platform_specific_tooling
from src.project.organization import organization_names
from src.project.project import FlutterProject
from src.tooling.config import ToolingConfig
from src.tooling.errors import ToolExit

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="flutter-scaffold")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="cmd", required=True)

    for name, help_text in (
        ("info", "Show how a project directory is classified."),
        ("ensure-ready", "Generate platform glue files for Android and iOS."),
        ("org-names", "Print organization names found in platform project files."),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument(
            "directory",
            nargs="?",
            default=None,
            help="Project directory (default: current directory)",
        )
    return parser


def _load_project(directory: str | None) -> FlutterProject:
    if directory is None:
        return FlutterProject.current()
    return FlutterProject.from_path(directory)


def _run(args: argparse.Namespace) -> int:
    project = _load_project(args.directory)

    if args.cmd == "info":
        print(f"name: {project.manifest.app_name or '(none)'}")
        print(f"kind: {project.kind}")
        print(f"android: {project.android.directory}")
        print(f"ios: {project.ios.directory}")
        print(f"example: {'yes' if project.has_example_app else 'no'}")
        return 0

    if args.cmd == "ensure-ready":
        if not project.directory.is_dir():
            raise ToolExit(f"Project directory not found: {project.directory}")
        ensure_ready_for_platform_specific_tooling(project, ToolingConfig.from_env())
        return 0

    if args.cmd == "org-names":
        for name in organization_names(project):
            print(name)
        return 0

    raise SystemExit(f"Unknown command: {args.cmd}")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return _run(args)
    except ToolExit as exc:
        print(exc.message, file=sys.stderr)
        return exc.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
