from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.platform_scaffold.android import ensure_android_ready
from src.platform_scaffold.ios import ensure_ios_ready
from src.platform_scaffold.plugins import find_plugins, write_flutter_plugins_file
from src.tooling.config import ToolingConfig

if TYPE_CHECKING:  # pragma: no cover
    from src.project.project import FlutterProject

logger = logging.getLogger(__name__)


def ensure_ready_for_platform_specific_tooling(
    project: FlutterProject, config: ToolingConfig | None = None
) -> None:
    """Generate the platform glue Xcode and Gradle builds expect to find.

    Safe to call repeatedly. Does nothing for projects that do not exist yet
    and for plugins and packages, whose platform code is built through their
    example app or the host app instead.
    """
    if not project.directory.is_dir():
        logger.info("skipping %s: project directory does not exist", project.directory)
        return
    if project.has_example_app or project.kind in ("plugin", "package"):
        logger.info("skipping %s: not an app or module (%s)", project.directory, project.kind)
        return

    cfg = config if config is not None else ToolingConfig.from_env()
    plugins = find_plugins(project)
    logger.debug("found %d plugin(s) for %s", len(plugins), project.directory)

    ensure_android_ready(project, cfg, plugins)
    ensure_ios_ready(project, cfg, plugins)
    write_flutter_plugins_file(project, plugins)
