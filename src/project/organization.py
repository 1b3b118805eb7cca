from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from src.project.project import FlutterProject

logger = logging.getLogger(__name__)


def organization_from_identifier(identifier: str | None) -> str | None:
    """`io.flutter.someProject` -> `io.flutter`; no dot means no organization."""
    if not identifier:
        return None
    idx = identifier.rfind(".")
    if idx < 0:
        return None
    return identifier[:idx]


def organization_names(project: FlutterProject) -> list[str]:
    candidates = [
        project.ios.product_bundle_identifier(),
        project.android.application_id(),
        project.android.group(),
        project.example.android.application_id(),
        project.example.ios.product_bundle_identifier(),
    ]
    out: list[str] = []
    for ident in candidates:
        org = organization_from_identifier(ident)
        if org and org not in out:
            out.append(org)
    if len(out) > 1:
        logger.debug("ambiguous organization names for %s: %s", project.directory, out)
    return out
