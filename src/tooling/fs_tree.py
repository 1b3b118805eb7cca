"""Immutable snapshots of on-disk file trees.

A tree is made of two entry kinds, `FileEntry` and `DirectoryEntry`. Both
expose the same operations, so callers never need to ask which one they hold.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterator


@dataclass(frozen=True)
class FileEntry:
    name: str
    content: bytes

    def walk(self, prefix: str = "") -> Iterator[str]:
        yield prefix + self.name

    def copy_to(self, target: Path) -> None:
        target.mkdir(parents=True, exist_ok=True)
        (target / self.name).write_bytes(self.content)


@dataclass(frozen=True)
class DirectoryEntry:
    name: str
    children: tuple[FileEntry | DirectoryEntry, ...] = ()

    def walk(self, prefix: str = "") -> Iterator[str]:
        here = prefix + self.name + "/"
        yield here
        for child in self.children:
            yield from child.walk(here)

    def copy_to(self, target: Path) -> None:
        dest = target / self.name
        dest.mkdir(parents=True, exist_ok=True)
        for child in self.children:
            child.copy_to(dest)

    def paths(self) -> list[str]:
        """Relative paths of everything below this directory (itself excluded)."""
        out: list[str] = []
        for child in self.children:
            out.extend(child.walk())
        return out


def snapshot(path: Path) -> FileEntry | DirectoryEntry | None:
    if path.is_dir():
        children = tuple(
            s for s in (snapshot(p) for p in sorted(path.iterdir())) if s is not None
        )
        return DirectoryEntry(name=path.name, children=children)
    if path.is_file():
        return FileEntry(name=path.name, content=path.read_bytes())
    return None
