"""Bounded breadth-first directory traversal."""

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

import structlog

from .registry import IGNORE_DIRECTORIES

log = structlog.get_logger("depscout")


@dataclass(frozen=True)
class DirectoryListing:
    """Files and subdirectories of one visited directory."""

    depth: int
    path: Path
    files: tuple[str, ...]
    directories: tuple[str, ...]


def list_directory(path: Path) -> tuple[tuple[str, ...], tuple[str, ...]] | None:
    """Return sorted (files, directories) of ``path``, or None if unreadable."""
    files: list[str] = []
    directories: list[str] = []
    try:
        for entry in path.iterdir():
            if entry.is_dir():
                if entry.name not in IGNORE_DIRECTORIES:
                    directories.append(entry.name)
            elif entry.is_file():
                files.append(entry.name)
    except OSError as e:
        log.debug("walker.list_failed", path=str(path), error=str(e))
        return None
    return tuple(sorted(files)), tuple(sorted(directories))


def walk(root: Path, max_depth: int) -> Iterator[DirectoryListing]:
    """Yield directory listings from ``root`` down to ``max_depth`` inclusive.

    Traversal is breadth-first: every directory at depth N is yielded before
    any directory at depth N + 1. Entries are sorted by name so the order is
    reproducible. Directories named in ``IGNORE_DIRECTORIES`` are skipped.
    """
    queue: deque[tuple[int, Path]] = deque([(0, Path(root))])
    while queue:
        depth, path = queue.popleft()
        listing = list_directory(path)
        if listing is None:
            continue
        files, directories = listing
        yield DirectoryListing(depth=depth, path=path, files=files, directories=directories)
        if depth < max_depth:
            queue.extend((depth + 1, path / name) for name in directories)
