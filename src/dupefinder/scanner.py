"""File discovery: lazily enumerate files and their sizes under a set of roots."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

import logging
import os
import pathlib
import stat

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileEntry:
    """A discovered regular file."""

    path: pathlib.Path
    size: int


@dataclass(frozen=True)
class Skipped:
    """A file or directory that could not be read, with the reason why."""

    path: pathlib.Path
    reason: str


def iter_files(
    directories: Iterable[str | os.PathLike],
    recursive: bool = False,
) -> Iterator[FileEntry | Skipped]:
    """Yield a FileEntry for every regular file under *directories*.

    Unreadable directories and entries that cannot be stat'd are yielded as
    Skipped instead of raising. Subdirectories are only descended into when
    *recursive* is set. Each directory is listed at most once, compared by
    its resolved real path.
    """
    pending = [pathlib.Path(d) for d in directories]
    visited: set[str] = set()

    while pending:
        next_level: list[pathlib.Path] = []
        for directory in pending:
            real = os.path.realpath(directory)
            if real in visited:
                logger.debug(f"already scanned, skipping: {directory}")
                continue
            visited.add(real)

            try:
                with os.scandir(directory) as it:
                    entries = list(it)
            except OSError as e:
                yield Skipped(directory, f"cannot read directory: {e}")
                continue

            for entry in entries:
                path = pathlib.Path(entry.path)
                try:
                    st = entry.stat()
                except OSError as e:
                    yield Skipped(path, f"cannot stat: {e}")
                    continue

                if stat.S_ISDIR(st.st_mode):
                    if recursive:
                        next_level.append(path)
                    continue
                if stat.S_ISREG(st.st_mode):
                    yield FileEntry(path, st.st_size)

        pending = next_level


def scan(
    directories: Iterable[str | os.PathLike],
    recursive: bool = False,
    log: logging.Logger | None = None,
) -> Iterator[FileEntry]:
    """Like iter_files, but warn about skipped items and yield only files."""
    log = log or logger
    for item in iter_files(directories, recursive=recursive):
        if isinstance(item, Skipped):
            log.warning(f"skipping {item.path}: {item.reason}")
            continue
        yield item
