"""DupeChecker: duplicate detection over a fixed set of directories."""

from __future__ import annotations

from collections.abc import Iterable

import logging
import os
import pathlib

from tqdm import tqdm

from dupefinder.hasher import CHUNK_SIZE, DuplicateGroup, find_duplicates, hash_entries, hash_file
from dupefinder.scanner import FileEntry, Skipped, scan

logger = logging.getLogger(__name__)


class DupeChecker:
    """Finds files with identical content across a set of directories.

    All directories are treated as one pool: a file in one directory can be
    a duplicate of a file in another. Every call to run() or run_for_file()
    re-scans the filesystem from scratch, so repeated calls pick up files
    that were added, removed or changed in between.
    """

    def __init__(
        self,
        directories: Iterable[str | os.PathLike],
        recursive: bool = False,
        *,
        log: logging.Logger | None = None,
        chunk_size: int = CHUNK_SIZE,
        workers: int = 1,
        skip_empty: bool = False,
        progress: bool = False,
    ):
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be at least 1, got {chunk_size}")
        # ordered, without repeats
        self._directories = tuple(dict.fromkeys(str(d) for d in directories))
        self._recursive = recursive
        self._log = log or logger
        self._chunk_size = chunk_size
        self._workers = workers
        self._skip_empty = skip_empty
        self._progress = progress

    @classmethod
    def new(cls, directories: Iterable[str | os.PathLike], **kwargs) -> DupeChecker:
        """Checker that only looks at the direct children of *directories*."""
        return cls(directories, recursive=False, **kwargs)

    @classmethod
    def new_recursive(cls, directories: Iterable[str | os.PathLike], **kwargs) -> DupeChecker:
        """Checker that descends into every subdirectory of *directories*."""
        return cls(directories, recursive=True, **kwargs)

    @property
    def directories(self) -> tuple[str, ...]:
        return self._directories

    @property
    def recursive(self) -> bool:
        return self._recursive

    def __repr__(self) -> str:
        return f"DupeChecker(directories={list(self._directories)!r}, recursive={self._recursive!r})"

    def _entries(self):
        for entry in scan(self._directories, recursive=self._recursive, log=self._log):
            if self._skip_empty and entry.size == 0:
                continue
            yield entry

    def run(self) -> dict[tuple[int, str], DuplicateGroup]:
        """Scan all directories and return duplicate groups keyed by (size, hash)."""
        self._log.debug(f"scanning {len(self._directories)} root(s), recursive={self._recursive}")
        return find_duplicates(
            self._entries(),
            log=self._log,
            workers=self._workers,
            chunk_size=self._chunk_size,
            progress=self._progress,
        )

    def run_for_file(self, path: str | os.PathLike) -> DuplicateGroup | None:
        """Find the duplicates of a single file within the directories.

        Returns the group containing *path* (listed first) and every other
        file with the same content, or None if there is no such file.
        Raises OSError if *path* itself cannot be read; no directory is
        scanned in that case.
        """
        target = pathlib.Path(path)
        size = target.stat().st_size
        if not target.is_file():
            raise IsADirectoryError(f"Not a regular file: {target}")
        target_hash = hash_file(target, self._chunk_size)
        # symlinks and other aliases of the target stay candidates, as in run()
        target_abs = os.path.abspath(target)

        candidates: list[FileEntry] = [
            entry
            for entry in self._entries()
            if entry.size == size and os.path.abspath(entry.path) != target_abs
        ]
        self._log.debug(f"{len(candidates)} candidate(s) of size {size} for {target}")
        if not candidates:
            return None

        matches = [str(target)]
        with tqdm(total=len(candidates), desc="Hashing", unit="file", disable=not self._progress) as bar:
            for result in hash_entries(candidates, workers=self._workers, chunk_size=self._chunk_size):
                bar.update(1)
                if isinstance(result, Skipped):
                    self._log.warning(f"skipping {result.path}: {result.reason}")
                    continue
                if result.hash == target_hash:
                    matches.append(str(result.entry.path))

        if len(matches) < 2:
            return None
        return DuplicateGroup(size=size, hash=target_hash, files=matches)
