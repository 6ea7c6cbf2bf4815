"""2-phase duplicate detection: file size grouping, then SHA256 hashing."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import hashlib
import logging
import os

from tqdm import tqdm

from dupefinder.scanner import FileEntry, Skipped

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class HashedFile:
    """A file together with the digest of its content."""

    entry: FileEntry
    hash: str


@dataclass
class DuplicateGroup:
    """A group of files with identical size and content hash."""

    size: int
    hash: str
    files: list[str]

    @property
    def key(self) -> tuple[int, str]:
        return (self.size, self.hash)

    @property
    def wasted_bytes(self) -> int:
        """Bytes that would be freed by keeping a single copy."""
        return self.size * (len(self.files) - 1)


def hash_file(path: str | os.PathLike, chunk_size: int = CHUNK_SIZE) -> str:
    """Compute the SHA256 hash of a file as an uppercase hex string.

    The file is read in *chunk_size* pieces, so memory use does not depend
    on the file size. Raises OSError if the file cannot be read and
    ValueError if *chunk_size* is below 1.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be at least 1, got {chunk_size}")
    sha = hashlib.sha256()
    with open(path, "rb") as f:
        while chunk := f.read(chunk_size):
            sha.update(chunk)
    return sha.hexdigest().upper()


def _hash_entry(entry: FileEntry, chunk_size: int) -> HashedFile | Skipped:
    try:
        return HashedFile(entry, hash_file(entry.path, chunk_size))
    except OSError as e:
        return Skipped(entry.path, f"cannot hash: {e}")


def hash_entries(
    entries: Iterable[FileEntry],
    workers: int = 1,
    chunk_size: int = CHUNK_SIZE,
) -> Iterator[HashedFile | Skipped]:
    """Hash *entries*, yielding one result per entry in input order.

    Read failures come back as Skipped values. With *workers* > 1 the files
    are hashed on a thread pool; results are still yielded in input order.
    """
    if workers <= 1:
        for entry in entries:
            yield _hash_entry(entry, chunk_size)
        return

    with ThreadPoolExecutor(max_workers=workers) as executor:
        yield from executor.map(lambda e: _hash_entry(e, chunk_size), entries)


def group_by_size(entries: Iterable[FileEntry]) -> dict[int, list[FileEntry]]:
    """Group entries by exact file size, keeping encounter order."""
    size_groups: dict[int, list[FileEntry]] = defaultdict(list)
    for entry in entries:
        size_groups[entry.size].append(entry)
    return dict(size_groups)


def find_duplicates(
    entries: Iterable[FileEntry],
    log: logging.Logger | None = None,
    workers: int = 1,
    chunk_size: int = CHUNK_SIZE,
    progress: bool = False,
) -> dict[tuple[int, str], DuplicateGroup]:
    """Find duplicate files using 2-phase detection.

    Phase 1: Group files by size (cheap). Sizes with a single file are
    dropped without reading the file.
    Phase 2: For same-size groups, compute SHA256 and group by hash.

    Files that fail to hash are logged to *log* and left out.
    """
    log = log or logger

    # Phase 1: group by file size
    size_groups = group_by_size(entries)
    candidates = {s: g for s, g in size_groups.items() if len(g) >= 2}
    files_to_hash = sum(len(g) for g in candidates.values())
    log.debug(
        f"phase 1 (size grouping): {sum(len(g) for g in size_groups.values())} files -> "
        f"{len(size_groups) - len(candidates)} unique by size, "
        f"{len(candidates)} size group(s) with {files_to_hash} files to hash"
    )

    # Phase 2: hash only same-size groups
    duplicates: dict[tuple[int, str], DuplicateGroup] = {}
    hashed = 0
    with tqdm(total=files_to_hash, desc="Hashing", unit="file", disable=not progress) as bar:
        for size, group in candidates.items():
            log.debug(f"hashing {len(group)} files of size {size}")
            hash_groups: dict[str, list[str]] = defaultdict(list)
            for result in hash_entries(group, workers=workers, chunk_size=chunk_size):
                bar.update(1)
                if isinstance(result, Skipped):
                    log.warning(f"skipping {result.path}: {result.reason}")
                    continue
                hashed += 1
                log.debug(f"  {result.hash[:12]}.. {result.entry.path}")
                hash_groups[result.hash].append(str(result.entry.path))

            for h, files in hash_groups.items():
                if len(files) >= 2:
                    duplicates[(size, h)] = DuplicateGroup(size=size, hash=h, files=files)

    log.debug(f"phase 2 (hashing): {hashed} files hashed, {len(duplicates)} duplicate group(s)")
    return duplicates
