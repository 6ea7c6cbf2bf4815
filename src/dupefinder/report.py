"""Human-readable rendering of duplicate groups."""

from __future__ import annotations

from collections.abc import Iterable

from dupefinder.hasher import DuplicateGroup

_UNITS = ("KB", "MB", "GB", "TB")


def format_size(size_bytes: int) -> str:
    """Format bytes as human-readable string."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    value = size_bytes / 1024
    for unit in _UNITS[:-1]:
        if value < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} {_UNITS[-1]}"


def sort_groups(groups: Iterable[DuplicateGroup]) -> list[DuplicateGroup]:
    """Largest files first; ties broken by hash for a stable order."""
    return sorted(groups, key=lambda g: (-g.size, g.hash))


def format_group(index: int, group: DuplicateGroup) -> list[str]:
    """Render one group as a header line followed by one line per file."""
    lines = [f"  Group {index} ({len(group.files)} files, {format_size(group.size)}, {group.hash[:12]}..):"]
    lines.extend(f"    {f}" for f in group.files)
    return lines


def total_wasted(groups: Iterable[DuplicateGroup]) -> int:
    """Bytes freed if every group were reduced to a single copy."""
    return sum(g.wasted_bytes for g in groups)
