"""Shared fixtures for dupefinder tests."""

import pathlib

import pytest


@pytest.fixture
def dir_a(tmp_path: pathlib.Path) -> pathlib.Path:
    """First scan root."""
    d = tmp_path / "dir_a"
    d.mkdir()
    return d


@pytest.fixture
def dir_b(tmp_path: pathlib.Path) -> pathlib.Path:
    """Second scan root."""
    d = tmp_path / "dir_b"
    d.mkdir()
    return d


@pytest.fixture
def nested_tree(tmp_path: pathlib.Path) -> pathlib.Path:
    """A root with one file on top and an identical copy in a subdirectory.

    root/x.txt and root/sub/y.txt share content; root/unique.txt does not
    share its size with anything.
    """
    root = tmp_path / "root"
    sub = root / "sub"
    sub.mkdir(parents=True)
    (root / "x.txt").write_bytes(b"nested duplicate content")
    (sub / "y.txt").write_bytes(b"nested duplicate content")
    (root / "unique.txt").write_bytes(b"only one of these")
    return root
