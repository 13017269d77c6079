#!/usr/bin/env python3
"""Tests for PathIndex."""

import pytest

from memrepo.repository.index import PathIndex
from memrepo.resources.file import FileResource


@pytest.fixture
def index():
    index = PathIndex()
    for path in ["/b", "/a/x", "/a", "/a-b", "/ab", "/a/y/z"]:
        index.set(path, FileResource(path))
    return index


class TestPathIndex:
    """Tests for PathIndex."""

    def test_sorted_iteration(self, index):
        """Paths are iterated in ascending order."""
        assert list(index) == ["/a", "/a-b", "/a/x", "/a/y/z", "/ab", "/b"]

    def test_get(self, index):
        """get() returns the stored resource or the default."""
        assert index.get("/a/x").path == "/a/x"
        assert index.get("/missing") is None
        assert index["/b"].path == "/b"
        with pytest.raises(KeyError):
            index["/missing"]

    def test_replace_keeps_single_entry(self, index):
        """Setting an existing path replaces the resource."""
        replacement = FileResource("/a")
        index.set("/a", replacement)

        assert index["/a"] is replacement
        assert list(index).count("/a") == 1
        assert len(index) == 6

    def test_delete(self, index):
        """delete() removes the path from both views."""
        index.delete("/a/x")

        assert "/a/x" not in index
        assert "/a/x" not in list(index)
        assert len(index) == 5

    def test_delete_missing(self, index):
        """Deleting an unknown path raises KeyError."""
        with pytest.raises(KeyError):
            index.delete("/missing")

    def test_iter_prefix(self, index):
        """Prefix scans return the adjacent matching range."""
        assert list(index.iter_prefix("/a/")) == ["/a/x", "/a/y/z"]
        assert list(index.iter_prefix("/a")) == ["/a", "/a-b", "/a/x", "/a/y/z", "/ab"]
        assert list(index.iter_prefix("/c")) == []

    def test_items(self, index):
        """items() yields pairs in path order."""
        paths = [path for path, _ in index.items()]
        assert paths == list(index)
        assert all(resource.path == path for path, resource in index.items())
