#!/usr/bin/env python3
"""Tests for the resource base classes and in-memory resources."""

from unittest.mock import MagicMock

import pytest

from memrepo.core.exceptions import ResourceNotFoundError
from memrepo.core.validators import ValidationError
from memrepo.resources.base import DirectoryResource, Resource
from memrepo.resources.file import FileResource
from memrepo.resources.virtual import VirtualDirectoryResource


class TestConstruction:
    """Tests for resource names and paths."""

    def test_name_from_path(self):
        """The name defaults to the last path segment."""
        resource = FileResource("/css/style.css")
        assert resource.name == "style.css"
        assert resource.path == "/css/style.css"

    def test_path_is_canonicalized(self):
        """Construction paths are canonicalized."""
        assert FileResource("/css/./x/../style.css/").path == "/css/style.css"

    def test_explicit_name(self):
        """An explicit name wins over the path."""
        resource = FileResource("/css/style.css", name="main.css")
        assert resource.name == "main.css"

    def test_name_without_path(self):
        """Resources without a path have no path until attached."""
        resource = FileResource(name="style.css")
        assert resource.path is None

    def test_needs_path_or_name(self):
        """A resource cannot be nameless."""
        with pytest.raises(ValidationError):
            FileResource()

    def test_invalid_name(self):
        """Names are validated."""
        with pytest.raises(ValidationError):
            FileResource(name="css/style.css")

    def test_invalid_path(self):
        """Paths are validated."""
        with pytest.raises(ValidationError):
            FileResource("css/style.css")

    def test_root_directory_name(self):
        """The root directory has an empty name."""
        assert VirtualDirectoryResource("/").name == ""

    def test_directory_is_abstract(self):
        """Directories must supply their own entries."""
        with pytest.raises(TypeError):
            DirectoryResource("/a")
        assert issubclass(DirectoryResource, Resource)


class TestAttachment:
    """Tests for attach_to(), detach() and clone()."""

    def test_attach(self):
        """Attaching records repository and path."""
        repo = MagicMock()
        resource = FileResource(name="a")
        resource.attach_to(repo, "/dir/./a")

        assert resource.is_attached()
        assert resource.repository is repo
        assert resource.repository_path == "/dir/a"
        assert resource.path == "/dir/a"

    def test_attach_default_path(self):
        """Without a path the current path is used."""
        repo = MagicMock()
        resource = FileResource("/a/b")
        resource.attach_to(repo)

        assert resource.repository_path == "/a/b"

    def test_attach_without_any_path(self):
        """Attaching a resource without any known path fails."""
        with pytest.raises(ValidationError):
            FileResource(name="a").attach_to(MagicMock())

    def test_path_follows_attachment(self):
        """While attached, path is the repository path."""
        resource = FileResource("/original")
        resource.attach_to(MagicMock(), "/stored")
        assert resource.path == "/stored"

        resource.detach()
        assert resource.path == "/original"

    def test_detach(self):
        """Detaching clears the link."""
        repo = MagicMock()
        resource = FileResource(name="a")
        resource.attach_to(repo, "/a")
        resource.detach(repo)

        assert not resource.is_attached()
        assert resource.repository is None
        assert resource.repository_path is None

    def test_detach_by_other_repository_ignored(self):
        """Only the owner can detach a resource."""
        owner = MagicMock()
        resource = FileResource(name="a")
        resource.attach_to(owner, "/a")
        resource.detach(MagicMock())

        assert resource.repository is owner

    def test_clone_keeps_attachment(self):
        """Clones are independent copies with the same attachment tag."""
        repo = MagicMock()
        resource = FileResource(name="a", contents="x")
        resource.attach_to(repo, "/a")

        clone = resource.clone()
        clone.detach()

        assert clone is not resource
        assert clone.get_contents() == b"x"
        assert resource.repository is repo

    def test_override_is_noop(self):
        """The base override() keeps the resource unchanged."""
        resource = FileResource(name="a", contents="new")
        resource.override(FileResource(name="a", contents="old"))
        assert resource.get_contents() == b"new"

    def test_repr(self):
        """repr() shows the class and path."""
        assert repr(FileResource("/a")) == "FileResource(path='/a')"


class TestFileResource:
    """Tests for FileResource."""

    def test_bytes_contents(self):
        """Bytes are stored unchanged."""
        resource = FileResource("/a", b"\x00\x01")
        assert resource.get_contents() == b"\x00\x01"
        assert resource.get_size() == 2

    def test_text_contents(self):
        """Text is stored as UTF-8."""
        resource = FileResource("/a", "é")
        assert resource.get_contents() == "é".encode("utf-8")
        assert resource.get_size() == 2

    def test_empty_default(self):
        """Files are empty by default."""
        assert FileResource("/a").get_size() == 0


class TestDirectoryResource:
    """Tests for DirectoryResource through VirtualDirectoryResource."""

    def test_detached_has_no_entries(self):
        """Detached virtual directories are empty."""
        directory = VirtualDirectoryResource("/dir")
        assert directory.list_entries() == {}
        assert not directory.contains("a")

    def test_attached_lists_repository(self, repo):
        """Attached directories list what the repository stores below them."""
        child = FileResource(name="a")
        repo.add("/dir/a", child)
        directory = repo.get("/dir")

        assert directory.list_entries() == {"a": child}
        assert directory.get("a") is child
        assert directory.contains("a")

    def test_get_missing(self, repo):
        """get() raises ResourceNotFoundError with the child path."""
        repo.add("/dir/a", FileResource(name="a"))

        with pytest.raises(ResourceNotFoundError, match="/dir/b"):
            repo.get("/dir").get("b")

    def test_root_get_missing(self, repo):
        """Child paths of the root have a single separator."""
        with pytest.raises(ResourceNotFoundError, match="The resource /b does"):
            repo.get("/").get("b")
