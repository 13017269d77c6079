"""
memrepo Repositories: Filesystem repository.

A read-only repository over a directory of the local filesystem. It is the
default backend of InMemoryRepository, so that strings passed to add() are
resolved as paths below the backend root:

    >>> repo = InMemoryRepository(FilesystemRepository("/path/to/project"))
    >>> repo.add("/css", "/res/css")
    >>> repo.add("/js", "/res/js/*.js")
"""

import os
from typing import List, Optional

from memrepo.core.constants import ROOT_PATH, SEPARATOR
from memrepo.core.exceptions import NoDirectoryError, ResourceNotFoundError
from memrepo.core.path_utils import canonicalize, get_directory, join
from memrepo.core.validators import ValidationError, validate_path, validate_selector
from memrepo.repository.base import ResourceRepository
from memrepo.resources.base import Resource
from memrepo.resources.collection import ResourceCollection
from memrepo.resources.local import LocalDirectoryResource, LocalFileResource
from memrepo.rules.selectors import compile_selector


class FilesystemRepository(ResourceRepository):
    """
    Read-only repository exposing a local directory.

    Repository paths are interpreted relative to root_dir: "/css/style.css"
    is the file root_dir/css/style.css. Returned resources are not attached
    to this repository.
    """

    def __init__(self, root_dir: Optional[str] = None):
        """
        Initialize the repository.

        Args:
            root_dir: Local directory exposed as "/". Defaults to the current
                      working directory.

        Raises:
            ValidationError: If root_dir is not a directory
        """
        root_dir = os.path.abspath(root_dir or os.getcwd())
        if not os.path.isdir(root_dir):
            raise ValidationError(f"The root directory {root_dir} does not exist.")
        self.root_dir = root_dir

    def _local_path(self, path: str) -> str:
        if path == ROOT_PATH:
            return self.root_dir
        return os.path.join(self.root_dir, *path.lstrip(SEPARATOR).split(SEPARATOR))

    def _repository_path(self, local_path: str) -> str:
        relative = os.path.relpath(local_path, self.root_dir)
        if relative == os.curdir:
            return ROOT_PATH
        return SEPARATOR + relative.replace(os.sep, SEPARATOR)

    def _create_resource(self, path: str, local_path: str) -> Resource:
        if os.path.isdir(local_path):
            return LocalDirectoryResource(local_path, path)
        return LocalFileResource(local_path, path)

    def get(self, path: str) -> Resource:
        validate_path(path)
        path = canonicalize(path)

        local_path = self._local_path(path)
        if not os.path.exists(local_path):
            raise ResourceNotFoundError.for_path(path)

        return self._create_resource(path, local_path)

    def find(self, selector: str) -> ResourceCollection:
        validate_selector(selector)
        selector = canonicalize(selector)
        compiled = compile_selector(selector)

        if not compiled.is_dynamic:
            local_path = self._local_path(selector)
            if os.path.exists(local_path):
                return ResourceCollection([self._create_resource(selector, local_path)])
            return ResourceCollection()

        prefix = compiled.static_prefix
        base_path = prefix if prefix.endswith(SEPARATOR) else get_directory(prefix)
        base_path = canonicalize(base_path)
        base_dir = self._local_path(base_path)
        if not os.path.isdir(base_dir):
            return ResourceCollection()

        matches: List[Resource] = []
        if compiled.matches(base_path):
            matches.append(self._create_resource(base_path, base_dir))

        for dirpath, dirnames, filenames in os.walk(base_dir):
            dir_path = self._repository_path(dirpath)

            # Only descend into directories that can contain matches
            dirnames[:] = sorted(
                name for name in dirnames if self._may_contain(join(dir_path, name), prefix)
            )

            for name in dirnames + sorted(filenames):
                path = join(dir_path, name)
                if compiled.matches(path):
                    matches.append(self._create_resource(path, os.path.join(dirpath, name)))

        matches.sort(key=lambda resource: resource.path)
        return ResourceCollection(matches)

    def _may_contain(self, dir_path: str, prefix: str) -> bool:
        return dir_path.startswith(prefix) or prefix.startswith(dir_path + SEPARATOR)

    def contains(self, selector: str) -> bool:
        return not self.find(selector).is_empty()

    def list_directory(self, path: str) -> ResourceCollection:
        resource = self.get(path)
        if not isinstance(resource, LocalDirectoryResource):
            raise NoDirectoryError.for_path(resource.path)

        return ResourceCollection(resource.list_entries().values())

    def __repr__(self) -> str:
        return f"FilesystemRepository(root_dir={self.root_dir!r})"
