"""
memrepo Resources: Local filesystem resources.

This module provides resources backed by files and directories on the local
filesystem:
- LocalResource: Base class tracking the local path(s) of a resource
- LocalFileResource: A local file
- LocalDirectoryResource: A local directory

When a local resource overrides another one, it remembers the local paths of
the resource it replaced. all_local_paths lists them oldest first, ending
with the resource's own local path. A detached LocalDirectoryResource lists
the entries of all these directories, later directories taking precedence.
"""

import os
from typing import Dict, List, Optional

from memrepo.core.exceptions import ResourceNotFoundError
from memrepo.core.path_utils import join
from memrepo.core.validators import ValidationError
from memrepo.resources.base import DirectoryResource, Resource


class LocalResource(Resource):
    """Base class for resources with a path on the local filesystem."""

    def __init__(self, local_path: str, path: Optional[str] = None, name: Optional[str] = None):
        """
        Initialize the local resource.

        Args:
            local_path: Path of the file or directory on disk
            path: Optional absolute repository path
            name: Resource name. Defaults to the last segment of path or,
                  without a path, to the base name of local_path.

        Raises:
            ResourceNotFoundError: If local_path does not exist
        """
        local_path = os.path.abspath(local_path)
        if not os.path.exists(local_path):
            raise ResourceNotFoundError(f"The local path {local_path} does not exist.")

        if path is None and name is None:
            name = os.path.basename(local_path)

        super().__init__(path, name)
        self._local_path = local_path
        self._local_paths: List[str] = [local_path]

    @property
    def local_path(self) -> str:
        return self._local_path

    @property
    def all_local_paths(self) -> List[str]:
        """Local paths of this resource and every resource it overrode."""
        return list(self._local_paths)

    def override(self, previous: Resource) -> None:
        if isinstance(previous, LocalResource):
            history = [p for p in previous.all_local_paths if p != self._local_path]
            self._local_paths = history + [self._local_path]

    def clone(self) -> "LocalResource":
        clone = super().clone()
        clone._local_paths = list(self._local_paths)
        return clone

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(path={self.path!r}, local_path={self._local_path!r})"


class LocalFileResource(LocalResource):
    """A file on the local filesystem."""

    def __init__(self, local_path: str, path: Optional[str] = None, name: Optional[str] = None):
        super().__init__(local_path, path, name)
        if not os.path.isfile(self._local_path):
            raise ValidationError(f"The local path {self._local_path} is not a file.")

    def get_contents(self) -> bytes:
        with open(self._local_path, "rb") as f:
            return f.read()

    def get_size(self) -> int:
        return os.path.getsize(self._local_path)


class LocalDirectoryResource(LocalResource, DirectoryResource):
    """A directory on the local filesystem."""

    def __init__(self, local_path: str, path: Optional[str] = None, name: Optional[str] = None):
        super().__init__(local_path, path, name)
        if not os.path.isdir(self._local_path):
            raise ValidationError(f"The local path {self._local_path} is not a directory.")

    def _list_own_entries(self) -> Dict[str, Resource]:
        entries: Dict[str, Resource] = {}

        for local_dir in self._local_paths:
            # Overridden directories may have disappeared since
            if not os.path.isdir(local_dir):
                continue

            for name in sorted(os.listdir(local_dir)):
                local_path = os.path.join(local_dir, name)
                if not os.path.exists(local_path):
                    continue  # dangling symlink
                path = join(self._path, name) if self._path else None
                if os.path.isdir(local_path):
                    entries[name] = LocalDirectoryResource(local_path, path, name)
                else:
                    entries[name] = LocalFileResource(local_path, path, name)

        return dict(sorted(entries.items()))
