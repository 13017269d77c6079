"""
memrepo Resources: Base Classes.

This module provides the foundation for everything stored in a repository:
- Resource: Abstract base class for all resources
- DirectoryResource: Abstract base class for resources with children

A resource has an immutable name and, once stored, an attachment: the
repository that owns it and the path it is stored at there. A resource is
attached to at most one repository at a time. Repositories clone attached
resources before storing them, so the original owner is never affected.
"""

import copy
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, Optional

from memrepo.core.exceptions import ResourceNotFoundError
from memrepo.core.path_utils import canonicalize, get_filename
from memrepo.core.validators import ValidationError, validate_name, validate_path

if TYPE_CHECKING:
    from memrepo.repository.base import ResourceRepository


class Resource(ABC):
    """
    Abstract base class for all resources.

    Subclasses carry the actual payload (file contents, local paths, ...).
    The base class implements the attachment contract used by repositories:

    - is_attached(): Whether a repository owns this instance
    - attach_to(): Record the owning repository and path
    - detach(): Clear the ownership link
    - clone(): Copy the resource, including its attachment tag
    - override(): Merge the state of a resource replaced by this one
    """

    def __init__(self, path: Optional[str] = None, name: Optional[str] = None):
        """
        Initialize the resource.

        Args:
            path: Optional absolute path of the resource. Used as the
                  resource path while it is not attached anywhere.
            name: Resource name. Defaults to the last segment of path.

        Raises:
            ValidationError: If neither path nor name is given, or either
                             is invalid
        """
        if path is not None:
            validate_path(path)
            path = canonicalize(path)

        if name is None:
            if path is None:
                raise ValidationError("A resource needs a path or a name.")
            name = get_filename(path)
        else:
            validate_name(name)

        self._name = name
        self._path = path
        self._repository: Optional["ResourceRepository"] = None
        self._repository_path: Optional[str] = None

    @property
    def name(self) -> str:
        """The resource name. Empty for the root directory."""
        return self._name

    @property
    def path(self) -> Optional[str]:
        """The repository path while attached, else the construction path."""
        if self._repository is not None:
            return self._repository_path
        return self._path

    @property
    def repository(self) -> Optional["ResourceRepository"]:
        """The repository this resource is attached to, if any."""
        return self._repository

    @property
    def repository_path(self) -> Optional[str]:
        """The path this resource is stored at in its repository."""
        return self._repository_path

    def is_attached(self) -> bool:
        return self._repository is not None

    def attach_to(self, repository: "ResourceRepository", path: Optional[str] = None) -> None:
        """
        Attach the resource to a repository.

        Args:
            repository: The owning repository
            path: Path of the resource in that repository. Defaults to the
                  current path of the resource.

        Raises:
            ValidationError: If no path is given and the resource has none
        """
        if path is None:
            path = self.path
        if path is None:
            raise ValidationError(f"Cannot attach {self!r} without a path.")

        self._repository = repository
        self._repository_path = canonicalize(path)

    def detach(self, repository: Optional["ResourceRepository"] = None) -> None:
        """
        Detach the resource from its repository.

        Args:
            repository: Repository requesting the detach. Requests from a
                        repository that does not own the resource are ignored.
                        None detaches unconditionally.
        """
        if repository is not None and repository is not self._repository:
            return

        self._repository = None
        self._repository_path = None

    def clone(self) -> "Resource":
        """
        Return a copy of this resource.

        The copy keeps the attachment tag of the original until a repository
        attaches it, so code run while the copy is being stored still sees
        the original context.
        """
        return copy.copy(self)

    def override(self, previous: "Resource") -> None:
        """
        Merge the state of a resource this one replaces.

        Called by repositories before the mapping entry is replaced. The
        base class keeps no mergeable state.

        Args:
            previous: The resource previously stored at the same path
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(path={self.path!r})"


class DirectoryResource(Resource):
    """
    Abstract base class for resources that contain other resources.

    While attached, the entries of a directory are the resources its
    repository lists below its path. While detached, subclasses supply
    their own entries through _list_own_entries().
    """

    def list_entries(self) -> Dict[str, Resource]:
        """
        List the child resources of this directory.

        Returns:
            Ordered mapping of child name to child resource
        """
        if self._repository is not None:
            return {
                get_filename(entry.path): entry
                for entry in self._repository.list_directory(self._repository_path)
            }
        return self._list_own_entries()

    @abstractmethod
    def _list_own_entries(self) -> Dict[str, Resource]:
        """Return the entries this directory carries while detached."""

    def get(self, name: str) -> Resource:
        """
        Return the child resource with the given name.

        Raises:
            ResourceNotFoundError: If there is no such child
        """
        entries = self.list_entries()
        if name not in entries:
            base = self.path or ""
            raise ResourceNotFoundError.for_path(f"{base.rstrip('/')}/{name}")
        return entries[name]

    def contains(self, name: str) -> bool:
        return name in self.list_entries()
