"""
memrepo Repositories: Abstract interfaces.

ResourceRepository is the read interface shared by every repository;
InMemoryRepository uses it to talk to its backend. ManageableRepository
adds the write operations.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Union

from memrepo.resources.base import Resource
from memrepo.resources.collection import ResourceCollection


class ResourceRepository(ABC):
    """
    Abstract base class for repositories.

    Implementations must provide:
    - get(): Return the resource at a path
    - find(): Return all resources matching a selector
    - contains(): Check whether a selector matches anything
    - list_directory(): Return the immediate children of a directory
    """

    @abstractmethod
    def get(self, path: str) -> Resource:
        """
        Return the resource at a path.

        Raises:
            ResourceNotFoundError: If no resource exists at the path
            ValidationError: If the path is invalid
        """

    @abstractmethod
    def find(self, selector: str) -> ResourceCollection:
        """
        Return the resources matching a selector, ordered by path.

        Raises:
            ValidationError: If the selector is invalid
        """

    @abstractmethod
    def contains(self, selector: str) -> bool:
        """
        Check whether at least one resource matches a selector.

        Raises:
            ValidationError: If the selector is invalid
        """

    @abstractmethod
    def list_directory(self, path: str) -> ResourceCollection:
        """
        Return the immediate children of a directory, ordered by path.

        Raises:
            ResourceNotFoundError: If no resource exists at the path
            NoDirectoryError: If the resource is not a directory
            ValidationError: If the path is invalid
        """


class ManageableRepository(ResourceRepository):
    """A repository whose contents can be changed."""

    @abstractmethod
    def add(self, path: str, value: Union[str, Resource, Iterable[Resource]]) -> None:
        """
        Add resources at a path.

        Raises:
            ValidationError: If the path is invalid
            UnsupportedResourceError: If the value cannot be stored
            NoDirectoryError: If an ancestor of the path is not a directory
        """

    @abstractmethod
    def remove(self, selector: str) -> int:
        """
        Remove the resources matching a selector, including their contents.

        Returns:
            Number of removed resources

        Raises:
            ValidationError: If the selector is invalid
            RootRemovalError: If the selector is the root path
        """
