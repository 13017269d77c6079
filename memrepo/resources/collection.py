"""
memrepo Resources: Resource collections.

ResourceCollection is the ordered result type of find() and
list_directory(), and one of the value types accepted by add().
"""

from typing import Iterable, Iterator, List, Optional, Union, overload

from memrepo.core.exceptions import UnsupportedResourceError
from memrepo.resources.base import Resource


class ResourceCollection:
    """An ordered list of resources."""

    def __init__(self, resources: Optional[Iterable[Resource]] = None):
        """
        Initialize the collection.

        Args:
            resources: Initial resources

        Raises:
            UnsupportedResourceError: If an element is not a Resource
        """
        self._resources: List[Resource] = []
        for resource in resources or ():
            self.append(resource)

    def append(self, resource: Resource) -> None:
        if not isinstance(resource, Resource):
            raise UnsupportedResourceError.for_value(resource)
        self._resources.append(resource)

    def get_paths(self) -> List[Optional[str]]:
        return [resource.path for resource in self._resources]

    def get_names(self) -> List[str]:
        return [resource.name for resource in self._resources]

    def to_list(self) -> List[Resource]:
        return list(self._resources)

    def is_empty(self) -> bool:
        return not self._resources

    @overload
    def __getitem__(self, index: int) -> Resource: ...

    @overload
    def __getitem__(self, index: slice) -> "ResourceCollection": ...

    def __getitem__(self, index: Union[int, slice]):
        if isinstance(index, slice):
            return ResourceCollection(self._resources[index])
        return self._resources[index]

    def __iter__(self) -> Iterator[Resource]:
        return iter(self._resources)

    def __len__(self) -> int:
        return len(self._resources)

    def __bool__(self) -> bool:
        return bool(self._resources)

    def __repr__(self) -> str:
        return f"ResourceCollection({self.get_paths()!r})"
