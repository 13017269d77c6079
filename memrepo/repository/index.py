"""
memrepo Repositories: Ordered path index.

PathIndex maps canonical paths to resources and keeps the paths in
ascending order at all times. Exact lookups go through a dict; ordered and
prefix iteration go through a sorted key list maintained with bisect. All
paths sharing a prefix are adjacent in the sorted list, so a prefix scan
only visits the matching range.
"""

from bisect import bisect_left, insort
from typing import Dict, Iterator, List, Optional, Tuple

from memrepo.resources.base import Resource


class PathIndex:
    """Sorted mapping from canonical path to resource."""

    def __init__(self):
        self._resources: Dict[str, Resource] = {}
        self._paths: List[str] = []

    def get(self, path: str, default: Optional[Resource] = None) -> Optional[Resource]:
        return self._resources.get(path, default)

    def set(self, path: str, resource: Resource) -> None:
        """Store a resource, keeping paths sorted."""
        if path not in self._resources:
            insort(self._paths, path)
        self._resources[path] = resource

    def delete(self, path: str) -> None:
        """
        Remove a path.

        Raises:
            KeyError: If the path is not stored
        """
        del self._resources[path]
        del self._paths[bisect_left(self._paths, path)]

    def iter_prefix(self, prefix: str) -> Iterator[str]:
        """
        Iterate over the stored paths starting with prefix, in order.

        The index must not be modified while iterating.
        """
        paths = self._paths
        i = bisect_left(paths, prefix)
        while i < len(paths) and paths[i].startswith(prefix):
            yield paths[i]
            i += 1

    def items(self) -> Iterator[Tuple[str, Resource]]:
        for path in self._paths:
            yield path, self._resources[path]

    def __getitem__(self, path: str) -> Resource:
        return self._resources[path]

    def __contains__(self, path: object) -> bool:
        return path in self._resources

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)
