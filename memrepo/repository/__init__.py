"""memrepo Repositories.

This package provides the repositories:
- ResourceRepository / ManageableRepository: Abstract interfaces
- InMemoryRepository: Path-indexed in-memory store with selector queries
- FilesystemRepository: Read-only view of a local directory
- PathIndex: Sorted path-to-resource index used by InMemoryRepository
"""

from .base import ManageableRepository, ResourceRepository
from .filesystem import FilesystemRepository
from .in_memory import InMemoryRepository
from .index import PathIndex

__all__ = [
    # Interfaces
    "ResourceRepository",
    "ManageableRepository",
    # Implementations
    "InMemoryRepository",
    "FilesystemRepository",
    # Index
    "PathIndex",
]
