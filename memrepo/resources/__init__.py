"""
memrepo Resources - Values stored in repositories.

Public API:
-----------

Base Classes:
    Resource: Abstract base class with the attachment contract
    DirectoryResource: Abstract base class for resources with children

Implementations:
    VirtualDirectoryResource: Directory synthesized for intermediate paths
    FileResource: In-memory file
    LocalFileResource: File on the local filesystem
    LocalDirectoryResource: Directory on the local filesystem

Collections:
    ResourceCollection: Ordered list of resources
"""

from memrepo.resources.base import DirectoryResource, Resource
from memrepo.resources.collection import ResourceCollection
from memrepo.resources.file import FileResource
from memrepo.resources.local import LocalDirectoryResource, LocalFileResource, LocalResource
from memrepo.resources.virtual import VirtualDirectoryResource

__all__ = [
    # Base classes
    "Resource",
    "DirectoryResource",
    # Implementations
    "VirtualDirectoryResource",
    "FileResource",
    "LocalResource",
    "LocalFileResource",
    "LocalDirectoryResource",
    # Collections
    "ResourceCollection",
]
