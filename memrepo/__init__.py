"""memrepo - In-memory, path-addressed resource repository.

Usage Example:
--------------

    from memrepo import FileResource, InMemoryRepository

    repo = InMemoryRepository()
    repo.add("/app/views/index.twig", FileResource(name="index.twig", contents="{{ title }}"))
    repo.add("/css", "/res/css")  # looked up in the backend

    repo.get("/app/views/index.twig")
    repo.find("/app/views/*.twig")
    repo.list_directory("/app")
    repo.remove("/app/views")
"""

from memrepo.core.constants import MEMREPO_VERSION
from memrepo.core.exceptions import (
    NoDirectoryError,
    RepositoryError,
    ResourceNotFoundError,
    RootRemovalError,
    UnsupportedResourceError,
)
from memrepo.core.validators import ValidationError
from memrepo.repository import (
    FilesystemRepository,
    InMemoryRepository,
    ManageableRepository,
    ResourceRepository,
)
from memrepo.resources import (
    DirectoryResource,
    FileResource,
    LocalDirectoryResource,
    LocalFileResource,
    Resource,
    ResourceCollection,
    VirtualDirectoryResource,
)

__version__ = MEMREPO_VERSION

__all__ = [
    # Repositories
    "ResourceRepository",
    "ManageableRepository",
    "InMemoryRepository",
    "FilesystemRepository",
    # Resources
    "Resource",
    "DirectoryResource",
    "VirtualDirectoryResource",
    "FileResource",
    "LocalFileResource",
    "LocalDirectoryResource",
    "ResourceCollection",
    # Errors
    "RepositoryError",
    "ResourceNotFoundError",
    "NoDirectoryError",
    "UnsupportedResourceError",
    "RootRemovalError",
    "ValidationError",
]
