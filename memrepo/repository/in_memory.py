"""
memrepo Repositories: In-memory repository.

An in-memory resource repository. Resources are added with add():

    >>> repo = InMemoryRepository()
    >>> repo.add("/css", LocalDirectoryResource("/path/to/project/res/css"))

Strings passed to add() are looked up in the backend repository, by
default a FilesystemRepository rooted at the configured backend root:

    >>> repo = InMemoryRepository(FilesystemRepository("/path/to/project"))
    >>> repo.add("/css", "/res/css")
    >>> repo.add("/js", "/res/js/*.js")

The repository always contains the root directory "/". Missing parent
directories of added resources are created as virtual directories, so every
stored path has a directory for a parent.
"""

import copy
from typing import Callable, Iterable, Iterator, List, Optional, Union

from memrepo.core.config import ConfigManager, get_config_manager
from memrepo.core.constants import ROOT_PATH, SEPARATOR
from memrepo.core.exceptions import (
    NoDirectoryError,
    ResourceNotFoundError,
    RootRemovalError,
    UnsupportedResourceError,
)
from memrepo.core.logging import Logger, get_logger
from memrepo.core.path_utils import canonicalize, get_directory, is_base_path, join
from memrepo.core.validators import ValidationError, validate_path, validate_selector
from memrepo.repository.base import ManageableRepository, ResourceRepository
from memrepo.repository.filesystem import FilesystemRepository
from memrepo.repository.index import PathIndex
from memrepo.resources.base import DirectoryResource, Resource
from memrepo.resources.collection import ResourceCollection
from memrepo.resources.virtual import VirtualDirectoryResource
from memrepo.rules.selectors import compile_selector, is_selector


class InMemoryRepository(ManageableRepository):
    """
    Repository storing resources in an ordered in-memory index.

    Attributes:
        backend: Repository used to resolve strings passed to add()
        atomic_add: Whether a failed add() restores the previous state

    The repository is not thread-safe. Concurrent calls to add() or
    remove() must be serialized by the caller.
    """

    def __init__(
        self,
        backend: Optional[ResourceRepository] = None,
        atomic_add: Optional[bool] = None,
        logger: Optional[Logger] = None,
        config: Optional[ConfigManager] = None,
    ):
        """
        Initialize the repository.

        Args:
            backend: Repository used to look up the strings passed to add().
                     Defaults to a FilesystemRepository rooted at the
                     configured backend root (or the working directory).
            atomic_add: Roll back failed add() calls. Defaults to the
                        "memrepo.repository.atomic_add" setting.
            logger: Logger to use. Defaults to the global logger.
            config: Configuration to read defaults from. Defaults to the
                    global configuration manager.
        """
        if backend is None or atomic_add is None:
            config = config or get_config_manager()
        if backend is None:
            backend = FilesystemRepository(config.get("memrepo.backend.root"))
        if atomic_add is None:
            atomic_add = bool(config.get("memrepo.repository.atomic_add", True))

        self.backend = backend
        self.atomic_add = atomic_add
        self._logger = logger or get_logger()
        self._index = PathIndex()
        self._undo: Optional[List[Callable[[], None]]] = None

        root = VirtualDirectoryResource(ROOT_PATH)
        self._index.set(ROOT_PATH, root)
        root.attach_to(self, ROOT_PATH)

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def get(self, path: str) -> Resource:
        path = self._canonical_path(path)

        resource = self._index.get(path)
        if resource is None:
            raise ResourceNotFoundError.for_path(path)

        return resource

    def find(self, selector: str) -> ResourceCollection:
        selector = self._canonical_selector(selector)
        return ResourceCollection(self._index[path] for path in self._iter_matches(selector))

    def contains(self, selector: str) -> bool:
        selector = self._canonical_selector(selector)
        return next(self._iter_matches(selector), None) is not None

    def add(self, path: str, value: Union[str, Resource, Iterable[Resource]]) -> None:
        """
        Add resources at a path.

        The value may be:
        - a Resource, stored at path
        - a collection (ResourceCollection, list or tuple) of resources,
          each stored at path/<name>
        - a string, looked up in the backend. Strings containing wildcards
          are passed to backend.find() and added as a collection, even if
          they match only one resource. Other strings are passed to
          backend.get().

        Resources attached to a repository are cloned before they are
        stored. Directory resources are added together with their entries.

        Args:
            path: Path at which to add the resource(s)
            value: The resource(s) to add

        Raises:
            ValidationError: If the path is invalid
            UnsupportedResourceError: If the value cannot be stored
            NoDirectoryError: If a resource on the way to path is no directory
        """
        path = self._canonical_path(path)
        value = self._resolve(value)

        self._undo = [] if self.atomic_add else None
        try:
            if isinstance(value, Resource):
                self._ensure_directory_exists(get_directory(path))
                self._add_resource(path, value)
            else:
                self._ensure_directory_exists(path)
                for entry in value:
                    if not isinstance(entry, Resource):
                        raise UnsupportedResourceError.for_value(entry)
                    # A matched root directory has no name to store it under
                    if not entry.name:
                        self._logger.debug("Skipping unnamed entry", path=path)
                        continue
                    self._add_resource(join(path, entry.name), entry)
        except Exception as e:
            if self._undo is not None:
                self._rollback(path, e)
            raise
        finally:
            self._undo = None

    def remove(self, selector: str) -> int:
        selector = self._canonical_selector(selector)

        if selector == ROOT_PATH:
            raise RootRemovalError()

        # Resolve all matches before removing anything
        paths = [path for path in self._iter_matches(selector) if path != ROOT_PATH]
        removed = 0

        for path in paths:
            # Skip resources removed together with an earlier match
            if path in self._index:
                removed += self._remove_resource(path)

        self._logger.debug("Removed resources", selector=selector, count=removed)
        return removed

    def list_directory(self, path: str) -> ResourceCollection:
        path = self._canonical_path(path)

        resource = self._index.get(path)
        if resource is None:
            raise ResourceNotFoundError.for_path(path)
        if not isinstance(resource, DirectoryResource):
            raise NoDirectoryError.for_path(path)

        return ResourceCollection(self._index[child] for child in self._list_children(path))

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"InMemoryRepository(resources={len(self._index)}, backend={self.backend!r})"

    # ------------------------------------------------------------------
    # Argument handling
    # ------------------------------------------------------------------

    def _canonical_path(self, path: str) -> str:
        validate_path(path)
        return canonicalize(path)

    def _canonical_selector(self, selector: str) -> str:
        validate_selector(selector)
        return canonicalize(selector)

    def _resolve(self, value) -> Union[Resource, Iterable[Resource]]:
        """Turn the value passed to add() into a resource or a sequence."""
        if isinstance(value, str):
            # Use find() whenever the string is a selector, so the result
            # shape does not depend on the number of matches
            if is_selector(value):
                self._logger.debug("Resolving selector in backend", selector=value)
                return self.backend.find(value)
            return self.backend.get(value)

        if isinstance(value, Resource):
            return value

        if isinstance(value, (ResourceCollection, list, tuple)):
            return list(value)

        raise UnsupportedResourceError.for_value(value)

    # ------------------------------------------------------------------
    # Selector matching
    # ------------------------------------------------------------------

    def _iter_matches(self, selector: str) -> Iterator[str]:
        """Yield the stored paths matching a canonical selector, in order."""
        compiled = compile_selector(selector)

        if not compiled.is_dynamic:
            if selector in self._index:
                yield selector
            return

        for path in self._index.iter_prefix(compiled.static_prefix):
            if compiled.pattern.fullmatch(path):
                yield path

    def _list_children(self, path: str) -> List[str]:
        """Return the paths of the immediate children of a directory."""
        prefix = path if path.endswith(SEPARATOR) else path + SEPARATOR
        return [
            child
            for child in self._index.iter_prefix(prefix)
            if SEPARATOR not in child[len(prefix) :]
        ]

    # ------------------------------------------------------------------
    # Tree maintenance
    # ------------------------------------------------------------------

    def _ensure_directory_exists(self, path: str) -> None:
        """
        Create virtual directories for path and its missing ancestors.

        Raises:
            NoDirectoryError: If path or one of its ancestors is stored but
                              is no directory
        """
        missing = []
        while path not in self._index:
            missing.append(path)
            path = get_directory(path)

        if not isinstance(self._index[path], DirectoryResource):
            raise NoDirectoryError.for_path(path)

        for dir_path in reversed(missing):
            directory = VirtualDirectoryResource(dir_path)
            self._store(dir_path, directory)
            self._attach(directory, dir_path)
            self._logger.debug("Created virtual directory", path=dir_path)

    def _add_resource(self, path: str, resource: Resource) -> None:
        # Don't modify resources attached to other repositories
        if resource.is_attached():
            source = resource.repository_path
            if (
                resource.repository is self
                and isinstance(resource, DirectoryResource)
                and path != source
                and is_base_path(source, path)
            ):
                raise ValidationError(f"Cannot add the directory {source} inside itself at {path}.")

            resource = resource.clone()
            self._logger.debug("Cloned attached resource", source=source, path=path)

        if path == ROOT_PATH and not isinstance(resource, DirectoryResource):
            raise NoDirectoryError("The root directory can only be replaced by a directory.")

        previous = self._index.get(path)
        if previous is not None:
            self._override(resource, previous)
            self._logger.debug("Overriding resource", path=path)

            if isinstance(previous, DirectoryResource) and not isinstance(
                resource, DirectoryResource
            ):
                # A leaf cannot have children
                for child in self._list_children(path):
                    self._remove_resource(child)

        # List the entries before attaching, so directories still see the
        # repository they were cloned from
        entries = resource.list_entries() if isinstance(resource, DirectoryResource) else {}

        self._store(path, resource)
        if previous is not None:
            self._detach(previous)

        for name, entry in entries.items():
            self._add_resource(join(path, name), entry)

        self._attach(resource, path)
        self._logger.debug("Added resource", path=path, type=type(resource).__name__)

    def _remove_resource(self, path: str) -> int:
        """Remove a resource and its descendants, children first."""
        resource = self._index[path]
        removed = 0

        if isinstance(resource, DirectoryResource):
            for child in self._list_children(path):
                removed += self._remove_resource(child)

        self._delete(path)
        self._detach(resource)

        return removed + 1

    # ------------------------------------------------------------------
    # Journaled primitives
    #
    # While an atomic add() runs, every change to the index or to an
    # attachment records its inverse in self._undo.
    # ------------------------------------------------------------------

    def _store(self, path: str, resource: Resource) -> None:
        previous = self._index.get(path)
        self._index.set(path, resource)

        if self._undo is not None:
            if previous is None:
                self._undo.append(lambda: self._index.delete(path))
            else:
                self._undo.append(lambda: self._index.set(path, previous))

    def _override(self, resource: Resource, previous: Resource) -> None:
        state = copy.copy(resource.__dict__)
        resource.override(previous)

        if self._undo is not None:
            self._undo.append(lambda: _restore_state(resource, state))

    def _delete(self, path: str) -> None:
        resource = self._index[path]
        self._index.delete(path)

        if self._undo is not None:
            self._undo.append(lambda: self._index.set(path, resource))

    def _attach(self, resource: Resource, path: str) -> None:
        resource.attach_to(self, path)

        if self._undo is not None:
            self._undo.append(lambda: resource.detach(self))

    def _detach(self, resource: Resource) -> None:
        path = resource.repository_path
        resource.detach(self)

        if self._undo is not None and path is not None:
            self._undo.append(lambda: resource.attach_to(self, path))

    def _rollback(self, path: str, error: Exception) -> None:
        self._logger.warning(
            "Rolling back failed add",
            path=path,
            changes=len(self._undo),
            error=type(error).__name__,
        )
        for undo in reversed(self._undo):
            undo()


def _restore_state(resource: Resource, state: dict) -> None:
    resource.__dict__.clear()
    resource.__dict__.update(state)
