"""
memrepo Core: Repository Exceptions.

All errors raised by repositories share the RepositoryError base and carry an
ErrorCode, in the same way as ValidationError and ConfigError.
"""
from typing import Any

from memrepo.core.constants import ErrorCode


class RepositoryError(Exception):
    """Base exception for repository errors."""

    error_code = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, error_code: ErrorCode = None):
        """Initialize RepositoryError.

        Args:
            message: Error message
            error_code: Associated error code (defaults to the class code)
        """
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code


class ResourceNotFoundError(RepositoryError):
    """Raised when no resource exists at a path."""

    error_code = ErrorCode.NOT_FOUND

    @classmethod
    def for_path(cls, path: str) -> "ResourceNotFoundError":
        return cls(f"The resource {path} does not exist.")


class NoDirectoryError(RepositoryError):
    """Raised when a directory is required but a leaf resource was found."""

    error_code = ErrorCode.CONFLICT

    @classmethod
    def for_path(cls, path: str) -> "NoDirectoryError":
        return cls(f"The resource {path} is not a directory.")


class UnsupportedResourceError(RepositoryError):
    """Raised when add() receives a value it cannot store."""

    error_code = ErrorCode.INVALID_INPUT

    @classmethod
    def for_value(cls, value: Any) -> "UnsupportedResourceError":
        return cls(
            "The passed resource must be a string, Resource or collection of "
            f"resources. Got: {type(value).__name__}"
        )


class RootRemovalError(RepositoryError):
    """Raised when remove() targets the root directory."""

    error_code = ErrorCode.PERMISSION_DENIED

    def __init__(self, message: str = "The root directory cannot be removed.", error_code=None):
        super().__init__(message, error_code)
