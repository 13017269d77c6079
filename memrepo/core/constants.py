"""
memrepo Core: Constants and Type Definitions

This module provides package-wide constants, error codes, and type aliases
shared by the repository, resource, and configuration layers.
"""
from enum import IntEnum
from typing import TypeAlias

# Version information
MEMREPO_VERSION = "1.0.0"
MEMREPO_API_VERSION = 1


# Error codes (0-9 range)
class ErrorCode(IntEnum):
    """Standardized error codes for memrepo operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad path, selector or value
    NOT_FOUND = 2  # Resource doesn't exist
    PERMISSION_DENIED = 3  # Operation not allowed (e.g. removing root)
    CONFLICT = 4  # Resource conflict (leaf where a directory is required)
    DEPENDENCY_ERROR = 5  # Missing dependency
    INTERNAL_ERROR = 6  # Bug in memrepo


# Type aliases for clarity
RepositoryPath: TypeAlias = str
Selector: TypeAlias = str
LocalPath: TypeAlias = str


# Path constants
ROOT_PATH: RepositoryPath = "/"
SEPARATOR = "/"

# Characters that turn a path into a selector
WILDCARD_CHARS = frozenset("*?[{")


class Limits:
    """Limits applied to user input."""

    MAX_PATH_LENGTH = 4096
    MAX_NAME_LENGTH = 255


class ConfigKey:
    """Configuration key constants."""

    # Top-level key
    ROOT = "memrepo"

    # Sections
    LOGGING = "logging"
    REPOSITORY = "repository"
    BACKEND = "backend"
    MAPPINGS = "mappings"

    # Logging configuration
    LOG_LEVEL = "level"
    LOG_FILE = "file"

    # Repository configuration
    ATOMIC_ADD = "atomic_add"

    # Backend configuration
    BACKEND_ROOT = "root"

    # Mapping configuration
    MAPPING_PATH = "path"
    MAPPING_SOURCE = "source"


# Default configuration values
DEFAULT_CONFIG = {
    ConfigKey.ROOT: {
        ConfigKey.LOGGING: {
            ConfigKey.LOG_LEVEL: "INFO",
            ConfigKey.LOG_FILE: None,
        },
        ConfigKey.REPOSITORY: {
            ConfigKey.ATOMIC_ADD: True,
        },
        ConfigKey.BACKEND: {
            ConfigKey.BACKEND_ROOT: None,
        },
        ConfigKey.MAPPINGS: [],
    }
}
