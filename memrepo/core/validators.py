"""
memrepo Core: Input Validators.

This module provides input validation functions for repository paths,
selectors, resource names, and configuration structures. Every validator
raises ValidationError on failure and returns True otherwise.
"""
from typing import Any, Dict

from memrepo.core.constants import ConfigKey, ErrorCode, Limits, SEPARATOR


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.error_code = error_code


_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _check_text(value: Any, label: str) -> None:
    if not isinstance(value, str):
        raise ValidationError(f"The {label} must be a string. Got: {type(value).__name__}")

    if not value:
        raise ValidationError(f"The {label} must not be empty.")

    if len(value) > Limits.MAX_PATH_LENGTH:
        raise ValidationError(f"The {label} exceeds maximum length ({Limits.MAX_PATH_LENGTH})")

    if "\0" in value:
        raise ValidationError(f"The {label} contains null bytes")

    if any(ord(c) < 32 for c in value):
        raise ValidationError(f"The {label} contains control characters")


def validate_path(path: Any, label: str = "path") -> bool:
    """Validate a repository path.

    Repository paths must be non-empty strings starting with "/".

    Args:
        path: Path to validate
        label: Name used for the argument in error messages

    Returns:
        True if valid

    Raises:
        ValidationError: If path is invalid
    """
    _check_text(path, label)

    if not path.startswith(SEPARATOR):
        raise ValidationError(f"The {label} {path} is not absolute.")

    return True


def validate_selector(selector: Any) -> bool:
    """Validate a selector.

    A selector is an absolute path that may contain wildcards. Character
    classes and alternations must be closed.

    Args:
        selector: Selector to validate

    Returns:
        True if valid

    Raises:
        ValidationError: If selector is invalid
    """
    validate_path(selector, "selector")

    depth_brackets = 0
    depth_braces = 0
    for char in selector:
        if char == "[":
            if depth_brackets:
                raise ValidationError(f"Nested character class in selector: {selector}")
            depth_brackets += 1
        elif char == "]" and depth_brackets:
            depth_brackets -= 1
        elif char == "{" and not depth_brackets:
            if depth_braces:
                raise ValidationError(f"Nested alternation in selector: {selector}")
            depth_braces += 1
        elif char == "}" and depth_braces and not depth_brackets:
            depth_braces -= 1

    if depth_brackets:
        raise ValidationError(f"Unclosed character class in selector: {selector}")
    if depth_braces:
        raise ValidationError(f"Unclosed alternation in selector: {selector}")

    return True


def validate_name(name: Any) -> bool:
    """Validate a resource name.

    Args:
        name: Resource name

    Returns:
        True if valid

    Raises:
        ValidationError: If name is invalid
    """
    _check_text(name, "name")

    if SEPARATOR in name:
        raise ValidationError(f"The name {name} must not contain slashes.")

    if name in (".", ".."):
        raise ValidationError(f"The name {name} is reserved.")

    if len(name) > Limits.MAX_NAME_LENGTH:
        raise ValidationError(f"Name exceeds maximum length ({Limits.MAX_NAME_LENGTH})")

    return True


def validate_mapping(mapping: Dict[str, Any]) -> bool:
    """Validate a repository mapping entry.

    Args:
        mapping: Mapping dictionary with 'path' and 'source' fields

    Returns:
        True if valid

    Raises:
        ValidationError: If mapping is invalid
    """
    if not isinstance(mapping, dict):
        raise ValidationError("Mapping must be a dictionary")

    if ConfigKey.MAPPING_PATH not in mapping:
        raise ValidationError("Mapping must have 'path' field")

    if ConfigKey.MAPPING_SOURCE not in mapping:
        raise ValidationError("Mapping must have 'source' field")

    validate_path(mapping[ConfigKey.MAPPING_PATH])
    validate_path(mapping[ConfigKey.MAPPING_SOURCE], "source")

    return True


def validate_config(config: Dict[str, Any]) -> bool:
    """Validate memrepo configuration structure.

    Args:
        config: Configuration dictionary (with or without the top-level
            'memrepo' key)

    Returns:
        True if valid

    Raises:
        ValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ValidationError("Configuration must be a dictionary")

    section = config.get(ConfigKey.ROOT, config)
    if not isinstance(section, dict):
        raise ValidationError(f"'{ConfigKey.ROOT}' section must be a dictionary")

    # Logging
    if ConfigKey.LOGGING in section:
        logging_config = section[ConfigKey.LOGGING]
        if not isinstance(logging_config, dict):
            raise ValidationError("Logging configuration must be a dictionary")

        level = logging_config.get(ConfigKey.LOG_LEVEL)
        if level is not None and (not isinstance(level, str) or level.upper() not in _LOG_LEVELS):
            raise ValidationError(
                f"Invalid log level: {level}. Must be one of {sorted(_LOG_LEVELS)}"
            )

        log_file = logging_config.get(ConfigKey.LOG_FILE)
        if log_file is not None and not isinstance(log_file, str):
            raise ValidationError(f"Log file must be a string: {log_file}")

    # Repository
    if ConfigKey.REPOSITORY in section:
        repository = section[ConfigKey.REPOSITORY]
        if not isinstance(repository, dict):
            raise ValidationError("Repository configuration must be a dictionary")

        atomic = repository.get(ConfigKey.ATOMIC_ADD, True)
        if not isinstance(atomic, bool):
            raise ValidationError(f"Repository atomic_add must be boolean: {atomic}")

    # Backend
    if ConfigKey.BACKEND in section:
        backend = section[ConfigKey.BACKEND]
        if not isinstance(backend, dict):
            raise ValidationError("Backend configuration must be a dictionary")

        root = backend.get(ConfigKey.BACKEND_ROOT)
        if root is not None and (not isinstance(root, str) or not root):
            raise ValidationError(f"Backend root must be a non-empty string: {root}")

    # Mappings
    if ConfigKey.MAPPINGS in section:
        mappings = section[ConfigKey.MAPPINGS]
        if not isinstance(mappings, list):
            raise ValidationError("Mappings must be a list")

        for i, mapping in enumerate(mappings):
            try:
                validate_mapping(mapping)
            except ValidationError as e:
                raise ValidationError(f"Invalid mapping at index {i}: {e}")

    return True
