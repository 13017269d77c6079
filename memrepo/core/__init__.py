"""memrepo Core - Shared utilities and infrastructure.

Import specific functions from submodules:
    from memrepo.core.config import ConfigManager
    from memrepo.core.exceptions import ResourceNotFoundError
    from memrepo.core import constants
    from memrepo.core import logging
    from memrepo.core import path_utils
    from memrepo.core import validators
"""

from memrepo.core import (
    config,
    constants,
    exceptions,
    logging,
    path_utils,
    validators,
)

__all__ = [
    "config",
    "constants",
    "exceptions",
    "logging",
    "path_utils",
    "validators",
]
