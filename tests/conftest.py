"""Shared pytest fixtures for memrepo tests."""
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator
from unittest.mock import MagicMock

import pytest
import yaml

from memrepo.core.config import set_global_config
from memrepo.core.logging import Logger, LogLevel, set_global_logger
from memrepo.repository.filesystem import FilesystemRepository
from memrepo.repository.in_memory import InMemoryRepository


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def source_dir(temp_dir: Path) -> Path:
    """Create a project directory with resource files."""
    source = temp_dir / "project"
    source.mkdir()

    (source / "README.md").write_text("# Project")

    res = source / "res"
    (res / "css").mkdir(parents=True)
    (res / "css" / "reset.css").write_text("* { margin: 0 }")
    (res / "css" / "style.css").write_text("body { color: black }")

    (res / "js" / "vendor").mkdir(parents=True)
    (res / "js" / "app.js").write_text("console.log('app')")
    (res / "js" / "vendor" / "lib.js").write_text("// lib")

    (res / "views" / "admin").mkdir(parents=True)
    (res / "views" / "index.twig").write_text("{{ title }}")
    (res / "views" / "admin" / "users.twig").write_text("{{ users }}")

    # Alternative theme used to test overrides
    theme = source / "theme" / "css"
    theme.mkdir(parents=True)
    (theme / "style.css").write_text("body { color: white }")
    (theme / "print.css").write_text("@media print {}")

    return source


@pytest.fixture
def log_handler() -> MagicMock:
    """Mock handler receiving every record of the test logger."""
    handler = MagicMock(spec=logging.Handler)
    handler.level = logging.DEBUG
    return handler


@pytest.fixture
def logger(log_handler: MagicMock) -> Logger:
    """Logger writing to the mock handler only."""
    return Logger(name="memrepo.test", level=LogLevel.DEBUG, handlers=[log_handler])


@pytest.fixture
def backend(source_dir: Path) -> FilesystemRepository:
    """Filesystem repository over the project directory."""
    return FilesystemRepository(str(source_dir))


@pytest.fixture
def repo(backend: FilesystemRepository, logger: Logger) -> InMemoryRepository:
    """Empty in-memory repository with atomic adds."""
    return InMemoryRepository(backend, atomic_add=True, logger=logger)


@pytest.fixture
def sample_config(source_dir: Path) -> Dict[str, Any]:
    """Provide a sample memrepo configuration."""
    return {
        "memrepo": {
            "backend": {"root": str(source_dir)},
            "repository": {"atomic_add": True},
            "logging": {"level": "DEBUG", "file": None},
            "mappings": [
                {"path": "/css", "source": "/res/css"},
                {"path": "/js", "source": "/res/js/*.js"},
            ],
        }
    }


@pytest.fixture
def config_file(temp_dir: Path, sample_config: Dict[str, Any]) -> Path:
    """Create a configuration file."""
    config_path = temp_dir / "memrepo.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Reset global instances and MEMREPO_* variables between tests."""
    for key in list(os.environ):
        if key.startswith("MEMREPO_"):
            monkeypatch.delenv(key)
    set_global_config(None)
    set_global_logger(None)
    yield
    set_global_config(None)
    set_global_logger(None)
