#!/usr/bin/env python3
"""Command-line interface for memrepo.

This module provides a small inspection tool over an in-memory repository:
- Backend root and mappings from a YAML configuration file
- Additional mappings from the command line (--map PATH=SOURCE)
- find / ls / cat commands
- Output lines rendered through a Jinja2 template (--format)

Example:
    >>> from memrepo.cli import main
    >>> main(["--root", "/path/to/project", "--map", "/css=/res/css", "ls", "/css"])
"""

import argparse
import sys
from typing import Dict, Iterable, List, Optional, TextIO

import jinja2

from memrepo.core.config import ConfigError, ConfigManager, ConfigSource
from memrepo.core.constants import MEMREPO_VERSION, ConfigKey, ErrorCode
from memrepo.core.exceptions import RepositoryError
from memrepo.core.logging import Logger, set_global_logger
from memrepo.core.path_utils import get_filename
from memrepo.core.validators import ValidationError, validate_mapping
from memrepo.repository.filesystem import FilesystemRepository
from memrepo.repository.in_memory import InMemoryRepository
from memrepo.resources.base import DirectoryResource, Resource

DESCRIPTION = "memrepo - In-memory resource repository"
DEFAULT_FORMAT = "{{ resource.path }}"


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        super().__init__(message)
        self.error_code = error_code


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace

    Raises:
        SystemExit: On invalid arguments or --help/--version
    """
    parser = argparse.ArgumentParser(
        prog="memrepo",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List a mapped directory
  memrepo --root ./project --map /css=/res/css ls /css

  # Find resources with a selector
  memrepo --config memrepo.yaml find "/app/views/**/*.twig"

  # Custom output format
  memrepo --config memrepo.yaml --format "{{ name }}{% if is_dir %}/{% endif %}" ls /

  # Print a file
  memrepo --root ./project --map /css=/res/css cat /css/style.css
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {MEMREPO_VERSION}",
    )

    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        type=str,
        help="Configuration file path (YAML format)",
    )

    parser.add_argument(
        "-r",
        "--root",
        metavar="DIR",
        type=str,
        help="Backend root directory (default: current directory)",
    )

    parser.add_argument(
        "-m",
        "--map",
        metavar="PATH=SOURCE",
        action="append",
        dest="mappings",
        default=[],
        help="Add SOURCE from the backend at PATH (can be specified multiple times)",
    )

    parser.add_argument(
        "--format",
        metavar="TEMPLATE",
        default=DEFAULT_FORMAT,
        help="Jinja2 template for each output line (default: %(default)s)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")
    commands.required = True

    find_parser = commands.add_parser("find", help="Print the resources matching a selector")
    find_parser.add_argument("selector", help="Absolute selector, e.g. /css/*.css")

    ls_parser = commands.add_parser("ls", help="Print the children of a directory")
    ls_parser.add_argument("path", nargs="?", default="/", help="Directory path (default: /)")

    cat_parser = commands.add_parser("cat", help="Print the contents of a file")
    cat_parser.add_argument("path", help="File path")

    return parser.parse_args(args)


def parse_mappings(values: Iterable[str]) -> List[Dict[str, str]]:
    """
    Parse PATH=SOURCE mapping options.

    Args:
        values: Raw option values

    Returns:
        List of mapping dictionaries

    Raises:
        CLIError: If a value has no "=" or an invalid path
    """
    mappings = []

    for value in values:
        path, sep, source = value.partition("=")
        if not sep:
            raise CLIError(f"Invalid mapping (expected PATH=SOURCE): {value}")

        mapping = {ConfigKey.MAPPING_PATH: path, ConfigKey.MAPPING_SOURCE: source}
        try:
            validate_mapping(mapping)
        except ValidationError as e:
            raise CLIError(f"Invalid mapping {value}: {e}")

        mappings.append(mapping)

    return mappings


def load_configuration(args: argparse.Namespace) -> ConfigManager:
    """
    Build the configuration from the config file and arguments.

    Command-line arguments take precedence over the configuration file.

    Raises:
        ConfigError: If the configuration file is invalid
    """
    config = ConfigManager(args.config)

    if args.root:
        config.set("memrepo.backend.root", args.root, ConfigSource.CLI_ARGS)
    if args.debug:
        config.set("memrepo.logging.level", "DEBUG", ConfigSource.CLI_ARGS)

    config.validate()
    return config


def setup_logging(config: ConfigManager) -> Logger:
    """
    Setup logging based on the configuration.

    Returns:
        Configured logger, also installed as the global logger
    """
    logger = Logger("memrepo", level=config.get("memrepo.logging.level", "INFO"))

    log_file = config.get("memrepo.logging.file")
    if log_file:
        logger.add_handler(logger.create_file_handler(log_file))

    set_global_logger(logger)
    return logger


def build_repository(
    config: ConfigManager, mappings: List[Dict[str, str]], logger: Logger
) -> InMemoryRepository:
    """
    Create a repository and apply the configured mappings.

    Mappings from the configuration file are applied first, then the ones
    given on the command line.
    """
    backend = FilesystemRepository(config.get("memrepo.backend.root"))
    repository = InMemoryRepository(backend, logger=logger, config=config)

    for mapping in list(config.get("memrepo.mappings", [])) + mappings:
        path = mapping[ConfigKey.MAPPING_PATH]
        source = mapping[ConfigKey.MAPPING_SOURCE]
        logger.debug("Applying mapping", path=path, source=source)
        repository.add(path, source)

    return repository


def render(template: str, resources: Iterable[Resource]) -> List[str]:
    """
    Render one output line per resource.

    The template context provides resource, name, path and is_dir. name is
    the last segment of the path the resource is listed under.

    Raises:
        CLIError: If the template is invalid
    """
    env = jinja2.Environment(undefined=jinja2.StrictUndefined, autoescape=False)

    try:
        compiled = env.from_string(template)
        return [
            compiled.render(
                resource=resource,
                name=get_filename(resource.path) if resource.path else resource.name,
                path=resource.path,
                is_dir=isinstance(resource, DirectoryResource),
            )
            for resource in resources
        ]
    except jinja2.TemplateError as e:
        raise CLIError(f"Invalid output format: {e}")


def run_command(args: argparse.Namespace, repository: InMemoryRepository, out: TextIO) -> int:
    """
    Execute the selected command.

    Returns:
        Exit code
    """
    if args.command == "cat":
        resource = repository.get(args.path)
        if not hasattr(resource, "get_contents"):
            raise CLIError(f"Not a file: {resource.path}", ErrorCode.CONFLICT)
        out.write(resource.get_contents().decode("utf-8", errors="replace"))
        return 0

    if args.command == "find":
        resources = repository.find(args.selector)
    else:
        resources = repository.list_directory(args.path)

    for line in render(args.format, resources):
        out.write(line + "\n")

    # Like grep, finding nothing is not an error but is reported
    if args.command == "find" and not resources:
        return 1
    return 0


def main(argv: Optional[List[str]] = None, out: Optional[TextIO] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code (0 on success, the error code of the failure otherwise)
    """
    out = out or sys.stdout

    try:
        args = parse_arguments(argv)
        mappings = parse_mappings(args.mappings)
        config = load_configuration(args)
        logger = setup_logging(config)
        repository = build_repository(config, mappings, logger)
        return run_command(args, repository, out)

    except (CLIError, ConfigError, RepositoryError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return int(e.error_code) or 1

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
