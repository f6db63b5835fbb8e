#!/usr/bin/env python3
"""Command-line interface for SrcExport.

This module provides the CLI for exporting a source tree:
- Argument parsing and validation
- Configuration file loading
- Excluded projects read from project files
- Writing the default configuration
- Help and version information

Example:
    >>> from srcexport.cli import parse_arguments
    >>> args = parse_arguments(["/src/solution", "/out/solution", "export.yaml"])
"""

import argparse
import os
import sys
from typing import List, Optional, TextIO

from srcexport.core.constants import SRCEXPORT_VERSION, ConfigKey
from srcexport.core.settings import ExportSettings, default_settings
from srcexport.core.validators import ValidationError, validate_path
from srcexport.infrastructure.config_manager import ConfigError, ConfigManager, save_settings
from srcexport.infrastructure.logger import Logger, LogLevel
from srcexport.transforms.msbuild import read_project_reference

# Version information
VERSION = SRCEXPORT_VERSION
DESCRIPTION = "SrcExport - Clean source tree export"

USAGE = """srcexport <source> <destination> [config]
\tsource              Source directory
\tdestination         Target directory
\tconfig              Configuration file"""

HELP_SWITCHES = ("/?", "-?")

TOGGLE_HELP = {
    ConfigKey.COMPUTE_HASH: "verify every binary copy by digest",
    ConfigKey.CONVERT_HINT_PATHS: "make hint paths into system folders absolute",
    ConfigKey.EXCLUDE_GENERATED_FILES: "leave out designer and tool-generated files",
    ConfigKey.KEEP_SYMBOLIC_LINKS: "recreate symbolic links instead of following them",
    ConfigKey.OVERRIDE_EXISTING_FILE: "replace existing destination files",
    ConfigKey.REMOVE_BINDING: "strip source control bindings from projects",
    ConfigKey.REPLACE_LINK_FILES: "copy linked project items into the project",
    ConfigKey.UNPROTECT_FILE: "clear the read-only bit of files being replaced",
    ConfigKey.OUTPUT_READ_ONLY: "force the read-only state of exported files",
}


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def wants_usage(argv: List[str]) -> bool:
    """Check for the short help switches, anywhere on the command line."""
    return any(arg in HELP_SWITCHES for arg in argv)


def print_usage(stream: Optional[TextIO] = None) -> None:
    print(USAGE, file=stream or sys.stdout)


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace

    Raises:
        SystemExit: On invalid arguments or --help/--version
        CLIError: If the arguments are inconsistent
    """
    parser = argparse.ArgumentParser(
        prog="srcexport",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export with the default configuration
  srcexport ./MySolution ../export/MySolution

  # Export with a configuration file
  srcexport ./MySolution ../export/MySolution export.yaml

  # Leave a project out of the solution file
  srcexport ./MySolution ../out --exclude-project Tests/Tests.csproj

  # Follow symbolic links and skip hash verification
  srcexport ./MySolution ../out --no-keep-symbolic-links --no-compute-hash

  # Start a configuration file from the defaults
  srcexport --write-default-config export.yaml
        """,
    )

    # Version
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {VERSION}",
    )

    parser.add_argument("source", nargs="?", help="Source directory")
    parser.add_argument("destination", nargs="?", help="Target directory")
    parser.add_argument("config", nargs="?", help="Configuration file (YAML format)")

    # Export options
    export_group = parser.add_argument_group("export options")

    export_group.add_argument(
        "--exclude-project",
        metavar="PROJECT_FILE",
        action="append",
        dest="excluded_projects",
        help="Project file to remove from solutions (can be specified multiple times)",
    )

    export_group.add_argument(
        "--write-default-config",
        metavar="FILE",
        type=str,
        help="Write the default configuration to FILE and exit",
    )

    # Toggle overrides, applied on top of the configuration file
    toggle_group = parser.add_argument_group("toggle options")

    for key, help_text in TOGGLE_HELP.items():
        toggle_group.add_argument(
            "--" + key.replace("_", "-"),
            dest=key,
            action=argparse.BooleanOptionalAction,
            default=None,
            help=help_text,
        )

    # Logging options
    log_group = parser.add_argument_group("logging options")

    log_group.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (reports every included and excluded entry)",
    )

    log_group.add_argument(
        "--log-file",
        metavar="FILE",
        type=str,
        help="Also write the log to FILE",
    )

    parsed = parser.parse_args(args)

    _validate_arguments(parsed)

    return parsed


def _validate_arguments(args: argparse.Namespace) -> None:
    """
    Validate parsed arguments.

    Args:
        args: Parsed arguments namespace

    Raises:
        CLIError: If validation fails
    """
    if args.write_default_config:
        return

    if not args.source or not args.destination:
        raise CLIError("Source and destination must be specified\n" "Use /? for usage information")

    for path in (args.source, args.destination):
        try:
            validate_path(path)
        except ValidationError as e:
            raise CLIError(f"Invalid path {path!r}: {e}")

    if not os.path.exists(args.source):
        raise CLIError(f"Source does not exist: {args.source}")

    if args.config and not os.path.isfile(args.config):
        raise CLIError(f"Configuration file does not exist: {args.config}")

    for project_file in args.excluded_projects or []:
        if not os.path.isfile(project_file):
            raise CLIError(f"Project file does not exist: {project_file}")


def setup_logging(args: argparse.Namespace) -> Logger:
    """
    Setup logging based on arguments.

    Args:
        args: Parsed arguments namespace

    Returns:
        Configured logger instance
    """
    logger = Logger("srcexport", level=LogLevel.DEBUG if args.debug else LogLevel.INFO)

    if args.log_file:
        logger.add_handler(logger.create_file_handler(args.log_file))

    return logger


def build_settings(args: argparse.Namespace) -> ExportSettings:
    """
    Build export settings from the configuration file and arguments.

    Args:
        args: Parsed arguments namespace

    Returns:
        Export settings

    Raises:
        ConfigError: If the configuration is invalid
        CLIError: If an excluded project file carries no identifier
    """
    config = ConfigManager(args.config)

    for key in TOGGLE_HELP:
        value = getattr(args, key, None)
        if value is not None:
            config.set(key, value)

    settings = config.get_settings()

    for project_file in args.excluded_projects or []:
        project = read_project_reference(project_file)
        if project is None:
            raise CLIError(f"No project identifier found in: {project_file}")
        settings.excluded_projects.append(project)

    return settings


def write_default_config(file_path: str) -> None:
    """Write the built-in default configuration to a file."""
    save_settings(default_settings(), file_path)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Handles argument parsing and configuration loading, then passes
    control to srcexport.main for the export run.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    argv = sys.argv[1:] if argv is None else argv

    if wants_usage(argv):
        print_usage()
        return 0

    if not argv:
        print_usage(sys.stderr)
        return 1

    try:
        args = parse_arguments(argv)

        if args.write_default_config:
            write_default_config(args.write_default_config)
            print(f"Default configuration written to {args.write_default_config}")
            return 0

        logger = setup_logging(args)
        settings = build_settings(args)

        from srcexport.main import run_export

        return run_export(args, settings, logger)

    except (CLIError, ConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
