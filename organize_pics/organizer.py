"""Organize Pics - Sort pictures and videos into date folders.

Moves every recognized media file found directly in a directory into a
YYYY-MM-DD subdirectory of that directory. The date is read from the file
name (see organize_pics.matchers), never from file metadata. Files whose
names are not recognized are left where they are, and a file is never
moved over an existing one.

Usage:
    organize-pics [options] DIRECTORY

Options:
    --config PATH       Path to configuration file (default: .organizepicsrc.yaml)
    --dry-run           Preview changes without moving files
    --verbose           Show detailed output
    --quiet             Suppress all output except errors
    --help              Show this help message
    --version           Show version number

Configuration:
    Create a .organizepicsrc.yaml (or .organizepicsrc.json) file in the
    working directory:

        dry_run: false
        verbose: true

    Naming conventions are built in and cannot be configured.

Environment Variables:
    ORGANIZE_PICS_DRY_RUN   Set to 'true' for dry run
    ORGANIZE_PICS_VERBOSE   Set to 'true' for verbose output
    ORGANIZE_PICS_QUIET     Set to 'true' to suppress all output except errors
"""

from __future__ import annotations

import argparse
import json
import os
import shutil
import stat
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import cast
from typing import TypedDict

import yaml

from organize_pics import __version__
from organize_pics.errors import ConfigError
from organize_pics.errors import DirectoryCreationError
from organize_pics.errors import DirectoryListingError
from organize_pics.errors import InvalidInputPathError
from organize_pics.errors import NotRecognizedError
from organize_pics.errors import OrganizeError
from organize_pics.matchers import classify
from organize_pics.matchers import MatcherDefinition
from organize_pics.matchers import MATCHERS

# Default configuration file names to search for
CONFIG_FILE_NAMES = [".organizepicsrc.yaml", ".organizepicsrc.yml", ".organizepicsrc.json"]

# Date directories are private to the owner
DIR_MODE = 0o700


class OperationStatus(Enum):
    """Outcome of organizing a single file."""

    MOVED = "moved"
    UNRECOGNIZED = "unrecognized"
    COLLISION = "collision"
    FAILED = "failed"


@dataclass
class FileOperation:
    """Result of a single file operation."""

    source: Path
    destination: Path | None = None
    status: OperationStatus = OperationStatus.UNRECOGNIZED
    reason: str | None = None
    folder_name: str | None = None


@dataclass
class OrganizeResult:
    """Result of organizing a directory."""

    moved: list[FileOperation] = field(default_factory=list)
    skipped: list[FileOperation] = field(default_factory=list)
    failed: list[FileOperation] = field(default_factory=list)
    directories_created: list[Path] = field(default_factory=list)
    total_processed: int = 0
    dry_run: bool = False


class ConfigDict(TypedDict, total=False):
    """Configuration dictionary type."""

    dry_run: bool
    verbose: bool
    quiet: bool


@dataclass
class OrganizeConfig:
    """Configuration for the organize operation."""

    directory: Path = field(default_factory=Path.cwd)
    dry_run: bool = False
    verbosity: int = 1  # 0=quiet, 1=normal, 2=verbose

    @classmethod
    def from_dict(cls, data: ConfigDict, directory: Path | None = None) -> OrganizeConfig:
        """Create config from dictionary."""
        config = cls()
        if directory:
            config.directory = directory

        if "dry_run" in data:
            config.dry_run = bool(data["dry_run"])
        if data.get("verbose"):
            config.verbosity = 2
        if data.get("quiet"):
            config.verbosity = 0

        return config


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RED = "\033[31m"
    GRAY = "\033[90m"

    @classmethod
    def disable(cls) -> None:
        """Disable colors (for non-TTY output)."""
        cls.RESET = ""
        cls.BOLD = ""
        cls.DIM = ""
        cls.GREEN = ""
        cls.YELLOW = ""
        cls.RED = ""
        cls.GRAY = ""


class Logger:
    """Console logger with verbosity control.

    Progress goes to stdout; warnings and errors go to stderr so per-file
    problems stay visible when stdout is redirected.
    """

    def __init__(self, verbosity: int = 1, dry_run: bool = False) -> None:
        self.verbosity = verbosity
        self.dry_run = dry_run

        if not sys.stdout.isatty():
            Colors.disable()

    def info(self, message: str) -> None:
        """Log info message."""
        if self.verbosity >= 1:
            prefix = "[DRY-RUN] " if self.dry_run else ""
            print(f"{prefix}{message}")

    def success(self, message: str) -> None:
        """Log success message."""
        if self.verbosity >= 1:
            prefix = "[DRY-RUN] " if self.dry_run else ""
            print(f"{prefix}{Colors.GREEN}✓{Colors.RESET} {message}")

    def warn(self, message: str) -> None:
        """Log warning message."""
        if self.verbosity >= 1:
            print(f"{Colors.YELLOW}⚠{Colors.RESET} {message}", file=sys.stderr)

    def error(self, message: str) -> None:
        """Log error message."""
        print(f"{Colors.RED}✗{Colors.RESET} {message}", file=sys.stderr)

    def skip(self, message: str) -> None:
        """Log skip message."""
        if self.verbosity >= 2:
            print(f"{Colors.GRAY}⊘ {message}{Colors.RESET}")

    def verbose(self, message: str) -> None:
        """Log verbose message."""
        if self.verbosity >= 2:
            print(f"{Colors.DIM}{message}{Colors.RESET}")

    def header(self, message: str) -> None:
        """Log header message."""
        if self.verbosity >= 1:
            print(f"\n{Colors.BOLD}=== {message} ==={Colors.RESET}")


def load_config_file(config_path: Path | None = None) -> ConfigDict:
    """Load configuration from file.

    An explicit path must exist. Without one, the default names are tried
    in the current directory and a missing file means no configuration.
    """
    if config_path:
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        paths = [config_path]
    else:
        paths = [Path(name) for name in CONFIG_FILE_NAMES]

    for path in paths:
        if not path.exists():
            continue
        try:
            with open(path, encoding="utf-8") as f:
                if path.suffix in (".yaml", ".yml"):
                    data = yaml.safe_load(f) or {}
                else:
                    data = json.load(f)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigError(f"Invalid config file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Invalid config file {path}: expected a mapping")
        return cast(ConfigDict, data)

    return {}


def load_env_config() -> ConfigDict:
    """Load configuration from environment variables."""
    config: ConfigDict = {}

    if os.environ.get("ORGANIZE_PICS_DRY_RUN") == "true":
        config["dry_run"] = True
    if os.environ.get("ORGANIZE_PICS_VERBOSE") == "true":
        config["verbose"] = True
    if os.environ.get("ORGANIZE_PICS_QUIET") == "true":
        config["quiet"] = True

    return config


def merge_configs(*layers: ConfigDict) -> ConfigDict:
    """Merge config layers, later layers taking precedence.

    verbose and quiet are one setting: a layer that sets either replaces
    both from earlier layers.
    """
    merged: ConfigDict = {}
    for layer in layers:
        if "verbose" in layer or "quiet" in layer:
            merged.pop("verbose", None)
            merged.pop("quiet", None)
        merged.update(layer)
    return merged


def validate_directory(path: Path) -> Path:
    """Check that path exists and is a directory.

    Raises:
        InvalidInputPathError: The path cannot be stat'ed or is not a directory.
    """
    try:
        st = os.stat(path)
    except OSError as e:
        raise InvalidInputPathError(path, f"Error stating path: {e.strerror or e}") from e
    if not stat.S_ISDIR(st.st_mode):
        raise InvalidInputPathError(path, "Provided path is not a directory")
    return path


def ensure_directory(path: Path, config: OrganizeConfig, logger: Logger) -> bool:
    """Create a date directory if it does not exist yet.

    Returns True if the directory was (or, in dry-run mode, would be) created.

    Raises:
        DirectoryCreationError: The directory could not be created.
    """
    if path.is_dir():
        return False

    if not config.dry_run:
        try:
            path.mkdir(mode=DIR_MODE)
        except OSError as e:
            raise DirectoryCreationError(path, e) from e

    logger.verbose(f"Created directory: {path.name}/")
    return True


def organize_file(
    source: Path,
    config: OrganizeConfig,
    logger: Logger,
    matchers: tuple[MatcherDefinition, ...] = MATCHERS,
    created: list[Path] | None = None,
) -> FileOperation:
    """Move a single file into its date directory."""
    filename = source.name

    try:
        folder_name = classify(filename, matchers)
    except NotRecognizedError as e:
        return FileOperation(
            source=source,
            status=OperationStatus.UNRECOGNIZED,
            reason=str(e),
        )

    target_dir = config.directory / folder_name
    # In a dry run planned folders are never created, so remember them
    if created is None or target_dir not in created:
        if ensure_directory(target_dir, config, logger) and created is not None:
            created.append(target_dir)

    destination = target_dir / filename
    if os.path.lexists(destination):
        return FileOperation(
            source=source,
            destination=destination,
            status=OperationStatus.COLLISION,
            reason=f"destination file {filename!r} already exists in {str(target_dir)!r}",
            folder_name=folder_name,
        )

    if not config.dry_run:
        try:
            shutil.move(str(source), str(destination))
        except OSError as e:
            return FileOperation(
                source=source,
                destination=destination,
                status=OperationStatus.FAILED,
                reason=str(e),
                folder_name=folder_name,
            )

    return FileOperation(
        source=source,
        destination=destination,
        status=OperationStatus.MOVED,
        folder_name=folder_name,
    )


def organize(
    config: OrganizeConfig, matchers: tuple[MatcherDefinition, ...] = MATCHERS
) -> OrganizeResult:
    """Organize the files directly inside config.directory.

    Per-file problems (unrecognized name, existing destination, failed move)
    are logged and recorded in the result; the run goes on with the next
    file.

    Raises:
        DirectoryListingError: The directory could not be listed.
        DirectoryCreationError: A date directory could not be created.
    """
    logger = Logger(config.verbosity, config.dry_run)
    result = OrganizeResult(dry_run=config.dry_run)
    directory = config.directory

    logger.header(f"Organizing pictures in {directory}")

    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        raise DirectoryListingError(directory, e) from e

    for entry in entries:
        if entry.is_dir():
            logger.skip(f"Skipping directory: {entry.name}")
            continue

        result.total_processed += 1
        filename = entry.name
        operation = organize_file(entry, config, logger, matchers, result.directories_created)

        if operation.status == OperationStatus.MOVED:
            logger.success(f"Moved: {filename} → {operation.folder_name}/")
            result.moved.append(operation)
        elif operation.status == OperationStatus.UNRECOGNIZED:
            logger.warn(f"Unrecognized: {operation.reason}")
            result.skipped.append(operation)
        elif operation.status == OperationStatus.COLLISION:
            logger.warn(f"Collision: {operation.reason}")
            result.skipped.append(operation)
        elif operation.status == OperationStatus.FAILED:
            logger.error(f"Failed: {filename} - {operation.reason}")
            result.failed.append(operation)

    # Summary
    if not result.moved and not result.failed:
        logger.info("\nNo files to move")
    else:
        summary_parts = []
        if result.moved:
            summary_parts.append(f"{len(result.moved)} moved")
        if result.skipped:
            summary_parts.append(f"{len(result.skipped)} skipped")
        if result.failed:
            summary_parts.append(f"{len(result.failed)} failed")
        if result.directories_created:
            summary_parts.append(f"{len(result.directories_created)} folders created")

        logger.info(f"\n{Colors.BOLD}Summary:{Colors.RESET} {', '.join(summary_parts)}")

    return result


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="organize-pics",
        description="Organize pictures and videos into YYYY-MM-DD folders based on their file names",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  organize-pics ~/Pictures/Camera            # Organize a directory
  organize-pics --dry-run ~/Pictures/Camera  # Preview changes
  organize-pics -v ~/Pictures/Camera         # Also list skipped entries

Recognized file names:
  IMG_YYYYMMDD_*.jpg, VID_YYYYMMDD_*.mp4, PXL_YYYYMMDD_*.{jpg,mp4}
  C360_YYYY-MM-DD-hh-mm-ss-mmm.jpg
  YYYYMMDD_*.{jpg,mp4}
  Screenshot_YYYYMMDD_*.jpg

Configuration Files:
  .organizepicsrc.yaml, .organizepicsrc.yml, .organizepicsrc.json
""",
    )

    parser.add_argument(
        "paths",
        nargs="*",
        metavar="DIRECTORY",
        help="Directory with pictures to organize",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file (default: .organizepicsrc.yaml)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview changes without moving files",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show detailed output",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress all output except errors",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if len(args.paths) != 1:
        print(
            f"Incorrect number of args to program. Expected 1, received {len(args.paths)}",
            file=sys.stderr,
        )
        parser.print_usage(sys.stderr)
        return 1

    # Load configurations with precedence: CLI > ENV > File > Defaults
    try:
        file_config = load_config_file(args.config)
    except ConfigError as e:
        print(f"{Colors.RED}Error:{Colors.RESET} {e}", file=sys.stderr)
        return 1

    env_config = load_env_config()
    merged_config = merge_configs(file_config, env_config)

    try:
        directory = validate_directory(Path(args.paths[0]))
    except InvalidInputPathError as e:
        print(f"{Colors.RED}Error:{Colors.RESET} {e}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    config = OrganizeConfig.from_dict(merged_config, directory)

    # Apply CLI overrides
    if args.dry_run:
        config.dry_run = True
    if args.verbose:
        config.verbosity = 2
    if args.quiet:
        config.verbosity = 0

    try:
        organize(config)
    except OrganizeError as e:
        print(f"{Colors.RED}Fatal error:{Colors.RESET} {e}", file=sys.stderr)
        return 1

    # Per-file problems are reported but do not fail the run
    return 0


if __name__ == "__main__":
    sys.exit(main())
