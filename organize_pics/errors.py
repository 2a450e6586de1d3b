"""Exceptions raised while organizing a picture directory."""

from __future__ import annotations

from pathlib import Path


class OrganizeError(Exception):
    """Base class for organize-pics errors."""


class NotRecognizedError(OrganizeError):
    """No matcher recognizes the file name."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"no matcher found for {filename!r}")
        self.filename = filename


class InvalidInputPathError(OrganizeError):
    """The directory to organize does not exist or is not a directory."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{reason}: {path}")
        self.path = path


class DirectoryListingError(OrganizeError):
    """The directory to organize could not be listed."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"unable to list {str(path)!r}: {cause}")
        self.path = path


class DirectoryCreationError(OrganizeError):
    """A date directory could not be created."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"unable to mkdir {str(path)!r}: {cause}")
        self.path = path


class ConfigError(OrganizeError):
    """The configuration file is missing or malformed."""
