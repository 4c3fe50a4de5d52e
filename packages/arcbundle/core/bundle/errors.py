"""Exceptions raised by bundle packaging."""

from __future__ import annotations


class BundleError(Exception):
    """Base class for bundle packaging errors."""


class DirectoryNotFoundError(BundleError, FileNotFoundError):
    """A directory required by the operation does not exist."""

    def __init__(self, path: object, what: str = "Directory") -> None:
        self.path = str(path)
        super().__init__(f"{what} does not exist: {path}")


class ManifestParseError(BundleError, ValueError):
    """A meta.cb document could not be parsed."""


class PathEscapeError(BundleError, ValueError):
    """A required path inside the active folder links outside of it."""
