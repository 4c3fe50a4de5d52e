"""Filesystem abstraction layer for arcbundle.

Provides safe, testable, blocking filesystem operations with atomic writes.

Example:
    >>> from arcbundle.core.io import RealFileSystemSync, absolute_path
    >>> fs = RealFileSystemSync()
    >>> path = fs.join(absolute_path("/tmp"), "active", "songs", "songlist")
    >>> fs.write_text(path, '{"songs": []}')
    >>> content = fs.read_text(path)
"""

from .impl_fake import FakeFileSystemSync
from .impl_real import RealFileSystemSync
from .models import AbsolutePath, WriteResult, absolute_path
from .protocols import FileSystemSync

__all__ = [
    # Path types and constructors
    "AbsolutePath",
    "absolute_path",
    # Result types
    "WriteResult",
    # Protocols
    "FileSystemSync",
    # Implementations
    "RealFileSystemSync",
    "FakeFileSystemSync",
]
