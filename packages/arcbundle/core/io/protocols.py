"""Protocol for filesystem operations.

Packaging and verification are single-shot, blocking operations, so the
filesystem contract is synchronous.
"""

from typing import Protocol

from .models import AbsolutePath, WriteResult


class FileSystemSync(Protocol):
    """
    Protocol for blocking filesystem operations.

    All implementations must provide atomic write semantics and
    handle platform-specific details transparently.
    """

    # Path operations (no I/O)
    def join(self, base: AbsolutePath, *parts: str) -> AbsolutePath:
        """
        Safely join path components.

        Args:
            base: Base absolute path
            *parts: Path segments to join

        Returns:
            New absolute path

        Raises:
            ValueError: If result escapes base directory

        The joined path is lexical: a symlink inside base keeps its own
        name, and only its target is checked against base.
        """
        ...

    def realpath(self, path: AbsolutePath) -> AbsolutePath:
        """Canonical path with symlinks resolved, for loop detection."""
        ...

    # Existence checks
    def exists(self, path: AbsolutePath) -> bool:
        """Check if path exists (file or directory)."""
        ...

    def is_file(self, path: AbsolutePath) -> bool:
        """Check if path exists and is a file."""
        ...

    def is_dir(self, path: AbsolutePath) -> bool:
        """Check if path exists and is a directory."""
        ...

    # Read operations
    def read_bytes(self, path: AbsolutePath) -> bytes:
        """
        Read the whole file as bytes.

        Args:
            path: File path

        Returns:
            File contents

        Raises:
            FileNotFoundError: If file doesn't exist
            OSError: On read failure
        """
        ...

    def read_text(self, path: AbsolutePath, encoding: str = "utf-8") -> str:
        """
        Read text file contents.

        Raises:
            FileNotFoundError: If file doesn't exist
            OSError: On read failure
        """
        ...

    # Write operations (atomic)
    def write_bytes(self, path: AbsolutePath, content: bytes) -> WriteResult:
        """
        Atomically write bytes to file.

        Uses temp file + atomic replace to ensure readers never
        observe partial writes. Parent directories are created.

        Args:
            path: Target file path
            content: Bytes to write

        Returns:
            WriteResult with metadata

        Raises:
            OSError: On write failure
        """
        ...

    def write_text(
        self,
        path: AbsolutePath,
        content: str,
        encoding: str = "utf-8",
    ) -> WriteResult:
        """Atomically write text to file (see write_bytes)."""
        ...

    # Directory operations
    def mkdirs(self, path: AbsolutePath, exist_ok: bool = True) -> None:
        """
        Create directory and all parents.

        Raises:
            FileExistsError: If exist_ok is False and the directory exists
            OSError: On creation failure
        """
        ...

    def listdir(self, path: AbsolutePath) -> list[str]:
        """
        List directory contents (names only).

        Order is whatever the implementation yields; callers that need a
        stable order must sort.

        Raises:
            FileNotFoundError: If directory doesn't exist
            OSError: On read failure
        """
        ...

    # Removal operations
    def remove(self, path: AbsolutePath) -> None:
        """
        Remove a file.

        Raises:
            FileNotFoundError: If file doesn't exist
            OSError: On removal failure
        """
        ...
