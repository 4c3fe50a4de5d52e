"""Real filesystem implementation.

Provides atomic writes via temp file + os.replace().
"""

import os
from pathlib import Path
from tempfile import NamedTemporaryFile

from .models import AbsolutePath, WriteResult


class RealFileSystemSync:
    """
    Real filesystem implementation using blocking I/O.

    Provides atomic writes via temp file + os.replace().
    """

    def join(self, base: AbsolutePath, *parts: str) -> AbsolutePath:
        """Join paths lexically; links are kept under their own name."""
        result = Path(os.path.normpath(Path(base).joinpath(*parts)))

        # Security: Ensure the link target is still under base
        try:
            result.resolve().relative_to(Path(base).resolve())
        except ValueError as e:
            raise ValueError(f"Path traversal detected: {result} escapes {base}") from e

        return AbsolutePath(result)

    def realpath(self, path: AbsolutePath) -> AbsolutePath:
        """Canonical path with every symlink resolved."""
        return AbsolutePath(Path(os.path.realpath(path)))

    def exists(self, path: AbsolutePath) -> bool:
        """Check existence."""
        return os.path.exists(path)

    def is_file(self, path: AbsolutePath) -> bool:
        """Check if file."""
        return os.path.isfile(path)

    def is_dir(self, path: AbsolutePath) -> bool:
        """Check if directory."""
        return os.path.isdir(path)

    def read_bytes(self, path: AbsolutePath) -> bytes:
        """Read whole file as bytes."""
        return Path(path).read_bytes()

    def read_text(self, path: AbsolutePath, encoding: str = "utf-8") -> str:
        """Read text file."""
        return Path(path).read_text(encoding=encoding)

    def write_bytes(self, path: AbsolutePath, content: bytes) -> WriteResult:
        """Atomically write bytes."""
        path_obj = Path(path)

        # Ensure parent directory exists
        path_obj.parent.mkdir(parents=True, exist_ok=True)

        # Atomic write: temp file → replace
        # Create temp file in same directory for atomic replace
        tmp = NamedTemporaryFile(mode="wb", dir=path_obj.parent, delete=False)
        tmp_path = tmp.name

        try:
            with tmp:
                tmp.write(content)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_path, str(path))
        except Exception:
            # Clean up temp on failure
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise

        return WriteResult(
            path=str(path),
            bytes_written=len(content),
        )

    def write_text(
        self,
        path: AbsolutePath,
        content: str,
        encoding: str = "utf-8",
    ) -> WriteResult:
        """Atomically write text file."""
        return self.write_bytes(path, content.encode(encoding))

    def mkdirs(self, path: AbsolutePath, exist_ok: bool = True) -> None:
        """Create directory and parents."""
        os.makedirs(path, exist_ok=exist_ok)

    def listdir(self, path: AbsolutePath) -> list[str]:
        """List directory contents."""
        return os.listdir(path)

    def remove(self, path: AbsolutePath) -> None:
        """Remove file."""
        os.unlink(path)
