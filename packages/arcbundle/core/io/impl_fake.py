"""In-memory filesystem for fast, isolated testing.

Simulates filesystem operations without disk I/O.
"""

from pathlib import Path

from .models import AbsolutePath, WriteResult


class FakeFileSystemSync:
    """
    In-memory filesystem for testing.

    Simulates filesystem operations without disk I/O.
    Not thread-safe (use per-test instance).
    """

    def __init__(self) -> None:
        self._files: dict[str, bytes] = {}
        self._dirs: set[str] = {"/"}  # Root always exists

    def join(self, base: AbsolutePath, *parts: str) -> AbsolutePath:
        """Join paths (no I/O)."""
        result = Path(base).joinpath(*parts)

        # Normalize to absolute
        if not result.is_absolute():
            result = Path("/") / result

        # Collapse "." and ".." lexically; nothing here is a symlink
        normalized = Path(*_normalize_parts(result.parts))
        try:
            normalized.relative_to(Path(*_normalize_parts(Path(base).parts)))
        except ValueError as e:
            raise ValueError(f"Path traversal detected: {normalized} escapes {base}") from e

        return AbsolutePath(normalized)

    def realpath(self, path: AbsolutePath) -> AbsolutePath:
        """Canonical path; the in-memory tree has no links."""
        return AbsolutePath(Path(path))

    def exists(self, path: AbsolutePath) -> bool:
        """Check existence."""
        path_str = str(Path(path))
        return path_str in self._files or path_str in self._dirs

    def is_file(self, path: AbsolutePath) -> bool:
        """Check if file."""
        return str(Path(path)) in self._files

    def is_dir(self, path: AbsolutePath) -> bool:
        """Check if directory."""
        return str(Path(path)) in self._dirs

    def read_bytes(self, path: AbsolutePath) -> bytes:
        """Read bytes."""
        path_str = str(Path(path))
        if path_str not in self._files:
            raise FileNotFoundError(f"File not found: {path}")
        return self._files[path_str]

    def read_text(self, path: AbsolutePath, encoding: str = "utf-8") -> str:
        """Read text."""
        return self.read_bytes(path).decode(encoding)

    def write_bytes(self, path: AbsolutePath, content: bytes) -> WriteResult:
        """Write bytes."""
        path_obj = Path(path)
        path_str = str(path_obj)

        # Auto-create parent directories
        parent = str(path_obj.parent)
        if parent not in self._dirs:
            self._ensure_parents(path_obj.parent)

        self._files[path_str] = bytes(content)

        return WriteResult(
            path=path_str,
            bytes_written=len(content),
        )

    def write_text(
        self,
        path: AbsolutePath,
        content: str,
        encoding: str = "utf-8",
    ) -> WriteResult:
        """Write text."""
        return self.write_bytes(path, content.encode(encoding))

    def _ensure_parents(self, path: Path) -> None:
        """Recursively create parent directories."""
        parts = path.parts
        for i in range(1, len(parts) + 1):
            dir_path = str(Path(*parts[:i]))
            self._dirs.add(dir_path)

    def mkdirs(self, path: AbsolutePath, exist_ok: bool = True) -> None:
        """Create directory."""
        path_str = str(Path(path))
        if not exist_ok and path_str in self._dirs:
            raise FileExistsError(f"Directory exists: {path}")
        self._ensure_parents(Path(path))
        self._dirs.add(path_str)

    def listdir(self, path: AbsolutePath) -> list[str]:
        """List directory."""
        path_str = str(Path(path))
        if path_str not in self._dirs:
            raise FileNotFoundError(f"Directory not found: {path}")

        # Find immediate children
        children = []
        for file_path in self._files.keys():
            if Path(file_path).parent == Path(path_str):
                children.append(Path(file_path).name)
        for dir_path in self._dirs:
            if dir_path != path_str and Path(dir_path).parent == Path(path_str):
                children.append(Path(dir_path).name)

        return sorted(set(children))

    def remove(self, path: AbsolutePath) -> None:
        """Remove file."""
        path_str = str(Path(path))
        if path_str not in self._files:
            raise FileNotFoundError(f"File not found: {path}")
        del self._files[path_str]


def _normalize_parts(parts: tuple[str, ...]) -> list[str]:
    out: list[str] = []
    for part in parts:
        if part == ".":
            continue
        if part == "..":
            if len(out) > 1:
                out.pop()
            continue
        out.append(part)
    return out
