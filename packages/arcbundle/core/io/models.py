"""Path and result types shared by the filesystem layer."""

from pathlib import Path
from typing import NewType

from pydantic import BaseModel, Field

# Absolute location of a file or folder on the packaging host
AbsolutePath = NewType("AbsolutePath", Path)


def absolute_path(path: str | Path) -> AbsolutePath:
    """Anchor a user-supplied location (active folder, meta.cb, list source).

    Relative input is taken against the working directory and symlinks in
    the supplied path itself are resolved, so ``absolute_path("active")`` and
    ``absolute_path("./active/")`` name the same folder.
    """
    return AbsolutePath(Path(path).resolve())


class WriteResult(BaseModel):
    """What an atomic write left on disk.

    The manifest writer and the list store log both fields after a save.
    """

    path: str = Field(description="Final path written")
    bytes_written: int = Field(description="Number of bytes written", ge=0)
