"""File entry construction for bundle manifests."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from arcbundle.core.bundle.hashing import ContentHasher
from arcbundle.core.bundle.models import FileEntry
from arcbundle.core.io import AbsolutePath, FileSystemSync


def manifest_path(root: AbsolutePath, file: AbsolutePath) -> str:
    """Root-relative path of *file* with ``/`` separators.

    Raises:
        ValueError: If file is not under root
    """
    return Path(file).relative_to(Path(root)).as_posix()


class ManifestBuilder:
    """Hashes collected files and lays them out at contiguous byte offsets.

    Offsets describe a logical concatenation in collection order; no blob is
    actually written.
    """

    def __init__(
        self,
        fs: FileSystemSync,
        hasher: ContentHasher | None = None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        self.fs = fs
        self.hasher = hasher or ContentHasher()
        self.logger = logger or logging.getLogger(__name__)

    def build(
        self, root: AbsolutePath, files: Iterable[AbsolutePath]
    ) -> tuple[list[FileEntry], dict[str, str]]:
        """Build the ``added`` list and the path→hash map.

        Each file is read whole. Any read failure propagates and no partial
        result is returned.

        Args:
            root: Directory the paths are made relative to
            files: Absolute file paths, in the order they should be laid out

        Returns:
            Tuple of (added entries, path→base64 SHA-256)

        Raises:
            OSError: If any file cannot be read
        """
        added: list[FileEntry] = []
        path_to_hash: dict[str, str] = {}
        offset = 0

        for file in files:
            data = self.fs.read_bytes(file)
            entry = FileEntry(
                path=manifest_path(root, file),
                byte_offset=offset,
                length=len(data),
                sha256=self.hasher.sha256(data),
            )
            added.append(entry)
            path_to_hash[entry.path] = entry.sha256
            offset += entry.length

        self.logger.debug("Built %d entries totalling %d bytes", len(added), offset)
        return added, path_to_hash
