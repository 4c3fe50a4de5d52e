"""HMAC details tags for the three list files."""

from __future__ import annotations

import logging

from arcbundle.core.bundle.hashing import ContentHasher
from arcbundle.core.bundle.models import DETAIL_PATHS
from arcbundle.core.io import AbsolutePath, FileSystemSync


class DetailHasher:
    """Computes ``pathToDetails`` for songlist, packlist and unlocks."""

    def __init__(
        self,
        fs: FileSystemSync,
        hasher: ContentHasher | None = None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        self.fs = fs
        self.hasher = hasher or ContentHasher()
        self.logger = logger or logging.getLogger(__name__)

    def compute_details(self, root: AbsolutePath) -> dict[str, str]:
        """Map each existing list file to its base64 HMAC tag.

        Files that do not exist, or that link outside root, are left out of
        the map entirely.

        Raises:
            OSError: If an existing list file cannot be read
        """
        details: dict[str, str] = {}
        for detail_path in DETAIL_PATHS:
            try:
                path = self.fs.join(root, *detail_path.split("/"))
            except ValueError:
                self.logger.warning("%s links outside %s, skipping details tag", detail_path, root)
                continue
            if not self.fs.is_file(path):
                self.logger.debug("No %s under %s, skipping details tag", detail_path, root)
                continue
            details[detail_path] = self.hasher.hmac(self.fs.read_bytes(path))
        return details
