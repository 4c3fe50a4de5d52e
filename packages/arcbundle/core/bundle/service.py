"""Bundle operations exposed to callers (CLI, editors)."""

from __future__ import annotations

import logging
from pathlib import Path

from arcbundle.core.bundle.active_folder import ActiveFolderValidator
from arcbundle.core.bundle.collector import FileTreeCollector
from arcbundle.core.bundle.errors import BundleError, DirectoryNotFoundError, PathEscapeError
from arcbundle.core.bundle.models import DETAIL_PATHS, BundleVerificationResult, ValidationResult
from arcbundle.core.bundle.verifier import BundleVerifier
from arcbundle.core.bundle.writer import BundleManifestWriter
from arcbundle.core.config.models import BundleConfig
from arcbundle.core.io import AbsolutePath, FileSystemSync, RealFileSystemSync, absolute_path
from arcbundle.core.songlist import SonglistStore


class BundleService:
    """Writes list files into an active folder, packages it and verifies bundles.

    Build operations raise on the first structural problem after logging
    it; validation operations return a result instead of raising.
    """

    def __init__(
        self,
        store: SonglistStore,
        fs: FileSystemSync | None = None,
        config: BundleConfig | None = None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        self.store = store
        self.fs = fs or RealFileSystemSync()
        self.config = config or BundleConfig()
        self.logger = logger or logging.getLogger(__name__)

        collector = FileTreeCollector(
            self.fs,
            excluded_suffixes=self.config.excluded_suffixes,
            sort_paths=self.config.sort_paths,
            logger=self.logger,
        )
        self.writer = BundleManifestWriter(
            self.fs,
            collector=collector,
            default_version=self.config.default_version,
            logger=self.logger,
        )
        self.validator = ActiveFolderValidator(self.fs, logger=self.logger)
        self.verifier = BundleVerifier(self.fs, logger=self.logger)

    def validate_active_folder(self, path: str | Path) -> ValidationResult:
        """Structural gate run before packaging."""
        return self.validator.validate(absolute_path(path))

    def update_active_folder(self, path: str | Path) -> bool:
        """Write the in-memory lists into ``<path>/songs``.

        Creates the ``songs`` directory when missing.

        Raises:
            DirectoryNotFoundError: If the active folder does not exist
            PathEscapeError: If the songs folder or a list file links outside
                the active folder
            OSError: On write failure
        """
        root = absolute_path(path)
        self.logger.info("Updating active folder: %s", root)
        try:
            if not self.fs.is_dir(root):
                raise DirectoryNotFoundError(root, what="Active folder")

            songs_dir = self._join_inside(root, "songs")
            if not self.fs.is_dir(songs_dir):
                self.fs.mkdirs(songs_dir)
                self.logger.info("Created songs folder: %s", songs_dir)
            for detail_path in DETAIL_PATHS:
                self._join_inside(root, *detail_path.split("/"))

            self.store.save_directory(songs_dir)
        except (OSError, BundleError) as e:
            self.logger.error("Failed to update active folder: %s", e)
            raise

        self.logger.info("Active folder updated: %s", root)
        return True

    def _join_inside(self, root: AbsolutePath, *parts: str) -> AbsolutePath:
        try:
            return self.fs.join(root, *parts)
        except ValueError as e:
            name = "/".join(parts)
            raise PathEscapeError(f"{name} links outside the active folder: {e}") from e

    def generate_meta_cb(
        self,
        root: str | Path,
        out_path: str | Path,
        app_version: str | None = None,
        bundle_version: str | None = None,
        previous_bundle_version: str | None = None,
    ) -> bool:
        """Package *root* into a meta.cb at *out_path*.

        Returns:
            True once the manifest has been written

        Raises:
            DirectoryNotFoundError: If root does not exist
            PathEscapeError: If a list file links outside root
            FileNotFoundError: If a list file is missing
            OSError: On read or write failure
        """
        try:
            self.writer.write(
                absolute_path(root),
                absolute_path(out_path),
                app_version=app_version,
                bundle_version=bundle_version,
                previous_bundle_version=previous_bundle_version,
            )
        except (OSError, BundleError) as e:
            self.logger.error("Failed to generate meta.cb: %s", e)
            raise
        return True

    def validate_bundle(
        self, manifest_path: str | Path, root: str | Path
    ) -> BundleVerificationResult:
        """Re-hash *root* and compare it against the manifest at *manifest_path*."""
        return self.verifier.verify(absolute_path(manifest_path), absolute_path(root))
