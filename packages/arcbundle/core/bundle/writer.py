"""meta.cb generation."""

from __future__ import annotations

import logging
import secrets
from collections.abc import Iterable

from arcbundle.core.bundle.builder import ManifestBuilder
from arcbundle.core.bundle.collector import FileTreeCollector
from arcbundle.core.bundle.details import DetailHasher
from arcbundle.core.bundle.errors import DirectoryNotFoundError, PathEscapeError
from arcbundle.core.bundle.hashing import ContentHasher
from arcbundle.core.bundle.models import DETAIL_PATHS, BundleManifest
from arcbundle.core.io import AbsolutePath, FileSystemSync
from arcbundle.core.utils.logging import log_performance

DEFAULT_VERSION = "1.0.0"
UUID_BYTES = 9


def generate_uuid() -> str:
    """Random manifest identifier: 9 bytes as 18 lowercase hex characters."""
    return secrets.token_bytes(UUID_BYTES).hex()


class BundleManifestWriter:
    """Builds a :class:`BundleManifest` for an active folder and writes it out.

    The three list files are mandatory; everything else under the root is
    packaged as found. The ``removed`` list is always empty because no
    previous manifest is diffed against.
    """

    def __init__(
        self,
        fs: FileSystemSync,
        collector: FileTreeCollector | None = None,
        hasher: ContentHasher | None = None,
        default_version: str = DEFAULT_VERSION,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        self.fs = fs
        self.logger = logger or logging.getLogger(__name__)
        hasher = hasher or ContentHasher()
        self.collector = collector or FileTreeCollector(fs, logger=self.logger)
        self.builder = ManifestBuilder(fs, hasher, logger=self.logger)
        self.details = DetailHasher(fs, hasher, logger=self.logger)
        self.default_version = default_version

    @log_performance
    def build(
        self,
        root: AbsolutePath,
        app_version: str | None = None,
        bundle_version: str | None = None,
        previous_bundle_version: str | None = None,
        exclude: Iterable[AbsolutePath] = (),
    ) -> BundleManifest:
        """Build the manifest for *root* without writing it.

        Files listed in *exclude* are not packaged.

        Raises:
            DirectoryNotFoundError: If root does not exist
            PathEscapeError: If a list file links outside root
            FileNotFoundError: If a list file is missing (first one, in
                songlist, packlist, unlocks order)
            OSError: If any file cannot be read
        """
        if not self.fs.is_dir(root):
            raise DirectoryNotFoundError(root, what="Active folder")

        for detail_path in DETAIL_PATHS:
            try:
                path = self.fs.join(root, *detail_path.split("/"))
            except ValueError as e:
                raise PathEscapeError(f"{detail_path} links outside the active folder: {e}") from e
            if not self.fs.is_file(path):
                raise FileNotFoundError(f"{detail_path} does not exist: {path}")

        files = self.collector.collect(root, exclude=exclude)
        self.logger.info("Found %d files under %s", len(files), root)

        added, path_to_hash = self.builder.build(root, files)

        return BundleManifest(
            version_number=bundle_version if bundle_version is not None else self.default_version,
            previous_version_number=previous_bundle_version,
            application_version_number=(
                app_version if app_version is not None else self.default_version
            ),
            uuid=generate_uuid(),
            removed=[],
            added=added,
            path_to_hash=path_to_hash,
            path_to_details=self.details.compute_details(root),
        )

    def write(
        self,
        root: AbsolutePath,
        output_path: AbsolutePath,
        app_version: str | None = None,
        bundle_version: str | None = None,
        previous_bundle_version: str | None = None,
    ) -> BundleManifest:
        """Build the manifest for *root* and atomically write it to *output_path*.

        A previous manifest at *output_path* inside root is not packaged.

        Args:
            root: Active folder to package
            output_path: Destination of the meta.cb document
            app_version: Application version (defaults to the writer's default)
            bundle_version: Bundle version (defaults to the writer's default)
            previous_bundle_version: Prior bundle version, omitted from the
                document when None

        Returns:
            The manifest that was written

        Raises:
            DirectoryNotFoundError: If root does not exist
            PathEscapeError: If a list file links outside root
            FileNotFoundError: If a list file is missing
            OSError: On read or write failure
        """
        self.logger.info("Generating meta.cb: %s", output_path)
        manifest = self.build(
            root,
            app_version,
            bundle_version,
            previous_bundle_version,
            exclude=(output_path,),
        )
        result = self.fs.write_text(output_path, manifest.to_json())
        self.logger.info(
            "Wrote meta.cb with %d entries (%d bytes) to %s",
            len(manifest.added),
            result.bytes_written,
            result.path,
        )
        return manifest
