"""Verification of a meta.cb document against an active folder.

Every declared file is re-hashed and every details tag recomputed. Only a
missing manifest, a missing root or an unparsable manifest stop the check
early; content problems are accumulated so one run reports all of them.
"""

from __future__ import annotations

import logging

from arcbundle.core.bundle.errors import ManifestParseError
from arcbundle.core.bundle.hashing import ContentHasher
from arcbundle.core.bundle.models import (
    DETAIL_PATHS,
    BundleManifest,
    BundleVerificationResult,
)
from arcbundle.core.io import AbsolutePath, FileSystemSync


class BundleVerifier:
    """Re-derives hashes to confirm a manifest matches a directory.

    Files present on disk but not declared in the manifest are not flagged.
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

    def verify(self, manifest_path: AbsolutePath, root: AbsolutePath) -> BundleVerificationResult:
        """Check *manifest_path* against the files under *root*.

        Args:
            manifest_path: meta.cb document
            root: Active folder the manifest should describe

        Returns:
            BundleVerificationResult with errors, warnings, infos and counters
        """
        result = BundleVerificationResult()
        self.logger.info("Verifying bundle: meta.cb=%s, active=%s", manifest_path, root)

        if not self.fs.is_file(manifest_path):
            result.add_error(f"meta.cb does not exist: {manifest_path}")
            return result

        if not self.fs.is_dir(root):
            result.add_error(f"Active folder does not exist: {root}")
            return result

        manifest = self._load(manifest_path, result)
        if manifest is None:
            return result

        if not manifest.version_number:
            result.add_warning("meta.cb is missing versionNumber")
        if not manifest.application_version_number:
            result.add_warning("meta.cb is missing applicationVersionNumber")

        self._check_hashes(manifest, root, result)
        self._check_details(manifest, root, result)
        self._check_added(manifest, root, result)

        result.add_info(
            f"File verification: {result.verified_files}/{result.total_files} hashes matched, "
            f"{result.mismatched_files} mismatched"
        )

        if result.is_valid:
            result.add_info("Bundle verified: meta.cb matches the active folder")
            self.logger.info(
                "Bundle verified: %d/%d files match",
                result.verified_files,
                result.total_files,
            )
        else:
            self.logger.warning(
                "Bundle verification failed: %d error(s), %d/%d files mismatched",
                len(result.errors),
                result.mismatched_files,
                result.total_files,
            )

        return result

    def _load(
        self, manifest_path: AbsolutePath, result: BundleVerificationResult
    ) -> BundleManifest | None:
        try:
            return BundleManifest.from_json(self.fs.read_bytes(manifest_path))
        except (OSError, ManifestParseError) as e:
            result.add_error(f"Unable to parse meta.cb {manifest_path}: {e}")
            return None

    def _resolve(self, root: AbsolutePath, path: str) -> AbsolutePath | None:
        try:
            return self.fs.join(root, *path.split("/"))
        except ValueError:
            return None

    def _check_hashes(
        self, manifest: BundleManifest, root: AbsolutePath, result: BundleVerificationResult
    ) -> None:
        result.total_files = len(manifest.path_to_hash)

        for path, expected in manifest.path_to_hash.items():
            file = self._resolve(root, path)
            if file is None:
                result.add_error(f"Path escapes the active folder: {path}")
                continue

            if not self.fs.is_file(file):
                result.add_error(
                    f"File missing: {path} (listed in meta.cb but not present in the active folder)"
                )
                continue

            try:
                data = self.fs.read_bytes(file)
            except OSError as e:
                result.add_error(f"Failed to read {path}: {e}")
                continue

            if self.hasher.sha256(data) != expected:
                result.add_error(f"File hash mismatch: {path}")
                result.mismatched_files += 1
            else:
                result.verified_files += 1

    def _check_details(
        self, manifest: BundleManifest, root: AbsolutePath, result: BundleVerificationResult
    ) -> None:
        for detail_path in DETAIL_PATHS:
            expected = manifest.path_to_details.get(detail_path)
            if expected is None:
                result.add_warning(f"meta.cb has no details hash for {detail_path}")
                continue

            file = self._resolve(root, detail_path)
            if file is None or not self.fs.is_file(file):
                result.add_warning(f"List file does not exist: {detail_path}")
                continue

            try:
                data = self.fs.read_bytes(file)
            except OSError as e:
                result.add_error(f"Failed to read {detail_path}: {e}")
                continue

            if self.hasher.hmac(data) != expected:
                result.add_error(f"List file HMAC mismatch: {detail_path}")

    def _check_added(
        self, manifest: BundleManifest, root: AbsolutePath, result: BundleVerificationResult
    ) -> None:
        for entry in manifest.added:
            file = self._resolve(root, entry.path)
            if file is None or not self.fs.is_file(file):
                result.add_warning(f"Added file does not exist: {entry.path}")
