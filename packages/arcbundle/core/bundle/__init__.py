"""Bundle packaging and integrity engine.

Builds the meta.cb manifest for an active folder and verifies existing
manifests:
- FileTreeCollector: recursive enumeration with ``.oldjson`` exclusion
- ManifestBuilder: per-file SHA-256, length and contiguous byte offsets
- DetailHasher: HMAC tags for songlist, packlist and unlocks
- BundleManifestWriter: assembles and atomically writes meta.cb
- ActiveFolderValidator: structural gate before packaging
- BundleVerifier: re-derives every hash and reports all mismatches
- BundleService: the caller-facing operations
"""

from arcbundle.core.bundle.active_folder import ActiveFolderValidator
from arcbundle.core.bundle.builder import ManifestBuilder
from arcbundle.core.bundle.collector import DEFAULT_EXCLUDED_SUFFIXES, FileTreeCollector
from arcbundle.core.bundle.details import DetailHasher
from arcbundle.core.bundle.errors import (
    BundleError,
    DirectoryNotFoundError,
    ManifestParseError,
    PathEscapeError,
)
from arcbundle.core.bundle.hashing import (
    DETAILS_HMAC_KEY,
    ContentHasher,
    hmac_sha256_base64,
    sha256_base64,
)
from arcbundle.core.bundle.models import (
    DETAIL_PATHS,
    BundleManifest,
    BundleVerificationResult,
    FileEntry,
    ValidationResult,
)
from arcbundle.core.bundle.service import BundleService
from arcbundle.core.bundle.verifier import BundleVerifier
from arcbundle.core.bundle.writer import DEFAULT_VERSION, BundleManifestWriter, generate_uuid

__all__ = [
    # Service
    "BundleService",
    # Components
    "ActiveFolderValidator",
    "BundleManifestWriter",
    "BundleVerifier",
    "DetailHasher",
    "FileTreeCollector",
    "ManifestBuilder",
    # Hashing
    "ContentHasher",
    "DETAILS_HMAC_KEY",
    "hmac_sha256_base64",
    "sha256_base64",
    # Models
    "BundleManifest",
    "BundleVerificationResult",
    "FileEntry",
    "ValidationResult",
    "DETAIL_PATHS",
    # Errors
    "BundleError",
    "DirectoryNotFoundError",
    "ManifestParseError",
    "PathEscapeError",
    # Defaults
    "DEFAULT_EXCLUDED_SUFFIXES",
    "DEFAULT_VERSION",
    "generate_uuid",
]
