"""Content hashing for bundle manifests.

Plain SHA-256 digests identify every packaged file; the three list files
additionally carry an HMAC-SHA-256 "details" tag. Both are base64 encoded.
"""

from __future__ import annotations

import base64
import hashlib
import hmac

# Shared with the game client; must match byte for byte.
DETAILS_HMAC_KEY = bytes.fromhex(
    "d41fdbe337d001680c2a4d43afe570c7"
    "1fde85d8f3d4c46f3799c18f1f508277"
    "aca7ab633283710c2bb41a078efbe7c1"
    "9cf087a7e137752ab7581c8d9c0e3de9"
)


def sha256_base64(data: bytes) -> str:
    """Compute the base64-encoded SHA-256 digest of *data*.

    Example:
        >>> sha256_base64(b"")
        '47DEQpj8HBSa+/TImW+5JCeuQeRkm5NMpJWZG3hSuFU='
    """
    return base64.b64encode(hashlib.sha256(data).digest()).decode("ascii")


def hmac_sha256_base64(data: bytes, key: bytes = DETAILS_HMAC_KEY) -> str:
    """Compute the base64-encoded HMAC-SHA-256 of *data* under *key*."""
    return base64.b64encode(hmac.new(key, data, hashlib.sha256).digest()).decode("ascii")


class ContentHasher:
    """Hashing strategy shared by the manifest builder and the verifier.

    The key is fixed for wire compatibility; passing a different key is only
    useful in tests, and a builder/verifier key mismatch shows up as
    details-tag mismatches rather than as an exception.
    """

    def __init__(self, details_key: bytes = DETAILS_HMAC_KEY) -> None:
        self.details_key = details_key

    def sha256(self, data: bytes) -> str:
        return sha256_base64(data)

    def hmac(self, data: bytes) -> str:
        return hmac_sha256_base64(data, self.details_key)
