"""Tests for SHA-256 and HMAC-SHA-256 helpers."""

import base64
import hashlib
import hmac

from arcbundle.core.bundle.hashing import (
    DETAILS_HMAC_KEY,
    ContentHasher,
    hmac_sha256_base64,
    sha256_base64,
)


class TestSha256:
    """Tests for plain content hashes."""

    def test_empty_input_known_digest(self):
        """Test SHA-256 of empty input matches the published digest."""
        assert sha256_base64(b"") == "47DEQpj8HBSa+/TImW+5JCeuQeRkm5NMpJWZG3hSuFU="

    def test_abc_known_digest(self):
        """Test SHA-256 of 'abc' matches the published digest."""
        assert sha256_base64(b"abc") == "ungWv48Bz+pBQUDeXa4iI7ADYaOWF3qctBD/YfIAFa0="

    def test_output_is_standard_padded_base64(self):
        """Test the digest decodes to 32 bytes."""
        encoded = sha256_base64(b"songlist")
        assert len(encoded) == 44
        assert encoded.endswith("=")
        assert len(base64.b64decode(encoded)) == 32

    def test_deterministic(self):
        """Test identical input yields identical output."""
        assert sha256_base64(b"x" * 1000) == sha256_base64(b"x" * 1000)


class TestHmac:
    """Tests for details tags."""

    def test_key_is_64_bytes(self):
        """Test the shared key has the expected length and edges."""
        assert len(DETAILS_HMAC_KEY) == 64
        assert DETAILS_HMAC_KEY[:4] == bytes([0xD4, 0x1F, 0xDB, 0xE3])
        assert DETAILS_HMAC_KEY[-4:] == bytes([0x9C, 0x0E, 0x3D, 0xE9])

    def test_matches_stdlib_hmac(self):
        """Test the tag equals a directly computed HMAC under the shared key."""
        data = b'{"songs": []}'
        expected = base64.b64encode(
            hmac.new(DETAILS_HMAC_KEY, data, hashlib.sha256).digest()
        ).decode()
        assert hmac_sha256_base64(data) == expected

    def test_differs_from_plain_sha256(self):
        """Test keyed and unkeyed digests differ."""
        assert hmac_sha256_base64(b"abc") != sha256_base64(b"abc")

    def test_key_changes_tag(self):
        """Test a different key yields a different tag."""
        assert hmac_sha256_base64(b"abc", key=b"other") != hmac_sha256_base64(b"abc")


class TestContentHasher:
    """Tests for the hasher strategy object."""

    def test_default_uses_shared_key(self):
        """Test the default hasher uses the shared key."""
        hasher = ContentHasher()
        assert hasher.hmac(b"data") == hmac_sha256_base64(b"data")
        assert hasher.sha256(b"data") == sha256_base64(b"data")

    def test_custom_key(self):
        """Test a custom key only affects HMAC output."""
        hasher = ContentHasher(details_key=b"k")
        assert hasher.hmac(b"data") == hmac_sha256_base64(b"data", key=b"k")
        assert hasher.sha256(b"data") == sha256_base64(b"data")
