"""Tests for BundleVerifier."""

import json
from pathlib import Path

import pytest

from arcbundle.core.bundle.models import BundleManifest, FileEntry
from arcbundle.core.bundle.verifier import BundleVerifier
from arcbundle.core.bundle.writer import BundleManifestWriter
from arcbundle.core.io import AbsolutePath, FakeFileSystemSync, RealFileSystemSync, absolute_path


@pytest.fixture
def manifest_path(fake_fs: FakeFileSystemSync, fake_root: AbsolutePath) -> AbsolutePath:
    """meta.cb for the canonical folder, written outside the folder."""
    path = absolute_path("/out/meta.cb")
    BundleManifestWriter(fake_fs).write(fake_root, path)
    return path


def _verify(fs: FakeFileSystemSync, manifest: AbsolutePath, root: AbsolutePath):
    return BundleVerifier(fs).verify(manifest, root)


class TestRoundTrip:
    """Tests for verifying a manifest against its own source."""

    def test_fresh_manifest_verifies(
        self, fake_fs: FakeFileSystemSync, fake_root: AbsolutePath, manifest_path: AbsolutePath
    ):
        """Test zero errors and every hash verified."""
        result = _verify(fake_fs, manifest_path, fake_root)

        assert result.errors == []
        assert result.warnings == []
        assert result.total_files == 4
        assert result.verified_files == result.total_files
        assert result.mismatched_files == 0
        assert "Bundle verified: meta.cb matches the active folder" in result.infos

    def test_extra_file_is_not_flagged(
        self, fake_fs: FakeFileSystemSync, fake_root: AbsolutePath, manifest_path: AbsolutePath
    ):
        """Test files not declared in the manifest are ignored."""
        fake_fs.write_bytes(fake_fs.join(fake_root, "songs", "new_song", "base.ogg"), b"new")

        result = _verify(fake_fs, manifest_path, fake_root)

        assert result.errors == []
        assert result.verified_files == 4

    def test_on_disk_round_trip(self, active_folder: Path, tmp_path: Path):
        """Test write then verify on a real directory."""
        fs = RealFileSystemSync()
        out = absolute_path(tmp_path / "meta.cb")
        BundleManifestWriter(fs).write(absolute_path(active_folder), out)

        result = BundleVerifier(fs).verify(out, absolute_path(active_folder))

        assert result.is_valid
        assert result.verified_files == result.total_files == 4


class TestMutation:
    """Tests for detecting changed content."""

    def test_one_changed_byte(
        self, fake_fs: FakeFileSystemSync, fake_root: AbsolutePath, manifest_path: AbsolutePath
    ):
        """Test one modified file yields exactly one mismatch and the rest verify."""
        path = fake_fs.join(fake_root, "songs", "song1", "base.ogg")
        data = bytearray(fake_fs.read_bytes(path))
        data[500] ^= 0x01
        fake_fs.write_bytes(path, bytes(data))

        result = _verify(fake_fs, manifest_path, fake_root)

        assert result.errors == ["File hash mismatch: songs/song1/base.ogg"]
        assert result.mismatched_files == 1
        assert result.verified_files == 3

    def test_changed_list_file_fails_hmac(
        self, fake_fs: FakeFileSystemSync, fake_root: AbsolutePath, manifest_path: AbsolutePath
    ):
        """Test a modified list file trips both its hash and its details tag."""
        fake_fs.write_bytes(fake_fs.join(fake_root, "songs", "packlist"), b"q" * 50)

        result = _verify(fake_fs, manifest_path, fake_root)

        assert "File hash mismatch: songs/packlist" in result.errors
        assert "List file HMAC mismatch: songs/packlist" in result.errors
        assert len(result.errors) == 2

    def test_tampered_details_tag(
        self, fake_fs: FakeFileSystemSync, fake_root: AbsolutePath, manifest_path: AbsolutePath
    ):
        """Test a wrong details tag alone is reported."""
        doc = json.loads(fake_fs.read_text(manifest_path))
        doc["pathToDetails"]["songs/unlocks"] = "AAAA"
        fake_fs.write_text(manifest_path, json.dumps(doc))

        result = _verify(fake_fs, manifest_path, fake_root)

        assert result.errors == ["List file HMAC mismatch: songs/unlocks"]
        assert result.verified_files == 4


class TestMissing:
    """Tests for files that disappeared."""

    def test_deleted_file_reported_and_checks_continue(
        self, fake_fs: FakeFileSystemSync, fake_root: AbsolutePath, manifest_path: AbsolutePath
    ):
        """Test a deleted file is reported while the others still verify."""
        fake_fs.remove(fake_fs.join(fake_root, "songs", "song1", "base.ogg"))

        result = _verify(fake_fs, manifest_path, fake_root)

        assert len(result.errors) == 1
        assert result.errors[0].startswith("File missing: songs/song1/base.ogg")
        assert result.warnings == ["Added file does not exist: songs/song1/base.ogg"]
        assert result.verified_files == 3

    def test_deleted_list_file(
        self, fake_fs: FakeFileSystemSync, fake_root: AbsolutePath, manifest_path: AbsolutePath
    ):
        """Test a deleted list file is an error for its hash and a warning for its tag."""
        fake_fs.remove(fake_fs.join(fake_root, "songs", "unlocks"))

        result = _verify(fake_fs, manifest_path, fake_root)

        assert len(result.errors) == 1
        assert "List file does not exist: songs/unlocks" in result.warnings

    def test_missing_details_key_is_warning(
        self, fake_fs: FakeFileSystemSync, fake_root: AbsolutePath, manifest_path: AbsolutePath
    ):
        """Test an absent details entry is a warning only."""
        doc = json.loads(fake_fs.read_text(manifest_path))
        del doc["pathToDetails"]["songs/packlist"]
        fake_fs.write_text(manifest_path, json.dumps(doc))

        result = _verify(fake_fs, manifest_path, fake_root)

        assert result.is_valid
        assert result.warnings == ["meta.cb has no details hash for songs/packlist"]


class TestEarlyExit:
    """Tests for conditions that stop verification."""

    def test_missing_manifest(self, fake_fs: FakeFileSystemSync, fake_root: AbsolutePath):
        """Test a missing meta.cb is a single error."""
        result = _verify(fake_fs, absolute_path("/out/none.cb"), fake_root)

        assert len(result.errors) == 1
        assert result.errors[0].startswith("meta.cb does not exist")
        assert result.total_files == 0

    def test_missing_root(self, fake_fs: FakeFileSystemSync, manifest_path: AbsolutePath):
        """Test a missing active folder is a single error."""
        result = _verify(fake_fs, manifest_path, absolute_path("/gone"))

        assert result.errors == ["Active folder does not exist: /gone"]

    @pytest.mark.parametrize("content", ["not json", "[1, 2]", '{"added": [{"path": ""}]}'])
    def test_unparsable_manifest(
        self, fake_fs: FakeFileSystemSync, fake_root: AbsolutePath, content: str
    ):
        """Test an invalid document is a single parse error."""
        path = absolute_path("/out/meta.cb")
        fake_fs.write_text(path, content)

        result = _verify(fake_fs, path, fake_root)

        assert len(result.errors) == 1
        assert result.errors[0].startswith("Unable to parse meta.cb")
        assert result.infos == []


class TestManifestContent:
    """Tests for header fields and hostile paths."""

    def _write(self, fs: FakeFileSystemSync, manifest: BundleManifest) -> AbsolutePath:
        path = absolute_path("/out/meta.cb")
        fs.write_text(path, manifest.to_json())
        return path

    def test_blank_versions_warn(self, fake_fs: FakeFileSystemSync, fake_root: AbsolutePath):
        """Test empty version fields are warnings."""
        manifest = BundleManifestWriter(fake_fs).build(fake_root)
        manifest = manifest.model_copy(
            update={"version_number": "", "application_version_number": ""}
        )

        result = _verify(fake_fs, self._write(fake_fs, manifest), fake_root)

        assert result.is_valid
        assert "meta.cb is missing versionNumber" in result.warnings
        assert "meta.cb is missing applicationVersionNumber" in result.warnings

    def test_path_escaping_root_is_error(
        self, fake_fs: FakeFileSystemSync, fake_root: AbsolutePath
    ):
        """Test a declared path outside the active folder is rejected."""
        manifest = BundleManifestWriter(fake_fs).build(fake_root)
        manifest.path_to_hash["../secret"] = "AAAA"
        manifest.added.append(
            FileEntry(path="../secret", byte_offset=1260, length=1, sha256="AAAA")
        )

        result = _verify(fake_fs, self._write(fake_fs, manifest), fake_root)

        assert "Path escapes the active folder: ../secret" in result.errors
        assert "Added file does not exist: ../secret" in result.warnings
        assert result.total_files == 5
        assert result.verified_files == 4
