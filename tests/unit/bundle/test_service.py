"""Tests for BundleService end to end on disk."""

import json
from pathlib import Path

import pytest

from arcbundle.core.bundle.errors import BundleError, DirectoryNotFoundError, PathEscapeError
from arcbundle.core.bundle.models import BundleManifest
from arcbundle.core.bundle.service import BundleService
from arcbundle.core.config.models import BundleConfig
from arcbundle.core.io import RealFileSystemSync
from arcbundle.core.songlist import PackInfo, SongInfo, SonglistStore, UnlockEntry


@pytest.fixture
def store():
    """Provide a store with one song, pack and unlock."""
    s = SonglistStore(RealFileSystemSync())
    s.songs = [SongInfo(id="sayonarahatsukoi", set="base")]
    s.packs = [PackInfo(id="base")]
    s.unlocks = [UnlockEntry.model_validate({"songId": "sayonarahatsukoi", "conditions": []})]
    return s


@pytest.fixture
def service(store: SonglistStore):
    """Provide a BundleService over the real filesystem."""
    return BundleService(store)


class TestUpdateActiveFolder:
    """Tests for writing list files into an active folder."""

    def test_creates_songs_folder(self, service: BundleService, tmp_path: Path):
        """Test songs/ is created and all three documents written."""
        assert service.update_active_folder(tmp_path) is True

        songs = tmp_path / "songs"
        assert json.loads((songs / "songlist").read_text())["songs"][0]["id"] == "sayonarahatsukoi"
        assert json.loads((songs / "packlist").read_text())["packs"][0]["id"] == "base"
        assert json.loads((songs / "unlocks").read_text())["unlocks"][0]["songId"] == (
            "sayonarahatsukoi"
        )

    def test_missing_root_raises(self, service: BundleService, tmp_path: Path):
        """Test a missing active folder is not created implicitly."""
        with pytest.raises(DirectoryNotFoundError):
            service.update_active_folder(tmp_path / "missing")
        assert not (tmp_path / "missing").exists()

    def test_songs_folder_linked_outside_raises(self, service: BundleService, tmp_path: Path):
        """Test lists are not written through a songs link that leaves the root."""
        root = tmp_path / "active"
        root.mkdir()
        (tmp_path / "elsewhere").mkdir()
        try:
            (root / "songs").symlink_to(tmp_path / "elsewhere", target_is_directory=True)
        except OSError:
            pytest.skip("symlinks not supported")

        with pytest.raises(PathEscapeError, match="songs"):
            service.update_active_folder(root)
        assert list((tmp_path / "elsewhere").iterdir()) == []


class TestGenerateAndValidate:
    """Tests for the package-then-verify cycle."""

    def test_full_cycle(self, service: BundleService, tmp_path: Path):
        """Test update, validate, generate and verify agree with each other."""
        root = tmp_path / "active"
        (root / "img").mkdir(parents=True)
        (root / "songs" / "sayonarahatsukoi").mkdir(parents=True)
        (root / "songs" / "sayonarahatsukoi" / "base.ogg").write_bytes(b"ogg" * 100)
        service.update_active_folder(root)

        check = service.validate_active_folder(root)
        assert check.is_valid
        assert not check.has_warnings

        out = tmp_path / "meta.cb"
        assert service.generate_meta_cb(root, out, app_version="6.0.0", bundle_version="1.0.1")

        manifest = BundleManifest.from_json(out.read_bytes())
        assert len(manifest.added) == 4
        assert manifest.application_version_number == "6.0.0"

        result = service.validate_bundle(out, root)
        assert result.is_valid
        assert result.verified_files == 4

    def test_generate_missing_list_file_raises(
        self, service: BundleService, active_folder: Path, tmp_path: Path
    ):
        """Test generation fails on a missing list file and writes nothing."""
        (active_folder / "songs" / "packlist").unlink()
        out = tmp_path / "meta.cb"

        with pytest.raises(FileNotFoundError, match="songs/packlist"):
            service.generate_meta_cb(active_folder, out)
        assert not out.exists()

    def test_generate_list_file_linked_outside_raises_bundle_error(
        self, service: BundleService, active_folder: Path, tmp_path: Path
    ):
        """Test a list file leaving the root surfaces as a BundleError."""
        outside = tmp_path / "songlist"
        outside.write_bytes(b"s")
        songlist = active_folder / "songs" / "songlist"
        songlist.unlink()
        try:
            songlist.symlink_to(outside)
        except OSError:
            pytest.skip("symlinks not supported")

        with pytest.raises(BundleError, match="songs/songlist"):
            service.generate_meta_cb(active_folder, tmp_path / "meta.cb")

    def test_validate_missing_folder(self, service: BundleService, tmp_path: Path):
        """Test validating a missing folder returns a failed result."""
        result = service.validate_active_folder(tmp_path / "missing")
        assert not result.is_valid


class TestConfig:
    """Tests for config-driven behavior."""

    def test_excluded_suffixes_and_default_version(
        self, store: SonglistStore, active_folder: Path, tmp_path: Path
    ):
        """Test BundleConfig controls exclusion and the fallback version."""
        (active_folder / "notes.bak").write_text("x")
        (active_folder / "old.oldjson").write_text("x")
        config = BundleConfig(default_version="2.5.0", excluded_suffixes=[".bak"])
        out = tmp_path / "meta.cb"

        BundleService(store, config=config).generate_meta_cb(active_folder, out)

        manifest = BundleManifest.from_json(out.read_bytes())
        assert manifest.version_number == "2.5.0"
        assert "notes.bak" not in manifest.path_to_hash
        assert "old.oldjson" in manifest.path_to_hash
