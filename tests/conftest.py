"""Shared pytest fixtures for arcbundle tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from arcbundle.core.io import AbsolutePath, FakeFileSystemSync, absolute_path

# Sizes of the canonical active folder; offsets follow from these
SONGLIST_BYTES = b"s" * 200
PACKLIST_BYTES = b"p" * 50
UNLOCKS_BYTES = b"u" * 10
BASE_OGG_BYTES = b"o" * 1000


# ============================================================================
# Active Folder Fixtures
# ============================================================================


def populate_active_folder(root: Path) -> Path:
    """Write the canonical active folder under *root* and return it."""
    songs = root / "songs"
    (songs / "song1").mkdir(parents=True)
    (songs / "songlist").write_bytes(SONGLIST_BYTES)
    (songs / "packlist").write_bytes(PACKLIST_BYTES)
    (songs / "unlocks").write_bytes(UNLOCKS_BYTES)
    (songs / "song1" / "base.ogg").write_bytes(BASE_OGG_BYTES)
    return root


@pytest.fixture
def active_folder(tmp_path: Path) -> Path:
    """Active folder on disk with three list files and one song asset."""
    return populate_active_folder(tmp_path / "active")


@pytest.fixture
def fake_fs() -> FakeFileSystemSync:
    """Provide fresh FakeFileSystemSync instance."""
    return FakeFileSystemSync()


@pytest.fixture
def fake_root(fake_fs: FakeFileSystemSync) -> AbsolutePath:
    """Canonical active folder inside the in-memory filesystem."""
    root = absolute_path("/active")
    fake_fs.write_bytes(fake_fs.join(root, "songs", "songlist"), SONGLIST_BYTES)
    fake_fs.write_bytes(fake_fs.join(root, "songs", "packlist"), PACKLIST_BYTES)
    fake_fs.write_bytes(fake_fs.join(root, "songs", "unlocks"), UNLOCKS_BYTES)
    fake_fs.write_bytes(fake_fs.join(root, "songs", "song1", "base.ogg"), BASE_OGG_BYTES)
    return root
