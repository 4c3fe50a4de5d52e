"""Structural checks run before an active folder may be packaged."""

from __future__ import annotations

import logging

from arcbundle.core.bundle.models import DETAIL_PATHS, ValidationResult
from arcbundle.core.io import AbsolutePath, FileSystemSync

DL_PREFIX = "dl_"
COVER_SUFFIX = "_base.jpg"
PREVIEW_NAME = "preview.ogg"
IMG_DIR = "img"


class ActiveFolderValidator:
    """Checks that an active folder has what packaging needs.

    Missing list files and an empty songlist are errors; missing optional
    song assets and a missing ``img/`` directory are warnings. Entries that
    link outside the folder or cannot be listed are reported, not raised.
    """

    def __init__(
        self,
        fs: FileSystemSync,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        self.fs = fs
        self.logger = logger or logging.getLogger(__name__)

    def validate(self, root: AbsolutePath) -> ValidationResult:
        """Run all structural checks against *root*.

        Args:
            root: Active folder

        Returns:
            ValidationResult; ``is_valid`` is False when packaging must not proceed
        """
        result = ValidationResult()

        if not self.fs.is_dir(root):
            result.add_error(f"Active folder does not exist: {root}")
            return result

        for detail_path in DETAIL_PATHS:
            path = self._join(root, *detail_path.split("/"))
            if path is None:
                result.add_error(f"{detail_path} links outside the active folder")
            elif not self.fs.is_file(path):
                result.add_error(f"{detail_path} does not exist: {path}")
            elif detail_path == "songs/songlist":
                self._check_songlist(path, result)

        songs_dir = self._join(root, "songs")
        if songs_dir is not None and self.fs.is_dir(songs_dir):
            self._check_song_folders(songs_dir, result)

        img_dir = self._join(root, IMG_DIR)
        if img_dir is None:
            result.add_warning(f"{IMG_DIR} folder links outside the active folder")
        elif not self.fs.is_dir(img_dir):
            result.add_warning(f"{IMG_DIR} folder does not exist")

        self.logger.debug(
            "Active folder %s: %d error(s), %d warning(s)",
            root,
            len(result.errors),
            len(result.warnings),
        )
        return result

    def _join(self, base: AbsolutePath, *parts: str) -> AbsolutePath | None:
        """Join under *base*, or None when the result links outside it."""
        try:
            return self.fs.join(base, *parts)
        except ValueError:
            self.logger.debug("%s in %s links outside the tree", "/".join(parts), base)
            return None

    def _is_file(self, directory: AbsolutePath, name: str) -> bool:
        path = self._join(directory, name)
        return path is not None and self.fs.is_file(path)

    def _check_songlist(self, path: AbsolutePath, result: ValidationResult) -> None:
        try:
            content = self.fs.read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            result.add_error(f"Failed to read songlist: {e}")
            return
        if not content.strip():
            result.add_error("songlist is empty")

    def _check_song_folders(self, songs_dir: AbsolutePath, result: ValidationResult) -> None:
        try:
            names = sorted(self.fs.listdir(songs_dir))
        except OSError as e:
            result.add_error(f"Failed to list songs folder: {e}")
            return

        for name in names:
            if not name.startswith(DL_PREFIX):
                continue
            song_dir = self._join(songs_dir, name)
            if song_dir is None:
                result.add_warning(f"Song folder {name} links outside the active folder")
            elif self.fs.is_dir(song_dir):
                self._check_dl_folder(name, song_dir, result)

    def _check_dl_folder(self, name: str, song_dir: AbsolutePath, result: ValidationResult) -> None:
        try:
            entries = self.fs.listdir(song_dir)
        except OSError as e:
            result.add_warning(f"Failed to list song folder {name}: {e}")
            return
        # Only files count; a folder named like a cover does not
        has_cover = any(
            entry.endswith(COVER_SUFFIX) and self._is_file(song_dir, entry) for entry in entries
        )
        if not has_cover:
            result.add_warning(f"Song folder {name} is missing a *{COVER_SUFFIX} file")
        if not self._is_file(song_dir, PREVIEW_NAME):
            result.add_warning(f"Song folder {name} is missing {PREVIEW_NAME}")
