"""Loading and saving the songlist, packlist and unlocks documents."""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from arcbundle.core.io import AbsolutePath, FileSystemSync
from arcbundle.core.songlist.models import (
    PackInfo,
    Packlist,
    SongInfo,
    Songlist,
    UnlockEntry,
    UnlockList,
)

SONGLIST_FILENAME = "songlist"
PACKLIST_FILENAME = "packlist"
UNLOCKS_FILENAME = "unlocks"


class SonglistFormatError(ValueError):
    """A list document is not valid JSON or does not have the expected shape."""


class SonglistStore:
    """In-memory song, pack and unlock lists with file persistence.

    Documents are read in either the container form (``{"songs": [...]}``)
    or as a bare list, and always written in the container form.
    """

    def __init__(
        self,
        fs: FileSystemSync,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        self.fs = fs
        self.logger = logger or logging.getLogger(__name__)
        self.songs: list[SongInfo] = []
        self.packs: list[PackInfo] = []
        self.unlocks: list[UnlockEntry] = []

    # Loading ----------------------------------------------------------------

    def load_songlist(self, path: AbsolutePath) -> None:
        self.songs = self._load(path, Songlist, "songs")

    def load_packlist(self, path: AbsolutePath) -> None:
        self.packs = self._load(path, Packlist, "packs")

    def load_unlocks(self, path: AbsolutePath) -> None:
        self.unlocks = self._load(path, UnlockList, "unlocks")

    def load_directory(self, songs_dir: AbsolutePath) -> None:
        """Load whichever of the three documents exist in *songs_dir*."""
        loaders = (
            (SONGLIST_FILENAME, self.load_songlist),
            (PACKLIST_FILENAME, self.load_packlist),
            (UNLOCKS_FILENAME, self.load_unlocks),
        )
        for filename, load in loaders:
            path = self.fs.join(songs_dir, filename)
            if self.fs.is_file(path):
                load(path)
            else:
                self.logger.debug("No %s in %s", filename, songs_dir)

    def _load(self, path: AbsolutePath, container_cls: type[BaseModel], key: str) -> list[Any]:
        text = self.fs.read_text(path)
        try:
            data = json.loads(text)
            if isinstance(data, list):
                data = {key: data}
            if not isinstance(data, dict) or key not in data:
                raise SonglistFormatError(f"{path} has no '{key}' list")
            items: list[Any] = getattr(container_cls.model_validate(data), key)
        except (json.JSONDecodeError, ValidationError) as e:
            raise SonglistFormatError(f"Failed to parse {path}: {e}") from e

        self.logger.debug("Loaded %d %s from %s", len(items), key, path)
        return items

    # Saving -----------------------------------------------------------------

    def save_songlist(self, path: AbsolutePath) -> None:
        self._save(path, Songlist(songs=self.songs))

    def save_packlist(self, path: AbsolutePath) -> None:
        self._save(path, Packlist(packs=self.packs))

    def save_unlocks(self, path: AbsolutePath) -> None:
        self._save(path, UnlockList(unlocks=self.unlocks))

    def save_directory(self, songs_dir: AbsolutePath) -> None:
        """Write all three documents into *songs_dir*."""
        self.save_songlist(self.fs.join(songs_dir, SONGLIST_FILENAME))
        self.save_packlist(self.fs.join(songs_dir, PACKLIST_FILENAME))
        self.save_unlocks(self.fs.join(songs_dir, UNLOCKS_FILENAME))

    def _save(self, path: AbsolutePath, container: BaseModel) -> None:
        data = container.model_dump(mode="json", by_alias=True, exclude_none=True)
        result = self.fs.write_text(path, json.dumps(data, indent=2, ensure_ascii=False))
        self.logger.debug("Saved %s (%d bytes)", path, result.bytes_written)
