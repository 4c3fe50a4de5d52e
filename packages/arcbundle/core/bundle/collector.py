"""Recursive file enumeration for bundle packaging."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from arcbundle.core.bundle.errors import DirectoryNotFoundError
from arcbundle.core.io import AbsolutePath, FileSystemSync

DEFAULT_EXCLUDED_SUFFIXES: tuple[str, ...] = (".oldjson",)


class FileTreeCollector:
    """Enumerates every regular file under a root directory.

    Files of a directory are emitted before the contents of its
    subdirectories. With ``sort_paths`` enabled, names within each directory
    are ordered lexicographically so repeated runs over an unchanged tree
    yield the same sequence; otherwise the filesystem's own listing order is
    kept.
    """

    def __init__(
        self,
        fs: FileSystemSync,
        excluded_suffixes: Iterable[str] = DEFAULT_EXCLUDED_SUFFIXES,
        sort_paths: bool = True,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        self.fs = fs
        self.excluded_suffixes = tuple(s.lower() for s in excluded_suffixes)
        self.sort_paths = sort_paths
        self.logger = logger or logging.getLogger(__name__)

    def is_excluded(self, name: str) -> bool:
        """Whether a file name matches an exclusion suffix (case-insensitive)."""
        lowered = name.lower()
        return any(lowered.endswith(suffix) for suffix in self.excluded_suffixes)

    def collect(
        self, root: AbsolutePath, exclude: Iterable[AbsolutePath] = ()
    ) -> list[AbsolutePath]:
        """Collect absolute paths of all files under *root*.

        Args:
            root: Directory to walk
            exclude: Exact file paths to leave out, such as a meta.cb being
                written inside root

        Returns:
            File paths in traversal order

        Raises:
            DirectoryNotFoundError: If root is not an existing directory
        """
        if not self.fs.is_dir(root):
            raise DirectoryNotFoundError(root)

        files: list[AbsolutePath] = []
        self._walk(root, files, seen=set(), excluded={str(p) for p in exclude})
        self.logger.debug("Collected %d files under %s", len(files), root)
        return files

    def _walk(
        self,
        directory: AbsolutePath,
        out: list[AbsolutePath],
        seen: set[str],
        excluded: set[str],
    ) -> None:
        # Symlinked directories may point back up the tree
        key = str(self.fs.realpath(directory))
        if key in seen:
            return
        seen.add(key)

        names = self.fs.listdir(directory)
        if self.sort_paths:
            names = sorted(names)

        subdirs: list[AbsolutePath] = []
        for name in names:
            try:
                path = self.fs.join(directory, name)
            except ValueError:
                self.logger.warning("Skipping %s in %s: links outside the tree", name, directory)
                continue
            if self.fs.is_dir(path):
                subdirs.append(path)
            elif not self.fs.is_file(path):
                continue
            elif self.is_excluded(name) or str(path) in excluded:
                self.logger.debug("Excluding %s", path)
            else:
                out.append(path)

        for subdir in subdirs:
            self._walk(subdir, out, seen, excluded)
