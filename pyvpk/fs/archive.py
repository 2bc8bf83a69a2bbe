from __future__ import annotations

import os
import logging

from . import DirectoryFile, DirectoryFolder, PATH_SEPARATOR
from .errors import (
    CorruptArchiveError,
    FormatMismatchError,
    ReadOnlyArchiveError,
)
from .vpkfile import read_directory

logger = logging.getLogger(__name__)


class ArchivePackage:
    """Read-only entry table with a filesystem-like interface."""

    def __init__(self) -> None:
        self.root = DirectoryFolder(self)
        self.filename: str | None = None
        self._entries: list[DirectoryFile] = []

    # ------------------------------------------------------------------
    @classmethod
    def parse(cls, path: os.PathLike[str] | str):
        with open(os.fspath(path), "rb") as stream:
            return cls.open(stream, os.path.basename(os.fspath(path)))

    @classmethod
    def open(cls, stream, name: str | None = None, for_writing: bool = False):
        if for_writing:
            raise ReadOnlyArchiveError(f"{cls.__name__} archives are read-only")
        self = cls()
        self.filename = name
        try:
            self._parse(stream)
        except Exception:
            self.abandon()
            raise
        return self

    def _parse(self, stream) -> None:
        raise NotImplementedError

    # ------------------------------------------------------------------
    def add_entry(self, path: str, offset: int, size: int, **meta) -> DirectoryFile:
        parts = [p for p in path.split(PATH_SEPARATOR) if p]
        if not parts:
            raise CorruptArchiveError(f"Empty entry path {path!r}")
        folder = self.root
        for part in parts[:-1]:
            child = folder.items.get(part)
            if child is None:
                child = DirectoryFolder(folder, part, self)
                folder.items[part] = child
            elif child.is_file():
                raise CorruptArchiveError(f"Entry {path!r} is nested under a file")
            folder = child
        name = parts[-1]
        if name in folder.items:
            raise CorruptArchiveError(f"Duplicate entry {path!r}")
        file_entry = DirectoryFile(folder, name, self)
        file_entry.offset = offset
        file_entry.item_size = size
        for key, value in meta.items():
            setattr(file_entry, key, value)
        folder.items[name] = file_entry
        self._entries.append(file_entry)
        return file_entry

    def abandon(self) -> None:
        self.root = DirectoryFolder(self)
        self._entries = []

    # ------------------------------------------------------------------
    def files(self) -> list[DirectoryFile]:
        return list(self._entries)

    def entries(self) -> list[tuple[str, int, int]]:
        """Return ``(path, offset, size)`` for every entry in registration order."""
        return [(f.path(), f.offset, f.item_size) for f in self._entries]

    def enumerate(self, path: str = "") -> list[str]:
        folder = self.root[path]
        if not folder.is_folder():
            raise NotADirectoryError(path)
        return list(folder.items)

    def stat(self, path: str) -> DirectoryFile | DirectoryFolder:
        return self.root[path]

    def count_complete_files(self):
        total = len(self._entries)
        return total, total

    # ------------------------------------------------------------------
    def _read_only(self, *args, **kwargs):
        raise ReadOnlyArchiveError(f"{type(self).__name__} archives are read-only")

    add_file = add_folder = remove_file = move_file = save = _read_only

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self.root)

    def __getitem__(self, name):
        return self.root[name]

    def __contains__(self, name):
        return name in self.root


class VpkArchive(ArchivePackage):
    """Valve VPK directory table."""

    def __init__(self) -> None:
        super().__init__()
        self.header = None

    def _parse(self, stream) -> None:
        self.header = read_directory(stream, self)

    def abandon(self) -> None:
        super().abandon()
        self.header = None


HANDLERS = (VpkArchive,)


def open_archive(source, name: str | None = None, for_writing: bool = False):
    """Open ``source`` (a path or seekable binary stream) with the first
    handler that claims it.

    A handler that raises :class:`FormatMismatchError` has declined the
    archive and the next one is tried from the same starting position.  Any
    other failure means the archive was claimed and is re-raised as is.
    """

    if isinstance(source, (str, os.PathLike)):
        with open(os.fspath(source), "rb") as stream:
            return open_archive(stream, name or os.path.basename(os.fspath(source)), for_writing)

    start = source.tell()
    for handler in HANDLERS:
        source.seek(start)
        try:
            return handler.open(source, name, for_writing)
        except FormatMismatchError:
            logger.debug("%s declined %s", handler.__name__, name)
    raise FormatMismatchError(f"Unsupported archive format: {name}")
