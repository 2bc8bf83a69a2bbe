"""Directory tree nodes shared by the archive packages.

An archive owns a :class:`DirectoryFolder` root; every registered file is a
:class:`DirectoryFile` leaf reachable through ``folder.items``.  Nodes only
describe where a file lives (offset, size, archive index); reading file
contents is left to the caller.
"""

from __future__ import annotations

PATH_SEPARATOR = "/"


class DirectoryItem:

    def __init__(self, owner, name: str | None = None, package=None) -> None:
        # The root is created with the package itself as ``owner``.
        if isinstance(owner, DirectoryItem):
            self.owner = owner
            self.package = package if package is not None else owner.package
        else:
            self.owner = None
            self.package = package if package is not None else owner
        self.name = name or ""

    def is_file(self) -> bool:
        return False

    def is_folder(self) -> bool:
        return False

    def path(self) -> str:
        if self.owner is None:
            return ""
        parent = self.owner.path()
        if not parent:
            return self.name
        return parent + PATH_SEPARATOR + self.name

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.path() or '/'!r}>"


class DirectoryFolder(DirectoryItem):

    def __init__(self, owner, name: str | None = None, package=None) -> None:
        super().__init__(owner, name, package)
        self.items: dict[str, DirectoryItem] = {}

    def is_folder(self) -> bool:
        return True

    def size(self) -> int:
        return sum(f.size() for f in self.all_files())

    def all_files(self) -> list:
        files = []
        for entry in self.items.values():
            if entry.is_file():
                files.append(entry)
            else:
                files.extend(entry.all_files())
        return files

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items.values())

    def __contains__(self, name: str) -> bool:
        try:
            self[name]
        except KeyError:
            return False
        return True

    def __getitem__(self, name: str) -> DirectoryItem:
        parts = [p for p in name.split(PATH_SEPARATOR) if p]
        if not parts:
            return self
        entry = self
        for part in parts:
            if not entry.is_folder():
                raise KeyError(name)
            entry = entry.items[part]
        return entry


class DirectoryFile(DirectoryItem):

    def __init__(self, owner, name: str | None = None, package=None) -> None:
        super().__init__(owner, name, package)
        self.item_size = 0
        self.offset = 0
        self.archive_index = None
        self.crc = 0
        self.preload_length = 0

    def is_file(self) -> bool:
        return True

    def size(self) -> int:
        return self.item_size
