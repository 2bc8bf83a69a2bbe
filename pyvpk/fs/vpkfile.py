"""Decoder for the directory table of Valve VPK archives.

Layout (all fields little-endian)::

    header      signature (0x55AA1234), version (1 or 2),
                directory offset, directory length        4 x uint32
    directory   extension\\0
                    directory\\0
                        name\\0  entry record
                        name\\0  entry record
                        \\0                                 end of names
                    \\0                                     end of directories
                \\0                                         end of extensions
    entry       crc uint32, preload length uint16, archive index int16,
                offset uint32, size uint32, terminator uint16 (0xFFFF)

Only the directory table is read.  The version 2 trailer and the file data
are never visited.
"""

from __future__ import annotations

import logging

from pyvpk.fs.errors import (
    CorruptArchiveError,
    FormatMismatchError,
    UnsupportedVersionError,
)
from pyvpk.util import read_cstring, unpack_stream

logger = logging.getLogger(__name__)

VPK_SIGNATURE = 0x55AA1234
VPK_VERSIONS = (1, 2)
VPK_HEADER_SIZE = 16
VPK_ENTRY_SIZE = 18
VPK_ENTRY_TERMINATOR = 0xFFFF
VPK_MAX_STRING = 256
# Archive index of entries whose data is stored in the directory file itself.
VPK_INLINE_ARCHIVE = 0x7FFF


class VpkFileHeader:

    def __init__(self):
        self.signature = None
        self.version = None
        self.directory_offset = 0
        self.directory_length = 0

    def parse(self, stream):
        """Read the header, claiming the archive as soon as the signature matches."""
        data = stream.read(4)
        if len(data) != 4 or int.from_bytes(data, "little") != VPK_SIGNATURE:
            raise FormatMismatchError("Not a VPK archive [bad signature]")
        self.signature = VPK_SIGNATURE

        (self.version,) = unpack_stream(stream, "<L")
        if self.version not in VPK_VERSIONS:
            raise UnsupportedVersionError(f"Unsupported VPK version {self.version}")

        (self.directory_offset,
         self.directory_length) = unpack_stream(stream, "<2L")
        self.validate()

    def validate(self):
        if self.directory_length % VPK_ENTRY_SIZE != 0:
            raise CorruptArchiveError(
                "Invalid VPK header [directory length %d is not a multiple of %d]"
                % (self.directory_length, VPK_ENTRY_SIZE)
            )

    @property
    def expected_entries(self) -> int:
        return self.directory_length // VPK_ENTRY_SIZE

    def seek_directory(self, stream):
        stream.seek(self.directory_offset)


class VpkDirectoryEntry:

    def __init__(self, path: str):
        self.path = path
        self.crc = 0
        self.preload_length = 0
        self.archive_index = VPK_INLINE_ARCHIVE
        self.offset = 0
        self.size = 0
        self.terminator = VPK_ENTRY_TERMINATOR

    def parse(self, stream):
        (self.crc,
         self.preload_length,
         self.archive_index,
         self.offset,
         self.size,
         self.terminator) = unpack_stream(stream, "<LHhLLH")
        self.validate()

    def validate(self):
        # A wrong terminator almost always means the stream lost sync with
        # the string table.
        if self.terminator != VPK_ENTRY_TERMINATOR:
            raise CorruptArchiveError(
                f"Invalid directory entry for {self.path!r} [terminator is 0x{self.terminator:04X}]"
            )

    def is_inline(self) -> bool:
        return self.archive_index == VPK_INLINE_ARCHIVE

    def __repr__(self):
        return f"<VpkDirectoryEntry {self.path!r} offset={self.offset} size={self.size}>"


def _read_segment(stream, maxlen: int) -> str:
    raw = read_cstring(stream, maxlen)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise CorruptArchiveError(f"Invalid path segment {raw!r}") from exc


def iter_directory(stream, maxlen: int = VPK_MAX_STRING):
    """Yield a parsed :class:`VpkDirectoryEntry` for every file in the tree.

    ``stream`` must be positioned at the start of the directory table.
    Entries come out in stream order: extension, then directory, then name.
    """

    while True:
        extension = _read_segment(stream, maxlen)
        if not extension:
            break

        while True:
            directory = _read_segment(stream, maxlen)
            if not directory:
                break

            while True:
                name = _read_segment(stream, maxlen)
                if not name:
                    break

                entry = VpkDirectoryEntry(f"{directory}/{name}.{extension}")
                entry.parse(stream)
                yield entry


def load_entries(stream, registry, maxlen: int = VPK_MAX_STRING) -> int:
    """Register every directory entry with ``registry`` and return the count."""
    count = 0
    for entry in iter_directory(stream, maxlen):
        registry.add_entry(
            entry.path,
            entry.offset,
            entry.size,
            archive_index=entry.archive_index,
            crc=entry.crc,
            preload_length=entry.preload_length,
        )
        count += 1
    return count


def read_directory(stream, registry) -> VpkFileHeader:
    """Decode the header and directory table of ``stream`` into ``registry``.

    Either every entry is registered or an exception propagates; discarding
    a partially filled registry is up to the caller.
    """

    header = VpkFileHeader()
    header.parse(stream)
    header.seek_directory(stream)

    count = load_entries(stream, registry)
    logger.debug(
        "VPK v%d: %d entries from directory at 0x%X (%d bytes, %d expected)",
        header.version,
        count,
        header.directory_offset,
        header.directory_length,
        header.expected_entries,
    )
    return header
