import struct

import pytest

from pyvpk.fs.vpkfile import VPK_ENTRY_SIZE, VPK_HEADER_SIZE, VPK_SIGNATURE


def build_vpk(files, version=1, directory_length=None, signature=VPK_SIGNATURE,
              terminator=0xFFFF, padding=b"", trailer=b""):
    """Return the bytes of a VPK whose directory lists ``files``.

    ``files`` holds ``(extension, directory, name, offset, size)`` tuples;
    they are grouped by extension then directory, keeping first-seen order.
    ``padding`` sits between the header and the directory table.
    """

    tree = {}
    for extension, directory, name, offset, size in files:
        tree.setdefault(extension, {}).setdefault(directory, []).append((name, offset, size))

    data = bytearray()
    for extension, directories in tree.items():
        data += extension.encode("utf-8") + b"\0"
        for directory, names in directories.items():
            data += directory.encode("utf-8") + b"\0"
            for name, offset, size in names:
                data += name.encode("utf-8") + b"\0"
                data += struct.pack("<LHhLLH", 0, 0, -1, offset, size, terminator)
            data += b"\0"
        data += b"\0"
    data += b"\0"

    if directory_length is None:
        directory_length = VPK_ENTRY_SIZE * len(files)
    header = struct.pack("<4L", signature, version, VPK_HEADER_SIZE + len(padding), directory_length)
    return header + padding + bytes(data) + trailer


@pytest.fixture
def vpk_bytes():
    return build_vpk
