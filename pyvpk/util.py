import struct

from pyvpk.fs.errors import CorruptArchiveError


def read_exact(stream, count: int) -> bytes:
    data = stream.read(count)
    if len(data) != count:
        raise EOFError(f"Expected {count} bytes, got {len(data)}")
    return data


def unpack_stream(stream, fmt: str) -> tuple:
    """Read exactly ``struct.calcsize(fmt)`` bytes and unpack them."""
    return struct.unpack(fmt, read_exact(stream, struct.calcsize(fmt)))


def read_cstring(stream, maxlen: int = 256) -> bytes:
    """Return a NUL terminated string from ``stream`` without its terminator.

    At most ``maxlen`` bytes (terminator included) are consumed.  A string
    that does not terminate within that many bytes is a corrupt archive; the
    bytes already read are not pushed back.
    """

    chunks = []
    for _ in range(maxlen):
        c = read_exact(stream, 1)
        if c == b"\x00":
            return b"".join(chunks)
        chunks.append(c)
    raise CorruptArchiveError(f"String exceeds {maxlen} bytes without a terminator")
