"""Exceptions raised while opening VPK archives.

Failures come in two phases.  Before the signature matches, the archive is
not ours and :class:`FormatMismatchError` lets dispatch try another handler.
Once the signature matches the archive is claimed, and every later failure
derives from :class:`ClaimedArchiveError` so dispatch stops probing.
"""


class VpkError(ValueError):
    pass


class FormatMismatchError(VpkError):
    """The stream does not carry a VPK signature."""


class ClaimedArchiveError(VpkError):
    """The signature matched but the archive could not be opened."""


class UnsupportedVersionError(ClaimedArchiveError):
    pass


class CorruptArchiveError(ClaimedArchiveError):
    pass


class ReadOnlyArchiveError(VpkError):
    """VPK archives can only be opened for reading."""
