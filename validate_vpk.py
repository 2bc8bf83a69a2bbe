#!/usr/bin/env python3
"""Validate the directory table of a VPK archive and display its entries."""

from __future__ import annotations

import argparse
import logging

from pyvpk.fs.archive import open_archive
from pyvpk.fs.errors import FormatMismatchError, VpkError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Validate a VPK directory table")
    parser.add_argument("vpk", help="Path to the VPK file")
    parser.add_argument("-l", "--list", action="store_true", help="List every entry")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="[%(levelname)s] %(message)s")

    try:
        archive = open_archive(args.vpk)
    except FormatMismatchError as exc:
        print(f"Failed to parse {args.vpk}: {exc}")
        return 2
    except (VpkError, OSError, EOFError) as exc:
        print(f"Failed to parse {args.vpk}: {exc}")
        return 1

    h = archive.header
    print("Header")
    print(f"  version: {h.version}")
    print(f"  directory_offset: 0x{h.directory_offset:X}")
    print(f"  directory_length: {h.directory_length}")
    print(f"  expected_entries: {h.expected_entries}")

    print("\nDirectory")
    print(f"  entries: {len(archive)}")
    if args.list:
        for f in archive.files():
            print(f"    {f.path()} offset={f.offset} size={f.item_size} archive={f.archive_index}")

    print("Validation succeeded")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
