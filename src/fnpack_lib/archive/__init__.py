# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Packaging of directories into deployable zip archives.

This module provides the `Packager` class, which walks a directory, filters its
content through the directory's ignore file, and writes the remaining files,
directories, and symbolic links into a deflate-compressed zip archive.
"""

from .entry import ArchiveEntry, EntryKind, format_entry
from .packager import OnEntryFunction, Packager, pack, pack_async

__all__ = [
    "ArchiveEntry",
    "EntryKind",
    "OnEntryFunction",
    "Packager",
    "format_entry",
    "pack",
    "pack_async",
]
