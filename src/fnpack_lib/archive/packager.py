# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import asyncio
import os
import stat
import struct
import time
import zipfile
from collections.abc import Callable, Iterator
from pathlib import Path

from fnpack_lib.core.config import CFG
from fnpack_lib.core.error import (
    ArchiveError,
    ArchiveWarning,
    DirectoryNotFoundError,
    FnpackError,
)
from fnpack_lib.core.logger import get_logger
from fnpack_lib.ignore import IgnoreMatcher, load_ignore_rules

from .entry import ArchiveEntry, EntryKind

logger = get_logger(__name__, show_time=True)

# Called with each entry after it has been written into the archive.
OnEntryFunction = Callable[[ArchiveEntry], None]

# Range of timestamps a zip entry header can store.
_MIN_DATE_TIME = (1980, 1, 1, 0, 0, 0)
_MAX_DATE_TIME = (2107, 12, 31, 23, 59, 58)

# Value of `create_system` marking the entry attributes as Unix attributes.
_UNIX_SYSTEM = 3


class Packager:
    """
    Packages a directory into a zip archive, skipping paths excluded by its ignore file.
    """

    def __init__(
        self,
        source_dir: Path | str,
        destination: Path | str | None = None,
        on_entry: OnEntryFunction | None = None,
        compression_level: int | None = None,
    ):
        """
        Initialize the Packager.

        Args:
            source_dir (Path | str): Directory to package.
            destination (Path | str | None): Path of the zip archive to create.
                An existing file is overwritten. Only required for `pack`.
            on_entry (OnEntryFunction | None): Observer called with each entry
                written into the archive. Defaults to None.
            compression_level (int | None): Deflate compression level (0-9).
                If not specified, the configured level is used.
        """
        self._source_dir = Path(source_dir).resolve()
        self._destination = Path(destination).resolve() if destination else None
        self._on_entry = on_entry
        self._compression_level = (
            CFG.packager.compression_level
            if compression_level is None
            else compression_level
        )

        if not 0 <= self._compression_level <= 9:
            raise FnpackError(
                f"Compression level must be between 0 and 9, got {self._compression_level}."
            )

    def pack(self) -> Path:
        """
        Write all non-ignored files, directories, and symbolic links into the archive.

        The destination is returned only after the archive has been finalized
        and the output file has been closed.

        Returns:
            Path: Absolute path to the created archive.

        Raises:
            DirectoryNotFoundError: If the source directory does not exist.
            IgnoreFileReadError: If the ignore file exists but cannot be read.
            ArchiveWarning: If a node disappears while being archived or an entry
                would be written twice.
            ArchiveError: If the archive cannot be written or finalized.
        """
        if not self._destination:
            raise FnpackError("No destination specified for the archive.")

        self._ensureSourceDir()
        matcher = self._loadMatcher()

        logger.info(f"Packaging '{self._source_dir}' into '{self._destination}'.")

        try:
            output = self._destination.open("wb")
        except OSError as e:
            raise ArchiveError(
                f"Could not open '{self._destination}' for writing: {e}."
            ) from e

        n_entries = 0
        try:
            with (
                output,
                zipfile.ZipFile(
                    output,
                    "w",
                    compression=zipfile.ZIP_DEFLATED,
                    compresslevel=self._compression_level,
                    strict_timestamps=False,
                ) as archive,
            ):
                written: set[str] = set()
                for entry in self._iterEntries(matcher):
                    self._writeEntry(archive, entry, written)
                    self._notify(entry)
                    n_entries += 1
        except FnpackError:
            self._removePartial()
            raise
        except FileNotFoundError as e:
            self._removePartial()
            raise ArchiveWarning(
                f"File disappeared while packaging '{self._source_dir}': {e}."
            ) from e
        except (OSError, ValueError, struct.error) as e:
            self._removePartial()
            raise ArchiveError(
                f"Could not write archive '{self._destination}': {e}."
            ) from e

        logger.info(f"Packaged {n_entries} entries into '{self._destination}'.")
        return self._destination

    def collectEntries(self) -> list[ArchiveEntry]:
        """
        Collect the entries that would be written into the archive, without writing anything.

        Returns:
            list[ArchiveEntry]: Non-ignored entries in traversal order.

        Raises:
            DirectoryNotFoundError: If the source directory does not exist.
            IgnoreFileReadError: If the ignore file exists but cannot be read.
            ArchiveError: If the source directory cannot be traversed.
        """
        self._ensureSourceDir()
        matcher = self._loadMatcher()

        try:
            return list(self._iterEntries(matcher))
        except OSError as e:
            raise ArchiveError(
                f"Could not traverse directory '{self._source_dir}': {e}."
            ) from e

    def _ensureSourceDir(self) -> None:
        """
        Raises:
            DirectoryNotFoundError: If the source directory does not exist.
        """
        if not self._source_dir.is_dir():
            raise DirectoryNotFoundError(
                f"Unable to find directory '{self._source_dir}'."
            )

    def _loadMatcher(self) -> IgnoreMatcher | None:
        """
        Load the ignore rules of the source directory.

        Returns:
            IgnoreMatcher | None: The compiled rules or None if there are no rules.
        """
        if not (rules := load_ignore_rules(self._source_dir)):
            logger.debug("No ignore rules: all entries will be packaged.")
            return None

        return IgnoreMatcher.fromRules(rules)

    def _iterEntries(self, matcher: IgnoreMatcher | None) -> Iterator[ArchiveEntry]:
        """
        Walk the source directory top-down and yield the entries that are not ignored.

        Ignored directories are not descended into. Symbolic links are not followed.
        """
        for root, dirnames, filenames in os.walk(
            self._source_dir, onerror=_raise_walk_error
        ):
            root_path = Path(root)

            subdirs = []
            for dirname in dirnames:
                entry = self._makeEntry(root_path / dirname)
                if self._isExcluded(entry, matcher):
                    continue

                yield entry
                if entry.kind == EntryKind.DIRECTORY:
                    subdirs.append(dirname)

            # prune ignored directories and directory symlinks
            dirnames[:] = subdirs

            for filename in filenames:
                entry = self._makeEntry(root_path / filename)
                if self._isExcluded(entry, matcher):
                    continue

                yield entry

    def _makeEntry(self, path: Path) -> ArchiveEntry:
        """
        Create an archive entry for a filesystem node located in the source directory.
        """
        st = path.lstat()
        if stat.S_ISLNK(st.st_mode):
            kind = EntryKind.SYMLINK
        elif stat.S_ISDIR(st.st_mode):
            kind = EntryKind.DIRECTORY
        elif stat.S_ISREG(st.st_mode):
            kind = EntryKind.FILE
        else:
            kind = None

        return ArchiveEntry(
            name=path.relative_to(self._source_dir).as_posix(),
            mode=stat.S_IMODE(st.st_mode),
            source_path=path,
            kind=kind,
        )

    def _isExcluded(self, entry: ArchiveEntry, matcher: IgnoreMatcher | None) -> bool:
        """
        Check whether the entry must not be written into the archive.
        """
        # never package the archive into itself
        if entry.source_path == self._destination:
            logger.debug(f"Skipping the archive itself: '{entry.name}'.")
            return True

        if matcher and matcher.ignores(
            entry.name, is_dir=entry.kind == EntryKind.DIRECTORY
        ):
            logger.debug(f"Ignoring '{entry.name}'.")
            return True

        return False

    @staticmethod
    def _writeEntry(
        archive: zipfile.ZipFile, entry: ArchiveEntry, written: set[str]
    ) -> None:
        """
        Write a single entry into the archive.

        Raises:
            ArchiveWarning: If an entry with the same name has already been written.
            ArchiveError: If the entry is not a file, directory, or symbolic link.
            OSError: If the source node cannot be read.
        """
        if entry.arcname in written:
            raise ArchiveWarning(f"Duplicate archive entry '{entry.arcname}'.")
        written.add(entry.arcname)

        match entry.kind:
            case EntryKind.FILE | EntryKind.DIRECTORY:
                archive.write(entry.source_path, entry.name)
            case EntryKind.SYMLINK:
                archive.writestr(
                    _symlink_info(entry), os.readlink(entry.source_path)
                )
            case _:
                raise ArchiveError(
                    f"Entry not supported: '{entry.source_path}' is not a file, directory, or symbolic link."
                )

    def _notify(self, entry: ArchiveEntry) -> None:
        """
        Pass the written entry to the observer, if there is any.

        Raises:
            ArchiveError: If the observer fails.
        """
        if not self._on_entry:
            return

        try:
            self._on_entry(entry)
        except Exception as e:
            raise ArchiveError(
                f"Entry observer failed for '{entry.name}': {e}."
            ) from e

    def _removePartial(self) -> None:
        """
        Delete the partially written archive if configured to do so.
        """
        if not CFG.packager.remove_partial:
            return

        logger.debug(f"Removing partially written archive '{self._destination}'.")
        self._destination.unlink(missing_ok=True)


def pack(
    source_dir: Path | str,
    destination: Path | str,
    on_entry: OnEntryFunction | None = None,
) -> Path:
    """
    Package `source_dir` into the zip archive `destination`.

    Args:
        source_dir (Path | str): Directory to package.
        destination (Path | str): Path of the zip archive to create.
        on_entry (OnEntryFunction | None): Observer called with each entry
            written into the archive. Defaults to None.

    Returns:
        Path: Absolute path to the created archive.

    Raises:
        FnpackError: If packaging fails.
    """
    return Packager(source_dir, destination, on_entry).pack()


async def pack_async(
    source_dir: Path | str,
    destination: Path | str,
    on_entry: OnEntryFunction | None = None,
) -> Path:
    """
    Package `source_dir` into the zip archive `destination` without blocking the event loop.

    Concurrent calls are independent as long as they write into different destinations.
    The observer is called from a worker thread.

    Returns:
        Path: Absolute path to the created archive.

    Raises:
        FnpackError: If packaging fails.
    """
    return await asyncio.to_thread(pack, source_dir, destination, on_entry)


def _raise_walk_error(error: OSError) -> None:
    raise error


def _symlink_info(entry: ArchiveEntry) -> zipfile.ZipInfo:
    """
    Prepare zip metadata storing `entry` as a symbolic link.
    """
    st = entry.source_path.lstat()
    date_time = min(
        max(time.localtime(st.st_mtime)[:6], _MIN_DATE_TIME), _MAX_DATE_TIME
    )

    info = zipfile.ZipInfo(entry.name, date_time=date_time)
    info.create_system = _UNIX_SYSTEM
    info.external_attr = (stat.S_IFLNK | (entry.mode or 0o777)) << 16
    info.compress_type = zipfile.ZIP_STORED
    return info
