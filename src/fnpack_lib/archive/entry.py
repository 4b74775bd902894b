# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


class EntryKind(Enum):
    """Kind of filesystem node stored in an archive."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ArchiveEntry:
    """
    A single file, directory, or symbolic link added to an archive.

    Attributes:
        name (str): POSIX-style path of the entry relative to the packaged directory.
        mode (int | None): Permission bits of the source node.
        source_path (Path | None): Absolute path of the source node on disk.
        kind (EntryKind | None): Kind of the source node.
    """

    name: str
    mode: int | None = None
    source_path: Path | None = None
    kind: EntryKind | None = None

    @property
    def arcname(self) -> str:
        """Name under which the entry is stored in a zip archive."""
        if self.kind == EntryKind.DIRECTORY:
            return f"{self.name}/"
        return self.name


def format_entry(entry: ArchiveEntry | Mapping[str, Any] | Any) -> str:
    """
    Format an archive entry into a single-line string.

    The output has the form `[<kind>] (<mode>) <name> => <source path>`,
    where only the first letter of the kind is shown. The mode is printed as a
    plain number (`420` for `0o644`). Missing mode renders as `000`, missing
    source path and kind render as `unknown`.

    Args:
        entry: An `ArchiveEntry`, or any object or mapping providing a `name`.

    Returns:
        str: The formatted entry.
    """
    name = _field(entry, "name")
    mode = _field(entry, "mode")
    source_path = _field(entry, "source_path", "sourcePath")
    kind = _field(entry, "kind", "type")

    mode_str = str(mode or "000")
    kind_str = str(kind or "unknown").upper()[0]
    return f"[{kind_str}] ({mode_str}) {name} => {source_path or 'unknown'}"


def _field(entry: Any, *keys: str) -> Any:
    """Return the first attribute or key of `entry` that is set."""
    for key in keys:
        if isinstance(entry, Mapping):
            value = entry.get(key)
        else:
            value = getattr(entry, key, None)
        if value is not None:
            return value

    return None
