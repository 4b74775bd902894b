# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys
from pathlib import Path
from typing import NoReturn

import click

from fnpack_lib.archive import ArchiveEntry, EntryKind, Packager, format_entry
from fnpack_lib.core.click_format import GNUHelpColorsCommand
from fnpack_lib.core.config import CFG
from fnpack_lib.core.error import FnpackError
from fnpack_lib.core.logger import get_logger

logger = get_logger(__name__)


@click.command(
    short_help="List the files that would be packaged.",
    help=f"""List the files, directories, and symbolic links that `{CFG.binary_name} pack` would write into the archive.

{click.style("SOURCE_DIR", fg="green")}   The directory to inspect. Defaults to the current directory.

Entries excluded by the `{CFG.ignore.filename}` file are not listed. Nothing is written to disk.""",
    cls=GNUHelpColorsCommand,
    help_options_color="bright_blue",
)
@click.argument(
    "source_dir",
    type=click.Path(path_type=Path),
    metavar=click.style("SOURCE_DIR", fg="green"),
    required=False,
    default=Path("."),
)
@click.option(
    "-l",
    "--long",
    "long_format",
    is_flag=True,
    help="Show the kind, permissions, and source path of each entry.",
)
@click.option(
    "--files-only",
    is_flag=True,
    help="Do not list directories.",
)
def files(source_dir: Path, long_format: bool, files_only: bool) -> NoReturn:
    """
    List the entries that would be packaged from the specified directory.
    """
    try:
        entries = Packager(source_dir).collectEntries()
        for entry in _select(entries, files_only):
            print(format_entry(entry) if long_format else entry.name)
        sys.exit(0)
    except FnpackError as e:
        logger.error(e)
        sys.exit(CFG.exit_codes.default)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)


def _select(entries: list[ArchiveEntry], files_only: bool) -> list[ArchiveEntry]:
    """
    Drop directory entries if only files should be listed.
    """
    if not files_only:
        return entries

    return [entry for entry in entries if entry.kind != EntryKind.DIRECTORY]
