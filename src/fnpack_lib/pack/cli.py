# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys
from pathlib import Path
from typing import NoReturn

import click

from fnpack_lib.archive import ArchiveEntry, Packager, format_entry
from fnpack_lib.core.click_format import GNUHelpColorsCommand
from fnpack_lib.core.config import CFG
from fnpack_lib.core.error import FnpackError
from fnpack_lib.core.logger import get_logger

logger = get_logger(__name__)


@click.command(
    short_help="Package a directory into a zip archive.",
    help=f"""Package the specified directory into a deflate-compressed zip archive ready for deployment.

{click.style("SOURCE_DIR", fg="green")}   The directory to package.
{click.style("DESTINATION", fg="green")}  Path of the zip archive to create. An existing file is overwritten.

If SOURCE_DIR contains a `{CFG.ignore.filename}` file, files and directories matching its
gitignore-style rules are not packaged. Entry names in the archive are relative to SOURCE_DIR.

On success, `{CFG.binary_name} pack` prints the absolute path to the created archive.""",
    cls=GNUHelpColorsCommand,
    help_options_color="bright_blue",
)
@click.argument(
    "source_dir",
    type=click.Path(path_type=Path),
    metavar=click.style("SOURCE_DIR", fg="green"),
)
@click.argument(
    "destination",
    type=click.Path(path_type=Path),
    metavar=click.style("DESTINATION", fg="green"),
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Log every entry written into the archive.",
)
@click.option(
    "-l",
    "--level",
    type=click.IntRange(0, 9),
    default=None,
    help=f"Deflate compression level (0-9). Defaults to {CFG.packager.compression_level}.",
)
def pack(
    source_dir: Path, destination: Path, verbose: bool, level: int | None
) -> NoReturn:
    """
    Package the specified directory into a zip archive.
    """
    try:
        packager = Packager(
            source_dir,
            destination,
            on_entry=_log_entry if verbose else None,
            compression_level=level,
        )
        print(packager.pack())
        sys.exit(0)
    except FnpackError as e:
        logger.error(e)
        sys.exit(CFG.exit_codes.default)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)


def _log_entry(entry: ArchiveEntry) -> None:
    logger.info(format_entry(entry))
