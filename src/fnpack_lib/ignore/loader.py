# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import re
from pathlib import Path

from fnpack_lib.core.config import CFG
from fnpack_lib.core.error import IgnoreFileReadError
from fnpack_lib.core.logger import get_logger

logger = get_logger(__name__)

_LINE_SEPARATOR = re.compile(r"\r?\n")


def get_ignore_file(directory: Path) -> Path:
    """
    Return the path where the ignore file of a directory is expected to be.

    Args:
        directory (Path): The directory to be packaged.

    Returns:
        Path: Path to the ignore file. The file does not have to exist.
    """
    return directory / CFG.ignore.filename


def load_ignore_rules(directory: Path) -> tuple[str, ...]:
    """
    Load ignore rules from the ignore file located in the root of `directory`.

    The file is split into lines and each line is stripped of surrounding whitespace.
    Blank lines and comments are kept; they are skipped by the matcher.
    Pattern syntax is not validated here.

    Args:
        directory (Path): The directory which may contain an ignore file.

    Returns:
        tuple[str, ...]: Ordered ignore rules. Empty if the ignore file does not exist.

    Raises:
        IgnoreFileReadError: If the ignore file exists but cannot be read.
    """
    ignore_file = get_ignore_file(directory)
    try:
        if not ignore_file.exists():
            logger.debug(f"No ignore file '{ignore_file}' found.")
            return ()

        content = ignore_file.read_text(encoding=CFG.ignore.encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise IgnoreFileReadError(
            f"Could not read ignore file '{ignore_file}': {e}."
        ) from e

    rules = tuple(line.strip() for line in _LINE_SEPARATOR.split(content))
    logger.debug(f"Loaded {len(rules)} ignore rule(s) from '{ignore_file}'.")
    return rules
