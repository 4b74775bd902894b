# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Exception types used throughout fnpack.

This module defines the fnpack-specific exceptions raised while loading
ignore rules and writing archives. Each exception carries an associated
exit code used by fnpack commands to report failures consistently.
"""

from fnpack_lib.core.config import CFG


class FnpackError(Exception):
    """Common exception type for all recoverable fnpack errors."""

    exit_code = CFG.exit_codes.default


class DirectoryNotFoundError(FnpackError):
    """Raised when the directory to package does not exist."""

    pass


class IgnoreFileReadError(FnpackError):
    """Raised when an ignore file exists but cannot be read."""

    pass


class ArchiveError(FnpackError):
    """
    Raised when the archive cannot be written or finalized.

    The destination file may be left in a partial state.
    """

    pass


class ArchiveWarning(ArchiveError):
    """
    Raised when the archive writer emits a warning.

    Warnings are fatal to the packaging operation, same as errors.
    """

    pass
