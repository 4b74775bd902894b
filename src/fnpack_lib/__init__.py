# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core implementation of the fnpack command-line tool.

This package packages the source directory of a serverless function into a
deployable zip archive. It loads gitignore-style rules from the directory's
`.gcloudignore` file, walks the directory tree, and streams every entry that is
not ignored into a deflate-compressed archive, reporting each written entry to an
optional observer. All fnpack CLI commands ultimately delegate to the functionality
implemented here.
"""

from .fnpack import __version__, cli

__all__ = [
    "__version__",
    "cli",
    "archive",
    "core",
    "files",
    "ignore",
    "pack",
]
