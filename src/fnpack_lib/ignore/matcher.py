# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Gitignore-compatible matching of archive-relative paths.

Rules follow the gitignore syntax: wildcards, anchored and unanchored patterns,
directory-only patterns ending with a slash, and negations starting with `!`.
Later rules override earlier ones. As in git, a path inside an ignored
directory stays ignored even if a later negation matches the path itself.
"""

import os
import re
from collections.abc import Iterable
from typing import Self

from pathspec import GitIgnoreSpec

from fnpack_lib.core.logger import get_logger

logger = get_logger(__name__)


class IgnoreMatcher:
    """
    Decides whether archive-relative paths are excluded by a set of ignore rules.
    """

    def __init__(self, rules: tuple[str, ...], spec: GitIgnoreSpec):
        """
        Initialize the IgnoreMatcher.

        Use `IgnoreMatcher.fromRules` to construct the matcher from raw rules.

        Args:
            rules (tuple[str, ...]): Rules the matcher was compiled from.
            spec (GitIgnoreSpec): Compiled rules.
        """
        self._rules = rules
        self._spec = spec

    @classmethod
    def fromRules(cls, rules: Iterable[str]) -> Self:
        """
        Compile ignore rules into a matcher.

        Rules that cannot be compiled are skipped and a warning is logged.

        Args:
            rules (Iterable[str]): Ordered gitignore-style patterns.

        Returns:
            IgnoreMatcher: The compiled matcher.
        """
        valid = []
        for rule in rules:
            try:
                GitIgnoreSpec.from_lines([rule])
            except (ValueError, re.error) as e:
                logger.warning(f"Skipping invalid ignore rule '{rule}': {e}.")
                continue
            valid.append(rule)

        logger.debug(f"Compiled {len(valid)} ignore rule(s).")
        return cls(tuple(valid), GitIgnoreSpec.from_lines(valid))

    @property
    def rules(self) -> tuple[str, ...]:
        """Rules used by this matcher."""
        return self._rules

    def ignores(self, path: str, is_dir: bool = False) -> bool:
        """
        Check whether a path is excluded by the ignore rules.

        Args:
            path (str): POSIX-style path relative to the root of the packaged directory.
                A trailing slash marks the path as a directory.
            is_dir (bool): Whether the path points to a directory. Defaults to False.

        Returns:
            bool: True if the path (or any of its parent directories) is ignored.
        """
        if path.endswith("/"):
            is_dir = True

        name = _normalize(path)
        if not name:
            return False

        # a path inside an ignored directory can never be re-included
        parts = name.split("/")
        for i in range(1, len(parts)):
            if self._spec.match_file("/".join(parts[:i]) + "/"):
                return True

        return self._spec.match_file(f"{name}/" if is_dir else name)

    def __repr__(self) -> str:
        return f"IgnoreMatcher(rules={list(self._rules)!r})"


def matches(rules: Iterable[str], path: str, is_dir: bool = False) -> bool:
    """
    Check whether `path` is excluded by the gitignore-style `rules`.

    Args:
        rules (Iterable[str]): Ordered gitignore-style patterns.
        path (str): POSIX-style path relative to the root of the packaged directory.
        is_dir (bool): Whether the path points to a directory. Defaults to False.

    Returns:
        bool: True if the path is ignored.
    """
    return IgnoreMatcher.fromRules(rules).ignores(path, is_dir)


def _normalize(path: str) -> str:
    """Convert a relative path into the canonical form used for matching."""
    # backslash is a valid filename character on POSIX
    name = path.replace(os.sep, "/") if os.sep != "/" else path
    while name.startswith("./"):
        name = name[2:]
    return name.strip("/")
