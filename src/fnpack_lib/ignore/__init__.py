# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Loading and evaluation of ignore rules.

This module provides `load_ignore_rules`, which reads the ignore file from the root
of a directory, and `IgnoreMatcher`, which decides whether archive-relative paths
are excluded by gitignore-style rules.
"""

from .loader import get_ignore_file, load_ignore_rules
from .matcher import IgnoreMatcher, matches

__all__ = [
    "IgnoreMatcher",
    "get_ignore_file",
    "load_ignore_rules",
    "matches",
]
