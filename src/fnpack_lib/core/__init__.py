# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core infrastructure for fnpack.

This module collects the foundational pieces used across the fnpack codebase:
configuration, error types, click help formatting, and structured logging.
"""
