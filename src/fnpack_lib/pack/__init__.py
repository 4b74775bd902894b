# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
The `fnpack pack` command: package a directory into a zip archive.
"""
