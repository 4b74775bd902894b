# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
The `fnpack files` command: list the files that would be packaged.
"""
