# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
branchnuker CLI

Usage:
    branchnuker run       # find stale merged branches, optionally delete them
    branchnuker config    # show the resolved configuration
"""

from .main import cli, main

__all__ = ['cli', 'main']
