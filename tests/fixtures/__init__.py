"""
Test fixtures package for CBMT tests.

Usage:
    from fixtures import make_leaf, make_leaves, small_digest

    def test_something():
        leaves = make_leaves(5)
"""

from .common import (
    make_leaf,
    make_leaves,
    small_digest,
    write_digest_file,
)

__all__ = [
    "make_leaf",
    "make_leaves",
    "small_digest",
    "write_digest_file",
]
