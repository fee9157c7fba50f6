"""
CBMT Index Arithmetic
Pure functions addressing nodes of an array-backed complete binary tree.

Layout for n leaves (n >= 1):
- 2n - 1 positions, position 0 is the root
- children of i are 2i + 1 (left) and 2i + 2 (right)
- leaves occupy positions n - 1 .. 2n - 2, in input order

Every left child sits at an odd position and every right child at an
even one, so orientation can be read off position parity.
"""
from __future__ import annotations

from core.schemas.errors import IndexOutOfRangeException


def _check_position(position: int) -> None:
    if position < 0:
        raise IndexOutOfRangeException(
            f"Tree position must be non-negative, got {position}",
            index=position,
        )


def tree_size(leaf_count: int) -> int:
    """Number of tree positions for leaf_count leaves (0 for an empty tree)."""
    if leaf_count < 0:
        raise IndexOutOfRangeException(
            f"Leaf count must be non-negative, got {leaf_count}",
            leaf_count=leaf_count,
        )
    if leaf_count == 0:
        return 0
    return 2 * leaf_count - 1


def first_leaf_position(leaf_count: int) -> int:
    """Position of the first leaf; all positions before it are internal."""
    if leaf_count < 1:
        raise IndexOutOfRangeException(
            "Tree with no leaves has no leaf positions",
            leaf_count=leaf_count,
        )
    return leaf_count - 1


def leaf_position(index: int, leaf_count: int) -> int:
    """
    Map a 0-based leaf index to its tree position.

    Raises:
        IndexOutOfRangeException: If index is outside [0, leaf_count)
    """
    if index < 0 or index >= leaf_count:
        raise IndexOutOfRangeException(
            f"Leaf index {index} out of range for {leaf_count} leaves",
            index=index,
            leaf_count=leaf_count,
        )
    return first_leaf_position(leaf_count) + index


def left_child(position: int) -> int:
    _check_position(position)
    return 2 * position + 1


def right_child(position: int) -> int:
    _check_position(position)
    return 2 * position + 2


def children(position: int) -> tuple[int, int]:
    """(left, right) child positions of an internal node."""
    left = left_child(position)
    return left, left + 1


def parent(position: int) -> int:
    """
    Parent position of a non-root node.

    Raises:
        IndexOutOfRangeException: For the root (position 0) or negatives
    """
    _check_position(position)
    if position == 0:
        raise IndexOutOfRangeException("Root has no parent", index=position)
    return (position - 1) // 2


def sibling(position: int) -> int:
    """
    Sibling position of a non-root node.

    Raises:
        IndexOutOfRangeException: For the root (position 0) or negatives
    """
    _check_position(position)
    if position == 0:
        raise IndexOutOfRangeException("Root has no sibling", index=position)
    return ((position + 1) ^ 1) - 1


def is_left(position: int) -> bool:
    """True if position is a left child (odd positions)."""
    return (position & 1) == 1


def is_leaf(position: int, leaf_count: int) -> bool:
    """True if position holds a leaf in a tree of leaf_count leaves."""
    if leaf_count < 1:
        return False
    return leaf_count - 1 <= position < 2 * leaf_count - 1


def tree_depth(leaf_count: int) -> int:
    """
    Number of levels from root to the deepest leaf, inclusive.

    0 for an empty tree, 1 for a single leaf, 2 for two leaves, and so on.
    """
    return tree_size(leaf_count).bit_length()


__all__ = [
    "tree_size",
    "first_leaf_position",
    "leaf_position",
    "left_child",
    "right_child",
    "children",
    "parent",
    "sibling",
    "is_left",
    "is_leaf",
    "tree_depth",
]
