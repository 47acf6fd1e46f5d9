"""
Test fixtures package for merklesum tests.

Usage:
    from fixtures import make_leaves, make_tree

    def test_something():
        tree, values, data = make_tree(10)
"""

from .common import (
    make_leaves,
    make_value_leaves,
    make_tree,
)

__all__ = [
    "make_leaves",
    "make_value_leaves",
    "make_tree",
]
