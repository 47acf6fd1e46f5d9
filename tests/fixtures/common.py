"""
Common test fixtures shared by all modules.

Provides factory functions for sum Merkle tree inputs:
- Sequential leaves (values[i] = i, data[i] = uint256_be(i))
- Leaves with arbitrary values
- Built trees
"""

from typing import Optional, Sequence

from merklesum.config.runtime import BuildConfig
from merklesum.crypto.hashing import sha256, uint_to_bytes32
from merklesum.merkle.sum_merkle_tree import Node, build_tree


def make_leaves(size: int = 100) -> tuple[list[int], list[bytes]]:
    """Create leaves with values[i] = i and data[i] = uint256_be(i)."""
    values = list(range(size))
    data = [uint_to_bytes32(i) for i in range(size)]
    return values, data


def make_value_leaves(values: Sequence[int]) -> tuple[list[int], list[bytes]]:
    """Create leaves for the given values with distinct hashed identifiers."""
    data = [sha256(f"leaf-{i}".encode()) for i in range(len(values))]
    return list(values), data


def make_tree(
    size: int = 100,
    config: Optional[BuildConfig] = None,
) -> tuple[list[Node], list[int], list[bytes]]:
    """Build a tree over make_leaves(size) and return it with its inputs."""
    values, data = make_leaves(size)
    return build_tree(values, data, config or BuildConfig()), values, data
