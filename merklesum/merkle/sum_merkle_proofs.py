"""
Sum Merkle Proofs Convenience Wrappers
Thin wrappers around the sum Merkle tree functions for a cleaner API.

This module provides class-based interfaces:
- SumMerkleProver: Build trees, roots and proofs from leaf inputs
- SumMerkleVerifier: Verify proofs against a root node or raw root values

These are convenience wrappers around the functions in sum_merkle_tree.py.
"""
from __future__ import annotations

from typing import Optional, Sequence

from merklesum.config.runtime import BuildConfig
from merklesum.merkle.sum_merkle_tree import (
    LeafData,
    Node,
    Side,
    SumMerkleProof,
    build_tree,
    calc_root,
    get_proof,
    verify_proof,
)
from merklesum.schemas.errors import IndexOutOfRangeError


class SumMerkleProver:
    """
    Convenience class for building sum Merkle trees and proofs.

    Example:
        >>> values = [1, 2, 3]
        >>> data = [uint_to_bytes32(i) for i in range(3)]
        >>> proof = SumMerkleProver.prove(values, data, index=1)
        >>> len(proof.side_nodes) == len(proof.directions)
        True
    """

    @staticmethod
    def construct(
        values: Sequence[int],
        data: Sequence[LeafData],
        config: Optional[BuildConfig] = None,
    ) -> list[Node]:
        """Build the full node list for the given leaves."""
        return build_tree(values, data, config)

    @staticmethod
    def prove(
        values: Sequence[int],
        data: Sequence[LeafData],
        index: int,
        config: Optional[BuildConfig] = None,
    ) -> SumMerkleProof:
        """
        Generate a proof for the leaf at the given index.

        Args:
            values: Leaf values
            data: Leaf identifiers
            index: 0-based index of the leaf to prove

        Returns:
            SumMerkleProof for the specified leaf

        Raises:
            IndexOutOfRangeError: If index is not a leaf index
            EmptyInputError: If there are no leaves
        """
        tree = build_tree(values, data, config)
        # Internal node indices are valid for get_proof but not for leaf inputs
        if index < 0 or index >= len(values):
            raise IndexOutOfRangeError.for_index(index, len(values))
        return get_proof(tree, index)

    @staticmethod
    def compute_root(
        values: Sequence[int],
        data: Sequence[LeafData],
        config: Optional[BuildConfig] = None,
    ) -> Node:
        """Compute the root node (hash and sum) for the given leaves."""
        return calc_root(values, data, config)


class SumMerkleVerifier:
    """
    Convenience class for verifying sum Merkle proofs.

    Example:
        >>> tree = SumMerkleProver.construct(values, data)
        >>> proof = get_proof(tree, 1)
        >>> SumMerkleVerifier.verify(data[1], values[1], proof, tree[-1])
        True
    """

    @staticmethod
    def verify(
        leaf_data: LeafData,
        leaf_value: int,
        proof: SumMerkleProof,
        root: Node,
    ) -> bool:
        """Verify a proof against a root node."""
        return verify_proof(leaf_data, leaf_value, proof, root.hash, root.sum)

    @staticmethod
    def verify_leaf_in_root(
        leaf_data: LeafData,
        leaf_value: int,
        side_nodes: list[bytes],
        node_sums: list[int],
        directions: list[Side],
        root_hash: bytes,
        root_sum: int,
    ) -> bool:
        """
        Verify a leaf is included in a root using raw proof components.

        Constructs a SumMerkleProof and verifies it.

        Raises:
            MalformedProofError: If the components differ in length
        """
        proof = SumMerkleProof(
            side_nodes=side_nodes,
            node_sums=node_sums,
            directions=directions,
        )
        return verify_proof(leaf_data, leaf_value, proof, root_hash, root_sum)


__all__ = [
    "SumMerkleProver",
    "SumMerkleVerifier",
]
