"""
Sum Merkle Tree and Audit Proofs
Deterministic sum Merkle tree construction + proof generation/verification.

This module provides:
- Node / SumMerkleProof / Side: node list entries and audit proofs
- leaf_hash / node_hash: domain-separated digests
- build_tree / calc_root: construct the node list or just its root
- get_proof / verify_proof: audit proof generation and verification

Canonical Commitment Rules:
1. Leaf hashing: sha256(0x00 || data || uint256_be(value))
2. Node hashing: sha256(0x01 || left || right || uint256_be(left.sum + right.sum))
3. Odd leftover at a level is carried forward, never duplicated
4. Empty input: rejected
5. Single leaf: root = leaf

Usage:
    from merklesum.merkle import build_tree, get_proof, verify_proof

    tree = build_tree(values, data)
    root = tree[-1]

    proof = get_proof(tree, 2)
    assert verify_proof(data[2], values[2], proof, root.hash, root.sum)
"""
from .sum_merkle_tree import (
    LEAF_PREFIX,
    NODE_PREFIX,
    NO_NODE,
    Side,
    Node,
    SumMerkleProof,
    leaf_hash,
    node_hash,
    combine,
    build_tree,
    calc_root,
    get_root,
    compute_tree_depth,
    get_proof,
    verify_proof,
)

from .sum_merkle_proofs import (
    SumMerkleProver,
    SumMerkleVerifier,
)


__all__ = [
    # Constants
    "LEAF_PREFIX",
    "NODE_PREFIX",
    "NO_NODE",
    # Core types
    "Side",
    "Node",
    "SumMerkleProof",
    # Core functions
    "leaf_hash",
    "node_hash",
    "combine",
    "build_tree",
    "calc_root",
    "get_root",
    "compute_tree_depth",
    "get_proof",
    "verify_proof",
    # Convenience classes
    "SumMerkleProver",
    "SumMerkleVerifier",
]
