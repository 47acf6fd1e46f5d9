"""
Sum Merkle Tree Implementation
Deterministic sum Merkle tree construction, proof generation, and verification.

Every node carries a SHA-256 hash and the sum of the leaf values below it,
so the root commits to both the ordered leaf set and its total.

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: sha256(0x00 || data || uint256_be(value))
2. Node hashing: sha256(0x01 || left.hash || right.hash || uint256_be(left.sum + right.sum))
3. Integers are always encoded as 32 bytes big-endian
4. Pairing: adjacent nodes (0,1), (2,3), ... are combined level by level;
   an odd leftover is carried unchanged to the end of the next level
5. Single leaf: the leaf is the root and its proof is empty
6. Empty input: rejected, there is no empty-tree root

Node List Layout:
- Leaves occupy indices [0, n) in input order
- Internal nodes occupy [n, 2n - 1) in creation order
- The last node is the root
- Children and parents are referenced by index, never by object

Determinism Notes:
- Tree shape depends only on the number of leaves
- This module never sorts leaves - it trusts input order
- Parallel construction writes results by index and never swaps
  the left/right operands, so it is byte-identical to sequential construction
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Sequence, Union

from merklesum.config.runtime import BuildConfig, get_default_config
from merklesum.crypto.hashing import (
    BYTES32_LENGTH,
    MAX_UINT256,
    from_hex,
    hash_bytes,
    uint_to_bytes32,
)
from merklesum.schemas.errors import (
    EmptyInputError,
    IndexOutOfRangeError,
    InvalidLeafError,
    MalformedProofError,
    MismatchedLengthError,
    ValueOutOfRangeError,
)


logger = logging.getLogger(__name__)


# Domain separation tags
LEAF_PREFIX: bytes = b"\x00"
NODE_PREFIX: bytes = b"\x01"

# Index used for a missing child or parent
NO_NODE: int = -1

LeafData = Union[bytes, bytearray, memoryview, str]


class Side(str, Enum):
    """Which operand of node_hash the proven node was at one proof level."""
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Node:
    """
    A node in the flat node list of a sum Merkle tree.

    Attributes:
        index: Position of this node in the node list
        hash: 32-byte node digest
        sum: Sum of the leaf values in this subtree
        left: Index of the left child (NO_NODE for leaves)
        right: Index of the right child (NO_NODE for leaves)
        parent: Index of the parent (NO_NODE for the root)
    """
    index: int
    hash: bytes
    sum: int
    left: int = NO_NODE
    right: int = NO_NODE
    parent: int = NO_NODE

    @property
    def is_leaf(self) -> bool:
        return self.left == NO_NODE

    @property
    def is_root(self) -> bool:
        return self.parent == NO_NODE


@dataclass(frozen=True)
class SumMerkleProof:
    """
    An audit proof for a single node of a sum Merkle tree.

    The three sequences are parallel and ordered from the proven node's
    level up to (excluding) the root.

    Attributes:
        side_nodes: Sibling hashes
        node_sums: Sibling subtree sums
        directions: Side of the proven node at each level
    """
    side_nodes: list[bytes]
    node_sums: list[int]
    directions: list[Side]

    def __len__(self) -> int:
        return len(self.side_nodes)


# =============================================================================
# Digest & Combine
# =============================================================================

def _encode_amount(amount: int, what: str) -> bytes:
    try:
        return uint_to_bytes32(amount)
    except ValueError as e:
        raise ValueOutOfRangeError(
            f"{what} {amount} is outside [0, 2**256)",
            details={"value": str(amount)},
        ) from e


def leaf_hash(data: bytes, value: int) -> bytes:
    """
    Compute the digest of a leaf.

    leaf_hash = sha256(LEAF_PREFIX || data || uint256_be(value))

    Args:
        data: 32-byte leaf identifier
        value: Leaf value in [0, 2**256)

    Returns:
        32-byte digest

    Raises:
        ValueOutOfRangeError: If value is outside [0, 2**256)
    """
    return hash_bytes(LEAF_PREFIX, data, _encode_amount(value, "Leaf value"))


def node_hash(left_hash: bytes, right_hash: bytes, total: int) -> bytes:
    """
    Compute the digest of an internal node.

    node_hash = sha256(NODE_PREFIX || left_hash || right_hash || uint256_be(total))

    The operands are not interchangeable: swapping left and right
    produces a different digest.

    Args:
        left_hash: Left child digest
        right_hash: Right child digest
        total: Sum of both children's subtree sums

    Returns:
        32-byte digest

    Raises:
        ValueOutOfRangeError: If total is outside [0, 2**256)
    """
    return hash_bytes(NODE_PREFIX, left_hash, right_hash, _encode_amount(total, "Node total"))


def combine(left: Node, right: Node, index: int) -> Node:
    """Create the internal node at ``index`` whose children are ``left`` and ``right``."""
    total = left.sum + right.sum
    return Node(
        index=index,
        hash=node_hash(left.hash, right.hash, total),
        sum=total,
        left=left.index,
        right=right.index,
    )


# =============================================================================
# Input Normalization
# =============================================================================

def _normalize_data(item: LeafData, leaf_index: int) -> bytes:
    """Turn a leaf identifier (raw bytes or 0x hex) into exactly 32 raw bytes."""
    if isinstance(item, str):
        try:
            raw = from_hex(item)
        except ValueError as e:
            raise InvalidLeafError(
                f"Leaf {leaf_index} data is not valid hex: {e}",
                leaf_index=leaf_index,
            ) from e
    elif isinstance(item, (bytes, bytearray, memoryview)):
        raw = bytes(item)
    else:
        raise InvalidLeafError(
            f"Leaf {leaf_index} data must be bytes or a 0x hex string, "
            f"got {type(item).__name__}",
            leaf_index=leaf_index,
        )

    if len(raw) != BYTES32_LENGTH:
        raise InvalidLeafError(
            f"Leaf {leaf_index} data must be {BYTES32_LENGTH} bytes, got {len(raw)}",
            leaf_index=leaf_index,
            details={"length": len(raw)},
        )
    return raw


def _normalize_value(value: int, leaf_index: int) -> int:
    # bool is an int subclass but never a meaningful amount
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidLeafError(
            f"Leaf {leaf_index} value must be an integer, got {type(value).__name__}",
            leaf_index=leaf_index,
        )
    if value < 0 or value > MAX_UINT256:
        raise ValueOutOfRangeError(
            f"Leaf {leaf_index} value {value} is outside [0, 2**256)",
            leaf_index=leaf_index,
        )
    return value


def _normalize_leaves(
    values: Sequence[int],
    data: Sequence[LeafData],
) -> tuple[list[int], list[bytes]]:
    if len(values) != len(data):
        raise MismatchedLengthError.for_lengths(len(values), len(data))
    if len(values) == 0:
        raise EmptyInputError()

    norm_values = [_normalize_value(v, i) for i, v in enumerate(values)]
    norm_data = [_normalize_data(d, i) for i, d in enumerate(data)]

    # Every subtree sum is bounded by the total, so one check covers all nodes
    total = sum(norm_values)
    if total > MAX_UINT256:
        raise ValueOutOfRangeError(
            f"Sum of leaf values {total} is outside [0, 2**256)",
            details={"total": str(total)},
        )
    return norm_values, norm_data


# =============================================================================
# Tree Builder
# =============================================================================

def _pairing_schedule(num_leaves: int) -> Iterator[list[tuple[int, int, int]]]:
    """
    Yield the combine operations of each level as (left, right, parent) indices.

    The schedule depends only on num_leaves. Within a level, nodes are
    paired in order; an odd leftover moves to the end of the next level.
    """
    level = list(range(num_leaves))
    next_index = num_leaves

    while len(level) > 1:
        pairs: list[tuple[int, int, int]] = []
        next_level: list[int] = []
        for i in range(0, len(level) - 1, 2):
            pairs.append((level[i], level[i + 1], next_index))
            next_level.append(next_index)
            next_index += 1

        # Carry odd leftover forward unmodified
        if len(level) % 2 == 1:
            next_level.append(level[-1])

        yield pairs
        level = next_level


def _build_arrays(
    values: Sequence[int],
    data: Sequence[LeafData],
    config: Optional[BuildConfig],
) -> tuple[list[bytes], list[int], list[int], list[int], list[int]]:
    """
    Compute hashes, sums and linkage for every node into pre-sized arrays.

    Returns:
        (hashes, sums, lefts, rights, parents), each of length 2n - 1
    """
    norm_values, norm_data = _normalize_leaves(values, data)
    build_config = config or get_default_config().build

    n = len(norm_values)
    size = 2 * n - 1
    hashes: list[bytes] = [b""] * size
    sums: list[int] = [0] * size
    lefts: list[int] = [NO_NODE] * size
    rights: list[int] = [NO_NODE] * size
    parents: list[int] = [NO_NODE] * size

    pool: Optional[ThreadPoolExecutor] = None
    if build_config.use_parallel(n):
        pool = ThreadPoolExecutor(max_workers=build_config.max_workers)
        logger.debug(
            "Building sum Merkle tree over %d leaves in parallel (max_workers=%s)",
            n, build_config.max_workers,
        )

    try:
        if pool is not None:
            hashes[:n] = pool.map(leaf_hash, norm_data, norm_values)
        else:
            hashes[:n] = [leaf_hash(d, v) for d, v in zip(norm_data, norm_values)]
        sums[:n] = norm_values

        for pairs in _pairing_schedule(n):
            totals = [sums[l] + sums[r] for l, r, _ in pairs]
            left_hashes = [hashes[l] for l, _, _ in pairs]
            right_hashes = [hashes[r] for _, r, _ in pairs]

            if pool is not None:
                level_hashes = list(pool.map(node_hash, left_hashes, right_hashes, totals))
            else:
                level_hashes = [
                    node_hash(lh, rh, t)
                    for lh, rh, t in zip(left_hashes, right_hashes, totals)
                ]

            for (l, r, p), h, t in zip(pairs, level_hashes, totals):
                hashes[p] = h
                sums[p] = t
                lefts[p] = l
                rights[p] = r
                parents[l] = p
                parents[r] = p
    finally:
        if pool is not None:
            pool.shutdown(wait=True)

    return hashes, sums, lefts, rights, parents


def build_tree(
    values: Sequence[int],
    data: Sequence[LeafData],
    config: Optional[BuildConfig] = None,
) -> list[Node]:
    """
    Build the full node list of a sum Merkle tree.

    Algorithm:
    1. Hash each leaf i as leaf_hash(data[i], values[i]) with sum values[i]
    2. Pair adjacent nodes of the current level into new internal nodes,
       appending each to the node list with the next sequential index
    3. Carry an odd leftover to the end of the next level unchanged
    4. Repeat until a single node (the root) remains

    Example: 5 leaves [a, b, c, d, e]
        Level 0: [a, b, c, d, e]  -> ab(5), cd(6), e carried
        Level 1: [ab, cd, e]      -> abcd(7), e carried
        Level 2: [abcd, e]        -> root(8)

    Args:
        values: Leaf values, non-negative integers
        data: Leaf identifiers, 32 bytes each (bytes or 0x hex)
        config: Build options; defaults to the runtime default config

    Returns:
        List of 2n - 1 nodes; the last one is the root

    Raises:
        MismatchedLengthError: If values and data differ in length
        EmptyInputError: If there are no leaves
        InvalidLeafError: If a value or identifier has the wrong type or width
        ValueOutOfRangeError: If a value or the total does not fit in 32 bytes
    """
    hashes, sums, lefts, rights, parents = _build_arrays(values, data, config)

    tree = [
        Node(
            index=i,
            hash=hashes[i],
            sum=sums[i],
            left=lefts[i],
            right=rights[i],
            parent=parents[i],
        )
        for i in range(len(hashes))
    ]
    logger.debug("Built sum Merkle tree: %d leaves, %d nodes", len(values), len(tree))
    return tree


def calc_root(
    values: Sequence[int],
    data: Sequence[LeafData],
    config: Optional[BuildConfig] = None,
) -> Node:
    """
    Compute only the root node of a sum Merkle tree.

    Same validation and shape as build_tree, without materializing
    a Node for every position.

    Returns:
        The root node (hash and sum)
    """
    hashes, sums, lefts, rights, _ = _build_arrays(values, data, config)
    root = len(hashes) - 1
    return Node(
        index=root,
        hash=hashes[root],
        sum=sums[root],
        left=lefts[root],
        right=rights[root],
    )


def get_root(tree: Sequence[Node]) -> Node:
    """Return the root of a node list (its last element)."""
    if len(tree) == 0:
        raise EmptyInputError("Cannot take the root of an empty node list")
    return tree[-1]


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the height of a sum Merkle tree with the given number of leaves.

    This is the number of combine levels, which equals ceil(log2(n)) and is
    the longest proof in the tree. Leaves carried past an odd level have
    shorter proofs.

    Args:
        num_leaves: Number of leaves in the tree

    Returns:
        Tree height (0 for zero or one leaf)
    """
    if num_leaves <= 1:
        return 0
    return (num_leaves - 1).bit_length()


# =============================================================================
# Proof Generator
# =============================================================================

def get_proof(tree: Sequence[Node], leaf_index: int) -> SumMerkleProof:
    """
    Generate the audit proof for the node at ``leaf_index``.

    Algorithm:
    1. Start at the given node
    2. While the node has a parent:
       - The sibling is the parent's other child
       - Record sibling hash, sibling sum, and which side the node was on
       - Move up to the parent
    3. The root itself yields an empty proof

    Args:
        tree: Node list produced by build_tree
        leaf_index: Index of the node to prove

    Returns:
        SumMerkleProof ordered from the node's level up to the root

    Raises:
        IndexOutOfRangeError: If leaf_index is not in [0, len(tree))
    """
    if leaf_index < 0 or leaf_index >= len(tree):
        raise IndexOutOfRangeError.for_index(leaf_index, len(tree))

    side_nodes: list[bytes] = []
    node_sums: list[int] = []
    directions: list[Side] = []

    node = tree[leaf_index]
    while node.parent != NO_NODE:
        parent = tree[node.parent]
        if parent.left == node.index:
            sibling = tree[parent.right]
            directions.append(Side.LEFT)
        else:
            sibling = tree[parent.left]
            directions.append(Side.RIGHT)

        side_nodes.append(sibling.hash)
        node_sums.append(sibling.sum)
        node = parent

    return SumMerkleProof(
        side_nodes=side_nodes,
        node_sums=node_sums,
        directions=directions,
    )


# =============================================================================
# Proof Verifier
# =============================================================================

def _check_proof_structure(proof: SumMerkleProof) -> list[Side]:
    """Validate proof shape and return its directions as Side members."""
    try:
        lengths = (len(proof.side_nodes), len(proof.node_sums), len(proof.directions))
    except (AttributeError, TypeError) as e:
        raise MalformedProofError(
            "Proof side_nodes, node_sums and directions must be sequences"
        ) from e
    if len(set(lengths)) != 1:
        raise MalformedProofError(
            "Proof sequences differ in length: "
            f"side_nodes={lengths[0]}, node_sums={lengths[1]}, directions={lengths[2]}",
            details={
                "side_nodes": lengths[0],
                "node_sums": lengths[1],
                "directions": lengths[2],
            },
        )

    directions: list[Side] = []
    for level, (side_node, node_sum, direction) in enumerate(
        zip(proof.side_nodes, proof.node_sums, proof.directions)
    ):
        if not isinstance(side_node, (bytes, bytearray)) or len(side_node) != BYTES32_LENGTH:
            raise MalformedProofError(
                f"Side node at level {level} is not a {BYTES32_LENGTH}-byte digest",
                level=level,
            )
        if isinstance(node_sum, bool) or not isinstance(node_sum, int) or node_sum < 0:
            raise MalformedProofError(
                f"Node sum at level {level} is not a non-negative integer",
                level=level,
            )
        try:
            directions.append(Side(direction))
        except ValueError as e:
            raise MalformedProofError(
                f"Direction at level {level} is not 'left' or 'right': {direction!r}",
                level=level,
            ) from e
    return directions


def verify_proof(
    leaf_data: LeafData,
    leaf_value: int,
    proof: SumMerkleProof,
    expected_root_hash: bytes,
    expected_root_sum: int,
) -> bool:
    """
    Verify an audit proof against a claimed root hash and sum.

    Algorithm:
    1. Start with leaf_hash(leaf_data, leaf_value) and leaf_value
    2. For each level:
       - LEFT:  hash = node_hash(hash, sibling, sum + sibling_sum)
       - RIGHT: hash = node_hash(sibling, hash, sum + sibling_sum)
       - sum += sibling_sum
    3. Accept iff both hash and sum equal the claimed root

    Args:
        leaf_data: 32-byte leaf identifier (bytes or 0x hex)
        leaf_value: Leaf value
        proof: Proof produced by get_proof
        expected_root_hash: Claimed root digest
        expected_root_sum: Claimed root sum

    Returns:
        True if the proof is valid, False otherwise

    Raises:
        MalformedProofError: If the proof is structurally invalid
    """
    directions = _check_proof_structure(proof)

    try:
        data = _normalize_data(leaf_data, 0)
        value = _normalize_value(leaf_value, 0)
    except (InvalidLeafError, ValueOutOfRangeError) as e:
        logger.debug("Rejecting proof for invalid leaf: %s", e)
        return False

    current_hash = leaf_hash(data, value)
    current_sum = value

    for side_node, node_sum, direction in zip(proof.side_nodes, proof.node_sums, directions):
        current_sum += node_sum
        if current_sum > MAX_UINT256:
            logger.debug("Rejecting proof: running sum exceeds 256 bits")
            return False

        if direction is Side.LEFT:
            current_hash = node_hash(current_hash, bytes(side_node), current_sum)
        else:
            current_hash = node_hash(bytes(side_node), current_hash, current_sum)

    if current_hash != expected_root_hash:
        logger.debug("Proof root hash mismatch")
        return False
    if current_sum != expected_root_sum:
        logger.debug(
            "Proof root sum mismatch: computed %d, expected %d",
            current_sum, expected_root_sum,
        )
        return False
    return True


__all__ = [
    "LEAF_PREFIX",
    "NODE_PREFIX",
    "NO_NODE",
    "Side",
    "Node",
    "SumMerkleProof",
    "leaf_hash",
    "node_hash",
    "combine",
    "build_tree",
    "calc_root",
    "get_root",
    "compute_tree_depth",
    "get_proof",
    "verify_proof",
]
