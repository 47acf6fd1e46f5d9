"""
CLI Prove Command

Build a sum Merkle tree, print the audit proof for one leaf and
check it against the root.

Usage:
    merklesum prove 3 --sequence 100
    merklesum prove 0 5:0x<64 hex> 7:0x<64 hex>
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace

from merklesum.crypto.hashing import to_hex
from merklesum.merkle.sum_merkle_tree import (
    build_tree,
    get_proof,
    get_root,
    verify_proof,
)
from merklesum.schemas.errors import IndexOutOfRangeError, SumTreeException
from merklesum_cli.leaves import LeafArgumentError, leaves_from_args


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def prove_cmd(args: Namespace) -> int:
    """Handle the prove command."""
    try:
        values, data = leaves_from_args(args)
        tree = build_tree(values, data, args.runtime_config.build)
        if args.index < 0 or args.index >= len(values):
            raise IndexOutOfRangeError.for_index(args.index, len(values))
        proof = get_proof(tree, args.index)
    except (LeafArgumentError, SumTreeException) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    root = get_root(tree)
    verified = verify_proof(
        data[args.index], values[args.index], proof, root.hash, root.sum
    )
    logger.info("Proof for leaf %d has %d levels", args.index, len(proof))

    print(f"leaf: {args.index}")
    print(f"value: {values[args.index]}")
    print(f"data: {to_hex(data[args.index])}")
    print(f"root_hash: {to_hex(root.hash)}")
    print(f"root_sum: {root.sum}")
    print(f"levels: {len(proof)}")
    for level, (side_node, node_sum, direction) in enumerate(
        zip(proof.side_nodes, proof.node_sums, proof.directions)
    ):
        print(f"  [{level}] {direction.value:<5} sibling={to_hex(side_node)} sum={node_sum}")
    print(f"verified: {str(verified).lower()}")

    return EXIT_SUCCESS if verified else EXIT_VERIFICATION_FAILED
