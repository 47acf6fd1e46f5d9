"""
CLI Root Command

Build a sum Merkle tree and print its root hash and sum.

Usage:
    merklesum root 5:0x<64 hex> 7:0x<64 hex> ...
    merklesum root --sequence 100
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace

from merklesum.crypto.hashing import to_hex
from merklesum.merkle.sum_merkle_tree import build_tree, compute_tree_depth, get_root
from merklesum.schemas.errors import SumTreeException
from merklesum_cli.leaves import LeafArgumentError, leaves_from_args


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def root_cmd(args: Namespace) -> int:
    """Handle the root command."""
    try:
        values, data = leaves_from_args(args)
        tree = build_tree(values, data, args.runtime_config.build)
    except (LeafArgumentError, SumTreeException) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    root = get_root(tree)
    logger.info("Built tree over %d leaves", len(values))

    print(f"leaves: {len(values)}")
    print(f"nodes: {len(tree)}")
    print(f"depth: {compute_tree_depth(len(values))}")
    print(f"root_hash: {to_hex(root.hash)}")
    print(f"root_sum: {root.sum}")
    return EXIT_SUCCESS
