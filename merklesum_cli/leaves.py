"""
Leaf argument parsing shared by CLI commands.

A leaf is given as VALUE:0xDATA, where DATA is 32 bytes of hex.
Alternatively --sequence N generates values[i] = i, data[i] = uint256_be(i).
"""

from __future__ import annotations

from argparse import Namespace

from merklesum.crypto.hashing import from_hex, uint_to_bytes32


class LeafArgumentError(ValueError):
    """Raised when leaf arguments cannot be parsed."""


def parse_leaf(leaf_arg: str) -> tuple[int, bytes]:
    """Parse a single VALUE:0xDATA argument."""
    value_part, sep, data_part = leaf_arg.partition(":")
    if not sep:
        raise LeafArgumentError(f"Leaf must be VALUE:0xDATA, got: {leaf_arg}")

    try:
        value = int(value_part, 0)
    except ValueError as e:
        raise LeafArgumentError(f"Invalid leaf value {value_part!r}") from e

    try:
        data = from_hex(data_part)
    except ValueError as e:
        raise LeafArgumentError(f"Invalid leaf data {data_part!r}: {e}") from e

    return value, data


def sequence_leaves(size: int) -> tuple[list[int], list[bytes]]:
    """Generate the leaves values[i] = i, data[i] = uint256_be(i)."""
    if size < 0:
        raise LeafArgumentError(f"Sequence size must be non-negative, got {size}")
    values = list(range(size))
    data = [uint_to_bytes32(i) for i in range(size)]
    return values, data


def leaves_from_args(args: Namespace) -> tuple[list[int], list[bytes]]:
    """Collect (values, data) from either --sequence or positional leaves."""
    if args.sequence is not None:
        if args.leaves:
            raise LeafArgumentError("Use either --sequence or explicit leaves, not both")
        return sequence_leaves(args.sequence)

    values: list[int] = []
    data: list[bytes] = []
    for leaf_arg in args.leaves:
        value, item = parse_leaf(leaf_arg)
        values.append(value)
        data.append(item)
    return values, data
