"""
Core cryptographic utilities.

Hashing and fixed-width encoding used by the sum Merkle tree.
"""
from .hashing import (
    BYTES32_LENGTH,
    MAX_UINT256,
    sha256,
    hash_bytes,
    to_hex,
    from_hex,
    uint_to_bytes32,
)

__all__ = [
    "BYTES32_LENGTH",
    "MAX_UINT256",
    "sha256",
    "hash_bytes",
    "to_hex",
    "from_hex",
    "uint_to_bytes32",
]
