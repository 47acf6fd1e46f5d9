"""
Hashing Utilities
Raw hashing and fixed-width encoding helpers for sum Merkle commitments.

This module provides:
- SHA-256 hashing for raw bytes
- Hex encoding/decoding with 0x prefix
- Fixed-width 32-byte big-endian integer encoding

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- Integers are always encoded to the full 32 bytes, small values included
- All operations are deterministic
"""
from __future__ import annotations

import hashlib


# Width of a digest and of an encoded integer, in bytes
BYTES32_LENGTH = 32

# Largest value representable by uint_to_bytes32
MAX_UINT256 = (1 << 256) - 1


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def hash_bytes(*parts: bytes) -> bytes:
    """
    Compute SHA-256 over the concatenation of one or more byte strings.

    The parts are fed to a single hasher in order, so
    hash_bytes(a, b) == sha256(a + b).

    Args:
        *parts: Byte strings forming the preimage

    Returns:
        32-byte SHA-256 digest
    """
    hasher = hashlib.sha256()
    for part in parts:
        hasher.update(part)
    return hasher.digest()


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def uint_to_bytes32(value: int) -> bytes:
    """
    Encode a non-negative integer as 32 bytes, big-endian.

    This encoding is part of every leaf and node hash preimage and
    must stay bit-exact.

    Args:
        value: Integer in [0, 2**256)

    Returns:
        32-byte big-endian encoding

    Raises:
        ValueError: If value is negative or does not fit in 32 bytes

    Example:
        >>> uint_to_bytes32(1).hex()[-4:]
        '0001'
    """
    if value < 0 or value > MAX_UINT256:
        raise ValueError(f"Value {value} does not fit in an unsigned 256-bit integer")
    return value.to_bytes(BYTES32_LENGTH, "big")


__all__ = [
    "BYTES32_LENGTH",
    "MAX_UINT256",
    "sha256",
    "hash_bytes",
    "to_hex",
    "from_hex",
    "uint_to_bytes32",
]
