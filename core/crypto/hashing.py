"""
Hashing Utilities
Hash primitives for leaf derivation and tree construction.

This module provides:
- SHA-256 hashing for raw bytes, hex-encoded
- The node-combining rule used by every internal tree level
- Hex encoding/decoding with 0x prefix
- Random placeholder tokens

Compatibility Notes:
- Internal nodes hash the concatenation of the two children's *hex strings*
  (128 ASCII characters), not the 64 raw digest bytes. Any external verifier
  consuming our proofs encodes the same rule, so it must not be changed.
- All hex output is lowercase without prefix unless to_hex() is used.
"""
from __future__ import annotations

import hashlib
import os


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def sha256_hex(data: bytes | str) -> str:
    """
    Compute the lowercase hex SHA-256 digest of bytes or a UTF-8 string.

    This is the leaf hashing rule: leaf = hex(sha256(token)).
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest()


def hash_hex_concat(left: str, right: str) -> str:
    """
    Combine two hex-encoded child hashes into their parent.

    parent = hex(sha256(utf8(left_hex + right_hex)))

    Args:
        left: Left child, hex string
        right: Right child, hex string

    Returns:
        Parent hash as a 64-character hex string
    """
    return sha256_hex(left + right)


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


def is_hex_digest(value: str) -> bool:
    """Check whether value is a 64-character lowercase hex SHA-256 digest."""
    if len(value) != 64:
        return False
    return all(c in "0123456789abcdef" for c in value)


def random_token(width: int, num_bytes: int = 10) -> str:
    """
    Produce a random placeholder token.

    Draws num_bytes random bytes, hashes them with SHA-256 and
    truncates the hex digest to width characters.
    """
    return sha256_hex(os.urandom(num_bytes))[:width]


__all__ = [
    "sha256",
    "sha256_hex",
    "hash_hex_concat",
    "to_hex",
    "from_hex",
    "is_hex_digest",
    "random_token",
]
