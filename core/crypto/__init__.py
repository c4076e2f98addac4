"""
Core cryptographic utilities.

Hashing primitives shared by leaf derivation, tree construction
and proof verification.
"""
from .hashing import (
    sha256,
    sha256_hex,
    hash_hex_concat,
    to_hex,
    from_hex,
    is_hex_digest,
    random_token,
)

__all__ = [
    "sha256",
    "sha256_hex",
    "hash_hex_concat",
    "to_hex",
    "from_hex",
    "is_hex_digest",
    "random_token",
]
