"""
Merkle Commitments
Flat-array Merkle tree over a fixed field catalog, proof generation and
reference verification.

This module provides:
- build_root: Commit a record to a single root
- index_of: Stable leaf index for a field
- generate_proof: Sibling path for a field
- verify_locally: Reference check of (value, index, proof) against a root

Canonical Commitment Rules:
1. Leaf hashing: hex(sha256(token))
2. Parent hashing: hex(sha256(left_hex + right_hex))
3. Catalog size N is a power of two; leaves live at [N, 2N)
4. Root lives at index 1

Usage:
    from core.merkle import build_root, generate_proof, index_of, verify_locally

    root = build_root(record)
    proof = generate_proof("Coinbase", record)
    assert verify_locally(record.value("Coinbase"), index_of("Coinbase"), proof, root)
"""
from .merkle_tree import (
    MerkleTree,
    build_merkle_tree,
    build_root,
    compute_tree_depth,
    merkle_parent,
)

from .merkle_proofs import (
    build_field_proof,
    check_proof,
    compute_root_from_proof,
    generate_proof,
    index_of,
    parent_index,
    sibling_index,
    verify_field_proof,
    verify_locally,
)


__all__ = [
    # Construction
    "MerkleTree",
    "build_merkle_tree",
    "build_root",
    "compute_tree_depth",
    "merkle_parent",
    # Proofs
    "build_field_proof",
    "check_proof",
    "compute_root_from_proof",
    "generate_proof",
    "index_of",
    "parent_index",
    "sibling_index",
    "verify_field_proof",
    "verify_locally",
]
