"""
Merkle Proofs
Field-to-index mapping, proof generation and the reference verifier.

This module provides:
- index_of: field name -> leaf index in [N, 2N)
- generate_proof: sibling path from a field's leaf up to the root
- build_field_proof: the same path bundled with value, index and root
- check_proof / verify_locally: recompute a root and compare

The verifier here is the reference logic any external verifier must
reproduce step for step, including the hex-string parent hashing.
"""
from __future__ import annotations

from typing import Sequence

from core.crypto.hashing import sha256_hex
from core.merkle.merkle_tree import MerkleTree, build_merkle_tree, merkle_parent
from core.schemas.catalog import DEFAULT_CATALOG, FieldCatalog
from core.schemas.proof import FieldProof
from core.schemas.record import Record
from core.schemas.verification import CheckResult


def index_of(field_name: str, catalog: FieldCatalog = DEFAULT_CATALOG) -> int:
    """
    Leaf index of a field: N + catalog position.

    Raises:
        FieldNotFoundException: If the field is not in the catalog.
            There is no sentinel index; 0 is never returned.
    """
    return catalog.index_of(field_name)


def sibling_index(index: int) -> int:
    """Index of the other child of the same parent (flip the low bit)."""
    return index ^ 1


def parent_index(index: int) -> int:
    return index // 2


def _as_tree(source: Record | MerkleTree) -> MerkleTree:
    if isinstance(source, MerkleTree):
        return source
    return build_merkle_tree(source)


def generate_proof(field_name: str, source: Record | MerkleTree) -> list[str]:
    """
    Collect sibling hashes from a field's leaf up to the root.

    Algorithm:
        idx = index_of(field)
        while idx > 1:
            proof.append(node[idx ^ 1])
            idx = idx // 2

    Args:
        field_name: Catalog field to prove
        source: Record (a tree is built from it) or an already built tree

    Returns:
        log2(N) sibling hashes, the leaf's sibling first

    Raises:
        FieldNotFoundException: If the field is not in the catalog
    """
    tree = _as_tree(source)
    idx = index_of(field_name, tree.catalog)
    proof: list[str] = []
    while idx > 1:
        proof.append(tree.node(sibling_index(idx)))
        idx = parent_index(idx)
    return proof


def build_field_proof(
    field_name: str,
    record: Record,
    timestamp: int | None = None,
) -> FieldProof:
    """Bundle value, index, siblings and root for one field."""
    tree = build_merkle_tree(record)
    return FieldProof(
        field_name=field_name,
        index=index_of(field_name, record.catalog),
        value=record.value(field_name),
        siblings=tuple(generate_proof(field_name, tree)),
        root=tree.root,
        timestamp=timestamp,
    )


def compute_root_from_proof(value: str, index: int, proof: Sequence[str]) -> tuple[str, int]:
    """
    Walk a proof upward from a claimed value.

    At each step an even index is a left child, an odd index a right child.

    Returns:
        (candidate_root, final_index); a well-formed proof ends at index 1
    """
    candidate = sha256_hex(value)
    idx = index
    for sibling in proof:
        if idx % 2 == 0:
            candidate = merkle_parent(candidate, sibling)
        else:
            candidate = merkle_parent(sibling, candidate)
        idx = parent_index(idx)
    return candidate, idx


def check_proof(
    value: str,
    index: int,
    proof: Sequence[str],
    expected_root: str,
    catalog: FieldCatalog = DEFAULT_CATALOG,
) -> CheckResult:
    """
    Verify a proof and explain the outcome.

    A rejection is a failed CheckResult, never an exception.
    """
    details = {"index": index, "proof_length": len(proof)}

    if index not in catalog.leaf_range:
        return CheckResult.failed(
            "proof_index",
            f"Index {index} is outside the leaf range "
            f"[{catalog.size}, {2 * catalog.size})",
            details,
        )
    details["field_name"] = catalog.field_at(index)

    if len(proof) != catalog.depth:
        return CheckResult.failed(
            "proof_length",
            f"Proof has {len(proof)} siblings, expected {catalog.depth}",
            details,
        )

    candidate, final_index = compute_root_from_proof(value, index, proof)
    details["computed_root"] = candidate
    if final_index != 1:
        return CheckResult.failed(
            "proof_walk",
            f"Proof walk ended at index {final_index}, not at the root",
            details,
        )
    if candidate != expected_root:
        return CheckResult.failed(
            "root_match",
            "Computed root does not match the expected root",
            details,
        )
    return CheckResult.passed("root_match", "Proof verified against root", details)


def verify_locally(
    value: str,
    index: int,
    proof: Sequence[str],
    expected_root: str,
    catalog: FieldCatalog = DEFAULT_CATALOG,
) -> bool:
    """
    Reference verification: accept iff the proof rebuilds expected_root.

    Args:
        value: Claimed fixed-width token
        index: Claimed leaf index
        proof: Sibling hashes, leaf sibling first
        expected_root: Root to compare against
        catalog: Catalog fixing N (depth and leaf range)

    Returns:
        True if the proof is valid, False otherwise
    """
    return check_proof(value, index, proof, expected_root, catalog).ok


def verify_field_proof(
    proof: FieldProof,
    expected_root: str | None = None,
    catalog: FieldCatalog = DEFAULT_CATALOG,
) -> CheckResult:
    """
    Verify a FieldProof bundle.

    Uses expected_root when given, otherwise the root carried by the proof.
    The claimed field name must match the field at the claimed index.
    """
    root = expected_root or proof.root
    if root is None:
        return CheckResult.failed(
            "root_missing",
            "No expected root given and the proof carries none",
            {"field_name": proof.field_name},
        )
    if not catalog.contains(proof.field_name):
        return CheckResult.failed(
            "field_not_found",
            f"Field {proof.field_name!r} is not in the catalog",
            {"field_name": proof.field_name},
        )
    if catalog.index_of(proof.field_name) != proof.index:
        return CheckResult.failed(
            "field_index",
            f"Field {proof.field_name!r} does not sit at index {proof.index}",
            {"field_name": proof.field_name, "index": proof.index},
        )
    return check_proof(proof.value, proof.index, proof.siblings, root, catalog)


__all__ = [
    "index_of",
    "sibling_index",
    "parent_index",
    "generate_proof",
    "build_field_proof",
    "compute_root_from_proof",
    "check_proof",
    "verify_locally",
    "verify_field_proof",
]
