"""
Merkle Tree Construction
Complete binary hash tree over a fixed, power-of-two field catalog.

Layout (flat, 1-indexed):
- nodes has 2N slots; slot 0 is unused ("")
- slots [N, 2N) are leaves in catalog order
- slots [1, N) are internal nodes; node[i] = H(node[2i] + node[2i+1])
- node[1] is the root

Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = hex(sha256(utf8(token)))
2. Parent hashing: parent = hex(sha256(utf8(left_hex + right_hex)))
3. No padding: N must be a power of two
4. Left child has the even index, right child the odd index

Determinism Notes:
- No randomness; a tree is a pure function of its record
- Trees are rebuilt per record and never mutated
"""
from __future__ import annotations

from dataclasses import dataclass

from core.crypto.hashing import hash_hex_concat
from core.leaves.deriver import leaf_hash
from core.schemas.catalog import FieldCatalog, is_power_of_two
from core.schemas.errors import CatalogConfigurationException
from core.schemas.record import Record


@dataclass(frozen=True)
class MerkleTree:
    """
    A built tree over one record.

    Attributes:
        catalog: Catalog the tree was built for
        nodes: 2N hex hashes, index 0 unused
    """
    catalog: FieldCatalog
    nodes: tuple[str, ...]

    @property
    def root(self) -> str:
        return self.nodes[1]

    @property
    def size(self) -> int:
        """Number of leaves, N."""
        return len(self.nodes) // 2

    def node(self, index: int) -> str:
        """
        Hash stored at a slot.

        Raises:
            IndexError: If index is outside [1, 2N)
        """
        if index < 1 or index >= len(self.nodes):
            raise IndexError(f"Node index {index} out of range [1, {len(self.nodes)})")
        return self.nodes[index]

    def leaf(self, field_name: str) -> str:
        """Leaf hash of a field."""
        return self.nodes[self.catalog.index_of(field_name)]

    def leaves(self) -> tuple[str, ...]:
        """Leaf hashes in catalog order."""
        return self.nodes[self.size:]


def merkle_parent(left: str, right: str) -> str:
    """
    Compute the parent hash of two child nodes.

    Args:
        left: Left child hash (even slot), hex
        right: Right child hash (odd slot), hex

    Returns:
        Parent hash, hex
    """
    return hash_hex_concat(left, right)


def compute_tree_depth(num_leaves: int) -> int:
    """
    Number of levels above the leaves, log2(num_leaves).

    This is also the length of every proof.

    Raises:
        CatalogConfigurationException: If num_leaves is not a power of two
    """
    if not is_power_of_two(num_leaves):
        raise CatalogConfigurationException(
            f"Leaf count must be a power of two, got {num_leaves}",
            details={"size": num_leaves},
        )
    return num_leaves.bit_length() - 1


def build_merkle_tree(record: Record) -> MerkleTree:
    """
    Build the full tree for a record.

    Algorithm:
    1. Allocate 2N slots
    2. Place hex(sha256(token)) for catalog field i at slot N + i
    3. Reduce bottom-up with half-width w = N/2, N/4, ..., 1:
       node[w + o] = parent(node[2(w + o)], node[2(w + o) + 1]) for o in [0, w)
    4. Root is node[1]

    Example:
        >>> tree = build_merkle_tree(record)
        >>> tree.root == tree.node(1)
        True
    """
    catalog = record.catalog
    n = catalog.size
    compute_tree_depth(n)

    nodes = [""] * (2 * n)
    for position, token in enumerate(record.tokens):
        nodes[n + position] = leaf_hash(token)

    width = n // 2
    while width >= 1:
        for offset in range(width):
            slot = width + offset
            nodes[slot] = merkle_parent(nodes[2 * slot], nodes[2 * slot + 1])
        width //= 2

    return MerkleTree(catalog=catalog, nodes=tuple(nodes))


def build_root(record: Record) -> str:
    """
    Compute the root committing to an entire record.

    Identical records always yield identical roots.
    """
    return build_merkle_tree(record).root


__all__ = [
    "MerkleTree",
    "merkle_parent",
    "compute_tree_depth",
    "build_merkle_tree",
    "build_root",
]
