"""
Common test fixtures shared by all modules.

Provides factory functions for the core data structures:
- raw field values / Record
- a small 4-field catalog
- a SnapshotPublisher with synthetic blocks already published

Everything here is deterministic.
"""

from typing import Optional

from core.leaves.deriver import canonical_token
from core.leaves.placeholders import SeededPlaceholderProvider
from core.schemas.catalog import DEFAULT_CATALOG, FieldCatalog
from core.schemas.record import Record

from orchestrator.commitment_store import CommitmentStore
from orchestrator.publisher import SnapshotPublisher
from orchestrator.sources import ExecutionHeaderSource, synthetic_block


# Timestamp of the first synthetic block
FIXED_TIMESTAMP = 1_700_000_000


def make_values(
    catalog: FieldCatalog = DEFAULT_CATALOG,
    overrides: Optional[dict[str, str]] = None,
) -> dict[str, str]:
    """
    Raw value per field: "value-<position>-<name>".

    Values shorter than the token width get padded, longer ones truncated.
    """
    values = {
        name: f"value-{position}-{name}"
        for position, name in enumerate(catalog.field_names)
    }
    values.update(overrides or {})
    return values


def make_record(
    catalog: FieldCatalog = DEFAULT_CATALOG,
    overrides: Optional[dict[str, str]] = None,
) -> Record:
    """Create a Record with every field holding a known canonical token."""
    values = make_values(catalog, overrides)
    tokens = {
        name: canonical_token(value, catalog.token_width, catalog.filler, name)
        for name, value in values.items()
    }
    return Record.from_values(tokens, catalog=catalog)


def make_small_catalog() -> FieldCatalog:
    """Four fields, 8-character tokens, '.' filler."""
    return FieldCatalog(field_names=("A", "B", "C", "D"), token_width=8, filler=".")


def make_publisher(
    blocks: int = 5,
    start: int = FIXED_TIMESTAMP,
    seed: int = 7,
    store: Optional[CommitmentStore] = None,
) -> SnapshotPublisher:
    """Create a publisher and publish `blocks` synthetic blocks, 12s apart."""
    publisher = SnapshotPublisher(
        store or CommitmentStore(),
        DEFAULT_CATALOG,
        SeededPlaceholderProvider(seed),
    )
    for i in range(blocks):
        timestamp = start + 12 * i
        publisher.publish(ExecutionHeaderSource(synthetic_block(i + 1, timestamp, seed)), timestamp)
    return publisher
