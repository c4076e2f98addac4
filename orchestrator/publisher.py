"""
Snapshot Publisher

Derives a record from a value source, builds its Merkle root and commits
the root under the block timestamp. Keeps the published snapshots so
proofs can be issued against any of them later.
"""
from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from core.leaves.deriver import FieldValueSource, derive_record
from core.leaves.placeholders import PlaceholderProvider, RandomPlaceholderProvider
from core.merkle.merkle_proofs import build_field_proof
from core.merkle.merkle_tree import build_root
from core.schemas.catalog import DEFAULT_CATALOG, FieldCatalog
from core.schemas.proof import FieldProof
from core.schemas.record import Record

from orchestrator.commitment_store import CommitmentStore


logger = logging.getLogger(__name__)


class Snapshot(BaseModel):
    """One published record and the root committed for it."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    timestamp: int = Field(..., ge=0, description="Commitment key (block time, seconds)")
    record: Record = Field(..., description="Record the root was built from")
    root: str = Field(..., description="Merkle root committed for the timestamp")
    placeholder_fields: tuple[str, ...] = Field(
        default=(),
        description="Fields filled by the placeholder provider",
    )

    def is_placeholder(self, field_name: str) -> bool:
        return field_name in self.placeholder_fields


class SnapshotPublisher:
    """
    Publishes snapshots into a CommitmentStore.

    Usage:
        publisher = SnapshotPublisher(CommitmentStore())
        snapshot = publisher.publish(source, timestamp=1700000000)
        proof = publisher.prove(snapshot, "Coinbase")
    """

    def __init__(
        self,
        store: CommitmentStore,
        catalog: FieldCatalog = DEFAULT_CATALOG,
        placeholders: Optional[PlaceholderProvider] = None,
    ) -> None:
        self.store = store
        self.catalog = catalog
        self.placeholders = placeholders or RandomPlaceholderProvider()
        self._history: list[Snapshot] = []

    @property
    def history(self) -> list[Snapshot]:
        """Published snapshots, oldest first."""
        return list(self._history)

    def publish(self, source: FieldValueSource, timestamp: int) -> Snapshot:
        """
        Derive a record from source and commit its root under timestamp.

        Raises:
            TimestampOrderException: If timestamp does not advance the store
            EmptyFieldValueException: If the source yields an empty value
        """
        derived = derive_record(source, self.catalog, self.placeholders)
        return self._commit(derived.record, timestamp, derived.placeholder_fields)

    def publish_record(self, record: Record, timestamp: int) -> Snapshot:
        """Commit an already derived record."""
        return self._commit(record, timestamp, ())

    def _commit(
        self,
        record: Record,
        timestamp: int,
        placeholder_fields: tuple[str, ...],
    ) -> Snapshot:
        root = build_root(record)
        self.store.set_root(timestamp, root)
        snapshot = Snapshot(
            timestamp=timestamp,
            record=record,
            root=root,
            placeholder_fields=placeholder_fields,
        )
        self._history.append(snapshot)
        logger.info(
            f"Published snapshot {len(self._history)} at {timestamp}: "
            f"root={root} placeholders={len(placeholder_fields)}"
        )
        return snapshot

    def prove(self, snapshot: Snapshot, field_name: str) -> FieldProof:
        """Proof bundle for one field of a snapshot, stamped with its timestamp."""
        return build_field_proof(field_name, snapshot.record, snapshot.timestamp)

    def snapshot_at(self, timestamp: int) -> Snapshot | None:
        for snapshot in self._history:
            if snapshot.timestamp == timestamp:
                return snapshot
        return None


__all__ = ["Snapshot", "SnapshotPublisher"]
