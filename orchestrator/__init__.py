"""
Commitment orchestration.

Wires value sources, leaf derivation and Merkle roots into a
timestamp-keyed commitment store, and replays verification scenarios
against it.

Public API:
- MappingFieldSource / ExecutionHeaderSource: raw field values
- fetch_execution_source: read a header over JSON-RPC
- CommitmentStore: timestamp -> root registry with verify()
- SnapshotPublisher / Snapshot: derive, root and commit a record
- run_verification_scenarios: accept/reject checks over published snapshots
"""

from orchestrator.commitment_store import CommitmentStore
from orchestrator.publisher import Snapshot, SnapshotPublisher
from orchestrator.scenarios import (
    DEFAULT_SCENARIOS,
    Scenario,
    run_scenario,
    run_verification_scenarios,
)
from orchestrator.sources import (
    ExecutionHeaderSource,
    FieldValueSource,
    MappingFieldSource,
    fetch_execution_source,
    synthetic_block,
)


__all__ = [
    # Sources
    "FieldValueSource",
    "MappingFieldSource",
    "ExecutionHeaderSource",
    "fetch_execution_source",
    "synthetic_block",
    # Commitments
    "CommitmentStore",
    "Snapshot",
    "SnapshotPublisher",
    # Scenarios
    "Scenario",
    "DEFAULT_SCENARIOS",
    "run_scenario",
    "run_verification_scenarios",
]
