"""
CLI Commitment Commands

- publish: derive a record and commit its root under a timestamp
- check: verify a proof bundle against the root committed for a timestamp
- demo: publish synthetic blocks and replay the verification scenarios

Commitments persist to the store file from --store, BEACONROOT_STORE_PATH
or store.path; without one they live only for the command.

Usage:
    beaconroot publish --record record.json --timestamp 1700000000 --store roots.json
    beaconroot publish --rpc --store roots.json
    beaconroot check proof.json --store roots.json [--timestamp N]
    beaconroot demo [--blocks 5] [--seed 7] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
import time
from argparse import Namespace
from pathlib import Path

from core.leaves.placeholders import SeededPlaceholderProvider
from core.schemas.catalog import DEFAULT_CATALOG

from orchestrator.commitment_store import CommitmentStore
from orchestrator.publisher import SnapshotPublisher
from orchestrator.scenarios import run_verification_scenarios
from orchestrator.sources import ExecutionHeaderSource, synthetic_block

from beaconroot_cli.commands.merkle import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    emit,
    get_config,
    load_proof,
    make_provider,
    open_source,
)


logger = logging.getLogger(__name__)


# Seconds between synthetic blocks
SLOT_SECONDS = 12


def open_store(args: Namespace) -> CommitmentStore:
    config = get_config(args)
    path = getattr(args, "store", None) or config.store.path
    return CommitmentStore(path=path, catalog=config.build_catalog())


def publish_cmd(args: Namespace) -> int:
    """Derive, root and commit one record."""
    config = get_config(args)
    store = open_store(args)
    source, block_time = open_source(args, config)

    timestamp = args.timestamp if args.timestamp is not None else block_time
    if timestamp is None:
        print("Error: --timestamp is required with --record", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    publisher = SnapshotPublisher(store, store.catalog, make_provider(args, config))
    snapshot = publisher.publish(source, timestamp)
    emit({
        "timestamp": snapshot.timestamp,
        "root": snapshot.root,
        "placeholder_fields": list(snapshot.placeholder_fields),
        "commitments": len(store),
    }, args.json)
    return EXIT_SUCCESS


def check_cmd(args: Namespace) -> int:
    """Verify a proof bundle against the store."""
    proof_path = Path(args.proof_path)
    if not proof_path.exists():
        print(f"Error: Proof not found: {proof_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    proof = load_proof(args.proof_path)
    timestamp = args.timestamp if args.timestamp is not None else proof.timestamp
    if timestamp is None:
        print("Error: proof carries no timestamp; pass --timestamp", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    store = open_store(args)
    check = store.check(timestamp, proof.value, proof.siblings, proof.index)
    emit({
        "field": proof.field_name,
        "index": proof.index,
        "timestamp": timestamp,
        "ok": check.ok,
        "check": check.check_id,
        "message": check.message,
    }, args.json)
    return EXIT_SUCCESS if check.ok else EXIT_VERIFICATION_FAILED


def demo_cmd(args: Namespace) -> int:
    """
    Publish synthetic blocks into an in-memory store and run the scenarios.

    Uses the default catalog: scenario field positions refer to it.
    """
    if args.blocks < 2:
        print("Error: --blocks must be at least 2", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    seed = args.seed if args.seed is not None else 0
    start = args.start if args.start is not None else int(time.time())
    publisher = SnapshotPublisher(
        CommitmentStore(catalog=DEFAULT_CATALOG),
        DEFAULT_CATALOG,
        SeededPlaceholderProvider(seed),
    )
    for i in range(args.blocks):
        timestamp = start + SLOT_SECONDS * i
        publisher.publish(ExecutionHeaderSource(synthetic_block(i + 1, timestamp, seed)), timestamp)

    result = run_verification_scenarios(publisher)

    if args.json:
        print(json.dumps({
            "ok": result.ok,
            "roots": [
                {"timestamp": s.timestamp, "root": s.root} for s in publisher.history
            ],
            "checks": [check.model_dump() for check in result.checks],
        }, indent=2))
    else:
        for snapshot in publisher.history:
            print(f"timestamp {snapshot.timestamp} -> root {snapshot.root}")
        print()
        for check in result.checks:
            status = "✓" if check.ok else "✗"
            print(f"  {status} {check.check_id}: {check.message}")
        print(f"\nchecks: {result.passed_count} passed, {result.failed_count} failed")

    return EXIT_SUCCESS if result.ok else EXIT_VERIFICATION_FAILED
