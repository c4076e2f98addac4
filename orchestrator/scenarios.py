"""
Verification Scenarios

Replays a fixed set of checks against published snapshots: three proofs
that must be accepted and three tampered ones that must be rejected.

Each CheckResult is ok when the store's verdict matches the expected
verdict, so a fully passing VerificationResult means the commitment
scheme behaves correctly, not that every proof verified.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from core.crypto.hashing import sha256_hex
from core.schemas.verification import CheckResult, VerificationResult

from orchestrator.publisher import Snapshot, SnapshotPublisher


logger = logging.getLogger(__name__)


Tamper = Literal["none", "wrong_value", "swapped_proof", "wrong_timestamp"]


@dataclass(frozen=True)
class Scenario:
    """
    One replayed check.

    snapshot and field are positions: the snapshot position is clamped to
    the history length and the field position wraps around the catalog.
    """
    name: str
    snapshot: int
    field: int
    tamper: Tamper = "none"

    @property
    def expected(self) -> bool:
        return self.tamper == "none"


# Field positions refer to the default catalog order.
DEFAULT_SCENARIOS: tuple[Scenario, ...] = (
    Scenario("coinbase_true_value", snapshot=1, field=3),
    Scenario("parent_hash_true_value", snapshot=3, field=0),
    Scenario("proposer_slashings_true_value", snapshot=2, field=8),
    Scenario("parent_root_wrong_value", snapshot=1, field=12, tamper="wrong_value"),
    Scenario("deposits_swapped_proof", snapshot=4, field=10, tamper="swapped_proof"),
    Scenario("proposer_slashings_wrong_timestamp", snapshot=2, field=8, tamper="wrong_timestamp"),
)


def tampered_token(token: str) -> str:
    """An unrelated token of the same width."""
    return sha256_hex("tampered:" + token)[: len(token)]


def run_scenario(publisher: SnapshotPublisher, scenario: Scenario) -> CheckResult:
    """Run one scenario against the publisher's store."""
    history = publisher.history
    snapshot: Snapshot = history[min(scenario.snapshot, len(history) - 1)]
    catalog = publisher.catalog
    field_name = catalog.field_names[scenario.field % catalog.size]

    proof = publisher.prove(snapshot, field_name)
    value = proof.value
    siblings = list(proof.siblings)
    timestamp = snapshot.timestamp

    if scenario.tamper == "wrong_value":
        value = tampered_token(value)
    elif scenario.tamper == "swapped_proof" and len(siblings) >= 2:
        siblings[0], siblings[1] = siblings[1], siblings[0]
    elif scenario.tamper == "wrong_timestamp":
        timestamp = history[0].timestamp

    actual = publisher.store.verify(timestamp, value, siblings, proof.index)
    details = {
        "field_name": field_name,
        "index": proof.index,
        "timestamp": timestamp,
        "expected": scenario.expected,
        "actual": actual,
        "placeholder": snapshot.is_placeholder(field_name),
    }
    verdict = "accepted" if actual else "rejected"
    if actual == scenario.expected:
        return CheckResult.passed(scenario.name, f"{field_name} {verdict} as expected", details)
    return CheckResult.failed(
        scenario.name,
        f"{field_name} {verdict}, expected the opposite",
        details,
    )


def run_verification_scenarios(
    publisher: SnapshotPublisher,
    scenarios: tuple[Scenario, ...] = DEFAULT_SCENARIOS,
) -> VerificationResult:
    """
    Run every scenario and aggregate the outcomes.

    Raises:
        ValueError: If fewer than two snapshots were published
    """
    if len(publisher.history) < 2:
        raise ValueError("At least two published snapshots are required")

    checks = []
    for scenario in scenarios:
        check = run_scenario(publisher, scenario)
        logger.info(f"Scenario {scenario.name}: {'ok' if check.ok else 'FAILED'}")
        checks.append(check)
    return VerificationResult.from_checks(checks)


__all__ = [
    "Scenario",
    "DEFAULT_SCENARIOS",
    "tampered_token",
    "run_scenario",
    "run_verification_scenarios",
]
