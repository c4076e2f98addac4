"""
CLI Merkle Commands

Offline commands over a single record:
- catalog: list fields and their leaf indices
- index: leaf index of one field
- root: derive a record and print its Merkle root
- proof: derive a record and write a proof bundle for one field
- verify: check a proof bundle against a root

Records are read from a JSON object mapping field names to raw values
(null or a missing key means "no value", filled by a placeholder), or
fetched from the configured execution-layer node with --rpc.

Usage:
    beaconroot root --record record.json [--seed N] [--json]
    beaconroot proof Coinbase --record record.json --out proof.json
    beaconroot verify proof.json [--root HEX] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any

from core.config.runtime import RuntimeConfig
from core.http.rpc import JsonRpcClient
from core.leaves.deriver import FieldValueSource, derive_record, DerivedRecord
from core.leaves.placeholders import PlaceholderProvider, make_placeholder_provider
from core.merkle.merkle_proofs import build_field_proof, verify_field_proof
from core.merkle.merkle_tree import build_root
from core.schemas.catalog import FieldCatalog
from core.schemas.proof import FieldProof

from orchestrator.sources import MappingFieldSource, fetch_execution_source


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


# =============================================================================
# Shared helpers
# =============================================================================

def get_config(args: Namespace) -> RuntimeConfig:
    return getattr(args, "cli_config", None) or RuntimeConfig()


def make_provider(args: Namespace, config: RuntimeConfig) -> PlaceholderProvider:
    """Placeholder provider; --seed wins over the configured seed."""
    seed = getattr(args, "seed", None)
    if seed is None:
        seed = config.placeholder.seed
    return make_placeholder_provider(seed, config.placeholder.num_bytes)


def read_record_file(path: Path) -> MappingFieldSource:
    """Load a field -> raw value JSON object as a source."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Record file must hold a JSON object: {path}")
    values = {name: None if value is None else str(value) for name, value in data.items()}
    return MappingFieldSource(values)


def open_source(args: Namespace, config: RuntimeConfig) -> tuple[FieldValueSource, int | None]:
    """
    Resolve the value source named by --record or --rpc.

    Returns:
        (source, block timestamp or None for record files)
    """
    if getattr(args, "rpc", False):
        if not config.rpc.url:
            raise ValueError("No RPC URL configured (set BEACONROOT_RPC_URL or rpc.url)")
        rpc = JsonRpcClient(config.rpc.url, timeout=config.rpc.timeout)
        try:
            source = fetch_execution_source(rpc, getattr(args, "block", None) or config.rpc.block)
        finally:
            rpc.close()
        return source, source.timestamp
    if not getattr(args, "record", None):
        raise ValueError("Either --record or --rpc is required")
    return read_record_file(Path(args.record)), None


def derive(args: Namespace) -> tuple[FieldCatalog, DerivedRecord, int | None]:
    config = get_config(args)
    catalog = config.build_catalog()
    source, timestamp = open_source(args, config)
    derived = derive_record(source, catalog, make_provider(args, config))
    return catalog, derived, timestamp


def emit(data: dict[str, Any], as_json: bool) -> None:
    """Print a flat result as JSON or as key: value lines."""
    if as_json:
        print(json.dumps(data, indent=2))
        return
    for key, value in data.items():
        if isinstance(value, bool):
            value = str(value).lower()
        elif isinstance(value, (list, tuple)):
            value = ", ".join(str(v) for v in value) or "(none)"
        print(f"{key}: {value}")


# =============================================================================
# Commands
# =============================================================================

def catalog_cmd(args: Namespace) -> int:
    """List catalog fields with their leaf indices."""
    catalog = get_config(args).build_catalog()
    rows = [
        {"field": name, "index": catalog.index_of(name)}
        for name in catalog.field_names
    ]
    if args.json:
        print(json.dumps({
            "size": catalog.size,
            "depth": catalog.depth,
            "token_width": catalog.token_width,
            "fields": rows,
        }, indent=2))
    else:
        print(f"size: {catalog.size}  depth: {catalog.depth}  token_width: {catalog.token_width}")
        for row in rows:
            print(f"  {row['index']:>4}  {row['field']}")
    return EXIT_SUCCESS


def index_cmd(args: Namespace) -> int:
    """Print the leaf index of a field."""
    catalog = get_config(args).build_catalog()
    emit({"field": args.field, "index": catalog.index_of(args.field)}, args.json)
    return EXIT_SUCCESS


def root_cmd(args: Namespace) -> int:
    """Derive a record and print its root."""
    _, derived, timestamp = derive(args)
    result: dict[str, Any] = {
        "root": build_root(derived.record),
        "placeholder_fields": list(derived.placeholder_fields),
    }
    if timestamp is not None:
        result["timestamp"] = timestamp
    emit(result, args.json)
    return EXIT_SUCCESS


def proof_cmd(args: Namespace) -> int:
    """Derive a record and write the proof bundle for one field."""
    _, derived, timestamp = derive(args)
    proof = build_field_proof(args.field, derived.record, timestamp)
    payload = proof.model_dump_json(indent=2)

    if args.out:
        Path(args.out).write_text(payload + "\n", encoding="utf-8")
        logger.info(f"Wrote proof for {args.field} to {args.out}")
        if not args.json:
            print(f"Proof written to: {args.out}")
            print(f"root: {proof.root}")
            return EXIT_SUCCESS
    print(payload)
    return EXIT_SUCCESS


def load_proof(path: str) -> FieldProof:
    return FieldProof.model_validate_json(Path(path).read_text(encoding="utf-8"))


def verify_cmd(args: Namespace) -> int:
    """Verify a proof bundle against --root or the root it carries."""
    proof_path = Path(args.proof_path)
    if not proof_path.exists():
        print(f"Error: Proof not found: {proof_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    catalog = get_config(args).build_catalog()
    proof = load_proof(args.proof_path)
    check = verify_field_proof(proof, expected_root=args.root, catalog=catalog)

    emit({
        "field": proof.field_name,
        "index": proof.index,
        "ok": check.ok,
        "check": check.check_id,
        "message": check.message,
    }, args.json)

    if check.ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS
    logger.warning(f"Verification failed: {check.message}")
    return EXIT_VERIFICATION_FAILED
