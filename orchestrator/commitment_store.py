"""
Commitment Store

Timestamp -> root registry standing in for the on-chain pair of contracts:
one stores a root per timestamp, the other verifies (value, proof, index)
against the root stored for a timestamp.

Invariants:
- Timestamps strictly increase across successive commitments
- Roots are 64-character lowercase hex digests
- An unknown timestamp verifies as False, never raises
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Sequence

from core.crypto.hashing import is_hex_digest
from core.merkle.merkle_proofs import check_proof
from core.schemas.canonical import dumps_canonical, loads_canonical
from core.schemas.catalog import DEFAULT_CATALOG, FieldCatalog
from core.schemas.errors import (
    SchemaValidationException,
    TimestampOrderException,
)
from core.schemas.verification import CheckResult


logger = logging.getLogger(__name__)

STORE_FORMAT_VERSION = 1


class CommitmentStore:
    """
    Append-only timestamp -> root mapping with optional JSON persistence.

    Usage:
        store = CommitmentStore(path="commitments.json")
        store.set_root(1700000000, root)
        store.verify(1700000000, value, proof, index)
    """

    def __init__(
        self,
        path: str | Path | None = None,
        catalog: FieldCatalog = DEFAULT_CATALOG,
    ) -> None:
        self.path = Path(path) if path else None
        self.catalog = catalog
        self._roots: dict[int, str] = {}
        self._lock = threading.Lock()
        if self.path is not None and self.path.exists():
            self._load()

    # ------------------------------------------------------------------
    # Commitments
    # ------------------------------------------------------------------

    def set_root(self, timestamp: int, root: str) -> None:
        """
        Record the root for a timestamp.

        Raises:
            TimestampOrderException: If timestamp is not greater than the latest
            SchemaValidationException: If root is not a hex SHA-256 digest
        """
        if not is_hex_digest(root):
            raise SchemaValidationException(
                f"Root must be a 64-character lowercase hex digest, got {root!r}",
                field_path="root",
            )
        if timestamp < 0:
            raise SchemaValidationException(
                f"Timestamp must be non-negative, got {timestamp}",
                field_path="timestamp",
            )
        with self._lock:
            latest = self._latest_timestamp()
            if latest is not None and timestamp <= latest:
                raise TimestampOrderException(timestamp, latest)
            self._roots[timestamp] = root
            if self.path is not None:
                self._save()
        logger.info(f"Timestamp {timestamp} -> root {root}")

    def get_root(self, timestamp: int) -> str | None:
        """Root stored for a timestamp, or None."""
        return self._roots.get(timestamp)

    def timestamps(self) -> list[int]:
        """All committed timestamps, ascending."""
        return list(self._roots)

    def latest(self) -> tuple[int, str] | None:
        """Most recent (timestamp, root), or None when empty."""
        latest = self._latest_timestamp()
        if latest is None:
            return None
        return latest, self._roots[latest]

    def __len__(self) -> int:
        return len(self._roots)

    def __contains__(self, timestamp: object) -> bool:
        return timestamp in self._roots

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    def check(
        self,
        timestamp: int,
        value: str,
        proof: Sequence[str],
        index: int,
    ) -> CheckResult:
        """Verify against the stored root and explain the outcome."""
        root = self.get_root(timestamp)
        if root is None:
            result = CheckResult.failed(
                "commitment_found",
                f"No root committed for timestamp {timestamp}",
                {"timestamp": timestamp, "index": index},
            )
        else:
            result = check_proof(value, index, proof, root, self.catalog)
            result.details["timestamp"] = timestamp
        if not result.ok:
            logger.warning(
                f"Verification rejected: field={result.details.get('field_name')} "
                f"index={index} timestamp={timestamp} reason={result.check_id}"
            )
        return result

    def verify(
        self,
        timestamp: int,
        value: str,
        proof: Sequence[str],
        index: int,
    ) -> bool:
        """
        External-verifier call shape: verify(timestamp, value, proof, index).

        Returns:
            True iff a root exists for timestamp and the proof rebuilds it
        """
        return self.check(timestamp, value, proof, index).ok

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _latest_timestamp(self) -> int | None:
        if not self._roots:
            return None
        return next(reversed(self._roots))

    def _save(self) -> None:
        payload = {
            "format_version": STORE_FORMAT_VERSION,
            "catalog_size": self.catalog.size,
            "commitments": [
                {"timestamp": ts, "root": root} for ts, root in self._roots.items()
            ],
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(dumps_canonical(payload), encoding="utf-8")

    def _load(self) -> None:
        data = loads_canonical(self.path.read_text(encoding="utf-8"))
        if data.get("format_version") != STORE_FORMAT_VERSION:
            raise SchemaValidationException(
                f"Store {self.path} has format version {data.get('format_version')!r}, "
                f"expected {STORE_FORMAT_VERSION}",
                field_path="format_version",
            )
        if data.get("catalog_size") not in (None, self.catalog.size):
            raise SchemaValidationException(
                f"Store {self.path} was written for a catalog of "
                f"{data['catalog_size']} fields, not {self.catalog.size}",
                field_path="catalog_size",
            )
        latest: int | None = None
        for entry in data.get("commitments", []):
            timestamp = int(entry["timestamp"])
            root = entry.get("root")
            if not isinstance(root, str) or not is_hex_digest(root):
                raise SchemaValidationException(
                    f"Store {self.path} holds an invalid root for timestamp {timestamp}",
                    field_path="root",
                    details={"timestamp": timestamp},
                )
            if latest is not None and timestamp <= latest:
                raise TimestampOrderException(timestamp, latest)
            self._roots[timestamp] = root
            latest = timestamp
        logger.debug(f"Loaded {len(self._roots)} commitments from {self.path}")


__all__ = ["CommitmentStore", "STORE_FORMAT_VERSION"]
