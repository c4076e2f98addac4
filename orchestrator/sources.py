"""
Field Value Sources

Adapters that supply raw field values to the leaf deriver.

- MappingFieldSource: static mapping, e.g. a record file
- ExecutionHeaderSource: an execution-layer block header as returned by
  eth_getBlockByNumber, addressed by header field names

Fields a source does not know return None; the deriver then substitutes a
placeholder (this is how consensus-layer fields are filled off-chain).
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Mapping
from typing import Any

from core.http.rpc import JsonRpcClient
from core.leaves.deriver import FieldValueSource


logger = logging.getLogger(__name__)


# Header field name -> JSON-RPC block key
HEADER_FIELD_KEYS: dict[str, str] = {
    "ParentHash": "parentHash",
    "UncleHash": "sha3Uncles",
    "Coinbase": "miner",
    "Root": "stateRoot",
    "TxHash": "transactionsRoot",
    "ReceiptHash": "receiptsRoot",
    "Bloom": "logsBloom",
    "Difficulty": "difficulty",
    "Number": "number",
    "GasLimit": "gasLimit",
    "GasUsed": "gasUsed",
    "Time": "timestamp",
    "Extra": "extraData",
    "MixDigest": "mixHash",
    "Nonce": "nonce",
    "BaseFee": "baseFeePerGas",
}

# Header fields carried as hex quantities; rendered as decimal strings
QUANTITY_FIELDS = frozenset({"Difficulty", "Number", "GasLimit", "GasUsed", "Time", "BaseFee"})


class MappingFieldSource:
    """Source backed by a plain mapping. Missing keys and None are absent."""

    def __init__(self, values: Mapping[str, str | None]) -> None:
        self._values = dict(values)

    def get(self, field_name: str) -> str | None:
        return self._values.get(field_name)


class ExecutionHeaderSource:
    """
    Source over an execution-layer block header.

    Only header fields listed in HEADER_FIELD_KEYS resolve; everything else
    (consensus-layer fields, or names the header spells differently) is absent.
    """

    def __init__(self, header: Mapping[str, Any]) -> None:
        self._header = dict(header)

    def get(self, field_name: str) -> str | None:
        key = HEADER_FIELD_KEYS.get(field_name)
        if key is None:
            return None
        raw = self._header.get(key)
        if raw is None:
            return None
        if field_name in QUANTITY_FIELDS:
            return str(_parse_quantity(raw))
        return str(raw)

    @property
    def timestamp(self) -> int:
        """Block time in seconds; the commitment key for this header."""
        return _parse_quantity(self._header["timestamp"])

    @property
    def number(self) -> int | None:
        raw = self._header.get("number")
        return None if raw is None else _parse_quantity(raw)


def _parse_quantity(raw: Any) -> int:
    if isinstance(raw, int):
        return raw
    return int(str(raw), 16)


def fetch_execution_source(
    rpc: JsonRpcClient,
    block: str | int = "latest",
) -> ExecutionHeaderSource:
    """Fetch a block header and wrap it as a field source."""
    header = rpc.get_block(block)
    source = ExecutionHeaderSource(header)
    logger.info(f"Fetched execution header number={source.number} time={source.timestamp}")
    return source


def synthetic_block(number: int, timestamp: int, seed: int = 0) -> dict[str, Any]:
    """
    Deterministic stand-in for an eth_getBlockByNumber result.

    Used by the demo and tests when no node is available.
    """

    def digest(label: str, n: int = number) -> str:
        return "0x" + hashlib.sha256(f"{seed}:{label}:{n}".encode("utf-8")).hexdigest()

    return {
        "number": hex(number),
        "parentHash": digest("block", number - 1),
        "sha3Uncles": digest("uncles"),
        "miner": "0x" + digest("miner")[2:42],
        "stateRoot": digest("state"),
        "transactionsRoot": digest("transactions"),
        "receiptsRoot": digest("receipts"),
        "gasLimit": hex(30_000_000),
        "gasUsed": hex(21_000 * (number % 50 + 1)),
        "timestamp": hex(timestamp),
        "extraData": "0x",
        "mixHash": digest("mix"),
        "nonce": "0x0000000000000000",
        "baseFeePerGas": hex(1_000_000_000),
    }


__all__ = [
    "FieldValueSource",
    "HEADER_FIELD_KEYS",
    "QUANTITY_FIELDS",
    "MappingFieldSource",
    "ExecutionHeaderSource",
    "fetch_execution_source",
    "synthetic_block",
]
