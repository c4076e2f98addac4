"""
Schemas
File: canonical.py

Purpose: Deterministic JSON serialization for persisted commitments,
proof files and snapshot exports.

All outputs from this module are byte-identical across runs for equal inputs.
"""

import json
import math
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .errors import CanonicalizationException

# Canonical JSON separators - no whitespace
CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")


def canonicalize_value(value: Any, path: str = "") -> Any:
    """
    Recursively canonicalize a value for deterministic JSON serialization.

    Args:
        value: Any Python value to canonicalize.
        path: Current path for error reporting.

    Returns:
        A JSON-serializable canonical representation.

    Raises:
        CanonicalizationException: If the value cannot be canonicalized
            (e.g., NaN/Infinity floats or unsupported types).
    """
    if value is None or isinstance(value, (bool, int, str)):
        return value

    if isinstance(value, float):
        if not math.isfinite(value):
            raise CanonicalizationException(
                message=f"Non-finite float value encountered: {value}",
                details={"path": path, "value": str(value)},
            )
        return value

    if isinstance(value, Enum):
        return value.value

    if isinstance(value, BaseModel):
        dumped = value.model_dump(mode="json", by_alias=True, exclude_none=True)
        return canonicalize_value(dumped, path)

    if isinstance(value, dict):
        return {
            str(k): canonicalize_value(v, f"{path}.{k}" if path else str(k))
            for k, v in value.items()
            if v is not None
        }

    if isinstance(value, (list, tuple)):
        return [
            canonicalize_value(item, f"{path}[{i}]")
            for i, item in enumerate(value)
        ]

    if isinstance(value, bytes):
        return value.hex()

    raise CanonicalizationException(
        message=f"Cannot canonicalize value of type {type(value).__name__}",
        details={"path": path, "type": type(value).__name__},
    )


def dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to a canonical JSON string.

    Sorted keys, no extra whitespace, None fields excluded,
    enums as their values, bytes as hex.

    Example:
        >>> dumps_canonical({"b": 2, "a": 1})
        '{"a":1,"b":2}'
    """
    try:
        canonicalized = canonicalize_value(obj)
        return json.dumps(
            canonicalized,
            sort_keys=True,
            separators=CANONICAL_JSON_SEPARATORS,
            ensure_ascii=False,
        )
    except CanonicalizationException:
        raise
    except (TypeError, ValueError) as e:
        raise CanonicalizationException(
            message=f"Failed to serialize to canonical JSON: {e}",
            details={"type": type(obj).__name__, "error": str(e)},
        ) from e


def loads_canonical(json_str: str) -> Any:
    """Parse a canonical JSON string."""
    return json.loads(json_str)


__all__ = [
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "loads_canonical",
]
