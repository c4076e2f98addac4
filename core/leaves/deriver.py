"""
Leaf Derivation
Turns raw field values into fixed-width canonical tokens and tokens into
leaf hashes.

Rules:
1. Real value: right-pad with the catalog filler to at least the token
   width, then truncate to exactly the width.
2. Absent value (source returns None): ask the placeholder provider.
3. Empty real value: ambiguous, raises EmptyFieldValueException.
4. Leaf hash: hex(sha256(utf8(token))).

Widths are measured in characters.
"""
from __future__ import annotations

import logging
from typing import NamedTuple, Protocol, runtime_checkable

from core.crypto.hashing import sha256_hex
from core.leaves.placeholders import PlaceholderProvider, RandomPlaceholderProvider
from core.schemas.catalog import DEFAULT_CATALOG, DEFAULT_FILLER, FieldCatalog
from core.schemas.errors import EmptyFieldValueException
from core.schemas.record import Record


logger = logging.getLogger(__name__)


@runtime_checkable
class FieldValueSource(Protocol):
    """
    Supplies raw values by field name.

    Returns None when the source has no value for the field.
    """

    def get(self, field_name: str) -> str | None:
        ...


class DerivedRecord(NamedTuple):
    """A derived record and the fields that received placeholders."""
    record: Record
    placeholder_fields: tuple[str, ...]


def canonical_token(
    value: str,
    width: int,
    filler: str = DEFAULT_FILLER,
    field_name: str = "",
) -> str:
    """
    Normalize a real source value to exactly width characters.

    Example:
        >>> canonical_token("0xab", 6)
        '0xab  '
        >>> canonical_token("0x1234567890", 6)
        '0x1234'

    Raises:
        EmptyFieldValueException: If value is empty
    """
    if value == "":
        raise EmptyFieldValueException(field_name)
    return (value + filler * width)[:width]


def leaf_hash(token: str) -> str:
    """Hash a canonical token into a leaf: hex(sha256(token))."""
    return sha256_hex(token)


def derive_token(
    field_name: str,
    source: FieldValueSource,
    catalog: FieldCatalog = DEFAULT_CATALOG,
    placeholders: PlaceholderProvider | None = None,
) -> tuple[str, bool]:
    """
    Produce the canonical token for one field.

    Returns:
        (token, is_placeholder)
    """
    raw = source.get(field_name)
    if raw is None:
        provider = placeholders or RandomPlaceholderProvider()
        logger.debug(f"No source value for {field_name}, using placeholder")
        return provider(field_name, catalog.token_width), True
    return canonical_token(raw, catalog.token_width, catalog.filler, field_name), False


def derive_record(
    source: FieldValueSource,
    catalog: FieldCatalog = DEFAULT_CATALOG,
    placeholders: PlaceholderProvider | None = None,
) -> DerivedRecord:
    """
    Derive a complete record for the catalog from a value source.

    Every catalog field gets exactly one token, either from the source or
    from the placeholder provider.
    """
    provider = placeholders or RandomPlaceholderProvider()
    values: dict[str, str] = {}
    synthetic: list[str] = []
    for name in catalog.field_names:
        token, is_placeholder = derive_token(name, source, catalog, provider)
        values[name] = token
        if is_placeholder:
            synthetic.append(name)
    record = Record.from_values(values, catalog=catalog)
    return DerivedRecord(record=record, placeholder_fields=tuple(synthetic))


__all__ = [
    "FieldValueSource",
    "DerivedRecord",
    "canonical_token",
    "leaf_hash",
    "derive_token",
    "derive_record",
]
