"""
Leaf Derivation

Raw field value -> fixed-width token -> leaf hash.

Usage:
    from core.leaves import derive_record, SeededPlaceholderProvider

    derived = derive_record(source, catalog, SeededPlaceholderProvider(7))
    record = derived.record
"""
from .deriver import (
    DerivedRecord,
    FieldValueSource,
    canonical_token,
    derive_record,
    derive_token,
    leaf_hash,
)
from .placeholders import (
    PLACEHOLDER_NUM_BYTES,
    PlaceholderProvider,
    RandomPlaceholderProvider,
    SeededPlaceholderProvider,
    make_placeholder_provider,
)

__all__ = [
    "DerivedRecord",
    "FieldValueSource",
    "canonical_token",
    "derive_record",
    "derive_token",
    "leaf_hash",
    "PLACEHOLDER_NUM_BYTES",
    "PlaceholderProvider",
    "RandomPlaceholderProvider",
    "SeededPlaceholderProvider",
    "make_placeholder_provider",
]
