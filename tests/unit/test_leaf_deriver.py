"""
Leaf Derivation Unit Tests
Tests for core/leaves/deriver.py and core/leaves/placeholders.py

Tests:
- pad/truncate to the token width
- empty real values are rejected
- absent values get placeholders from the injected provider
- seeded providers are reproducible
"""
import pytest

from core.crypto.hashing import sha256_hex
from core.leaves.deriver import (
    FieldValueSource,
    canonical_token,
    derive_record,
    derive_token,
    leaf_hash,
)
from core.leaves.placeholders import (
    PlaceholderProvider,
    RandomPlaceholderProvider,
    SeededPlaceholderProvider,
    make_placeholder_provider,
)
from core.schemas.catalog import DEFAULT_CATALOG
from core.schemas.errors import EmptyFieldValueException

from orchestrator.sources import MappingFieldSource


class FixedProvider:
    """Placeholder provider that records the fields it was asked for."""

    def __init__(self):
        self.calls = []

    def __call__(self, field_name, width):
        self.calls.append(field_name)
        return ("P" + field_name)[:width].ljust(width, "p")


class TestCanonicalToken:
    """Tests for canonical_token()."""

    def test_short_value_is_right_padded(self):
        assert canonical_token("0xab", 6) == "0xab  "

    def test_long_value_is_truncated(self):
        assert canonical_token("0x1234567890", 6) == "0x1234"

    def test_exact_width_unchanged(self):
        assert canonical_token("abcdef", 6) == "abcdef"

    def test_custom_filler(self):
        assert canonical_token("ab", 5, filler=".") == "ab..."

    def test_width_32_default_catalog(self):
        token = canonical_token("0x" + "f" * 64, DEFAULT_CATALOG.token_width)

        assert len(token) == 32
        assert token == "0x" + "f" * 30

    def test_empty_value_rejected(self):
        """An empty real value is ambiguous and must not be padded silently."""
        with pytest.raises(EmptyFieldValueException) as exc_info:
            canonical_token("", 32, field_name="Graffiti")

        assert exc_info.value.field_name == "Graffiti"


class TestLeafHash:
    def test_leaf_is_sha256_hex_of_token(self):
        token = canonical_token("hello", 32)

        assert leaf_hash(token) == sha256_hex(token.encode("utf-8"))


class TestDeriveToken:
    """Tests for derive_token()."""

    def test_real_value(self):
        source = MappingFieldSource({"Coinbase": "0xabc"})

        token, is_placeholder = derive_token("Coinbase", source, DEFAULT_CATALOG, FixedProvider())

        assert token == "0xabc".ljust(32)
        assert is_placeholder is False

    def test_absent_value_uses_provider(self):
        provider = FixedProvider()

        token, is_placeholder = derive_token("Slot", MappingFieldSource({}), DEFAULT_CATALOG, provider)

        assert is_placeholder is True
        assert provider.calls == ["Slot"]
        assert len(token) == 32


class TestDeriveRecord:
    """Tests for derive_record()."""

    def test_every_field_filled(self):
        derived = derive_record(MappingFieldSource({"Coinbase": "0xabc"}), DEFAULT_CATALOG, FixedProvider())

        assert len(derived.record.tokens) == DEFAULT_CATALOG.size
        assert all(len(t) == 32 for t in derived.record.tokens)

    def test_placeholder_fields_reported_in_catalog_order(self):
        values = {name: f"v-{name}" for name in DEFAULT_CATALOG.field_names}
        del values["Slot"]
        del values["ParentHash"]

        derived = derive_record(MappingFieldSource(values), DEFAULT_CATALOG, FixedProvider())

        assert derived.placeholder_fields == ("ParentHash", "Slot")

    def test_no_placeholders_when_complete(self):
        values = {name: f"v-{name}" for name in DEFAULT_CATALOG.field_names}

        derived = derive_record(MappingFieldSource(values), DEFAULT_CATALOG, FixedProvider())

        assert derived.placeholder_fields == ()

    def test_empty_value_aborts(self):
        with pytest.raises(EmptyFieldValueException):
            derive_record(MappingFieldSource({"Graffiti": ""}), DEFAULT_CATALOG, FixedProvider())

    def test_small_catalog_width(self, small_catalog):
        derived = derive_record(MappingFieldSource({"A": "x"}), small_catalog, FixedProvider())

        assert derived.record.value("A") == "x......."
        assert all(len(t) == 8 for t in derived.record.tokens)

    def test_mapping_source_satisfies_protocol(self):
        assert isinstance(MappingFieldSource({}), FieldValueSource)


class TestPlaceholderProviders:
    """Tests for placeholder providers."""

    def test_random_provider_width_and_hex(self):
        token = RandomPlaceholderProvider()("Slot", 32)

        assert len(token) == 32
        assert all(c in "0123456789abcdef" for c in token)

    def test_seeded_provider_reproducible(self):
        a = SeededPlaceholderProvider(42)
        b = SeededPlaceholderProvider(42)

        assert [a("x", 32) for _ in range(3)] == [b("x", 32) for _ in range(3)]

    def test_seeded_provider_sequence_varies(self):
        provider = SeededPlaceholderProvider(42)

        assert provider("x", 32) != provider("x", 32)

    def test_different_seeds_differ(self):
        assert SeededPlaceholderProvider(1)("x", 32) != SeededPlaceholderProvider(2)("x", 32)

    def test_seeded_records_have_equal_roots(self):
        """Seeded placeholders make whole records reproducible."""
        from core.merkle.merkle_tree import build_root

        source = MappingFieldSource({"Coinbase": "0xabc"})
        first = derive_record(source, DEFAULT_CATALOG, SeededPlaceholderProvider(3))
        second = derive_record(source, DEFAULT_CATALOG, SeededPlaceholderProvider(3))

        assert build_root(first.record) == build_root(second.record)

    def test_num_bytes_must_be_positive(self):
        with pytest.raises(ValueError):
            RandomPlaceholderProvider(num_bytes=0)
        with pytest.raises(ValueError):
            SeededPlaceholderProvider(1, num_bytes=0)

    def test_make_placeholder_provider(self):
        assert isinstance(make_placeholder_provider(), RandomPlaceholderProvider)
        assert isinstance(make_placeholder_provider(seed=5), SeededPlaceholderProvider)
        assert isinstance(make_placeholder_provider(seed=5), PlaceholderProvider)
