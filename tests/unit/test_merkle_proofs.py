"""
Merkle Proof Unit Tests
Tests for core/merkle/merkle_proofs.py

Tests:
1. Proof generation - length log2(N), leaf sibling first
2. Completeness - every field's proof verifies against the root
3. Soundness - wrong value, wrong index, corrupted proof, wrong root rejected
4. Structural rejections - out-of-range index, wrong proof length
5. End-to-end scenario over the 16-field reference catalog
"""
import pytest

from core.crypto.hashing import sha256_hex
from core.merkle.merkle_proofs import (
    build_field_proof,
    check_proof,
    compute_root_from_proof,
    generate_proof,
    index_of,
    parent_index,
    sibling_index,
    verify_field_proof,
    verify_locally,
)
from core.merkle.merkle_tree import build_merkle_tree, build_root
from core.schemas.catalog import DEFAULT_CATALOG
from core.schemas.errors import FieldNotFoundException

from fixtures.common import make_record


class TestIndexArithmetic:
    def test_index_of(self):
        assert index_of("ParentHash") == 16
        assert index_of("Graffiti") == 30

    def test_index_of_unknown_raises(self):
        """There is no sentinel index for unknown fields."""
        with pytest.raises(FieldNotFoundException):
            index_of("Nope")

    @pytest.mark.parametrize("index,sibling", [(16, 17), (17, 16), (2, 3), (31, 30)])
    def test_sibling_index(self, index, sibling):
        assert sibling_index(index) == sibling

    @pytest.mark.parametrize("index,parent", [(16, 8), (17, 8), (3, 1), (2, 1)])
    def test_parent_index(self, index, parent):
        assert parent_index(index) == parent


class TestGenerateProof:
    """Tests for generate_proof()."""

    def test_proof_length_is_depth(self, record):
        for name in DEFAULT_CATALOG.field_names:
            assert len(generate_proof(name, record)) == 4

    def test_first_entry_is_leaf_sibling(self, record):
        tree = build_merkle_tree(record)

        proof = generate_proof("Coinbase", tree)

        assert proof[0] == tree.node(18)

    def test_siblings_walk_up(self, record):
        """Coinbase (19): siblings at 18, 8, 5, 3."""
        tree = build_merkle_tree(record)

        assert generate_proof("Coinbase", tree) == [
            tree.node(18), tree.node(8), tree.node(5), tree.node(3),
        ]

    def test_record_and_tree_give_same_proof(self, record):
        tree = build_merkle_tree(record)

        assert generate_proof("Slot", record) == generate_proof("Slot", tree)

    def test_unknown_field_raises(self, record):
        with pytest.raises(FieldNotFoundException):
            generate_proof("Nope", record)

    def test_small_catalog_proof(self, small_catalog):
        from core.schemas.record import Record

        record = Record(catalog=small_catalog, tokens=("aaaaaaaa", "bbbbbbbb", "cccccccc", "dddddddd"))
        proof = generate_proof("C", record)

        assert proof == [sha256_hex("dddddddd"), sha256_hex(sha256_hex("aaaaaaaa") + sha256_hex("bbbbbbbb"))]


class TestVerifyLocally:
    """Completeness and soundness of the reference verifier."""

    @pytest.mark.parametrize("field_name", list(DEFAULT_CATALOG.field_names))
    def test_every_field_verifies(self, record, field_name):
        root = build_root(record)
        proof = generate_proof(field_name, record)

        assert verify_locally(record.value(field_name), index_of(field_name), proof, root)

    def test_wrong_value_rejected(self, record):
        root = build_root(record)
        proof = generate_proof("Coinbase", record)

        assert not verify_locally("x" * 32, index_of("Coinbase"), proof, root)

    def test_other_fields_value_rejected(self, record):
        """A true token of another field does not verify at this index."""
        root = build_root(record)
        proof = generate_proof("Coinbase", record)

        assert not verify_locally(record.value("Slot"), index_of("Coinbase"), proof, root)

    def test_wrong_index_rejected(self, record):
        root = build_root(record)
        proof = generate_proof("Coinbase", record)

        assert not verify_locally(record.value("Coinbase"), index_of("StateRoot"), proof, root)

    def test_wrong_root_rejected(self, record):
        proof = generate_proof("Coinbase", record)
        other_root = build_root(record.replace("Slot", "s" * 32))

        assert not verify_locally(record.value("Coinbase"), index_of("Coinbase"), proof, other_root)

    @pytest.mark.parametrize("position", range(4))
    def test_corrupted_sibling_rejected(self, record, position):
        root = build_root(record)
        proof = generate_proof("Coinbase", record)
        proof[position] = sha256_hex("corrupt")

        assert not verify_locally(record.value("Coinbase"), index_of("Coinbase"), proof, root)

    @pytest.mark.parametrize("index", [0, 1, 15, 32, 100, -3])
    def test_out_of_range_index_rejected(self, record, index):
        root = build_root(record)
        proof = generate_proof("Coinbase", record)

        assert not verify_locally(record.value("Coinbase"), index, proof, root)

    def test_short_proof_rejected(self, record):
        root = build_root(record)
        proof = generate_proof("Coinbase", record)

        assert not verify_locally(record.value("Coinbase"), index_of("Coinbase"), proof[:-1], root)

    def test_long_proof_rejected(self, record):
        root = build_root(record)
        proof = generate_proof("Coinbase", record) + [root]

        assert not verify_locally(record.value("Coinbase"), index_of("Coinbase"), proof, root)

    def test_compute_root_walk_ends_at_one(self, record):
        proof = generate_proof("Slot", record)

        candidate, final_index = compute_root_from_proof(record.value("Slot"), index_of("Slot"), proof)

        assert final_index == 1
        assert candidate == build_root(record)


class TestLeafLocality:
    """Changing one field only touches proof entries on its path to the root."""

    @staticmethod
    def changed_positions(before, after):
        return [level for level, (a, b) in enumerate(zip(before, after)) if a != b]

    def test_neighbour_changes_only_at_shared_node(self, record):
        changed = record.replace("Coinbase", "c" * 32)

        before = generate_proof("ParentHash", record)
        after = generate_proof("ParentHash", changed)

        # Coinbase (19) sits under node 9, ParentHash's second sibling
        assert self.changed_positions(before, after) == [1]

    def test_own_proof_unchanged(self, record):
        changed = record.replace("Coinbase", "c" * 32)

        assert generate_proof("Coinbase", changed) == generate_proof("Coinbase", record)

    def test_other_half_changes_only_at_last_entry(self, record):
        changed = record.replace("Coinbase", "c" * 32)

        for name in DEFAULT_CATALOG.field_names[8:]:
            before = generate_proof(name, record)
            after = generate_proof(name, changed)
            assert self.changed_positions(before, after) == [3], name

    @pytest.mark.parametrize("changed_field", ["ParentHash", "Coinbase", "Deposits", "Graffiti"])
    def test_every_proof_changes_exactly_on_ancestor_siblings(self, record, changed_field):
        changed = record.replace(changed_field, "z" * 32)
        leaf = index_of(changed_field)

        for name in DEFAULT_CATALOG.field_names:
            index = index_of(name)
            expected = [
                level for level in range(DEFAULT_CATALOG.depth)
                if name != changed_field and (index >> level) ^ 1 == leaf >> level
            ]
            assert self.changed_positions(
                generate_proof(name, record), generate_proof(name, changed)
            ) == expected, name


class TestCheckProof:
    """check_proof() explains rejections."""

    def test_passed_check_details(self, record):
        root = build_root(record)
        proof = generate_proof("Coinbase", record)

        check = check_proof(record.value("Coinbase"), 19, proof, root)

        assert check.ok
        assert check.details["field_name"] == "Coinbase"
        assert check.details["computed_root"] == root

    def test_index_failure(self, record):
        check = check_proof("x" * 32, 5, [], build_root(record))

        assert not check.ok
        assert check.check_id == "proof_index"

    def test_length_failure(self, record):
        check = check_proof(record.value("Coinbase"), 19, [], build_root(record))

        assert check.check_id == "proof_length"
        assert check.details["field_name"] == "Coinbase"

    def test_root_failure(self, record):
        proof = generate_proof("Coinbase", record)

        check = check_proof("x" * 32, 19, proof, build_root(record))

        assert check.check_id == "root_match"
        assert not check.ok


class TestFieldProofBundle:
    """Tests for build_field_proof() / verify_field_proof()."""

    def test_bundle_contents(self, record):
        proof = build_field_proof("Coinbase", record, timestamp=1_700_000_000)

        assert proof.field_name == "Coinbase"
        assert proof.index == 19
        assert proof.value == record.value("Coinbase")
        assert proof.proof_length == 4
        assert proof.root == build_root(record)
        assert proof.timestamp == 1_700_000_000

    def test_bundle_verifies(self, record):
        assert verify_field_proof(build_field_proof("Slot", record)).ok

    def test_expected_root_overrides_carried_root(self, record):
        proof = build_field_proof("Slot", record)
        other_root = build_root(record.replace("Slot", "s" * 32))

        assert not verify_field_proof(proof, expected_root=other_root).ok

    def test_mismatched_field_name_rejected(self, record):
        proof = build_field_proof("Slot", record).model_copy(update={"field_name": "Graffiti"})

        check = verify_field_proof(proof)

        assert check.check_id == "field_index"

    def test_unknown_field_name_rejected(self, record):
        proof = build_field_proof("Slot", record).model_copy(update={"field_name": "Nope"})

        assert verify_field_proof(proof).check_id == "field_not_found"

    def test_missing_root(self, record):
        proof = build_field_proof("Slot", record).model_copy(update={"root": None})

        assert verify_field_proof(proof).check_id == "root_missing"

    def test_tampered_value_rejected(self, record):
        proof = build_field_proof("Slot", record).with_value("t" * 32)

        assert not verify_field_proof(proof).ok


class TestReferenceScenario:
    """End-to-end scenario over the 16-field reference catalog."""

    def test_reference_scenario(self):
        record = make_record()

        # Root is stable across independent builds
        root = build_root(record)
        assert build_root(make_record()) == root

        # Field at catalog position 3
        field_name = DEFAULT_CATALOG.field_names[3]
        index = index_of(field_name)
        proof = generate_proof(field_name, record)
        value = record.value(field_name)

        assert index == 19
        assert len(proof) == 4
        assert verify_locally(value, index, proof, root)

        # Swap the first two siblings
        swapped = [proof[1], proof[0]] + proof[2:]
        assert not verify_locally(value, index, swapped, root)

        # Unrelated token
        assert not verify_locally(sha256_hex("unrelated")[:32], index, proof, root)

        # Unknown field
        with pytest.raises(FieldNotFoundException):
            index_of("NotInCatalog")
