"""
API Smoke Tests

Tests for the FastAPI endpoints:
1. GET /health returns ok
2. GET /catalog and /index/{field_name}
3. POST /root, /proof and /verify are consistent with each other
4. /commitments: commit, look up, verify, ordering conflicts
5. Errors use the ErrorResponse envelope
"""

import pytest
from fastapi.testclient import TestClient

from api.app import app
from api.deps import get_catalog, get_store, reset_runtime, set_store
from orchestrator.commitment_store import CommitmentStore

from fixtures.common import make_values


client = TestClient(app)


@pytest.fixture(autouse=True)
def fresh_store():
    """Give each test its own in-memory commitment store."""
    store = CommitmentStore()
    set_store(store)
    yield store
    reset_runtime()


def make_proof(field_name="Coinbase", values=None, **extra):
    response = client.post(
        "/proof",
        json={"values": values or make_values(), "field_name": field_name, **extra},
    )
    assert response.status_code == 200, response.text
    return response.json()["proof"]


# =============================================================================
# Health and catalog
# =============================================================================

class TestHealth:
    def test_health(self):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["ok"] is True
        assert response.json()["service"] == "beaconroot-api"

    def test_root_path(self):
        assert client.get("/").json()["ok"] is True


class TestCatalog:
    def test_catalog(self):
        data = client.get("/catalog").json()

        assert data["size"] == 16
        assert data["depth"] == 4
        assert data["token_width"] == 32
        assert data["fields"][0] == {"field_name": "ParentHash", "index": 16}

    def test_index(self):
        response = client.get("/index/Coinbase")

        assert response.status_code == 200
        assert response.json() == {"field_name": "Coinbase", "index": 19}

    def test_unknown_field_is_404(self):
        response = client.get("/index/Nope")

        assert response.status_code == 404
        body = response.json()
        assert body["ok"] is False
        assert body["error"]["code"] == "FIELD_NOT_FOUND"


# =============================================================================
# Stateless root / proof / verify
# =============================================================================

class TestRootAndProof:
    def test_root_is_deterministic(self):
        payload = {"values": make_values()}

        first = client.post("/root", json=payload).json()
        second = client.post("/root", json=payload).json()

        assert first["root"] == second["root"]
        assert len(first["root"]) == 64
        assert first["placeholder_fields"] == []

    def test_seeded_placeholders(self):
        payload = {"values": {"Coinbase": "0xabc"}, "seed": 5}

        first = client.post("/root", json=payload).json()
        second = client.post("/root", json=payload).json()

        assert first["root"] == second["root"]
        assert "Slot" in first["placeholder_fields"]
        assert "Coinbase" not in first["placeholder_fields"]

    def test_unknown_field_is_400(self):
        response = client.post("/root", json={"values": {"Nope": "x"}})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"
        assert response.json()["error"]["details"]["fields"] == ["Nope"]

    def test_empty_value_is_400(self):
        response = client.post("/root", json={"values": {"Coinbase": ""}})

        assert response.status_code == 400
        assert response.json()["ok"] is False

    def test_extra_request_field_rejected(self):
        response = client.post("/root", json={"values": {}, "bogus": 1})

        assert response.status_code == 422

    def test_proof_matches_root(self):
        values = make_values()
        root = client.post("/root", json={"values": values}).json()["root"]

        proof = make_proof("Coinbase", values, timestamp=100)

        assert proof["root"] == root
        assert proof["index"] == 19
        assert proof["timestamp"] == 100
        assert len(proof["siblings"]) == 4

    def test_proof_flags_placeholder(self):
        response = client.post(
            "/proof",
            json={"values": {"Coinbase": "0xabc"}, "field_name": "Slot", "seed": 1},
        )

        assert response.json()["placeholder"] is True


class TestVerify:
    def test_valid_proof(self):
        proof = make_proof()

        response = client.post("/verify", json={
            "value": proof["value"],
            "index": proof["index"],
            "proof": proof["siblings"],
            "expected_root": proof["root"],
        })

        assert response.status_code == 200
        assert response.json()["ok"] is True
        assert response.json()["check_id"] == "root_match"

    def test_swapped_proof_rejected(self):
        proof = make_proof()
        siblings = list(proof["siblings"])
        siblings[0], siblings[1] = siblings[1], siblings[0]

        response = client.post("/verify", json={
            "value": proof["value"],
            "index": proof["index"],
            "proof": siblings,
            "expected_root": proof["root"],
        })

        assert response.status_code == 200
        assert response.json()["ok"] is False

    def test_index_out_of_range_rejected(self):
        proof = make_proof()

        response = client.post("/verify", json={
            "value": proof["value"],
            "index": 3,
            "proof": proof["siblings"],
            "expected_root": proof["root"],
        })

        assert response.json()["ok"] is False
        assert response.json()["check_id"] == "proof_index"


# =============================================================================
# Commitments
# =============================================================================

class TestCommitments:
    def test_commit_and_get(self, fresh_store):
        root = make_proof()["root"]

        response = client.post("/commitments", json={"timestamp": 100, "root": root})

        assert response.status_code == 201
        assert client.get("/commitments/100").json() == {"timestamp": 100, "root": root}
        assert fresh_store.get_root(100) == root

    def test_list(self):
        root = make_proof()["root"]
        client.post("/commitments", json={"timestamp": 100, "root": root})
        client.post("/commitments", json={"timestamp": 112, "root": root})

        data = client.get("/commitments").json()

        assert [c["timestamp"] for c in data] == [100, 112]

    def test_stale_timestamp_is_409(self):
        root = make_proof()["root"]
        client.post("/commitments", json={"timestamp": 100, "root": root})

        response = client.post("/commitments", json={"timestamp": 100, "root": root})

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "TIMESTAMP_NOT_INCREASING"

    def test_malformed_root_is_400(self):
        response = client.post("/commitments", json={"timestamp": 100, "root": "xyz"})

        assert response.status_code == 400

    def test_unknown_timestamp_is_404(self):
        response = client.get("/commitments/999")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "COMMITMENT_NOT_FOUND"

    def test_verify_against_commitment(self):
        proof = make_proof()
        client.post("/commitments", json={"timestamp": 100, "root": proof["root"]})

        response = client.post("/commitments/100/verify", json={
            "value": proof["value"],
            "proof": proof["siblings"],
            "index": proof["index"],
        })

        assert response.status_code == 200
        assert response.json()["ok"] is True

    def test_verify_wrong_value(self):
        proof = make_proof()
        client.post("/commitments", json={"timestamp": 100, "root": proof["root"]})

        response = client.post("/commitments/100/verify", json={
            "value": "x" * 32,
            "proof": proof["siblings"],
            "index": proof["index"],
        })

        assert response.json()["ok"] is False

    def test_verify_unknown_timestamp_is_rejection(self):
        proof = make_proof()

        response = client.post("/commitments/555/verify", json={
            "value": proof["value"],
            "proof": proof["siblings"],
            "index": proof["index"],
        })

        assert response.status_code == 200
        assert response.json()["ok"] is False
        assert response.json()["check_id"] == "commitment_found"


# =============================================================================
# Shared runtime objects
# =============================================================================

class TestRuntimeDeps:
    def test_catalog_loaded_once(self, monkeypatch):
        reset_runtime()
        catalog = get_catalog()
        monkeypatch.setenv("BEACONROOT_TOKEN_WIDTH", "16")

        assert get_catalog() is catalog
        assert client.get("/catalog").json()["token_width"] == 32

    def test_store_uses_route_catalog(self, monkeypatch):
        reset_runtime()
        monkeypatch.setenv("BEACONROOT_TOKEN_WIDTH", "16")

        assert get_store().catalog is get_catalog()
        assert get_catalog().token_width == 16

    def test_reset_reloads_config(self, monkeypatch):
        reset_runtime()
        get_catalog()
        monkeypatch.setenv("BEACONROOT_TOKEN_WIDTH", "16")

        reset_runtime()

        assert client.get("/catalog").json()["token_width"] == 16
