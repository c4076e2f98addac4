"""
Merkle Routes

Stateless root, proof and verification endpoints. Nothing here touches
the commitment store.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.deps import get_catalog, get_placeholder_provider
from api.errors import InvalidRequestError
from api.models.requests import ProofRequest, RootRequest, VerifyRequest
from api.models.responses import ProofResponse, RootResponse, VerifyResponse
from core.leaves.deriver import DerivedRecord, derive_record
from core.merkle.merkle_proofs import build_field_proof, check_proof
from core.merkle.merkle_tree import build_root
from orchestrator.sources import MappingFieldSource


logger = logging.getLogger(__name__)

router = APIRouter(tags=["merkle"])


def derive_from_request(request: RootRequest) -> DerivedRecord:
    """Derive a record from request values; unknown field names are rejected."""
    catalog = get_catalog()
    unknown = [name for name in request.values if not catalog.contains(name)]
    if unknown:
        raise InvalidRequestError(
            f"Unknown fields: {', '.join(unknown)}",
            details={"fields": unknown},
        )
    return derive_record(
        MappingFieldSource(request.values),
        catalog,
        get_placeholder_provider(request.seed),
    )


@router.post("/root", response_model=RootResponse)
async def compute_root(request: RootRequest) -> RootResponse:
    derived = derive_from_request(request)
    return RootResponse(
        root=build_root(derived.record),
        placeholder_fields=list(derived.placeholder_fields),
    )


@router.post("/proof", response_model=ProofResponse)
async def build_proof(request: ProofRequest) -> ProofResponse:
    """
    Derive a record and return the proof bundle for one field.

    The bundle carries the root of the record it was built from.
    """
    derived = derive_from_request(request)
    proof = build_field_proof(request.field_name, derived.record, request.timestamp)
    return ProofResponse(
        proof=proof,
        placeholder=request.field_name in derived.placeholder_fields,
    )


@router.post("/verify", response_model=VerifyResponse)
async def verify_proof(request: VerifyRequest) -> VerifyResponse:
    """Reference verification; a rejected proof is ok=false with status 200."""
    check = check_proof(
        request.value,
        request.index,
        request.proof,
        request.expected_root,
        get_catalog(),
    )
    if not check.ok:
        logger.info(f"Proof rejected at index {request.index}: {check.check_id}")
    return VerifyResponse(
        ok=check.ok,
        check_id=check.check_id,
        message=check.message,
        details=check.details,
    )
