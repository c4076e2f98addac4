"""
Commitment Routes

Timestamp-keyed roots: commit, look up, verify against.
"""

from __future__ import annotations

from fastapi import APIRouter

from api.deps import get_store
from api.errors import CommitmentNotFoundError
from api.models.requests import CommitmentVerifyRequest, CommitRequest
from api.models.responses import CommitmentResponse, VerifyResponse


router = APIRouter(prefix="/commitments", tags=["commitments"])


@router.post("", response_model=CommitmentResponse, status_code=201)
async def commit_root(request: CommitRequest) -> CommitmentResponse:
    """
    Commit a root under a timestamp.

    Timestamps must strictly increase; a stale one is a 409.
    """
    get_store().set_root(request.timestamp, request.root)
    return CommitmentResponse(timestamp=request.timestamp, root=request.root)


@router.get("", response_model=list[CommitmentResponse])
async def list_commitments() -> list[CommitmentResponse]:
    store = get_store()
    return [
        CommitmentResponse(timestamp=ts, root=store.get_root(ts))
        for ts in store.timestamps()
    ]


@router.get("/{timestamp}", response_model=CommitmentResponse)
async def get_commitment(timestamp: int) -> CommitmentResponse:
    root = get_store().get_root(timestamp)
    if root is None:
        raise CommitmentNotFoundError(timestamp)
    return CommitmentResponse(timestamp=timestamp, root=root)


@router.post("/{timestamp}/verify", response_model=VerifyResponse)
async def verify_commitment(timestamp: int, request: CommitmentVerifyRequest) -> VerifyResponse:
    """
    Verify (value, proof, index) against the root committed for timestamp.

    An unknown timestamp is a rejection (ok=false), not a 404.
    """
    check = get_store().check(timestamp, request.value, request.proof, request.index)
    return VerifyResponse(
        ok=check.ok,
        check_id=check.check_id,
        message=check.message,
        details=check.details,
    )
