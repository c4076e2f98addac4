"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field

from core.schemas.proof import FieldProof


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "beaconroot-api"
    version: str = "v1"


class CatalogEntry(BaseModel):
    field_name: str
    index: int


class CatalogResponse(BaseModel):
    """Response for GET /catalog."""

    size: int = Field(..., description="Number of fields N")
    depth: int = Field(..., description="Proof length log2(N)")
    token_width: int = Field(..., description="Token width in characters")
    fields: list[CatalogEntry] = Field(default_factory=list)


class IndexResponse(BaseModel):
    """Response for GET /index/{field_name}."""

    field_name: str
    index: int


class RootResponse(BaseModel):
    """Response for POST /root."""

    root: str = Field(..., description="Merkle root of the derived record")
    placeholder_fields: list[str] = Field(
        default_factory=list,
        description="Fields filled by the placeholder provider",
    )


class ProofResponse(BaseModel):
    """Response for POST /proof."""

    proof: FieldProof = Field(..., description="Value, index, siblings and root")
    placeholder: bool = Field(
        default=False,
        description="Whether the proven value is a placeholder",
    )


class VerifyResponse(BaseModel):
    """Response for verification endpoints. A rejection is ok=false, not an error."""

    ok: bool = Field(..., description="Whether the proof rebuilt the root")
    check_id: str = Field(..., description="Deciding check")
    message: str = Field(..., description="Human-readable outcome")
    details: dict[str, Any] = Field(default_factory=dict)


class CommitmentResponse(BaseModel):
    """A committed (timestamp, root) pair."""

    timestamp: int
    root: str


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)
    retryable: bool = False


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
