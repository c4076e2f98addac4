"""
API Request Models

Pydantic models for API request validation.
"""

from pydantic import BaseModel, ConfigDict, Field


class RootRequest(BaseModel):
    """Request body for POST /root."""

    model_config = ConfigDict(extra="forbid")

    values: dict[str, str | None] = Field(
        ...,
        description="Field name -> raw value; null or missing fields get placeholders",
    )
    seed: int | None = Field(
        default=None,
        description="Seed for deterministic placeholders (default: server config)",
    )


class ProofRequest(RootRequest):
    """Request body for POST /proof."""

    field_name: str = Field(..., min_length=1, description="Catalog field to prove")
    timestamp: int | None = Field(
        default=None,
        ge=0,
        description="Commitment timestamp to stamp on the proof",
    )


class VerifyRequest(BaseModel):
    """Request body for POST /verify."""

    model_config = ConfigDict(extra="forbid")

    value: str = Field(..., description="Claimed fixed-width token")
    index: int = Field(..., description="Claimed leaf index")
    proof: list[str] = Field(..., description="Sibling hashes, leaf sibling first")
    expected_root: str = Field(..., description="Root to verify against")


class CommitRequest(BaseModel):
    """Request body for POST /commitments."""

    model_config = ConfigDict(extra="forbid")

    timestamp: int = Field(..., ge=0, description="Commitment timestamp (seconds)")
    root: str = Field(..., description="Merkle root, 64 hex characters")


class CommitmentVerifyRequest(BaseModel):
    """Request body for POST /commitments/{timestamp}/verify."""

    model_config = ConfigDict(extra="forbid")

    value: str = Field(..., description="Claimed fixed-width token")
    proof: list[str] = Field(..., description="Sibling hashes, leaf sibling first")
    index: int = Field(..., description="Claimed leaf index")
