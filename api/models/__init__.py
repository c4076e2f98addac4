"""API request and response models."""

from api.models.requests import (
    CommitRequest,
    CommitmentVerifyRequest,
    ProofRequest,
    RootRequest,
    VerifyRequest,
)
from api.models.responses import (
    CatalogResponse,
    CommitmentResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    IndexResponse,
    ProofResponse,
    RootResponse,
    VerifyResponse,
)

__all__ = [
    "RootRequest",
    "ProofRequest",
    "VerifyRequest",
    "CommitRequest",
    "CommitmentVerifyRequest",
    "HealthResponse",
    "CatalogResponse",
    "IndexResponse",
    "RootResponse",
    "ProofResponse",
    "VerifyResponse",
    "CommitmentResponse",
    "ErrorDetail",
    "ErrorResponse",
]
