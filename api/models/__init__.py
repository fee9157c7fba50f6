"""API request and response models."""

from api.models.requests import BuildRootRequest, ProofRequest, VerifyRequest
from api.models.responses import (
    HealthResponse,
    RootResponse,
    ProofResponse,
    VerifyResponse,
    CheckInfo,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "BuildRootRequest",
    "ProofRequest",
    "VerifyRequest",
    "HealthResponse",
    "RootResponse",
    "ProofResponse",
    "VerifyResponse",
    "CheckInfo",
    "ErrorDetail",
    "ErrorResponse",
]
