"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "cbmt-api"
    version: str = "v1"
    hash_algorithm: str = Field(..., description="Digest primitive in use")
    hash_personalization: str = Field(..., description="BLAKE2b personalization (unused by sha256)")
    parity_mode: str = Field(..., description="Default orientation rule for /verify")


class RootResponse(BaseModel):
    """Response for POST /root endpoint."""

    ok: bool = True
    leaf_count: int = Field(..., description="Number of leaves committed")
    depth: int = Field(..., description="Tree depth in levels (0 for empty)")
    root: str = Field(..., description="Tree root, 0x-prefixed")
    committed_root: str | None = Field(
        default=None,
        description="H(secondary_root || root) when a secondary root was supplied",
    )


class ProofResponse(BaseModel):
    """Response for POST /proof endpoint."""

    ok: bool = True
    leaf_index: int = Field(..., description="0-based leaf index")
    position: int = Field(..., description="Leaf position in the tree")
    leaf: str = Field(..., description="Leaf digest")
    path: list[str] = Field(..., description="Climbing siblings then the secondary root")
    root: str = Field(..., description="Committed root the proof targets")
    accepted_by_fixed_parity: bool = Field(
        ...,
        description="Whether a fixed-parity verifier accepts this proof",
    )


class CheckInfo(BaseModel):
    """Single verification check."""

    check_id: str
    ok: bool
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class VerifyResponse(BaseModel):
    """Response for POST /verify endpoint."""

    ok: bool = Field(..., description="Whether the proof was accepted")
    position: int = Field(..., description="Leaf position that was checked")
    parity_mode: str = Field(..., description="Orientation rule used")
    computed_root: str | None = Field(default=None, description="Root recomputed from the proof")
    checks: list[CheckInfo] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response envelope."""

    ok: bool = False
    error: ErrorDetail
