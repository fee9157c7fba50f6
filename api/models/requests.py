"""
API Request Models

Pydantic models for API request validation.
Digests travel as 0x-prefixed lowercase or uppercase hex.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from core.crypto.hashing import digest_from_hex


DIGEST_HEX_PATTERN = r"^0x[0-9a-fA-F]{64}$"

DigestHex = Annotated[
    str,
    Field(pattern=DIGEST_HEX_PATTERN, description="32-byte digest, 0x-prefixed hex"),
]


class BuildRootRequest(BaseModel):
    """Request body for POST /root endpoint."""

    leaves: list[DigestHex] = Field(
        default_factory=list,
        description="Leaf digests in order; an empty list yields the zero root",
    )
    secondary_root: DigestHex | None = Field(
        default=None,
        description="Optional secondary root; the response then includes H(secondary || root)",
    )

    def leaf_bytes(self) -> list[bytes]:
        return [digest_from_hex(v, f"leaves[{i}]") for i, v in enumerate(self.leaves)]


class ProofRequest(BaseModel):
    """Request body for POST /proof endpoint."""

    leaves: list[DigestHex] = Field(
        ...,
        min_length=1,
        description="Leaf digests in order",
    )
    index: int = Field(
        ...,
        ge=0,
        description="0-based index of the leaf to prove",
    )
    secondary_root: DigestHex = Field(
        ...,
        description="Secondary (witness) root appended as the last path entry",
    )

    def leaf_bytes(self) -> list[bytes]:
        return [digest_from_hex(v, f"leaves[{i}]") for i, v in enumerate(self.leaves)]


class VerifyRequest(BaseModel):
    """Request body for POST /verify endpoint."""

    position: int = Field(
        ...,
        ge=0,
        description="Leaf position in the tree",
    )
    leaf: DigestHex = Field(..., description="Leaf digest")
    path: list[DigestHex] = Field(
        default_factory=list,
        description="Climbing siblings followed by the secondary root (at least one entry)",
    )
    root: DigestHex = Field(..., description="Claimed committed root")
    parity_mode: Literal["fixed", "tracking"] | None = Field(
        default=None,
        description="Orientation rule; defaults to the server configuration",
    )
    include_checks: bool = Field(
        default=False,
        description="Include individual checks in the response",
    )

    def path_bytes(self) -> list[bytes]:
        return [digest_from_hex(v, f"path[{i}]") for i, v in enumerate(self.path)]
