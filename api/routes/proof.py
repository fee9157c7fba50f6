"""
Proof Route

Generate an inclusion proof for one leaf.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.deps import get_proof_verifier, get_root_builder
from api.models.requests import ProofRequest
from api.models.responses import ProofResponse
from core.crypto.hashing import digest_from_hex, to_hex
from core.merkle import PARITY_FIXED


logger = logging.getLogger(__name__)

router = APIRouter(tags=["commitments"])


@router.post("/proof", response_model=ProofResponse)
async def build_proof(request: ProofRequest) -> ProofResponse:
    """
    Build the proof path (climbing siblings, then the secondary root)
    for the leaf at request.index.
    """
    builder = get_root_builder()

    leaves = request.leaf_bytes()
    secondary = digest_from_hex(request.secondary_root, "secondary_root")
    proof = builder.prove(leaves, request.index, secondary)

    accepted_fixed = get_proof_verifier(PARITY_FIXED).verify_proof(proof)
    if not accepted_fixed:
        logger.info(
            f"Proof for leaf {request.index} (position {proof.position}) "
            f"is not accepted under fixed parity"
        )

    return ProofResponse(
        ok=True,
        leaf_index=request.index,
        position=proof.position,
        leaf=to_hex(proof.leaf),
        path=[to_hex(p) for p in proof.path],
        root=to_hex(proof.root),
        accepted_by_fixed_parity=accepted_fixed,
    )
