"""
Verify Route

Verify a leaf digest and proof path against a claimed root.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.deps import get_proof_verifier
from api.errors import APIError
from api.models.requests import VerifyRequest
from api.models.responses import CheckInfo, VerifyResponse
from core.crypto.hashing import digest_from_hex


logger = logging.getLogger(__name__)

router = APIRouter(tags=["verification"])


@router.post("/verify", response_model=VerifyResponse)
async def verify_proof(request: VerifyRequest) -> VerifyResponse:
    """
    Fold the proof path from the leaf and compare with the claimed root.

    A mismatch returns 200 with ok=false. An empty path or malformed
    digest returns 400.
    """
    verifier = get_proof_verifier(request.parity_mode)

    result = verifier.check(
        request.position,
        digest_from_hex(request.leaf, "leaf"),
        request.path_bytes(),
        digest_from_hex(request.root, "root"),
    )

    if result.error is not None:
        raise APIError(result.error)

    if result.ok:
        logger.info(f"Proof accepted for position {request.position}")
    else:
        logger.info(f"Proof rejected for position {request.position}")

    checks = []
    if request.include_checks:
        checks = [
            CheckInfo(check_id=c.check_id, ok=c.ok, message=c.message, details=c.details)
            for c in result.checks
        ]

    return VerifyResponse(
        ok=result.ok,
        position=request.position,
        parity_mode=verifier.parity_mode,
        computed_root=result.computed_root,
        checks=checks,
        errors=result.get_error_messages(),
    )
