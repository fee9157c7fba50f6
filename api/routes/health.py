"""
Health Route

Liveness check that also reports the hash and parity settings the
server resolved from cbmt.json and CBMT_* variables, so a client can
tell which commitment format it is talking to.
"""

from fastapi import APIRouter

from api.deps import load_runtime_config
from api.models.responses import HealthResponse


router = APIRouter(tags=["health"])


@router.get("/", response_model=HealthResponse)
@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    # A broken config file surfaces here as CONFIG_ERROR (500)
    config = load_runtime_config()
    return HealthResponse(
        hash_algorithm=config.hash.algorithm,
        hash_personalization=config.hash.personalization,
        parity_mode=config.proof.parity_mode,
    )
