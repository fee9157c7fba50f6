"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.deps import load_runtime_config
from api.errors import APIError, api_error_handler, cbmt_error_handler, generic_error_handler
from api.routes import health, root, proof, verify
from core.schemas.errors import CbmtException


# Respects CBMT_LOG_LEVEL and cbmt.json log_level
def _resolve_log_level() -> int:
    """Resolve log level from config, defaulting to INFO."""
    try:
        raw = load_runtime_config().log_level
    except CbmtException:
        raw = "INFO"
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="CBMT Commitment API",
        description="""
HTTP API for Complete Binary Merkle Tree commitments.

## Endpoints

- **POST /root** - Build a root from ordered leaf digests
- **POST /proof** - Generate an inclusion proof for one leaf
- **POST /verify** - Verify a leaf and proof path against a committed root
- **GET /health** - Health check

## Digests

All digests are 32 bytes, encoded as `0x`-prefixed hex.

## Verification Outcomes

- `200` with `ok=true` - proof accepted
- `200` with `ok=false` - recomputed root does not match
- `400` - malformed input (for example an empty proof path)
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(CbmtException, cbmt_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    app.include_router(health.router)
    app.include_router(root.router)
    app.include_router(proof.router)
    app.include_router(verify.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
