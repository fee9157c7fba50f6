"""
HTTP API (FastAPI)

HTTP API for CBMT commitments:
- POST /root - Build a root from leaf digests
- POST /proof - Generate an inclusion proof
- POST /verify - Verify a leaf and proof path against a root
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
