"""API route handlers."""

from api.routes import health, root, proof, verify

__all__ = ["health", "root", "proof", "verify"]
