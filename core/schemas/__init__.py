"""
Schemas
File: __init__.py

Purpose: Export the public error and verification-result models.
"""

from .errors import (
    CbmtError,
    CbmtException,
    ConfigException,
    EmptyProofPathException,
    ErrorCodes,
    IndexOutOfRangeException,
    InvalidDigestException,
    InvalidInputException,
    MerkleVerificationException,
    UnsupportedHashException,
)

from .verification import (
    CheckResult,
    CheckId,
    VerificationResult,
)

__all__ = [
    # Errors
    "CbmtError",
    "CbmtException",
    "ConfigException",
    "EmptyProofPathException",
    "ErrorCodes",
    "IndexOutOfRangeException",
    "InvalidDigestException",
    "InvalidInputException",
    "MerkleVerificationException",
    "UnsupportedHashException",
    # Verification
    "CheckResult",
    "CheckId",
    "VerificationResult",
]
