"""
Schemas
File: errors.py

Purpose: Error taxonomy for tree construction and proof verification.
Pydantic models carry errors to outer surfaces; exceptions carry them
through control flow.

A root mismatch is NOT an exception: verify() returns False for it.
Exceptions are reserved for malformed input (empty proof path, wrong
digest width, bad index) and configuration problems.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorCodes:
    """Stable machine-readable error codes."""

    # Caller input
    INVALID_INPUT = "INVALID_INPUT"
    EMPTY_PROOF_PATH = "EMPTY_PROOF_PATH"
    INVALID_DIGEST = "INVALID_DIGEST"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"

    # Setup
    UNSUPPORTED_HASH = "UNSUPPORTED_HASH"
    CONFIG_ERROR = "CONFIG_ERROR"

    # Only raised on explicit demand (ProofVerifier.require)
    ROOT_MISMATCH = "ROOT_MISMATCH"


class CbmtError(BaseModel):
    """Serializable form of a CbmtException for CLI JSON and HTTP bodies."""

    model_config = ConfigDict(extra="forbid")

    code: str = Field(..., examples=[ErrorCodes.EMPTY_PROOF_PATH])
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class CbmtException(Exception):
    """Base exception for all tree and proof errors."""

    default_code = "CBMT_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code or self.default_code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> CbmtError:
        return CbmtError(code=self.code, message=self.message, details=self.details)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidInputException(CbmtException, ValueError):
    """
    Caller-supplied input is malformed.

    Also a ValueError, so generic validation layers treat it as bad input.
    """

    default_code = ErrorCodes.INVALID_INPUT


class EmptyProofPathException(InvalidInputException):
    """A proof path has zero entries; there is no secondary root to merge."""

    default_code = ErrorCodes.EMPTY_PROOF_PATH

    def __init__(self, message: str = "Proof path must contain at least one entry") -> None:
        super().__init__(message)


class InvalidDigestException(InvalidInputException):
    """A value is not a digest of the expected width."""

    default_code = ErrorCodes.INVALID_DIGEST

    def __init__(
        self,
        message: str,
        name: str | None = None,
        length: int | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if name:
            details["name"] = name
        if length is not None:
            details["length"] = length
        super().__init__(message, details=details)


class IndexOutOfRangeException(InvalidInputException):
    """A leaf index or tree position is out of range."""

    default_code = ErrorCodes.INDEX_OUT_OF_RANGE

    def __init__(
        self,
        message: str,
        index: int | None = None,
        leaf_count: int | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if index is not None:
            details["index"] = index
        if leaf_count is not None:
            details["leaf_count"] = leaf_count
        super().__init__(message, details=details)


class UnsupportedHashException(CbmtException):
    """An unknown hash algorithm was requested."""

    default_code = ErrorCodes.UNSUPPORTED_HASH

    def __init__(self, algorithm: str) -> None:
        super().__init__(
            f"Unsupported hash algorithm: {algorithm!r}",
            details={"algorithm": algorithm},
        )


class ConfigException(CbmtException):
    """Configuration values are invalid."""

    default_code = ErrorCodes.CONFIG_ERROR


class MerkleVerificationException(CbmtException):
    """
    Raised when a caller explicitly demands a proof be valid.

    Only ProofVerifier.require() raises this; plain verification
    reports a mismatch as False.
    """

    default_code = ErrorCodes.ROOT_MISMATCH

    def __init__(
        self,
        message: str,
        leaf_position: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = dict(details or {})
        if leaf_position is not None:
            full_details["leaf_position"] = leaf_position
        super().__init__(message, details=full_details)
