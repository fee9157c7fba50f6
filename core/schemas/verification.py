"""
Schemas
File: verification.py

Purpose: Structured outcome of a proof verification.

A verification ends in one of three states:
- accepted: inputs well-formed and the recomputed root matches
- rejected: inputs well-formed but the recomputed root differs
- invalid: inputs malformed (empty path, bad digest); error is set

Outer surfaces (CLI, API) render all three without exceptions.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .errors import CbmtError


CheckId = Literal["proof_input", "root_match"]


class CheckResult(BaseModel):
    """One step of a verification and whether it held."""

    model_config = ConfigDict(extra="forbid")

    check_id: CheckId
    ok: bool
    message: str
    details: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def passed(
        cls,
        check_id: CheckId,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> "CheckResult":
        return cls(check_id=check_id, ok=True, message=message, details=details or {})

    @classmethod
    def failed(
        cls,
        check_id: CheckId,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> "CheckResult":
        return cls(check_id=check_id, ok=False, message=message, details=details or {})


class VerificationResult(BaseModel):
    """
    Result of ProofVerifier.check().

    ok is exactly what verify() would have returned; error is set only
    for the invalid state, where verify() would have raised instead.
    """

    model_config = ConfigDict(extra="forbid")

    ok: bool = Field(..., description="Whether the proof was accepted")
    parity_mode: str = Field(..., description="Orientation rule used")
    checks: list[CheckResult] = Field(default_factory=list)
    computed_root: str | None = Field(
        default=None,
        description="0x-prefixed root recomputed from the proof, if it got that far",
    )
    error: CbmtError | None = Field(
        default=None,
        description="Input error that stopped verification",
    )

    @property
    def is_invalid(self) -> bool:
        return self.error is not None

    @property
    def failed_checks(self) -> list[CheckResult]:
        return [check for check in self.checks if not check.ok]

    def get_error_messages(self) -> list[str]:
        """Messages of failed checks, plus the input error if not already among them."""
        messages = [check.message for check in self.failed_checks]
        if self.error is not None and self.error.message not in messages:
            messages.append(self.error.message)
        return messages

    @classmethod
    def accepted(
        cls,
        parity_mode: str,
        checks: list[CheckResult],
        computed_root: str,
    ) -> "VerificationResult":
        return cls(ok=True, parity_mode=parity_mode, checks=checks, computed_root=computed_root)

    @classmethod
    def rejected(
        cls,
        parity_mode: str,
        checks: list[CheckResult],
        computed_root: str,
    ) -> "VerificationResult":
        return cls(ok=False, parity_mode=parity_mode, checks=checks, computed_root=computed_root)

    @classmethod
    def invalid(
        cls,
        parity_mode: str,
        checks: list[CheckResult],
        error: CbmtError,
    ) -> "VerificationResult":
        return cls(ok=False, parity_mode=parity_mode, checks=checks, error=error)
