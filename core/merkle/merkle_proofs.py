"""
CBMT Builder and Verifier Classes
Configured wrappers around the functions in merkle_tree.py.

This module provides class-based interfaces:
- RootBuilder: build roots, trees, committed roots and proofs
- ProofVerifier: verify proofs, either as a boolean or as a
  structured VerificationResult

Both bind a hash algorithm and (for the verifier) a parity mode once,
usually from RuntimeConfig, so callers do not thread them through every
call. Neither holds state across calls.
"""
from __future__ import annotations

import hmac
import logging
from typing import Optional, Sequence

from core.config.runtime import RuntimeConfig, get_default_config
from core.crypto.hashing import HasherFactory, ensure_digest, hasher_factory, to_hex
from core.merkle.merkle_tree import (
    PARITY_MODES,
    MerkleProof,
    ParityMode,
    build_committed_root,
    build_merkle_proof,
    build_merkle_root,
    build_tree,
    recompute_root,
    verify_merkle_proof,
)
from core.schemas.errors import (
    CbmtException,
    ConfigException,
    ErrorCodes,
    MerkleVerificationException,
)
from core.schemas.verification import CheckResult, VerificationResult


logger = logging.getLogger(__name__)


def _factory_from_config(config: RuntimeConfig) -> HasherFactory:
    return hasher_factory(config.hash.algorithm, config.hash.personalization_bytes)


class RootBuilder:
    """
    Builds CBMT roots and proofs with a fixed hash configuration.

    Example:
        >>> builder = RootBuilder()
        >>> builder.build_root([]) == bytes(32)
        True
    """

    def __init__(
        self,
        factory: Optional[HasherFactory] = None,
        config: Optional[RuntimeConfig] = None,
    ) -> None:
        if factory is None:
            factory = _factory_from_config(config or get_default_config())
        self._factory = factory

    @classmethod
    def from_config(cls, config: RuntimeConfig) -> "RootBuilder":
        return cls(config=config)

    def build_root(self, leaves: Sequence[bytes]) -> bytes:
        """
        Compute the root of leaves.

        Args:
            leaves: Leaf digests (32 bytes each)

        Returns:
            32-byte root, or 32 zero bytes for an empty sequence
        """
        root = build_merkle_root(leaves, self._factory)
        logger.debug("Built root %s over %d leaves", to_hex(root), len(leaves))
        return root

    def build_tree(self, leaves: Sequence[bytes]) -> list[bytes]:
        """Full 2n - 1 node array (for inspection and proof generation)."""
        return build_tree(leaves, self._factory)

    def build_committed_root(self, leaves: Sequence[bytes], secondary_root: bytes) -> bytes:
        """H(secondary_root || root(leaves))."""
        return build_committed_root(leaves, secondary_root, self._factory)

    def prove(self, leaves: Sequence[bytes], index: int, secondary_root: bytes) -> MerkleProof:
        """
        Generate a proof for the leaf at index.

        Raises:
            InvalidInputException: If leaves is empty
            IndexOutOfRangeException: If index is out of range
        """
        proof = build_merkle_proof(leaves, index, secondary_root, self._factory)
        logger.debug(
            "Built proof for leaf %d (position %d, %d path entries)",
            index, proof.position, len(proof.path),
        )
        return proof


class ProofVerifier:
    """
    Verifies CBMT proofs with a fixed hash configuration and parity mode.

    verify() is a pure predicate: a mismatching root returns False. Only an
    empty proof path or malformed digests raise.

    Example:
        >>> verifier = ProofVerifier(parity_mode="tracking")
        >>> verifier.parity_mode
        'tracking'
    """

    def __init__(
        self,
        parity_mode: Optional[ParityMode] = None,
        factory: Optional[HasherFactory] = None,
        config: Optional[RuntimeConfig] = None,
    ) -> None:
        if parity_mode is None or factory is None:
            config = config or get_default_config()
        if parity_mode is None:
            parity_mode = config.proof.parity_mode
        if parity_mode not in PARITY_MODES:
            raise ConfigException(
                f"Unknown parity mode {parity_mode!r}",
                details={"allowed": list(PARITY_MODES)},
            )
        if factory is None:
            factory = _factory_from_config(config)
        self.parity_mode: ParityMode = parity_mode
        self._factory = factory

    @classmethod
    def from_config(cls, config: RuntimeConfig) -> "ProofVerifier":
        return cls(config=config)

    def verify(
        self,
        leaf_position: int,
        leaf: bytes,
        proof_path: Sequence[bytes],
        root: bytes,
    ) -> bool:
        """
        Check a leaf against a claimed root.

        Raises:
            EmptyProofPathException: If proof_path is empty
            InvalidDigestException: If any digest is not 32 bytes
        """
        return verify_merkle_proof(
            leaf_position, leaf, proof_path, root, self.parity_mode, self._factory
        )

    def verify_proof(self, proof: MerkleProof) -> bool:
        return self.verify(proof.position, proof.leaf, proof.path, proof.root)

    def check(
        self,
        leaf_position: int,
        leaf: bytes,
        proof_path: Sequence[bytes],
        root: bytes,
    ) -> VerificationResult:
        """
        Verify and report the outcome as a VerificationResult.

        Input errors are captured in result.error instead of raised, so
        outer surfaces can render every outcome uniformly.
        """
        checks: list[CheckResult] = []

        try:
            candidate = recompute_root(
                leaf_position, leaf, proof_path, self.parity_mode, self._factory
            )
            claimed = ensure_digest(root, "root")
        except CbmtException as e:
            checks.append(CheckResult.failed("proof_input", e.message, details=e.details))
            return VerificationResult.invalid(self.parity_mode, checks, e.to_error_model())

        checks.append(
            CheckResult.passed(
                "proof_input",
                f"Proof path has {len(proof_path)} entries",
                details={"climbing_steps": len(proof_path) - 1},
            )
        )

        computed = to_hex(candidate)
        if hmac.compare_digest(candidate, claimed):
            checks.append(CheckResult.passed("root_match", "Recomputed root matches"))
            return VerificationResult.accepted(self.parity_mode, checks, computed)

        checks.append(
            CheckResult.failed(
                "root_match",
                "Recomputed root does not match claimed root",
                details={
                    "code": ErrorCodes.ROOT_MISMATCH,
                    "computed_root": computed,
                    "claimed_root": to_hex(claimed),
                    "parity_mode": self.parity_mode,
                },
            )
        )
        return VerificationResult.rejected(self.parity_mode, checks, computed)

    def require(
        self,
        leaf_position: int,
        leaf: bytes,
        proof_path: Sequence[bytes],
        root: bytes,
    ) -> None:
        """
        Verify and raise if the proof does not match.

        Raises:
            MerkleVerificationException: If the recomputed root differs
        """
        if not self.verify(leaf_position, leaf, proof_path, root):
            raise MerkleVerificationException(
                "Recomputed root does not match claimed root",
                leaf_position=leaf_position,
                details={"parity_mode": self.parity_mode},
            )


__all__ = [
    "RootBuilder",
    "ProofVerifier",
]
