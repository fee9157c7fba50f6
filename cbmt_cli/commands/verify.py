"""
CLI Verify Command

Verify a leaf digest and proof path against a claimed committed root.

Usage:
    cbmt verify --position N --leaf 0x.. --path 0x.. [0x.. ...] --root 0x.. [--json]
    cbmt verify --proof-file proof.json [--parity tracking] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

from cbmt_cli.digests import parse_digests
from core.crypto.hashing import digest_from_hex, to_hex
from core.merkle import MerkleProof, ProofVerifier
from core.schemas.verification import VerificationResult


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    ok: bool = False
    position: int = 0
    path_length: int = 0
    parity_mode: str = ""
    root: str = ""
    computed_root: str | None = None
    checks: list[dict[str, Any]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if self.computed_root is None:
            del d["computed_root"]
        if not d["checks"]:
            del d["checks"]
        if not d["errors"]:
            del d["errors"]
        return d


def load_proof_file(path: Path) -> MerkleProof:
    """Load a proof written by `cbmt proof --json`."""
    if not path.exists():
        raise FileNotFoundError(f"Proof file not found: {path}")
    with open(path, "r") as f:
        data = json.load(f)
    return MerkleProof.from_dict(data)


def build_summary(
    result: VerificationResult,
    position: int,
    path_length: int,
    parity_mode: str,
    root: str,
    debug: bool = False,
) -> VerifySummary:
    """Build a VerifySummary from a verification result."""
    summary = VerifySummary(
        ok=result.ok,
        position=position,
        path_length=path_length,
        parity_mode=parity_mode,
        root=root,
        computed_root=result.computed_root,
        errors=result.get_error_messages(),
    )
    if debug:
        summary.checks = [
            {"check_id": c.check_id, "ok": c.ok, "message": c.message}
            for c in result.checks
        ]
    return summary


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"ok: {str(summary.ok).lower()}")
    print(f"position: {summary.position}")
    print(f"path_length: {summary.path_length}")
    print(f"parity_mode: {summary.parity_mode}")
    print(f"root: {summary.root}")
    if summary.computed_root is not None:
        print(f"computed_root: {summary.computed_root}")

    if summary.errors:
        print(f"\nerrors ({len(summary.errors)}):")
        for err in summary.errors:
            print(f"  ✗ {err}")

    if summary.checks:
        print("\nchecks:")
        for check in summary.checks:
            status = "✓" if check["ok"] else "✗"
            print(f"  {status} {check['check_id']}: {check['message']}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 accepted, 1 bad input, 2 rejected)
    """
    config = args.cli_config.to_runtime_config()
    parity_mode = args.parity or config.proof.parity_mode

    if args.proof_file:
        proof = load_proof_file(Path(args.proof_file))
        position, leaf, path, root = proof.position, proof.leaf, proof.path, proof.root
    else:
        missing = [
            flag for flag, value in (
                ("--position", args.position), ("--leaf", args.leaf), ("--root", args.root),
            ) if value is None
        ]
        if missing:
            print(f"Error: missing {', '.join(missing)} (or use --proof-file)", file=sys.stderr)
            return EXIT_RUNTIME_ERROR
        position = args.position
        leaf = digest_from_hex(args.leaf, "leaf")
        path = parse_digests(args.path or [], "path")
        root = digest_from_hex(args.root, "root")

    verifier = ProofVerifier(parity_mode=parity_mode, config=config)
    result = verifier.check(position, leaf, path, root)

    summary = build_summary(
        result,
        position=position,
        path_length=len(path),
        parity_mode=parity_mode,
        root=to_hex(root),
        debug=args.debug,
    )

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    if result.error is not None:
        logger.warning(f"Proof input rejected: {result.error.message}")
        return EXIT_RUNTIME_ERROR

    if result.ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS

    logger.info("Verification rejected: root mismatch")
    return EXIT_VERIFICATION_FAILED
