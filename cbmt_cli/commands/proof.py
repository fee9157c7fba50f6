"""
CLI Proof Command

Generate an inclusion proof for one leaf: the climbing siblings followed
by the secondary root.

Usage:
    cbmt proof <index> 0x<leaf> ... --secondary 0x<root> [--file leaves.txt] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from typing import Any

from cbmt_cli.digests import collect_leaves
from core.crypto.hashing import digest_from_hex
from core.merkle import PARITY_FIXED, MerkleProof, ProofVerifier, RootBuilder


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0


def build_output(proof: MerkleProof, index: int, accepted_fixed: bool) -> dict[str, Any]:
    """Proof fields plus whether a fixed-parity verifier will accept it."""
    data = proof.to_dict()
    data["leaf_index"] = index
    data["accepted_by_fixed_parity"] = accepted_fixed
    return data


def print_output_human(data: dict[str, Any]) -> None:
    print(f"leaf_index: {data['leaf_index']}")
    print(f"position: {data['position']}")
    print(f"leaf: {data['leaf']}")
    print(f"root: {data['root']}")
    print(f"path ({len(data['path'])}):")
    for entry in data["path"]:
        print(f"  {entry}")
    print(f"accepted_by_fixed_parity: {str(data['accepted_by_fixed_parity']).lower()}")


def proof_cmd(args: Namespace) -> int:
    """
    Execute the proof command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config = args.cli_config.to_runtime_config()
    leaves = collect_leaves(args.digests, args.file)
    secondary = digest_from_hex(args.secondary, "secondary")

    builder = RootBuilder.from_config(config)
    proof = builder.prove(leaves, args.index, secondary)

    fixed_verifier = ProofVerifier(parity_mode=PARITY_FIXED, config=config)
    accepted_fixed = fixed_verifier.verify_proof(proof)
    if not accepted_fixed:
        logger.warning(
            f"Proof for leaf {args.index} (position {proof.position}) will be rejected "
            f"by fixed-parity verifiers; use --parity tracking to verify it"
        )

    data = build_output(proof, args.index, accepted_fixed)
    if args.json:
        print(json.dumps(data, indent=2))
    else:
        print_output_human(data)

    return EXIT_SUCCESS
