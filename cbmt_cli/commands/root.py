"""
CLI Root Command

Compute the CBMT root of a list of leaf digests, optionally merged
with a secondary root.

Usage:
    cbmt root 0x<leaf> 0x<leaf> ... [--file leaves.txt] [--secondary 0x..] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import dataclass, asdict
from typing import Any

from cbmt_cli.digests import collect_leaves
from core.crypto.hashing import digest_from_hex, to_hex
from core.merkle import RootBuilder, tree_index


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0


@dataclass
class RootSummary:
    """Summary of a root computation for CLI output."""
    leaf_count: int = 0
    depth: int = 0
    root: str = ""
    committed_root: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if self.committed_root is None:
            del d["committed_root"]
        return d


def print_summary_human(summary: RootSummary) -> None:
    print(f"leaf_count: {summary.leaf_count}")
    print(f"depth: {summary.depth}")
    print(f"root: {summary.root}")
    if summary.committed_root is not None:
        print(f"committed_root: {summary.committed_root}")


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config = args.cli_config.to_runtime_config()
    leaves = collect_leaves(args.digests, args.file)
    builder = RootBuilder.from_config(config)

    logger.info(f"Building root over {len(leaves)} leaves ({config.hash.algorithm})")
    root = builder.build_root(leaves)

    summary = RootSummary(
        leaf_count=len(leaves),
        depth=tree_index.tree_depth(len(leaves)),
        root=to_hex(root),
    )
    if args.secondary:
        secondary = digest_from_hex(args.secondary, "secondary")
        summary.committed_root = to_hex(builder.build_committed_root(leaves, secondary))

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS
