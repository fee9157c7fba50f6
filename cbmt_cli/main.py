"""
CLI Main Entry Point

Usage:
    cbmt root <digest...> [--file PATH] [--secondary HEX] [--json]
    cbmt proof <index> <digest...> --secondary HEX [--file PATH] [--json]
    cbmt verify --position N --leaf HEX --path HEX... --root HEX [--parity MODE]
    cbmt verify --proof-file proof.json
    cbmt config --init | --show

Environment Variables:
    CBMT_HASH_ALGORITHM         blake2b (default) or sha256
    CBMT_HASH_PERSONALIZATION   BLAKE2b personalization (default: ckb-default-hash)
    CBMT_PARITY_MODE            fixed (default) or tracking
    CBMT_LOG_LEVEL              default: WARNING
    CBMT_LOG_FILE               optional log file
    CBMT_OUTPUT_FORMAT          human (default) or json

Exit codes: 0 success or proof accepted, 1 error, 2 proof rejected.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from cbmt_cli import __version__
from cbmt_cli.commands import root, proof, verify
from cbmt_cli.config import load_config, get_default_config_template


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Log to stderr, and to log_file if given; stdout is reserved for results."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_leaf_input(sub: argparse.ArgumentParser) -> None:
    sub.add_argument("digests", nargs="*", help="Leaf digests in order (0x-prefixed hex)")
    sub.add_argument(
        "--file", "-f", default=None,
        help="File with one leaf digest per line, appended after positional digests",
    )


def _add_json_flag(sub: argparse.ArgumentParser, help: str = "Output machine-readable JSON") -> None:
    sub.add_argument("--json", action="store_true", help=help)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cbmt",
        description="Complete Binary Merkle Tree CLI - build roots, generate and verify proofs.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config", "-c", type=Path, default=None,
        help="Configuration file (default: ./cbmt.json, ./.cbmt.json or ~/.config/cbmt/config.json)",
    )
    parser.add_argument(
        "--log-level", default=None, choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    root_p = commands.add_parser("root", help="Compute the root of a list of leaf digests")
    _add_leaf_input(root_p)
    root_p.add_argument("--secondary", default=None, help="Secondary root; also print H(secondary || root)")
    _add_json_flag(root_p)
    root_p.set_defaults(func=root.root_cmd)

    proof_p = commands.add_parser("proof", help="Generate an inclusion proof for one leaf")
    proof_p.add_argument("index", type=int, help="0-based index of the leaf to prove")
    _add_leaf_input(proof_p)
    proof_p.add_argument("--secondary", required=True, help="Secondary (witness) root merged last")
    _add_json_flag(proof_p, "Output JSON (accepted by verify --proof-file)")
    proof_p.set_defaults(func=proof.proof_cmd)

    verify_p = commands.add_parser("verify", help="Verify a leaf and proof path against a root")
    verify_p.add_argument("--position", type=int, default=None, help="Leaf position in the tree")
    verify_p.add_argument("--leaf", default=None, help="Leaf digest")
    verify_p.add_argument(
        "--path", nargs="*", default=None,
        help="Proof path: climbing siblings, then the secondary root",
    )
    verify_p.add_argument("--root", default=None, help="Claimed committed root")
    verify_p.add_argument("--proof-file", default=None, help="JSON written by `cbmt proof --json`")
    verify_p.add_argument(
        "--parity", choices=["fixed", "tracking"], default=None,
        help="Orientation rule (default: from config, normally fixed)",
    )
    _add_json_flag(verify_p)
    verify_p.add_argument("--debug", action="store_true", help="Include individual checks in output")
    verify_p.set_defaults(func=verify.verify_cmd)

    config_p = commands.add_parser("config", help="Create or show configuration")
    config_p.add_argument("--init", action="store_true", help="Write a template configuration file")
    config_p.add_argument("--show", action="store_true", help="Print the effective configuration")
    config_p.add_argument("--path", default="cbmt.json", help="Target for --init (default: cbmt.json)")
    config_p.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    if args.init:
        target = Path(args.path)
        if target.exists():
            print(f"Error: Config file already exists: {target}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR
        target.write_text(get_default_config_template())
        print(f"Created configuration file: {target}")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: cbmt config [--init|--show]")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Run the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    setup_logging(level=args.log_level or config.log_level, log_file=config.log_file)

    args.cli_config = config
    if getattr(args, "json", None) is False and config.default_output_format == "json":
        args.json = True

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
