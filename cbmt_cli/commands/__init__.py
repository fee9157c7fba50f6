"""
CLI command modules.
"""

from cbmt_cli.commands import root, proof, verify

__all__ = ["root", "proof", "verify"]
