"""
CBMT CLI

Command-line interface for building and verifying CBMT commitments.

Usage:
    python -m cbmt_cli root 0x<digest> 0x<digest> ...
    python -m cbmt_cli proof 1 0x<digest> ... --secondary 0x<digest>
    python -m cbmt_cli verify --position 3 --leaf 0x.. --path 0x.. 0x.. --root 0x..
    python -m cbmt_cli config --show
"""

__version__ = "0.1.0"
