"""
Common test fixtures shared by all modules.

Provides factory functions for leaf digests and digest files.
"""

from pathlib import Path
from typing import Sequence

from core.crypto.hashing import hash_bytes, to_hex


def make_leaf(label: str) -> bytes:
    """Deterministic 32-byte leaf digest derived from a label."""
    return hash_bytes(label.encode("utf-8"))


def make_leaves(count: int, prefix: str = "leaf") -> list[bytes]:
    """count distinct leaf digests, in order."""
    return [make_leaf(f"{prefix}{i}") for i in range(count)]


def small_digest(value: int) -> bytes:
    """32-byte big-endian encoding of a small integer (0x00..01 style)."""
    return value.to_bytes(32, "big")


def write_digest_file(path: Path, digests: Sequence[bytes], comment: str | None = None) -> Path:
    """Write one 0x-prefixed digest per line, optionally after a comment line."""
    lines = []
    if comment:
        lines.append(f"# {comment}")
    lines.extend(to_hex(d) for d in digests)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
