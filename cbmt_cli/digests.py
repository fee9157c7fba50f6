"""
Digest input helpers shared by CLI commands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from core.crypto.hashing import digest_from_hex


def read_digest_file(path: Path) -> list[str]:
    """
    Read one 0x-prefixed digest per line.

    Blank lines and lines starting with '#' are skipped.
    """
    if not path.exists():
        raise FileNotFoundError(f"Digest file not found: {path}")
    values = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        values.append(line)
    return values


def parse_digests(values: Sequence[str], name: str = "leaf") -> list[bytes]:
    """Decode hex digests, naming each by position for error messages."""
    return [digest_from_hex(v, f"{name}[{i}]") for i, v in enumerate(values)]


def collect_leaves(values: Sequence[str] | None, file: str | None) -> list[bytes]:
    """Leaves from positional arguments followed by those in file."""
    raw = list(values or [])
    if file:
        raw.extend(read_digest_file(Path(file)))
    return parse_digests(raw, "leaf")
