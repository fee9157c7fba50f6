"""
Hashing Utilities
Digest primitive used by tree construction and proof verification.

This module provides:
- Hasher: incremental start / update / finalize wrapper over hashlib
- new_hasher / hasher_factory: select BLAKE2b-256 (default) or SHA-256
- hash_bytes / hash_concat: one-shot helpers over 32-byte digests
- Hex encoding/decoding with 0x prefix

Hash Rules (Hard Contracts):
1. Default primitive: BLAKE2b, 32-byte output, personalization
   b"ckb-default-hash". Existing commitments were produced with it.
2. hash_concat(a, b) feeds a and b as two separate updates; no
   concatenated buffer is built.
3. Every digest is exactly DIGEST_SIZE (32) bytes.
"""
from __future__ import annotations

import hashlib
from typing import Callable, Optional

from core.schemas.errors import InvalidDigestException, UnsupportedHashException


DIGEST_SIZE: int = 32

# Empty-tree sentinel. Never the output of any hash call.
ZERO_DIGEST: bytes = b"\x00" * DIGEST_SIZE

BLAKE2B = "blake2b"
SHA256 = "sha256"
SUPPORTED_ALGORITHMS: tuple[str, ...] = (BLAKE2B, SHA256)

DEFAULT_ALGORITHM: str = BLAKE2B
DEFAULT_PERSONALIZATION: bytes = b"ckb-default-hash"


class Hasher:
    """
    Incremental hash state: start, feed zero or more spans, finalize.

    A Hasher is single-use; calling update() after finalize() raises
    RuntimeError.

    Example:
        >>> h = Hasher()
        >>> len(h.update(b"left").update(b"right").finalize())
        32
    """

    __slots__ = ("algorithm", "_state", "_finalized")

    def __init__(
        self,
        algorithm: str = DEFAULT_ALGORITHM,
        personalization: Optional[bytes] = None,
    ) -> None:
        if algorithm == BLAKE2B:
            person = DEFAULT_PERSONALIZATION if personalization is None else personalization
            if len(person) > hashlib.blake2b.PERSON_SIZE:
                raise ValueError(
                    f"BLAKE2b personalization must be at most "
                    f"{hashlib.blake2b.PERSON_SIZE} bytes, got {len(person)}"
                )
            self._state = hashlib.blake2b(digest_size=DIGEST_SIZE, person=person)
        elif algorithm == SHA256:
            self._state = hashlib.sha256()
        else:
            raise UnsupportedHashException(algorithm)
        self.algorithm = algorithm
        self._finalized = False

    def update(self, data: bytes) -> "Hasher":
        if self._finalized:
            raise RuntimeError("Hasher already finalized")
        self._state.update(data)
        return self

    def finalize(self) -> bytes:
        """Return the 32-byte digest and close the hasher."""
        if self._finalized:
            raise RuntimeError("Hasher already finalized")
        self._finalized = True
        return self._state.digest()


HasherFactory = Callable[[], Hasher]


def new_hasher(
    algorithm: Optional[str] = None,
    personalization: Optional[bytes] = None,
) -> Hasher:
    """
    Start a new incremental hash.

    Args:
        algorithm: "blake2b" (default) or "sha256"
        personalization: BLAKE2b personalization (ignored for SHA-256)

    Returns:
        Fresh Hasher

    Raises:
        UnsupportedHashException: If algorithm is unknown
    """
    return Hasher(algorithm or DEFAULT_ALGORITHM, personalization)


def hasher_factory(
    algorithm: Optional[str] = None,
    personalization: Optional[bytes] = None,
) -> HasherFactory:
    """
    Bind algorithm settings into a zero-argument Hasher constructor.

    The algorithm is validated eagerly so a bad configuration fails
    when the factory is built rather than at the first hash call.
    """
    new_hasher(algorithm, personalization)

    def _factory() -> Hasher:
        return new_hasher(algorithm, personalization)

    return _factory


def hash_bytes(data: bytes, factory: Optional[HasherFactory] = None) -> bytes:
    """
    Hash raw bytes with the selected primitive.

    Args:
        data: Raw bytes to hash
        factory: Hasher constructor (defaults to BLAKE2b-256)

    Returns:
        32-byte digest
    """
    hasher = factory() if factory is not None else new_hasher()
    return hasher.update(data).finalize()


def hash_concat(
    left: bytes,
    right: bytes,
    factory: Optional[HasherFactory] = None,
) -> bytes:
    """
    Hash the concatenation of two digests: H(left || right).

    Both halves are fed as separate updates.

    Args:
        left: Left operand (32 bytes)
        right: Right operand (32 bytes)
        factory: Hasher constructor (defaults to BLAKE2b-256)

    Returns:
        32-byte digest
    """
    hasher = factory() if factory is not None else new_hasher()
    hasher.update(left)
    hasher.update(right)
    return hasher.finalize()


def ensure_digest(value: bytes, name: str = "digest") -> bytes:
    """
    Check that value is a DIGEST_SIZE-byte string and return it as bytes.

    Raises:
        InvalidDigestException: If value is not bytes-like or has the
            wrong length
    """
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise InvalidDigestException(
            f"{name} must be bytes, got {type(value).__name__}",
            name=name,
        )
    data = bytes(value)
    if len(data) != DIGEST_SIZE:
        raise InvalidDigestException(
            f"{name} must be {DIGEST_SIZE} bytes, got {len(data)}",
            name=name,
            length=len(data),
        )
    return data


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def digest_from_hex(hex_string: str, name: str = "digest") -> bytes:
    """Decode a 0x-prefixed hex string and check it is a 32-byte digest."""
    try:
        data = from_hex(hex_string)
    except ValueError as e:
        raise InvalidDigestException(f"{name}: {e}", name=name) from e
    return ensure_digest(data, name)


__all__ = [
    "DIGEST_SIZE",
    "ZERO_DIGEST",
    "BLAKE2B",
    "SHA256",
    "SUPPORTED_ALGORITHMS",
    "DEFAULT_ALGORITHM",
    "DEFAULT_PERSONALIZATION",
    "Hasher",
    "HasherFactory",
    "new_hasher",
    "hasher_factory",
    "hash_bytes",
    "hash_concat",
    "ensure_digest",
    "to_hex",
    "from_hex",
    "digest_from_hex",
]
