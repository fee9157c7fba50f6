"""
Core cryptographic utilities.

Provides the digest primitive consumed by the Merkle tree.
"""
from .hashing import (
    DIGEST_SIZE,
    ZERO_DIGEST,
    BLAKE2B,
    SHA256,
    SUPPORTED_ALGORITHMS,
    DEFAULT_ALGORITHM,
    DEFAULT_PERSONALIZATION,
    Hasher,
    HasherFactory,
    new_hasher,
    hasher_factory,
    hash_bytes,
    hash_concat,
    ensure_digest,
    to_hex,
    from_hex,
    digest_from_hex,
)

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
