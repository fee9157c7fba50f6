"""
CBMT Construction and Proof Verification
Complete Binary Merkle Tree root building, proof generation, and verification.

This module provides:
- build_tree / build_merkle_root: array-backed CBMT construction
- commit_root: merge a raw tree root with a secondary (witness) root
- build_merkle_proof: climbing siblings plus the secondary root
- verify_merkle_proof: fold a proof path and compare to a claimed root

Commitment Rules (Hard Contracts):
1. Internal node: merge(left, right) = H(left || right)
2. Empty leaf list: root is ZERO_DIGEST (32 zero bytes), never hashed
3. Single leaf: root = leaf
4. Published root: H(secondary_root || raw_root), always in that order
5. A proof path carries m - 1 climbing siblings followed by exactly one
   secondary root; m = 0 is an input error

Orientation:
- At each climbing step, an odd position means the running digest is the
  LEFT operand, an even position means it is the RIGHT operand.
- PARITY_FIXED (default) reads the parity of the ORIGINAL leaf position at
  every step. This is what deployed verifiers do and what existing
  commitments were checked against; it only agrees with the tree for
  leaves whose position parity survives every halving.
- PARITY_TRACKING moves the position to its parent after each step, which
  is the textbook CBMT climb. Opt-in only.
"""
from __future__ import annotations

import hmac
from dataclasses import dataclass
from typing import Any, Literal, Optional, Sequence

from core.crypto.hashing import (
    ZERO_DIGEST,
    HasherFactory,
    digest_from_hex,
    ensure_digest,
    hash_concat,
    to_hex,
)
from core.merkle.tree_index import (
    first_leaf_position,
    is_left,
    leaf_position as position_of_leaf,
    parent,
    sibling,
    tree_size,
)
from core.schemas.errors import (
    EmptyProofPathException,
    IndexOutOfRangeException,
    InvalidInputException,
)


# Empty tree sentinel
EMPTY_TREE_ROOT: bytes = ZERO_DIGEST

PARITY_FIXED = "fixed"
PARITY_TRACKING = "tracking"
PARITY_MODES: tuple[str, ...] = (PARITY_FIXED, PARITY_TRACKING)

ParityMode = Literal["fixed", "tracking"]


@dataclass(frozen=True)
class MerkleProof:
    """
    Inclusion proof for a single leaf against a committed root.

    Attributes:
        position: Tree position of the leaf (n - 1 + leaf index)
        leaf: The leaf digest being proven
        path: Climbing siblings bottom-up, then the secondary root
        root: The committed root, H(secondary_root || raw_root)
    """
    position: int
    leaf: bytes
    path: list[bytes]
    root: bytes

    def __post_init__(self) -> None:
        """Validate proof structure."""
        if self.position < 0:
            raise IndexOutOfRangeException(
                f"Leaf position must be non-negative, got {self.position}",
                index=self.position,
            )
        if not self.path:
            raise EmptyProofPathException()

    @property
    def siblings(self) -> list[bytes]:
        """Climbing entries (all but the last path entry)."""
        return self.path[:-1]

    @property
    def secondary_root(self) -> bytes:
        return self.path[-1]

    def to_dict(self) -> dict[str, Any]:
        """Hex-encoded form for JSON output."""
        return {
            "position": self.position,
            "leaf": to_hex(self.leaf),
            "path": [to_hex(p) for p in self.path],
            "root": to_hex(self.root),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MerkleProof":
        """Parse the form produced by to_dict()."""
        try:
            position = int(data["position"])
            leaf = digest_from_hex(data["leaf"], "leaf")
            path = [digest_from_hex(p, f"path[{i}]") for i, p in enumerate(data["path"])]
            root = digest_from_hex(data["root"], "root")
        except KeyError as e:
            raise InvalidInputException(f"Proof is missing field: {e.args[0]}") from e
        return cls(position=position, leaf=leaf, path=path, root=root)


def merge(left: bytes, right: bytes, factory: Optional[HasherFactory] = None) -> bytes:
    """
    Compute the parent digest of two child nodes.

    Args:
        left: Left child digest
        right: Right child digest
        factory: Hasher constructor (defaults to BLAKE2b-256)

    Returns:
        H(left || right)
    """
    return hash_concat(left, right, factory)


def commit_root(
    raw_root: bytes,
    secondary_root: bytes,
    factory: Optional[HasherFactory] = None,
) -> bytes:
    """
    Merge a raw tree root with the independently committed secondary root.

    The order is fixed: H(secondary_root || raw_root).
    """
    return hash_concat(secondary_root, raw_root, factory)


def build_tree(
    leaves: Sequence[bytes],
    factory: Optional[HasherFactory] = None,
) -> list[bytes]:
    """
    Build the full array-backed CBMT for a sequence of leaf digests.

    Algorithm:
    1. Allocate 2n - 1 slots
    2. Copy leaves into slots n - 1 .. 2n - 2 in input order
    3. For i from n - 2 down to 0: slot[i] = merge(slot[2i+1], slot[2i+2])

    Decreasing index order guarantees both children exist before
    their parent is computed.

    Args:
        leaves: Leaf digests (32 bytes each). Order matters.
        factory: Hasher constructor (defaults to BLAKE2b-256)

    Returns:
        List of 2n - 1 digests; empty list for no leaves

    Raises:
        InvalidDigestException: If any leaf is not 32 bytes
    """
    n = len(leaves)
    if n == 0:
        return []

    tree: list[bytes] = [ZERO_DIGEST] * tree_size(n)
    first_leaf = first_leaf_position(n)
    for i, leaf in enumerate(leaves):
        tree[first_leaf + i] = ensure_digest(leaf, f"leaves[{i}]")

    for i in range(first_leaf - 1, -1, -1):
        left = 2 * i + 1
        tree[i] = merge(tree[left], tree[left + 1], factory)

    return tree


def build_merkle_root(
    leaves: Sequence[bytes],
    factory: Optional[HasherFactory] = None,
) -> bytes:
    """
    Build a CBMT root from a sequence of leaf digests.

    Algorithm:
    1. If empty: return EMPTY_TREE_ROOT (all zeros)
    2. If single leaf: return the leaf itself
    3. Otherwise: build_tree(leaves)[0]

    Args:
        leaves: Leaf digests (32 bytes each). Order matters and is preserved.
        factory: Hasher constructor (defaults to BLAKE2b-256)

    Returns:
        32-byte root

    Example:
        >>> a, b = b"\\x00" * 31 + b"\\x01", b"\\x00" * 31 + b"\\x02"
        >>> build_merkle_root([a, b]) == merge(a, b)
        True
    """
    if len(leaves) == 0:
        return EMPTY_TREE_ROOT
    return build_tree(leaves, factory)[0]


def build_committed_root(
    leaves: Sequence[bytes],
    secondary_root: bytes,
    factory: Optional[HasherFactory] = None,
) -> bytes:
    """Root of leaves merged with a secondary root: H(secondary || raw)."""
    secondary_root = ensure_digest(secondary_root, "secondary_root")
    return commit_root(build_merkle_root(leaves, factory), secondary_root, factory)


def build_merkle_proof(
    leaves: Sequence[bytes],
    index: int,
    secondary_root: bytes,
    factory: Optional[HasherFactory] = None,
) -> MerkleProof:
    """
    Generate an inclusion proof for the leaf at the given index.

    Algorithm:
    1. Build the full tree
    2. From the leaf position, record sibling(pos) and move to parent(pos)
       until the root is reached
    3. Append the secondary root as the final path entry

    The recorded siblings follow the true tree shape, so the proof always
    verifies with PARITY_TRACKING. With PARITY_FIXED it verifies only when
    the leaf's position parity matches the parity of every ancestor below
    the root.

    Args:
        leaves: Leaf digests
        index: 0-based index of the leaf to prove
        secondary_root: Independently committed root merged last
        factory: Hasher constructor (defaults to BLAKE2b-256)

    Returns:
        MerkleProof whose root is H(secondary_root || raw_root)

    Raises:
        InvalidInputException: If leaves is empty
        IndexOutOfRangeException: If index is out of range
    """
    if len(leaves) == 0:
        raise InvalidInputException("Cannot generate proof for empty leaf list")

    position = position_of_leaf(index, len(leaves))
    secondary_root = ensure_digest(secondary_root, "secondary_root")
    tree = build_tree(leaves, factory)

    path: list[bytes] = []
    current = position
    while current > 0:
        path.append(tree[sibling(current)])
        current = parent(current)
    path.append(secondary_root)

    return MerkleProof(
        position=position,
        leaf=tree[position],
        path=path,
        root=commit_root(tree[0], secondary_root, factory),
    )


def _check_parity_mode(parity_mode: str) -> None:
    if parity_mode not in PARITY_MODES:
        raise InvalidInputException(
            f"Unknown parity mode {parity_mode!r}, expected one of {PARITY_MODES}"
        )


def fold_raw_root(
    leaf_position: int,
    leaf: bytes,
    siblings: Sequence[bytes],
    parity_mode: ParityMode = PARITY_FIXED,
    factory: Optional[HasherFactory] = None,
) -> bytes:
    """
    Climb from a leaf to the raw tree root using sibling digests.

    Args:
        leaf_position: Position whose parity decides orientation
        leaf: Starting digest
        siblings: Climbing entries, bottom-up (no secondary root)
        parity_mode: PARITY_FIXED or PARITY_TRACKING
        factory: Hasher constructor (defaults to BLAKE2b-256)

    Returns:
        Raw root digest
    """
    _check_parity_mode(parity_mode)
    current = leaf
    position = leaf_position
    for entry in siblings:
        if is_left(position):
            current = merge(current, entry, factory)
        else:
            current = merge(entry, current, factory)
        if parity_mode == PARITY_TRACKING and position > 0:
            position = parent(position)
    return current


def recompute_root(
    leaf_position: int,
    leaf: bytes,
    proof_path: Sequence[bytes],
    parity_mode: ParityMode = PARITY_FIXED,
    factory: Optional[HasherFactory] = None,
) -> bytes:
    """
    Recompute the committed root implied by a leaf and its proof path.

    Raises:
        EmptyProofPathException: If proof_path is empty (before hashing)
        InvalidDigestException: If any input is not 32 bytes
        IndexOutOfRangeException: If leaf_position is negative
    """
    if len(proof_path) == 0:
        raise EmptyProofPathException()
    if leaf_position < 0:
        raise IndexOutOfRangeException(
            f"Leaf position must be non-negative, got {leaf_position}",
            index=leaf_position,
        )
    leaf = ensure_digest(leaf, "leaf")
    path = [ensure_digest(p, f"proof_path[{i}]") for i, p in enumerate(proof_path)]

    raw_root = fold_raw_root(leaf_position, leaf, path[:-1], parity_mode, factory)
    return commit_root(raw_root, path[-1], factory)


def verify_merkle_proof(
    leaf_position: int,
    leaf: bytes,
    proof_path: Sequence[bytes],
    root: bytes,
    parity_mode: ParityMode = PARITY_FIXED,
    factory: Optional[HasherFactory] = None,
) -> bool:
    """
    Verify a leaf against a claimed committed root.

    Algorithm:
    1. current = leaf
    2. For each of the first m - 1 path entries, merge according to the
       parity of leaf_position (odd: current on the left)
    3. current = H(proof_path[m-1] || current)
    4. Accept iff current equals root byte for byte

    Args:
        leaf_position: Leaf position (non-negative)
        leaf: Claimed leaf digest
        proof_path: m >= 1 digests; the last is the secondary root
        root: Claimed committed root
        parity_mode: PARITY_FIXED (default) or PARITY_TRACKING
        factory: Hasher constructor (defaults to BLAKE2b-256)

    Returns:
        True if the recomputed root equals root, False otherwise

    Raises:
        EmptyProofPathException: If proof_path is empty
        InvalidDigestException: If any digest is not 32 bytes
    """
    # recompute_root signals an empty path before the root is looked at
    candidate = recompute_root(leaf_position, leaf, proof_path, parity_mode, factory)
    root = ensure_digest(root, "root")
    return hmac.compare_digest(candidate, root)


def verify_proof_object(
    proof: MerkleProof,
    parity_mode: ParityMode = PARITY_FIXED,
    factory: Optional[HasherFactory] = None,
) -> bool:
    """Verify a MerkleProof against its own root."""
    return verify_merkle_proof(
        proof.position, proof.leaf, proof.path, proof.root, parity_mode, factory
    )


__all__ = [
    "EMPTY_TREE_ROOT",
    "PARITY_FIXED",
    "PARITY_TRACKING",
    "PARITY_MODES",
    "ParityMode",
    "MerkleProof",
    "merge",
    "commit_root",
    "build_tree",
    "build_merkle_root",
    "build_committed_root",
    "build_merkle_proof",
    "fold_raw_root",
    "recompute_root",
    "verify_merkle_proof",
    "verify_proof_object",
]
