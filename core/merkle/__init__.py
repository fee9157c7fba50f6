"""
Complete Binary Merkle Tree (CBMT) commitments.

This package provides:
- build_merkle_root: compute a root from ordered leaf digests
- verify_merkle_proof: check a leaf and proof path against a committed root
- build_merkle_proof: generate a proof (climbing siblings + secondary root)
- RootBuilder / ProofVerifier: configured class wrappers
- tree_index: pure position arithmetic shared by both sides

Commitment Rules:
1. Parent hashing: H(left || right)
2. Empty tree: 32 zero bytes
3. Single leaf: root = leaf
4. Committed root: H(secondary_root || raw_root)

Usage:
    from core.merkle import build_merkle_root, build_merkle_proof, verify_merkle_proof

    raw_root = build_merkle_root(leaves)
    proof = build_merkle_proof(leaves, index=2, secondary_root=witness_root)
    ok = verify_merkle_proof(proof.position, proof.leaf, proof.path, proof.root)
"""
from .merkle_tree import (
    EMPTY_TREE_ROOT,
    PARITY_FIXED,
    PARITY_TRACKING,
    PARITY_MODES,
    ParityMode,
    MerkleProof,
    merge,
    commit_root,
    build_tree,
    build_merkle_root,
    build_committed_root,
    build_merkle_proof,
    fold_raw_root,
    recompute_root,
    verify_merkle_proof,
    verify_proof_object,
)

from .merkle_proofs import (
    RootBuilder,
    ProofVerifier,
)

from . import tree_index


__all__ = [
    # Core types
    "MerkleProof",
    "EMPTY_TREE_ROOT",
    "PARITY_FIXED",
    "PARITY_TRACKING",
    "PARITY_MODES",
    "ParityMode",
    # Core functions
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
    # Convenience classes
    "RootBuilder",
    "ProofVerifier",
    # Index arithmetic
    "tree_index",
]
