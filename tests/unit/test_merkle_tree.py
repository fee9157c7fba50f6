"""
CBMT Unit Tests
Tests for core/merkle/merkle_tree.py

Required behavior:
1. Empty leaves - root is 32 zero bytes
2. Single leaf - root equals the leaf
3. Two leaves - root is H(leaf0 || leaf1)
4. Root determinism and order sensitivity
5. Proof verification and tamper detection
6. Fixed parity rejects some genuine proofs; tracking accepts all
7. Empty proof path is an input error, never a rejection
"""
import pytest

from core.crypto.hashing import ZERO_DIGEST, hash_concat, hasher_factory
from core.merkle.merkle_tree import (
    EMPTY_TREE_ROOT,
    PARITY_FIXED,
    PARITY_TRACKING,
    MerkleProof,
    build_committed_root,
    build_merkle_proof,
    build_merkle_root,
    build_tree,
    commit_root,
    fold_raw_root,
    merge,
    recompute_root,
    verify_merkle_proof,
    verify_proof_object,
)
from core.schemas.errors import (
    EmptyProofPathException,
    IndexOutOfRangeException,
    InvalidDigestException,
    InvalidInputException,
)

from fixtures import make_leaf, make_leaves, small_digest


class TestEmptyTree:
    """Tests for empty tree behavior."""

    def test_empty_leaves_returns_zero_root(self):
        """build_merkle_root([]) returns 32 zero bytes."""
        result = build_merkle_root([])

        assert result == b"\x00" * 32
        assert result == EMPTY_TREE_ROOT == ZERO_DIGEST

    def test_empty_tree_has_no_nodes(self):
        assert build_tree([]) == []

    def test_build_proof_empty_raises(self, secondary_root):
        """Cannot generate proof for empty tree."""
        with pytest.raises(InvalidInputException, match="empty"):
            build_merkle_proof([], 0, secondary_root)


class TestSingleLeaf:
    """Tests for single leaf tree behavior."""

    def test_single_leaf_root_equals_leaf(self):
        leaf = make_leaf("single")
        assert build_merkle_root([leaf]) == leaf

    def test_single_leaf_proof_is_secondary_only(self, secondary_root):
        """With one leaf the path holds only the secondary root (m = 1)."""
        leaf = make_leaf("only one")
        proof = build_merkle_proof([leaf], 0, secondary_root)

        assert proof.position == 0
        assert proof.siblings == []
        assert proof.path == [secondary_root]
        assert proof.root == hash_concat(secondary_root, leaf)

    def test_single_entry_path_verifies(self, secondary_root):
        """m = 1: root = H(proof_path[0] || leaf)."""
        leaf = make_leaf("x")
        root = hash_concat(secondary_root, leaf)

        assert verify_merkle_proof(0, leaf, [secondary_root], root)


class TestTwoLeaves:
    """Tests for the smallest internal node."""

    def test_two_leaf_root(self):
        """Root of [0x00..01, 0x00..02] is H(0x00..01 || 0x00..02)."""
        a = small_digest(1)
        b = small_digest(2)

        assert build_merkle_root([a, b]) == hash_concat(a, b)
        assert build_merkle_root([a, b]) == merge(a, b)

    def test_two_leaf_tree_layout(self):
        a, b = make_leaves(2)
        tree = build_tree([a, b])

        assert tree == [merge(a, b), a, b]

    def test_both_proofs_verify_fixed(self, secondary_root):
        leaves = make_leaves(2)
        for i in range(2):
            proof = build_merkle_proof(leaves, i, secondary_root)
            assert verify_proof_object(proof, PARITY_FIXED)


class TestRootDeterminism:
    """Tests for deterministic root computation."""

    def test_same_leaves_same_root(self):
        leaves = make_leaves(7)
        roots = [build_merkle_root(leaves) for _ in range(10)]

        assert all(r == roots[0] for r in roots)

    def test_leaf_order_matters(self):
        leaves = make_leaves(3)

        assert build_merkle_root(leaves) != build_merkle_root(list(reversed(leaves)))

    def test_swapping_two_leaves_changes_root(self):
        leaves = make_leaves(4)
        swapped = [leaves[1], leaves[0]] + leaves[2:]

        assert build_merkle_root(leaves) != build_merkle_root(swapped)

    def test_does_not_mutate_input(self):
        leaves = make_leaves(5)
        snapshot = list(leaves)
        build_merkle_root(leaves)

        assert leaves == snapshot

    def test_three_leaf_shape(self, abc_leaves):
        """[A, B, C] places A at position 2: root = H(H(B || C) || A)."""
        a, b, c = abc_leaves

        assert build_merkle_root(abc_leaves) == merge(merge(b, c), a)

    def test_internal_nodes_hash_children(self):
        leaves = make_leaves(6)
        tree = build_tree(leaves)

        assert len(tree) == 11
        for i in range(5):
            assert tree[i] == merge(tree[2 * i + 1], tree[2 * i + 2])

    def test_rejects_wrong_width_leaf(self):
        with pytest.raises(InvalidDigestException):
            build_merkle_root([make_leaf("a"), b"short"])

    def test_alternative_primitive(self):
        """A SHA-256 factory yields a different root over the same leaves."""
        leaves = make_leaves(4)

        assert build_merkle_root(leaves, hasher_factory("sha256")) != build_merkle_root(leaves)


class TestCommittedRoot:
    """Tests for merging with the secondary root."""

    def test_order_is_secondary_then_raw(self, secondary_root):
        leaves = make_leaves(3)
        raw = build_merkle_root(leaves)

        assert build_committed_root(leaves, secondary_root) == hash_concat(secondary_root, raw)
        assert commit_root(raw, secondary_root) == hash_concat(secondary_root, raw)

    def test_empty_tree_commits_zero_root(self, secondary_root):
        assert build_committed_root([], secondary_root) == hash_concat(secondary_root, ZERO_DIGEST)


class TestThreeLeafExample:
    """The [A, B, C] example: two leaves verify under fixed parity, one does not."""

    def test_proof_for_a(self, abc_leaves, secondary_root):
        """Leaf A at position 2: path [H(B || C), S]."""
        a, b, c = abc_leaves
        root = build_committed_root(abc_leaves, secondary_root)
        path = [merge(b, c), secondary_root]

        assert verify_merkle_proof(2, a, path, root)

    def test_proof_for_b(self, abc_leaves, secondary_root):
        """Leaf B at position 3: path [C, A, S]."""
        a, b, c = abc_leaves
        root = build_committed_root(abc_leaves, secondary_root)

        assert verify_merkle_proof(3, b, [c, a, secondary_root], root)

    def test_generated_proofs_match_expected_paths(self, abc_leaves, secondary_root):
        a, b, c = abc_leaves

        assert build_merkle_proof(abc_leaves, 0, secondary_root).path == [merge(b, c), secondary_root]
        assert build_merkle_proof(abc_leaves, 1, secondary_root).path == [c, a, secondary_root]
        assert build_merkle_proof(abc_leaves, 2, secondary_root).path == [b, a, secondary_root]

    def test_proof_for_c_rejected_with_fixed_parity(self, abc_leaves, secondary_root):
        """Position 4 is even, but its parent (position 1) is a left child."""
        proof = build_merkle_proof(abc_leaves, 2, secondary_root)

        assert proof.position == 4
        assert not verify_proof_object(proof, PARITY_FIXED)
        assert verify_proof_object(proof, PARITY_TRACKING)

    def test_tampered_leaf_fails(self, abc_leaves, secondary_root):
        a, b, c = abc_leaves
        root = build_committed_root(abc_leaves, secondary_root)
        tampered = make_leaf("D")

        assert not verify_merkle_proof(2, tampered, [merge(b, c), secondary_root], root)

    def test_tampered_sibling_fails(self, abc_leaves, secondary_root):
        a, b, c = abc_leaves
        root = build_committed_root(abc_leaves, secondary_root)

        assert not verify_merkle_proof(3, b, [make_leaf("D"), a, secondary_root], root)

    def test_tampered_secondary_fails(self, abc_leaves, secondary_root):
        a, b, c = abc_leaves
        root = build_committed_root(abc_leaves, secondary_root)

        assert not verify_merkle_proof(2, a, [merge(b, c), make_leaf("other")], root)

    @pytest.mark.parametrize("byte_index", [0, 15, 31])
    def test_one_byte_flip_anywhere_fails(self, abc_leaves, secondary_root, byte_index):
        a, b, c = abc_leaves
        root = build_committed_root(abc_leaves, secondary_root)
        path = [merge(b, c), secondary_root]
        assert verify_merkle_proof(2, a, path, root)

        def flip(digest):
            mutated = bytearray(digest)
            mutated[byte_index] ^= 0x01
            return bytes(mutated)

        assert not verify_merkle_proof(2, flip(a), path, root)
        for i in range(len(path)):
            tampered = list(path)
            tampered[i] = flip(path[i])
            assert not verify_merkle_proof(2, a, tampered, root)
        assert not verify_merkle_proof(2, a, path, flip(root))

    def test_wrong_root_fails(self, abc_leaves, secondary_root):
        a, b, c = abc_leaves
        raw_root = build_merkle_root(abc_leaves)

        assert not verify_merkle_proof(2, a, [merge(b, c), secondary_root], raw_root)


class TestProofVerification:
    """Tests for generated proofs across tree sizes."""

    @pytest.mark.parametrize("n", range(1, 18))
    def test_tracking_accepts_every_generated_proof(self, n, secondary_root):
        leaves = make_leaves(n)
        for i in range(n):
            proof = build_merkle_proof(leaves, i, secondary_root)
            assert verify_proof_object(proof, PARITY_TRACKING), f"n={n} i={i}"

    @pytest.mark.parametrize("n", [2, 4, 8, 16])
    def test_fixed_accepts_outer_leaves_of_perfect_tree(self, n, secondary_root):
        """The first and last leaf climb through all-left or all-right ancestors."""
        leaves = make_leaves(n)
        for i in (0, n - 1):
            proof = build_merkle_proof(leaves, i, secondary_root)
            assert verify_proof_object(proof, PARITY_FIXED), f"n={n} i={i}"

    def test_fixed_rejects_mixed_orientation_leaf(self, secondary_root):
        """n = 4: position 4 is a right child whose parent is a left child."""
        leaves = make_leaves(4)
        proof = build_merkle_proof(leaves, 1, secondary_root)

        assert proof.position == 4
        assert not verify_proof_object(proof, PARITY_FIXED)
        assert verify_proof_object(proof, PARITY_TRACKING)

    def test_proof_length_matches_depth(self, secondary_root):
        leaves = make_leaves(8)
        proof = build_merkle_proof(leaves, 5, secondary_root)

        assert len(proof.siblings) == 3
        assert len(proof.path) == 4
        assert proof.secondary_root == secondary_root

    def test_proof_root_is_committed_root(self, secondary_root):
        leaves = make_leaves(6)
        proof = build_merkle_proof(leaves, 3, secondary_root)

        assert proof.root == build_committed_root(leaves, secondary_root)

    def test_index_out_of_range(self, secondary_root):
        with pytest.raises(IndexOutOfRangeException):
            build_merkle_proof(make_leaves(3), 3, secondary_root)

    def test_fold_raw_root_reaches_tree_root(self, secondary_root):
        leaves = make_leaves(5)
        proof = build_merkle_proof(leaves, 1, secondary_root)

        raw = fold_raw_root(proof.position, proof.leaf, proof.siblings, PARITY_TRACKING)
        assert raw == build_merkle_root(leaves)

    def test_unknown_parity_mode(self, secondary_root):
        leaf = make_leaf("a")
        with pytest.raises(InvalidInputException):
            verify_merkle_proof(0, leaf, [secondary_root], leaf, parity_mode="sideways")


class TestInputErrors:
    """Malformed input raises; a mismatch never does."""

    def test_empty_path_raises(self):
        leaf = make_leaf("a")
        with pytest.raises(EmptyProofPathException):
            verify_merkle_proof(0, leaf, [], leaf)

    def test_empty_path_checked_before_hashing(self):
        """An empty path is reported even when other inputs are also bad."""
        with pytest.raises(EmptyProofPathException):
            recompute_root(-1, b"bad", [])

    def test_empty_path_reported_before_bad_root(self):
        with pytest.raises(EmptyProofPathException):
            verify_merkle_proof(0, make_leaf("a"), [], b"bad")

    def test_negative_position(self, secondary_root):
        leaf = make_leaf("a")
        with pytest.raises(IndexOutOfRangeException):
            verify_merkle_proof(-1, leaf, [secondary_root], leaf)

    def test_wrong_width_path_entry(self, secondary_root):
        leaf = make_leaf("a")
        with pytest.raises(InvalidDigestException):
            verify_merkle_proof(0, leaf, [b"\x00" * 16], leaf)

    def test_wrong_width_root(self, secondary_root):
        leaf = make_leaf("a")
        with pytest.raises(InvalidDigestException):
            verify_merkle_proof(0, leaf, [secondary_root], b"\x00")


class TestMerkleProofObject:
    """Tests for the MerkleProof dataclass."""

    def test_rejects_empty_path(self):
        leaf = make_leaf("a")
        with pytest.raises(EmptyProofPathException):
            MerkleProof(position=0, leaf=leaf, path=[], root=leaf)

    def test_rejects_negative_position(self, secondary_root):
        leaf = make_leaf("a")
        with pytest.raises(IndexOutOfRangeException):
            MerkleProof(position=-1, leaf=leaf, path=[secondary_root], root=leaf)

    def test_dict_round_trip(self, abc_leaves, secondary_root):
        proof = build_merkle_proof(abc_leaves, 1, secondary_root)
        data = proof.to_dict()

        assert data["position"] == 3
        assert all(entry.startswith("0x") for entry in data["path"])
        assert MerkleProof.from_dict(data) == proof

    def test_from_dict_missing_field(self):
        with pytest.raises(InvalidInputException, match="missing field"):
            MerkleProof.from_dict({"position": 0})

    def test_frozen(self, abc_leaves, secondary_root):
        proof = build_merkle_proof(abc_leaves, 0, secondary_root)
        with pytest.raises(AttributeError):
            proof.position = 5
