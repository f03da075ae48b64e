"""
Merkle Tree Unit Tests
Tests for beacon_core/merkle/merkle_tree.py and merkle_proofs.py

Tests:
- Conformance vectors (4-leaf tree, 5-field header)
- Empty and single-leaf trees
- Proof length law and round trip for every index
- Tampered values, roots, siblings and indices fail
- Wrong-length proofs fail without raising
"""
import hashlib

import pytest

from beacon_core.merkle import (
    MerkleProof,
    MerkleTree,
    build_tree,
    compute_proof,
    merkle_parent,
    merkleize,
    next_power_of_two,
    proof_length,
    prove,
    verify_proof,
)
from beacon_core.schemas.errors import (
    ChunkLengthMismatchException,
    IndexOutOfRangeException,
)
from beacon_core.ssz.chunks import ZERO_CHUNK

from fixtures import make_chunk


def h(left: bytes, right: bytes) -> bytes:
    return hashlib.sha256(left + right).digest()


@pytest.fixture
def four_chunks():
    return [make_chunk(i) for i in (0x01, 0x02, 0x03, 0x04)]


class TestConformanceVectors:
    """Fixed vectors shared with the on-chain verifier."""

    def test_four_leaf_root(self, four_chunks):
        c0, c1, c2, c3 = four_chunks

        tree = build_tree(four_chunks)

        assert tree.root == h(h(c0, c1), h(c2, c3))

    def test_four_leaf_proof_for_index_0(self, four_chunks):
        c0, c1, c2, c3 = four_chunks

        proof = compute_proof(build_tree(four_chunks), 0)

        assert proof == (c1, h(c2, c3))

    def test_four_leaf_proof_for_index_3(self, four_chunks):
        c0, c1, c2, c3 = four_chunks

        proof = compute_proof(build_tree(four_chunks), 3)

        assert proof == (c2, h(c0, c1))

    def test_header_tree_pads_to_eight(self, header_chunks):
        c0, c1, c2, c3, c4 = header_chunks
        z = ZERO_CHUNK
        expected = h(h(h(c0, c1), h(c2, c3)), h(h(c4, z), h(z, z)))

        tree = build_tree(header_chunks)

        assert tree.root == expected
        assert proof_length(len(tree)) == 3

    def test_header_proof_for_body_root(self, header_chunks):
        c0, c1, c2, c3, c4 = header_chunks
        z = ZERO_CHUNK

        proof = compute_proof(build_tree(header_chunks), 4)

        assert proof == (z, h(z, z), h(h(c0, c1), h(c2, c3)))

    @pytest.mark.parametrize("index", range(5))
    def test_header_proof_length_is_three(self, header_chunks, index):
        assert len(compute_proof(build_tree(header_chunks), index)) == 3

    def test_three_leaf_tree(self):
        c = [make_chunk(i) for i in (0x0a, 0x0b, 0x0c)]

        tree = build_tree(c)

        assert tree.root == h(h(c[0], c[1]), h(c[2], ZERO_CHUNK))
        assert tree.compute_proof(2) == (ZERO_CHUNK, h(c[0], c[1]))


class TestDegenerateTrees:
    """Empty and single-leaf trees."""

    def test_empty_root_is_zero(self):
        assert merkleize([]) == ZERO_CHUNK
        assert build_tree([]).root == ZERO_CHUNK

    def test_empty_tree_has_no_proofs(self):
        with pytest.raises(IndexOutOfRangeException):
            build_tree([]).compute_proof(0)

    def test_single_leaf_root_is_leaf(self):
        leaf = make_chunk(0x07)
        tree = build_tree([leaf])

        assert tree.root == leaf
        assert tree.compute_proof(0) == ()
        assert verify_proof(leaf, 0, leaf, [])

    def test_all_zero_leaves(self):
        tree = build_tree([ZERO_CHUNK, ZERO_CHUNK])

        assert tree.root == h(ZERO_CHUNK, ZERO_CHUNK)


class TestProofLengthLaw:
    """Proof length equals log2(next_power_of_two(n))."""

    @pytest.mark.parametrize("n,expected", [(0, 0), (1, 0), (2, 1), (3, 2), (4, 2), (5, 3), (8, 3), (9, 4)])
    def test_proof_length(self, n, expected):
        assert proof_length(n) == expected

    @pytest.mark.parametrize("n,expected", [(0, 1), (1, 1), (2, 2), (3, 4), (5, 8), (8, 8), (9, 16)])
    def test_next_power_of_two(self, n, expected):
        assert next_power_of_two(n) == expected

    @pytest.mark.parametrize("n", [2, 3, 5, 7, 8, 13])
    def test_every_index_round_trips(self, n):
        chunks = [make_chunk(i + 1) for i in range(n)]
        tree = build_tree(chunks)

        for index in range(n):
            proof = tree.compute_proof(index)
            assert len(proof) == proof_length(n)
            assert verify_proof(tree.root, index, chunks[index], proof)


class TestVerifyProof:
    """Tests for verify_proof() failure modes."""

    def test_tampered_value_fails(self, header_chunks):
        tree = build_tree(header_chunks)
        proof = tree.compute_proof(3)

        assert not verify_proof(tree.root, 3, make_chunk(0xff), proof)

    def test_tampered_root_fails(self, header_chunks):
        tree = build_tree(header_chunks)
        proof = tree.compute_proof(3)

        assert not verify_proof(make_chunk(0xee), 3, header_chunks[3], proof)

    def test_tampered_sibling_fails(self, header_chunks):
        tree = build_tree(header_chunks)
        proof = list(tree.compute_proof(1))
        proof[1] = make_chunk(0xdd)

        assert not verify_proof(tree.root, 1, header_chunks[1], proof)

    def test_wrong_index_fails(self, header_chunks):
        tree = build_tree(header_chunks)
        proof = tree.compute_proof(2)

        assert not verify_proof(tree.root, 3, header_chunks[2], proof)

    def test_short_proof_fails(self, header_chunks):
        tree = build_tree(header_chunks)
        proof = tree.compute_proof(0)

        assert not verify_proof(tree.root, 0, header_chunks[0], proof[:-1])
        assert not verify_proof(tree.root, 0, header_chunks[0], [])

    def test_long_proof_fails(self, header_chunks):
        tree = build_tree(header_chunks)
        proof = tree.compute_proof(0) + (ZERO_CHUNK,)

        assert not verify_proof(tree.root, 0, header_chunks[0], proof)

    def test_index_bits_beyond_proof_ignored(self, four_chunks):
        tree = build_tree(four_chunks)
        proof = tree.compute_proof(1)

        # only the low two bits are consumed by a two-sibling proof
        assert verify_proof(tree.root, 1 + 4, four_chunks[1], proof)

    def test_bit_order_is_low_bit_first(self, four_chunks):
        c0, c1, c2, c3 = four_chunks
        root = h(h(c0, c1), h(c2, c3))

        assert verify_proof(root, 2, c2, [c3, h(c0, c1)])
        assert not verify_proof(root, 1, c2, [c3, h(c0, c1)])

    def test_negative_index_raises(self, four_chunks):
        tree = build_tree(four_chunks)

        with pytest.raises(IndexOutOfRangeException):
            verify_proof(tree.root, -1, four_chunks[0], tree.compute_proof(0))

    def test_wrong_sized_sibling_raises(self, four_chunks):
        tree = build_tree(four_chunks)

        with pytest.raises(ChunkLengthMismatchException):
            verify_proof(tree.root, 0, four_chunks[0], [bytes(31), ZERO_CHUNK])

    def test_wrong_sized_leaf_raises(self, four_chunks):
        tree = build_tree(four_chunks)

        with pytest.raises(ChunkLengthMismatchException):
            verify_proof(tree.root, 0, b"\x01", tree.compute_proof(0))


class TestMerkleTree:
    """Tests for MerkleTree construction and accessors."""

    def test_rejects_wrong_sized_chunk(self):
        with pytest.raises(ChunkLengthMismatchException) as exc_info:
            MerkleTree.build([make_chunk(1), bytes(33)])

        assert exc_info.value.details["position"] == 1

    def test_index_out_of_range(self, four_chunks):
        tree = MerkleTree.build(four_chunks)

        with pytest.raises(IndexOutOfRangeException):
            tree.compute_proof(4)
        with pytest.raises(IndexOutOfRangeException):
            tree.compute_proof(-1)

    def test_original_chunks_kept_unpadded(self, header_chunks):
        tree = MerkleTree.build(header_chunks)

        assert len(tree) == 5
        assert tree.chunks == tuple(header_chunks)
        assert list(tree) == list(header_chunks)

    def test_build_does_not_mutate_input(self, header_chunks):
        chunks = list(header_chunks)
        MerkleTree.build(chunks)

        assert chunks == list(header_chunks)

    def test_verify_proof_method(self, four_chunks):
        tree = MerkleTree.build(four_chunks)

        assert tree.verify_proof(2, four_chunks[2], tree.compute_proof(2))

    def test_merkle_parent_order_matters(self):
        a, b = make_chunk(1), make_chunk(2)

        assert merkle_parent(a, b) == h(a, b)
        assert merkle_parent(a, b) != merkle_parent(b, a)


class TestMerkleProofObject:
    """Tests for MerkleProof and prove()."""

    def test_prove_and_verify(self, header_chunks):
        proof = prove(header_chunks, 3)

        assert proof.leaf == header_chunks[3]
        assert proof.index == 3
        assert proof.root == merkleize(header_chunks)
        assert proof.verify()

    def test_verify_against_other_root(self, header_chunks):
        proof = prove(header_chunks, 3)

        assert not proof.verify(make_chunk(0x99))

    def test_negative_index_rejected(self):
        with pytest.raises(IndexOutOfRangeException):
            MerkleProof(leaf=ZERO_CHUNK, index=-1, siblings=(), root=ZERO_CHUNK)
