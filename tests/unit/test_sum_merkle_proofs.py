"""
Sum Merkle Proof Wrapper Tests
Tests for merklesum/merkle/sum_merkle_proofs.py
"""
import pytest

from merklesum.merkle import (
    SumMerkleProver,
    SumMerkleVerifier,
    build_tree,
    get_proof,
    get_root,
)
from merklesum.schemas.errors import (
    EmptyInputError,
    IndexOutOfRangeError,
    MalformedProofError,
)

from fixtures.common import make_leaves


class TestSumMerkleProver:
    """Tests for SumMerkleProver."""

    def test_construct(self):
        values, data = make_leaves(10)
        assert SumMerkleProver.construct(values, data) == build_tree(values, data)

    def test_prove(self):
        values, data = make_leaves(10)
        proof = SumMerkleProver.prove(values, data, index=4)

        assert proof == get_proof(build_tree(values, data), 4)

    def test_prove_rejects_internal_index(self):
        """Leaf-based proving only accepts leaf indices."""
        values, data = make_leaves(10)
        with pytest.raises(IndexOutOfRangeError):
            SumMerkleProver.prove(values, data, index=10)

    def test_prove_empty(self):
        with pytest.raises(EmptyInputError):
            SumMerkleProver.prove([], [], index=0)

    def test_compute_root(self):
        values, data = make_leaves(100)
        root = SumMerkleProver.compute_root(values, data)

        assert root.sum == 4950
        assert root == get_root(build_tree(values, data))


class TestSumMerkleVerifier:
    """Tests for SumMerkleVerifier."""

    def test_verify_against_root_node(self):
        values, data = make_leaves(25)
        tree = SumMerkleProver.construct(values, data)
        root = get_root(tree)

        for i in range(25):
            assert SumMerkleVerifier.verify(data[i], values[i], get_proof(tree, i), root)

    def test_verify_leaf_in_root(self):
        values, data = make_leaves(9)
        tree = build_tree(values, data)
        root = get_root(tree)
        proof = get_proof(tree, 8)

        assert SumMerkleVerifier.verify_leaf_in_root(
            data[8],
            values[8],
            proof.side_nodes,
            proof.node_sums,
            proof.directions,
            root.hash,
            root.sum,
        )

    def test_verify_leaf_in_wrong_root(self):
        values, data = make_leaves(9)
        tree = build_tree(values, data)
        root = get_root(tree)
        proof = get_proof(tree, 8)

        assert not SumMerkleVerifier.verify_leaf_in_root(
            data[8],
            values[8],
            proof.side_nodes,
            proof.node_sums,
            proof.directions,
            root.hash,
            root.sum - 1,
        )

    def test_verify_leaf_in_root_malformed(self):
        values, data = make_leaves(9)
        tree = build_tree(values, data)
        root = get_root(tree)
        proof = get_proof(tree, 0)

        with pytest.raises(MalformedProofError):
            SumMerkleVerifier.verify_leaf_in_root(
                data[0],
                values[0],
                proof.side_nodes,
                [],
                proof.directions,
                root.hash,
                root.sum,
            )
