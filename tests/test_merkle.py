import pytest

from fringe_core.accumulator import IncrementalMerkleAccumulator
from fringe_core.errors import MalformedProof
from fringe_core.felt import Felt
from fringe_core.hashing import sha256_compress
from fringe_core.merkle import combine, compute_root, sibling_side, verify_inclusion


def _tag(a, b):
    # order-sensitive stand-in for the real hash
    return Felt((a.value * 1000 + b.value) % 1_000_003)


def test_parity_convention():
    assert sibling_side(0) == "R"
    assert sibling_side(1) == "L"
    assert combine(_tag, Felt(1), Felt(2), 0) == _tag(Felt(1), Felt(2))
    assert combine(_tag, Felt(1), Felt(2), 3) == _tag(Felt(2), Felt(1))


def test_compute_root_folds_by_index_bits():
    leaf, s0, s1 = Felt(5), Felt(6), Felt(7)
    # index 2 = binary 10: left child at level 0, right child at level 1
    expected = _tag(s1, _tag(leaf, s0))
    assert compute_root(leaf, 2, [s0, s1], _tag) == expected
    assert compute_root(leaf, 2, [(s0, "R"), (s1, "L")], _tag) == expected


def test_merkle_basic():
    leaves = [Felt(i + 1) for i in range(5)]
    acc = IncrementalMerkleAccumulator(4)
    acc.add_leaves(leaves)
    proof = acc.path(2)
    assert verify_inclusion(leaves[2], 2, proof, acc.root())
    assert not verify_inclusion(Felt(99), 2, proof, acc.root())


def test_tampered_sibling_fails():
    acc = IncrementalMerkleAccumulator(4)
    acc.add_leaves([Felt(i) for i in range(6)])
    proof = acc.path(3)
    sib, side = proof[1]
    proof[1] = (sha256_compress(sib, sib), side)
    assert not verify_inclusion(Felt(3), 3, proof, acc.root())


def test_wrong_index_fails_or_is_rejected():
    acc = IncrementalMerkleAccumulator(3)
    acc.add_leaves([Felt(1), Felt(2), Felt(3)])
    siblings = [s for s, _ in acc.path(0)]
    assert not verify_inclusion(Felt(1), 2, siblings, acc.root())
    with pytest.raises(MalformedProof):
        verify_inclusion(Felt(1), 2, acc.path(0), acc.root())


def test_malformed_paths_rejected():
    path = [Felt(1), Felt(2)]
    with pytest.raises(MalformedProof):
        compute_root(Felt(0), 0, path, height=4)
    with pytest.raises(MalformedProof):
        compute_root(Felt(0), -1, path)
    with pytest.raises(MalformedProof):
        compute_root(Felt(0), 4, path)
    with pytest.raises(MalformedProof):
        compute_root(Felt(0), 1, [(Felt(1), "R"), (Felt(2), "R")])
    assert compute_root(Felt(0), 3, path, height=3)


def test_empty_path_returns_leaf():
    assert compute_root(Felt(9), 0, []) == Felt(9)
