"""Fuzz harness for incremental insertion & inclusion proof round trips."""
from __future__ import annotations
import atheris
import sys
import hashlib

with atheris.instrument_imports():
    from fringe_core.accumulator import IncrementalMerkleAccumulator
    from fringe_core.errors import CapacityExceeded
    from fringe_core.felt import Felt, STARK_PRIME
    from fringe_core.merkle import compute_root


def TestOneInput(data: bytes):  # noqa: N802
    if len(data) < 2:
        return
    # First byte picks the height (bounded to keep each run cheap)
    height = 1 + data[0] % 7
    size = max(1, data[1] % 16)
    chunks = [data[i : i + size] for i in range(2, len(data), size)]
    leaves = [
        Felt(int.from_bytes(hashlib.sha256(c).digest(), "big") % STARK_PRIME)
        for c in chunks
    ]
    acc = IncrementalMerkleAccumulator(height)
    for n, leaf in enumerate(leaves):
        try:
            acc.add_leaf(leaf)
        except CapacityExceeded:
            if n != acc.capacity:
                raise RuntimeError("capacity refused early")
            break
    if not acc.leaf_count:
        return
    idx = data[-1] % acc.leaf_count
    root = compute_root(acc.leaf(idx), idx, acc.path(idx), height=height)
    if root != acc.root():
        raise RuntimeError("valid inclusion proof failed")


def main():
    atheris.Setup(sys.argv, TestOneInput, enable_python_coverage=True)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
