"""Inclusion proof fuzzing with mutated exported proof documents."""
from __future__ import annotations
import atheris
import sys
import random

with atheris.instrument_imports():
    from fringe_core.accumulator import IncrementalMerkleAccumulator
    from fringe_core.felt import Felt, STARK_PRIME
    from fringe_sdk.verify import verify_proof


def TestOneInput(data: bytes):  # noqa: N802
    if len(data) < 8:
        return
    seed = int.from_bytes(data[:4], "little")
    random.seed(seed)
    height = 2 + data[4] % 6
    body = data[5:]
    acc = IncrementalMerkleAccumulator(height)
    for i in range(0, min(len(body), acc.capacity)):
        acc.add_leaf(Felt(body[i] + 1000 * i))
    idx = seed % acc.leaf_count
    doc = acc.prove(idx).model_dump()
    # With some probability, mutate one sibling to exercise the negative path
    if random.random() < 0.2:
        sib = Felt.from_hex(doc["siblings_hex"][0])
        doc["siblings_hex"][0] = Felt((sib.value + 1) % STARK_PRIME).to_hex()
        if verify_proof(doc):
            raise RuntimeError("tampered proof unexpectedly verified")
    elif random.random() < 0.1:
        doc["sides"][0] = "L" if doc["sides"][0] == "R" else "R"
        if verify_proof(doc):
            raise RuntimeError("flipped side bit unexpectedly verified")
    elif not verify_proof(doc):
        raise RuntimeError("valid proof failed")


def main():
    atheris.Setup(sys.argv, TestOneInput, enable_python_coverage=True)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
