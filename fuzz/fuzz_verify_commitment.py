"""Fuzz harness for root commitment verification.

Goals:
  - Exercise JSON parsing / model validation of commitment documents.
  - Stress RFC 8785 canonicalisation and Ed25519 verification of the body.
  - Ensure malformed input yields False, never an unexpected exception.

Strategy:
  - Decode fuzz input as UTF-8 JSON; if it is an object, hand it straight to
    the SDK verifier.
  - Otherwise sign a commitment over leaves derived from the input and
    optionally flip a signature bit.
"""
from __future__ import annotations
import atheris
import sys
import json

with atheris.instrument_imports():
    from fringe_core.accumulator import IncrementalMerkleAccumulator
    from fringe_core.commitment import ed25519_generate, sign_root
    from fringe_core.felt import B64, B64D, Felt
    from fringe_sdk.verify import verify_commitment

_SK, _PK = ed25519_generate()


def _synthesize(data: bytes) -> dict:
    acc = IncrementalMerkleAccumulator(6)
    for b in data[: acc.capacity]:
        acc.add_leaf(Felt(b))
    doc = sign_root(acc, _SK, _PK).model_dump()
    if data and data[0] % 5 == 0:
        sig = bytearray(B64D(doc["signature_b64"]))
        sig[0] ^= 0x01
        doc["signature_b64"] = B64(bytes(sig))
    return doc


def TestOneInput(data: bytes):  # noqa: N802 (Atheris entrypoint)
    try:
        obj = json.loads(data.decode("utf-8", errors="ignore"))
    except ValueError:
        obj = None
    if isinstance(obj, dict):
        verify_commitment(obj)
        return
    doc = _synthesize(data)
    ok = verify_commitment(doc)
    tampered = bool(data) and data[0] % 5 == 0
    if ok == tampered:
        raise RuntimeError("commitment verification returned the wrong verdict")


def main():
    atheris.Setup(sys.argv, TestOneInput, enable_python_coverage=True)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
