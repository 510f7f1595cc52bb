from __future__ import annotations
import hashlib
from typing import Callable, Dict

from .errors import HashBackendUnavailable, UnknownHashAlgorithm
from .felt import Felt, STARK_PRIME

Compressor = Callable[[Felt, Felt], Felt]


def sha256_compress(a: Felt, b: Felt) -> Felt:
    digest = hashlib.sha256(a.to_bytes_be() + b.to_bytes_be()).digest()
    return Felt(int.from_bytes(digest, "big") % STARK_PRIME)


def poseidon_compress(a: Felt, b: Felt) -> Felt:
    """Starknet Poseidon hash of two felts (requires the ``poseidon`` extra)."""
    try:
        from poseidon_py.poseidon_hash import poseidon_hash
    except ImportError as e:
        raise HashBackendUnavailable(
            "poseidon backend not installed; pip install 'fringe-merkle[poseidon]'"
        ) from e
    return Felt(poseidon_hash(a.value, b.value))


COMPRESSORS: Dict[str, Compressor] = {
    "sha256": sha256_compress,
    "poseidon": poseidon_compress,
}


def get_compressor(name: str) -> Compressor:
    try:
        return COMPRESSORS[name.lower()]
    except KeyError:
        raise UnknownHashAlgorithm(
            f"unknown hash algorithm {name!r}; choose one of {sorted(COMPRESSORS)}"
        ) from None


CUSTOM_HASH_ALG = "custom"


def algorithm_name(compress: Compressor) -> str:
    """Registered name of ``compress``, or "custom" for anything else."""
    for name, fn in COMPRESSORS.items():
        if fn is compress:
            return name
    return CUSTOM_HASH_ALG
