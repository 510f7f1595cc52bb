from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Tuple

from .felt import Felt
from .hashing import Compressor, sha256_compress

# Non-zero so that empty subtrees never collide with real zero leaves.
ZERO_BASE = Felt.from_hex(
    "0x0293d3e8a80f400daaaffdd5932e2bcc8814bab8f414a75dcacf87318f8b14c5"
)


def compute_zero_hashes(
    height: int, compress: Compressor = sha256_compress, base: Felt = ZERO_BASE
) -> Tuple[Felt, ...]:
    """Return the empty-subtree hash for each of ``height`` levels."""
    if height < 1:
        raise ValueError("height must be positive")
    hashes = [base]
    for _ in range(1, height):
        prev = hashes[-1]
        hashes.append(compress(prev, prev))
    return tuple(hashes)


@dataclass(frozen=True)
class ZeroHashChain:
    height: int
    values: Tuple[Felt, ...]

    @classmethod
    def compute(
        cls, height: int, compress: Compressor = sha256_compress
    ) -> "ZeroHashChain":
        return cls(height, compute_zero_hashes(height, compress))

    def __getitem__(self, level: int) -> Felt:
        return self.values[level]

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[Felt]:
        return iter(self.values)
