from __future__ import annotations
from typing import Optional, Sequence, Tuple, Union

from .errors import MalformedProof
from .felt import Felt
from .hashing import Compressor, sha256_compress

PathEntry = Union[Felt, Tuple[Felt, str]]


def is_right_child(index: int) -> bool:
    return index % 2 == 1


def sibling_side(index: int) -> str:
    """'L' if the sibling of node ``index`` sits on its left, else 'R'."""
    return "L" if is_right_child(index) else "R"


def combine(compress: Compressor, node: Felt, sibling: Felt, index: int) -> Felt:
    """Hash ``node`` with its sibling in the order implied by ``index``."""
    if is_right_child(index):
        return compress(sibling, node)
    return compress(node, sibling)


def compute_root(
    leaf: Felt,
    index: int,
    path: Sequence[PathEntry],
    compress: Compressor = sha256_compress,
    height: Optional[int] = None,
) -> Felt:
    """Recompute the root from a leaf, its insertion index and a sibling path.

    ``path`` holds bare siblings or ``(sibling, side)`` pairs as produced by
    the accumulator. When ``height`` is given the path must have exactly
    ``height - 1`` entries.
    """
    if index < 0:
        raise MalformedProof("negative leaf index")
    if height is not None and len(path) != height - 1:
        raise MalformedProof(f"path has {len(path)} entries, expected {height - 1}")
    if index >> len(path):
        raise MalformedProof(f"index {index} does not fit a path of {len(path)} levels")
    current = leaf
    for level, entry in enumerate(path):
        if isinstance(entry, tuple):
            sibling, side = entry
            if side != sibling_side(index):
                raise MalformedProof(f"side bit at level {level} contradicts index")
        else:
            sibling = entry
        current = combine(compress, current, sibling, index)
        index //= 2
    return current


def verify_inclusion(
    leaf: Felt,
    index: int,
    path: Sequence[PathEntry],
    root: Felt,
    compress: Compressor = sha256_compress,
    height: Optional[int] = None,
) -> bool:
    return compute_root(leaf, index, path, compress, height) == root
