from __future__ import annotations
import logging
from typing import Iterable, List, Optional, Tuple

from .errors import CapacityExceeded, LeafNotFound
from .felt import Felt
from .hashing import Compressor, algorithm_name, get_compressor
from .merkle import combine, is_right_child, sibling_side
from .models import InclusionProof
from .zero_hashes import ZeroHashChain

log = logging.getLogger(__name__)


class IncrementalMerkleAccumulator:
    """Append-only Merkle tree of fixed height.

    Level 0 holds the leaves and level ``height - 1`` the root, so the tree
    takes at most ``2 ** (height - 1)`` leaves. Each insertion recomputes
    only the path from the new leaf to the root; ``left_fringe[i]`` keeps the
    latest left node at level ``i`` that is still waiting for its right
    sibling, and ``left_fringe[height - 1]`` is the current root.

    Not thread-safe: callers must not run ``add_leaf`` concurrently with any
    other method on the same instance.
    """

    def __init__(
        self,
        height: int,
        compress: Optional[Compressor] = None,
        hash_alg: Optional[str] = None,
    ):
        if height < 1:
            raise ValueError("height must be positive")
        self.height = height
        if compress is None:
            self.hash_alg = (hash_alg or "sha256").lower()
            self.compress = get_compressor(self.hash_alg)
        else:
            # exported documents name the hash the tree is built with
            self.hash_alg = algorithm_name(compress)
            if hash_alg is not None and hash_alg.lower() != self.hash_alg:
                raise ValueError(
                    f"hash_alg {hash_alg!r} does not name the supplied compressor"
                )
            self.compress = compress
        self.zero = ZeroHashChain.compute(height, self.compress)
        self.left_fringe: List[Felt] = list(self.zero)
        self.layers: List[List[Felt]] = [[] for _ in range(height)]
        self.free_index = 0

    @property
    def capacity(self) -> int:
        return 2 ** (self.height - 1)

    @property
    def leaf_count(self) -> int:
        return len(self.layers[0])

    def __len__(self) -> int:
        return self.leaf_count

    def add_leaf(self, value: Felt) -> int:
        """Append ``value`` and update the path to the root. Returns its index."""
        if self.free_index >= self.capacity:
            log.warning("refusing leaf: tree of height %d is full", self.height)
            raise CapacityExceeded(self.capacity)
        leaf_index = index = self.free_index
        self.free_index += 1
        self.layers[0].append(value)

        current = value
        for i in range(1, self.height):
            if is_right_child(index):
                current = combine(self.compress, current, self.left_fringe[i - 1], index)
            else:
                self.left_fringe[i - 1] = current
                current = combine(self.compress, current, self.zero[i - 1], index)
            index //= 2
            layer = self.layers[i]
            if index < len(layer):
                layer[index] = current
            else:
                layer.append(current)
        self.left_fringe[self.height - 1] = current
        log.debug("inserted leaf %d, root %s", leaf_index, current.to_hex())
        return leaf_index

    def add_leaves(self, values: Iterable[Felt]) -> List[int]:
        return [self.add_leaf(v) for v in values]

    def root(self) -> Felt:
        return self.left_fringe[self.height - 1]

    def leaf(self, index: int) -> Felt:
        self._check_index(index)
        return self.layers[0][index]

    def path(self, index: int) -> List[Tuple[Felt, str]]:
        """Return ``(sibling, side)`` pairs from the leaf level up to the root."""
        self._check_index(index)
        proof = []
        for i in range(self.height - 1):
            layer = self.layers[i]
            if is_right_child(index):
                sibling = layer[index - 1]
            elif index + 1 < len(layer):
                sibling = layer[index + 1]
            else:
                sibling = self.zero[i]
            proof.append((sibling, sibling_side(index)))
            index //= 2
        return proof

    def prove(self, index: int) -> InclusionProof:
        path = self.path(index)
        return InclusionProof(
            height=self.height,
            hash_alg=self.hash_alg,
            leaf_index=index,
            leaf_hex=self.layers[0][index].to_hex(),
            siblings_hex=[s.to_hex() for s, _ in path],
            sides=[side for _, side in path],
            root_hex=self.root().to_hex(),
        )

    def layer_sizes(self) -> List[int]:
        return [len(layer) for layer in self.layers]

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.leaf_count:
            log.warning("no leaf at index %d (%d inserted)", index, self.leaf_count)
            raise LeafNotFound(index, self.leaf_count)
