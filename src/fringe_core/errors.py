from __future__ import annotations


class AccumulatorError(Exception):
    """Base class for accumulator and proof failures."""


class CapacityExceeded(AccumulatorError):
    def __init__(self, capacity: int):
        super().__init__(f"tree is full ({capacity} leaves)")
        self.capacity = capacity


class LeafNotFound(AccumulatorError, LookupError):
    def __init__(self, index: int, leaf_count: int):
        super().__init__(f"leaf {index} does not exist (tree has {leaf_count} leaves)")
        self.index = index
        self.leaf_count = leaf_count


class MalformedProof(AccumulatorError, ValueError):
    pass


class InvalidFieldElement(ValueError):
    pass


class UnknownHashAlgorithm(ValueError):
    pass


class HashBackendUnavailable(RuntimeError):
    pass
