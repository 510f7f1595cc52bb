from __future__ import annotations
from typing import List, Literal, Tuple
from pydantic import BaseModel, Field, field_validator, model_validator

from .felt import Felt


def _canonical_hex(v: str) -> str:
    return Felt.from_hex(v).to_hex()


class InclusionProof(BaseModel):
    """Exported inclusion proof.

    Felts are 0x-prefixed 32-byte big-endian hex. ``sides[i]`` is "L" when
    the sibling at level ``i`` is the left input of the compression.
    """

    height: int = Field(ge=1)
    hash_alg: str = "sha256"
    leaf_index: int = Field(ge=0)
    leaf_hex: str
    siblings_hex: List[str] = Field(default_factory=list)
    sides: List[Literal["L", "R"]] = Field(default_factory=list)
    root_hex: str

    @field_validator("leaf_hex", "root_hex")
    @classmethod
    def _felt_hex(cls, v):
        return _canonical_hex(v)

    @field_validator("siblings_hex")
    @classmethod
    def _felt_hex_list(cls, v):
        return [_canonical_hex(x) for x in v]

    @model_validator(mode="after")
    def _path_shape(self):
        expected = self.height - 1
        if len(self.siblings_hex) != expected or len(self.sides) != expected:
            raise ValueError(f"path must have {expected} siblings and sides")
        if self.leaf_index >= 2**expected:
            raise ValueError("leaf_index exceeds tree capacity")
        return self

    def leaf(self) -> Felt:
        return Felt.from_hex(self.leaf_hex)

    def root(self) -> Felt:
        return Felt.from_hex(self.root_hex)

    def path(self) -> List[Tuple[Felt, str]]:
        return [(Felt.from_hex(s), side) for s, side in zip(self.siblings_hex, self.sides)]


class RootCommitment(BaseModel):
    """Signed attestation of an accumulator root at a given size."""

    height: int = Field(ge=1)
    hash_alg: str
    tree_size: int = Field(ge=0)
    root_hex: str
    ts: str
    signer_pubkey_b64: str
    signature_b64: str

    @field_validator("root_hex")
    @classmethod
    def _felt_hex(cls, v):
        return _canonical_hex(v)

    def root(self) -> Felt:
        return Felt.from_hex(self.root_hex)
