from typing import Any, Dict, Optional

from pydantic import ValidationError

from fringe_core.commitment import verify_commitment as _verify_commitment
from fringe_core.errors import AccumulatorError, UnknownHashAlgorithm
from fringe_core.felt import Felt
from fringe_core.hashing import get_compressor
from fringe_core.merkle import verify_inclusion as _verify_inclusion
from fringe_core.models import InclusionProof, RootCommitment


def verify_proof(proof_json: Dict[str, Any], root_hex: Optional[str] = None) -> bool:
    """Return True if the exported inclusion proof recomputes to the root.

    The root embedded in the proof is used unless ``root_hex`` is supplied,
    which is how a proof is checked against an independently published root.
    Malformed documents yield False rather than raising.
    """
    try:
        proof = InclusionProof.model_validate(proof_json)
        root = Felt.from_hex(root_hex) if root_hex is not None else proof.root()
        compress = get_compressor(proof.hash_alg)
        return _verify_inclusion(
            proof.leaf(),
            proof.leaf_index,
            proof.path(),
            root,
            compress,
            height=proof.height,
        )
    except (ValidationError, ValueError, UnknownHashAlgorithm, AccumulatorError):
        return False


def verify_commitment(commitment_json: Dict[str, Any]) -> bool:
    """Verify the Ed25519 signature on a root commitment document."""
    try:
        commitment = RootCommitment.model_validate(commitment_json)
    except ValidationError:
        return False
    return _verify_commitment(commitment)


def verify_inclusion(proof_json: Dict[str, Any], commitment_json: Dict[str, Any]) -> bool:
    """Check a proof against a signed root commitment."""
    if not isinstance(proof_json, dict) or not verify_commitment(commitment_json):
        return False
    commitment = RootCommitment.model_validate(commitment_json)
    hash_alg = proof_json.get("hash_alg", "sha256")
    if (
        proof_json.get("height") != commitment.height
        or not isinstance(hash_alg, str)
        or hash_alg.lower() != commitment.hash_alg.lower()
    ):
        return False
    leaf_index = proof_json.get("leaf_index")
    if not isinstance(leaf_index, int) or leaf_index >= commitment.tree_size:
        return False
    return verify_proof(proof_json, commitment.root_hex)
