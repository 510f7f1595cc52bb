from __future__ import annotations
import datetime
import logging
from typing import Optional, Tuple

import nacl.exceptions
import nacl.signing
import rfc8785

from .accumulator import IncrementalMerkleAccumulator
from .felt import B64, B64D
from .models import RootCommitment

log = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


def ed25519_generate() -> Tuple[bytes, bytes]:
    sk = nacl.signing.SigningKey.generate()
    return (sk.encode(), sk.verify_key.encode())


def commitment_body(
    acc: IncrementalMerkleAccumulator, signer_pk_bytes: bytes, ts: Optional[str] = None
) -> dict:
    return {
        "height": acc.height,
        "hash_alg": acc.hash_alg,
        "tree_size": acc.leaf_count,
        "root_hex": acc.root().to_hex(),
        "ts": ts or _now_iso(),
        "signer_pubkey_b64": B64(signer_pk_bytes),
    }


def sign_root(
    acc: IncrementalMerkleAccumulator,
    signer_sk_bytes: bytes,
    signer_pk_bytes: bytes,
    ts: Optional[str] = None,
) -> RootCommitment:
    """Sign the current root over the RFC 8785 canonical JSON of its body."""
    body = commitment_body(acc, signer_pk_bytes, ts)
    sig = nacl.signing.SigningKey(signer_sk_bytes).sign(rfc8785.dumps(body)).signature
    log.info("signed root %s at size %d", body["root_hex"], body["tree_size"])
    return RootCommitment(**{**body, "signature_b64": B64(sig)})


def verify_commitment(commitment: RootCommitment) -> bool:
    body = commitment.model_dump(exclude={"signature_b64"})
    try:
        vk = nacl.signing.VerifyKey(B64D(commitment.signer_pubkey_b64))
        vk.verify(rfc8785.dumps(body), B64D(commitment.signature_b64))
        return True
    except (ValueError, nacl.exceptions.CryptoError):
        return False
