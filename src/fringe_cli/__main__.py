from __future__ import annotations
import json
import os
import pathlib
from typing import List, Optional

import typer
from rich import print
from rich.markup import escape

from fringe_core.accumulator import IncrementalMerkleAccumulator
from fringe_core.commitment import ed25519_generate, sign_root
from fringe_core.errors import (
    AccumulatorError,
    HashBackendUnavailable,
    InvalidFieldElement,
    UnknownHashAlgorithm,
)
from fringe_core.felt import Felt
from fringe_core.hashing import get_compressor
from fringe_core.logutil import setup_logging
from fringe_core.settings import settings
from fringe_core.zero_hashes import compute_zero_hashes

app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, help="Logging level"),
):
    setup_logging(log_level)


def _fail(msg: str) -> None:
    print(f"[red]{escape(msg)}[/red]")
    raise typer.Exit(code=1)


def read_leaves(path: str) -> List[Felt]:
    """Read one felt per line (decimal or 0x hex); skip blanks and # comments."""
    leaves = []
    try:
        lines = pathlib.Path(path).read_text().splitlines()
    except OSError as e:
        _fail(f"cannot read {path}: {e}")
    for lineno, line in enumerate(lines, 1):
        text = line.split("#", 1)[0].strip()
        if not text:
            continue
        try:
            leaves.append(Felt.parse(text))
        except InvalidFieldElement as e:
            _fail(f"{path}:{lineno}: {e}")
    return leaves


def _load_json(path: str):
    try:
        return json.loads(pathlib.Path(path).read_text())
    except (OSError, ValueError) as e:
        _fail(f"cannot read {path}: {e}")


def _build(leaves_path: str, height: int, hash_alg: str) -> IncrementalMerkleAccumulator:
    try:
        acc = IncrementalMerkleAccumulator(height, hash_alg=hash_alg)
        acc.add_leaves(read_leaves(leaves_path))
    except (AccumulatorError, UnknownHashAlgorithm, HashBackendUnavailable) as e:
        _fail(str(e))
    return acc


@app.command()
def zero_hashes(
    height: int = typer.Option(settings.height, min=1),
    hash_alg: str = typer.Option(settings.hash_alg),
):
    """Print the empty-subtree hash of every level."""
    try:
        chain = compute_zero_hashes(height, get_compressor(hash_alg))
    except (UnknownHashAlgorithm, HashBackendUnavailable) as e:
        _fail(str(e))
    for level, value in enumerate(chain):
        typer.echo(f"{level:>3} {value.to_hex()}")


@app.command()
def root(
    leaves: str = typer.Argument(..., help="Leaves file"),
    height: int = typer.Option(settings.height, min=1),
    hash_alg: str = typer.Option(settings.hash_alg),
):
    """Insert all leaves and print the resulting root."""
    acc = _build(leaves, height, hash_alg)
    typer.echo(json.dumps({"tree_size": acc.leaf_count, "root_hex": acc.root().to_hex()}))


@app.command()
def prove(
    leaves: str = typer.Argument(..., help="Leaves file"),
    index: int = typer.Argument(..., help="Leaf index"),
    out: Optional[str] = typer.Option(None, help="Write proof JSON here"),
    height: int = typer.Option(settings.height, min=1),
    hash_alg: str = typer.Option(settings.hash_alg),
):
    """Emit an inclusion proof for the leaf at INDEX."""
    acc = _build(leaves, height, hash_alg)
    try:
        proof = acc.prove(index)
    except AccumulatorError as e:
        _fail(str(e))
    doc = proof.model_dump_json(indent=2)
    if out is None:
        typer.echo(doc)
        return
    pathlib.Path(out).write_text(doc)
    print(f"[green]Wrote proof to {out}[/green]")


@app.command()
def verify(
    proof: str = typer.Argument(..., help="Proof JSON file"),
    root_hex: Optional[str] = typer.Option(None, "--root", help="Expected root"),
):
    """Verify an inclusion proof, optionally against an external root."""
    from fringe_sdk.verify import verify_proof

    ok = verify_proof(_load_json(proof), root_hex)
    print({"proof_valid": ok})
    if not ok:
        raise typer.Exit(code=1)


@app.command()
def gen_keys(out_dir: str = typer.Option("./keys", help="Directory to write keypair")):
    os.makedirs(out_dir, exist_ok=True)
    sk, pk = ed25519_generate()
    (pathlib.Path(out_dir) / "ed25519_private.key").write_bytes(sk)
    (pathlib.Path(out_dir) / "ed25519_public.key").write_bytes(pk)
    print(f"[green]Wrote keys to {out_dir}[/green]")


def _load_keys():
    sk_path = pathlib.Path(settings.signing_key_path)
    pk_path = pathlib.Path(settings.signing_pubkey_path)
    if not sk_path.exists() or not pk_path.exists():
        if not settings.allow_dev_keygen:
            _fail(
                "signing keypair not found; set FRINGE_ALLOW_DEV_KEYGEN=true "
                "to auto-generate for development"
            )
        sk_path.parent.mkdir(parents=True, exist_ok=True)
        pk_path.parent.mkdir(parents=True, exist_ok=True)
        sk, pk = ed25519_generate()
        sk_path.write_bytes(sk)
        pk_path.write_bytes(pk)
    return sk_path.read_bytes(), pk_path.read_bytes()


@app.command()
def commit(
    leaves: str = typer.Argument(..., help="Leaves file"),
    out: str = typer.Option("./root_commitment.json", help="Output JSON path"),
    height: int = typer.Option(settings.height, min=1),
    hash_alg: str = typer.Option(settings.hash_alg),
):
    """Sign the root over LEAVES and write a root commitment."""
    acc = _build(leaves, height, hash_alg)
    sk, pk = _load_keys()
    commitment = sign_root(acc, sk, pk)
    pathlib.Path(out).write_text(commitment.model_dump_json(indent=2))
    print(f"[green]Wrote root commitment to {out}[/green]")


@app.command()
def verify_commitment(
    path: str = typer.Argument(..., help="Root commitment JSON"),
    proof: Optional[str] = typer.Option(None, help="Also check this proof against it"),
):
    from fringe_sdk.verify import verify_commitment as _verify_commitment
    from fringe_sdk.verify import verify_inclusion

    obj = _load_json(path)
    result = {"signature_valid": _verify_commitment(obj)}
    if proof is not None:
        result["proof_valid"] = verify_inclusion(_load_json(proof), obj)
    print(result)
    if not all(result.values()):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
