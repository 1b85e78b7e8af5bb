"""
DSA Cast CLI

Command-line interface for encoding and estimating DSA casts.

Commands:
  encode    - Print cast call data for a spells file
  estimate  - Estimate gas for casting a spells file
  whoami    - Show the configured wallet address

Spells files are JSON arrays of {"target": ..., "data": "0x..."} objects.
"""

from __future__ import annotations

import asyncio
import json
import sys
from typing import IO, Optional

import click
import httpx

from .cast_helpers import EncodeAbiParams
from .dsa import DSA, DSAConfig
from .errors import DSAError
from .spells import Spells
from .wallet import get_address, load_private_key


# ============ Constants ============

VERSION = "0.1.0"


# ============ Main CLI Group ============


@click.group()
@click.version_option(version=VERSION, prog_name="dsa-cast")
def cli() -> None:
    """DSA cast helpers."""


# ============ Helpers ============


def _load_spells(source: IO[str]) -> Spells:
    try:
        items = json.load(source)
        if not isinstance(items, list):
            raise ValueError("Spells must be a JSON array")
        return Spells.from_list(items)
    except (json.JSONDecodeError, ValueError) as exc:
        click.secho(f"ERROR: Invalid spells: {exc}", fg="red")
        sys.exit(1)


def _make_dsa(rpc_url: Optional[str], origin: Optional[str], to: Optional[str]) -> DSA:
    base = DSAConfig.from_env()
    config = DSAConfig(
        rpc_url=rpc_url or base.rpc_url,
        chain_id=base.chain_id,
        origin=origin or base.origin,
        private_key=base.private_key,
    )
    dsa = DSA(config)
    if to:
        try:
            dsa.set_instance(0, to)
        except ValueError as exc:
            click.secho(f"ERROR: {exc}", fg="red")
            sys.exit(1)
    return dsa


def _fail(exc: DSAError) -> None:
    click.secho(f"ERROR: {exc}", fg="red")
    sys.exit(exc.exit_code)


# ============ Commands ============


@cli.command()
@click.option("--spells", "spells_file", required=True, type=click.File("r"), help="Spells JSON file ('-' for stdin)")
@click.option("--to", default=None, envvar="DSA_ADDRESS", help="DSA account address")
@click.option("--origin", default=None, help="Origin tag recorded with the cast")
def encode(spells_file: IO[str], to: Optional[str], origin: Optional[str]) -> None:
    """Print the encoded cast call data."""
    spells = _load_spells(spells_file)
    dsa = _make_dsa(None, origin, to)

    try:
        data = asyncio.run(dsa.cast_helpers.encode_abi(EncodeAbiParams(spells=spells)))
    except DSAError as exc:
        _fail(exc)
        return
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(1)

    click.echo(data)


@cli.command()
@click.option("--spells", "spells_file", required=True, type=click.File("r"), help="Spells JSON file ('-' for stdin)")
@click.option("--to", default=None, envvar="DSA_ADDRESS", help="DSA account address")
@click.option("--from", "from_address", default=None, help="Sender address (default: wallet or node account)")
@click.option("--value", default="0", help="Wei sent with the cast")
@click.option("--rpc-url", envvar="DSA_RPC_URL", default=None, help="JSON-RPC endpoint")
def estimate(
    spells_file: IO[str],
    to: Optional[str],
    from_address: Optional[str],
    value: str,
    rpc_url: Optional[str],
) -> None:
    """Estimate gas for a cast."""
    spells = _load_spells(spells_file)
    dsa = _make_dsa(rpc_url, None, to)

    try:
        gas = asyncio.run(
            dsa.cast_helpers.estimate_gas(spells, from_address=from_address, value=value)
        )
    except DSAError as exc:
        _fail(exc)
        return
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(1)
    except httpx.HTTPError as exc:
        click.secho(f"ERROR: Node request failed: {exc}", fg="red")
        sys.exit(1)

    click.echo(f"Estimated gas: {gas}")


@cli.command()
def whoami() -> None:
    """Show current wallet identity."""
    private_key = load_private_key()
    if not private_key:
        click.echo("No wallet found.")
        click.echo("Set PRIVATE_KEY in the environment or ~/.dsa/.env.")
        sys.exit(1)
    click.echo(f"Address: {get_address(private_key)}")


# ============ Entry Points ============


def main() -> None:
    """dsa-cast entry point."""
    cli()


if __name__ == "__main__":
    main()
