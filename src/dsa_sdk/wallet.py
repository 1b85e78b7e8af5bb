"""
Key Management for the DSA SDK.

The signing key is optional: it is only used to resolve the ``from``
address for gas estimation. Keys are read from ``PRIVATE_KEY`` in the
environment, optionally loaded from ~/.dsa/.env.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from eth_account import Account
from eth_account.signers.local import LocalAccount

from .rpc import _keccak256

# Default config directory
DSA_DIR = Path.home() / ".dsa"
DSA_ENV = DSA_DIR / ".env"

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def load_env(env_path: Optional[Path] = None) -> None:
    """Load ~/.dsa/.env (or ``env_path``) into the environment if present."""
    env_path = env_path or DSA_ENV
    if env_path.exists():
        load_dotenv(env_path, override=False)


def load_private_key(env_path: Optional[Path] = None) -> Optional[str]:
    """
    Load private key from .env file or environment.

    Args:
        env_path: Path to .env file (default: ~/.dsa/.env)

    Returns:
        0x-prefixed hex private key, or None when no key is configured
    """
    load_env(env_path)

    private_key = os.environ.get("PRIVATE_KEY")
    if not private_key:
        return None

    # Ensure 0x prefix
    if not private_key.startswith("0x"):
        private_key = "0x" + private_key

    return private_key


def get_account(private_key: str) -> LocalAccount:
    """Get an eth-account LocalAccount from a 0x-prefixed hex private key."""
    return Account.from_key(private_key)


def get_address(private_key: str) -> str:
    """0x-prefixed checksummed address for a private key."""
    return get_account(private_key).address


def is_address(value: str) -> bool:
    return bool(_ADDRESS_RE.match(value))


def to_checksum_address(address: str) -> str:
    """Convert an address to EIP-55 checksummed format.

    Raises:
        ValueError: If ``address`` is not 20 hex-encoded bytes
    """
    if not is_address(address):
        raise ValueError(f"Invalid address: {address}")
    addr = address[2:].lower()
    addr_hash = _keccak256(addr.encode("utf-8")).hex()
    result = "0x"
    for i, c in enumerate(addr):
        if c in "abcdef":
            result += c.upper() if int(addr_hash[i], 16) >= 8 else c
        else:
            result += c
    return result
