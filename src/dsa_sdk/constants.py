"""Well-known constants shared across the DSA SDK."""

from __future__ import annotations

# All-zero address; an instance still pointing here was never configured.
GENESIS_ADDRESS = "0x0000000000000000000000000000000000000000"

DEFAULT_ORIGIN = "dsa-sdk"
DEFAULT_RPC_URL = "https://cloudflare-eth.com"
DEFAULT_CHAIN_ID = 1  # Ethereum mainnet
DEFAULT_VERSION = 2

SETUP_DOCS_URL = "https://docs.instadapp.io/setup"

ACCOUNT_ABI = "account"
CAST_METHOD = "cast"
