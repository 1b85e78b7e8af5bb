"""
JSON-RPC Client for EVM nodes.

Lightweight alternative to web3.py: uses httpx (async) for HTTP + eth-abi
for encoding. Covers the two calls the SDK needs: gas estimation and
node accounts.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional, Union

import httpx
from eth_abi import encode
from eth_hash.auto import keccak

from .abi import find_function
from .constants import DEFAULT_CHAIN_ID, DEFAULT_RPC_URL
from .errors import RpcError

logger = logging.getLogger(__name__)


def _keccak256(data: bytes) -> bytes:
    # NOTE: Keccak-256 != SHA3-256 (NIST). Never use hashlib.sha3_256 here.
    return keccak(data)


def get_rpc_url() -> str:
    """Get the RPC URL from environment or default."""
    return os.environ.get("DSA_RPC_URL", DEFAULT_RPC_URL)


def get_chain_id() -> int:
    """Get the chain ID from environment or default."""
    return int(os.environ.get("DSA_CHAIN_ID", str(DEFAULT_CHAIN_ID)))


def to_hex_quantity(value: Union[int, str]) -> str:
    """
    Convert a wei amount to a JSON-RPC hex quantity.

    Accepts ints, decimal strings ("0", "1000") and 0x-prefixed hex strings.
    """
    if isinstance(value, str):
        value = int(value, 16) if value.startswith("0x") else int(value)
    if value < 0:
        raise ValueError(f"Quantity must not be negative: {value}")
    return hex(value)


def hex_to_bytes(data: Union[str, bytes]) -> bytes:
    """Decode 0x-prefixed (or bare) hex into bytes; bytes pass through."""
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    return bytes.fromhex(data[2:]) if data.startswith("0x") else bytes.fromhex(data)


def _canonical_type(param: dict[str, Any]) -> str:
    """Expand tuple types into their component form, e.g. ``(address,bytes)[]``."""
    abi_type = param["type"]
    if abi_type.startswith("tuple"):
        inner = ",".join(_canonical_type(c) for c in param.get("components", []))
        return f"({inner}){abi_type[len('tuple'):]}"
    return abi_type


def function_selector(func: dict[str, Any]) -> bytes:
    """First 4 bytes of keccak256 over the canonical signature."""
    input_types = [_canonical_type(inp) for inp in func.get("inputs", [])]
    sig = f"{func['name']}({','.join(input_types)})"
    return _keccak256(sig.encode("utf-8"))[:4]


def encode_function_call(abi: list, function_name: str, args: list) -> str:
    """
    ABI-encode a function call.

    Args:
        abi: Contract ABI
        function_name: Function name to call
        args: Function arguments

    Returns:
        0x-prefixed hex encoded calldata
    """
    func = find_function(abi, function_name)
    if func is None:
        raise ValueError(f"Function {function_name} not found in ABI")

    input_types = [_canonical_type(inp) for inp in func.get("inputs", [])]
    if len(args) != len(input_types):
        raise ValueError(
            f"{function_name} expects {len(input_types)} args, got {len(args)}"
        )

    encoded_args = encode(input_types, list(args)) if args else b""
    return "0x" + function_selector(func).hex() + encoded_args.hex()


async def rpc_call(method: str, params: list, rpc_url: Optional[str] = None) -> Any:
    """
    Make a JSON-RPC call.

    Args:
        method: RPC method name (e.g., "eth_estimateGas")
        params: RPC parameters
        rpc_url: RPC endpoint URL

    Returns:
        Result field from the RPC response

    Raises:
        RpcError: If the node answers with an error object
        httpx.HTTPError: On transport or HTTP status failures
    """
    url = rpc_url or get_rpc_url()
    payload = {
        "jsonrpc": "2.0",
        "method": method,
        "params": params,
        "id": 1,
    }
    logger.debug("rpc %s -> %s", method, url)

    async with httpx.AsyncClient(timeout=30) as client:
        response = await client.post(url, json=payload)
        response.raise_for_status()
        data = response.json()

    if "error" in data:
        raise RpcError(f"RPC error: {data['error']}")

    return data.get("result")


async def estimate_gas(tx: dict[str, Any], rpc_url: Optional[str] = None) -> int:
    """
    Estimate gas for a transaction (eth_estimateGas).

    Args:
        tx: Call object with from/to/value/data fields

    Returns:
        Estimated gas units
    """
    result = await rpc_call("eth_estimateGas", [tx], rpc_url=rpc_url)
    if result is None:
        raise RpcError("eth_estimateGas returned no result")
    return int(result, 16)


async def get_accounts(rpc_url: Optional[str] = None) -> list[str]:
    """Accounts unlocked on the node (eth_accounts)."""
    return await rpc_call("eth_accounts", [], rpc_url=rpc_url) or []

