"""
ABI Loader - Loads contract ABIs shipped with the package.

Artifacts live in ``dsa_sdk/abis/<name>.json`` and carry the ABI under
the ``"abi"`` key, the same layout as a compiler build artifact.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

ABIS_DIR = Path(__file__).resolve().parent / "abis"


@lru_cache(maxsize=16)
def load_abi(contract_name: str) -> list[dict[str, Any]]:
    """
    Load ABI for a contract from the packaged artifacts.

    Args:
        contract_name: Artifact name (e.g., "account")

    Returns:
        ABI as a list of dicts

    Raises:
        FileNotFoundError: If no artifact exists for the name
    """
    abi_path = ABIS_DIR / f"{contract_name}.json"

    if not abi_path.exists():
        raise FileNotFoundError(f"ABI not found: {abi_path}")

    with abi_path.open("r", encoding="utf-8") as f:
        artifact = json.load(f)

    return artifact["abi"]


def find_function(abi: list[dict[str, Any]], function_name: str) -> Optional[dict[str, Any]]:
    """Return the first function entry named ``function_name``, or None."""
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == function_name:
            return entry
    return None


def get_interface(contract_name: str, method: str) -> Optional[dict[str, Any]]:
    """
    Look up a single method descriptor.

    Args:
        contract_name: Artifact name (e.g., "account")
        method: Function name (e.g., "cast")

    Returns:
        The ABI entry for the method, or None when the contract does not
        define it
    """
    return find_function(load_abi(contract_name), method)


def account_abi() -> list[dict[str, Any]]:
    """Load the DSA account ABI."""
    return load_abi("account")
