"""
Contract binding - pairs an ABI with an address for local call encoding.

Nothing here touches the network; encoding is a pure transformation of
the ABI and arguments.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .rpc import encode_function_call


@dataclass(frozen=True)
class Contract:
    abi: list[dict[str, Any]]
    address: str

    def encode_abi(self, function_name: str, args: list) -> str:
        """
        Encode a call to ``function_name`` on this contract.

        Args:
            function_name: Function name present in the ABI
            args: Positional arguments, in ABI order

        Returns:
            0x-prefixed hex calldata
        """
        return encode_function_call(self.abi, function_name, args)
