"""
DSA - facade over a configured DSA account instance.

Holds the instance address, origin tag and node connection, and provides
the operations ``CastHelpers`` needs: spell encoding, address
resolution, ABI lookup, gas estimation and contract binding.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from . import rpc
from .abi import get_interface
from .cast_helpers import CastHelpers, EncodeAbiParams
from .constants import DEFAULT_ORIGIN, DEFAULT_VERSION, GENESIS_ADDRESS
from .contract import Contract
from .errors import RpcError
from .spells import Spells
from .wallet import get_address, load_env, load_private_key, to_checksum_address

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Instance:
    """
    A DSA account instance.

    Attributes:
        id: DSA id (0 when unconfigured)
        address: Account contract address
        version: Account implementation version
        chain_id: Chain the account lives on
    """
    id: int = 0
    address: str = GENESIS_ADDRESS
    version: int = DEFAULT_VERSION
    chain_id: int = field(default_factory=rpc.get_chain_id)


@dataclass(frozen=True)
class DSAConfig:
    rpc_url: str
    chain_id: int
    origin: str = DEFAULT_ORIGIN
    private_key: Optional[str] = field(default=None, repr=False)

    @classmethod
    def from_env(cls) -> "DSAConfig":
        """Build a config from DSA_* variables (and ~/.dsa/.env)."""
        load_env()
        return cls(
            rpc_url=rpc.get_rpc_url(),
            chain_id=rpc.get_chain_id(),
            origin=os.environ.get("DSA_ORIGIN", DEFAULT_ORIGIN),
            private_key=load_private_key(),
        )


class DSA:
    """DSA facade; implements ``CastBackend``."""

    def __init__(self, config: Optional[DSAConfig] = None) -> None:
        self.config = config or DSAConfig.from_env()
        self.instance = Instance(chain_id=self.config.chain_id)
        self.origin = self.config.origin
        self.cast_helpers = CastHelpers(self)

    # ============ Configuration ============

    @property
    def instance_address(self) -> str:
        return self.instance.address

    def set_instance(self, instance_id: int, address: str, version: int = DEFAULT_VERSION) -> Instance:
        """
        Point the facade at a DSA account.

        Raises:
            ValueError: If ``address`` is not a valid address
        """
        self.instance = Instance(
            id=instance_id,
            address=to_checksum_address(address),
            version=version,
            chain_id=self.config.chain_id,
        )
        logger.debug("dsa instance set: id=%s address=%s", instance_id, self.instance.address)
        return self.instance

    def set_origin(self, origin: str) -> None:
        self.origin = origin

    def spell(self) -> Spells:
        """New empty spells bound to this DSA."""
        return Spells(dsa=self)

    # ============ CastBackend ============

    def encode_spells(self, spells: Spells) -> tuple[list[str], list[bytes]]:
        """
        Split spells into the aligned ``targets`` / ``datas`` arrays of ``cast``.

        Raises:
            ValueError: If ``spells`` is empty
        """
        if len(spells) == 0:
            raise ValueError("Spells must not be empty")
        targets = [spell.target for spell in spells]
        datas = [spell.data for spell in spells]
        return targets, datas

    async def get_address(self) -> str:
        """
        Active sender address.

        The configured private key wins; otherwise the node's first
        unlocked account is used.
        """
        if self.config.private_key:
            return get_address(self.config.private_key)

        accounts = await rpc.get_accounts(self.config.rpc_url)
        if not accounts:
            raise RpcError("No account available: set PRIVATE_KEY or unlock one on the node")
        return accounts[0]

    def get_interface_abi(self, contract_name: str, method: str) -> Optional[dict[str, Any]]:
        return get_interface(contract_name, method)

    async def estimate_gas(
        self,
        *,
        abi: dict[str, Any],
        to: str,
        from_address: str,
        value: Union[int, str],
        args: list,
    ) -> int:
        """
        Estimate gas for calling the single-method ``abi`` on ``to``.

        Returns:
            Gas units reported by the node
        """
        tx = {
            "from": from_address,
            "to": to,
            "value": rpc.to_hex_quantity(value),
            "data": rpc.encode_function_call([abi], abi["name"], args),
        }
        return await rpc.estimate_gas(tx, rpc_url=self.config.rpc_url)

    def contract_binding(self, abi: list[dict[str, Any]], address: str) -> Contract:
        return Contract(abi=abi, address=address)

    # ============ Shortcuts ============

    async def estimate_cast_gas(
        self,
        spells: Spells,
        to: Optional[str] = None,
        from_address: Optional[str] = None,
        value: Optional[Union[int, str]] = None,
    ) -> int:
        return await self.cast_helpers.estimate_gas(
            spells, to=to, from_address=from_address, value=value
        )

    async def encode_cast_abi(
        self,
        spells: Spells,
        to: Optional[str] = None,
        origin: Optional[str] = None,
    ) -> str:
        return await self.cast_helpers.encode_abi(
            EncodeAbiParams(spells=spells, to=to, origin=origin)
        )
