"""
Cast Helpers - gas estimation and call-data encoding for ``cast``.

A cast runs an ordered batch of spells through the DSA account contract
in one transaction. The helpers here only orchestrate: resolve defaults,
refuse an unconfigured account, and hand the actual work (spell
encoding, ABI encoding, gas estimation) to a ``CastBackend``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Optional, Protocol, Union

from .abi import account_abi
from .constants import ACCOUNT_ABI, CAST_METHOD, GENESIS_ADDRESS
from .contract import Contract
from .errors import AbiNotDefinedError, InstanceNotConfiguredError
from .spells import Spells

logger = logging.getLogger(__name__)


class CastBackend(Protocol):
    """The slice of a DSA that cast helpers depend on."""

    @property
    def instance_address(self) -> str: ...

    @property
    def origin(self) -> str: ...

    def encode_spells(self, spells: Spells) -> tuple[list[str], list[bytes]]: ...

    async def get_address(self) -> str: ...

    def get_interface_abi(self, contract_name: str, method: str) -> Optional[dict[str, Any]]: ...

    async def estimate_gas(
        self,
        *,
        abi: dict[str, Any],
        to: str,
        from_address: str,
        value: Union[int, str],
        args: list,
    ) -> int: ...

    def contract_binding(self, abi: list[dict[str, Any]], address: str) -> Contract: ...


@dataclass(frozen=True)
class EncodeAbiParams:
    """
    Request for ``CastHelpers.encode_abi``.

    Attributes:
        spells: Spells to cast
        to: Account address (default: the backend's instance address)
        origin: Traceability tag (default: the backend's origin)
    """
    spells: Spells
    to: Optional[str] = None
    origin: Optional[str] = None


def wrap_if_spells(params: Union[Spells, EncodeAbiParams]) -> EncodeAbiParams:
    """Wrap bare ``Spells`` into ``EncodeAbiParams``; params pass through."""
    if isinstance(params, Spells):
        return EncodeAbiParams(spells=params)
    if isinstance(params, EncodeAbiParams):
        return params
    raise TypeError(f"Expected Spells or EncodeAbiParams, got {type(params).__name__}")


def _is_genesis(address: Optional[str]) -> bool:
    return address is None or address.lower() == GENESIS_ADDRESS


class CastHelpers:
    """
    Cast helpers bound to a backend.

    Args:
        dsa: The backend providing instance data, spell encoding, ABI
             lookup and gas estimation.
    """

    def __init__(self, dsa: CastBackend) -> None:
        self.dsa = dsa

    async def estimate_gas(
        self,
        spells: Spells,
        *,
        to: Optional[str] = None,
        from_address: Optional[str] = None,
        value: Optional[Union[int, str]] = None,
    ) -> int:
        """
        Returns the estimated gas cost of casting ``spells``.

        Args:
            spells: Spells to cast
            to: Account address (default: the backend's instance address)
            from_address: Sender (default: the backend's active address)
            value: Wei sent with the cast (default: "0")

        Raises:
            InstanceNotConfiguredError: If the account resolves to genesis
            AbiNotDefinedError: If the account ABI lacks ``cast``
        """
        to = to if to is not None else self.dsa.instance_address

        if _is_genesis(to):
            raise InstanceNotConfiguredError()

        targets, datas = self.dsa.encode_spells(spells)

        args = [targets, datas, self.dsa.origin]
        if from_address is None:
            from_address = await self.dsa.get_address()
        if value is None:
            value = "0"
        abi = self.dsa.get_interface_abi(ACCOUNT_ABI, CAST_METHOD)

        if not abi:
            raise AbiNotDefinedError()

        logger.debug("estimating cast gas: %d spells to %s from %s", len(targets), to, from_address)
        return await self.dsa.estimate_gas(
            abi=abi,
            to=to,
            from_address=from_address,
            value=value,
            args=args,
        )

    async def encode_abi(self, params: Union[Spells, EncodeAbiParams]) -> str:
        """
        Returns the encoded cast call data to send via a transaction or call.

        Args:
            params: Bare spells, or ``EncodeAbiParams`` with optional
                    ``to`` and ``origin`` overrides

        Returns:
            0x-prefixed hex call data for ``cast(targets, datas, origin)``

        Raises:
            InstanceNotConfiguredError: If the account resolves to genesis
        """
        request = wrap_if_spells(params)
        merged = replace(
            request,
            to=request.to if request.to is not None else self.dsa.instance_address,
            origin=request.origin if request.origin is not None else self.dsa.origin,
        )

        if _is_genesis(merged.to):
            raise InstanceNotConfiguredError()

        contract = self.dsa.contract_binding(account_abi(), merged.to)

        targets, datas = self.dsa.encode_spells(merged.spells)
        logger.debug("encoding cast: %d spells to %s", len(targets), merged.to)
        return contract.encode_abi(CAST_METHOD, [targets, datas, merged.origin])
