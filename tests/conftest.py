from __future__ import annotations

from typing import Any, Optional, Union

import pytest

from dsa_sdk.abi import get_interface
from dsa_sdk.constants import GENESIS_ADDRESS
from dsa_sdk.contract import Contract
from dsa_sdk.spells import Spell, Spells

ACCOUNT_ADDRESS = "0x" + "bb" * 20
SENDER_ADDRESS = "0x" + "cc" * 20
TARGET_ADDRESS = "0x" + "aa" * 20


class FakeBackend:
    """In-memory CastBackend that records every delegated call."""

    def __init__(
        self,
        instance_address: str = ACCOUNT_ADDRESS,
        origin: str = "dsa-sdk",
        gas: int = 123_456,
        abi_missing: bool = False,
    ) -> None:
        self.instance_address = instance_address
        self.origin = origin
        self.gas = gas
        self.abi_missing = abi_missing
        self.calls: list[tuple[str, Any]] = []

    def calls_to(self, name: str) -> list[Any]:
        return [args for call, args in self.calls if call == name]

    def encode_spells(self, spells: Spells) -> tuple[list[str], list[bytes]]:
        self.calls.append(("encode_spells", spells))
        return [s.target for s in spells], [s.data for s in spells]

    async def get_address(self) -> str:
        self.calls.append(("get_address", None))
        return SENDER_ADDRESS

    def get_interface_abi(self, contract_name: str, method: str) -> Optional[dict[str, Any]]:
        self.calls.append(("get_interface_abi", (contract_name, method)))
        if self.abi_missing:
            return None
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
        self.calls.append(
            ("estimate_gas", {"abi": abi, "to": to, "from": from_address, "value": value, "args": args})
        )
        return self.gas

    def contract_binding(self, abi: list[dict[str, Any]], address: str) -> Contract:
        self.calls.append(("contract_binding", address))
        return Contract(abi=abi, address=address)


@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture()
def genesis_backend() -> FakeBackend:
    return FakeBackend(instance_address=GENESIS_ADDRESS)


@pytest.fixture()
def spells() -> Spells:
    return Spells([
        Spell(target=TARGET_ADDRESS, data="0x01"),
        Spell(target="AAVE-V2-A", data=b"\x02\x03"),
        Spell(target="BASIC-A", data="0xdeadbeef"),
    ])
