"""Tests for CastHelpers orchestration against a recording backend."""

from __future__ import annotations

import asyncio

import pytest
from eth_abi import encode
from eth_hash.auto import keccak

from dsa_sdk.cast_helpers import CastHelpers, EncodeAbiParams, wrap_if_spells
from dsa_sdk.constants import GENESIS_ADDRESS
from dsa_sdk.errors import AbiNotDefinedError, InstanceNotConfiguredError
from dsa_sdk.spells import Spell, Spells

from conftest import ACCOUNT_ADDRESS, SENDER_ADDRESS, TARGET_ADDRESS, FakeBackend


def _expected_cast(targets: list[str], datas: list[bytes], origin: str) -> str:
    selector = keccak(b"cast(string[],bytes[],string)")[:4]
    return "0x" + selector.hex() + encode(["string[]", "bytes[]", "string"], [targets, datas, origin]).hex()


class TestEstimateGas:
    """Tests for CastHelpers.estimate_gas."""

    def test_returns_backend_estimate_unchanged(self, backend: FakeBackend, spells: Spells) -> None:
        gas = asyncio.run(CastHelpers(backend).estimate_gas(spells, from_address=SENDER_ADDRESS, value="5"))
        assert gas == 123_456

    def test_defaults_value_and_sender(self, backend: FakeBackend, spells: Spells) -> None:
        asyncio.run(CastHelpers(backend).estimate_gas(spells))

        (call,) = backend.calls_to("estimate_gas")
        assert call["value"] == "0"
        assert call["from"] == SENDER_ADDRESS
        assert call["to"] == ACCOUNT_ADDRESS
        assert len(backend.calls_to("get_address")) == 1

    def test_explicit_sender_skips_address_lookup(self, backend: FakeBackend, spells: Spells) -> None:
        other = "0x" + "dd" * 20
        asyncio.run(CastHelpers(backend).estimate_gas(spells, from_address=other, value=10))

        (call,) = backend.calls_to("estimate_gas")
        assert call["from"] == other
        assert call["value"] == 10
        assert backend.calls_to("get_address") == []

    def test_args_are_targets_datas_origin(self, backend: FakeBackend, spells: Spells) -> None:
        asyncio.run(CastHelpers(backend).estimate_gas(spells))

        (call,) = backend.calls_to("estimate_gas")
        targets, datas, origin = call["args"]
        assert targets == [TARGET_ADDRESS, "AAVE-V2-A", "BASIC-A"]
        assert datas == [b"\x01", b"\x02\x03", bytes.fromhex("deadbeef")]
        assert origin == "dsa-sdk"
        assert call["abi"]["name"] == "cast"

    def test_explicit_to_overrides_instance(self, genesis_backend: FakeBackend, spells: Spells) -> None:
        asyncio.run(CastHelpers(genesis_backend).estimate_gas(spells, to=ACCOUNT_ADDRESS))

        (call,) = genesis_backend.calls_to("estimate_gas")
        assert call["to"] == ACCOUNT_ADDRESS

    def test_genesis_instance_is_rejected_before_any_call(self, genesis_backend: FakeBackend, spells: Spells) -> None:
        with pytest.raises(InstanceNotConfiguredError, match="set_instance"):
            asyncio.run(
                CastHelpers(genesis_backend).estimate_gas(spells, from_address=SENDER_ADDRESS, value="0")
            )
        assert genesis_backend.calls == []

    def test_explicit_genesis_to_is_rejected(self, backend: FakeBackend, spells: Spells) -> None:
        with pytest.raises(InstanceNotConfiguredError):
            asyncio.run(CastHelpers(backend).estimate_gas(spells, to=GENESIS_ADDRESS))
        assert backend.calls == []

    def test_missing_cast_abi(self, spells: Spells) -> None:
        backend = FakeBackend(abi_missing=True)
        with pytest.raises(AbiNotDefinedError, match="Abi is not defined."):
            asyncio.run(CastHelpers(backend).estimate_gas(spells))
        assert backend.calls_to("estimate_gas") == []

    def test_backend_errors_propagate(self, backend: FakeBackend, spells: Spells) -> None:
        async def boom(**kwargs: object) -> int:
            raise ConnectionError("node down")

        backend.estimate_gas = boom  # type: ignore[method-assign]
        with pytest.raises(ConnectionError, match="node down"):
            asyncio.run(CastHelpers(backend).estimate_gas(spells))


class TestEncodeAbi:
    """Tests for CastHelpers.encode_abi."""

    def test_single_spell_matches_reference_encoding(self, backend: FakeBackend) -> None:
        spells = Spells([Spell(target=TARGET_ADDRESS, data="0x01")])
        result = asyncio.run(CastHelpers(backend).encode_abi(spells))

        assert result == _expected_cast([TARGET_ADDRESS], [b"\x01"], "dsa-sdk")
        assert backend.calls_to("contract_binding") == [ACCOUNT_ADDRESS]

    def test_bare_spells_equal_wrapped_params(self, backend: FakeBackend, spells: Spells) -> None:
        helpers = CastHelpers(backend)
        bare = asyncio.run(helpers.encode_abi(spells))
        wrapped = asyncio.run(helpers.encode_abi(EncodeAbiParams(spells=spells)))
        assert bare == wrapped

    def test_deterministic(self, backend: FakeBackend, spells: Spells) -> None:
        helpers = CastHelpers(backend)
        first = asyncio.run(helpers.encode_abi(spells))
        second = asyncio.run(helpers.encode_abi(spells))
        assert first == second

    def test_overrides_win(self, backend: FakeBackend, spells: Spells) -> None:
        other = "0x" + "ee" * 20
        result = asyncio.run(
            CastHelpers(backend).encode_abi(EncodeAbiParams(spells=spells, to=other, origin="my-app"))
        )

        assert backend.calls_to("contract_binding") == [other]
        targets = [s.target for s in spells]
        datas = [s.data for s in spells]
        assert result == _expected_cast(targets, datas, "my-app")

    def test_genesis_instance_is_rejected(self, genesis_backend: FakeBackend, spells: Spells) -> None:
        with pytest.raises(InstanceNotConfiguredError, match="docs.instadapp.io/setup"):
            asyncio.run(CastHelpers(genesis_backend).encode_abi(spells))
        assert genesis_backend.calls == []

    def test_does_not_mutate_spells(self, backend: FakeBackend, spells: Spells) -> None:
        before = spells.to_list()
        asyncio.run(CastHelpers(backend).encode_abi(spells))
        assert spells.to_list() == before


class TestWrapIfSpells:
    """Tests for wrap_if_spells."""

    def test_wraps_bare_spells(self, spells: Spells) -> None:
        params = wrap_if_spells(spells)
        assert params == EncodeAbiParams(spells=spells)

    def test_params_pass_through(self, spells: Spells) -> None:
        params = EncodeAbiParams(spells=spells, origin="x")
        assert wrap_if_spells(params) is params

    def test_rejects_other_types(self) -> None:
        with pytest.raises(TypeError):
            wrap_if_spells([{"target": "a", "data": "0x"}])  # type: ignore[arg-type]
