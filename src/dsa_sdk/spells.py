"""
Spells - ordered batches of pre-encoded operations for a single cast.

A spell pairs a target (connector name or contract identifier) with the
call data to run against it. ``Spells`` keeps insertion order; the same
order is used for the ``targets`` and ``datas`` arrays sent to ``cast``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterator, Optional, Union

from .rpc import hex_to_bytes

if TYPE_CHECKING:
    from .dsa import DSA


@dataclass(frozen=True)
class Spell:
    target: str
    data: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.target, str) or not self.target:
            raise ValueError(f"Spell target must be a non-empty string: {self.target!r}")
        if not isinstance(self.data, (str, bytes, bytearray)):
            raise ValueError(f"Spell data must be hex or bytes: {self.data!r}")
        # Accept 0x-hex call data; store raw bytes for eth-abi.
        object.__setattr__(self, "data", hex_to_bytes(self.data))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Spell":
        try:
            return cls(target=data["target"], data=data["data"])
        except KeyError as exc:
            raise ValueError(f"Spell is missing field: {exc.args[0]}") from exc

    def to_dict(self) -> dict[str, str]:
        return {"target": self.target, "data": "0x" + self.data.hex()}


class Spells:
    """Ordered spell container, optionally bound to a DSA for shortcuts."""

    def __init__(self, spells: Optional[list[Spell]] = None, dsa: Optional["DSA"] = None) -> None:
        self._spells: list[Spell] = []
        self._dsa = dsa
        for spell in spells or []:
            self.add(spell)

    def add(self, spell: Union[Spell, dict[str, Any]]) -> "Spells":
        if isinstance(spell, dict):
            spell = Spell.from_dict(spell)
        elif not isinstance(spell, Spell):
            raise ValueError(f"Expected a spell object, got {spell!r}")
        self._spells.append(spell)
        return self

    def __iter__(self) -> Iterator[Spell]:
        return iter(self._spells)

    def __len__(self) -> int:
        return len(self._spells)

    def __getitem__(self, index: int) -> Spell:
        return self._spells[index]

    def __repr__(self) -> str:
        return f"Spells({self._spells!r})"

    def to_list(self) -> list[dict[str, str]]:
        return [spell.to_dict() for spell in self._spells]

    @classmethod
    def from_list(cls, items: list[dict[str, Any]], dsa: Optional["DSA"] = None) -> "Spells":
        spells = cls(dsa=dsa)
        for item in items:
            spells.add(item)
        return spells

    def _bound(self) -> "DSA":
        if self._dsa is None:
            raise RuntimeError("Spells are not bound to a DSA; create them with dsa.spell()")
        return self._dsa

    async def encode_cast_abi(self, to: Optional[str] = None, origin: Optional[str] = None) -> str:
        """Encode a cast of these spells through the bound DSA."""
        return await self._bound().encode_cast_abi(self, to=to, origin=origin)

    async def estimate_cast_gas(
        self,
        to: Optional[str] = None,
        from_address: Optional[str] = None,
        value: Optional[Union[int, str]] = None,
    ) -> int:
        """Estimate gas for a cast of these spells through the bound DSA."""
        return await self._bound().estimate_cast_gas(
            self, to=to, from_address=from_address, value=value
        )
