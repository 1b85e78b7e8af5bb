__all__ = [
    # Cast helpers
    "CastBackend",
    "CastHelpers",
    "EncodeAbiParams",
    "wrap_if_spells",
    # Facade
    "DSA",
    "DSAConfig",
    "Instance",
    # Spells
    "Spell",
    "Spells",
    # Contract binding
    "Contract",
    # Errors
    "DSAError",
    "InstanceNotConfiguredError",
    "AbiNotDefinedError",
    "RpcError",
    # Constants
    "GENESIS_ADDRESS",
]

from .cast_helpers import CastBackend, CastHelpers, EncodeAbiParams, wrap_if_spells
from .constants import GENESIS_ADDRESS
from .contract import Contract
from .dsa import DSA, DSAConfig, Instance
from .errors import AbiNotDefinedError, DSAError, InstanceNotConfiguredError, RpcError
from .spells import Spell, Spells
