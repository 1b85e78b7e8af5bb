"""
Errors raised by the DSA SDK.

Every error carries an ``exit_code`` so the CLI can map it to a
process status without inspecting messages.
"""

from __future__ import annotations

from typing import Optional

from .constants import SETUP_DOCS_URL


class DSAError(RuntimeError):
    exit_code: int = 1


class InstanceNotConfiguredError(DSAError):
    exit_code = 2

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(
            message
            or "Please configure the DSA instance by calling "
            f"dsa.set_instance(dsa_id). More details: {SETUP_DOCS_URL}"
        )


class AbiNotDefinedError(DSAError):
    exit_code = 3

    def __init__(self, message: str = "Abi is not defined.") -> None:
        super().__init__(message)


class RpcError(DSAError):
    exit_code = 4
