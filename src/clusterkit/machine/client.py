"""Selection between the two machine-API client implementations."""
from __future__ import annotations

from enum import Enum
from typing import Protocol


class ClientType(Enum):
    """Opaque selector consumed by a ``ClientFactory``."""

    LOCAL = "local"
    RPC = "rpc"


class _HasVendoredFlag(Protocol):
    @property
    def use_vendored_driver(self) -> bool: ...


def get_client_type(flags: _HasVendoredFlag) -> ClientType:
    if flags.use_vendored_driver:
        return ClientType.LOCAL
    return ClientType.RPC
