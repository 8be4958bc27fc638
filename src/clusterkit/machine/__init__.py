"""Machine-side seams: client type selection, collaborator ports and backends."""
from __future__ import annotations

from clusterkit.machine.backends import (
    Backend,
    BackendAlreadyRegisteredError,
    BackendNotFoundError,
    BackendRegistry,
)
from clusterkit.machine.client import ClientType, get_client_type
from clusterkit.machine.ports import (
    ClientFactory,
    ClusterClient,
    Driver,
    Host,
    Prompter,
    SecretManager,
    VMTransport,
)

__all__ = [
    "ClientType",
    "get_client_type",
    "Backend",
    "BackendRegistry",
    "BackendNotFoundError",
    "BackendAlreadyRegisteredError",
    "ClientFactory",
    "ClusterClient",
    "Driver",
    "Host",
    "Prompter",
    "SecretManager",
    "VMTransport",
]
