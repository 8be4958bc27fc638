"""Ports (interfaces) for the collaborators the core drives.

The cluster client, secret store, VM transport and interactive prompts
all live outside this package.  These protocols are the only contract
between them and the toggle orchestrator; backends and tests supply the
implementations.
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from clusterkit.addons.assets import Addon
    from clusterkit.addons.secrets import Secret
    from clusterkit.machine.client import ClientType


@runtime_checkable
class Driver(Protocol):
    """Control interface of the running VM."""

    def get_ssh_hostname(self) -> str:
        """Return the address used to reach the VM."""


@runtime_checkable
class Host(Protocol):
    """The machine hosting the cluster."""

    @property
    def driver(self) -> Driver:
        """Driver handle borrowed for remote operations."""


@runtime_checkable
class ClusterClient(Protocol):
    """Connection to the cluster/machine API; must be closed by its owner."""

    def ensure_running(self) -> None:
        """Block until the cluster is running; raise if it is not."""

    def load_host(self) -> Host:
        """Return the current host."""

    def close(self) -> None:
        """Release the connection."""


@runtime_checkable
class ClientFactory(Protocol):
    """Creates a new ``ClusterClient`` of the requested type."""

    def __call__(self, client_type: "ClientType") -> ClusterClient:
        """Open a client."""


@runtime_checkable
class SecretManager(Protocol):
    """Creates and deletes secrets in the cluster."""

    def create_secret(self, secret: "Secret") -> None:
        """Create or replace ``secret``."""

    def delete_secret(self, namespace: str, name: str) -> None:
        """Delete the secret ``namespace/name``."""


@runtime_checkable
class VMTransport(Protocol):
    """Moves add-on payloads on and off the VM."""

    def transfer_addon(self, addon: "Addon", driver: Driver) -> None:
        """Copy every asset of ``addon`` to the VM."""

    def delete_addon(self, addon: "Addon", driver: Driver) -> None:
        """Remove every asset of ``addon`` from the VM."""


@runtime_checkable
class Prompter(Protocol):
    """Interactive questions asked while collecting credentials."""

    def confirm(self, question: str, positive: Iterable[str], negative: Iterable[str]) -> bool:
        """Ask a yes/no question until one of the given tokens is answered."""

    def ask(self, prompt: str) -> str:
        """Ask for a free-text value."""
