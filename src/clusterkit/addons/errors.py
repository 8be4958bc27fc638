"""Error types raised by the add-on toggle.

``FatalToggleError`` marks failures after which no cluster work can be
done at all (no client, cluster not running, no host).  The core never exits the
process on them; the CLI decides to terminate.
"""
from __future__ import annotations

from collections.abc import Iterable


class AddonError(Exception):
    """Base class for all add-on failures."""


class AddonNotFoundError(AddonError, KeyError):
    """Raised when an add-on name is absent from the catalog."""

    def __init__(self, name: str, available: Iterable[str] = ()) -> None:
        self.addon_name = name
        self.available = list(available)
        message = f"Addon {name!r} does not exist"
        if self.available:
            message += f"; available addons: {', '.join(self.available)}"
        super().__init__(message)

    def __str__(self) -> str:
        return str(self.args[0])


class InvalidToggleValueError(AddonError, ValueError):
    """The enable/disable value is not a boolean literal."""

    def __init__(self, name: str, value: str) -> None:
        self.addon_name = name
        self.value = value
        super().__init__(
            f"error attempting to parse enable/disable value {value!r} for addon {name}"
        )


class SecretOperationError(AddonError):
    """A single secret create or delete request failed.

    Parameters
    ----------
    operation:
        ``"create"`` or ``"delete"``.
    namespace:
        Namespace of the secret.
    secret_name:
        Name of the secret.
    cause:
        The exception raised by the secret manager.
    """

    def __init__(self, operation: str, namespace: str, secret_name: str, cause: Exception) -> None:
        self.operation = operation
        self.namespace = namespace
        self.secret_name = secret_name
        self.cause = cause
        verb = {"create": "creating", "delete": "deleting"}.get(operation, operation)
        super().__init__(f"ERROR {verb} `{secret_name}` secret in namespace {namespace}: {cause}")


class SecretOperationErrors(AddonError):
    """Every secret failure collected during one toggle."""

    def __init__(self, addon_name: str, errors: Iterable[SecretOperationError]) -> None:
        self.addon_name = addon_name
        self.errors: list[SecretOperationError] = list(errors)
        lines = [f"{len(self.errors)} secret operation(s) failed for addon {addon_name}:"]
        lines.extend(f"  {err}" for err in self.errors)
        super().__init__("\n".join(lines))


class FatalToggleError(AddonError):
    """No cluster operation can proceed; the caller should terminate."""


class ClientAcquisitionError(FatalToggleError):
    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Error getting client: {cause}")


class ClusterNotRunningError(FatalToggleError):
    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Cluster is not running: {cause}")


class HostLoadError(FatalToggleError):
    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Error getting host: {cause}")


class AddonTransferError(AddonError):
    def __init__(self, addon_name: str, cause: Exception) -> None:
        self.addon_name = addon_name
        self.cause = cause
        super().__init__(f"Error transferring addon {addon_name} to VM: {cause}")


class AddonDeleteError(AddonError):
    def __init__(self, addon_name: str, cause: Exception) -> None:
        self.addon_name = addon_name
        self.cause = cause
        super().__init__(f"Error deleting addon {addon_name} from VM: {cause}")
