"""Add-on catalog, credential collection and the enable/disable orchestrator."""
from __future__ import annotations

from clusterkit.addons.assets import Addon, AddonAsset, AddonCatalog, default_catalog
from clusterkit.addons.credentials import CredentialCollector, RegistryCredentials
from clusterkit.addons.errors import (
    AddonDeleteError,
    AddonError,
    AddonNotFoundError,
    AddonTransferError,
    ClientAcquisitionError,
    ClusterNotRunningError,
    FatalToggleError,
    HostLoadError,
    InvalidToggleValueError,
    SecretOperationError,
    SecretOperationErrors,
)
from clusterkit.addons.handlers import (
    AddonHandler,
    DefaultAddonHandler,
    HandlerRegistry,
    RegistryCredsHandler,
    default_handlers,
)
from clusterkit.addons.secrets import Secret, build_registry_creds_secrets
from clusterkit.addons.toggle import AddonToggler

__all__ = [
    "Addon",
    "AddonAsset",
    "AddonCatalog",
    "default_catalog",
    "CredentialCollector",
    "RegistryCredentials",
    "AddonHandler",
    "DefaultAddonHandler",
    "RegistryCredsHandler",
    "HandlerRegistry",
    "default_handlers",
    "Secret",
    "build_registry_creds_secrets",
    "AddonToggler",
    "AddonError",
    "AddonNotFoundError",
    "InvalidToggleValueError",
    "SecretOperationError",
    "SecretOperationErrors",
    "FatalToggleError",
    "ClientAcquisitionError",
    "ClusterNotRunningError",
    "HostLoadError",
    "AddonTransferError",
    "AddonDeleteError",
]
