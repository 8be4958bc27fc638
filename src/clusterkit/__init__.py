"""clusterkit: settings and add-on management for a local single-node cluster.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import clusterkit

    # Validate and store a setting
    store = {}
    clusterkit.apply_setting(store, "cpus", "4")

    # Enable an add-on through the collaborators of a backend
    toggler = clusterkit.AddonToggler(
        catalog=clusterkit.default_catalog(),
        handlers=clusterkit.default_handlers(),
        client_factory=backend.client_factory(),
        secret_manager=backend.secret_manager(),
        transport=backend.transport(),
        prompter=prompter,
    )
    toggler.toggle("dashboard", "true")

    clusterkit.__version__
    '0.1.0'
"""
from __future__ import annotations

from collections.abc import MutableMapping
from typing import TYPE_CHECKING

from clusterkit.addons import AddonToggler, default_catalog, default_handlers
from clusterkit.config import RuntimeFlags, SecretPolicy
from clusterkit.machine import ClientType, get_client_type

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from clusterkit.settings.mutators import ConfigValue


def apply_setting(store: MutableMapping[str, "ConfigValue"], name: str, value: str) -> None:
    """Validate ``value`` and store it under ``name`` using the default settings.

    Parameters
    ----------
    store:
        The in-memory configuration store to update.
    name:
        A setting name from the default registry.
    value:
        The raw value, as typed on the command line.

    Raises
    ------
    clusterkit.settings.SettingNotFoundError
        If ``name`` is not a known setting.
    clusterkit.settings.AggregateSettingsError
        If the value fails one or more validators or cannot be parsed.
    """
    from clusterkit.settings import SettingApplier, build_default_registry

    SettingApplier(build_default_registry(default_catalog())).apply(store, name, value)


__all__ = [
    "__version__",
    "apply_setting",
    "AddonToggler",
    "default_catalog",
    "default_handlers",
    "RuntimeFlags",
    "SecretPolicy",
    "ClientType",
    "get_client_type",
]
