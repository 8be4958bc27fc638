"""Registry of the configuration settings clusterkit recognises.

A ``SettingRegistry`` is an explicit value built once at startup and
passed to the ``SettingApplier`` and the CLI.  Use
``build_default_registry`` for the standard set of settings, or build a
registry by hand in tests::

    registry = SettingRegistry([
        Setting("cpus", set_int, validators=(is_positive,)),
    ])
    registry.find("cpus")
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from clusterkit.settings.errors import DuplicateSettingError, SettingNotFoundError
from clusterkit.settings.mutators import Setter, set_bool, set_int, set_string
from clusterkit.settings.validators import (
    Validator,
    is_positive,
    is_valid_cidr,
    is_valid_disk_size,
    is_valid_driver,
    is_valid_runtime,
    is_valid_url,
    make_addon_validator,
    requires_restart,
)

if TYPE_CHECKING:
    from clusterkit.addons.assets import AddonCatalog

logger = logging.getLogger(__name__)

# Callbacks share the validator signature: (name, raw) -> None
Callback = Validator


@dataclass(frozen=True)
class Setting:
    """A named, typed, validated configuration entry.

    Parameters
    ----------
    name:
        Unique key of the setting in the configuration store.
    setter:
        Typed mutator that parses the raw value into the store.
    validators:
        Checks run before the setter; all of them run on every apply.
    callbacks:
        Hooks run after the new value has been persisted.
    """

    name: str
    setter: Setter
    validators: tuple[Validator, ...] = field(default=())
    callbacks: tuple[Callback, ...] = field(default=())


class SettingRegistry:
    """Ordered collection of ``Setting`` objects keyed by name."""

    def __init__(self, settings: Iterable[Setting] = ()) -> None:
        self._settings: list[Setting] = []
        for setting in settings:
            self.register(setting)

    def register(self, setting: Setting) -> None:
        """Add ``setting``; raise ``DuplicateSettingError`` if its name is taken."""
        if setting.name in self:
            raise DuplicateSettingError(setting.name)
        self._settings.append(setting)
        logger.debug("Registered setting %r", setting.name)

    def find(self, name: str) -> Setting:
        """Return the setting called ``name``.

        Raises
        ------
        SettingNotFoundError
            If no setting with that name is registered.
        """
        for setting in self._settings:
            if setting.name == name:
                return setting
        raise SettingNotFoundError(name)

    def names(self) -> list[str]:
        return [s.name for s in self._settings]

    def __contains__(self, name: object) -> bool:
        return any(s.name == name for s in self._settings)

    def __iter__(self) -> Iterator[Setting]:
        return iter(self._settings)

    def __len__(self) -> int:
        return len(self._settings)

    def __repr__(self) -> str:
        return f"SettingRegistry(settings={self.names()})"


def build_default_registry(
    catalog: "AddonCatalog",
    addon_callback: Callback | None = None,
) -> SettingRegistry:
    """Build the registry of standard cluster settings.

    Parameters
    ----------
    catalog:
        Add-on catalog; one boolean setting is registered per add-on.
    addon_callback:
        Called after an add-on setting has been saved, typically
        ``AddonToggler.as_setting_callback()``.  When ``None`` the add-on
        settings only record the desired state.

    Returns
    -------
    SettingRegistry
        A fresh registry; callers own it.
    """
    registry = SettingRegistry([
        Setting("vm-driver", set_string, validators=(is_valid_driver, requires_restart)),
        Setting("cpus", set_int, validators=(is_positive, requires_restart)),
        Setting("memory", set_int, validators=(is_positive, requires_restart)),
        Setting("disk-size", set_string, validators=(is_valid_disk_size, requires_restart)),
        Setting("kubernetes-version", set_string),
        Setting("iso-url", set_string, validators=(is_valid_url,)),
        Setting("host-only-cidr", set_string, validators=(is_valid_cidr, requires_restart)),
        Setting("container-runtime", set_string, validators=(is_valid_runtime, requires_restart)),
        Setting("show-libmachine-logs", set_bool),
        Setting("log_dir", set_string),
        Setting("wantupdatenotification", set_bool),
        Setting("reminderwaitperiodinhours", set_int, validators=(is_positive,)),
        Setting("use-vendored-driver", set_bool),
    ])

    is_valid_addon = make_addon_validator(catalog)
    callbacks: tuple[Callback, ...] = (addon_callback,) if addon_callback is not None else ()
    for addon_name in catalog.names():
        registry.register(
            Setting(
                addon_name,
                set_bool,
                validators=(is_valid_addon,),
                callbacks=callbacks,
            )
        )
    return registry
