"""Apply a single setting change: validate, parse and store.

The applier deliberately does *not* stop at the first failing validator.
Every validator and the setter run for every change, and all failures
are reported together in one ``AggregateSettingsError`` so that an
operator sees every problem with a value in a single report.

Usage
-----
::

    applier = SettingApplier(registry)
    applier.apply(store, "cpus", "4")
    save_config(path, store)
    applier.run_callbacks("cpus", "4")
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, MutableMapping
from typing import Callable

from clusterkit.settings.errors import AggregateSettingsError, SettingsError
from clusterkit.settings.mutators import ConfigValue
from clusterkit.settings.registry import Setting, SettingRegistry

logger = logging.getLogger(__name__)

Step = Callable[[str, str], None]


def run_all(name: str, raw: str, fns: Iterable[Step]) -> None:
    """Run every function in ``fns`` and collect their failures.

    Parameters
    ----------
    name:
        The setting name passed to each function.
    raw:
        The raw value passed to each function.
    fns:
        Validators or transform steps, run in order.

    Raises
    ------
    AggregateSettingsError
        If one or more functions raised ``SettingsError`` or ``ValueError``.
    """
    errors: list[Exception] = []
    for fn in fns:
        try:
            fn(name, raw)
        except (SettingsError, ValueError) as exc:
            logger.debug("Setting %r rejected %r: %s", name, raw, exc)
            errors.append(exc)
    if errors:
        raise AggregateSettingsError(name, errors)


class SettingApplier:
    """Runs validators and setters for settings found in ``registry``."""

    def __init__(self, registry: SettingRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> SettingRegistry:
        return self._registry

    def apply(self, store: MutableMapping[str, ConfigValue], name: str, raw: str) -> Setting:
        """Validate ``raw`` and write it into ``store`` under ``name``.

        The setter writes into a scratch copy of the store; the parsed
        value is copied into ``store`` only once every step has passed.

        Returns
        -------
        Setting
            The setting that was applied.

        Raises
        ------
        SettingNotFoundError
            If ``name`` is not registered.
        AggregateSettingsError
            If any validator or the setter failed.
        """
        setting = self._registry.find(name)
        scratch: dict[str, ConfigValue] = dict(store)

        def set_step(step_name: str, step_raw: str) -> None:
            setting.setter(scratch, step_name, step_raw)

        run_all(name, raw, [*setting.validators, set_step])
        store[name] = scratch[name]
        logger.debug("Set %s=%r", name, store[name])
        return setting

    def run_callbacks(self, name: str, raw: str) -> None:
        """Run the post-save callbacks of ``name`` in order.

        Callback errors are not aggregated; the first one propagates with
        its own type so that callers can tell fatal failures apart.
        """
        setting = self._registry.find(name)
        for callback in setting.callbacks:
            callback(name, raw)

    def unset(self, store: MutableMapping[str, ConfigValue], name: str) -> None:
        """Remove ``name`` from ``store``; a missing key is not an error."""
        self._registry.find(name)
        store.pop(name, None)
