"""Settings engine: registry, typed mutators, validators and the applier.

Exports the ``SettingRegistry``, ``SettingApplier``, the typed mutators
and all settings error types.
"""
from __future__ import annotations

from clusterkit.settings.applier import SettingApplier, run_all
from clusterkit.settings.errors import (
    AggregateSettingsError,
    DuplicateSettingError,
    SettingNotFoundError,
    SettingParseError,
    SettingsError,
    SettingValidationError,
)
from clusterkit.settings.mutators import parse_bool, set_bool, set_int, set_string
from clusterkit.settings.registry import Setting, SettingRegistry, build_default_registry
from clusterkit.settings.store import ConfigFileError, config_path, load_config, save_config

__all__ = [
    "SettingApplier",
    "run_all",
    "Setting",
    "SettingRegistry",
    "build_default_registry",
    "parse_bool",
    "set_bool",
    "set_int",
    "set_string",
    "config_path",
    "load_config",
    "save_config",
    "ConfigFileError",
    "SettingsError",
    "SettingNotFoundError",
    "DuplicateSettingError",
    "SettingValidationError",
    "SettingParseError",
    "AggregateSettingsError",
]
