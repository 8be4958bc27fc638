"""Unit tests for clusterkit.settings.registry."""
from __future__ import annotations

import logging

import pytest

from clusterkit.addons.assets import AddonCatalog, default_catalog
from clusterkit.settings.applier import SettingApplier
from clusterkit.settings.errors import (
    AggregateSettingsError,
    DuplicateSettingError,
    SettingNotFoundError,
    SettingParseError,
)
from clusterkit.settings.mutators import set_bool, set_int, set_string
from clusterkit.settings.registry import Setting, SettingRegistry, build_default_registry
from clusterkit.settings.validators import is_positive


def _registry() -> SettingRegistry:
    return SettingRegistry([
        Setting("cpus", set_int, validators=(is_positive,)),
        Setting("kubernetes-version", set_string),
        Setting("show-libmachine-logs", set_bool),
    ])


class TestSettingRegistryFind:
    @pytest.mark.parametrize("name", ["cpus", "kubernetes-version", "show-libmachine-logs"])
    def test_find_returns_matching_setting(self, name: str) -> None:
        assert _registry().find(name).name == name

    def test_find_missing_raises_not_found(self) -> None:
        with pytest.raises(SettingNotFoundError) as excinfo:
            _registry().find("memroy")
        assert excinfo.value.setting_name == "memroy"
        assert str(excinfo.value) == "Property name memroy not found"

    def test_not_found_is_key_error(self) -> None:
        with pytest.raises(KeyError):
            _registry().find("missing")


class TestSettingRegistryRegister:
    def test_register_appends(self) -> None:
        registry = _registry()
        registry.register(Setting("memory", set_int))
        assert registry.names()[-1] == "memory"
        assert len(registry) == 4

    def test_duplicate_name_rejected(self) -> None:
        registry = _registry()
        with pytest.raises(DuplicateSettingError):
            registry.register(Setting("cpus", set_string))

    def test_duplicate_in_constructor_rejected(self) -> None:
        with pytest.raises(DuplicateSettingError):
            SettingRegistry([Setting("a", set_string), Setting("a", set_int)])

    def test_register_logs_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="clusterkit.settings.registry"):
            SettingRegistry([Setting("logged", set_string)])
        assert "logged" in caplog.text

    def test_iteration_preserves_order(self) -> None:
        assert [s.name for s in _registry()] == ["cpus", "kubernetes-version", "show-libmachine-logs"]

    def test_membership(self) -> None:
        registry = _registry()
        assert "cpus" in registry
        assert "disk-size" not in registry

    def test_repr_lists_names(self) -> None:
        assert "cpus" in repr(_registry())


class TestBuildDefaultRegistry:
    def test_core_settings_present(self) -> None:
        registry = build_default_registry(default_catalog())
        for name in ("vm-driver", "cpus", "memory", "disk-size", "use-vendored-driver"):
            assert name in registry

    def test_one_setting_per_addon(self, small_catalog: AddonCatalog) -> None:
        registry = build_default_registry(small_catalog)
        assert "dashboard" in registry
        assert "registry-creds" in registry
        assert registry.find("dashboard").setter is set_bool

    def test_addon_callback_attached(self, small_catalog: AddonCatalog) -> None:
        def callback(name: str, raw: str) -> None:
            pass

        registry = build_default_registry(small_catalog, addon_callback=callback)
        assert registry.find("dashboard").callbacks == (callback,)
        assert registry.find("cpus").callbacks == ()

    def test_addon_settings_without_callback(self, small_catalog: AddonCatalog) -> None:
        registry = build_default_registry(small_catalog)
        assert registry.find("registry-creds").callbacks == ()

    def test_each_call_returns_new_registry(self, small_catalog: AddonCatalog) -> None:
        assert build_default_registry(small_catalog) is not build_default_registry(small_catalog)

    def test_names_unique(self) -> None:
        names = build_default_registry(default_catalog()).names()
        assert len(names) == len(set(names))

    def test_invalid_addon_value_reported_once(self, small_catalog: AddonCatalog) -> None:
        applier = SettingApplier(build_default_registry(small_catalog))
        store: dict = {}
        with pytest.raises(AggregateSettingsError) as excinfo:
            applier.apply(store, "dashboard", "maybe")
        assert len(excinfo.value.errors) == 1
        assert isinstance(excinfo.value.errors[0], SettingParseError)
        assert store == {}
