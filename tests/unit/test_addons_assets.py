"""Unit tests for clusterkit.addons.assets."""
from __future__ import annotations

import pytest

from clusterkit.addons.assets import Addon, AddonAsset, AddonCatalog, default_catalog
from clusterkit.addons.errors import AddonNotFoundError


class TestAddonAsset:
    def test_target_path(self) -> None:
        asset = AddonAsset("dashboard/dashboard-rc.yaml", "/etc/kubernetes/addons", "dashboard-rc.yaml")
        assert asset.target_path == "/etc/kubernetes/addons/dashboard-rc.yaml"
        assert asset.permissions == "0640"


class TestAddonCatalog:
    def test_get_returns_addon(self, small_catalog: AddonCatalog) -> None:
        assert small_catalog.get("dashboard").name == "dashboard"

    def test_get_missing_raises_not_found(self, small_catalog: AddonCatalog) -> None:
        with pytest.raises(AddonNotFoundError) as excinfo:
            small_catalog.get("heapster")
        assert excinfo.value.addon_name == "heapster"
        assert "dashboard" in str(excinfo.value)

    def test_duplicate_names_rejected(self) -> None:
        with pytest.raises(ValueError):
            AddonCatalog([Addon("a"), Addon("a")])

    def test_iteration_sorted_by_name(self) -> None:
        catalog = AddonCatalog([Addon("b"), Addon("a")])
        assert [a.name for a in catalog] == ["a", "b"]

    def test_membership_and_length(self, small_catalog: AddonCatalog) -> None:
        assert "registry-creds" in small_catalog
        assert "ingress" not in small_catalog
        assert len(small_catalog) == 2


class TestDefaultCatalog:
    def test_contains_standard_addons(self) -> None:
        catalog = default_catalog()
        for name in ("dashboard", "heapster", "ingress", "registry-creds", "kube-dns"):
            assert name in catalog

    def test_every_addon_has_assets(self) -> None:
        for addon in default_catalog():
            assert addon.assets, addon.name

    def test_dashboard_enabled_by_default(self) -> None:
        catalog = default_catalog()
        assert catalog.get("dashboard").enabled_by_default is True
        assert catalog.get("registry-creds").enabled_by_default is False
