"""Test that the quickstart API works for clusterkit."""
from __future__ import annotations

import pytest


def test_quickstart_import(package_name: str, expected_version: str) -> None:
    import importlib

    module = importlib.import_module(package_name)
    assert module.__version__ == expected_version


def test_quickstart_apply_setting() -> None:
    import clusterkit

    store: dict = {}
    clusterkit.apply_setting(store, "cpus", "4")
    clusterkit.apply_setting(store, "dashboard", "false")
    assert store == {"cpus": 4, "dashboard": False}


def test_quickstart_apply_setting_rejects_unknown_name() -> None:
    import clusterkit
    from clusterkit.settings import SettingNotFoundError

    with pytest.raises(SettingNotFoundError):
        clusterkit.apply_setting({}, "nope", "1")


def test_quickstart_toggle(collaborators) -> None:
    collaborators.toggler().toggle("dashboard", "true")
    assert len(collaborators.transport.transferred) == 1


def test_quickstart_client_type() -> None:
    import clusterkit

    assert clusterkit.get_client_type(clusterkit.RuntimeFlags()) is clusterkit.ClientType.RPC
