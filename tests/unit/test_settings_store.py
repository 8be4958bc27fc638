"""Unit tests for clusterkit.settings.store."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from clusterkit.settings.store import ConfigFileError, config_path, load_config, save_config


class TestConfigPath:
    def test_explicit_home(self, tmp_path: Path) -> None:
        assert config_path(tmp_path) == tmp_path / "config" / "config.json"

    def test_home_from_environment(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CLUSTERKIT_HOME", str(tmp_path))
        assert config_path() == tmp_path / "config" / "config.json"

    def test_default_home(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("CLUSTERKIT_HOME", raising=False)
        assert config_path().parts[-3:] == (".clusterkit", "config", "config.json")


class TestLoadConfig:
    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert load_config(tmp_path / "nope.json") == {}

    def test_blank_file_is_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text("  \n", encoding="utf-8")
        assert load_config(path) == {}

    def test_reads_typed_values(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"cpus": 4, "dashboard": True, "vm-driver": "kvm2"}), encoding="utf-8")
        assert load_config(path) == {"cpus": 4, "dashboard": True, "vm-driver": "kvm2"}

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigFileError) as excinfo:
            load_config(path)
        assert excinfo.value.path == path

    def test_non_object_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigFileError):
            load_config(path)


class TestSaveConfig:
    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        path = tmp_path / "home" / "config" / "config.json"
        save_config(path, {"cpus": 2})
        assert path.exists()

    def test_saved_store_loads_back(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        store = {"cpus": 2, "dashboard": False, "kubernetes-version": "v1.8.0"}
        save_config(path, store)
        assert load_config(path) == store

    def test_keys_sorted(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        save_config(path, {"b": 1, "a": 2})
        text = path.read_text(encoding="utf-8")
        assert text.index('"a"') < text.index('"b"')
