"""Persistence of the configuration store as a JSON document.

The store lives at ``<home>/config/config.json`` where ``<home>`` is
``$CLUSTERKIT_HOME`` or ``~/.clusterkit``.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Union

from clusterkit.settings.errors import SettingsError
from clusterkit.settings.mutators import ConfigValue

ConfigStore = dict[str, ConfigValue]

HOME_ENV_VAR = "CLUSTERKIT_HOME"


class ConfigFileError(SettingsError):
    """The persisted configuration could not be read or decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Cannot load config file {path}: {reason}")


def default_home() -> Path:
    env = os.environ.get(HOME_ENV_VAR)
    if env:
        return Path(env)
    return Path.home() / ".clusterkit"


def config_path(home: Union[str, Path, None] = None) -> Path:
    base = Path(home) if home is not None else default_home()
    return base / "config" / "config.json"


def load_config(path: Path) -> ConfigStore:
    """Read the store from ``path``; a missing file yields an empty store."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as exc:
        raise ConfigFileError(path, str(exc)) from exc

    if not text.strip():
        return {}
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigFileError(path, f"invalid JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise ConfigFileError(path, "top-level value must be an object")
    return data


def save_config(path: Path, store: ConfigStore) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(store, indent=4, sort_keys=True) + "\n", encoding="utf-8")
