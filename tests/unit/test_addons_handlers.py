"""Unit tests for clusterkit.addons.handlers."""
from __future__ import annotations

import pytest

from clusterkit.addons.handlers import (
    DefaultAddonHandler,
    HandlerRegistry,
    RegistryCredsHandler,
    default_handlers,
)
from clusterkit.addons.secrets import REGISTRY_CREDS_SECRETS


class TestDefaultAddonHandler:
    def test_has_no_credentials_or_secrets(self, collaborators) -> None:
        handler = DefaultAddonHandler()
        assert handler.needs_credentials is False
        assert handler.collect(collaborators.prompter) == ()
        assert handler.secret_names() == ()


class TestRegistryCredsHandler:
    def test_needs_credentials(self) -> None:
        assert RegistryCredsHandler().needs_credentials is True

    def test_collect_returns_three_secrets(self, collaborators) -> None:
        secrets = RegistryCredsHandler().collect(collaborators.prompter)
        assert tuple(s.name for s in secrets) == REGISTRY_CREDS_SECRETS

    def test_owns_registry_creds_secret_names(self) -> None:
        assert RegistryCredsHandler().secret_names() == REGISTRY_CREDS_SECRETS


class TestHandlerRegistry:
    def test_unknown_name_resolves_to_default(self) -> None:
        assert isinstance(default_handlers().resolve("dashboard"), DefaultAddonHandler)

    def test_registry_creds_resolves_to_its_handler(self) -> None:
        assert isinstance(default_handlers().resolve("registry-creds"), RegistryCredsHandler)

    def test_credential_secret_names(self) -> None:
        assert default_handlers().credential_secret_names() == REGISTRY_CREDS_SECRETS

    def test_empty_registry_has_no_secret_names(self) -> None:
        assert HandlerRegistry().credential_secret_names() == ()

    def test_register_duplicate_rejected(self) -> None:
        registry = default_handlers()
        with pytest.raises(ValueError):
            registry.register("registry-creds", RegistryCredsHandler())

    def test_register_custom_handler(self) -> None:
        registry = HandlerRegistry()
        handler = DefaultAddonHandler()
        registry.register("ingress", handler)
        assert registry.resolve("ingress") is handler
        assert "ingress" in registry
