"""Per-add-on behaviour hooked into the toggle.

Most add-ons are plain payloads and use ``DefaultAddonHandler``.  Add-ons
that need something extra before they are transferred, such as
``registry-creds`` collecting credentials, provide their own handler.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Callable

from clusterkit.addons.credentials import CredentialCollector
from clusterkit.addons.secrets import (
    REGISTRY_CREDS,
    REGISTRY_CREDS_SECRETS,
    Secret,
    build_registry_creds_secrets,
)
from clusterkit.machine.ports import Prompter

logger = logging.getLogger(__name__)


class AddonHandler(ABC):
    """Capabilities an add-on may add to the generic toggle."""

    @property
    def needs_credentials(self) -> bool:
        return False

    def collect(self, prompter: Prompter) -> tuple[Secret, ...]:
        """Gather the secrets to create when the add-on is enabled."""
        return ()

    @abstractmethod
    def secret_names(self) -> tuple[str, ...]:
        """Names of the secrets this handler owns in ``kube-system``."""


class DefaultAddonHandler(AddonHandler):
    def secret_names(self) -> tuple[str, ...]:
        return ()


class RegistryCredsHandler(AddonHandler):
    """Prompts for ECR, GCR and Docker registry credentials."""

    def __init__(self, collector_factory: Callable[[Prompter], CredentialCollector] = CredentialCollector) -> None:
        self._collector_factory = collector_factory

    @property
    def needs_credentials(self) -> bool:
        return True

    def collect(self, prompter: Prompter) -> tuple[Secret, ...]:
        creds = self._collector_factory(prompter).collect()
        return build_registry_creds_secrets(creds)

    def secret_names(self) -> tuple[str, ...]:
        return REGISTRY_CREDS_SECRETS


class HandlerRegistry:
    """Maps add-on names to handlers; unknown names get the default."""

    def __init__(
        self,
        handlers: Mapping[str, AddonHandler] | None = None,
        default: AddonHandler | None = None,
    ) -> None:
        self._handlers: dict[str, AddonHandler] = dict(handlers or {})
        self._default = default if default is not None else DefaultAddonHandler()

    def register(self, name: str, handler: AddonHandler) -> None:
        if name in self._handlers:
            raise ValueError(f"A handler is already registered for addon {name!r}")
        self._handlers[name] = handler
        logger.debug("Registered handler %s for addon %r", type(handler).__qualname__, name)

    def resolve(self, name: str) -> AddonHandler:
        return self._handlers.get(name, self._default)

    def credential_secret_names(self) -> tuple[str, ...]:
        """Secret names owned by every credential-collecting handler."""
        names: list[str] = []
        for handler in self._handlers.values():
            if handler.needs_credentials:
                names.extend(n for n in handler.secret_names() if n not in names)
        return tuple(names)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers


def default_handlers() -> HandlerRegistry:
    return HandlerRegistry({REGISTRY_CREDS: RegistryCredsHandler()})
