"""Shared test fixtures for clusterkit.

Fixtures defined here are available to all tests in the suite without
needing an explicit import.  The fakes below implement the collaborator
ports and record every call so that tests can assert on the requests the
core made.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

import pytest

from clusterkit.addons.assets import Addon, AddonAsset, AddonCatalog
from clusterkit.addons.handlers import default_handlers
from clusterkit.addons.secrets import Secret
from clusterkit.addons.toggle import AddonToggler
from clusterkit.config import RuntimeFlags
from clusterkit.machine.backends import Backend
from clusterkit.machine.client import ClientType


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "clusterkit"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakePrompter:
    """Answers confirmations and free-text prompts from canned queues."""

    def __init__(self, confirmations: Iterable[bool] = (), answers: Iterable[str] = ()) -> None:
        self.confirmations = list(confirmations)
        self.answers = list(answers)
        self.questions: list[str] = []
        self.prompts: list[str] = []

    def confirm(self, question: str, positive: Iterable[str], negative: Iterable[str]) -> bool:
        self.questions.append(question)
        return self.confirmations.pop(0) if self.confirmations else False

    def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.answers.pop(0)


class FakeSecretManager:
    def __init__(self, fail_on: Iterable[str] = ()) -> None:
        self.fail_on = set(fail_on)
        self.created: list[Secret] = []
        self.deleted: list[tuple[str, str]] = []

    def create_secret(self, secret: Secret) -> None:
        if secret.name in self.fail_on:
            raise RuntimeError(f"cannot create {secret.name}")
        self.created.append(secret)

    def delete_secret(self, namespace: str, name: str) -> None:
        if name in self.fail_on:
            raise RuntimeError(f"cannot delete {name}")
        self.deleted.append((namespace, name))


@dataclass
class FakeDriver:
    hostname: str = "192.168.99.100"

    def get_ssh_hostname(self) -> str:
        return self.hostname


@dataclass
class FakeHost:
    driver: FakeDriver = field(default_factory=FakeDriver)


class FakeClient:
    def __init__(self, running: bool = True, host_error: Exception | None = None) -> None:
        self.running = running
        self.host_error = host_error
        self.closed = False
        self.host = FakeHost()

    def ensure_running(self) -> None:
        if not self.running:
            raise RuntimeError("cluster is stopped")

    def load_host(self) -> FakeHost:
        if self.host_error is not None:
            raise self.host_error
        return self.host

    def close(self) -> None:
        self.closed = True


class FakeClientFactory:
    def __init__(self, client: FakeClient | None = None, error: Exception | None = None) -> None:
        self.client = client if client is not None else FakeClient()
        self.error = error
        self.requested: list[ClientType] = []

    def __call__(self, client_type: ClientType) -> FakeClient:
        self.requested.append(client_type)
        if self.error is not None:
            raise self.error
        return self.client


class FakeTransport:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.transferred: list[tuple[Addon, FakeDriver]] = []
        self.deleted: list[tuple[Addon, FakeDriver]] = []

    def transfer_addon(self, addon: Addon, driver: FakeDriver) -> None:
        if self.error is not None:
            raise self.error
        self.transferred.append((addon, driver))

    def delete_addon(self, addon: Addon, driver: FakeDriver) -> None:
        if self.error is not None:
            raise self.error
        self.deleted.append((addon, driver))


@dataclass
class Collaborators:
    """Every fake a toggler needs, plus a builder for the toggler itself."""

    catalog: AddonCatalog
    prompter: FakePrompter = field(default_factory=FakePrompter)
    secrets: FakeSecretManager = field(default_factory=FakeSecretManager)
    factory: FakeClientFactory = field(default_factory=FakeClientFactory)
    transport: FakeTransport = field(default_factory=FakeTransport)

    def toggler(self, flags: RuntimeFlags | None = None) -> AddonToggler:
        return AddonToggler(
            catalog=self.catalog,
            handlers=default_handlers(),
            client_factory=self.factory,
            secret_manager=self.secrets,
            transport=self.transport,
            prompter=self.prompter,
            flags=flags,
        )


@pytest.fixture()
def small_catalog() -> AddonCatalog:
    return AddonCatalog([
        Addon(
            "dashboard",
            (AddonAsset("dashboard/dashboard-rc.yaml", "/etc/kubernetes/addons", "dashboard-rc.yaml"),),
            enabled_by_default=True,
        ),
        Addon(
            "registry-creds",
            (AddonAsset("registry-creds/registry-creds-rc.yaml", "/etc/kubernetes/addons", "registry-creds-rc.yaml"),),
        ),
    ])


@pytest.fixture()
def collaborators(small_catalog: AddonCatalog) -> Collaborators:
    return Collaborators(catalog=small_catalog)


@pytest.fixture()
def fake_backend_class(collaborators: Collaborators) -> type[Backend]:
    """A ``Backend`` subclass handing out the shared fakes."""

    class FakeBackend(Backend):
        def client_factory(self) -> FakeClientFactory:
            return collaborators.factory

        def secret_manager(self) -> FakeSecretManager:
            return collaborators.secrets

        def transport(self) -> FakeTransport:
            return collaborators.transport

    return FakeBackend
