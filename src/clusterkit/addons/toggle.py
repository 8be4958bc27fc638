"""Enable or disable a cluster add-on.

``AddonToggler.toggle`` is the whole workflow:

1. parse the enable/disable value,
2. create (enable) or delete (disable) the credential secrets,
3. open a cluster client of the configured type,
4. make sure the cluster is running and load its host,
5. look up the add-on,
6. transfer the payload to the VM, or delete it from the VM.

The client is closed on every path once it has been opened.  Nothing in
here terminates the process: failures that leave no cluster to work with
are raised as ``FatalToggleError`` and the caller decides what to do.

Usage
-----
::

    toggler = AddonToggler(
        catalog=default_catalog(),
        handlers=default_handlers(),
        client_factory=backend.client_factory(),
        secret_manager=backend.secret_manager(),
        transport=backend.transport(),
        prompter=ClickPrompter(),
    )
    toggler.toggle("dashboard", "true")
"""
from __future__ import annotations

import logging
from contextlib import closing
from typing import Callable

from clusterkit.addons.assets import Addon, AddonCatalog
from clusterkit.addons.errors import (
    AddonDeleteError,
    AddonTransferError,
    ClientAcquisitionError,
    ClusterNotRunningError,
    FatalToggleError,
    HostLoadError,
    InvalidToggleValueError,
    SecretOperationError,
    SecretOperationErrors,
)
from clusterkit.addons.handlers import HandlerRegistry
from clusterkit.addons.secrets import SECRETS_NAMESPACE, Secret
from clusterkit.config import RuntimeFlags, SecretPolicy
from clusterkit.machine.client import get_client_type
from clusterkit.machine.ports import (
    ClientFactory,
    ClusterClient,
    Driver,
    Host,
    Prompter,
    SecretManager,
    VMTransport,
)
from clusterkit.settings.mutators import parse_bool

logger = logging.getLogger(__name__)


class AddonToggler:
    """Orchestrates one add-on enable or disable per call.

    Parameters
    ----------
    catalog:
        Where add-on descriptors are looked up by name.
    handlers:
        Per-add-on behaviour; decides whether credentials are collected.
    client_factory:
        Opens the cluster client.
    secret_manager:
        Creates and deletes credential secrets.
    transport:
        Copies payloads to, and removes them from, the VM.
    prompter:
        Asks the operator for credentials.
    flags:
        Client type selection, secret failure policy and the behaviour
        on an unparsable enable/disable value.
    """

    def __init__(
        self,
        catalog: AddonCatalog,
        handlers: HandlerRegistry,
        client_factory: ClientFactory,
        secret_manager: SecretManager,
        transport: VMTransport,
        prompter: Prompter,
        flags: RuntimeFlags | None = None,
    ) -> None:
        self._catalog = catalog
        self._handlers = handlers
        self._client_factory = client_factory
        self._secret_manager = secret_manager
        self._transport = transport
        self._prompter = prompter
        self._flags = flags if flags is not None else RuntimeFlags()

    @property
    def flags(self) -> RuntimeFlags:
        return self._flags

    def enable(self, name: str) -> None:
        self.toggle(name, "true")

    def disable(self, name: str) -> None:
        self.toggle(name, "false")

    def as_setting_callback(self) -> Callable[[str, str], None]:
        """Return ``toggle`` shaped as a setting callback ``(name, raw)``."""
        return self.toggle

    def toggle(self, name: str, raw_value: str) -> None:
        """Enable ``name`` if ``raw_value`` is true, otherwise disable it.

        Raises
        ------
        InvalidToggleValueError
            ``raw_value`` is not a boolean literal and the flags ask to abort.
        SecretOperationError
            A secret operation failed under ``SecretPolicy.ALL_OR_NOTHING``;
            secrets created earlier in the same toggle have been deleted.
        ClientAcquisitionError, ClusterNotRunningError, HostLoadError
            Fatal: there is no running cluster to work with.
        AddonNotFoundError
            ``name`` is not in the catalog.
        AddonTransferError, AddonDeleteError
            The VM transport failed.
        SecretOperationErrors
            Secret operations failed under ``SecretPolicy.AGGREGATE``; raised
            only after the add-on itself was dispatched successfully.
        """
        enable = self._parse_flag(name, raw_value)
        logger.info("%s addon %s", "Enabling" if enable else "Disabling", name)

        if enable:
            secret_errors = self._create_secrets(name)
        else:
            secret_errors = self._delete_secrets()

        client = self._open_client()
        with closing(client):
            self._ensure_running(client)
            host = self._load_host(client)
            addon = self._catalog.get(name)
            if enable:
                self._transfer(addon, host.driver)
            else:
                self._delete(addon, host.driver)

        if secret_errors and self._flags.secret_policy is SecretPolicy.AGGREGATE:
            raise SecretOperationErrors(name, secret_errors)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _parse_flag(self, name: str, raw_value: str) -> bool:
        try:
            return parse_bool(raw_value)
        except ValueError:
            if self._flags.abort_on_invalid_flag:
                raise InvalidToggleValueError(name, raw_value) from None
            logger.warning(
                "Could not parse enable/disable value %r for addon %s; treating it as disable",
                raw_value,
                name,
            )
            return False

    def _create_secrets(self, name: str) -> list[SecretOperationError]:
        handler = self._handlers.resolve(name)
        if not handler.needs_credentials:
            return []
        secrets = handler.collect(self._prompter)
        created: list[Secret] = []
        errors: list[SecretOperationError] = []
        for secret in secrets:
            try:
                error = self._run_secret_op("create", secret.namespace, secret.name, secret)
            except SecretOperationError:
                self._roll_back(created)
                raise
            if error is None:
                created.append(secret)
            else:
                errors.append(error)
        return errors

    def _roll_back(self, created: list[Secret]) -> None:
        for secret in reversed(created):
            try:
                self._secret_manager.delete_secret(secret.namespace, secret.name)
            except Exception as exc:  # noqa: BLE001
                logger.warning(
                    "Could not roll back secret %s/%s: %s", secret.namespace, secret.name, exc
                )
            else:
                logger.debug("rolled back secret %s/%s", secret.namespace, secret.name)

    def _delete_secrets(self) -> list[SecretOperationError]:
        errors: list[SecretOperationError] = []
        for secret_name in self._handlers.credential_secret_names():
            error = self._run_secret_op("delete", SECRETS_NAMESPACE, secret_name)
            if error is not None:
                errors.append(error)
        return errors

    def _run_secret_op(
        self,
        operation: str,
        namespace: str,
        secret_name: str,
        secret: Secret | None = None,
    ) -> SecretOperationError | None:
        try:
            if secret is not None:
                self._secret_manager.create_secret(secret)
            else:
                self._secret_manager.delete_secret(namespace, secret_name)
        except Exception as exc:  # noqa: BLE001
            error = SecretOperationError(operation, namespace, secret_name, exc)
            if self._flags.secret_policy is SecretPolicy.ALL_OR_NOTHING:
                raise error from exc
            logger.warning("%s", error)
            return error
        logger.debug("%s secret %s/%s", operation, namespace, secret_name)
        return None

    def _open_client(self) -> ClusterClient:
        client_type = get_client_type(self._flags)
        try:
            return self._client_factory(client_type)
        except Exception as exc:  # noqa: BLE001
            raise ClientAcquisitionError(exc) from exc

    def _ensure_running(self, client: ClusterClient) -> None:
        try:
            client.ensure_running()
        except FatalToggleError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise ClusterNotRunningError(exc) from exc

    def _load_host(self, client: ClusterClient) -> Host:
        try:
            return client.load_host()
        except Exception as exc:  # noqa: BLE001
            raise HostLoadError(exc) from exc

    def _transfer(self, addon: Addon, driver: Driver) -> None:
        try:
            self._transport.transfer_addon(addon, driver)
        except Exception as exc:  # noqa: BLE001
            raise AddonTransferError(addon.name, exc) from exc
        logger.info("Transferred addon %s to VM", addon.name)

    def _delete(self, addon: Addon, driver: Driver) -> None:
        try:
            self._transport.delete_addon(addon, driver)
        except Exception as exc:  # noqa: BLE001
            raise AddonDeleteError(addon.name, exc) from exc
        logger.info("Deleted addon %s from VM", addon.name)
