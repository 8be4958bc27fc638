"""Backend registry for clusterkit.

A backend bundles the external collaborators the add-on toggle needs: a
cluster client factory, a secret manager and a VM transport.  Backends
are registered by name, either in code with the decorator or by
installed packages declaring entry-points in the ``clusterkit.backends``
group.

Example
-------
::

    registry = BackendRegistry()

    @registry.register("hyperkit")
    class HyperkitBackend(Backend):
        def client_factory(self) -> ClientFactory: ...
        def secret_manager(self) -> SecretManager: ...
        def transport(self) -> VMTransport: ...

    backend = registry.create("hyperkit")

In a downstream package's ``pyproject.toml``::

    [project.entry-points."clusterkit.backends"]
    hyperkit = "clusterkit_hyperkit:HyperkitBackend"
"""
from __future__ import annotations

import importlib.metadata
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

from clusterkit.machine.ports import ClientFactory, SecretManager, VMTransport

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "clusterkit.backends"


class Backend(ABC):
    """Supplies the collaborators for one kind of cluster."""

    @abstractmethod
    def client_factory(self) -> ClientFactory: ...

    @abstractmethod
    def secret_manager(self) -> SecretManager: ...

    @abstractmethod
    def transport(self) -> VMTransport: ...


class BackendNotFoundError(KeyError):
    """Raised when a requested backend name is not registered."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.backend_name = name
        self.available = available
        listing = ", ".join(available) if available else "none installed"
        super().__init__(
            f"Backend {name!r} is not registered (available: {listing}). "
            "Check that the backend package is installed and its entry-points are declared."
        )

    def __str__(self) -> str:
        return str(self.args[0])


class BackendAlreadyRegisteredError(ValueError):
    """Raised when attempting to register a name that already exists."""

    def __init__(self, name: str) -> None:
        self.backend_name = name
        super().__init__(
            f"Backend {name!r} is already registered. "
            "Use a unique name or deregister the existing entry first."
        )


class BackendRegistry:
    """Name to ``Backend`` subclass mapping."""

    def __init__(self) -> None:
        self._backends: dict[str, type[Backend]] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, name: str) -> Callable[[type[Backend]], type[Backend]]:
        """Return a class decorator that registers the decorated backend.

        Raises
        ------
        BackendAlreadyRegisteredError
            If ``name`` is already in use.
        TypeError
            If the decorated class does not subclass ``Backend``.
        """

        def decorator(cls: type[Backend]) -> type[Backend]:
            self.register_class(name, cls)
            return cls

        return decorator

    def register_class(self, name: str, cls: type[Backend]) -> None:
        if name in self._backends:
            raise BackendAlreadyRegisteredError(name)
        if not (isinstance(cls, type) and issubclass(cls, Backend)):
            raise TypeError(
                f"Cannot register {cls!r} under {name!r}: it must be a subclass of Backend."
            )
        self._backends[name] = cls
        logger.debug("Registered backend %r -> %s", name, cls.__qualname__)

    def deregister(self, name: str) -> None:
        if name not in self._backends:
            raise BackendNotFoundError(name, self.list_backends())
        del self._backends[name]
        logger.debug("Deregistered backend %r", name)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, name: str) -> type[Backend]:
        try:
            return self._backends[name]
        except KeyError:
            raise BackendNotFoundError(name, self.list_backends()) from None

    def create(self, name: str) -> Backend:
        """Instantiate the backend registered under ``name``."""
        return self.get(name)()

    def list_backends(self) -> list[str]:
        return sorted(self._backends)

    def __contains__(self, name: object) -> bool:
        return name in self._backends

    def __len__(self) -> int:
        return len(self._backends)

    def __repr__(self) -> str:
        return f"BackendRegistry(backends={self.list_backends()})"

    # ------------------------------------------------------------------
    # Entry-point loading
    # ------------------------------------------------------------------

    def load_entrypoints(self, group: str = ENTRY_POINT_GROUP) -> None:
        """Discover and register backends declared as package entry-points.

        Backends that are already registered are skipped, so repeated
        calls are idempotent.  A backend that fails to import is logged
        and skipped rather than breaking every command.
        """
        for ep in importlib.metadata.entry_points(group=group):
            if ep.name in self._backends:
                logger.debug("Entry-point %r already registered; skipping.", ep.name)
                continue
            try:
                cls = ep.load()
            except Exception:
                logger.exception(
                    "Failed to load entry-point %r from group %r; skipping.",
                    ep.name,
                    group,
                )
                continue
            try:
                self.register_class(ep.name, cls)
            except (BackendAlreadyRegisteredError, TypeError):
                logger.warning(
                    "Entry-point %r loaded but could not be registered as a backend; skipping.",
                    ep.name,
                )
