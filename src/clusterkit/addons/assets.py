"""Add-on descriptors and the catalog they are looked up in.

The toggle orchestrator treats an ``Addon`` as an opaque payload: it only
hands it to the VM transport, which knows how to copy or remove each
``AddonAsset``.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from clusterkit.addons.errors import AddonNotFoundError

ADDONS_TARGET_DIR = "/etc/kubernetes/addons"
MANIFESTS_TARGET_DIR = "/etc/kubernetes/manifests"


@dataclass(frozen=True)
class AddonAsset:
    """One file of an add-on payload.

    Parameters
    ----------
    source:
        Path of the manifest relative to the add-on asset root.
    target_dir:
        Directory on the VM the file is copied into.
    target_name:
        File name on the VM.
    permissions:
        Octal permission string applied on the VM.
    """

    source: str
    target_dir: str
    target_name: str
    permissions: str = "0640"

    @property
    def target_path(self) -> str:
        return f"{self.target_dir}/{self.target_name}"


@dataclass(frozen=True)
class Addon:
    name: str
    assets: tuple[AddonAsset, ...] = field(default=())
    enabled_by_default: bool = False


class AddonCatalog:
    """Read-only lookup of add-ons by name."""

    def __init__(self, addons: Iterable[Addon] = ()) -> None:
        self._addons: dict[str, Addon] = {}
        for addon in addons:
            if addon.name in self._addons:
                raise ValueError(f"Addon {addon.name!r} is defined twice")
            self._addons[addon.name] = addon

    def get(self, name: str) -> Addon:
        """Return the add-on called ``name``.

        Raises
        ------
        AddonNotFoundError
            If ``name`` is not in the catalog.
        """
        try:
            return self._addons[name]
        except KeyError:
            raise AddonNotFoundError(name, self.names()) from None

    def names(self) -> list[str]:
        return sorted(self._addons)

    def __contains__(self, name: object) -> bool:
        return name in self._addons

    def __iter__(self) -> Iterator[Addon]:
        return iter(self._addons[n] for n in self.names())

    def __len__(self) -> int:
        return len(self._addons)

    def __repr__(self) -> str:
        return f"AddonCatalog(addons={self.names()})"


def _manifests(addon_dir: str, *files: str) -> tuple[AddonAsset, ...]:
    return tuple(
        AddonAsset(source=f"{addon_dir}/{f}", target_dir=ADDONS_TARGET_DIR, target_name=f)
        for f in files
    )


def default_catalog() -> AddonCatalog:
    """Return the catalog of add-ons shipped with the cluster image."""
    return AddonCatalog([
        Addon(
            "addon-manager",
            (AddonAsset("addon-manager.yaml", MANIFESTS_TARGET_DIR, "addon-manager.yaml"),),
            enabled_by_default=True,
        ),
        Addon(
            "dashboard",
            _manifests("dashboard", "dashboard-rc.yaml", "dashboard-svc.yaml"),
            enabled_by_default=True,
        ),
        Addon(
            "default-storageclass",
            _manifests("storageclass", "storageclass.yaml"),
            enabled_by_default=True,
        ),
        Addon(
            "heapster",
            _manifests(
                "heapster",
                "influxGrafana-rc.yaml",
                "grafana-svc.yaml",
                "influxdb-svc.yaml",
                "heapster-rc.yaml",
                "heapster-svc.yaml",
            ),
        ),
        Addon(
            "ingress",
            _manifests("ingress", "ingress-configmap.yaml", "ingress-rc.yaml", "ingress-svc.yaml"),
        ),
        Addon(
            "kube-dns",
            _manifests("kube-dns", "kube-dns-controller.yaml", "kube-dns-cm.yaml", "kube-dns-svc.yaml"),
            enabled_by_default=True,
        ),
        Addon("registry", _manifests("registry", "registry-rc.yaml", "registry-svc.yaml")),
        Addon("registry-creds", _manifests("registry-creds", "registry-creds-rc.yaml")),
        Addon(
            "storage-provisioner",
            _manifests("storage-provisioner", "storage-provisioner.yaml"),
            enabled_by_default=True,
        ),
    ])
