"""Secret resources produced for the ``registry-creds`` add-on."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clusterkit.addons.credentials import RegistryCredentials

SECRETS_NAMESPACE = "kube-system"
PLACEHOLDER = "changeme"

LABEL_APP = "app"
LABEL_CLOUD = "cloud"
LABEL_ADDON = "kubernetes.io/minikube-addons"

REGISTRY_CREDS = "registry-creds"
ECR_SECRET = "registry-creds-ecr"
GCR_SECRET = "registry-creds-gcr"
DPR_SECRET = "registry-creds-dpr"
REGISTRY_CREDS_SECRETS: tuple[str, ...] = (ECR_SECRET, GCR_SECRET, DPR_SECRET)

GCR_CREDENTIALS_KEY = "application_default_credentials.json"


@dataclass(frozen=True)
class Secret:
    """A namespaced credential bundle.

    ``data`` holds raw values; encoding them is the secret manager's job.
    """

    namespace: str
    name: str
    data: Mapping[str, str] = field(default_factory=dict)
    labels: Mapping[str, str] = field(default_factory=dict)


def registry_creds_labels(cloud: str) -> dict[str, str]:
    return {
        LABEL_APP: REGISTRY_CREDS,
        LABEL_CLOUD: cloud,
        LABEL_ADDON: REGISTRY_CREDS,
    }


def build_registry_creds_secrets(creds: "RegistryCredentials") -> tuple[Secret, Secret, Secret]:
    """Return the ECR, GCR and Docker registry secrets, in that order."""
    return (
        Secret(SECRETS_NAMESPACE, ECR_SECRET, dict(creds.ecr), registry_creds_labels("ecr")),
        Secret(SECRETS_NAMESPACE, GCR_SECRET, dict(creds.gcr), registry_creds_labels("gcr")),
        Secret(SECRETS_NAMESPACE, DPR_SECRET, dict(creds.dpr), registry_creds_labels("dpr")),
    )
