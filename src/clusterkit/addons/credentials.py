"""Interactive collection of container registry credentials.

Used when enabling ``registry-creds``.  The operator is asked, one cloud
provider at a time, whether to configure it; declined providers keep the
``changeme`` placeholder so that the add-on can still start.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from clusterkit.addons.secrets import GCR_CREDENTIALS_KEY, PLACEHOLDER
from clusterkit.machine.ports import Prompter

logger = logging.getLogger(__name__)

POSITIVE_RESPONSES: tuple[str, ...] = ("yes", "y")
NEGATIVE_RESPONSES: tuple[str, ...] = ("no", "n")


def _read_text(path: str) -> str:
    return Path(path).expanduser().read_text(encoding="utf-8")


def _ecr_defaults() -> dict[str, str]:
    return {
        "AWS_ACCESS_KEY_ID": PLACEHOLDER,
        "AWS_SECRET_ACCESS_KEY": PLACEHOLDER,
        "aws-account": PLACEHOLDER,
        "aws-region": PLACEHOLDER,
    }


def _gcr_defaults() -> dict[str, str]:
    return {GCR_CREDENTIALS_KEY: PLACEHOLDER}


def _dpr_defaults() -> dict[str, str]:
    return {
        "DOCKER_PRIVATE_REGISTRY_SERVER": PLACEHOLDER,
        "DOCKER_PRIVATE_REGISTRY_USER": PLACEHOLDER,
        "DOCKER_PRIVATE_REGISTRY_PASSWORD": PLACEHOLDER,
    }


@dataclass
class RegistryCredentials:
    """Secret payloads for AWS ECR, Google GCR and a Docker private registry."""

    ecr: dict[str, str] = field(default_factory=_ecr_defaults)
    gcr: dict[str, str] = field(default_factory=_gcr_defaults)
    dpr: dict[str, str] = field(default_factory=_dpr_defaults)


class CredentialCollector:
    """Runs the prompt sequence and returns ``RegistryCredentials``.

    Parameters
    ----------
    prompter:
        Asks the questions; retrying on malformed answers is its concern.
    read_file:
        Reads the GCR application-default-credentials document.
    """

    def __init__(
        self,
        prompter: Prompter,
        read_file: Callable[[str], str] = _read_text,
    ) -> None:
        self._prompter = prompter
        self._read_file = read_file

    def collect(self) -> RegistryCredentials:
        creds = RegistryCredentials()
        self._collect_ecr(creds)
        self._collect_gcr(creds)
        self._collect_dpr(creds)
        return creds

    def _confirm(self, question: str) -> bool:
        return self._prompter.confirm(question, POSITIVE_RESPONSES, NEGATIVE_RESPONSES)

    def _collect_ecr(self, creds: RegistryCredentials) -> None:
        if not self._confirm("\nDo you want to enable AWS Elastic Container Registry?"):
            return
        ask = self._prompter.ask
        creds.ecr["AWS_ACCESS_KEY_ID"] = ask("-- Enter AWS Access Key ID: ")
        creds.ecr["AWS_SECRET_ACCESS_KEY"] = ask("-- Enter AWS Secret Access Key: ")
        creds.ecr["aws-region"] = ask("-- Enter AWS Region: ")
        creds.ecr["aws-account"] = ask("-- Enter 12 digit AWS Account ID: ")

    def _collect_gcr(self, creds: RegistryCredentials) -> None:
        if not self._confirm("\nDo you want to enable Google Container Registry?"):
            return
        path = self._prompter.ask(
            "-- Enter path to credentials "
            "(e.g. /home/user/.config/gcloud/application_default_credentials.json): "
        )
        try:
            creds.gcr[GCR_CREDENTIALS_KEY] = self._read_file(path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(
                "Could not read file for application_default_credentials.json (%s): %s",
                path,
                exc,
            )

    def _collect_dpr(self, creds: RegistryCredentials) -> None:
        if not self._confirm("\nDo you want to enable Docker Registry?"):
            return
        ask = self._prompter.ask
        creds.dpr["DOCKER_PRIVATE_REGISTRY_SERVER"] = ask("-- Enter docker registry server url: ")
        creds.dpr["DOCKER_PRIVATE_REGISTRY_USER"] = ask("-- Enter docker registry username: ")
        creds.dpr["DOCKER_PRIVATE_REGISTRY_PASSWORD"] = ask("-- Enter docker registry password: ")
