"""Reusable validators for clusterkit settings.

Each validator is a callable ``(name, raw) -> None`` that raises
``SettingValidationError`` when the raw value is unacceptable.  Validators
never write to the configuration store; that is the setter's job.

    is_valid_driver      VM driver is one of the supported drivers
    is_valid_runtime     container runtime is one of the supported runtimes
    is_valid_disk_size   human-readable size such as ``20g`` or ``2000mb``
    is_positive          strictly positive integer
    is_valid_url         absolute URL with scheme and host
    is_valid_cidr        IPv4 or IPv6 network in CIDR notation
    is_valid_bool        boolean literal
    requires_restart     never fails; warns that a restart is needed
"""
from __future__ import annotations

import ipaddress
import logging
import re
from typing import TYPE_CHECKING, Callable
from urllib.parse import urlparse

from clusterkit.settings.errors import SettingValidationError
from clusterkit.settings.mutators import parse_bool

if TYPE_CHECKING:
    from clusterkit.addons.assets import AddonCatalog

logger = logging.getLogger(__name__)

Validator = Callable[[str, str], None]

SUPPORTED_DRIVERS: tuple[str, ...] = (
    "virtualbox",
    "vmwarefusion",
    "kvm",
    "kvm2",
    "xhyve",
    "hyperkit",
    "hyperv",
    "none",
)

SUPPORTED_RUNTIMES: tuple[str, ...] = ("docker", "rkt", "cri-o", "containerd")

_DISK_SIZE_RE = re.compile(r"(\d+(?:\.\d+)?)\s*([kmgt]i?b?|b)?", re.IGNORECASE)


def is_valid_driver(name: str, raw: str) -> None:
    if raw not in SUPPORTED_DRIVERS:
        raise SettingValidationError(
            name,
            raw,
            f"driver {raw!r} is not supported; choose one of {', '.join(SUPPORTED_DRIVERS)}",
        )


def is_valid_runtime(name: str, raw: str) -> None:
    if raw not in SUPPORTED_RUNTIMES:
        raise SettingValidationError(
            name,
            raw,
            f"container runtime {raw!r} is not supported; choose one of "
            f"{', '.join(SUPPORTED_RUNTIMES)}",
        )


def is_valid_disk_size(name: str, raw: str) -> None:
    """Accept sizes like ``20g``, ``20GB``, ``2000mb`` or a plain byte count."""
    if _DISK_SIZE_RE.fullmatch(raw.strip()) is None:
        raise SettingValidationError(name, raw, f"{raw!r} is not a valid disk size")


def is_positive(name: str, raw: str) -> None:
    try:
        value = int(raw, 10)
    except ValueError:
        raise SettingValidationError(name, raw, f"{raw!r} is not an integer") from None
    if value <= 0:
        raise SettingValidationError(name, raw, f"{value} must be greater than 0")


def is_valid_url(name: str, raw: str) -> None:
    parsed = urlparse(raw)
    if not parsed.scheme or not parsed.netloc:
        raise SettingValidationError(name, raw, f"{raw!r} is not a valid URL")


def is_valid_cidr(name: str, raw: str) -> None:
    try:
        ipaddress.ip_network(raw, strict=False)
    except ValueError as exc:
        raise SettingValidationError(name, raw, f"{raw!r} is not a valid CIDR: {exc}") from None
    if "/" not in raw:
        raise SettingValidationError(name, raw, f"{raw!r} is missing a prefix length")


def is_valid_bool(name: str, raw: str) -> None:
    try:
        parse_bool(raw)
    except ValueError:
        raise SettingValidationError(name, raw, f"{raw!r} is not a valid boolean") from None


def requires_restart(name: str, raw: str) -> None:
    """Warn that the running cluster must be restarted to pick up ``name``."""
    logger.warning(
        "These changes will take effect upon a cluster delete and then a start (%s=%s)",
        name,
        raw,
    )


def make_addon_validator(catalog: "AddonCatalog") -> Validator:
    """Return a validator accepting only add-on names present in ``catalog``.

    The setting name itself is the add-on name, so the check is made
    against ``name`` rather than the value.
    """

    def is_valid_addon(name: str, raw: str) -> None:
        if name not in catalog:
            raise SettingValidationError(
                name,
                raw,
                f"{name!r} is not a valid addon; available: {', '.join(catalog.names())}",
            )

    return is_valid_addon
