"""Error types for the clusterkit settings engine.

Every failure raised while validating or applying a setting derives from
``SettingsError`` so that the CLI can report them uniformly.  When more
than one validator rejects a value, the individual failures are collected
into a single ``AggregateSettingsError`` rather than reported one at a
time.
"""
from __future__ import annotations

from collections.abc import Iterable


class SettingsError(Exception):
    """Base class for all settings failures."""


class SettingNotFoundError(SettingsError, KeyError):
    """Raised when a setting name is not present in the registry."""

    def __init__(self, name: str) -> None:
        self.setting_name = name
        super().__init__(f"Property name {name} not found")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class DuplicateSettingError(SettingsError, ValueError):
    """Raised when registering a setting whose name is already taken."""

    def __init__(self, name: str) -> None:
        self.setting_name = name
        super().__init__(f"Property name {name} is already registered")


class SettingValidationError(SettingsError, ValueError):
    """A value was rejected by one of the setting's validators.

    Parameters
    ----------
    name:
        The setting being validated.
    value:
        The raw value that was rejected.
    message:
        Human-readable reason for the rejection.
    """

    def __init__(self, name: str, value: str, message: str) -> None:
        self.setting_name = name
        self.value = value
        self.message = message
        super().__init__(f"{name}: {message}")


class SettingParseError(SettingsError, ValueError):
    """A raw value could not be parsed into the setting's type."""

    def __init__(self, name: str, value: str, expected: str) -> None:
        self.setting_name = name
        self.value = value
        self.expected = expected
        super().__init__(
            f"{name}: cannot parse {value!r} as {expected}"
        )


class AggregateSettingsError(SettingsError):
    """Collects every failure produced while applying a single value.

    Parameters
    ----------
    name:
        The setting whose validators failed.
    errors:
        The individual failures, in the order they were produced.
    """

    def __init__(self, name: str, errors: Iterable[Exception]) -> None:
        self.setting_name = name
        self.errors: list[Exception] = list(errors)
        super().__init__(str(self))

    def __str__(self) -> str:
        if len(self.errors) == 1:
            return str(self.errors[0])
        lines = [f"{len(self.errors)} error(s) setting {self.setting_name}:"]
        for err in self.errors:
            lines.append(f"  {err}")
        return "\n".join(lines)
