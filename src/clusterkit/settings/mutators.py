"""Typed mutators that parse a raw string and write it into the store.

Each mutator has the signature ``(store, name, raw) -> None``.  A mutator
only touches ``store`` once the value has parsed successfully; on failure
it raises ``SettingParseError`` and the store is left as it was.
"""
from __future__ import annotations

import re
from collections.abc import MutableMapping
from typing import Callable, Union

from clusterkit.settings.errors import SettingParseError

ConfigValue = Union[str, int, bool]
Setter = Callable[[MutableMapping[str, ConfigValue], str, str], None]

TRUE_LEXEMES: frozenset[str] = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_LEXEMES: frozenset[str] = frozenset({"0", "f", "F", "FALSE", "false", "False"})

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")


def parse_bool(raw: str) -> bool:
    """Parse ``raw`` using the canonical boolean lexemes.

    Raises
    ------
    ValueError
        If ``raw`` is not one of the accepted lexemes.
    """
    if raw in TRUE_LEXEMES:
        return True
    if raw in FALSE_LEXEMES:
        return False
    raise ValueError(f"invalid boolean literal {raw!r}")


def set_string(store: MutableMapping[str, ConfigValue], name: str, raw: str) -> None:
    """Store ``raw`` unchanged."""
    store[name] = raw


def set_int(store: MutableMapping[str, ConfigValue], name: str, raw: str) -> None:
    """Store ``raw`` as a base-10 signed 64-bit integer."""
    # int() alone would also accept whitespace and underscores
    if _INT_RE.fullmatch(raw) is None:
        raise SettingParseError(name, raw, "integer")
    try:
        value = int(raw, 10)
    except ValueError:
        # digit strings past the interpreter's conversion limit
        raise SettingParseError(name, raw, "integer") from None
    if not INT_MIN <= value <= INT_MAX:
        raise SettingParseError(name, raw, "integer")
    store[name] = value


def set_bool(store: MutableMapping[str, ConfigValue], name: str, raw: str) -> None:
    """Store ``raw`` as a boolean."""
    try:
        value = parse_bool(raw)
    except ValueError:
        raise SettingParseError(name, raw, "boolean") from None
    store[name] = value
