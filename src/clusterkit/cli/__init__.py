"""CLI package.

The ``cli`` sub-package contains the Click application and all
command implementations. It wires the settings engine and the add-on
toggle to the persisted configuration and the installed backends.
"""
from __future__ import annotations
