"""Integration tests.

These tests drive the full CLI stack through click's ``CliRunner`` with
fake collaborators and a temporary state directory. They are kept apart
so that the fast unit run can be selected with ``pytest tests/unit/``.
"""
from __future__ import annotations
