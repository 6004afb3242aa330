"""Exceptions raised for wiring and configuration mistakes.

Lookups and handle operations never raise; they report absence with ``None``
and refused mutations with ``False``.
"""

from __future__ import annotations


class ChainError(RuntimeError):
    """Base class for chainmgr wiring errors."""


class StackNotFoundError(ChainError):
    """The host application does not expose a list at the configured stack path."""
