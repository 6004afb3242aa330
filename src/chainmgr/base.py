"""Element protocol, the placeholder action and handle state types."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

Action = Callable[..., Any]


def noop_action(*args: Any, **kwargs: Any) -> Any:
    """Placeholder swapped in for a disabled entry's action.

    Passes control straight on: if the last positional argument is callable
    it is treated as the ``next`` continuation and called.
    """
    if args and callable(args[-1]):
        return args[-1]()
    return None


@runtime_checkable
class Element(Protocol):
    """Default shape of a chain entry: a name plus the action it runs."""

    name: str
    handle: Action


@dataclass(eq=False)
class Layer:
    """Minimal chain entry for hosts that have no layer type of their own."""

    name: str
    handle: Action


# ── Handle state ─────────────────────────────────────────────


@dataclass(frozen=True)
class Active:
    """The element runs its own action."""


@dataclass(frozen=True)
class Suspended:
    """The element runs ``noop_action``; its real action is kept here."""

    saved_action: Action


HandleState = Active | Suspended
