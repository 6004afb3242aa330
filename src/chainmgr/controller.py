"""Chain controller — lookups and appends over an externally owned stack.

The controller aliases the caller's list rather than copying it: every
structural change made through it (or through its handles) is visible to
the owner of the list, e.g. the host framework that walks it per request.
Changes made to the list behind the controller's back are not tracked.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, MutableSequence
from typing import Any

from chainmgr.base import Action, noop_action
from chainmgr.config import ChainConfig
from chainmgr.errors import StackNotFoundError
from chainmgr.handle import EntryHandle
from chainmgr.registry import EntryRegistry

logger = logging.getLogger(__name__)

_MISSING = object()


class ChainController:
    """Manage one ordered stack of entries through stable handles."""

    def __init__(self, stack: MutableSequence[Any], config: ChainConfig | None = None) -> None:
        self.stack = stack
        self.config = config or ChainConfig()
        self._registry = EntryRegistry(self)

    @classmethod
    def from_app(cls, app: Any, config: ChainConfig | None = None) -> ChainController:
        """Bind to the stack found on ``app`` along ``config.stack_path``."""
        config = config or ChainConfig()
        target = app
        for part in config.stack_path.split("."):
            target = getattr(target, part, _MISSING)
            if target is _MISSING:
                raise StackNotFoundError(
                    f"{type(app).__name__} has no attribute path '{config.stack_path}'"
                )
        if not isinstance(target, MutableSequence):
            raise StackNotFoundError(
                f"'{config.stack_path}' on {type(app).__name__} is a "
                f"{type(target).__name__}, not a mutable sequence"
            )
        logger.info(
            "Bound to %s.%s (%d entries)", type(app).__name__, config.stack_path, len(target)
        )
        return cls(target, config)

    def __len__(self) -> int:
        return len(self.stack)

    def __iter__(self) -> Iterator[EntryHandle]:
        for element in list(self.stack):
            yield self._registry.resolve(element)

    # ── Element access ───────────────────────────────────────

    def _name_of(self, element: Any) -> Any:
        return getattr(element, self.config.name_attr, None)

    def _action_of(self, element: Any) -> Action | None:
        return getattr(element, self.config.action_attr, None)

    def _set_action(self, element: Any, action: Action) -> None:
        setattr(element, self.config.action_attr, action)

    def _position(self, element: Any) -> int:
        # identity, not ==; elements may compare equal to one another
        for i, candidate in enumerate(self.stack):
            if candidate is element:
                return i
        return -1

    # ── Lookups ──────────────────────────────────────────────

    def get_by_position(self, index: int) -> EntryHandle | None:
        if index < 0 or index >= len(self.stack):
            return None
        return self._registry.resolve(self.stack[index])

    def get_by_name(self, name: str, occurrence: int | None = None) -> EntryHandle | None:
        """Find an entry by name.

        With ``occurrence`` return the N-th match (0-based). Without it the
        name must be unique in the stack; ambiguous names yield None.
        """
        matches = [e for e in self.stack if self._name_of(e) == name]
        if occurrence is None:
            if len(matches) != 1:
                return None
            return self._registry.resolve(matches[0])
        if occurrence < 0 or occurrence >= len(matches):
            return None
        return self._registry.resolve(matches[occurrence])

    def get_all_by_name(self, name: str) -> list[EntryHandle]:
        return [self._registry.resolve(e) for e in self.stack if self._name_of(e) == name]

    def get_by_action(self, action: Action) -> EntryHandle | None:
        """Find the entry whose real action is ``action``, enabled or not."""
        if action is None or action is noop_action:
            return None
        for element in self.stack:
            handle = self._registry.get(element)
            if handle is not None and not handle.enabled:
                effective = handle.suspended_action
            else:
                effective = self._action_of(element)
            if effective == action:
                return self._registry.resolve(element)
        return None

    def get_by_element(self, element: Any) -> EntryHandle | None:
        if self._position(element) == -1:
            return None
        return self._registry.resolve(element)

    def get_most_recent(self) -> EntryHandle | None:
        if not self.stack:
            return None
        return self._registry.resolve(self.stack[-1])

    def append(self, element: Any) -> EntryHandle:
        self.stack.append(element)
        return self._registry.resolve(element)
