"""Entry handles — stable management objects for one chain element.

A handle is live while its element sits in the controller's stack and the
registry still maps that element to this very handle. Every operation on a
handle that is not live is refused with ``False`` (or ``None`` for the
neighbour lookups), so an orphaned handle can be kept around safely.
"""

from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING, Any

from chainmgr.base import Action, Active, HandleState, Suspended, noop_action

if TYPE_CHECKING:
    from chainmgr.controller import ChainController

logger = logging.getLogger(__name__)

_handle_ids = itertools.count(1)


class EntryHandle:
    """Enable, disable, remove and reorder a single chain element."""

    def __init__(self, controller: ChainController, element: Any) -> None:
        self.controller = controller
        self.element = element
        self.id = next(_handle_ids)
        self._state: HandleState = Active()

    def __repr__(self) -> str:
        flag = "enabled" if self.enabled else "disabled"
        return f"<EntryHandle #{self.id} {self.name!r} {flag}>"

    @property
    def name(self) -> Any:
        return self.controller._name_of(self.element)

    @property
    def state(self) -> HandleState:
        return self._state

    @property
    def enabled(self) -> bool:
        return isinstance(self._state, Active)

    @property
    def suspended_action(self) -> Action | None:
        """The element's real action while disabled, else None."""
        if isinstance(self._state, Suspended):
            return self._state.saved_action
        return None

    # ── Liveness ─────────────────────────────────────────────

    def _position(self) -> int:
        if self.controller._registry.get(self.element) is not self:
            return -1
        return self.controller._position(self.element)

    def is_live(self) -> bool:
        return self._position() != -1

    def _accepts(self, other: Any) -> bool:
        return (
            isinstance(other, EntryHandle)
            and other.controller is self.controller
            and other is not self
        )

    # ── Enable / disable ─────────────────────────────────────

    def enable(self, value: bool = True) -> bool:
        """Restore the element's saved action. False if already enabled."""
        if value is False:
            return self.disable()
        if self.enabled or not self.is_live():
            return False
        self.controller._set_action(self.element, self._state.saved_action)
        self._state = Active()
        logger.debug("Enabled %r", self)
        return True

    def disable(self, value: bool = True) -> bool:
        """Swap the element's action for ``noop_action``. False if already disabled."""
        if value is False:
            return self.enable()
        if not self.enabled or not self.is_live():
            return False
        saved = self.controller._action_of(self.element)
        self.controller._set_action(self.element, noop_action)
        self._state = Suspended(saved)
        logger.debug("Disabled %r", self)
        return True

    # ── Structural mutation ──────────────────────────────────

    def remove(self) -> Any:
        """Take the element out of the stack and return it, or False.

        The element is re-enabled first so it leaves with its real action.
        """
        self.enable()
        pos = self._position()
        if pos == -1:
            return False
        del self.controller.stack[pos]
        if not self.controller._registry.forget(self.element):
            return False
        logger.debug("Removed %r from position %d", self, pos)
        return self.element

    def swap_with(self, other: EntryHandle | None) -> bool:
        """Exchange positions with ``other`` in place."""
        if not self._accepts(other):
            return False
        pos1 = self._position()
        pos2 = other._position()
        if pos1 == -1 or pos2 == -1:
            return False

        was_enabled = self.enabled
        other_was_enabled = other.enabled
        if not was_enabled:
            self.enable()
        if not other_was_enabled:
            other.enable()

        stack = self.controller.stack
        stack[pos1], stack[pos2] = other.element, self.element

        if not was_enabled:
            self.disable()
        if not other_was_enabled:
            other.disable()
        logger.debug("Swapped %r (%d) with %r (%d)", self, pos1, other, pos2)
        return True

    def insert_before(self, other: EntryHandle | None) -> bool:
        """Move this element to sit immediately before ``other``."""
        if not self._accepts(other):
            return False
        pos1 = self._position()
        if pos1 == -1 or other._position() == -1:
            return False
        stack = self.controller.stack
        del stack[pos1]
        # positions after pos1 shifted down by one
        pos2 = other._position()
        stack.insert(pos2, self.element)
        logger.debug("Moved %r before %r", self, other)
        return True

    def insert_after(self, other: EntryHandle | None) -> bool:
        """Move this element to sit immediately after ``other``."""
        if not self._accepts(other):
            return False
        pos1 = self._position()
        if pos1 == -1 or other._position() == -1:
            return False
        stack = self.controller.stack
        del stack[pos1]
        pos2 = other._position()
        if pos2 + 1 == len(stack):
            stack.append(self.element)
        else:
            stack.insert(pos2 + 1, self.element)
        logger.debug("Moved %r after %r", self, other)
        return True

    # ── Neighbours ───────────────────────────────────────────

    def get_previous(self) -> EntryHandle | None:
        pos = self._position()
        if pos <= 0:
            return None
        return self.controller._registry.resolve(self.controller.stack[pos - 1])

    def get_next(self) -> EntryHandle | None:
        pos = self._position()
        if pos == -1 or pos == len(self.controller.stack) - 1:
            return None
        return self.controller._registry.resolve(self.controller.stack[pos + 1])
