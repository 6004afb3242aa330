"""Entry registry — one handle per element, keyed by object identity.

Elements are opaque and may be unhashable or define their own ``__eq__``,
so the table is keyed by ``id(element)``. The handle keeps a strong
reference to its element, which keeps the id from being recycled while
the entry is registered.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from chainmgr.handle import EntryHandle

if TYPE_CHECKING:
    from chainmgr.controller import ChainController

logger = logging.getLogger(__name__)


class EntryRegistry:
    """Element → EntryHandle mapping owned by a single controller."""

    def __init__(self, controller: ChainController) -> None:
        self._controller = controller
        self._handles: dict[int, EntryHandle] = {}

    def resolve(self, element: Any) -> EntryHandle:
        """Return the handle for ``element``, creating it on first sight."""
        handle = self._handles.get(id(element))
        if handle is not None and handle.element is element:
            return handle
        handle = EntryHandle(self._controller, element)
        self._handles[id(element)] = handle
        logger.debug("Registered %r", handle)
        return handle

    def get(self, element: Any) -> EntryHandle | None:
        """Return the handle for ``element`` without creating one."""
        handle = self._handles.get(id(element))
        if handle is None or handle.element is not element:
            return None
        return handle

    def forget(self, element: Any) -> bool:
        """Drop the mapping for ``element``. False if it was never registered."""
        handle = self.get(element)
        if handle is None:
            return False
        del self._handles[id(element)]
        logger.debug("Forgot %r", handle)
        return True

    def __contains__(self, element: Any) -> bool:
        return self.get(element) is not None

    def __len__(self) -> int:
        return len(self._handles)
