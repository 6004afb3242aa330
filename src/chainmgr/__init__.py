"""chainmgr — stable handles over a mutable middleware stack.

    stack = app._router.stack              # owned by the host framework
    chain = ChainController(stack)
    auth = chain.get_by_name("auth")
    auth.disable()                         # stack entry now runs noop_action
    auth.insert_before(chain.get_by_position(0))
"""

from chainmgr.base import Active, Element, Layer, Suspended, noop_action
from chainmgr.config import ChainConfig, load_config, setup_logging
from chainmgr.controller import ChainController
from chainmgr.errors import ChainError, StackNotFoundError
from chainmgr.handle import EntryHandle
from chainmgr.registry import EntryRegistry

__all__ = [
    "Active",
    "ChainConfig",
    "ChainController",
    "ChainError",
    "Element",
    "EntryHandle",
    "EntryRegistry",
    "Layer",
    "StackNotFoundError",
    "Suspended",
    "load_config",
    "noop_action",
    "setup_logging",
]
