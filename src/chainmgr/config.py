"""Configuration loading from environment variables and chainmgr.toml."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

from chainmgr.errors import ChainError

_CONFIG_FILENAME = "chainmgr.toml"
_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass
class ChainConfig:
    """How a controller reads entries and finds a host app's stack."""

    name_attr: str = "name"
    action_attr: str = "handle"
    stack_path: str = "_router.stack"
    log_level: str = "INFO"


def load_config(config_path: Path | None = None) -> ChainConfig:
    """Load configuration from environment variables and optional chainmgr.toml.

    Priority: environment variables > chainmgr.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and ~/.chainmgr/
        for candidate in [
            Path.cwd() / _CONFIG_FILENAME,
            Path.home() / ".chainmgr" / _CONFIG_FILENAME,
        ]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    chain_data = file_data.get("chain", {})

    config = ChainConfig(
        name_attr=os.getenv("CHAINMGR_NAME_ATTR", chain_data.get("name_attr", "name")),
        action_attr=os.getenv("CHAINMGR_ACTION_ATTR", chain_data.get("action_attr", "handle")),
        stack_path=os.getenv(
            "CHAINMGR_STACK_PATH", chain_data.get("stack_path", "_router.stack")
        ),
        log_level=os.getenv("CHAINMGR_LOG_LEVEL", file_data.get("log_level", "INFO")),
    )

    for key in ("name_attr", "action_attr", "stack_path"):
        value = getattr(config, key)
        if not isinstance(value, str) or not value.strip():
            raise ChainError(f"Config value '{key}' must be a non-empty string, got {value!r}")
    if any(not part for part in config.stack_path.split(".")):
        raise ChainError(f"Malformed stack_path: '{config.stack_path}'")
    return config


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=_LOG_FORMAT,
        datefmt="%H:%M:%S",
    )
