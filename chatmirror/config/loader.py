"""Locate and read the optional ``config.toml``."""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "CHATMIRROR_CONFIG"
DEFAULT_CONFIG_PATH = Path("config.toml")


def config_path() -> Path:
    """Return ``$CHATMIRROR_CONFIG`` when set, else ``config.toml`` in the cwd."""
    override = os.getenv(CONFIG_PATH_ENV, "").strip()
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH


def load_raw_config(path: str | Path | None = None) -> Dict[str, Any]:
    """
    Load the ``[chatmirror]`` settings file.

    A missing file yields an empty dict so every setting falls back to the
    environment. A file named explicitly (argument or ``$CHATMIRROR_CONFIG``)
    that does not exist is logged, since that is usually a typo.
    """
    explicit = path is not None or bool(os.getenv(CONFIG_PATH_ENV, "").strip())
    target = Path(path) if path is not None else config_path()
    if not target.is_file():
        if explicit:
            logger.warning("Config file %s not found; using environment only.", target)
        return {}

    with target.open("rb") as handle:
        raw = tomllib.load(handle)
    logger.info("Loaded config from %s", target)
    return raw


__all__ = ["load_raw_config", "config_path", "CONFIG_PATH_ENV", "DEFAULT_CONFIG_PATH"]
