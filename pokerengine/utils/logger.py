"""Logging setup shared by every engine module.

All module loggers hang off the ``pokerengine`` root logger, which owns the
single stdout handler. Records from ``pokerengine.game.table`` and friends
propagate up to it, so hosts can silence or redirect the whole engine from
one place.
"""
import logging
import sys
from typing import Optional

from pokerengine.config import config

ROOT_LOGGER = "pokerengine"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(handler)
        root.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
    return root


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger below the engine's root logger.
    
    Args:
        name: Logger name, typically __name__ of the calling module. Names
            outside the ``pokerengine`` namespace are nested under it.
        
    Returns:
        Logger whose records reach the engine's stdout handler.
    """
    root = _configure_root()
    if not name or name == ROOT_LOGGER:
        return root
    if not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def set_level(level: str) -> None:
    """Change the engine log level at runtime (e.g. "DEBUG")."""
    _configure_root().setLevel(getattr(logging, level.upper(), logging.INFO))
