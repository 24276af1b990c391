"""Mini README: Application-wide logging helpers for Budget Buddy.

Structure:
    * get_logger - factory that returns module loggers with baseline config.
    * configure_root_logger - installs the handler and adjusts the level.

Usage:
    Modules import ``get_logger`` at import time and keep a module-level
    ``LOGGER``. The stream handler is installed exactly once per process so
    reloading modules during development never stacks duplicate handlers,
    while an explicit level passed later (e.g. from settings) still applies.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def configure_root_logger(level: Optional[Union[int, str]] = None) -> None:
    """Configure the root logger once; re-apply ``level`` when one is given."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    if _LOGGER_INITIALISED:
        if level is not None:
            root_logger.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(logging.INFO if level is None else level)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
