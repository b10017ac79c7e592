"""
Logging configuration for hosts embedding the core.

The package itself only attaches a ``NullHandler`` (see
``field_service/__init__.py``); nothing is printed unless the host
application calls ``setup_logging`` or configures logging itself.
``create_core`` calls it with the level from ``Settings``.
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(name: str) -> int:
    """Map a level name such as ``"debug"`` to its number; unknown names give INFO."""
    level = getattr(logging, name.strip().upper(), None)
    return level if isinstance(level, int) else logging.INFO


def _build_handlers(logfile: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Set the root level and, on first use, attach the handlers.

    A host that already configured the root logger keeps its handlers;
    only the level changes.  Calling this again (``create_core`` runs
    once per test, for instance) never duplicates output.

    Parameters
    ----------
    level : str
        Level name, case insensitive.
    logfile : Optional[str]
        UTF-8 log file written next to the console output.  Relative
        paths are resolved against the working directory.
    """
    root = logging.getLogger()
    root.setLevel(resolve_level(level))
    if not root.handlers:
        for handler in _build_handlers(logfile):
            root.addHandler(handler)
