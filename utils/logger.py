"""
utils/logger.py
---------------
Logging setup shared by the repositories and services.
Writes to stdout at the level named by LOG_LEVEL; modules ask for
their logger with `get_logger(__name__)`.
"""

import logging
import sys

from config import LOG_LEVEL

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_configured = False


def _configure_root() -> None:
    """Attach the stdout handler to the root logger, once per process."""
    global _configured
    if _configured:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    root = logging.getLogger()
    root.addHandler(handler)
    level = logging.getLevelName(LOG_LEVEL)
    root.setLevel(level if isinstance(level, int) else logging.INFO)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Logger for a repository or service module, usually `__name__`."""
    _configure_root()
    return logging.getLogger(name)
