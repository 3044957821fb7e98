"""Centralized logging helpers.

The library never configures logging on import; applications call
configure_logging() once, and modules use logging.getLogger(__name__).
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict

from constants import Constants

_HANDLER_NAME = "manifestgate"


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach a stream handler to the root logger.

    The level comes from the argument, then MANIFESTGATE_LOG_LEVEL, then INFO.
    Calling it again only updates the level.
    """
    root = logging.getLogger()
    level_name = str(level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    level_value = getattr(logging, level_name, None)
    if not isinstance(level_value, int):
        level_value = logging.INFO

    if not any(getattr(h, "name", None) == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(handler)

    root.setLevel(level_value)
    return root


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by logger."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**kwargs: Any) -> Dict[str, Any]:
    """Build an `extra=` mapping, dropping None values."""
    return {k: v for k, v in kwargs.items() if v is not None}
