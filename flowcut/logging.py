"""Package-wide logging setup for flowcut.

All modules obtain their logger through :func:`get_logger`, so every record
flows through the single ``flowcut`` root logger configured here. Records go
to stderr to keep stdout free for reports and JSON payloads written by the
CLI. The initial level can be set with the ``FLOWCUT_LOG_LEVEL`` environment
variable (e.g. ``DEBUG``); the default is ``INFO``.
"""

import logging
import os
import sys
from typing import Optional

ROOT_LOGGER_NAME = "flowcut"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def _level_from_env(default: int) -> int:
    """Resolve the level named by ``FLOWCUT_LOG_LEVEL`` or return ``default``."""
    name = os.environ.get("FLOWCUT_LOG_LEVEL", "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def setup_root_logger(
    level: Optional[int] = None,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach one handler to the ``flowcut`` logger.

    Repeated calls are no-ops until :func:`reset_logging` is called, so
    importing several modules never stacks duplicate handlers.

    Args:
        level: Initial level. Defaults to ``FLOWCUT_LOG_LEVEL`` or INFO.
        format_string: Optional ``logging.Formatter`` format.
        handler: Optional handler; defaults to a stderr ``StreamHandler``.
    """
    global _configured

    if _configured:
        return

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level if level is not None else _level_from_env(logging.INFO))
    root_logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root_logger.addHandler(handler)

    # Propagate so pytest's caplog sees our records
    root_logger.propagate = True

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a child logger of ``flowcut`` (pass ``__name__``).

    Child loggers carry no handlers of their own and inherit their effective
    level from the package root.
    """
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the level of the ``flowcut`` logger and its handlers."""
    setup_root_logger()
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def enable_debug_logging() -> None:
    """Switch the package to DEBUG output."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Return the package to INFO output."""
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Drop handlers and forget configuration (used by tests)."""
    global _configured
    _configured = False

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
