"""Logging for idxgraph.

Every module logs through a child of the ``idxgraph`` package logger. The
package logger gets a single stdout handler on first use. The algorithms only
emit DEBUG records (flow results, engine statistics, tree build sizes), so
they stay silent until ``enable_debug_logging`` is called.
"""

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "idxgraph"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach one handler to the ``idxgraph`` logger.

    Only the first call takes effect until ``reset_logging`` is called.

    Args:
        level: Package log level (default: INFO).
        format_string: Record format; ``DEFAULT_FORMAT`` when omitted.
        handler: Destination handler; a stdout stream handler when omitted.
    """
    global _configured
    if _configured:
        return

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    package_logger.handlers.clear()
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    package_logger.addHandler(handler)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger of an idxgraph module (``__name__``)."""
    setup_root_logger()
    return logging.getLogger(name)


def enable_debug_logging(enabled: bool = True) -> None:
    """Switch the package between DEBUG and INFO output."""
    setup_root_logger()
    level = logging.DEBUG if enabled else logging.INFO
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    for handler in package_logger.handlers:
        handler.setLevel(level)


def reset_logging() -> None:
    """Remove the package handler and level, mainly for tests."""
    global _configured
    _configured = False
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
