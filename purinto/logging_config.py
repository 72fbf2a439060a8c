"""
Logging configuration for the command-line entry point.

Library modules only create loggers with ``logging.getLogger(__name__)``;
handlers are installed here, once.

Format:
    2026-10-19 13:45:12,345 | INFO | purinto.image.processor | Message
"""

import logging
import sys
from typing import Iterable, Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Track if logging has been configured (idempotency)
_handler: Optional[logging.Handler] = None


def setup_logging(log_level: str = "INFO",
                  quiet_libs: Iterable[str] = ("PIL",)) -> logging.Handler:
    """
    Configure the root logger with a single stderr handler.

    Repeated calls replace the handler instead of adding another one.

    Args:
        log_level: "DEBUG", "INFO", "WARNING", "ERROR" or "CRITICAL"
        quiet_libs: Library loggers held at WARNING
    """
    global _handler

    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(_handler)
    root.setLevel(getattr(logging, log_level.upper()))

    for lib in quiet_libs:
        logging.getLogger(lib).setLevel(logging.WARNING)

    return _handler
