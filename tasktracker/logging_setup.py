"""Logging configuration for the API process."""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_handler: Optional[logging.Handler] = None


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the root logger.

    Safe to call more than once; the handler is only added the first time.
    """
    global _handler

    root = logging.getLogger()
    root.setLevel(level)

    if _handler is not None and _handler in root.handlers:
        return

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(_handler)

    # uvicorn's access log duplicates what we log per request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
