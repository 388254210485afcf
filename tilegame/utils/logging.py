"""Logging setup shared by the API server and the headless CLI."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)-5s] %(name)-28s | %(message)s"

# Server loggers that get their own handlers unless told otherwise.
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def setup_logging(level: str = "INFO") -> logging.Handler:
    """Send tilegame and uvicorn output through one stdout handler.

    Per-request access lines are only shown at DEBUG. Returns the handler
    installed on the root logger.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
    access_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    logging.getLogger("uvicorn.access").setLevel(access_level)

    return handler
