"""Logging configuration shared by the headless CLI and the stepping server."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)-5s] %(name)-25s | %(message)s"

# uvicorn installs its own handlers unless told otherwise; these are routed
# through the root handler instead so server and battle lines share one format.
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def setup_logging(level: str = "INFO") -> None:
    """Install a single stdout handler on the root logger at *level*.

    The server loggers are reset to propagate to it at the same level, so a
    ``--log-level WARNING`` run also silences per-request access lines.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

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
        server_logger.setLevel(numeric_level)
        server_logger.propagate = True
