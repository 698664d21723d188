"""Logging setup for the CLI and the API server."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s [%(levelname)-5s] %(threadName)-14s %(name)-32s | %(message)s"


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Route every logger through one stdout handler.

    The thread name column separates engine-thread passes from request
    handling when the API server is running. Uvicorn's per-request access
    lines are held at WARNING.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(max(numeric_level, logging.WARNING))
