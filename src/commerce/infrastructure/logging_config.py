"""Process-wide logging setup for the CLI and the HTTP app."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - [%(levelname)-7s] - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach one stderr handler to the ``commerce`` logger tree."""
    root = logging.getLogger("commerce")
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
