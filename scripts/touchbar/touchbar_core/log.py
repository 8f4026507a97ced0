"""Logging setup for the toolbar process."""

from __future__ import annotations

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | None = None, log_file: str | None = None) -> None:
    """Setup logging configuration.

    Stdout carries shell statements, so records go to stderr or ``log_file``.
    """
    level = level or os.environ.get("TOUCHBAR_LOG_LEVEL") or "WARNING"
    log_level = getattr(logging, level.upper(), logging.WARNING)
    log_file = log_file or os.environ.get("TOUCHBAR_LOG_FILE")

    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler(sys.stderr)

    logging.basicConfig(level=log_level, format=LOG_FORMAT, handlers=[handler])
