"""Logging configuration."""
from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging; repeated calls only adjust the level."""

    logging.basicConfig(format=_LOG_FORMAT)
    logging.getLogger().setLevel(level)
