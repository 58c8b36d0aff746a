"""
Bookstore logging setup

Every module logs through ``logging.getLogger(__name__)``. This helper
configures the root handler once for scripts and test sessions that want
to see the checkout flow.
"""
from __future__ import annotations
from typing import Optional
import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(
    service_name: str = "bookstore",
    level: Optional[str | int] = None,
) -> logging.Logger:
    """Configure root logging and return the service logger.

    ``level`` falls back to ``BOOKSTORE_LOG_LEVEL`` and then to INFO.
    """
    resolved = level or os.getenv("BOOKSTORE_LOG_LEVEL", "INFO")
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
        if not isinstance(resolved, int):
            resolved = logging.INFO

    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logger = logging.getLogger(service_name)
    logger.setLevel(resolved)
    return logger
