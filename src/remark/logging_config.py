"""Logging setup for the remark console script."""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "WARNING", log_file: Optional[str] = None, force: bool = False) -> logging.Logger:
    """
    Attach handlers to the ``remark`` logger.

    Records go to stderr, since stdout carries the converted page, and
    optionally to ``log_file`` as well.

    Args:
        level: Level name; unknown names fall back to WARNING
        log_file: Optional path that also receives every record
        force: Replace handlers left by an earlier call

    Returns:
        The ``remark`` logger
    """
    logger = logging.getLogger("remark")
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    if force or not logger.handlers:
        logger.handlers.clear()
        handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
        if log_file:
            handlers.append(logging.FileHandler(log_file))
        for handler in handlers:
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(handler)

    logger.propagate = False
    return logger
