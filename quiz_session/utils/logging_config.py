"""Logging configuration helpers for the quiz session package."""

import logging
from logging import Logger


def configure_logging(level: str = "WARNING") -> Logger:
    """Configure basic logging for the application and return the package logger."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logger = logging.getLogger("quiz_session")
    logger.setLevel(level)
    return logger
