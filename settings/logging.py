"""Logging configuration.

Records may carry a ``store_id`` (``logger.bind(store_id=...)``); records
without one show ``-``.
"""

import sys

from loguru import logger

from settings import LOG_DIR, LOG_LEVEL

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | "
    "<cyan>{extra[store_id]}</cyan> | <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {extra[store_id]} | {name}:{function}:{line} | {message}"


def setup_logging(level: str = LOG_LEVEL, to_file: bool = True):
    """Configure console and optional file logging for the back office."""
    logger.remove()
    logger.configure(extra={"store_id": "-"})

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if to_file:
        LOG_DIR.mkdir(exist_ok=True)
        logger.add(
            LOG_DIR / "restaurant_{time:YYYY-MM-DD}.log",
            format=FILE_FORMAT,
            level="DEBUG",
            rotation="00:00",
            retention="14 days",
            compression="gz",
        )
        logger.info("Logging to {}", LOG_DIR)

    return logger
