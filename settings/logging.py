"""Logging configuration for the governance engine."""

import sys

from loguru import logger

from settings import LOG_DIR, LOG_LEVEL

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <cyan>{extra[component]}</cyan> | <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {extra[component]} | {name}:{function}:{line} | {message}"


def setup_logging(level: str = LOG_LEVEL, to_file: bool = True, serialize: bool = False):
    """Configure console logging plus an optional daily-rotated audit file.

    ``serialize`` writes the file sink as JSON lines, which is what the
    operator tooling ingests for governance audit trails.
    """
    logger.remove()
    logger.configure(extra={"component": "governance"})

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=level,
        colorize=True,
    )

    if to_file:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        logger.add(
            LOG_DIR / "governance_{time:YYYY-MM-DD}.log",
            format=FILE_FORMAT,
            level="DEBUG",
            rotation="00:00",
            retention="30 days",
            compression="gz",
            serialize=serialize,
        )
        logger.info("Logging to {} (serialize={})", LOG_DIR, serialize)

    return logger
